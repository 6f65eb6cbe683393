"""
Training observers.

The trainer knows nothing about where epoch metrics go; it only calls the
hooks below on every callback it was given. Epochs passed to the hooks are
zero-based, logs are plain dicts such as {"loss": 0.01, "mse": 0.01}.
"""

import numpy as np

from utils.errors import NumericError


class Callback:
    def on_train_begin(self, logs=None):
        pass

    def on_epoch_end(self, epoch, logs=None):
        pass

    def on_train_end(self, logs=None):
        pass


class CallbackList(Callback):
    def __init__(self, callbacks=None):
        self.callbacks = list(callbacks or [])

    def append(self, callback):
        self.callbacks.append(callback)

    def on_train_begin(self, logs=None):
        for cb in self.callbacks:
            cb.on_train_begin(logs)

    def on_epoch_end(self, epoch, logs=None):
        for cb in self.callbacks:
            cb.on_epoch_end(epoch, logs)

    def on_train_end(self, logs=None):
        for cb in self.callbacks:
            cb.on_train_end(logs)


class History(Callback):
    """Per-epoch metric record of one training run."""

    def __init__(self):
        self.epochs = []
        self.history = {}

    def on_train_begin(self, logs=None):
        self.epochs = []
        self.history = {}

    def on_epoch_end(self, epoch, logs=None):
        self.epochs.append(epoch)
        for k, v in (logs or {}).items():
            self.history.setdefault(k, []).append(v)

    def last(self, key="loss"):
        values = self.history.get(key)
        return values[-1] if values else None


class ProgressLogger(Callback):
    def __init__(self, every=5):
        self.every = every

    def on_epoch_end(self, epoch, logs=None):
        if self.every and (epoch + 1) % self.every == 0:
            metrics = " | ".join(f"{k}={v:.6f}" for k, v in (logs or {}).items())
            print(f"  Epoch {epoch+1:4d} | {metrics}")


class TerminateOnNaN(Callback):
    """Raise NumericError as soon as an epoch loss is not finite."""

    def on_epoch_end(self, epoch, logs=None):
        loss = (logs or {}).get("loss")
        if loss is not None and not np.isfinite(loss):
            raise NumericError(
                f"training diverged: loss is {loss} at epoch {epoch + 1}",
                details={"epoch": epoch + 1, "loss": loss},
            )
