import numpy as np

from utils.config import TrainingConfig
from utils.errors import TrainingError
from .callbacks import CallbackList, History
from .losses import mse, mse_grad
from .optimizers import Adam


def _check_inputs(model, inputs, labels):
    inputs = np.asarray(inputs, dtype=np.float64)
    labels = np.asarray(labels, dtype=np.float64)
    if inputs.ndim != 2 or labels.ndim != 2:
        raise TrainingError(f"expected 2-D inputs and labels, got shapes {inputs.shape} and {labels.shape}")
    if len(inputs) == 0:
        raise TrainingError("cannot train on an empty dataset")
    if len(inputs) != len(labels):
        raise TrainingError(f"inputs have {len(inputs)} rows but labels have {len(labels)}")
    if inputs.shape[1] != model.input_dim:
        raise TrainingError(f"model expects {model.input_dim} input columns, got {inputs.shape[1]}")
    return inputs, labels


def train_model(model, inputs, labels, config=None, callbacks=None, rng=None):
    """
    Fit model in place with Adam on the mean squared error.

    Every epoch visits the data in a fresh random order (when config.shuffle)
    in batches of config.batch_size. The epoch loss is the sample-weighted
    mean of the batch losses, each measured before its update.

    Returns the History of the run.
    """
    cfg = config or TrainingConfig()
    rng = rng if rng is not None else np.random
    X, Y = _check_inputs(model, inputs, labels)

    optimizer = Adam(learning_rate=cfg.learning_rate, beta1=cfg.beta1,
                     beta2=cfg.beta2, epsilon=cfg.epsilon)
    history = History()
    cbs = CallbackList([history] + list(callbacks or []))

    n = len(X)
    cbs.on_train_begin()
    for epoch in range(cfg.epochs):
        idx = rng.permutation(n) if cfg.shuffle else np.arange(n)
        Xs = X[idx]
        Ys = Y[idx]

        epoch_loss = 0.0
        for i in range(0, n, cfg.batch_size):
            xb = Xs[i:i+cfg.batch_size]
            yb = Ys[i:i+cfg.batch_size]

            out = model.forward(xb)
            epoch_loss += mse(out, yb) * len(xb)

            model.backward(mse_grad(out, yb))
            optimizer.step(model.params(), model.grads())

        epoch_loss /= n
        # the mse metric is the loss itself
        cbs.on_epoch_end(epoch, {"loss": epoch_loss, "mse": epoch_loss})

    cbs.on_train_end({"loss": history.last("loss")})
    return history


def evaluate(model, inputs, labels):
    X, Y = _check_inputs(model, inputs, labels)
    return mse(model.predict(X), Y)
