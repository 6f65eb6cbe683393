import numpy as np
import pytest

from data.normalization import convert_to_tensor
from models.sequential import create_model
from training.callbacks import Callback, History, ProgressLogger, TerminateOnNaN
from training.optimizers import Adam
from training.trainer import evaluate, train_model
from utils.config import TrainingConfig
from utils.errors import NumericError, TrainingError


class RecordingCallback(Callback):
    def __init__(self):
        self.events = []

    def on_train_begin(self, logs=None):
        self.events.append(("begin", None))

    def on_epoch_end(self, epoch, logs=None):
        self.events.append(("epoch", epoch, dict(logs)))

    def on_train_end(self, logs=None):
        self.events.append(("end", logs))


def test_default_config():
    cfg = TrainingConfig()
    assert cfg.epochs == 20
    assert cfg.batch_size == 28
    assert cfg.shuffle is True
    assert cfg.learning_rate == 0.001


def test_training_beats_untrained_model(linear_dataset):
    rng = np.random.RandomState(0)
    norm = convert_to_tensor(linear_dataset.points, rng=rng)
    model = create_model(seed=0)

    untrained = evaluate(model, norm.inputs, norm.labels)
    history = train_model(model, norm.inputs, norm.labels, rng=rng)
    trained = evaluate(model, norm.inputs, norm.labels)

    assert len(history.history["loss"]) == 20
    assert np.isfinite(trained)
    assert trained < untrained


def test_observer_sees_every_epoch(linear_dataset):
    norm = convert_to_tensor(linear_dataset.points, rng=np.random.RandomState(0))
    rec = RecordingCallback()
    cfg = TrainingConfig(epochs=4)
    history = train_model(create_model(), norm.inputs, norm.labels, config=cfg, callbacks=[rec],
                          rng=np.random.RandomState(0))

    assert rec.events[0] == ("begin", None)
    assert [e[1] for e in rec.events[1:-1]] == [0, 1, 2, 3]
    for _, _, logs in rec.events[1:-1]:
        assert set(logs) == {"loss", "mse"}
        assert logs["loss"] == logs["mse"]
    assert rec.events[-1] == ("end", {"loss": history.last("loss")})
    assert history.epochs == [0, 1, 2, 3]


def test_parameters_are_updated_in_place(linear_dataset):
    norm = convert_to_tensor(linear_dataset.points, rng=np.random.RandomState(0))
    model = create_model(seed=2)
    kernel = model.layers[0].kernel
    before = kernel.copy()
    train_model(model, norm.inputs, norm.labels, config=TrainingConfig(epochs=1))
    assert model.layers[0].kernel is kernel
    assert not np.array_equal(kernel, before)


def test_epoch_loss_is_weighted_mean_of_batches():
    X = np.linspace(0, 1, 10).reshape(-1, 1)
    Y = X.copy()
    model = create_model(seed=0)
    # a batch of 7 rows then one of 3, fixed order, zero learning rate
    cfg = TrainingConfig(epochs=1, batch_size=7, shuffle=False, learning_rate=0.0)
    history = train_model(model, X, Y, config=cfg)
    assert history.last("loss") == pytest.approx(evaluate(model, X, Y))


class CountingRandomState:
    def __init__(self, seed):
        self.rng = np.random.RandomState(seed)
        self.permutations = 0

    def permutation(self, n):
        self.permutations += 1
        return self.rng.permutation(n)


def _epoch_orders(shuffle, epochs=4, n=12, batch_size=5):
    X = np.arange(n, dtype=np.float64).reshape(-1, 1) / n
    model = create_model()
    seen = []
    forward = model.forward

    def recording_forward(xb):
        seen.append(xb[:, 0].copy())
        return forward(xb)

    model.forward = recording_forward
    rng = CountingRandomState(0)
    cfg = TrainingConfig(epochs=epochs, batch_size=batch_size, shuffle=shuffle)
    train_model(model, X, X, config=cfg, rng=rng)

    rows = np.concatenate(seen)
    assert len(rows) == epochs * n
    return X[:, 0], rows.reshape(epochs, n), rng.permutations


def test_data_is_reshuffled_every_epoch():
    X, orders, permutations = _epoch_orders(shuffle=True)
    assert permutations == 4
    for order in orders:
        # every epoch still visits each row exactly once
        np.testing.assert_array_equal(np.sort(order), X)
    assert len({tuple(order) for order in orders}) == 4
    assert not np.array_equal(orders[0], X)


def test_fixed_order_without_shuffle():
    X, orders, permutations = _epoch_orders(shuffle=False)
    assert permutations == 0
    for order in orders:
        np.testing.assert_array_equal(order, X)


@pytest.mark.parametrize("inputs, labels", [
    (np.zeros((0, 1)), np.zeros((0, 1))),
    (np.zeros((5, 1)), np.zeros((4, 1))),
    (np.zeros(5), np.zeros(5)),
    (np.zeros((5, 2)), np.zeros((5, 1))),
])
def test_unusable_inputs_raise_training_error(inputs, labels):
    with pytest.raises(TrainingError):
        train_model(create_model(), inputs, labels)


def test_terminate_on_nan():
    X = np.linspace(0, 1, 10).reshape(-1, 1)
    model = create_model()
    model.layers[0].kernel[0, 0] = np.nan
    with pytest.raises(NumericError, match="diverged"):
        train_model(model, X, X, config=TrainingConfig(epochs=3), callbacks=[TerminateOnNaN()])


def test_nan_is_not_handled_without_the_observer():
    X = np.linspace(0, 1, 10).reshape(-1, 1)
    model = create_model()
    model.layers[0].kernel[0, 0] = np.nan
    history = train_model(model, X, X, config=TrainingConfig(epochs=2))
    assert np.isnan(history.last("loss"))


def test_progress_logger_prints(capsys):
    logger = ProgressLogger(every=2)
    logger.on_epoch_end(0, {"loss": 0.5})
    logger.on_epoch_end(1, {"loss": 0.25})
    out = capsys.readouterr().out
    assert "Epoch    2 | loss=0.250000" in out
    assert "Epoch    1" not in out


def test_history_last_without_epochs():
    assert History().last("loss") is None


class TestAdam:
    def test_first_step_moves_by_learning_rate(self):
        p = np.array([1.0, -1.0])
        opt = Adam(learning_rate=0.001)
        opt.step([p], [np.array([0.3, -20.0])])
        np.testing.assert_allclose(p, [0.999, -0.999], rtol=1e-6)
        assert opt.t == 1

    def test_zero_gradient_keeps_parameter(self):
        p = np.array([2.0])
        opt = Adam()
        for _ in range(5):
            opt.step([p], [np.zeros(1)])
        np.testing.assert_array_equal(p, [2.0])

    def test_minimizes_quadratic(self):
        p = np.array([3.0])
        opt = Adam(learning_rate=0.1)
        for _ in range(1000):
            opt.step([p], [2 * p])
        assert abs(p[0]) < 0.1

    def test_parameter_count_must_not_change(self):
        opt = Adam()
        opt.step([np.zeros(1)], [np.zeros(1)])
        with pytest.raises(ValueError):
            opt.step([np.zeros(1), np.zeros(1)], [np.zeros(1), np.zeros(1)])
