import warnings
from dataclasses import dataclass

import numpy as np

from utils.errors import ConstantFeatureWarning, NumericError


@dataclass
class NormalizedData:
    """
    Min-max scaled training columns and the bounds needed to undo the scaling.

    inputs and labels have shape (N, 1) with every element in [0, 1].
    """
    inputs: np.ndarray
    labels: np.ndarray
    input_min: float
    input_max: float
    label_min: float
    label_max: float


def shuffle_points(points, rng=None):
    """In-place Fisher-Yates shuffle of a list of points."""
    rng = rng if rng is not None else np.random
    rng.shuffle(points)
    return points


def min_max_scale(values, lo, hi, name="values"):
    values = np.asarray(values, dtype=np.float64)
    span = hi - lo
    if span == 0:
        warnings.warn(
            f"{name} is constant (min == max == {lo}); scaling to all zeros",
            ConstantFeatureWarning,
            stacklevel=2,
        )
        return np.zeros_like(values)
    return (values - lo) / span


def min_max_invert(values, lo, hi):
    values = np.asarray(values, dtype=np.float64)
    return values * (hi - lo) + lo


def convert_to_tensor(points, rng=None) -> NormalizedData:
    """
    Shuffle the points, split them into x/y columns and min-max scale both.

    The points list is shuffled in place so batch composition is random.
    """
    if len(points) == 0:
        raise NumericError("cannot normalize an empty dataset")

    shuffle_points(points, rng)

    xs = np.array([p.x_value for p in points], dtype=np.float64).reshape(-1, 1)
    ys = np.array([p.y_value for p in points], dtype=np.float64).reshape(-1, 1)

    x_min, x_max = float(xs.min()), float(xs.max())
    y_min, y_max = float(ys.min()), float(ys.max())

    return NormalizedData(
        inputs=min_max_scale(xs, x_min, x_max, name="inputs"),
        labels=min_max_scale(ys, y_min, y_max, name="labels"),
        input_min=x_min,
        input_max=x_max,
        label_min=y_min,
        label_max=y_max,
    )
