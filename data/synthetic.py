import numpy as np

from .loader import Dataset, Point


def make_linear_dataset(n=50, lo=1.0, hi=10.0, slope=2.0, intercept=0.0, noise=0.5, seed=0,
                        x_label="x", y_label="y"):
    """
    Evenly spaced x in [lo, hi] with y = slope * x + intercept + N(0, noise).
    """
    rng = np.random.RandomState(seed)
    xs = np.linspace(lo, hi, n)
    ys = slope * xs + intercept + rng.normal(0.0, noise, size=n)
    points = [Point(x_value=float(x), y_value=float(y)) for x, y in zip(xs, ys)]
    return Dataset(points=points, x_label=x_label, y_label=y_label)
