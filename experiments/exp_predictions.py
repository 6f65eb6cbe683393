from dataclasses import dataclass

import numpy as np

from data.normalization import min_max_invert


@dataclass
class PredictionResult:
    predicted_x: np.ndarray
    predicted_y: np.ndarray
    original_x: np.ndarray
    original_y: np.ndarray
    x_label: str = "x"
    y_label: str = "y"

    def predicted_points(self):
        return [{"x": float(x), "y": float(y)} for x, y in zip(self.predicted_x, self.predicted_y)]

    def original_points(self):
        return [{"x": float(x), "y": float(y)} for x, y in zip(self.original_x, self.original_y)]


def run_predictions(model, dataset, normalized, n_points=100):
    """
    Predict over an even grid in normalized input space and map back to raw units.

    Parameters
    ----------
    model : Sequential
        Trained model, expects normalized (n, 1) inputs.
    dataset : Dataset
        Raw points, returned unchanged as the "original" series.
    normalized : NormalizedData
        Bounds used to scale the training data.
    n_points : int
        Size of the probe grid over [0, 1].

    Returns
    -------
    PredictionResult
    """
    xs = np.linspace(0.0, 1.0, n_points)
    preds = model.predict(xs.reshape(n_points, 1)).reshape(-1)

    un_norm_xs = min_max_invert(xs, normalized.input_min, normalized.input_max)
    un_norm_preds = min_max_invert(preds, normalized.label_min, normalized.label_max)

    return PredictionResult(
        predicted_x=un_norm_xs,
        predicted_y=un_norm_preds,
        original_x=dataset.xs(),
        original_y=dataset.ys(),
        x_label=dataset.x_label,
        y_label=dataset.y_label,
    )
