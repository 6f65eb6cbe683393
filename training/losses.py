import numpy as np

def mse(a, b):
    a = np.asarray(a); b = np.asarray(b)
    return float(np.mean((a - b) ** 2))

def mse_grad(pred, target):
    """dL/dpred of mean((pred - target)^2) over every element."""
    return 2.0 * (pred - target) / pred.size
