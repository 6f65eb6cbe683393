import numpy as np

from data.normalization import min_max_invert


def sanity_round_trip(dataset, normalized):
    """
    Test 1: Normalization round trip - un-scaling the normalized columns back to the raw points.
    Expected: max abs error ~1e-12
    """
    print("\n[Sanity 1] Normalization round trip")
    xs, ys = dataset.xs(), dataset.ys()
    errs = []
    # rows of the normalized columns follow the shuffled dataset order
    for raw, scaled, lo, hi in ((xs, normalized.inputs, normalized.input_min, normalized.input_max),
                                (ys, normalized.labels, normalized.label_min, normalized.label_max)):
        back = min_max_invert(scaled.reshape(-1), lo, hi)
        errs.append(float(np.max(np.abs(back - raw))) if len(raw) else 0.0)
    err = max(errs)
    print(f"  max |invert(normalized) - v| = {err:.3e}")
    return err


def sanity_shuffle_preserved(points_before, dataset):
    """
    Test 2: The in-place shuffle is a permutation (no point lost or duplicated).
    """
    print("\n[Sanity 2] Shuffle preserves the multiset of points")
    before = sorted((p.x_value, p.y_value) for p in points_before)
    after = sorted((p.x_value, p.y_value) for p in dataset.points)
    ok = before == after
    print(f"  {len(after)} points, preserved: {ok}")
    return ok


def sanity_baseline_agreement(predictions, baseline):
    """
    Test 3: Network predictions vs the closed-form least squares line on the probe grid.
    Expected: small relative to the label range once training has converged
    """
    print("\n[Sanity 3] Network vs least squares")
    ref = baseline.predict(predictions.predicted_x)
    rmse = float(np.sqrt(np.mean((predictions.predicted_y - ref) ** 2)))
    span = float(np.ptp(predictions.original_y)) if len(predictions.original_y) else 0.0
    rel = rmse / span if span > 0 else 0.0
    print(f"  OLS: y = {baseline.slope:.4f} x + {baseline.intercept:.4f} (r={baseline.r_value:.3f})")
    print(f"  RMSE(network, OLS) = {rmse:.4f} ({rel:.2%} of label range)")
    return rmse
