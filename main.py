from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import numpy as np

from utils.config import PipelineConfig
from utils.errors import DataFetchError

from data.loader import Dataset, Point, load_dataset
from data.normalization import NormalizedData, convert_to_tensor

from models.sequential import Sequential, create_model

from training.callbacks import History, ProgressLogger, TerminateOnNaN
from training.trainer import evaluate, train_model

from experiments.exp_predictions import PredictionResult, run_predictions
from experiments.exp_sanity import sanity_baseline_agreement, sanity_round_trip, sanity_shuffle_preserved
from baselines.least_squares import LeastSquaresBaseline

from plots.figures import (TrainingCurvePlotter, figure_path, plot_dataset_scatter,
                           plot_model_summary, plot_predictions)


@dataclass
class PipelineContext:
    """
    Everything one pipeline run produced, stage by stage.
    """
    config: PipelineConfig
    dataset: Optional[Dataset] = None
    model: Optional[Sequential] = None
    normalized: Optional[NormalizedData] = None
    history: Optional[History] = None
    predictions: Optional[PredictionResult] = None
    baseline: Optional[LeastSquaresBaseline] = None
    initial_mse: Optional[float] = None
    final_mse: Optional[float] = None
    figures: Dict[str, str] = field(default_factory=dict)
    sanity: Dict[str, Any] = field(default_factory=dict)


def run_pipeline(config=None, dataset=None, callbacks=None):
    """
    load -> normalize -> define -> train -> predict -> plot, once.

    Pass dataset to skip the fetch. Any PipelineError aborts the run.
    """
    cfg = config or PipelineConfig()
    ctx = PipelineContext(config=cfg)
    rng = np.random.RandomState(cfg.seed)
    plots = cfg.plots

    print("\n[1] Load dataset")
    if dataset is None:
        dataset = load_dataset(config=cfg.dataset)
    if len(dataset) == 0:
        raise DataFetchError(cfg.dataset.source, "no complete records after cleaning")
    ctx.dataset = dataset
    print(f"  {len(dataset)} points ({dataset.x_label} -> {dataset.y_label})")
    if plots.enabled:
        ctx.figures["data"] = plot_dataset_scatter(
            dataset, outpath=figure_path(plots.output_dir, "Fig1_Input_Data.png"),
            height=plots.height, dpi=plots.dpi)

    print("\n[2] Create model")
    ctx.model = create_model(seed=cfg.seed)
    if plots.enabled:
        ctx.figures["summary"] = plot_model_summary(
            ctx.model, outpath=figure_path(plots.output_dir, "Fig2_Model_Summary.png"), dpi=plots.dpi)
    else:
        print(ctx.model.summary())

    print("\n[3] Normalize")
    points_before = [Point(p.x_value, p.y_value) for p in dataset.points]
    ctx.normalized = convert_to_tensor(dataset.points, rng=rng)
    n = ctx.normalized
    print(f"  inputs in [{n.input_min:.4f}, {n.input_max:.4f}], labels in [{n.label_min:.4f}, {n.label_max:.4f}]")

    print("\n[4] Train")
    cbs = [ProgressLogger(every=cfg.training.verbose_every), TerminateOnNaN()]
    if plots.enabled:
        path = figure_path(plots.output_dir, "Fig3_Training_Performance.png")
        cbs.append(TrainingCurvePlotter(outpath=path, update_every=plots.update_every,
                                        height=plots.height * 0.75, dpi=plots.dpi))
        ctx.figures["training"] = path
    cbs.extend(callbacks or [])

    ctx.initial_mse = evaluate(ctx.model, n.inputs, n.labels)
    ctx.history = train_model(ctx.model, n.inputs, n.labels, config=cfg.training, callbacks=cbs, rng=rng)
    ctx.final_mse = evaluate(ctx.model, n.inputs, n.labels)
    print(f"  Done training | mse {ctx.initial_mse:.6f} -> {ctx.final_mse:.6f}")

    print("\n[5] Predict")
    ctx.predictions = run_predictions(ctx.model, dataset, n, n_points=cfg.prediction.n_points)
    ctx.baseline = LeastSquaresBaseline().fit(dataset.xs(), dataset.ys())
    if plots.enabled:
        ctx.figures["predictions"] = plot_predictions(
            ctx.predictions, baseline=ctx.baseline,
            outpath=figure_path(plots.output_dir, "Fig4_Predictions.png"),
            height=plots.height, dpi=plots.dpi)

    print("\n======================")
    print("Running sanity checks")
    print("======================")
    ctx.sanity["round_trip_error"] = sanity_round_trip(dataset, n)
    ctx.sanity["shuffle_preserved"] = sanity_shuffle_preserved(points_before, dataset)
    ctx.sanity["baseline_rmse"] = sanity_baseline_agreement(ctx.predictions, ctx.baseline)

    return ctx


def main():
    run_pipeline(PipelineConfig())


if __name__ == "__main__":
    main()
