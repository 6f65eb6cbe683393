import os

import matplotlib.pyplot as plt
import numpy as np

from training.callbacks import Callback


def figure_path(output_dir, filename):
    if output_dir:
        os.makedirs(output_dir, exist_ok=True)
        return os.path.join(output_dir, filename)
    return filename


def plot_dataset_scatter(dataset, outpath="Fig1_Input_Data.png", height=4.0, dpi=150):
    plt.figure(figsize=(8, height))
    plt.scatter(dataset.xs(), dataset.ys(), s=8, alpha=0.6, color='#3498DB')
    plt.xlabel(dataset.x_label, fontsize=12, fontweight='bold')
    plt.ylabel(dataset.y_label, fontsize=12, fontweight='bold')
    plt.title(f"{dataset.x_label} v {dataset.y_label}", fontsize=14, fontweight='bold')
    plt.grid(True, alpha=0.3)
    plt.tight_layout()
    plt.savefig(outpath, dpi=dpi)
    plt.close()
    print(f"✓ Saved: {outpath}")
    return outpath


def plot_model_summary(model, outpath="Fig2_Model_Summary.png", dpi=150):
    text = model.summary()
    print(text)
    n_lines = text.count("\n") + 1
    plt.figure(figsize=(8, 0.25 * n_lines + 0.8))
    plt.axis('off')
    plt.title('Model Summary', fontsize=14, fontweight='bold')
    plt.text(0.0, 1.0, text, family='monospace', fontsize=10, va='top', ha='left')
    plt.savefig(outpath, dpi=dpi, bbox_inches='tight')
    plt.close()
    print(f"✓ Saved: {outpath}")
    return outpath


def plot_training_curves(history, metrics=("loss", "mse"), outpath="Fig3_Training_Performance.png",
                         height=3.0, dpi=150):
    """
    history : dict
        metric name -> list of per-epoch values
    """
    fig, axes = plt.subplots(1, len(metrics), figsize=(5 * len(metrics), height), squeeze=False)
    for ax, m in zip(axes[0], metrics):
        values = history.get(m, [])
        ax.plot(np.arange(1, len(values) + 1), values, marker='o', markersize=3, linewidth=2)
        ax.set_xlabel('Epoch', fontsize=11, fontweight='bold')
        ax.set_ylabel(m, fontsize=11, fontweight='bold')
        ax.set_title(m, fontsize=12, fontweight='bold')
        ax.grid(True, alpha=0.3)
    fig.suptitle('Training Performance', fontsize=14, fontweight='bold')
    fig.tight_layout()
    fig.savefig(outpath, dpi=dpi)
    plt.close(fig)
    return outpath


class TrainingCurvePlotter(Callback):
    """
    Redraws the training curves while fitting, every update_every epochs and once at the end.
    """
    def __init__(self, metrics=("loss", "mse"), outpath="Fig3_Training_Performance.png",
                 update_every=1, height=3.0, dpi=150):
        self.metrics = tuple(metrics)
        self.outpath = outpath
        self.update_every = max(1, int(update_every))
        self.height = height
        self.dpi = dpi
        self.values = {}

    def on_train_begin(self, logs=None):
        self.values = {m: [] for m in self.metrics}

    def on_epoch_end(self, epoch, logs=None):
        logs = logs or {}
        for m in self.metrics:
            if m in logs:
                self.values[m].append(logs[m])
        if (epoch + 1) % self.update_every == 0:
            plot_training_curves(self.values, self.metrics, self.outpath, self.height, self.dpi)

    def on_train_end(self, logs=None):
        plot_training_curves(self.values, self.metrics, self.outpath, self.height, self.dpi)
        print(f"✓ Saved: {self.outpath}")


def plot_predictions(result, baseline=None, outpath="Fig4_Predictions.png", height=4.0, dpi=150):
    plt.figure(figsize=(8, height))
    plt.scatter(result.original_x, result.original_y, s=8, alpha=0.5, color='#3498DB', label='original')
    plt.scatter(result.predicted_x, result.predicted_y, s=8, alpha=0.9, color='#E74C3C', label='predicted')
    if baseline is not None:
        plt.plot(result.predicted_x, baseline.predict(result.predicted_x), '--',
                 color='#2C3E50', linewidth=1.5, label='least squares')
    plt.xlabel(result.x_label, fontsize=12, fontweight='bold')
    plt.ylabel(result.y_label, fontsize=12, fontweight='bold')
    plt.title('Model Predictions vs Original Data', fontsize=14, fontweight='bold')
    plt.grid(True, alpha=0.3)
    plt.legend()
    plt.tight_layout()
    plt.savefig(outpath, dpi=dpi)
    plt.close()
    print(f"✓ Saved: {outpath}")
    return outpath
