"""
Plotting utilities for minilearn demos.

All plots are 150 DPI, bbox_inches='tight', with consistent style.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import numpy as np

try:
    import matplotlib
    matplotlib.use("Agg")  # non-interactive backend
    import matplotlib.pyplot as plt
    MPL_AVAILABLE = True
except ImportError:
    MPL_AVAILABLE = False


STYLE_CONFIG = {
    "figure.figsize": (10, 6),
    "figure.dpi": 150,
    "figure.facecolor": "white",
    "axes.grid": True,
    "grid.alpha": 0.3,
    "font.size": 10,
    "axes.titlesize": 14,
    "axes.labelsize": 12,
    "legend.fontsize": 10,
    "lines.linewidth": 2,
    "lines.markersize": 8,
}

COLORS = {
    "train": "#4363d8",    # blue
}


def _require_mpl():
    if not MPL_AVAILABLE:
        raise ImportError(
            "matplotlib is required for plotting. "
            "Install with: pip install minilearn[plot]"
        )


def _apply_style():
    """Apply rcParams."""
    plt.rcParams.update(STYLE_CONFIG)


def _add_info_box(ax, text: str):
    """Add a semi-transparent info box to the upper right of the axes."""
    props = dict(boxstyle="round,pad=0.4", facecolor="white", alpha=0.85,
                 edgecolor="#cccccc")
    ax.text(0.98, 0.98, text, transform=ax.transAxes, fontsize=8,
            verticalalignment="top", horizontalalignment="right", bbox=props,
            family="monospace")


def plot_cluster_assignments(
    points: np.ndarray,
    labels: np.ndarray,
    centroids: Optional[np.ndarray] = None,
    out_path: Union[str, Path] = "cluster_assignments.png",
    title: str = "Cluster Assignments",
):
    """Scatter plot of points coloured by cluster assignment.

    Only the first two dimensions are drawn.

    Args:
        points: (N, d) array, d >= 2.
        labels: (N,) integer cluster labels.
        centroids: (K, d) cluster centroids (optional).
        out_path: Output file path.
        title: Plot title.
    """
    _require_mpl()
    _apply_style()

    points = np.asarray(points)
    labels = np.asarray(labels)
    unique_labels = np.unique(labels)
    cmap = plt.get_cmap("tab20", max(len(unique_labels), 2))

    fig, ax = plt.subplots(figsize=(10, 8))

    for i, k in enumerate(unique_labels):
        mask = labels == k
        ax.scatter(
            points[mask, 0], points[mask, 1],
            color=cmap(i), s=12, alpha=0.6, label=f"C{k}",
        )

    if centroids is not None:
        centroids = np.asarray(centroids)
        ax.scatter(
            centroids[:, 0], centroids[:, 1],
            c="black", marker="X", s=120, edgecolors="white",
            linewidths=1.5, zorder=10, label="Centroids",
        )

    n_clusters = len(centroids) if centroids is not None else len(unique_labels)
    _add_info_box(ax, f"K = {n_clusters}  |  N = {len(points)}")

    ax.set_xlabel("x0")
    ax.set_ylabel("x1")
    ax.legend(loc="upper left", fontsize=7, markerscale=2)
    ax.set_title(title)
    fig.tight_layout()
    fig.savefig(str(out_path), dpi=150, bbox_inches="tight")
    plt.close(fig)


def plot_training_curve(
    history: List[float],
    out_path: Union[str, Path] = "training_curve.png",
    ylabel: str = "MSE",
    title: str = "Training Curve",
    log_scale: bool = True,
):
    """Line plot of a per-iteration metric, e.g. regression MSE."""
    _require_mpl()
    _apply_style()

    fig, ax = plt.subplots()
    iterations = list(range(1, len(history) + 1))
    ax.plot(iterations, history, color=COLORS["train"])
    if log_scale and len(history) and min(history) > 0:
        ax.set_yscale("log")

    if history:
        _add_info_box(ax, f"final = {history[-1]:.3e}")

    ax.set_xlabel("Iteration")
    ax.set_ylabel(ylabel)
    ax.set_title(title)
    fig.tight_layout()
    fig.savefig(str(out_path), dpi=150, bbox_inches="tight")
    plt.close(fig)


def _make_serializable(obj: Any) -> Any:
    """Recursively convert numpy types for JSON serialization."""
    if isinstance(obj, dict):
        return {k: _make_serializable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [_make_serializable(v) for v in obj]
    if isinstance(obj, np.integer):
        return int(obj)
    if isinstance(obj, np.floating):
        return float(obj)
    if isinstance(obj, np.ndarray):
        return obj.tolist()
    return obj


def save_results_json(
    results: Dict[str, Any],
    out_path: Union[str, Path],
):
    """Save results to JSON with numpy-safe conversion."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w") as f:
        json.dump(_make_serializable(results), f, indent=2)
