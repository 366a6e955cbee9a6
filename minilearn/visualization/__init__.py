"""
Visualization module for minilearn.

Provides plotting utilities for:
- Cluster assignment scatter plots
- Per-iteration training curves

And numpy-safe JSON result saving.
"""

from .plot_utils import (
    MPL_AVAILABLE,
    STYLE_CONFIG,
    plot_cluster_assignments,
    plot_training_curve,
    save_results_json,
)

__all__ = [
    "MPL_AVAILABLE",
    "STYLE_CONFIG",
    "plot_cluster_assignments",
    "plot_training_curve",
    "save_results_json",
]
