"""
Visualization module for k-means results.

Provides:
- Cluster scatter plots
- JSON persistence of run summaries
"""

from .plot_utils import (
    plot_clusters,
    result_to_dict,
    save_results_json,
    STYLE_CONFIG,
    MPL_AVAILABLE,
)

__all__ = [
    "plot_clusters",
    "result_to_dict",
    "save_results_json",
    "STYLE_CONFIG",
    "MPL_AVAILABLE",
]
