"""
Plotting and result persistence for k-means experiments.

All plots are 150 DPI, bbox_inches='tight', with consistent style.
"""

import json
from pathlib import Path
from typing import Any, Dict, Union

import numpy as np

from ..clustering.metrics import KMeansResult
from ..data.points import Dataset, centroids_to_array

try:
    import matplotlib
    matplotlib.use("Agg")  # non-interactive backend
    import matplotlib.pyplot as plt
    MPL_AVAILABLE = True
except ImportError:
    MPL_AVAILABLE = False


STYLE_CONFIG = {
    "figure.figsize": (8, 8),
    "figure.dpi": 150,
    "figure.facecolor": "white",
    "axes.grid": True,
    "grid.alpha": 0.3,
    "font.size": 10,
    "axes.titlesize": 14,
    "axes.labelsize": 12,
    "legend.fontsize": 9,
}


def _require_mpl():
    if not MPL_AVAILABLE:
        raise ImportError(
            "matplotlib is required for plotting. "
            "Install with: pip install kmeans2d[viz]"
        )


def _apply_style():
    """Apply plot rcParams."""
    plt.rcParams.update(STYLE_CONFIG)


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


def result_to_dict(result: KMeansResult) -> Dict[str, Any]:
    """Flatten a KMeansResult into JSON-friendly values."""
    return {
        "sse": result.sse,
        "k": result.k,
        "silhouette": result.silhouette,
        "centroids": [[c.x, c.y] for c in result.centroids],
        "n_iterations": result.n_iterations,
        "converged": result.converged,
    }


def save_results_json(
    results: Dict[str, Any],
    out_path: Union[str, Path],
):
    """Save results to JSON with numpy-safe conversion."""
    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, "w") as f:
        json.dump(_make_serializable(results), f, indent=2)


def plot_clusters(
    dataset: Dataset,
    result: KMeansResult,
    out_path: Union[str, Path] = "clusters.png",
    title: str = "K-Means Clusters",
):
    """Scatter plot of points coloured by cluster, centroids marked.

    Args:
        dataset: Clustered points.
        result: Result whose labels index into ``result.centroids``.
        out_path: Output file path.
        title: Plot title.
    """
    _require_mpl()
    _apply_style()

    points = dataset.to_array()
    labels = result.labels if result.labels is not None else np.zeros(len(points), dtype=int)
    unique_labels = np.unique(labels[labels >= 0])
    n_clusters = len(unique_labels)

    cmap = plt.get_cmap("tab20", max(n_clusters, 2))

    fig, ax = plt.subplots()

    for i, k in enumerate(unique_labels):
        mask = labels == k
        ax.scatter(
            points[mask, 0], points[mask, 1],
            c=[cmap(i)], s=12, alpha=0.6, label=f"C{k}",
        )

    if result.centroids:
        centroids = centroids_to_array(result.centroids)
        ax.scatter(
            centroids[:, 0], centroids[:, 1],
            c="black", marker="X", s=120, edgecolors="white",
            linewidths=1.5, zorder=10, label="Centroids",
        )

    info = f"K = {result.k}  |  N = {len(points)}  |  SSE = {result.sse:.3f}"
    if result.silhouette is not None:
        info += f"\nSilhouette = {result.silhouette:.3f}"
    props = dict(boxstyle="round,pad=0.4", facecolor="white", alpha=0.85,
                 edgecolor="#cccccc")
    ax.text(0.98, 0.98, info, transform=ax.transAxes, fontsize=8,
            verticalalignment="top", horizontalalignment="right", bbox=props,
            family="monospace")

    ax.set_xlabel("X")
    ax.set_ylabel("Y")
    ax.set_aspect("equal", adjustable="datalim")
    ax.legend(loc="upper left", fontsize=7, ncol=max(1, n_clusters // 8),
              markerscale=2)
    ax.set_title(title)

    out_path = Path(out_path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    fig.savefig(str(out_path), dpi=150, bbox_inches="tight")
    plt.close(fig)
