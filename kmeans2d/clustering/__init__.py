"""Clustering module for Lloyd's k-means and its quality metrics."""

from .partition import Partition
from .lloyd import (
    KMeans,
    assign,
    update,
    canonical_order,
    has_converged,
    pick_centroids,
    run_kmeans,
    run_kmeans_with_silhouette,
)
from .metrics import (
    KMeansResult,
    SilhouetteResult,
    sse,
    silhouette_coefficient,
    global_silhouette,
)
from .restarts import (
    RestartSummary,
    repeat_kmeans,
    select_best,
)

__all__ = [
    "Partition",
    "KMeans",
    "assign",
    "update",
    "canonical_order",
    "has_converged",
    "pick_centroids",
    "run_kmeans",
    "run_kmeans_with_silhouette",
    "KMeansResult",
    "SilhouetteResult",
    "sse",
    "silhouette_coefficient",
    "global_silhouette",
    "RestartSummary",
    "repeat_kmeans",
    "select_best",
]
