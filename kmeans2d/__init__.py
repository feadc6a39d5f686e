"""kmeans2d: Lloyd's k-means over 2-D points with SSE and silhouette scoring."""

from .errors import KMeansError, InvalidInputError, ComputationUndefinedError
from .config import DatasetConfig, KMeansConfig, ExperimentConfig
from .data import Point, PointId, CentroidId, Dataset, generate_dataset
from .clustering import (
    KMeans,
    KMeansResult,
    Partition,
    SilhouetteResult,
    assign,
    update,
    has_converged,
    sse,
    global_silhouette,
    run_kmeans,
    run_kmeans_with_silhouette,
    repeat_kmeans,
)

__version__ = "0.1.0"

__all__ = [
    "KMeansError",
    "InvalidInputError",
    "ComputationUndefinedError",
    "DatasetConfig",
    "KMeansConfig",
    "ExperimentConfig",
    "Point",
    "PointId",
    "CentroidId",
    "Dataset",
    "generate_dataset",
    "KMeans",
    "KMeansResult",
    "Partition",
    "SilhouetteResult",
    "assign",
    "update",
    "has_converged",
    "sse",
    "global_silhouette",
    "run_kmeans",
    "run_kmeans_with_silhouette",
    "repeat_kmeans",
]
