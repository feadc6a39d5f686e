"""Data module for point types and synthetic datasets."""

from .points import (
    Point,
    PointId,
    CentroidId,
    CentroidSet,
    Dataset,
    centroids_to_array,
)
from .synthetic import (
    generate_dataset,
    DatasetGenerator,
)

__all__ = [
    "Point",
    "PointId",
    "CentroidId",
    "CentroidSet",
    "Dataset",
    "centroids_to_array",
    "generate_dataset",
    "DatasetGenerator",
]
