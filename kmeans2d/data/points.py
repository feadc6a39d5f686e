"""Point and dataset value types.

Points are identified by their position in the dataset (``PointId``) and
centroids by their position in the centroid set (``CentroidId``). The two
id types are distinct so a point index cannot be used where a centroid
index is expected.
"""

import math
from dataclasses import dataclass
from typing import Iterator, NewType, Sequence, Tuple

import numpy as np

from ..errors import InvalidInputError


PointId = NewType("PointId", int)
CentroidId = NewType("CentroidId", int)


@dataclass(frozen=True)
class Point:
    """An immutable 2-D coordinate.

    Attributes:
        x: X-coordinate.
        y: Y-coordinate.
    """
    x: float
    y: float

    def __post_init__(self):
        if not (math.isfinite(self.x) and math.isfinite(self.y)):
            raise InvalidInputError(f"Point coordinates must be finite, got ({self.x}, {self.y})")

    def distance(self, other: "Point") -> float:
        """Euclidean distance to another point."""
        return math.hypot(self.x - other.x, self.y - other.y)

    def distance_squared(self, other: "Point") -> float:
        """Squared Euclidean distance to another point."""
        dx = self.x - other.x
        dy = self.y - other.y
        return dx * dx + dy * dy

    def to_array(self) -> np.ndarray:
        """Convert to numpy array [x, y]."""
        return np.array([self.x, self.y], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: Sequence[float]) -> "Point":
        """Create from a length-2 sequence."""
        return cls(x=float(arr[0]), y=float(arr[1]))


# Indexed by CentroidId.
CentroidSet = Tuple[Point, ...]


@dataclass(frozen=True)
class Dataset:
    """An ordered, fixed-size collection of points.

    Two members with equal coordinates are still distinct points.

    Attributes:
        points: Points indexed by PointId.
    """
    points: Tuple[Point, ...]

    def __post_init__(self):
        # Accept any sequence but store a tuple
        object.__setattr__(self, "points", tuple(self.points))

    def __len__(self) -> int:
        return len(self.points)

    def __getitem__(self, idx: PointId) -> Point:
        return self.points[idx]

    def __iter__(self) -> Iterator[Point]:
        return iter(self.points)

    def ids(self) -> Iterator[PointId]:
        """Iterate over point ids in dataset order."""
        return (PointId(i) for i in range(len(self.points)))

    def to_array(self) -> np.ndarray:
        """Convert to numpy array of shape (n_points, 2)."""
        if not self.points:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([[p.x, p.y] for p in self.points], dtype=np.float64)

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "Dataset":
        """Create from numpy array of shape (n_points, 2)."""
        arr = np.asarray(arr, dtype=np.float64)
        if arr.size == 0:
            return cls(points=())
        if arr.ndim != 2 or arr.shape[1] != 2:
            raise InvalidInputError(f"Expected an (n, 2) array, got shape {arr.shape}")
        return cls(points=tuple(Point.from_array(row) for row in arr))


def centroids_to_array(centroids: Sequence[Point]) -> np.ndarray:
    """Convert a centroid set to a (k, 2) array."""
    if len(centroids) == 0:
        return np.empty((0, 2), dtype=np.float64)
    return np.array([[c.x, c.y] for c in centroids], dtype=np.float64)
