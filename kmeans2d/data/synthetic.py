"""Synthetic point generation around hidden centroids.

Hidden centroids are placed uniformly on a square grid. Each one gets an
equal share of the samples; a sample is drawn uniformly from the grid and
redrawn until it lies within ``spread`` of its centroid. The hidden
centroids themselves are appended after the samples.
"""

from typing import List, Optional

import numpy as np

from ..errors import InvalidInputError
from .points import Dataset, Point


DEFAULT_CLUSTER_COUNT = 4
DEFAULT_SAMPLE_COUNT = 100
DEFAULT_SPREAD = 0.8
DEFAULT_GRID_SIZE = 20.0


class DatasetGenerator:
    """Generator for synthetic 2-D clustering datasets."""

    def __init__(
        self,
        seed: Optional[int] = 42,
        grid_size: float = DEFAULT_GRID_SIZE,
        rng: Optional[np.random.Generator] = None,
    ):
        """Initialize generator.

        Args:
            seed: Random seed, ignored when ``rng`` is given.
            grid_size: Side length of the square the points live in.
            rng: Explicit random source.
        """
        if grid_size <= 0:
            raise InvalidInputError(f"grid_size must be positive, got {grid_size}")
        self.rng = rng if rng is not None else np.random.default_rng(seed)
        self.grid_size = grid_size

    def _random_point(self) -> Point:
        x, y = self.rng.uniform(0.0, self.grid_size, size=2)
        return Point(x=float(x), y=float(y))

    def _sample_near(self, center: Point, spread: float) -> Point:
        """Rejection-sample a grid point within ``spread`` of ``center``."""
        point = self._random_point()
        while point.distance(center) > spread:
            point = self._random_point()
        return point

    def generate(
        self,
        cluster_count: int = DEFAULT_CLUSTER_COUNT,
        sample_count: int = DEFAULT_SAMPLE_COUNT,
        spread: float = DEFAULT_SPREAD,
    ) -> Dataset:
        """Generate a dataset.

        Args:
            cluster_count: Number of hidden centroids.
            sample_count: Total samples, split evenly between centroids.
            spread: Maximum distance of a sample from its centroid.

        Returns:
            Dataset of ``(sample_count // cluster_count) * cluster_count``
            samples followed by the ``cluster_count`` hidden centroids.
        """
        if cluster_count <= 0:
            raise InvalidInputError(f"cluster_count must be positive, got {cluster_count}")
        if sample_count < 0:
            raise InvalidInputError(f"sample_count must be non-negative, got {sample_count}")
        if spread <= 0:
            raise InvalidInputError(f"spread must be positive, got {spread}")

        centers = [self._random_point() for _ in range(cluster_count)]

        points: List[Point] = []
        per_cluster = sample_count // cluster_count
        for center in centers:
            for _ in range(per_cluster):
                points.append(self._sample_near(center, spread))

        points.extend(centers)
        return Dataset(points=tuple(points))


def generate_dataset(
    cluster_count: int = DEFAULT_CLUSTER_COUNT,
    sample_count: int = DEFAULT_SAMPLE_COUNT,
    spread: float = DEFAULT_SPREAD,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = 42,
    grid_size: float = DEFAULT_GRID_SIZE,
) -> Dataset:
    """Convenience function to generate a synthetic dataset.

    Args:
        cluster_count: Number of hidden centroids.
        sample_count: Total samples.
        spread: Maximum distance of a sample from its centroid.
        rng: Explicit random source (takes precedence over ``seed``).
        seed: Random seed.
        grid_size: Side length of the square grid.

    Returns:
        Dataset.
    """
    generator = DatasetGenerator(seed=seed, grid_size=grid_size, rng=rng)
    return generator.generate(
        cluster_count=cluster_count,
        sample_count=sample_count,
        spread=spread,
    )
