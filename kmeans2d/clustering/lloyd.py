"""Lloyd's k-means over 2-D points.

Each round assigns every point to its nearest centroid, replaces the
centroids by the means of their clusters, and stops once the new centroid
set equals the old one as a set of values. Clusters that receive no points
are dropped, so the number of centroids can shrink between rounds.
"""

import dataclasses
from typing import Dict, List, Optional, Sequence, Tuple

import numpy as np

from ..data.points import (
    CentroidId,
    CentroidSet,
    Dataset,
    Point,
    PointId,
    centroids_to_array,
)
from ..errors import InvalidInputError
from .metrics import KMeansResult, SilhouetteResult, global_silhouette, sse
from .partition import Partition


def distance_matrix(data: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Compute distances from all points to all centroids.

    Args:
        data: Data points (n x 2).
        centroids: Centroids (k x 2).

    Returns:
        Distance matrix (n x k).
    """
    # (n, 1, 2) - (1, k, 2) -> (n, k, 2) -> (n, k)
    diff = data[:, np.newaxis, :] - centroids[np.newaxis, :, :]
    return np.linalg.norm(diff, axis=2)


def assign(dataset: Dataset, centroids: Sequence[Point]) -> Partition:
    """Assign each point to its nearest centroid.

    Ties go to the lowest centroid index.

    Args:
        dataset: Points to assign.
        centroids: Candidate centroids.

    Returns:
        Partition holding only the centroids that received points.
    """
    if len(dataset) == 0:
        raise InvalidInputError("Cannot assign points of an empty dataset")
    if len(centroids) == 0:
        raise InvalidInputError("Cannot assign points to an empty centroid set")

    distances = distance_matrix(dataset.to_array(), centroids_to_array(centroids))
    # argmin returns the first minimum
    labels = np.argmin(distances, axis=1)

    clusters: Dict[CentroidId, List[PointId]] = {}
    for pid, label in zip(dataset.ids(), labels):
        clusters.setdefault(CentroidId(int(label)), []).append(pid)

    return Partition(dataset=dataset, clusters=clusters)


def update(partition: Partition) -> CentroidSet:
    """Replace each populated cluster's centroid by the mean of its members.

    Centroids come out in ascending centroid id order. Empty clusters are
    not in the partition and therefore produce no centroid.
    """
    new_centroids = []
    for cid in partition.keys():
        mean = partition.member_array(cid).mean(axis=0)
        new_centroids.append(Point(x=float(mean[0]), y=float(mean[1])))
    return tuple(new_centroids)


def canonical_order(centroids: Sequence[Point]) -> Tuple[Point, ...]:
    """Sort centroids by x, then y."""
    return tuple(sorted(centroids, key=lambda c: (c.x, c.y)))


def has_converged(old_centroids: Sequence[Point], new_centroids: Sequence[Point]) -> bool:
    """Check whether two centroid sets hold the same values, in any order.

    Sets of different size never compare equal.
    """
    if len(old_centroids) != len(new_centroids):
        return False
    return canonical_order(old_centroids) == canonical_order(new_centroids)


def _check_k(dataset: Dataset, k: int) -> None:
    if len(dataset) == 0:
        raise InvalidInputError("Dataset is empty")
    if k <= 0:
        raise InvalidInputError(f"k must be positive, got {k}")
    if k > len(dataset):
        raise InvalidInputError(f"Need at least {k} samples, got {len(dataset)}")


def pick_centroids(
    dataset: Dataset,
    k: int,
    rng: np.random.Generator,
) -> CentroidSet:
    """Pick k initial centroids uniformly from the dataset, with replacement.

    Args:
        dataset: Points to pick from.
        k: Number of centroids.
        rng: Random source.

    Returns:
        Initial centroids.
    """
    _check_k(dataset, k)
    indices = rng.integers(len(dataset), size=k)
    return tuple(dataset[PointId(int(i))] for i in indices)


class KMeans:
    """Lloyd's k-means with exact, order-independent convergence.

    The loop has no iteration cap unless ``max_iter`` is given; a capped
    run that stops early is reported with ``converged=False``.
    """

    def __init__(
        self,
        n_clusters: int = 4,
        max_iter: Optional[int] = None,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """Initialize k-means.

        Args:
            n_clusters: Number of clusters (k).
            max_iter: Optional cap on assign/update rounds.
            seed: Random seed for initialization, ignored when ``rng`` is given.
                None draws fresh entropy.
            rng: Explicit random source.
        """
        if max_iter is not None and max_iter <= 0:
            raise InvalidInputError(f"max_iter must be positive, got {max_iter}")
        self.n_clusters = n_clusters
        self.max_iter = max_iter
        self.rng = rng if rng is not None else np.random.default_rng(seed)

        self.centroids_: Optional[CentroidSet] = None
        self.partition_: Optional[Partition] = None

    def _initial_centroids(
        self,
        dataset: Dataset,
        initial_centroids: Optional[Sequence[Point]],
    ) -> CentroidSet:
        if initial_centroids is None:
            return pick_centroids(dataset, self.n_clusters, self.rng)
        if len(initial_centroids) != self.n_clusters:
            raise InvalidInputError(
                f"Got {len(initial_centroids)} initial centroids for k={self.n_clusters}"
            )
        _check_k(dataset, len(initial_centroids))
        return tuple(initial_centroids)

    def fit(
        self,
        dataset: Dataset,
        initial_centroids: Optional[Sequence[Point]] = None,
        verbose: bool = False,
    ) -> KMeansResult:
        """Fit k-means to a dataset.

        Args:
            dataset: Points to cluster.
            initial_centroids: Starting centroids, exactly ``n_clusters`` of
                them; picked at random if omitted.
            verbose: Whether to print progress.

        Returns:
            KMeansResult with final clustering.
        """
        centroids = self._initial_centroids(dataset, initial_centroids)

        converged = False
        iteration = 0
        while True:
            partition = assign(dataset, centroids)
            new_centroids = update(partition)
            iteration += 1

            if verbose:
                print(
                    f"Iteration {iteration}: "
                    f"{len(centroids)} -> {len(new_centroids)} centroids"
                )

            if has_converged(centroids, new_centroids):
                converged = True
                break

            if self.max_iter is not None and iteration >= self.max_iter:
                break

            centroids = new_centroids

        # Align cluster ids with the order update() emitted centroids in
        partition = partition.relabel()

        self.centroids_ = new_centroids
        self.partition_ = partition

        result = sse(partition, new_centroids)
        return dataclasses.replace(
            result,
            n_iterations=iteration,
            converged=converged,
        )

    def predict(self, dataset: Dataset) -> np.ndarray:
        """Predict cluster labels for new points.

        Args:
            dataset: Points to label.

        Returns:
            Cluster label per point.
        """
        if self.centroids_ is None:
            raise ValueError("Must call fit() first")

        return assign(dataset, self.centroids_).labels()

    def silhouette(self) -> SilhouetteResult:
        """Global silhouette coefficient of the fitted clustering."""
        if self.partition_ is None or self.centroids_ is None:
            raise ValueError("Must call fit() first")

        return global_silhouette(self.partition_, self.centroids_)


def run_kmeans(
    dataset: Dataset,
    k: int,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    initial_centroids: Optional[Sequence[Point]] = None,
    max_iter: Optional[int] = None,
    verbose: bool = False,
) -> KMeansResult:
    """Convenience function for one k-means run.

    Args:
        dataset: Points to cluster.
        k: Number of clusters.
        rng: Random source (takes precedence over ``seed``).
        seed: Random seed (None for fresh entropy).
        initial_centroids: Starting centroids; picked at random if omitted.
        max_iter: Optional cap on rounds.
        verbose: Print progress.

    Returns:
        KMeansResult.
    """
    kmeans = KMeans(n_clusters=k, max_iter=max_iter, seed=seed, rng=rng)
    return kmeans.fit(dataset, initial_centroids=initial_centroids, verbose=verbose)


def run_kmeans_with_silhouette(
    dataset: Dataset,
    k: int,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    initial_centroids: Optional[Sequence[Point]] = None,
    max_iter: Optional[int] = None,
    verbose: bool = False,
) -> Tuple[KMeansResult, SilhouetteResult]:
    """Run k-means and score the result with the silhouette coefficient.

    Raises:
        ComputationUndefinedError: The run ended with a single cluster.
    """
    kmeans = KMeans(n_clusters=k, max_iter=max_iter, seed=seed, rng=rng)
    result = kmeans.fit(dataset, initial_centroids=initial_centroids, verbose=verbose)
    score = kmeans.silhouette()
    return dataclasses.replace(result, silhouette=score.coefficient), score
