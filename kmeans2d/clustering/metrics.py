"""Clustering quality metrics.

Provides:
- SSE - sum of squared distances from each point to its centroid
- Silhouette coefficient - per point and averaged over the dataset
"""

import math
from dataclasses import dataclass, field
from typing import Dict, Optional, Sequence

import numpy as np

from ..data.points import CentroidId, CentroidSet, Point, PointId
from ..errors import ComputationUndefinedError, InvalidInputError
from .partition import Partition


@dataclass(frozen=True)
class KMeansResult:
    """Result of one k-means run.

    Attributes:
        sse: Sum of squared errors (non-negative).
        k: Number of populated clusters, possibly below the requested k.
        silhouette: Global silhouette coefficient, if computed.
        centroids: Final centroids, indexed like the labels.
        labels: Cluster label per point.
        n_iterations: Number of assign/update rounds.
        converged: Whether the centroids stopped moving.
    """
    sse: float
    k: int
    silhouette: Optional[float] = None
    centroids: CentroidSet = ()
    labels: Optional[np.ndarray] = field(default=None, compare=False, repr=False)
    n_iterations: int = 0
    converged: bool = True


@dataclass(frozen=True)
class SilhouetteResult:
    """Global silhouette coefficient of a clustering.

    Attributes:
        k: Number of populated clusters.
        coefficient: Mean per-point coefficient in [-1, 1].
    """
    k: int
    coefficient: float


def _check_centroids(partition: Partition, centroids: Sequence[Point]) -> None:
    for cid in partition.keys():
        if cid >= len(centroids):
            raise InvalidInputError(
                f"Cluster {cid} has no centroid ({len(centroids)} centroids given)"
            )


def sse(partition: Partition, centroids: Sequence[Point]) -> KMeansResult:
    """Compute the sum of squared errors of a clustering.

    SSE = sum_k sum_{x in C_k} ||x - c_k||^2

    Lower is better.

    Args:
        partition: Point assignment.
        centroids: Centroids indexed by the partition's centroid ids.

    Returns:
        KMeansResult carrying sse and the populated cluster count.
    """
    _check_centroids(partition, centroids)

    cluster_sums = []
    for cid in partition.keys():
        centroid = centroids[cid]
        cluster_sums.append(math.fsum(
            p.distance_squared(centroid) for p in partition.members(cid)
        ))

    return KMeansResult(
        sse=math.fsum(cluster_sums),
        k=partition.n_clusters,
        centroids=tuple(centroids),
        labels=partition.labels(),
    )


def nearest_other_cluster(
    cid: CentroidId,
    partition: Partition,
    centroids: Sequence[Point],
) -> CentroidId:
    """Find the populated cluster whose centroid is closest to ``cid``'s.

    Ties go to the lowest centroid id.

    Raises:
        ComputationUndefinedError: If no other cluster is populated.
    """
    own = centroids[cid]
    best: Optional[CentroidId] = None
    best_distance = math.inf
    for other in partition.keys():
        if other == cid:
            continue
        d = centroids[other].distance(own)
        if d < best_distance:
            best, best_distance = other, d

    if best is None:
        raise ComputationUndefinedError(
            "Silhouette needs at least two populated clusters"
        )
    return best


def _coefficient(a: float, b: float) -> float:
    denom = max(a, b)
    if denom == 0.0:
        return 0.0
    return (b - a) / denom


def _point_coefficient(
    pid: PointId,
    cid: CentroidId,
    partition: Partition,
    centroids: Sequence[Point],
    cluster_coords: Dict[CentroidId, np.ndarray],
) -> float:
    point = partition.dataset[pid]
    xy = np.array([point.x, point.y])

    # a(i) = mean distance to the other members of the same cluster
    own_ids = partition.member_ids(cid)
    if len(own_ids) > 1:
        own_dists = np.linalg.norm(cluster_coords[cid] - xy, axis=1)
        # The point's own entry contributes zero
        a_i = float(own_dists.sum()) / (len(own_ids) - 1)
    else:
        a_i = 0.0

    # b(i) = mean distance to the cluster with the nearest centroid
    other = nearest_other_cluster(cid, partition, centroids)
    other_dists = np.linalg.norm(cluster_coords[other] - xy, axis=1)
    b_i = float(other_dists.mean())

    return _coefficient(a_i, b_i)


def silhouette_coefficient(
    pid: PointId,
    cid: CentroidId,
    partition: Partition,
    centroids: Sequence[Point],
) -> float:
    """Silhouette coefficient of a single point.

    s(i) = (b(i) - a(i)) / max(a(i), b(i)), where a(i) is the mean
    distance to the other members of the point's cluster (0 for a
    singleton) and b(i) the mean distance to the members of the cluster
    whose centroid is closest to the point's own centroid. A point with
    a(i) = b(i) = 0 scores 0.

    Args:
        pid: Point id.
        cid: Centroid id of the cluster containing the point.
        partition: Point assignment.
        centroids: Centroids indexed by the partition's centroid ids.

    Returns:
        Coefficient in [-1, 1].
    """
    _check_centroids(partition, centroids)
    if pid not in partition.member_ids(cid):
        raise InvalidInputError(f"Point {pid} is not a member of cluster {cid}")
    coords = {c: partition.member_array(c) for c in partition.keys()}
    return _point_coefficient(pid, cid, partition, centroids, coords)


def global_silhouette(
    partition: Partition,
    centroids: Sequence[Point],
) -> SilhouetteResult:
    """Mean silhouette coefficient over all assigned points.

    Range: [-1, 1], higher is better.

    Args:
        partition: Point assignment.
        centroids: Centroids indexed by the partition's centroid ids.

    Returns:
        SilhouetteResult.

    Raises:
        ComputationUndefinedError: Fewer than two populated clusters.
    """
    if partition.n_clusters < 2:
        raise ComputationUndefinedError(
            f"Silhouette needs at least two populated clusters, got {partition.n_clusters}"
        )
    _check_centroids(partition, centroids)

    coords = {cid: partition.member_array(cid) for cid in partition.keys()}
    values = [
        _point_coefficient(pid, cid, partition, centroids, coords)
        for cid in partition.keys()
        for pid in partition.member_ids(cid)
    ]

    return SilhouetteResult(
        k=partition.n_clusters,
        coefficient=math.fsum(values) / len(values),
    )
