"""Nearest-centroid partition of a dataset."""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterator, List, Mapping, Sequence, Tuple

import numpy as np

from ..data.points import CentroidId, Dataset, Point, PointId


@dataclass(frozen=True)
class Partition:
    """Mapping from centroid id to the ids of the points assigned to it.

    Only populated clusters appear as keys. Keys are kept in ascending
    order and members in dataset order.

    Attributes:
        dataset: The partitioned dataset.
        clusters: Member point ids per centroid id.
    """
    dataset: Dataset
    clusters: Mapping[CentroidId, Tuple[PointId, ...]]

    def __post_init__(self):
        frozen = {
            CentroidId(cid): tuple(members)
            for cid, members in sorted(self.clusters.items())
            if len(members) > 0
        }
        object.__setattr__(self, "clusters", MappingProxyType(frozen))

    def __hash__(self):
        return hash((self.dataset, tuple(self.clusters.items())))

    @property
    def n_clusters(self) -> int:
        """Number of populated clusters."""
        return len(self.clusters)

    def keys(self) -> Iterator[CentroidId]:
        """Populated centroid ids in ascending order."""
        return iter(self.clusters.keys())

    def member_ids(self, cid: CentroidId) -> Tuple[PointId, ...]:
        return self.clusters[cid]

    def members(self, cid: CentroidId) -> List[Point]:
        """Points assigned to centroid ``cid``."""
        return [self.dataset[pid] for pid in self.clusters[cid]]

    def member_array(self, cid: CentroidId) -> np.ndarray:
        """Coordinates of the members of ``cid`` as an (m, 2) array."""
        return np.array([[p.x, p.y] for p in self.members(cid)], dtype=np.float64)

    def labels(self) -> np.ndarray:
        """Cluster label per point, in dataset order.

        Points missing from every cluster are labelled -1.
        """
        labels = np.full(len(self.dataset), -1, dtype=np.int64)
        for cid, members in self.clusters.items():
            labels[list(members)] = cid
        return labels

    def relabel(self) -> "Partition":
        """Renumber populated clusters densely, keeping key order.

        The i-th populated cluster becomes ``CentroidId(i)``, which is the
        order in which the update step emits centroids.
        """
        renumbered: Dict[CentroidId, Sequence[PointId]] = {
            CentroidId(new_id): members
            for new_id, members in enumerate(self.clusters.values())
        }
        return Partition(dataset=self.dataset, clusters=renumbered)
