"""Configuration dataclasses for kmeans2d experiments."""

from dataclasses import dataclass, field, asdict
from typing import Any, Dict, Literal, Optional

from .errors import InvalidInputError


@dataclass
class DatasetConfig:
    """Configuration for synthetic dataset generation.

    Attributes:
        cluster_count: Number of hidden centroids.
        sample_count: Total samples, split evenly between centroids.
        spread: Maximum distance of a sample from its centroid.
        grid_size: Side length of the square the points live in.
    """
    cluster_count: int = 4
    sample_count: int = 100
    spread: float = 0.8
    grid_size: float = 20.0


@dataclass
class KMeansConfig:
    """Configuration for k-means runs.

    Attributes:
        k: Number of clusters requested.
        n_runs: Independent restarts per experiment.
        max_iter: Cap on rounds per run (None for no cap).
        criterion: Best-run selection, "sse" (min) or "silhouette" (max).
        compute_silhouette: Score every run with the silhouette coefficient.
    """
    k: int = 4
    n_runs: int = 9
    max_iter: Optional[int] = None
    criterion: Literal["sse", "silhouette"] = "sse"
    compute_silhouette: bool = True

    def __post_init__(self):
        if self.criterion not in ("sse", "silhouette"):
            raise InvalidInputError(f"Unknown criterion: {self.criterion!r}")


@dataclass
class ExperimentConfig:
    """Master configuration for a k-means experiment.

    Attributes:
        seed: Seed for both dataset generation and initialization.
        output_dir: Directory for plots and JSON summaries.
    """
    seed: int = 42
    output_dir: str = "./outputs"
    dataset: DatasetConfig = field(default_factory=DatasetConfig)
    kmeans: KMeansConfig = field(default_factory=KMeansConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to nested dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "ExperimentConfig":
        """Create config from dictionary."""
        return cls(
            seed=d.get("seed", 42),
            output_dir=d.get("output_dir", "./outputs"),
            dataset=DatasetConfig(**d.get("dataset", {})),
            kmeans=KMeansConfig(**d.get("kmeans", {})),
        )
