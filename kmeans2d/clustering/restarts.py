"""Repeated k-means runs from independent random initializations.

Each run owns its centroids and partition; only the dataset is shared.
"""

import dataclasses
from dataclasses import dataclass
from typing import List, Literal, Optional, Sequence

import numpy as np

from ..data.points import Dataset
from ..errors import ComputationUndefinedError, InvalidInputError
from .lloyd import KMeans
from .metrics import KMeansResult


Criterion = Literal["sse", "silhouette"]
CRITERIA = ("sse", "silhouette")


@dataclass
class RestartSummary:
    """Outcome of a batch of k-means runs.

    Attributes:
        results: One result per run, in run order.
        best_index: Index of the selected run.
        criterion: How the best run was chosen.
    """
    results: List[KMeansResult]
    best_index: int
    criterion: str

    @property
    def best(self) -> KMeansResult:
        return self.results[self.best_index]

    @property
    def n_runs(self) -> int:
        return len(self.results)


def select_best(results: Sequence[KMeansResult], criterion: Criterion = "sse") -> int:
    """Index of the best run: minimum SSE or maximum silhouette.

    Ties go to the earliest run. Runs without a silhouette are skipped
    under the silhouette criterion.

    Raises:
        ComputationUndefinedError: No run has a silhouette.
    """
    if len(results) == 0:
        raise InvalidInputError("No results to select from")

    if criterion == "sse":
        return min(range(len(results)), key=lambda i: results[i].sse)

    if criterion == "silhouette":
        scored = [i for i, r in enumerate(results) if r.silhouette is not None]
        if not scored:
            raise ComputationUndefinedError("No run has a defined silhouette coefficient")
        return max(scored, key=lambda i: (results[i].silhouette, -i))

    raise InvalidInputError(f"Unknown criterion: {criterion!r}. Use one of {CRITERIA}.")


def repeat_kmeans(
    dataset: Dataset,
    k: int,
    n_runs: int = 9,
    rng: Optional[np.random.Generator] = None,
    seed: Optional[int] = None,
    criterion: Criterion = "sse",
    compute_silhouette: bool = False,
    max_iter: Optional[int] = None,
    verbose: bool = False,
) -> RestartSummary:
    """Run k-means several times and keep every result.

    Args:
        dataset: Points to cluster.
        k: Number of clusters.
        n_runs: Number of independent runs.
        rng: Random source shared by the runs' initializations.
        seed: Random seed, ignored when ``rng`` is given.
        criterion: "sse" (minimize) or "silhouette" (maximize).
        compute_silhouette: Score every run even under the SSE criterion.
        max_iter: Optional cap on rounds per run.
        verbose: Print one line per run.

    Returns:
        RestartSummary.
    """
    if n_runs <= 0:
        raise InvalidInputError(f"n_runs must be positive, got {n_runs}")
    if criterion not in CRITERIA:
        raise InvalidInputError(f"Unknown criterion: {criterion!r}. Use one of {CRITERIA}.")

    rng = rng if rng is not None else np.random.default_rng(seed)
    score_runs = compute_silhouette or criterion == "silhouette"

    results: List[KMeansResult] = []
    for run in range(n_runs):
        kmeans = KMeans(n_clusters=k, max_iter=max_iter, rng=rng)
        result = kmeans.fit(dataset)

        if score_runs:
            try:
                score = kmeans.silhouette()
            except ComputationUndefinedError:
                # Run collapsed to one cluster; leave it unscored
                score = None
            if score is not None:
                result = dataclasses.replace(result, silhouette=score.coefficient)

        results.append(result)

        if verbose:
            sil_str = ""
            if result.silhouette is not None:
                sil_str = f"  silhouette={result.silhouette:.4f}"
            print(
                f"Run {run + 1}/{n_runs}: "
                f"SSE={result.sse:.4f}  "
                f"k={result.k}  "
                f"iterations={result.n_iterations}"
                f"{sil_str}"
            )

    return RestartSummary(
        results=results,
        best_index=select_best(results, criterion),
        criterion=criterion,
    )
