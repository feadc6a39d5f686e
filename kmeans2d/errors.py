"""Typed errors raised by the k-means core."""


class KMeansError(Exception):
    """Base class for k-means errors."""


class InvalidInputError(KMeansError, ValueError):
    """Inputs for which no clustering can be computed.

    Raised for empty datasets, empty centroid sets, non-positive k,
    k larger than the dataset, and non-finite coordinates.
    """


class ComputationUndefinedError(KMeansError, ArithmeticError):
    """A metric is undefined for the given clustering.

    The silhouette coefficient needs at least two populated clusters.
    """
