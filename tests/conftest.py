"""Shared fixtures for the k-means tests."""

import pytest

from kmeans2d.data.points import Dataset, Point


@pytest.fixture
def two_blobs():
    """Eight points in two blobs around (2, 2) and (18, 18)."""
    return Dataset(points=(
        Point(1.5, 2.0), Point(2.5, 2.0), Point(2.0, 1.5), Point(2.0, 2.5),
        Point(17.5, 18.0), Point(18.5, 18.0), Point(18.0, 17.5), Point(18.0, 18.5),
    ))


@pytest.fixture
def blob_seeds(two_blobs):
    """One initial centroid from each blob."""
    return (two_blobs[0], two_blobs[4])
