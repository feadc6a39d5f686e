"""Tests for the order-independent convergence check."""

import numpy as np

from kmeans2d.clustering.lloyd import canonical_order, has_converged
from kmeans2d.data.points import Point


class TestCanonicalOrder:

    def test_sorts_by_x_then_y(self):
        centroids = (Point(2.0, 0.0), Point(1.0, 5.0), Point(1.0, -1.0))
        assert canonical_order(centroids) == (
            Point(1.0, -1.0), Point(1.0, 5.0), Point(2.0, 0.0),
        )

    def test_does_not_mutate_input(self):
        centroids = [Point(2.0, 0.0), Point(1.0, 0.0)]
        canonical_order(centroids)
        assert centroids == [Point(2.0, 0.0), Point(1.0, 0.0)]


class TestHasConverged:
    """Tests for has_converged."""

    def test_order_independent(self):
        a = (Point(1.0, 1.0), Point(5.0, 5.0))
        b = (Point(5.0, 5.0), Point(1.0, 1.0))
        assert has_converged(a, b)

    def test_identical(self):
        a = (Point(1.0, 2.0), Point(3.0, 4.0))
        assert has_converged(a, a)

    def test_exact_equality(self):
        """No tolerance on coordinates"""
        a = (Point(1.0, 1.0),)
        b = (Point(1.0, 1.0 + 1e-12),)
        assert not has_converged(a, b)

    def test_length_mismatch(self):
        """A vanished cluster is never convergence"""
        a = (Point(1.0, 1.0), Point(1.0, 1.0))
        b = (Point(1.0, 1.0),)
        assert not has_converged(a, b)
        assert not has_converged(b, a)

    def test_duplicates_count(self):
        a = (Point(1.0, 1.0), Point(1.0, 1.0), Point(2.0, 2.0))
        b = (Point(1.0, 1.0), Point(2.0, 2.0), Point(2.0, 2.0))
        assert not has_converged(a, b)

    def test_symmetric(self):
        """has_converged(A, B) == has_converged(B, A)"""
        rng = np.random.default_rng(7)
        for _ in range(20):
            a = tuple(Point(float(x), float(y)) for x, y in rng.integers(0, 3, size=(3, 2)))
            b = tuple(Point(float(x), float(y)) for x, y in rng.integers(0, 3, size=(3, 2)))
            assert has_converged(a, b) == has_converged(b, a)
            assert has_converged(a, tuple(reversed(a)))
