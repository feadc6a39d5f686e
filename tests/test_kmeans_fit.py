"""Tests for the full k-means loop."""

import numpy as np
import pytest

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent))

from kmeans2d.clustering.lloyd import (
    KMeans,
    pick_centroids,
    run_kmeans,
    run_kmeans_with_silhouette,
)
from kmeans2d.data.points import Dataset, Point
from kmeans2d.data.synthetic import generate_dataset
from kmeans2d.errors import ComputationUndefinedError, InvalidInputError


class TestPickCentroids:
    """Tests for random initialization."""

    def test_picks_dataset_points(self, two_blobs):
        rng = np.random.default_rng(0)
        centroids = pick_centroids(two_blobs, 5, rng)
        assert len(centroids) == 5
        assert all(c in two_blobs.points for c in centroids)

    def test_reproducible(self, two_blobs):
        a = pick_centroids(two_blobs, 3, np.random.default_rng(1))
        b = pick_centroids(two_blobs, 3, np.random.default_rng(1))
        assert a == b

    @pytest.mark.parametrize("k", [0, -1, 9])
    def test_invalid_k(self, two_blobs, k):
        with pytest.raises(InvalidInputError):
            pick_centroids(two_blobs, k, np.random.default_rng(0))

    def test_empty_dataset(self):
        with pytest.raises(InvalidInputError):
            pick_centroids(Dataset(points=()), 1, np.random.default_rng(0))


class TestKMeansFit:
    """Tests for full k-means fitting."""

    def test_two_blobs(self, two_blobs, blob_seeds):
        """Separated blobs converge to their centres"""
        result = run_kmeans(two_blobs, k=2, initial_centroids=blob_seeds)

        assert result.converged
        assert result.n_iterations == 2
        assert result.k == 2
        assert set(result.centroids) == {Point(2.0, 2.0), Point(18.0, 18.0)}
        # Every point is 0.5 from its centre
        assert result.sse == pytest.approx(8 * 0.25)

    def test_two_blobs_silhouette(self, two_blobs, blob_seeds):
        result, score = run_kmeans_with_silhouette(two_blobs, k=2, initial_centroids=blob_seeds)

        assert score.k == 2
        assert score.coefficient > 0.9
        assert result.silhouette == score.coefficient

    def test_labels_match_centroids(self, two_blobs, blob_seeds):
        result = run_kmeans(two_blobs, k=2, initial_centroids=blob_seeds)
        points = two_blobs.to_array()
        for i, label in enumerate(result.labels):
            centroid = result.centroids[label]
            assert np.linalg.norm(points[i] - centroid.to_array()) == pytest.approx(0.5)

    def test_k_equals_dataset_size(self):
        """Each point becomes its own cluster and SSE is exactly 0"""
        ds = Dataset(points=(
            Point(0.0, 0.0), Point(3.0, 1.0), Point(-2.0, 4.0), Point(7.5, 7.5), Point(1.0, -6.0),
        ))
        result = run_kmeans(ds, k=len(ds), initial_centroids=ds.points)

        assert result.converged
        assert result.k == len(ds)
        assert result.sse == 0.0

    def test_empty_cluster_shrinks_k(self):
        """Duplicate seeds leave one cluster empty, which is dropped"""
        ds = Dataset(points=(Point(0.0, 0.0), Point(1.0, 0.0), Point(10.0, 0.0)))
        result = run_kmeans(ds, k=2, initial_centroids=(Point(0.0, 0.0), Point(0.0, 0.0)))

        assert result.converged
        assert result.k == 1
        assert len(result.centroids) == 1
        assert result.centroids[0].x == pytest.approx(11.0 / 3.0)
        assert result.sse == pytest.approx(546.0 / 9.0)

    def test_single_cluster_silhouette_undefined(self):
        ds = Dataset(points=(Point(0.0, 0.0), Point(1.0, 0.0)))
        with pytest.raises(ComputationUndefinedError):
            run_kmeans_with_silhouette(ds, k=1)

    def test_deterministic_given_seed(self):
        ds = generate_dataset(cluster_count=4, sample_count=60, seed=3)
        a = run_kmeans(ds, k=4, seed=11)
        b = run_kmeans(ds, k=4, seed=11)

        assert a.sse == b.sse
        assert a.centroids == b.centroids
        np.testing.assert_array_equal(a.labels, b.labels)

    def test_unseeded_runs_start_differently(self):
        """Without a seed every run draws its own initial centroids"""
        ds = generate_dataset(cluster_count=4, sample_count=100, seed=1)
        starts = {pick_centroids(ds, 4, KMeans(n_clusters=4).rng) for _ in range(5)}
        assert len(starts) > 1

    def test_unseeded_run_kmeans_is_valid(self):
        ds = generate_dataset(cluster_count=4, sample_count=100, seed=1)
        results = [run_kmeans(ds, k=4) for _ in range(3)]
        assert all(r.converged and r.sse >= 0 for r in results)

    def test_sse_non_negative(self):
        ds = generate_dataset(cluster_count=3, sample_count=45, seed=5)
        for seed in range(5):
            result = run_kmeans(ds, k=3, seed=seed)
            assert result.sse >= 0
            assert 1 <= result.k <= 3

    def test_labels_cover_dataset(self):
        ds = generate_dataset(cluster_count=3, sample_count=30, seed=8)
        result = run_kmeans(ds, k=3, seed=2)
        assert len(result.labels) == len(ds)
        assert (result.labels >= 0).all()
        assert set(result.labels.tolist()) == set(range(result.k))

    def test_max_iter_cap(self, two_blobs, blob_seeds):
        """Stopping at the cap reports converged=False"""
        result = run_kmeans(two_blobs, k=2, initial_centroids=blob_seeds, max_iter=1)
        assert not result.converged
        assert result.n_iterations == 1
        assert result.sse == pytest.approx(2.0)

    def test_invalid_max_iter(self):
        with pytest.raises(InvalidInputError):
            KMeans(n_clusters=2, max_iter=0)

    def test_k_larger_than_dataset(self, two_blobs):
        with pytest.raises(InvalidInputError):
            run_kmeans(two_blobs, k=9)

    def test_initial_centroids_larger_than_dataset(self):
        ds = Dataset(points=(Point(0.0, 0.0),))
        with pytest.raises(InvalidInputError):
            run_kmeans(ds, k=2, initial_centroids=(Point(0.0, 0.0), Point(1.0, 1.0)))

    @pytest.mark.parametrize("k", [1, 3])
    def test_initial_centroids_must_match_k(self, two_blobs, blob_seeds, k):
        """Two seeds cannot start a run with a different k"""
        with pytest.raises(InvalidInputError):
            run_kmeans(two_blobs, k=k, initial_centroids=blob_seeds)

    def test_verbose_prints(self, two_blobs, blob_seeds, capsys):
        run_kmeans(two_blobs, k=2, initial_centroids=blob_seeds, verbose=True)
        out = capsys.readouterr().out
        assert "Iteration 1" in out
        assert "Iteration 2" in out


class TestPredict:
    """Tests for predicting labels of new points."""

    def test_predict(self, two_blobs, blob_seeds):
        kmeans = KMeans(n_clusters=2)
        result = kmeans.fit(two_blobs, initial_centroids=blob_seeds)

        new = Dataset(points=(Point(0.0, 0.0), Point(20.0, 20.0)))
        labels = kmeans.predict(new)

        assert result.centroids[labels[0]] == Point(2.0, 2.0)
        assert result.centroids[labels[1]] == Point(18.0, 18.0)

    def test_predict_before_fit(self, two_blobs):
        with pytest.raises(ValueError):
            KMeans(n_clusters=2).predict(two_blobs)


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
