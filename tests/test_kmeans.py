"""Tests for the fixed-budget k-means model.

Covers zero and random construction, fitting, prediction, tie-breaking,
empty-cluster stability, out-of-memory handling and model release.
"""

import numpy as np
import pytest

import minilearn.clustering.kmeans as kmeans_module
from minilearn.clustering.kmeans import KMeans, KMeansResult, destroy_kmeans, kmeans_fit
from minilearn.errors import InvalidArgumentError, OutOfMemoryError


NUM_CLUSTERS = 3
NUM_VARIABLES = 2
EPSILON = 1e-6

SAMPLES = np.array([
    [1.0, 2.0],
    [1.5, 1.8],
    [5.0, 8.0],
    [8.0, 8.0],
    [1.0, 0.6],
    [9.0, 11.0],
])


@pytest.fixture
def model():
    km = KMeans.zeros(NUM_CLUSTERS, NUM_VARIABLES)
    yield km
    destroy_kmeans(km)


class TestConstruction:
    """Zero and random centroid initialization."""

    def test_zero_init_centroids(self, model):
        """Every centroid coordinate should be exactly 0.0"""
        assert model.centroids.shape == (NUM_CLUSTERS, NUM_VARIABLES)
        assert np.all(model.centroids == 0.0)

    @pytest.mark.parametrize("k,d", [(1, 1), (4, 3), (10, 7)])
    def test_zero_init_any_shape(self, k, d):
        km = KMeans(k, d)
        assert km.n_clusters == k
        assert km.n_features == d
        assert np.all(km.centroids == 0.0)

    @pytest.mark.parametrize("init_range", [0.5, 1.0, 25.0])
    def test_random_init_within_range(self, init_range):
        """Random centroids should lie in [-range, range]"""
        km = KMeans.random(5, 4, init_range, seed=0)
        centroids = km.centroids
        assert centroids.shape == (5, 4)
        assert np.all(centroids >= -init_range)
        assert np.all(centroids <= init_range)

    def test_random_init_is_reproducible_with_seed(self):
        a = KMeans.random(3, 2, 1.0, seed=123).centroids
        b = KMeans.random(3, 2, 1.0, seed=123).centroids
        np.testing.assert_array_equal(a, b)

    def test_random_init_accepts_generator(self):
        rng = np.random.default_rng(5)
        expected = 2.0 * np.random.default_rng(5).uniform(-1.0, 1.0, size=(3, 2))
        km = KMeans.random(3, 2, 2.0, rng=rng)
        np.testing.assert_array_equal(km.centroids, expected)

    def test_from_centroids_copies_input(self):
        initial = np.array([[0.0, 0.0], [1.0, 1.0]])
        km = KMeans.from_centroids(initial)
        initial[0, 0] = 99.0
        assert km.centroids[0, 0] == 0.0
        assert km.n_clusters == 2

    @pytest.mark.parametrize("k,d", [(0, 2), (-1, 2), (3, 0), (3, -4)])
    def test_invalid_shape_rejected(self, k, d):
        with pytest.raises(InvalidArgumentError):
            KMeans(k, d)

    @pytest.mark.parametrize("init_range", [0.0, -1.0])
    def test_invalid_init_range_rejected(self, init_range):
        with pytest.raises(InvalidArgumentError):
            KMeans.random(3, 2, init_range)

    @pytest.mark.parametrize("init_range", [float("inf"), float("nan")])
    def test_non_finite_init_range_rejected(self, init_range):
        with pytest.raises(InvalidArgumentError):
            KMeans.random(3, 2, init_range)

    def test_huge_finite_init_range(self):
        """The largest finite ranges still give finite centroids"""
        centroids = KMeans.random(2, 2, 1e308, seed=0).centroids
        assert np.all(np.isfinite(centroids))
        assert np.all(np.abs(centroids) <= 1e308)

    def test_invalid_argument_is_value_error(self):
        with pytest.raises(ValueError):
            KMeans(0, 2)

    def test_allocation_failure_raises_out_of_memory(self, monkeypatch):
        def fail(*args, **kwargs):
            raise MemoryError

        monkeypatch.setattr(kmeans_module.np, "zeros", fail)
        with pytest.raises(OutOfMemoryError):
            KMeans(3, 2)

    def test_random_allocation_failure_raises_out_of_memory(self):
        class ExhaustedGenerator:
            def uniform(self, *args, **kwargs):
                raise MemoryError

        with pytest.raises(OutOfMemoryError):
            KMeans.random(3, 2, 1.0, rng=ExhaustedGenerator())

    @pytest.mark.parametrize("init_range", [None, 1.0])
    def test_oversized_model_raises_out_of_memory(self, init_range):
        with pytest.raises(OutOfMemoryError):
            KMeans(2 ** 40, 2 ** 40, init_range=init_range)


class TestFit:
    """Assign/update iterations over a sample set."""

    def test_centroids_move(self, model):
        """At least one centroid should leave the origin"""
        model.fit(SAMPLES, 10)
        moved = np.any(np.abs(model.centroids) > EPSILON, axis=1)
        assert moved.any()

    def test_zero_init_scenario(self, model):
        """All samples tie onto cluster 0 first; cluster 2 never gets a sample"""
        result = model.fit(SAMPLES, 10)

        expected = np.array([
            [22.0 / 3.0, 9.0],
            [3.5 / 3.0, 4.4 / 3.0],
            [0.0, 0.0],
        ])
        np.testing.assert_allclose(model.centroids, expected, atol=1e-9)
        np.testing.assert_array_equal(result.labels, [1, 1, 0, 0, 1, 0])
        assert result.empty_clusters == [2]
        assert result.n_iterations == 10
        assert not result.converged

    def test_distinct_start_moves_every_centroid(self):
        km = KMeans.from_centroids([[0.0, 0.0], [5.0, 5.0], [10.0, 10.0]])
        initial = km.centroids
        result = km.fit(SAMPLES, 10)

        for k in range(3):
            assert np.any(np.abs(km.centroids[k] - initial[k]) > EPSILON)
        np.testing.assert_allclose(km.centroids[1], [5.0, 8.0])
        np.testing.assert_allclose(km.centroids[2], [8.5, 9.5])
        np.testing.assert_array_equal(result.labels, [0, 0, 1, 2, 0, 2])

    def test_single_iteration_mean(self, model):
        """One round from zero-init puts centroid 0 at the sample mean"""
        model.fit(SAMPLES, 1)
        np.testing.assert_allclose(model.centroids[0], SAMPLES.mean(axis=0))
        np.testing.assert_array_equal(model.centroids[1:], np.zeros((2, 2)))

    def test_zero_iterations_leaves_centroids(self):
        km = KMeans.random(3, 2, 1.0, seed=1)
        before = km.centroids
        result = km.fit(SAMPLES, 0)
        np.testing.assert_array_equal(km.centroids, before)
        assert result.n_iterations == 0
        assert len(result.labels) == len(SAMPLES)

    def test_fit_is_deterministic(self):
        a = KMeans.random(3, 2, 5.0, seed=9)
        b = KMeans.random(3, 2, 5.0, seed=9)
        a.fit(SAMPLES, 10)
        b.fit(SAMPLES, 10)
        np.testing.assert_array_equal(a.centroids, b.centroids)

    def test_fit_does_not_mutate_samples(self, model):
        samples = SAMPLES.copy()
        model.fit(samples, 5)
        np.testing.assert_array_equal(samples, SAMPLES)

    def test_accepts_nested_lists(self, model):
        model.fit(SAMPLES.tolist(), 3)
        assert np.abs(model.centroids).max() > 0

    def test_tolerance_stops_early(self, model):
        result = model.fit(SAMPLES, 100, tol=0.0)
        assert result.converged
        assert result.n_iterations < 100

    def test_objective_matches_inertia(self, model):
        result = model.fit(SAMPLES, 10)
        diff = SAMPLES - result.centroids[result.labels]
        assert result.objective == pytest.approx(float(np.sum(diff ** 2)))

    @pytest.mark.parametrize("n_iterations", [0, 1, 3])
    def test_labels_match_final_centroids(self, model, n_iterations):
        """Labels and objective describe the partition under the final centroids"""
        result = model.fit(SAMPLES, n_iterations)
        np.testing.assert_array_equal(result.labels, model.predict_batch(SAMPLES))
        diff = SAMPLES - model.centroids[result.labels]
        assert result.objective == pytest.approx(float(np.sum(diff ** 2)))

    def test_result_centroids_are_a_copy(self, model):
        result = model.fit(SAMPLES, 2)
        result.centroids[:] = 42.0
        assert not np.any(model.centroids == 42.0)

    @pytest.mark.parametrize("bad", [
        np.empty((0, 2)),
        np.ones(6),
        np.ones((4, 3)),
    ])
    def test_malformed_samples_rejected(self, model, bad):
        with pytest.raises(InvalidArgumentError):
            model.fit(bad, 1)

    def test_negative_iterations_rejected(self, model):
        with pytest.raises(InvalidArgumentError):
            model.fit(SAMPLES, -1)

    def test_negative_tolerance_rejected(self, model):
        with pytest.raises(InvalidArgumentError):
            model.fit(SAMPLES, 5, tol=-1e-3)
        assert np.all(model.centroids == 0.0)

    def test_out_of_memory_keeps_last_good_state(self, model, monkeypatch):
        """A failed iteration should leave the previous centroids in place"""
        real_update = kmeans_module.update_centroids
        calls = {"n": 0}

        def flaky_update(samples, labels, centroids):
            calls["n"] += 1
            if calls["n"] == 2:
                raise MemoryError
            return real_update(samples, labels, centroids)

        monkeypatch.setattr(kmeans_module, "update_centroids", flaky_update)

        with pytest.raises(OutOfMemoryError):
            model.fit(SAMPLES, 10)

        np.testing.assert_allclose(model.centroids[0], SAMPLES.mean(axis=0))
        assert model.predict([0.0, 0.0]) in range(NUM_CLUSTERS)


class TestPredict:
    """Nearest-centroid queries."""

    def test_predict_in_range(self, model):
        model.fit(SAMPLES, 10)
        cluster = model.predict([0.0, 0.0])
        assert 0 <= cluster < NUM_CLUSTERS

    def test_predict_origin_after_scenario(self, model):
        model.fit(SAMPLES, 10)
        assert model.predict(np.array([0.0, 0.0])) == 2

    def test_predict_is_idempotent(self, model):
        model.fit(SAMPLES, 10)
        point = np.array([3.0, 4.0])
        assert model.predict(point) == model.predict(point)

    def test_predict_does_not_mutate(self, model):
        model.fit(SAMPLES, 10)
        before = model.centroids
        model.predict([7.0, 7.0])
        np.testing.assert_array_equal(model.centroids, before)

    def test_tie_prefers_lower_index(self):
        km = KMeans.from_centroids([[5.0, 5.0], [1.0, 0.0], [-1.0, 0.0]])
        assert km.predict([0.0, 0.0]) == 1

    def test_all_centroids_equal_returns_zero(self, model):
        assert model.predict([3.0, -2.0]) == 0

    def test_predict_batch_matches_predict(self, model):
        model.fit(SAMPLES, 10)
        labels = model.predict_batch(SAMPLES)
        assert labels.tolist() == [model.predict(x) for x in SAMPLES]

    def test_random_model_predict_in_range(self):
        rng = np.random.default_rng(3)
        km = KMeans.random(4, 3, 2.0, rng=rng)
        for point in rng.normal(size=(20, 3)):
            assert 0 <= km.predict(point) < 4


class TestRelease:
    """Model release and closed-model behaviour."""

    def test_destroy_none_is_noop(self):
        destroy_kmeans(None)

    def test_close_releases_centroids(self, model):
        model.close()
        assert model.closed
        with pytest.raises(InvalidArgumentError):
            model.predict([0.0, 0.0])
        with pytest.raises(InvalidArgumentError):
            model.fit(SAMPLES, 1)

    def test_context_manager_closes(self):
        with KMeans(2, 2) as km:
            assert not km.closed
        assert km.closed


class TestConvenience:
    """kmeans_fit convenience function."""

    def test_kmeans_fit(self):
        centroids, labels, objective = kmeans_fit(SAMPLES, k=3, n_iterations=10)
        assert centroids.shape == (3, 2)
        assert len(labels) == len(SAMPLES)
        assert objective >= 0

    def test_result_type(self, model):
        assert isinstance(model.fit(SAMPLES, 1), KMeansResult)
