"""K-means clustering with a fixed iteration budget.

Lloyd's algorithm over fixed-dimension real-valued points. The model owns
a single ``k x d`` centroid matrix; ``fit`` alternates nearest-centroid
assignment and mean update for exactly ``n_iterations`` rounds.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np

from ..errors import InvalidArgumentError, OutOfMemoryError
from .metrics import inertia


logger = logging.getLogger(__name__)

# Largest float64 element count numpy can address in one array
MAX_FLOAT64_ELEMENTS = np.iinfo(np.intp).max // np.dtype(np.float64).itemsize


@dataclass
class KMeansResult:
    """Summary of a k-means fit.

    Attributes:
        centroids: Centroids after the last update (k x d).
        labels: Nearest-centroid assignment against the final centroids (n,).
        objective: Inertia of the final partition (``labels`` against ``centroids``).
        n_iterations: Number of iterations actually performed.
        converged: Whether the optional tolerance stopped the run early.
        empty_clusters: Clusters that received no samples in the last update.
    """
    centroids: np.ndarray
    labels: np.ndarray
    objective: float
    n_iterations: int
    converged: bool = False
    empty_clusters: List[int] = field(default_factory=list)


def euclidean_distance(a: np.ndarray, b: np.ndarray) -> float:
    """Compute Euclidean distance between two vectors."""
    return float(np.linalg.norm(np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)))


def distance_matrix(samples: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Compute distances from all samples to all centroids.

    Args:
        samples: Data points (n x d).
        centroids: Centroids (k x d).

    Returns:
        Distance matrix (n x k).
    """
    # (n, 1, d) - (1, k, d) -> (n, k, d) -> (n, k)
    diff = samples[:, np.newaxis, :] - centroids[np.newaxis, :, :]
    return np.linalg.norm(diff, axis=2)


def assign_labels(samples: np.ndarray, centroids: np.ndarray) -> np.ndarray:
    """Assign each sample to its nearest centroid.

    ``np.argmin`` returns the first index achieving the minimum, so
    equidistant centroids resolve to the lowest index.

    Args:
        samples: Data points (n x d).
        centroids: Centroids (k x d).

    Returns:
        Cluster assignments (n,).
    """
    return np.argmin(distance_matrix(samples, centroids), axis=1)


def update_centroids(
    samples: np.ndarray,
    labels: np.ndarray,
    centroids: np.ndarray,
) -> Tuple[np.ndarray, np.ndarray]:
    """Recompute centroids as the mean of their assigned samples.

    A cluster with no assigned samples keeps its current centroid.

    Args:
        samples: Data points (n x d).
        labels: Cluster assignments (n,).
        centroids: Current centroids (k x d); not modified.

    Returns:
        Tuple of (new centroids, per-cluster sample counts).
    """
    n_clusters = len(centroids)
    new_centroids = centroids.copy()
    counts = np.zeros(n_clusters, dtype=np.int64)

    for k in range(n_clusters):
        mask = labels == k
        count = int(np.count_nonzero(mask))
        counts[k] = count
        if count > 0:
            new_centroids[k] = samples[mask].sum(axis=0) / count

    return new_centroids, counts


class KMeans:
    """K-means clustering model using Euclidean distance.

    Centroids start at zero, uniformly random in ``[-init_range, init_range]``,
    or at a caller-supplied matrix (see ``zeros``, ``random`` and
    ``from_centroids``).
    """

    def __init__(
        self,
        n_clusters: int,
        n_features: int,
        init_range: Optional[float] = None,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ):
        """Create a model with zero or random initial centroids.

        Args:
            n_clusters: Number of clusters (k), must be positive.
            n_features: Dimensionality of every point, must be positive.
            init_range: If given, draw centroids from [-init_range, init_range];
                otherwise start every centroid at the origin.
            seed: Seed for random initialization when ``rng`` is not given.
            rng: Random generator for random initialization.

        Raises:
            InvalidArgumentError: For non-positive k or d, or an init_range
                that is not a positive finite number.
            OutOfMemoryError: If the centroid matrix cannot be allocated.
        """
        if n_clusters <= 0:
            logger.error("Invalid number of clusters: %s", n_clusters)
            raise InvalidArgumentError(f"n_clusters must be positive, got {n_clusters}")
        if n_features <= 0:
            logger.error("Invalid number of features: %s", n_features)
            raise InvalidArgumentError(f"n_features must be positive, got {n_features}")
        if init_range is not None and not (init_range > 0 and np.isfinite(init_range)):
            logger.error("Invalid initial centroid range: %s", init_range)
            raise InvalidArgumentError(
                f"init_range must be positive and finite, got {init_range}"
            )
        if n_clusters * n_features > MAX_FLOAT64_ELEMENTS:
            logger.error(
                "KMeans model of %d x %d centroids exceeds addressable memory",
                n_clusters, n_features,
            )
            raise OutOfMemoryError(
                f"Cannot allocate {n_clusters} x {n_features} centroid matrix"
            )

        try:
            if init_range is None:
                centroids = np.zeros((n_clusters, n_features), dtype=np.float64)
            else:
                if rng is None:
                    rng = np.random.default_rng(seed)
                # high - low must stay finite, so scale a unit draw
                centroids = init_range * rng.uniform(-1.0, 1.0, size=(n_clusters, n_features))
        except MemoryError as exc:
            logger.error("Failed to allocate sufficient memory for KMeans model")
            raise OutOfMemoryError("Failed to allocate KMeans centroids") from exc

        self._n_clusters = int(n_clusters)
        self._n_features = int(n_features)
        self._centroids: Optional[np.ndarray] = centroids

    @classmethod
    def zeros(cls, n_clusters: int, n_features: int) -> "KMeans":
        """Create a model with every centroid at the origin."""
        return cls(n_clusters, n_features)

    @classmethod
    def random(
        cls,
        n_clusters: int,
        n_features: int,
        init_range: float,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
    ) -> "KMeans":
        """Create a model with uniformly random centroids."""
        return cls(n_clusters, n_features, init_range=init_range, seed=seed, rng=rng)

    @classmethod
    def from_centroids(cls, centroids: np.ndarray) -> "KMeans":
        """Create a model starting from a copy of the given centroids (k x d)."""
        centroids = np.array(centroids, dtype=np.float64)
        if centroids.ndim != 2:
            logger.error("Initial centroids must be 2-D, got shape %s", centroids.shape)
            raise InvalidArgumentError(f"centroids must be 2-D, got shape {centroids.shape}")
        model = cls(centroids.shape[0], centroids.shape[1])
        model._centroids = centroids
        return model

    @property
    def n_clusters(self) -> int:
        return self._n_clusters

    @property
    def n_features(self) -> int:
        return self._n_features

    @property
    def closed(self) -> bool:
        return self._centroids is None

    @property
    def centroids(self) -> np.ndarray:
        """Copy of the current centroids (k x d)."""
        return self._require_open().copy()

    def _require_open(self) -> np.ndarray:
        if self._centroids is None:
            raise InvalidArgumentError("KMeans model has been closed")
        return self._centroids

    def _check_samples(self, samples) -> np.ndarray:
        samples = np.asarray(samples, dtype=np.float64)
        if samples.ndim != 2 or samples.shape[0] == 0:
            logger.error("Expected a non-empty 2-D sample set, got shape %s", samples.shape)
            raise InvalidArgumentError(
                f"samples must be a non-empty 2-D array, got shape {samples.shape}"
            )
        if samples.shape[1] != self._n_features:
            logger.error(
                "Sample dimension %d != model dimension %d",
                samples.shape[1], self._n_features,
            )
            raise InvalidArgumentError(
                f"Sample dimension {samples.shape[1]} != n_features {self._n_features}"
            )
        return samples

    def fit(
        self,
        samples: np.ndarray,
        n_iterations: int,
        tol: Optional[float] = None,
    ) -> KMeansResult:
        """Fit the centroids to a sample set.

        Runs exactly ``n_iterations`` rounds of assign/update unless ``tol``
        is given, in which case the run stops once the largest centroid
        shift of a round is at most ``tol``.

        Args:
            samples: Data points (n x d), read only.
            n_iterations: Number of assign/update rounds.
            tol: Optional early-stopping threshold on centroid shift.

        Returns:
            KMeansResult summarizing the final state.

        Raises:
            InvalidArgumentError: For malformed samples or parameters.
            OutOfMemoryError: If transient storage cannot be allocated. The
                model keeps the centroids of the last completed iteration.
        """
        centroids = self._require_open()
        samples = self._check_samples(samples)
        if n_iterations < 0:
            logger.error("Invalid number of iterations: %s", n_iterations)
            raise InvalidArgumentError(f"n_iterations must be >= 0, got {n_iterations}")
        if tol is not None and tol < 0:
            logger.error("Invalid convergence tolerance: %s", tol)
            raise InvalidArgumentError(f"tol must be >= 0, got {tol}")

        labels: Optional[np.ndarray] = None
        counts: Optional[np.ndarray] = None
        converged = False
        completed = 0

        try:
            for iteration in range(n_iterations):
                labels = assign_labels(samples, centroids)
                new_centroids, counts = update_centroids(samples, labels, centroids)
                shift = float(np.max(np.linalg.norm(new_centroids - centroids, axis=1)))

                centroids = new_centroids
                self._centroids = centroids
                completed = iteration + 1

                logger.debug(
                    "Iteration %d: max centroid shift %.6g, empty clusters %d",
                    completed, shift, int(np.count_nonzero(counts == 0)),
                )

                if tol is not None and shift <= tol:
                    converged = True
                    break

            labels = assign_labels(samples, centroids)
            objective = inertia(samples, centroids, labels)
        except MemoryError as exc:
            logger.error(
                "Out of memory during KMeans fit after %d of %d iterations",
                completed, n_iterations,
            )
            raise OutOfMemoryError(
                f"KMeans fit aborted after {completed} iterations"
            ) from exc

        empty = [] if counts is None else [int(k) for k in np.flatnonzero(counts == 0)]
        logger.info(
            "KMeans fit finished: %d iterations, objective %.6g, converged=%s",
            completed, objective, converged,
        )

        return KMeansResult(
            centroids=centroids.copy(),
            labels=labels,
            objective=objective,
            n_iterations=completed,
            converged=converged,
            empty_clusters=empty,
        )

    def predict(self, point: np.ndarray) -> int:
        """Predict the cluster of a single point.

        Args:
            point: Vector of length ``n_features``.

        Returns:
            Index of the nearest centroid; ties go to the lowest index.
        """
        centroids = self._require_open()
        point = np.asarray(point, dtype=np.float64).reshape(1, -1)
        return int(np.argmin(distance_matrix(point, centroids)[0]))

    def predict_batch(self, samples: np.ndarray) -> np.ndarray:
        """Predict cluster assignments for many points (n x d)."""
        centroids = self._require_open()
        return assign_labels(self._check_samples(samples), centroids)

    def close(self) -> None:
        """Release the centroid storage. Closing twice is a no-op."""
        self._centroids = None

    def __enter__(self) -> "KMeans":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"KMeans(n_clusters={self._n_clusters}, n_features={self._n_features}, {state})"


def destroy_kmeans(model: Optional[KMeans]) -> None:
    """Release a model's storage; ``None`` is accepted and ignored."""
    if model is not None:
        model.close()


def kmeans_fit(
    data: np.ndarray,
    k: int,
    n_iterations: int = 10,
    init_range: Optional[float] = None,
    seed: Optional[int] = None,
) -> Tuple[np.ndarray, np.ndarray, float]:
    """Convenience function for k-means clustering.

    Args:
        data: Data points (n x d).
        k: Number of clusters.
        n_iterations: Number of assign/update rounds.
        init_range: Random-init range; zero-init when None.
        seed: Random seed for random-init.

    Returns:
        Tuple of (centroids, labels, objective).
    """
    data = np.asarray(data, dtype=np.float64)
    if data.ndim != 2:
        raise InvalidArgumentError(f"data must be 2-D, got shape {data.shape}")
    with KMeans(k, data.shape[1], init_range=init_range, seed=seed) as model:
        result = model.fit(data, n_iterations)
    return result.centroids, result.labels, result.objective
