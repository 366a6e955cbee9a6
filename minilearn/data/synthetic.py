"""Synthetic data generation for clustering and regression demos.

Generates:
1. Gaussian blobs around well-separated centers, with ground truth labels
2. Noisy linear data from a known weight vector
"""

import numpy as np
from dataclasses import dataclass
from typing import Optional


@dataclass
class BlobDataset:
    """Clustered points with ground truth.

    Attributes:
        samples: Data points (n x d).
        labels: Index of the blob each point was drawn from (n,).
        centers: Blob centers (k x d).
    """
    samples: np.ndarray
    labels: np.ndarray
    centers: np.ndarray

    @property
    def n_samples(self) -> int:
        return len(self.samples)

    @property
    def n_features(self) -> int:
        return self.samples.shape[1]


@dataclass
class RegressionDataset:
    """Linear regression data with the generating weights.

    Attributes:
        samples: Independent variables (n x d).
        targets: Target values (n,).
        weights: True weight vector (d,).
    """
    samples: np.ndarray
    targets: np.ndarray
    weights: np.ndarray

    @property
    def n_samples(self) -> int:
        return len(self.samples)


class BlobGenerator:
    """Generator for isotropic Gaussian blobs."""

    def __init__(
        self,
        seed: int = 42,
        cluster_std: float = 0.5,
        center_box: float = 10.0,
    ):
        """Initialize generator.

        Args:
            seed: Random seed for reproducibility.
            cluster_std: Standard deviation of each blob.
            center_box: Centers are drawn uniformly from [-center_box, center_box].
        """
        self.rng = np.random.default_rng(seed)
        self.cluster_std = cluster_std
        self.center_box = center_box

    def generate(
        self,
        n_clusters: int = 3,
        n_features: int = 2,
        samples_per_cluster: int = 50,
        centers: Optional[np.ndarray] = None,
        shuffle: bool = True,
    ) -> BlobDataset:
        """Generate a blob dataset.

        Args:
            n_clusters: Number of blobs (ignored when centers are given).
            n_features: Dimensionality (ignored when centers are given).
            samples_per_cluster: Points drawn around each center.
            centers: Optional explicit blob centers (k x d).
            shuffle: Shuffle the points so blobs are interleaved.

        Returns:
            BlobDataset with ground truth labels.
        """
        if centers is None:
            centers = self.rng.uniform(
                -self.center_box, self.center_box, size=(n_clusters, n_features)
            )
        centers = np.asarray(centers, dtype=np.float64)

        samples = np.concatenate([
            self.rng.normal(center, self.cluster_std, size=(samples_per_cluster, len(center)))
            for center in centers
        ])
        labels = np.repeat(np.arange(len(centers)), samples_per_cluster)

        if shuffle:
            order = self.rng.permutation(len(samples))
            samples, labels = samples[order], labels[order]

        return BlobDataset(samples=samples, labels=labels, centers=centers)


def generate_blobs(
    n_clusters: int = 3,
    n_features: int = 2,
    samples_per_cluster: int = 50,
    cluster_std: float = 0.5,
    seed: int = 42,
) -> BlobDataset:
    """Convenience function to generate Gaussian blobs.

    Args:
        n_clusters: Number of blobs.
        n_features: Dimensionality of every point.
        samples_per_cluster: Points per blob.
        cluster_std: Standard deviation of each blob.
        seed: Random seed.

    Returns:
        BlobDataset with ground truth labels.
    """
    generator = BlobGenerator(seed=seed, cluster_std=cluster_std)
    return generator.generate(
        n_clusters=n_clusters,
        n_features=n_features,
        samples_per_cluster=samples_per_cluster,
    )


def generate_linear_data(
    n_samples: int = 100,
    n_features: int = 4,
    noise_std: float = 0.0,
    weights: Optional[np.ndarray] = None,
    seed: int = 42,
) -> RegressionDataset:
    """Generate samples with targets ``x . w + noise``.

    Args:
        n_samples: Number of samples.
        n_features: Number of independent variables (ignored when weights given).
        noise_std: Standard deviation of additive Gaussian noise.
        weights: Optional true weight vector; random in [-2, 2] otherwise.
        seed: Random seed.

    Returns:
        RegressionDataset including the generating weights.
    """
    rng = np.random.default_rng(seed)
    if weights is None:
        weights = rng.uniform(-2.0, 2.0, size=n_features)
    weights = np.asarray(weights, dtype=np.float64)

    samples = rng.uniform(-1.0, 1.0, size=(n_samples, len(weights)))
    targets = samples @ weights
    if noise_std > 0:
        targets = targets + rng.normal(0.0, noise_std, size=n_samples)

    return RegressionDataset(samples=samples, targets=targets, weights=weights)
