"""Clustering quality metrics.

Provides metrics for:
- Inertia - within-cluster sum of squared distances
- Overall distance (OD) - root-mean-square distance to assigned centroid
- Silhouette score - cluster separation quality
- Cluster sizes - samples per cluster, exposing empty clusters
"""

import numpy as np


def inertia(
    data: np.ndarray,
    centroids: np.ndarray,
    labels: np.ndarray,
) -> float:
    """Compute within-cluster sum of squared distances.

    Lower is better.

    Args:
        data: Data points (n x d).
        centroids: Cluster centroids (k x d).
        labels: Cluster assignments (n,).

    Returns:
        Sum of squared distances from each point to its centroid.
    """
    data = np.asarray(data, dtype=np.float64)
    centroids = np.asarray(centroids, dtype=np.float64)
    labels = np.asarray(labels)

    diff = data - centroids[labels]
    return float(np.sum(diff ** 2))


def overall_distance(
    data: np.ndarray,
    centroids: np.ndarray,
    labels: np.ndarray,
) -> float:
    """Compute overall distance (OD) metric.

    OD = sqrt(mean(||x_i - c_{y_i}||^2))

    Args:
        data: Data points (n x d).
        centroids: Cluster centroids (k x d).
        labels: Cluster assignments (n,).

    Returns:
        Overall distance.
    """
    data = np.asarray(data, dtype=np.float64)
    return float(np.sqrt(inertia(data, centroids, labels) / len(data)))


def silhouette_score(
    data: np.ndarray,
    labels: np.ndarray,
) -> float:
    """Compute silhouette score for clustering quality.

    Measures how similar points are to their own cluster vs other clusters.
    Range: [-1, 1], higher is better.

    Args:
        data: Data points (n x d).
        labels: Cluster assignments.

    Returns:
        Mean silhouette coefficient.
    """
    data = np.asarray(data, dtype=np.float64)
    labels = np.asarray(labels)
    n_samples = len(data)
    unique_labels = np.unique(labels)

    if len(unique_labels) <= 1 or len(unique_labels) >= n_samples:
        return 0.0

    # Pairwise distances (n x n)
    diff = data[:, np.newaxis, :] - data[np.newaxis, :, :]
    pairwise = np.linalg.norm(diff, axis=2)

    silhouette_values = np.zeros(n_samples)

    for i in range(n_samples):
        same = labels == labels[i]
        n_same = np.count_nonzero(same) - 1

        # a(i) = mean distance to the rest of its own cluster
        a_i = pairwise[i, same].sum() / n_same if n_same > 0 else 0.0

        # b(i) = min mean distance to another cluster
        b_i = min(
            pairwise[i, labels == other].mean()
            for other in unique_labels
            if other != labels[i]
        )

        denom = max(a_i, b_i)
        silhouette_values[i] = (b_i - a_i) / denom if denom > 0 and n_same > 0 else 0.0

    return float(np.mean(silhouette_values))


def cluster_sizes(labels: np.ndarray, n_clusters: int) -> np.ndarray:
    """Count the samples assigned to each of ``n_clusters`` clusters."""
    return np.bincount(np.asarray(labels, dtype=np.int64), minlength=n_clusters)
