"""Clustering module for fixed-budget k-means."""

from .kmeans import (
    KMeans,
    KMeansResult,
    assign_labels,
    destroy_kmeans,
    distance_matrix,
    euclidean_distance,
    kmeans_fit,
    update_centroids,
)
from .metrics import (
    cluster_sizes,
    inertia,
    overall_distance,
    silhouette_score,
)

__all__ = [
    "KMeans",
    "KMeansResult",
    "assign_labels",
    "destroy_kmeans",
    "distance_matrix",
    "euclidean_distance",
    "kmeans_fit",
    "update_centroids",
    "cluster_sizes",
    "inertia",
    "overall_distance",
    "silhouette_score",
]
