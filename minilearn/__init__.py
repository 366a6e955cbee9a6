"""minilearn: fixed-budget k-means clustering and SGD linear regression."""

from .clustering import KMeans, KMeansResult, destroy_kmeans, kmeans_fit
from .config import KMeansConfig, LinearRegressionConfig, MiniLearnConfig
from .errors import InvalidArgumentError, MiniLearnError, OutOfMemoryError
from .regression import LinearRegression, destroy_linear_regression

__version__ = "0.1.0"

__all__ = [
    "KMeans",
    "KMeansResult",
    "destroy_kmeans",
    "kmeans_fit",
    "KMeansConfig",
    "LinearRegressionConfig",
    "MiniLearnConfig",
    "InvalidArgumentError",
    "MiniLearnError",
    "OutOfMemoryError",
    "LinearRegression",
    "destroy_linear_regression",
]
