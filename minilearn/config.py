"""Configuration dataclasses for minilearn."""

from dataclasses import dataclass, field, asdict
from typing import Literal, Optional, Dict, Any

from .errors import InvalidArgumentError


@dataclass
class KMeansConfig:
    """Configuration for k-means clustering.

    Attributes:
        n_clusters: Number of clusters (k).
        n_features: Dimensionality of every point.
        n_iterations: Number of assign/update rounds.
        init: Centroid initialization, "zero" or "random".
        init_range: Half-width of the uniform range for random init.
        seed: Random seed for random init (None seeds from entropy).
        tol: Optional early-stopping threshold on centroid shift.
    """
    n_clusters: int = 3
    n_features: int = 2
    n_iterations: int = 10
    init: Literal["zero", "random"] = "zero"
    init_range: float = 1.0
    seed: Optional[int] = None
    tol: Optional[float] = None

    def __post_init__(self):
        if self.init not in ("zero", "random"):
            raise InvalidArgumentError(f"Unknown init mode: {self.init}")

    def build_model(self):
        """Construct a KMeans model from this configuration."""
        from .clustering.kmeans import KMeans

        if self.init == "random":
            return KMeans.random(
                self.n_clusters, self.n_features, self.init_range, seed=self.seed
            )
        return KMeans.zeros(self.n_clusters, self.n_features)


@dataclass
class LinearRegressionConfig:
    """Configuration for linear regression training.

    Attributes:
        n_features: Number of independent variables.
        learning_rate: Per-sample gradient step size.
        n_iterations: Number of passes over the samples.
    """
    n_features: int = 4
    learning_rate: float = 0.01
    n_iterations: int = 1000

    def build_model(self):
        """Construct a LinearRegression model from this configuration."""
        from .regression.linear_regression import LinearRegression

        return LinearRegression(self.n_features)


@dataclass
class MiniLearnConfig:
    """Master configuration combining all sub-configurations."""
    kmeans: KMeansConfig = field(default_factory=KMeansConfig)
    regression: LinearRegressionConfig = field(default_factory=LinearRegressionConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to nested dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "MiniLearnConfig":
        """Create config from dictionary."""
        return cls(
            kmeans=KMeansConfig(**d.get("kmeans", {})),
            regression=LinearRegressionConfig(**d.get("regression", {})),
        )
