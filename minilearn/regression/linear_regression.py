"""Linear regression trained by per-sample gradient descent.

No intercept term: predictions are the dot product of the weight vector
and the input. Weights start at zero.
"""

import logging
from typing import List, Optional

import numpy as np

from ..errors import InvalidArgumentError, OutOfMemoryError


logger = logging.getLogger(__name__)

MAX_FLOAT64_ELEMENTS = np.iinfo(np.intp).max // np.dtype(np.float64).itemsize


class LinearRegression:
    """Linear model ``y = w . x`` fitted with stochastic gradient descent."""

    def __init__(self, n_features: int):
        """Create a model with zeroed weights.

        Args:
            n_features: Number of independent variables, must be positive.

        Raises:
            InvalidArgumentError: If n_features is not positive.
            OutOfMemoryError: If the weight vector cannot be allocated.
        """
        if n_features <= 0:
            logger.error("Invalid number of features: %s", n_features)
            raise InvalidArgumentError(f"n_features must be positive, got {n_features}")
        if n_features > MAX_FLOAT64_ELEMENTS:
            logger.error("LinearRegression model of %d weights exceeds addressable memory", n_features)
            raise OutOfMemoryError(f"Cannot allocate {n_features} weights")

        try:
            weights = np.zeros(n_features, dtype=np.float64)
        except MemoryError as exc:
            logger.error("Failed to allocate sufficient memory for LinearRegression model")
            raise OutOfMemoryError("Failed to allocate LinearRegression weights") from exc

        self._n_features = int(n_features)
        self._weights: Optional[np.ndarray] = weights

    @property
    def n_features(self) -> int:
        return self._n_features

    @property
    def closed(self) -> bool:
        return self._weights is None

    @property
    def weights(self) -> np.ndarray:
        """Copy of the current weight vector."""
        return self._require_open().copy()

    def _require_open(self) -> np.ndarray:
        if self._weights is None:
            raise InvalidArgumentError("LinearRegression model has been closed")
        return self._weights

    def train(
        self,
        samples: np.ndarray,
        targets: np.ndarray,
        learning_rate: float,
        n_iterations: int,
    ) -> List[float]:
        """Train on samples and their target values.

        Every iteration visits the samples in order; for each one the
        prediction error updates the weights by ``learning_rate * error * x``.
        Malformed input is logged and the call returns without touching the
        weights.

        Args:
            samples: Independent variables (n x d).
            targets: Target values (n,).
            learning_rate: Step size of each per-sample update.
            n_iterations: Number of passes over the samples.

        Returns:
            Mean squared error after each pass (empty if nothing ran).
        """
        weights = self._require_open()

        if samples is None or targets is None:
            logger.error("Missing samples or targets passed to LinearRegression.train")
            return []

        samples = np.asarray(samples, dtype=np.float64)
        targets = np.asarray(targets, dtype=np.float64).ravel()

        if samples.ndim != 2 or samples.shape[1] != self._n_features:
            logger.error(
                "Expected samples of shape (n, %d), got %s",
                self._n_features, samples.shape,
            )
            return []
        if len(samples) == 0:
            logger.error("Empty sample set passed to LinearRegression.train")
            return []
        if len(samples) != len(targets):
            logger.error(
                "Sample count %d != target count %d", len(samples), len(targets)
            )
            return []

        history: List[float] = []
        for iteration in range(n_iterations):
            for x, y in zip(samples, targets):
                error = float(np.dot(weights, x)) - y
                weights -= learning_rate * error * x

            mse = float(np.mean((samples @ weights - targets) ** 2))
            history.append(mse)
            logger.debug("Iteration %d: mse %.6g", iteration + 1, mse)

        return history

    def predict(self, point: np.ndarray) -> float:
        """Predict the target value of a single input vector."""
        weights = self._require_open()
        return float(np.dot(weights, np.asarray(point, dtype=np.float64)))

    def predict_batch(self, samples: np.ndarray) -> np.ndarray:
        """Predict target values for many inputs (n x d)."""
        weights = self._require_open()
        return np.asarray(samples, dtype=np.float64) @ weights

    def close(self) -> None:
        """Release the weight storage. Closing twice is a no-op."""
        self._weights = None

    def __enter__(self) -> "LinearRegression":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def __repr__(self) -> str:
        state = "closed" if self.closed else "open"
        return f"LinearRegression(n_features={self._n_features}, {state})"


def destroy_linear_regression(model: Optional[LinearRegression]) -> None:
    """Release a model's storage; ``None`` is accepted and ignored."""
    if model is not None:
        model.close()
