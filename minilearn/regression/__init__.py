"""Regression module: linear model trained by per-sample gradient descent."""

from .linear_regression import (
    LinearRegression,
    destroy_linear_regression,
)

__all__ = [
    "LinearRegression",
    "destroy_linear_regression",
]
