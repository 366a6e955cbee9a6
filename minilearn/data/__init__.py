"""Data module for synthetic clustering and regression datasets."""

from .synthetic import (
    BlobDataset,
    BlobGenerator,
    RegressionDataset,
    generate_blobs,
    generate_linear_data,
)

__all__ = [
    "BlobDataset",
    "BlobGenerator",
    "RegressionDataset",
    "generate_blobs",
    "generate_linear_data",
]
