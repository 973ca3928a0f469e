"""
Linear algebra module for the least-squares pipeline.

This module provides:
- Matrix: dense float64 matrix with transpose, multiply and invert
- Error hierarchy for shape, index and singularity failures

Usage:
    from price_evaluator.linalg import Matrix, SingularMatrixError

    xtx = x.transpose().multiply(x)
    try:
        inverse = xtx.invert()
    except SingularMatrixError:
        ...
"""

from .errors import (
    DimensionMismatchError,
    IndexOutOfRangeError,
    InvalidShapeError,
    MatrixError,
    NotSquareError,
    SingularMatrixError,
)
from .matrix import SINGULARITY_EPSILON, Matrix

__all__ = [
    # Matrix
    "Matrix",
    "SINGULARITY_EPSILON",
    # Errors
    "MatrixError",
    "InvalidShapeError",
    "IndexOutOfRangeError",
    "DimensionMismatchError",
    "NotSquareError",
    "SingularMatrixError",
]
