"""Custom exceptions for linalg module."""


class MatrixError(Exception):
    """Base exception for matrix-related errors."""

    pass


class InvalidShapeError(MatrixError):
    """
    Raised when a matrix cannot be built with the requested shape.

    This can happen when:
    - Row or column count is zero or negative
    - Rows passed to Matrix.from_rows() are empty or ragged
    """

    pass


class IndexOutOfRangeError(MatrixError, IndexError):
    """
    Raised when an element is addressed outside the matrix.

    This can happen when:
    - Row index is not in [0, rows)
    - Column index is not in [0, cols)
    - A negative index is used (no wrap-around)
    """

    pass


class DimensionMismatchError(MatrixError):
    """
    Raised when operand shapes are incompatible.

    This can happen when:
    - Multiplying A (m x n) by B (p x q) with n != p
    - Coefficient vector length doesn't match the feature vocabulary
    """

    pass


class NotSquareError(MatrixError):
    """Raised when inverting a matrix whose row count differs from its column count."""

    pass


class SingularMatrixError(MatrixError):
    """
    Raised when a matrix has no inverse.

    This can happen when:
    - A row or column is entirely zero
    - Rows are linearly dependent (collinear features)
    - No pivot candidate exceeds the singularity threshold during elimination
    """

    pass
