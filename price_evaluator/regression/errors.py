"""Custom exceptions for regression module."""

from ..linalg.errors import SingularMatrixError


class RegressionError(Exception):
    """Base exception for regression-related errors."""

    pass


class UnderdeterminedModelError(RegressionError, SingularMatrixError):
    """
    Raised when the normal equations have no unique solution.

    This is how the solver reports a SingularMatrixError from XtX.invert().
    It can happen when:
    - There are fewer distinct records than 1 + number of properties
    - Two properties are collinear (e.g. one is always twice the other)
    - A property is declared with the same value on every record (collinear with bias)
    """

    pass


class ModelUnavailableError(RegressionError):
    """
    Raised when a price is requested but there is nothing to evaluate with.

    This can happen when:
    - No pricing model has been built yet
    - No target record was supplied
    """

    pass


# --- Metrics errors ---


class MetricsError(RegressionError):
    """
    Raised when fit metrics cannot be calculated.

    This can happen when:
    - Input arrays have different lengths
    - A ground-truth price is zero or negative (percentage errors undefined)
    """

    pass
