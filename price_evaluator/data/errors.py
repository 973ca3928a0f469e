"""Custom exceptions for data module."""


class DataError(Exception):
    """Base exception for data-related errors."""

    pass


# --- Record errors ---


class InvalidRecordError(DataError):
    """
    Raised when a record cannot be constructed.

    This can happen when:
    - A property value is not numeric
    - A property value or price is NaN or infinite
    - A property name is empty
    """

    pass


class MissingPriceError(DataError):
    """
    Raised when a record without an observed price is used for fitting.

    Records that are only going to be priced may omit the price; every
    record in a training set must have one.
    """

    pass


# --- Feature extraction errors ---


class EmptyInputError(DataError):
    """
    Raised when there is nothing to evaluate.

    This can happen when:
    - The record set passed to feature extraction is empty
    - Metrics are requested for zero records
    """

    pass


class ReservedPropertyError(DataError):
    """
    Raised when a record declares a property under the reserved bias name.

    The bias term of a pricing model is keyed "base"; a property with the
    same name would make the coefficient mapping ambiguous.
    """

    pass


# --- Loader errors ---


class RecordFormatError(DataError):
    """
    Raised when a records file cannot be read.

    This can happen when:
    - File not found
    - Invalid JSON/YAML syntax
    - Unsupported file extension
    - Entry is not a mapping or has a malformed 'properties' key
    """

    pass
