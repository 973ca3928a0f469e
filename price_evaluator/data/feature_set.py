"""
Feature-set extraction: records -> design and target matrices.

The vocabulary is the first-seen-ordered union of property names across
the records. It is returned to the caller together with the design matrix
and must be passed explicitly to the solver to name coefficients.

Design matrix layout (one row per record, in iteration order):

    column 0        1.0 (bias)
    column 1 + k    record.get_property(vocabulary[k]), 0.0 if undeclared
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from ..linalg import Matrix
from .errors import EmptyInputError, MissingPriceError, ReservedPropertyError
from .models import Record

logger = logging.getLogger(__name__)

BIAS_NAME = "base"
"""Name of the bias column and of the bias term in a pricing model."""

FeatureVocabulary = tuple[str, ...]


def extract_vocabulary(records: Iterable[Record]) -> FeatureVocabulary:
    """
    Deduplicated union of declared property names, in first-seen order.

    Raises:
        ReservedPropertyError: If a record declares the reserved bias name
    """
    seen: dict[str, None] = {}
    for record in records:
        for name in record.declared_properties():
            if name == BIAS_NAME:
                raise ReservedPropertyError(
                    f"Record {record.label!r} declares reserved property '{BIAS_NAME}'"
                )
            seen.setdefault(name, None)
    return tuple(seen)


def build_design_matrix(records: Sequence[Record]) -> tuple[Matrix, FeatureVocabulary]:
    """
    Build the design matrix X and the vocabulary that names its columns.

    Args:
        records: Records in the order their rows should appear

    Returns:
        Tuple of (X, vocabulary) where X has shape (len(records), 1 + len(vocabulary))

    Raises:
        EmptyInputError: If records is empty
        ReservedPropertyError: If a record declares the reserved bias name
    """
    if len(records) == 0:
        raise EmptyInputError("Nothing to evaluate: no records")

    vocabulary = extract_vocabulary(records)
    x = Matrix(len(records), 1 + len(vocabulary))

    for i, record in enumerate(records):
        x.set(i, 0, 1.0)
        for k, name in enumerate(vocabulary):
            x.set(i, k + 1, record.get_property(name))

    logger.debug(
        f"Built design matrix {x.rows}x{x.cols} from {len(vocabulary)} properties"
    )
    return x, vocabulary


def build_target_matrix(records: Sequence[Record]) -> Matrix:
    """
    Build the single-column target matrix Y of observed prices.

    Raises:
        EmptyInputError: If records is empty
        MissingPriceError: If a record has no observed price
    """
    if len(records) == 0:
        raise EmptyInputError("Nothing to evaluate: no records")

    y = Matrix(len(records), 1)
    for i, record in enumerate(records):
        if record.price is None:
            raise MissingPriceError(
                f"Record {i} ({record.label!r}) has no observed price"
            )
        y.set(i, 0, record.price)

    return y
