"""
Data module for priced records and feature-set extraction.

This module provides:
- Record / RecordSet: heterogeneous labeled observations
- build_design_matrix / build_target_matrix: records -> (X, vocabulary), Y
- load_records: read a JSON/YAML records file (CLI input)

Usage:
    from price_evaluator.data import Record, RecordSet, build_design_matrix

    records = RecordSet.of([
        Record({"age": 3, "mileage": 45000}, price=12500),
        Record({"age": 8}, price=6100),
    ])
    x, vocabulary = build_design_matrix(records)
"""

from .errors import (
    DataError,
    EmptyInputError,
    InvalidRecordError,
    MissingPriceError,
    RecordFormatError,
    ReservedPropertyError,
)
from .feature_set import (
    BIAS_NAME,
    FeatureVocabulary,
    build_design_matrix,
    build_target_matrix,
    extract_vocabulary,
)
from .loader import load_records, parse_record
from .models import Record, RecordSet

__all__ = [
    # Errors
    "DataError",
    "EmptyInputError",
    "InvalidRecordError",
    "MissingPriceError",
    "RecordFormatError",
    "ReservedPropertyError",
    # Feature extraction
    "BIAS_NAME",
    "FeatureVocabulary",
    "build_design_matrix",
    "build_target_matrix",
    "extract_vocabulary",
    # Loader
    "load_records",
    "parse_record",
    # Models
    "Record",
    "RecordSet",
]
