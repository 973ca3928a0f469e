"""Read-only loader for record files (JSON or YAML) used by the CLI."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from .errors import RecordFormatError
from .models import Record, RecordSet

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = {".yaml", ".yml"}


def load_records(path: Path) -> RecordSet:
    """
    Load records from a JSON or YAML file.

    Accepted layouts: a list of entries, or a mapping with a 'records' list.
    Each entry looks like:

        {"label": "audi-a4-2008", "price": 9500, "properties": {"age": 5, "mileage": 120000}}

    Args:
        path: File to read; format is chosen by extension

    Returns:
        RecordSet in file order

    Raises:
        RecordFormatError: If the file is missing, unparsable or malformed
        InvalidRecordError: If an entry has non-numeric values
    """
    raw = _read(path)

    if isinstance(raw, dict):
        raw = raw.get("records")
    if not isinstance(raw, list):
        raise RecordFormatError(
            f"{path}: expected a list of records or a mapping with a 'records' list"
        )

    records = RecordSet()
    for index, entry in enumerate(raw):
        records.add(parse_record(entry, default_label=f"{path.stem}[{index}]"))

    logger.info(f"Loaded {len(records)} records from {path}")
    return records


def parse_record(entry: Any, default_label: str = "") -> Record:
    """
    Build a Record from one decoded entry.

    Raises:
        RecordFormatError: If entry isn't a mapping or 'properties' isn't a mapping
        InvalidRecordError: If values are not numeric
    """
    if not isinstance(entry, dict):
        raise RecordFormatError(f"Record entry must be a mapping, got {type(entry).__name__}")

    properties = entry.get("properties", {})
    if not isinstance(properties, dict):
        raise RecordFormatError(
            f"Record {entry.get('label', default_label)!r}: 'properties' must be a mapping"
        )

    return Record(
        properties={str(k): v for k, v in properties.items()},
        price=entry.get("price"),
        label=str(entry.get("label", default_label)),
    )


def _read(path: Path) -> Any:
    suffix = path.suffix.lower()
    if suffix not in _YAML_SUFFIXES and suffix != ".json":
        raise RecordFormatError(
            f"Unsupported records file extension '{path.suffix}' (use .json, .yaml or .yml)"
        )

    try:
        with open(path, encoding="utf-8") as f:
            if suffix in _YAML_SUFFIXES:
                return yaml.safe_load(f)
            return json.load(f)
    except FileNotFoundError as e:
        raise RecordFormatError(f"Records file not found: {path}") from e
    except OSError as e:
        raise RecordFormatError(f"Cannot read records file {path}: {e}") from e
    except UnicodeDecodeError as e:
        raise RecordFormatError(f"Records file {path} is not valid UTF-8: {e}") from e
    except yaml.YAMLError as e:
        raise RecordFormatError(f"Invalid YAML in records file: {e}") from e
    except json.JSONDecodeError as e:
        raise RecordFormatError(f"Invalid JSON in records file: {e}") from e
