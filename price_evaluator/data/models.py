"""Data models for priced records."""

from __future__ import annotations

import math
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from .errors import InvalidRecordError


@dataclass(frozen=True, eq=True)
class Record:
    """
    A labeled observation: declared numeric properties plus a price.

    Records don't share a schema. Each one declares only the properties
    it knows about; feature extraction treats undeclared properties as 0.0.
    The price is None for records that are only going to be priced.
    """

    properties: Mapping[str, float]
    price: float | None = None
    label: str = ""

    def __post_init__(self) -> None:
        cleaned: dict[str, float] = {}
        for name, value in self.properties.items():
            if not name:
                raise InvalidRecordError(f"Record {self.label!r} has an empty property name")
            cleaned[name] = _to_finite_float(value, f"property '{name}'", self.label)

        object.__setattr__(self, "properties", MappingProxyType(cleaned))
        if self.price is not None:
            object.__setattr__(
                self, "price", _to_finite_float(self.price, "price", self.label)
            )

    def __hash__(self) -> int:
        return hash((frozenset(self.properties.items()), self.price, self.label))

    def declared_properties(self) -> tuple[str, ...]:
        """Names of declared properties, in declaration order."""
        return tuple(self.properties)

    def declares(self, name: str) -> bool:
        return name in self.properties

    def get_property(self, name: str, default: float = 0.0) -> float:
        """Value of a property, or default if the record doesn't declare it."""
        return self.properties.get(name, default)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "label": self.label,
            "price": self.price,
            "properties": dict(self.properties),
        }


def _to_finite_float(value: Any, what: str, label: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidRecordError(
            f"Record {label!r}: {what} must be numeric, got {value!r}"
        ) from e
    if not math.isfinite(number):
        raise InvalidRecordError(f"Record {label!r}: {what} must be finite, got {number}")
    return number


@dataclass
class RecordSet:
    """
    Ordered collection of records.

    Insertion order is preserved so matrix rows are reproducible.
    Duplicates are allowed.
    """

    records: list[Record] = field(default_factory=list)

    @classmethod
    def of(cls, records: Iterable[Record]) -> RecordSet:
        return cls(records=list(records))

    def add(self, record: Record) -> None:
        self.records.append(record)

    @property
    def is_empty(self) -> bool:
        return not self.records

    @property
    def prices(self) -> list[float | None]:
        """Observed prices, in record order."""
        return [r.price for r in self.records]

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[Record]:
        return iter(self.records)

    def __getitem__(self, index: int) -> Record:
        return self.records[index]

    def __repr__(self) -> str:
        return f"RecordSet({len(self.records)} records)"
