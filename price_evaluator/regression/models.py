"""Data models for regression module."""

from __future__ import annotations

import threading
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from ..data.feature_set import BIAS_NAME
from ..data.models import Record
from .errors import ModelUnavailableError


@dataclass(frozen=True)
class PricingModel:
    """
    Linear pricing model: bias plus one coefficient per property name.

    predict(record) = base + sum(coefficients[n] * record[n]) over the
    names the record declares and the model knows. Properties the model
    has never seen are ignored.
    """

    BASE = BIAS_NAME
    """Key of the bias term in to_dict()/from_dict()."""

    base: float
    coefficients: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "coefficients",
            MappingProxyType({str(k): float(v) for k, v in self.coefficients.items()}),
        )
        object.__setattr__(self, "base", float(self.base))

    def __hash__(self) -> int:
        return hash((self.base, frozenset(self.coefficients.items())))

    @property
    def known_names(self) -> tuple[str, ...]:
        """Property names with a coefficient, in vocabulary order."""
        return tuple(self.coefficients)

    def coefficient(self, name: str) -> float:
        """Coefficient for a property name; the bias for BASE."""
        if name == self.BASE:
            return self.base
        return self.coefficients[name]

    def predict(self, record: Record) -> float:
        """Predicted price for a record."""
        price = self.base
        for name in record.declared_properties():
            coefficient = self.coefficients.get(name)
            if coefficient is not None:
                price += coefficient * record.get_property(name)
        return price

    def to_dict(self) -> dict[str, float]:
        """Convert to flat {name: coefficient} mapping, bias first."""
        return {self.BASE: self.base, **self.coefficients}

    @classmethod
    def from_dict(cls, data: Mapping[str, float]) -> PricingModel:
        """Inverse of to_dict(). A missing bias is treated as 0.0."""
        coefficients = {k: v for k, v in data.items() if k != cls.BASE}
        return cls(base=data.get(cls.BASE, 0.0), coefficients=coefficients)

    def __len__(self) -> int:
        """Number of terms, bias included."""
        return 1 + len(self.coefficients)


class ModelHolder:
    """
    Thread-safe reference to the most recently built pricing model.

    The evaluation pipeline publishes into it; pricing tasks read from it.
    """

    def __init__(self, model: PricingModel | None = None):
        self._lock = threading.Lock()
        self._model = model

    def get(self) -> PricingModel | None:
        with self._lock:
            return self._model

    def set(self, model: PricingModel | None) -> None:
        with self._lock:
            self._model = model

    @property
    def is_available(self) -> bool:
        return self.get() is not None

    def require(self) -> PricingModel:
        """
        Return the held model.

        Raises:
            ModelUnavailableError: If no model has been built yet
        """
        model = self.get()
        if model is None:
            raise ModelUnavailableError("No pricing model has been built yet")
        return model

    def predict(self, record: Record) -> float:
        """
        Price a record with the held model.

        Raises:
            ModelUnavailableError: If no model has been built yet
        """
        return self.require().predict(record)


@dataclass(frozen=True)
class FitMetrics:
    """
    Goodness of fit of a pricing model over a record set.

    All percentage-based metrics are stored as decimals (e.g., 0.085 for 8.5%).
    """

    # Error metrics (lower is better)
    mae: float  # Mean Absolute Error (price units)
    mape: float  # Mean Absolute Percentage Error (0.0-1.0+)
    rmse: float  # Root Mean Squared Error (price units)
    mdape: float  # Median Absolute Percentage Error (0.0-1.0+)

    # Keys are thresholds as decimals (e.g., 0.05), values are fraction of
    # predictions within that threshold
    accuracy: dict[float, float]

    r2: float  # Coefficient of determination (-inf, 1]

    n_samples: int

    def get_accuracy(self, threshold: float) -> float | None:
        """Get accuracy at a specific threshold, or None if not computed."""
        return self.accuracy.get(threshold)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "mae": round(self.mae, 2),
            "mape": round(self.mape, 6),
            "rmse": round(self.rmse, 2),
            "mdape": round(self.mdape, 6),
            "r2": round(self.r2, 4),
            "n_samples": self.n_samples,
            "accuracy": {
                f"{threshold:.0%}": round(value, 4)
                for threshold, value in sorted(self.accuracy.items())
            },
        }
