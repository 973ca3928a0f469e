"""
Goodness of fit of a pricing model over the records it was fitted on.

Everything is derived from the residuals r = predicted - observed:

    MAE     mean(|r|)
    RMSE    sqrt(mean(r^2))
    MAPE    mean(|r| / observed), optionally capped per record
    MdAPE   median(|r| / observed)
    Acc@X   share of records with |r| / observed < X
    R^2     1 - sum(r^2) / sum((observed - mean(observed))^2)

Percentages are decimals (0.05 is 5%), so observed prices must be positive.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from ..data.errors import EmptyInputError, MissingPriceError
from ..data.models import Record
from .errors import MetricsError
from .models import FitMetrics, PricingModel


@dataclass(frozen=True)
class MetricsConfig:
    """Configuration for fit metrics."""

    max_pct_error: float | None = None
    """Per-record cap applied to MAPE only (e.g., 1.0 = 100%). None = no capping."""

    accuracy_thresholds: tuple[float, ...] = (0.05, 0.10, 0.15)
    """Relative error thresholds reported as accuracy (as decimals)."""


def calculate_metrics(
    y_true: np.ndarray,
    y_pred: np.ndarray,
    config: MetricsConfig,
) -> FitMetrics:
    """
    Compare predicted against observed prices.

    Raises:
        MetricsError: If lengths differ or an observed price is not positive
        EmptyInputError: If there is nothing to compare

    Example:
        >>> metrics = calculate_metrics(
        ...     np.array([10_000, 20_000, 40_000]),
        ...     np.array([11_000, 19_000, 40_000]),
        ...     MetricsConfig(),
        ... )
        >>> round(metrics.mape, 4)
        0.05
    """
    observed = np.ravel(np.asarray(y_true, dtype=np.float64))
    predicted = np.ravel(np.asarray(y_pred, dtype=np.float64))

    if observed.shape != predicted.shape:
        raise MetricsError(
            f"Array length mismatch: y_true={observed.size}, y_pred={predicted.size}"
        )
    if observed.size == 0:
        raise EmptyInputError("Empty input arrays")
    if (observed <= 0).any():
        raise MetricsError("Observed prices must be positive for percentage metrics")

    residuals = predicted - observed
    abs_residuals = np.abs(residuals)
    rel_errors = abs_residuals / observed
    capped = rel_errors
    if config.max_pct_error is not None:
        capped = np.minimum(rel_errors, config.max_pct_error)

    return FitMetrics(
        mae=float(abs_residuals.mean()),
        mape=float(capped.mean()),
        rmse=float(np.sqrt(np.square(residuals).mean())),
        mdape=float(np.median(rel_errors)),
        accuracy={t: float((rel_errors < t).mean()) for t in config.accuracy_thresholds},
        r2=_r_squared(observed, residuals),
        n_samples=int(observed.size),
    )


def score_model(
    model: PricingModel,
    records: Sequence[Record],
    config: MetricsConfig | None = None,
) -> FitMetrics:
    """
    Predict every record with the model and compare against observed prices.

    Raises:
        EmptyInputError: If records is empty
        MissingPriceError: If a record has no observed price
        MetricsError: If an observed price is not positive
    """
    observed = []
    predicted = []
    for record in records:
        if record.price is None:
            raise MissingPriceError(f"Record {record.label!r} has no observed price")
        observed.append(record.price)
        predicted.append(model.predict(record))

    return calculate_metrics(
        np.array(observed), np.array(predicted), config or MetricsConfig()
    )


def _r_squared(observed: np.ndarray, residuals: np.ndarray) -> float:
    ss_res = float(np.square(residuals).sum())
    ss_tot = float(np.square(observed - observed.mean()).sum())
    if ss_tot == 0.0:
        # Constant prices: only an exact fit explains them
        return 1.0 if ss_res == 0.0 else 0.0
    return 1.0 - ss_res / ss_tot
