"""
Regression module: OLS solver, pricing model and fit metrics.

This module provides:
- RegressionSolver: normal-equation solve of (X, Y, vocabulary) -> PricingModel
- PricingModel: bias + per-property coefficients, predict(record)
- ModelHolder: shared reference to the latest model
- calculate_metrics / score_model: MAE, MAPE, RMSE, MdAPE, Accuracy, R²

Usage:
    from price_evaluator.regression import RegressionSolver, score_model

    model = RegressionSolver().fit(records)
    price = model.predict(record)
    metrics = score_model(model, records)
"""

from .errors import (
    MetricsError,
    ModelUnavailableError,
    RegressionError,
    UnderdeterminedModelError,
)
from .metrics import MetricsConfig, calculate_metrics, score_model
from .models import FitMetrics, ModelHolder, PricingModel
from .solver import RegressionSolver, SolverConfig

__all__ = [
    # Solver
    "RegressionSolver",
    "SolverConfig",
    # Models
    "PricingModel",
    "ModelHolder",
    "FitMetrics",
    # Metrics
    "MetricsConfig",
    "calculate_metrics",
    "score_model",
    # Errors
    "RegressionError",
    "UnderdeterminedModelError",
    "ModelUnavailableError",
    "MetricsError",
]
