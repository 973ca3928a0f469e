"""
Linear pricing models for heterogeneous records.

Subpackages:
- linalg: dense matrix engine (transpose, multiply, Gauss-Jordan inverse)
- data: records, feature-set extraction, record file loader
- regression: normal-equation solver, pricing model, fit metrics
- tasks: single-shot background tasks with progress and cancellation
- services: evaluation and pricing pipelines packaged as tasks
- cli: command-line host
"""

from .data import Record, RecordSet
from .regression import PricingModel, RegressionSolver
from .services import EvaluationService, PricingService
from .tasks import AsyncTask, TaskExecutor

__version__ = "0.1.0"

__all__ = [
    "Record",
    "RecordSet",
    "PricingModel",
    "RegressionSolver",
    "EvaluationService",
    "PricingService",
    "AsyncTask",
    "TaskExecutor",
]
