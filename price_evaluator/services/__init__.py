"""
Services - the evaluation and pricing pipelines packaged as tasks.

This module provides:
- EvaluationService: records -> PricingModel (task named "Evaluating service")
- PricingService: record -> price with the held model

The services are pure business logic; hosts run their tasks with
TaskExecutor or on their own worker threads.

Usage:
    from price_evaluator.regression import ModelHolder
    from price_evaluator.services import EvaluationService, PricingService

    holder = ModelHolder()
    outcome = await executor.execute(EvaluationService(holder=holder).create_task(records))
    price = (await executor.execute(PricingService(holder).create_task(record))).value
"""

from .evaluation import EVALUATION_TASK_NAME, EvaluationService
from .pricing import PRICING_TASK_NAME, PricingService

__all__ = [
    "EvaluationService",
    "PricingService",
    "EVALUATION_TASK_NAME",
    "PRICING_TASK_NAME",
]
