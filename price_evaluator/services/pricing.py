"""Pricing service - prices a single record with the latest model."""

from __future__ import annotations

import logging

from ..data import Record
from ..regression import ModelHolder, ModelUnavailableError
from ..tasks import AsyncTask, CancellationToken, ProgressReporter

logger = logging.getLogger(__name__)

PRICING_TASK_NAME = "Evaluate custom record"


class PricingService:
    """Prices individual records using the model published to a ModelHolder."""

    def __init__(self, holder: ModelHolder):
        self._holder = holder

    def create_task(self, record: Record | None) -> AsyncTask[float]:
        """Build a task that prices one record. The model is read when the task runs."""

        def body(progress: ProgressReporter, cancellation: CancellationToken) -> float:
            return self.price(record)

        return AsyncTask(PRICING_TASK_NAME, body)

    def price(self, record: Record | None) -> float:
        """
        Price a record with the held model.

        Raises:
            ModelUnavailableError: If no model has been built or no record was given
        """
        model = self._holder.get()
        if model is None or record is None:
            raise ModelUnavailableError("No data for evaluation: need a model and a record")

        price = model.predict(record)
        logger.debug(f"Priced record {record.label!r}: {price:.2f}")
        return price
