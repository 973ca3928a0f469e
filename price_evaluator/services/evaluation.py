"""Evaluation service - fits a pricing model from records as a background task."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from ..data import Record, build_design_matrix, build_target_matrix
from ..regression import ModelHolder, PricingModel, RegressionSolver
from ..tasks import AsyncTask, CancellationToken, ProgressReporter

logger = logging.getLogger(__name__)

EVALUATION_TASK_NAME = "Evaluating service"


class EvaluationService:
    """
    Runs the least-squares pipeline over a record collection.

    Pipeline phases (progress percent in brackets):
    1. Creating matrix x [0]
    2. Creating matrix y [20]
    3. Processing matrix [40]
    4. Done [100]

    Cancellation is checked between phases only; a started solve always
    runs to completion.
    """

    def __init__(
        self,
        solver: RegressionSolver | None = None,
        holder: ModelHolder | None = None,
    ):
        """
        Initialize service.

        Args:
            solver: Solver to use. Default configuration if None.
            holder: If given, every successfully built model is published to it.
        """
        self._solver = solver or RegressionSolver()
        self._holder = holder

    def create_task(self, records: Iterable[Record]) -> AsyncTask[PricingModel]:
        """
        Build a task that fits a model to a snapshot of records.

        The records are copied now, so later changes to the caller's
        collection don't affect the running task.
        """
        snapshot = list(records)

        def body(progress: ProgressReporter, cancellation: CancellationToken) -> PricingModel:
            return self._run_pipeline(snapshot, progress, cancellation)

        return AsyncTask(EVALUATION_TASK_NAME, body)

    def evaluate(self, records: Iterable[Record]) -> PricingModel:
        """
        Run the pipeline on the calling thread.

        Raises:
            EmptyInputError: If there are no records
            MissingPriceError: If a record has no price
            UnderdeterminedModelError: If the model has no unique solution
        """
        return self._run_pipeline(
            list(records), ProgressReporter(lambda event: None), CancellationToken()
        )

    def _run_pipeline(
        self,
        records: list[Record],
        progress: ProgressReporter,
        cancellation: CancellationToken,
    ) -> PricingModel:
        logger.info(f"Evaluating {len(records)} records")

        progress.report("Creating matrix x", 0)
        x, vocabulary = build_design_matrix(records)
        cancellation.raise_if_cancelled()

        progress.report("Creating matrix y", 20)
        y = build_target_matrix(records)
        cancellation.raise_if_cancelled()

        progress.report("Processing matrix", 40)
        model = self._solver.solve(x, y, vocabulary)
        cancellation.raise_if_cancelled()

        progress.report("Done", 100)

        if self._holder is not None:
            self._holder.set(model)

        logger.info(
            f"Built pricing model with {len(vocabulary)} properties "
            f"(base={model.base:.2f})"
        )
        return model
