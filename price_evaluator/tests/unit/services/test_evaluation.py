"""Unit tests for EvaluationService."""

from typing import Any

import pytest

from price_evaluator.data import EmptyInputError, MissingPriceError, Record, RecordSet
from price_evaluator.regression import (
    ModelHolder,
    RegressionSolver,
    SolverConfig,
    UnderdeterminedModelError,
)
from price_evaluator.services import EVALUATION_TASK_NAME, EvaluationService
from price_evaluator.tasks import ProgressEvent, TaskExecutor, TaskState


class TestEvaluationServiceTask:
    """Tests for the task built by EvaluationService.create_task."""

    def test_task_name(self, linear_records: RecordSet) -> None:
        task = EvaluationService().create_task(linear_records)

        assert task.name == EVALUATION_TASK_NAME == "Evaluating service"
        assert task.state is TaskState.PENDING

    def test_phases_reported_in_order(self, linear_records: RecordSet) -> None:
        events: list[ProgressEvent] = []
        task = EvaluationService().create_task(linear_records)
        task.add_progress_listener(events.append)
        task.run()

        assert [(e.message, e.percent) for e in events] == [
            ("Creating matrix x", 0),
            ("Creating matrix y", 20),
            ("Processing matrix", 40),
            ("Done", 100),
        ]

    def test_model_value(self, linear_records: RecordSet) -> None:
        task = EvaluationService().create_task(linear_records)
        task.run()

        model = task.result()
        assert model.base == pytest.approx(0.0, abs=1e-9)
        assert model.coefficient("x") == pytest.approx(10.0)

    def test_publishes_to_holder(self, car_records: RecordSet) -> None:
        holder = ModelHolder()
        task = EvaluationService(holder=holder).create_task(car_records)
        task.run()

        assert holder.require() is task.result()
        assert holder.predict(Record({"age": 4, "seats": 5})) == pytest.approx(
            20000 - 1500 * 4 + 800 * 5, rel=1e-6
        )

    def test_records_snapshot(self, linear_records: RecordSet) -> None:
        """Records added after create_task() are not seen by the task."""
        task = EvaluationService().create_task(linear_records)
        linear_records.add(Record({"x": 4.0}))
        task.run()

        assert task.state is TaskState.COMPLETED

    def test_empty_input_fails_with_type_preserved(self) -> None:
        holder = ModelHolder()
        task = EvaluationService(holder=holder).create_task([])
        task.run()

        assert task.state is TaskState.FAILED
        assert isinstance(task.error, EmptyInputError)
        assert not holder.is_available

    def test_missing_price_fails(self) -> None:
        task = EvaluationService().create_task([Record({"x": 1.0}, price=1.0), Record({"x": 2.0})])
        task.run()

        assert isinstance(task.error, MissingPriceError)

    def test_underdetermined_fails_and_keeps_previous_model(
        self, linear_records: RecordSet
    ) -> None:
        holder = ModelHolder()
        service = EvaluationService(holder=holder)
        service.evaluate(linear_records)
        previous = holder.get()

        task = service.create_task(
            [Record({"x": 1.0, "y": 1.0}, price=5.0), Record({"x": 2.0, "y": 3.0}, price=6.0)]
        )
        task.run()

        assert isinstance(task.error, UnderdeterminedModelError)
        assert holder.get() is previous

    def test_cancelled_between_phases(self, linear_records: RecordSet) -> None:
        """Cancelling during the first phase stops before the second."""
        holder = ModelHolder()
        events: list[ProgressEvent] = []
        task = EvaluationService(holder=holder).create_task(linear_records)

        def cancel_on_first(event: ProgressEvent) -> None:
            events.append(event)
            if event.percent == 0:
                task.cancel()

        task.add_progress_listener(cancel_on_first)
        task.run()

        assert task.state is TaskState.CANCELLED
        assert [e.percent for e in events] == [0]
        assert not holder.is_available

    def test_uses_solver_config(self) -> None:
        records = [
            Record({"x": 1.0, "y": 1.0}, price=1.0),
            Record({"x": 2.0, "y": 2.0 + 1e-3}, price=2.0),
            Record({"x": 3.0, "y": 3.0}, price=3.0),
            Record({"x": 4.0, "y": 4.0 - 1e-3}, price=4.0),
        ]
        strict = EvaluationService(RegressionSolver(SolverConfig(singularity_epsilon=1e-4)))

        with pytest.raises(UnderdeterminedModelError):
            strict.evaluate(records)


class TestEvaluationServiceEvaluate:
    """Tests for the synchronous EvaluationService.evaluate path."""

    def test_evaluate(self, car_records: RecordSet) -> None:
        model = EvaluationService().evaluate(car_records)

        assert model.coefficient("mileage") == pytest.approx(-0.05, rel=1e-6)

    def test_evaluate_raises(self) -> None:
        with pytest.raises(EmptyInputError):
            EvaluationService().evaluate([])


class TestEvaluationServiceWithExecutor:
    """End-to-end through TaskExecutor."""

    @pytest.mark.asyncio
    async def test_execute(self, car_records: RecordSet) -> None:
        percents: list[int] = []
        holder = ModelHolder()
        task = EvaluationService(holder=holder).create_task(car_records)
        task.add_progress_listener(lambda e: percents.append(e.percent))

        outcome = await TaskExecutor().execute(task)

        assert outcome.success
        assert outcome.name == "Evaluating service"
        assert outcome.value is holder.get()
        assert percents == [0, 20, 40, 100]

    @pytest.mark.asyncio
    async def test_execute_failure(self) -> None:
        outcome: Any = await TaskExecutor().execute(EvaluationService().create_task([]))

        assert outcome.state is TaskState.FAILED
        assert outcome.error_message.startswith("EmptyInputError")
