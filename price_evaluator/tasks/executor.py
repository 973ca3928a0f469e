"""
Task executor for running AsyncTasks from an asyncio host.

Task bodies run on worker threads; listener callbacks are marshalled back
onto the event loop so observers never run on a worker thread.
"""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any

from .models import TaskBatch, TaskOutcome
from .task import AsyncTask

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExecutorConfig:
    """Configuration for task executor."""

    max_concurrent: int = 4
    """Maximum number of task bodies running at once in execute_all()."""


class TaskExecutor:
    """
    Run tasks off the event loop thread.

    Usage:
        executor = TaskExecutor(ExecutorConfig(max_concurrent=2))
        outcome = await executor.execute(task)
        if outcome.success:
            model = outcome.value

    Timeouts are the caller's concern:
        outcome = await asyncio.wait_for(executor.execute(task), timeout=30)
    A cancelled or timed-out execute() requests cooperative cancellation of
    the task; the body stops at its next checkpoint.
    """

    def __init__(self, config: ExecutorConfig | None = None):
        self._config = config or ExecutorConfig()

    async def execute(self, task: AsyncTask[Any]) -> TaskOutcome:
        """
        Run one task on a worker thread.

        Returns TaskOutcome (never raises for failures inside the task body).

        Raises:
            TaskStateError: If the task was already run
        """
        loop = asyncio.get_running_loop()
        logger.debug(f"Executing task '{task.name}'")

        try:
            await asyncio.to_thread(task.run, loop.call_soon_threadsafe)
        except asyncio.CancelledError:
            task.cancel()
            raise

        outcome = task.outcome()
        if outcome.success:
            logger.info(f"Task '{task.name}' completed in {outcome.elapsed_ms:.1f}ms")
        else:
            logger.warning(f"Task '{task.name}' {outcome.state.value}: {outcome.error_message}")
        return outcome

    async def execute_all(self, tasks: Iterable[AsyncTask[Any]]) -> TaskBatch:
        """
        Run several tasks concurrently, at most max_concurrent at a time.

        Returns:
            TaskBatch with one outcome per task that could be started, in input order
        """
        start_time = time.time()
        tasks = list(tasks)
        outcomes: list[TaskOutcome] = []

        logger.info(f"Executing {len(tasks)} tasks (max {self._config.max_concurrent} concurrent)")

        semaphore = asyncio.Semaphore(self._config.max_concurrent)

        async def execute_with_semaphore(task: AsyncTask[Any]) -> TaskOutcome:
            async with semaphore:
                return await self.execute(task)

        if tasks:
            completed = await asyncio.gather(
                *(execute_with_semaphore(task) for task in tasks),
                return_exceptions=True,
            )
            for task, result in zip(tasks, completed):
                if isinstance(result, BaseException):
                    # Only misuse (e.g. a task that was already run) gets here
                    logger.error(f"Could not execute task '{task.name}': {result}")
                    continue
                outcomes.append(result)

        elapsed_ms = (time.time() - start_time) * 1000
        batch = TaskBatch(outcomes=outcomes, total_time_ms=elapsed_ms)

        logger.info(
            f"Execution complete: {batch.successful_count} succeeded, "
            f"{batch.failed_count} failed in {elapsed_ms:.1f}ms"
        )
        return batch
