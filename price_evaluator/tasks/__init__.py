"""
Tasks module for running long computations off the caller's thread.

This module provides:
- AsyncTask: generic single-shot task with progress and cooperative cancellation
- ProgressReporter / CancellationToken: contract objects handed to task bodies
- TaskExecutor: asyncio host running task bodies on worker threads
- TaskOutcome / TaskBatch: terminal snapshots for reporting

Usage:
    from price_evaluator.tasks import AsyncTask, TaskExecutor

    task = AsyncTask("Fit model", body, on_progress=lambda e: print(e.percent))
    outcome = await TaskExecutor().execute(task)
"""

from .errors import ProgressError, TaskCancelledError, TaskError, TaskStateError
from .executor import ExecutorConfig, TaskExecutor
from .models import ProgressEvent, TaskBatch, TaskOutcome, TaskState
from .task import AsyncTask, CancellationToken, ProgressReporter

__all__ = [
    # Task
    "AsyncTask",
    "CancellationToken",
    "ProgressReporter",
    # Executor
    "TaskExecutor",
    "ExecutorConfig",
    # Models
    "TaskState",
    "ProgressEvent",
    "TaskOutcome",
    "TaskBatch",
    # Errors
    "TaskError",
    "TaskStateError",
    "TaskCancelledError",
    "ProgressError",
]
