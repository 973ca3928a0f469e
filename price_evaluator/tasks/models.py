"""Data models for tasks module."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class TaskState(str, Enum):
    """Lifecycle of a single-shot task."""

    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"
    CANCELLED = "cancelled"

    @property
    def is_terminal(self) -> bool:
        return self in (TaskState.COMPLETED, TaskState.FAILED, TaskState.CANCELLED)


@dataclass(frozen=True)
class ProgressEvent:
    """One progress report: what the task is doing and how far along it is."""

    message: str
    percent: int  # 0-100, non-decreasing within a run


@dataclass(frozen=True)
class TaskOutcome:
    """
    Terminal snapshot of a task.

    Contains the produced value or the captured error, never both.
    """

    name: str
    state: TaskState
    value: Any = None
    error: BaseException | None = None
    elapsed_ms: float | None = None

    @property
    def success(self) -> bool:
        return self.state is TaskState.COMPLETED

    @property
    def error_message(self) -> str | None:
        """Error type and message if the task did not complete (truncated to 80 chars)."""
        if self.error is None:
            return None
        msg = f"{type(self.error).__name__}: {self.error}"
        if len(msg) > 80:
            return msg[:77] + "..."
        return msg

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        result: dict[str, Any] = {
            "name": self.name,
            "state": self.state.value,
            "success": self.success,
        }

        if self.success:
            to_dict = getattr(self.value, "to_dict", None)
            result["value"] = to_dict() if callable(to_dict) else self.value
        else:
            result["error"] = self.error_message

        if self.elapsed_ms is not None:
            result["elapsed_ms"] = round(self.elapsed_ms, 2)

        return result


@dataclass
class TaskBatch:
    """Outcomes of running several tasks together."""

    outcomes: list[TaskOutcome] = field(default_factory=list)
    total_time_ms: float = 0.0

    @property
    def successful_count(self) -> int:
        return sum(1 for o in self.outcomes if o.success)

    @property
    def failed_count(self) -> int:
        return sum(1 for o in self.outcomes if not o.success)

    @property
    def successful_outcomes(self) -> list[TaskOutcome]:
        return [o for o in self.outcomes if o.success]

    @property
    def failed_outcomes(self) -> list[TaskOutcome]:
        return [o for o in self.outcomes if not o.success]

    def get(self, name: str) -> TaskOutcome | None:
        """First outcome with the given task name, or None."""
        return next((o for o in self.outcomes if o.name == name), None)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "total_time_ms": round(self.total_time_ms, 2),
            "successful_count": self.successful_count,
            "failed_count": self.failed_count,
            "outcomes": [o.to_dict() for o in self.outcomes],
        }
