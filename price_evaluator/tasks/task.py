"""
Single-shot background task with progress reporting and cooperative cancellation.

A task wraps a body function:

    def body(progress: ProgressReporter, cancellation: CancellationToken) -> T

State machine:

    PENDING -> RUNNING -> COMPLETED(value) | FAILED(error) | CANCELLED

run() never raises for failures inside the body; they are captured and
exposed through state, error, result() and outcome(). A BaseException such
as KeyboardInterrupt also fails the task, then propagates. Cancellation is only
observed where the body calls cancellation.raise_if_cancelled().

Listener callbacks go through a deliver(fn, *args) function so the host can
marshal them onto its own context (e.g. loop.call_soon_threadsafe). Progress
events and the final done notification are delivered in the order issued.
A listener that raises is logged and skipped; it never affects the task.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable
from typing import Any, Generic, TypeVar

from .errors import ProgressError, TaskCancelledError, TaskStateError
from .models import ProgressEvent, TaskOutcome, TaskState

logger = logging.getLogger(__name__)

T = TypeVar("T")

Deliver = Callable[..., Any]
ProgressListener = Callable[[ProgressEvent], Any]


def _call_now(fn: Callable[..., Any], *args: Any) -> None:
    fn(*args)


class CancellationToken:
    """Advisory cancellation flag shared between a task and its body."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def is_cancelled(self) -> bool:
        return self._event.is_set()

    def raise_if_cancelled(self) -> None:
        """
        Checkpoint for task bodies.

        Raises:
            TaskCancelledError: If cancellation was requested
        """
        if self._event.is_set():
            raise TaskCancelledError("Task cancelled")


class ProgressReporter:
    """
    Progress channel handed to a task body.

    Validates that percent stays within 0-100 and never goes backwards.
    """

    def __init__(self, emit: Callable[[ProgressEvent], None]):
        self._emit = emit
        self._last: ProgressEvent | None = None

    @property
    def last(self) -> ProgressEvent | None:
        return self._last

    def report(self, message: str, percent: int) -> None:
        """
        Publish a progress event.

        Raises:
            ProgressError: If percent is out of range or lower than the last report
        """
        if not 0 <= percent <= 100:
            raise ProgressError(f"Progress must be within 0-100, got {percent}")
        if self._last is not None and percent < self._last.percent:
            raise ProgressError(
                f"Progress went backwards: {self._last.percent} -> {percent}"
            )

        event = ProgressEvent(message=message, percent=int(percent))
        self._last = event
        self._emit(event)


class AsyncTask(Generic[T]):
    """
    Named, single-shot unit of background work producing a T.

    Usage:
        def body(progress, cancellation):
            progress.report("Loading", 0)
            cancellation.raise_if_cancelled()
            ...
            progress.report("Done", 100)
            return value

        task = AsyncTask("Load prices", body, on_progress=print)
        await TaskExecutor().execute(task)   # or task.run() on a worker thread
        value = task.result()
    """

    def __init__(
        self,
        name: str,
        body: Callable[[ProgressReporter, CancellationToken], T],
        on_progress: ProgressListener | None = None,
        on_done: Callable[[AsyncTask[T]], Any] | None = None,
    ):
        """
        Initialize task.

        Args:
            name: Human-readable identity used in logs and outcomes
            body: Computation to run; receives progress reporter and cancellation token
            on_progress: Optional listener for progress events
            on_done: Optional listener called once with the task after it finishes
        """
        self._name = name
        self._body = body
        self._lock = threading.Lock()
        self._finished = threading.Event()
        self._cancellation = CancellationToken()

        self._state = TaskState.PENDING
        self._value: T | None = None
        self._error: BaseException | None = None
        self._last_progress: ProgressEvent | None = None
        self._started_at: float | None = None
        self._finished_at: float | None = None

        self._progress_listeners: list[ProgressListener] = []
        self._done_listeners: list[Callable[[AsyncTask[T]], Any]] = []
        if on_progress is not None:
            self._progress_listeners.append(on_progress)
        if on_done is not None:
            self._done_listeners.append(on_done)

    # --- Identity and state ---

    @property
    def name(self) -> str:
        return self._name

    @property
    def state(self) -> TaskState:
        with self._lock:
            return self._state

    @property
    def done(self) -> bool:
        return self._finished.is_set()

    @property
    def error(self) -> BaseException | None:
        """Captured error of a failed or cancelled task."""
        with self._lock:
            return self._error

    @property
    def progress(self) -> ProgressEvent | None:
        """Most recent progress event."""
        with self._lock:
            return self._last_progress

    @property
    def cancellation(self) -> CancellationToken:
        return self._cancellation

    @property
    def elapsed_ms(self) -> float | None:
        if self._started_at is None:
            return None
        end = self._finished_at if self._finished_at is not None else time.time()
        return (end - self._started_at) * 1000

    def add_progress_listener(self, listener: ProgressListener) -> None:
        self._progress_listeners.append(listener)

    def add_done_listener(self, listener: Callable[[AsyncTask[T]], Any]) -> None:
        self._done_listeners.append(listener)

    # --- Lifecycle ---

    def run(self, deliver: Deliver | None = None) -> None:
        """
        Run the body on the calling thread and reach exactly one terminal state.

        Args:
            deliver: Function used to invoke listener callbacks as deliver(fn, *args).
                Defaults to calling them directly.

        Raises:
            TaskStateError: If the task already left PENDING
            BaseException: Re-raised after the task is marked FAILED, if the body
                raised one that is not an Exception (e.g. KeyboardInterrupt)
        """
        deliver = deliver or _call_now

        with self._lock:
            if self._state is not TaskState.PENDING:
                raise TaskStateError(
                    f"Task '{self._name}' is single-shot and already {self._state.value}"
                )
            self._state = TaskState.RUNNING
            self._started_at = time.time()

        logger.debug(f"Task '{self._name}' started")

        reporter = ProgressReporter(lambda event: self._publish_progress(event, deliver))

        interrupted: BaseException | None = None

        try:
            self._cancellation.raise_if_cancelled()
            value = self._body(reporter, self._cancellation)
        except TaskCancelledError as e:
            logger.info(f"Task '{self._name}' cancelled")
            self._finish(TaskState.CANCELLED, error=e)
        except Exception as e:
            logger.warning(f"Task '{self._name}' failed: {type(e).__name__}: {e}")
            self._finish(TaskState.FAILED, error=e)
        except BaseException as e:
            # KeyboardInterrupt, SystemExit and the like still end the run
            logger.warning(f"Task '{self._name}' interrupted: {type(e).__name__}")
            self._finish(TaskState.FAILED, error=e)
            interrupted = e
        else:
            logger.debug(f"Task '{self._name}' completed in {self.elapsed_ms:.1f}ms")
            self._finish(TaskState.COMPLETED, value=value)

        for listener in self._done_listeners:
            deliver(self._notify, listener, self)

        if interrupted is not None:
            raise interrupted

    def cancel(self) -> bool:
        """
        Request cooperative cancellation.

        Returns:
            False if the task was already terminal (no effect), True otherwise
        """
        with self._lock:
            if self._state.is_terminal:
                return False
            self._cancellation.cancel()
            return True

    def wait(self, timeout: float | None = None) -> bool:
        """Block until the task is terminal. Returns False on timeout."""
        return self._finished.wait(timeout)

    def result(self) -> T:
        """
        Value of a completed task.

        Raises:
            TaskStateError: If the task hasn't finished
            Exception: The captured error if the task failed or was cancelled
        """
        with self._lock:
            state, value, error = self._state, self._value, self._error

        if not state.is_terminal:
            raise TaskStateError(f"Task '{self._name}' has not finished ({state.value})")
        if error is not None:
            raise error
        return value  # type: ignore[return-value]

    def outcome(self) -> TaskOutcome:
        """
        Terminal snapshot of the task.

        Raises:
            TaskStateError: If the task hasn't finished
        """
        with self._lock:
            if not self._state.is_terminal:
                raise TaskStateError(
                    f"Task '{self._name}' has not finished ({self._state.value})"
                )
            return TaskOutcome(
                name=self._name,
                state=self._state,
                value=self._value,
                error=self._error,
                elapsed_ms=self.elapsed_ms,
            )

    def _publish_progress(self, event: ProgressEvent, deliver: Deliver) -> None:
        with self._lock:
            self._last_progress = event
        logger.debug(f"Task '{self._name}': {event.message} ({event.percent}%)")
        for listener in self._progress_listeners:
            deliver(self._notify, listener, event)

    def _notify(self, listener: Callable[..., Any], *args: Any) -> None:
        try:
            listener(*args)
        except Exception:
            logger.exception(f"Listener of task '{self._name}' raised")

    def _finish(
        self,
        state: TaskState,
        value: T | None = None,
        error: BaseException | None = None,
    ) -> None:
        with self._lock:
            self._state = state
            self._value = value
            self._error = error
            self._finished_at = time.time()
        self._finished.set()

    def __repr__(self) -> str:
        return f"AsyncTask({self._name!r}, {self.state.value})"
