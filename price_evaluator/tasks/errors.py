"""Custom exceptions for tasks module."""


class TaskError(Exception):
    """Base exception for task-related errors."""

    pass


class TaskStateError(TaskError):
    """
    Raised when a task is used in a way its current state doesn't allow.

    This can happen when:
    - run() is called on a task that already left PENDING (tasks are single-shot)
    - result() or outcome() is requested before the task finished
    """

    pass


class TaskCancelledError(TaskError):
    """
    Raised at a cancellation checkpoint after cancel() was requested.

    Task bodies raise it through CancellationToken.raise_if_cancelled();
    the task then finishes in the CANCELLED state. result() re-raises it.
    """

    pass


class ProgressError(TaskError):
    """
    Raised when a task body reports invalid progress.

    This can happen when:
    - Percent is outside 0-100
    - Percent is lower than the previously reported value in the same run
    """

    pass
