"""Error taxonomy shared by the store, the service layer, and the client."""

from __future__ import annotations

from typing import Optional


class TaskBoardError(Exception):
    """Base class for every error raised by the task board."""


class ValidationError(TaskBoardError):
    """Input is malformed or misses a required field; never reaches the store."""


class TaskNotFoundError(TaskBoardError):
    """The identifier does not resolve to any stored task."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class StorageError(TaskBoardError):
    """The backing store failed (I/O, corrupt document, connectivity)."""


class ConfigError(TaskBoardError):
    """Startup configuration is unusable."""


class ApiError(TaskBoardError):
    """A client request failed; ``message`` is suitable for display."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
