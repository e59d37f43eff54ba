from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Optional

from ..domain.models import Task, TaskFilter


class TaskRepository(ABC):
    """Capability set every storage backend provides.

    ``changes``/``fields`` dicts use :class:`Task` attribute names and hold
    already-validated values.
    """

    name: str = "abstract"

    @abstractmethod
    def list(self, task_filter: Optional[TaskFilter] = None) -> list[Task]:
        """Return matching tasks, newest ``created_at`` first."""
        raise NotImplementedError

    @abstractmethod
    def create(self, fields: dict[str, Any]) -> Task:
        raise NotImplementedError

    @abstractmethod
    def update(self, task_id: str, changes: dict[str, Any]) -> Optional[Task]:
        """Apply *changes*; ``None`` when *task_id* is unknown."""
        raise NotImplementedError

    @abstractmethod
    def delete(self, task_id: str) -> bool:
        """Remove permanently; ``False`` when *task_id* is unknown."""
        raise NotImplementedError
