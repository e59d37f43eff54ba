"""Process-local task storage used when no database is configured."""

from __future__ import annotations

from copy import deepcopy
from typing import Any, Optional

from ..domain.models import Task, TaskFilter, newest_first
from .interfaces import TaskRepository


class InMemoryTaskRepository(TaskRepository):
    name = "memory"

    def __init__(self) -> None:
        self._tasks: list[Task] = []

    def _index_of(self, task_id: str) -> int:
        for idx, task in enumerate(self._tasks):
            if task.id == task_id:
                return idx
        return -1

    def list(self, task_filter: Optional[TaskFilter] = None) -> list[Task]:
        task_filter = task_filter or TaskFilter()
        matching = [deepcopy(t) for t in self._tasks if task_filter.matches(t)]
        return newest_first(matching)

    def create(self, fields: dict[str, Any]) -> Task:
        task = Task().apply(fields)
        while self._index_of(task.id) != -1:
            task.id = Task().id
        self._tasks.append(task)
        return deepcopy(task)

    def update(self, task_id: str, changes: dict[str, Any]) -> Optional[Task]:
        idx = self._index_of(task_id)
        if idx == -1:
            return None
        self._tasks[idx].apply(changes)
        return deepcopy(self._tasks[idx])

    def delete(self, task_id: str) -> bool:
        idx = self._index_of(task_id)
        if idx == -1:
            return False
        self._tasks.pop(idx)
        return True
