"""Task service: payload validation and store dispatch.

This is the entry-point the HTTP layer calls.  It never knows which storage
backend it talks to and raises the :mod:`taskboard.errors` taxonomy for the
router to translate.
"""

from __future__ import annotations

from typing import Any, Optional

from loguru import logger

from .domain.models import Task, TaskFilter
from .domain.validation import build_create_fields, build_update_fields
from .errors import TaskNotFoundError
from .logging_utils import pretty
from .storage.interfaces import TaskRepository


class TaskService:
    def __init__(self, repository: TaskRepository) -> None:
        self.repository = repository

    @property
    def backend(self) -> str:
        return self.repository.name

    def list_tasks(self, status: Optional[str] = None, priority: Optional[str] = None) -> list[Task]:
        return self.repository.list(TaskFilter.from_query(status, priority))

    def create_task(self, payload: Any) -> Task:
        fields = build_create_fields(payload)
        task = self.repository.create(fields)
        logger.debug("Created task {}:\n{}", task.id, pretty(task.to_dict()))
        return task

    def update_task(self, task_id: str, payload: Any) -> Task:
        changes = build_update_fields(payload)
        task = self.repository.update(task_id, changes)
        if task is None:
            raise TaskNotFoundError(task_id)
        logger.debug("Updated task {} fields={}", task_id, sorted(changes))
        return task

    def delete_task(self, task_id: str) -> None:
        if not self.repository.delete(task_id):
            raise TaskNotFoundError(task_id)
        logger.debug("Deleted task {}", task_id)
