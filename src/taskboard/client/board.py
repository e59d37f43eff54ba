"""Client-side board state.

:class:`BoardView` owns the local task collection plus UI state (draft form,
filters, busy flag, last error).  The collection only changes after the
server confirms a call:

* create  -> the new task is prepended
* update  -> the entry with the same id is replaced
* delete  -> the entry is removed

A failed call sets :attr:`BoardView.error` and leaves the collection as it
was.  Every call clears the previous error first.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Optional, TypeVar

from loguru import logger

from ..domain.models import TaskFilter, TaskPriority, TaskStatus
from ..errors import ApiError
from .api_client import TaskBoardClient
from .views import completion_rate, group_by_status

ALL = "all"

T = TypeVar("T")


@dataclass
class TaskDraft:
    """Fields of the "new task" form."""

    title: str = ""
    description: str = ""
    priority: str = TaskPriority.MEDIUM.value
    due_date: str = ""

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "title": self.title,
            "description": self.description,
            "priority": self.priority,
        }
        if self.due_date:
            payload["dueDate"] = self.due_date
        return payload


class BoardView:
    def __init__(self, client: TaskBoardClient) -> None:
        self.client = client
        self.tasks: list[dict[str, Any]] = []
        self.draft = TaskDraft()
        self.status_filter: str = ALL
        self.priority_filter: str = ALL
        self.busy = False
        self.error = ""

    # -- derived views (recomputed, never stored) ---------------------------

    @property
    def grouped(self) -> dict[TaskStatus, list[dict[str, Any]]]:
        return group_by_status(self.tasks)

    @property
    def completion_rate(self) -> int:
        return completion_rate(self.tasks)

    # -- request plumbing ---------------------------------------------------

    def _call(self, action: Callable[[], T]) -> Optional[T]:
        self.busy = True
        self.error = ""
        try:
            return action()
        except ApiError as exc:
            self.error = exc.message or "Something went wrong"
            return None
        finally:
            self.busy = False

    # -- filters ------------------------------------------------------------

    @property
    def current_filter(self) -> TaskFilter:
        """The filters as sent to the server; "all" means unfiltered."""
        return TaskFilter.from_query(
            None if self.status_filter == ALL else self.status_filter,
            None if self.priority_filter == ALL else self.priority_filter,
        )

    def load(self) -> bool:
        """Re-fetch the collection with the current filters."""
        query = self.current_filter
        tasks = self._call(lambda: self.client.list_tasks(query.status, query.priority))
        if tasks is None:
            return False
        self.tasks = tasks
        return True

    def set_status_filter(self, value: str) -> bool:
        self.status_filter = value or ALL
        return self.load()

    def set_priority_filter(self, value: str) -> bool:
        self.priority_filter = value or ALL
        return self.load()

    # -- mutations ----------------------------------------------------------

    def submit_draft(self) -> Optional[dict[str, Any]]:
        """Create a task from the draft; a blank title sends nothing."""
        if not self.draft.title.strip():
            return None
        created = self._call(lambda: self.client.create_task(self.draft.to_payload()))
        if created is None:
            return None
        self.draft = TaskDraft()
        self.tasks = [created, *self.tasks]
        logger.debug("Board added task {}", created.get("id"))
        return created

    def update(self, task_id: str, updates: dict[str, Any]) -> Optional[dict[str, Any]]:
        updated = self._call(lambda: self.client.update_task(task_id, updates))
        if updated is None:
            return None
        self.tasks = [updated if t.get("id") == task_id else t for t in self.tasks]
        return updated

    def move(self, task_id: str, status: str) -> Optional[dict[str, Any]]:
        return self.update(task_id, {"status": status})

    def delete(self, task_id: str) -> bool:
        def _delete() -> bool:
            self.client.delete_task(task_id)
            return True

        if not self._call(_delete):
            return False
        self.tasks = [t for t in self.tasks if t.get("id") != task_id]
        return True
