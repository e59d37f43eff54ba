"""Task model for the task board.

A task is the only entity.  Attributes are snake_case in Python; the wire
and stored shape (:meth:`Task.to_dict`) uses the camelCase keys the browser
client expects::

    {id, title, description, priority, status, dueDate, createdAt}
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Iterable, Optional


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class TaskPriority(str, Enum):
    """How urgent a task is."""

    LOW = "low"
    MEDIUM = "medium"  # default
    HIGH = "high"


class TaskStatus(str, Enum):
    """Board column a task lives in."""

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    DONE = "done"

    @property
    def label(self) -> str:
        return _STATUS_LABELS[self]


_STATUS_LABELS = {
    TaskStatus.TODO: "To Do",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.DONE: "Done",
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="microseconds")


def _generate_id() -> str:
    return uuid.uuid4().hex


def parse_priority(value: Any) -> Optional[TaskPriority]:
    """Return the matching :class:`TaskPriority`, or ``None`` for anything else."""
    if isinstance(value, TaskPriority):
        return value
    if isinstance(value, str):
        try:
            return TaskPriority(value)
        except ValueError:
            return None
    return None


def parse_status(value: Any) -> Optional[TaskStatus]:
    """Return the matching :class:`TaskStatus`, or ``None`` for anything else."""
    if isinstance(value, TaskStatus):
        return value
    if isinstance(value, str):
        try:
            return TaskStatus(value)
        except ValueError:
            return None
    return None


def parse_due_date(value: Any) -> Optional[date]:
    """Parse a calendar date from ``YYYY-MM-DD`` or an ISO-8601 datetime.

    Unparsable input yields ``None`` rather than an error.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text).date()
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Task dataclass
# ---------------------------------------------------------------------------

@dataclass
class Task:
    """A single card on the board."""

    id: str = field(default_factory=_generate_id)
    title: str = ""
    description: str = ""
    priority: TaskPriority = TaskPriority.MEDIUM
    status: TaskStatus = TaskStatus.TODO
    due_date: Optional[date] = None
    created_at: str = field(default_factory=now_iso)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "priority": self.priority.value,
            "status": self.status.value,
            "dueDate": self.due_date.isoformat() if self.due_date else None,
            "createdAt": self.created_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        return cls(
            id=str(data.get("id") or _generate_id()),
            title=str(data.get("title") or ""),
            description=str(data.get("description") or ""),
            priority=parse_priority(data.get("priority")) or TaskPriority.MEDIUM,
            status=parse_status(data.get("status")) or TaskStatus.TODO,
            due_date=parse_due_date(data.get("dueDate")),
            created_at=str(data.get("createdAt") or now_iso()),
        )

    def apply(self, changes: dict[str, Any]) -> "Task":
        """Set every attribute named in *changes* (already validated)."""
        for key, value in changes.items():
            if key in self.__dataclass_fields__ and key not in ("id", "created_at"):
                setattr(self, key, value)
        return self


# ---------------------------------------------------------------------------
# Filtering / ordering
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TaskFilter:
    """Optional equality filters on ``status`` and ``priority``.

    Values are kept as raw strings: a value outside the enumerated set is a
    legal filter that simply matches nothing.
    """

    status: Optional[str] = None
    priority: Optional[str] = None

    @classmethod
    def from_query(cls, status: Optional[str] = None, priority: Optional[str] = None) -> "TaskFilter":
        return cls(status=status or None, priority=priority or None)

    @property
    def is_empty(self) -> bool:
        return self.status is None and self.priority is None

    def matches(self, task: Task) -> bool:
        if self.status is not None and task.status.value != self.status:
            return False
        if self.priority is not None and task.priority.value != self.priority:
            return False
        return True

    def to_params(self) -> dict[str, str]:
        params: dict[str, str] = {}
        if self.status is not None:
            params["status"] = self.status
        if self.priority is not None:
            params["priority"] = self.priority
        return params


def newest_first(tasks: Iterable[Task]) -> list[Task]:
    """Order by ``created_at`` descending.

    *tasks* must be in insertion order; ties keep the later insert first.
    """
    return sorted(reversed(list(tasks)), key=lambda t: t.created_at, reverse=True)
