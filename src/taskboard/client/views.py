"""Derived board views.

Pure functions over a snapshot of the task collection; callers recompute
them on every change instead of storing the results.
"""

from __future__ import annotations

import math
from typing import Any, Iterable, Mapping

from ..domain.models import TaskStatus


def _status_of(task: Any) -> str:
    if isinstance(task, Mapping):
        return str(task.get("status"))
    status = getattr(task, "status", None)
    return getattr(status, "value", str(status))


def group_by_status(tasks: Iterable[Any]) -> dict[TaskStatus, list[Any]]:
    """Partition *tasks* into the three status columns, preserving order.

    Every column is present, possibly empty.  Tasks with an unknown status
    are not placed in any column.
    """
    groups: dict[TaskStatus, list[Any]] = {status: [] for status in TaskStatus}
    for task in tasks:
        try:
            groups[TaskStatus(_status_of(task))].append(task)
        except ValueError:
            continue
    return groups


def completion_rate(tasks: Iterable[Any]) -> int:
    """Percentage of tasks that are done, rounded half-up; 0 when empty."""
    items = list(tasks)
    if not items:
        return 0
    done = sum(1 for t in items if _status_of(t) == TaskStatus.DONE.value)
    return int(math.floor(done * 100 / len(items) + 0.5))
