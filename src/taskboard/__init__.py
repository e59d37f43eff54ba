"""Provide the public `taskboard` package exports."""

from __future__ import annotations

__version__ = "1.0.0"

from .domain.models import Task, TaskFilter, TaskPriority, TaskStatus

__all__ = ["Task", "TaskFilter", "TaskPriority", "TaskStatus", "__version__"]
