"""Pydantic response models for the task board API."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

from ..domain.models import TaskPriority, TaskStatus


class TaskOut(BaseModel):
    """Wire shape of a task (camelCase keys, as the browser client reads them)."""

    id: str
    title: str
    description: str
    priority: TaskPriority
    status: TaskStatus
    dueDate: Optional[str] = None
    createdAt: str


class ErrorResponse(BaseModel):
    error: str


class ServiceInfo(BaseModel):
    name: str
    version: str
    status: str
    storage: str
