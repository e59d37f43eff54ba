"""Task API endpoints.

This module provides a FastAPI router with CRUD over the task board.  It is
mounted under ``/api/tasks`` by the main ``create_app`` factory.  Handlers
only translate :mod:`taskboard.errors` into status codes; validation lives
in :class:`~taskboard.service.TaskService`.
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from fastapi import APIRouter, Body, HTTPException, Query, Response
from loguru import logger

from ..constants import (
    MSG_CREATE_FAILED,
    MSG_DELETE_FAILED,
    MSG_LOAD_FAILED,
    MSG_NOT_FOUND,
    MSG_UPDATE_FAILED,
    TASKS_PATH,
)
from ..errors import TaskNotFoundError, ValidationError
from ..service import TaskService
from .models import ErrorResponse, TaskOut

_ERRORS = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def create_task_router(get_service: Callable[[], TaskService]) -> APIRouter:
    """Create the task API router.

    Parameters
    ----------
    get_service:
        A zero-argument callable returning the :class:`TaskService` bound to
        the storage backend selected at startup.
    """
    router = APIRouter(prefix=TASKS_PATH, tags=["tasks"])

    @router.get("", response_model=list[TaskOut], responses=_ERRORS)
    async def list_tasks(
        status: Optional[str] = Query(None),
        priority: Optional[str] = Query(None),
    ) -> list[dict[str, Any]]:
        try:
            tasks = get_service().list_tasks(status=status, priority=priority)
        except Exception:
            logger.exception("Listing tasks failed")
            raise HTTPException(status_code=500, detail=MSG_LOAD_FAILED)
        return [t.to_dict() for t in tasks]

    @router.post("", response_model=TaskOut, status_code=201, responses=_ERRORS)
    async def create_task(payload: Any = Body(None)) -> dict[str, Any]:
        try:
            task = get_service().create_task(payload)
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except Exception:
            logger.exception("Creating task failed")
            raise HTTPException(status_code=500, detail=MSG_CREATE_FAILED)
        return task.to_dict()

    @router.patch("/{task_id}", response_model=TaskOut, responses=_ERRORS)
    async def update_task(task_id: str, payload: Any = Body(None)) -> dict[str, Any]:
        try:
            task = get_service().update_task(task_id, payload)
        except ValidationError as e:
            raise HTTPException(status_code=400, detail=str(e))
        except TaskNotFoundError:
            raise HTTPException(status_code=404, detail=MSG_NOT_FOUND)
        except Exception:
            logger.exception("Updating task {} failed", task_id)
            raise HTTPException(status_code=500, detail=MSG_UPDATE_FAILED)
        return task.to_dict()

    @router.delete("/{task_id}", status_code=204, response_class=Response, responses=_ERRORS)
    async def delete_task(task_id: str) -> Response:
        try:
            get_service().delete_task(task_id)
        except TaskNotFoundError:
            raise HTTPException(status_code=404, detail=MSG_NOT_FOUND)
        except Exception:
            logger.exception("Deleting task {} failed", task_id)
            raise HTTPException(status_code=500, detail=MSG_DELETE_FAILED)
        return Response(status_code=204)

    return router
