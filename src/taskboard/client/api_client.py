"""Synchronous HTTP client for the task board API."""

from __future__ import annotations

from typing import Any, Optional

import httpx
from loguru import logger

from ..constants import (
    DEFAULT_API_URL,
    DEFAULT_REQUEST_TIMEOUT,
    MSG_CREATE_FAILED,
    MSG_DELETE_FAILED,
    MSG_LOAD_FAILED,
    MSG_UPDATE_FAILED,
    TASKS_PATH,
)
from ..domain.models import TaskFilter
from ..errors import ApiError


def _error_message(response: httpx.Response, fallback: str) -> str:
    try:
        body = response.json()
    except ValueError:
        return fallback
    if isinstance(body, dict) and isinstance(body.get("error"), str) and body["error"]:
        return body["error"]
    return fallback


class TaskBoardClient:
    """Thin wrapper over :class:`httpx.Client` speaking the ``/api/tasks`` contract.

    Every failure (transport error or non-2xx response) is raised as
    :class:`~taskboard.errors.ApiError` carrying a displayable message.
    Nothing is retried.

    Parameters
    ----------
    base_url:
        Server root, e.g. ``http://127.0.0.1:4000``.
    http:
        Pre-built client (tests inject FastAPI's ``TestClient`` here).
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        http: Optional[httpx.Client] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self._owns_http = http is None
        self._http = http or httpx.Client(base_url=self.base_url, timeout=timeout)

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    def __enter__(self) -> "TaskBoardClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _request(self, method: str, path: str, fallback: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._http.request(method, path, **kwargs)
        except httpx.HTTPError as exc:
            logger.warning("{} {} failed: {}", method, path, exc)
            raise ApiError(fallback) from exc
        if response.is_error:
            message = _error_message(response, fallback)
            logger.warning("{} {} -> {} {}", method, path, response.status_code, message)
            raise ApiError(message, status_code=response.status_code)
        return response

    def list_tasks(self, status: Optional[str] = None, priority: Optional[str] = None) -> list[dict[str, Any]]:
        params = TaskFilter.from_query(status, priority).to_params()
        response = self._request("GET", TASKS_PATH, MSG_LOAD_FAILED, params=params)
        return list(response.json())

    def create_task(self, payload: dict[str, Any]) -> dict[str, Any]:
        response = self._request("POST", TASKS_PATH, MSG_CREATE_FAILED, json=payload)
        return response.json()

    def update_task(self, task_id: str, updates: dict[str, Any]) -> dict[str, Any]:
        response = self._request("PATCH", f"{TASKS_PATH}/{task_id}", MSG_UPDATE_FAILED, json=updates)
        return response.json()

    def delete_task(self, task_id: str) -> None:
        self._request("DELETE", f"{TASKS_PATH}/{task_id}", MSG_DELETE_FAILED)
