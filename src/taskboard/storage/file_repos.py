"""Durable task storage: one YAML document collection on disk.

Layout::

    version: 1
    tasks:
      - {id: ..., title: ..., ...}   # insertion order

Every operation holds the file lock for its whole read-modify-write cycle,
so each call is atomic with respect to other processes sharing the file.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Optional

import yaml
from loguru import logger

from ..constants import STORE_FORMAT_VERSION
from ..domain.models import Task, TaskFilter, newest_first
from ..errors import StorageError
from ..io_utils import FileLock, atomic_write_yaml, load_yaml_mapping
from .interfaces import TaskRepository


class YamlTaskRepository(TaskRepository):
    name = "yaml"

    def __init__(self, path: Path, lock_path: Optional[Path] = None) -> None:
        self.path = path
        self._lock = FileLock(lock_path or path.with_suffix(f"{path.suffix}.lock"))
        self._thread_lock = threading.RLock()

    # -- internal helpers ---------------------------------------------------

    @contextmanager
    def _locked(self, action: str) -> Iterator[None]:
        with self._thread_lock:
            try:
                with self._lock:
                    yield
            except (OSError, yaml.YAMLError) as exc:
                logger.error("Task store {} failed for {}: {}", action, self.path, exc)
                raise StorageError(f"Task store {action} failed") from exc

    def _load(self) -> list[Task]:
        raw = load_yaml_mapping(self.path)
        items = raw.get("tasks", [])
        if not isinstance(items, list):
            return []
        tasks: list[Task] = []
        backfilled = 0
        for item in items:
            if not isinstance(item, dict):
                continue
            if not item.get("id") or not item.get("createdAt"):
                backfilled += 1
            tasks.append(Task.from_dict(item))
        if backfilled:
            # ids and createdAt generated above must survive the next load
            logger.warning("Assigned missing id/createdAt to {} task(s) in {}", backfilled, self.path)
            self._save(tasks)
        return tasks

    def _save(self, tasks: list[Task]) -> None:
        payload = {"version": STORE_FORMAT_VERSION, "tasks": [t.to_dict() for t in tasks]}
        atomic_write_yaml(self.path, payload)

    # -- public API ---------------------------------------------------------

    def list(self, task_filter: Optional[TaskFilter] = None) -> list[Task]:
        task_filter = task_filter or TaskFilter()
        with self._locked("read"):
            tasks = self._load()
        return newest_first(t for t in tasks if task_filter.matches(t))

    def create(self, fields: dict[str, Any]) -> Task:
        task = Task().apply(fields)
        with self._locked("write"):
            tasks = self._load()
            taken = {t.id for t in tasks}
            while task.id in taken:
                task.id = Task().id
            tasks.append(task)
            self._save(tasks)
        return task

    def update(self, task_id: str, changes: dict[str, Any]) -> Optional[Task]:
        with self._locked("write"):
            tasks = self._load()
            for task in tasks:
                if task.id == task_id:
                    task.apply(changes)
                    self._save(tasks)
                    return task
        return None

    def delete(self, task_id: str) -> bool:
        with self._locked("write"):
            tasks = self._load()
            remaining = [t for t in tasks if t.id != task_id]
            if len(remaining) == len(tasks):
                return False
            self._save(remaining)
        return True
