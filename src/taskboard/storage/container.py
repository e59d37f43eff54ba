from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional
from urllib.parse import unquote, urlparse

from loguru import logger

from ..errors import ConfigError
from .file_repos import YamlTaskRepository
from .interfaces import TaskRepository
from .memory_repo import InMemoryTaskRepository

if TYPE_CHECKING:
    from ..config import Settings


_FILE_SCHEMES = {"yaml", "file"}


def resolve_store_path(database_url: str) -> Path:
    """Map a database URL to the YAML collection file it names.

    Accepts ``yaml:///abs/path.yaml``, ``file:///abs/path.yaml`` or a bare
    filesystem path.
    """
    text = database_url.strip()
    if "://" not in text:
        return Path(text).expanduser()
    parsed = urlparse(text)
    if parsed.scheme not in _FILE_SCHEMES:
        raise ConfigError(f"Unsupported database URL scheme: {parsed.scheme!r}")
    raw_path = unquote(parsed.netloc + parsed.path)
    if not raw_path:
        raise ConfigError(f"Database URL has no path: {database_url!r}")
    return Path(raw_path).expanduser()


def build_repository(settings: Optional["Settings"] = None) -> TaskRepository:
    """Select the storage backend once, based on whether a database is configured."""
    database_url = settings.database_url if settings is not None else None
    if not database_url:
        logger.info("No database configured; tasks are kept in memory")
        return InMemoryTaskRepository()
    path = resolve_store_path(database_url)
    logger.info("Using YAML task store at {}", path)
    return YamlTaskRepository(path)

