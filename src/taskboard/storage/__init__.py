from .container import build_repository, resolve_store_path
from .file_repos import YamlTaskRepository
from .interfaces import TaskRepository
from .memory_repo import InMemoryTaskRepository

__all__ = [
    "InMemoryTaskRepository",
    "TaskRepository",
    "YamlTaskRepository",
    "build_repository",
    "resolve_store_path",
]
