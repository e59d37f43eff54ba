"""Client side of the task board: HTTP client, board state, derived views."""

from .api_client import TaskBoardClient
from .board import BoardView, TaskDraft
from .views import completion_rate, group_by_status

__all__ = ["BoardView", "TaskBoardClient", "TaskDraft", "completion_rate", "group_by_status"]
