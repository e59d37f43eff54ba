"""Terminal rendering of the board with rich."""

from __future__ import annotations

from datetime import date
from typing import Any, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ..domain.models import TaskStatus
from .board import BoardView

PRIORITY_COLORS = {"high": "dark_orange", "medium": "green", "low": "cyan"}
BAR_WIDTH = 30


def _due_label(value: Optional[str]) -> Optional[str]:
    if not value:
        return None
    try:
        return date.fromisoformat(value).strftime("%b %d, %Y")
    except ValueError:
        return value


def render_card(task: dict[str, Any]) -> str:
    color = PRIORITY_COLORS.get(str(task.get("priority")), "white")
    lines = [f"[{color}]●[/{color}] [bold]{escape(str(task.get('title', '')))}[/bold]"]
    if task.get("description"):
        lines.append(f"[dim]{escape(str(task['description']))}[/dim]")
    meta = f"Priority: {task.get('priority')}"
    due = _due_label(task.get("dueDate"))
    if due:
        meta += f" • Due: {due}"
    lines.append(f"[dim]{meta}  #{task.get('id', '')}[/dim]")
    return "\n".join(lines)


def completion_bar(rate: int, width: int = BAR_WIDTH) -> str:
    filled = round(width * rate / 100)
    return f"[green]{'█' * filled}[/green][dim]{'░' * (width - filled)}[/dim] {rate}%"


def render_board(board: BoardView, console: Optional[Console] = None) -> Console:
    """Print the three status columns, completion bar, filters, and last error."""
    console = console or Console()
    groups = board.grouped

    console.print(f"[bold]Completion[/bold] {completion_bar(board.completion_rate)}")
    if not board.current_filter.is_empty:
        console.print(f"[dim]Filters: status={board.status_filter} priority={board.priority_filter}[/dim]")

    table = Table(expand=True, show_lines=False)
    for status in TaskStatus:
        table.add_column(f"{status.label} ({len(groups[status])})", ratio=1, vertical="top")
    cells = ["\n\n".join(render_card(t) for t in groups[status]) or "[dim]No tasks[/dim]" for status in TaskStatus]
    table.add_row(*cells)
    console.print(table)

    if board.busy:
        console.print("[dim]Syncing with backend...[/dim]")
    if board.error:
        console.print(f"[bold red]{escape(board.error)}[/bold red]")
    return console
