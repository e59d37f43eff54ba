from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path
from typing import Any

import uvicorn

from .client import BoardView, TaskBoardClient
from .client.render import render_board
from .config import Settings, load_settings
from .constants import ENV_CONFIG, ENV_LOG_LEVEL
from .domain.models import TaskPriority, TaskStatus
from .errors import ApiError, ConfigError
from .logging_utils import configure_logging
from .server import create_app

PRIORITIES = [p.value for p in TaskPriority]
STATUSES = [s.value for s in TaskStatus]
APP_FACTORY = 'taskboard.server.api:app_factory'


def _build_client(settings: Settings) -> TaskBoardClient:
    return TaskBoardClient(settings.api_url, timeout=settings.request_timeout)


def _emit(payload: Any) -> None:
    sys.stdout.write(json.dumps(payload, indent=2) + '\n')


def _server(args: argparse.Namespace, settings: Settings) -> int:
    host = args.host or settings.host
    port = args.port or settings.port
    log_level = settings.log_level.lower()
    if args.reload:
        # reload needs an import string; the child process reads settings from the environment
        if args.config:
            os.environ[ENV_CONFIG] = str(Path(args.config).resolve())
        os.environ[ENV_LOG_LEVEL] = settings.log_level
        uvicorn.run(APP_FACTORY, factory=True, host=host, port=port, reload=True, log_level=log_level)
        return 0

    app = create_app(settings=settings)
    uvicorn.run(app, host=host, port=port, log_level=log_level)
    return 0


def _board(args: argparse.Namespace, settings: Settings) -> int:
    with _build_client(settings) as client:
        board = BoardView(client)
        board.status_filter = args.status or 'all'
        board.priority_filter = args.priority or 'all'
        ok = board.load()
        render_board(board)
    return 0 if ok else 1


def _task_create(args: argparse.Namespace, settings: Settings) -> int:
    payload: dict[str, Any] = {'title': args.title, 'description': args.description, 'priority': args.priority}
    if args.status:
        payload['status'] = args.status
    if args.due:
        payload['dueDate'] = args.due
    with _build_client(settings) as client:
        _emit(client.create_task(payload))
    return 0


def _task_list(args: argparse.Namespace, settings: Settings) -> int:
    with _build_client(settings) as client:
        _emit(client.list_tasks(status=args.status, priority=args.priority))
    return 0


def _task_update(args: argparse.Namespace, settings: Settings) -> int:
    updates: dict[str, Any] = {}
    for attr, key in (('title', 'title'), ('description', 'description'), ('priority', 'priority'), ('status', 'status'), ('due', 'dueDate')):
        value = getattr(args, attr)
        if value is not None:
            updates[key] = value
    with _build_client(settings) as client:
        _emit(client.update_task(args.task_id, updates))
    return 0


def _task_move(args: argparse.Namespace, settings: Settings) -> int:
    with _build_client(settings) as client:
        _emit(client.update_task(args.task_id, {'status': args.status}))
    return 0


def _task_delete(args: argparse.Namespace, settings: Settings) -> int:
    with _build_client(settings) as client:
        client.delete_task(args.task_id)
    _emit({'deleted': args.task_id})
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Task board server and terminal client')
    parser.add_argument('--config', default=None, help='YAML settings file (default: ./taskboard.yaml if present)')
    parser.add_argument('--api-url', default=None, help='Base URL of the task board API')
    parser.add_argument('--log-level', default=None, help='Log level (default: INFO)')
    subparsers = parser.add_subparsers(dest='command', required=True)

    server = subparsers.add_parser('server', help='Start the API server')
    server.add_argument('--host', default=None)
    server.add_argument('--port', default=None, type=int)
    server.add_argument('--reload', action='store_true')
    server.set_defaults(func=_server)

    board = subparsers.add_parser('board', help='Render the board in the terminal')
    board.add_argument('--status', default=None, choices=STATUSES)
    board.add_argument('--priority', default=None, choices=PRIORITIES)
    board.set_defaults(func=_board)

    task = subparsers.add_parser('task', help='Manage tasks')
    task_sub = task.add_subparsers(dest='task_cmd', required=True)
    tcreate = task_sub.add_parser('create', help='Create a task')
    tcreate.add_argument('title')
    tcreate.add_argument('--description', default='')
    tcreate.add_argument('--priority', default='medium', choices=PRIORITIES)
    tcreate.add_argument('--status', default=None, choices=STATUSES)
    tcreate.add_argument('--due', default=None, help='Due date (YYYY-MM-DD)')
    tcreate.set_defaults(func=_task_create)
    tlist = task_sub.add_parser('list', help='List tasks')
    tlist.add_argument('--status', default=None)
    tlist.add_argument('--priority', default=None)
    tlist.set_defaults(func=_task_list)
    tupdate = task_sub.add_parser('update', help='Change fields of a task')
    tupdate.add_argument('task_id')
    tupdate.add_argument('--title', default=None)
    tupdate.add_argument('--description', default=None)
    tupdate.add_argument('--priority', default=None)
    tupdate.add_argument('--status', default=None)
    tupdate.add_argument('--due', default=None)
    tupdate.set_defaults(func=_task_update)
    tmove = task_sub.add_parser('move', help='Move a task to another column')
    tmove.add_argument('task_id')
    tmove.add_argument('status', choices=STATUSES)
    tmove.set_defaults(func=_task_move)
    tdelete = task_sub.add_parser('delete', help='Delete a task')
    tdelete.add_argument('task_id')
    tdelete.set_defaults(func=_task_delete)

    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    handler = getattr(args, 'func', None)
    if handler is None:
        parser.print_help()
        return 1
    try:
        settings = load_settings(config_path=Path(args.config) if args.config else None)
    except ConfigError as exc:
        sys.stderr.write(str(exc) + '\n')
        return 1
    if args.api_url:
        settings.api_url = args.api_url
    if args.log_level:
        settings.log_level = args.log_level.upper()
    configure_logging(settings.log_level)
    try:
        return int(handler(args, settings) or 0)
    except (ApiError, ConfigError) as exc:
        sys.stderr.write(str(exc) + '\n')
        return 1
