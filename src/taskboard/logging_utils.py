"""Logger setup and log-formatting helpers."""

from __future__ import annotations

import json
import sys
from typing import Any

from loguru import logger

LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{module}</cyan>:<cyan>{line}</cyan>\n"
    "{message}"
)


def configure_logging(level: str = "INFO", sink: Any = None) -> int:
    """Replace loguru's default handler with a single formatted sink.

    Args:
        level: Minimum level name (case-insensitive).
        sink: Destination; defaults to ``sys.stderr``.

    Returns:
        The loguru handler id.
    """
    logger.remove()
    return logger.add(sink or sys.stderr, level=level.upper(), format=LOG_FORMAT)


def pretty(obj: Any, *, indent: int = 2) -> str:
    """Serialize an object as JSON for readable logs.

    Args:
        obj: Object to serialize.
        indent: Indentation level for JSON output.

    Returns:
        A JSON string when possible; otherwise `str(obj)`.
    """
    try:
        return json.dumps(obj, indent=indent, default=str)
    except (TypeError, ValueError):
        return str(obj)
