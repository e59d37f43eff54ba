"""Translate untrusted request payloads into store field sets.

Only ``title`` on create is strict.  Every other field is lenient: an
out-of-range ``priority``/``status`` or an unparsable ``dueDate`` is dropped
as if it had not been sent.
"""

from __future__ import annotations

from typing import Any

from ..constants import MSG_INVALID_BODY, MSG_TITLE_REQUIRED
from ..errors import ValidationError
from .models import TaskPriority, TaskStatus, parse_due_date, parse_priority, parse_status


def _require_mapping(payload: Any) -> dict[str, Any]:
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError(MSG_INVALID_BODY)
    return payload


def _optional_fields(payload: dict[str, Any]) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    description = payload.get("description")
    if isinstance(description, str):
        fields["description"] = description.strip()
    priority = parse_priority(payload.get("priority"))
    if priority is not None:
        fields["priority"] = priority
    status = parse_status(payload.get("status"))
    if status is not None:
        fields["status"] = status
    due_date = parse_due_date(payload.get("dueDate"))
    if due_date is not None:
        fields["due_date"] = due_date
    return fields


def build_create_fields(payload: Any) -> dict[str, Any]:
    """Validate a create payload and return the full attribute set.

    Raises:
        ValidationError: If the body is not an object or ``title`` is missing,
            not a string, or blank after trimming.
    """
    data = _require_mapping(payload)
    title = data.get("title")
    if not isinstance(title, str) or not title.strip():
        raise ValidationError(MSG_TITLE_REQUIRED)
    fields: dict[str, Any] = {
        "title": title.strip(),
        "description": "",
        "priority": TaskPriority.MEDIUM,
        "status": TaskStatus.TODO,
        "due_date": None,
    }
    fields.update(_optional_fields(data))
    return fields


def build_update_fields(payload: Any) -> dict[str, Any]:
    """Return only the supplied, valid attributes of an update payload.

    A blank ``title`` is dropped so a task can never lose its title.  An
    explicit ``"dueDate": null`` clears the due date.  An empty result is
    valid and leaves the task unchanged.
    """
    data = _require_mapping(payload)
    fields = _optional_fields(data)
    title = data.get("title")
    if isinstance(title, str) and title.strip():
        fields["title"] = title.strip()
    if "dueDate" in data and data["dueDate"] is None:
        fields["due_date"] = None
    return fields
