# src/todolist/tasks/task_codec.py

"""
Persistence blob format.

The whole collection is one JSON array of objects:

    [{"id": "1714557600000", "title": "Buy milk", "assignee": "Nieprzypisane",
      "completed": false, "createdAt": "2024-05-01T10:00:00.000Z"}, ...]

createdAt is ISO-8601 UTC with millisecond precision and a "Z" suffix, which
is what browsers produce for Date.toISOString().
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import datetime, timezone
from typing import Any

from .task_errors import TaskDecodeError
from .task_models import Task

_FIELDS: dict[str, type] = {
    "id": str,
    "title": str,
    "assignee": str,
    "completed": bool,
    "createdAt": str,
}


def format_timestamp(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    # isoformat zero-pads the year, strftime("%Y") does not on every platform.
    return dt.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(raw: str) -> datetime:
    """Parse an ISO-8601 timestamp; naive values are taken as UTC."""
    try:
        dt = datetime.fromisoformat(raw)
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)
    except (ValueError, OverflowError) as e:
        # OverflowError: an offset pushes the value outside datetime's range.
        raise TaskDecodeError(f"invalid createdAt timestamp: {raw!r}") from e


def task_to_dict(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "assignee": task.assignee,
        "completed": task.completed,
        "createdAt": format_timestamp(task.created_at),
    }


def task_from_dict(raw: Any) -> Task:
    if not isinstance(raw, dict):
        raise TaskDecodeError(f"task entry must be an object, got {type(raw).__name__}")

    for name, expected in _FIELDS.items():
        if name not in raw:
            raise TaskDecodeError(f"task entry is missing field {name!r}")
        # bool is a subclass of int, so check exact types
        if type(raw[name]) is not expected:
            raise TaskDecodeError(
                f"task field {name!r} must be {expected.__name__}, got {type(raw[name]).__name__}"
            )
        if expected is str:
            try:
                raw[name].encode("utf-8")
            except UnicodeEncodeError as e:
                raise TaskDecodeError(f"task field {name!r} is not valid Unicode text") from e

    if not raw["id"]:
        raise TaskDecodeError("task id is empty")
    if not raw["title"].strip():
        raise TaskDecodeError(f"task {raw['id']} has an empty title")

    return Task(
        id=raw["id"],
        title=raw["title"],
        assignee=raw["assignee"],
        completed=raw["completed"],
        created_at=parse_timestamp(raw["createdAt"]),
    )


def encode_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([task_to_dict(t) for t in tasks], ensure_ascii=False)


def decode_tasks(blob: str) -> list[Task]:
    """Decode a blob produced by encode_tasks. Raises TaskDecodeError on any structural problem."""
    try:
        data = json.loads(blob)
    except (TypeError, ValueError, RecursionError) as e:
        raise TaskDecodeError("persisted tasks are not valid JSON") from e
    if not isinstance(data, list):
        raise TaskDecodeError(f"persisted tasks must be a JSON array, got {type(data).__name__}")
    return [task_from_dict(item) for item in data]
