# src/todolist/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

DEFAULT_ASSIGNEE = "Nieprzypisane"


@dataclass(slots=True)
class Task:
    """
    A single to-do item.

    id and created_at are fixed at creation; created_at is timezone-aware UTC
    with millisecond precision and is used only for ordering.
    """

    id: str
    title: str
    assignee: str
    completed: bool
    created_at: datetime
