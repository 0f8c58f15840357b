# src/todolist/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_store import TaskStore
from .ports import ConfirmPrompt, Notifier


@dataclass
class AppState:
    # Settings live on the state for easy access from commands.
    settings: Any

    store: TaskStore
    notifier: Notifier
    confirm: ConfirmPrompt

    # Presentation state: id of the task the next form submit will update.
    editing_id: str | None = None
