# src/todolist/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on a KeyValueStorage Protocol instead of a concrete
backend, and the front end talks to the user through Notifier/ConfirmPrompt.
This keeps storage and presentation swappable and makes testing easier.
"""

from enum import StrEnum
from typing import Protocol


class NotifyCategory(StrEnum):
    SUCCESS = "success"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class KeyValueStorage(Protocol):
    """
    Durable string-to-string storage.

    get_item returns None for a missing key.
    set_item replaces any previous value and raises StorageWriteError
    (or StorageQuotaExceededError) when the value could not be stored.
    """

    def get_item(self, key: str) -> str | None: ...
    def set_item(self, key: str, value: str) -> None: ...


class Notifier(Protocol):
    """Sink for user-facing messages (success / validation / failures)."""
    def notify(self, message: str, category: NotifyCategory = NotifyCategory.INFO) -> None: ...


class ConfirmPrompt(Protocol):
    def confirm(self, message: str) -> bool: ...
