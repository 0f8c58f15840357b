# tests/fakes.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

from todolist.core.ports import NotifyCategory
from todolist.storage.errors import StorageWriteError


class MemoryStorage:
    """
    In-memory KeyValueStorage used by unit tests.

    - records every write for assertions
    - can be told to fail writes (simulates a full disk / exceeded quota)
    """

    def __init__(self, items: dict[str, str] | None = None) -> None:
        self.items: dict[str, str] = dict(items or {})
        self.writes: list[tuple[str, str]] = []
        self.fail_writes = False

    def get_item(self, key: str) -> str | None:
        return self.items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise StorageWriteError("simulated write failure")
        self.writes.append((key, value))
        self.items[key] = value


class FakeClock:
    """Deterministic clock; advance() moves time forward."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 5, 1, 10, 0, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float = 1.0) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@dataclass(slots=True)
class Notification:
    message: str
    category: NotifyCategory


@dataclass(slots=True)
class RecordingNotifier:
    sent: list[Notification] = field(default_factory=list)

    def notify(self, message: str, category: NotifyCategory = NotifyCategory.INFO) -> None:
        self.sent.append(Notification(message=message, category=category))

    @property
    def last(self) -> Notification | None:
        return self.sent[-1] if self.sent else None


@dataclass(slots=True)
class FakeConfirm:
    answer: bool = True
    asked: list[str] = field(default_factory=list)

    def confirm(self, message: str) -> bool:
        self.asked.append(message)
        return self.answer
