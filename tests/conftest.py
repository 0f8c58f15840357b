# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from todolist.core.state import AppState
from todolist.tasks.task_store import TaskStore

from .fakes import FakeClock, FakeConfirm, MemoryStorage, RecordingNotifier


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the commands.

    We intentionally use a SimpleNamespace rather than the real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="todolist-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        storage_db_path=tmp_path / "data" / "storage.sqlite3",
        storage_key="todoTasks",
        storage_quota_bytes=0,
        default_assignee="Nieprzypisane",
        confirm_delete=True,
    )


@pytest.fixture()
def storage() -> MemoryStorage:
    return MemoryStorage()


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(storage: MemoryStorage, clock: FakeClock) -> TaskStore:
    s = TaskStore(storage, clock=clock)
    s.load()
    return s


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def confirm() -> FakeConfirm:
    return FakeConfirm()


@pytest.fixture()
def state(settings, store, notifier, confirm) -> AppState:
    return AppState(settings=settings, store=store, notifier=notifier, confirm=confirm)
