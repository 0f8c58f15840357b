# tests/test_console.py

from __future__ import annotations

import builtins
from collections.abc import Iterable

import pytest

from todolist.cli.bootstrap import create_initial_state
from todolist.config import StorageBackend
from todolist.connectors.console_connector import ConsoleNotifier, ConsolePrompt, run_console_loop
from todolist.core.ports import NotifyCategory
from todolist.storage import FileStorage, SqliteStorage

from .fakes import FakeConfirm, RecordingNotifier


def _feed(monkeypatch: pytest.MonkeyPatch, lines: Iterable[str]) -> None:
    it = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr(builtins, "input", fake_input)


@pytest.mark.parametrize(
    ("backend", "expected_type"),
    [(StorageBackend.FILE, FileStorage), (StorageBackend.SQLITE, SqliteStorage)],
)
def test_create_initial_state_builds_configured_backend(settings, backend, expected_type) -> None:
    settings.storage_backend = backend
    state = create_initial_state(settings=settings, notifier=RecordingNotifier(), confirm=FakeConfirm())
    state.store.create("persisted")

    assert isinstance(state.store._storage, expected_type)
    again = create_initial_state(settings=settings, notifier=RecordingNotifier(), confirm=FakeConfirm())
    assert [t.title for t in again.store.list_sorted()] == ["persisted"]


def test_console_notifier_prefixes_category(capsys) -> None:
    ConsoleNotifier().notify("Task added!", NotifyCategory.SUCCESS)
    assert "[OK] Task added!" in capsys.readouterr().out


def test_console_prompt_answers(monkeypatch: pytest.MonkeyPatch) -> None:
    _feed(monkeypatch, ["y", "no", " YES "])
    prompt = ConsolePrompt()
    assert prompt.confirm("?") is True
    assert prompt.confirm("?") is False
    assert prompt.confirm("?") is True
    # EOF counts as "no"
    assert prompt.confirm("?") is False


def test_console_loop_session(state, monkeypatch: pytest.MonkeyPatch, capsys) -> None:
    _feed(monkeypatch, ["Buy milk", "", "/done 1", "/nope", "/exit", "never read"])

    run_console_loop(state)

    out = capsys.readouterr().out
    assert "No tasks. Add the first one!" in out
    assert "1. [x] Buy milk  (Nieprzypisane)" in out
    assert "Unknown command: /nope" in out
    assert [t.title for t in state.store.list_sorted()] == ["Buy milk"]


def test_console_loop_stops_on_eof(state, monkeypatch: pytest.MonkeyPatch) -> None:
    _feed(monkeypatch, [])
    run_console_loop(state)


@pytest.mark.parametrize("payload", [b"not-json", b'[{"id": "\xff"}]', b"[" * 200000])
def test_startup_survives_corrupted_task_file(settings, payload: bytes) -> None:
    settings.storage_backend = StorageBackend.FILE
    settings.data_dir.mkdir(parents=True)
    (settings.data_dir / "todoTasks.json").write_bytes(payload)

    state = create_initial_state(settings=settings, notifier=RecordingNotifier(), confirm=FakeConfirm())

    assert state.store.list_sorted() == []
    state.store.create("after recovery")
    assert [t.title for t in state.store.list_sorted()] == ["after recovery"]
