# tests/test_logging_setup.py

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from todolist.logging_setup import _level_from_name, _StorageWriteFilter, setup_logging


@pytest.fixture()
def restore_root_logger():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield root
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("debug", logging.DEBUG),
        (" WARNING ", logging.WARNING),
        ("15", 15),
        ("", logging.INFO),
        (None, logging.INFO),
        ("chatty", logging.INFO),
    ],
)
def test_level_from_name(name, expected) -> None:
    assert _level_from_name(name) == expected


def _record(name: str, level: int) -> logging.LogRecord:
    return logging.LogRecord(name, level, __file__, 1, "msg", None, None)


def test_filter_hides_storage_debug_only() -> None:
    f = _StorageWriteFilter()
    assert f.filter(_record("todolist.storage.file_storage", logging.DEBUG)) is False
    assert f.filter(_record("todolist.storage.sqlite_storage", logging.WARNING)) is True
    assert f.filter(_record("todolist.tasks.task_store", logging.DEBUG)) is True


def test_setup_logging_writes_file_and_sets_console_level(tmp_path: Path, restore_root_logger) -> None:
    log_file = setup_logging(log_dir=tmp_path / "logs", level_name="warning")

    handlers = restore_root_logger.handlers
    assert len(handlers) == 2
    console = next(h for h in handlers if not isinstance(h, logging.FileHandler))
    assert console.level == logging.WARNING

    logging.getLogger("todolist.test").debug("hello file")
    for h in handlers:
        h.flush()
    assert log_file == tmp_path / "logs" / "todolist.log"
    assert "hello file" in log_file.read_text("utf-8")


def test_setup_logging_twice_does_not_duplicate_handlers(tmp_path: Path, restore_root_logger) -> None:
    setup_logging(log_dir=tmp_path)
    setup_logging(log_dir=tmp_path)
    assert len(restore_root_logger.handlers) == 2
