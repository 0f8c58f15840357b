# src/todolist/logging_setup.py

from __future__ import annotations

import logging
import sys
from pathlib import Path

LOG_FILE_NAME = "todolist.log"


def _level_from_name(name: str | None, default: int = logging.INFO) -> int:
    """Map "debug" / "WARNING" / "10" to a logging level; unknown names give default."""
    if not name or not name.strip():
        return default
    raw = name.strip().upper()
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else default


class _StorageWriteFilter(logging.Filter):
    """
    Console filter: storage backends log every write at DEBUG,
    which would interleave with the REPL prompt. Only their warnings
    and errors reach the console; the log file still gets everything.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name.startswith("todolist.storage."):
            return record.levelno >= logging.WARNING
        return True


def setup_logging(*, log_dir: str | Path, level_name: str | None = "INFO") -> Path:
    """
    Configure the root logger once at startup:
    - stderr at the configured level, storage write chatter filtered out
    - <log_dir>/todolist.log at DEBUG

    Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)

    # Remove any pre-existing handlers to avoid duplicates.
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(_level_from_name(level_name))
    ch.setFormatter(fmt)
    ch.addFilter(_StorageWriteFilter())
    root.addHandler(ch)

    fh = logging.FileHandler(str(log_file), encoding="utf-8")
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(fmt)
    root.addHandler(fh)

    return log_file
