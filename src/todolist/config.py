# src/todolist/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Built lazily on first get_settings(), so importing never reads the environment.
- Every value has a working default; nothing is required.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .tasks.task_models import DEFAULT_ASSIGNEE
from .tasks.task_store import DEFAULT_STORAGE_KEY

logger = logging.getLogger(__name__)

ENV_PREFIX = "TODO"

# Roughly what browsers allow per origin in local storage.
DEFAULT_QUOTA_BYTES = 5 * 1024 * 1024


class StorageBackend(StrEnum):
    FILE = "file"
    SQLITE = "sqlite"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _env_backend(name: str, default: StorageBackend) -> StorageBackend:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return StorageBackend(raw.strip().lower())
    except ValueError:
        logger.warning("Unknown storage backend %r in %s; using %s.", raw, name, default.value)
        return default


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Local data paths (ignored by git) ----
    data_dir: Path
    storage_backend: StorageBackend
    storage_db_path: Path

    # ---- Task store ----
    storage_key: str
    storage_quota_bytes: int
    default_assignee: str

    # ---- Console front end ----
    confirm_delete: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "todolist").strip() or "todolist"
        log_level = _env(_k("LOG_LEVEL"), "INFO").strip().upper() or "INFO"

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/todolist"))
        storage_backend = _env_backend(_k("STORAGE_BACKEND"), StorageBackend.FILE)
        storage_db_path = _env_path(_k("STORAGE_DB_PATH"), data_dir / "storage.sqlite3")

        storage_key = _env(_k("STORAGE_KEY"), DEFAULT_STORAGE_KEY).strip() or DEFAULT_STORAGE_KEY
        storage_quota_bytes = max(0, _env_int(_k("STORAGE_QUOTA_BYTES"), DEFAULT_QUOTA_BYTES))
        default_assignee = _env(_k("DEFAULT_ASSIGNEE"), DEFAULT_ASSIGNEE).strip() or DEFAULT_ASSIGNEE

        confirm_delete = _env_bool(_k("CONFIRM_DELETE"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            storage_backend=storage_backend,
            storage_db_path=storage_db_path,
            storage_key=storage_key,
            storage_quota_bytes=storage_quota_bytes,
            default_assignee=default_assignee,
            confirm_delete=confirm_delete,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        # Local .env never overrides variables already set in the environment.
        load_dotenv(find_dotenv(usecwd=True), override=False)
        _SETTINGS = Settings.from_env()
    return _SETTINGS
