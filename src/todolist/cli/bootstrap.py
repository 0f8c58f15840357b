# src/todolist/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- builds the configured storage backend,
- constructs and loads the TaskStore and wires it into AppState.
"""

from __future__ import annotations

import logging

from ..config import StorageBackend, get_settings
from ..core.ports import ConfirmPrompt, KeyValueStorage, Notifier
from ..core.state import AppState
from ..storage.file_storage import FileStorage
from ..storage.sqlite_storage import SqliteStorage
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.storage_db_path.parent.mkdir(parents=True, exist_ok=True)


def create_storage(settings) -> KeyValueStorage:
    quota = settings.storage_quota_bytes or None
    if settings.storage_backend == StorageBackend.SQLITE:
        return SqliteStorage(settings.storage_db_path, quota_bytes=quota)
    return FileStorage(settings.data_dir, quota_bytes=quota)


def create_initial_state(
    *,
    notifier: Notifier,
    confirm: ConfirmPrompt,
    settings=None,
    storage: KeyValueStorage | None = None,
) -> AppState:
    """
    Create AppState with a loaded TaskStore.

    Keeping settings and storage injectable makes the app easier to test and
    avoids hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if storage is None:
        _ensure_local_dirs(settings)
        storage = create_storage(settings)

    store = TaskStore(
        storage,
        storage_key=settings.storage_key,
        default_assignee=settings.default_assignee,
    )
    total = store.load()
    logger.info("Initial state ready: %d tasks (backend=%s)", total, type(storage).__name__)

    return AppState(settings=settings, store=store, notifier=notifier, confirm=confirm)
