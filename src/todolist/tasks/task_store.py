# src/todolist/tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime, timedelta, timezone

from ..core.ports import KeyValueStorage
from ..storage.errors import StorageError, StorageReadError
from .task_codec import decode_tasks, encode_tasks
from .task_errors import PersistenceError, TaskDecodeError, TaskValidationError
from .task_models import DEFAULT_ASSIGNEE, Task

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "todoTasks"

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

Clock = Callable[[], datetime]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class TaskStore:
    """
    In-memory task collection persisted as one blob in a key-value storage.

    - load() must be called once before use; it replaces the collection.
    - every mutation writes the whole collection before returning.
    - not-found is a return value (False / None), never an exception.
    - a failed write raises PersistenceError; the in-memory change is kept.

    Tasks handed out are copies; consumers re-fetch list_sorted() after a mutation.
    """

    def __init__(
        self,
        storage: KeyValueStorage,
        *,
        storage_key: str = DEFAULT_STORAGE_KEY,
        default_assignee: str = DEFAULT_ASSIGNEE,
        clock: Clock | None = None,
    ) -> None:
        if not default_assignee or not default_assignee.strip():
            raise ValueError("default_assignee must not be empty")
        self._storage = storage
        self._storage_key = storage_key
        self._default_assignee = default_assignee.strip()
        self._clock = clock or _utc_now
        self._tasks: dict[str, Task] = {}
        self._last_id_ms = 0

    # ---- helpers ----

    @staticmethod
    def _require_encodable(value: str, field: str) -> None:
        # Lone surrogates (e.g. undecodable console bytes) cannot be stored as UTF-8.
        try:
            value.encode("utf-8")
        except UnicodeEncodeError as e:
            raise TaskValidationError(f"{field} contains characters that cannot be saved") from e

    @classmethod
    def _clean_title(cls, title: str) -> str:
        cleaned = (title or "").strip()
        if not cleaned:
            raise TaskValidationError("title is required")
        cls._require_encodable(cleaned, "title")
        return cleaned

    def _clean_assignee(self, assignee: str | None) -> str:
        cleaned = (assignee or "").strip()
        self._require_encodable(cleaned, "assignee")
        return cleaned or self._default_assignee

    def _now(self) -> datetime:
        now = self._clock()
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)
        now = now.astimezone(timezone.utc)
        # Millisecond precision, so created_at survives the ISO round-trip unchanged.
        return now.replace(microsecond=now.microsecond // 1000 * 1000)

    def _allocate_id(self, created_at: datetime) -> str:
        ms = (created_at - _EPOCH) // timedelta(milliseconds=1)
        if ms <= self._last_id_ms:
            ms = self._last_id_ms + 1
        while str(ms) in self._tasks:
            ms += 1
        self._last_id_ms = ms
        return str(ms)

    def _save(self) -> None:
        blob = encode_tasks(self._tasks.values())
        try:
            self._storage.set_item(self._storage_key, blob)
        except StorageError as e:
            logger.error("Failed to persist %d tasks key=%s: %s", len(self._tasks), self._storage_key, e)
            raise PersistenceError("tasks were changed in memory but could not be saved") from e

    # ---- public API ----

    def load(self) -> int:
        """
        Replace the collection with the persisted one.

        Absent key -> empty collection. A blob that does not decode is logged
        and also yields an empty collection, as does a value the backend
        cannot read. Returns the number of tasks loaded.
        """
        try:
            blob = self._storage.get_item(self._storage_key)
        except StorageReadError:
            logger.exception("Persisted tasks under key=%s are unreadable; starting empty.", self._storage_key)
            blob = None
        tasks: dict[str, Task] = {}

        if blob is None:
            logger.info("No persisted tasks under key=%s; starting empty.", self._storage_key)
        else:
            try:
                decoded = decode_tasks(blob)
            except TaskDecodeError:
                logger.exception("Persisted tasks under key=%s are corrupted; starting empty.", self._storage_key)
                decoded = []
            for task in decoded:
                if task.id in tasks:
                    logger.warning("Duplicate task id=%s in persisted data; keeping the first.", task.id)
                    continue
                task.title = task.title.strip()
                task.assignee = task.assignee.strip() or self._default_assignee
                tasks[task.id] = task

        self._tasks = tasks
        self._last_id_ms = max((int(tid) for tid in tasks if tid.isdigit()), default=0)
        logger.info("TaskStore loaded key=%s total=%d", self._storage_key, len(tasks))
        return len(tasks)

    def create(self, title: str, assignee: str = "") -> Task:
        clean_title = self._clean_title(title)
        clean_assignee = self._clean_assignee(assignee)
        created_at = self._now()
        task = Task(
            id=self._allocate_id(created_at),
            title=clean_title,
            assignee=clean_assignee,
            completed=False,
            created_at=created_at,
        )
        self._tasks[task.id] = task
        logger.debug("Task created id=%s assignee=%s", task.id, task.assignee)
        self._save()
        return replace(task)

    def update(self, task_id: str, title: str, assignee: str = "") -> bool:
        clean_title = self._clean_title(title)
        clean_assignee = self._clean_assignee(assignee)
        task = self._tasks.get(task_id)
        if task is None:
            logger.debug("Update skipped, task id=%s not found", task_id)
            return False

        task.title = clean_title
        task.assignee = clean_assignee
        logger.debug("Task updated id=%s", task_id)
        self._save()
        return True

    def delete(self, task_id: str) -> bool:
        removed = self._tasks.pop(task_id, None) is not None
        logger.debug("Task delete id=%s removed=%s", task_id, removed)
        self._save()
        return removed

    def toggle_completion(self, task_id: str) -> bool | None:
        task = self._tasks.get(task_id)
        if task is None:
            logger.debug("Toggle skipped, task id=%s not found", task_id)
            return None

        task.completed = not task.completed
        logger.debug("Task toggled id=%s completed=%s", task_id, task.completed)
        self._save()
        return task.completed

    def list_sorted(self) -> list[Task]:
        """
        Incomplete tasks first, then completed; newest first within each group.

        Both passes are stable sorts, so equal timestamps keep their relative order.
        """
        out = [replace(t) for t in self._tasks.values()]
        out.sort(key=lambda t: t.created_at, reverse=True)
        out.sort(key=lambda t: t.completed)
        return out
