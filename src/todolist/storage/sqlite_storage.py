# src/todolist/storage/sqlite_storage.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
import time
from pathlib import Path

from .errors import StorageQuotaExceededError, StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)


class SqliteStorage:
    """
    SQLite key-value store.

    Schema is a single table:
      kv(key TEXT PRIMARY KEY, value TEXT NOT NULL, updated_at REAL NOT NULL)

    Each method opens its own short-lived connection.
    """

    def __init__(self, db_path: str | Path = "storage.sqlite3", *, quota_bytes: int | None = None) -> None:
        self._db_path = Path(db_path)
        self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._quota_bytes = quota_bytes if quota_bytes and quota_bytes > 0 else None
        self._ensure_schema()
        logger.info("SqliteStorage ready db=%s quota=%s", self._db_path, self._quota_bytes)

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        self._configure_conn(conn)
        return conn

    @staticmethod
    def _configure_conn(conn: sqlite3.Connection) -> None:
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at REAL NOT NULL
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---- public API ----

    def get_item(self, key: str) -> str | None:
        try:
            conn = self._get_conn()
            try:
                cur = conn.execute("SELECT value FROM kv WHERE key = ?", (key,))
                row = cur.fetchone()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageReadError(f"failed to read key {key!r} from {self._db_path}") from e
        return str(row["value"]) if row else None

    def set_item(self, key: str, value: str) -> None:
        try:
            size = len(value.encode("utf-8"))
        except UnicodeEncodeError as e:
            raise StorageWriteError(f"value for key {key!r} is not encodable as UTF-8") from e
        if self._quota_bytes is not None and size > self._quota_bytes:
            raise StorageQuotaExceededError(key, size, self._quota_bytes)

        try:
            conn = self._get_conn()
            try:
                conn.execute(
                    """
                    INSERT INTO kv(key, value, updated_at)
                    VALUES (?, ?, ?)
                    ON CONFLICT(key) DO UPDATE SET
                        value = excluded.value,
                        updated_at = excluded.updated_at
                    """,
                    (key, value, time.time()),
                )
                conn.commit()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageWriteError(f"failed to write key {key!r} to {self._db_path}") from e
        logger.debug("SqliteStorage wrote key=%s bytes=%d", key, size)
