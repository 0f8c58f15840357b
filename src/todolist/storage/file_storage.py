# src/todolist/storage/file_storage.py

from __future__ import annotations

import contextlib
import logging
import os
import re
from pathlib import Path

from .errors import StorageQuotaExceededError, StorageReadError, StorageWriteError

logger = logging.getLogger(__name__)

_KEY_RE = re.compile(r"^[A-Za-z0-9_.-]+$")


class FileStorage:
    """
    Key-value storage with one file per key.

    The value for key "k" lives in <data_dir>/k.json. Writes go to a temp
    file first and are moved into place with os.replace, so a reader never
    sees a half-written value.
    """

    def __init__(self, data_dir: str | Path, *, quota_bytes: int | None = None) -> None:
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._quota_bytes = quota_bytes if quota_bytes and quota_bytes > 0 else None
        logger.info("FileStorage ready dir=%s quota=%s", self._data_dir, self._quota_bytes)

    def _path_for(self, key: str) -> Path:
        if not key or not _KEY_RE.match(key) or key.startswith("."):
            raise ValueError(f"invalid storage key: {key!r}")
        return self._data_dir / f"{key}.json"

    def get_item(self, key: str) -> str | None:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise StorageReadError(f"failed to read {path}") from e

    def set_item(self, key: str, value: str) -> None:
        path = self._path_for(key)
        try:
            size = len(value.encode("utf-8"))
        except UnicodeEncodeError as e:
            raise StorageWriteError(f"value for key {key!r} is not encodable as UTF-8") from e
        if self._quota_bytes is not None and size > self._quota_bytes:
            raise StorageQuotaExceededError(key, size, self._quota_bytes)

        tmp = path.with_suffix(".tmp")
        try:
            tmp.write_text(value, "utf-8")
            os.replace(tmp, path)
        except OSError as e:
            with contextlib.suppress(OSError):
                tmp.unlink()
            raise StorageWriteError(f"failed to write {path}") from e

        with contextlib.suppress(OSError):
            # Best-effort: task titles may be personal, keep the file private on disk.
            os.chmod(path, 0o600)
        logger.debug("FileStorage wrote key=%s bytes=%d", key, size)
