# src/todolist/storage/errors.py

from __future__ import annotations


class StorageError(Exception):
    """Base class for key-value storage failures."""


class StorageReadError(StorageError):
    """The backend could not read a stored value (missing keys are not errors)."""


class StorageWriteError(StorageError):
    """The backend could not durably write a value."""


class StorageQuotaExceededError(StorageWriteError):
    def __init__(self, key: str, size: int, quota: int) -> None:
        super().__init__(f"value for key {key!r} is {size} bytes, quota is {quota} bytes")
        self.key = key
        self.size = size
        self.quota = quota
