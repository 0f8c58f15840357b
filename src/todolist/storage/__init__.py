"""
Key-value storage backends.

Components:
- errors.py: storage exception hierarchy
- file_storage.py: one JSON file per key inside a data directory
- sqlite_storage.py: SQLite key/value table

Both backends implement core.ports.KeyValueStorage.
"""

from .errors import (
    StorageError,
    StorageQuotaExceededError,
    StorageReadError,
    StorageWriteError,
)
from .file_storage import FileStorage
from .sqlite_storage import SqliteStorage

__all__ = [
    "FileStorage",
    "SqliteStorage",
    "StorageError",
    "StorageQuotaExceededError",
    "StorageReadError",
    "StorageWriteError",
]
