"""
Task subsystem.

Components:
- task_models.py: data structure (Task) and the default assignee
- task_codec.py: JSON blob encoding/decoding of the whole collection
- task_errors.py: validation / decode / persistence exceptions
- task_store.py: in-memory collection persisted through a KeyValueStorage
"""

from .task_errors import PersistenceError, TaskDecodeError, TaskValidationError
from .task_models import DEFAULT_ASSIGNEE, Task
from .task_store import DEFAULT_STORAGE_KEY, TaskStore

__all__ = [
    "DEFAULT_ASSIGNEE",
    "DEFAULT_STORAGE_KEY",
    "PersistenceError",
    "Task",
    "TaskDecodeError",
    "TaskStore",
    "TaskValidationError",
]
