# src/todolist/tasks/task_errors.py

from __future__ import annotations


class TaskValidationError(ValueError):
    """Caller-correctable input problem (e.g. an empty title). Nothing was changed."""


class TaskDecodeError(ValueError):
    """A persisted blob does not decode into a list of tasks."""


class PersistenceError(RuntimeError):
    """
    The in-memory change was applied but could not be written to storage.

    The original storage exception is available as __cause__.
    """
