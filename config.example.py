# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Use .env (local, gitignored) for per-machine values.

This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "TODO_APP_NAME": "App display name (default: todolist).",
    "TODO_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "TODO_DATA_DIR": "Local data directory for task files and the log (default: .local/todolist).",
    "TODO_STORAGE_BACKEND": "Where tasks are kept: file | sqlite (default: file).",
    "TODO_STORAGE_DB_PATH": "SQLite path for the sqlite backend (default: <data_dir>/storage.sqlite3).",
    # Task store
    "TODO_STORAGE_KEY": "Key the task list is stored under (default: todoTasks).",
    "TODO_STORAGE_QUOTA_BYTES": "Max size of the stored task list, 0 = unlimited (default: 5 MiB).",
    "TODO_DEFAULT_ASSIGNEE": "Assignee used when none is given (default: Nieprzypisane).",
    # Console
    "TODO_CONFIRM_DELETE": "Ask before deleting a task (true/false, default: true).",
}
