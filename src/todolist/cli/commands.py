# src/todolist/cli/commands.py

from __future__ import annotations

import logging
import re
from collections.abc import Callable

from ..core.ports import NotifyCategory
from ..core.state import AppState
from ..tasks.task_errors import PersistenceError, TaskValidationError
from ..tasks.task_models import Task

CommandHandler = Callable[[AppState, list[str]], str | None]

logger = logging.getLogger(__name__)

_FIELD_SEP = re.compile(r"(?<!\\)\|")

NOT_SAVED_MESSAGE = "Change applied, but it could not be saved and may be lost on restart."


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /rm, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string, or None if the line is not a command
        (or the command has nothing to print).
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."
        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  <title> [| assignee] - add a task (or save the task being edited)")
        lines.append("  Write \\| for a literal | inside the title.")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def render_tasks(tasks: list[Task]) -> str:
    if not tasks:
        return "No tasks. Add the first one!"
    width = len(str(len(tasks)))
    lines = []
    for i, t in enumerate(tasks, start=1):
        mark = "x" if t.completed else " "
        lines.append(f"{i:>{width}}. [{mark}] {t.title}  ({t.assignee})")
    return "\n".join(lines)


def _listing(state: AppState) -> str:
    return render_tasks(state.store.list_sorted())


def _resolve_ref(state: AppState, args: list[str]) -> Task | None:
    """
    Find a task by id or by its 1-based position in the current listing.
    Ids are matched first.
    """
    if not args:
        return None
    ref = args[0].rstrip(".")
    tasks = state.store.list_sorted()
    for t in tasks:
        if t.id == ref:
            return t
    if ref.isdigit():
        idx = int(ref) - 1
        if 0 <= idx < len(tasks):
            return tasks[idx]
    return None


def _not_found(state: AppState) -> None:
    state.notifier.notify("Task not found.", NotifyCategory.WARNING)


def _not_saved(state: AppState) -> None:
    logger.exception("Task change was not persisted.")
    state.notifier.notify(NOT_SAVED_MESSAGE, NotifyCategory.ERROR)


# ---- form submit (non-command input) ----


def parse_form(line: str) -> tuple[str, str]:
    """
    Split "title | assignee" into (title, assignee); assignee is optional.
    Only the first unescaped "|" separates; "\\|" stands for a literal pipe.
    """
    parts = _FIELD_SEP.split(line, maxsplit=1)
    title = parts[0]
    assignee = parts[1] if len(parts) > 1 else ""
    return title.replace("\\|", "|").strip(), assignee.replace("\\|", "|").strip()


def submit_form(state: AppState, line: str) -> str | None:
    """
    Equivalent of submitting the add/edit form.

    In edit mode the line updates the task being edited and leaves edit mode;
    otherwise it creates a new task.
    """
    title, assignee = parse_form(line)
    if not title:
        state.notifier.notify("Enter a task title!", NotifyCategory.WARNING)
        return None

    editing_id = state.editing_id
    try:
        if editing_id:
            state.editing_id = None
            if state.store.update(editing_id, title, assignee):
                state.notifier.notify("Task updated!", NotifyCategory.SUCCESS)
            else:
                _not_found(state)
        else:
            state.store.create(title, assignee)
            state.notifier.notify("Task added!", NotifyCategory.SUCCESS)
    except TaskValidationError as e:
        state.notifier.notify(f"Invalid task: {e}", NotifyCategory.WARNING)
        return None
    except PersistenceError:
        _not_saved(state)

    return _listing(state)


# ---- commands ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return _listing(state)


def cmd_edit(state: AppState, args: list[str]) -> str | None:
    """
    /edit <n|id>  -> next form submit updates this task
    """
    if not args:
        return "Usage: /edit <number or id>"
    task = _resolve_ref(state, args)
    if task is None:
        _not_found(state)
        return None

    state.editing_id = task.id
    # The default assignee is shown as blank, so re-submitting keeps it "unassigned".
    assignee = "" if task.assignee == state.settings.default_assignee else task.assignee
    title = task.title.replace("|", "\\|")
    return (
        f"Editing task {task.id}:\n"
        f"  {title} | {assignee}\n"
        "Type the new 'title | assignee', or /cancel."
    )


def cmd_cancel(state: AppState, args: list[str]) -> str:
    if state.editing_id is None:
        return "Not editing anything."
    state.editing_id = None
    return "Edit cancelled."


def cmd_done(state: AppState, args: list[str]) -> str | None:
    if not args:
        return "Usage: /done <number or id>"
    task = _resolve_ref(state, args)
    if task is None:
        _not_found(state)
        return None

    try:
        completed = state.store.toggle_completion(task.id)
    except PersistenceError:
        _not_saved(state)
        return _listing(state)

    if completed is None:
        _not_found(state)
        return None
    status_text = "marked as completed" if completed else "restored"
    state.notifier.notify(f"Task {status_text}!", NotifyCategory.INFO)
    return _listing(state)


def cmd_rm(state: AppState, args: list[str]) -> str | None:
    if not args:
        return "Usage: /rm <number or id>"
    task = _resolve_ref(state, args)
    if task is None:
        _not_found(state)
        return None

    if state.settings.confirm_delete and not state.confirm.confirm(
        f'Are you sure you want to delete "{task.title}"?'
    ):
        return None

    try:
        removed = state.store.delete(task.id)
    except PersistenceError:
        _not_saved(state)
        return _listing(state)
    finally:
        if state.editing_id == task.id:
            state.editing_id = None

    if not removed:
        _not_found(state)
        return None
    state.notifier.notify("Task deleted!", NotifyCategory.WARNING)
    return _listing(state)


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks (open first, newest first).", aliases=["ls"])
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <number or id>.")
registry.register("cancel", cmd_cancel, help_text="Leave edit mode.")
registry.register("done", cmd_done, help_text="Toggle completion: /done <number or id>.", aliases=["toggle"])
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <number or id>.", aliases=["delete"])
