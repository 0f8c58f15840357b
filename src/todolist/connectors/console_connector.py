# src/todolist/connectors/console_connector.py

from __future__ import annotations

import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..cli.commands import submit_form
from ..core.ports import NotifyCategory
from ..core.state import AppState

logger = logging.getLogger(__name__)

_PREFIX = {
    NotifyCategory.SUCCESS: "[OK]",
    NotifyCategory.INFO: "[INFO]",
    NotifyCategory.WARNING: "[WARN]",
    NotifyCategory.ERROR: "[ERROR]",
}


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


class ConsoleNotifier:
    """Prints notifications the way the web page showed toasts."""

    def notify(self, message: str, category: NotifyCategory = NotifyCategory.INFO) -> None:
        print(f"[{_ts_local()}] {_PREFIX.get(category, '[INFO]')} {message}", flush=True)


class ConsolePrompt:
    """y/N confirmation on stdin. EOF or Ctrl+C counts as "no"."""

    def confirm(self, message: str) -> bool:
        try:
            answer = input(f"{message} [y/N]: ")
        except (EOFError, KeyboardInterrupt):
            print()
            return False
        return answer.strip().lower() in {"y", "yes"}


def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    print("Type 'title | assignee' to add a task. Use /help for commands. Use /exit to quit.\n")
    print(command_registry.handle(state, "/list"))

    while True:
        prompt = "edit> " if state.editing_id else "> "
        try:
            user_input = input(prompt).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        if user_input.startswith("/"):
            reply = command_registry.handle(state, user_input)
        else:
            reply = submit_form(state, user_input)

        if reply:
            print(reply)
