# src/todolist/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (loading the persisted tasks),
then runs the console REPL in the main thread.
"""

from __future__ import annotations

import logging

from ..cli.bootstrap import create_initial_state
from ..config import get_settings
from ..connectors.console_connector import ConsoleNotifier, ConsolePrompt, run_console_loop
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> None:
    settings = get_settings()

    setup_logging(log_dir=settings.data_dir, level_name=settings.log_level)

    logger.info("Starting %s...", settings.app_name)

    state = create_initial_state(
        settings=settings,
        notifier=ConsoleNotifier(),
        confirm=ConsolePrompt(),
    )

    try:
        run_console_loop(state)
    finally:
        # Every mutation is already persisted; nothing to flush here.
        logger.info("Bye.")


if __name__ == "__main__":
    main()
