# src/bob_tracker/connectors/console_connector.py

from __future__ import annotations

import logging

from ..cli.commands import EXIT_COMMANDS
from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)

PROMPT = "> "
DIVIDER = "_" * 60


def _say(text: str) -> None:
    print(DIVIDER)
    print(text)
    print(DIVIDER)


def run_console_loop(state: AppState) -> None:
    """
    Read-eval-print loop over the command registry.

    Returns on bye/exit, EOF or Ctrl+C. Saving is the caller's job.
    """
    app_name = str(getattr(getattr(state, "settings", None), "app_name", "Bob"))
    logger.info("Console connector started.")
    _say(state.formatter.render_greeting(app_name))

    while True:
        try:
            user_input = input(PROMPT).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in EXIT_COMMANDS:
            logger.info("Console exit command received.")
            break

        try:
            reply = command_registry.handle(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = state.formatter.render_error("Internal error while handling that command.")

        if reply is not None:
            _say(reply)

    _say(state.formatter.render_farewell())
    logger.info("Console connector finished.")
