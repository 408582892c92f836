# src/bob_tracker/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState (loading the saved list), runs the
console REPL, then saves the list on the way out.
"""

from __future__ import annotations

import logging
import sys

from ..cli.bootstrap import create_initial_state, save_state
from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..core.errors import PersistenceError
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


def main() -> int:
    settings = get_settings()

    level_name = str(getattr(settings, "log_level", "WARNING")).upper()
    console_level = getattr(logging, level_name, logging.WARNING)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info("Starting %s...", settings.app_name)

    try:
        state = create_initial_state(settings=settings)
    except (PersistenceError, ValueError):
        logger.exception("Cannot start: task storage is unavailable or misconfigured.")
        return 1

    exit_code = 0
    try:
        run_console_loop(state)
    finally:
        try:
            save_state(state)
        except PersistenceError:
            logger.exception("Failed to save tasks.")
            exit_code = 1
        logger.info("Bye.")
    return exit_code


if __name__ == "__main__":
    sys.exit(main())
