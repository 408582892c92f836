# src/bob_tracker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data dir exists,
- opens the persistence backend and loads the saved task list,
- wires everything into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.errors import PersistenceError
from ..core.state import AppState
from ..storage import open_gateway
from ..tasks.task_list import TaskList
from ..ui.formatter import Formatter

logger = logging.getLogger(__name__)


def create_initial_state(*, settings=None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().

    A saved list that cannot be read is logged and replaced by an empty one;
    the next save overwrites it.
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    formatter = Formatter()
    persistence = open_gateway(settings)

    try:
        task_list = TaskList.load(persistence, formatter)
    except PersistenceError:
        logger.exception("Failed to load saved tasks; starting with an empty list.")
        task_list = TaskList(formatter)

    return AppState(
        settings=settings,
        task_list=task_list,
        persistence=persistence,
        formatter=formatter,
    )


def save_state(state: AppState) -> None:
    """Persist the task list. PersistenceError propagates to the caller."""
    state.task_list.save(state.persistence)
