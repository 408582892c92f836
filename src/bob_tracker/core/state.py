# src/bob_tracker/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_list import TaskList
from ..ui.formatter import Formatter
from .ports import PersistenceGateway


@dataclass
class AppState:
    """
    Everything one session needs; passed explicitly, never global.

    No lock here: TaskList serializes its own operations.
    """

    # Settings object (config.Settings or a test namespace).
    settings: Any

    task_list: TaskList
    persistence: PersistenceGateway
    formatter: Formatter = field(default_factory=Formatter)
