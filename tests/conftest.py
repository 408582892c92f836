# tests/conftest.py

from __future__ import annotations

import logging
from pathlib import Path
from types import SimpleNamespace

import pytest

from bob_tracker.core.state import AppState
from bob_tracker.tasks.task_list import TaskList
from bob_tracker.ui.formatter import Formatter

from .fakes import FakePersistence, RecordingPresenter


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment and .env files.
    """
    return SimpleNamespace(
        app_name="Bob",
        log_level="WARNING",
        storage_backend="jsonl",
        data_dir=tmp_path,
        tasks_file=tmp_path / "tasks.jsonl",
        tasks_db_path=tmp_path / "tasks.sqlite3",
    )


@pytest.fixture()
def presenter() -> RecordingPresenter:
    return RecordingPresenter()


@pytest.fixture()
def store(presenter: RecordingPresenter) -> TaskList:
    return TaskList(presenter)


@pytest.fixture()
def persistence() -> FakePersistence:
    return FakePersistence()


@pytest.fixture()
def state(settings: SimpleNamespace, persistence: FakePersistence) -> AppState:
    """AppState wired with the real Formatter and an in-memory gateway."""
    formatter = Formatter()
    return AppState(
        settings=settings,
        task_list=TaskList(formatter),
        persistence=persistence,
        formatter=formatter,
    )


@pytest.fixture()
def restore_root_logging():
    """Put the root logger back the way it was after setup_logging() ran."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        root.removeHandler(h)
        h.close()
    for h in handlers:
        root.addHandler(h)
    root.setLevel(level)
    logging.captureWarnings(False)
