# tests/test_main.py

from __future__ import annotations

import builtins

from bob_tracker.cli import main as cli_main


def test_unopenable_database_exits_with_error(settings, monkeypatch, restore_root_logging) -> None:
    blocker = settings.data_dir / "blocker"
    blocker.write_text("a file, not a directory", encoding="utf-8")
    settings.storage_backend = "sqlite"
    settings.tasks_db_path = blocker / "tasks.sqlite3"
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)

    assert cli_main.main() == 1


def test_unknown_backend_exits_with_error(settings, monkeypatch, restore_root_logging) -> None:
    settings.storage_backend = "xml"
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)

    assert cli_main.main() == 1


def test_session_saves_on_exit(settings, monkeypatch, restore_root_logging) -> None:
    lines = iter(["todo read book", "bye"])
    monkeypatch.setattr(builtins, "input", lambda prompt="": next(lines))
    monkeypatch.setattr(cli_main, "get_settings", lambda: settings)

    assert cli_main.main() == 0
    assert "read book" in settings.tasks_file.read_text(encoding="utf-8")
