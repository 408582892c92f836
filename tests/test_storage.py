# tests/test_storage.py

from __future__ import annotations

import json
from pathlib import Path
from types import SimpleNamespace

import pytest

from bob_tracker.core.errors import PersistenceError
from bob_tracker.storage import open_gateway
from bob_tracker.storage.file_storage import JsonLinesTaskFile
from bob_tracker.storage.sqlite_storage import SqliteTaskDB
from bob_tracker.tasks import task_models as tm
from bob_tracker.tasks.task_list import TaskList
from bob_tracker.tasks.task_models import TaskRecord

RECORDS = [
    TaskRecord(kind="T", done=True, description="read book"),
    TaskRecord(kind="D", done=False, description="submit report", field1="2024-06-01"),
    TaskRecord(kind="E", done=False, description="party | fun", field1="9pm", field2="late"),
]


def _save(gateway, records) -> None:
    with gateway.prepare():
        for r in records:
            gateway.write(r)


@pytest.fixture(params=["jsonl", "sqlite"])
def gateway(request, tmp_path: Path):
    if request.param == "jsonl":
        return JsonLinesTaskFile(tmp_path / "data" / "tasks.jsonl")
    return SqliteTaskDB(tmp_path / "data" / "tasks.sqlite3")


def test_missing_data_loads_nothing(gateway) -> None:
    assert list(gateway.load_all()) == []


def test_records_come_back_in_save_order(gateway) -> None:
    _save(gateway, RECORDS)
    assert list(gateway.load_all()) == RECORDS


def test_new_save_replaces_previous_contents(gateway) -> None:
    _save(gateway, RECORDS)
    _save(gateway, RECORDS[:1])
    assert list(gateway.load_all()) == RECORDS[:1]


def test_failed_cycle_commits_nothing(gateway) -> None:
    _save(gateway, RECORDS)

    with pytest.raises(RuntimeError):
        with gateway.prepare():
            gateway.write(TaskRecord(kind="T", done=False, description="half written"))
            raise RuntimeError("boom")

    assert list(gateway.load_all()) == RECORDS


def test_write_outside_prepare_is_rejected(gateway) -> None:
    with pytest.raises(PersistenceError):
        gateway.write(RECORDS[0])


def test_store_round_trip_through_gateway(gateway) -> None:
    store = TaskList()
    store.add_todo("read book")
    store.add_deadline("submit report", "2024-06-01")
    store.add_event("party", "9pm", "late")
    store.mark_done(2)
    store.save(gateway)

    loaded = TaskList.load(gateway)
    assert loaded.size() == 3
    assert [tm.to_record(t) for t in loaded.tasks()] == [tm.to_record(t) for t in store.tasks()]


def test_jsonl_unreadable_lines_are_skipped_by_store(tmp_path: Path) -> None:
    path = tmp_path / "tasks.jsonl"
    lines = [
        json.dumps({"kind": "T", "done": False, "description": "keep me"}),
        "{not json",
        json.dumps(["a", "list"]),
        json.dumps({"kind": "D", "done": True, "description": "no date"}),
        json.dumps({"kind": "T", "done": "false", "description": "stringly done"}),
        json.dumps({"kind": "T", "done": 1, "description": "numeric done"}),
        json.dumps({"kind": "D", "done": True, "description": "dated", "field1": "Fri"}),
    ]
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")

    store = TaskList.load(JsonLinesTaskFile(path))
    assert [tm.render(t) for t in store.tasks()] == ["[T][ ] keep me", "[D][X] dated (by: Fri)"]


def test_jsonl_leaves_no_temp_file(tmp_path: Path) -> None:
    gateway = JsonLinesTaskFile(tmp_path / "tasks.jsonl")
    _save(gateway, RECORDS)
    assert sorted(p.name for p in tmp_path.iterdir()) == ["tasks.jsonl"]


def test_jsonl_unwritable_location_raises_persistence_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("a file, not a directory", encoding="utf-8")
    gateway = JsonLinesTaskFile(blocker / "tasks.jsonl")

    with pytest.raises(PersistenceError):
        _save(gateway, RECORDS)


def test_open_gateway_selects_backend(tmp_path: Path) -> None:
    settings = SimpleNamespace(
        storage_backend="sqlite",
        tasks_file=tmp_path / "tasks.jsonl",
        tasks_db_path=tmp_path / "tasks.sqlite3",
    )
    assert isinstance(open_gateway(settings), SqliteTaskDB)

    settings.storage_backend = "JSONL"
    assert isinstance(open_gateway(settings), JsonLinesTaskFile)

    settings.storage_backend = "xml"
    with pytest.raises(ValueError):
        open_gateway(settings)
