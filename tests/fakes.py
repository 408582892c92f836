# tests/fakes.py

from __future__ import annotations

import contextlib
from collections.abc import Iterator, Sequence

from bob_tracker.core.errors import PersistenceError
from bob_tracker.tasks.task_models import Task, TaskRecord, render


class FakePersistence:
    """
    In-memory PersistenceGateway.

    - `committed` holds the records of the last successful save cycle
    - `fail_after` makes write() raise PersistenceError after N records
    - `events` captures the call order for assertions
    """

    def __init__(self, records: list[TaskRecord] | None = None, fail_after: int | None = None) -> None:
        self.committed: list[TaskRecord] = list(records or [])
        self.fail_after = fail_after
        self.events: list[str] = []
        self._pending: list[TaskRecord] | None = None

    @contextlib.contextmanager
    def prepare(self) -> Iterator[None]:
        self.events.append("prepare")
        self._pending = []
        try:
            yield
            self.committed = self._pending
            self.events.append("commit")
        finally:
            self._pending = None

    def write(self, record: TaskRecord) -> None:
        if self._pending is None:
            raise PersistenceError("write() called outside prepare().")
        if self.fail_after is not None and len(self._pending) >= self.fail_after:
            raise PersistenceError("disk full")
        self.events.append(f"write:{record.description}")
        self._pending.append(record)

    def load_all(self) -> Iterator[TaskRecord]:
        yield from self.committed


class RecordingPresenter:
    """PresentationGateway that returns compact, assertion-friendly strings."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def render_added(self, task: Task, new_count: int) -> str:
        self.calls.append("added")
        return f"added {render(task)} -> {new_count}"

    def render_list(self, tasks: Sequence[Task]) -> str:
        self.calls.append("list")
        return "\n".join(f"{i}.{render(t)}" for i, t in enumerate(tasks, start=1))

    def render_marked(self, task: Task) -> str:
        self.calls.append("marked")
        return f"marked {render(task)}"

    def render_unmarked(self, task: Task) -> str:
        self.calls.append("unmarked")
        return f"unmarked {render(task)}"

    def render_deleted(self, task: Task, new_count: int) -> str:
        self.calls.append("deleted")
        return f"deleted {render(task)} -> {new_count}"

    def render_empty(self) -> str:
        self.calls.append("empty")
        return "<empty>"
