# src/bob_tracker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

TaskList depends on these Protocols instead of concrete storage/formatting.
This keeps backends swappable and makes testing easier.
"""

from collections.abc import Iterable, Iterator, Sequence
from contextlib import AbstractContextManager
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..tasks.task_models import Task, TaskRecord


class PersistenceGateway(Protocol):
    """
    Record-level storage used by TaskList.save / TaskList.load.

    One save cycle:
        with gateway.prepare():
            gateway.write(record)
            ...

    Leaving the block normally commits every record written inside it;
    leaving it with an exception commits none of them.
    I/O failures are raised as PersistenceError.
    """

    def prepare(self) -> AbstractContextManager[None]: ...
    def write(self, record: TaskRecord) -> None: ...
    def load_all(self) -> Iterator[TaskRecord] | Iterable[TaskRecord]: ...


class PresentationGateway(Protocol):
    """Pure formatting of store outcomes. Must not mutate tasks or do I/O."""

    def render_added(self, task: Task, new_count: int) -> str: ...
    def render_list(self, tasks: Sequence[Task]) -> str: ...
    def render_marked(self, task: Task) -> str: ...
    def render_unmarked(self, task: Task) -> str: ...
    def render_deleted(self, task: Task, new_count: int) -> str: ...
    def render_empty(self) -> str: ...
