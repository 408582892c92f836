# src/bob_tracker/tasks/task_models.py

"""
Task entities.

Three closed variants share one embedded Completion record:
- ToDo:     description only
- Deadline: description + end
- Event:    description + start + end

Descriptions and date tokens are immutable; Completion.done is the only
mutable state. Rendering and record conversion dispatch on the kind tag.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from typing import ClassVar

from ..core.errors import CorruptRecordError, InvalidTaskError


class TaskKind(StrEnum):
    """Kind tag, also used verbatim in persisted records."""

    TODO = "T"
    DEADLINE = "D"
    EVENT = "E"


DONE_MARK = "X"
NOT_DONE_MARK = " "


@dataclass(slots=True)
class Completion:
    done: bool = False


@dataclass(frozen=True, slots=True)
class TaskRecord:
    """Flat persistence shape: kind tag + flag + description + variant fields."""

    kind: str
    done: bool
    description: str
    field1: str | None = None
    field2: str | None = None


def _require(value: str | None, what: str) -> None:
    if value is None or not str(value).strip():
        raise InvalidTaskError(f"{what} cannot be empty.")


@dataclass(frozen=True, slots=True)
class ToDo:
    kind: ClassVar[TaskKind] = TaskKind.TODO

    description: str
    completion: Completion = field(default_factory=Completion, compare=False)

    def __post_init__(self) -> None:
        _require(self.description, "The description of a todo")


@dataclass(frozen=True, slots=True)
class Deadline:
    kind: ClassVar[TaskKind] = TaskKind.DEADLINE

    description: str
    end: str
    completion: Completion = field(default_factory=Completion, compare=False)

    def __post_init__(self) -> None:
        _require(self.description, "The description of a deadline")
        _require(self.end, "The /by date of a deadline")


@dataclass(frozen=True, slots=True)
class Event:
    kind: ClassVar[TaskKind] = TaskKind.EVENT

    description: str
    start: str
    end: str
    completion: Completion = field(default_factory=Completion, compare=False)

    def __post_init__(self) -> None:
        _require(self.description, "The description of an event")
        _require(self.start, "The /from time of an event")
        _require(self.end, "The /to time of an event")


Task = ToDo | Deadline | Event


# ---- lifecycle ----


def create(kind: TaskKind | str, description: str, *fields: str) -> Task:
    """
    Build a new, not-done task of the given kind.

    Raises InvalidTaskError for an unknown kind, a wrong number of variant
    fields, or any empty text.
    """
    try:
        tag = TaskKind(kind)
    except ValueError:
        raise InvalidTaskError(f"Unknown task kind: {kind!r}") from None

    expected = _FIELD_COUNT[tag]
    if len(fields) != expected:
        raise InvalidTaskError(
            f"Task kind {tag.value} expects {expected} extra field(s), got {len(fields)}."
        )
    return _FACTORIES[tag](description, *fields)


def is_done(task: Task) -> bool:
    return task.completion.done


def mark_done(task: Task) -> None:
    task.completion.done = True


def mark_not_done(task: Task) -> None:
    task.completion.done = False


def status_icon(task: Task) -> str:
    return DONE_MARK if task.completion.done else NOT_DONE_MARK


def description_contains(task: Task, keyword: str) -> bool:
    return keyword.casefold() in task.description.casefold()


def variant_fields(task: Task) -> tuple[str, ...]:
    return _FIELDS_OF[task.kind](task)


# ---- rendering ----


def _render_todo(task: ToDo) -> str:
    return f"[T][{status_icon(task)}] {task.description}"


def _render_deadline(task: Deadline) -> str:
    return f"[D][{status_icon(task)}] {task.description} (by: {task.end})"


def _render_event(task: Event) -> str:
    return f"[E][{status_icon(task)}] {task.description} (from: {task.start} to: {task.end})"


_RENDERERS: dict[TaskKind, Callable[..., str]] = {
    TaskKind.TODO: _render_todo,
    TaskKind.DEADLINE: _render_deadline,
    TaskKind.EVENT: _render_event,
}


def render(task: Task) -> str:
    return _RENDERERS[task.kind](task)


# ---- records ----

_FACTORIES: dict[TaskKind, Callable[..., Task]] = {
    TaskKind.TODO: ToDo,
    TaskKind.DEADLINE: Deadline,
    TaskKind.EVENT: Event,
}

_FIELD_COUNT: dict[TaskKind, int] = {
    TaskKind.TODO: 0,
    TaskKind.DEADLINE: 1,
    TaskKind.EVENT: 2,
}

_FIELDS_OF: dict[TaskKind, Callable[..., tuple[str, ...]]] = {
    TaskKind.TODO: lambda t: (),
    TaskKind.DEADLINE: lambda t: (t.end,),
    TaskKind.EVENT: lambda t: (t.start, t.end),
}


def to_record(task: Task) -> TaskRecord:
    extra = variant_fields(task)
    return TaskRecord(
        kind=task.kind.value,
        done=task.completion.done,
        description=task.description,
        field1=extra[0] if len(extra) > 0 else None,
        field2=extra[1] if len(extra) > 1 else None,
    )


def from_record(record: TaskRecord) -> Task:
    """
    Rebuild a task from its flat record.

    Raises CorruptRecordError when the kind tag is unknown, the done flag is
    not a bool, or a required field is missing or empty.
    """
    if not isinstance(record.done, bool):
        raise CorruptRecordError(f"Done flag must be true or false, got {record.done!r}")

    try:
        tag = TaskKind(record.kind)
    except ValueError:
        raise CorruptRecordError(f"Unknown kind tag: {record.kind!r}") from None

    extra = (record.field1, record.field2)[: _FIELD_COUNT[tag]]
    try:
        task = _FACTORIES[tag](record.description, *extra)
    except InvalidTaskError as e:
        raise CorruptRecordError(f"Incomplete {tag.value} record: {e}") from e

    task.completion.done = record.done
    return task
