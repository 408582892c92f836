# src/bob_tracker/core/errors.py

"""Exception types raised by the task tracker core and its gateways."""

from __future__ import annotations


class TaskTrackerError(Exception):
    """Base class for every error the tracker reports to its caller."""


class InvalidTaskError(TaskTrackerError):
    """Empty description or empty variant field at construction."""


class IndexOutOfRangeError(TaskTrackerError):
    """Index passed to mark/unmark/delete is outside the current list."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        super().__init__(f"Task index {index} is out of range (list has {size} tasks).")


class InvalidArgumentError(TaskTrackerError):
    """A query argument (e.g. a search keyword) was rejected."""


class InvalidCommandError(InvalidArgumentError):
    """Shell input that does not parse into a command."""


class CorruptRecordError(TaskTrackerError):
    """A persisted record cannot be decoded into a task."""


class PersistenceError(TaskTrackerError):
    """I/O failure inside a persistence gateway."""
