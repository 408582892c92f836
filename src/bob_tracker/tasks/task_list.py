# src/bob_tracker/tasks/task_list.py

from __future__ import annotations

import logging
import threading

from ..core.errors import CorruptRecordError, IndexOutOfRangeError, InvalidArgumentError
from ..core.ports import PersistenceGateway, PresentationGateway
from ..ui.formatter import Formatter
from . import task_models as tm
from .task_models import Task

logger = logging.getLogger(__name__)


class TaskList:
    """
    In-memory ordered task collection.

    Single authority over the tasks of one session: every mutation and query
    goes through here and returns a rendering produced by the presentation
    gateway. Indices are 0-based positions in the current order; they shift
    on delete and must not be cached by callers.

    Thread-safety:
    - one re-entrant lock guards the whole collection
    """

    def __init__(self, presentation: PresentationGateway | None = None) -> None:
        self._tasks: list[Task] = []
        self._ui: PresentationGateway = presentation if presentation is not None else Formatter()
        self._lock = threading.RLock()

    @classmethod
    def load(
        cls,
        persistence: PersistenceGateway,
        presentation: PresentationGateway | None = None,
    ) -> TaskList:
        """
        Build a store from previously saved records.

        Corrupt records are logged and skipped; the rest still load.
        PersistenceError from the gateway propagates to the caller.
        """
        store = cls(presentation)
        skipped = 0
        for n, record in enumerate(persistence.load_all(), start=1):
            try:
                store._tasks.append(tm.from_record(record))
            except CorruptRecordError as e:
                skipped += 1
                logger.warning("Skipping corrupt task record #%d: %s", n, e)
        logger.info("TaskList loaded total=%d skipped=%d", len(store._tasks), skipped)
        return store

    # ---- low-level helpers ----

    def _check_index(self, index: int) -> None:
        size = len(self._tasks)
        if not 0 <= index < size:
            raise IndexOutOfRangeError(index, size)

    # ---- queries ----

    def size(self) -> int:
        with self._lock:
            return len(self._tasks)

    def __len__(self) -> int:
        return self.size()

    def tasks(self) -> tuple[Task, ...]:
        with self._lock:
            return tuple(self._tasks)

    def list_tasks(self) -> str:
        with self._lock:
            if not self._tasks:
                return self._ui.render_empty()
            return self._ui.render_list(tuple(self._tasks))

    def find(self, keyword: str) -> str:
        """Render tasks whose description contains keyword (case-insensitive)."""
        if not keyword or not keyword.strip():
            raise InvalidArgumentError("The search keyword cannot be empty.")
        with self._lock:
            matches = [t for t in self._tasks if tm.description_contains(t, keyword)]
        logger.debug("find keyword=%r matches=%d", keyword, len(matches))
        if not matches:
            return self._ui.render_empty()
        return self._ui.render_list(matches)

    # ---- mutations ----

    def add(self, task: Task) -> str:
        if task is None:
            raise InvalidArgumentError("Cannot add a missing task.")
        with self._lock:
            self._tasks.append(task)
            count = len(self._tasks)
        logger.debug("Task added kind=%s count=%d", task.kind.value, count)
        return self._ui.render_added(task, count)

    def add_todo(self, description: str) -> str:
        return self.add(tm.ToDo(description))

    def add_deadline(self, description: str, end: str) -> str:
        return self.add(tm.Deadline(description, end))

    def add_event(self, description: str, start: str, end: str) -> str:
        return self.add(tm.Event(description, start, end))

    def mark_done(self, index: int) -> str:
        with self._lock:
            self._check_index(index)
            task = self._tasks[index]
            tm.mark_done(task)
        logger.debug("Task marked done index=%d", index)
        return self._ui.render_marked(task)

    def mark_not_done(self, index: int) -> str:
        with self._lock:
            self._check_index(index)
            task = self._tasks[index]
            tm.mark_not_done(task)
        logger.debug("Task marked not done index=%d", index)
        return self._ui.render_unmarked(task)

    def delete(self, index: int) -> str:
        with self._lock:
            self._check_index(index)
            task = self._tasks.pop(index)
            count = len(self._tasks)
        logger.debug("Task deleted index=%d count=%d", index, count)
        return self._ui.render_deleted(task, count)

    # ---- persistence ----

    def save(self, persistence: PersistenceGateway) -> None:
        """
        Emit every task record, in order, inside one prepare() cycle.

        In-memory state is never rolled back if the gateway fails.
        """
        with self._lock:
            snapshot = tuple(self._tasks)
            with persistence.prepare():
                for task in snapshot:
                    persistence.write(tm.to_record(task))
        logger.info("TaskList saved total=%d", len(snapshot))
