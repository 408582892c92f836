# src/bob_tracker/storage/sqlite_storage.py

from __future__ import annotations

import contextlib
import logging
import sqlite3
from collections.abc import Iterator
from pathlib import Path

from ..core.errors import PersistenceError
from ..tasks.task_models import TaskRecord

logger = logging.getLogger(__name__)


class SqliteTaskDB:
    """
    SQLite task records.

    The table holds exactly the last saved list; `position` keeps list order.
    A save cycle is one transaction: DELETE everything, INSERT each record,
    COMMIT on success, ROLLBACK on any error.

    Connections are short-lived (one per load / save cycle).
    """

    def __init__(self, db_path: str | Path = "tasks.sqlite3") -> None:
        self._db_path = Path(db_path)
        self._conn: sqlite3.Connection | None = None
        self._position = 0
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._ensure_schema()
        except (OSError, sqlite3.Error) as e:
            raise PersistenceError(f"Cannot open task database {self._db_path}: {e}") from e
        logger.info("SqliteTaskDB ready db=%s", self._db_path)

    @property
    def path(self) -> Path:
        return self._db_path

    # ---- low-level helpers ----

    def _get_conn(self) -> sqlite3.Connection:
        conn = sqlite3.connect(str(self._db_path), timeout=30.0)
        conn.row_factory = sqlite3.Row
        with contextlib.suppress(sqlite3.Error):
            conn.execute("PRAGMA journal_mode=WAL")
        return conn

    def _ensure_schema(self) -> None:
        conn = self._get_conn()
        try:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS tasks (
                    position INTEGER PRIMARY KEY,
                    kind TEXT NOT NULL,
                    done INTEGER NOT NULL DEFAULT 0,
                    description TEXT NOT NULL DEFAULT '',
                    field1 TEXT,
                    field2 TEXT
                )
                """
            )
            conn.commit()
        finally:
            conn.close()

    # ---- gateway API ----

    @contextlib.contextmanager
    def prepare(self) -> Iterator[None]:
        if self._conn is not None:
            raise PersistenceError("A save cycle is already in progress.")
        try:
            conn = self._get_conn()
        except sqlite3.Error as e:
            raise PersistenceError(f"Cannot open task database {self._db_path}: {e}") from e
        try:
            conn.execute("BEGIN")
            conn.execute("DELETE FROM tasks")
        except sqlite3.Error as e:
            conn.close()
            raise PersistenceError(f"Cannot start save in {self._db_path}: {e}") from e

        self._conn = conn
        self._position = 0
        try:
            yield
            conn.commit()
        except sqlite3.Error as e:
            conn.rollback()
            raise PersistenceError(f"Failed to save tasks to {self._db_path}: {e}") from e
        except BaseException:
            conn.rollback()
            raise
        finally:
            self._conn = None
            conn.close()

    def write(self, record: TaskRecord) -> None:
        if self._conn is None:
            raise PersistenceError("write() called outside prepare().")
        try:
            self._conn.execute(
                """
                INSERT INTO tasks(position, kind, done, description, field1, field2)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    self._position,
                    record.kind,
                    1 if record.done else 0,
                    record.description,
                    record.field1,
                    record.field2,
                ),
            )
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to write task record: {e}") from e
        self._position += 1

    def load_all(self) -> Iterator[TaskRecord]:
        try:
            conn = self._get_conn()
            try:
                rows = conn.execute("SELECT * FROM tasks ORDER BY position ASC").fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to read tasks from {self._db_path}: {e}") from e

        for row in rows:
            yield TaskRecord(
                kind=str(row["kind"] or ""),
                done=bool(row["done"]),
                description=str(row["description"] or ""),
                field1=row["field1"],
                field2=row["field2"],
            )
