# src/bob_tracker/storage/file_storage.py

from __future__ import annotations

import contextlib
import json
import logging
import os
from collections.abc import Iterator
from pathlib import Path
from typing import IO, Any

from ..core.errors import PersistenceError
from ..tasks.task_models import TaskRecord

logger = logging.getLogger(__name__)


class JsonLinesTaskFile:
    """
    Task records as JSON lines: one object per task, in list order.

    A save cycle writes to "<file>.tmp" and replaces the real file only when
    the cycle completes, so a failed save leaves the previous contents intact.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        self._out: IO[str] | None = None

    @property
    def path(self) -> Path:
        return self._path

    @staticmethod
    def _record_to_obj(record: TaskRecord) -> dict[str, Any]:
        return {
            "kind": record.kind,
            "done": bool(record.done),
            "description": record.description,
            "field1": record.field1,
            "field2": record.field2,
        }

    @staticmethod
    def _obj_to_record(obj: dict[str, Any]) -> TaskRecord:
        def opt(key: str) -> str | None:
            v = obj.get(key)
            return None if v is None else str(v)

        return TaskRecord(
            kind=str(obj.get("kind") or ""),
            # Unconverted: from_record rejects anything but a JSON bool.
            done=obj.get("done", False),
            description=str(obj.get("description") or ""),
            field1=opt("field1"),
            field2=opt("field2"),
        )

    @contextlib.contextmanager
    def prepare(self) -> Iterator[None]:
        if self._out is not None:
            raise PersistenceError("A save cycle is already in progress.")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._out = open(self._tmp_path, "w", encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Cannot open {self._tmp_path} for writing: {e}") from e

        committed = False
        try:
            yield
            self._out.close()
            os.replace(self._tmp_path, self._path)
            committed = True
            with contextlib.suppress(OSError):
                # Best-effort: task descriptions are personal data.
                os.chmod(self._path, 0o600)
        except OSError as e:
            raise PersistenceError(f"Failed to save tasks to {self._path}: {e}") from e
        finally:
            if self._out is not None and not self._out.closed:
                self._out.close()
            self._out = None
            if not committed:
                with contextlib.suppress(OSError):
                    self._tmp_path.unlink()

    def write(self, record: TaskRecord) -> None:
        if self._out is None:
            raise PersistenceError("write() called outside prepare().")
        try:
            self._out.write(json.dumps(self._record_to_obj(record), ensure_ascii=False) + "\n")
        except OSError as e:
            raise PersistenceError(f"Failed to write task record to {self._tmp_path}: {e}") from e

    def load_all(self) -> Iterator[TaskRecord]:
        """
        Yield records in file order. Missing file -> nothing.

        Lines that are not JSON objects are logged and yielded as empty
        records, which the store then skips as corrupt.
        """
        if not self._path.exists():
            return
        try:
            with open(self._path, encoding="utf-8") as f:
                for lineno, line in enumerate(f, start=1):
                    line = line.strip()
                    if not line:
                        continue
                    try:
                        obj = json.loads(line)
                    except json.JSONDecodeError:
                        logger.warning("Unreadable line %d in %s", lineno, self._path)
                        obj = None
                    if not isinstance(obj, dict):
                        obj = {}
                    yield self._obj_to_record(obj)
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Failed to read tasks from {self._path}: {e}") from e
