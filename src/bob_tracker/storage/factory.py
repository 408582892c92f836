# src/bob_tracker/storage/factory.py

from __future__ import annotations

import logging

from ..core.ports import PersistenceGateway
from .file_storage import JsonLinesTaskFile
from .sqlite_storage import SqliteTaskDB

logger = logging.getLogger(__name__)

BACKENDS = ("jsonl", "sqlite")


def open_gateway(settings) -> PersistenceGateway:
    """Pick the persistence backend named by settings.storage_backend."""
    backend = str(getattr(settings, "storage_backend", "jsonl")).strip().lower()
    if backend == "jsonl":
        gateway: PersistenceGateway = JsonLinesTaskFile(settings.tasks_file)
    elif backend == "sqlite":
        gateway = SqliteTaskDB(settings.tasks_db_path)
    else:
        raise ValueError(f"Unknown storage backend {backend!r}; expected one of {', '.join(BACKENDS)}")
    logger.debug("Persistence backend=%s", backend)
    return gateway
