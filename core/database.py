"""
Facade over the storage layer used by the app and scripts.
"""
from __future__ import annotations

import logging
from typing import Optional

from core import config
from core.db.admin import ADMIN_SESSION_KEY, AdminSession
from core.db.base import FileStorage, KeyValueStorage, MemoryStorage, PostgresStorage
from core.db.jobs import JOBS_STORAGE_KEY, JobRecord, JobStore
from core.db.schema import init_db

log = logging.getLogger("database")

BACKENDS = ("memory", "file", "postgres")


def open_storage(
    backend: Optional[str] = None,
    data_dir: Optional[str] = None,
    database_url: Optional[str] = None,
) -> KeyValueStorage:
    """Build the storage backend named by `backend` (default: STORAGE_BACKEND)."""
    backend = (backend or config.storage_backend()).lower()
    if backend == "memory":
        storage: KeyValueStorage = MemoryStorage()
    elif backend == "file":
        storage = FileStorage(data_dir or config.data_dir())
    elif backend == "postgres":
        storage = PostgresStorage(database_url)
    else:
        raise ValueError(f"Unknown STORAGE_BACKEND {backend!r}; expected one of {', '.join(BACKENDS)}")
    log.info("Using %s storage", backend)
    return storage


__all__ = [
    "ADMIN_SESSION_KEY",
    "AdminSession",
    "BACKENDS",
    "FileStorage",
    "JOBS_STORAGE_KEY",
    "JobRecord",
    "JobStore",
    "KeyValueStorage",
    "MemoryStorage",
    "PostgresStorage",
    "init_db",
    "open_storage",
]
