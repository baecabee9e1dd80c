"""
Key-value storage backends.

Every backend exposes the same three calls as browser local storage:
get_item / set_item / remove_item over string keys and string values.
Write failures surface as PersistenceError.
"""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

try:
    import psycopg
    from psycopg.rows import dict_row
except Exception as exc:  # pragma: no cover - required dependency
    raise RuntimeError("psycopg is required for Postgres") from exc

from core.errors import PersistenceError

log = logging.getLogger("storage")


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class MemoryStorage:
    """
    In-process storage. `quota` (bytes, summed over keys and values) makes
    oversized writes fail like a full local-storage area.
    """

    def __init__(self, quota: Optional[int] = None):
        self._items: Dict[str, str] = {}
        self.quota = quota

    def _size_with(self, key: str, value: str) -> int:
        size = len(key.encode("utf-8")) + len(value.encode("utf-8"))
        for k, v in self._items.items():
            if k != key:
                size += len(k.encode("utf-8")) + len(v.encode("utf-8"))
        return size

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self.quota is not None and self._size_with(key, value) > self.quota:
            raise PersistenceError(f"storage quota of {self.quota} bytes exceeded")
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class FileStorage:
    """One UTF-8 file per key under `directory`; writes replace atomically."""

    def __init__(self, directory: str | Path):
        self.directory = Path(directory)

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key.startswith("."):
            raise ValueError(f"invalid storage key: {key!r}")
        return self.directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as exc:
            raise PersistenceError(f"could not read {path}: {exc}") from exc

    def set_item(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.directory, prefix=f".{key}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    f.write(value)
                os.replace(tmp_name, path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise PersistenceError(f"could not write {path}: {exc}") from exc

    def remove_item(self, key: str) -> None:
        path = self._path(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise PersistenceError(f"could not remove {path}: {exc}") from exc


def resolve_database_url(url: Optional[str] = None) -> str:
    url = url or os.getenv("DATABASE_URL")
    if not url:
        raise RuntimeError("DATABASE_URL must be set for Postgres usage")
    if url.startswith("postgres://") or url.startswith("postgresql://"):
        return url
    raise RuntimeError("DATABASE_URL must start with postgres:// or postgresql://")


def get_conn(database_url: Optional[str] = None):
    """
    Return a Postgres DB connection (DATABASE_URL required).
    """
    return psycopg.connect(resolve_database_url(database_url), row_factory=dict_row)


class PostgresStorage:
    """Rows of the kv_store table (see core.db.schema)."""

    def __init__(self, database_url: Optional[str] = None):
        self.database_url = resolve_database_url(database_url)

    def get_item(self, key: str) -> Optional[str]:
        try:
            with get_conn(self.database_url) as conn:
                cur = conn.cursor()
                cur.execute("SELECT value FROM kv_store WHERE key = %s", (key,))
                row = cur.fetchone()
        except psycopg.Error as exc:
            raise PersistenceError(f"could not read {key!r}: {exc}") from exc
        return row["value"] if row else None

    def set_item(self, key: str, value: str) -> None:
        try:
            with get_conn(self.database_url) as conn:
                cur = conn.cursor()
                cur.execute(
                    """
                    INSERT INTO kv_store (key, value, updated_at)
                    VALUES (%s, %s, now())
                    ON CONFLICT (key) DO UPDATE
                    SET value = EXCLUDED.value, updated_at = EXCLUDED.updated_at
                    """,
                    (key, value),
                )
                conn.commit()
        except psycopg.Error as exc:
            log.error("Postgres write failed for key=%s: %s", key, exc)
            raise PersistenceError(f"could not write {key!r}: {exc}") from exc

    def remove_item(self, key: str) -> None:
        try:
            with get_conn(self.database_url) as conn:
                cur = conn.cursor()
                cur.execute("DELETE FROM kv_store WHERE key = %s", (key,))
                conn.commit()
        except psycopg.Error as exc:
            raise PersistenceError(f"could not remove {key!r}: {exc}") from exc


__all__ = [
    "KeyValueStorage",
    "MemoryStorage",
    "FileStorage",
    "PostgresStorage",
    "get_conn",
    "resolve_database_url",
]
