"""
Schema helpers for the Postgres storage backend.
"""
from __future__ import annotations

import logging
from typing import Optional

from core.db.base import get_conn

log = logging.getLogger("schema")


def init_db(database_url: Optional[str] = None) -> None:
    """Create the key-value table if it does not exist yet."""
    with get_conn(database_url) as conn:
        cur = conn.cursor()
        cur.execute(
            """
            CREATE TABLE IF NOT EXISTS kv_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
            )
            """
        )
        conn.commit()
    log.info("kv_store table ready")


def drop_all(database_url: Optional[str] = None) -> None:
    """Remove every stored key (used by tests and the seed script)."""
    with get_conn(database_url) as conn:
        cur = conn.cursor()
        cur.execute("TRUNCATE kv_store")
        conn.commit()


__all__ = ["init_db", "drop_all"]
