"""
Environment-driven settings.

Values are read at call time so tests can monkeypatch the environment.
"""
from __future__ import annotations

import logging
import os
from typing import Optional

DEFAULT_ADMIN_PASSWORD = "admin"  # UX gate only, not a security boundary
DEFAULT_DATA_DIR = "data"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def admin_password() -> str:
    return os.getenv("ADMIN_PASSWORD") or DEFAULT_ADMIN_PASSWORD


def session_secret() -> Optional[str]:
    """Key that signs the session cookie; None when unset."""
    return os.getenv("SESSION_SECRET") or None


def storage_backend() -> str:
    return (os.getenv("STORAGE_BACKEND") or "file").strip().lower()


def data_dir() -> str:
    return os.getenv("DATA_DIR") or DEFAULT_DATA_DIR


def secure_cookies() -> bool:
    return (
        os.getenv("COOKIE_SECURE", "").lower() in ("1", "true", "yes")
        or os.getenv("PUBLIC_BASE_URL", "").lower().startswith("https://")
    )


def server_bind() -> tuple[str, int]:
    return os.getenv("HOST", "0.0.0.0"), int(os.getenv("PORT", "5000"))


def configure_logging() -> None:
    level = getattr(logging, os.getenv("LOG_LEVEL", "INFO").upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)


__all__ = [
    "admin_password",
    "session_secret",
    "storage_backend",
    "data_dir",
    "secure_cookies",
    "server_bind",
    "configure_logging",
]
