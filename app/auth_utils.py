"""
Session-backed storage for the admin session flag.

The flag lives in Starlette's signed session cookie, so each browser keeps
its own flag and a client cannot set it without the server's secret.
"""
from __future__ import annotations

from typing import Any, MutableMapping, Optional

from fastapi import FastAPI, Request
from starlette.middleware.sessions import SessionMiddleware

from core import config
from core.db.admin import AdminSession

SESSION_COOKIE_NAME = "muster_session"
SESSION_COOKIE_MAX_AGE = 60 * 60 * 24 * 365  # the flag has no expiry of its own


class SessionStorage:
    """Key-value storage over `request.session`; the middleware signs and writes the cookie."""

    def __init__(self, session: MutableMapping[str, Any]):
        self._session = session

    def get_item(self, key: str) -> Optional[str]:
        value = self._session.get(key)
        return value if isinstance(value, str) else None

    def set_item(self, key: str, value: str) -> None:
        self._session[key] = value

    def remove_item(self, key: str) -> None:
        self._session.pop(key, None)


def add_session_middleware(app: FastAPI, secret: str) -> None:
    app.add_middleware(
        SessionMiddleware,
        secret_key=secret,
        session_cookie=SESSION_COOKIE_NAME,
        max_age=SESSION_COOKIE_MAX_AGE,
        same_site="lax",
        https_only=config.secure_cookies(),
    )


def get_admin_session(request: Request) -> AdminSession:
    """Return the admin session for this browser."""
    return AdminSession(SessionStorage(request.session), request.app.state.admin_password)


__all__ = ["SESSION_COOKIE_NAME", "SessionStorage", "add_session_middleware", "get_admin_session"]
