"""
CSRF double-submit tokens and an in-memory login rate limit.
"""
from __future__ import annotations

import hmac
import secrets
import time
from typing import Dict, List, Tuple

from core import config

CSRF_COOKIE_NAME = "csrf_token"
LOGIN_ATTEMPT_LIMIT = 10
LOGIN_WINDOW_SECONDS = 300


def issue_csrf_token(existing: str | None = None) -> str:
    """Return a CSRF token (re-use existing if provided, else create a new one)."""
    return existing or secrets.token_urlsafe(16)


def attach_csrf_cookie(response, token: str) -> None:
    """Readable by the page so forms can echo it back; samesite=lax."""
    response.set_cookie(
        key=CSRF_COOKIE_NAME,
        value=token,
        httponly=False,
        samesite="lax",
        secure=config.secure_cookies(),
    )


def validate_csrf(request, form_token: str | None) -> bool:
    """Compare the submitted token with the cookie value using constant-time compare."""
    cookie_token = request.cookies.get(CSRF_COOKIE_NAME) or ""
    form_token = form_token or ""
    if not cookie_token or not form_token:
        return False
    return hmac.compare_digest(cookie_token, form_token)


# -------- Rate limiting (in-memory) --------
_rate_state: Dict[str, List[float]] = {}
_rate_windows: Dict[str, int] = {}


def _prune_expired(now: float) -> None:
    """Drop keys whose newest attempt has left their window."""
    expired = [
        key
        for key, history in _rate_state.items()
        if not history or history[-1] <= now - _rate_windows.get(key, 0)
    ]
    for key in expired:
        _rate_state.pop(key, None)
        _rate_windows.pop(key, None)


def allow_request_with_remaining(key: str, limit: int = 5, window_seconds: int = 60) -> Tuple[bool, int]:
    """
    Sliding-window rate limit.
    Returns (allowed, remaining attempts after this one).
    """
    now = time.time()
    _prune_expired(now)
    window_start = now - window_seconds
    history = [t for t in _rate_state.get(key, []) if t > window_start]
    _rate_windows[key] = window_seconds
    if len(history) >= limit:
        _rate_state[key] = history
        return False, 0
    history.append(now)
    _rate_state[key] = history
    return True, max(0, limit - len(history))


def allow_login_attempt(client_host: str) -> Tuple[bool, int]:
    return allow_request_with_remaining(
        f"admin-login:{client_host}", limit=LOGIN_ATTEMPT_LIMIT, window_seconds=LOGIN_WINDOW_SECONDS
    )


def reset_rate_limits() -> None:
    _rate_state.clear()
    _rate_windows.clear()


__all__ = [
    "CSRF_COOKIE_NAME",
    "issue_csrf_token",
    "attach_csrf_cookie",
    "validate_csrf",
    "allow_request_with_remaining",
    "allow_login_attempt",
    "reset_rate_limits",
]
