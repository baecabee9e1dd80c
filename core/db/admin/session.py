"""
Admin logged-in flag.

This is a convenience gate for the admin screens, not authentication:
anyone with access to the underlying storage can read or change the job
listings without passing through it.
"""
from __future__ import annotations

import hmac
import logging

from core.db.base import KeyValueStorage

ADMIN_SESSION_KEY = "adminLoggedIn"

log = logging.getLogger("admin_session")


class AdminSession:
    def __init__(self, storage: KeyValueStorage, secret: str, key: str = ADMIN_SESSION_KEY):
        self.storage = storage
        self.key = key
        self._secret = secret

    def is_authenticated(self) -> bool:
        return self.storage.get_item(self.key) == "true"

    def authenticate(self, password: str) -> bool:
        """Set the flag when `password` matches the configured secret."""
        if not hmac.compare_digest((password or "").encode("utf-8"), self._secret.encode("utf-8")):
            log.info("Admin login rejected")
            return False
        self.storage.set_item(self.key, "true")
        log.info("Admin logged in")
        return True

    def logout(self) -> None:
        self.storage.remove_item(self.key)
        log.info("Admin logged out")


__all__ = ["ADMIN_SESSION_KEY", "AdminSession"]
