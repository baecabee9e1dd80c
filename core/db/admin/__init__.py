"""
Admin session flag re-exports.
"""
from core.db.admin.session import ADMIN_SESSION_KEY, AdminSession

__all__ = ["ADMIN_SESSION_KEY", "AdminSession"]
