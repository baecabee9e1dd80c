"""
Job listing storage re-exports.
"""
from core.db.jobs.jobs_store import JOBS_STORAGE_KEY, JobRecord, JobStore

__all__ = [
    "JOBS_STORAGE_KEY",
    "JobRecord",
    "JobStore",
]
