"""
Error types raised by the job and session stores.
"""
from __future__ import annotations


class JobStoreError(Exception):
    """Base class for storage-layer errors."""


class PersistenceError(JobStoreError):
    """The underlying storage could not be read or written."""


class NotFoundError(JobStoreError):
    """An operation targeted a job id that is not stored."""

    def __init__(self, job_id: str):
        super().__init__(f"job {job_id!r} not found")
        self.job_id = job_id


class ValidationError(JobStoreError):
    """Submitted job fields were rejected before saving."""


__all__ = ["JobStoreError", "PersistenceError", "NotFoundError", "ValidationError"]
