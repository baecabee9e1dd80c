"""
Job listing storage.

The whole collection lives under one storage key as a JSON array, in
insertion order. Unparseable JSON is treated as an empty collection;
entries that fail validation are skipped on read and block writes.
"""
from __future__ import annotations

import json
import logging
import time
from datetime import date
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as SchemaError

from core.db.base import KeyValueStorage
from core.errors import NotFoundError, PersistenceError

JOBS_STORAGE_KEY = "musterConsultantsJobs"

log = logging.getLogger("jobs_store")


class JobRecord(BaseModel):
    """One job listing. Serialized with the camelCase names the site uses."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    title: str = ""
    company: str = ""
    location: str = ""
    description: str = ""
    posted_date: date = Field(default_factory=date.today, alias="postedDate")

    def to_json_dict(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)


class JobStore:
    def __init__(self, storage: KeyValueStorage, key: str = JOBS_STORAGE_KEY):
        self.storage = storage
        self.key = key
        self._last_id = 0

    def _read(self, for_write: bool = False) -> List[JobRecord]:
        """
        Parse the stored array, skipping entries that fail validation.

        With for_write=True a payload holding invalid entries raises
        PersistenceError instead, so saving never drops records it could
        not parse. Also raises PersistenceError if the read itself fails.
        """
        raw = self.storage.get_item(self.key)
        if not raw:
            return []
        try:
            data = json.loads(raw)
        except ValueError as exc:
            log.error("Stored job listings are not valid JSON, treating as empty: %s", exc)
            return []
        if not isinstance(data, list):
            log.error("Stored job listings are not a list (got %s), treating as empty", type(data).__name__)
            return []
        jobs: List[JobRecord] = []
        skipped = 0
        for index, item in enumerate(data):
            try:
                jobs.append(JobRecord.model_validate(item))
            except SchemaError as exc:
                skipped += 1
                log.error("Skipping invalid stored job listing at index %d: %s", index, exc)
        if skipped and for_write:
            raise PersistenceError(
                f"{skipped} stored job listing(s) could not be parsed; refusing to overwrite them"
            )
        return jobs

    def _write(self, jobs: List[JobRecord]) -> None:
        payload = json.dumps([j.to_json_dict() for j in jobs], ensure_ascii=False)
        try:
            self.storage.set_item(self.key, payload)
        except PersistenceError:
            log.error("Saving %d job listing(s) failed", len(jobs))
            raise

    def list(self) -> List[JobRecord]:
        """Return all jobs in insertion order; never raises."""
        try:
            return self._read()
        except PersistenceError as exc:
            log.error("Reading job listings failed, showing none: %s", exc)
            return []

    def count(self) -> int:
        return len(self.list())

    def get(self, job_id: str) -> JobRecord:
        for job in self._read():
            if job.id == job_id:
                return job
        raise NotFoundError(job_id)

    def upsert(self, record: JobRecord) -> None:
        """
        Replace the job with the same id in place, or append it.
        Raises PersistenceError when storage cannot be read or written.
        """
        jobs = self._read(for_write=True)
        for index, job in enumerate(jobs):
            if job.id == record.id:
                jobs[index] = record
                action = "updated"
                break
        else:
            jobs.append(record)
            action = "added"
        self._write(jobs)
        log.info("Job %s %s (total=%d)", record.id, action, len(jobs))

    def delete(self, job_id: str) -> bool:
        jobs = self._read(for_write=True)
        remaining = [j for j in jobs if j.id != job_id]
        if len(remaining) == len(jobs):
            return False
        self._write(remaining)
        log.info("Job %s deleted (total=%d)", job_id, len(remaining))
        return True

    def generate_id(self) -> str:
        """
        Millisecond timestamp, bumped past the last issued id and every
        numeric id currently stored.
        """
        candidate = max(int(time.time() * 1000), self._last_id + 1)
        stored = {job.id for job in self.list()}
        highest = _highest_numeric(stored)
        if highest is not None and candidate <= highest:
            candidate = highest + 1
        while str(candidate) in stored:
            candidate += 1
        self._last_id = candidate
        return str(candidate)


def _highest_numeric(ids) -> Optional[int]:
    numbers = [int(i) for i in ids if i.isdecimal()]
    return max(numbers) if numbers else None


__all__ = ["JOBS_STORAGE_KEY", "JobRecord", "JobStore"]
