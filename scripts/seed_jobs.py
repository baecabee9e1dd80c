"""
Seed sample job listings into the configured storage.

Usage:
  python scripts/seed_jobs.py            # add the sample listings
  python scripts/seed_jobs.py --reset    # clear stored listings first
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Optional

from dotenv import load_dotenv

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from core import config  # noqa: E402
from core.database import JobRecord, JobStore, KeyValueStorage, init_db, open_storage  # noqa: E402

SAMPLE_JOBS: List[Dict[str, str]] = [
    {
        "title": "Recruitment Consultant",
        "company": "Muster Consultants",
        "location": "London, United Kingdom",
        "description": "Manage candidate pipelines for our technology clients.",
    },
    {
        "title": "Warehouse Supervisor",
        "company": "Northgate Logistics",
        "location": "Coventry, United Kingdom",
        "description": "Lead a team of 20 operatives across day shifts.",
    },
    {
        "title": "Software Engineer",
        "company": "Acme",
        "location": "Remote",
        "description": "Build internal tooling in Python.",
    },
]


def seed(store: JobStore, reset: bool = False) -> int:
    """Add SAMPLE_JOBS to `store`, skipping ones already present; returns how many were added."""
    if reset:
        store.storage.remove_item(store.key)
    existing = {(j.title, j.company, j.location) for j in store.list()}
    added = 0
    for job in SAMPLE_JOBS:
        if (job["title"], job["company"], job["location"]) in existing:
            continue
        store.upsert(JobRecord(id=store.generate_id(), **job))
        added += 1
    return added


def main(argv: Optional[List[str]] = None, storage: Optional[KeyValueStorage] = None) -> int:
    parser = argparse.ArgumentParser(description="Seed sample job listings.")
    parser.add_argument("--reset", action="store_true", help="remove existing listings first")
    args = parser.parse_args(argv)

    if storage is None:
        load_dotenv(override=True)
        if config.storage_backend() == "postgres":
            init_db()
        storage = open_storage()

    store = JobStore(storage)
    added = seed(store, reset=args.reset)
    print(f"[seed] added {added} listing(s); {store.count()} stored")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
