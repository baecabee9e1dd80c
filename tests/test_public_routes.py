from datetime import date

import pytest

from app.routes.public import job_matches, search_jobs
from core.db.jobs import JOBS_STORAGE_KEY, JobRecord


@pytest.fixture
def seeded(store):
    store.upsert(
        JobRecord(
            id="1",
            title="Software Engineer",
            company="Acme",
            location="Remote",
            description="Python and FastAPI",
            posted_date=date(2025, 1, 10),
        )
    )
    store.upsert(JobRecord(id="2", title="Warehouse Supervisor", company="Northgate", location="Coventry, UK"))
    return store


@pytest.mark.parametrize(
    "keywords,location,expected",
    [
        ("", "", True),
        ("engineer", "", True),
        ("ENGINEER python", "", True),
        ("engineer java", "", False),
        ("acme", "", True),
        ("", "remote", True),
        ("", "london", False),
        ("fastapi", "rem", True),
    ],
)
def test_job_matches(keywords, location, expected):
    job = JobRecord(
        id="1", title="Software Engineer", company="Acme", location="Remote", description="Python and FastAPI"
    )
    assert job_matches(job, keywords, location) is expected


def test_search_keeps_store_order(seeded):
    assert [j.id for j in search_jobs(seeded)] == ["1", "2"]
    assert [j.id for j in search_jobs(seeded, location="coventry")] == ["2"]


def test_careers_page_lists_jobs(client, seeded):
    resp = client.get("/careers")
    assert resp.status_code == 200
    assert "Software Engineer" in resp.text
    assert "Warehouse Supervisor" in resp.text
    assert "Posted 2025-01-10" in resp.text


def test_careers_search_filters(client, seeded):
    resp = client.get("/careers", params={"keywords": "warehouse"})
    assert "Warehouse Supervisor" in resp.text
    assert "Software Engineer" not in resp.text

    resp = client.get("/careers", params={"keywords": "nothing-matches"})
    assert "No job listings match your search." in resp.text


def test_careers_empty_store(client):
    assert "No open positions at the moment." in client.get("/careers").text


def test_careers_survives_corrupt_storage(client, storage):
    storage.set_item(JOBS_STORAGE_KEY, "{oops")
    resp = client.get("/careers")
    assert resp.status_code == 200
    assert "No open positions at the moment." in resp.text


def test_jobs_api_uses_site_field_names(client, seeded):
    resp = client.get("/api/jobs", params={"location": "remote"})
    assert resp.status_code == 200
    assert resp.json() == {
        "jobs": [
            {
                "id": "1",
                "title": "Software Engineer",
                "company": "Acme",
                "location": "Remote",
                "description": "Python and FastAPI",
                "postedDate": "2025-01-10",
            }
        ]
    }


def test_home_and_health(client, seeded):
    assert "2 open position(s)" in client.get("/").text
    assert client.get("/health").json() == {"status": "ok", "jobs": 2}
