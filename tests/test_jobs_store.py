import json
import logging
from datetime import date

import pytest

from core.db.base import MemoryStorage
from core.db.jobs import JOBS_STORAGE_KEY, JobRecord, JobStore
from core.errors import NotFoundError, PersistenceError


def _job(job_id, title="Engineer", **fields):
    return JobRecord(id=job_id, title=title, **fields)


def test_empty_store_lists_nothing(store):
    assert store.list() == []
    assert store.count() == 0


def test_upsert_new_job_gets_id_and_todays_date(store):
    job = JobRecord(id=store.generate_id(), title="Engineer", company="Acme", location="Remote")
    store.upsert(job)

    jobs = store.list()
    assert len(jobs) == 1
    assert jobs[0].title == "Engineer"
    assert jobs[0].company == "Acme"
    assert jobs[0].location == "Remote"
    assert jobs[0].id
    assert jobs[0].posted_date == date.today()


def test_upsert_round_trips_all_fields(store):
    job = JobRecord(
        id="42",
        title="Analyst",
        company="Beta Ltd",
        location="Leeds",
        description="Line one\nLine two – with unicode ✓",
        posted_date=date(2024, 3, 1),
    )
    store.upsert(job)
    assert store.list() == [job]


def test_distinct_ids_keep_one_record_each_with_latest_values(store):
    store.upsert(_job("a", title="first"))
    store.upsert(_job("b", title="second"))
    store.upsert(_job("a", title="first, edited"))
    store.upsert(_job("c", title="third"))

    jobs = store.list()
    assert [j.id for j in jobs] == ["a", "b", "c"]
    assert jobs[0].title == "first, edited"


def test_upsert_existing_id_keeps_count_and_position(store):
    store.upsert(_job("a"))
    store.upsert(_job("b"))
    before = store.count()

    store.upsert(_job("a", title="Senior Engineer"))

    assert store.count() == before
    assert store.list()[0].title == "Senior Engineer"


def test_delete_removes_only_target(store):
    store.upsert(_job("A"))
    store.upsert(_job("B"))

    assert store.delete("A") is True
    assert [j.id for j in store.list()] == ["B"]


def test_delete_twice_returns_false_second_time(store):
    store.upsert(_job("A"))
    assert store.delete("A") is True
    assert store.delete("A") is False


def test_delete_missing_id_is_noop(store):
    store.upsert(_job("A"))
    assert store.delete("nope") is False
    assert store.count() == 1


def test_get_missing_raises_not_found(store):
    with pytest.raises(NotFoundError) as exc_info:
        store.get("missing")
    assert exc_info.value.job_id == "missing"


def test_generate_id_never_repeats_back_to_back(store):
    first = store.generate_id()
    second = store.generate_id()
    assert first != second


def test_generate_id_skips_past_stored_ids(store):
    far_future = "99999999999999"
    store.upsert(_job(far_future))
    new_id = store.generate_id()
    assert new_id != far_future
    assert int(new_id) > int(far_future)


def test_store_does_not_reject_empty_title(store):
    store.upsert(_job("blank", title=""))
    assert store.get("blank").title == ""


def test_persisted_format_uses_site_field_names(storage, store):
    store.upsert(_job("1", company="Acme", posted_date=date(2025, 1, 2)))
    data = json.loads(storage.get_item(JOBS_STORAGE_KEY))
    assert data == [
        {
            "id": "1",
            "title": "Engineer",
            "company": "Acme",
            "location": "",
            "description": "",
            "postedDate": "2025-01-02",
        }
    ]


@pytest.mark.parametrize("raw", ["{not json", '{"id": "1"}'])
def test_unparseable_data_lists_as_empty_and_is_logged(storage, store, caplog, raw):
    storage.set_item(JOBS_STORAGE_KEY, raw)
    with caplog.at_level(logging.ERROR, logger="jobs_store"):
        assert store.list() == []
    assert "treating as empty" in caplog.text


@pytest.mark.parametrize(
    "bad",
    [
        {"title": "missing id"},
        {"id": "1", "postedDate": "not-a-date"},
        {"id": "3", "title": "legacy", "postedDate": ""},
        "not an object",
    ],
)
def test_invalid_entries_are_skipped_and_logged(storage, store, caplog, bad):
    good = _job("9", title="Keep me").to_json_dict()
    storage.set_item(JOBS_STORAGE_KEY, json.dumps([good, bad]))
    with caplog.at_level(logging.ERROR, logger="jobs_store"):
        assert [j.title for j in store.list()] == ["Keep me"]
    assert "Skipping invalid stored job listing at index 1" in caplog.text


def test_upsert_over_unparseable_data_starts_fresh(storage, store):
    storage.set_item(JOBS_STORAGE_KEY, "garbage")
    store.upsert(_job("1"))
    assert [j.id for j in store.list()] == ["1"]


def test_save_refuses_to_drop_invalid_entries(storage, store):
    store.upsert(_job("1", title="Keep me"))
    store.upsert(_job("2", title="Keep me too"))
    data = json.loads(storage.get_item(JOBS_STORAGE_KEY))
    data.append({"id": "3", "title": "legacy", "postedDate": ""})
    raw = json.dumps(data)
    storage.set_item(JOBS_STORAGE_KEY, raw)

    with pytest.raises(PersistenceError):
        store.upsert(_job("4", title="New"))
    with pytest.raises(PersistenceError):
        store.delete("1")

    assert storage.get_item(JOBS_STORAGE_KEY) == raw
    assert [j.title for j in store.list()] == ["Keep me", "Keep me too"]


def test_failed_write_raises_and_leaves_store_unchanged():
    store = JobStore(MemoryStorage(quota=200))
    store.upsert(_job("1"))

    with pytest.raises(PersistenceError):
        store.upsert(_job("2", description="x" * 500))

    assert [j.id for j in store.list()] == ["1"]


class _BrokenReads:
    def get_item(self, key):
        raise PersistenceError("disk gone")

    def set_item(self, key, value):
        raise AssertionError("must not write after a failed read")

    def remove_item(self, key):
        pass


def test_read_failure_lists_empty_but_upsert_refuses_to_overwrite():
    store = JobStore(_BrokenReads())
    assert store.list() == []
    with pytest.raises(PersistenceError):
        store.upsert(_job("1"))
