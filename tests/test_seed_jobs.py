from core.db.base import MemoryStorage
from core.db.jobs import JobRecord, JobStore
from scripts import seed_jobs


def test_seed_adds_samples_once():
    store = JobStore(MemoryStorage())
    assert seed_jobs.seed(store) == len(seed_jobs.SAMPLE_JOBS)
    assert seed_jobs.seed(store) == 0
    ids = [j.id for j in store.list()]
    assert len(ids) == len(set(ids)) == len(seed_jobs.SAMPLE_JOBS)


def test_seed_reset_clears_existing_listings(capsys):
    storage = MemoryStorage()
    JobStore(storage).upsert(JobRecord(id="old", title="Old listing"))

    assert seed_jobs.main(["--reset"], storage=storage) == 0

    titles = [j.title for j in JobStore(storage).list()]
    assert "Old listing" not in titles
    assert len(titles) == len(seed_jobs.SAMPLE_JOBS)
    assert "[seed] added 3 listing(s)" in capsys.readouterr().out
