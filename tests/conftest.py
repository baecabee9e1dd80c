import os

import pytest

# Keep the module-level app off the filesystem during tests.
os.environ["STORAGE_BACKEND"] = "memory"

from app import security
from app.api import create_app
from core.db.admin import AdminSession
from core.db.base import MemoryStorage
from core.db.jobs import JobStore

ADMIN_SECRET = "s3cret"
SESSION_SECRET = "test-session-secret"


@pytest.fixture(autouse=True)
def _reset_rate_limits():
    security.reset_rate_limits()
    yield
    security.reset_rate_limits()


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
def store(storage):
    return JobStore(storage)


@pytest.fixture
def session():
    return AdminSession(MemoryStorage(), ADMIN_SECRET)


@pytest.fixture
def app(storage):
    return create_app(storage=storage, admin_password=ADMIN_SECRET, session_secret=SESSION_SECRET)


@pytest.fixture
def client(app):
    from fastapi.testclient import TestClient

    return TestClient(app)
