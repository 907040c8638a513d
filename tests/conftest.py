"""
Pytest configuration: in-memory stand-ins for the external stores, and a
FastAPI test client wired to them.
"""
import itertools
import os
import time

import pytest

# the app builds its engine at import time, point it at a throwaway database
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from files_manager.core.config import Settings  # noqa: E402
from files_manager.services.files import FileService  # noqa: E402
from files_manager.services.session import SessionService  # noqa: E402
from files_manager.stores.blob import LocalBlobStore  # noqa: E402


class InMemoryIdentityStore:
    def __init__(self):
        self.values = {}
        self.ttls = {}

    def get(self, key):
        value, expires_at = self.values.get(key, (None, None))
        if expires_at is not None and expires_at <= time.monotonic():
            del self.values[key]
            return None
        return value

    def set(self, key, value, ttl_seconds):
        self.values[key] = (value, time.monotonic() + ttl_seconds)
        self.ttls[key] = ttl_seconds

    def delete(self, key):
        self.values.pop(key, None)


class InMemoryCollection:
    """Dict-backed collection with the same calls as the SQLAlchemy stores."""

    def __init__(self):
        self.documents = {}
        self._ids = itertools.count(1)

    @staticmethod
    def _matches(document, criteria):
        return all(document.get(key) == value for key, value in criteria.items())

    def find_one(self, criteria):
        for document in self.documents.values():
            if self._matches(document, criteria):
                return dict(document)
        return None

    def insert_one(self, document):
        new_id = next(self._ids)
        self.documents[new_id] = {"local_path": None, **document, "id": new_id}
        return new_id

    def find_one_and_update(self, criteria, values):
        for document in self.documents.values():
            if self._matches(document, criteria):
                document.update(values)
                return dict(document)
        return None

    def aggregate(self, pipeline):
        results = list(self.documents.values())
        for stage in pipeline:
            (operator, argument), = stage.items()
            if operator == "$match":
                results = [d for d in results if self._matches(d, argument)]
            elif operator == "$skip":
                results = results[argument:]
            elif operator == "$limit":
                results = results[:argument]
            else:
                raise ValueError(operator)
        return [dict(d) for d in results]


class RecordingJobQueue:
    def __init__(self):
        self.jobs = []

    def enqueue(self, payload):
        self.jobs.append(payload)


class BrokenJobQueue:
    def enqueue(self, payload):
        raise ConnectionError("queue is down")


@pytest.fixture
def identity_store():
    return InMemoryIdentityStore()


@pytest.fixture
def users():
    return InMemoryCollection()


@pytest.fixture
def catalog():
    return InMemoryCollection()


@pytest.fixture
def jobs():
    return RecordingJobQueue()


@pytest.fixture
def blob_root(tmp_path):
    return str(tmp_path / "files_manager")


@pytest.fixture
def sessions(identity_store, users):
    return SessionService(identity_store, users, ttl_seconds=3600)


@pytest.fixture
def file_service(sessions, catalog, jobs, blob_root):
    return FileService(sessions, catalog, LocalBlobStore(), jobs, folder_path=blob_root)


@pytest.fixture
def login(sessions):
    """Register a user and return a token for them."""
    def _login(email="bob@dylan.com", password="toto1234!"):
        sessions.register(email, password)
        return sessions.sign_in(email, password)
    return _login


@pytest.fixture
def test_client(identity_store, jobs, blob_root):
    """FastAPI test client on an empty database, with fake Redis-backed stores."""
    from fastapi.testclient import TestClient

    from files_manager.core.config import get_settings
    from files_manager.main import app
    from files_manager.models.database import Base, engine
    from files_manager.routers.deps import get_identity_store, get_job_queue

    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)

    app.dependency_overrides[get_settings] = lambda: Settings(folder_path=blob_root)
    app.dependency_overrides[get_identity_store] = lambda: identity_store
    app.dependency_overrides[get_job_queue] = lambda: jobs
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def broken_jobs():
    return BrokenJobQueue()
