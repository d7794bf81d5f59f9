"""Pytest fixtures — per-test SQLite database and JSON document directory."""
from datetime import datetime

import pytest
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from fastapi.testclient import TestClient

from community_events.config import settings
from community_events.database import Base, get_db
from community_events.main import app
from community_events.storage.document import DocumentCollection
from community_events.storage.table import TableCollection

# Import all models so they register with Base.metadata
from community_events.models.response import EventResponse  # noqa: F401
from community_events.models.metadata import EventMetadata  # noqa: F401


@pytest.fixture(scope="function")
def db_engine(tmp_path):
    """Create a fresh SQLite engine for each test."""
    engine = create_engine(f"sqlite:///{tmp_path / 'test.db'}", connect_args={"check_same_thread": False})

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn, connection_record):
        cursor = dbapi_conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture(scope="function")
def db(db_engine):
    """Yield a database session, closed after the test."""
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestingSession()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def data_dir(tmp_path, monkeypatch):
    """Point the document backend at a per-test directory."""
    path = tmp_path / "data"
    monkeypatch.setattr(settings, "DATA_DIR", str(path))
    monkeypatch.setattr(settings, "EVENTS_FILE", str(path / "events.json"))
    return path


@pytest.fixture(params=["table", "document"])
def backend(request):
    return request.param


@pytest.fixture(scope="function")
def response_collection(backend, db, tmp_path):
    """Response collection on each backend in turn."""
    if backend == "table":
        return TableCollection(db, EventResponse)
    return DocumentCollection(tmp_path / "event_responses.json")


@pytest.fixture(scope="function")
def metadata_collection(backend, db, tmp_path):
    """Metadata collection on each backend in turn."""
    if backend == "table":
        return TableCollection(db, EventMetadata)
    return DocumentCollection(tmp_path / "event_metadata.json")


@pytest.fixture(scope="function")
def client(db_engine, data_dir, backend, monkeypatch):
    """FastAPI TestClient on each backend; the SQL one is overridden to use SQLite."""
    monkeypatch.setattr(settings, "STORAGE_BACKEND", backend)
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def _override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def respond(client: TestClient, event_id: str, participant_id: str, response_type: str = "like",
            timestamp: str = "2024-03-01T10:00:00Z") -> dict:
    """Helper — POST a response and return the response JSON."""
    resp = client.post(f"/api/events/{event_id}/respond", json={
        "responseType": response_type,
        "participantId": participant_id,
        "timestamp": timestamp,
    })
    assert resp.status_code == 201, resp.text
    return resp.json()


def parse_ts(value: str) -> datetime:
    """Parse an ISO timestamp as emitted by the API (``Z`` or offset suffix)."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))
