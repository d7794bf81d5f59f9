"""Tests for the error taxonomy and storage-failure behavior at the HTTP boundary."""
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from community_events.config import settings
from community_events.database import Base
from community_events.errors import (
    ConflictError,
    NotFoundError,
    StorageUnavailableError,
    ValidationError,
    register_exception_handlers,
)


class TestErrorClasses:

    def test_validation_error_defaults(self):
        error = ValidationError()
        assert error.status_code == 400
        assert error.error == "validation_error"
        assert error.detail == "Invalid request"
        assert error.context is None

    def test_not_found_error_with_context(self):
        error = NotFoundError(detail="Event not found", event_id="e1")
        assert error.status_code == 404
        assert error.context == {"event_id": "e1"}

    def test_conflict_error(self):
        error = ConflictError(detail="Response id evt_1_user already taken", event_id="evt_1")
        assert error.status_code == 409
        assert error.error == "conflict"

    def test_storage_unavailable_error(self):
        error = StorageUnavailableError(detail="Could not read event_responses.json")
        assert error.status_code == 503
        assert error.error == "storage_unavailable"
        assert str(error) == "Could not read event_responses.json"


class TestHandler:

    @pytest.fixture
    def app_client(self):
        app = FastAPI()
        register_exception_handlers(app)

        @app.get("/boom")
        def boom():
            raise StorageUnavailableError(detail="down")

        @app.get("/bad")
        def bad():
            raise ValidationError(detail="participantId is required", field="participantId")

        return TestClient(app)

    def test_storage_error_body(self, app_client):
        resp = app_client.get("/boom")
        assert resp.status_code == 503
        assert resp.json() == {"error": "storage_unavailable", "detail": "down"}

    def test_validation_error_body(self, app_client):
        resp = app_client.get("/bad")
        assert resp.status_code == 400
        assert resp.json() == {
            "error": "validation_error",
            "detail": "participantId is required",
            "context": {"field": "participantId"},
        }


def _break_document_store(data_dir):
    data_dir.mkdir(parents=True, exist_ok=True)
    (data_dir / "event_responses.json").write_text("not json")
    (data_dir / "event_metadata.json").write_text("not json")


class TestStorageFailures:
    """Writes never report success on failure; reads degrade only when enabled."""

    @pytest.fixture
    def broken_client(self, client, backend, data_dir, db_engine):
        if backend == "document":
            _break_document_store(data_dir)
        else:
            Base.metadata.drop_all(bind=db_engine)
        yield client
        if backend == "table":
            Base.metadata.create_all(bind=db_engine)

    def test_write_failure_is_503(self, broken_client):
        resp = broken_client.post("/api/events/e1/respond", json={"participantId": "u1", "responseType": "like"})
        assert resp.status_code == 503
        assert resp.json()["error"] == "storage_unavailable"
        assert "success" not in resp.json()

    def test_metadata_write_failure_is_503(self, broken_client):
        resp = broken_client.post("/api/events/e1/metadata", json={"imagePath": "a.jpg"})
        assert resp.status_code == 503

    def test_read_failure_is_503_by_default(self, broken_client):
        assert broken_client.get("/api/statistics").status_code == 503
        assert broken_client.get("/api/events/e1/responses").status_code == 503

    def test_reads_degrade_when_enabled(self, broken_client, monkeypatch):
        monkeypatch.setattr(settings, "DEGRADE_READS_ON_STORAGE_ERROR", True)
        assert broken_client.get("/api/events/e1/responses").json() == []
        assert broken_client.get("/api/responses").json() == {}
        assert broken_client.get("/api/metadata").json() == {}
        stats = broken_client.get("/api/statistics").json()
        assert stats["events"] == {}
        assert stats["totals"]["eventCount"] == 0

    def test_delete_failure_is_503(self, broken_client):
        assert broken_client.delete("/api/events/e1/responses/u1").status_code == 503
