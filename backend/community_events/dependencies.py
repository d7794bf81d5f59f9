"""FastAPI dependencies wiring the stores to the configured storage backend.

Usage in routers:
    from community_events.dependencies import get_response_store

    @router.get("/example")
    def example(store: ResponseStore = Depends(get_response_store)):
        ...
"""
import logging
from pathlib import Path

from fastapi import Depends
from sqlalchemy.orm import Session

from community_events.config import settings
from community_events.database import get_db
from community_events.errors import StorageUnavailableError
from community_events.models.metadata import EventMetadata
from community_events.models.response import EventResponse
from community_events.services.event_source import EventSource
from community_events.services.metadata_service import MetadataStore
from community_events.services.response_service import ResponseStore
from community_events.storage.base import KeyValueCollection
from community_events.storage.document import DocumentCollection
from community_events.storage.table import TableCollection

RESPONSES_DOCUMENT = "event_responses.json"
METADATA_DOCUMENT = "event_metadata.json"

logger = logging.getLogger(__name__)


def build_collection(backend: str, db: Session, model, document_name: str) -> KeyValueCollection:
    """Return the collection for ``model`` on the given backend ("table" or "document")."""
    if backend == "document":
        return DocumentCollection(Path(settings.DATA_DIR) / document_name)
    if backend == "table":
        return TableCollection(db, model)
    raise ValueError(f"Unknown storage backend: {backend!r}")


def get_response_store(db: Session = Depends(get_db)) -> ResponseStore:
    return ResponseStore(build_collection(settings.STORAGE_BACKEND, db, EventResponse, RESPONSES_DOCUMENT))


def get_metadata_store(db: Session = Depends(get_db)) -> MetadataStore:
    return MetadataStore(build_collection(settings.STORAGE_BACKEND, db, EventMetadata, METADATA_DOCUMENT))


def get_event_source() -> EventSource:
    return EventSource(settings.EVENTS_FILE)


def degrade_read(exc: StorageUnavailableError, empty, what: str):
    """Return ``empty`` for a failed listing read when degraded reads are enabled, else re-raise."""
    if not settings.DEGRADE_READS_ON_STORAGE_ERROR:
        raise exc
    logger.warning("Serving empty %s: %s", what, exc.detail)
    return empty
