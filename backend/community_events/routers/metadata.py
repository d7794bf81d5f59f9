"""Event metadata routes — delegates to MetadataStore for merge-upsert semantics."""
import logging
from fastapi import APIRouter, Depends

from community_events.dependencies import degrade_read, get_metadata_store
from community_events.errors import StorageUnavailableError
from community_events.schemas.common import ActionResult
from community_events.schemas.metadata import MetadataOut, MetadataPatch, MetadataSaved
from community_events.services.metadata_service import MetadataStore

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/events/{event_id}/metadata", response_model=MetadataOut, response_model_exclude_none=True)
def get_event_metadata(event_id: str, store: MetadataStore = Depends(get_metadata_store)):
    """Stored metadata for an event, or ``{}`` when there is none."""
    return store.get_metadata(event_id)


@router.post("/events/{event_id}/metadata", response_model=MetadataSaved, response_model_exclude_none=True)
def save_event_metadata(event_id: str, payload: MetadataPatch, store: MetadataStore = Depends(get_metadata_store)):
    """Merge the supplied fields into the event's metadata (null clears a field)."""
    merged = store.upsert_metadata(event_id, payload)
    return MetadataSaved(
        success=True,
        message="Metadata updated successfully",
        metadata=MetadataOut.model_validate(merged),
    )


@router.delete("/events/{event_id}/metadata", response_model=ActionResult)
def delete_event_metadata(event_id: str, store: MetadataStore = Depends(get_metadata_store)):
    store.delete_metadata(event_id)
    return ActionResult(success=True, message="Metadata removed")


@router.get("/metadata", response_model=dict[str, MetadataOut], response_model_exclude_none=True)
def list_all_metadata(store: MetadataStore = Depends(get_metadata_store)):
    """Metadata for every event that has any, keyed by event id."""
    try:
        return store.list_all_metadata()
    except StorageUnavailableError as exc:
        return degrade_read(exc, {}, "metadata listing")
