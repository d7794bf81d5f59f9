"""Event feed routes — the mirrored calendar, enriched with metadata and responses."""
import logging
from fastapi import APIRouter, Depends

from community_events.dependencies import get_event_source, get_metadata_store, get_response_store
from community_events.errors import NotFoundError
from community_events.schemas.common import ActionResult
from community_events.schemas.event import EventImageOut, EventOut
from community_events.services import statistics_service
from community_events.services.event_source import EventSource
from community_events.services.image_service import resolve_image
from community_events.services.metadata_service import MetadataStore
from community_events.services.response_service import ResponseStore

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/", response_model=list[EventOut])
def list_events(
    source: EventSource = Depends(get_event_source),
    metadata_store: MetadataStore = Depends(get_metadata_store),
    response_store: ResponseStore = Depends(get_response_store),
):
    """Upcoming events with their resolved image, notes and like/dislike counts."""
    events = source.list_events()
    all_metadata = metadata_store.list_all_metadata()
    grouped = response_store.list_all_responses_grouped_by_event()

    enriched = []
    for event in events:
        metadata = all_metadata.get(event.id)
        counts = statistics_service.count_responses(grouped.get(event.id, []))
        enriched.append(EventOut(
            **event.model_dump(),
            image_url=resolve_image(event, metadata),
            additional_info=metadata.additional_info if metadata else None,
            likes=counts.likes,
            dislikes=counts.dislikes,
        ))
    return enriched


@router.get("/{event_id}/image", response_model=EventImageOut)
def get_event_image(
    event_id: str,
    source: EventSource = Depends(get_event_source),
    metadata_store: MetadataStore = Depends(get_metadata_store),
):
    """Resolve the display image for an event in the feed."""
    event = source.get_event(event_id)
    if event is None:
        raise NotFoundError(detail="Event not found", event_id=event_id)
    metadata = metadata_store.get_metadata(event_id)
    return EventImageOut(event_id=event_id, image_url=resolve_image(event, metadata))


@router.delete("/{event_id}/image", response_model=ActionResult)
def clear_event_image(event_id: str, metadata_store: MetadataStore = Depends(get_metadata_store)):
    """Drop the custom image so the card falls back to its category or default image."""
    metadata_store.clear_image(event_id)
    logger.info("Cleared custom image for event %s", event_id)
    return ActionResult(success=True, message="Image removed")
