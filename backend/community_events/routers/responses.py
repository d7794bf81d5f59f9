"""Like/dislike response routes — delegates to ResponseStore."""
import logging
from fastapi import APIRouter, Depends, status

from community_events.dependencies import degrade_read, get_response_store
from community_events.errors import StorageUnavailableError
from community_events.schemas.common import ActionResult
from community_events.schemas.response import ResponseCreate, ResponseOut
from community_events.services.response_service import ResponseStore

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("/events/{event_id}/responses", response_model=list[ResponseOut])
def list_event_responses(event_id: str, store: ResponseStore = Depends(get_response_store)):
    """All responses recorded for one event."""
    try:
        return store.list_responses_for_event(event_id)
    except StorageUnavailableError as exc:
        return degrade_read(exc, [], f"responses for event {event_id}")


@router.post("/events/{event_id}/respond", response_model=ActionResult, status_code=status.HTTP_201_CREATED)
def respond_to_event(event_id: str, payload: ResponseCreate, store: ResponseStore = Depends(get_response_store)):
    """Record or replace the participant's like/dislike."""
    store.upsert_response(
        event_id=event_id,
        participant_id=payload.participant_id,
        response_type=payload.response_type,
        timestamp=payload.timestamp,
    )
    return ActionResult(success=True, message="Response recorded")


@router.delete("/events/{event_id}/responses/{participant_id}", response_model=ActionResult)
def remove_response(event_id: str, participant_id: str, store: ResponseStore = Depends(get_response_store)):
    """Withdraw a response; succeeds even if there was nothing to withdraw."""
    store.delete_response(event_id, participant_id)
    return ActionResult(success=True, message="Response removed")


@router.get("/responses", response_model=dict[str, list[ResponseOut]])
def list_all_responses(store: ResponseStore = Depends(get_response_store)):
    """Every response, grouped by event id."""
    try:
        return store.list_all_responses_grouped_by_event()
    except StorageUnavailableError as exc:
        return degrade_read(exc, {}, "response listing")
