"""Aggregate statistics route."""
from fastapi import APIRouter, Depends

from community_events.dependencies import degrade_read, get_response_store
from community_events.errors import StorageUnavailableError
from community_events.schemas.statistics import StatisticsOut
from community_events.services.response_service import ResponseStore

router = APIRouter()


@router.get("/statistics", response_model=StatisticsOut)
def get_statistics(store: ResponseStore = Depends(get_response_store)):
    """Like/dislike counts per event plus grand totals."""
    try:
        return store.compute_statistics()
    except StorageUnavailableError as exc:
        return degrade_read(exc, StatisticsOut(), "statistics")
