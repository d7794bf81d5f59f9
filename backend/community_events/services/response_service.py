"""Response store — one like/dislike per (event, participant).

The composite id ``f"{event_id}_{participant_id}"`` is the collection key, so
a repeat submission lands on the same key and replaces the earlier record.
Ids containing ``_`` can collide across pairs (``a_b`` + ``c`` vs ``a`` + ``b_c``);
a write for a key stored under another pair is refused with 409 and a
delete for one is a no-op.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import pytz

from community_events.config import settings
from community_events.errors import ConflictError, ValidationError
from community_events.models.response import ResponseType
from community_events.schemas.response import ResponseRecord, response_id
from community_events.services import statistics_service
from community_events.schemas.statistics import StatisticsOut
from community_events.storage.base import KeyValueCollection

logger = logging.getLogger(__name__)


def normalize_timestamp(timestamp: Optional[datetime], now: Optional[datetime] = None) -> datetime:
    """Return a UTC timestamp for a client-supplied instant.

    Missing -> server now. Naive -> interpreted in DEFAULT_TIMEZONE.
    Further in the future than MAX_CLOCK_SKEW_SECONDS -> clamped to now.
    """
    now = now or datetime.now(timezone.utc)
    if timestamp is None:
        return now
    if timestamp.tzinfo is None:
        timestamp = pytz.timezone(settings.DEFAULT_TIMEZONE).localize(timestamp)
    timestamp = timestamp.astimezone(timezone.utc)
    if timestamp - now > timedelta(seconds=settings.MAX_CLOCK_SKEW_SECONDS):
        logger.info("Clamping future response timestamp %s to %s", timestamp.isoformat(), now.isoformat())
        return now
    return timestamp


def _owned_by(record: dict, event_id: str, participant_id: str) -> bool:
    return record.get("event_id") == event_id and record.get("participant_id") == participant_id


def _require(value: Optional[str], field: str) -> str:
    if value is None or not str(value).strip():
        raise ValidationError(detail=f"{field} is required", field=field)
    return str(value).strip()


class ResponseStore:
    """Upsert, delete and query responses over any key-value collection."""

    def __init__(self, collection: KeyValueCollection) -> None:
        self.collection = collection

    def _check_owner(self, key: str, event_id: str, participant_id: str) -> None:
        """Refuse to overwrite a record stored under ``key`` for a different pair."""
        stored = self.collection.get(key)
        if stored is not None and not _owned_by(stored, event_id, participant_id):
            raise ConflictError(
                detail=f"Response id {key} already belongs to another event/participant pair",
                event_id=stored.get("event_id"),
                participant_id=stored.get("participant_id"),
            )

    def upsert_response(
        self,
        event_id: str,
        participant_id: Optional[str],
        response_type: Optional[str],
        timestamp: Optional[datetime] = None,
    ) -> ResponseRecord:
        """Create or overwrite the participant's response to an event."""
        event_id = _require(event_id, "eventId")
        participant_id = _require(participant_id, "participantId")
        raw_type = _require(response_type, "responseType")
        try:
            kind = ResponseType(raw_type.lower())
        except ValueError:
            raise ValidationError(
                detail=f"Invalid response type: {raw_type}",
                field="responseType",
                allowed=[t.value for t in ResponseType],
            )

        key = response_id(event_id, participant_id)
        self._check_owner(key, event_id, participant_id)
        record = ResponseRecord(
            id=key,
            event_id=event_id,
            participant_id=participant_id,
            response_type=kind.value,
            timestamp=normalize_timestamp(timestamp),
        )
        self.collection.put(record.id, record.model_dump())
        logger.info("Participant %s responded '%s' to event %s", participant_id, kind.value, event_id)
        return record

    def delete_response(self, event_id: str, participant_id: str) -> None:
        """Withdraw a response. Deleting a missing response is a no-op."""
        event_id = _require(event_id, "eventId")
        participant_id = _require(participant_id, "participantId")
        key = response_id(event_id, participant_id)
        stored = self.collection.get(key)
        if stored is None or not _owned_by(stored, event_id, participant_id):
            return
        self.collection.delete(key)
        logger.info("Removed response %s", key)

    def list_responses_for_event(self, event_id: str) -> list[ResponseRecord]:
        records = [ResponseRecord.model_validate(r) for r in self.collection.scan({"event_id": event_id})]
        return sorted(records, key=lambda r: (r.timestamp, r.id))

    def list_all_responses_grouped_by_event(self) -> dict[str, list[ResponseRecord]]:
        grouped: dict[str, list[ResponseRecord]] = {}
        for raw in self.collection.scan():
            record = ResponseRecord.model_validate(raw)
            grouped.setdefault(record.event_id, []).append(record)
        for records in grouped.values():
            records.sort(key=lambda r: (r.timestamp, r.id))
        return grouped

    def compute_statistics(self) -> StatisticsOut:
        return statistics_service.compute_statistics(self.list_all_responses_grouped_by_event())
