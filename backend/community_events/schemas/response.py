"""Pydantic schemas for event responses (likes / dislikes)."""
from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional
from pydantic import AliasChoices, Field, field_validator

from community_events.schemas.common import CamelModel


def response_id(event_id: str, participant_id: str) -> str:
    """Composite key guaranteeing one response per (event, participant)."""
    return f"{event_id}_{participant_id}"


class ResponseCreate(CamelModel):
    # Both fields stay optional here so a missing value is reported as a 400
    # by the store rather than a schema-level 422.
    response_type: Optional[str] = None
    participant_id: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("participantId", "userId", "participant_id"),
    )
    timestamp: Optional[datetime] = None


class ResponseRecord(CamelModel):
    id: str
    event_id: str
    participant_id: str
    response_type: str
    timestamp: datetime

    @field_validator("timestamp")
    @classmethod
    def assume_utc(cls, v: datetime) -> datetime:
        # Stored timestamps are always UTC; some backends drop the offset.
        if v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v.astimezone(timezone.utc)


class ResponseOut(CamelModel):
    id: str
    participant_id: str
    response_type: str
    timestamp: datetime
