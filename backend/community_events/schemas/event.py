"""Pydantic schemas for events mirrored from the calendar feed."""
from __future__ import annotations
from typing import Any, Optional
from pydantic import AliasChoices, Field, model_validator

from community_events.schemas.common import CamelModel


def _when(value: Any) -> Optional[str]:
    """``{"dateTime": ...}`` for timed events, ``{"date": ...}`` for all-day ones."""
    if isinstance(value, dict):
        return value.get("dateTime") or value.get("date")
    return value


class FeedEvent(CamelModel):
    """One mirrored event, either already flattened or as a raw calendar item."""

    id: str
    title: str = Field(default="", validation_alias=AliasChoices("title", "summary"))
    description: str = ""
    location: str = "No location specified"
    date: Optional[str] = None
    end_date: Optional[str] = Field(default=None, validation_alias=AliasChoices("endDate", "end_date"))

    @model_validator(mode="before")
    @classmethod
    def flatten_calendar_item(cls, data: Any) -> Any:
        if not isinstance(data, dict) or ("start" not in data and "end" not in data):
            return data
        data = dict(data)
        if data.get("date") is None:
            data["date"] = _when(data.get("start"))
        if data.get("endDate") is None and data.get("end_date") is None:
            data["endDate"] = _when(data.get("end"))
        if data.get("description") is None:
            data.pop("description", None)
        if not data.get("location"):
            data.pop("location", None)
        return data


class EventOut(FeedEvent):
    image_url: str
    additional_info: Optional[str] = None
    likes: int = 0
    dislikes: int = 0


class EventImageOut(CamelModel):
    event_id: str
    image_url: str
