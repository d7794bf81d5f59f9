"""Pydantic schemas for event metadata."""
from __future__ import annotations
from datetime import datetime, timezone
from typing import Optional
from pydantic import field_validator

from community_events.schemas.common import ActionResult, CamelModel

MERGE_FIELDS = ("image_path", "image_category", "additional_info")


class MetadataPatch(CamelModel):
    """Sparse metadata update.

    Each field is in one of three states: absent from the request (keep the
    stored value), explicit ``null`` or a blank string (clear it), or a
    string (replace it). ``model_fields_set`` tells absent apart from null.
    """

    image_path: Optional[str] = None
    image_category: Optional[str] = None
    additional_info: Optional[str] = None

    def changes(self) -> dict[str, Optional[str]]:
        """Fields the caller mentioned, mapped to their new value (None = clear)."""
        result: dict[str, Optional[str]] = {}
        for field in MERGE_FIELDS:
            if field not in self.model_fields_set:
                continue
            value = getattr(self, field)
            if value is not None:
                value = value.strip() or None
            result[field] = value
        return result


class MetadataRecord(CamelModel):
    event_id: str
    image_path: Optional[str] = None
    image_category: Optional[str] = None
    additional_info: Optional[str] = None
    last_updated: Optional[datetime] = None

    @field_validator("last_updated")
    @classmethod
    def assume_utc(cls, v: Optional[datetime]) -> Optional[datetime]:
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=timezone.utc)
        return v


class MetadataOut(CamelModel):
    image_path: Optional[str] = None
    image_category: Optional[str] = None
    additional_info: Optional[str] = None
    last_updated: Optional[datetime] = None


class MetadataSaved(ActionResult):
    metadata: MetadataOut
