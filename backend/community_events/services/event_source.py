"""Read-only access to the cached calendar feed.

The calendar itself is an external collaborator; this service only reads the
local JSON mirror of it: a list of events, or the feed response itself
(``{"items": [...]}``) with raw calendar items carrying ``start``/``end``
objects.
"""
import json
import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError as SchemaValidationError

from community_events.errors import StorageUnavailableError
from community_events.schemas.event import FeedEvent

logger = logging.getLogger(__name__)


class EventSource:
    def __init__(self, path: str) -> None:
        self.path = Path(path)

    def list_events(self) -> list[FeedEvent]:
        """All mirrored events ordered by start date. A missing mirror means no events."""
        if not self.path.exists():
            logger.info("Event feed mirror %s not found; no events to list", self.path)
            return []
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                raw = json.load(fh)
        except (OSError, ValueError) as exc:
            logger.exception("Failed to read event feed mirror %s", self.path)
            raise StorageUnavailableError(detail="Event feed unavailable") from exc

        if isinstance(raw, dict):
            raw = raw.get("items", [])
        if not isinstance(raw, list):
            logger.error("Event feed mirror %s holds %s, expected a list of events", self.path, type(raw).__name__)
            raise StorageUnavailableError(detail="Event feed unavailable")
        events = []
        for item in raw:
            try:
                events.append(FeedEvent.model_validate(item))
            except SchemaValidationError:
                logger.warning("Skipping malformed feed entry: %r", item)
        return sorted(events, key=lambda e: e.date or "")

    def get_event(self, event_id: str) -> Optional[FeedEvent]:
        for event in self.list_events():
            if event.id == event_id:
                return event
        return None
