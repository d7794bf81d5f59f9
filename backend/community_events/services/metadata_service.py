"""Metadata store — one merge-upserted record per event.

Fields the caller does not mention keep their stored value; fields sent as
null are cleared. The merged record is written back as one full replace of
the event's key, so no partially-updated record is ever visible.
"""
import logging
from datetime import datetime, timezone

from community_events.errors import ValidationError
from community_events.schemas.metadata import MetadataPatch, MetadataRecord
from community_events.storage.base import KeyValueCollection

logger = logging.getLogger(__name__)


class MetadataStore:
    def __init__(self, collection: KeyValueCollection) -> None:
        self.collection = collection

    def get_metadata(self, event_id: str) -> MetadataRecord:
        """Stored metadata, or an empty record when the event has none."""
        raw = self.collection.get(event_id)
        if raw is None:
            return MetadataRecord(event_id=event_id)
        return MetadataRecord.model_validate(raw)

    def list_all_metadata(self) -> dict[str, MetadataRecord]:
        records = (MetadataRecord.model_validate(raw) for raw in self.collection.scan())
        return {record.event_id: record for record in records}

    def upsert_metadata(self, event_id: str, patch: MetadataPatch) -> MetadataRecord:
        """Apply ``patch`` on top of the stored record and stamp ``last_updated``."""
        if not event_id or not event_id.strip():
            raise ValidationError(detail="eventId is required", field="eventId")

        changes = patch.changes()
        current = self.get_metadata(event_id)
        merged = current.model_copy(update={**changes, "last_updated": datetime.now(timezone.utc)})
        self.collection.put(event_id, merged.model_dump())
        logger.info("Updated metadata for event %s (fields: %s)", event_id, ", ".join(sorted(changes)) or "none")
        return merged

    def clear_image(self, event_id: str) -> MetadataRecord:
        return self.upsert_metadata(event_id, MetadataPatch(image_path=None))

    def delete_metadata(self, event_id: str) -> None:
        self.collection.delete(event_id)
        logger.info("Deleted metadata for event %s", event_id)
