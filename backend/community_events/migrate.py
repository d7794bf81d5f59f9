"""Copy responses and metadata from the JSON document backend into SQL tables.

Usage:
    python -m community_events.migrate --data-dir ./data

Two response layouts are understood: the flat one written by the document
backend (``{"<event>_<participant>": {record}}``) and the older grouped one
(``{"<event>": [{"userId", "responseType", "timestamp"}, ...]}``). Metadata
entries may omit their event id, in which case the document key is used.

Records keep their composite ids and metadata keys, so re-running the
migration is harmless. Entries that cannot be migrated are logged and skipped.
"""
import argparse
import logging
from datetime import datetime, timezone
from pathlib import Path

from pydantic import ValidationError as SchemaValidationError
from sqlalchemy.orm import Session

from community_events.database import Base, SessionLocal, engine
from community_events.dependencies import METADATA_DOCUMENT, RESPONSES_DOCUMENT
from community_events.errors import ConflictError, ValidationError
from community_events.models.metadata import EventMetadata
from community_events.models.response import EventResponse
from community_events.schemas.metadata import MetadataRecord
from community_events.schemas.response import ResponseCreate, ResponseRecord
from community_events.services.response_service import ResponseStore
from community_events.storage.document import DocumentCollection
from community_events.storage.table import TableCollection

logger = logging.getLogger(__name__)


def _migrate_responses(document: DocumentCollection, db: Session) -> int:
    table = TableCollection(db, EventResponse)
    store = ResponseStore(table)
    migrated = 0
    for key, value in document.snapshot().items():
        # Grouped layout: the key is the event id and the value its entries.
        entries = value if isinstance(value, list) else [value]
        for entry in entries:
            try:
                if isinstance(value, list):
                    request = ResponseCreate.model_validate(entry)
                    store.upsert_response(key, request.participant_id, request.response_type, request.timestamp)
                else:
                    record = ResponseRecord.model_validate(entry)
                    table.put(record.id, record.model_dump())
            except (SchemaValidationError, ValidationError, ConflictError) as exc:
                logger.warning("Skipping response entry under %s: %s", key, exc)
                continue
            migrated += 1
    return migrated


def _migrate_metadata(document: DocumentCollection, db: Session) -> int:
    table = TableCollection(db, EventMetadata)
    migrated = 0
    for key, value in document.snapshot().items():
        if not isinstance(value, dict):
            logger.warning("Skipping metadata entry %s: unexpected %s", key, type(value).__name__)
            continue
        if "event_id" not in value and "eventId" not in value:
            value = {**value, "event_id": key}
        try:
            record = MetadataRecord.model_validate(value)
        except SchemaValidationError as exc:
            logger.warning("Skipping metadata entry %s: %s", key, exc)
            continue
        if record.last_updated is None:
            record.last_updated = datetime.now(timezone.utc)
        table.put(record.event_id, record.model_dump())
        migrated += 1
    return migrated


def migrate_documents_to_table(data_dir: str, db: Session) -> dict[str, int]:
    """Copy every document record into its table; returns counts per collection."""
    data_path = Path(data_dir)
    counts = {
        "responses": _migrate_responses(DocumentCollection(data_path / RESPONSES_DOCUMENT), db),
        "metadata": _migrate_metadata(DocumentCollection(data_path / METADATA_DOCUMENT), db),
    }
    logger.info(
        "Migrated %d responses and %d metadata records from %s",
        counts["responses"], counts["metadata"], data_path,
    )
    return counts


def main(argv=None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--data-dir", default="./data", help="directory holding the JSON documents")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        migrate_documents_to_table(args.data_dir, db)
    finally:
        db.close()


if __name__ == "__main__":
    main()
