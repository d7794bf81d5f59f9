"""SQL table backend — one ORM row per record, keyed by the primary key column."""
import logging
from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from community_events.errors import StorageUnavailableError
from community_events.storage.base import KeyValueCollection, Record

logger = logging.getLogger(__name__)


class TableCollection(KeyValueCollection):
    """Key-value view over a single-column-primary-key ORM model.

    Record fields are the model's column names.
    """

    def __init__(self, db: Session, model) -> None:
        self.db = db
        self.model = model
        self._columns = [c.key for c in inspect(model).columns]
        self._key_column = inspect(model).primary_key[0].key

    def _to_record(self, row) -> Record:
        return {name: getattr(row, name) for name in self._columns}

    def _fail(self, action: str, exc: SQLAlchemyError):
        self.db.rollback()
        logger.exception("Failed to %s on table %s", action, self.model.__tablename__)
        raise StorageUnavailableError(
            detail=f"Could not {action} on {self.model.__tablename__}",
        ) from exc

    def get(self, key: str) -> Optional[Record]:
        try:
            row = self.db.get(self.model, key)
        except SQLAlchemyError as exc:
            self._fail("read", exc)
        return self._to_record(row) if row is not None else None

    def put(self, key: str, record: Record) -> None:
        values = {name: record.get(name) for name in self._columns}
        values[self._key_column] = key
        try:
            self.db.merge(self.model(**values))
            self.db.commit()
        except SQLAlchemyError as exc:
            self._fail("write", exc)

    def delete(self, key: str) -> None:
        try:
            row = self.db.get(self.model, key)
            if row is None:
                return
            self.db.delete(row)
            self.db.commit()
        except SQLAlchemyError as exc:
            self._fail("delete", exc)

    def scan(self, where: Optional[Record] = None) -> list[Record]:
        query = self.db.query(self.model)
        if where:
            query = query.filter_by(**where)
        try:
            rows = query.all()
        except SQLAlchemyError as exc:
            self._fail("scan", exc)
        return [self._to_record(row) for row in rows]
