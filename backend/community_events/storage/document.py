"""Flat JSON document backend.

Each collection is one JSON object on disk mapping key -> record. Every
write rewrites the whole file through a temporary file and ``os.replace``
so a reader never observes a half-written document.
"""
import json
import logging
import os
import tempfile
import threading
from datetime import date, datetime
from pathlib import Path
from typing import Any, Optional, Union

from community_events.errors import StorageUnavailableError
from community_events.storage.base import KeyValueCollection, Record

logger = logging.getLogger(__name__)

# One lock per resolved file path, shared by every collection instance in the process.
_locks: dict[str, threading.Lock] = {}
_locks_guard = threading.Lock()


def _lock_for(path: Path) -> threading.Lock:
    with _locks_guard:
        return _locks.setdefault(str(path), threading.Lock())


def _encode(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


class DocumentCollection(KeyValueCollection):
    """Key-value collection persisted as a single JSON mapping file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path).resolve()
        self._lock = _lock_for(self.path)

    def _load(self) -> dict[str, Record]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as fh:
                data = json.load(fh)
        except (OSError, ValueError) as exc:
            logger.exception("Failed to read document %s", self.path)
            raise StorageUnavailableError(detail=f"Could not read {self.path.name}") from exc
        if not isinstance(data, dict):
            logger.error("Document %s does not hold a JSON object", self.path)
            raise StorageUnavailableError(detail=f"Corrupt document {self.path.name}")
        return data

    def _flush(self, data: dict[str, Record]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(data, fh, indent=2, default=_encode)
                    fh.flush()
                    os.fsync(fh.fileno())
                os.replace(tmp_name, self.path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except (OSError, TypeError, ValueError) as exc:
            logger.exception("Failed to write document %s", self.path)
            raise StorageUnavailableError(detail=f"Could not write {self.path.name}") from exc

    def get(self, key: str) -> Optional[Record]:
        with self._lock:
            record = self._load().get(key)
        return dict(record) if record is not None else None

    def put(self, key: str, record: Record) -> None:
        with self._lock:
            data = self._load()
            data[key] = dict(record)
            self._flush(data)

    def delete(self, key: str) -> None:
        with self._lock:
            data = self._load()
            if key not in data:
                return
            del data[key]
            self._flush(data)

    def snapshot(self) -> dict[str, Any]:
        """The whole document as stored, without assuming a record shape."""
        with self._lock:
            return self._load()

    def scan(self, where: Optional[Record] = None) -> list[Record]:
        with self._lock:
            records = list(self._load().values())
        if not all(isinstance(r, dict) for r in records):
            logger.error("Document %s holds entries that are not records", self.path)
            raise StorageUnavailableError(detail=f"Corrupt document {self.path.name}")
        if where:
            records = [r for r in records if all(r.get(k) == v for k, v in where.items())]
        return [dict(r) for r in records]
