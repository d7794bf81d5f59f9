"""Key-value collection interface shared by both storage backends.

Stores depend only on this interface so the SQL table and the flat JSON
document backends are interchangeable.
"""
from abc import ABC, abstractmethod
from typing import Any, Optional

Record = dict[str, Any]


class KeyValueCollection(ABC):
    """A mapping of string keys to flat records.

    Every method raises ``StorageUnavailableError`` when the backing store
    cannot be reached.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[Record]:
        """Return the record stored under ``key``, or None."""
        ...

    @abstractmethod
    def put(self, key: str, record: Record) -> None:
        """Atomically replace the record stored under ``key``."""
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Remove ``key``; a missing key is not an error."""
        ...

    @abstractmethod
    def scan(self, where: Optional[Record] = None) -> list[Record]:
        """Return all records, optionally only those whose fields equal ``where``."""
        ...
