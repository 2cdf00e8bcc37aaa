"""
Region Store Contract
=====================

Bounded Context: Persistence collaborator interface

The core only ever hands opaque record bytes to a store; it has no
knowledge of the storage engine behind it.

Dependencies:
- none (stdlib typing only)
"""

import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import List, Protocol


class StorageError(Exception):
    """Raised when the persistence collaborator cannot complete an operation."""
    pass


def as_utc(dt: datetime) -> datetime:
    """Treat naive datetimes as UTC so records stay sortable."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


@dataclass(frozen=True)
class StoredRecord:
    """
    One persisted region as the store sees it.

    Attributes:
        id: Region identifier
        created_at: Creation time
        raw_bytes: Encoded vertex list (opaque to the store)
    """
    id: uuid.UUID
    created_at: datetime
    raw_bytes: bytes


class RegionStore(Protocol):
    """Protocol for region persistence (interface)."""

    def list_regions(self) -> List[StoredRecord]:
        """All stored records, newest first."""
        ...

    def save_region(self, region_id: uuid.UUID, created_at: datetime, raw_bytes: bytes) -> None:
        """
        Persist one record.

        Raises:
            StorageError: If the record cannot be written
        """
        ...

    def delete_region(self, region_id: uuid.UUID) -> None:
        """
        Remove one record.

        Raises:
            StorageError: If the record does not exist or cannot be removed
        """
        ...

    def delete_all(self) -> None:
        """
        Remove every record.

        Raises:
            StorageError: If the store cannot be cleared
        """
        ...
