"""In-memory region store (tests, previews, the `memory` backend)."""

import uuid
from datetime import datetime
from typing import Dict, List

from .base import StorageError, StoredRecord, as_utc


class InMemoryRegionStore:
    """
    Dict-backed RegionStore.

    Records are lost when the process exits.
    """

    def __init__(self):
        self._records: Dict[uuid.UUID, StoredRecord] = {}

    def list_regions(self) -> List[StoredRecord]:
        return sorted(self._records.values(), key=lambda r: r.created_at, reverse=True)

    def save_region(self, region_id: uuid.UUID, created_at: datetime, raw_bytes: bytes) -> None:
        self._records[region_id] = StoredRecord(
            id=region_id,
            created_at=as_utc(created_at),
            raw_bytes=bytes(raw_bytes),
        )

    def delete_region(self, region_id: uuid.UUID) -> None:
        if region_id not in self._records:
            raise StorageError(f"Region '{region_id}' not found")
        del self._records[region_id]

    def delete_all(self) -> None:
        self._records.clear()

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"InMemoryRegionStore(records={len(self._records)})"
