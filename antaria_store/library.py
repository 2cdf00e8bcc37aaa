"""
Region Library
==============

Bulk load/save of Regions over a RegionStore.

Design:
- Sequential map-with-skip on load: each record is decoded on its own,
  a malformed record is logged and left out, the rest still load
- Writes pass StorageError through untouched (callers decide how to notify)
- No state besides the collaborators
"""

import uuid
from typing import List, Optional

from antaria_codec import LogEvent, MalformedRecord, RegionCodec, StructuredLogger, create_logger
from antaria_trace import InsufficientPoints, Region

from .base import RegionStore, StorageError, StoredRecord


class RegionLibrary:
    """
    Loads and persists Regions through a codec and a store.

    Usage:
        library = RegionLibrary(store=DirectoryRegionStore("./regions"))

        library.save(region)          # encode + save_region
        regions = library.load_all()  # newest first, bad records skipped
        library.delete(region.id)
    """

    def __init__(
        self,
        store: RegionStore,
        codec: Optional[RegionCodec] = None,
        logger: Optional[StructuredLogger] = None,
    ):
        """
        Args:
            store: Persistence collaborator
            codec: Record codec (default: RegionCodec sharing this logger)
            logger: Structured logger (default: component "library")
        """
        self.store = store
        self.logger = logger or create_logger("library")
        self.codec = codec or RegionCodec(logger=self.logger)

    def _to_region(self, record: StoredRecord) -> Region:
        """Decode one record (raises MalformedRecord or InsufficientPoints)."""
        points = self.codec.decode(record.raw_bytes)
        return Region(id=record.id, created_at=record.created_at, points=tuple(points))

    def load_all(self) -> List[Region]:
        """
        Decode every stored record, skipping the unusable ones.

        Returns:
            Regions in store order (newest first)

        Raises:
            StorageError: If the store itself cannot be listed
        """
        try:
            records = self.store.list_regions()
        except StorageError as e:
            self.logger.error(
                event=LogEvent.STORAGE_ERROR,
                message="Failed to list stored regions",
                exc_info=e,
            )
            raise

        regions = []
        skipped = 0
        for record in records:
            try:
                regions.append(self._to_region(record))
            except (MalformedRecord, InsufficientPoints) as e:
                skipped += 1
                self.logger.warning(
                    event=LogEvent.RECORD_SKIPPED,
                    message="Skipping unusable region record",
                    metadata={'region_id': str(record.id)},
                    exc_info=e,
                )

        self.logger.info(
            event=LogEvent.REGIONS_LOADED,
            message=f"Loaded {len(regions)} regions",
            metadata={'loaded': len(regions), 'skipped': skipped}
        )
        return regions

    def save(self, region: Region) -> None:
        """
        Encode and persist a region.

        Raises:
            EncodeError: If the region cannot be encoded (unexpected)
            StorageError: If the store rejects the write
        """
        raw_bytes = self.codec.encode(region.points)
        try:
            self.store.save_region(region.id, region.created_at, raw_bytes)
        except StorageError as e:
            self.logger.error(
                event=LogEvent.STORAGE_ERROR,
                message="Failed to save region",
                metadata={'region_id': str(region.id)},
                exc_info=e,
            )
            raise

        self.logger.info(
            event=LogEvent.REGION_SAVED,
            message="Region saved",
            metadata={'region_id': str(region.id), 'point_count': region.vertex_count}
        )

    def delete(self, region_id: uuid.UUID) -> None:
        """
        Remove one region.

        Raises:
            StorageError: If the store cannot remove it
        """
        try:
            self.store.delete_region(region_id)
        except StorageError as e:
            self.logger.error(
                event=LogEvent.STORAGE_ERROR,
                message="Failed to delete region",
                metadata={'region_id': str(region_id)},
                exc_info=e,
            )
            raise

        self.logger.info(
            event=LogEvent.REGION_DELETED,
            message="Region deleted",
            metadata={'region_id': str(region_id)}
        )

    def delete_all(self) -> None:
        """
        Remove every region.

        Raises:
            StorageError: If the store cannot be cleared
        """
        try:
            self.store.delete_all()
        except StorageError as e:
            self.logger.error(
                event=LogEvent.STORAGE_ERROR,
                message="Failed to delete all regions",
                exc_info=e,
            )
            raise

        self.logger.info(
            event=LogEvent.REGION_DELETED,
            message="All regions deleted",
        )
