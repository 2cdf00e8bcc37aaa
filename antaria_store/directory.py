"""
Directory Region Store
======================

File-backed RegionStore: one JSON envelope per region.

Envelope layout (<uuid>.json):
    {
        "id": "0b0f3c9e-...",
        "created_at": "2026-10-19T10:32:00.123456+00:00",
        "points_data": "<base64 of the encoded vertex list>"
    }

Design:
- Atomic writes (temp file in the same directory + os.replace)
- Unreadable envelopes are skipped on listing, never fatal
- OS errors surface as StorageError
"""

import base64
import binascii
import json
import logging
import os
import tempfile
import uuid
from datetime import datetime
from pathlib import Path
from typing import List, Union

from .base import StorageError, StoredRecord, as_utc

logger = logging.getLogger(__name__)

ENVELOPE_SUFFIX = ".json"


class DirectoryRegionStore:
    """
    Stores each region as `<root>/<uuid>.json`.

    Usage:
        store = DirectoryRegionStore("./data/regions")
        store.save_region(region.id, region.created_at, raw_bytes)
        records = store.list_regions()  # newest first
    """

    def __init__(self, root: Union[str, Path]):
        """
        Args:
            root: Directory holding the envelopes (created if missing)

        Raises:
            StorageError: If the directory cannot be created
        """
        self.root = Path(root)
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise StorageError(f"Cannot create store directory {self.root}: {e}") from e

        if not self.root.is_dir():
            raise StorageError(f"Store root must be a directory, got file: {self.root}")

    def _path_for(self, region_id: uuid.UUID) -> Path:
        return self.root / f"{region_id}{ENVELOPE_SUFFIX}"

    def _read_envelope(self, path: Path) -> StoredRecord:
        """Parse one envelope file (raises ValueError/KeyError/OSError)."""
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        if not isinstance(data, dict):
            raise ValueError(f"Envelope must be an object, got {type(data).__name__}")
        for key in ("id", "created_at", "points_data"):
            if not isinstance(data.get(key), str):
                raise ValueError(f"Envelope field '{key}' must be a string")

        return StoredRecord(
            id=uuid.UUID(data["id"]),
            created_at=as_utc(datetime.fromisoformat(data["created_at"])),
            raw_bytes=base64.b64decode(data["points_data"], validate=True),
        )

    def list_regions(self) -> List[StoredRecord]:
        """
        All readable records, newest first.

        Raises:
            StorageError: If the directory cannot be listed
        """
        try:
            paths = sorted(self.root.glob(f"*{ENVELOPE_SUFFIX}"))
        except OSError as e:
            raise StorageError(f"Cannot list {self.root}: {e}") from e

        records = []
        for path in paths:
            try:
                records.append(self._read_envelope(path))
            except (OSError, ValueError, KeyError, TypeError, binascii.Error) as e:
                logger.warning(f"Skipping unreadable region envelope {path.name}: {e}")

        records.sort(key=lambda r: r.created_at, reverse=True)
        return records

    def save_region(self, region_id: uuid.UUID, created_at: datetime, raw_bytes: bytes) -> None:
        """
        Write one envelope atomically.

        Raises:
            StorageError: If the file cannot be written
        """
        envelope = {
            "id": str(region_id),
            "created_at": as_utc(created_at).isoformat(),
            "points_data": base64.b64encode(bytes(raw_bytes)).decode("ascii"),
        }

        target = self._path_for(region_id)
        tmp_path = None
        try:
            fd, tmp_path = tempfile.mkstemp(dir=self.root, prefix=".region-", suffix=".tmp")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(envelope, f)
            os.replace(tmp_path, target)
            tmp_path = None
        except OSError as e:
            raise StorageError(f"Cannot save region '{region_id}': {e}") from e
        finally:
            if tmp_path is not None and os.path.exists(tmp_path):
                os.unlink(tmp_path)

        logger.info(f"Region saved: {region_id}")

    def delete_region(self, region_id: uuid.UUID) -> None:
        """
        Remove one envelope.

        Raises:
            StorageError: If the region does not exist or cannot be removed
        """
        path = self._path_for(region_id)
        try:
            path.unlink()
        except FileNotFoundError as e:
            raise StorageError(f"Region '{region_id}' not found") from e
        except OSError as e:
            raise StorageError(f"Cannot delete region '{region_id}': {e}") from e

        logger.info(f"Region deleted: {region_id}")

    def delete_all(self) -> None:
        """
        Remove every envelope.

        Raises:
            StorageError: If any envelope cannot be removed
        """
        try:
            paths = list(self.root.glob(f"*{ENVELOPE_SUFFIX}"))
            for path in paths:
                path.unlink()
        except OSError as e:
            raise StorageError(f"Cannot clear {self.root}: {e}") from e

        logger.info(f"All regions deleted ({len(paths)} files)")
