"""
antaria_store - Region persistence

Bounded Context: Persistence collaborator and bulk load
Responsibilities:
  - RegionStore protocol (list/save/delete/delete-all of opaque bytes)
  - Reference stores: in-memory and directory-backed
  - RegionLibrary: encode on save, decode-with-skip on load

Architecture:
  - base.py: StoredRecord, RegionStore, StorageError
  - memory.py: InMemoryRegionStore
  - directory.py: DirectoryRegionStore (one JSON envelope per region)
  - library.py: RegionLibrary
"""

from .base import RegionStore, StorageError, StoredRecord
from .memory import InMemoryRegionStore
from .directory import DirectoryRegionStore
from .library import RegionLibrary

__all__ = [
    "RegionStore",
    "StorageError",
    "StoredRecord",
    "InMemoryRegionStore",
    "DirectoryRegionStore",
    "RegionLibrary",
]
