"""
Structured Log Event Types
==========================

Bounded Context: Observability Event Taxonomy

This module defines typed event names for structured logging.

Design:
- Enum-based (prevents typos, enables autocomplete)
- Hierarchical naming (namespace.category.action)
- Searchable in log aggregators

Event Naming Convention:
    <component>.<category>.<action>

    component: region, error
    category: record, saved, deleted
    action: skipped, encoded, decoded
"""

from enum import Enum


class LogEvent(str, Enum):
    """
    Typed log event names for structured logging.

    Categories:
    - region.*: Region record lifecycle
    - error.*: Error conditions
    """

    # ========== Region Events ==========
    REGION_ENCODED = "region.encoded"
    """Vertex list serialized to record bytes."""

    REGION_DECODED = "region.decoded"
    """Record bytes parsed back into a vertex list."""

    REGION_SAVED = "region.saved"
    """Region handed to the store successfully."""

    REGION_DELETED = "region.deleted"
    """Region (or all regions) removed from the store."""

    REGIONS_LOADED = "region.loaded"
    """Bulk load finished."""

    RECORD_SKIPPED = "region.record.skipped"
    """Stored record could not be used and was left out of a load."""

    # ========== Error Events ==========
    SERIALIZATION_ERROR = "error.serialization"
    """Failed to serialize a vertex list."""

    DESERIALIZATION_ERROR = "error.deserialization"
    """Failed to parse record bytes."""

    STORAGE_ERROR = "error.storage"
    """Persistence collaborator reported a failure."""

