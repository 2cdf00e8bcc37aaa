"""
Antaria Region Codec Package
============================

Bounded Context: Stable on-disk format for traced regions

Architecture:
- schemas.py: Immutable record structures with versioning
- codec.py: RegionCodec (encode/decode) and its error taxonomy
- logging/: Structured JSON logging for observability

Design Philosophy:
- Immutability: frozen dataclasses for records
- Lossless: exact double round trip
- Isolation: one bad record never fails a whole load

Public API
----------
Codec:
    RegionCodec
    CodecError, MalformedRecord (DecodeError), EncodeError

Schemas:
    PointRecord, RegionPayload, SCHEMA_VERSION

Logging:
    LogEvent, StructuredLogger, create_logger

Example:
    >>> from antaria_codec import RegionCodec, MalformedRecord
    >>> codec = RegionCodec()
    >>> data = codec.encode(region.points)
    >>> try:
    ...     points = codec.decode(data)
    ... except MalformedRecord:
    ...     points = None
"""

from .codec import RegionCodec, CodecError, MalformedRecord, DecodeError, EncodeError
from .schemas import (
    PointRecord,
    RegionPayload,
    SCHEMA_VERSION,
    LEGACY_SCHEMA_VERSION,
    SUPPORTED_SCHEMA_VERSIONS,
)
from .logging import LogEvent, StructuredLogger, create_logger

__all__ = [
    # Codec
    'RegionCodec',
    'CodecError',
    'MalformedRecord',
    'DecodeError',
    'EncodeError',
    # Schemas
    'PointRecord',
    'RegionPayload',
    'SCHEMA_VERSION',
    'LEGACY_SCHEMA_VERSION',
    'SUPPORTED_SCHEMA_VERSIONS',
    # Logging
    'LogEvent',
    'StructuredLogger',
    'create_logger',
]

__version__ = "1.0.0"
