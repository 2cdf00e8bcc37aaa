"""
Region Codec
============

Bounded Context: Vertex list <-> record bytes

Design:
- Stateless, synchronous, safe to share (only holds a logger)
- Deterministic output: fixed key order, compact separators, UTF-8
- Lossless: Python's float repr round-trips every double exactly
- Per-record failure: decode() raises MalformedRecord, callers skip and continue

Message Flow:
    TraceBuilder.finalize() -> Region.points -> encode() -> bytes -> store
    store -> bytes -> decode() -> [GeoPoint, ...] -> Region
"""

import json
from typing import Iterable, List, Optional

from antaria_trace import GeoPoint

from .logging import LogEvent, StructuredLogger, create_logger
from .schemas import RegionPayload, SCHEMA_VERSION, SUPPORTED_SCHEMA_VERSIONS


class CodecError(Exception):
    """Base class for record encoding/decoding failures."""
    pass


class MalformedRecord(CodecError, ValueError):
    """Raised when stored bytes do not match the record schema."""
    pass


class EncodeError(CodecError):
    """Raised when a vertex list cannot be serialized (programming error)."""
    pass


DecodeError = MalformedRecord


def _reject_constant(name: str):
    raise ValueError(f"Non-finite number '{name}' is not allowed")


class RegionCodec:
    """
    Serializes vertex lists to record bytes and back.

    Attributes:
        schema_version: Version tag written by encode()
        logger: Structured logger for failures

    Example:
        >>> codec = RegionCodec()
        >>> data = codec.encode([a, b, c])
        >>> codec.decode(data) == [a, b, c]
        True
    """

    def __init__(
        self,
        logger: Optional[StructuredLogger] = None,
        schema_version: str = SCHEMA_VERSION
    ):
        """
        Args:
            logger: Structured logger (default: component "codec")
            schema_version: Version to write; must be a supported version
        """
        if schema_version not in SUPPORTED_SCHEMA_VERSIONS:
            raise ValueError(
                f"Cannot write unsupported schema_version '{schema_version}'"
            )
        self.schema_version = schema_version
        self.logger = logger or create_logger("codec")

    def encode(self, points: Iterable[GeoPoint]) -> bytes:
        """
        Serialize an ordered vertex list.

        Args:
            points: Vertices in trace order (any length)

        Returns:
            UTF-8 JSON bytes

        Raises:
            EncodeError: If the input cannot be serialized. This is never
                part of normal control flow and is logged before raising.
        """
        try:
            payload = RegionPayload.from_points(points, self.schema_version)
            text = json.dumps(
                payload.to_dict(),
                separators=(',', ':'),
                allow_nan=False,
            )
        except (AttributeError, TypeError, ValueError) as e:
            self.logger.error(
                event=LogEvent.SERIALIZATION_ERROR,
                message="Failed to encode vertex list",
                exc_info=e,
            )
            raise EncodeError(f"Cannot encode vertex list: {e}") from e

        self.logger.debug(
            event=LogEvent.REGION_ENCODED,
            message="Encoded vertex list",
            metadata={'point_count': payload.point_count, 'bytes': len(text)}
        )
        return text.encode('utf-8')

    def decode(self, data: bytes) -> List[GeoPoint]:
        """
        Parse record bytes back into the ordered vertex list.

        Args:
            data: Bytes previously produced by encode() (or a legacy record)

        Returns:
            Vertices in stored order

        Raises:
            MalformedRecord: Truncated data, wrong field types, out-of-range
                coordinates, or an unsupported schema version
        """
        try:
            text = bytes(data).decode('utf-8')
            document = json.loads(text, parse_constant=_reject_constant)
            payload = RegionPayload.from_document(document)
            points = payload.to_points()
        except (TypeError, ValueError, RecursionError) as e:
            # JSONDecodeError and UnicodeDecodeError are ValueErrors;
            # RecursionError comes from deeply nested arrays
            self.logger.warning(
                event=LogEvent.DESERIALIZATION_ERROR,
                message="Malformed region record",
                metadata={'bytes': len(data) if isinstance(data, (bytes, bytearray)) else None},
                exc_info=e,
            )
            raise MalformedRecord(str(e)) from e

        self.logger.debug(
            event=LogEvent.REGION_DECODED,
            message="Decoded vertex list",
            metadata={'point_count': len(points), 'schema_version': payload.schema_version}
        )
        return points
