"""
Region Record Schema
====================

Bounded Context: On-disk data structures

Design Principles:
- Immutability: frozen=True prevents accidental mutation
- Type Safety: all fields explicitly typed, booleans are not numbers
- Serialization: to_dict() for JSON export, from_dict() for import
- Schema versioning for evolution

Layout (version 1.0):
    {"schema_version": "1.0", "points": [{"lat": 35.6812, "lon": 139.7671}, ...]}

Legacy layout (version 0, written before versioning):
    [{"lat": 35.6812, "lon": 139.7671}, ...]
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Tuple

from antaria_trace import GeoPoint

SCHEMA_VERSION = "1.0"
LEGACY_SCHEMA_VERSION = "0"
SUPPORTED_SCHEMA_VERSIONS = frozenset({SCHEMA_VERSION})


def _as_float(value: Any, name: str) -> float:
    """Accept JSON numbers (int or float), reject everything else."""
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"'{name}' must be a number, got {type(value).__name__}")
    try:
        return float(value)
    except OverflowError:
        raise TypeError(f"'{name}' is out of float range")


@dataclass(frozen=True)
class PointRecord:
    """
    One serialized vertex.

    Attributes:
        lat: Latitude in degrees
        lon: Longitude in degrees

    Example:
        >>> PointRecord(lat=35.6812, lon=139.7671).to_dict()
        {'lat': 35.6812, 'lon': 139.7671}
    """
    lat: float
    lon: float

    def to_dict(self) -> Dict[str, float]:
        """Serialize to JSON-compatible dict."""
        return {'lat': self.lat, 'lon': self.lon}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PointRecord':
        """Deserialize from dict.

        Raises:
            ValueError: If required keys missing or invalid values
        """
        if not isinstance(data, dict):
            raise ValueError(f"Point record must be an object, got {type(data).__name__}")
        try:
            return cls(
                lat=_as_float(data['lat'], 'lat'),
                lon=_as_float(data['lon'], 'lon'),
            )
        except KeyError as e:
            raise ValueError(f"Missing required point field: {e}")
        except TypeError as e:
            raise ValueError(f"Invalid point data: {e}")

    @classmethod
    def from_point(cls, point: GeoPoint) -> 'PointRecord':
        return cls(lat=point.latitude, lon=point.longitude)

    def to_point(self) -> GeoPoint:
        """Convert to a validated GeoPoint (raises ValueError when out of range)."""
        return GeoPoint(latitude=self.lat, longitude=self.lon)


@dataclass(frozen=True)
class RegionPayload:
    """
    Serialized vertex list with its schema version.

    Attributes:
        schema_version: Record schema version
        points: Ordered point records
    """
    schema_version: str
    points: Tuple[PointRecord, ...] = field(default_factory=tuple)

    @classmethod
    def from_points(
        cls,
        points: Iterable[GeoPoint],
        schema_version: str = SCHEMA_VERSION
    ) -> 'RegionPayload':
        return cls(
            schema_version=schema_version,
            points=tuple(PointRecord.from_point(p) for p in points),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to JSON-compatible dict (key order is fixed)."""
        return {
            'schema_version': self.schema_version,
            'points': [p.to_dict() for p in self.points],
        }

    @classmethod
    def from_document(cls, document: Any) -> 'RegionPayload':
        """Deserialize a parsed JSON document.

        Accepts the versioned object layout and the legacy bare array.

        Raises:
            ValueError: If the layout or version is not recognized
        """
        if isinstance(document, list):
            return cls(
                schema_version=LEGACY_SCHEMA_VERSION,
                points=tuple(PointRecord.from_dict(item) for item in document),
            )

        if not isinstance(document, dict):
            raise ValueError(
                f"Region record must be an object or array, got {type(document).__name__}"
            )

        try:
            version = document['schema_version']
            items = document['points']
        except KeyError as e:
            raise ValueError(f"Missing required region field: {e}")

        if not isinstance(version, str):
            raise ValueError(f"schema_version must be a string, got {type(version).__name__}")
        if version not in SUPPORTED_SCHEMA_VERSIONS:
            raise ValueError(
                f"Unsupported schema_version '{version}'. "
                f"Supported: {', '.join(sorted(SUPPORTED_SCHEMA_VERSIONS))}"
            )
        if not isinstance(items, list):
            raise ValueError(f"'points' must be an array, got {type(items).__name__}")

        return cls(
            schema_version=version,
            points=tuple(PointRecord.from_dict(item) for item in items),
        )

    def to_points(self) -> List[GeoPoint]:
        """Validated GeoPoints in record order."""
        return [p.to_point() for p in self.points]

    @property
    def point_count(self) -> int:
        return len(self.points)
