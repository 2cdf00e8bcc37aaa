"""
Geographic Points Module
========================

Pure geographic value types - NO state, NO side effects.

Design:
- Immutable points (frozen dataclass pattern)
- Fail-fast range validation at construction
- Longitude wrapping only for map-derived coordinates
"""

import math
from dataclasses import dataclass
from typing import Iterable

import numpy as np


def normalize_longitude(lon: float) -> float:
    """
    Wrap a longitude into [-180, 180).

    Args:
        lon: Longitude in degrees (any range)

    Returns:
        Equivalent longitude in [-180, 180)
    """
    return (lon + 180.0) % 360.0 - 180.0


@dataclass(frozen=True)
class GeoPoint:
    """
    Immutable latitude/longitude pair in decimal degrees.

    Attributes:
        latitude: Degrees north, in [-90, 90]
        longitude: Degrees east, in [-180, 180]

    Invariants:
        - both values finite
        - values inside the ranges above (raw input is never wrapped)

    Example:
        >>> GeoPoint(latitude=35.6812, longitude=139.7671)
        GeoPoint(latitude=35.6812, longitude=139.7671)
    """

    latitude: float
    longitude: float

    def __post_init__(self):
        """Validate invariants."""
        for name in ("latitude", "longitude"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise TypeError(f"{name} must be a number, got {type(value).__name__}")
            if not math.isfinite(value):
                raise ValueError(f"{name} must be finite, got {value}")

        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"latitude must be in [-90, 90], got {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"longitude must be in [-180, 180], got {self.longitude}")

        # Store as float so int input compares equal after a codec round trip
        object.__setattr__(self, "latitude", float(self.latitude))
        object.__setattr__(self, "longitude", float(self.longitude))

    @classmethod
    def from_map(cls, latitude: float, longitude: float) -> "GeoPoint":
        """
        Build a point from a map-view coordinate conversion.

        Panning across the antimeridian can yield longitudes outside
        [-180, 180]; those are wrapped. Latitude is still validated.
        """
        return cls(latitude=latitude, longitude=normalize_longitude(longitude))

    def as_tuple(self) -> tuple:
        """(latitude, longitude) tuple."""
        return (self.latitude, self.longitude)


def points_to_array(points: Iterable[GeoPoint]) -> np.ndarray:
    """
    Convert points to a read-only Nx2 float64 array of (lat, lon).

    An empty input yields shape (0, 2).
    """
    array = np.array([p.as_tuple() for p in points], dtype=np.float64).reshape(-1, 2)
    array.flags.writeable = False
    return array
