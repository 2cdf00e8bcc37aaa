"""
Geometry Layer
==============

Bounded Context: Geographic points and distances.

Responsibilities:
- Point representation (immutable)
- Great-circle distances
- NO state, NO editing, NO persistence
"""

from antaria_trace.geometry.points import GeoPoint, normalize_longitude, points_to_array
from antaria_trace.geometry.distance import EARTH_RADIUS_M, haversine_distance, ring_length

__all__ = [
    "GeoPoint",
    "normalize_longitude",
    "points_to_array",
    "EARTH_RADIUS_M",
    "haversine_distance",
    "ring_length",
]
