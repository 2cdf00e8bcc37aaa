"""
Great-Circle Distance Module
============================

Haversine distances on a spherical Earth.

Design:
- Scalar version for the per-event movement filter
- Vectorized numpy version for whole rings (perimeters)
"""

import math
from typing import Sequence

import numpy as np

from antaria_trace.geometry.points import GeoPoint

EARTH_RADIUS_M = 6371000.0  # Mean Earth radius (meters)


def haversine_distance(a: GeoPoint, b: GeoPoint) -> float:
    """
    Great-circle distance between two points.

    Args:
        a: First point
        b: Second point

    Returns:
        Distance in meters
    """
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    dphi = math.radians(b.latitude - a.latitude)
    dlambda = math.radians(b.longitude - a.longitude)

    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # Clamp against rounding just above 1.0 for antipodal points
    h = min(1.0, h)
    return 2 * EARTH_RADIUS_M * math.asin(math.sqrt(h))


def ring_length(points: Sequence[GeoPoint]) -> float:
    """
    Length of the closed ring through `points` (last vertex joins the first).

    Returns 0.0 for fewer than 2 points.
    """
    if len(points) < 2:
        return 0.0

    coords = np.radians(np.array([p.as_tuple() for p in points], dtype=np.float64))
    closed = np.vstack([coords, coords[:1]])

    lat1, lon1 = closed[:-1, 0], closed[:-1, 1]
    lat2, lon2 = closed[1:, 0], closed[1:, 1]

    h = np.sin((lat2 - lat1) / 2) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin((lon2 - lon1) / 2) ** 2
    h = np.minimum(h, 1.0)
    return float(np.sum(2 * EARTH_RADIUS_M * np.arcsin(np.sqrt(h))))
