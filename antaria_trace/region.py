"""
Region Module
=============

A finalized, persisted polygon.

Design:
- Immutable (frozen dataclass), never edited in place
- Invariant checked at construction: at least 3 points
- Identity = uuid; deleted wholesale by the store
"""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Iterable, Optional, Tuple

import numpy as np

from antaria_trace.errors import InsufficientPoints
from antaria_trace.geometry import GeoPoint, points_to_array, ring_length

MIN_REGION_POINTS = 3


@dataclass(frozen=True)
class Region:
    """
    Immutable finalized polygon.

    Attributes:
        id: Unique region identifier
        created_at: Creation time (timezone-aware, UTC)
        points: Ordered vertices (at least 3)

    Example:
        >>> region = Region.create([a, b, c])
        >>> region.vertex_count
        3
    """

    id: uuid.UUID
    created_at: datetime
    points: Tuple[GeoPoint, ...] = field(default_factory=tuple)

    def __post_init__(self):
        """Validate invariants."""
        points = tuple(self.points)
        if len(points) < MIN_REGION_POINTS:
            raise InsufficientPoints(len(points), MIN_REGION_POINTS)
        for p in points:
            if not isinstance(p, GeoPoint):
                raise TypeError(f"points must be GeoPoint, got {type(p).__name__}")
        object.__setattr__(self, "points", points)

    @classmethod
    def create(
        cls,
        points: Iterable[GeoPoint],
        created_at: Optional[datetime] = None,
    ) -> "Region":
        """Create a region with a fresh id (and current time unless given)."""
        return cls(
            id=uuid.uuid4(),
            created_at=created_at or datetime.now(timezone.utc),
            points=tuple(points),
        )

    @property
    def vertex_count(self) -> int:
        """Number of vertices."""
        return len(self.points)

    @property
    def perimeter_m(self) -> float:
        """Closed-ring great-circle length in meters."""
        return ring_length(self.points)

    def to_array(self) -> np.ndarray:
        """Read-only Nx2 array of (lat, lon) for renderers."""
        return points_to_array(self.points)

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"Region({self.id}, {self.vertex_count} points)"
