"""
Render Shape Module
===================

Derived drawing hint for the live trace.

The shape is never stored; it is a pure function of the vertex count:
    0-1 points -> NONE
    2 points   -> POLYLINE
    3+ points  -> POLYGON
"""

from enum import Enum


class RenderShape(str, Enum):
    """What a renderer should draw for a given trace."""

    NONE = "none"
    POLYLINE = "polyline"
    POLYGON = "polygon"

    @classmethod
    def from_count(cls, count: int) -> "RenderShape":
        """Map a vertex count to its shape."""
        if count < 0:
            raise ValueError(f"count must be >= 0, got {count}")
        if count >= 3:
            return cls.POLYGON
        if count == 2:
            return cls.POLYLINE
        return cls.NONE
