"""
Antaria Trace
=============

Bounded Context: Interactive polygon capture on a map.

Design Philosophy:
- Separation of Concerns: Geometry, Editing, Rendering data separated
- Immutable values (GeoPoint, Region), one stateful editor (TraceBuilder)
- Renderers get plain data, never draw calls

Architecture:

    antaria_trace/
    ├── geometry/          # Pure geometry (immutable, stateless)
    │   ├── points.py      # GeoPoint, longitude wrapping, numpy export
    │   └── distance.py    # Haversine distance, ring length
    │
    ├── shapes.py          # RenderShape (derived from vertex count)
    ├── region.py          # Region (finalized polygon, 3+ points)
    ├── builder.py         # TraceBuilder (stateful editing)
    ├── errors.py          # TraceError, InsufficientPoints
    │
    └── rendering/         # Overlay snapshot (plain data)
        └── overlays.py

Usage:

    from antaria_trace import GeoPoint, TraceBuilder

    builder = TraceBuilder(min_distance_m=3.0)
    builder.begin()

    builder.add_point(GeoPoint(35.6812, 139.7671))           # tap
    builder.add_point_filtered(GeoPoint(35.6813, 139.7671))  # drag
    builder.add_point(GeoPoint(35.6813, 139.7673))

    builder.current_shape()   # RenderShape.POLYGON
    region = builder.finalize()
"""

from antaria_trace.geometry import GeoPoint, haversine_distance, normalize_longitude
from antaria_trace.shapes import RenderShape
from antaria_trace.region import Region, MIN_REGION_POINTS
from antaria_trace.errors import TraceError, InsufficientPoints
from antaria_trace.builder import TraceBuilder, DEFAULT_MIN_DISTANCE_M
from antaria_trace.rendering import OverlaySnapshot, OverlayStyle, build_overlays

__all__ = [
    # Geometry
    "GeoPoint",
    "haversine_distance",
    "normalize_longitude",
    # Model
    "RenderShape",
    "Region",
    "MIN_REGION_POINTS",
    # Errors
    "TraceError",
    "InsufficientPoints",
    # Editing
    "TraceBuilder",
    "DEFAULT_MIN_DISTANCE_M",
    # Rendering
    "OverlaySnapshot",
    "OverlayStyle",
    "build_overlays",
]

__version__ = "1.0.0"
