"""
Overlay Snapshot Module
=======================

Plain-data hand-off to a map renderer.

Design:
- Stateless (pure functions)
- No drawing: renderers consume arrays and enums, not draw calls
- Saved regions and the live trace in one immutable snapshot
"""

from dataclasses import dataclass, field
from typing import Iterable, Sequence, Tuple

import numpy as np

from antaria_trace.geometry import GeoPoint, points_to_array
from antaria_trace.region import MIN_REGION_POINTS, Region
from antaria_trace.shapes import RenderShape


@dataclass(frozen=True)
class OverlayStyle:
    """
    Stroke and fill hints shared by every overlay.

    Attributes:
        line_width: Outline width in screen points
        stroke_rgb: Outline color (r, g, b) 0-255
        fill_opacity: Polygon fill opacity (0-1), same hue as the stroke
    """

    line_width: float = 2.0
    stroke_rgb: Tuple[int, int, int] = (52, 199, 89)
    fill_opacity: float = 0.2

    def __post_init__(self):
        """Validate style."""
        if self.line_width <= 0:
            raise ValueError(f"line_width must be > 0, got {self.line_width}")
        if not 0.0 <= self.fill_opacity <= 1.0:
            raise ValueError(f"fill_opacity must be in [0, 1], got {self.fill_opacity}")
        if any(not 0 <= c <= 255 for c in self.stroke_rgb):
            raise ValueError(f"stroke_rgb components must be in [0, 255], got {self.stroke_rgb}")


@dataclass(frozen=True)
class OverlaySnapshot:
    """
    Everything a renderer needs for one redraw.

    Attributes:
        live_shape: What to draw for the in-progress trace
        live_points: Nx2 (lat, lon) array of the in-progress trace
        saved_polygons: One Nx2 array per saved region (N >= 3)
        style: Drawing hints
    """

    live_shape: RenderShape
    live_points: np.ndarray
    saved_polygons: Tuple[np.ndarray, ...] = field(default_factory=tuple)
    style: OverlayStyle = field(default_factory=OverlayStyle)

    @property
    def overlay_count(self) -> int:
        """Number of overlays the renderer will add."""
        live = 0 if self.live_shape is RenderShape.NONE else 1
        return len(self.saved_polygons) + live


def build_overlays(
    live_points: Sequence[GeoPoint],
    saved_regions: Iterable[Region],
    style: OverlayStyle = OverlayStyle(),
) -> OverlaySnapshot:
    """
    Assemble an overlay snapshot.

    Args:
        live_points: Current trace
        saved_regions: Finalized regions to redisplay
        style: Drawing hints

    Returns:
        OverlaySnapshot with the live shape derived from the trace length
    """
    saved = tuple(
        region.to_array()
        for region in saved_regions
        if region.vertex_count >= MIN_REGION_POINTS
    )
    return OverlaySnapshot(
        live_shape=RenderShape.from_count(len(live_points)),
        live_points=points_to_array(live_points),
        saved_polygons=saved,
        style=style,
    )
