"""
Rendering Layer
===============

Overlay data for map renderers (stateless, no drawing).
"""

from antaria_trace.rendering.overlays import OverlaySnapshot, OverlayStyle, build_overlays

__all__ = [
    "OverlaySnapshot",
    "OverlayStyle",
    "build_overlays",
]
