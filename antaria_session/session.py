"""
Editing Session - Input routing and region lifecycle.

This module provides the EditingSession class which owns one TraceBuilder
and one RegionLibrary and turns named input events into trace edits,
saves and deletes.

Architecture:
- Input handlers are pure event producers; they call dispatch()
- EventRegistry maps event names to session methods
- TraceBuilder holds the live trace, RegionLibrary the saved regions
- Renderers pull an OverlaySnapshot, the session never draws

Threading Model:
- Single-threaded: the input source delivers one event at a time
- No locks; no call blocks except store I/O on save/delete/reload
"""

import logging
import uuid
from typing import List, Optional

from antaria_codec import EncodeError, create_logger
from antaria_store import RegionLibrary, StorageError
from antaria_trace import GeoPoint, OverlaySnapshot, Region, RenderShape, TraceBuilder, build_overlays

from antaria_session.config import TracerConfig
from antaria_session.registry import EventRegistry

logger = logging.getLogger(__name__)


class EditingSession:
    """
    Interactive tracing session.

    Lifecycle:
    1. start_editing()  - begin a trace
    2. tap / drag_*     - add vertices
    3. undo / clear     - correct the trace
    4. save()           - finalize and persist (trace kept on failure)
    5. done()           - leave editing, discarding the trace

    Usage:
        config = TracerConfig.from_yaml("config/antaria.yaml")
        session = EditingSession.from_config(config)
        session.reload()

        session.dispatch("start")
        session.dispatch("tap", GeoPoint(35.6812, 139.7671))
        session.dispatch("drag_begin", GeoPoint(35.6813, 139.7671))
        session.dispatch("drag_changed", GeoPoint(35.6814, 139.7672))
        session.dispatch("drag_end", GeoPoint(35.6814, 139.7674))

        region = session.dispatch("save")
        snapshot = session.overlays()
    """

    def __init__(
        self,
        library: RegionLibrary,
        config: Optional[TracerConfig] = None,
        builder: Optional[TraceBuilder] = None,
    ):
        """
        Initialize editing session.

        Args:
            library: Region persistence (codec + store)
            config: Session configuration (default: TracerConfig())
            builder: Trace builder (default: built from config)
        """
        self.config = config or TracerConfig()
        self.library = library
        self.builder = builder or TraceBuilder(
            min_distance_m=self.config.min_distance_m,
            rebase_on_undo=self.config.rebase_on_undo,
        )

        self.saved_regions: List[Region] = []

        self.events = EventRegistry()
        self._setup_event_handlers()

    @classmethod
    def from_config(cls, config: TracerConfig) -> "EditingSession":
        """Build a session with the configured store and log level."""
        library = RegionLibrary(
            store=config.create_store(),
            logger=create_logger("library", level=config.logging_level),
        )
        return cls(library=library, config=config)

    def _setup_event_handlers(self):
        """Register input events."""
        registry = self.events

        registry.register('start', self.start_editing, "Begin a new trace")
        registry.register('tap', self.tap, "Add a vertex at the tapped point")
        registry.register('drag_begin', self.drag_begin, "Start a drag; its first point is always kept")
        registry.register(
            'drag_changed',
            self.drag_changed,
            f"Add a dragged point at least {self.config.min_distance_m} m from the last one"
        )
        registry.register('drag_end', self.drag_end, "Add the final dragged point (same filter)")
        registry.register('undo', self.undo, "Remove the last vertex")
        registry.register('clear', self.clear, "Remove all vertices")
        registry.register('save', self.save, "Finalize the trace and persist it as a region")
        registry.register('done', self.done, "Leave editing and discard the trace")

        logger.debug(f"Input events registered: {sorted(registry.available_events)}")

    def dispatch(self, event: str, payload=None):
        """
        Route one input event.

        Raises:
            EventNotAvailableError: If the event is unknown
        """
        return self.events.dispatch(event, payload)

    # ========== Editing ==========

    @property
    def editing(self) -> bool:
        return self.builder.editing

    @property
    def can_save(self) -> bool:
        """Whether the save control should be enabled."""
        return self.builder.can_finalize

    @property
    def current_shape(self) -> RenderShape:
        return self.builder.current_shape()

    def start_editing(self) -> None:
        self.builder.begin()
        logger.info("Editing started")

    def tap(self, point: GeoPoint) -> bool:
        return self.builder.add_point(point)

    def drag_begin(self, point: GeoPoint) -> bool:
        if not self.builder.editing:
            return False
        self.builder.forget_last_accepted()
        return self.builder.add_point(point)

    def drag_changed(self, point: GeoPoint) -> bool:
        return self.builder.add_point_filtered(point, self.config.min_distance_m)

    def drag_end(self, point: GeoPoint) -> bool:
        return self.builder.add_point_filtered(point, self.config.min_distance_m)

    def undo(self) -> Optional[GeoPoint]:
        return self.builder.undo_last()

    def clear(self) -> None:
        self.builder.clear()

    def done(self) -> None:
        """Leave editing mode, discarding any unsaved trace."""
        discarded = len(self.builder)
        self.builder.cancel()
        logger.info(f"Editing finished ({discarded} unsaved points discarded)")

    # ========== Persistence ==========

    def save(self) -> Region:
        """
        Finalize the trace and persist it.

        On success the region is prepended to saved_regions and, if
        configured, a fresh trace is started.

        Raises:
            InsufficientPoints: Fewer than 3 points (trace unchanged)
            StorageError: Store rejected the write (trace restored, still editing)
            EncodeError: Region could not be encoded (trace restored)
        """
        anchor = self.builder.last_accepted
        region = self.builder.finalize()

        try:
            self.library.save(region)
        except (StorageError, EncodeError) as e:
            self.builder.restore(region.points, last_accepted=anchor)
            logger.warning(f"Save failed, trace kept ({region.vertex_count} points): {e}")
            raise

        self.saved_regions.insert(0, region)
        logger.info(f"Region saved: {region.id} ({region.vertex_count} points)")

        if self.config.keep_editing_after_save:
            self.builder.begin()

        return region

    def reload(self) -> List[Region]:
        """
        Reload saved regions from the store.

        Raises:
            StorageError: If the store cannot be listed (saved_regions unchanged)
        """
        self.saved_regions = self.library.load_all()
        return list(self.saved_regions)

    def delete_region(self, region_id: uuid.UUID) -> None:
        """
        Delete one saved region and reload. The live trace is never touched.

        Raises:
            StorageError: If the store cannot delete it
        """
        self.library.delete(region_id)
        self.reload()

    def delete_all(self) -> None:
        """
        Delete every saved region and reload. The live trace is never touched.

        Raises:
            StorageError: If the store cannot be cleared
        """
        self.library.delete_all()
        self.reload()

    # ========== Rendering ==========

    def overlays(self) -> OverlaySnapshot:
        """Plain-data snapshot for the map renderer."""
        return build_overlays(self.builder.points, self.saved_regions)

    def __repr__(self) -> str:
        return (
            f"EditingSession(editing={self.editing}, points={len(self.builder)}, "
            f"saved={len(self.saved_regions)})"
        )
