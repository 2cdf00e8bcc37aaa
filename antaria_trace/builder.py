"""
Trace Builder Module
====================

Stateful vertex accumulator for interactive polygon capture.

Design:
- Encapsulates trace state (points, last accepted point, editing flag)
- Clean API: one method per input action
- Single-threaded: the owning editing session serializes all calls
- Produces immutable Region snapshots on finalize
"""

from typing import Iterable, List, Optional

from antaria_trace.errors import InsufficientPoints
from antaria_trace.geometry import GeoPoint, haversine_distance
from antaria_trace.region import MIN_REGION_POINTS, Region
from antaria_trace.shapes import RenderShape

DEFAULT_MIN_DISTANCE_M = 3.0


class TraceBuilder:
    """
    Builds a trace from tap and drag input.

    Design Philosophy:
    - Single Responsibility: only track the in-progress vertex list
    - Stateful but encapsulated (callers get copies, never the list)
    - Input outside an editing session is ignored, not rejected

    State:
        points: ordered vertices of the live trace
        last_accepted: last point appended (movement filter anchor)
        editing: whether input is currently accepted

    Usage:
        builder = TraceBuilder()
        builder.begin()

        builder.add_point(a)                    # tap
        builder.add_point_filtered(b)           # drag, >= 3 m from a
        builder.current_shape()                 # RenderShape.POLYLINE

        region = builder.finalize()             # needs 3+ points
    """

    def __init__(
        self,
        min_distance_m: float = DEFAULT_MIN_DISTANCE_M,
        rebase_on_undo: bool = False,
    ):
        """
        Args:
            min_distance_m: Default drag filter threshold in meters
            rebase_on_undo: If True, undo_last() moves the filter anchor to
                the new last point. If False the anchor keeps pointing at
                the removed point.
        """
        if min_distance_m < 0:
            raise ValueError(f"min_distance_m must be >= 0, got {min_distance_m}")

        self.min_distance_m = min_distance_m
        self.rebase_on_undo = rebase_on_undo

        self._points: List[GeoPoint] = []
        self._last_accepted: Optional[GeoPoint] = None
        self._editing = False

    @property
    def points(self) -> List[GeoPoint]:
        """Copy of the current trace."""
        return list(self._points)

    @property
    def last_accepted(self) -> Optional[GeoPoint]:
        """Anchor point for the drag movement filter."""
        return self._last_accepted

    @property
    def editing(self) -> bool:
        """Whether input is accepted."""
        return self._editing

    @property
    def can_finalize(self) -> bool:
        """True when finalize() would succeed."""
        return len(self._points) >= MIN_REGION_POINTS

    def begin(self) -> None:
        """Start a fresh trace and accept input."""
        self._points.clear()
        self._last_accepted = None
        self._editing = True

    def add_point(self, point: GeoPoint) -> bool:
        """
        Append a tapped point unconditionally.

        Returns:
            True if appended, False if not editing
        """
        if not self._editing:
            return False

        self._points.append(point)
        self._last_accepted = point
        return True

    def add_point_filtered(
        self,
        point: GeoPoint,
        min_distance_m: Optional[float] = None,
    ) -> bool:
        """
        Append a dragged point if it moved far enough.

        The point is kept when nothing has been accepted yet, or when its
        great-circle distance from the last accepted point is at least
        `min_distance_m` (a point exactly at the threshold is kept).

        Args:
            point: Candidate point
            min_distance_m: Threshold in meters (default: builder setting)

        Returns:
            True if appended
        """
        if not self._editing:
            return False

        threshold = self.min_distance_m if min_distance_m is None else min_distance_m

        if self._last_accepted is not None:
            if haversine_distance(self._last_accepted, point) < threshold:
                return False

        self._points.append(point)
        self._last_accepted = point
        return True

    def forget_last_accepted(self) -> None:
        """Drop the filter anchor so the next filtered point is always kept."""
        self._last_accepted = None

    def undo_last(self) -> Optional[GeoPoint]:
        """
        Remove the last point.

        Returns:
            The removed point, or None if the trace was empty
        """
        if not self._points:
            return None

        removed = self._points.pop()
        if self.rebase_on_undo:
            self._last_accepted = self._points[-1] if self._points else None
        return removed

    def clear(self) -> None:
        """Empty the trace. Editing state is unchanged."""
        self._points.clear()
        self._last_accepted = None

    def current_shape(self) -> RenderShape:
        """Shape a renderer should draw for the live trace."""
        return RenderShape.from_count(len(self._points))

    def finalize(self) -> Region:
        """
        Turn the trace into a Region and end the editing session.

        Raises:
            InsufficientPoints: If fewer than 3 points (trace left unchanged)
        """
        if not self.can_finalize:
            raise InsufficientPoints(len(self._points), MIN_REGION_POINTS)

        region = Region.create(self._points)
        self.cancel()
        return region

    def cancel(self) -> None:
        """Discard the trace and stop accepting input."""
        self.clear()
        self._editing = False

    def restore(
        self,
        points: Iterable[GeoPoint],
        last_accepted: Optional[GeoPoint] = None,
    ) -> None:
        """
        Re-enter editing with the given trace.

        Used to hand back a finalized trace whose persistence failed.

        Args:
            points: Trace to restore
            last_accepted: Filter anchor to restore (default: last point).
                Pass the anchor read before finalize() to keep a stale
                post-undo anchor intact.
        """
        self.begin()
        self._points.extend(points)
        if last_accepted is not None:
            self._last_accepted = last_accepted
        else:
            self._last_accepted = self._points[-1] if self._points else None

    def __len__(self) -> int:
        """Return number of points in the trace."""
        return len(self._points)

    def __repr__(self) -> str:
        """Human-readable representation."""
        return f"TraceBuilder(points={len(self._points)}, editing={self._editing})"
