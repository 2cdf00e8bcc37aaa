"""
TraceBuilder Tests
==================

Vertex capture, movement filter, shape thresholds, finalize and the two
undo/anchor behaviors.

Usage:
    pytest test_trace_builder.py
"""

import math
import random
import uuid

import pytest

from antaria_trace import (
    GeoPoint,
    InsufficientPoints,
    Region,
    RenderShape,
    TraceBuilder,
    haversine_distance,
)
from antaria_trace.geometry import EARTH_RADIUS_M

ORIGIN = GeoPoint(35.6812, 139.7671)


def north_of(point: GeoPoint, meters: float) -> GeoPoint:
    """Point `meters` due north of `point`."""
    return GeoPoint(point.latitude + math.degrees(meters / EARTH_RADIUS_M), point.longitude)


def east_of(point: GeoPoint, meters: float) -> GeoPoint:
    """Point `meters` due east of `point` (along the parallel)."""
    radius = EARTH_RADIUS_M * math.cos(math.radians(point.latitude))
    return GeoPoint(point.latitude, point.longitude + math.degrees(meters / radius))


@pytest.fixture
def builder():
    b = TraceBuilder()
    b.begin()
    return b


# ========== Shapes ==========

@pytest.mark.parametrize("count, shape", [
    (0, RenderShape.NONE),
    (1, RenderShape.NONE),
    (2, RenderShape.POLYLINE),
    (3, RenderShape.POLYGON),
    (7, RenderShape.POLYGON),
])
def test_current_shape_follows_point_count(builder, count, shape):
    for i in range(count):
        builder.add_point(north_of(ORIGIN, 10 * i))
    assert builder.current_shape() is shape


def test_render_shape_rejects_negative_count():
    with pytest.raises(ValueError):
        RenderShape.from_count(-1)


# ========== Adding points ==========

def test_add_point_ignored_when_not_editing():
    builder = TraceBuilder()
    assert builder.add_point(ORIGIN) is False
    assert builder.add_point_filtered(ORIGIN) is False
    assert builder.points == []
    assert builder.last_accepted is None


def test_add_point_is_unconditional(builder):
    """Taps keep duplicates; only drags are filtered."""
    assert builder.add_point(ORIGIN)
    assert builder.add_point(ORIGIN)
    assert builder.points == [ORIGIN, ORIGIN]
    assert builder.last_accepted == ORIGIN


def test_begin_is_idempotent_and_resets(builder):
    builder.add_point(ORIGIN)
    builder.begin()
    builder.begin()
    assert builder.editing
    assert builder.points == []
    assert builder.last_accepted is None


def test_filtered_first_point_always_accepted(builder):
    assert builder.add_point_filtered(ORIGIN)
    assert builder.points == [ORIGIN]


def test_filtered_points_one_meter_apart_are_dropped(builder):
    """Three 1 m steps keep only the first point until one lands >= 3 m away."""
    p1 = ORIGIN
    p2 = north_of(ORIGIN, 1.0)
    p3 = north_of(ORIGIN, 2.0)

    assert builder.add_point_filtered(p1, 3.0)
    assert not builder.add_point_filtered(p2, 3.0)
    assert not builder.add_point_filtered(p3, 3.0)
    assert builder.points == [p1]

    far = north_of(ORIGIN, 5.0)
    assert builder.add_point_filtered(far, 3.0)
    assert builder.points == [p1, far]
    assert builder.last_accepted == far


def test_filtered_point_exactly_at_threshold_is_accepted(builder):
    a = ORIGIN
    b = east_of(ORIGIN, 3.0)
    threshold = haversine_distance(a, b)

    builder.add_point_filtered(a, threshold)
    assert builder.add_point_filtered(b, threshold)


def test_filtered_uses_builder_default_threshold():
    builder = TraceBuilder(min_distance_m=10.0)
    builder.begin()
    builder.add_point_filtered(ORIGIN)
    assert not builder.add_point_filtered(north_of(ORIGIN, 5.0))
    assert builder.add_point_filtered(north_of(ORIGIN, 11.0))


def test_filtered_measures_from_tap_anchor(builder):
    """A tap also moves the anchor used by the drag filter."""
    builder.add_point(ORIGIN)
    assert not builder.add_point_filtered(north_of(ORIGIN, 1.0))


def test_filtered_never_keeps_points_closer_than_threshold(builder):
    """Random slow/fast drag: consecutive kept points are >= threshold apart."""
    rng = random.Random(1234)
    threshold = 3.0
    current = ORIGIN

    for _ in range(500):
        current = north_of(current, rng.uniform(-0.5, 4.0))
        current = east_of(current, rng.uniform(-2.0, 2.0))
        builder.add_point_filtered(current, threshold)

    kept = builder.points
    assert len(kept) > 10
    for a, b in zip(kept, kept[1:]):
        assert haversine_distance(a, b) >= threshold


def test_negative_default_threshold_rejected():
    with pytest.raises(ValueError):
        TraceBuilder(min_distance_m=-1.0)


# ========== Undo / clear ==========

def test_undo_on_empty_is_noop(builder):
    assert builder.undo_last() is None
    assert builder.points == []


def test_undo_removes_last_point(builder):
    a, b = ORIGIN, north_of(ORIGIN, 10.0)
    builder.add_point(a)
    builder.add_point(b)
    assert builder.undo_last() == b
    assert builder.points == [a]


def test_undo_keeps_stale_anchor_by_default(builder):
    """The filter keeps measuring from the removed point."""
    a = ORIGIN
    b = north_of(ORIGIN, 10.0)
    c = north_of(ORIGIN, 11.0)  # 1 m from b, 11 m from a

    builder.add_point(a)
    builder.add_point_filtered(b)
    builder.undo_last()

    assert builder.last_accepted == b
    assert not builder.add_point_filtered(c)
    assert builder.points == [a]


def test_undo_rebases_anchor_when_enabled():
    """With rebase_on_undo the filter measures from the new last point."""
    builder = TraceBuilder(rebase_on_undo=True)
    builder.begin()

    a = ORIGIN
    b = north_of(ORIGIN, 10.0)
    c = north_of(ORIGIN, 11.0)

    builder.add_point(a)
    builder.add_point_filtered(b)
    builder.undo_last()

    assert builder.last_accepted == a
    assert builder.add_point_filtered(c)
    assert builder.points == [a, c]


def test_undo_to_empty_rebases_to_none():
    builder = TraceBuilder(rebase_on_undo=True)
    builder.begin()
    builder.add_point(ORIGIN)
    builder.undo_last()
    assert builder.last_accepted is None


def test_clear_keeps_editing(builder):
    builder.add_point(ORIGIN)
    builder.clear()
    assert builder.points == []
    assert builder.last_accepted is None
    assert builder.editing


# ========== Finalize / cancel ==========

def test_finalize_with_two_points_fails_and_keeps_trace(builder):
    a, b = ORIGIN, north_of(ORIGIN, 10.0)
    builder.add_point(a)
    builder.add_point(b)

    with pytest.raises(InsufficientPoints) as excinfo:
        builder.finalize()

    assert excinfo.value.count == 2
    assert builder.points == [a, b]
    assert builder.editing
    assert not builder.can_finalize


def test_finalize_scenario_yields_region_in_order(builder):
    a = ORIGIN
    b = north_of(ORIGIN, 20.0)
    c = east_of(b, 20.0)

    builder.add_point(a)
    builder.add_point(b)
    builder.add_point(c)
    assert builder.can_finalize

    region = builder.finalize()

    assert isinstance(region, Region)
    assert region.points == (a, b, c)
    assert isinstance(region.id, uuid.UUID)
    assert region.created_at.tzinfo is not None
    assert builder.points == []
    assert builder.last_accepted is None
    assert not builder.editing


def test_finalize_gives_fresh_ids(builder):
    ids = set()
    for _ in range(3):
        builder.begin()
        for i in range(3):
            builder.add_point(north_of(ORIGIN, 10 * i))
        ids.add(builder.finalize().id)
    assert len(ids) == 3


def test_input_ignored_after_finalize(builder):
    for i in range(3):
        builder.add_point(north_of(ORIGIN, 10 * i))
    builder.finalize()
    assert builder.add_point(ORIGIN) is False
    assert len(builder) == 0


def test_cancel_resets_everything(builder):
    builder.add_point(ORIGIN)
    builder.cancel()
    assert builder.points == []
    assert builder.last_accepted is None
    assert not builder.editing


def test_restore_reenters_editing(builder):
    points = [north_of(ORIGIN, 10 * i) for i in range(4)]
    builder.restore(points)
    assert builder.editing
    assert builder.points == points
    assert builder.last_accepted == points[-1]


def test_points_property_is_a_copy(builder):
    builder.add_point(ORIGIN)
    builder.points.clear()
    assert len(builder) == 1


def test_region_requires_three_points():
    with pytest.raises(InsufficientPoints):
        Region.create([ORIGIN, north_of(ORIGIN, 5.0)])


def test_region_exports_array_and_perimeter():
    a = ORIGIN
    b = north_of(a, 100.0)
    c = east_of(b, 100.0)
    region = Region.create([a, b, c])

    assert region.to_array().shape == (3, 2)
    assert region.perimeter_m == pytest.approx(100.0 + 100.0 + haversine_distance(c, a), rel=1e-6)


def test_restore_keeps_given_anchor(builder):
    """A stale post-undo anchor survives a restore when passed back in."""
    a = ORIGIN
    b = north_of(ORIGIN, 10.0)
    c = north_of(ORIGIN, 20.0)
    stale = north_of(ORIGIN, 30.0)

    builder.restore([a, b, c], last_accepted=stale)

    assert builder.points == [a, b, c]
    assert builder.last_accepted == stale
    assert not builder.add_point_filtered(north_of(ORIGIN, 31.0))
