"""Tests for talharpa_geometry."""

import math

import pytest

from talharpa_geometry import (
    arc_center,
    build_rounded_outline,
    expected_sweep_flags,
    fillet_corner,
    outline_polyline,
    polygon_outline,
    sample_arc,
    turn_sweep_flag,
)
from talharpa_models import ArcTo, CornerSpec, GeometryError, LineTo


def rectangle(radius, width=100.0, height=50.0):
    """Clockwise-on-screen rectangle with its top-left corner at the origin."""
    return [
        CornerSpec((width, 0.0), radius, 1),
        CornerSpec((width, height), radius, 1),
        CornerSpec((0.0, height), radius, 1),
        CornerSpec((0.0, 0.0), radius, 1),
    ]


def assert_tangent(outline):
    """Every arc's radius meets its incident edges at right angles."""
    corners = outline.corners
    n = len(corners)
    for i, corner in enumerate(corners):
        fillet = fillet_corner(corners[i - 1].point, corner.point,
                               corners[(i + 1) % n].point, corner.radius)
        if fillet is None:
            continue
        entry, exit_, radius = fillet
        cx, cy = arc_center(entry, exit_, radius, corner.sweep_flag)
        for p in (entry, exit_):
            edge = (corner.point[0] - p[0], corner.point[1] - p[1])
            rad = (p[0] - cx, p[1] - cy)
            assert edge[0] * rad[0] + edge[1] * rad[1] == pytest.approx(0, abs=1e-9)
            assert math.hypot(*rad) == pytest.approx(radius)


class TestRoundedRectangle:
    """Right-angle corners produce arcs of exactly the requested radius."""

    def test_path_data(self):
        outline = build_rounded_outline(rectangle(10), name="rect")
        assert outline.path_data() == (
            "M 10.00,0.00 "
            "L 90.00,0.00 A 10.00 10.00 0 0 1 100.00,10.00 "
            "L 100.00,40.00 A 10.00 10.00 0 0 1 90.00,50.00 "
            "L 10.00,50.00 A 10.00 10.00 0 0 1 0.00,40.00 "
            "L 0.00,10.00 A 10.00 10.00 0 0 1 10.00,0.00 Z"
        )

    def test_closed_exactly(self):
        outline = build_rounded_outline(rectangle(10))
        assert outline.is_closed()
        assert outline.points()[0] == outline.points()[-1]

    def test_alternates_lines_and_arcs(self):
        outline = build_rounded_outline(rectangle(10))
        kinds = [type(s) for s in outline.segments]
        assert kinds == [LineTo, ArcTo] * 4

    def test_arc_radius_equals_request(self):
        outline = build_rounded_outline(rectangle(7.5))
        assert [a.radius for a in outline.arcs()] == [7.5] * 4

    def test_tangent(self):
        assert_tangent(build_rounded_outline(rectangle(10)))


class TestClamping:
    """Oversized radii are silently clamped to half the shorter edge."""

    def test_radius_clamped(self):
        outline = build_rounded_outline(rectangle(40))
        assert all(a.radius == 25 for a in outline.arcs())
        assert outline.is_closed()

    def test_full_clamp_drops_straight_run(self):
        # 50 mm sides fully consumed by two 25 mm setbacks
        outline = build_rounded_outline(rectangle(40))
        lines = [s for s in outline.segments if isinstance(s, LineTo)]
        assert len(lines) == 2

    def test_zero_radius_keeps_vertices(self):
        outline = build_rounded_outline(rectangle(0))
        assert outline.arcs() == []
        assert outline.start == (0.0, 0.0)
        assert [s.to for s in outline.segments] == [
            (100.0, 0.0), (100.0, 50.0), (0.0, 50.0), (0.0, 0.0)]

    def test_collinear_corner_is_not_rounded(self):
        outline = build_rounded_outline([
            CornerSpec((0.0, 0.0), 5, 1),
            CornerSpec((50.0, 0.0), 5, 1),
            CornerSpec((100.0, 0.0), 5, 1),
            CornerSpec((100.0, 50.0), 5, 1),
            CornerSpec((0.0, 50.0), 5, 1),
        ])
        assert len(outline.arcs()) == 4
        assert outline.is_closed()

    def test_degenerate_polygon_still_closes(self):
        outline = polygon_outline([(5.0, 0.0), (5.0, 0.0), (5.0, 10.0), (5.0, 10.0)])
        assert outline.is_closed()


class TestSlantedCorners:
    """Non-right-angle corners stay tangent to both edges."""

    @pytest.fixture
    def trapezoid(self):
        return build_rounded_outline([
            CornerSpec((130.0, 0.0), 12, 1),
            CornerSpec((150.0, 600.0), 40, 1),
            CornerSpec((-30.0, 600.0), 40, 1),
            CornerSpec((-10.0, 0.0), 12, 1),
        ])

    def test_tangent(self, trapezoid):
        assert_tangent(trapezoid)

    def test_closed(self, trapezoid):
        assert trapezoid.is_closed()

    def test_sweep_flags_follow_turn(self, trapezoid):
        assert expected_sweep_flags(trapezoid.corners) == [1, 1, 1, 1]

    def test_arc_radius_is_fillet_radius(self, trapezoid):
        # Top-right corner: edges run left and down-right, setback 12
        theta = math.pi - math.atan2(600.0, 20.0)
        arc = trapezoid.arcs()[0]
        assert arc.radius == pytest.approx(12 * math.tan(theta / 2))
        assert arc.radius != pytest.approx(12, abs=1e-3)


class TestErrors:
    def test_too_few_corners(self):
        with pytest.raises(GeometryError, match="at least 3"):
            build_rounded_outline(rectangle(5)[:2])

    def test_two_blends_rejected(self):
        corners = rectangle(5)
        corners[0] = CornerSpec(corners[0].point, 5, 1, blend=True)
        corners[2] = CornerSpec(corners[2].point, 5, 1, blend=True)
        with pytest.raises(GeometryError, match="blend"):
            build_rounded_outline(corners)

    def test_one_blend_marked_on_arc(self):
        corners = rectangle(5)
        corners[1] = CornerSpec(corners[1].point, 5, 1, blend=True)
        outline = build_rounded_outline(corners)
        assert [a.blend for a in outline.arcs()] == [False, True, False, False]


class TestArcs:
    def test_turn_sweep_flag(self):
        assert turn_sweep_flag((0, 0), (10, 0), (10, 10)) == 1
        assert turn_sweep_flag((0, 0), (10, 0), (10, -10)) == 0

    def test_arc_center(self):
        assert arc_center((90, 0), (100, 10), 10, 1) == pytest.approx((90, 10))
        assert arc_center((90, 0), (100, 10), 10, 0) == pytest.approx((100, 0))

    def test_small_radius_scaled_up(self):
        cx, cy = arc_center((0, 0), (10, 0), 1, 1)
        assert (cx, cy) == pytest.approx((5, 0))

    def test_sample_arc_endpoints(self):
        xs, ys = sample_arc((90, 0), (100, 10), 10, 1, num_points=9)
        assert len(xs) == 9
        assert (xs[0], ys[0]) == pytest.approx((90, 0))
        assert (xs[-1], ys[-1]) == pytest.approx((100, 10))
        # Bulges away from the centre, towards the corner
        assert math.hypot(xs[4] - 90, ys[4] - 10) == pytest.approx(10)
        assert xs[4] > 95 and ys[4] < 5

    def test_outline_polyline_closes(self):
        xs, ys = outline_polyline(build_rounded_outline(rectangle(10)), arc_points=5)
        assert (xs[0], ys[0]) == pytest.approx((xs[-1], ys[-1]))
        assert len(xs) == 1 + 4 * (1 + 4)
