"""Tests for talharpa_anchors."""

import pytest

from talharpa_anchors import (
    compute_anchors,
    compute_layout,
    neck_join_points,
    side_profile_points,
    symmetric_row,
    tail_holes,
)
from talharpa_config import DrawingConfig
from talharpa_dimensions import compute_dimensions
from talharpa_views import side_outline


def setup(scale=40, strings=3, config=None):
    dims = compute_dimensions(scale, strings)
    layout = compute_layout(dims, config or DrawingConfig())
    return dims, layout


class TestSymmetricRow:
    def test_odd_count(self):
        assert symmetric_row(3, 36, 100) == [64, 100, 136]

    def test_even_count(self):
        assert symmetric_row(4, 10, 0) == [-15, -5, 5, 15]

    def test_single(self):
        assert symmetric_row(1, 36, 42.5) == [42.5]

    def test_empty(self):
        assert symmetric_row(0, 36, 0) == []


class TestLayout:
    def test_origin_offset(self):
        dims, layout = setup()
        assert layout.total_margin == 60
        assert layout.top_y == 60
        assert layout.bottom_y == pytest.approx(60 + dims.overall_length)

    def test_custom_margins(self):
        dims, layout = setup(config=DrawingConfig(drawing_margin=5, extra_margin=20))
        assert layout.top_y == 25
        assert layout.front_width == pytest.approx(layout.max_body_width + 50)

    def test_centreline_on_widest_section(self):
        dims, layout = setup(strings=8)
        assert dims.headstock_width > dims.body_min_width
        assert layout.top_left_x == pytest.approx(layout.total_margin)

    def test_bridge_centre(self):
        dims, layout = setup()
        assert layout.bridge_center_y == pytest.approx(60 + 17.5 + 400)
        assert layout.bridge_y == pytest.approx(layout.bridge_center_y - 2.5)

    def test_tailpiece_centred_below_bridge(self):
        dims, layout = setup()
        above = layout.tail_top_y - (layout.bridge_y + dims.bridge_length)
        below = layout.bottom_y - layout.tail_bottom_y
        assert above == pytest.approx(below)
        assert above > 0

    def test_body_width_interpolates(self):
        dims, layout = setup()
        assert layout.body_width_at(layout.top_y) == pytest.approx(dims.headstock_width)
        assert layout.body_width_at(layout.bottom_y) == pytest.approx(dims.body_min_width)


class TestAnchorRows:
    """Rows hold one anchor per string, symmetric about the centreline."""

    @pytest.mark.parametrize("strings", range(1, 9))
    def test_counts_and_symmetry(self, strings):
        dims, layout = setup(strings=strings)
        anchors = compute_anchors(dims, layout)
        for row in (anchors.peg_holes, anchors.bridge_anchors, anchors.tail_holes):
            assert len(row) == strings
            mean_x = sum(a.x for a in row) / len(row)
            assert mean_x == pytest.approx(layout.top_mid_x)

    def test_peg_row(self):
        dims, layout = setup()
        pegs = compute_anchors(dims, layout).peg_holes
        assert [p.name for p in pegs] == ["PegHole[0]", "PegHole[1]", "PegHole[2]"]
        assert all(p.y == pytest.approx(77.5) for p in pegs)
        assert pegs[1].x - pegs[0].x == pytest.approx(36)

    def test_bridge_row_on_bridge_top(self):
        dims, layout = setup()
        anchors = compute_anchors(dims, layout).bridge_anchors
        assert all(a.y == layout.bridge_y for a in anchors)
        assert anchors[2].x - anchors[0].x == pytest.approx(dims.bridge_width - 24)

    def test_single_tail_hole_in_middle(self):
        dims, layout = setup(strings=1)
        (hole,) = tail_holes(dims, layout)
        assert hole.x == pytest.approx(layout.top_mid_x)
        assert hole.y == pytest.approx(layout.tail_top_y + 13)

    def test_tail_holes_divide_top_width(self):
        dims, layout = setup(strings=3)
        holes = tail_holes(dims, layout)
        step = dims.tail_top_width / 4
        assert [h.x - layout.tail_left_x for h in holes] == pytest.approx([step, 2 * step, 3 * step])

    def test_soundhole(self):
        dims, layout = setup()
        anchors = compute_anchors(dims, layout)
        assert anchors.soundhole.x == layout.top_mid_x
        assert anchors.soundhole.y == pytest.approx(60 + dims.soundhole_center)
        assert anchors.soundhole_radius == 25


class TestNeckJoin:
    def test_points_match_blend_arc(self):
        dims, layout = setup()
        join = neck_join_points(dims, layout)
        (blend,) = [a for a in side_outline(dims, layout).arcs() if a.blend]
        assert join[0].as_tuple() == blend.start
        assert join[1].as_tuple() == blend.to

    def test_blend_radius(self):
        dims, layout = setup()
        pts = side_profile_points(dims, layout)
        join = neck_join_points(dims, layout)
        r = (dims.body_min_depth - dims.neck_thickness) / 2
        assert pts["D"][1] - join[0].y == pytest.approx(r)
        assert pts["D"][0] - join[1].x == pytest.approx(r)
