"""Tests for talharpa_annotations."""

import pytest

from talharpa_annotations import dimension_through, draw_linear_dimension
from talharpa_models import GeometryError, Line


class TestLinearDimension:
    def test_vertical_positive_offset_goes_left(self):
        dim = draw_linear_dimension((0, 0), (0, 100), 20, "B")
        assert dim.dimension_line == Line(-20, 0, -20, 100, role="dimension")
        assert dim.text_label.anchor == "end"
        assert (dim.text_label.x, dim.text_label.y) == pytest.approx((-25, 50))
        assert dim.text_label.content == "B"

    def test_horizontal_negative_offset_goes_up(self):
        dim = draw_linear_dimension((0, 0), (100, 0), -10, "F")
        line = dim.dimension_line
        assert (line.x1, line.y1, line.x2, line.y2) == pytest.approx((0, -10, 100, -10))
        assert dim.text_label.anchor == "middle"
        assert (dim.text_label.x, dim.text_label.y) == pytest.approx((50, -13))

    def test_horizontal_label_below(self):
        dim = draw_linear_dimension((0, 0), (100, 0), 15, "I")
        assert dim.text_label.y == pytest.approx(27)

    def test_extension_lines_join_points(self):
        dim = draw_linear_dimension((10, 10), (10, 60), -5, "C")
        e1, e2 = dim.extension_line1, dim.extension_line2
        assert (e1.x1, e1.y1) == (10, 10)
        assert (e1.x2, e1.y2) == pytest.approx((15, 10))
        assert (e2.x1, e2.y1) == (10, 60)
        assert (e2.x2, e2.y2) == pytest.approx((15, 60))
        assert dim.text_label.anchor == "start"

    def test_dimension_length_preserved(self):
        dim = draw_linear_dimension((0, 0), (30, 40), 12, "X")
        assert dim.dimension_line.length() == pytest.approx(50)

    def test_shapes_order(self):
        dim = draw_linear_dimension((0, 0), (0, 10), 5, "A")
        assert dim.shapes() == [dim.extension_line1, dim.extension_line2,
                                dim.dimension_line, dim.text_label]

    def test_zero_length_rejected(self):
        with pytest.raises(GeometryError, match="zero-length"):
            draw_linear_dimension((5, 5), (5, 5), 10, "Z")


class TestDimensionThrough:
    def test_vertical_to_the_right(self):
        dim = dimension_through((0, 0), (0, 100), (30, 999), "C")
        assert dim.dimension_line.x1 == pytest.approx(30)
        assert dim.dimension_line.x2 == pytest.approx(30)
        assert dim.text_label.anchor == "start"

    def test_horizontal_above(self):
        dim = dimension_through((0, 50), (80, 50), (-7, 25), "F")
        assert dim.dimension_line.y1 == pytest.approx(25)
        assert dim.dimension_line.y2 == pytest.approx(25)

    def test_reversed_direction_same_line(self):
        a = dimension_through((0, 0), (0, 100), (-40, 0), "B")
        b = dimension_through((0, 100), (0, 0), (-40, 0), "B")
        assert a.dimension_line.x1 == pytest.approx(b.dimension_line.x1)
        assert a.text_label.x == pytest.approx(b.text_label.x)
