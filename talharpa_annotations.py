#!/usr/bin/env python3
"""
TALHARPA_ANNOTATIONS.PY - Linear dimension annotations

A linear dimension is the measured segment p1-p2 shifted sideways by a
perpendicular offset, two extension lines back to the measured points, and
a text label just beyond the dimension line.
"""

import math

from talharpa_models import GeometryError, Line, LinearDimension, Point, Text


LABEL_GAP_SIDE = 5.0     # label gap beside a vertical dimension line
LABEL_GAP_ABOVE = 3.0    # label gap above a horizontal dimension line
LABEL_GAP_BELOW = 12.0   # leaves room for the glyph height below


def _normal(p1: Point, p2: Point):
    dx, dy = p2[0] - p1[0], p2[1] - p1[1]
    length = math.hypot(dx, dy)
    if length == 0:
        raise GeometryError(f"Cannot dimension a zero-length span at {p1}")
    ux, uy = dx / length, dy / length
    return -uy, ux


def draw_linear_dimension(p1: Point, p2: Point, perpendicular_offset: float,
                          label: str) -> LinearDimension:
    """Build the lines and label for measuring p1 to p2.

    The dimension line is offset along n = (-u_y, u_x), u being the unit
    vector from p1 to p2. Measuring downward, a positive offset goes left;
    measuring rightward, it goes down.
    """
    nx, ny = _normal(p1, p2)
    q1 = (p1[0] + nx * perpendicular_offset, p1[1] + ny * perpendicular_offset)
    q2 = (p2[0] + nx * perpendicular_offset, p2[1] + ny * perpendicular_offset)

    side = 1.0 if perpendicular_offset >= 0 else -1.0
    lx, ly = nx * side, ny * side
    if abs(lx) >= abs(ly):
        gap = LABEL_GAP_SIDE
        anchor = "start" if lx > 0 else "end"
    else:
        gap = LABEL_GAP_ABOVE if ly < 0 else LABEL_GAP_BELOW
        anchor = "middle"
    mid_x = (q1[0] + q2[0]) / 2
    mid_y = (q1[1] + q2[1]) / 2

    return LinearDimension(
        dimension_line=Line(q1[0], q1[1], q2[0], q2[1], role="dimension"),
        extension_line1=Line(p1[0], p1[1], q1[0], q1[1], role="dimension"),
        extension_line2=Line(p2[0], p2[1], q2[0], q2[1], role="dimension"),
        text_label=Text(mid_x + lx * gap, mid_y + ly * gap, anchor, label),
    )


def dimension_through(p1: Point, p2: Point, through: Point, label: str) -> LinearDimension:
    """Linear dimension whose dimension line passes through the given point."""
    nx, ny = _normal(p1, p2)
    offset = (through[0] - p1[0]) * nx + (through[1] - p1[1]) * ny
    return draw_linear_dimension(p1, p2, offset, label)
