#!/usr/bin/env python3
"""
TALHARPA_GEOMETRY.PY - Rounded outline construction

One outline builder serves every view: body, window, tailpiece, soundboard
panels and frame inset are all ideal polygons whose corners get rounded here.
All coordinates are drawing coordinates with y pointing down, so sweep flag 1
means clockwise on screen.

Contains:
- build_rounded_outline: CornerSpec list -> ClosedOutline
- polygon_outline: sharp-cornered convenience wrapper
- fillet_corner: tangent points and arc radius for one corner
- turn_sweep_flag: sweep flag that follows the outline's turn at a vertex
- arc_center / sample_arc / outline_polyline: arc recovery and sampling
"""

import math
from typing import List, Optional, Sequence, Tuple

import numpy as np

from talharpa_models import (
    ArcTo, ClosedOutline, CornerSpec, GeometryError, LineTo, Point,
)


# Cross products below this are treated as collinear edges
COLLINEAR_EPS = 1e-12


# =============================================================================
# CORNERS
# =============================================================================

def turn_sweep_flag(prev: Point, vertex: Point, nxt: Point) -> int:
    """Return 1 if the path turns clockwise on screen at vertex, else 0."""
    ax, ay = vertex[0] - prev[0], vertex[1] - prev[1]
    bx, by = nxt[0] - vertex[0], nxt[1] - vertex[1]
    return 1 if ax * by - ay * bx > 0 else 0


def fillet_corner(prev: Point, vertex: Point, nxt: Point,
                  radius: float) -> Optional[Tuple[Point, Point, float]]:
    """Tangent points and arc radius for rounding the corner at vertex.

    The tangent points sit a setback d back along each incident edge, with
    d = min(radius, half the shorter incident edge). The returned arc radius
    is that of the circle touching both edges at those points, d*tan(theta/2)
    for an interior angle theta, which is exactly d at right angles.

    Returns None when the corner cannot be rounded (zero radius, zero-length
    edge, or collinear edges); the caller then keeps the sharp vertex.
    """
    if radius <= 0:
        return None
    ax, ay = prev[0] - vertex[0], prev[1] - vertex[1]
    bx, by = nxt[0] - vertex[0], nxt[1] - vertex[1]
    len_a = math.hypot(ax, ay)
    len_b = math.hypot(bx, by)
    if len_a == 0 or len_b == 0:
        return None
    ux, uy = ax / len_a, ay / len_a
    vx, vy = bx / len_b, by / len_b
    cross = ux * vy - uy * vx
    dot = ux * vx + uy * vy
    if abs(cross) < COLLINEAR_EPS:
        return None

    d = min(radius, len_a / 2, len_b / 2)
    entry = (vertex[0] + ux * d, vertex[1] + uy * d)
    exit_ = (vertex[0] + vx * d, vertex[1] + vy * d)
    arc_radius = d * abs(cross) / (1 + dot)
    return entry, exit_, arc_radius


# =============================================================================
# OUTLINES
# =============================================================================

def build_rounded_outline(corners: Sequence[CornerSpec], name: str = "") -> ClosedOutline:
    """Round every corner of a closed polygon and return the path.

    The path starts at the exit tangent point of the last corner, runs a
    straight line to each corner's entry tangent point and an arc to its exit
    tangent point, so the final arc lands exactly on the starting point.

    Each arc's radius is the fillet radius d*tan(theta/2) for the setback d,
    which keeps it tangent to both edges. It equals the corner's requested
    radius only at right angles; slanted corners come out slightly off.

    Raises:
        GeometryError: fewer than three corners, or more than one blend corner
    """
    corners = tuple(corners)
    if len(corners) < 3:
        raise GeometryError(f"Outline '{name}' needs at least 3 corners, got {len(corners)}")
    if sum(1 for c in corners if c.blend) > 1:
        raise GeometryError(f"Outline '{name}' has more than one blend corner")

    n = len(corners)
    rounded = []
    for i, corner in enumerate(corners):
        prev = corners[i - 1].point
        nxt = corners[(i + 1) % n].point
        rounded.append(fillet_corner(prev, corner.point, nxt, corner.radius))

    last = rounded[-1]
    start = last[1] if last is not None else corners[-1].point

    segments = []
    current = start
    for corner, fillet in zip(corners, rounded):
        if fillet is None:
            if corner.point != current:
                segments.append(LineTo(corner.point))
                current = corner.point
            continue
        entry, exit_, arc_radius = fillet
        if entry != current:
            segments.append(LineTo(entry))
        segments.append(ArcTo(arc_radius, corner.sweep_flag, exit_, start=entry,
                              blend=corner.blend))
        current = exit_

    return ClosedOutline(name=name, start=start, segments=tuple(segments), corners=corners)


def polygon_outline(points: Sequence[Point], name: str = "") -> ClosedOutline:
    """Closed outline with sharp corners."""
    return build_rounded_outline([CornerSpec(p, 0.0) for p in points], name=name)


def expected_sweep_flags(corners: Sequence[CornerSpec]) -> List[int]:
    """Sweep flag each corner needs to bend with the outline's own turn."""
    n = len(corners)
    return [turn_sweep_flag(corners[i - 1].point, corners[i].point,
                            corners[(i + 1) % n].point)
            for i in range(n)]


# =============================================================================
# ARCS
# =============================================================================

def arc_center(start: Point, end: Point, radius: float, sweep_flag: int) -> Point:
    """Centre of the small SVG arc from start to end.

    Follows the SVG endpoint-to-centre conversion with no rotation and the
    large-arc flag cleared. A radius shorter than half the chord is scaled up,
    as SVG renderers do.
    """
    x1p = (start[0] - end[0]) / 2
    y1p = (start[1] - end[1]) / 2
    h2 = x1p * x1p + y1p * y1p
    if h2 == 0:
        return start
    r2 = max(radius * radius, h2)
    k = math.sqrt(max(r2 - h2, 0.0) / h2)
    sign = 1.0 if sweep_flag == 1 else -1.0
    cx = sign * k * y1p + (start[0] + end[0]) / 2
    cy = -sign * k * x1p + (start[1] + end[1]) / 2
    return cx, cy


def sample_arc(start: Point, end: Point, radius: float, sweep_flag: int,
               num_points: int = 16) -> Tuple[np.ndarray, np.ndarray]:
    """Sample an SVG arc into num_points (x, y) positions, endpoints included."""
    cx, cy = arc_center(start, end, radius, sweep_flag)
    r = math.hypot(start[0] - cx, start[1] - cy)
    theta1 = math.atan2(start[1] - cy, start[0] - cx)
    theta2 = math.atan2(end[1] - cy, end[0] - cx)
    dtheta = theta2 - theta1
    if sweep_flag == 1 and dtheta < 0:
        dtheta += 2 * math.pi
    elif sweep_flag == 0 and dtheta > 0:
        dtheta -= 2 * math.pi

    t = np.linspace(theta1, theta1 + dtheta, num_points)
    return cx + r * np.cos(t), cy + r * np.sin(t)


def outline_polyline(outline: ClosedOutline,
                     arc_points: int = 16) -> Tuple[np.ndarray, np.ndarray]:
    """Discretise an outline into closed x/y arrays for plotting."""
    xs = [outline.start[0]]
    ys = [outline.start[1]]
    for seg in outline.segments:
        if isinstance(seg, ArcTo):
            ax, ay = sample_arc(seg.start, seg.to, seg.radius, seg.sweep_flag, arc_points)
            xs.extend(ax[1:])
            ys.extend(ay[1:])
        else:
            xs.append(seg.to[0])
            ys.append(seg.to[1])
    return np.array(xs), np.array(ys)
