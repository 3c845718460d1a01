#!/usr/bin/env python3
"""
TALHARPA_ANCHORS.PY - Layout frame and anchor points

Contains:
- compute_layout: the placement frame shared by all three views
- symmetric_row: evenly spaced x positions about a centreline
- peg_holes, bridge_anchors, tail_holes, soundhole_center, neck_join_points
- side_profile_points: ideal corners of the side-view body profile
- compute_anchors: everything above bundled into an AnchorSet
"""

from typing import Dict, List, Optional, Tuple

from talharpa_config import DrawingConfig
from talharpa_geometry import fillet_corner
from talharpa_models import (
    AnchorPoint, AnchorSet, DimensionSet, DrawingLayout, GeometryError, Point,
)


TAIL_HOLE_DROP_MM = 13.0    # Tail holes sit this far below the tailpiece top


# =============================================================================
# LAYOUT
# =============================================================================

def compute_layout(dims: DimensionSet, config: Optional[DrawingConfig] = None) -> DrawingLayout:
    """Place the body in drawing coordinates.

    Every view is offset by drawing_margin + extra_margin; the body's widest
    section defines the centreline.
    """
    config = config or DrawingConfig()
    m = config.total_margin
    max_w = max(dims.headstock_width, dims.body_min_width)

    top_y = m
    bottom_y = m + dims.overall_length
    top_mid_x = m + max_w / 2

    bridge_center_y = m + dims.peg_start + dims.scale_mm
    bridge_y = bridge_center_y - dims.bridge_length / 2
    bridge_bottom_y = bridge_y + dims.bridge_length

    # Tailpiece centred in the space between the bridge and the base
    free_below = bottom_y - bridge_bottom_y
    tail_top_y = bridge_bottom_y + (free_below - dims.tail_length) / 2

    return DrawingLayout(
        total_margin=m,
        extra_margin=config.extra_margin,
        top_y=top_y,
        bottom_y=bottom_y,
        top_mid_x=top_mid_x,
        max_body_width=max_w,
        top_left_x=top_mid_x - dims.headstock_width / 2,
        top_right_x=top_mid_x + dims.headstock_width / 2,
        bottom_left_x=top_mid_x - dims.body_min_width / 2,
        bottom_right_x=top_mid_x + dims.body_min_width / 2,
        r_top=config.r_top_factor * dims.headstock_width,
        r_bottom=config.r_bottom_factor * dims.body_min_width,
        r_window=config.r_window_factor * dims.window_width,
        window_x=top_mid_x - dims.window_width / 2,
        window_y=m + dims.cut_out_top,
        bridge_center_y=bridge_center_y,
        bridge_y=bridge_y,
        tail_top_y=tail_top_y,
        tail_bottom_y=tail_top_y + dims.tail_length,
        tail_left_x=top_mid_x - dims.tail_top_width / 2,
        front_width=max_w + 2 * m,
        front_height=dims.overall_length + 2 * m,
        side_width=dims.body_min_depth + 2 * m,
        side_height=dims.overall_length + 2 * m,
        pixel_width=config.pixel_width,
        pixel_height=config.pixel_height,
        string_color=config.string_color,
    )


# =============================================================================
# ROWS
# =============================================================================

def symmetric_row(count: int, spacing: float, center_x: float) -> List[float]:
    """Return count x positions spaced evenly and centred on center_x."""
    if count < 1:
        return []
    first = center_x - (count - 1) * spacing / 2
    return [first + i * spacing for i in range(count)]


def peg_holes(dims: DimensionSet, layout: DrawingLayout) -> Tuple[AnchorPoint, ...]:
    y = layout.top_y + dims.peg_start
    xs = symmetric_row(dims.num_strings, dims.peg_spacing, layout.top_mid_x)
    return tuple(AnchorPoint(f"PegHole[{i}]", x, y) for i, x in enumerate(xs))


def bridge_anchors(dims: DimensionSet, layout: DrawingLayout) -> Tuple[AnchorPoint, ...]:
    """String notches along the top edge of the bridge."""
    xs = symmetric_row(dims.num_strings, dims.bridge_spacing, layout.top_mid_x)
    return tuple(AnchorPoint(f"BridgeAnchor[{i}]", x, layout.bridge_y)
                 for i, x in enumerate(xs))


def tail_holes(dims: DimensionSet, layout: DrawingLayout) -> Tuple[AnchorPoint, ...]:
    """String holes across the top of the tailpiece.

    A single string goes through the middle; otherwise holes divide the
    tailpiece top width into num_strings + 1 equal parts.
    """
    y = layout.tail_top_y + TAIL_HOLE_DROP_MM
    n = dims.num_strings
    if n == 1:
        return (AnchorPoint("TailHole[0]", layout.tail_left_x + dims.tail_top_width / 2, y),)
    step = dims.tail_top_width / (n + 1)
    return tuple(AnchorPoint(f"TailHole[{i}]", layout.tail_left_x + step * (i + 1), y)
                 for i in range(n))


def soundhole_center(dims: DimensionSet, layout: DrawingLayout) -> AnchorPoint:
    return AnchorPoint("Soundhole", layout.top_mid_x, layout.top_y + dims.soundhole_center)


# =============================================================================
# SIDE PROFILE
# =============================================================================

def side_profile_points(dims: DimensionSet, layout: DrawingLayout) -> Dict[str, Point]:
    """Ideal corners of the side profile.

    B-C is the top of the neck, D the blend where the thin neck meets the
    full-depth body, A-F the base. The soundboard face is x = total_margin.
    """
    m = layout.total_margin
    depth = dims.body_min_depth
    neck = dims.neck_thickness
    top = layout.top_y
    bottom = layout.bottom_y
    neck_y = top + dims.neck_start
    return {
        "A": (m + depth, bottom),
        "B": (m + depth, top),
        "C": (m + depth - neck, top),
        "D": (m + depth - neck, neck_y),
        "E": (m, neck_y),
        "F": (m, bottom),
    }


def blend_radius(dims: DimensionSet) -> float:
    return (dims.body_min_depth - dims.neck_thickness) / 2


def neck_join_points(dims: DimensionSet,
                     layout: DrawingLayout) -> Tuple[AnchorPoint, AnchorPoint]:
    """Tangent points either side of the blend joint at the neck transition."""
    pts = side_profile_points(dims, layout)
    fillet = fillet_corner(pts["C"], pts["D"], pts["E"], blend_radius(dims))
    if fillet is None:
        raise GeometryError("Neck blend joint collapsed to a sharp corner")
    entry, exit_, _ = fillet
    return (AnchorPoint("NeckJoin[0]", entry[0], entry[1]),
            AnchorPoint("NeckJoin[1]", exit_[0], exit_[1]))


def compute_anchors(dims: DimensionSet, layout: DrawingLayout) -> AnchorSet:
    return AnchorSet(
        peg_holes=peg_holes(dims, layout),
        bridge_anchors=bridge_anchors(dims, layout),
        tail_holes=tail_holes(dims, layout),
        soundhole=soundhole_center(dims, layout),
        soundhole_radius=dims.soundhole_diameter / 2,
        neck_join=neck_join_points(dims, layout),
    )
