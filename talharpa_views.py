#!/usr/bin/env python3
"""
TALHARPA_VIEWS.PY - Front, Side and Frame drawing views

Each view is assembled from the same DimensionSet, DrawingLayout and
AnchorSet, so shared features (top, base, bridge centre, neck start) line up
across views. Nothing here touches the filesystem.

Contains:
- build_front_scene: body, window, bridge, tailpiece, strings, soundhole
- build_side_scene: profile with the neck blend, soundboard panels, bridge block
- build_frame_scene: carcass with notch and structural inset
- build_drawings: the whole pipeline for one scale length and string count
"""

from typing import List, Optional

from talharpa_anchors import (
    blend_radius, compute_anchors, compute_layout, side_profile_points,
)
from talharpa_annotations import dimension_through
from talharpa_config import DrawingConfig
from talharpa_dimensions import compute_dimensions
from talharpa_geometry import build_rounded_outline, polygon_outline
from talharpa_models import (
    AnchorSet, Circle, ClosedOutline, CornerSpec, DimensionSet, DrawingLayout,
    DrawingSet, Line, LinearDimension, Rect, Scene, Text,
)


# =============================================================================
# CONSTANTS
# =============================================================================

DRONE_REDUCTION_MM = 36.0       # Window narrows by one string for the drone

SIDE_CORNER_RADIUS = 3.0
SOUNDBOARD_THICKNESS = 6.0
SOUNDBOARD_CHAMFER_RATIO = 0.15  # x neck start
SIDE_BRIDGE_WIDTH = 30.0
SIDE_BRIDGE_HEIGHT = 5.0

FRAME_SIDE_WALL = 7.0
FRAME_BASE_WALL = 18.0
FRAME_NOTE = "Wall thickness 7mm, at base 18mm to support tailpiece anchoring point."


# =============================================================================
# SHARED OUTLINES
# =============================================================================

def body_outline(dims: DimensionSet, layout: DrawingLayout) -> ClosedOutline:
    """Front body trapezoid, headstock at the top, body minimum width at the base."""
    top, bottom = layout.top_y, layout.bottom_y
    return build_rounded_outline([
        CornerSpec((layout.top_right_x, top), layout.r_top, 1),
        CornerSpec((layout.bottom_right_x, bottom), layout.r_bottom, 1),
        CornerSpec((layout.bottom_left_x, bottom), layout.r_bottom, 1),
        CornerSpec((layout.top_left_x, top), layout.r_top, 1),
    ], name="body")


def window_outline(dims: DimensionSet, layout: DrawingLayout) -> ClosedOutline:
    x0, y0 = layout.window_x, layout.window_y
    x1, y1 = x0 + dims.window_width, y0 + dims.window_length
    r = layout.r_window
    return build_rounded_outline([
        CornerSpec((x1, y0), r, 1),
        CornerSpec((x1, y1), r, 1),
        CornerSpec((x0, y1), r, 1),
        CornerSpec((x0, y0), r, 1),
    ], name="window")


def drone_line(dims: DimensionSet, layout: DrawingLayout) -> Line:
    """Dashed line marking the window edge once narrowed for the drone string."""
    x = layout.window_x + dims.window_width - DRONE_REDUCTION_MM
    return Line(x, layout.window_y, x, layout.window_y + dims.window_length, role="hidden")


def tailpiece_outline(dims: DimensionSet, layout: DrawingLayout) -> ClosedOutline:
    mid = layout.top_mid_x
    top, bottom = layout.tail_top_y, layout.tail_bottom_y
    half_top = dims.tail_top_width / 2
    half_bottom = dims.tail_bottom_width / 2
    r = dims.tail_radius
    return build_rounded_outline([
        CornerSpec((mid + half_top, top), r, 1),
        CornerSpec((mid + half_bottom, bottom), r, 1),
        CornerSpec((mid - half_bottom, bottom), r, 1),
        CornerSpec((mid - half_top, top), r, 1),
    ], name="tailpiece")


def _cross_line(layout: DrawingLayout, y: float, role: str) -> Line:
    half = layout.body_width_at(y) / 2
    return Line(layout.top_mid_x - half, y, layout.top_mid_x + half, y, role=role)


# =============================================================================
# FRONT VIEW
# =============================================================================

def front_annotations(dims: DimensionSet, layout: DrawingLayout,
                      anchors: AnchorSet) -> List[LinearDimension]:
    n = dims.num_strings
    left = layout.total_margin
    top, bottom = layout.top_y, layout.bottom_y
    peg_y = anchors.peg_holes[0].y
    wx0, wy0 = layout.window_x, layout.window_y
    wx1, wy1 = wx0 + dims.window_width, wy0 + dims.window_length
    bridge_x0 = layout.top_mid_x - dims.bridge_width / 2
    tail_x0 = layout.tail_left_x
    tail_x1 = tail_x0 + dims.tail_top_width

    dims_out = [
        dimension_through((left, top), (left, bottom), (left - 45, top), "B"),
        dimension_through((left, peg_y), (left, layout.bridge_y), (left - 30, top), "A"),
        dimension_through((wx1, wy0), (wx1, wy1), (wx1 + 10, wy0), "C"),
        dimension_through((wx0, wy1), (wx1, wy1), (wx0, wy1 + 10), "D"),
    ]
    if n > 1:
        label = f"E {n - 1} PL" if n > 2 else "E"
        p0, p1 = anchors.peg_holes[0], anchors.peg_holes[1]
        dims_out.append(dimension_through(p0.as_tuple(), p1.as_tuple(),
                                          (p0.x, peg_y - 30), label))
    dims_out += [
        dimension_through((layout.top_left_x, top), (layout.top_right_x, top),
                          (layout.top_left_x, top - 25), "F"),
        dimension_through((layout.bottom_left_x, bottom), (layout.bottom_right_x, bottom),
                          (layout.bottom_left_x, bottom + 15), "I"),
        dimension_through((layout.top_right_x, top), (layout.top_right_x, top + dims.cut_out_top),
                          (layout.top_right_x + 30, top), "N"),
        dimension_through((layout.top_right_x, top), (layout.top_right_x, anchors.soundhole.y),
                          (layout.top_right_x + 40, top), "O"),
        dimension_through((bridge_x0, layout.bridge_y),
                          (bridge_x0 + dims.bridge_width, layout.bridge_y),
                          (bridge_x0, layout.bridge_y + 25), "G"),
    ]
    if n > 1:
        b0, b1 = anchors.bridge_anchors[0], anchors.bridge_anchors[1]
        dims_out.append(dimension_through(b0.as_tuple(), b1.as_tuple(),
                                          (b0.x, layout.bridge_y - 15), "H"))
    dims_out.append(dimension_through((tail_x1, layout.tail_top_y),
                                      (tail_x1, layout.tail_bottom_y),
                                      (tail_x1 + 10, layout.tail_top_y), "M"))
    if dims.tail_top_width > 0:
        dims_out.append(dimension_through((tail_x0, layout.tail_top_y),
                                          (tail_x1, layout.tail_top_y),
                                          (tail_x0, layout.tail_top_y - 5), "K"))
    if dims.tail_bottom_width > 0:
        half = dims.tail_bottom_width / 2
        dims_out.append(dimension_through((layout.top_mid_x - half, layout.tail_bottom_y),
                                          (layout.top_mid_x + half, layout.tail_bottom_y),
                                          (tail_x0, layout.tail_bottom_y + 5), "L"))
    return dims_out


def build_front_scene(dims: DimensionSet, layout: Optional[DrawingLayout] = None,
                      anchors: Optional[AnchorSet] = None) -> Scene:
    """Front elevation: outline, window, strings, bridge, tailpiece, soundhole."""
    layout = layout or compute_layout(dims)
    anchors = anchors or compute_anchors(dims, layout)
    outlines = (
        body_outline(dims, layout),
        window_outline(dims, layout),
        tailpiece_outline(dims, layout),
    )

    shapes = [drone_line(dims, layout)]
    shapes.append(Rect(layout.top_mid_x - dims.bridge_width / 2, layout.bridge_y,
                       dims.bridge_width, dims.bridge_length))
    shapes.append(Circle(anchors.soundhole.x, anchors.soundhole.y,
                         anchors.soundhole_radius, role="outline"))
    shapes.append(_cross_line(layout, layout.top_y + dims.neck_start, "hidden"))

    for peg, notch, hole in zip(anchors.peg_holes, anchors.bridge_anchors,
                                anchors.tail_holes):
        shapes.append(Line(peg.x, peg.y, notch.x, notch.y, role="string"))
        shapes.append(Line(notch.x, notch.y, hole.x, hole.y, role="string"))
    for peg in anchors.peg_holes:
        shapes.append(Circle(peg.x, peg.y, dims.peg_hole_radius))
    for hole in anchors.tail_holes:
        shapes.append(Circle(hole.x, hole.y, dims.tail_hole_radius))

    return Scene(
        name="front",
        width=layout.front_width,
        height=layout.front_height,
        outlines=outlines,
        anchors=(anchors.peg_holes + anchors.bridge_anchors +
                 anchors.tail_holes + (anchors.soundhole,)),
        shapes=tuple(shapes),
        annotations=tuple(front_annotations(dims, layout, anchors)),
    )


# =============================================================================
# SIDE VIEW
# =============================================================================

def side_outline(dims: DimensionSet, layout: DrawingLayout) -> ClosedOutline:
    """Side profile; the neck blend is the only corner bending the other way."""
    pts = side_profile_points(dims, layout)
    r = SIDE_CORNER_RADIUS
    return build_rounded_outline([
        CornerSpec(pts["B"], r, 0),
        CornerSpec(pts["C"], r, 0),
        CornerSpec(pts["D"], blend_radius(dims), 1, blend=True),
        CornerSpec(pts["E"], r, 0),
        CornerSpec(pts["F"], r, 0),
        CornerSpec(pts["A"], r, 0),
    ], name="side")


def soundboard_panels(dims: DimensionSet, layout: DrawingLayout) -> List[ClosedOutline]:
    m = layout.total_margin
    t = SOUNDBOARD_THICKNESS
    neck_y = layout.top_y + dims.neck_start
    bottom = layout.bottom_y
    left = polygon_outline([
        (m - t, neck_y), (m, neck_y), (m, bottom), (m - t, bottom),
    ], name="panel_left")

    # Right panel tapers to nothing at both ends
    x0 = m + dims.body_min_depth
    x1 = x0 + t
    chamfer = SOUNDBOARD_CHAMFER_RATIO * dims.neck_start
    right = polygon_outline([
        (x0, neck_y), (x1, neck_y + chamfer), (x1, bottom - chamfer), (x0, bottom),
    ], name="panel_right")
    return [left, right]


def side_bridge(dims: DimensionSet, layout: DrawingLayout) -> Rect:
    x = layout.total_margin + dims.body_min_depth + SOUNDBOARD_THICKNESS
    return Rect(x, layout.bridge_center_y - SIDE_BRIDGE_HEIGHT / 2,
                SIDE_BRIDGE_WIDTH, SIDE_BRIDGE_HEIGHT)


def side_annotations(dims: DimensionSet, layout: DrawingLayout) -> List[LinearDimension]:
    pts = side_profile_points(dims, layout)
    m = layout.total_margin
    top, bottom = layout.top_y, layout.bottom_y
    bridge = side_bridge(dims, layout)
    bx1 = bridge.x + bridge.w
    return [
        dimension_through((m, top), pts["E"], (m - 20, top), "P"),
        dimension_through(pts["C"], pts["B"], (pts["C"][0], top - 10), "Q"),
        dimension_through(pts["F"], pts["A"], (m, bottom + 10), "J"),
        dimension_through((bridge.x, bridge.y), (bx1, bridge.y),
                          (bridge.x, bridge.y - 10), "30-35mm"),
        dimension_through((bx1, bridge.y), (bx1, bridge.y + bridge.h),
                          (bx1 + 10, bridge.y), "5mm"),
        dimension_through((m - SOUNDBOARD_THICKNESS, bottom), (m, bottom),
                          (m, bottom + 25), "6-7mm 2 PL"),
    ]


def build_side_scene(dims: DimensionSet, layout: Optional[DrawingLayout] = None,
                     anchors: Optional[AnchorSet] = None) -> Scene:
    """Side elevation: profile, soundboard panels and bridge block."""
    layout = layout or compute_layout(dims)
    anchors = anchors or compute_anchors(dims, layout)
    outlines = (side_outline(dims, layout),) + tuple(soundboard_panels(dims, layout))
    return Scene(
        name="side",
        width=layout.side_width,
        height=layout.side_height,
        outlines=outlines,
        anchors=anchors.neck_join,
        shapes=(side_bridge(dims, layout),),
        annotations=tuple(side_annotations(dims, layout)),
    )


# =============================================================================
# FRAME VIEW
# =============================================================================

def inset_outline(dims: DimensionSet, layout: DrawingLayout) -> ClosedOutline:
    """Hollow inside the frame: 7 mm side walls, 18 mm at the base.

    The hollow starts where the neck ends; its top corners stay sharp.
    """
    top = layout.top_y + dims.neck_start
    bottom = layout.bottom_y - FRAME_BASE_WALL
    top_w = max(layout.body_width_at(top) - 2 * FRAME_SIDE_WALL, 0.0)
    bottom_w = max(dims.body_min_width - 2 * FRAME_SIDE_WALL, 0.0)
    r = max(layout.r_bottom - min(FRAME_SIDE_WALL, FRAME_BASE_WALL), 0.0)
    mid = layout.top_mid_x
    return build_rounded_outline([
        CornerSpec((mid + top_w / 2, top), 0.0, 1),
        CornerSpec((mid + bottom_w / 2, bottom), r, 1),
        CornerSpec((mid - bottom_w / 2, bottom), r, 1),
        CornerSpec((mid - top_w / 2, top), 0.0, 1),
    ], name="inset")


def frame_annotations(dims: DimensionSet, layout: DrawingLayout,
                      inset: ClosedOutline, notch: Line) -> List[LinearDimension]:
    tr, br, bl, tl = (c.point for c in inset.corners)
    wx0, wy0 = layout.window_x, layout.window_y
    wx1, wy1 = wx0 + dims.window_width, wy0 + dims.window_length
    height = br[1] - tr[1]
    return [
        dimension_through((notch.x1, layout.top_y), (notch.x1, notch.y1),
                          (notch.x1 + 10, layout.top_y),
                          f"Notch = {round(dims.cut_out_top)}mm x 3-4mm 2PL."),
        dimension_through((br[0], tr[1]), br, (br[0] + 20, tr[1]), f"{round(height)}mm"),
        dimension_through(tl, tr, (tl[0], tl[1] - 10), f"{round(tr[0] - tl[0])}mm"),
        dimension_through(bl, br, (bl[0], bl[1] + 25), f"{round(br[0] - bl[0])}mm"),
        dimension_through((wx1, wy0), (wx1, wy1), (wx1 - 20, wy0), "C"),
        dimension_through((wx0, wy1), (wx1, wy1), (wx0, wy1 - 20), "D"),
    ]


def build_frame_scene(dims: DimensionSet, layout: Optional[DrawingLayout] = None,
                      anchors: Optional[AnchorSet] = None) -> Scene:
    """Frame (carcass) view: body, window, notch and structural inset."""
    layout = layout or compute_layout(dims)
    inset = inset_outline(dims, layout)
    notch = _cross_line(layout, layout.top_y + dims.cut_out_top, "outline")
    note = Text(layout.top_mid_x, layout.bottom_y + 30, "middle", FRAME_NOTE, role="note")
    return Scene(
        name="frame",
        width=layout.front_width,
        height=layout.front_height,
        outlines=(body_outline(dims, layout), window_outline(dims, layout), inset),
        shapes=(drone_line(dims, layout), notch),
        annotations=tuple(frame_annotations(dims, layout, inset, notch)),
        notes=(note,),
    )


# =============================================================================
# PIPELINE
# =============================================================================

def build_drawings(scale_cm: float, num_strings: int,
                   config: Optional[DrawingConfig] = None) -> DrawingSet:
    """Derive dimensions once and build all three views from them."""
    dims = compute_dimensions(scale_cm, num_strings)
    layout = compute_layout(dims, config or DrawingConfig())
    anchors = compute_anchors(dims, layout)
    return DrawingSet(
        dimensions=dims,
        layout=layout,
        anchors=anchors,
        front=build_front_scene(dims, layout, anchors),
        side=build_side_scene(dims, layout, anchors),
        frame=build_frame_scene(dims, layout, anchors),
    )
