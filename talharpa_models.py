#!/usr/bin/env python3
"""
TALHARPA_MODELS.PY - Data classes for talharpa drawings

Contains all the data structures shared by the dimension deriver and the
three drawing views:
- DimensionSet: every derived body dimension (mm)
- CornerSpec, LineTo, ArcTo, ClosedOutline: rounded outline geometry
- AnchorPoint, AnchorSet, DrawingLayout: placement of holes and features
- Circle, Line, Rect, Text, LinearDimension: drawing primitives
- Scene, DrawingSet: assembled views
- InvalidInput, GeometryError
"""

from dataclasses import dataclass
from typing import List, Tuple, Optional, Union


Point = Tuple[float, float]


# =============================================================================
# ERRORS
# =============================================================================

class InvalidInput(ValueError):
    """Raised when a scale length, string count or config value is out of range."""


class GeometryError(ValueError):
    """Raised when outline or annotation geometry is requested in an impossible form."""


def fmt(value: float) -> str:
    """Format a coordinate for path data and reports."""
    text = f"{value:.2f}"
    if text == "-0.00":
        return "0.00"
    return text


# =============================================================================
# DIMENSIONS
# =============================================================================

@dataclass(frozen=True)
class DimensionSet:
    """All derived talharpa dimensions in mm, computed once per request."""
    scale_cm: float
    scale_mm: float
    num_strings: int
    overall_length: float
    window_length: float
    window_width: float
    peg_spacing: float
    headstock_width: float
    bridge_width: float
    bridge_spacing: float
    body_min_width: float
    body_min_depth: float
    cut_out_top: float
    soundhole_center: float
    soundhole_diameter: float
    neck_start: float
    neck_thickness: float
    tail_top_width: float
    tail_bottom_width: float
    tail_length: float
    tail_radius: float = 4.0
    bridge_length: float = 5.0
    peg_start: float = 17.5
    peg_hole_radius: float = 3.0
    tail_hole_radius: float = 3.0

    def as_dict(self) -> dict:
        return {name: getattr(self, name) for name in self.__dataclass_fields__}


# =============================================================================
# OUTLINE GEOMETRY
# =============================================================================

@dataclass(frozen=True)
class CornerSpec:
    """An ideal polygon vertex to be rounded.

    sweep_flag follows SVG: 1 bends the arc clockwise on screen (y down).
    A blend corner joins two body sections of different thickness.
    """
    point: Point
    radius: float
    sweep_flag: int = 1
    blend: bool = False


@dataclass(frozen=True)
class LineTo:
    to: Point

    def command(self) -> str:
        return f"L {fmt(self.to[0])},{fmt(self.to[1])}"


@dataclass(frozen=True)
class ArcTo:
    radius: float
    sweep_flag: int
    to: Point
    start: Point
    blend: bool = False

    def command(self) -> str:
        r = fmt(self.radius)
        return f"A {r} {r} 0 0 {self.sweep_flag} {fmt(self.to[0])},{fmt(self.to[1])}"


PathSegment = Union[LineTo, ArcTo]


@dataclass(frozen=True)
class ClosedOutline:
    """A closed path of straight runs and corner arcs."""
    name: str
    start: Point
    segments: Tuple[PathSegment, ...]
    corners: Tuple[CornerSpec, ...] = ()

    def path_data(self) -> str:
        parts = [f"M {fmt(self.start[0])},{fmt(self.start[1])}"]
        parts.extend(seg.command() for seg in self.segments)
        parts.append("Z")
        return " ".join(parts)

    def end_point(self) -> Point:
        if not self.segments:
            return self.start
        return self.segments[-1].to

    def is_closed(self) -> bool:
        return self.end_point() == self.start

    def arcs(self) -> List[ArcTo]:
        return [seg for seg in self.segments if isinstance(seg, ArcTo)]

    def points(self) -> List[Point]:
        """Every emitted point in order, starting with the move-to."""
        return [self.start] + [seg.to for seg in self.segments]

    def bounds(self) -> Tuple[float, float, float, float]:
        """(min_x, min_y, max_x, max_y) of the ideal corners."""
        pts = [c.point for c in self.corners] or self.points()
        xs = [p[0] for p in pts]
        ys = [p[1] for p in pts]
        return min(xs), min(ys), max(xs), max(ys)


# =============================================================================
# ANCHORS AND LAYOUT
# =============================================================================

@dataclass(frozen=True)
class AnchorPoint:
    """A named hole or attachment point in drawing coordinates."""
    name: str
    x: float
    y: float

    def as_tuple(self) -> Point:
        return (self.x, self.y)


@dataclass(frozen=True)
class AnchorSet:
    peg_holes: Tuple[AnchorPoint, ...]
    bridge_anchors: Tuple[AnchorPoint, ...]
    tail_holes: Tuple[AnchorPoint, ...]
    soundhole: AnchorPoint
    soundhole_radius: float
    neck_join: Tuple[AnchorPoint, AnchorPoint]

    def all_points(self) -> List[AnchorPoint]:
        return (list(self.peg_holes) + list(self.bridge_anchors) +
                list(self.tail_holes) + [self.soundhole] + list(self.neck_join))


@dataclass(frozen=True)
class DrawingLayout:
    """Placement frame shared by the Front, Side and Frame views.

    Every view uses the same origin offset (total_margin) so that a
    feature at a given y in one view sits at the same y in the others.
    """
    total_margin: float
    extra_margin: float
    top_y: float
    bottom_y: float
    top_mid_x: float
    max_body_width: float
    top_left_x: float
    top_right_x: float
    bottom_left_x: float
    bottom_right_x: float
    r_top: float
    r_bottom: float
    r_window: float
    window_x: float
    window_y: float
    bridge_center_y: float
    bridge_y: float
    tail_top_y: float
    tail_bottom_y: float
    tail_left_x: float
    front_width: float
    front_height: float
    side_width: float
    side_height: float
    pixel_width: int = 700
    pixel_height: int = 800
    string_color: str = "#ccc"

    def body_width_at(self, y: float) -> float:
        """Body width of the front trapezoid at drawing height y."""
        span = self.bottom_y - self.top_y
        if span <= 0:
            return self.top_right_x - self.top_left_x
        t = (y - self.top_y) / span
        top_w = self.top_right_x - self.top_left_x
        bottom_w = self.bottom_right_x - self.bottom_left_x
        return top_w + (bottom_w - top_w) * t


# =============================================================================
# DRAWING PRIMITIVES
# =============================================================================

@dataclass(frozen=True)
class Circle:
    cx: float
    cy: float
    r: float
    role: str = "hole"


@dataclass(frozen=True)
class Line:
    x1: float
    y1: float
    x2: float
    y2: float
    role: str = "outline"

    def length(self) -> float:
        return ((self.x2 - self.x1) ** 2 + (self.y2 - self.y1) ** 2) ** 0.5


@dataclass(frozen=True)
class Rect:
    x: float
    y: float
    w: float
    h: float
    rx: float = 0.0
    ry: float = 0.0
    role: str = "outline"


@dataclass(frozen=True)
class Text:
    x: float
    y: float
    anchor: str
    content: str
    role: str = "dimension"


Shape = Union[Circle, Line, Rect, Text]


@dataclass(frozen=True)
class LinearDimension:
    """Dimension line, two extension lines and a label for one measurement."""
    dimension_line: Line
    extension_line1: Line
    extension_line2: Line
    text_label: Text

    def shapes(self) -> List[Shape]:
        return [self.extension_line1, self.extension_line2,
                self.dimension_line, self.text_label]


# =============================================================================
# SCENES
# =============================================================================

@dataclass(frozen=True)
class Scene:
    """One assembled view, ready for a renderer."""
    name: str
    width: float
    height: float
    outlines: Tuple[ClosedOutline, ...]
    anchors: Tuple[AnchorPoint, ...] = ()
    shapes: Tuple[Shape, ...] = ()
    annotations: Tuple[LinearDimension, ...] = ()
    notes: Tuple[Text, ...] = ()

    def outline(self, name: str) -> ClosedOutline:
        for o in self.outlines:
            if o.name == name:
                return o
        raise KeyError(name)

    def annotation(self, label_prefix: str) -> Optional[LinearDimension]:
        for a in self.annotations:
            if a.text_label.content.startswith(label_prefix):
                return a
        return None

    def primitives(self) -> List[str]:
        """Ordered primitive list in the canonical drawing grammar."""
        items = []
        for o in self.outlines:
            items.append(f"path d=\"{o.path_data()}\"")
        for s in self.shapes:
            items.append(describe_shape(s))
        for a in self.annotations:
            items.extend(describe_shape(s) for s in a.shapes())
        for t in self.notes:
            items.append(describe_shape(t))
        return items


def describe_shape(shape: Shape) -> str:
    if isinstance(shape, Circle):
        return f"circle cx={fmt(shape.cx)} cy={fmt(shape.cy)} r={fmt(shape.r)}"
    if isinstance(shape, Line):
        return (f"line x1={fmt(shape.x1)} y1={fmt(shape.y1)} "
                f"x2={fmt(shape.x2)} y2={fmt(shape.y2)}")
    if isinstance(shape, Rect):
        return (f"rect x={fmt(shape.x)} y={fmt(shape.y)} w={fmt(shape.w)} "
                f"h={fmt(shape.h)} rx={fmt(shape.rx)} ry={fmt(shape.ry)}")
    if isinstance(shape, Text):
        return f"text x={fmt(shape.x)} y={fmt(shape.y)} anchor={shape.anchor} \"{shape.content}\""
    raise TypeError(f"Unknown shape: {shape!r}")


@dataclass(frozen=True)
class DrawingSet:
    """Dimensions plus the three views built from them."""
    dimensions: DimensionSet
    layout: DrawingLayout
    anchors: AnchorSet
    front: Scene
    side: Scene
    frame: Scene

    def scenes(self) -> List[Scene]:
        return [self.front, self.side, self.frame]
