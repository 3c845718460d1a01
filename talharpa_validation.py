#!/usr/bin/env python3
"""
TALHARPA_VALIDATION.PY - Consistency checks for talharpa drawings

Contains:
- ConstraintViolation: Data class for constraint violations
- validate_outline: closure, sweep direction and arc tangency of one outline
- validate_drawings: every outline plus anchors and cross-view alignment
- print_constraint_report: Print formatted validation report
"""

import math
from dataclasses import dataclass
from typing import List, Optional

from talharpa_geometry import arc_center, fillet_corner, turn_sweep_flag
from talharpa_models import ClosedOutline, DrawingSet, Rect


@dataclass
class ConstraintViolation:
    """A constraint violation found during validation."""
    constraint: str
    message: str
    severity: str = "error"  # "error" or "warning"
    view: Optional[str] = None
    actual_value: Optional[float] = None
    expected_value: Optional[float] = None
    tolerance: Optional[float] = None


def validate_outline(outline: ClosedOutline, view: str = "",
                     tolerance_mm: float = 1e-6) -> List[ConstraintViolation]:
    violations = []

    if not outline.is_closed():
        end = outline.end_point()
        violations.append(ConstraintViolation(
            constraint="outline_closure",
            message=f"{view}/{outline.name}: path ends at {end}, starts at {outline.start}",
            view=view,
        ))

    corners = outline.corners
    n = len(corners)
    for i, corner in enumerate(corners):
        prev = corners[i - 1].point
        nxt = corners[(i + 1) % n].point
        fillet = fillet_corner(prev, corner.point, nxt, corner.radius)
        if fillet is None:
            continue
        entry, exit_, radius = fillet

        expected = turn_sweep_flag(prev, corner.point, nxt)
        if corner.sweep_flag != expected:
            violations.append(ConstraintViolation(
                constraint="sweep_direction",
                message=f"{view}/{outline.name} corner {i}: sweep {corner.sweep_flag}, outline turns as {expected}",
                view=view,
                actual_value=corner.sweep_flag,
                expected_value=expected,
            ))

        # Radius to each tangent point must be perpendicular to its edge
        cx, cy = arc_center(entry, exit_, radius, corner.sweep_flag)
        for point in (entry, exit_):
            ex, ey = corner.point[0] - point[0], corner.point[1] - point[1]
            rx, ry = point[0] - cx, point[1] - cy
            edge_len = math.hypot(ex, ey)
            if edge_len == 0:
                continue
            off = abs(ex * rx + ey * ry) / edge_len
            if off > tolerance_mm:
                violations.append(ConstraintViolation(
                    constraint="arc_tangency",
                    message=f"{view}/{outline.name} corner {i}: arc not tangent at {point} ({off:.4f}mm)",
                    view=view,
                    actual_value=off,
                    expected_value=0.0,
                    tolerance=tolerance_mm,
                ))
    return violations


def _rect_center_y(rect: Rect) -> float:
    return rect.y + rect.h / 2


def validate_drawings(drawings: DrawingSet, tolerance_mm: float = 1e-6) -> List[ConstraintViolation]:
    """
    Validate drawing consistency:
    1. Every outline closes, bends the way it turns, and is tangent at each arc
    2. The side profile has exactly one blend joint, bending opposite the rest
    3. Anchor rows hold one point per string, centred on the body centreline
    4. All views share the same top and base, and the bridge lines up
    5. Soundhole and tail holes sit inside the body and tailpiece

    Returns list of violations (empty if all constraints pass).
    """
    violations = []
    d = drawings.dimensions
    layout = drawings.layout
    anchors = drawings.anchors

    # ---------------------------------------------------------------------
    # 1. OUTLINES
    # ---------------------------------------------------------------------
    for scene in drawings.scenes():
        for outline in scene.outlines:
            violations.extend(validate_outline(outline, scene.name, tolerance_mm))

    # ---------------------------------------------------------------------
    # 2. BLEND JOINT
    # ---------------------------------------------------------------------
    side = drawings.side.outline("side")
    blends = [a for a in side.arcs() if a.blend]
    others = {a.sweep_flag for a in side.arcs() if not a.blend}
    if len(blends) != 1:
        violations.append(ConstraintViolation(
            constraint="blend_joint",
            message=f"Side profile has {len(blends)} blend joints, expected 1",
            view="side",
        ))
    elif blends[0].sweep_flag in others:
        violations.append(ConstraintViolation(
            constraint="blend_joint",
            message="Blend joint bends the same way as the fixed corners",
            view="side",
        ))

    # ---------------------------------------------------------------------
    # 3. ANCHOR ROWS
    # ---------------------------------------------------------------------
    for row_name, row in (("peg_holes", anchors.peg_holes),
                          ("bridge_anchors", anchors.bridge_anchors),
                          ("tail_holes", anchors.tail_holes)):
        if len(row) != d.num_strings:
            violations.append(ConstraintViolation(
                constraint="anchor_count",
                message=f"{row_name}: {len(row)} points for {d.num_strings} strings",
                actual_value=len(row),
                expected_value=d.num_strings,
            ))
            continue
        mean_x = sum(a.x for a in row) / len(row)
        if abs(mean_x - layout.top_mid_x) > tolerance_mm:
            violations.append(ConstraintViolation(
                constraint="anchor_symmetry",
                message=f"{row_name} centred at {mean_x:.3f}, centreline {layout.top_mid_x:.3f}",
                actual_value=mean_x,
                expected_value=layout.top_mid_x,
                tolerance=tolerance_mm,
            ))

    # ---------------------------------------------------------------------
    # 4. CROSS-VIEW ALIGNMENT
    # ---------------------------------------------------------------------
    body_outlines = {
        "front": drawings.front.outline("body"),
        "side": side,
        "frame": drawings.frame.outline("body"),
    }
    for view, outline in body_outlines.items():
        _, min_y, _, max_y = outline.bounds()
        for label, actual, expected in (("top", min_y, layout.top_y),
                                        ("base", max_y, layout.bottom_y)):
            if abs(actual - expected) > tolerance_mm:
                violations.append(ConstraintViolation(
                    constraint="view_alignment",
                    message=f"{view} body {label} at {actual:.3f}, shared frame {expected:.3f}",
                    view=view,
                    actual_value=actual,
                    expected_value=expected,
                    tolerance=tolerance_mm,
                ))

    front_bridge = [s for s in drawings.front.shapes if isinstance(s, Rect)]
    side_bridge = [s for s in drawings.side.shapes if isinstance(s, Rect)]
    if front_bridge and side_bridge:
        fy = _rect_center_y(front_bridge[0])
        sy = _rect_center_y(side_bridge[0])
        if abs(fy - sy) > tolerance_mm:
            violations.append(ConstraintViolation(
                constraint="bridge_alignment",
                message=f"Bridge centre at {fy:.3f} in front view, {sy:.3f} in side view",
                actual_value=sy,
                expected_value=fy,
                tolerance=tolerance_mm,
            ))

    # ---------------------------------------------------------------------
    # 5. HOLES INSIDE THEIR PARTS
    # ---------------------------------------------------------------------
    sh = anchors.soundhole
    half_w = layout.body_width_at(sh.y) / 2
    if abs(sh.x - layout.top_mid_x) + anchors.soundhole_radius > half_w:
        violations.append(ConstraintViolation(
            constraint="soundhole_fit",
            message=f"Soundhole (d={d.soundhole_diameter:.0f}mm) wider than the body at y={sh.y:.1f}",
            severity="warning",
            view="front",
        ))
    if not layout.top_y + d.neck_start < sh.y < layout.bottom_y:
        violations.append(ConstraintViolation(
            constraint="soundhole_fit",
            message=f"Soundhole centre {sh.y:.1f} outside the body below the neck",
            view="front",
            actual_value=sh.y,
        ))

    tail_x0 = layout.tail_left_x
    tail_x1 = tail_x0 + d.tail_top_width
    for hole in anchors.tail_holes:
        inside_x = tail_x0 - tolerance_mm <= hole.x <= tail_x1 + tolerance_mm
        inside_y = layout.tail_top_y <= hole.y <= layout.tail_bottom_y
        if not (inside_x and inside_y):
            violations.append(ConstraintViolation(
                constraint="tail_hole_fit",
                message=f"{hole.name} at ({hole.x:.1f}, {hole.y:.1f}) outside the tailpiece",
                view="front",
            ))

    return violations


def print_constraint_report(violations: List[ConstraintViolation], drawings: DrawingSet):
    """Print a formatted constraint validation report."""

    print("\n" + "="*60)
    print("DRAWING VALIDATION REPORT")
    print("="*60)

    d = drawings.dimensions
    print(f"\nDesign Parameters:")
    print(f"  Scale length: {d.scale_cm:g} cm ({d.scale_mm:.1f} mm)")
    print(f"  Strings: {d.num_strings}")
    print(f"  Views: {', '.join(s.name for s in drawings.scenes())}")

    if not violations:
        print("\n✓ All constraints PASSED")
        print("="*60 + "\n")
        return

    # Group by constraint type
    by_constraint = {}
    for v in violations:
        by_constraint.setdefault(v.constraint, []).append(v)

    errors = [v for v in violations if v.severity == "error"]
    warnings = [v for v in violations if v.severity == "warning"]

    print(f"\n✗ Found {len(errors)} errors, {len(warnings)} warnings")

    for constraint, vlist in by_constraint.items():
        print(f"\n--- {constraint.upper().replace('_', ' ')} ---")
        for v in vlist[:5]:  # Limit to first 5 per category
            marker = "✗" if v.severity == "error" else "⚠"
            print(f"  {marker} {v.message}")
        if len(vlist) > 5:
            print(f"  ... and {len(vlist) - 5} more")

    print("\n" + "="*60 + "\n")
