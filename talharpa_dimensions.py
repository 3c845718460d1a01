#!/usr/bin/env python3
"""
TALHARPA_DIMENSIONS.PY - Derive talharpa body dimensions

Every structural dimension follows from the scale length (cm) and the
number of strings through a fixed chain of empirical rules. Breakpoints are
inclusive exactly as written below; the soundhole rule keeps its step at a
350 mm scale.

Contains:
- compute_dimensions: validated entry point returning a DimensionSet
- calc_* helpers: the individual piecewise rules
"""

import math
from typing import Tuple

from talharpa_models import DimensionSet, InvalidInput


# =============================================================================
# CONSTANTS
# =============================================================================

MIN_SCALE_CM = 26.0
MAX_SCALE_CM = 70.0

CUT_OUT_TOP_MM = 35.0       # Headstock thickness above the window
PEG_SPACING_MM = 36.0       # Centre to centre, one finger width per string
BRIDGE_END_CLEARANCE_MM = 24.0
HEADSTOCK_EXTRA_MM = 50.0
TAIL_RADIUS_MM = 4.0
BRIDGE_LENGTH_MM = 5.0
PEG_HOLE_RADIUS_MM = 3.0
TAIL_HOLE_RADIUS_MM = 3.0

SOUNDHOLE_BREAK_MM = 350.0
THICK_NECK_ABOVE_MM = 450.0


def _lerp(x: float, x0: float, x1: float, y0: float, y1: float) -> float:
    return y0 + (y1 - y0) * (x - x0) / (x1 - x0)


# =============================================================================
# PIECEWISE RULES
# =============================================================================

def calc_overall_length(scale_cm: float) -> float:
    """Overall body length; the length/scale ratio eases from 1.66 to 1.43."""
    scale_mm = scale_cm * 10
    if scale_cm <= 40:
        return scale_mm * 1.66
    if scale_cm >= 56:
        return scale_mm * 1.43
    return scale_mm * _lerp(scale_cm, 40, 56, 1.66, 1.43)


def calc_body_min_width(scale_cm: float) -> float:
    if scale_cm <= 32:
        return 160.0
    if scale_cm >= 56:
        return 210.0
    if scale_cm <= 37:
        return _lerp(scale_cm, 32, 37, 160.0, 190.0)
    return _lerp(scale_cm, 37, 56, 190.0, 210.0)


def calc_bridge_width(scale_cm: float) -> float:
    if scale_cm <= 30:
        return 60.0
    if scale_cm >= 56:
        return 70.0
    return _lerp(scale_cm, 30, 56, 60.0, 70.0)


def calc_bridge_spacing(bridge_width: float, num_strings: int) -> float:
    """Gap between adjacent string notches on the bridge (0 for one string)."""
    usable_span = max(bridge_width - BRIDGE_END_CLEARANCE_MM, 0.0)
    if num_strings <= 1:
        return 0.0
    return max(usable_span / (num_strings - 1), 0.0)


def calc_body_min_depth(scale_mm: float) -> float:
    return min(max(0.12 * scale_mm, 45.0), 70.0)


def calc_neck_thickness(scale_mm: float) -> float:
    return 35.0 if scale_mm > THICK_NECK_ABOVE_MM else 25.0


def calc_soundhole(scale_mm: float, window_length: float,
                   cut_out_top: float = CUT_OUT_TOP_MM) -> Tuple[float, float]:
    """Return (soundhole centre from the top, soundhole diameter)."""
    if scale_mm >= SOUNDHOLE_BREAK_MM:
        k, diameter = 1.85, 50.0
    else:
        k, diameter = 1.9, 30.0
    center = (scale_mm - window_length - cut_out_top / 2) / k + window_length + cut_out_top
    return center, diameter


def calc_neck_start(soundhole_center: float, window_length: float,
                    cut_out_top: float = CUT_OUT_TOP_MM) -> float:
    """Neck ends a third of the way from the window bottom to the soundhole."""
    window_bottom = window_length + cut_out_top
    return (soundhole_center - window_bottom) / 3 + window_bottom


# =============================================================================
# ENTRY POINT
# =============================================================================

def validate_inputs(scale_cm, num_strings):
    """Raise InvalidInput unless scale_cm is in range and num_strings >= 1."""
    if isinstance(scale_cm, bool) or not isinstance(scale_cm, (int, float)):
        raise InvalidInput(f"Scale length must be a number, got {scale_cm!r}")
    if not math.isfinite(scale_cm):
        raise InvalidInput(f"Scale length must be finite, got {scale_cm}")
    if not MIN_SCALE_CM <= scale_cm <= MAX_SCALE_CM:
        raise InvalidInput(
            f"Scale length {scale_cm} cm outside [{MIN_SCALE_CM:g}, {MAX_SCALE_CM:g}] cm")
    if isinstance(num_strings, bool) or not isinstance(num_strings, int):
        raise InvalidInput(f"Number of strings must be an integer, got {num_strings!r}")
    if num_strings < 1:
        raise InvalidInput(f"Number of strings must be at least 1, got {num_strings}")


def compute_dimensions(scale_cm: float, num_strings: int) -> DimensionSet:
    """Derive every body dimension from the scale length and string count.

    Args:
        scale_cm: Vibrating string length in cm, 26 to 70 inclusive
        num_strings: Number of strings, at least 1

    Returns:
        DimensionSet with all lengths in mm

    Raises:
        InvalidInput: before any computation when an input is out of range
    """
    validate_inputs(scale_cm, num_strings)

    scale_mm = scale_cm * 10
    overall_length = calc_overall_length(scale_cm)
    bridge_width = calc_bridge_width(scale_cm)
    gap = calc_bridge_spacing(bridge_width, num_strings)

    window_length = 0.5 * scale_mm + 20
    window_width = PEG_SPACING_MM * num_strings
    soundhole_center, soundhole_diameter = calc_soundhole(scale_mm, window_length)

    tail_top_width = gap * num_strings

    return DimensionSet(
        scale_cm=scale_cm,
        scale_mm=scale_mm,
        num_strings=num_strings,
        overall_length=overall_length,
        window_length=window_length,
        window_width=window_width,
        peg_spacing=PEG_SPACING_MM,
        headstock_width=window_width + HEADSTOCK_EXTRA_MM,
        bridge_width=bridge_width,
        bridge_spacing=gap,
        body_min_width=calc_body_min_width(scale_cm),
        body_min_depth=calc_body_min_depth(scale_mm),
        cut_out_top=CUT_OUT_TOP_MM,
        soundhole_center=soundhole_center,
        soundhole_diameter=soundhole_diameter,
        neck_start=calc_neck_start(soundhole_center, window_length),
        neck_thickness=calc_neck_thickness(scale_mm),
        tail_top_width=tail_top_width,
        tail_bottom_width=tail_top_width * 0.7,
        tail_length=0.4 * max(0.0, overall_length - scale_mm),
        tail_radius=TAIL_RADIUS_MM,
        bridge_length=BRIDGE_LENGTH_MM,
        peg_start=CUT_OUT_TOP_MM / 2,
        peg_hole_radius=PEG_HOLE_RADIUS_MM,
        tail_hole_radius=TAIL_HOLE_RADIUS_MM,
    )
