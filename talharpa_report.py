#!/usr/bin/env python3
"""
TALHARPA_REPORT.PY - Critical dimensions and hand positions

Contains:
- generate_dimension_table: keyed A-Q rows for the drawings' dimension letters
- hand_positions: single-octave stopping positions along the string
- print_dimension_report: formatted console report
"""

from typing import Dict, List

from talharpa_models import DimensionSet


# (key, name, attribute, decimals, comment)
CRITICAL_DIMENSIONS = [
    ("A", "Peg to Bridge", "scale_mm", 1, "Critical to string scale"),
    ("B", "Overall length", "overall_length", 1, "Longer = richer tone, shorter = lighter tone"),
    ("C", "Window length", "window_length", 1, "For a full octave. Reduce for traditional design"),
    ("D", "Window width", "window_width", 1, "Dotted line denotes reduced width over drone string(s)"),
    ("E", "Peg spacing", "peg_spacing", 1, "Fixed, based on image research"),
    ("F", "Headstock width", "headstock_width", 1, "Design for strings & structural needs"),
    ("G", "Bridge width", "bridge_width", 1, "Using violin/viola standards"),
    ("H", "Bridge spacing", "bridge_spacing", 1, "Gap between string centers - using violin/viola standards"),
    ("I", "Body min. Width", "body_min_width", 1, "Modify to tone - wider will be a richer sound"),
    ("J", "Body min. Depth", "body_min_depth", 1, "Modify to tone - deeper will be a richer sound"),
    ("K", "Tail top width", "tail_top_width", 0, "Width at top of tailpiece"),
    ("L", "Tail bottom width", "tail_bottom_width", 0, "Width at bottom of tailpiece"),
    ("M", "Tail length", "tail_length", 0, "Length of tailpiece - recommend thickness of 5-7mm"),
    ("N", "Headstock Thickness", "cut_out_top", 0, "Length of headstock"),
    ("O", "Soundhole Centre", "soundhole_center", 0, "Centre of hole (circa 50mm)"),
    ("P", "Neck Start", "neck_start", 0, "Neck Start Position"),
    ("Q", "Neck Thickness", "neck_thickness", 0, "Softer materials may require additional thickness"),
]


def generate_dimension_table(dims: DimensionSet) -> List[Dict]:
    """Rows keyed by the letters used on the drawings."""
    rows = []
    for key, name, attr, decimals, comment in CRITICAL_DIMENSIONS:
        value = getattr(dims, attr)
        rows.append({
            "key": key,
            "name": name,
            "value_mm": value,
            "display": f"{value:.{decimals}f}",
            "comment": comment,
        })
    return rows


def hand_positions(scale_cm: float) -> List[Dict]:
    """Stopping positions for semitones 0-12, in cm from the pegs.

    Each semitone shortens the vibrating length by a factor of 2^(1/12).
    """
    rows = []
    prev = 0.0
    for n in range(13):
        from_nut = scale_cm * (1 - 1 / 2 ** (n / 12))
        rows.append({
            "semitone": n,
            "from_nut_cm": from_nut,
            "from_prev_cm": 0.0 if n == 0 else from_nut - prev,
        })
        prev = from_nut
    return rows


def print_dimension_report(dims: DimensionSet):
    """Print critical dimensions and hand positions."""

    print("\n" + "="*60)
    print(f"CRITICAL DIMENSIONS - {dims.scale_cm:g} CM SCALE, {dims.num_strings} STRINGS")
    print("="*60)

    print(f"\n{'Key':<4} {'Dimension':<20} {'mm':>8}  Comment")
    print("-" * 60)
    for row in generate_dimension_table(dims):
        print(f"{row['key']:<4} {row['name']:<20} {row['display']:>8}  {row['comment']}")

    print("\n--- SOUNDHOLE ---")
    print(f"  Diameter: {dims.soundhole_diameter:.0f} mm")

    print("\n--- HAND POSITIONS (cm from pegs) ---")
    print(f"{'Semitone':>8} {'From nut':>10} {'From prev':>10}")
    for row in hand_positions(dims.scale_cm):
        print(f"{row['semitone']:>8} {row['from_nut_cm']:>10.2f} {row['from_prev_cm']:>10.2f}")

    print("="*60 + "\n")
