#!/usr/bin/env python3
"""
TALHARPA.PY - Talharpa drawing generator

Derives the body dimensions for a scale length and string count, prints the
critical-dimension report, validates the drawings and writes the Front, Side
and Frame SVGs.

Usage:
    python talharpa.py --scale 40 --strings 3 --output-dir drawings
    python talharpa.py --scale 56 --strings 4 --report-only
"""

import argparse

from talharpa_config import load_config, save_config
from talharpa_models import InvalidInput
from talharpa_preview import preview_drawings
from talharpa_renderer import render_drawings
from talharpa_report import print_dimension_report
from talharpa_validation import print_constraint_report, validate_drawings
from talharpa_views import build_drawings


def main(argv=None):
    parser = argparse.ArgumentParser(description='Generate talharpa drawings and dimensions')
    parser.add_argument('--scale', type=float, default=40.0,
                        help='Scale length in cm, 26-70 (default: 40)')
    parser.add_argument('--strings', type=int, default=3,
                        help='Number of strings (default: 3)')
    parser.add_argument('--config', default=None,
                        help='Path to drawing config JSON (default: talharpa_config.json if present)')
    parser.add_argument('--output-dir', default='.',
                        help='Directory for the SVG files (default: current directory)')
    parser.add_argument('--prefix', default='talharpa',
                        help='File name prefix for the SVG files (default: talharpa)')
    parser.add_argument('--margin', type=float, default=None,
                        help='Drawing margin in mm (default: 10)')
    parser.add_argument('--extra-margin', type=float, default=None,
                        help='Extra margin for dimension lines in mm (default: 50)')
    parser.add_argument('--width', type=int, default=None,
                        help='SVG pixel width (default: 700)')
    parser.add_argument('--height', type=int, default=None,
                        help='SVG pixel height (default: 800)')
    parser.add_argument('--string-color', default=None,
                        help='Stroke colour for strings (default: #ccc)')
    parser.add_argument('--report-only', action='store_true',
                        help='Only print the dimension report, do not write SVGs')
    parser.add_argument('--skip-validation', action='store_true',
                        help='Skip drawing validation')
    parser.add_argument('--preview', default=None,
                        help='Also save a matplotlib preview PNG to this path')
    parser.add_argument('--save-config', default=None,
                        help='Write the effective drawing config to this JSON path')

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config).replace(
            drawing_margin=args.margin,
            extra_margin=args.extra_margin,
            pixel_width=args.width,
            pixel_height=args.height,
            string_color=args.string_color,
        )
        drawings = build_drawings(args.scale, args.strings, config)
    except InvalidInput as e:
        parser.error(str(e))

    d = drawings.dimensions
    print(f"Talharpa: {d.scale_cm:g} cm scale, {d.num_strings} strings")
    print(f"Overall length: {d.overall_length:.1f} mm, body depth: {d.body_min_depth:.1f} mm")

    print_dimension_report(d)

    if args.save_config:
        save_config(config, args.save_config)
        print(f"Saved config to {args.save_config}")

    if not args.skip_validation:
        violations = validate_drawings(drawings)
        print_constraint_report(violations, drawings)
        errors = [v for v in violations if v.severity == "error"]
        if errors:
            print(f"WARNING: {len(errors)} constraint errors found")

    if args.report_only:
        return 0

    paths = render_drawings(drawings, args.output_dir, args.prefix)
    for path in paths:
        print(f"Saved SVG to {path}")

    if args.preview:
        preview_drawings(drawings, args.preview)
        print(f"Saved preview to {args.preview}")

    return 0


if __name__ == '__main__':
    raise SystemExit(main())
