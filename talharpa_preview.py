#!/usr/bin/env python3
"""
TALHARPA_PREVIEW.PY - Quick matplotlib preview of the three views

Draws front, side and frame next to each other. Arcs are sampled with numpy
so the preview shows the same tangent blends as the SVG output.
"""

from typing import Optional

import matplotlib.pyplot as plt
from matplotlib.patches import Circle as CirclePatch, Rectangle

from talharpa_geometry import outline_polyline
from talharpa_models import Circle, DrawingSet, Line, Rect, Scene, Text


ANCHOR_TO_HA = {"start": "left", "middle": "center", "end": "right"}

ROLE_COLORS = {
    "outline": "black",
    "hidden": "black",
    "hole": "black",
    "dimension": "red",
    "note": "black",
}


def draw_scene(ax, scene: Scene, string_color: str = "#ccc", show_dimensions: bool = True):
    """Draw one scene onto a matplotlib axis (y pointing down)."""
    for outline in scene.outlines:
        xs, ys = outline_polyline(outline)
        ax.plot(xs, ys, color="black", linewidth=1)

    shapes = list(scene.shapes)
    if show_dimensions:
        for annotation in scene.annotations:
            shapes.extend(annotation.shapes())
        shapes.extend(scene.notes)

    for shape in shapes:
        color = string_color if shape.role == "string" else ROLE_COLORS.get(shape.role, "black")
        alpha = 0.5 if shape.role == "dimension" else 1.0
        if isinstance(shape, Line):
            style = "--" if shape.role == "hidden" else "-"
            ax.plot([shape.x1, shape.x2], [shape.y1, shape.y2], linestyle=style,
                    color=color, alpha=alpha,
                    linewidth=0.5 if shape.role == "dimension" else 1)
        elif isinstance(shape, Circle):
            ax.add_patch(CirclePatch((shape.cx, shape.cy), shape.r, fill=shape.role == "hole",
                                     facecolor=color,
                                     edgecolor=color, linewidth=1))
        elif isinstance(shape, Rect):
            ax.add_patch(Rectangle((shape.x, shape.y), shape.w, shape.h, fill=False,
                                   edgecolor=color, linewidth=1))
        elif isinstance(shape, Text):
            ax.text(shape.x, shape.y, shape.content, ha=ANCHOR_TO_HA.get(shape.anchor, "left"),
                    fontsize=6, color=color, alpha=alpha)

    ax.set_xlim(0, scene.width)
    ax.set_ylim(scene.height, 0)
    ax.set_aspect('equal')
    ax.set_title(scene.name.title())
    ax.axis('off')


def preview_drawings(drawings: DrawingSet, output_path: Optional[str] = None,
                     show_dimensions: bool = True):
    """Plot all three views; save to output_path or open a window."""
    d = drawings.dimensions
    widths = [s.width for s in drawings.scenes()]
    fig, axes = plt.subplots(1, 3, figsize=(14, 9),
                             gridspec_kw={"width_ratios": widths})
    for ax, scene in zip(axes, drawings.scenes()):
        draw_scene(ax, scene, drawings.layout.string_color, show_dimensions)
    fig.suptitle(f"Talharpa {d.scale_cm:g} cm scale, {d.num_strings} strings")
    fig.tight_layout()

    if output_path:
        fig.savefig(output_path, dpi=150)
        plt.close(fig)
        return output_path
    plt.show()
    return None
