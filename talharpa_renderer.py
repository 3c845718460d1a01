#!/usr/bin/env python3
"""
TALHARPA_RENDERER.PY - SVG rendering for talharpa drawings

Contains:
- SceneRenderer: renders one Scene to SVG using svgwrite
- render_drawings: writes the front, side and frame SVGs for a DrawingSet
"""

import os
from typing import Dict, List

import svgwrite

from talharpa_models import Circle, DrawingSet, Line, Rect, Scene, Text, fmt


class SceneRenderer:
    """Renders a Scene to SVG using svgwrite."""

    DIMENSION_COLOR = "red"
    DIMENSION_OPACITY = 0.5
    FONT_SIZE = "9px"

    # Stroke styles by primitive role
    ROLE_STYLES = {
        "outline": {"stroke": "black", "stroke_width": 1, "fill": "none"},
        "hidden": {"stroke": "black", "stroke_width": 1, "fill": "none",
                   "stroke_dasharray": "4,4"},
        "hole": {"stroke": "black", "stroke_width": 1, "fill": "black"},
        "dimension": {"stroke": DIMENSION_COLOR, "stroke_width": 0.5,
                      "opacity": DIMENSION_OPACITY},
    }

    def __init__(self, scene: Scene, pixel_width: int = 700, pixel_height: int = 800,
                 string_color: str = "#ccc"):
        self.scene = scene
        self.pixel_width = pixel_width
        self.pixel_height = pixel_height
        self.string_color = string_color

    def _style(self, role: str) -> Dict:
        if role == "string":
            return {"stroke": self.string_color, "stroke_width": 1}
        return dict(self.ROLE_STYLES.get(role, self.ROLE_STYLES["outline"]))

    def _text_style(self, role: str) -> Dict:
        if role == "note":
            return {"fill": "black"}
        return {"fill": self.DIMENSION_COLOR, "opacity": self.DIMENSION_OPACITY}

    def build(self, output_path: str = "scene.svg") -> svgwrite.Drawing:
        """Build the svgwrite Drawing for the scene."""
        scene = self.scene
        dwg = svgwrite.Drawing(output_path,
                               size=(f"{self.pixel_width}px", f"{self.pixel_height}px"),
                               viewBox=f"0 0 {fmt(scene.width)} {fmt(scene.height)}",
                               debug=False)

        # White background
        dwg.add(dwg.rect(insert=(0, 0), size=(scene.width, scene.height), fill="white"))

        body = dwg.g(id=f"{scene.name}-geometry")
        for outline in scene.outlines:
            body.add(dwg.path(d=outline.path_data(), id=f"{scene.name}-{outline.name}",
                              **self._style("outline")))
        for shape in scene.shapes:
            body.add(self._element(dwg, shape))
        dwg.add(body)

        dims = dwg.g(id=f"{scene.name}-dimensions")
        for annotation in scene.annotations:
            for shape in annotation.shapes():
                dims.add(self._element(dwg, shape))
        for note in scene.notes:
            dims.add(self._element(dwg, note))
        dwg.add(dims)

        return dwg

    def _element(self, dwg: svgwrite.Drawing, shape):
        if isinstance(shape, Line):
            return dwg.line(start=(shape.x1, shape.y1), end=(shape.x2, shape.y2),
                            **self._style(shape.role))
        if isinstance(shape, Circle):
            return dwg.circle(center=(shape.cx, shape.cy), r=shape.r,
                              **self._style(shape.role))
        if isinstance(shape, Rect):
            return dwg.rect(insert=(shape.x, shape.y), size=(shape.w, shape.h),
                            rx=shape.rx, ry=shape.ry, **self._style(shape.role))
        if isinstance(shape, Text):
            return dwg.text(shape.content, insert=(shape.x, shape.y),
                            text_anchor=shape.anchor, font_size=self.FONT_SIZE,
                            font_family="Arial", **self._text_style(shape.role))
        raise TypeError(f"Cannot render {shape!r}")

    def render(self, output_path: str):
        """Render the scene to an SVG file."""
        dwg = self.build(output_path)
        dwg.save()
        return output_path

    def to_string(self) -> str:
        return self.build().tostring()


def render_drawings(drawings: DrawingSet, output_dir: str,
                    prefix: str = "talharpa") -> List[str]:
    """Write one SVG per view and return the file paths."""
    os.makedirs(output_dir, exist_ok=True)
    layout = drawings.layout
    paths = []
    for scene in drawings.scenes():
        path = os.path.join(output_dir, f"{prefix}_{scene.name}.svg")
        renderer = SceneRenderer(scene, layout.pixel_width, layout.pixel_height,
                                 layout.string_color)
        paths.append(renderer.render(path))
    return paths
