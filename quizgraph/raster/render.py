from __future__ import annotations

import logging

import numpy as np

from quizgraph.raster.canvas import fill_rect, new_canvas
from quizgraph.raster.draw_lines import draw_polyline, draw_segment
from quizgraph.raster.draw_markers import draw_circle, draw_cross
from quizgraph.raster.draw_text import draw_text
from quizgraph.raster.fill import fill_polygon
from quizgraph.scene import PlotScene, SceneMarker, ScenePolygon, ScenePolyline, SceneRect, SceneSegment, SceneText


LOGGER = logging.getLogger(__name__)


def rasterize_scene(scene: PlotScene, *, background: tuple[int, int, int, int] = (0, 0, 0, 0)) -> np.ndarray:
    """Paint a scene into a new (height, width, 4) uint8 RGBA array."""
    canvas = new_canvas(scene.width, scene.height, background)
    for item in scene.items:
        if isinstance(item, SceneRect):
            fill_rect(canvas, item.x, item.y, item.width, item.height, item.fill)
        elif isinstance(item, SceneSegment):
            draw_segment(canvas, item.x1, item.y1, item.x2, item.y2, item.color, item.width, item.dash)
        elif isinstance(item, ScenePolyline):
            draw_polyline(canvas, item.points, item.color, item.width, item.dash)
        elif isinstance(item, ScenePolygon):
            fill_polygon(canvas, item.points, item.fill)
        elif isinstance(item, SceneMarker):
            if item.shape == "cross":
                draw_cross(canvas, item.x, item.y, item.size, item.color, item.stroke_width or 1.0)
            else:
                draw_circle(canvas, item.x, item.y, item.size, item.color, stroke=item.stroke, stroke_width=item.stroke_width)
        elif isinstance(item, SceneText):
            draw_text(
                canvas,
                item.x,
                item.y,
                item.text,
                item.color,
                font_px=item.font_px,
                anchor=item.anchor,
                rotate_deg=item.rotate_deg,
                bold=item.bold,
            )
        else:
            raise TypeError(f"unsupported scene item: {type(item).__name__}")
    LOGGER.debug("rasterized %d scene item(s) at %dx%d", len(scene.items), scene.width, scene.height)
    return canvas
