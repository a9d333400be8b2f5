from __future__ import annotations

import numpy as np

from quizgraph.raster.canvas import blend_region
from quizgraph.raster.draw_lines import draw_segment
from quizgraph.style import RGBA


def draw_circle(
    dst: np.ndarray,
    cx: float,
    cy: float,
    radius: float,
    color: RGBA,
    *,
    stroke: RGBA | None = None,
    stroke_width: float = 0.0,
) -> None:
    outer = radius + (stroke_width / 2.0 if stroke is not None else 0.0)
    x0 = max(0, int(np.floor(cx - outer)))
    y0 = max(0, int(np.floor(cy - outer)))
    x1 = min(dst.shape[1], int(np.ceil(cx + outer)) + 1)
    y1 = min(dst.shape[0], int(np.ceil(cy + outer)) + 1)
    if x1 <= x0 or y1 <= y0:
        return
    yy, xx = np.mgrid[y0:y1, x0:x1]
    dist = np.hypot(xx - cx, yy - cy)
    if stroke is not None and stroke_width > 0:
        ring = (dist <= outer) & (dist > radius - stroke_width / 2.0)
        _blend_mask(dst, yy, xx, ring, stroke)
        inner = dist <= radius - stroke_width / 2.0
    else:
        inner = dist <= radius
    _blend_mask(dst, yy, xx, inner, color)


def draw_cross(dst: np.ndarray, cx: float, cy: float, half_size: float, color: RGBA, width: float = 1.0) -> None:
    draw_segment(dst, cx - half_size, cy - half_size, cx + half_size, cy + half_size, color, width)
    draw_segment(dst, cx + half_size, cy - half_size, cx - half_size, cy + half_size, color, width)


def _blend_mask(dst: np.ndarray, yy: np.ndarray, xx: np.ndarray, mask: np.ndarray, color: RGBA) -> None:
    if not np.any(mask):
        return
    blend_region(dst, yy[mask], xx[mask], color)
