from __future__ import annotations

import numpy as np

from quizgraph.style import RGBA


def new_canvas(width: int, height: int, color: RGBA = (255, 255, 255, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    canvas = np.empty((height, width, 4), dtype=np.uint8)
    canvas[:, :] = np.asarray(color, dtype=np.uint8)
    return canvas


def blend_region(dst: np.ndarray, ys: np.ndarray | slice, xs: np.ndarray | slice, color: RGBA, coverage: np.ndarray | float = 1.0) -> None:
    """Source-over blend `color` into dst[ys, xs], scaled by per-pixel coverage in [0, 1]."""
    view = dst[ys, xs]
    alpha = (color[3] / 255.0) * np.asarray(coverage, dtype=np.float32)
    if view.ndim == 2:
        alpha = np.broadcast_to(alpha, view.shape[:1])[:, None]
    else:
        alpha = np.broadcast_to(alpha, view.shape[:2])[:, :, None]
    rgb = np.asarray(color[:3], dtype=np.float32)
    out = rgb * alpha + view[..., :3].astype(np.float32) * (1.0 - alpha)
    view[..., :3] = np.clip(np.rint(out), 0, 255).astype(np.uint8)
    view[..., 3] = 255
    dst[ys, xs] = view


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    blend_region(dst, slice(y, y + 1), slice(x, x + 1), color)


def fill_rect(dst: np.ndarray, x: float, y: float, width: float, height: float, color: RGBA) -> None:
    x0 = max(0, int(round(x)))
    y0 = max(0, int(round(y)))
    x1 = min(dst.shape[1], int(round(x + width)))
    y1 = min(dst.shape[0], int(round(y + height)))
    if x1 <= x0 or y1 <= y0:
        return
    blend_region(dst, slice(y0, y1), slice(x0, x1), color)
