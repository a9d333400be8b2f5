from __future__ import annotations

import math
from typing import Sequence

from quizgraph.raster.canvas import draw_pixel
from quizgraph.style import RGBA


def draw_segment(
    dst,
    x0: float,
    y0: float,
    x1: float,
    y1: float,
    color: RGBA,
    width: float = 1.0,
    dash: Sequence[float] = (),
    dash_phase: float = 0.0,
) -> float:
    """Draw one segment; returns the dash phase to continue with on the next segment."""
    length = math.hypot(x1 - x0, y1 - y0)
    if not dash or length == 0.0:
        _draw_line(dst, x0, y0, x1, y1, color, width)
        return dash_phase + length
    period = float(sum(dash))
    if period <= 0:
        _draw_line(dst, x0, y0, x1, y1, color, width)
        return dash_phase + length
    dx = (x1 - x0) / length
    dy = (y1 - y0) / length
    pos = 0.0
    phase = dash_phase % period
    index = 0
    while phase >= dash[index]:
        phase -= dash[index]
        index = (index + 1) % len(dash)
    while pos < length:
        run = min(dash[index] - phase, length - pos)
        if index % 2 == 0:
            _draw_line(dst, x0 + dx * pos, y0 + dy * pos, x0 + dx * (pos + run), y0 + dy * (pos + run), color, width)
        pos += run
        phase += run
        if phase >= dash[index]:
            phase = 0.0
            index = (index + 1) % len(dash)
    return dash_phase + length


def draw_polyline(
    dst,
    points: Sequence[tuple[float, float]],
    color: RGBA,
    width: float = 1.0,
    dash: Sequence[float] = (),
) -> None:
    if len(points) < 2:
        return
    phase = 0.0
    for (xa, ya), (xb, yb) in zip(points, points[1:]):
        phase = draw_segment(dst, xa, ya, xb, yb, color, width, dash, phase)


def _draw_line(dst, fx0: float, fy0: float, fx1: float, fy1: float, color: RGBA, width: float) -> None:
    x0, y0 = int(round(fx0)), int(round(fy0))
    x1, y1 = int(round(fx1)), int(round(fy1))
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy
    radius = max(0, int(round(width)) // 2)

    while True:
        _draw_square_brush(dst, x0, y0, color, radius)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _draw_square_brush(dst, x: int, y: int, color: RGBA, radius: int) -> None:
    for yy in range(y - radius, y + radius + 1):
        for xx in range(x - radius, x + radius + 1):
            draw_pixel(dst, xx, yy, color)
