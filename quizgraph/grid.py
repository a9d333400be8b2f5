from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np

from quizgraph.scales import CoordinateMapper, format_tick
from quizgraph.scene import SceneItem, SceneSegment, SceneText
from quizgraph.spec import AxisSpec
from quizgraph.style import PlotStyle


_TICK_EPS = 1e-9


@dataclass(frozen=True)
class Tick:
    value: float
    screen: float
    major: bool


def _stepped_values(vmin: float, vmax: float, step: float) -> np.ndarray:
    count = int(math.floor((vmax - vmin) / step + _TICK_EPS))
    # index-based so drift from repeated addition never drops the last tick
    return vmin + np.arange(count + 1, dtype=np.float64) * step


def axis_ticks(axis: AxisSpec) -> np.ndarray:
    return _stepped_values(axis.min, axis.max, float(axis.snap_step))


def label_ticks(axis: AxisSpec) -> np.ndarray:
    return _stepped_values(axis.min, axis.max, axis.step)


def is_major_tick(value: float, axis: AxisSpec) -> bool:
    ratio = (value - axis.min) / axis.step
    return abs(ratio - round(ratio)) <= _TICK_EPS * max(1.0, abs(ratio))


def classify_ticks(axis: AxisSpec, mapper: CoordinateMapper, *, orientation: str) -> tuple[Tick, ...]:
    to_screen = mapper.screen_x if orientation == "x" else mapper.screen_y
    return tuple(
        Tick(value=float(v), screen=to_screen(float(v)), major=is_major_tick(float(v), axis))
        for v in axis_ticks(axis).tolist()
    )


def build_grid(mapper: CoordinateMapper, style: PlotStyle) -> tuple[SceneItem, ...]:
    left, top, plot_w, plot_h = mapper.layout.plot_rect
    items: list[SceneItem] = []
    for tick in classify_ticks(mapper.x_axis, mapper, orientation="x"):
        items.append(_grid_segment(tick, style, tick.screen, top, tick.screen, top + plot_h))
    for tick in classify_ticks(mapper.y_axis, mapper, orientation="y"):
        items.append(_grid_segment(tick, style, left, tick.screen, left + plot_w, tick.screen))
    return tuple(items)


def _grid_segment(tick: Tick, style: PlotStyle, x1: float, y1: float, x2: float, y2: float) -> SceneSegment:
    if tick.major:
        return SceneSegment("grid-major", x1, y1, x2, y2, style.grid_major, style.grid_major_width)
    return SceneSegment("grid-minor", x1, y1, x2, y2, style.grid_minor, style.grid_minor_width)


def build_zero_line(mapper: CoordinateMapper, style: PlotStyle, *, visible: bool) -> tuple[SceneItem, ...]:
    if not visible or not mapper.y_axis.straddles_zero():
        return ()
    left, _, plot_w, _ = mapper.layout.plot_rect
    py = mapper.screen_y(0.0)
    r, g, b, a = style.axis
    color = (r, g, b, int(round(a * style.zero_line_opacity)))
    return (SceneSegment("zero-line", left, py, left + plot_w, py, color, style.zero_line_width, style.zero_line_dash),)


def build_axes(mapper: CoordinateMapper, style: PlotStyle) -> tuple[SceneItem, ...]:
    layout = mapper.layout
    left, top, plot_w, plot_h = layout.plot_rect
    bottom = top + plot_h
    x_axis = mapper.x_axis
    y_axis = mapper.y_axis
    items: list[SceneItem] = []

    x_axis_y = bottom if y_axis.min >= 0 else mapper.screen_y(0.0)
    items.append(SceneSegment("axis", left, x_axis_y, left + plot_w, x_axis_y, style.axis, style.axis_width))
    items.append(SceneSegment("axis", left, top, left, bottom, style.axis, style.axis_width))

    for value in label_ticks(x_axis).tolist():
        px = mapper.screen_x(value)
        items.append(SceneSegment("tick", px, bottom, px, bottom + style.tick_length, style.axis, style.tick_width))
        items.append(
            SceneText(
                "tick-label",
                px,
                bottom + 20.0,
                format_tick(value, step=x_axis.step),
                style.label_secondary,
                font_px=style.tick_font_px,
                anchor="middle",
            )
        )
    for value in label_ticks(y_axis).tolist():
        py = mapper.screen_y(value)
        items.append(SceneSegment("tick", left - style.tick_length, py, left, py, style.axis, style.tick_width))
        items.append(
            SceneText(
                "tick-label",
                left - 10.0,
                py + 4.0,
                format_tick(value, step=y_axis.step),
                style.label_secondary,
                font_px=style.tick_font_px,
                anchor="end",
            )
        )

    if x_axis.label:
        items.append(
            SceneText(
                "axis-title",
                left + plot_w / 2.0,
                layout.height - 8.0,
                x_axis.label,
                style.label_primary,
                font_px=style.title_font_px,
                bold=True,
            )
        )
    if y_axis.label:
        items.append(
            SceneText(
                "axis-title",
                16.0,
                top + plot_h / 2.0,
                y_axis.label,
                style.label_primary,
                font_px=style.title_font_px,
                rotate_deg=-90,
                bold=True,
            )
        )
    return tuple(items)
