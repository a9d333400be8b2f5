from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
import math

import numpy as np

from quizgraph.spec import AxisSpec, DataPoint
from quizgraph.style import PlotLayout


@dataclass(frozen=True)
class ScreenPoint:
    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class PlotTransform:
    sx: float
    tx: float
    sy: float
    ty: float


def build_transform(x_axis: AxisSpec, y_axis: AxisSpec, layout: PlotLayout) -> PlotTransform:
    left, top, plot_w, plot_h = layout.plot_rect
    sx = plot_w / x_axis.span
    tx = left - x_axis.min * sx
    # screen y grows downward, so data max sits on the top edge
    sy = -plot_h / y_axis.span
    ty = top - y_axis.max * sy
    return PlotTransform(sx=sx, tx=tx, sy=sy, ty=ty)


def snap_value(value: float, step: float) -> float:
    return math.floor(value / step + 0.5) * step


class CoordinateMapper:
    """Bidirectional data/screen transform plus grid-snap quantization for one plot."""

    def __init__(self, x_axis: AxisSpec, y_axis: AxisSpec, layout: PlotLayout | None = None) -> None:
        self._x_axis = x_axis
        self._y_axis = y_axis
        self._layout = layout or PlotLayout()
        self._transform = build_transform(x_axis, y_axis, self._layout)

    @property
    def x_axis(self) -> AxisSpec:
        return self._x_axis

    @property
    def y_axis(self) -> AxisSpec:
        return self._y_axis

    @property
    def layout(self) -> PlotLayout:
        return self._layout

    @property
    def transform(self) -> PlotTransform:
        return self._transform

    def to_screen(self, point: DataPoint) -> ScreenPoint:
        t = self._transform
        return ScreenPoint(point.x * t.sx + t.tx, point.y * t.sy + t.ty)

    def to_data(self, point: ScreenPoint) -> DataPoint:
        t = self._transform
        return DataPoint((point.x - t.tx) / t.sx, (point.y - t.ty) / t.sy)

    def to_screen_array(self, xs: np.ndarray, ys: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        t = self._transform
        px = np.asarray(xs, dtype=np.float64) * t.sx + t.tx
        py = np.asarray(ys, dtype=np.float64) * t.sy + t.ty
        return px, py

    def screen_x(self, x: float) -> float:
        return x * self._transform.sx + self._transform.tx

    def screen_y(self, y: float) -> float:
        return y * self._transform.sy + self._transform.ty

    def snap(self, point: DataPoint) -> DataPoint:
        return DataPoint(
            snap_value(point.x, float(self._x_axis.snap_step)),
            snap_value(point.y, float(self._y_axis.snap_step)),
        )

    def clamp(self, point: DataPoint) -> DataPoint:
        x = min(self._x_axis.max, max(self._x_axis.min, point.x))
        y = min(self._y_axis.max, max(self._y_axis.min, point.y))
        if x == point.x and y == point.y:
            return point
        return DataPoint(x, y)

    def quantize(self, point: DataPoint) -> DataPoint:
        return self.clamp(self.snap(point))

    def in_plot_rect(self, point: ScreenPoint) -> bool:
        return _rect_contains(self._layout.plot_rect, point)

    def in_hit_rect(self, point: ScreenPoint) -> bool:
        return _rect_contains(self._layout.hit_rect, point)

    def baseline_y(self) -> float:
        """Data y of the zero baseline, pinned into the visible y-range."""
        return min(self._y_axis.max, max(self._y_axis.min, 0.0))


def _rect_contains(rect: tuple[float, float, float, float], point: ScreenPoint) -> bool:
    x, y, w, h = rect
    return x <= point.x <= x + w and y <= point.y <= y + h


def format_tick(value: float, *, step: float | None = None, decimals: int | None = None) -> str:
    if not np.isfinite(value):
        return str(value)
    if step is not None and np.isfinite(step) and step > 0 and abs(value) <= step * 1e-9:
        value = 0.0
    abs_v = abs(value)
    if decimals is None:
        decimals = _decimals_from_step(step) if step is not None else 6
    if abs_v != 0 and (abs_v >= 1e6 or (step is not None and abs(step) < 1e-4) or abs_v < 1e-6):
        return f"{value:.4e}"

    d = Decimal(str(value))
    quant = Decimal("1").scaleb(-decimals)
    try:
        q = d.quantize(quant)
    except InvalidOperation:
        q = d
    out = format(q, "f")
    # Only trim trailing zeros for fractional values (preserve integer zeros like 30, 40).
    if "." in out:
        out = out.rstrip("0").rstrip(".")
    if out == "-0":
        out = "0"
    return out


def format_point(
    point: DataPoint,
    *,
    x_step: float | None = None,
    y_step: float | None = None,
    x_decimals: int | None = None,
    y_decimals: int | None = None,
) -> str:
    x = format_tick(point.x, step=x_step, decimals=x_decimals)
    y = format_tick(point.y, step=y_step, decimals=y_decimals)
    return f"({x}, {y})"


def axis_decimals(axis: AxisSpec) -> int:
    """Decimals needed to show any snapped value on `axis`, including bounds off the snap grid."""
    return max(
        _decimals_from_step(float(axis.snap_step)),
        _decimal_places(axis.min),
        _decimal_places(axis.max),
    )


def _decimals_from_step(step: float) -> int:
    if step <= 0 or not np.isfinite(step):
        return 6
    return _decimal_places(step)


def _decimal_places(value: float) -> int:
    if not np.isfinite(value) or value == 0:
        return 0
    exp = Decimal(str(value)).normalize().as_tuple().exponent
    return min(12, max(0, -int(exp)))
