from __future__ import annotations

import dataclasses
import math
import re
from dataclasses import dataclass
from typing import Any, Literal, Mapping, Sequence

from quizgraph.errors import PlotSpecError


PlotMode = Literal["view", "read", "plot"]

PLOT_MODES: tuple[str, ...] = ("view", "read", "plot")
MODE_ALIASES: dict[str, str] = {"plot-points": "plot"}

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


def _finite(value: Any, label: str) -> float:
    try:
        out = float(value)
    except (TypeError, ValueError) as exc:
        raise PlotSpecError(f"{label} must be numeric, got {value!r}") from exc
    if not math.isfinite(out):
        raise PlotSpecError(f"{label} must be finite, got {value!r}")
    return out


def normalize_mode(mode: str) -> PlotMode:
    resolved = MODE_ALIASES.get(mode, mode)
    if resolved not in PLOT_MODES:
        raise PlotSpecError(f"unsupported plot mode: {mode}")
    return resolved  # type: ignore[return-value]


@dataclass(frozen=True)
class DataPoint:
    x: float
    y: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.x, self.y)


@dataclass(frozen=True)
class AxisSpec:
    min: float
    max: float
    step: float
    snap_step: float | None = None
    label: str = ""

    def __post_init__(self) -> None:
        vmin = _finite(self.min, "AxisSpec.min")
        vmax = _finite(self.max, "AxisSpec.max")
        step = _finite(self.step, "AxisSpec.step")
        snap = step if self.snap_step is None else _finite(self.snap_step, "AxisSpec.snap_step")
        if vmax <= vmin:
            raise PlotSpecError(f"AxisSpec.max must be > min (min={vmin}, max={vmax})")
        if step <= 0:
            raise PlotSpecError("AxisSpec.step must be > 0")
        if snap <= 0:
            raise PlotSpecError("AxisSpec.snap_step must be > 0")
        object.__setattr__(self, "min", vmin)
        object.__setattr__(self, "max", vmax)
        object.__setattr__(self, "step", step)
        object.__setattr__(self, "snap_step", snap)
        object.__setattr__(self, "label", str(self.label))

    @property
    def span(self) -> float:
        return self.max - self.min

    def straddles_zero(self) -> bool:
        return self.min < 0.0 < self.max


@dataclass(frozen=True)
class LineSpec:
    line_id: str
    color_token: str = "line1"
    points: tuple[DataPoint, ...] = ()

    def __post_init__(self) -> None:
        if not str(self.line_id).strip():
            raise PlotSpecError("LineSpec.line_id must be non-empty")
        token = str(self.color_token).strip()
        if not token:
            raise PlotSpecError(f"LineSpec `{self.line_id}` has an empty color token")
        if token.startswith("#") and not _HEX_COLOR.match(token):
            raise PlotSpecError(f"LineSpec `{self.line_id}` has a malformed color: {token}")
        object.__setattr__(self, "color_token", token)
        object.__setattr__(
            self,
            "points",
            tuple(
                DataPoint(_finite(p.x, f"{self.line_id}.x"), _finite(p.y, f"{self.line_id}.y"))
                for p in self.points
            ),
        )


@dataclass(frozen=True)
class ShadeRange:
    from_x: float
    to_x: float

    def __post_init__(self) -> None:
        start = _finite(self.from_x, "ShadeRange.from_x")
        end = _finite(self.to_x, "ShadeRange.to_x")
        if end <= start:
            raise PlotSpecError(f"ShadeRange.to_x must be > from_x (from_x={start}, to_x={end})")
        object.__setattr__(self, "from_x", start)
        object.__setattr__(self, "to_x", end)


@dataclass(frozen=True)
class PlotSpec:
    """Immutable description of one plot; only `mode` changes, via `with_mode`."""

    x_axis: AxisSpec
    y_axis: AxisSpec
    lines: tuple[LineSpec, ...] = ()
    shade_ranges: tuple[ShadeRange, ...] = ()
    zero_line_visible: bool = False
    mode: PlotMode = "view"

    def __post_init__(self) -> None:
        object.__setattr__(self, "lines", tuple(self.lines))
        object.__setattr__(self, "shade_ranges", tuple(self.shade_ranges))
        object.__setattr__(self, "zero_line_visible", bool(self.zero_line_visible))
        object.__setattr__(self, "mode", normalize_mode(self.mode))
        seen: set[str] = set()
        for line in self.lines:
            if line.line_id in seen:
                raise PlotSpecError(f"duplicate line id: {line.line_id}")
            seen.add(line.line_id)

    @property
    def primary_line(self) -> LineSpec | None:
        return self.lines[0] if self.lines else None

    def with_mode(self, mode: str) -> "PlotSpec":
        return dataclasses.replace(self, mode=normalize_mode(mode))

    @classmethod
    def from_mapping(cls, payload: Mapping[str, Any]) -> "PlotSpec":
        """Build a spec from the authored scenario shape (camelCase keys)."""
        if not isinstance(payload, Mapping):
            raise PlotSpecError("plot spec payload must be a mapping")
        try:
            x_axis = _axis_from_mapping(payload["xAxis"])
            y_axis = _axis_from_mapping(payload["yAxis"])
        except KeyError as exc:
            raise PlotSpecError(f"plot spec is missing {exc.args[0]}") from exc
        lines = tuple(_line_from_mapping(i, raw) for i, raw in enumerate(payload.get("lines") or ()))
        shades = tuple(
            ShadeRange(from_x=_require(raw, "fromX"), to_x=_require(raw, "toX"))
            for raw in payload.get("areaShading") or ()
        )
        return cls(
            x_axis=x_axis,
            y_axis=y_axis,
            lines=lines,
            shade_ranges=shades,
            zero_line_visible=bool(payload.get("zeroLine", False)),
            mode=str(payload.get("interactiveMode") or "view"),  # type: ignore[arg-type]
        )


def _require(raw: Any, key: str) -> Any:
    if not isinstance(raw, Mapping) or key not in raw:
        raise PlotSpecError(f"expected mapping with `{key}`, got {raw!r}")
    return raw[key]


def _axis_from_mapping(raw: Any) -> AxisSpec:
    if not isinstance(raw, Mapping):
        raise PlotSpecError(f"axis must be a mapping, got {raw!r}")
    return AxisSpec(
        min=_require(raw, "min"),
        max=_require(raw, "max"),
        step=_require(raw, "step"),
        snap_step=raw.get("snapStep"),
        label=str(raw.get("label", "")),
    )


def _line_from_mapping(index: int, raw: Any) -> LineSpec:
    if not isinstance(raw, Mapping):
        raise PlotSpecError(f"line {index} must be a mapping, got {raw!r}")
    raw_points: Sequence[Any] = raw.get("points") or ()
    points = tuple(DataPoint(x=_require(p, "x"), y=_require(p, "y")) for p in raw_points)
    return LineSpec(
        line_id=str(raw.get("id") or f"line{index + 1}"),
        color_token=str(raw.get("color") or f"line{index + 1}"),
        points=points,
    )
