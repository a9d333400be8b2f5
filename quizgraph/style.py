from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
import logging
import re
from typing import Any, Mapping

from quizgraph.errors import PlotSpecError


LOGGER = logging.getLogger(__name__)

RGBA = tuple[int, int, int, int]

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}([0-9a-fA-F]{2})?$")


def hex_to_rgba(value: str) -> RGBA:
    if not isinstance(value, str) or not _HEX_COLOR.match(value):
        raise PlotSpecError(f"color must be a hex color (#RRGGBB or #RRGGBBAA), got {value!r}")
    r = int(value[1:3], 16)
    g = int(value[3:5], 16)
    b = int(value[5:7], 16)
    a = int(value[7:9], 16) if len(value) == 9 else 255
    return (r, g, b, a)


@dataclass(frozen=True)
class PlotLayout:
    """Surface size and the padding reserved around the plot rectangle for axis labels."""

    width: int = 600
    height: int = 400
    pad_top: int = 24
    pad_right: int = 24
    pad_bottom: int = 56
    pad_left: int = 64
    hit_margin: int = 12

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise PlotSpecError("layout width/height must be > 0")
        if min(self.pad_top, self.pad_right, self.pad_bottom, self.pad_left) < 0:
            raise PlotSpecError("layout padding must be >= 0")
        if self.hit_margin < 0:
            raise PlotSpecError("layout hit_margin must be >= 0")
        if self.plot_width <= 1 or self.plot_height <= 1:
            raise PlotSpecError("plot rectangle width/height must be > 1")

    @property
    def plot_width(self) -> int:
        return self.width - self.pad_left - self.pad_right

    @property
    def plot_height(self) -> int:
        return self.height - self.pad_top - self.pad_bottom

    @property
    def plot_rect(self) -> tuple[float, float, float, float]:
        return (float(self.pad_left), float(self.pad_top), float(self.plot_width), float(self.plot_height))

    @property
    def hit_rect(self) -> tuple[float, float, float, float]:
        m = float(self.hit_margin)
        x, y, w, h = self.plot_rect
        return (x - m, y - m, w + 2.0 * m, h + 2.0 * m)


@dataclass(frozen=True)
class PlotStyle:
    background: RGBA = (255, 255, 255, 255)
    plot_background: RGBA = (250, 250, 252, 255)
    grid_minor: RGBA = (229, 229, 234, 255)
    grid_major: RGBA = (199, 199, 204, 255)
    axis: RGBA = (60, 60, 67, 255)
    label_primary: RGBA = (28, 28, 30, 255)
    label_secondary: RGBA = (99, 99, 102, 255)
    crosshair: RGBA = (142, 142, 147, 255)
    placed_point: RGBA = (255, 59, 48, 255)
    point_stroke: RGBA = (255, 255, 255, 255)
    preview_line: RGBA = (0, 122, 255, 153)
    shade_positive: RGBA = (0, 122, 255, 31)
    shade_negative: RGBA = (255, 59, 48, 31)
    zero_line_opacity: float = 0.6
    palette: dict[str, RGBA] = field(
        default_factory=lambda: {
            "line1": (0, 122, 255, 255),
            "line2": (255, 149, 0, 255),
            "line3": (52, 199, 89, 255),
        }
    )
    grid_major_width: float = 1.0
    grid_minor_width: float = 0.5
    data_line_width: float = 2.5
    axis_width: float = 2.0
    tick_width: float = 1.5
    zero_line_width: float = 1.5
    crosshair_width: float = 1.0
    preview_line_width: float = 2.0
    placed_point_width: float = 2.5
    marker_radius: float = 4.0
    placed_point_size: float = 6.0
    placed_point_hit_radius: float = 12.0
    tick_length: float = 6.0
    tick_font_px: float = 12.0
    title_font_px: float = 13.0
    zero_line_dash: tuple[float, ...] = (6.0, 4.0)
    crosshair_dash: tuple[float, ...] = (4.0, 4.0)
    preview_dash: tuple[float, ...] = (4.0, 3.0)
    readout_offset: tuple[float, float] = (16.0, -8.0)

    def line_color(self, token: str) -> RGBA:
        if token in self.palette:
            return self.palette[token]
        if token.startswith("#"):
            return hex_to_rgba(token)
        fallback = self.palette.get("line1", self.axis)
        LOGGER.debug("unknown line color token %r; drawing with %s", token, fallback)
        return fallback


DEFAULT_STYLE = PlotStyle()


def validate_style_overrides(overrides: Mapping[str, Any] | None = None) -> PlotStyle:
    """Merge overrides into the default style; colors may be given as hex strings."""

    if not overrides:
        return DEFAULT_STYLE
    known = asdict(DEFAULT_STYLE)
    changes: dict[str, Any] = {}
    for key, value in overrides.items():
        if key not in known:
            raise PlotSpecError(f"Unknown style token: {key}")
        default = known[key]
        if key == "palette":
            if not isinstance(value, Mapping):
                raise PlotSpecError("Style `palette` must be a mapping of token -> color")
            merged = dict(DEFAULT_STYLE.palette)
            for token, color in value.items():
                merged[str(token)] = hex_to_rgba(color) if isinstance(color, str) else _coerce_rgba(key, color)
            changes[key] = merged
        elif isinstance(default, tuple) and len(default) == 4 and all(isinstance(c, int) for c in default):
            changes[key] = hex_to_rgba(value) if isinstance(value, str) else _coerce_rgba(key, value)
        elif isinstance(default, tuple):
            changes[key] = tuple(float(v) for v in value)
        else:
            if not isinstance(value, (int, float)) or float(value) < 0:
                raise PlotSpecError(f"Style `{key}` must be a non-negative number")
            changes[key] = float(value)
    return replace(DEFAULT_STYLE, **changes)


def _coerce_rgba(key: str, value: Any) -> RGBA:
    try:
        parts = tuple(int(c) for c in value)
    except (TypeError, ValueError) as exc:
        raise PlotSpecError(f"Style `{key}` must be an RGBA tuple or hex color") from exc
    if len(parts) == 3:
        parts = parts + (255,)
    if len(parts) != 4 or any(c < 0 or c > 255 for c in parts):
        raise PlotSpecError(f"Style `{key}` must be an RGBA tuple or hex color")
    return parts  # type: ignore[return-value]
