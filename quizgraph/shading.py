from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Literal, Sequence

from quizgraph.lines import polyline_coords
from quizgraph.scales import CoordinateMapper
from quizgraph.scene import Coord, SceneItem, ScenePolygon
from quizgraph.spec import DataPoint, LineSpec, ShadeRange
from quizgraph.style import PlotStyle


LOGGER = logging.getLogger(__name__)

CROSSING_EPS = 1e-9

ShadeSign = Literal["positive", "negative"]


@dataclass(frozen=True)
class ShadedRegion:
    """One constant-sign piece of a shaded range, closed on the baseline."""

    sign: ShadeSign
    segment: tuple[DataPoint, ...]
    polygon: tuple[DataPoint, ...]
    screen_polygon: tuple[Coord, ...]


def interpolate_y(a: DataPoint, b: DataPoint, x: float) -> DataPoint:
    t = (x - a.x) / (b.x - a.x)
    return DataPoint(x, a.y + t * (b.y - a.y))


def extract_range(points: Sequence[DataPoint], from_x: float, to_x: float) -> list[DataPoint]:
    """Points of the line within [from_x, to_x], plus interpolated points where a segment crosses either bound.

    The result is sorted by x; authored order is not assumed to be monotonic.
    """
    selected = [p for p in points if from_x <= p.x <= to_x]
    for a, b in zip(points, points[1:]):
        lo, hi = (a, b) if a.x <= b.x else (b, a)
        for bound in (from_x, to_x):
            if lo.x < bound < hi.x:
                selected.append(interpolate_y(lo, hi, bound))
    selected.sort(key=lambda p: p.x)
    return selected


def _non_negative(p: DataPoint) -> bool:
    return p.y >= 0


def split_at_zero(points: Sequence[DataPoint]) -> list[tuple[DataPoint, ...]]:
    """Split an x-sorted run into maximal pieces that stay on one side of y = 0.

    A crossing point at y = 0 is inserted where consecutive points change sign
    and is shared by both neighbouring pieces. Exactly-zero counts as non-negative.
    """
    if len(points) < 2:
        return []
    segments: list[tuple[DataPoint, ...]] = []
    current: list[DataPoint] = [points[0]]
    for prev, curr in zip(points, points[1:]):
        if _non_negative(prev) == _non_negative(curr):
            current.append(curr)
            continue
        dy = prev.y - curr.y
        if abs(dy) < CROSSING_EPS:
            current.append(curr)
            continue
        t = prev.y / dy
        crossing = DataPoint(prev.x + t * (curr.x - prev.x), 0.0)
        if crossing != current[-1]:
            current.append(crossing)
        if len(current) >= 2:
            segments.append(tuple(current))
        current = [crossing] if crossing == curr else [crossing, curr]
    if len(current) >= 2:
        segments.append(tuple(current))
    return segments


def segment_sign(segment: Sequence[DataPoint]) -> ShadeSign:
    # a piece may start or end on the crossing point, so look at every vertex
    return "negative" if any(p.y < 0 for p in segment) else "positive"


def close_on_baseline(segment: Sequence[DataPoint], baseline: float) -> tuple[DataPoint, ...]:
    return (DataPoint(segment[0].x, baseline),) + tuple(segment) + (DataPoint(segment[-1].x, baseline),)


def shade_range(line: LineSpec, shade: ShadeRange, mapper: CoordinateMapper) -> tuple[ShadedRegion, ...]:
    extracted = extract_range(line.points, shade.from_x, shade.to_x)
    if len(extracted) < 2:
        LOGGER.debug(
            "shade range [%s, %s] on line %s has %d point(s); nothing shaded",
            shade.from_x,
            shade.to_x,
            line.line_id,
            len(extracted),
        )
        return ()
    baseline = mapper.baseline_y()
    regions: list[ShadedRegion] = []
    for segment in split_at_zero(extracted):
        polygon = close_on_baseline(segment, baseline)
        regions.append(
            ShadedRegion(
                sign=segment_sign(segment),
                segment=segment,
                polygon=polygon,
                screen_polygon=polyline_coords(polygon, mapper),
            )
        )
    return tuple(regions)


def shade_ranges(
    line: LineSpec | None,
    ranges: Sequence[ShadeRange],
    mapper: CoordinateMapper,
) -> tuple[ShadedRegion, ...]:
    if line is None or not ranges:
        return ()
    out: list[ShadedRegion] = []
    for shade in ranges:
        out.extend(shade_range(line, shade, mapper))
    return tuple(out)


def shade_scene_items(regions: Sequence[ShadedRegion], style: PlotStyle) -> tuple[SceneItem, ...]:
    return tuple(
        ScenePolygon(
            f"shade-{region.sign}",
            region.screen_polygon,
            style.shade_positive if region.sign == "positive" else style.shade_negative,
        )
        for region in regions
    )
