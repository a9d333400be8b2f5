from __future__ import annotations

from dataclasses import dataclass
import logging

import numpy as np

from quizgraph.scales import CoordinateMapper
from quizgraph.scene import Coord, SceneItem, SceneMarker, ScenePolyline
from quizgraph.spec import DataPoint, LineSpec
from quizgraph.style import PlotStyle, RGBA


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class LineGeometry:
    line_id: str
    color: RGBA
    polyline: tuple[Coord, ...]
    markers: tuple[Coord, ...]


def polyline_coords(points: tuple[DataPoint, ...] | list[DataPoint], mapper: CoordinateMapper) -> tuple[Coord, ...]:
    if not points:
        return ()
    xs = np.fromiter((p.x for p in points), dtype=np.float64, count=len(points))
    ys = np.fromiter((p.y for p in points), dtype=np.float64, count=len(points))
    px, py = mapper.to_screen_array(xs, ys)
    return tuple(zip(px.tolist(), py.tolist()))


def build_line_geometry(line: LineSpec, mapper: CoordinateMapper, style: PlotStyle) -> LineGeometry:
    # authored order is kept as-is; lines may double back in x
    coords = polyline_coords(line.points, mapper)
    if len(coords) < 2:
        LOGGER.debug("line %s has %d point(s); no segment drawn", line.line_id, len(coords))
    return LineGeometry(
        line_id=line.line_id,
        color=style.line_color(line.color_token),
        polyline=coords if len(coords) >= 2 else (),
        markers=coords,
    )


def line_scene_items(geometry: LineGeometry, style: PlotStyle) -> tuple[SceneItem, ...]:
    items: list[SceneItem] = []
    if geometry.polyline:
        items.append(ScenePolyline("data-line", geometry.polyline, geometry.color, style.data_line_width))
    for x, y in geometry.markers:
        items.append(
            SceneMarker(
                "data-marker",
                x,
                y,
                shape="circle",
                size=style.marker_radius,
                color=geometry.color,
                stroke=style.point_stroke,
                stroke_width=2.0,
            )
        )
    return tuple(items)
