from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Union

from quizgraph.spec import DataPoint
from quizgraph.style import RGBA


Coord = tuple[float, float]
TextAnchor = Literal["start", "middle", "end"]
MarkerShape = Literal["circle", "cross"]


@dataclass(frozen=True)
class SceneRect:
    role: str
    x: float
    y: float
    width: float
    height: float
    fill: RGBA


@dataclass(frozen=True)
class SceneSegment:
    role: str
    x1: float
    y1: float
    x2: float
    y2: float
    color: RGBA
    width: float = 1.0
    dash: tuple[float, ...] = ()


@dataclass(frozen=True)
class ScenePolyline:
    role: str
    points: tuple[Coord, ...]
    color: RGBA
    width: float = 1.0
    dash: tuple[float, ...] = ()


@dataclass(frozen=True)
class ScenePolygon:
    role: str
    points: tuple[Coord, ...]
    fill: RGBA


@dataclass(frozen=True)
class SceneMarker:
    role: str
    x: float
    y: float
    shape: MarkerShape
    size: float
    color: RGBA
    stroke: RGBA | None = None
    stroke_width: float = 0.0
    value: DataPoint | None = None


@dataclass(frozen=True)
class SceneText:
    role: str
    x: float
    y: float
    text: str
    color: RGBA
    font_px: float = 12.0
    anchor: TextAnchor = "middle"
    rotate_deg: int = 0
    bold: bool = False


SceneItem = Union[SceneRect, SceneSegment, ScenePolyline, ScenePolygon, SceneMarker, SceneText]


@dataclass(frozen=True)
class PlotScene:
    """Screen-space primitives in paint order; draw layers consume this and nothing else."""

    width: int
    height: int
    items: tuple[SceneItem, ...]

    def by_role(self, role: str) -> tuple[SceneItem, ...]:
        return tuple(item for item in self.items if item.role == role)

    def roles(self) -> tuple[str, ...]:
        out: list[str] = []
        for item in self.items:
            if item.role not in out:
                out.append(item.role)
        return tuple(out)
