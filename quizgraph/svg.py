from __future__ import annotations

from typing import Sequence
import xml.etree.ElementTree as ET

from quizgraph.scene import PlotScene, SceneItem, SceneMarker, ScenePolygon, ScenePolyline, SceneRect, SceneSegment, SceneText
from quizgraph.style import RGBA


SVG_NS = "http://www.w3.org/2000/svg"
FONT_FAMILY = "-apple-system, sans-serif"
_TEXT_ANCHORS = {"start": "start", "middle": "middle", "end": "end"}


def scene_to_svg(scene: PlotScene) -> str:
    root = ET.Element(
        "svg",
        {
            "xmlns": SVG_NS,
            "width": _num(scene.width),
            "height": _num(scene.height),
            "viewBox": f"0 0 {_num(scene.width)} {_num(scene.height)}",
        },
    )
    group: ET.Element | None = None
    group_role: str | None = None
    for item in scene.items:
        if item.role != group_role:
            group = ET.SubElement(root, "g", {"class": f"graph-{item.role}"})
            group_role = item.role
        assert group is not None
        _append_item(group, item)
    return ET.tostring(root, encoding="unicode")


def _append_item(parent: ET.Element, item: SceneItem) -> None:
    if isinstance(item, SceneRect):
        ET.SubElement(
            parent,
            "rect",
            {"x": _num(item.x), "y": _num(item.y), "width": _num(item.width), "height": _num(item.height), **_paint("fill", item.fill)},
        )
    elif isinstance(item, SceneSegment):
        attrs = {"x1": _num(item.x1), "y1": _num(item.y1), "x2": _num(item.x2), "y2": _num(item.y2)}
        attrs.update(_stroke(item.color, item.width, item.dash))
        ET.SubElement(parent, "line", attrs)
    elif isinstance(item, ScenePolyline):
        attrs = {"d": _path(item.points), "fill": "none", "stroke-linecap": "round", "stroke-linejoin": "round"}
        attrs.update(_stroke(item.color, item.width, item.dash))
        ET.SubElement(parent, "path", attrs)
    elif isinstance(item, ScenePolygon):
        ET.SubElement(parent, "path", {"d": _path(item.points) + " Z", "stroke": "none", **_paint("fill", item.fill)})
    elif isinstance(item, SceneMarker):
        _append_marker(parent, item)
    elif isinstance(item, SceneText):
        attrs = {
            "x": _num(item.x),
            "y": _num(item.y),
            "text-anchor": _TEXT_ANCHORS.get(item.anchor, "start"),
            "font-size": _num(item.font_px),
            "font-family": FONT_FAMILY,
            **_paint("fill", item.color),
        }
        if item.bold:
            attrs["font-weight"] = "600"
        if item.rotate_deg:
            attrs["transform"] = f"rotate({item.rotate_deg}, {_num(item.x)}, {_num(item.y)})"
        ET.SubElement(parent, "text", attrs).text = item.text
    else:
        raise TypeError(f"unsupported scene item: {type(item).__name__}")


def _append_marker(parent: ET.Element, item: SceneMarker) -> None:
    if item.shape == "cross":
        attrs = {"class": "plotted-point"}
        if item.value is not None:
            attrs["data-x"] = _num(item.value.x)
            attrs["data-y"] = _num(item.value.y)
        g = ET.SubElement(parent, "g", attrs)
        s = item.size
        for x1, y1, x2, y2 in ((-s, -s, s, s), (s, -s, -s, s)):
            attrs = {
                "x1": _num(item.x + x1),
                "y1": _num(item.y + y1),
                "x2": _num(item.x + x2),
                "y2": _num(item.y + y2),
                "stroke-linecap": "round",
            }
            attrs.update(_stroke(item.color, item.stroke_width or 1.0, ()))
            ET.SubElement(g, "line", attrs)
        return
    attrs = {"cx": _num(item.x), "cy": _num(item.y), "r": _num(item.size), **_paint("fill", item.color)}
    if item.stroke is not None and item.stroke_width > 0:
        attrs.update(_stroke(item.stroke, item.stroke_width, ()))
    ET.SubElement(parent, "circle", attrs)


def _num(value: float) -> str:
    out = f"{float(value):.3f}".rstrip("0").rstrip(".")
    return "0" if out in {"", "-0"} else out


def _rgb(color: RGBA) -> str:
    return f"rgb({color[0]},{color[1]},{color[2]})"


def _paint(attr: str, color: RGBA) -> dict[str, str]:
    out = {attr: _rgb(color)}
    if color[3] < 255:
        out[f"{attr}-opacity"] = _num(color[3] / 255.0)
    return out


def _stroke(color: RGBA, width: float, dash: Sequence[float]) -> dict[str, str]:
    out = _paint("stroke", color)
    out["stroke-width"] = _num(width)
    if dash:
        out["stroke-dasharray"] = ",".join(_num(d) for d in dash)
    return out


def _path(points: Sequence[tuple[float, float]]) -> str:
    if not points:
        return ""
    head, *rest = points
    parts = [f"M {_num(head[0])},{_num(head[1])}"]
    parts.extend(f"L {_num(x)},{_num(y)}" for x, y in rest)
    return " ".join(parts)
