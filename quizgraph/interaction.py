from __future__ import annotations

from dataclasses import dataclass, replace
import math
from typing import Literal, Mapping


OverlayEventKind = Literal["move", "commit", "cancel"]
InputSource = Literal["pointer", "touch"]

POINTER_EVENT_TYPES: dict[str, OverlayEventKind] = {
    "pointer_move": "move",
    "pointer_up": "commit",
    "click": "commit",
    "pointer_leave": "cancel",
}
TOUCH_EVENT_TYPES = ("touch_start", "touch_move", "touch_end", "touch_cancel")


@dataclass(frozen=True)
class OverlayEvent:
    """Source-independent interaction event in logical surface coordinates.

    `commit` without coordinates means "commit at the last tracked position".
    """

    kind: OverlayEventKind
    x: float | None = None
    y: float | None = None
    source: InputSource = "pointer"

    @property
    def has_position(self) -> bool:
        return self.x is not None and self.y is not None


def rendered_to_logical(
    x: float,
    y: float,
    *,
    rendered_size: tuple[float, float],
    logical_size: tuple[float, float],
    rendered_origin: tuple[float, float] = (0.0, 0.0),
) -> tuple[float, float]:
    rw, rh = rendered_size
    if rw <= 0 or rh <= 0:
        raise ValueError("rendered size must be > 0")
    lw, lh = logical_size
    ox, oy = rendered_origin
    return ((x - ox) * (lw / rw), (y - oy) * (lh / rh))


def scale_event(
    event: OverlayEvent,
    *,
    rendered_size: tuple[float, float],
    logical_size: tuple[float, float],
    rendered_origin: tuple[float, float] = (0.0, 0.0),
) -> OverlayEvent:
    if not event.has_position:
        return event
    assert event.x is not None and event.y is not None
    x, y = rendered_to_logical(
        event.x,
        event.y,
        rendered_size=rendered_size,
        logical_size=logical_size,
        rendered_origin=rendered_origin,
    )
    return replace(event, x=x, y=y)


def parse_input_event(event_type: str, payload: object) -> tuple[OverlayEvent, ...] | None:
    """Normalize raw pointer/touch events into move/commit/cancel events.

    Touch has no hover phase, so `touch_start`/`touch_move` track like a move and
    `touch_end` commits at the tracked position before cancelling.
    """

    if event_type in POINTER_EVENT_TYPES:
        kind = POINTER_EVENT_TYPES[event_type]
        if kind == "cancel":
            return (OverlayEvent(kind="cancel"),)
        pos = _pointer_position(payload)
        if pos is None:
            return None
        return (OverlayEvent(kind=kind, x=pos[0], y=pos[1]),)

    if event_type not in TOUCH_EVENT_TYPES:
        return None
    if event_type == "touch_cancel":
        return (OverlayEvent(kind="cancel", source="touch"),)
    if event_type == "touch_end":
        return (OverlayEvent(kind="commit", source="touch"), OverlayEvent(kind="cancel", source="touch"))
    pos = _touch_position(payload)
    if pos is None:
        return None
    return (OverlayEvent(kind="move", x=pos[0], y=pos[1], source="touch"),)


def _coerce_xy(raw: object) -> tuple[float, float] | None:
    if not isinstance(raw, Mapping):
        return None
    try:
        x = float(raw["x"])
        y = float(raw["y"])
    except (KeyError, TypeError, ValueError):
        return None
    if not (math.isfinite(x) and math.isfinite(y)):
        return None
    return (x, y)


def _pointer_position(payload: object) -> tuple[float, float] | None:
    return _coerce_xy(payload)


def _touch_position(payload: object) -> tuple[float, float] | None:
    if not isinstance(payload, Mapping):
        return None
    touches = payload.get("touches")
    if isinstance(touches, (list, tuple)):
        if not touches:
            return None
        return _coerce_xy(touches[0])
    return _coerce_xy(payload)
