from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable

from quizgraph.interaction import OverlayEvent, parse_input_event, scale_event
from quizgraph.points import PlacedPointStore
from quizgraph.scales import CoordinateMapper, ScreenPoint, axis_decimals, format_point
from quizgraph.scene import SceneItem, SceneSegment, SceneText
from quizgraph.spec import DataPoint, PlotMode, normalize_mode
from quizgraph.style import DEFAULT_STYLE, PlotStyle


LOGGER = logging.getLogger(__name__)

ValueReadObserver = Callable[[DataPoint], None]


@dataclass(frozen=True)
class Crosshair:
    point: DataPoint
    screen: ScreenPoint
    readout: str
    readout_anchor: tuple[float, float]


class InteractionOverlay:
    """Pointer/touch handling for one render of a plot.

    The mode is fixed for the lifetime of an overlay; a mode switch replaces the
    overlay entirely and detaches the previous one.
    """

    def __init__(
        self,
        mapper: CoordinateMapper,
        store: PlacedPointStore,
        *,
        mode: PlotMode,
        on_value_read: ValueReadObserver | None = None,
        style: PlotStyle = DEFAULT_STYLE,
    ) -> None:
        self._mapper = mapper
        self._store = store
        self._mode: PlotMode = normalize_mode(mode)
        self._on_value_read = on_value_read
        self._style = style
        self._crosshair: Crosshair | None = None
        self._attached = True

    @property
    def mode(self) -> PlotMode:
        return self._mode

    @property
    def attached(self) -> bool:
        return self._attached

    @property
    def captures_pointer(self) -> bool:
        return self._attached and self._mode != "view"

    @property
    def crosshair(self) -> Crosshair | None:
        return self._crosshair

    def detach(self) -> None:
        self._attached = False
        self._crosshair = None
        self._on_value_read = None

    def handle_raw(
        self,
        event_type: str,
        payload: object,
        *,
        rendered_size: tuple[float, float] | None = None,
        rendered_origin: tuple[float, float] = (0.0, 0.0),
    ) -> bool:
        """Parse and apply a raw input event.

        `rendered_size`/`rendered_origin` describe where the surface is shown when
        it is displayed scaled; positions are mapped back to layout units first.
        """
        events = parse_input_event(event_type, payload)
        if events is None:
            return False
        if rendered_size is not None:
            layout = self._mapper.layout
            events = tuple(
                scale_event(
                    event,
                    rendered_size=rendered_size,
                    logical_size=(layout.width, layout.height),
                    rendered_origin=rendered_origin,
                )
                for event in events
            )
        handled = False
        for event in events:
            handled = self.handle(event) or handled
        return handled

    def handle(self, event: OverlayEvent) -> bool:
        """Apply one event; returns True when it was consumed."""
        if not self.captures_pointer:
            return False
        if event.kind == "move":
            return self._move(event)
        if event.kind == "commit":
            return self._commit(event)
        if event.kind == "cancel":
            had = self._crosshair is not None
            self._crosshair = None
            return had
        return False

    def quantize_screen(self, screen: ScreenPoint) -> DataPoint:
        return self._mapper.quantize(self._mapper.to_data(screen))

    def placed_point_at(self, screen: ScreenPoint) -> DataPoint | None:
        radius = self._style.placed_point_hit_radius
        # most recently placed point is drawn on top, so it wins the hit test
        for point in reversed(self._store.list()):
            sp = self._mapper.to_screen(point)
            if (sp.x - screen.x) ** 2 + (sp.y - screen.y) ** 2 <= radius * radius:
                return point
        return None

    def scene_items(self) -> tuple[SceneItem, ...]:
        crosshair = self._crosshair
        if crosshair is None:
            return ()
        style = self._style
        left, top, plot_w, plot_h = self._mapper.layout.plot_rect
        sx, sy = crosshair.screen.x, crosshair.screen.y
        ax, ay = crosshair.readout_anchor
        return (
            SceneSegment("crosshair", left, sy, left + plot_w, sy, style.crosshair, style.crosshair_width, style.crosshair_dash),
            SceneSegment("crosshair", sx, top, sx, top + plot_h, style.crosshair, style.crosshair_width, style.crosshair_dash),
            SceneText("readout", ax, ay, crosshair.readout, style.label_primary, font_px=style.tick_font_px, anchor="start"),
        )

    def _event_screen(self, event: OverlayEvent) -> ScreenPoint | None:
        assert event.x is not None and event.y is not None
        screen = ScreenPoint(event.x, event.y)
        if not self._mapper.in_hit_rect(screen):
            LOGGER.debug("%s event at (%s, %s) is outside the hit region", event.kind, event.x, event.y)
            return None
        return screen

    def _move(self, event: OverlayEvent) -> bool:
        if not event.has_position:
            return False
        screen = self._event_screen(event)
        if screen is None:
            # leaving the hit region drops the tracked position, like a cancel
            self._crosshair = None
            return False
        point = self.quantize_screen(screen)
        x_axis = self._mapper.x_axis
        y_axis = self._mapper.y_axis
        ox, oy = self._style.readout_offset
        self._crosshair = Crosshair(
            point=point,
            screen=self._mapper.to_screen(point),
            readout=format_point(
                point,
                x_step=float(x_axis.snap_step),
                y_step=float(y_axis.snap_step),
                x_decimals=axis_decimals(x_axis),
                y_decimals=axis_decimals(y_axis),
            ),
            readout_anchor=(screen.x + ox, screen.y + oy),
        )
        return True

    def _commit(self, event: OverlayEvent) -> bool:
        screen: ScreenPoint | None
        if event.has_position:
            screen = self._event_screen(event)
            if screen is None:
                return False
            point = self.quantize_screen(screen)
        elif self._crosshair is not None:
            point = self._crosshair.point
            screen = self._mapper.to_screen(point)
        else:
            LOGGER.debug("commit ignored; no tracked position")
            return False

        if self._mode == "read":
            self._emit_value_read(point)
            return True

        hit = self.placed_point_at(screen) if event.has_position else None
        if hit is not None:
            self._store.remove_exact(hit)
        else:
            self._store.toggle(point)
        return True

    def _emit_value_read(self, point: DataPoint) -> None:
        if self._on_value_read is None:
            return
        try:
            self._on_value_read(point)
        except Exception:
            LOGGER.exception("value-read observer failed")
            raise
