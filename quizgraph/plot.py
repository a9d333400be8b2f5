from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Mapping

from quizgraph.errors import PlotSpecError, PlotStateError
from quizgraph.grid import build_axes, build_grid, build_zero_line
from quizgraph.interaction import OverlayEvent
from quizgraph.lines import LineGeometry, build_line_geometry, line_scene_items, polyline_coords
from quizgraph.overlay import InteractionOverlay
from quizgraph.points import PlacedPointStore
from quizgraph.scales import CoordinateMapper
from quizgraph.scene import PlotScene, SceneItem, SceneMarker, ScenePolyline, SceneRect
from quizgraph.shading import ShadedRegion, shade_ranges, shade_scene_items
from quizgraph.spec import DataPoint, PlotMode, PlotSpec
from quizgraph.style import DEFAULT_STYLE, PlotLayout, PlotStyle


LOGGER = logging.getLogger(__name__)

PointsChangeObserver = Callable[[tuple[DataPoint, ...]], None]
ValueReadObserver = Callable[[DataPoint], None]


def coerce_point(raw: DataPoint | Mapping[str, Any] | tuple[float, float]) -> DataPoint:
    if isinstance(raw, DataPoint):
        return raw
    if isinstance(raw, Mapping):
        try:
            return DataPoint(float(raw["x"]), float(raw["y"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise PlotSpecError(f"point mapping needs numeric `x` and `y`, got {raw!r}") from exc
    try:
        x, y = raw
        return DataPoint(float(x), float(y))
    except (TypeError, ValueError) as exc:
        raise PlotSpecError(f"cannot interpret {raw!r} as a point") from exc


def x_sorted(points: Iterable[DataPoint]) -> tuple[DataPoint, ...]:
    return tuple(sorted(points, key=lambda p: p.x))


class InteractivePlot:
    """One plot instance: spec, mapper, placed points and the current overlay.

    Static geometry (grid, axes, lines, shading) is derived once from the
    immutable spec; `render()` assembles it with the interactive layers.
    """

    def __init__(
        self,
        spec: PlotSpec,
        *,
        layout: PlotLayout | None = None,
        style: PlotStyle = DEFAULT_STYLE,
        on_points_change: PointsChangeObserver | None = None,
        on_value_read: ValueReadObserver | None = None,
    ) -> None:
        self._spec = spec
        self._style = style
        self._mapper = CoordinateMapper(spec.x_axis, spec.y_axis, layout)
        self._on_points_change = on_points_change
        self._on_value_read = on_value_read
        self._store = PlacedPointStore(observer=self._handle_store_change)
        self._preview: tuple[DataPoint, ...] = ()
        self._destroyed = False
        self._overlay_generation = 0

        self._lines: tuple[LineGeometry, ...] = tuple(build_line_geometry(line, self._mapper, style) for line in spec.lines)
        self._shaded: tuple[ShadedRegion, ...] = shade_ranges(spec.primary_line, spec.shade_ranges, self._mapper)
        self._static_items: tuple[SceneItem, ...] = self._build_static_items()
        self._overlay = self._new_overlay()

    @property
    def spec(self) -> PlotSpec:
        return self._spec

    @property
    def mode(self) -> PlotMode:
        return self._spec.mode

    @property
    def mapper(self) -> CoordinateMapper:
        return self._mapper

    @property
    def overlay(self) -> InteractionOverlay:
        self._check_alive()
        return self._overlay

    @property
    def overlay_generation(self) -> int:
        return self._overlay_generation

    @property
    def line_geometry(self) -> tuple[LineGeometry, ...]:
        return self._lines

    @property
    def shaded_regions(self) -> tuple[ShadedRegion, ...]:
        return self._shaded

    @property
    def preview_points(self) -> tuple[DataPoint, ...]:
        return self._preview

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def set_observers(
        self,
        *,
        on_points_change: PointsChangeObserver | None = None,
        on_value_read: ValueReadObserver | None = None,
    ) -> None:
        self._check_alive()
        self._on_points_change = on_points_change
        self._on_value_read = on_value_read

    def set_mode(self, mode: str) -> None:
        self._check_alive()
        previous = self._spec.mode
        self._spec = self._spec.with_mode(mode)
        self._overlay.detach()
        self._overlay = self._new_overlay()
        LOGGER.debug("plot mode %s -> %s (overlay generation %d)", previous, self._spec.mode, self._overlay_generation)

    def handle_event(self, event: OverlayEvent) -> bool:
        self._check_alive()
        return self._overlay.handle(event)

    def handle_input(
        self,
        event_type: str,
        payload: object,
        *,
        rendered_size: tuple[float, float] | None = None,
        rendered_origin: tuple[float, float] = (0.0, 0.0),
    ) -> bool:
        self._check_alive()
        return self._overlay.handle_raw(
            event_type,
            payload,
            rendered_size=rendered_size,
            rendered_origin=rendered_origin,
        )

    def get_placed_points(self) -> tuple[DataPoint, ...]:
        self._check_alive()
        return self._store.list()

    def set_placed_points(self, points: Iterable[DataPoint | Mapping[str, Any] | tuple[float, float]]) -> None:
        """Bulk restore; points are snapped and clamped like user placements. No change event fires."""
        self._check_alive()
        self._store.restore(self._mapper.quantize(coerce_point(p)) for p in points)
        self._preview = x_sorted(self._store.list())

    def clear_placed_points(self) -> None:
        self._check_alive()
        self._store.clear()

    def undo_last_point(self) -> DataPoint | None:
        self._check_alive()
        return self._store.remove_last()

    def render(self) -> PlotScene:
        self._check_alive()
        items: list[SceneItem] = list(self._static_items)
        items.extend(self._overlay.scene_items())
        items.extend(self._placed_items())
        layout = self._mapper.layout
        return PlotScene(width=layout.width, height=layout.height, items=tuple(items))

    def destroy(self) -> None:
        if self._destroyed:
            return
        self._overlay.detach()
        self._store.set_observer(None)
        self._store.restore(())
        self._preview = ()
        self._on_points_change = None
        self._on_value_read = None
        self._destroyed = True

    def _check_alive(self) -> None:
        if self._destroyed:
            raise PlotStateError("plot has been destroyed")

    def _new_overlay(self) -> InteractionOverlay:
        self._overlay_generation += 1
        return InteractionOverlay(
            self._mapper,
            self._store,
            mode=self._spec.mode,
            on_value_read=self._forward_value_read,
            style=self._style,
        )

    def _forward_value_read(self, point: DataPoint) -> None:
        if self._on_value_read is not None:
            self._on_value_read(point)

    def _handle_store_change(self, points: tuple[DataPoint, ...]) -> None:
        self._preview = x_sorted(points)
        if self._on_points_change is not None:
            self._on_points_change(points)

    def _build_static_items(self) -> tuple[SceneItem, ...]:
        style = self._style
        layout = self._mapper.layout
        left, top, plot_w, plot_h = layout.plot_rect
        items: list[SceneItem] = [
            SceneRect("background", 0.0, 0.0, float(layout.width), float(layout.height), style.background),
            SceneRect("plot-background", left, top, plot_w, plot_h, style.plot_background),
        ]
        items.extend(build_grid(self._mapper, style))
        items.extend(build_zero_line(self._mapper, style, visible=self._spec.zero_line_visible))
        items.extend(build_axes(self._mapper, style))
        items.extend(shade_scene_items(self._shaded, style))
        for geometry in self._lines:
            items.extend(line_scene_items(geometry, style))
        return tuple(items)

    def _placed_items(self) -> list[SceneItem]:
        style = self._style
        items: list[SceneItem] = []
        if len(self._preview) >= 2:
            items.append(
                ScenePolyline(
                    "preview-line",
                    polyline_coords(self._preview, self._mapper),
                    style.preview_line,
                    style.preview_line_width,
                    style.preview_dash,
                )
            )
        placed = self._store.list()
        for point, (x, y) in zip(placed, polyline_coords(placed, self._mapper)):
            items.append(
                SceneMarker(
                    "placed-point",
                    x,
                    y,
                    shape="cross",
                    size=style.placed_point_size,
                    color=style.placed_point,
                    stroke_width=style.placed_point_width,
                    value=point,
                )
            )
        return items


class PlotHost:
    """Keeps the plot for the scenario currently on screen.

    Showing the same scenario again reuses the plot (switching mode if needed);
    a different scenario tears the old plot down first.
    """

    def __init__(self, *, layout: PlotLayout | None = None, style: PlotStyle = DEFAULT_STYLE) -> None:
        self._layout = layout
        self._style = style
        self._scenario_id: str | None = None
        self._plot: InteractivePlot | None = None

    @property
    def scenario_id(self) -> str | None:
        return self._scenario_id

    @property
    def plot(self) -> InteractivePlot | None:
        return self._plot

    def show(
        self,
        scenario_id: str,
        spec: PlotSpec,
        *,
        mode: str | None = None,
        restore: Iterable[DataPoint | Mapping[str, Any] | tuple[float, float]] | None = None,
        on_points_change: PointsChangeObserver | None = None,
        on_value_read: ValueReadObserver | None = None,
    ) -> InteractivePlot:
        target_mode = mode or spec.mode
        plot = self._plot
        if plot is not None and scenario_id == self._scenario_id:
            if plot.mode != target_mode:
                plot.set_mode(target_mode)
            plot.set_observers(on_points_change=on_points_change, on_value_read=on_value_read)
        else:
            self.teardown()
            plot = InteractivePlot(
                spec.with_mode(target_mode),
                layout=self._layout,
                style=self._style,
                on_points_change=on_points_change,
                on_value_read=on_value_read,
            )
            self._plot = plot
            self._scenario_id = scenario_id
            LOGGER.debug("built plot for scenario %s", scenario_id)
        if restore is not None:
            plot.set_placed_points(restore)
        return plot

    def teardown(self) -> None:
        if self._plot is not None:
            self._plot.destroy()
        self._plot = None
        self._scenario_id = None
