from __future__ import annotations

import unittest

from quizgraph import AxisSpec, CoordinateMapper, DataPoint, LineSpec
from quizgraph.grid import axis_ticks, build_axes, build_grid, build_zero_line, classify_ticks, is_major_tick, label_ticks
from quizgraph.lines import build_line_geometry, line_scene_items
from quizgraph.scene import SceneSegment, SceneText
from quizgraph.style import DEFAULT_STYLE


X_AXIS = AxisSpec(min=0, max=50, step=10, snap_step=5, label="Time (s)")
Y_AXIS = AxisSpec(min=-20, max=40, step=10, snap_step=2, label="Velocity (m/s)")


class GridTests(unittest.TestCase):
    def test_ticks_step_by_snap_and_include_max(self) -> None:
        self.assertEqual(axis_ticks(X_AXIS).tolist(), [0.0, 5.0, 10.0, 15.0, 20.0, 25.0, 30.0, 35.0, 40.0, 45.0, 50.0])
        self.assertEqual(len(axis_ticks(Y_AXIS)), 31)

    def test_fractional_snap_does_not_drop_last_tick(self) -> None:
        axis = AxisSpec(min=1.0, max=2.0, step=0.5, snap_step=0.1)
        ticks = axis_ticks(axis)
        self.assertEqual(len(ticks), 11)
        self.assertAlmostEqual(float(ticks[-1]), 2.0, places=12)
        majors = [round(float(v), 9) for v in ticks if is_major_tick(float(v), axis)]
        self.assertEqual(majors, [1.0, 1.5, 2.0])

    def test_major_classification_is_relative_to_min(self) -> None:
        axis = AxisSpec(min=3, max=23, step=10, snap_step=5)
        self.assertTrue(is_major_tick(13.0, axis))
        self.assertFalse(is_major_tick(10.0, axis))

    def test_grid_lines_carry_major_and_minor_weight(self) -> None:
        mapper = CoordinateMapper(X_AXIS, Y_AXIS)
        items = build_grid(mapper, DEFAULT_STYLE)
        majors = [i for i in items if i.role == "grid-major"]
        minors = [i for i in items if i.role == "grid-minor"]
        self.assertEqual(len(majors), 6 + 7)
        self.assertEqual(len(minors), 5 + 24)
        self.assertGreater(majors[0].width, minors[0].width)

    def test_classified_x_ticks_have_screen_positions(self) -> None:
        mapper = CoordinateMapper(X_AXIS, Y_AXIS)
        ticks = classify_ticks(X_AXIS, mapper, orientation="x")
        self.assertEqual(ticks[0].screen, 64.0)
        self.assertTrue(ticks[0].major)
        self.assertFalse(ticks[1].major)

    def test_labels_only_at_step_intervals(self) -> None:
        mapper = CoordinateMapper(X_AXIS, Y_AXIS)
        labels = [i.text for i in build_axes(mapper, DEFAULT_STYLE) if isinstance(i, SceneText) and i.role == "tick-label"]
        self.assertEqual(labels[:6], ["0", "10", "20", "30", "40", "50"])
        self.assertEqual(labels[6:], ["-20", "-10", "0", "10", "20", "30", "40"])
        self.assertEqual(len(label_ticks(X_AXIS)), 6)

    def test_axis_titles(self) -> None:
        mapper = CoordinateMapper(X_AXIS, Y_AXIS)
        titles = [i for i in build_axes(mapper, DEFAULT_STYLE) if i.role == "axis-title"]
        self.assertEqual([t.text for t in titles], ["Time (s)", "Velocity (m/s)"])
        self.assertEqual(titles[1].rotate_deg, -90)

    def test_x_axis_line_sits_on_zero_when_range_goes_negative(self) -> None:
        mapper = CoordinateMapper(X_AXIS, Y_AXIS)
        axis_lines = [i for i in build_axes(mapper, DEFAULT_STYLE) if i.role == "axis"]
        self.assertAlmostEqual(axis_lines[0].y1, mapper.screen_y(0.0), places=9)

        positive = CoordinateMapper(X_AXIS, AxisSpec(min=0, max=40, step=10))
        axis_lines = [i for i in build_axes(positive, DEFAULT_STYLE) if i.role == "axis"]
        self.assertEqual(axis_lines[0].y1, 344.0)

    def test_zero_line_needs_flag_and_straddling_range(self) -> None:
        straddling = CoordinateMapper(X_AXIS, Y_AXIS)
        zero = build_zero_line(straddling, DEFAULT_STYLE, visible=True)
        self.assertEqual(len(zero), 1)
        self.assertIsInstance(zero[0], SceneSegment)
        self.assertEqual(zero[0].dash, (6.0, 4.0))
        self.assertEqual(build_zero_line(straddling, DEFAULT_STYLE, visible=False), ())

        positive = CoordinateMapper(X_AXIS, AxisSpec(min=0, max=40, step=10))
        self.assertEqual(build_zero_line(positive, DEFAULT_STYLE, visible=True), ())


class LineGeometryTests(unittest.TestCase):
    def setUp(self) -> None:
        self.mapper = CoordinateMapper(X_AXIS, Y_AXIS)

    def test_polyline_keeps_authored_order(self) -> None:
        line = LineSpec(line_id="a", points=(DataPoint(30, 0), DataPoint(10, 10), DataPoint(20, 5)))
        geometry = build_line_geometry(line, self.mapper, DEFAULT_STYLE)
        xs = [x for x, _ in geometry.polyline]
        self.assertGreater(xs[0], xs[2])
        self.assertGreater(xs[2], xs[1])
        self.assertEqual(len(geometry.markers), 3)

    def test_single_point_line_has_marker_but_no_segment(self) -> None:
        line = LineSpec(line_id="a", points=(DataPoint(10, 10),))
        geometry = build_line_geometry(line, self.mapper, DEFAULT_STYLE)
        self.assertEqual(geometry.polyline, ())
        items = line_scene_items(geometry, DEFAULT_STYLE)
        self.assertEqual([i.role for i in items], ["data-marker"])

    def test_empty_line_draws_nothing(self) -> None:
        geometry = build_line_geometry(LineSpec(line_id="a"), self.mapper, DEFAULT_STYLE)
        self.assertEqual(line_scene_items(geometry, DEFAULT_STYLE), ())

    def test_line_color_resolves_from_palette(self) -> None:
        line = LineSpec(line_id="a", color_token="line2", points=(DataPoint(0, 0), DataPoint(10, 10)))
        geometry = build_line_geometry(line, self.mapper, DEFAULT_STYLE)
        self.assertEqual(geometry.color, DEFAULT_STYLE.palette["line2"])

    def test_unknown_color_token_falls_back_to_first_palette_color(self) -> None:
        line = LineSpec(line_id="a", color_token="red", points=(DataPoint(0, 0), DataPoint(10, 10)))
        with self.assertLogs("quizgraph.style", level="DEBUG"):
            geometry = build_line_geometry(line, self.mapper, DEFAULT_STYLE)
        self.assertEqual(geometry.color, DEFAULT_STYLE.palette["line1"])
        self.assertEqual(len(line_scene_items(geometry, DEFAULT_STYLE)), 3)


if __name__ == "__main__":
    unittest.main()
