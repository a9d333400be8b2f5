from __future__ import annotations

import unittest

from quizgraph import AxisSpec, DataPoint, LineSpec, PlotSpec, PlotSpecError, ShadeRange
from quizgraph.style import PlotLayout, validate_style_overrides


def _axis(**overrides) -> AxisSpec:
    raw = {"min": 0.0, "max": 50.0, "step": 10.0, "snap_step": 5.0, "label": "t / s"}
    raw.update(overrides)
    return AxisSpec(**raw)


class PlotSpecValidationTests(unittest.TestCase):
    def test_snap_step_defaults_to_step(self) -> None:
        axis = AxisSpec(min=0, max=10, step=2)
        self.assertEqual(axis.snap_step, 2.0)

    def test_rejects_inverted_or_empty_range(self) -> None:
        with self.assertRaises(PlotSpecError):
            _axis(min=10.0, max=10.0)
        with self.assertRaises(PlotSpecError):
            _axis(min=10.0, max=0.0)

    def test_rejects_non_positive_steps(self) -> None:
        with self.assertRaises(PlotSpecError):
            _axis(step=0.0)
        with self.assertRaises(PlotSpecError):
            _axis(snap_step=-1.0)

    def test_rejects_non_finite_bounds(self) -> None:
        with self.assertRaises(PlotSpecError):
            _axis(max=float("inf"))

    def test_spec_error_is_a_value_error(self) -> None:
        self.assertTrue(issubclass(PlotSpecError, ValueError))

    def test_shade_range_requires_to_after_from(self) -> None:
        with self.assertRaises(PlotSpecError):
            ShadeRange(from_x=5.0, to_x=5.0)

    def test_duplicate_line_ids_rejected(self) -> None:
        line = LineSpec(line_id="a", points=(DataPoint(0, 0),))
        with self.assertRaises(PlotSpecError):
            PlotSpec(x_axis=_axis(), y_axis=_axis(), lines=(line, line))

    def test_unknown_mode_rejected(self) -> None:
        with self.assertRaises(PlotSpecError):
            PlotSpec(x_axis=_axis(), y_axis=_axis(), mode="edit")  # type: ignore[arg-type]

    def test_malformed_hex_color_rejected(self) -> None:
        with self.assertRaises(PlotSpecError):
            LineSpec(line_id="a", color_token="#12")

    def test_with_mode_keeps_everything_else(self) -> None:
        spec = PlotSpec(x_axis=_axis(), y_axis=_axis(), zero_line_visible=True)
        changed = spec.with_mode("read")
        self.assertEqual(changed.mode, "read")
        self.assertEqual(spec.mode, "view")
        self.assertEqual(changed.x_axis, spec.x_axis)
        self.assertTrue(changed.zero_line_visible)

    def test_line_points_keep_authored_order(self) -> None:
        line = LineSpec(line_id="a", points=(DataPoint(10, 1), DataPoint(0, 2), DataPoint(5, 3)))
        self.assertEqual([p.x for p in line.points], [10.0, 0.0, 5.0])


class PlotSpecFromMappingTests(unittest.TestCase):
    def test_authored_scenario_shape(self) -> None:
        spec = PlotSpec.from_mapping(
            {
                "xAxis": {"min": 0, "max": 10, "step": 2, "snapStep": 1, "label": "Time (s)"},
                "yAxis": {"min": -10, "max": 10, "step": 5, "label": "Velocity (m/s)"},
                "lines": [{"id": "v", "color": "line1", "points": [{"x": 0, "y": 10}, {"x": 10, "y": -10}]}],
                "areaShading": [{"fromX": 0, "toX": 10}],
                "zeroLine": True,
                "interactiveMode": "plot-points",
            }
        )
        self.assertEqual(spec.mode, "plot")
        self.assertEqual(spec.x_axis.snap_step, 1.0)
        self.assertEqual(spec.y_axis.snap_step, 5.0)
        self.assertEqual(spec.primary_line.line_id, "v")
        self.assertEqual(spec.primary_line.points[1], DataPoint(10.0, -10.0))
        self.assertEqual(spec.shade_ranges, (ShadeRange(0.0, 10.0),))
        self.assertTrue(spec.zero_line_visible)

    def test_missing_axis_is_a_spec_error(self) -> None:
        with self.assertRaises(PlotSpecError):
            PlotSpec.from_mapping({"xAxis": {"min": 0, "max": 1, "step": 1}})

    def test_missing_point_coordinate_is_a_spec_error(self) -> None:
        with self.assertRaises(PlotSpecError):
            PlotSpec.from_mapping(
                {
                    "xAxis": {"min": 0, "max": 1, "step": 1},
                    "yAxis": {"min": 0, "max": 1, "step": 1},
                    "lines": [{"id": "a", "points": [{"x": 0}]}],
                }
            )

    def test_defaults_for_optional_sections(self) -> None:
        spec = PlotSpec.from_mapping(
            {"xAxis": {"min": 0, "max": 1, "step": 1}, "yAxis": {"min": 0, "max": 1, "step": 1}}
        )
        self.assertEqual(spec.lines, ())
        self.assertEqual(spec.shade_ranges, ())
        self.assertFalse(spec.zero_line_visible)
        self.assertEqual(spec.mode, "view")


class LayoutAndStyleTests(unittest.TestCase):
    def test_plot_rect_excludes_padding(self) -> None:
        layout = PlotLayout()
        self.assertEqual(layout.plot_rect, (64.0, 24.0, 512.0, 320.0))
        self.assertEqual(layout.hit_rect, (52.0, 12.0, 536.0, 344.0))

    def test_layout_rejects_padding_that_consumes_the_plot(self) -> None:
        with self.assertRaises(PlotSpecError):
            PlotLayout(width=100, height=100, pad_left=60, pad_right=40)

    def test_style_overrides_accept_hex_colors(self) -> None:
        style = validate_style_overrides({"placed_point": "#00FF00", "palette": {"line9": "#102030"}})
        self.assertEqual(style.placed_point, (0, 255, 0, 255))
        self.assertEqual(style.line_color("line9"), (16, 32, 48, 255))
        self.assertEqual(style.line_color("line1"), (0, 122, 255, 255))

    def test_style_rejects_unknown_token(self) -> None:
        with self.assertRaises(PlotSpecError):
            validate_style_overrides({"not_a_token": 1})

    def test_literal_hex_line_color(self) -> None:
        style = validate_style_overrides()
        self.assertEqual(style.line_color("#FF000080"), (255, 0, 0, 128))


if __name__ == "__main__":
    unittest.main()
