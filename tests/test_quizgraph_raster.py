from __future__ import annotations

import unittest

import numpy as np

from quizgraph import AxisSpec, DataPoint, InteractivePlot, LineSpec, OverlayEvent, PlotScene, PlotSpec, PlotStyle, ShadeRange
from quizgraph.raster import draw_circle, draw_cross, draw_segment, fill_polygon, fill_rect, new_canvas, rasterize_scene, text_mask


RED = (255, 0, 0, 255)


class RasterPrimitiveTests(unittest.TestCase):
    def test_new_canvas_shape_and_validation(self) -> None:
        canvas = new_canvas(12, 8, (1, 2, 3, 255))
        self.assertEqual(canvas.shape, (8, 12, 4))
        self.assertEqual(canvas.dtype, np.uint8)
        self.assertEqual(tuple(canvas[7, 11]), (1, 2, 3, 255))
        with self.assertRaises(ValueError):
            new_canvas(0, 8)

    def test_fill_rect_clips_to_canvas(self) -> None:
        canvas = new_canvas(10, 10)
        fill_rect(canvas, 5, 5, 20, 20, RED)
        self.assertEqual(tuple(canvas[9, 9]), RED)
        self.assertEqual(tuple(canvas[4, 4]), (255, 255, 255, 255))

    def test_fill_polygon_covers_pixel_centres_inside(self) -> None:
        canvas = new_canvas(10, 10)
        fill_polygon(canvas, [(2, 2), (8, 2), (8, 8), (2, 8)], RED)
        self.assertEqual(tuple(canvas[5, 5]), RED)
        self.assertEqual(tuple(canvas[2, 2]), RED)
        self.assertEqual(tuple(canvas[7, 7]), RED)
        self.assertEqual(tuple(canvas[8, 8]), (255, 255, 255, 255))
        self.assertEqual(tuple(canvas[1, 5]), (255, 255, 255, 255))

    def test_translucent_fill_blends(self) -> None:
        canvas = new_canvas(4, 4, (0, 0, 0, 255))
        fill_rect(canvas, 0, 0, 4, 4, (255, 255, 255, 128))
        self.assertTrue(np.all(canvas[..., :3] == 128))

    def test_dashed_segment_leaves_gaps(self) -> None:
        canvas = new_canvas(20, 3)
        draw_segment(canvas, 0, 1, 19, 1, RED, 1.0, (4.0, 4.0))
        row = canvas[1, :, 1]
        self.assertEqual(row[1], 0)
        self.assertEqual(row[6], 255)
        self.assertEqual(row[9], 0)

    def test_markers(self) -> None:
        canvas = new_canvas(30, 30)
        draw_circle(canvas, 8, 8, 4, RED, stroke=(0, 0, 255, 255), stroke_width=2.0)
        self.assertEqual(tuple(canvas[8, 8]), RED)
        self.assertEqual(tuple(canvas[8, 13]), (0, 0, 255, 255))
        draw_cross(canvas, 22, 22, 4, RED)
        self.assertEqual(tuple(canvas[22, 22]), RED)
        self.assertEqual(tuple(canvas[18, 26]), RED)
        self.assertEqual(tuple(canvas[22, 26]), (255, 255, 255, 255))

    def test_text_mask_rotation(self) -> None:
        mask = text_mask("Velocity", 13)
        self.assertEqual(mask.dtype, np.uint8)
        self.assertGreater(int(mask.max()), 0)
        rotated = text_mask("Velocity", 13, rotate_deg=-90)
        self.assertEqual(rotated.shape, mask.shape[::-1])
        with self.assertRaises(ValueError):
            text_mask("x", 12, rotate_deg=45)


class RasterizeSceneTests(unittest.TestCase):
    def setUp(self) -> None:
        spec = PlotSpec(
            x_axis=AxisSpec(min=0, max=50, step=10, snap_step=5, label="Time (s)"),
            y_axis=AxisSpec(min=-20, max=40, step=10, snap_step=5, label="Velocity (m/s)"),
            lines=(LineSpec("v", "line1", (DataPoint(0, -10), DataPoint(20, 10), DataPoint(40, 30), DataPoint(50, 20))),),
            shade_ranges=(ShadeRange(0, 40),),
            zero_line_visible=True,
            mode="plot",
        )
        self.plot = InteractivePlot(spec)

    def test_rasterized_plot(self) -> None:
        sp = self.plot.mapper.to_screen(DataPoint(10, 10))
        self.plot.handle_event(OverlayEvent("commit", sp.x, sp.y))
        canvas = rasterize_scene(self.plot.render())

        self.assertEqual(canvas.shape, (400, 600, 4))
        self.assertEqual(tuple(canvas[2, 2]), (255, 255, 255, 255))
        self.assertEqual(tuple(canvas[int(round(sp.y)), int(round(sp.x))]), PlotStyle().placed_point)

        # shaded below zero between x=0 and x=10, above zero from x=10 onward
        neg = canvas[248, 136].astype(int)
        pos = canvas[200, 391].astype(int)
        self.assertGreater(neg[0], neg[1])
        self.assertGreater(pos[2], pos[0])

    def test_unknown_scene_item_is_rejected(self) -> None:
        with self.assertRaises(TypeError):
            rasterize_scene(PlotScene(4, 4, (object(),)))  # type: ignore[arg-type]


if __name__ == "__main__":
    unittest.main()
