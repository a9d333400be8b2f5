from __future__ import annotations

from pathlib import Path

import numpy as np
from PIL import Image

from quizgraph import DataPoint, InteractivePlot, OverlayEvent, PlotSpec
from quizgraph.raster import rasterize_scene
from quizgraph.svg import scene_to_svg


SCENARIO = {
    "xAxis": {"min": 0, "max": 50, "step": 10, "snapStep": 5, "label": "Time (s)"},
    "yAxis": {"min": -20, "max": 40, "step": 10, "snapStep": 5, "label": "Velocity (m/s)"},
    "lines": [
        {
            "id": "velocity",
            "color": "line1",
            "points": [{"x": 0, "y": -10}, {"x": 20, "y": 10}, {"x": 40, "y": 30}, {"x": 50, "y": 20}],
        }
    ],
    "areaShading": [{"fromX": 0, "toX": 40}],
    "zeroLine": True,
    "interactiveMode": "plot-points",
}


def _click(plot: InteractivePlot, x: float, y: float) -> None:
    sp = plot.mapper.to_screen(DataPoint(x, y))
    plot.handle_event(OverlayEvent("move", sp.x, sp.y))
    plot.handle_event(OverlayEvent("commit", sp.x, sp.y))


def _save_rgba(path: Path, frame: np.ndarray) -> None:
    Image.fromarray(frame).save(path)


def main() -> None:
    out_dir = Path(__file__).resolve().parent / "out"
    out_dir.mkdir(parents=True, exist_ok=True)

    answers: list[tuple[DataPoint, ...]] = []
    plot = InteractivePlot(PlotSpec.from_mapping(SCENARIO), on_points_change=answers.append)
    for x, y in ((30, 5), (10, 15), (45, 25)):
        _click(plot, x, y)

    scene = plot.render()
    png_path = out_dir / "velocity_quiz.png"
    svg_path = out_dir / "velocity_quiz.svg"
    _save_rgba(png_path, rasterize_scene(scene))
    svg_path.write_text(scene_to_svg(scene) + "\n", encoding="utf-8")

    print(f"placed points: {answers[-1] if answers else ()}")
    print(f"wrote {png_path}")
    print(f"wrote {svg_path}")


if __name__ == "__main__":
    main()
