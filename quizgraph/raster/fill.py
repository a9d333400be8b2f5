from __future__ import annotations

from typing import Sequence

import numpy as np

from quizgraph.raster.canvas import blend_region
from quizgraph.style import RGBA


def fill_polygon(dst: np.ndarray, points: Sequence[tuple[float, float]], color: RGBA) -> None:
    """Even-odd scanline fill sampled at pixel centres."""
    if len(points) < 3:
        return
    pts = np.asarray(points, dtype=np.float64)
    xs = pts[:, 0]
    ys = pts[:, 1]
    x_next = np.roll(xs, -1)
    y_next = np.roll(ys, -1)

    row_min = max(0, int(np.floor(ys.min())))
    row_max = min(dst.shape[0] - 1, int(np.ceil(ys.max())))
    for row in range(row_min, row_max + 1):
        sample = row + 0.5
        crosses = ((ys <= sample) & (y_next > sample)) | ((y_next <= sample) & (ys > sample))
        if not np.any(crosses):
            continue
        t = (sample - ys[crosses]) / (y_next[crosses] - ys[crosses])
        hits = np.sort(xs[crosses] + t * (x_next[crosses] - xs[crosses]))
        for left, right in zip(hits[0::2], hits[1::2]):
            c0 = max(0, int(np.ceil(left - 0.5)))
            c1 = min(dst.shape[1] - 1, int(np.floor(right - 0.5)))
            if c1 < c0:
                continue
            blend_region(dst, slice(row, row + 1), slice(c0, c1 + 1), color)
