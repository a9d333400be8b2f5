from __future__ import annotations

from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from quizgraph.raster.canvas import blend_region
from quizgraph.style import RGBA


SANS_FONT_PATTERNS = (
    "sfns",
    "helvetica",
    "arial",
    "dejavusans",
    "liberationsans",
)
FONT_DIRS = (
    Path.home() / "Library" / "Fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
)


def text_mask(text: str, font_px: float, *, bold: bool = False, rotate_deg: int = 0) -> np.ndarray:
    """Coverage mask (uint8, 0..255) for `text`; `rotate_deg` uses screen convention (positive is clockwise)."""
    if rotate_deg % 90 != 0:
        raise ValueError("rotate_deg must be a multiple of 90")
    mask = _render_mask(text, _load_font(max(1, int(round(font_px)))), bold)
    turns = (-rotate_deg // 90) % 4
    return np.rot90(mask, k=turns) if turns else mask


def draw_text(
    dst: np.ndarray,
    x: float,
    y: float,
    text: str,
    color: RGBA,
    *,
    font_px: float = 12.0,
    anchor: str = "start",
    rotate_deg: int = 0,
    bold: bool = False,
) -> None:
    """Draw text with (x, y) on the baseline; rotated text is centred on (x, y)."""
    if not text:
        return
    mask = text_mask(text, font_px, bold=bold, rotate_deg=rotate_deg)
    h, w = mask.shape
    if rotate_deg % 360 != 0:
        left = int(round(x - w / 2.0))
        top = int(round(y - h / 2.0))
    else:
        offsets = {"start": 0.0, "middle": w / 2.0, "end": float(w)}
        left = int(round(x - offsets.get(anchor, 0.0)))
        top = int(round(y - h))
    _blend_mask(dst, left, top, mask, color)


def _blend_mask(dst: np.ndarray, left: int, top: int, mask: np.ndarray, color: RGBA) -> None:
    h, w = mask.shape
    x0 = max(0, left)
    y0 = max(0, top)
    x1 = min(dst.shape[1], left + w)
    y1 = min(dst.shape[0], top + h)
    if x1 <= x0 or y1 <= y0:
        return
    cov = mask[y0 - top : y1 - top, x0 - left : x1 - left].astype(np.float32) / 255.0
    if not np.any(cov > 0):
        return
    blend_region(dst, slice(y0, y1), slice(x0, x1), color, cov)


@lru_cache(maxsize=256)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont, bold: bool) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left) + (1 if bold else 0))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    if bold:
        draw.text((-left + 1, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=32)
def _load_font(size: int) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    path = _find_font_path()
    if path is not None:
        try:
            return ImageFont.truetype(str(path), size=size)
        except OSError:
            return ImageFont.load_default(size=size)
    return ImageFont.load_default(size=size)


@lru_cache(maxsize=1)
def _find_font_path() -> Path | None:
    candidates: list[Path] = []
    for base in FONT_DIRS:
        if base.exists():
            candidates.extend(p for p in base.rglob("*") if p.suffix.lower() in {".ttf", ".otf"})
    for pattern in SANS_FONT_PATTERNS:
        for path in candidates:
            if path.stem.lower().replace(" ", "").replace("-", "").startswith(pattern):
                return path
    return None
