from .canvas import blend_region, draw_pixel, fill_rect, new_canvas
from .draw_lines import draw_polyline, draw_segment
from .draw_markers import draw_circle, draw_cross
from .draw_text import draw_text, text_mask
from .fill import fill_polygon
from .render import rasterize_scene

__all__ = [
    "blend_region",
    "draw_circle",
    "draw_cross",
    "draw_pixel",
    "draw_polyline",
    "draw_segment",
    "draw_text",
    "fill_polygon",
    "fill_rect",
    "new_canvas",
    "rasterize_scene",
    "text_mask",
]
