from .canvas import blend_coverage, clear_canvas, composite, draw_hline, draw_pixel, draw_vline, fill_mask, fill_rect, new_canvas
from .clip import clip_polygon, clip_segment
from .draw_lines import draw_polyline
from .draw_markers import draw_markers
from .draw_shapes import (
    ellipse_points,
    fill_ellipse,
    fill_polygon,
    rotated_rect_points,
    stroke_ellipse,
    stroke_polygon,
)
from .draw_text import TextMetrics, draw_text, text_metrics, text_size
from .layers import RotatedLabelCache

__all__ = [
    "RotatedLabelCache",
    "TextMetrics",
    "blend_coverage",
    "clear_canvas",
    "clip_polygon",
    "clip_segment",
    "composite",
    "draw_hline",
    "draw_markers",
    "draw_pixel",
    "draw_polyline",
    "draw_text",
    "draw_vline",
    "ellipse_points",
    "fill_ellipse",
    "fill_mask",
    "fill_polygon",
    "fill_rect",
    "new_canvas",
    "rotated_rect_points",
    "stroke_ellipse",
    "stroke_polygon",
    "text_metrics",
    "text_size",
]
