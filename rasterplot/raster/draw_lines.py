from __future__ import annotations

import numpy as np

from rasterplot.raster.canvas import RGB, RGBA, draw_pixel
from rasterplot.raster.clip import clip_segment


def draw_polyline(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGB | RGBA, width: int = 1) -> None:
    """Connect consecutive pixel points; fewer than two points draw nothing."""
    if xs.size < 2:
        return
    for i in range(xs.size - 1):
        _draw_line_segment(dst, int(xs[i]), int(ys[i]), int(xs[i + 1]), int(ys[i + 1]), color=color, width=width)


def _draw_line_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGB | RGBA, width: int) -> None:
    clipped = _clip_segment(dst, x0, y0, x1, y1, pad=max(1, width))
    if clipped is None:
        return
    x0, y0, x1, y1 = clipped
    dx = abs(x1 - x0)
    sx = 1 if x0 < x1 else -1
    dy = -abs(y1 - y0)
    sy = 1 if y0 < y1 else -1
    err = dx + dy

    while True:
        _draw_square_brush(dst, x0, y0, color=color, width=width)
        if x0 == x1 and y0 == y1:
            break
        e2 = 2 * err
        if e2 >= dy:
            err += dy
            x0 += sx
        if e2 <= dx:
            err += dx
            y0 += sy


def _clip_segment(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, *, pad: int) -> tuple[int, int, int, int] | None:
    # Pull far-away endpoints in along the segment so Bresenham never walks
    # millions of off-canvas pixels.
    box = (-pad, -pad, dst.shape[1] + pad, dst.shape[0] + pad)
    clipped = clip_segment(box, x0, y0, x1, y1)
    if clipped is None:
        return None
    return tuple(int(round(v)) for v in clipped)
