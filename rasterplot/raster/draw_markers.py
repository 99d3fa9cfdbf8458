from __future__ import annotations

import numpy as np

from rasterplot.raster.canvas import RGB, RGBA, as_rgba


def draw_markers(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGB | RGBA, radius: int = 1) -> None:
    """Draw a filled disc of fixed pixel ``radius`` at every ``(x, y)``."""
    r = max(0, int(radius))
    offsets = np.arange(-r, r + 1)
    disc = (offsets[:, None] ** 2 + offsets[None, :] ** 2) <= r * r + r
    for x, y in zip(xs.tolist(), ys.tolist(), strict=False):
        _draw_marker(dst, int(x), int(y), disc=disc, radius=r, color=color)


def _draw_marker(dst: np.ndarray, x: int, y: int, *, disc: np.ndarray, radius: int, color: RGB | RGBA) -> None:
    x0 = max(0, x - radius)
    y0 = max(0, y - radius)
    x1 = min(dst.shape[1], x + radius + 1)
    y1 = min(dst.shape[0], y + radius + 1)
    if x1 <= x0 or y1 <= y0:
        return
    mask = disc[y0 - (y - radius) : y1 - (y - radius), x0 - (x - radius) : x1 - (x - radius)]
    r, g, b, _ = as_rgba(color)
    patch = dst[y0:y1, x0:x1]
    patch[mask, 0] = r
    patch[mask, 1] = g
    patch[mask, 2] = b
    patch[mask, 3] = 255
