from __future__ import annotations

import numpy as np


RGB = tuple[int, int, int]
RGBA = tuple[int, int, int, int]


def as_rgba(color: RGB | RGBA) -> RGBA:
    if len(color) == 3:
        r, g, b = color
        return (int(r), int(g), int(b), 255)
    r, g, b, a = color
    return (int(r), int(g), int(b), int(a))


def new_canvas(width: int, height: int, color: RGB | RGBA = (255, 255, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width and height must be > 0")
    canvas = np.zeros((height, width, 4), dtype=np.uint8)
    clear_canvas(canvas, color)
    return canvas


def clear_canvas(dst: np.ndarray, color: RGB | RGBA) -> None:
    r, g, b, a = as_rgba(color)
    dst[:, :, 0] = r
    dst[:, :, 1] = g
    dst[:, :, 2] = b
    dst[:, :, 3] = a


def composite(base: np.ndarray, scratch: np.ndarray, alpha: float) -> None:
    """Blend ``scratch`` over ``base`` in place: ``alpha * scratch + (1 - alpha) * base``."""
    if base.shape != scratch.shape:
        raise ValueError("composite buffers must have identical shapes")
    a = float(max(0.0, min(1.0, alpha)))
    mixed = scratch[:, :, :3].astype(np.float32) * a + base[:, :, :3].astype(np.float32) * (1.0 - a)
    base[:, :, :3] = np.clip(np.rint(mixed), 0, 255).astype(np.uint8)
    base[:, :, 3] = 255


def fill_mask(dst: np.ndarray, mask: np.ndarray, color: RGB | RGBA) -> None:
    """Paint every pixel selected by a boolean ``mask`` with an opaque color."""
    if mask.shape != dst.shape[:2]:
        raise ValueError("mask shape must match canvas height/width")
    r, g, b, _ = as_rgba(color)
    dst[mask, 0] = r
    dst[mask, 1] = g
    dst[mask, 2] = b
    dst[mask, 3] = 255


def blend_coverage(dst: np.ndarray, x: int, y: int, coverage: np.ndarray, color: RGB | RGBA) -> None:
    """Blend an 8-bit coverage mask (glyphs) onto ``dst`` with its top-left at ``(x, y)``."""
    h, w = coverage.shape
    if h <= 0 or w <= 0:
        return
    x0 = max(0, x)
    y0 = max(0, y)
    x1 = min(dst.shape[1], x + w)
    y1 = min(dst.shape[0], y + h)
    if x1 <= x0 or y1 <= y0:
        return

    cov = coverage[y0 - y : y1 - y, x0 - x : x1 - x].astype(np.float32) / 255.0
    r, g, b, a = as_rgba(color)
    src_alpha = (a / 255.0) * cov[:, :, None]
    if not np.any(src_alpha > 0):
        return
    patch = dst[y0:y1, x0:x1]
    src_rgb = np.asarray((r, g, b), dtype=np.float32).reshape(1, 1, 3)
    out = src_rgb * src_alpha + patch[:, :, :3].astype(np.float32) * (1.0 - src_alpha)
    patch[:, :, :3] = np.clip(np.rint(out), 0, 255).astype(np.uint8)
    patch[:, :, 3] = 255


def draw_pixel(dst: np.ndarray, x: int, y: int, color: RGB | RGBA) -> None:
    if y < 0 or y >= dst.shape[0] or x < 0 or x >= dst.shape[1]:
        return
    r, g, b, a = as_rgba(color)
    if a >= 255:
        dst[y, x, 0:3] = (r, g, b)
    else:
        k = a / 255.0
        current = dst[y, x, :3].astype(np.float32)
        dst[y, x, 0:3] = (np.asarray((r, g, b), dtype=np.float32) * k + current * (1.0 - k)).astype(np.uint8)
    dst[y, x, 3] = 255


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGB | RGBA) -> None:
    if y < 0 or y >= dst.shape[0]:
        return
    xa = max(0, min(x0, x1))
    xb = min(dst.shape[1] - 1, max(x0, x1))
    if xa > xb:
        return
    segment = dst[y, xa : xb + 1]
    r, g, b, a = as_rgba(color)
    k = a / 255.0
    segment[:, :3] = (np.asarray((r, g, b), dtype=np.float32) * k + segment[:, :3].astype(np.float32) * (1.0 - k)).astype(np.uint8)
    segment[:, 3] = 255


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGB | RGBA) -> None:
    if x < 0 or x >= dst.shape[1]:
        return
    ya = max(0, min(y0, y1))
    yb = min(dst.shape[0] - 1, max(y0, y1))
    if ya > yb:
        return
    segment = dst[ya : yb + 1, x]
    r, g, b, a = as_rgba(color)
    k = a / 255.0
    segment[:, :3] = (np.asarray((r, g, b), dtype=np.float32) * k + segment[:, :3].astype(np.float32) * (1.0 - k)).astype(np.uint8)
    segment[:, 3] = 255


def fill_rect(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int, color: RGB | RGBA) -> None:
    left = max(0, min(int(x0), int(x1)))
    right = min(dst.shape[1] - 1, max(int(x0), int(x1)))
    top = max(0, min(int(y0), int(y1)))
    bottom = min(dst.shape[0] - 1, max(int(y0), int(y1)))
    if right < left or bottom < top:
        return
    for yy in range(top, bottom + 1):
        draw_hline(dst, left, right, yy, color)
