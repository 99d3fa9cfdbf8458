from __future__ import annotations

import math
from typing import Sequence

import numpy as np
from PIL import Image, ImageDraw

from rasterplot.raster.canvas import RGB, RGBA, fill_mask
from rasterplot.raster.clip import clip_polygon


Point = tuple[float, float]

# Vertices used to approximate a rotated ellipse outline.
ELLIPSE_SEGMENTS = 96


def fill_polygon(dst: np.ndarray, points: Sequence[Point], color: RGB | RGBA) -> None:
    if len(points) < 3:
        return
    fill_mask(dst, polygon_mask(dst.shape, points), color)


def stroke_polygon(dst: np.ndarray, points: Sequence[Point], color: RGB | RGBA, width: int = 1) -> None:
    if not points:
        return
    fill_mask(dst, polygon_outline_mask(dst.shape, points, width=width), color)


def fill_ellipse(
    dst: np.ndarray,
    center: Point,
    radii: tuple[float, float],
    color: RGB | RGBA,
    *,
    angle_deg: float = 0.0,
) -> None:
    fill_mask(dst, ellipse_mask(dst.shape, center, radii, angle_deg=angle_deg), color)


def stroke_ellipse(
    dst: np.ndarray,
    center: Point,
    radii: tuple[float, float],
    color: RGB | RGBA,
    width: int = 1,
    *,
    angle_deg: float = 0.0,
) -> None:
    fill_mask(dst, ellipse_mask(dst.shape, center, radii, angle_deg=angle_deg, outline_width=width), color)


def polygon_mask(shape: tuple[int, ...], points: Sequence[Point]) -> np.ndarray:
    image, draw = _new_mask(shape)
    pts = _pixel_points(shape, points)
    if len(pts) >= 3:
        draw.polygon(pts, fill=255)
    return np.asarray(image, dtype=np.uint8) > 0


def polygon_outline_mask(shape: tuple[int, ...], points: Sequence[Point], *, width: int = 1) -> np.ndarray:
    image, draw = _new_mask(shape)
    pts = _pixel_points(shape, points, pad=max(1, int(width)))
    if len(pts) == 1:
        draw.point(pts, fill=255)
    elif len(pts) > 1:
        closed = pts + [pts[0]] if len(pts) > 2 else pts
        draw.line(closed, fill=255, width=max(1, int(width)), joint="curve")
    return np.asarray(image, dtype=np.uint8) > 0


def ellipse_mask(
    shape: tuple[int, ...],
    center: Point,
    radii: tuple[float, float],
    *,
    angle_deg: float = 0.0,
    outline_width: int | None = None,
) -> np.ndarray:
    """Coverage of an ellipse, filled, or only its outline when ``outline_width`` is given.

    ``angle_deg`` rotates counter-clockwise as seen on screen.
    """
    cx, cy = center
    rx = max(0.0, abs(float(radii[0])))
    ry = max(0.0, abs(float(radii[1])))
    image, draw = _new_mask(shape)
    if math.isclose(angle_deg % 180.0, 0.0, abs_tol=1e-9) or math.isclose(rx, ry):
        bbox = [cx - rx, cy - ry, cx + rx, cy + ry]
        if outline_width is None:
            draw.ellipse(bbox, fill=255)
        else:
            draw.ellipse(bbox, outline=255, width=max(1, int(outline_width)))
    else:
        pts = ellipse_points(center, (rx, ry), angle_deg=angle_deg)
        if outline_width is None:
            clipped = _pixel_points(shape, pts)
            if len(clipped) >= 3:
                draw.polygon(clipped, fill=255)
        else:
            closed = _pixel_points(shape, pts, pad=max(1, int(outline_width)))
            if closed:
                draw.line(closed + [closed[0]], fill=255, width=max(1, int(outline_width)), joint="curve")
    return np.asarray(image, dtype=np.uint8) > 0


def ellipse_points(center: Point, radii: tuple[float, float], *, angle_deg: float = 0.0) -> list[Point]:
    cx, cy = center
    rx, ry = radii
    a = math.radians(angle_deg)
    cos_a, sin_a = math.cos(a), math.sin(a)
    out: list[Point] = []
    for i in range(ELLIPSE_SEGMENTS):
        t = 2.0 * math.pi * i / ELLIPSE_SEGMENTS
        ex = rx * math.cos(t)
        ey = ry * math.sin(t)
        # pixel y grows downward, so a counter-clockwise turn subtracts
        out.append((cx + ex * cos_a - ey * sin_a, cy - (ex * sin_a + ey * cos_a)))
    return out


def rotated_rect_points(center: Point, size: tuple[float, float], *, angle_deg: float = 0.0) -> list[Point]:
    cx, cy = center
    hw = 0.5 * float(size[0])
    hh = 0.5 * float(size[1])
    a = math.radians(angle_deg)
    cos_a, sin_a = math.cos(a), math.sin(a)
    out: list[Point] = []
    for dx, dy in ((-hw, -hh), (hw, -hh), (hw, hh), (-hw, hh)):
        out.append((cx + dx * cos_a - dy * sin_a, cy - (dx * sin_a + dy * cos_a)))
    return out


def _new_mask(shape: tuple[int, ...]) -> tuple[Image.Image, ImageDraw.ImageDraw]:
    height, width = int(shape[0]), int(shape[1])
    image = Image.new("L", (width, height), 0)
    return image, ImageDraw.Draw(image)


def _pixel_points(shape: tuple[int, ...], points: Sequence[Point], *, pad: int = 1) -> list[tuple[int, int]]:
    # Vertices far off the canvas are clipped to a band around it first so
    # Pillow never scans the polygon across huge pixel ranges.
    band = pad + 2
    box = (-band, -band, int(shape[1]) + band, int(shape[0]) + band)
    return [(int(round(x)), int(round(y))) for x, y in clip_polygon(box, points)]
