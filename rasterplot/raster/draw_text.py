from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from rasterplot.raster.canvas import RGB, RGBA, blend_coverage


DEFAULT_FONT_FAMILY = "DejaVu Sans"
DEFAULT_FONT_SIZE_PX = 12.0
FONT_FALLBACK_PATTERNS = (
    "dejavu sans",
    "dejavusans",
    "liberation sans",
    "liberationsans",
    "helvetica",
    "arial",
    "menlo",
    "dejavusansmono",
)


@dataclass(frozen=True)
class TextMetrics:
    """Ink box of a string plus its placement relative to the baseline."""

    width: int
    height: int
    # pixels from the top of the ink box down to the baseline
    ascent: int
    # font descender depth below the baseline
    descent: int


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGB | RGBA,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    rotate_deg: int = 0,
) -> None:
    """Draw ``text`` with the top-left corner of its ink box at ``(x, y)``."""
    if not text:
        return
    mask = text_mask(text, font_family=font_family, font_size_px=font_size_px, rotate_deg=rotate_deg)
    blend_coverage(dst, x, y, mask, color)


def text_mask(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    rotate_deg: int = 0,
) -> np.ndarray:
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    return _rotate_mask(_render_mask(text=text, font=font), rotate_deg=rotate_deg)


def text_size(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
    rotate_deg: int = 0,
) -> tuple[int, int]:
    metrics = text_metrics(text, font_family=font_family, font_size_px=font_size_px)
    if _normalize_quarter_turns(rotate_deg) % 2 == 1:
        return (metrics.height, metrics.width)
    return (metrics.width, metrics.height)


def text_metrics(
    text: str,
    *,
    font_family: str = DEFAULT_FONT_FAMILY,
    font_size_px: float = DEFAULT_FONT_SIZE_PX,
) -> TextMetrics:
    font = _load_font(font_family=font_family, font_size_px=font_size_px)
    if isinstance(font, ImageFont.FreeTypeFont):
        ascent, descent = font.getmetrics()
    else:
        ascent, descent = 0, 0
    if not text:
        return TextMetrics(width=0, height=max(1, int(ascent + descent)), ascent=int(ascent), descent=int(descent))
    left, top, right, bottom = font.getbbox(text)
    w = max(0, int(right - left))
    h = max(1, int(bottom - top))
    ink_ascent = int(ascent - top) if isinstance(font, ImageFont.FreeTypeFont) else h
    return TextMetrics(width=w, height=h, ascent=ink_ascent, descent=int(descent))


@lru_cache(maxsize=128)
def _render_mask(text: str, font: ImageFont.FreeTypeFont | ImageFont.ImageFont) -> np.ndarray:
    if not text:
        return np.zeros((1, 1), dtype=np.uint8)
    left, top, right, bottom = font.getbbox(text)
    width = max(1, int(right - left))
    height = max(1, int(bottom - top))
    image = Image.new("L", (width, height), 0)
    draw = ImageDraw.Draw(image)
    draw.text((-left, -top), text, fill=255, font=font)
    mask = np.asarray(image, dtype=np.uint8)
    mask.setflags(write=False)
    return mask


@lru_cache(maxsize=64)
def _load_font(font_family: str, font_size_px: float) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    size = max(1, int(round(font_size_px)))
    font_path = _resolve_font_path(font_family)
    if font_path is None:
        return ImageFont.load_default(size=size)
    try:
        return ImageFont.truetype(str(font_path), size=size)
    except OSError:
        return ImageFont.load_default(size=size)


@lru_cache(maxsize=16)
def _resolve_font_path(font_family: str) -> Path | None:
    wanted = font_family.strip().lower() if font_family.strip() else DEFAULT_FONT_FAMILY.lower()
    patterns = (wanted,) + FONT_FALLBACK_PATTERNS

    font_dirs = [
        Path.home() / "Library" / "Fonts",
        Path("/Library/Fonts"),
        Path("/System/Library/Fonts"),
        Path("/System/Library/Fonts/Supplemental"),
        Path("/usr/share/fonts"),
        Path("/usr/local/share/fonts"),
        Path("C:/Windows/Fonts"),
    ]

    candidates: list[Path] = []
    for base in font_dirs:
        if not base.exists():
            continue
        for ext in ("*.ttf", "*.otf", "*.ttc"):
            candidates.extend(sorted(base.rglob(ext)))

    for pattern in patterns:
        p = pattern.replace(" ", "")
        for path in candidates:
            stem = path.stem.lower().replace(" ", "")
            # regular faces only
            if p == stem or (p in stem and not any(tag in stem for tag in ("bold", "oblique", "italic"))):
                return path
    return None


def _normalize_quarter_turns(rotate_deg: int) -> int:
    if rotate_deg % 90 != 0:
        raise ValueError("rotate_deg must be a multiple of 90")
    return (rotate_deg // 90) % 4


def _rotate_mask(mask: np.ndarray, *, rotate_deg: int) -> np.ndarray:
    turns = _normalize_quarter_turns(rotate_deg)
    if turns == 0:
        return mask
    return np.rot90(mask, k=turns)
