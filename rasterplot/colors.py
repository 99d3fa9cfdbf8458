from __future__ import annotations

from rasterplot.style import Color


BLACK: Color = (0, 0, 0)
WHITE: Color = (255, 255, 255)
RED: Color = (255, 0, 0)
GREEN: Color = (0, 255, 0)
BLUE: Color = (0, 0, 255)
CYAN: Color = (0, 255, 255)
MAGENTA: Color = (255, 0, 255)
YELLOW: Color = (255, 255, 0)
LIGHT_GRAY: Color = (220, 220, 220)

__all__ = [
    "BLACK",
    "BLUE",
    "CYAN",
    "GREEN",
    "LIGHT_GRAY",
    "MAGENTA",
    "RED",
    "WHITE",
    "YELLOW",
]
