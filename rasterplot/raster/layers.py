from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from rasterplot.raster.draw_text import DEFAULT_FONT_FAMILY, text_mask


@dataclass
class RotatedLabelCache:
    """Glyph coverage for a label turned 90 degrees counter-clockwise.

    The rotated mask is rebuilt only after :meth:`invalidate` or when the text
    or font changes; ``builds`` counts the rebuilds.
    """

    font_family: str = DEFAULT_FONT_FAMILY
    font_size_px: float = 13.0
    text: str | None = None
    mask: np.ndarray | None = None
    valid: bool = False
    builds: int = 0

    def invalidate(self) -> None:
        self.valid = False
        self.mask = None

    def get(self, text: str) -> np.ndarray:
        if self.valid and self.mask is not None and self.text == text:
            return self.mask
        self.mask = text_mask(text, font_family=self.font_family, font_size_px=self.font_size_px, rotate_deg=90)
        self.text = text
        self.valid = True
        self.builds += 1
        return self.mask
