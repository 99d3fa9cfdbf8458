from __future__ import annotations

from dataclasses import dataclass

from rasterplot.raster.draw_text import DEFAULT_FONT_FAMILY


Color = tuple[int, int, int]


@dataclass(frozen=True)
class ShapeStyle:
    """Stroke and fill settings shared by the filled shape commands.

    ``fill_alpha`` selects the fill path: values in ``(0, 1)`` are blended over
    whatever is already drawn, ``>= 1`` paints the fill opaque and ``<= 0``
    skips the fill. The stroke is always opaque and is skipped when
    ``thickness <= 0``.
    """

    line_color: Color = (0, 0, 0)
    thickness: float = 1.0
    fill_color: Color = (255, 255, 255)
    fill_alpha: float = 1.0


@dataclass(frozen=True)
class FigureStyle:
    background: Color = (255, 255, 255)
    axis_color: Color = (0, 0, 0)
    grid_color: Color = (220, 220, 220)
    text_color: Color = (0, 0, 0)
    legend_background: Color = (255, 255, 255)
    legend_border: Color = (0, 0, 0)
    font_family: str = DEFAULT_FONT_FAMILY
    tick_font_px: float = 11.0
    label_font_px: float = 13.0
    title_font_px: float = 16.0
    legend_font_px: float = 11.0
    legend_swatch_w: int = 20
    legend_text_gap: int = 8
    legend_pad: int = 5
    legend_row_pad: int = 6
    legend_marker_radius: int = 4


@dataclass(frozen=True)
class PlotMargins:
    """Fixed pixel insets around the plot area."""

    left: int = 60
    right: int = 20
    top: int = 40
    bottom: int = 60
    tick_len: int = 5
    # distance of the rotated y-label from the plot's left edge
    ylabel_inset: int = 55
    # gap between the x-label and the bottom edge of the figure
    xlabel_inset: int = 10

    def __post_init__(self) -> None:
        if min(self.left, self.right, self.top, self.bottom) < 0:
            raise ValueError("margins must be >= 0")
        if self.tick_len < 0:
            raise ValueError("tick_len must be >= 0")

    def plot_size(self, width: int, height: int) -> tuple[int, int]:
        return (width - self.left - self.right, height - self.top - self.bottom)
