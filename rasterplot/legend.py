from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Sequence

import numpy as np

from rasterplot.commands import LegendSwatch, PlotCommand
from rasterplot.raster import draw_hline, draw_markers, draw_polyline, draw_text, draw_vline, fill_rect, text_metrics
from rasterplot.scales import PlotTransform
from rasterplot.style import Color, FigureStyle


LOGGER = logging.getLogger(__name__)

LEGEND_LOCATIONS: tuple[str, ...] = (
    "northWest",
    "north",
    "northEast",
    "west",
    "center",
    "east",
    "southWest",
    "south",
    "southEast",
)
DEFAULT_LEGEND_LOCATION = "northEast"
FALLBACK_LEGEND_LOCATION = "southEast"

_LOCATION_ALIASES: dict[str, str] = {
    "upper left": "northWest",
    "upper center": "north",
    "upper right": "northEast",
    "center left": "west",
    "center right": "east",
    "lower left": "southWest",
    "lower center": "south",
    "lower right": "southEast",
}
_LOCATIONS_BY_KEY: dict[str, str] = {loc.lower(): loc for loc in LEGEND_LOCATIONS}


@dataclass(frozen=True)
class LegendEntry:
    label: str
    swatch: LegendSwatch
    color: Color


@dataclass(frozen=True)
class LegendLayout:
    entries: tuple[LegendEntry, ...]
    font_px: float
    swatch_w: int
    text_gap: int
    pad: int
    line_h: int
    box_w: int
    box_h: int


def resolve_location(loc: str) -> str:
    """Map a location keyword to one of :data:`LEGEND_LOCATIONS`.

    Unknown keywords fall back to the south-east corner.
    """
    key = " ".join(str(loc).strip().lower().split())
    if key in _LOCATION_ALIASES:
        return _LOCATION_ALIASES[key]
    resolved = _LOCATIONS_BY_KEY.get(key.replace(" ", ""))
    if resolved is None:
        LOGGER.warning("unknown legend location %r, using %s", loc, FALLBACK_LEGEND_LOCATION)
        return FALLBACK_LEGEND_LOCATION
    return resolved


def legend_entries(commands: Sequence[PlotCommand]) -> tuple[LegendEntry, ...]:
    return tuple(
        LegendEntry(label=cmd.label, swatch=cmd.legend_swatch, color=cmd.legend_color)
        for cmd in commands
        if cmd.label
    )


def build_legend_layout(commands: Sequence[PlotCommand], style: FigureStyle) -> LegendLayout | None:
    entries = legend_entries(commands)
    if not entries:
        return None
    font_px = style.legend_font_px
    max_w = 0
    text_h = 0
    for entry in entries:
        metrics = text_metrics(entry.label, font_family=style.font_family, font_size_px=font_px)
        max_w = max(max_w, metrics.width)
        text_h = max(text_h, metrics.height + metrics.descent)
    line_h = text_h + style.legend_row_pad
    box_w = style.legend_pad + style.legend_swatch_w + style.legend_text_gap + max_w + style.legend_pad
    box_h = line_h * len(entries) + 2 * style.legend_pad
    return LegendLayout(
        entries=entries,
        font_px=font_px,
        swatch_w=style.legend_swatch_w,
        text_gap=style.legend_text_gap,
        pad=style.legend_pad,
        line_h=line_h,
        box_w=box_w,
        box_h=box_h,
    )


def legend_anchor(loc: str, box_w: int, box_h: int, transform: PlotTransform) -> tuple[int, int]:
    """Top-left pixel of the legend box for ``loc`` inside the plot area."""
    x0, y0, plot_w, plot_h = transform.plot_rect()
    left = x0
    right = x0 + plot_w - box_w
    top = y0
    bottom = y0 + plot_h - box_h
    hmid = x0 + (plot_w - box_w) // 2
    vmid = y0 + (plot_h - box_h) // 2

    anchors = {
        "northWest": (left, top),
        "north": (hmid, top),
        "northEast": (right, top),
        "west": (left, vmid),
        "center": (hmid, vmid),
        "east": (right, vmid),
        "southWest": (left, bottom),
        "south": (hmid, bottom),
        "southEast": (right, bottom),
    }
    return anchors.get(loc, anchors[FALLBACK_LEGEND_LOCATION])


def draw_legend(canvas: np.ndarray, layout: LegendLayout, anchor: tuple[int, int], style: FigureStyle) -> None:
    ax, ay = anchor
    x1 = ax + layout.box_w
    y1 = ay + layout.box_h
    fill_rect(canvas, ax, ay, x1, y1, style.legend_background)
    draw_hline(canvas, ax, x1, ay, style.legend_border)
    draw_hline(canvas, ax, x1, y1, style.legend_border)
    draw_vline(canvas, ax, ay, y1, style.legend_border)
    draw_vline(canvas, x1, ay, y1, style.legend_border)

    sw_x0 = ax + layout.pad
    sw_x1 = sw_x0 + layout.swatch_w
    text_x = sw_x1 + layout.text_gap
    for i, entry in enumerate(layout.entries):
        row_y = ay + layout.pad + i * layout.line_h + layout.line_h // 2
        if entry.swatch == "line":
            draw_polyline(
                canvas,
                np.asarray([sw_x0, sw_x1], dtype=np.int64),
                np.asarray([row_y, row_y], dtype=np.int64),
                color=entry.color,
                width=2,
            )
        elif entry.swatch == "dot":
            draw_markers(
                canvas,
                np.asarray([sw_x0 + layout.swatch_w // 2], dtype=np.int64),
                np.asarray([row_y], dtype=np.int64),
                color=entry.color,
                radius=style.legend_marker_radius,
            )
        else:
            fill_rect(canvas, sw_x0, row_y - 4, sw_x1, row_y + 4, entry.color)
        metrics = text_metrics(entry.label, font_family=style.font_family, font_size_px=layout.font_px)
        draw_text(
            canvas,
            text_x,
            row_y - metrics.height // 2,
            entry.label,
            style.text_color,
            font_family=style.font_family,
            font_size_px=layout.font_px,
        )
