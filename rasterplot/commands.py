from __future__ import annotations

from dataclasses import dataclass
import math
from typing import ClassVar, Literal, Union

import numpy as np

from rasterplot.scales import Bounds
from rasterplot.style import Color, ShapeStyle


HAlign = Literal["left", "center", "right"]
VAlign = Literal["baseline", "center", "top", "bottom"]
LegendSwatch = Literal["line", "dot", "box"]

H_ALIGNMENTS: tuple[str, ...] = ("left", "center", "right")
V_ALIGNMENTS: tuple[str, ...] = ("baseline", "center", "top", "bottom")


def _shape_legend_color(style: ShapeStyle) -> Color:
    return style.fill_color if style.fill_alpha > 0.0 else style.line_color


@dataclass(frozen=True, eq=False)
class LineCommand:
    x: np.ndarray
    y: np.ndarray
    color: Color
    thickness: float = 1.0
    label: str = ""

    legend_swatch: ClassVar[LegendSwatch] = "line"

    @property
    def legend_color(self) -> Color:
        return self.color

    def expand_bounds(self, bounds: Bounds) -> None:
        bounds.expand_arrays(self.x, self.y)


@dataclass(frozen=True, eq=False)
class ScatterCommand:
    x: np.ndarray
    y: np.ndarray
    color: Color
    # disc radius in pixels, independent of the data scale
    marker_size: float = 4.0
    label: str = ""

    legend_swatch: ClassVar[LegendSwatch] = "dot"

    @property
    def legend_color(self) -> Color:
        return self.color

    def expand_bounds(self, bounds: Bounds) -> None:
        bounds.expand_arrays(self.x, self.y)


@dataclass(frozen=True)
class TextCommand:
    x: float
    y: float
    text: str
    color: Color
    font_size_px: float = 12.0
    halign: HAlign = "left"
    valign: VAlign = "baseline"
    label: str = ""

    legend_swatch: ClassVar[LegendSwatch] = "box"

    @property
    def legend_color(self) -> Color:
        return self.color

    def expand_bounds(self, bounds: Bounds) -> None:
        # annotations never widen the autoscaled view
        return


@dataclass(frozen=True)
class CircleCommand:
    cx: float
    cy: float
    radius: float
    style: ShapeStyle
    label: str = ""

    legend_swatch: ClassVar[LegendSwatch] = "dot"

    @property
    def legend_color(self) -> Color:
        return _shape_legend_color(self.style)

    def expand_bounds(self, bounds: Bounds) -> None:
        r = abs(self.radius)
        bounds.expand(self.cx - r, self.cy - r)
        bounds.expand(self.cx + r, self.cy + r)


@dataclass(frozen=True)
class RectCornersCommand:
    x0: float
    y0: float
    x1: float
    y1: float
    style: ShapeStyle
    label: str = ""

    legend_swatch: ClassVar[LegendSwatch] = "box"

    @property
    def legend_color(self) -> Color:
        return _shape_legend_color(self.style)

    def corners(self) -> tuple[float, float, float, float]:
        return (self.x0, self.y0, self.x1, self.y1)

    def expand_bounds(self, bounds: Bounds) -> None:
        bounds.expand(self.x0, self.y0)
        bounds.expand(self.x1, self.y1)


@dataclass(frozen=True)
class RectOriginSizeCommand:
    """Rectangle from its lower-left corner plus width and height."""

    x: float
    y: float
    w: float
    h: float
    style: ShapeStyle
    label: str = ""

    legend_swatch: ClassVar[LegendSwatch] = "box"

    @property
    def legend_color(self) -> Color:
        return _shape_legend_color(self.style)

    def corners(self) -> tuple[float, float, float, float]:
        return (self.x, self.y, self.x + self.w, self.y + self.h)

    def expand_bounds(self, bounds: Bounds) -> None:
        bounds.expand(self.x, self.y)
        bounds.expand(self.x + self.w, self.y + self.h)


@dataclass(frozen=True)
class RotatedRectCommand:
    cx: float
    cy: float
    w: float
    h: float
    # counter-clockwise, in degrees
    angle_deg: float
    style: ShapeStyle
    label: str = ""

    legend_swatch: ClassVar[LegendSwatch] = "box"

    @property
    def legend_color(self) -> Color:
        return _shape_legend_color(self.style)

    def expand_bounds(self, bounds: Bounds) -> None:
        # Circumscribing circle: over-covers non-square rects at most angles.
        r = 0.5 * math.sqrt(self.w * self.w + self.h * self.h)
        bounds.expand(self.cx - r, self.cy - r)
        bounds.expand(self.cx + r, self.cy + r)


@dataclass(frozen=True, eq=False)
class PolygonCommand:
    x: np.ndarray
    y: np.ndarray
    style: ShapeStyle
    label: str = ""

    legend_swatch: ClassVar[LegendSwatch] = "box"

    @property
    def legend_color(self) -> Color:
        return _shape_legend_color(self.style)

    def expand_bounds(self, bounds: Bounds) -> None:
        bounds.expand_arrays(self.x, self.y)


@dataclass(frozen=True)
class EllipseCommand:
    cx: float
    cy: float
    # full width and height, before rotation
    w: float
    h: float
    angle_deg: float
    style: ShapeStyle
    label: str = ""

    legend_swatch: ClassVar[LegendSwatch] = "box"

    @property
    def legend_color(self) -> Color:
        return _shape_legend_color(self.style)

    def expand_bounds(self, bounds: Bounds) -> None:
        r = 0.5 * max(abs(self.w), abs(self.h))
        bounds.expand(self.cx - r, self.cy - r)
        bounds.expand(self.cx + r, self.cy + r)


PlotCommand = Union[
    LineCommand,
    ScatterCommand,
    TextCommand,
    CircleCommand,
    RectCornersCommand,
    RectOriginSizeCommand,
    RotatedRectCommand,
    PolygonCommand,
    EllipseCommand,
]
