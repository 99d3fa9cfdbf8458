from __future__ import annotations

from dataclasses import dataclass, field
import logging
import math
from pathlib import Path
from typing import Any

import numpy as np

from rasterplot.adapters import normalize_xy
from rasterplot.axis import AxisModel
from rasterplot.colors import BLACK, BLUE, RED
from rasterplot.commands import (
    H_ALIGNMENTS,
    V_ALIGNMENTS,
    CircleCommand,
    EllipseCommand,
    HAlign,
    LineCommand,
    PlotCommand,
    PolygonCommand,
    RectCornersCommand,
    RectOriginSizeCommand,
    RotatedRectCommand,
    ScatterCommand,
    TextCommand,
    VAlign,
)
from rasterplot.errors import PlotDataError
from rasterplot.legend import DEFAULT_LEGEND_LOCATION, resolve_location
from rasterplot.raster import new_canvas
from rasterplot.renderer import Renderer, RenderResult
from rasterplot.scales import UNIT_LIMITS, Bounds, DataLimits, PlotTransform, TickSet
from rasterplot.sink import ImageSink, PillowImageSink
from rasterplot.style import Color, FigureStyle, PlotMargins, ShapeStyle


LOGGER = logging.getLogger(__name__)


def _all_finite(*values: float) -> bool:
    try:
        return all(math.isfinite(float(v)) for v in values)
    except (TypeError, ValueError):
        return False


@dataclass(eq=False)
class Figure:
    """Retained-mode plotting canvas.

    Drawing calls only record commands and widen the data bounds. Pixels are
    produced by :meth:`render` (also run by :meth:`show`, :meth:`save` and
    :meth:`to_rgba`), and only when something changed since the last pass.
    Malformed geometry is dropped with a debug log record instead of raising.
    """

    width: int = 640
    height: int = 480
    style: FigureStyle = field(default_factory=FigureStyle)
    margins: PlotMargins = field(default_factory=PlotMargins)
    sink: ImageSink = field(default_factory=PillowImageSink)

    _commands: list[PlotCommand] = field(default_factory=list, init=False, repr=False)
    _axis: AxisModel = field(default_factory=AxisModel, init=False, repr=False)
    _bounds: Bounds = field(default_factory=Bounds, init=False, repr=False)
    _title: str = field(default="", init=False)
    _xlabel: str = field(default="", init=False)
    _ylabel: str = field(default="", init=False)
    # resolved legend anchor, None while the legend is off
    _legend_loc: str | None = field(default=None, init=False)
    _dirty: bool = field(default=True, init=False)
    _canvas: np.ndarray = field(init=False, repr=False)
    _renderer: Renderer = field(init=False, repr=False)
    _last: RenderResult | None = field(default=None, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("width and height must be > 0")
        plot_w, plot_h = self.margins.plot_size(self.width, self.height)
        if plot_w <= 1 or plot_h <= 1:
            raise PlotDataError("figure too small for plotting viewport")
        self._canvas = new_canvas(self.width, self.height, color=self.style.background)
        self._renderer = Renderer(style=self.style, margins=self.margins)

    # -- commands ---------------------------------------------------------

    def plot(self, x: Any, y: Any, color: Color = BLUE, thickness: float = 1.0, label: str = "") -> None:
        try:
            xs, ys = normalize_xy(x, y)
        except PlotDataError as exc:
            LOGGER.debug("dropping line: %s", exc)
            return
        self._append(LineCommand(x=xs, y=ys, color=color, thickness=float(thickness), label=label))

    def scatter(self, x: Any, y: Any, color: Color = RED, marker_size: float = 4.0, label: str = "") -> None:
        try:
            xs, ys = normalize_xy(x, y)
        except PlotDataError as exc:
            LOGGER.debug("dropping scatter: %s", exc)
            return
        self._append(ScatterCommand(x=xs, y=ys, color=color, marker_size=float(marker_size), label=label))

    def text(
        self,
        x: float,
        y: float,
        msg: str,
        color: Color = BLACK,
        font_size_px: float = 12.0,
        halign: HAlign = "left",
        valign: VAlign = "baseline",
        label: str = "",
    ) -> None:
        if halign not in H_ALIGNMENTS:
            raise ValueError(f"halign must be one of {H_ALIGNMENTS}")
        if valign not in V_ALIGNMENTS:
            raise ValueError(f"valign must be one of {V_ALIGNMENTS}")
        if not _all_finite(x, y):
            LOGGER.debug("dropping text %r: non-finite anchor", msg)
            return
        self._append(
            TextCommand(
                x=float(x),
                y=float(y),
                text=str(msg),
                color=color,
                font_size_px=float(font_size_px),
                halign=halign,
                valign=valign,
                label=label,
            )
        )

    def circle(self, cx: float, cy: float, radius: float, style: ShapeStyle, label: str = "") -> None:
        if not _all_finite(cx, cy, radius):
            LOGGER.debug("dropping circle: non-finite geometry")
            return
        self._append(CircleCommand(cx=float(cx), cy=float(cy), radius=float(radius), style=style, label=label))

    def rect_xywh(self, x: float, y: float, w: float, h: float, style: ShapeStyle, label: str = "") -> None:
        if not _all_finite(x, y, w, h):
            LOGGER.debug("dropping rect: non-finite geometry")
            return
        self._append(RectOriginSizeCommand(x=float(x), y=float(y), w=float(w), h=float(h), style=style, label=label))

    def rect_ltrb(self, x0: float, y0: float, x1: float, y1: float, style: ShapeStyle, label: str = "") -> None:
        if not _all_finite(x0, y0, x1, y1):
            LOGGER.debug("dropping rect: non-finite geometry")
            return
        self._append(RectCornersCommand(x0=float(x0), y0=float(y0), x1=float(x1), y1=float(y1), style=style, label=label))

    def rotated_rect(
        self,
        cx: float,
        cy: float,
        w: float,
        h: float,
        angle_deg: float,
        style: ShapeStyle,
        label: str = "",
    ) -> None:
        if not _all_finite(cx, cy, w, h, angle_deg):
            LOGGER.debug("dropping rotated rect: non-finite geometry")
            return
        self._append(
            RotatedRectCommand(
                cx=float(cx),
                cy=float(cy),
                w=float(w),
                h=float(h),
                angle_deg=float(angle_deg),
                style=style,
                label=label,
            )
        )

    def polygon(self, x: Any, y: Any, style: ShapeStyle, label: str = "") -> None:
        try:
            xs, ys = normalize_xy(x, y, allow_empty=False)
        except PlotDataError as exc:
            LOGGER.debug("dropping polygon: %s", exc)
            return
        if not (np.all(np.isfinite(xs)) and np.all(np.isfinite(ys))):
            LOGGER.debug("dropping polygon: non-finite vertex")
            return
        self._append(PolygonCommand(x=xs, y=ys, style=style, label=label))

    def ellipse(
        self,
        cx: float,
        cy: float,
        w: float,
        h: float,
        angle_deg: float,
        style: ShapeStyle,
        label: str = "",
    ) -> None:
        if not _all_finite(cx, cy, w, h, angle_deg):
            LOGGER.debug("dropping ellipse: non-finite geometry")
            return
        self._append(
            EllipseCommand(
                cx=float(cx),
                cy=float(cy),
                w=float(w),
                h=float(h),
                angle_deg=float(angle_deg),
                style=style,
                label=label,
            )
        )

    def _append(self, cmd: PlotCommand) -> None:
        cmd.expand_bounds(self._bounds)
        self._commands.append(cmd)
        self._dirty = True

    # -- axis policy ------------------------------------------------------

    def set_xlim(self, lo: float, hi: float) -> None:
        if not _all_finite(lo, hi):
            raise ValueError("axis limits must be finite")
        self._axis.set_xlim(float(lo), float(hi), seed=self._data_limits())
        self._dirty = True

    def set_ylim(self, lo: float, hi: float) -> None:
        if not _all_finite(lo, hi):
            raise ValueError("axis limits must be finite")
        self._axis.set_ylim(float(lo), float(hi), seed=self._data_limits())
        self._dirty = True

    def autoscale(self, on: bool = True) -> None:
        self._axis.policy.autoscale = bool(on)
        self._dirty = True

    def equal_scale(self, on: bool = True) -> None:
        self._axis.policy.equal_scale = bool(on)
        self._dirty = True

    def axis_pad(self, frac: float) -> None:
        self._axis.set_pad(frac)
        self._dirty = True

    def axis_tight(self) -> None:
        self._axis.set_pad(0.0)
        self._dirty = True

    def grid(self, on: bool = True) -> None:
        self._axis.policy.grid = bool(on)
        self._dirty = True

    def _data_limits(self) -> DataLimits:
        return self._bounds.as_limits() if self._bounds.valid() else UNIT_LIMITS

    # -- labels -----------------------------------------------------------

    def title(self, text: str) -> None:
        self._title = str(text)
        self._dirty = True

    def xlabel(self, text: str) -> None:
        self._xlabel = str(text)
        self._dirty = True

    def ylabel(self, text: str) -> None:
        self._ylabel = str(text)
        self._renderer.invalidate_ylabel()
        self._dirty = True

    def legend(self, on: bool = True, loc: str = DEFAULT_LEGEND_LOCATION) -> None:
        self._legend_loc = resolve_location(loc) if on else None
        self._dirty = True

    # -- rendering --------------------------------------------------------

    def render(self) -> None:
        if not self._dirty:
            return
        self._last = self._renderer.render(
            self._canvas,
            self._commands,
            axis=self._axis,
            bounds=self._bounds,
            title=self._title,
            xlabel=self._xlabel,
            ylabel=self._ylabel,
            legend_loc=self._legend_loc,
        )
        self._dirty = False

    def show(self, window_name: str = "Figure") -> None:
        self.render()
        self.sink.show(window_name, self._canvas)

    def save(self, filename: str | Path) -> None:
        self.render()
        self.sink.save(filename, self._canvas)

    def to_rgba(self) -> np.ndarray:
        self.render()
        return self._canvas.copy()

    # -- inspection -------------------------------------------------------

    @property
    def commands(self) -> tuple[PlotCommand, ...]:
        return tuple(self._commands)

    @property
    def bounds(self) -> Bounds:
        return Bounds(
            xmin=self._bounds.xmin,
            xmax=self._bounds.xmax,
            ymin=self._bounds.ymin,
            ymax=self._bounds.ymax,
        )

    @property
    def is_dirty(self) -> bool:
        return self._dirty

    @property
    def limits(self) -> DataLimits | None:
        return None if self._last is None else self._last.limits

    @property
    def ticks(self) -> tuple[TickSet, TickSet] | None:
        return None if self._last is None else (self._last.xticks, self._last.yticks)

    @property
    def transform(self) -> PlotTransform | None:
        return None if self._last is None else self._last.transform

    @property
    def ylabel_builds(self) -> int:
        return self._renderer.ylabel_cache.builds

    def legend_bounds(self) -> tuple[int, int, int, int] | None:
        return None if self._last is None else self._last.legend_bounds
