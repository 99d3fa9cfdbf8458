from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Sequence

import numpy as np

from rasterplot.axis import AxisModel
from rasterplot.commands import (
    CircleCommand,
    EllipseCommand,
    LineCommand,
    PlotCommand,
    PolygonCommand,
    RectCornersCommand,
    RectOriginSizeCommand,
    RotatedRectCommand,
    ScatterCommand,
    TextCommand,
)
from rasterplot.legend import build_legend_layout, draw_legend, legend_anchor
from rasterplot.raster import (
    RotatedLabelCache,
    blend_coverage,
    clear_canvas,
    clip_polygon,
    clip_segment,
    composite,
    draw_hline,
    draw_markers,
    draw_polyline,
    draw_text,
    draw_vline,
    fill_ellipse,
    fill_polygon,
    rotated_rect_points,
    stroke_ellipse,
    stroke_polygon,
    text_metrics,
)
from rasterplot.scales import Bounds, DataLimits, PlotTransform, TickSet, build_transform, make_ticks
from rasterplot.style import FigureStyle, PlotMargins, ShapeStyle


LOGGER = logging.getLogger(__name__)

# gap between tick marks and their labels
TICK_LABEL_GAP = 2


def _contiguous_true_runs(mask: np.ndarray) -> list[tuple[int, int]]:
    idx = np.flatnonzero(mask)
    if idx.size == 0:
        return []
    runs: list[tuple[int, int]] = []
    start = int(idx[0])
    prev = int(idx[0])
    for v in idx[1:]:
        iv = int(v)
        if iv == prev + 1:
            prev = iv
            continue
        runs.append((start, prev + 1))
        start = iv
        prev = iv
    runs.append((start, prev + 1))
    return runs


def _inside(box: tuple[float, float, float, float], xs: np.ndarray, ys: np.ndarray) -> bool:
    xmin, ymin, xmax, ymax = box
    return bool(np.all((xs >= xmin) & (xs <= xmax) & (ys >= ymin) & (ys <= ymax)))


@dataclass(frozen=True)
class RenderResult:
    limits: DataLimits
    transform: PlotTransform
    xticks: TickSet
    yticks: TickSet
    # (x, y, w, h) of the legend box, or None when nothing was drawn
    legend_bounds: tuple[int, int, int, int] | None


@dataclass
class Renderer:
    """Turns an ordered command list into pixels in one pass.

    Drawing order is fixed: background, grid, axes and tick labels, commands
    in insertion order, legend, then title and axis labels. The rotated
    y-label mask is cached across passes until :meth:`invalidate_ylabel`.
    """

    style: FigureStyle = field(default_factory=FigureStyle)
    margins: PlotMargins = field(default_factory=PlotMargins)
    ylabel_cache: RotatedLabelCache = field(init=False)

    def __post_init__(self) -> None:
        self.ylabel_cache = RotatedLabelCache(
            font_family=self.style.font_family,
            font_size_px=self.style.label_font_px,
        )

    def invalidate_ylabel(self) -> None:
        self.ylabel_cache.invalidate()

    def render(
        self,
        canvas: np.ndarray,
        commands: Sequence[PlotCommand],
        *,
        axis: AxisModel,
        bounds: Bounds,
        title: str = "",
        xlabel: str = "",
        ylabel: str = "",
        legend_loc: str | None = None,
    ) -> RenderResult:
        height, width = canvas.shape[0], canvas.shape[1]
        plot_w, plot_h = self.margins.plot_size(width, height)
        limits = axis.resolve(bounds, plot_w=plot_w, plot_h=plot_h)
        transform = build_transform(limits, width, height, self.margins)
        xticks = make_ticks(limits.xmin, limits.xmax)
        yticks = make_ticks(limits.ymin, limits.ymax)
        LOGGER.debug(
            "render %dx%d commands=%d limits=(%g, %g, %g, %g)",
            width,
            height,
            len(commands),
            limits.xmin,
            limits.xmax,
            limits.ymin,
            limits.ymax,
        )

        clear_canvas(canvas, self.style.background)
        if axis.policy.grid:
            self._draw_grid(canvas, transform, xticks, yticks)
        self._draw_axes(canvas, transform, xticks, yticks)

        for cmd in commands:
            self._draw_command(canvas, cmd, transform)

        legend_bounds = None
        if legend_loc is not None:
            layout = build_legend_layout(commands, self.style)
            if layout is not None:
                ax, ay = legend_anchor(legend_loc, layout.box_w, layout.box_h, transform)
                draw_legend(canvas, layout, (ax, ay), self.style)
                legend_bounds = (ax, ay, layout.box_w, layout.box_h)

        self._draw_labels(canvas, transform, title=title, xlabel=xlabel, ylabel=ylabel)
        return RenderResult(
            limits=limits,
            transform=transform,
            xticks=xticks,
            yticks=yticks,
            legend_bounds=legend_bounds,
        )

    def _draw_grid(self, canvas: np.ndarray, transform: PlotTransform, xticks: TickSet, yticks: TickSet) -> None:
        x0, y0, plot_w, plot_h = transform.plot_rect()
        ymin = transform.limits.ymin
        xmin = transform.limits.xmin
        for xv in xticks.locs:
            px, _ = transform.data_to_pixel(xv, ymin)
            draw_vline(canvas, px, y0, y0 + plot_h, self.style.grid_color)
        for yv in yticks.locs:
            _, py = transform.data_to_pixel(xmin, yv)
            draw_hline(canvas, x0, x0 + plot_w, py, self.style.grid_color)

    def _draw_axes(self, canvas: np.ndarray, transform: PlotTransform, xticks: TickSet, yticks: TickSet) -> None:
        x0, y0, plot_w, plot_h = transform.plot_rect()
        axis_y = y0 + plot_h
        tick_len = self.margins.tick_len
        color = self.style.axis_color
        font = self.style.font_family
        font_px = self.style.tick_font_px

        draw_hline(canvas, x0, x0 + plot_w, axis_y, color)
        draw_vline(canvas, x0, y0, axis_y, color)

        for xv, label in xticks:
            px, _ = transform.data_to_pixel(xv, transform.limits.ymin)
            draw_vline(canvas, px, axis_y, axis_y + tick_len, color)
            m = text_metrics(label, font_family=font, font_size_px=font_px)
            draw_text(
                canvas,
                px - m.width // 2,
                axis_y + tick_len + TICK_LABEL_GAP,
                label,
                self.style.text_color,
                font_family=font,
                font_size_px=font_px,
            )

        for yv, label in yticks:
            _, py = transform.data_to_pixel(transform.limits.xmin, yv)
            draw_hline(canvas, x0 - tick_len, x0, py, color)
            m = text_metrics(label, font_family=font, font_size_px=font_px)
            draw_text(
                canvas,
                x0 - tick_len - TICK_LABEL_GAP - m.width,
                py - m.height // 2,
                label,
                self.style.text_color,
                font_family=font,
                font_size_px=font_px,
            )

    def _draw_labels(self, canvas: np.ndarray, transform: PlotTransform, *, title: str, xlabel: str, ylabel: str) -> None:
        height, width = canvas.shape[0], canvas.shape[1]
        x0, y0, plot_w, plot_h = transform.plot_rect()
        font = self.style.font_family
        color = self.style.text_color

        if title:
            m = text_metrics(title, font_family=font, font_size_px=self.style.title_font_px)
            draw_text(
                canvas,
                (width - m.width) // 2,
                max(0, (self.margins.top - m.height) // 2),
                title,
                color,
                font_family=font,
                font_size_px=self.style.title_font_px,
            )
        if xlabel:
            m = text_metrics(xlabel, font_family=font, font_size_px=self.style.label_font_px)
            draw_text(
                canvas,
                x0 + (plot_w - m.width) // 2,
                height - self.margins.xlabel_inset - m.height,
                xlabel,
                color,
                font_family=font,
                font_size_px=self.style.label_font_px,
            )
        if ylabel:
            mask = self.ylabel_cache.get(ylabel)
            mask_h = mask.shape[0]
            blend_coverage(canvas, x0 - self.margins.ylabel_inset, y0 + (plot_h - mask_h) // 2, mask, color)

    def _draw_command(self, canvas: np.ndarray, cmd: PlotCommand, transform: PlotTransform) -> None:
        if isinstance(cmd, LineCommand):
            self._draw_line(canvas, cmd, transform)
        elif isinstance(cmd, ScatterCommand):
            self._draw_scatter(canvas, cmd, transform)
        elif isinstance(cmd, TextCommand):
            self._draw_text(canvas, cmd, transform)
        elif isinstance(cmd, CircleCommand):
            center = transform.data_to_pixel(cmd.cx, cmd.cy)
            r = transform.length_x(cmd.radius)
            self._paint_shape(
                canvas,
                cmd.style,
                fill=lambda dst, c: fill_ellipse(dst, center, (r, r), c),
                stroke=lambda dst, c, w: stroke_ellipse(dst, center, (r, r), c, w),
            )
        elif isinstance(cmd, (RectCornersCommand, RectOriginSizeCommand)):
            xa, ya, xb, yb = cmd.corners()
            pts = [transform.data_to_pixel(px, py) for px, py in ((xa, ya), (xb, ya), (xb, yb), (xa, yb))]
            self._paint_polygon(canvas, cmd.style, pts)
        elif isinstance(cmd, RotatedRectCommand):
            center = transform.data_to_pixel(cmd.cx, cmd.cy)
            size = (transform.length_x(cmd.w), transform.length_y(cmd.h))
            self._paint_polygon(canvas, cmd.style, rotated_rect_points(center, size, angle_deg=cmd.angle_deg))
        elif isinstance(cmd, PolygonCommand):
            pad = max(1, int(round(cmd.style.thickness))) + 2
            verts = clip_polygon(transform.canvas_box(pad), list(zip(cmd.x.tolist(), cmd.y.tolist())))
            px, py = transform.map_arrays(np.asarray([v[0] for v in verts]), np.asarray([v[1] for v in verts]))
            self._paint_polygon(canvas, cmd.style, list(zip(px.tolist(), py.tolist())))
        elif isinstance(cmd, EllipseCommand):
            center = transform.data_to_pixel(cmd.cx, cmd.cy)
            radii = (0.5 * transform.length_x(cmd.w), 0.5 * transform.length_y(cmd.h))
            angle = cmd.angle_deg
            self._paint_shape(
                canvas,
                cmd.style,
                fill=lambda dst, c: fill_ellipse(dst, center, radii, c, angle_deg=angle),
                stroke=lambda dst, c, w: stroke_ellipse(dst, center, radii, c, w, angle_deg=angle),
            )
        else:
            raise TypeError(f"unsupported plot command: {type(cmd).__name__}")

    def _draw_line(self, canvas: np.ndarray, cmd: LineCommand, transform: PlotTransform) -> None:
        width = max(1, int(round(cmd.thickness)))
        finite = np.isfinite(cmd.x) & np.isfinite(cmd.y)
        box = transform.canvas_box(pad=width + 2)
        # non-finite points split the polyline
        for start, stop in _contiguous_true_runs(finite):
            xs = cmd.x[start:stop]
            ys = cmd.y[start:stop]
            if _inside(box, xs, ys):
                px, py = transform.map_arrays(xs, ys)
                draw_polyline(canvas, px, py, color=cmd.color, width=width)
                continue
            # far points are pulled in along each segment before mapping
            for i in range(xs.size - 1):
                seg = clip_segment(box, float(xs[i]), float(ys[i]), float(xs[i + 1]), float(ys[i + 1]))
                if seg is None:
                    continue
                px, py = transform.map_arrays(np.asarray(seg[0::2]), np.asarray(seg[1::2]))
                draw_polyline(canvas, px, py, color=cmd.color, width=width)

    def _draw_scatter(self, canvas: np.ndarray, cmd: ScatterCommand, transform: PlotTransform) -> None:
        finite = np.isfinite(cmd.x) & np.isfinite(cmd.y)
        if not np.any(finite):
            return
        px, py = transform.map_arrays(cmd.x[finite], cmd.y[finite])
        draw_markers(canvas, px, py, color=cmd.color, radius=max(1, int(round(cmd.marker_size))))

    def _draw_text(self, canvas: np.ndarray, cmd: TextCommand, transform: PlotTransform) -> None:
        if not cmd.text:
            return
        font = self.style.font_family
        m = text_metrics(cmd.text, font_family=font, font_size_px=cmd.font_size_px)
        px, py = transform.data_to_pixel(cmd.x, cmd.y)

        if cmd.halign == "center":
            px -= m.width // 2
        elif cmd.halign == "right":
            px -= m.width

        baseline = py
        if cmd.valign == "center":
            baseline += m.height // 2
        elif cmd.valign == "top":
            baseline += m.height
        elif cmd.valign == "bottom":
            baseline -= m.descent
        draw_text(canvas, px, baseline - m.ascent, cmd.text, cmd.color, font_family=font, font_size_px=cmd.font_size_px)

    def _paint_polygon(self, canvas: np.ndarray, style: ShapeStyle, points: list[tuple[float, float]]) -> None:
        self._paint_shape(
            canvas,
            style,
            fill=lambda dst, c: fill_polygon(dst, points, c),
            stroke=lambda dst, c, w: stroke_polygon(dst, points, c, w),
        )

    def _paint_shape(self, canvas: np.ndarray, style: ShapeStyle, *, fill, stroke) -> None:
        """Fill, then stroke. A translucent fill goes through a scratch copy of
        ``canvas`` that is composited back, so the stroke stays fully opaque."""
        if style.fill_alpha >= 1.0:
            fill(canvas, style.fill_color)
        elif style.fill_alpha > 0.0:
            scratch = canvas.copy()
            fill(scratch, style.fill_color)
            composite(canvas, scratch, style.fill_alpha)
        if style.thickness > 0.0:
            stroke(canvas, style.line_color, max(1, int(round(style.thickness))))
