from __future__ import annotations

from dataclasses import dataclass
import math
from typing import Iterator

import numpy as np

from rasterplot.errors import PlotDataError
from rasterplot.style import PlotMargins


# Tolerance used when clipping ticks to the visible interval.
TICK_EPS = 1e-12
DEFAULT_TICK_TARGET = 6
# map_arrays clamps pixel coordinates to this band so they stay castable to int64.
PIXEL_LIMIT = float(2**31)


@dataclass(frozen=True)
class DataLimits:
    xmin: float
    xmax: float
    ymin: float
    ymax: float

    @property
    def xspan(self) -> float:
        return self.xmax - self.xmin

    @property
    def yspan(self) -> float:
        return self.ymax - self.ymin


UNIT_LIMITS = DataLimits(xmin=0.0, xmax=1.0, ymin=0.0, ymax=1.0)


@dataclass
class Bounds:
    """Smallest box around every absorbed point; invalid until the first point."""

    xmin: float = math.inf
    xmax: float = -math.inf
    ymin: float = math.inf
    ymax: float = -math.inf

    def expand(self, x: float, y: float) -> None:
        self.xmin = min(self.xmin, x)
        self.xmax = max(self.xmax, x)
        self.ymin = min(self.ymin, y)
        self.ymax = max(self.ymax, y)

    def expand_arrays(self, xs: np.ndarray, ys: np.ndarray) -> None:
        mask = np.isfinite(xs) & np.isfinite(ys)
        if not np.any(mask):
            return
        vx = xs[mask]
        vy = ys[mask]
        self.expand(float(np.min(vx)), float(np.min(vy)))
        self.expand(float(np.max(vx)), float(np.max(vy)))

    def valid(self) -> bool:
        return math.isfinite(self.xmin)

    def as_limits(self) -> DataLimits:
        return DataLimits(xmin=self.xmin, xmax=self.xmax, ymin=self.ymin, ymax=self.ymax)


@dataclass(frozen=True)
class TickSet:
    locs: tuple[float, ...]
    labels: tuple[str, ...]
    step: float

    def __iter__(self) -> Iterator[tuple[float, str]]:
        return iter(zip(self.locs, self.labels))

    def __len__(self) -> int:
        return len(self.locs)


def nice_number(value: float, *, round_result: bool) -> float:
    """Round ``value`` to 1, 2, 5 or 10 times a power of ten."""
    if value <= 0 or not math.isfinite(value):
        value = 1.0
    exp = math.floor(math.log10(value))
    frac = value / (10.0**exp)

    if round_result:
        if frac < 1.5:
            nice_frac = 1.0
        elif frac < 3.0:
            nice_frac = 2.0
        elif frac < 7.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0
    else:
        if frac <= 1.0:
            nice_frac = 1.0
        elif frac <= 2.0:
            nice_frac = 2.0
        elif frac <= 5.0:
            nice_frac = 5.0
        else:
            nice_frac = 10.0

    return float(nice_frac * (10.0**exp))


def make_ticks(lo: float, hi: float, target: int = DEFAULT_TICK_TARGET) -> TickSet:
    """Nice tick locations and labels for the visible interval ``[lo, hi]``.

    Multiples of the step that fall on the snapped grid but outside the
    interval are dropped.
    """
    if target < 2:
        raise ValueError("target must be >= 2")
    if lo > hi:
        lo, hi = hi, lo
    if not (math.isfinite(lo) and math.isfinite(hi)):
        return TickSet(locs=(), labels=(), step=1.0)
    raw = hi - lo
    span = nice_number(raw, round_result=False) if math.isfinite(raw) else math.inf
    if math.isfinite(span):
        step = nice_number(span / (target - 1), round_result=True)
    else:
        # near the float ceiling the snapped span overflows
        step = hi / (target - 1) - lo / (target - 1)
    k_lo = math.floor(lo / step)
    k_hi = math.ceil(hi / step)
    graph_lo = k_lo * step

    count = int(k_hi - k_lo)
    locs: list[float] = []
    labels: list[str] = []
    for i in range(count + 1):
        v = graph_lo + i * step
        if v < lo - TICK_EPS or v > hi + TICK_EPS:
            continue
        locs.append(v)
        labels.append(format_tick(v, step=step))
    return TickSet(locs=tuple(locs), labels=tuple(labels), step=step)


def format_tick(value: float, *, step: float) -> str:
    decimals = 0 if step >= 1.0 else 1
    out = f"{value:.{decimals}f}"
    if out.startswith("-") and float(out) == 0.0:
        out = out[1:]
    return out


def ensure_nonzero_span(lo: float, hi: float) -> tuple[float, float]:
    if lo == hi:
        eps = max(abs(lo) * 1e-3, 1e-3)
        return (lo - eps, hi + eps)
    return (lo, hi)


def fix_limits(limits: DataLimits) -> DataLimits:
    xmin, xmax = ensure_nonzero_span(limits.xmin, limits.xmax)
    ymin, ymax = ensure_nonzero_span(limits.ymin, limits.ymax)
    return DataLimits(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax)


@dataclass(frozen=True)
class PlotTransform:
    """Data-to-pixel mapping for one render pass.

    Pixel ``y`` grows downward while data ``y`` grows upward; the plot area is
    the figure minus ``margins``.
    """

    limits: DataLimits
    width: int
    height: int
    margins: PlotMargins

    @property
    def plot_x0(self) -> int:
        return self.margins.left

    @property
    def plot_y0(self) -> int:
        return self.margins.top

    @property
    def plot_w(self) -> int:
        return self.width - self.margins.left - self.margins.right

    @property
    def plot_h(self) -> int:
        return self.height - self.margins.top - self.margins.bottom

    @property
    def sx(self) -> float:
        return self.plot_w / self.limits.xspan

    @property
    def sy(self) -> float:
        return self.plot_h / self.limits.yspan

    def plot_rect(self) -> tuple[int, int, int, int]:
        return (self.plot_x0, self.plot_y0, self.plot_w, self.plot_h)

    def data_to_pixel(self, x: float, y: float) -> tuple[int, int]:
        xf = (x - self.limits.xmin) / self.limits.xspan
        yf = (y - self.limits.ymin) / self.limits.yspan
        px = self.margins.left + math.floor(xf * self.plot_w + 0.5)
        py = self.height - self.margins.bottom - math.floor(yf * self.plot_h + 0.5)
        return (int(px), int(py))

    def map_arrays(self, xs: np.ndarray, ys: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        xf = (np.asarray(xs, dtype=np.float64) - self.limits.xmin) / self.limits.xspan
        yf = (np.asarray(ys, dtype=np.float64) - self.limits.ymin) / self.limits.yspan
        px = self.margins.left + np.floor(np.clip(xf * self.plot_w + 0.5, -PIXEL_LIMIT, PIXEL_LIMIT))
        py = (self.height - self.margins.bottom) - np.floor(np.clip(yf * self.plot_h + 0.5, -PIXEL_LIMIT, PIXEL_LIMIT))
        return px.astype(np.int64), py.astype(np.int64)

    def canvas_box(self, pad: int = 0) -> tuple[float, float, float, float]:
        """Data-space ``(xmin, ymin, xmax, ymax)`` covering the whole canvas plus ``pad`` pixels."""
        return (
            self.limits.xmin - (self.margins.left + pad) / self.sx,
            self.limits.ymin - (self.margins.bottom + pad) / self.sy,
            self.limits.xmax + (self.margins.right + pad) / self.sx,
            self.limits.ymax + (self.margins.top + pad) / self.sy,
        )

    def length_x(self, length: float) -> float:
        return abs(length * self.sx)

    def length_y(self, length: float) -> float:
        return abs(length * self.sy)


def build_transform(limits: DataLimits, width: int, height: int, margins: PlotMargins) -> PlotTransform:
    plot_w, plot_h = margins.plot_size(width, height)
    if plot_w <= 1 or plot_h <= 1:
        raise PlotDataError("figure too small for plotting viewport")
    if limits.xspan == 0 or limits.yspan == 0:
        raise PlotDataError("axis limits must have a non-zero span")
    return PlotTransform(limits=limits, width=width, height=height, margins=margins)
