from __future__ import annotations

from dataclasses import dataclass, field, replace

from rasterplot.scales import UNIT_LIMITS, Bounds, DataLimits, fix_limits


@dataclass
class AxisPolicy:
    autoscale: bool = True
    equal_scale: bool = False
    # fraction of the span added on each side of both axes
    pad_frac: float = 0.05
    grid: bool = False


@dataclass
class AxisModel:
    """Visible data rectangle plus the policy used to resolve it each render.

    ``requested`` holds caller-supplied limits and is never padded in place, so
    repeated renders resolve to the same rectangle. ``limits`` is the result of
    the most recent :meth:`resolve`.
    """

    policy: AxisPolicy = field(default_factory=AxisPolicy)
    requested: DataLimits = UNIT_LIMITS
    limits: DataLimits = UNIT_LIMITS

    def set_xlim(self, lo: float, hi: float, *, seed: DataLimits | None = None) -> None:
        base = self._manual_base(seed)
        self.requested = replace(base, xmin=float(min(lo, hi)), xmax=float(max(lo, hi)))
        self.policy.autoscale = False

    def set_ylim(self, lo: float, hi: float, *, seed: DataLimits | None = None) -> None:
        base = self._manual_base(seed)
        self.requested = replace(base, ymin=float(min(lo, hi)), ymax=float(max(lo, hi)))
        self.policy.autoscale = False

    def set_pad(self, frac: float) -> None:
        self.policy.pad_frac = max(0.0, float(frac))

    def _manual_base(self, seed: DataLimits | None) -> DataLimits:
        # Switching from autoscale keeps the other axis where the data put it.
        if self.policy.autoscale and seed is not None:
            return seed
        return self.requested

    def resolve(self, bounds: Bounds, *, plot_w: int = 1, plot_h: int = 1) -> DataLimits:
        """Resolve the visible rectangle: seed, pad, repair spans, then equalise scale.

        With ``equal_scale`` the spans are widened so that one data unit covers
        the same number of pixels on both axes of a ``plot_w`` x ``plot_h`` plot
        area (for a square area both spans become ``max(xspan, yspan)``).
        """
        p = self.policy
        if p.autoscale:
            base = bounds.as_limits() if bounds.valid() else UNIT_LIMITS
        else:
            base = self.requested

        xmin, xmax, ymin, ymax = base.xmin, base.xmax, base.ymin, base.ymax
        if p.pad_frac > 0.0:
            dx = (xmax - xmin) * p.pad_frac
            dy = (ymax - ymin) * p.pad_frac
            xmin -= dx
            xmax += dx
            ymin -= dy
            ymax += dy
        limits = fix_limits(DataLimits(xmin=xmin, xmax=xmax, ymin=ymin, ymax=ymax))

        if p.equal_scale:
            limits = fix_limits(_equalize(limits, max(1, plot_w), max(1, plot_h)))

        self.limits = limits
        return limits


def _equalize(limits: DataLimits, plot_w: int, plot_h: int) -> DataLimits:
    units_per_px = max(limits.xspan / plot_w, limits.yspan / plot_h)
    half_x = 0.5 * units_per_px * plot_w
    half_y = 0.5 * units_per_px * plot_h
    xmid = 0.5 * (limits.xmin + limits.xmax)
    ymid = 0.5 * (limits.ymin + limits.ymax)
    return DataLimits(xmin=xmid - half_x, xmax=xmid + half_x, ymin=ymid - half_y, ymax=ymid + half_y)
