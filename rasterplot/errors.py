from __future__ import annotations


class PlotDataError(ValueError):
    """Raised when plot input or figure geometry cannot be used."""


class PlotSinkError(RuntimeError):
    """Raised when a rendered frame cannot be shown or written."""
