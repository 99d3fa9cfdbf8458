from __future__ import annotations

from rasterplot.figure import Figure
from rasterplot.sink import ImageSink
from rasterplot.style import FigureStyle, PlotMargins


DEFAULT_ASPECT_RATIO = 4.0 / 3.0
DEFAULT_SIZE = (640, 480)


def figure(
    width: int | None = None,
    height: int | None = None,
    *,
    aspect_ratio: float = DEFAULT_ASPECT_RATIO,
    style: FigureStyle | None = None,
    margins: PlotMargins | None = None,
    sink: ImageSink | None = None,
) -> Figure:
    """Create a :class:`Figure`, deriving a missing dimension from ``aspect_ratio``."""
    if aspect_ratio <= 0:
        raise ValueError("aspect_ratio must be > 0")
    if width is None and height is None:
        width, height = DEFAULT_SIZE
    elif width is None and height is not None:
        if height <= 0:
            raise ValueError("height must be > 0")
        width = max(1, int(round(height * aspect_ratio)))
    elif width is not None and height is None:
        if width <= 0:
            raise ValueError("width must be > 0")
        height = max(1, int(round(width / aspect_ratio)))
    assert width is not None and height is not None

    kwargs = {}
    if style is not None:
        kwargs["style"] = style
    if margins is not None:
        kwargs["margins"] = margins
    if sink is not None:
        kwargs["sink"] = sink
    return Figure(width=width, height=height, **kwargs)
