from rasterplot.api import figure
from rasterplot.errors import PlotDataError, PlotSinkError
from rasterplot.figure import Figure
from rasterplot.scales import DataLimits, TickSet, make_ticks, nice_number
from rasterplot.sink import ImageSink, PillowImageSink
from rasterplot.style import Color, FigureStyle, PlotMargins, ShapeStyle

__all__ = [
    "Color",
    "DataLimits",
    "Figure",
    "FigureStyle",
    "ImageSink",
    "PillowImageSink",
    "PlotDataError",
    "PlotMargins",
    "PlotSinkError",
    "ShapeStyle",
    "TickSet",
    "figure",
    "make_ticks",
    "nice_number",
]
