from __future__ import annotations

import math
import unittest

import numpy as np

from rasterplot.commands import (
    CircleCommand,
    EllipseCommand,
    LineCommand,
    RectOriginSizeCommand,
    RotatedRectCommand,
    ScatterCommand,
    TextCommand,
)
from rasterplot.legend import legend_entries
from rasterplot.scales import Bounds
from rasterplot.style import ShapeStyle


class BoundsExpansionTests(unittest.TestCase):
    def test_rotated_rect_uses_circumscribing_circle(self) -> None:
        bounds = Bounds()
        RotatedRectCommand(cx=1.0, cy=2.0, w=6.0, h=8.0, angle_deg=30.0, style=ShapeStyle()).expand_bounds(bounds)
        self.assertAlmostEqual(bounds.xmin, -4.0)
        self.assertAlmostEqual(bounds.xmax, 6.0)
        self.assertAlmostEqual(bounds.ymin, -3.0)
        self.assertAlmostEqual(bounds.ymax, 7.0)

    def test_rotated_rect_corners_stay_inside_bounds_at_any_angle(self) -> None:
        w, h = 4.0, 1.0
        bounds = Bounds()
        RotatedRectCommand(cx=0.0, cy=0.0, w=w, h=h, angle_deg=0.0, style=ShapeStyle()).expand_bounds(bounds)
        for angle in range(0, 360, 15):
            a = math.radians(angle)
            for dx, dy in ((w / 2, h / 2), (-w / 2, h / 2)):
                x = dx * math.cos(a) - dy * math.sin(a)
                self.assertLessEqual(abs(x), bounds.xmax + 1e-12)

    def test_ellipse_uses_half_of_major_axis(self) -> None:
        bounds = Bounds()
        EllipseCommand(cx=0.0, cy=0.0, w=4.0, h=10.0, angle_deg=45.0, style=ShapeStyle()).expand_bounds(bounds)
        self.assertEqual((bounds.xmin, bounds.xmax, bounds.ymin, bounds.ymax), (-5.0, 5.0, -5.0, 5.0))

    def test_circle_and_rect(self) -> None:
        bounds = Bounds()
        CircleCommand(cx=2.0, cy=2.0, radius=1.0, style=ShapeStyle()).expand_bounds(bounds)
        RectOriginSizeCommand(x=-1.0, y=0.0, w=0.5, h=10.0, style=ShapeStyle()).expand_bounds(bounds)
        self.assertEqual((bounds.xmin, bounds.xmax, bounds.ymin, bounds.ymax), (-1.0, 3.0, 0.0, 10.0))

    def test_text_never_widens_bounds(self) -> None:
        bounds = Bounds()
        TextCommand(x=100.0, y=100.0, text="note", color=(0, 0, 0)).expand_bounds(bounds)
        self.assertFalse(bounds.valid())


class LegendEntryTests(unittest.TestCase):
    def test_only_labelled_commands_in_order(self) -> None:
        xs = np.asarray([0.0, 1.0])
        commands = [
            LineCommand(x=xs, y=xs, color=(0, 0, 255), label="a"),
            ScatterCommand(x=xs, y=xs, color=(255, 0, 0)),
            CircleCommand(cx=0.0, cy=0.0, radius=1.0, style=ShapeStyle(fill_color=(0, 255, 0)), label="b"),
            LineCommand(x=xs, y=xs, color=(0, 0, 0), label="a"),
        ]
        entries = legend_entries(commands)
        self.assertEqual([e.label for e in entries], ["a", "b", "a"])
        self.assertEqual([e.swatch for e in entries], ["line", "dot", "line"])
        self.assertEqual(entries[1].color, (0, 255, 0))

    def test_shape_without_visible_fill_uses_stroke_color(self) -> None:
        style = ShapeStyle(line_color=(1, 2, 3), fill_color=(9, 9, 9), fill_alpha=0.0)
        cmd = RectOriginSizeCommand(x=0.0, y=0.0, w=1.0, h=1.0, style=style, label="r")
        self.assertEqual(cmd.legend_color, (1, 2, 3))
        self.assertEqual(cmd.legend_swatch, "box")


if __name__ == "__main__":
    unittest.main()
