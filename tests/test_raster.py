from __future__ import annotations

import unittest

import numpy as np

from rasterplot.raster import (
    RotatedLabelCache,
    composite,
    draw_markers,
    draw_polyline,
    fill_ellipse,
    fill_polygon,
    new_canvas,
    rotated_rect_points,
    stroke_polygon,
)
from rasterplot.raster.clip import clip_polygon, clip_segment
from rasterplot.raster.draw_text import text_mask


class CanvasTests(unittest.TestCase):
    def test_new_canvas_is_opaque_background(self) -> None:
        canvas = new_canvas(4, 3, color=(10, 20, 30))
        self.assertEqual(canvas.shape, (3, 4, 4))
        self.assertEqual(canvas[2, 3].tolist(), [10, 20, 30, 255])

    def test_new_canvas_rejects_empty_size(self) -> None:
        with self.assertRaises(ValueError):
            new_canvas(0, 10)

    def test_composite_blends_by_alpha(self) -> None:
        base = new_canvas(2, 2, color=(255, 255, 255))
        scratch = new_canvas(2, 2, color=(255, 0, 0))
        composite(base, scratch, 0.5)
        self.assertEqual(base[0, 0].tolist(), [255, 128, 128, 255])

    def test_composite_requires_matching_shapes(self) -> None:
        with self.assertRaises(ValueError):
            composite(new_canvas(2, 2), new_canvas(3, 2), 0.5)


class PrimitiveTests(unittest.TestCase):
    def test_polyline_hits_endpoints(self) -> None:
        canvas = new_canvas(20, 20)
        draw_polyline(canvas, np.asarray([2, 15]), np.asarray([3, 12]), color=(0, 0, 255))
        self.assertEqual(canvas[3, 2, :3].tolist(), [0, 0, 255])
        self.assertEqual(canvas[12, 15, :3].tolist(), [0, 0, 255])

    def test_far_off_canvas_segment_is_clipped(self) -> None:
        canvas = new_canvas(20, 20)
        draw_polyline(canvas, np.asarray([-10_000_000, 10_000_000]), np.asarray([10, 10]), color=(0, 0, 0))
        self.assertTrue(np.all(canvas[10, :, :3] == 0))

    def test_markers_are_discs_of_pixel_radius(self) -> None:
        canvas = new_canvas(11, 11)
        draw_markers(canvas, np.asarray([5]), np.asarray([5]), color=(255, 0, 0), radius=2)
        self.assertEqual(canvas[7, 5, :3].tolist(), [255, 0, 0])
        self.assertEqual(canvas[7, 6, :3].tolist(), [255, 0, 0])
        self.assertEqual(canvas[7, 7, :3].tolist(), [255, 255, 255])

    def test_polygon_fill_and_outline(self) -> None:
        canvas = new_canvas(12, 12)
        square = [(2.0, 2.0), (8.0, 2.0), (8.0, 8.0), (2.0, 8.0)]
        fill_polygon(canvas, square, (0, 255, 0))
        stroke_polygon(canvas, square, (0, 0, 0))
        self.assertEqual(canvas[5, 5, :3].tolist(), [0, 255, 0])
        self.assertEqual(canvas[2, 5, :3].tolist(), [0, 0, 0])
        self.assertEqual(canvas[0, 0, :3].tolist(), [255, 255, 255])

    def test_polygon_fill_needs_three_points(self) -> None:
        canvas = new_canvas(8, 8)
        fill_polygon(canvas, [(1.0, 1.0), (6.0, 6.0)], (0, 0, 0))
        self.assertTrue(np.all(canvas == 255))

    def test_ellipse_fill(self) -> None:
        canvas = new_canvas(21, 21)
        fill_ellipse(canvas, (10.0, 10.0), (5.0, 3.0), (255, 0, 0))
        self.assertEqual(canvas[10, 10, :3].tolist(), [255, 0, 0])
        self.assertEqual(canvas[10, 14, :3].tolist(), [255, 0, 0])
        self.assertEqual(canvas[5, 10, :3].tolist(), [255, 255, 255])

    def test_rotated_rect_quarter_turn_swaps_extent(self) -> None:
        pts = rotated_rect_points((10.0, 10.0), (4.0, 2.0), angle_deg=90.0)
        xs = [p[0] for p in pts]
        ys = [p[1] for p in pts]
        self.assertAlmostEqual(max(xs) - min(xs), 2.0)
        self.assertAlmostEqual(max(ys) - min(ys), 4.0)


class ClipTests(unittest.TestCase):
    BOX = (0.0, 0.0, 10.0, 10.0)

    def test_segment_inside_is_unchanged(self) -> None:
        self.assertEqual(clip_segment(self.BOX, 1.0, 2.0, 3.0, 4.0), (1.0, 2.0, 3.0, 4.0))

    def test_segment_keeps_its_direction(self) -> None:
        x0, y0, x1, y1 = clip_segment(self.BOX, 5.0, 5.0, 5.0 + 1e20, 5.0 + 1e19)
        self.assertEqual((x0, y0), (5.0, 5.0))
        self.assertAlmostEqual(x1, 10.0)
        self.assertAlmostEqual(y1, 5.5)

    def test_segment_missing_box(self) -> None:
        self.assertIsNone(clip_segment(self.BOX, -5.0, -1.0, 20.0, -1.0))

    def test_polygon_covering_box_becomes_box(self) -> None:
        big = [(-1e14, -1e14), (1e14, -1e14), (1e14, 1e14), (-1e14, 1e14)]
        clipped = clip_polygon(self.BOX, big)
        self.assertEqual(sorted(clipped), [(0.0, 0.0), (0.0, 10.0), (10.0, 0.0), (10.0, 10.0)])

    def test_polygon_outside_box_is_empty(self) -> None:
        self.assertEqual(clip_polygon(self.BOX, [(20.0, 20.0), (30.0, 20.0), (25.0, 30.0)]), [])

    def test_far_polygon_fills_only_its_visible_side(self) -> None:
        canvas = new_canvas(20, 20)
        # everything on or below the main diagonal, in pixel rows
        fill_polygon(canvas, [(-1e14, -1e14), (1e14, 1e14), (-1e14, 1e14)], (0, 0, 0))
        self.assertEqual(canvas[15, 2, :3].tolist(), [0, 0, 0])
        self.assertEqual(canvas[2, 15, :3].tolist(), [255, 255, 255])


class TextTests(unittest.TestCase):
    def test_rotated_mask_swaps_dimensions(self) -> None:
        flat = text_mask("value", font_size_px=14.0)
        turned = text_mask("value", font_size_px=14.0, rotate_deg=90)
        self.assertEqual(turned.shape, flat.shape[::-1])

    def test_rotated_label_cache_rebuilds_only_when_invalid(self) -> None:
        cache = RotatedLabelCache(font_size_px=13.0)
        first = cache.get("volts")
        self.assertIs(cache.get("volts"), first)
        self.assertEqual(cache.builds, 1)
        cache.invalidate()
        cache.get("volts")
        self.assertEqual(cache.builds, 2)
        cache.get("amps")
        self.assertEqual(cache.builds, 3)


if __name__ == "__main__":
    unittest.main()
