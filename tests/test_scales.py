from __future__ import annotations

import math
import unittest

import numpy as np

from rasterplot.errors import PlotDataError
from rasterplot.scales import (
    Bounds,
    DataLimits,
    build_transform,
    ensure_nonzero_span,
    fix_limits,
    format_tick,
    make_ticks,
    nice_number,
)
from rasterplot.style import PlotMargins


class NiceNumberTests(unittest.TestCase):
    def test_snap_up_table(self) -> None:
        self.assertAlmostEqual(nice_number(1.0, round_result=False), 1.0)
        self.assertAlmostEqual(nice_number(1.1, round_result=False), 2.0)
        self.assertAlmostEqual(nice_number(4.2, round_result=False), 5.0)
        self.assertAlmostEqual(nice_number(7.3, round_result=False), 10.0)
        self.assertAlmostEqual(nice_number(730.0, round_result=False), 1000.0)

    def test_rounding_table(self) -> None:
        self.assertAlmostEqual(nice_number(1.4, round_result=True), 1.0)
        self.assertAlmostEqual(nice_number(0.23, round_result=True), 0.2)
        self.assertAlmostEqual(nice_number(4.0, round_result=True), 5.0)
        self.assertAlmostEqual(nice_number(80.0, round_result=True), 100.0)

    def test_degenerate_range_is_treated_as_one(self) -> None:
        self.assertEqual(nice_number(0.0, round_result=False), 1.0)
        self.assertEqual(nice_number(-3.0, round_result=True), 1.0)
        self.assertEqual(nice_number(math.nan, round_result=True), 1.0)


class TickTests(unittest.TestCase):
    def test_unit_interval_uses_one_decimal(self) -> None:
        ticks = make_ticks(0.0, 1.0)
        self.assertAlmostEqual(ticks.step, 0.2)
        self.assertEqual(ticks.labels, ("0.0", "0.2", "0.4", "0.6", "0.8", "1.0"))

    def test_integer_steps_use_no_decimals(self) -> None:
        ticks = make_ticks(0.0, 100.0)
        self.assertEqual(ticks.labels, ("0", "20", "40", "60", "80", "100"))
        self.assertEqual(len(ticks), 6)

    def test_ticks_are_clipped_to_visible_interval(self) -> None:
        ticks = make_ticks(-0.05, 1.05)
        self.assertEqual(ticks.labels, ("0.0", "0.5", "1.0"))
        for loc in ticks.locs:
            self.assertGreaterEqual(loc, -0.05 - 1e-12)
            self.assertLessEqual(loc, 1.05 + 1e-12)

    def test_ticks_ascend_for_reversed_interval(self) -> None:
        self.assertEqual(make_ticks(10.0, 0.0), make_ticks(0.0, 10.0))
        locs = make_ticks(10.0, 0.0).locs
        self.assertEqual(list(locs), sorted(locs))

    def test_iteration_yields_pairs(self) -> None:
        pairs = list(make_ticks(0.0, 100.0))
        self.assertEqual(pairs[1], (20.0, "20"))

    def test_target_below_two_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            make_ticks(0.0, 1.0, target=1)

    def test_negative_zero_label(self) -> None:
        self.assertEqual(format_tick(-0.04, step=0.1), "0.0")
        self.assertEqual(format_tick(-0.0, step=1.0), "0")

    def test_interval_near_float_ceiling_terminates(self) -> None:
        ticks = make_ticks(-0.05e308, 1.05e308)
        self.assertTrue(0 < len(ticks) <= 7)
        self.assertTrue(all(math.isfinite(v) for v in ticks.locs))
        self.assertEqual(list(ticks.locs), sorted(ticks.locs))

    def test_interval_wider_than_float_range(self) -> None:
        ticks = make_ticks(-1e308, 1e308)
        self.assertTrue(0 < len(ticks) <= 7)
        self.assertIn(0.0, ticks.locs)

    def test_non_finite_interval_has_no_ticks(self) -> None:
        self.assertEqual(len(make_ticks(0.0, math.inf)), 0)


class SpanTests(unittest.TestCase):
    def test_zero_span_is_perturbed_relative_to_magnitude(self) -> None:
        lo, hi = ensure_nonzero_span(5.0, 5.0)
        self.assertAlmostEqual(lo, 4.995)
        self.assertAlmostEqual(hi, 5.005)

    def test_zero_span_at_origin_uses_absolute_eps(self) -> None:
        self.assertEqual(ensure_nonzero_span(0.0, 0.0), (-1e-3, 1e-3))

    def test_fix_limits_leaves_valid_spans(self) -> None:
        limits = DataLimits(xmin=0.0, xmax=2.0, ymin=-1.0, ymax=1.0)
        self.assertEqual(fix_limits(limits), limits)


class BoundsTests(unittest.TestCase):
    def test_invalid_until_first_point(self) -> None:
        bounds = Bounds()
        self.assertFalse(bounds.valid())
        bounds.expand(2.0, -3.0)
        self.assertTrue(bounds.valid())
        self.assertEqual(bounds.as_limits(), DataLimits(xmin=2.0, xmax=2.0, ymin=-3.0, ymax=-3.0))

    def test_arrays_skip_non_finite_points(self) -> None:
        bounds = Bounds()
        bounds.expand_arrays(np.asarray([0.0, np.nan, 4.0, np.inf]), np.asarray([1.0, 50.0, -1.0, 2.0]))
        self.assertEqual(bounds.as_limits(), DataLimits(xmin=0.0, xmax=4.0, ymin=-1.0, ymax=1.0))

    def test_all_non_finite_leaves_bounds_invalid(self) -> None:
        bounds = Bounds()
        bounds.expand_arrays(np.asarray([np.nan]), np.asarray([1.0]))
        self.assertFalse(bounds.valid())


class TransformTests(unittest.TestCase):
    def test_corners_map_to_plot_rect_with_flipped_y(self) -> None:
        t = build_transform(DataLimits(0.0, 10.0, 0.0, 10.0), 640, 480, PlotMargins())
        self.assertEqual(t.plot_rect(), (60, 40, 560, 380))
        self.assertEqual(t.data_to_pixel(0.0, 0.0), (60, 420))
        self.assertEqual(t.data_to_pixel(10.0, 10.0), (620, 40))
        self.assertEqual(t.data_to_pixel(0.0, 10.0), (60, 40))

    def test_rounding_is_half_up(self) -> None:
        margins = PlotMargins(left=0, right=0, top=0, bottom=0)
        t = build_transform(DataLimits(0.0, 1.0, 0.0, 1.0), 4, 4, margins)
        self.assertEqual(t.data_to_pixel(0.125, 0.0)[0], 1)
        self.assertEqual(t.data_to_pixel(-0.125, 0.0)[0], 0)

    def test_map_arrays_matches_scalar_mapping(self) -> None:
        t = build_transform(DataLimits(-3.0, 7.0, 2.0, 5.0), 320, 240, PlotMargins())
        xs = np.asarray([-3.0, 0.3, 6.9])
        ys = np.asarray([2.0, 4.1, 5.0])
        px, py = t.map_arrays(xs, ys)
        expected = [t.data_to_pixel(x, y) for x, y in zip(xs.tolist(), ys.tolist())]
        self.assertEqual(list(zip(px.tolist(), py.tolist())), expected)

    def test_far_points_clamp_instead_of_wrapping(self) -> None:
        t = build_transform(DataLimits(0.0, 1.0, 0.0, 1.0), 200, 200, PlotMargins())
        px, py = t.map_arrays(np.asarray([0.5, 1e20, -1e20]), np.asarray([0.5, -1e20, 1e20]))
        self.assertGreater(px[1], 200)
        self.assertLess(px[2], 0)
        self.assertGreater(py[1], 200)
        self.assertLess(py[2], 0)

    def test_canvas_box_maps_to_canvas_corners(self) -> None:
        t = build_transform(DataLimits(0.0, 10.0, 0.0, 10.0), 640, 480, PlotMargins())
        xmin, ymin, xmax, ymax = t.canvas_box()
        self.assertEqual(t.data_to_pixel(xmin, ymax), (0, 0))
        self.assertEqual(t.data_to_pixel(xmax, ymin), (640, 480))
        wider = t.canvas_box(pad=10)
        self.assertEqual(t.data_to_pixel(wider[0], wider[3]), (-10, -10))

    def test_lengths_use_per_axis_scale(self) -> None:
        t = build_transform(DataLimits(0.0, 10.0, 0.0, 5.0), 640, 480, PlotMargins())
        self.assertAlmostEqual(t.length_x(2.0), 112.0)
        self.assertAlmostEqual(t.length_y(-1.0), 76.0)

    def test_too_small_figure_is_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            build_transform(DataLimits(0.0, 1.0, 0.0, 1.0), 80, 100, PlotMargins())


if __name__ == "__main__":
    unittest.main()
