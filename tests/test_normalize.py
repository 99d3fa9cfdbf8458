from __future__ import annotations

from decimal import Decimal
import importlib.util
import unittest

import numpy as np

from rasterplot.adapters import normalize_xy
from rasterplot.errors import PlotDataError


class NormalizeTests(unittest.TestCase):
    def test_lists_become_read_only_float_arrays(self) -> None:
        x, y = normalize_xy([0, 1, 2], (3, 4, 5))
        self.assertEqual(x.dtype, np.float64)
        self.assertEqual(y.tolist(), [3.0, 4.0, 5.0])
        self.assertFalse(x.flags.writeable)

    def test_input_arrays_are_copied(self) -> None:
        src = np.asarray([1.0, 2.0])
        x, _ = normalize_xy(src, [0.0, 0.0])
        src[0] = 99.0
        self.assertEqual(x[0], 1.0)

    def test_decimal_and_none_holes(self) -> None:
        x, y = normalize_xy([Decimal("1.5"), None, 3], [0, 1, 2])
        self.assertEqual(x[0], 1.5)
        self.assertTrue(np.isnan(x[1]))
        self.assertEqual(x[2], 3.0)

    def test_length_mismatch(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_xy([0, 1, 2], [0, 1])

    def test_non_numeric_values(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_xy(["a", "b"], [0, 1])
        with self.assertRaises(PlotDataError):
            normalize_xy([object()], [0])

    def test_strings_and_missing_inputs_are_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_xy("12", "34")
        with self.assertRaises(PlotDataError):
            normalize_xy(None, [1.0])

    def test_two_dimensional_arrays_are_rejected(self) -> None:
        with self.assertRaises(PlotDataError):
            normalize_xy(np.zeros((2, 2)), np.zeros((2, 2)))

    def test_empty_input_respects_allow_empty(self) -> None:
        x, y = normalize_xy([], [])
        self.assertEqual(x.size, 0)
        with self.assertRaises(PlotDataError):
            normalize_xy([], [], allow_empty=False)

    def test_pandas_series(self) -> None:
        if importlib.util.find_spec("pandas") is None:
            self.skipTest("pandas is not installed")
        import pandas as pd

        x, y = normalize_xy(pd.Series([1, 2, 3]), pd.Series([0.5, None, 1.5]))
        self.assertEqual(x.tolist(), [1.0, 2.0, 3.0])
        self.assertTrue(np.isnan(y[1]))

    def test_torch_tensor(self) -> None:
        if importlib.util.find_spec("torch") is None:
            self.skipTest("torch is not installed")
        import torch

        x, y = normalize_xy(torch.arange(4), torch.tensor([0.0, 1.0, 4.0, 9.0]))
        self.assertEqual(x.tolist(), [0.0, 1.0, 2.0, 3.0])
        self.assertEqual(y.dtype, np.float64)


if __name__ == "__main__":
    unittest.main()
