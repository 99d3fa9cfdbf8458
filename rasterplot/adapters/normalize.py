from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np

from rasterplot.errors import PlotDataError


try:
    import pandas as pd
except ImportError:  # pragma: no cover - optional dependency
    pd = None  # type: ignore[assignment]

try:
    import torch
except ImportError:  # pragma: no cover - optional dependency
    torch = None  # type: ignore[assignment]


def normalize_xy(x: Any, y: Any, *, allow_empty: bool = True) -> tuple[np.ndarray, np.ndarray]:
    """Coerce paired coordinate inputs into read-only float64 arrays.

    ``None`` entries become NaN holes. Raises :class:`PlotDataError` on length
    mismatch, non-numeric values, non 1-D input, or empty input when
    ``allow_empty`` is false.
    """
    x_arr = _coerce_1d_numeric(x, label="x")
    y_arr = _coerce_1d_numeric(y, label="y")
    if x_arr.shape != y_arr.shape:
        raise PlotDataError(f"x and y length mismatch: {x_arr.size} != {y_arr.size}")
    if not allow_empty and x_arr.size == 0:
        raise PlotDataError("empty coordinate sequence")
    x_arr = np.array(x_arr, dtype=np.float64, copy=True)
    y_arr = np.array(y_arr, dtype=np.float64, copy=True)
    x_arr.setflags(write=False)
    y_arr.setflags(write=False)
    return x_arr, y_arr


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if value is None:
        raise PlotDataError(f"{label} input is required")

    if torch is not None and isinstance(value, torch.Tensor):
        tensor = value.detach()
        if tensor.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        if tensor.is_cuda:
            tensor = tensor.cpu()
        return tensor.to(torch.float64).numpy()

    if pd is not None and isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise PlotDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return _coerce_ndarray(np.asarray(value, dtype=object), label=label)

    raise PlotDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.ndim != 1:
        raise PlotDataError(f"{label} must be 1-D")
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            out[i] = np.nan
            continue
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        if isinstance(raw, (str, bytes)):
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}")
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise PlotDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
