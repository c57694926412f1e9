from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal
from typing import Any

import numpy as np
import pandas as pd

from lifekline_plot.errors import FortuneDataError
from lifekline_plot.scales import clip_to_domain
from lifekline_plot.series import SeriesData

LOGGER = logging.getLogger(__name__)


def normalize_series(
    ages: Any,
    values: Any,
    *,
    source_name: str | None = None,
) -> SeriesData:
    """Coerce an age/value pair of 1-D inputs into clamped float arrays.

    Out-of-domain ages or values are clipped into [0, 100]; each clip is a
    data-contract violation and is reported through the module logger.
    """
    age_arr = _coerce_1d_numeric(ages, label="ages")
    value_arr = _coerce_1d_numeric(values, label="values")
    if age_arr.shape != value_arr.shape:
        raise FortuneDataError(f"ages and values length mismatch: {age_arr.size} != {value_arr.size}")
    if age_arr.size == 0:
        return SeriesData(ages=age_arr, values=value_arr, source_name=source_name)
    if not np.all(np.isfinite(age_arr)) or not np.all(np.isfinite(value_arr)):
        raise FortuneDataError("series contains non-finite points")

    age_arr, age_clipped = clip_to_domain(age_arr)
    value_arr, value_clipped = clip_to_domain(value_arr)
    if age_clipped:
        LOGGER.warning("clamped %d out-of-domain age(s) in series %s", age_clipped, source_name or "<unnamed>")
    if value_clipped:
        LOGGER.warning("clamped %d out-of-domain value(s) in series %s", value_clipped, source_name or "<unnamed>")
    return SeriesData(ages=age_arr, values=value_arr, source_name=source_name)


def clamp_scalar(value: float, *, label: str) -> float:
    arr, clipped = clip_to_domain(np.asarray([value], dtype=np.float64))
    if clipped:
        LOGGER.warning("clamped out-of-domain %s %r into [0, 100]", label, value)
    return float(arr[0])


def _coerce_1d_numeric(value: Any, *, label: str) -> np.ndarray:
    if isinstance(value, pd.Series):
        return _coerce_ndarray(value.to_numpy(), label=label)

    if isinstance(value, np.ndarray):
        if value.ndim != 1:
            raise FortuneDataError(f"{label} must be 1-D")
        return _coerce_ndarray(value, label=label)

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        if len(value) == 0:
            return np.empty(0, dtype=np.float64)
        return _coerce_ndarray(np.asarray(value, dtype=object), label=label)

    raise FortuneDataError(f"unsupported {label} input type: {type(value)!r}")


def _coerce_ndarray(arr: np.ndarray, *, label: str) -> np.ndarray:
    if arr.dtype.kind in {"i", "u", "f", "b"}:
        return arr.astype(np.float64, copy=False)

    out = np.empty(arr.shape[0], dtype=np.float64)
    for i, raw in enumerate(arr.tolist()):
        if raw is None:
            raise FortuneDataError(f"{label} contains a missing value at index {i}")
        if isinstance(raw, Decimal):
            out[i] = float(raw)
            continue
        try:
            out[i] = float(raw)
        except (TypeError, ValueError) as exc:
            raise FortuneDataError(f"{label} contains non-numeric value at index {i}: {raw!r}") from exc
    return out
