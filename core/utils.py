from __future__ import annotations

import math
from typing import Any, Optional

import numpy as np


def currency_round(x: float) -> float:
    """Round to the nearest currency unit, half away from zero."""
    if not math.isfinite(x):
        return x
    return math.copysign(math.floor(abs(x) + 0.5), x) + 0.0


def currency_round_array(x, decimals: int = 0) -> np.ndarray:
    """Vectorized currency_round (Excel ROUND semantics)."""
    m = 10 ** decimals
    x = np.asarray(x, dtype=float)
    return np.sign(x) * (np.floor(np.abs(x) * m + 0.5) / m)


def clamp(x: float, low: float, high: float) -> float:
    return max(low, min(high, x))


def coerce_number(
    value: Any,
    default: float = 0.0,
    *,
    minimum: Optional[float] = 0.0,
) -> float:
    """
    Best-effort conversion of a form/store value to float.

    None, empty strings, NaN/inf, unparseable text and values below `minimum`
    all become `default`. Pass minimum=None to allow negatives.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, str):
        text = value.strip().replace(",", "")
        if text == "":
            return default
        value = text
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    if minimum is not None and number < minimum:
        return default
    return number


def normalize_label(value: Any) -> str:
    """Lower-case, stripped text for enum-like profile fields ('' when missing)."""
    if value is None:
        return ""
    return str(value).strip().lower()
