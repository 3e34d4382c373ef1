"""Centralized math utilities for generation and scoring.

Pure functions only. The clamping helpers never propagate NaN or infinity:
NaN maps to the lower bound, infinities to the nearest bound.
"""

from __future__ import annotations

import math


def clamp(value: float, min_value: float, max_value: float) -> float:
    """Clamp ``value`` into ``[min_value, max_value]``, sanitising non-finite input."""
    if value != value:  # NaN
        return min_value
    return max(min_value, min(max_value, value))


def clamp01(value: float) -> float:
    return clamp(value, 0.0, 1.0)


def finite_or(value: float, default: float) -> float:
    """Return ``value`` as a float when finite, otherwise ``default``."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number):
        return default
    return number


def js_round(value: float) -> int:
    """Round half up (towards +infinity), matching browser-style rounding."""
    return int(math.floor(value + 0.5))


def format_number(value: float) -> str:
    """Fixed textual form: integers without decimals, other floats with two."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.2f}"
