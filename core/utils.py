from __future__ import annotations

import math
from numbers import Real


def guarded_ratio(numerator: float, denominator: float) -> float:
    """numerator / denominator when the denominator is positive, else 0.0."""
    if denominator > 0:
        return numerator / denominator
    return 0.0


def apply_take_rate(amount: float, take_rate_pct: float) -> float:
    """Weight an offer amount by its take rate, given in percent (50 -> half)."""
    return amount * (take_rate_pct / 100)


def is_finite_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool) and math.isfinite(value)


def format_plain_number(value: float) -> str:
    """
    Render a number the way a spreadsheet cell shows it: integral values
    without a trailing ".0", everything else at full float precision.
    """
    value = float(value)
    if math.isfinite(value) and value.is_integer():
        return str(int(value))
    return repr(value)
