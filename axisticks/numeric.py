"""Numeric helpers shared by the sequences and the spacing search."""

from __future__ import annotations

import math
from typing import Iterable

PRECISION_THRESHOLD = 1e-15

# Sixteen decimals is the most a double can meaningfully carry
_MAX_DECIMAL_PRECISION = 16


def round_half_up(value: float) -> float:
    """Round to the nearest integer, ties toward positive infinity (-2.5 -> -2)."""
    return math.floor(value + 0.5)


def count_required_decimal_precision(num: float) -> int:
    """Number of decimals needed to write ``num`` without loss.

    >>> count_required_decimal_precision(0.25)
    2
    """
    if num == 0:
        return 0
    x = abs(num)
    for i in range(_MAX_DECIMAL_PRECISION):
        if abs(x - round_half_up(x)) < x * PRECISION_THRESHOLD:
            return i
        x = x * 10
    return _MAX_DECIMAL_PRECISION


def round_to_significant_digits(num_digits: int, value: float) -> float:
    """Round ``value`` to ``num_digits`` significant digits.

    1200, 1.2 and 0.012 all have two significant digits. Zero and
    subnormal-range values are returned unchanged.
    """
    if value == 0 or abs(value) < 1e-290 or not math.isfinite(value):
        return value
    if num_digits <= 0:
        raise ValueError(f"num_digits must be > 0, got {num_digits}")
    value_exponent = math.floor(math.log10(abs(value))) + 1
    if value_exponent > num_digits:
        normalizer = 10.0 ** (value_exponent - num_digits)
        return round_half_up(value / normalizer) * normalizer
    normalizer = 10.0 ** (num_digits - value_exponent)
    return round_half_up(value * normalizer) / normalizer


def min_fraction_digits(numbers: Iterable[float]) -> int:
    """Fraction digits needed to render every number in ``numbers`` exactly."""
    precision = 0
    for n in numbers:
        precision = max(precision, count_required_decimal_precision(n))
    return precision
