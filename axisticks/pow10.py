"""Power-of-ten arithmetic.

Helpers for snapping values to powers of ten and for rebuilding
``significand * 10**exponent`` without binary noise: ``6 * 10**-1``
is ``0.6000000000000001`` in floating point, while
``exact_scientific(6, -1)`` is ``0.6``.
"""

from __future__ import annotations

import math


def power_of(exponent: float) -> float:
    """Return 10 raised to ``exponent`` (``inf`` on overflow)."""
    try:
        return 10.0**exponent
    except OverflowError:
        return math.inf


def exact_scientific(significand: float, exponent: int) -> float:
    """Return ``significand * 10**exponent`` with a single rounding step.

    Negative exponents divide by the exact power instead of multiplying by
    an inexact reciprocal.
    """
    if exponent < 0:
        return significand / power_of(-exponent)
    return significand * power_of(exponent)


def exponent_of(value: float) -> float:
    """Return ``log10(value)``. ``value`` must be positive."""
    return math.log10(value)


def floor_exponent(value: float) -> int:
    return math.floor(exponent_of(value))


def ceil_exponent(value: float) -> int:
    return math.ceil(exponent_of(value))


def round_exponent(value: float) -> int:
    return math.floor(exponent_of(value) + 0.5)


def floor(value: float) -> float:
    """Largest power of ten that is <= value."""
    return exact_scientific(1, floor_exponent(value))


def ceil(value: float) -> float:
    """Smallest power of ten that is >= value."""
    return exact_scientific(1, ceil_exponent(value))


def round(value: float) -> float:  # noqa: A001
    """Power of ten closest to value on a linear scale.

    Ties go to the larger power: ``round(550) == 1000``.
    """
    ceiled = exact_scientific(1, ceil_exponent(value))
    floored = ceiled / 10
    if value - floored < ceiled - value:
        return floored
    return ceiled
