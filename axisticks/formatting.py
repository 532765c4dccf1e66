"""
Label formatting capabilities.

The search engine only needs two things from a number formatter: turn a
value into a label, and accept the minimum/maximum fraction digits and the
significant-digit limit it computes from the candidate tick values. Time
formatters render a timestamp at a configurable granularity.
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Optional

from axisticks import numeric
from axisticks.milliseconds import TimeUnit, milliseconds_to_iso, time_to_custom_iso, to_datetime

DEFAULT_MAX_DECIMALS = 15

MONTH_NAMES = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


class NumberFormatter:
    """Formats numbers with thousands grouping and bounded fraction digits.

    Attributes:
        min_decimals: Fraction digits always shown (None: as many as needed)
        max_decimals: Fraction digits never exceeded (None: DEFAULT_MAX_DECIMALS)
        significant_digits: Round to this many significant digits first
    """

    def __init__(
        self,
        min_decimals: Optional[int] = None,
        max_decimals: Optional[int] = None,
        significant_digits: Optional[int] = None,
    ):
        self.min_decimals = min_decimals
        self.max_decimals = max_decimals
        self.significant_digits = significant_digits

    def format(self, value: float) -> str:
        if not math.isfinite(value):
            return str(value)
        if self.significant_digits is not None:
            value = numeric.round_to_significant_digits(self.significant_digits, value)
        if value == 0:
            value = 0.0  # no "-0"
        decimals = numeric.count_required_decimal_precision(value)
        if self.min_decimals is not None:
            decimals = max(decimals, self.min_decimals)
        max_decimals = self.max_decimals if self.max_decimals is not None else DEFAULT_MAX_DECIMALS
        decimals = min(decimals, max_decimals)
        return f"{value:,.{decimals}f}"

    def __repr__(self) -> str:
        return (
            f"NumberFormatter(min_decimals={self.min_decimals}, max_decimals={self.max_decimals}, "
            f"significant_digits={self.significant_digits})"
        )


class NumberFormatterBuilder:
    """Accumulates formatter settings; ``build()`` snapshots them.

    Setters return the builder so calls can be chained.
    """

    def __init__(self):
        self._min_decimals: Optional[int] = None
        self._max_decimals: Optional[int] = None
        self._significant_digits: Optional[int] = None

    def set_min_decimals(self, value: int) -> NumberFormatterBuilder:
        self._min_decimals = value
        return self

    def set_max_decimals(self, value: int) -> NumberFormatterBuilder:
        self._max_decimals = value
        return self

    def set_significant_digits(self, value: int) -> NumberFormatterBuilder:
        self._significant_digits = value
        return self

    def build(self) -> NumberFormatter:
        return NumberFormatter(self._min_decimals, self._max_decimals, self._significant_digits)


class FixedFormatterBuilder(NumberFormatterBuilder):
    """Builder that ignores every setting and always returns one formatter.

    Lets a caller hand a ready-made formatter to code that expects a builder.
    """

    def __init__(self, formatter: NumberFormatter):
        super().__init__()
        self.formatter = formatter

    def build(self) -> NumberFormatter:
        return self.formatter


# ---- Time --------------------------------------------------------------------


class TimeFormatter(ABC):
    """Formats timestamps (milliseconds since the epoch, UTC)."""

    @abstractmethod
    def set_time_unit(self, unit: TimeUnit) -> None: ...

    @abstractmethod
    def format(self, time: float) -> str: ...


class SimpleTimeFormatter(TimeFormatter):
    """Year, quarter and "Mon YYYY" labels; ISO 8601 for finer units."""

    def __init__(self, unit: Optional[TimeUnit] = None):
        self.unit = unit

    def set_time_unit(self, unit: TimeUnit) -> None:
        self.unit = unit

    def format(self, time: float) -> str:
        if not math.isfinite(time):
            return "notime"
        if self.unit is TimeUnit.YEAR:
            return str(to_datetime(time).year)
        if self.unit is TimeUnit.QUARTER:
            return f"Q{(to_datetime(time).month - 1) // 3 + 1}"
        if self.unit is TimeUnit.MONTH:
            dt = to_datetime(time)
            return f"{MONTH_NAMES[dt.month - 1]} {dt.year}"
        if self.unit is TimeUnit.DAY:
            return time_to_custom_iso(time, TimeUnit.DAY)
        return milliseconds_to_iso(time)
