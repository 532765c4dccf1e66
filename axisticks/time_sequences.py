"""
Time-based round sequences.

TimeUnitSequence steps through natural durations (1 s, 5 s, ... 1 day,
1 week, 1 month, ...) and continues with powers of ten outside that list.
MonthSequence steps over calendar month starts, which is what tick values
on a time axis need once the spacing reaches a month.
"""

from __future__ import annotations

import logging
import math

import numpy as np

from axisticks.errors import SequenceError
from axisticks.milliseconds import DAY, HOUR, MINUTE, MONTH, QUARTER, SECOND, WEEK, YEAR
from axisticks.numeric import round_half_up
from axisticks.sequences import CustomPowersOfTen, LinearSequence, PowersOfTenSequence, RoundSequence

logger = logging.getLogger(__name__)

GRANULAR_UNITS = (
    SECOND,
    SECOND * 5,
    SECOND * 10,
    SECOND * 15,
    SECOND * 30,
    MINUTE,
    MINUTE * 5,
    MINUTE * 10,
    MINUTE * 15,
    MINUTE * 30,
    HOUR,
    HOUR * 3,
    HOUR * 6,
    HOUR * 12,
    DAY,
    WEEK,
    MONTH,
    QUARTER,
    YEAR,
)

COARSE_UNITS = (SECOND, MINUTE, HOUR, DAY, WEEK, MONTH, QUARTER, YEAR)


class TimeUnitSequence(RoundSequence):
    """Natural time durations in milliseconds.

    Positions ``0 .. n-1`` are the defined units. Negative positions walk
    down a powers-of-ten sequence below the smallest unit; positions from
    ``n`` on walk up multiples of the largest unit (a year) by the same
    sequence.

    Args:
        granular: Use the fine-grained unit list (5 s, 15 min, 6 h, ...)
            with 1-2-5 multiples outside it, instead of whole units with
            plain powers of ten.
    """

    def __init__(self, granular: bool = False):
        self.granular = granular
        if granular:
            self.units = GRANULAR_UNITS
            self._inner: RoundSequence = CustomPowersOfTen([1, 2, 5])
        else:
            self.units = COARSE_UNITS
            self._inner = PowersOfTenSequence()
        self._count = len(self.units)

        self._min_position = self._inner.round_position(self.units[0])
        self.min_unit_value = self._inner.value_at(self._min_position)
        self.preceding_value = self._inner.value_at(self._min_position - 1)
        self.preceding_cutoff = self.preceding_value + (self.min_unit_value - self.preceding_value) / 2

        self.max_unit_value = self.units[-1]
        self._one_position = self._inner.round_position(1)
        self.succeeding_value = self.max_unit_value * self._inner.value_at(self._one_position + 1)
        self.succeeding_cutoff = self.max_unit_value + (self.succeeding_value - self.max_unit_value) / 2

    def _below(self, inner_position: float) -> float:
        return inner_position - self._min_position

    def _above(self, inner_position: float) -> float:
        return inner_position - self._one_position + self._count - 1

    def value_at(self, position: float) -> float:
        if position < 0:
            return self._inner.value_at(self._min_position + position)
        if position >= self._count:
            return self.max_unit_value * self._inner.value_at(self._one_position + position - self._count + 1)
        return self.units[int(position)]

    def floor_position(self, value: float) -> float:
        if value < self.min_unit_value:
            return self._below(self._inner.floor_position(value))
        if value >= self.succeeding_value:
            return self._above(self._inner.floor_position(value / self.max_unit_value))
        position = 0
        while position < self._count and value >= self.units[position]:
            position += 1
        return position - 1

    def ceil_position(self, value: float) -> float:
        if value <= self.preceding_value:
            return self._below(self._inner.ceil_position(value))
        if value > self.max_unit_value:
            return self._above(self._inner.ceil_position(value / self.max_unit_value))
        position = self._count - 1
        while position >= 0 and value <= self.units[position]:
            position -= 1
        return position + 1

    def round_position(self, value: float) -> float:
        if value < self.preceding_cutoff:
            return self._below(self._inner.round_position(value))
        if value >= self.succeeding_cutoff:
            return self._above(self._inner.round_position(value / self.max_unit_value))
        position = self._count - 1
        while position > 0 and value < self.units[position]:
            position -= 1
        if position + 1 < self._count and self.units[position + 1] - value <= value - self.units[position]:
            position += 1
        return position

    def __repr__(self) -> str:
        return f"TimeUnitSequence(granular={self.granular})"


# ---- Calendar months ---------------------------------------------------------


def _month_index(time: float) -> int:
    """Months since 1970-01 of the month containing ``time`` (UTC)."""
    moment = np.datetime64(int(math.floor(time)), "ms")
    return int(moment.astype("datetime64[M]").astype(np.int64))


def _month_start(index: int) -> float:
    return float(np.datetime64(int(index), "M").astype("datetime64[ms]").astype(np.int64))


class MonthSequence(RoundSequence):
    """Calendar month starts, ``months_per_step`` months apart.

    Positions are month indexes counted from January 1970. Steps are
    aligned so that ``(month_of_year - month_offset)`` is a multiple of the
    step; steps longer than a year also align the year to a multiple of
    the number of whole years per step (decades start on xxx0).

    Args:
        months_per_step: Whole number of months per step, at least 1
        month_offset: Alignment shift in months, between -11 and 11
    """

    def __init__(self, months_per_step: int = 1, month_offset: int = 0):
        if months_per_step < 1 or months_per_step != round_half_up(months_per_step):
            raise SequenceError(f"months_per_step must be a whole number >= 1, got {months_per_step}",
                                months_per_step)
        if month_offset != round_half_up(month_offset) or not -11 <= month_offset <= 11:
            raise SequenceError(f"month_offset must be a whole number in [-11, 11], got {month_offset}",
                                month_offset)
        self.months_per_step = int(months_per_step)
        self.month_offset = int(month_offset)
        self._years_per_step = self.months_per_step // 12

    def advance(self, position: float, steps: int = 1) -> float:
        return position + steps * self.months_per_step

    def start_position(self) -> float:
        return self.floor_position(0)

    def value_at(self, position: float) -> float:
        return _month_start(position)

    def floor_position(self, value: float) -> float:
        if not math.isfinite(value):
            raise SequenceError(f"Time must be finite, got {value}", value)
        month = _month_index(value)
        if self.months_per_step > 1:
            month_of_year = month % 12
            month -= ((month_of_year + 12 - self.month_offset) % self.months_per_step) % 12
            if self._years_per_step > 0:
                year = 1970 + month // 12
                year = math.floor(year / self._years_per_step) * self._years_per_step
                month = (year - 1970) * 12 + month % 12
        return month

    def ceil_position(self, value: float) -> float:
        position = self.floor_position(value)
        if self.value_at(position) < value:
            position = self.advance(position)
        return position

    def round_position(self, value: float) -> float:
        position = self.floor_position(value)
        below = self.value_at(position)
        if below != value:
            following = self.advance(position)
            if value - below >= self.value_at(following) - value:
                return following
        return position

    def __repr__(self) -> str:
        return f"MonthSequence({self.months_per_step}, month_offset={self.month_offset})"


def create_time_sequence(time_unit: float, first_day_of_week: int = 1) -> RoundSequence:
    """Round sequence of tick times for a time unit given in milliseconds.

    The unit is first snapped to a natural one. Below a month the result is
    linear in milliseconds; weekly sequences start on ``first_day_of_week``
    (0 = Sunday, 1 = Monday). From a month on, calendar months are used.
    """
    time_unit = TimeUnitSequence(granular=True).round(time_unit)
    if time_unit < MONTH:
        if time_unit == WEEK:
            # 1970-01-01 was a Thursday
            return LinearSequence(time_unit, DAY * (3 + first_day_of_week))
        return LinearSequence(time_unit)
    logger.debug("Month-based time sequence for unit %s ms", time_unit)
    return MonthSequence(round_half_up(time_unit / MONTH))
