"""
Calendar durations in milliseconds and ISO 8601 helpers.

Months, quarters and years use their mean Gregorian length so that they can
be compared with the fixed-length units. Calendar-exact stepping is done by
MonthSequence in time_sequences.
"""

from __future__ import annotations

import math
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional

MILLISECOND = 1
SECOND = 1000
MINUTE = SECOND * 60
HOUR = MINUTE * 60
DAY = HOUR * 24
WEEK = DAY * 7
MONTH = DAY * 30.436875
QUARTER = DAY * 91.310625
YEAR = DAY * 365.2425

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_ONE_MS = timedelta(milliseconds=1)


class TimeUnit(Enum):
    """Named time granularities."""

    MILLISECOND = "MILLISECOND"
    SECOND = "SECOND"
    MINUTE = "MINUTE"
    HOUR = "HOUR"
    DAY = "DAY"
    WEEK = "WEEK"
    MONTH = "MONTH"
    QUARTER = "QUARTER"
    YEAR = "YEAR"

    @property
    def milliseconds(self) -> float:
        return _UNIT_MILLISECONDS[self]


_UNIT_MILLISECONDS = {
    TimeUnit.MILLISECOND: MILLISECOND,
    TimeUnit.SECOND: SECOND,
    TimeUnit.MINUTE: MINUTE,
    TimeUnit.HOUR: HOUR,
    TimeUnit.DAY: DAY,
    TimeUnit.WEEK: WEEK,
    TimeUnit.MONTH: MONTH,
    TimeUnit.QUARTER: QUARTER,
    TimeUnit.YEAR: YEAR,
}


def milliseconds_for(unit) -> float:
    """Length of ``unit`` (a TimeUnit or its name) in milliseconds."""
    try:
        return TimeUnit(unit).milliseconds
    except ValueError:
        raise ValueError(f"Unknown time duration: {unit!r}") from None


# ---- ISO 8601 ----------------------------------------------------------------


def to_datetime(time: float) -> datetime:
    """Milliseconds since the epoch -> aware UTC datetime."""
    return _EPOCH + timedelta(milliseconds=time)


def from_datetime(dt: datetime) -> int:
    """Aware (or naive UTC) datetime -> milliseconds since the epoch."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return (dt - _EPOCH) // _ONE_MS


def utc_milliseconds(year: int, month: int = 1, day: int = 1, hour: int = 0, minute: int = 0,
                     second: int = 0, millisecond: int = 0) -> int:
    """Milliseconds since the epoch for a UTC calendar time (1-based month)."""
    return from_datetime(datetime(year, month, day, hour, minute, second, millisecond * 1000, tzinfo=timezone.utc))


def iso_to_milliseconds(text: Optional[str]) -> float:
    """Parse ``YYYY[-MM[-DD[THH:MM:SS.mmm]]]`` into milliseconds since the epoch.

    Returns NaN for ``None``, the empty string and ``"notime"``.
    """
    if text is None or text in ("", "notime"):
        return math.nan
    year = int(text[0:4])
    month, day = 1, 1
    hour = minute = second = millisecond = 0
    if len(text) > 4:
        month = int(text[5:7])
        if len(text) > 7:
            day = int(text[8:10])
            if len(text) > 10:
                hour = int(text[11:13])
                minute = int(text[14:16])
                second = int(text[17:19])
                millisecond = int(text[20:23] or 0)
    return utc_milliseconds(year, month, day, hour, minute, second, millisecond)


def milliseconds_to_iso(time: float) -> str:
    """Shortest ISO 8601 form of a time.

    Trailing default fields are omitted: midnight on January 1st prints as
    the year alone, midnight on the first of a month as ``YYYY-MM``.
    Non-finite times print as ``"notime"``.
    """
    if not math.isfinite(time):
        return "notime"
    dt = to_datetime(time)
    ms = dt.microsecond // 1000
    show_time = dt.hour != 0 or dt.minute != 0 or dt.second != 0 or ms != 0
    show_day = dt.day != 1 or show_time
    show_month = dt.month != 1 or show_day

    result = f"{dt.year:04d}"
    if show_month:
        result += f"-{dt.month:02d}"
    if show_day:
        result += f"-{dt.day:02d}"
    if show_time:
        result += f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}.{ms:03d}"
    return result


def time_to_custom_iso(time: float, unit: TimeUnit) -> str:
    """ISO 8601 text truncated to ``unit`` (only YEAR, MONTH and DAY truncate).

    Examples: 2005-06-07 at YEAR -> ``2005``; 2005 at DAY -> ``2005-01-01``.
    """
    if not math.isfinite(time):
        raise ValueError(f"Time must be finite, got {time}")
    dt = to_datetime(time)
    result = f"{dt.year:04d}"
    if unit is TimeUnit.YEAR:
        return result
    result += f"-{dt.month:02d}"
    if unit is TimeUnit.MONTH:
        return result
    result += f"-{dt.day:02d}"
    if unit is TimeUnit.DAY:
        return result
    return result + f"T{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d}.{dt.microsecond // 1000:03d}"
