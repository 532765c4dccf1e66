"""Helpers shared by the decoration suppliers."""

from __future__ import annotations

import copy
import math
from typing import Optional

from axisticks.decorations import AxisDecoration
from axisticks.formatting import DEFAULT_MAX_DECIMALS, NumberFormatter, NumberFormatterBuilder
from axisticks.mappers import Mapper
from axisticks.numeric import (
    PRECISION_THRESHOLD,
    count_required_decimal_precision,
    min_fraction_digits,
    round_half_up,
    round_to_significant_digits,
)
from axisticks.sequences import SequenceCursor
from axisticks.text import Orientation, TextMeasurer


class AxisTools:
    """Candidate tick generation and layout checks for one mapper.

    An instance carries the formatter currently being tried, so label
    checks always measure the labels that would actually be drawn.

    Args:
        mapper: Data <-> screen mapper of the axis
        measurer: Label measurer, None when labels are not measured
        orientation: Axis orientation, selects width or height
        formatter_builder: Builder for label formatters, None for unlabelled axes;
            copied, the caller's builder is never modified
    """

    def __init__(
        self,
        mapper: Mapper,
        measurer: Optional[TextMeasurer],
        orientation: Orientation,
        formatter_builder: Optional[NumberFormatterBuilder],
    ):
        self.mapper = mapper
        self.measurer = measurer
        self.orientation = orientation
        self.formatter_builder = copy.copy(formatter_builder) if formatter_builder is not None else None
        self.formatter: Optional[NumberFormatter] = None
        # (multiple, multiplier, modulus) of the last is_multiple() call
        self._multiple_cache: Optional[tuple[float, float, float]] = None

    # ---- Formatting ---------------------------------------------------------

    def build_formatter(self) -> None:
        """Snapshot the builder into the formatter used for label checks."""
        if self.formatter_builder is None:
            return
        # Keeps log-scale labels from showing binary noise when no fraction
        # digits were set.
        self.formatter_builder.set_significant_digits(DEFAULT_MAX_DECIMALS)
        self.formatter = self.formatter_builder.build()

    def calc_min_fraction_digits(self, values: list[float]) -> None:
        """Fix the builder's fraction digits to what ``values`` need."""
        if self.formatter_builder is None:
            return
        digits = min_fraction_digits(values)
        self.formatter_builder.set_min_decimals(digits)
        self.formatter_builder.set_max_decimals(digits)

    def format(self, value: float) -> str:
        return self.formatter.format(value) if self.formatter is not None else ""

    # ---- Layout checks ------------------------------------------------------

    def check_spacing(self, values: list[float], min_spacing: float) -> bool:
        """True if consecutive values are at least ``min_spacing`` pixels apart."""
        screen = self.mapper.screen_value
        for previous, current in zip(values, values[1:]):
            if not abs(screen(current) - screen(previous)) >= min_spacing:
                return False
        return True

    def is_multiple(self, value: float, multiple: Optional[float]) -> bool:
        """True if ``value`` is an integer multiple of ``multiple`` (None: always)."""
        if multiple is None:
            return True
        if self._multiple_cache is None or self._multiple_cache[0] != multiple:
            # Scale to integers so the modulo is exact
            multiplier = math.pow(10, count_required_decimal_precision(multiple or 1))
            self._multiple_cache = (multiple, multiplier, round_half_up(multiple * multiplier))
        _, multiplier, modulus = self._multiple_cache
        scaled = round_to_significant_digits(15, value * multiplier)
        return abs(math.fmod(scaled, modulus)) < PRECISION_THRESHOLD

    def all_labels_unique(self, values: list[float]) -> bool:
        if self.formatter is None:
            return True
        seen = set()
        for value in values:
            label = self.formatter.format(value)
            if label in seen:
                return False
            seen.add(label)
        return True

    def remove_collisions_with_zero(self, values: list[float]) -> list[float]:
        """Drop non-zero values that land on the zero pixel.

        Nothing is dropped when zero sits at either end of the candidates.
        """
        if not values:
            return values
        screen = self.mapper.screen_value
        zero = screen(0)
        if zero == screen(values[0]) or zero == screen(values[-1]):
            return values
        return [v for v in values if v == 0 or screen(v) != zero]

    def data_span_size(self, screen_start: float, screen_end: float) -> float:
        return abs(self.mapper.data_value(screen_end) - self.mapper.data_value(screen_start))

    # ---- Decorations --------------------------------------------------------

    def make_labels(self, values: list[float]) -> list[AxisDecoration]:
        decorations = []
        for value in values:
            value = round_to_significant_digits(15, value)
            decorations.append(
                AxisDecoration.labeled_line_with_heavy_tick(value, self.mapper.screen_value(value), self.format(value))
            )
        return decorations

    def make_sub_lines(self, values: list[float]) -> list[AxisDecoration]:
        return [AxisDecoration.line_with_tick(v, self.mapper.screen_value(v)) for v in values]

    def make_data_values(
        self,
        cursor: SequenceCursor,
        data_min: float,
        data_max: float,
        multiple: Optional[float] = None,
        epsilon: Optional[float] = None,
    ) -> list[float]:
        """Walk ``cursor`` from at or before ``data_min`` to at or after ``data_max``.

        Values that are not multiples of ``multiple``, or that are non-zero
        but smaller in magnitude than ``epsilon``, are skipped.
        """
        if data_min == data_max:
            return [data_min]
        if not math.isfinite(data_min):
            return [data_max]

        values = []
        last_added = None
        value = cursor.floor(data_min)
        while True:
            if self.is_multiple(value, multiple) and (value == 0 or epsilon is None or abs(value) >= epsilon):
                values.append(value)
                last_added = value
            value = cursor.next()
            if last_added is not None and not last_added < data_max:
                break
        return values
