"""
Time axis decoration search.

A TimeAxisStrategy lays out ticks at one calendar granularity (say, every
month) with labels every ``units_per_label`` of them, and gives up (returns
None) as soon as two labels would collide. TimeAxisDecorationSupplier tries
a fixed ladder of strategies from fine to coarse and keeps the first one
that fits.
"""

from __future__ import annotations

import logging
import math
from typing import Optional

from axisticks import config
from axisticks.decorations import AxisDecoration
from axisticks.formatting import TimeFormatter
from axisticks.mappers import Mapper
from axisticks.milliseconds import TimeUnit, milliseconds_for
from axisticks.sequences import SequenceCursor
from axisticks.text import Orientation, TextMeasurer
from axisticks.time_sequences import create_time_sequence

logger = logging.getLogger(__name__)

# Labels may overhang the chart by this much on each side
_OVERHANG_MARGIN = 20
# Ticks closer than this many pixels are dropped
_MIN_TICK_SPACING = 5


class TimeAxisStrategy:
    """Lay out a time axis at a single label granularity.

    Args:
        data_granularity: Resolution of the data, used for the end label
        label_granularity: Calendar unit of the ticks
        units_per_label: Ticks per labelled gridline
        measurer: Label measurer
        formatter: Time formatter; its unit is switched while laying out
        mapper: Time (milliseconds) <-> screen mapper
        min_label_distance: Minimum gap between adjacent labels in pixels
        orientation: Axis orientation
        include_last: Add a left-aligned label at the end of the data range
    """

    def __init__(
        self,
        data_granularity: TimeUnit,
        label_granularity: TimeUnit,
        units_per_label: int,
        measurer: TextMeasurer,
        formatter: TimeFormatter,
        mapper: Mapper,
        min_label_distance: float,
        orientation: Orientation,
        include_last: bool,
    ):
        self.data_granularity = data_granularity
        self.label_granularity = label_granularity
        self.units_per_label = units_per_label
        self.measurer = measurer
        self.formatter = formatter
        self.mapper = mapper
        self.min_label_distance = min_label_distance
        self.orientation = orientation
        self.include_last = include_last
        self.data_granularity_ms = milliseconds_for(data_granularity)
        self.label_duration = milliseconds_for(label_granularity)
        self.formatter.set_time_unit(label_granularity)

    def __repr__(self) -> str:
        return f"TimeAxisStrategy({self.label_granularity.name} x {self.units_per_label})"

    def _size(self, label: Optional[str]) -> float:
        return self.measurer.size_along(label, self.orientation)

    def _screen_middle(self) -> float:
        start, end = self.mapper.screen_start, self.mapper.screen_end
        return start + (end - start) / 2

    def attempt(self) -> Optional[list[AxisDecoration]]:
        """Decorations at this granularity, or None if labels collide."""
        first_time = self.mapper.data_min
        last_time = self.mapper.data_max

        self.formatter.set_time_unit(self.data_granularity)
        if first_time == last_time:
            return [AxisDecoration.label_only(first_time, self._screen_middle(), self.formatter.format(first_time))]
        last_decoration = AxisDecoration.left_aligned_label_with_line_and_tick(
            last_time, self.mapper.screen_end, self.formatter.format(last_time)
        )
        self.formatter.set_time_unit(self.label_granularity)

        label_intervals = self.units_per_label == 1 and self.label_duration > self.data_granularity_ms

        lines = create_time_sequence(self.label_duration * self.units_per_label).cursor()
        ticks = create_time_sequence(self.label_duration).cursor()

        decorations: list[AxisDecoration] = []
        previous = math.nan
        next_line = lines.ceil(first_time)
        value = ticks.ceil(first_time)
        while value <= last_time:
            position = self.mapper.screen_value(value)
            if value == next_line:
                next_line = lines.next()
                if self.two_labels_collide(previous, value):
                    return None
                if label_intervals:
                    if not math.isnan(previous):
                        decorations.append(self._label_between(previous, value))
                    decorations.append(AxisDecoration.line_with_heavy_tick(value, position))
                else:
                    decorations.append(
                        AxisDecoration.labeled_line_with_heavy_tick(value, position, self.formatter.format(value))
                    )
                previous = value
            else:
                decorations.append(AxisDecoration.tick(value, position))
            value = ticks.next()

        if label_intervals and last_time < value:
            self._add_label_for_incomplete_interval(decorations, ticks, last_time)

        if self.include_last:
            self._hide_last_label_if_overlapping(last_decoration, decorations)
            decorations.append(last_decoration)

        if sum(1 for d in decorations if d.label is not None) < 2:
            return self._summary_label()

        if self.ticks_collide(decorations):
            return [d for d in decorations if not d.has_tick or d.has_line]

        return decorations

    def _add_label_for_incomplete_interval(
        self, decorations: list[AxisDecoration], ticks: SequenceCursor, max_time: float
    ) -> None:
        label = self.formatter.format(max_time)
        next_time = ticks.value
        prev_time = ticks.previous()
        middle = (self.mapper.screen_value(prev_time) + self.mapper.screen_value(next_time)) / 2
        if self.mapper.screen_value(max_time) - middle > self._size(label) / 2:
            decorations.append(AxisDecoration.label_only(max_time, middle, label))

    def _hide_last_label_if_overlapping(
        self, max_decoration: AxisDecoration, decorations: list[AxisDecoration]
    ) -> None:
        previous = self.find_last_labeled_decoration(decorations)
        if previous is None:
            return
        midpoint_distance = abs(previous.rounded_position - max_decoration.rounded_position)
        gap = midpoint_distance - (self._size(previous.label) + self._size(max_decoration.label)) / 2
        if gap < self.min_label_distance:
            previous.clear_label()

    @staticmethod
    def find_last_labeled_decoration(decorations: list[AxisDecoration]) -> Optional[AxisDecoration]:
        for decoration in reversed(decorations):
            if decoration.label is not None:
                return decoration
        return None

    def _summary_label(self) -> list[AxisDecoration]:
        """A single "start-end" label for ranges too short for two labels."""
        start = self.formatter.format(self.mapper.data_min)
        end = self.formatter.format(self.mapper.data_max)
        label = f"{start}-{end}"
        chart_width = abs(self.mapper.screen_start - self.mapper.screen_end)
        if self.measurer.width(label) > chart_width + _OVERHANG_MARGIN * 2:
            return []
        return [AxisDecoration.label_only(math.nan, self._screen_middle(), label)]

    def two_labels_collide(self, value1: float, value2: float) -> bool:
        """True if the labels for two times are closer than the minimum distance."""
        size1 = self._size(self.formatter.format(value1))
        size2 = self._size(self.formatter.format(value2))
        midpoint_distance = abs(self.mapper.screen_value(value1) - self.mapper.screen_value(value2))
        return midpoint_distance - (size1 + size2) / 2 < self.min_label_distance

    @staticmethod
    def ticks_collide(decorations: list[AxisDecoration]) -> bool:
        """True if two neighbouring decorations for different times are too close."""
        for previous, current in zip(decorations, decorations[1:]):
            distance = abs(current.rounded_position - previous.rounded_position)
            if distance < _MIN_TICK_SPACING and previous.value != current.value:
                return True
        return False

    def _label_between(self, value1: float, value2: float) -> AxisDecoration:
        position = (self.mapper.screen_value(value1) + self.mapper.screen_value(value2)) / 2
        return AxisDecoration.label_only(self.mapper.data_value(position), position, self.formatter.format(value1))


# Label granularities from fine to coarse
STRATEGY_LADDER = (
    (TimeUnit.DAY, 1),
    (TimeUnit.DAY, 7),
    (TimeUnit.MONTH, 1),
    (TimeUnit.MONTH, 2),
    (TimeUnit.MONTH, 3),
    (TimeUnit.QUARTER, 1),
    (TimeUnit.MONTH, 6),
    (TimeUnit.YEAR, 1),
    (TimeUnit.YEAR, 2),
    (TimeUnit.YEAR, 5),
    (TimeUnit.YEAR, 10),
    (TimeUnit.YEAR, 20),
    (TimeUnit.YEAR, 50),
    (TimeUnit.YEAR, 100),
    (TimeUnit.YEAR, 1000),
    (TimeUnit.YEAR, 10000),
    (TimeUnit.YEAR, 10000000),
)


class TimeAxisDecorationSupplier:
    """Pick the finest time strategy whose labels fit.

    Args:
        mapper: Time (milliseconds) <-> screen mapper
        time_granularity: Resolution of the data
        measurer: Label measurer
        formatter: Time formatter
        min_label_distance: Minimum gap between labels (None: configured default)
        orientation: Axis orientation
        include_last: Add a label at the end of the data range
    """

    def __init__(
        self,
        mapper: Mapper,
        time_granularity: TimeUnit,
        measurer: TextMeasurer,
        formatter: TimeFormatter,
        min_label_distance: Optional[float] = None,
        orientation: Orientation = Orientation.HORIZONTAL,
        include_last: bool = True,
    ):
        if min_label_distance is None:
            min_label_distance = config.default_min_label_distance()
        self.mapper = mapper
        self.time_granularity = time_granularity
        self.strategies = [
            TimeAxisStrategy(time_granularity, unit, count, measurer, formatter, mapper, min_label_distance,
                             orientation, include_last)
            for unit, count in STRATEGY_LADDER
        ]

    def get_decorations(self) -> list[AxisDecoration]:
        granularity = milliseconds_for(self.time_granularity)
        for strategy in self.strategies:
            if granularity > strategy.label_duration:
                continue
            decorations = strategy.attempt()
            if decorations is not None:
                logger.debug("Time axis laid out with %r", strategy)
                return decorations
        logger.debug("No time strategy fits %r", self.mapper)
        return []
