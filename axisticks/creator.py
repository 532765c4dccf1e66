"""
Axis decoration orchestration.

AxisDecorationsCreator builds the mapper for an axis, picks the linear or
the power spacing search from how evenly data is spread over the pixels,
and optionally widens the view range until its ends sit on gridlines.

Usage:
    creator = AxisDecorationsCreator(0, 97, 0, 500, AxisOptions.with_min_spacing(40),
                                     measurer=FixedFontMeasurer(7, 11),
                                     formatter_builder=NumberFormatterBuilder())
    decorations = creator.best_number_decorations(0, 97, 0, 97)
    decorations.min, decorations.max     # 0, 100
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import Optional

from axisticks.config import AxisOptions, GridlineOptions
from axisticks.decorations import AxisDecoration, Decorations
from axisticks.errors import DecorationError
from axisticks.formatting import FixedFormatterBuilder, NumberFormatter, NumberFormatterBuilder, TimeFormatter
from axisticks.mappers import LinearMapper, Mapper, MirroredSignedMapper, SingleValueMapper
from axisticks.milliseconds import TimeUnit
from axisticks.suppliers import (
    AlwaysFits,
    LayoutTesterLike,
    LinearDecorationSupplier,
    PowerDecorationSupplier,
)
from axisticks.text import Orientation, TextMeasurer
from axisticks.time_axis import TimeAxisDecorationSupplier

logger = logging.getLogger(__name__)

MAX_RANGE_ATTEMPTS = 100

# Ratio of data density near zero to density at the far end above which an
# axis is treated as linear
LINEAR_DENSITY_RATIO = 0.65
LINEAR_LAMBDA = 0.5

# Pixel window used to sample data density
_PIXEL_SAMPLE_SIZE = 10

# Margin added on both sides by simple_number_decorations, as a fraction of the span
_SIMPLE_MARGIN = 0.005


class MapperListener(ABC):
    """Notified whenever the creator builds a new mapper."""

    @abstractmethod
    def mapper_changed(self, mapper: Mapper) -> None: ...


class AxisDecorationsCreator:
    """Create number decorations for one axis.

    Args:
        data_min: Lower end of the data range
        data_max: Upper end of the data range
        screen_start: Screen position of data_min on a non-reversed axis
        screen_end: Screen position of data_max on a non-reversed axis
        options: Gridline options
        reversed: Swap screen_start and screen_end
        lam: Box-Cox exponent; 1 is linear, 0 is logarithmic
        epsilon: Magnitude treated as zero on power axes (None: derived)
        orientation: Axis orientation
        measurer: Label measurer, None to skip label checks
        formatter_builder: Builder for label formatters, None for no labels
        layout_tester: Extra layout check for major gridline candidates
        mapper_listener: Notified of every mapper built
    """

    def __init__(
        self,
        data_min: float,
        data_max: float,
        screen_start: float,
        screen_end: float,
        options: Optional[AxisOptions] = None,
        *,
        reversed: bool = False,
        lam: float = 1,
        epsilon: Optional[float] = None,
        orientation: Orientation = Orientation.HORIZONTAL,
        measurer: Optional[TextMeasurer] = None,
        formatter_builder: Optional[NumberFormatterBuilder] = None,
        layout_tester: Optional[LayoutTesterLike] = None,
        mapper_listener: Optional[MapperListener] = None,
    ):
        if reversed:
            screen_start, screen_end = screen_end, screen_start
        self.data_min = data_min
        self.data_max = data_max
        self.screen_start = screen_start
        self.screen_end = screen_end
        self.options = options or AxisOptions()
        self.reversed = reversed
        self.lam = lam
        self.epsilon = epsilon
        self.orientation = orientation
        self.measurer = measurer
        self.formatter_builder = formatter_builder
        self.layout_tester = layout_tester
        self.mapper_listener = mapper_listener
        self.mapper = self.build_mapper()

    def build_mapper(self) -> Mapper:
        """Build (and publish) the mapper for the current data range."""
        if self.lam == 1:
            if self.data_min == self.data_max:
                mapper: Mapper = SingleValueMapper(self.data_min, self.screen_start, self.screen_end)
            else:
                mapper = LinearMapper(self.data_min, self.data_max, self.screen_start, self.screen_end)
        else:
            mapper = MirroredSignedMapper(
                self.data_min, self.data_max, self.screen_start, self.screen_end, self.lam, self.epsilon
            )
        self.mapper = mapper
        if self.mapper_listener is not None:
            self.mapper_listener.mapper_changed(mapper)
        return mapper

    def number_decorations(self, data_min: Optional[float] = None, data_max: Optional[float] = None) -> Decorations:
        """Decorations for the current mapper, searching ``[data_min, data_max]``.

        A collapsed data range gets a single label in the middle of the screen.
        """
        if self.data_min == self.data_max:
            middle = self.screen_start + (self.screen_end - self.screen_start) / 2
            label = ""
            if self.formatter_builder is not None:
                label = self.formatter_builder.build().format(self.data_min)
            return Decorations(major=[AxisDecoration.label_only(self.data_min, middle, label)], minor=None)

        ratio = self.calculate_data_density_ratio(self.mapper)
        if ratio > LINEAR_DENSITY_RATIO and self.lam > LINEAR_LAMBDA:
            supplier = LinearDecorationSupplier(
                self.mapper, self.formatter_builder, self.measurer, self.orientation, self.options,
                self.layout_tester,
            )
        else:
            supplier = PowerDecorationSupplier(
                self.mapper, self.formatter_builder, self.measurer, self.orientation, self.options,
                self.epsilon, self.layout_tester,
            )
        logger.debug("Density ratio %.4g, using %s", ratio, type(supplier).__name__)
        return supplier.get_decorations(data_min, data_max)

    def best_number_decorations(
        self,
        view_min: float,
        view_max: float,
        original_min: Optional[float] = None,
        original_max: Optional[float] = None,
    ) -> Decorations:
        """Decorations for a view range, widened until its ends sit on gridlines.

        Each end is only moved when the matching ``original_*`` bound is
        given. The loop stops when the range no longer changes, when it
        turns NaN (no data: the original bounds are used) or after
        MAX_RANGE_ATTEMPTS rounds.

        Raises:
            DecorationError: If no decorations were produced at all
        """
        decorations = None
        attempts_left = MAX_RANGE_ATTEMPTS
        changed = True
        while changed:
            if attempts_left < 0:
                logger.debug("View range did not settle after %d attempts", MAX_RANGE_ATTEMPTS)
                break
            attempts_left -= 1

            self.data_min = view_min
            self.data_max = view_max
            self.build_mapper()
            last_min, last_max = view_min, view_max

            decorations = self.number_decorations(view_min, view_max)

            major = decorations.major
            if len(major) > 1:
                if original_min is not None:
                    view_min = major[0].value
                if original_max is not None:
                    view_max = major[-1].value

            changed = view_min != last_min or view_max != last_max
            if math.isnan(view_min) or math.isnan(view_max):
                changed = False
                view_min = original_min if original_min is not None else view_min
                view_max = original_max if original_max is not None else view_max

        if decorations is None:
            raise DecorationError("Failed creating decorations")
        decorations.min = view_min
        decorations.max = view_max
        return decorations

    @staticmethod
    def calculate_data_density_ratio(mapper: Mapper) -> float:
        """Data per pixel near the smallest magnitude over data per pixel near the largest.

        1 for a linear mapper; close to 0 for a strongly logarithmic one.
        """
        if mapper.data_min == mapper.data_max:
            return 1
        screen_min = min(mapper.screen_start, mapper.screen_end)
        screen_max = max(mapper.screen_start, mapper.screen_end)
        screen_zero = mapper.screen_value(0)

        abs_edge1 = abs(mapper.data_value(screen_min))
        abs_edge2 = abs(mapper.data_value(screen_max))
        max_data = max(abs_edge1, abs_edge2)
        min_data = 0
        if screen_min > screen_zero or screen_zero > screen_max:
            min_data = min(abs_edge1, abs_edge2)

        def density(position: float) -> float:
            return abs(mapper.data_value(position + _PIXEL_SAMPLE_SIZE) - mapper.data_value(position))

        near_min = density(mapper.screen_value(min_data))
        near_max = density(mapper.screen_value(max_data))
        try:
            return near_min / near_max
        except ZeroDivisionError:
            return math.nan if near_min == 0 else math.inf


# ---- One-shot helpers --------------------------------------------------------


def number_decorations(
    data_min: float,
    data_max: float,
    screen_start: float,
    screen_end: float,
    *,
    reversed: bool = False,
    lam: float = 1,
    epsilon: Optional[float] = None,
    orientation: Orientation = Orientation.HORIZONTAL,
    min_spacing: Optional[float] = None,
    measurer: Optional[TextMeasurer] = None,
    formatter: Optional[NumberFormatter] = None,
) -> list[AxisDecoration]:
    """Major gridlines for a fixed range, labelled with a ready-made formatter.

    The formatter is used as is: fraction digits are not tuned to the ticks.
    """
    creator = AxisDecorationsCreator(
        data_min,
        data_max,
        screen_start,
        screen_end,
        AxisOptions(gridlines=GridlineOptions(min_spacing=min_spacing)),
        reversed=reversed,
        lam=lam,
        epsilon=epsilon,
        orientation=orientation,
        measurer=measurer,
        formatter_builder=FixedFormatterBuilder(formatter) if formatter is not None else None,
        layout_tester=AlwaysFits(),
    )
    return creator.number_decorations(data_min, data_max).major


def simple_number_decorations(
    data_min: float,
    data_max: float,
    screen_start: float,
    screen_end: float,
    options: Optional[AxisOptions] = None,
) -> list[AxisDecoration]:
    """Unlabelled linear gridlines with a small margin around the data."""
    margin = (data_max - data_min) * _SIMPLE_MARGIN
    creator = AxisDecorationsCreator(data_min - margin, data_max + margin, screen_start, screen_end, options)
    return creator.best_number_decorations(data_min, data_max).major


def time_decorations(
    data_min: float,
    data_max: float,
    screen_start: float,
    screen_end: float,
    time_granularity: TimeUnit,
    measurer: TextMeasurer,
    formatter: TimeFormatter,
    *,
    reversed: bool = False,
    orientation: Orientation = Orientation.HORIZONTAL,
    min_label_distance: Optional[float] = None,
    include_last: bool = True,
) -> list[AxisDecoration]:
    """Decorations for a time axis (data in milliseconds since the epoch)."""
    if reversed:
        screen_start, screen_end = screen_end, screen_start
    if data_min == data_max:
        mapper: Mapper = SingleValueMapper(data_min, screen_start, screen_end)
    else:
        mapper = LinearMapper(data_min, data_max, screen_start, screen_end)
    supplier = TimeAxisDecorationSupplier(
        mapper, time_granularity, measurer, formatter, min_label_distance, orientation, include_last
    )
    return supplier.get_decorations()
