"""
Spacing search for numeric axes.

Both suppliers walk a sequence of round spacings from the finest one that
can satisfy the minimum pixel distance upward, and stop at the FIRST
spacing whose ticks pass every check (spacing, unique labels, layout).
They never go back looking for a better fit, so the chosen spacing stays
stable as an axis is re-laid out with slightly different sizes.

Usage:
    supplier = LinearDecorationSupplier(mapper, NumberFormatterBuilder(), measurer,
                                        Orientation.HORIZONTAL, AxisOptions.with_min_spacing(40))
    decorations = supplier.get_decorations()
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from typing import Callable, ClassVar, Optional, Union

from axisticks import pow10
from axisticks.config import AxisOptions
from axisticks.decorations import AxisDecoration, Decorations
from axisticks.formatting import NumberFormatterBuilder
from axisticks.mappers import Mapper
from axisticks.numeric import round_to_significant_digits
from axisticks.sequences import CustomPowersOfTen, LinearSequence, MirroredPowersOfTen, RoundSequence
from axisticks.text import Orientation, TextMeasurer
from axisticks.tools import AxisTools

logger = logging.getLogger(__name__)


# ---- Layout testers ----------------------------------------------------------


class LayoutTester(ABC):
    """Decides whether a candidate set of labelled decorations can be drawn."""

    @abstractmethod
    def fits(self, decorations: list[AxisDecoration]) -> bool: ...


class LabelsFitTester(LayoutTester):
    """Rejects candidates where two adjacent labels overlap along the axis.

    Two labels collide when their centres are closer than half the sum of
    their measured sizes. Without a measurer every candidate fits.
    """

    def __init__(self, measurer: Optional[TextMeasurer], orientation: Orientation):
        self.measurer = measurer
        self.orientation = orientation

    def _size(self, decoration: AxisDecoration) -> float:
        if not decoration.label:
            return 0
        return self.measurer.size_along(decoration.label, self.orientation)

    def fits(self, decorations: list[AxisDecoration]) -> bool:
        if self.measurer is None:
            return True
        for previous, current in zip(decorations, decorations[1:]):
            if abs(current.position - previous.position) < (self._size(previous) + self._size(current)) / 2:
                return False
        return True


class AlwaysFits(LayoutTester):
    """Accepts every candidate."""

    def fits(self, decorations: list[AxisDecoration]) -> bool:
        return True


class PredicateTester(LayoutTester):
    """Adapts a plain ``(decorations) -> bool`` function."""

    def __init__(self, predicate: Callable[[list[AxisDecoration]], bool]):
        self.predicate = predicate

    def fits(self, decorations: list[AxisDecoration]) -> bool:
        return bool(self.predicate(decorations))


LayoutTesterLike = Union[LayoutTester, Callable[[list[AxisDecoration]], bool]]


def as_layout_tester(tester: LayoutTesterLike) -> LayoutTester:
    if isinstance(tester, LayoutTester):
        return tester
    if not callable(tester):
        raise TypeError(f"Layout tester must be a LayoutTester or a callable, got {type(tester).__name__}")
    return PredicateTester(tester)


# ---- Shared supplier machinery -----------------------------------------------


def _sub_intervals(major: tuple[float, ...], minor: tuple[float, ...]) -> dict[float, tuple[float, ...]]:
    """For each major multiple, the minor multiples that divide ten times it."""
    return {i: tuple(j for j in minor if (i * 10 / j).is_integer()) for i in major}


class _DecorationSupplier(ABC):
    """Option handling and the minor-gridline search common to both suppliers."""

    DEFAULT_MAJOR_INTERVALS: ClassVar[tuple[float, ...]] = ()
    DEFAULT_MINOR_INTERVALS: ClassVar[tuple[float, ...]] = ()
    MINOR_SPACING_DIVISOR: ClassVar[float] = 2

    def __init__(
        self,
        mapper: Mapper,
        formatter_builder: Optional[NumberFormatterBuilder],
        measurer: Optional[TextMeasurer],
        orientation: Orientation,
        options: Optional[AxisOptions] = None,
        layout_tester: Optional[LayoutTesterLike] = None,
    ):
        options = options or AxisOptions()
        self.mapper = mapper
        self.tools = AxisTools(mapper, measurer, orientation, formatter_builder)
        self.layout_tester = (
            as_layout_tester(layout_tester) if layout_tester is not None else LabelsFitTester(measurer, orientation)
        )

        self.min_spacing = options.min_spacing
        minor_spacing = options.minor_gridlines.min_spacing
        self.minor_min_spacing = (
            minor_spacing if minor_spacing is not None else self.min_spacing / self.MINOR_SPACING_DIVISOR
        )
        self.major_intervals = options.gridlines.intervals or self.DEFAULT_MAJOR_INTERVALS
        self.minor_intervals = options.minor_gridlines.intervals or self.DEFAULT_MINOR_INTERVALS
        self.multiple = options.gridlines.multiple
        self.minor_multiple = options.minor_gridlines.multiple

        self.spacing_sequence = CustomPowersOfTen(self.major_intervals)
        self._sub_intervals = _sub_intervals(self.major_intervals, self.minor_intervals)

    def _layout_fits(self, values: list[float]) -> bool:
        return self.layout_tester.fits(self.tools.make_labels(values))

    @abstractmethod
    def _minor_sequence(self, sub_spacing: float) -> RoundSequence: ...

    @abstractmethod
    def get_decorations(self, data_min: Optional[float] = None, data_max: Optional[float] = None) -> Decorations: ...

    def _minor_epsilon(self) -> Optional[float]:
        return None

    def get_sub_decorations(self, spacing: float) -> list[AxisDecoration]:
        """Minor gridlines evenly dividing the major ``spacing``.

        Starts at a twentieth of the major spacing and returns the first
        compatible sub-spacing that keeps its own minimum distance.
        """
        if not spacing > 0 or not math.isfinite(spacing):
            return []
        multiple = round_to_significant_digits(15, spacing / pow10.floor(spacing))
        sub_intervals = self._sub_intervals.get(multiple, ())
        if not sub_intervals:
            return []

        data_min, data_max = self.mapper.data_min, self.mapper.data_max
        cursor = CustomPowersOfTen(sub_intervals).cursor()
        sub_spacing = cursor.floor(spacing / 20)
        while True:
            if (spacing / sub_spacing).is_integer() and self.tools.is_multiple(sub_spacing, self.minor_multiple):
                values = self.tools.make_data_values(
                    self._minor_sequence(sub_spacing).cursor(), data_min, data_max,
                    self.minor_multiple, self._minor_epsilon(),
                )
                if values and self.tools.check_spacing(values, self.minor_min_spacing):
                    logger.debug("Minor spacing %s under major %s", sub_spacing, spacing)
                    return self.tools.make_sub_lines(values)
            sub_spacing = cursor.next()
            if not sub_spacing < spacing:
                return []


# ---- Linear ------------------------------------------------------------------


class LinearDecorationSupplier(_DecorationSupplier):
    """Evenly spaced gridlines at round spacings (1, 2, 2.5, 5 x 10^n by default).

    Args:
        mapper: Mapper of the axis; its data range is the default search range
        formatter_builder: Builder for label formatters, None for no labels
        measurer: Label measurer, None to skip label overlap checks
        orientation: Axis orientation
        options: Gridline options (minimum spacings, intervals, multiples)
        layout_tester: Extra layout check, LabelsFitTester by default
    """

    DEFAULT_MAJOR_INTERVALS: ClassVar[tuple[float, ...]] = (1, 2, 2.5, 5)
    DEFAULT_MINOR_INTERVALS: ClassVar[tuple[float, ...]] = (1, 1.5, 2, 2.5, 5)
    MINOR_SPACING_DIVISOR: ClassVar[float] = 2

    def _minor_sequence(self, sub_spacing: float) -> LinearSequence:
        return LinearSequence(sub_spacing)

    def get_decorations(self, data_min: Optional[float] = None, data_max: Optional[float] = None) -> Decorations:
        data_min = self.mapper.data_min if data_min is None else data_min
        data_max = self.mapper.data_max if data_max is None else data_max
        max_spacing = data_max - data_min

        spacing = min(max_spacing, self.calc_min_spacing_value())
        if spacing == 0:
            return Decorations(major=[], minor=[])

        cursor = self.spacing_sequence.cursor()
        spacing = cursor.floor(spacing)
        values: list[float] = []
        used_spacing = spacing
        attempts = 0
        while True:
            attempts += 1
            candidate: list[float] = []
            if self.tools.is_multiple(spacing, self.multiple):
                candidate = self.tools.make_data_values(
                    LinearSequence(spacing).cursor(), data_min, data_max, self.multiple
                )
            if candidate:
                values, used_spacing = candidate, spacing
                self.tools.calc_min_fraction_digits(candidate)
                self.tools.build_formatter()
                if (
                    self.tools.check_spacing(candidate, self.min_spacing)
                    and self.tools.all_labels_unique(candidate)
                    and self._layout_fits(candidate)
                ):
                    logger.debug("Linear spacing %s accepted after %d attempts", spacing, attempts)
                    break
            spacing = cursor.next()
            if not spacing <= max_spacing:
                logger.debug("No linear spacing passed after %d attempts, using %s", attempts, used_spacing)
                break

        return Decorations(major=self.tools.make_labels(values), minor=self.get_sub_decorations(used_spacing))

    def calc_min_spacing_value(self) -> float:
        """Smallest round spacing that keeps the minimum pixel distance everywhere.

        The data span of ``min_spacing`` pixels is measured at both ends of
        the screen range and, when zero is on screen, next to zero.
        """
        mapper = self.mapper
        screen_start, screen_end = mapper.screen_start, mapper.screen_end

        largest = max(
            self.tools.data_span_size(screen_start, screen_start + self.min_spacing),
            self.tools.data_span_size(screen_end, screen_end - self.min_spacing),
        )
        screen_zero = mapper.screen_value(0)
        if (screen_start <= screen_zero) == (screen_zero <= screen_end):
            largest = max(largest, mapper.data_value(screen_zero + self.min_spacing))

        return 0 if largest == 0 else self.spacing_sequence.ceil(largest)


# ---- Power (log-like) --------------------------------------------------------


class PowerDecorationSupplier(_DecorationSupplier):
    """Gridlines for signed power (log-like) axes.

    Candidates are paced powers of ten mirrored around zero: a spacing of
    ``s`` (in units of a decade) means ``10 / s`` steps per decade. Values
    smaller in magnitude than ``epsilon`` are treated as zero.

    Args:
        mapper: Mapper of the axis; its data range is the default search range
        formatter_builder: Builder for label formatters, None for no labels
        measurer: Label measurer, None to skip label overlap checks
        orientation: Axis orientation
        options: Gridline options (minimum spacings, intervals, multiples)
        epsilon: Magnitude below which values collapse to zero (0 or None: 1)
        layout_tester: Extra layout check, LabelsFitTester by default
    """

    DEFAULT_MAJOR_INTERVALS: ClassVar[tuple[float, ...]] = (1, 2, 5)
    DEFAULT_MINOR_INTERVALS: ClassVar[tuple[float, ...]] = (1, 2, 5)
    MINOR_SPACING_DIVISOR: ClassVar[float] = 5

    def __init__(
        self,
        mapper: Mapper,
        formatter_builder: Optional[NumberFormatterBuilder],
        measurer: Optional[TextMeasurer],
        orientation: Orientation,
        options: Optional[AxisOptions] = None,
        epsilon: Optional[float] = None,
        layout_tester: Optional[LayoutTesterLike] = None,
    ):
        super().__init__(mapper, formatter_builder, measurer, orientation, options, layout_tester)
        self.epsilon = abs(epsilon) if epsilon and not math.isnan(epsilon) else 1
        stepping = []
        for interval in self.major_intervals:
            n = 10 / interval
            while n >= 10:
                n /= 10
            stepping.append(n)
        self.stepping_sequence = CustomPowersOfTen(sorted(stepping))

    def _minor_sequence(self, sub_spacing: float) -> MirroredPowersOfTen:
        return MirroredPowersOfTen(round_to_significant_digits(15, 10 / sub_spacing), self.epsilon)

    def _minor_epsilon(self) -> Optional[float]:
        return self.epsilon

    def _candidate_fits(self, values: list[float], data_min: float, data_max: float) -> bool:
        # Candidates must enclose the whole range
        if not values or values[0] > data_min or values[-1] < data_max:
            return False
        if not self.tools.check_spacing(values, self.min_spacing) or not self.tools.all_labels_unique(values):
            return False
        return self._layout_fits(values)

    def _make_decorations(self, values: list[float], spacing: float) -> Decorations:
        values = self.tools.remove_collisions_with_zero(values)
        return Decorations(major=self.tools.make_labels(values), minor=self.get_sub_decorations(spacing))

    def get_decorations(self, data_min: Optional[float] = None, data_max: Optional[float] = None) -> Decorations:
        data_min = self.mapper.data_min if data_min is None else data_min
        data_max = self.mapper.data_max if data_max is None else data_max
        max_spacing = data_max - data_min
        epsilon = self.epsilon

        stepping = self.calc_max_stepping_value()
        values = self.tools.make_data_values(
            MirroredPowersOfTen(stepping, epsilon).cursor(), data_min, data_max, None, epsilon
        )
        spacing = min(max_spacing, 10 / stepping)
        first_values, first_spacing = values, spacing
        self.tools.build_formatter()

        if len(values) < 2 or self._candidate_fits(values, data_min, data_max):
            logger.debug("Power stepping %s accepted on first pass", stepping)
            return self._make_decorations(values, spacing)

        # Coarsen: start from the number of steps the first decade can hold
        first = values[0] or epsilon
        second = values[1]
        if first == second:
            first /= 10
        largest_steps = max(1, pow10.ceil(abs(first)) / abs(second - first))
        stepping = self.stepping_sequence.ceil(largest_steps)

        cursor = self.spacing_sequence.cursor()
        spacing = cursor.floor(10 / stepping)
        attempts = 0
        while True:
            attempts += 1
            values = []
            if self.tools.is_multiple(spacing, self.multiple):
                values = self.tools.make_data_values(
                    MirroredPowersOfTen(10 / spacing, epsilon).cursor(), data_min, data_max, self.multiple, epsilon
                )
            if self._candidate_fits(values, data_min, data_max):
                logger.debug("Power spacing %s accepted after %d attempts", spacing, attempts)
                return self._make_decorations(values, spacing)
            spacing = cursor.next()
            if not spacing < max_spacing:
                break

        logger.debug("No power spacing passed after %d attempts, using first pass", attempts)
        return self._make_decorations(first_values, first_spacing)

    def calc_max_stepping_value(self) -> float:
        """Most steps per decade whose first step below ``10 * epsilon`` keeps the minimum distance."""
        screen = self.mapper.screen_value
        power_screen = screen(self.epsilon * 10)
        cursor = self.stepping_sequence.cursor()
        cursor.floor(1)
        while True:
            steps = cursor.next()
            below_screen = screen(self.epsilon * 10 * (steps - 1) / steps)
            if not abs(power_screen - below_screen) >= self.min_spacing:
                break
        steps = cursor.previous()
        if steps < 1:
            steps = cursor.next()
        return steps
