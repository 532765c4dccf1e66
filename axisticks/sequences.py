"""
Round-number sequences.

A sequence is an infinite, ordered set of "round" values indexed by an
integer position. Sequences are stateless: they map positions to values
(``value_at``) and values to bracketing positions (``floor_position``,
``ceil_position``, ``round_position``). A SequenceCursor holds a position
explicitly and offers the stepping API the search loops use::

    cursor = CustomPowersOfTen([1, 2, 5]).cursor()
    cursor.floor(0.7)    # 0.5
    cursor.next()        # 1.0
    cursor.next()        # 2.0
"""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from typing import Sequence as SequenceType

from axisticks import pow10
from axisticks.errors import SequenceError
from axisticks.numeric import round_half_up, round_to_significant_digits


class RoundSequence(ABC):
    """Pure mapping between positions and round values."""

    @abstractmethod
    def value_at(self, position: float) -> float: ...

    @abstractmethod
    def floor_position(self, value: float) -> float:
        """Position of the largest sequence value <= value."""

    @abstractmethod
    def ceil_position(self, value: float) -> float:
        """Position of the smallest sequence value >= value."""

    @abstractmethod
    def round_position(self, value: float) -> float:
        """Position of the sequence value nearest to value."""

    def advance(self, position: float, steps: int = 1) -> float:
        """Position ``steps`` places after ``position`` (before, if negative)."""
        return position + steps

    def bracket(self, value: float) -> tuple[float, float]:
        """(floor, ceil) positions around ``value``; equal when value is in the sequence."""
        return self.floor_position(value), self.ceil_position(value)

    def start_position(self) -> float:
        return 0

    def cursor(self, position=None) -> SequenceCursor:
        return SequenceCursor(self, self.start_position() if position is None else position)

    def floor(self, value: float) -> float:
        return self.value_at(self.floor_position(value))

    def ceil(self, value: float) -> float:
        return self.value_at(self.ceil_position(value))

    def round(self, value: float) -> float:
        return self.value_at(self.round_position(value))


class SequenceCursor:
    """A position in a RoundSequence, owned by the caller.

    ``floor``/``ceil``/``round`` reposition the cursor and return the new
    value; ``next``/``previous`` step once and return the new value.
    """

    __slots__ = ("sequence", "position")

    def __init__(self, sequence: RoundSequence, position: float = 0):
        self.sequence = sequence
        self.position = position

    @property
    def value(self) -> float:
        return self.sequence.value_at(self.position)

    def next(self) -> float:
        self.position = self.sequence.advance(self.position, 1)
        return self.value

    def previous(self) -> float:
        self.position = self.sequence.advance(self.position, -1)
        return self.value

    def next_size(self) -> float:
        """Distance from the current value to the next one."""
        return self.sequence.value_at(self.sequence.advance(self.position, 1)) - self.value

    def floor(self, value: float) -> float:
        self.position = self.sequence.floor_position(value)
        return self.value

    def ceil(self, value: float) -> float:
        self.position = self.sequence.ceil_position(value)
        return self.value

    def round(self, value: float) -> float:
        self.position = self.sequence.round_position(value)
        return self.value

    def __repr__(self) -> str:
        return f"SequenceCursor({self.sequence!r}, position={self.position}, value={self.value})"


def _require_positive(value: float) -> None:
    if not value > 0:
        raise SequenceError(f"Value {value} must be positive", value)


class PowersOfTenSequence(RoundSequence):
    """..., 0.1, 1, 10, 100, ... with position ``p`` at ``10**p``."""

    def value_at(self, position: float) -> float:
        return pow10.exact_scientific(1, position)

    def floor_position(self, value: float) -> float:
        _require_positive(value)
        return pow10.floor_exponent(value)

    def ceil_position(self, value: float) -> float:
        _require_positive(value)
        return pow10.ceil_exponent(value)

    def round_position(self, value: float) -> float:
        _require_positive(value)
        # Linear rounding: 549 -> 100, 550 -> 1000
        return pow10.round_exponent(pow10.round(value))

    def __repr__(self) -> str:
        return "PowersOfTenSequence()"


class CustomPowersOfTen(RoundSequence):
    """Multiples of powers of ten, e.g. 1, 2, 5, 10, 20, 50, ...

    Position ``p`` holds ``multiples[p % n] * 10**(p // n)`` where ``n`` is the
    number of multiples, so position 0 is ``multiples[0]``.

    Args:
        multiples: Strictly ascending values in ``[1, 10)``
    """

    def __init__(self, multiples: SequenceType[float]):
        self._check_multiples(multiples)
        self.multiples = tuple(multiples)
        self._level = len(self.multiples)

    @staticmethod
    def _check_multiples(multiples: SequenceType[float]) -> None:
        if len(multiples) == 0:
            raise SequenceError("Multiples must not be empty")
        if multiples[0] < 1:
            raise SequenceError(f"First multiple is too low: {multiples[0]}")
        if multiples[-1] >= 10:
            raise SequenceError(f"Last multiple is too high: {multiples[-1]}")
        previous = 0
        for m in multiples:
            if not isinstance(m, (int, float)):
                raise SequenceError(f"Multiples must be numbers, got {m!r}")
            if m <= previous:
                raise SequenceError(f"Multiples are not sorted: {list(multiples)}")
            previous = m

    def value_at(self, position: float) -> float:
        k = math.floor(position / self._level)
        i = int(position - k * self._level)
        return pow10.exact_scientific(self.multiples[i], k)

    def floor_position(self, value: float) -> float:
        _require_positive(value)
        position = self._level * pow10.ceil_exponent(value)
        if self.value_at(position) != value:
            position -= 1
            while self.value_at(position) > value:
                position -= 1
        return position

    def ceil_position(self, value: float) -> float:
        _require_positive(value)
        position = self._level * pow10.floor_exponent(value)
        if self.value_at(position) != value:
            position += 1
            while self.value_at(position) < value:
                position += 1
        return position

    def round_position(self, value: float) -> float:
        position = self.floor_position(value)
        below = self.value_at(position)
        if below != value and value - below >= self.value_at(position + 1) - value:
            position += 1
        return position

    def __repr__(self) -> str:
        return f"CustomPowersOfTen({list(self.multiples)})"


class MirroredPowersOfTen(RoundSequence):
    """Signed sequence of evenly paced steps within each decade.

    Each decade above the minimum holds ``steps_per_decade`` evenly spaced
    values (1, 2, ... 10 for ten steps; 2.5, 5, 7.5, 10 for four). Position 0
    is exactly zero, position ``-k`` mirrors position ``k``, and everything
    with magnitude up to the decade of ``minimum_value`` collapses onto zero.

    Positions can be fractional when ``steps_per_decade`` is not an integer.

    Args:
        steps_per_decade: Steps between consecutive powers of ten
        minimum_value: Magnitude below which values count as zero
    """

    def __init__(self, steps_per_decade: float, minimum_value: float):
        self.steps_per_decade = steps_per_decade
        self.minimum_value = minimum_value
        self._excluded = math.floor(steps_per_decade / 10)
        self._actual_steps = steps_per_decade - self._excluded
        self._min_exponent = pow10.floor_exponent(abs(minimum_value)) if minimum_value else -math.inf
        self._zero_offset = self._actual_steps * self._min_exponent
        self._zero_band = pow10.power_of(self._min_exponent)

    def _magnitude(self, position: float) -> float:
        k = math.floor(position / self._actual_steps)
        i = 10 * (position + self._excluded - k * self._actual_steps) / self.steps_per_decade
        if i == 0:
            i = 1
        return pow10.exact_scientific(i, k)

    def value_at(self, position: float) -> float:
        if position == 0:
            return 0.0
        magnitude = self._magnitude(abs(position) + self._zero_offset)
        return magnitude if position > 0 else -magnitude

    def _decade_position(self, value: float) -> tuple[float, float]:
        # Position of the power of ten at or below |value|, and the signed
        # correction for the excluded leading steps of a decade.
        exponent = pow10.floor_exponent(abs(value))
        if value > 0:
            return self._actual_steps * exponent - self._zero_offset, self._excluded
        return self._zero_offset - self._actual_steps * exponent, -self._excluded

    def _steps_into_decade(self, value: float) -> float:
        return self.steps_per_decade * value / pow10.ceil(abs(value))

    def floor_position(self, value: float) -> float:
        if abs(value) <= self._zero_band:
            return -1 if value < 0 else 0
        position, excluded = self._decade_position(value)
        if self.value_at(position) != value:
            position += math.floor(self._steps_into_decade(value)) - excluded
        return position

    def ceil_position(self, value: float) -> float:
        if abs(value) <= self._zero_band:
            return 1 if value > 0 else 0
        position, excluded = self._decade_position(value)
        if self.value_at(position) != value:
            position += math.ceil(self._steps_into_decade(value)) - excluded
        return position

    def round_position(self, value: float) -> float:
        if abs(value) <= self._zero_band:
            return 0
        if value < 0:
            # Mirror the positive side so ties go to the larger magnitude
            return -self.round_position(-value)
        position, excluded = self._decade_position(value)
        # Handle the gap between a decade's power of ten and its first kept
        # step directly, so that round(2.9999) is 1 and not 5.
        current = self.value_at(position)
        above = self.value_at(position + 1)
        if above > value:
            return position + 1 if 2 * value >= above + current else position
        if current != value:
            position += round_half_up(self._steps_into_decade(value)) - excluded
        return position

    def __repr__(self) -> str:
        return f"MirroredPowersOfTen({self.steps_per_decade}, {self.minimum_value})"


class LinearSequence(RoundSequence):
    """Evenly spaced values ``position * spacing + offset``.

    Values are rounded to 15 significant digits so that ``3 * 0.1`` comes
    out as ``0.3``.
    """

    def __init__(self, spacing: float, offset: float = 0):
        if spacing == 0 or not math.isfinite(spacing):
            raise SequenceError(f"Spacing must be finite and non-zero, got {spacing}", spacing)
        self.spacing = spacing
        self.offset = offset

    def value_at(self, position: float) -> float:
        return round_to_significant_digits(15, position * self.spacing + self.offset)

    def floor_position(self, value: float) -> float:
        return math.floor((value - self.offset) / self.spacing)

    def ceil_position(self, value: float) -> float:
        return math.ceil((value - self.offset) / self.spacing)

    def round_position(self, value: float) -> float:
        return round_half_up((value - self.offset) / self.spacing)

    def __repr__(self) -> str:
        return f"LinearSequence({self.spacing}, offset={self.offset})"
