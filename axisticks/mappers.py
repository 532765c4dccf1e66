"""
Bidirectional data <-> screen mappers.

Usage:
    from axisticks.mappers import LinearMapper, MirroredSignedMapper

    m = LinearMapper(0, 10, 100, 0)          # reversed screen axis
    m.screen_value(5)                        # 50.0
    m.data_value(50)                         # 5.0

    log = MirroredSignedMapper(-10, 1000, 0, 500, lam=0, epsilon=1)
    log.layout                               # SignLayout.STRADDLING

All mappers are immutable. screen_value() and data_value() accept a scalar
or a numpy array; arrays are mapped elementwise.
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional, Union

import numpy as np

from axisticks import pow10
from axisticks.errors import MapperError
from axisticks.numeric import round_half_up

logger = logging.getLogger(__name__)


# ---- Float helpers -----------------------------------------------------------


def _divide(a: float, b: float) -> float:
    """IEEE 754 division: x/0 is a signed infinity, 0/0 is NaN."""
    try:
        return a / b
    except ZeroDivisionError:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)


def _round_screen(value: float) -> float:
    return round_half_up(value) if math.isfinite(value) else value


def box_cox(value: float, lam: float) -> float:
    """Box-Cox transform: log for lam == 0, identity for lam == 1."""
    try:
        if lam == 0:
            return math.log(value)
        if lam == 1:
            return value
        return (math.pow(value, lam) - 1) / lam
    except ValueError:
        # log(0) and 0 ** negative both head to -inf; negative input is undefined
        return -math.inf if value == 0 else math.nan
    except OverflowError:
        return math.inf


def inverse_box_cox(value: float, lam: float) -> float:
    try:
        if lam == 0:
            return math.exp(value)
        if lam == 1:
            return value
        return math.pow(value * lam + 1, 1 / lam)
    except ValueError:
        return math.nan
    except OverflowError:
        return math.inf


# ---- Mapper interface --------------------------------------------------------


class Mapper(ABC):
    """Maps data values to screen positions and back.

    Subclasses implement the scalar transforms; the public methods add
    numpy array support.
    """

    def __init__(self, data_min: float, data_max: float, screen_start: float, screen_end: float):
        self._data_min = data_min
        self._data_max = data_max
        self._screen_start = screen_start
        self._screen_end = screen_end

    @property
    def data_min(self) -> float:
        return self._data_min

    @property
    def data_max(self) -> float:
        return self._data_max

    @property
    def screen_start(self) -> float:
        return self._screen_start

    @property
    def screen_end(self) -> float:
        return self._screen_end

    @abstractmethod
    def _screen_one(self, data: float) -> float: ...

    @abstractmethod
    def _data_one(self, screen: float) -> float: ...

    def screen_value(self, data: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Screen position of a data value (or array of values)."""
        if isinstance(data, np.ndarray):
            return np.vectorize(self._screen_one, otypes=[float])(data)
        return self._screen_one(data)

    def data_value(self, screen: Union[float, np.ndarray]) -> Union[float, np.ndarray]:
        """Data value at a screen position (or array of positions)."""
        if isinstance(screen, np.ndarray):
            return np.vectorize(self._data_one, otypes=[float])(screen)
        return self._data_one(screen)

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(data=[{self._data_min}, {self._data_max}], "
            f"screen=[{self._screen_start}, {self._screen_end}])"
        )


class LinearMapper(Mapper):
    """``screen = data * k - offset`` with ``k`` the screen/data span ratio."""

    def __init__(self, data_min: float, data_max: float, screen_start: float, screen_end: float):
        if data_min == data_max:
            raise MapperError("LinearMapper needs a non-empty data range; use SingleValueMapper", data_min, data_max)
        super().__init__(data_min, data_max, screen_start, screen_end)
        self._k = (screen_end - screen_start) / (data_max - data_min)
        self._offset = self._k * data_min - screen_start

    def _screen_one(self, data: float) -> float:
        return data * self._k - self._offset

    def _data_one(self, screen: float) -> float:
        return _divide(screen + self._offset, self._k)


class SingleValueMapper(Mapper):
    """Degenerate mapper for a range that collapsed to one value.

    Every data value lands on the middle of the screen range, and every
    screen position maps back to that one value.
    """

    def __init__(self, value: float, screen_start: float, screen_end: float):
        super().__init__(value, value, screen_start, screen_end)
        self._middle = (screen_end - screen_start) / 2 + screen_start

    def _screen_one(self, data: float) -> float:
        return self._middle

    def _data_one(self, screen: float) -> float:
        return self._data_min


class SignedPowerMapper(Mapper):
    """One-sided Box-Cox mapper for a strictly positive data range.

    ``lam`` interpolates between logarithmic (0) and linear (1) scaling.
    """

    def __init__(self, data_min: float, data_max: float, screen_start: float, screen_end: float, lam: float):
        super().__init__(data_min, data_max, screen_start, screen_end)
        self.lam = lam
        start = box_cox(data_min, lam)
        self._k = _divide(screen_end - screen_start, box_cox(data_max, lam) - start)
        self._offset = self._k * start - screen_start

    def _screen_one(self, data: float) -> float:
        return box_cox(data, self.lam) * self._k - self._offset

    def _data_one(self, screen: float) -> float:
        data = inverse_box_cox(_divide(screen + self._offset, self._k), self.lam)
        return data if math.isfinite(data) else self._data_max


class SignLayout(Enum):
    """Where the data range sits relative to the zero threshold.

    POSITIVE            entirely >= threshold
    NEGATIVE            entirely <= -threshold
    POSITIVE_CLAMPED    crosses zero, negative tail within the threshold
    NEGATIVE_CLAMPED    crosses zero, positive tail within the threshold
    STRADDLING          zero lies strictly inside the screen range
    COLLAPSED           data_min == data_max
    """

    POSITIVE = "positive"
    NEGATIVE = "negative"
    POSITIVE_CLAMPED = "positive_clamped"
    NEGATIVE_CLAMPED = "negative_clamped"
    STRADDLING = "straddling"
    COLLAPSED = "collapsed"


class MirroredSignedMapper(Mapper):
    """Signed Box-Cox mapper for data of any sign.

    Values within ``zero_threshold`` of zero map to ``screen_zero``. Negative
    values are mirrored around ``screen_zero`` onto one SignedPowerMapper,
    built for the side with the larger magnitude.

    Attributes:
        lam: Box-Cox exponent (0 = log, 1 = linear)
        epsilon: Requested zero epsilon, None when not given
        zero_threshold: Half-width of the band treated as zero
        screen_zero: Whole-pixel screen position of data zero
        layout: SignLayout picked at construction
        is_reversed: True when screen_end < screen_start
    """

    def __init__(
        self,
        data_min: float,
        data_max: float,
        screen_start: float,
        screen_end: float,
        lam: float,
        epsilon: Optional[float] = None,
    ):
        super().__init__(data_min, data_max, screen_start, screen_end)
        self.lam = lam
        self.epsilon = epsilon
        self.is_reversed = screen_end < screen_start
        self.zero_threshold = self._zero_threshold()
        self.layout, self.screen_zero, self._inner = self._classify()
        logger.debug("MirroredSignedMapper %s: zero at %s, threshold %s", self.layout.name, self.screen_zero,
                     self.zero_threshold)

    def _zero_threshold(self) -> float:
        if self._data_min == self._data_max:
            return abs(self._data_min) / 2
        if self.epsilon is not None and not math.isnan(self.epsilon):
            return abs(self.epsilon) / 2
        return pow10.floor(abs(self._data_max - self._data_min)) / 1000

    def _side(self, data_min: float, data_max: float, screen_start: float, screen_end: float) -> SignedPowerMapper:
        return SignedPowerMapper(data_min, data_max, screen_start, screen_end, self.lam)

    def _classify(self) -> tuple[SignLayout, float, Optional[SignedPowerMapper]]:
        d_min, d_max = self._data_min, self._data_max
        s_start, s_end = self._screen_start, self._screen_end
        zt = self.zero_threshold

        if d_min == d_max:
            return SignLayout.COLLAPSED, (s_end - s_start) / 2 + s_start, None

        if d_min >= zt:
            inner = self._side(d_min, d_max, s_start, s_end)
            return SignLayout.POSITIVE, _round_screen(inner.screen_value(zt)), inner

        if d_max <= -zt:
            # Locate zero on a mirrored throwaway mapper, then mirror the screen range around it.
            probe = self._side(-d_max, -d_min, s_end, s_start)
            screen_zero = _round_screen(probe.screen_value(zt))
            inner = self._side(-d_max, -d_min, 2 * screen_zero - s_end, 2 * screen_zero - s_start)
            return SignLayout.NEGATIVE, screen_zero, inner

        if d_min >= -zt:
            screen_zero = _round_screen(s_start)
            return SignLayout.POSITIVE_CLAMPED, screen_zero, self._side(zt, d_max, screen_zero, s_end)

        if d_max <= zt:
            screen_zero = _round_screen(s_end)
            return SignLayout.NEGATIVE_CLAMPED, screen_zero, self._side(zt, -d_min, screen_zero, 2 * screen_zero - s_start)

        # Split the screen in proportion to the transformed size of each side.
        part = self._side(zt, d_max, 0, 1).screen_value(-d_min)
        screen_zero = _round_screen(s_start + (s_end - s_start) * _divide(part, part + 1))
        if d_max >= -d_min:
            inner = self._side(zt, d_max, screen_zero, s_end)
        else:
            inner = self._side(zt, -d_min, screen_zero, 2 * screen_zero - s_start)
        return SignLayout.STRADDLING, screen_zero, inner

    def _screen_one(self, data: float) -> float:
        if self._inner is None:
            return self.screen_zero
        if data > self.zero_threshold:
            return self._inner.screen_value(data)
        if data < -self.zero_threshold:
            return 2 * self.screen_zero - self._inner.screen_value(-data)
        return self.screen_zero

    def _data_one(self, screen: float) -> float:
        if self._inner is None:
            return self._data_min
        sign = -1 if self.is_reversed else 1
        if screen * sign > self.screen_zero * sign:
            return self._inner.data_value(screen)
        if screen * sign < self.screen_zero * sign:
            return -self._inner.data_value(2 * self.screen_zero - screen)
        return 0.0
