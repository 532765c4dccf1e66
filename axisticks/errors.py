"""
Exceptions raised by axisticks.

Contract violations (bad sequence input, impossible mapper construction)
fail loudly. A spacing search that finds no good candidate never raises;
it degrades to the last attempted tick set instead.
"""

from typing import Optional


class AxisError(Exception):
    """Base class for all axisticks errors."""


class MapperError(AxisError, ValueError):
    """Raised when a mapper cannot be built for the given ranges.

    Attributes:
        data_min: Lower end of the requested data range
        data_max: Upper end of the requested data range
    """

    def __init__(self, message: str, data_min: Optional[float] = None, data_max: Optional[float] = None):
        self.data_min = data_min
        self.data_max = data_max
        super().__init__(message)

    def __repr__(self) -> str:
        return f"MapperError({self.args[0]!r}, data_min={self.data_min!r}, data_max={self.data_max!r})"


class SequenceError(AxisError, ValueError):
    """Raised for invalid round-sequence construction or out-of-domain input.

    The positive-only sequences (powers of ten and custom multiples) are
    undefined for zero and negative values; asking them to floor, ceil or
    round such a value is a programming error.

    Attributes:
        value: The offending input, when there is one
    """

    def __init__(self, message: str, value: Optional[float] = None):
        self.value = value
        super().__init__(message)

    def __repr__(self) -> str:
        return f"SequenceError({self.args[0]!r}, value={self.value!r})"


class DecorationError(AxisError):
    """Raised when the best-range loop ends without any decorations."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"DecorationError({self.message!r})"
