"""Text measurement capability consumed by the label layout checks."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional


class Orientation(Enum):
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class TextMeasurer(ABC):
    """Reports the rendered size of a label in pixels.

    Implementations must be deterministic for a given font configuration.
    """

    @abstractmethod
    def width(self, text: Optional[str]) -> float: ...

    @abstractmethod
    def height(self, text: Optional[str]) -> float: ...

    def size_along(self, text: Optional[str], orientation: Orientation) -> float:
        """Extent of ``text`` along an axis with the given orientation."""
        if orientation is Orientation.HORIZONTAL:
            return self.width(text)
        return self.height(text)


class FixedFontMeasurer(TextMeasurer):
    """Monospaced measurer: every character has the same width and height."""

    def __init__(self, char_width: float, char_height: float):
        self.char_width = char_width
        self.char_height = char_height

    def width(self, text: Optional[str]) -> float:
        return len(text or "") * self.char_width

    def height(self, text: Optional[str]) -> float:
        return self.char_height

    def __repr__(self) -> str:
        return f"FixedFontMeasurer(char_width={self.char_width}, char_height={self.char_height})"
