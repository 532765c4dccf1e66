"""
Axis decorations: the gridlines, ticks and labels placed along an axis.

Usage:
    d = AxisDecoration.labeled_line_with_heavy_tick(10.0, 123.4, "10")
    d.rounded_position      # 123
    d.has_line, d.label     # True, "10"
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from axisticks.numeric import round_half_up


class Alignment(Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass
class AxisDecoration:
    """One gridline, tick and/or label at a data value.

    Attributes:
        value: Data value
        position: Screen position in pixels (may be fractional)
        has_line: Draw a gridline across the chart
        has_tick: Draw a tick mark on the axis
        is_tick_heavy: Draw the tick in the heavier (major) style
        label: Label text, None for unlabelled decorations
        alignment: Label alignment relative to ``position``
    """

    value: float
    position: float
    has_line: bool = False
    has_tick: bool = False
    is_tick_heavy: bool = False
    label: Optional[str] = None
    alignment: Alignment = Alignment.CENTER

    @classmethod
    def labeled_line_with_heavy_tick(cls, value: float, position: float, label: str) -> AxisDecoration:
        return cls(value, position, True, True, True, label)

    @classmethod
    def label_only(cls, value: float, position: float, label: str) -> AxisDecoration:
        return cls(value, position, label=label)

    @classmethod
    def left_aligned_label(cls, value: float, position: float, label: str) -> AxisDecoration:
        return cls(value, position, label=label, alignment=Alignment.LEFT)

    @classmethod
    def left_aligned_label_with_line_and_tick(cls, value: float, position: float, label: str) -> AxisDecoration:
        return cls(value, position, True, True, False, label, Alignment.LEFT)

    @classmethod
    def tick(cls, value: float, position: float) -> AxisDecoration:
        return cls(value, position, has_tick=True)

    @classmethod
    def line_with_tick(cls, value: float, position: float) -> AxisDecoration:
        return cls(value, position, True, True, False)

    @classmethod
    def line_with_heavy_tick(cls, value: float, position: float) -> AxisDecoration:
        return cls(value, position, True, True, True)

    @property
    def rounded_position(self) -> float:
        """Position snapped to a whole pixel (halves round up)."""
        if not math.isfinite(self.position):
            return self.position
        return round_half_up(self.position)

    def clear_label(self) -> None:
        self.label = None


@dataclass
class Decorations:
    """Result of a decoration search.

    Attributes:
        major: Major gridlines, usually labelled
        minor: Minor gridlines, None when none were requested or found
        min: Lower data bound actually used, when the search expanded it
        max: Upper data bound actually used, when the search expanded it
    """

    major: list[AxisDecoration]
    minor: Optional[list[AxisDecoration]] = None
    min: Optional[float] = None
    max: Optional[float] = None

    @property
    def labels(self) -> list[Optional[str]]:
        return [d.label for d in self.major]

    @property
    def values(self) -> list[float]:
        return [d.value for d in self.major]
