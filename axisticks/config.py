"""
Axis layout options.

Options are frozen dataclasses. They can be built directly or from the
nested chart-option mapping::

    AxisOptions.from_dict({
        "gridlines": {"minSpacing": 40, "interval": [1, 2, 5]},
        "minorGridlines": {"minSpacing": 10, "multiple": 1},
    })

Process-wide defaults come from environment variables read at import:

    AXISTICKS_MIN_SPACING          - minimum major gridline spacing in pixels
    AXISTICKS_MIN_LABEL_DISTANCE   - minimum gap between time labels in pixels

and can be overridden at runtime with configure().
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Union

logger = logging.getLogger(__name__)

DEFAULT_MIN_SPACING = 40.0
DEFAULT_MIN_LABEL_DISTANCE = 10.0


def _get_env_float(name: str, default: Optional[float] = None) -> Optional[float]:
    """Get environment variable as float."""
    val = os.environ.get(name)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        raise ValueError(f"Environment variable {name} must be a number, got {val!r}")


# Read environment variables at import time
_env_min_spacing = _get_env_float("AXISTICKS_MIN_SPACING")
_env_min_label_distance = _get_env_float("AXISTICKS_MIN_LABEL_DISTANCE")

# User-configured settings (set via configure())
_config_min_spacing: Optional[float] = None
_config_min_label_distance: Optional[float] = None


def configure(min_spacing: Optional[float] = None, min_label_distance: Optional[float] = None) -> None:
    """Override the process-wide layout defaults.

    Precedence is configure() > environment variable > built-in default.

    Args:
        min_spacing: Minimum major gridline spacing in pixels
        min_label_distance: Minimum gap between adjacent time labels in pixels
    """
    global _config_min_spacing, _config_min_label_distance
    for name, value in (("min_spacing", min_spacing), ("min_label_distance", min_label_distance)):
        if value is not None and value < 0:
            raise ValueError(f"{name} must be non-negative, got {value}")
    if min_spacing is not None:
        _config_min_spacing = min_spacing
    if min_label_distance is not None:
        _config_min_label_distance = min_label_distance
    logger.debug("configure: min_spacing=%s, min_label_distance=%s", min_spacing, min_label_distance)


def reset_configuration() -> None:
    """Drop everything set through configure()."""
    global _config_min_spacing, _config_min_label_distance
    _config_min_spacing = None
    _config_min_label_distance = None


def default_min_spacing() -> float:
    for value in (_config_min_spacing, _env_min_spacing):
        if value is not None:
            return value
    return DEFAULT_MIN_SPACING


def default_min_label_distance() -> float:
    for value in (_config_min_label_distance, _env_min_label_distance):
        if value is not None:
            return value
    return DEFAULT_MIN_LABEL_DISTANCE


def _intervals(raw: Union[None, float, list, tuple]) -> Optional[tuple[float, ...]]:
    if raw is None:
        return None
    if isinstance(raw, (int, float)):
        return (float(raw),)
    return tuple(float(v) for v in raw)


@dataclass(frozen=True)
class GridlineOptions:
    """Options for one tier of gridlines.

    Attributes:
        min_spacing: Minimum screen distance between gridlines in pixels.
            None lets the supplier pick its default.
        intervals: Allowed round multiples within a decade, e.g. (1, 2, 5).
            None lets the supplier pick its default.
        multiple: When set, gridline values must be multiples of this number.
    """

    min_spacing: Optional[float] = None
    intervals: Optional[tuple[float, ...]] = None
    multiple: Optional[float] = None

    def __post_init__(self):
        if self.intervals is not None and not isinstance(self.intervals, tuple):
            object.__setattr__(self, "intervals", _intervals(self.intervals))

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> GridlineOptions:
        data = data or {}
        return cls(
            min_spacing=data.get("minSpacing"),
            intervals=_intervals(data.get("interval")),
            multiple=data.get("multiple"),
        )


@dataclass(frozen=True)
class AxisOptions:
    """Layout options for one axis.

    Attributes:
        gridlines: Major gridline options
        minor_gridlines: Minor gridline options
    """

    gridlines: GridlineOptions = field(default_factory=GridlineOptions)
    minor_gridlines: GridlineOptions = field(default_factory=GridlineOptions)

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> AxisOptions:
        data = data or {}
        return cls(
            gridlines=GridlineOptions.from_dict(data.get("gridlines")),
            minor_gridlines=GridlineOptions.from_dict(data.get("minorGridlines")),
        )

    @classmethod
    def with_min_spacing(cls, min_spacing: float) -> AxisOptions:
        return cls(gridlines=GridlineOptions(min_spacing=min_spacing))

    @property
    def min_spacing(self) -> float:
        """Major gridline spacing, falling back to the process default."""
        if self.gridlines.min_spacing is not None:
            return self.gridlines.min_spacing
        return default_min_spacing()
