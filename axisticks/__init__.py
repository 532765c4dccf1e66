"""
axisticks - Scale mapping and gridline search for chart axes.

Quick start:
    import axisticks
    decorations = axisticks.AxisDecorationsCreator(
        0, 97, 0, 500, axisticks.AxisOptions.with_min_spacing(40),
        measurer=axisticks.FixedFontMeasurer(7, 11),
        formatter_builder=axisticks.NumberFormatterBuilder(),
    ).best_number_decorations(0, 97, 0, 97)
    decorations.labels      # ['0', '10', '20', ..., '100']

Process-wide defaults can be set with axisticks.configure() or the
AXISTICKS_* environment variables (see axisticks.config).
"""

import logging

from axisticks.config import AxisOptions, GridlineOptions, configure, reset_configuration
from axisticks.creator import (
    AxisDecorationsCreator,
    MapperListener,
    number_decorations,
    simple_number_decorations,
    time_decorations,
)
from axisticks.decorations import Alignment, AxisDecoration, Decorations
from axisticks.errors import AxisError, DecorationError, MapperError, SequenceError
from axisticks.formatting import (
    FixedFormatterBuilder,
    NumberFormatter,
    NumberFormatterBuilder,
    SimpleTimeFormatter,
    TimeFormatter,
)
from axisticks.mappers import (
    LinearMapper,
    Mapper,
    MirroredSignedMapper,
    SignedPowerMapper,
    SignLayout,
    SingleValueMapper,
)
from axisticks.milliseconds import TimeUnit
from axisticks.sequences import (
    CustomPowersOfTen,
    LinearSequence,
    MirroredPowersOfTen,
    PowersOfTenSequence,
    RoundSequence,
    SequenceCursor,
)
from axisticks.suppliers import (
    AlwaysFits,
    LabelsFitTester,
    LayoutTester,
    LinearDecorationSupplier,
    PowerDecorationSupplier,
)
from axisticks.text import FixedFontMeasurer, Orientation, TextMeasurer
from axisticks.time_axis import TimeAxisDecorationSupplier, TimeAxisStrategy
from axisticks.time_sequences import MonthSequence, TimeUnitSequence, create_time_sequence

__version__ = "0.1.0"

logger = logging.getLogger(__name__)
logger.addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Configuration
    "AxisOptions",
    "GridlineOptions",
    "configure",
    "reset_configuration",
    # Errors
    "AxisError",
    "MapperError",
    "SequenceError",
    "DecorationError",
    # Mappers
    "Mapper",
    "LinearMapper",
    "SingleValueMapper",
    "SignedPowerMapper",
    "MirroredSignedMapper",
    "SignLayout",
    # Sequences
    "RoundSequence",
    "SequenceCursor",
    "PowersOfTenSequence",
    "CustomPowersOfTen",
    "MirroredPowersOfTen",
    "LinearSequence",
    "TimeUnitSequence",
    "MonthSequence",
    "create_time_sequence",
    "TimeUnit",
    # Text and formatting
    "Orientation",
    "TextMeasurer",
    "FixedFontMeasurer",
    "NumberFormatter",
    "NumberFormatterBuilder",
    "FixedFormatterBuilder",
    "TimeFormatter",
    "SimpleTimeFormatter",
    # Decorations
    "Alignment",
    "AxisDecoration",
    "Decorations",
    "LayoutTester",
    "LabelsFitTester",
    "AlwaysFits",
    "LinearDecorationSupplier",
    "PowerDecorationSupplier",
    "TimeAxisStrategy",
    "TimeAxisDecorationSupplier",
    "AxisDecorationsCreator",
    "MapperListener",
    "number_decorations",
    "simple_number_decorations",
    "time_decorations",
]
