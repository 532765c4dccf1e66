"""
Shared pytest fixtures for axisticks unit tests.

This module provides common fixtures used across multiple test files.
"""

import pytest

from axisticks import config
from axisticks.formatting import NumberFormatterBuilder, SimpleTimeFormatter
from axisticks.suppliers import AlwaysFits
from axisticks.text import FixedFontMeasurer


@pytest.fixture(autouse=True)
def _reset_configuration():
    """Keep configure() calls from leaking between tests."""
    config.reset_configuration()
    yield
    config.reset_configuration()


@pytest.fixture
def fixed_font():
    """7x11 pixel monospaced measurer."""
    return FixedFontMeasurer(7, 11)


@pytest.fixture
def always_fits():
    return AlwaysFits()


@pytest.fixture
def formatter_builder():
    return NumberFormatterBuilder()


@pytest.fixture
def time_formatter():
    return SimpleTimeFormatter()
