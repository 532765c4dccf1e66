"""Tests for axisticks.formatting and axisticks.text - labels and their sizes."""

import math

import pytest

from axisticks.formatting import (
    FixedFormatterBuilder,
    NumberFormatter,
    NumberFormatterBuilder,
    SimpleTimeFormatter,
)
from axisticks.milliseconds import TimeUnit, iso_to_milliseconds
from axisticks.text import FixedFontMeasurer, Orientation


# ---- Numbers -----------------------------------------------------------------


class TestNumberFormatter:
    def test_grouping(self):
        formatter = NumberFormatter()
        assert formatter.format(1000) == "1,000"
        assert formatter.format(-1500) == "-1,500"
        assert formatter.format(1234.5) == "1,234.5"

    def test_no_negative_zero(self):
        assert NumberFormatter().format(-0.0) == "0"

    def test_min_decimals(self):
        assert NumberFormatter(min_decimals=2).format(5) == "5.00"

    def test_max_decimals(self):
        assert NumberFormatter(max_decimals=1).format(1.26) == "1.3"

    def test_significant_digits(self):
        assert NumberFormatter(significant_digits=15).format(0.1 + 0.2) == "0.3"
        assert NumberFormatter(significant_digits=2).format(1234) == "1,200"

    def test_non_finite(self):
        assert NumberFormatter().format(math.inf) == "inf"
        assert NumberFormatter().format(math.nan) == "nan"


class TestFormatterBuilders:
    def test_chained_setters(self):
        formatter = NumberFormatterBuilder().set_min_decimals(1).set_max_decimals(3).set_significant_digits(5).build()
        assert formatter.min_decimals == 1
        assert formatter.max_decimals == 3
        assert formatter.significant_digits == 5

    def test_build_snapshots(self):
        builder = NumberFormatterBuilder().set_min_decimals(1)
        first = builder.build()
        builder.set_min_decimals(4)
        assert first.min_decimals == 1
        assert builder.build().min_decimals == 4

    def test_fixed_builder_ignores_settings(self):
        formatter = NumberFormatter(min_decimals=2)
        builder = FixedFormatterBuilder(formatter)
        assert builder.set_min_decimals(0).set_max_decimals(0).build() is formatter


# ---- Time --------------------------------------------------------------------


class TestSimpleTimeFormatter:
    def test_year(self):
        formatter = SimpleTimeFormatter(TimeUnit.YEAR)
        assert formatter.format(iso_to_milliseconds("1995")) == "1995"

    def test_quarter(self):
        formatter = SimpleTimeFormatter()
        formatter.set_time_unit(TimeUnit.QUARTER)
        labels = [formatter.format(iso_to_milliseconds(t)) for t in ("1995", "1995-04-01", "1995-07", "1995-10")]
        assert labels == ["Q1", "Q2", "Q3", "Q4"]

    @pytest.mark.parametrize("month,label", [("01", "Jan 1995"), ("06", "Jun 1995"), ("12", "Dec 1995")])
    def test_month(self, month, label):
        formatter = SimpleTimeFormatter(TimeUnit.MONTH)
        assert formatter.format(iso_to_milliseconds(f"1995-{month}")) == label

    def test_day(self):
        formatter = SimpleTimeFormatter(TimeUnit.DAY)
        assert formatter.format(iso_to_milliseconds("2005-08-02")) == "2005-08-02"

    def test_finer_units_use_iso(self):
        formatter = SimpleTimeFormatter(TimeUnit.HOUR)
        assert formatter.format(iso_to_milliseconds("2005-08-02T02:03:04.123")) == "2005-08-02T02:03:04.123"

    def test_nan(self):
        assert SimpleTimeFormatter(TimeUnit.YEAR).format(math.nan) == "notime"


# ---- Measuring ---------------------------------------------------------------


class TestFixedFontMeasurer:
    def test_sizes(self):
        measurer = FixedFontMeasurer(7, 10)
        assert measurer.height("hello") == 10
        assert measurer.width("hello") == 35

    def test_size_along_orientation(self):
        measurer = FixedFontMeasurer(7, 10)
        assert measurer.size_along("hi", Orientation.VERTICAL) == 10
        assert measurer.size_along("hi", Orientation.HORIZONTAL) == 14

    def test_missing_text_has_no_width(self):
        assert FixedFontMeasurer(7, 10).width(None) == 0
