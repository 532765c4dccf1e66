"""Tests for axisticks.creator - supplier choice, range widening and helpers."""

import math
from unittest import mock

import pytest

from axisticks import creator as creator_module
from axisticks.config import AxisOptions
from axisticks.creator import (
    AxisDecorationsCreator,
    MapperListener,
    number_decorations,
    simple_number_decorations,
    time_decorations,
)
from axisticks.decorations import AxisDecoration, Decorations
from axisticks.errors import DecorationError
from axisticks.formatting import NumberFormatter, NumberFormatterBuilder, SimpleTimeFormatter
from axisticks.mappers import LinearMapper, MirroredSignedMapper, SingleValueMapper
from axisticks.milliseconds import TimeUnit, iso_to_milliseconds
from axisticks.text import FixedFontMeasurer


def _creator(data_min, data_max, screen_start=0, screen_end=500, **kwargs):
    return AxisDecorationsCreator(
        data_min,
        data_max,
        screen_start,
        screen_end,
        AxisOptions.with_min_spacing(40),
        measurer=FixedFontMeasurer(7, 11),
        formatter_builder=NumberFormatterBuilder(),
        **kwargs,
    )


# ---- Mapper choice -----------------------------------------------------------


class TestBuildMapper:
    def test_linear(self):
        assert isinstance(_creator(0, 97).mapper, LinearMapper)

    def test_collapsed_range(self):
        assert isinstance(_creator(5, 5).mapper, SingleValueMapper)

    def test_power(self):
        mapper = _creator(1, 10000, lam=0, epsilon=1).mapper
        assert isinstance(mapper, MirroredSignedMapper)
        assert mapper.zero_threshold == 0.5

    def test_reversed(self):
        creator = _creator(0, 100, reversed=True)
        assert creator.mapper.screen_value(0) == 500
        assert creator.mapper.screen_value(100) == 0

    def test_build_mapper_returns_new_mapper(self):
        creator = _creator(0, 97)
        first = creator.mapper
        rebuilt = creator.build_mapper()
        assert rebuilt is creator.mapper
        assert rebuilt is not first
        assert rebuilt.screen_value(97) == pytest.approx(500)

    def test_listener_notified(self):
        listener = mock.Mock(spec=MapperListener)
        creator = _creator(0, 97, mapper_listener=listener)
        listener.mapper_changed.assert_called_once_with(creator.mapper)

        creator.best_number_decorations(0, 97, 0, 97)
        assert listener.mapper_changed.call_count == 3


# ---- Density ratio -----------------------------------------------------------


class TestDataDensityRatio:
    def test_linear_is_one(self):
        ratio = AxisDecorationsCreator.calculate_data_density_ratio(LinearMapper(0, 100, 0, 500))
        assert ratio == pytest.approx(1)

    def test_single_value_is_one(self):
        assert AxisDecorationsCreator.calculate_data_density_ratio(SingleValueMapper(3, 0, 500)) == 1

    def test_log_is_small(self):
        mapper = MirroredSignedMapper(1, 10000, 0, 500, lam=0, epsilon=1)
        assert AxisDecorationsCreator.calculate_data_density_ratio(mapper) < creator_module.LINEAR_DENSITY_RATIO


# ---- Decorations -------------------------------------------------------------


class TestNumberDecorations:
    def test_linear_axis(self):
        decorations = _creator(0, 100).number_decorations()
        assert decorations.labels == ["0", "10", "20", "30", "40", "50", "60", "70", "80", "90", "100"]

    def test_log_axis_uses_power_supplier(self):
        decorations = _creator(1, 10000, lam=0, epsilon=1).number_decorations()
        assert decorations.labels == ["0", "10", "100", "1,000", "10,000"]

    def test_collapsed_range_single_label(self):
        decorations = _creator(5, 5).number_decorations()
        assert len(decorations.major) == 1
        assert decorations.major[0].label == "5"
        assert decorations.major[0].position == 250
        assert decorations.minor is None

    def test_collapsed_range_without_formatter(self):
        creator = AxisDecorationsCreator(5, 5, 0, 500)
        assert creator.number_decorations().labels == [""]

    @pytest.mark.parametrize("kwargs", [{}, {"lam": 0, "epsilon": 1}])
    def test_repeated_calls_agree(self, kwargs):
        creator = _creator(-50, 1000, **kwargs)
        assert creator.number_decorations() == creator.number_decorations()

    def test_shared_builder_between_axes(self):
        builder = NumberFormatterBuilder()

        def axis(data_min, data_max, **kwargs):
            return AxisDecorationsCreator(
                data_min, data_max, 0, 500, AxisOptions.with_min_spacing(40),
                measurer=FixedFontMeasurer(7, 11), formatter_builder=builder, **kwargs,
            ).number_decorations()

        before = axis(0.001, 1000, lam=0, epsilon=0.001)
        axis(0, 1)
        after = axis(0.001, 1000, lam=0, epsilon=0.001)
        assert after == before
        assert after.labels[-1] == "1,000"


class TestBestNumberDecorations:
    def test_widens_to_gridlines(self):
        decorations = _creator(0, 97).best_number_decorations(0, 97, 0, 97)
        assert decorations.labels == ["0", "10", "20", "30", "40", "50", "60", "70", "80", "90", "100"]
        assert decorations.min == 0
        assert decorations.max == 100

    def test_only_requested_ends_move(self):
        decorations = _creator(3, 97).best_number_decorations(3, 97, None, 97)
        assert decorations.min == 3
        assert decorations.max == 100

    def test_fixed_range(self):
        decorations = _creator(0, 97).best_number_decorations(0, 97)
        assert decorations.min == 0
        assert decorations.max == 97

    def test_collapsed_range(self):
        decorations = _creator(5, 5).best_number_decorations(5, 5, 5, 5)
        assert decorations.labels == ["5"]
        assert (decorations.min, decorations.max) == (5, 5)

    def test_nan_range_falls_back_to_original(self):
        creator = _creator(0, 97)
        nan_result = Decorations(major=[AxisDecoration.tick(math.nan, 0), AxisDecoration.tick(math.nan, 1)])
        with mock.patch.object(creator, "number_decorations", return_value=nan_result):
            decorations = creator.best_number_decorations(0, 97, 0, 97)
        assert (decorations.min, decorations.max) == (0, 97)

    def test_nan_view_uses_original_bounds(self):
        decorations = _creator(0, 97).best_number_decorations(math.nan, math.nan, 0, 97)
        assert (decorations.min, decorations.max) == (0, 97)
        assert len(decorations.major) == 1
        assert math.isnan(decorations.major[0].value)

    def test_attempts_are_bounded(self):
        creator = _creator(0, 97)
        calls = []

        def moving(view_min, view_max):
            calls.append(view_min)
            return Decorations(major=[AxisDecoration.tick(v, 0) for v in (view_min - 1, view_max + 1)])

        with mock.patch.object(creator, "number_decorations", side_effect=moving):
            decorations = creator.best_number_decorations(0, 97, 0, 97)
        assert len(calls) == creator_module.MAX_RANGE_ATTEMPTS + 1
        assert decorations.min == -len(calls)

    def test_no_decorations_raises(self):
        creator = _creator(0, 97)
        with mock.patch.object(creator_module, "MAX_RANGE_ATTEMPTS", -1):
            with pytest.raises(DecorationError, match="Failed creating decorations"):
                creator.best_number_decorations(0, 97, 0, 97)


# ---- Helpers -----------------------------------------------------------------


class TestHelpers:
    def test_number_decorations(self):
        decorations = number_decorations(0, 100, 0, 500, min_spacing=40, formatter=NumberFormatter())
        assert [d.label for d in decorations] == ["0", "10", "20", "30", "40", "50", "60", "70", "80", "90", "100"]

    def test_number_decorations_formatter_used_as_is(self):
        decorations = number_decorations(0, 100, 0, 500, min_spacing=40, formatter=NumberFormatter(min_decimals=1))
        assert decorations[1].label == "10.0"

    def test_number_decorations_unlabelled(self):
        decorations = number_decorations(0, 100, 0, 500, min_spacing=40)
        assert [d.value for d in decorations] == [0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 100]

    def test_simple_number_decorations(self):
        decorations = simple_number_decorations(0, 97, 0, 500)
        assert [d.value for d in decorations] == [0, 10, 20, 30, 40, 50, 60, 70, 80, 90, 100]

    def test_time_decorations(self):
        decorations = time_decorations(
            iso_to_milliseconds("2000"),
            iso_to_milliseconds("2010"),
            0,
            1000,
            TimeUnit.YEAR,
            FixedFontMeasurer(8, 9),
            SimpleTimeFormatter(),
            min_label_distance=40,
        )
        assert [d.label for d in decorations if d.label] == [str(year) for year in range(2000, 2011)]

    def test_time_decorations_reversed(self):
        decorations = time_decorations(
            iso_to_milliseconds("2000"),
            iso_to_milliseconds("2010"),
            0,
            1000,
            TimeUnit.YEAR,
            FixedFontMeasurer(8, 9),
            SimpleTimeFormatter(),
            reversed=True,
            min_label_distance=40,
        )
        assert decorations[0].position == 1000

    def test_time_decorations_single_time(self):
        time = iso_to_milliseconds("2000")
        decorations = time_decorations(
            time, time, 0, 500, TimeUnit.YEAR, FixedFontMeasurer(8, 9), SimpleTimeFormatter()
        )
        assert [(d.label, d.position) for d in decorations] == [("2000", 250)]
