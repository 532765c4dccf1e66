"""Tests for axisticks.mappers - data <-> screen transforms."""

from __future__ import annotations

import math

import numpy as np
import pytest

from axisticks.errors import MapperError
from axisticks.mappers import (
    LinearMapper,
    MirroredSignedMapper,
    SignedPowerMapper,
    SignLayout,
    SingleValueMapper,
    box_cox,
    inverse_box_cox,
)

LIN = 1
LOG = 0


def _check_both_ways(mapper, data_values, screen_values, tol):
    for data, screen in zip(data_values, screen_values):
        assert mapper.screen_value(data) == pytest.approx(screen, abs=tol)
        assert mapper.data_value(screen) == pytest.approx(data, abs=tol)


# ---- Box-Cox -----------------------------------------------------------------


class TestBoxCox:
    def test_identity_and_log(self):
        assert box_cox(7, 1) == 7
        assert box_cox(math.e, 0) == pytest.approx(1)

    def test_power(self):
        assert box_cox(9, 0.5) == pytest.approx(4)
        assert inverse_box_cox(4, 0.5) == pytest.approx(9)

    def test_domain_edges(self):
        assert box_cox(0, 0) == -math.inf
        assert math.isnan(box_cox(-1, 0))

    def test_overflow(self):
        assert inverse_box_cox(1e6, 0) == math.inf


# ---- Linear and single value -------------------------------------------------


class TestLinearMapper:
    def test_reversed(self):
        _check_both_ways(LinearMapper(0, 10, 100, 0), [0, 5, 10], [100, 50, 0], 0)

    def test_offset_ranges(self):
        mapper = LinearMapper(1, 11, 0, 100)
        assert mapper.screen_value(6) == pytest.approx(50)
        assert mapper.data_value(100) == pytest.approx(11)

    def test_numpy_arrays(self):
        mapper = LinearMapper(0, 10, 0, 100)
        result = mapper.screen_value(np.array([0.0, 2.5, 10.0]))
        np.testing.assert_allclose(result, [0, 25, 100])
        np.testing.assert_allclose(mapper.data_value(np.array([50.0])), [5])

    def test_empty_range_raises(self):
        with pytest.raises(MapperError, match="non-empty data range") as exc_info:
            LinearMapper(3, 3, 0, 100)
        assert exc_info.value.data_min == 3

    def test_getters(self):
        mapper = LinearMapper(0, 10, 50, 100)
        assert (mapper.data_min, mapper.data_max, mapper.screen_start, mapper.screen_end) == (0, 10, 50, 100)


class TestSingleValueMapper:
    def test_everything_maps_to_middle(self):
        mapper = SingleValueMapper(8, 10, 100)
        assert mapper.screen_value(8) == 55
        assert mapper.screen_value(12) == 55
        assert mapper.data_value(9999) == 8

    def test_getters(self):
        mapper = SingleValueMapper(8, 10, 100)
        assert mapper.data_min == 8
        assert mapper.data_max == 8
        assert mapper.screen_start == 10
        assert mapper.screen_end == 100


# ---- Signed power ------------------------------------------------------------


class TestSignedPowerMapper:
    def test_half_and_half_super_simple(self):
        mapper = SignedPowerMapper(100, 200, 100, 200, 0.5)
        _check_both_ways(mapper, [100, 150, 200], [100, 154.258, 200], 0.1)

    def test_half_and_half_simple(self):
        mapper = SignedPowerMapper(1, 100, 1, 100, 0.5)
        _check_both_ways(mapper, [0, 1, 33, 50, 100, 200], [-10, 1, 53.19, 67.78, 100, 145.56], 0.1)

    def test_half_and_half_reversed(self):
        mapper = SignedPowerMapper(11.567, 234.1, 88, 0, 0.5)
        _check_both_ways(mapper, [11.567, 100, 234.1, 250], [88.0, 39.2, 0.0, -3.8], 0.1)

    def test_log_super_simple(self):
        mapper = SignedPowerMapper(100, 200, 100, 200, LOG)
        _check_both_ways(mapper, [100, 150, 200], [100, 158.5, 200], 0.01)

    def test_log_simple(self):
        mapper = SignedPowerMapper(1, 100, 1, 100, LOG)
        _check_both_ways(mapper, [1, 33, 50, 100, 200], [1, 76.17, 85.1, 100, 114.9], 0.01)


# ---- Mirrored signed ---------------------------------------------------------


class TestMirroredSignedMapper:
    def test_reversed_positive_with_zero(self):
        mapper = MirroredSignedMapper(0, 10, 100, 0, LIN, 0)
        _check_both_ways(mapper, [0, 5, 10], [100, 50, 0], 1e-9)
        assert mapper.is_reversed

    @pytest.mark.parametrize("lam", [LIN, LOG])
    def test_zero_band_maps_to_zero(self, lam):
        mapper = MirroredSignedMapper(-5, 5, 0, 100, lam, 1)
        assert mapper.screen_value(0) == 50
        assert mapper.screen_value(0.5) == 50
        assert mapper.screen_value(-0.5) == 50

    def test_fallback_epsilon(self):
        mapper = MirroredSignedMapper(-5, 5, 0, 100, LIN, math.nan)
        assert mapper.screen_value(0) == 50
        assert mapper.screen_value(0.005) == 50
        assert mapper.screen_value(-0.005) == 50

    def test_single_value(self):
        mapper = MirroredSignedMapper(10, 10, 0, 100, LIN, 10)
        assert mapper.layout is SignLayout.COLLAPSED
        _check_both_ways(mapper, [10], [50], 0.1)

    def test_positive_range(self):
        mapper = MirroredSignedMapper(1, 11, 0, 100, LIN, 1)
        assert mapper.layout is SignLayout.POSITIVE
        _check_both_ways(mapper, [1, 6, 11], [0, 50, 100], 0.1)

    def test_positive_range_with_zero(self):
        _check_both_ways(MirroredSignedMapper(0, 10, 0, 100, LIN, 0), [0, 5, 10], [0, 50, 100], 0.1)

    def test_negative_range(self):
        mapper = MirroredSignedMapper(-11, -1, 0, 100, LIN, 1)
        assert mapper.layout is SignLayout.NEGATIVE
        _check_both_ways(mapper, [-11, -6, -1], [0, 50, 100], 0.1)

    def test_negative_range_with_zero(self):
        _check_both_ways(MirroredSignedMapper(-10, 0, 0, 100, LIN, 0), [-10, -5, 0], [0, 50, 100], 0.1)

    def test_clamped_negative_tail(self):
        mapper = MirroredSignedMapper(-0.1, 10, 0, 100, LIN, 1)
        assert mapper.layout is SignLayout.POSITIVE_CLAMPED
        assert mapper.screen_value(-0.1) == 0
        assert mapper.screen_value(10) == pytest.approx(100)

    def test_clamped_positive_tail(self):
        mapper = MirroredSignedMapper(-10, 0.1, 0, 100, LIN, 1)
        assert mapper.layout is SignLayout.NEGATIVE_CLAMPED
        assert mapper.screen_value(-10) == pytest.approx(0)
        assert mapper.screen_value(0.1) == 100

    def test_straddling(self):
        mapper = MirroredSignedMapper(-10, 10, 0, 100, LIN, 1)
        assert mapper.layout is SignLayout.STRADDLING
        assert mapper.screen_zero == 50
        _check_both_ways(mapper, [-10, 0, 10], [0, 50, 100], 0.1)

    def test_straddling_reversed(self):
        _check_both_ways(MirroredSignedMapper(-10, 10, 100, 0, LIN, 1), [-10, 0, 10], [100, 50, 0], 0.1)

    def test_straddling_log_layout(self):
        mapper = MirroredSignedMapper(-10, 1000, 0, 500, lam=LOG, epsilon=1)
        assert mapper.layout is SignLayout.STRADDLING
        assert 0 < mapper.screen_zero < 500
        assert mapper.screen_value(1000) == pytest.approx(500)
        assert mapper.screen_value(-10) == pytest.approx(0, abs=1)

    def test_zero_threshold(self):
        assert MirroredSignedMapper(0, 10, 50, 100, LIN, 1).zero_threshold == 0.5
        assert MirroredSignedMapper(0, 10, 50, 100, LIN).zero_threshold == 0.01

    def test_getters(self):
        mapper = MirroredSignedMapper(0, 10, 50, 100, LIN, 0)
        assert (mapper.data_min, mapper.data_max, mapper.screen_start, mapper.screen_end) == (0, 10, 50, 100)

    def test_numpy_arrays(self):
        mapper = MirroredSignedMapper(-10, 10, 0, 100, LIN, 1)
        np.testing.assert_allclose(mapper.screen_value(np.array([-10.0, 0.0, 10.0])), [0, 50, 100], atol=1e-9)


# ---- Round trip --------------------------------------------------------------


_SIGNED_RANGES = [
    (1, 10000, SignLayout.POSITIVE),
    (-10000, -1, SignLayout.NEGATIVE),
    (-0.2, 10000, SignLayout.POSITIVE_CLAMPED),
    (-10000, 0.2, SignLayout.NEGATIVE_CLAMPED),
    (-100, 10000, SignLayout.STRADDLING),
]


class TestRoundTrip:
    """Verify screen_value(data_value(s)) ~= s across the whole screen range."""

    @pytest.mark.parametrize("screen_start,screen_end", [(0, 500), (500, 0), (40, 460)])
    def test_linear(self, screen_start, screen_end):
        mapper = LinearMapper(-50, 150, screen_start, screen_end)
        screens = np.linspace(screen_start, screen_end, 51)
        assert mapper.screen_value(mapper.data_value(screens)) == pytest.approx(screens, abs=1e-9)
        data = np.linspace(-50, 150, 41)
        assert mapper.data_value(mapper.screen_value(data)) == pytest.approx(data, abs=1e-9)

    @pytest.mark.parametrize("lam", [LOG, 0.5])
    @pytest.mark.parametrize("screen_start,screen_end", [(0, 500), (500, 0)])
    @pytest.mark.parametrize("data_min,data_max,layout", _SIGNED_RANGES)
    def test_mirrored_screen_sweep(self, data_min, data_max, layout, screen_start, screen_end, lam):
        mapper = MirroredSignedMapper(data_min, data_max, screen_start, screen_end, lam, 1)
        assert mapper.layout is layout
        screens = np.linspace(screen_start, screen_end, 51)
        assert mapper.screen_value(mapper.data_value(screens)) == pytest.approx(screens, abs=1e-6)

    @pytest.mark.parametrize("lam", [LOG, 0.5])
    @pytest.mark.parametrize("screen_start,screen_end", [(0, 500), (500, 0)])
    @pytest.mark.parametrize("data_min,data_max,layout", _SIGNED_RANGES)
    def test_mirrored_data_sweep(self, data_min, data_max, layout, screen_start, screen_end, lam):
        mapper = MirroredSignedMapper(data_min, data_max, screen_start, screen_end, lam, 1)
        data = np.linspace(data_min, data_max, 41)
        # The zero band collapses onto screen_zero and cannot come back
        data = data[np.abs(data) > mapper.zero_threshold]
        assert mapper.data_value(mapper.screen_value(data)) == pytest.approx(data, rel=1e-9)
