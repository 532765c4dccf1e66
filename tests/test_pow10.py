"""Tests for axisticks.pow10 - power-of-ten arithmetic."""

from axisticks import pow10


class TestExactScientific:
    def test_avoids_binary_noise(self):
        assert 6 * 10**-1 != 0.6
        assert pow10.exact_scientific(6, -1) == 0.6

    def test_positive_exponent(self):
        assert pow10.exact_scientific(6, 3) == 6000

    def test_power_of(self):
        assert pow10.power_of(2) == 100

    def test_power_of_overflow(self):
        assert pow10.power_of(400) == float("inf")


class TestSnapping:
    def test_exponent_of(self):
        assert pow10.exponent_of(1000) == 3

    def test_floor(self):
        assert pow10.floor(10) == 10
        assert pow10.floor(0.012) == 0.01
        assert pow10.floor(7) == 1
        assert pow10.floor(4523) == 1000
        assert pow10.floor(94523) == 10000

    def test_ceil(self):
        assert pow10.ceil(10) == 10
        assert pow10.ceil(0.006) == 0.01
        assert pow10.ceil(5) == 10
        assert pow10.ceil(22) == 100

    def test_round_is_linear(self):
        assert pow10.round(10) == 10
        assert pow10.round(88) == 100
        assert pow10.round(550) == 1000
        assert pow10.round(549) == 100

    def test_floor_exponent(self):
        assert [pow10.floor_exponent(v) for v in (1, 1222, 99, 10, 9)] == [0, 3, 1, 1, 0]

    def test_ceil_exponent(self):
        assert [pow10.ceil_exponent(v) for v in (1, 1222, 99, 10, 9)] == [0, 4, 2, 1, 1]

    def test_round_exponent_is_logarithmic(self):
        assert [pow10.round_exponent(v) for v in (1, 31, 32, 400, 750, 1250)] == [0, 1, 2, 3, 3, 3]
