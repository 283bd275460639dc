"""Tests for IEEE numeric helpers."""

import math

import pytest

from nestegg.utils.numeric import (
    INT64_MAX,
    INT64_MIN,
    ieee_divide,
    ieee_power,
    truncate_shares,
)


class TestIeeeDivide:
    """Division never raises."""

    def test_regular_division(self):
        assert ieee_divide(1000.0, 100.0) == 10.0

    def test_positive_over_zero(self):
        assert ieee_divide(5.0, 0.0) == math.inf

    def test_negative_over_zero(self):
        assert ieee_divide(-5.0, 0.0) == -math.inf

    def test_zero_over_zero(self):
        assert math.isnan(ieee_divide(0.0, 0.0))

    def test_returns_builtin_float(self):
        assert type(ieee_divide(1, 3)) is float


class TestIeeePower:
    """Exponentiation never raises."""

    def test_integer_exponent(self):
        assert ieee_power(1.07, 35) == pytest.approx(1.07 ** 35)

    def test_rounds_like_repeated_squaring(self):
        """35 = 0b100011: x * x**2 * x**32, each square rounded in turn."""
        x = 1.07
        x2 = x * x
        x4 = x2 * x2
        x8 = x4 * x4
        x16 = x8 * x8
        x32 = x16 * x16
        assert ieee_power(x, 35) == (x * x2) * x32

    def test_negative_exponent_is_reciprocal(self):
        assert ieee_power(1.07, -5) == 1.0 / ieee_power(1.07, 5)

    def test_negative_exponent(self):
        assert ieee_power(2.0, -2) == 0.25

    def test_zero_exponent(self):
        assert ieee_power(1.07, 0) == 1.0

    def test_overflow(self):
        assert ieee_power(11.0, 1000) == math.inf


class TestTruncateShares:
    """Share counts truncate toward zero and saturate."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (12.5, 12),
            (0.999, 0),
            (-0.5, 0),
            (-2.7, -2),
            (math.nan, 0),
            (math.inf, INT64_MAX),
            (-math.inf, INT64_MIN),
            (1e30, INT64_MAX),
        ],
    )
    def test_values(self, value, expected):
        assert truncate_shares(value) == expected
