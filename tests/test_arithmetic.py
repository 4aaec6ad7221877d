import math

import pytest

from mathsolver import Arithmetic
from mathsolver import error as E
from mathsolver.Arithmetic import ArithmeticMode, ArithmeticSettings, apply_format, format_number


def test_default_settings_are_normal_mode():
    settings = ArithmeticSettings()
    assert settings.mode == ArithmeticMode.NORMAL
    assert settings.precision == Arithmetic.NORMAL_DECIMALS
    assert settings.use_significant_digits is False


@pytest.mark.parametrize("name", ["round", "ROUND", " Round "])
def test_mode_names_are_accepted(name):
    assert Arithmetic.to_mode(name) == ArithmeticMode.ROUND


@pytest.mark.parametrize("mode, precision", [
    ("bogus", 2),
    (ArithmeticMode.ROUND, -1),
    (ArithmeticMode.ROUND, 2.5),
    (ArithmeticMode.ROUND, True),
    (ArithmeticMode.ROUND, "2"),
])
def test_invalid_settings_are_rejected(mode, precision):
    settings = ArithmeticSettings()
    with pytest.raises(E.SettingsError) as info:
        settings.set(mode, precision)
    assert info.value.code == "5001"
    # unchanged after a rejected update
    assert settings == ArithmeticSettings()


def test_snapshot_is_independent():
    settings = ArithmeticSettings(ArithmeticMode.ROUND, 2)
    snapshot = settings.snapshot()
    settings.set(ArithmeticMode.TRUNCATE, 5)
    assert snapshot.mode == ArithmeticMode.ROUND and snapshot.precision == 2


def test_normal_mode_leaves_values_unchanged(normal):
    assert apply_format(1 / 3, normal) == 1 / 3


@pytest.mark.parametrize("value, places, expected", [
    (3.14159, 2, 3.14),
    (2.5, 0, 3.0),
    (-2.5, 0, -3.0),
    (2.675, 1, 2.7),
    (-3.789, 2, -3.79),
])
def test_round_to_decimal_places(make_settings, value, places, expected):
    assert apply_format(value, make_settings(ArithmeticMode.ROUND, places)) == pytest.approx(expected)


@pytest.mark.parametrize("value, places, expected", [
    (3.14159, 2, 3.14),
    (-3.789, 2, -3.78),
    (2.999, 0, 2.0),
    (-2.999, 0, -2.0),
])
def test_truncate_moves_toward_zero(make_settings, value, places, expected):
    assert apply_format(value, make_settings(ArithmeticMode.TRUNCATE, places)) == pytest.approx(expected)


@pytest.mark.parametrize("value, digits, expected", [
    (0.0012345, 3, 0.00123),
    (12345.678, 3, 12300.0),
    (-98765.0, 2, -99000.0),
    (3.14159, 1, 3.0),
    (123.0, 0, 100.0),
])
def test_round_to_significant_digits(make_settings, value, digits, expected):
    settings = make_settings(ArithmeticMode.ROUND, digits, True)
    assert apply_format(value, settings) == pytest.approx(expected)


def test_truncate_with_significant_digits_rounds(make_settings):
    truncate = make_settings(ArithmeticMode.TRUNCATE, 3, True)
    round_ = make_settings(ArithmeticMode.ROUND, 3, True)
    assert apply_format(0.0012399, truncate) == apply_format(0.0012399, round_)


def test_significant_digits_of_zero(make_settings):
    assert apply_format(0.0, make_settings(ArithmeticMode.ROUND, 3, True)) == 0.0


def test_non_finite_values_pass_through(make_settings):
    settings = make_settings(ArithmeticMode.ROUND, 2)
    assert math.isinf(apply_format(math.inf, settings))
    assert math.isnan(apply_format(math.nan, settings))


def test_significant_decimal_places():
    assert Arithmetic.significant_decimal_places(0.0012345, 3) == 5
    assert Arithmetic.significant_decimal_places(12345.678, 3) == -2
    assert Arithmetic.significant_decimal_places(3.5, 2) == 1


@pytest.mark.parametrize("text, expected", [
    ("2.500", "2.5"),
    ("3.000", "3"),
    ("-0.000", "0"),
    ("120", "120"),
])
def test_strip_trailing_zeros(text, expected):
    assert Arithmetic.strip_trailing_zeros(text) == expected


class TestFormatNumber:
    def test_integral_values_have_no_point(self, normal):
        assert format_number(14.0, normal) == "14"
        assert format_number(-3.0, normal) == "-3"
        assert format_number(12300.0, normal) == "12300"

    def test_normal_mode_shows_four_decimals(self, normal):
        assert format_number(1 / 3, normal) == "0.3333"
        assert format_number(2.5, normal) == "2.5"

    def test_fixed_decimals(self, make_settings):
        settings = make_settings(ArithmeticMode.ROUND, 2)
        assert format_number(3.14, settings) == "3.14"
        assert format_number(2.5, settings) == "2.5"

    def test_tiny_negative_value_is_not_minus_zero(self, make_settings):
        assert format_number(-0.00001, make_settings(ArithmeticMode.ROUND, 2)) == "0"

    def test_significant_digits(self, make_settings):
        settings = make_settings(ArithmeticMode.ROUND, 3, True)
        assert format_number(0.00123, settings) == "0.00123"
        assert format_number(1.23, settings) == "1.23"

    def test_non_finite(self, normal):
        assert format_number(math.nan, normal) == "nan"
        assert format_number(math.inf, normal) == "inf"
        assert format_number(-math.inf, normal) == "-inf"


@pytest.mark.parametrize("value, expected", [
    (0.57, 0.57),
    (0.29, 0.29),
    (-0.57, -0.57),
    (4.35, 4.35),
])
def test_truncate_keeps_exactly_representable_decimals(make_settings, value, expected):
    # 0.57 is stored as 0.56999...
    assert apply_format(value, make_settings(ArithmeticMode.TRUNCATE, 2)) == expected


@pytest.mark.parametrize("value, places, expected", [
    (1.005, 2, 1.01),
    (-1.005, 2, -1.01),
    (0.125, 2, 0.13),
    (2.345, 2, 2.35),
])
def test_round_half_away_from_zero_on_written_digits(make_settings, value, places, expected):
    assert apply_format(value, make_settings(ArithmeticMode.ROUND, places)) == expected


def test_significant_digits_use_written_digits(make_settings):
    assert apply_format(1.005, make_settings(ArithmeticMode.ROUND, 3, True)) == 1.01


def test_large_values_are_left_alone(make_settings):
    assert apply_format(1e300, make_settings(ArithmeticMode.ROUND, 2)) == 1e300
    assert apply_format(1e300, make_settings(ArithmeticMode.ROUND, 3, True)) == 1e300


class TestFormatNumberTruncate:
    def test_text_is_truncated_not_rounded(self, make_settings):
        settings = make_settings(ArithmeticMode.TRUNCATE, 2)
        assert format_number(0.999, settings) == "0.99"
        assert format_number(-0.999, settings) == "-0.99"

    def test_exact_decimals_survive(self, make_settings):
        assert format_number(0.57, make_settings(ArithmeticMode.TRUNCATE, 2)) == "0.57"
