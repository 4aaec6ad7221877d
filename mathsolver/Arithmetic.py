# Arithmetic.py
"""
Arithmetic settings and number formatting.

Two independent precision policies are supported:
- decimal places: round or truncate at a fixed position after the point
- significant digits: round relative to the leading nonzero digit

Truncation to significant digits is not distinguished from rounding to
significant digits; both use round_to_significant_digits().
"""

import math
from decimal import Decimal, ROUND_DOWN, ROUND_HALF_UP
from enum import Enum

from . import error as E

EPSILON = 1e-10
NORMAL_DECIMALS = 4


class ArithmeticMode(Enum):
    NORMAL = "normal"
    TRUNCATE = "truncate"
    ROUND = "round"


def to_mode(value):
    """Accept an ArithmeticMode or its name ("round", "ROUND", ...)."""
    if isinstance(value, ArithmeticMode):
        return value
    try:
        return ArithmeticMode(str(value).strip().lower())
    except ValueError:
        raise E.SettingsError(f"Unknown arithmetic mode: {value!r}")


class ArithmeticSettings:
    """Mode and precision used by the formatter and the evaluator."""

    def __init__(self, mode=ArithmeticMode.NORMAL, precision=NORMAL_DECIMALS, use_significant_digits=False):
        self.mode = ArithmeticMode.NORMAL
        self.precision = NORMAL_DECIMALS
        self.use_significant_digits = False
        self.set(mode, precision, use_significant_digits)

    def set(self, mode, precision, use_significant_digits=False):
        mode = to_mode(mode)
        if isinstance(precision, bool) or not isinstance(precision, int):
            raise E.SettingsError(f"Precision must be an integer, got {precision!r}")
        if precision < 0:
            raise E.SettingsError(f"Precision must not be negative, got {precision}")

        self.mode = mode
        self.precision = precision
        self.use_significant_digits = bool(use_significant_digits)

    def snapshot(self):
        return ArithmeticSettings(self.mode, self.precision, self.use_significant_digits)

    def __eq__(self, other):
        if not isinstance(other, ArithmeticSettings):
            return NotImplemented
        return (self.mode, self.precision, self.use_significant_digits) == \
               (other.mode, other.precision, other.use_significant_digits)

    def __repr__(self):
        return (f"ArithmeticSettings(mode={self.mode.name}, precision={self.precision}, "
                f"use_significant_digits={self.use_significant_digits})")


# -----------------------------
# Rounding helpers
# -----------------------------

def to_decimal(value):
    """Exact decimal of the shortest repr: 0.57 -> Decimal('0.57'), not 0.56999..."""
    return Decimal(repr(value))


def _quantize(value, decimal_places, rounding):
    """Round value at `decimal_places` after the point; negative places round to tens, hundreds, ..."""
    exact = to_decimal(value)
    if exact.as_tuple().exponent >= -decimal_places:
        return value
    return float(exact.quantize(Decimal(1).scaleb(-decimal_places), rounding=rounding))


def truncate_to_decimal_places(value, decimal_places):
    return _quantize(value, max(decimal_places, 0), ROUND_DOWN)


def round_to_decimal_places(value, decimal_places):
    # ROUND_HALF_UP ties away from zero: 1.005 -> 1.01, -2.5 -> -3
    return _quantize(value, max(decimal_places, 0), ROUND_HALF_UP)


def significant_decimal_places(value, sig_digits):
    """Number of decimal places that keep `sig_digits` significant digits of value."""
    if sig_digits <= 0:
        sig_digits = 1
    return sig_digits - to_decimal(value).adjusted() - 1


def round_to_significant_digits(value, sig_digits):
    if abs(value) < EPSILON:
        return 0.0
    return _quantize(value, significant_decimal_places(value, sig_digits), ROUND_HALF_UP)


# -----------------------------
# Public formatter
# -----------------------------

def apply_format(value, settings):
    """Return value with the rounding/truncation policy of settings applied."""
    if not math.isfinite(value):
        return value

    if settings.mode == ArithmeticMode.NORMAL:
        return value

    elif settings.mode == ArithmeticMode.TRUNCATE:
        if settings.use_significant_digits:
            return round_to_significant_digits(value, settings.precision)
        return truncate_to_decimal_places(value, settings.precision)

    elif settings.mode == ArithmeticMode.ROUND:
        if settings.use_significant_digits:
            return round_to_significant_digits(value, settings.precision)
        return round_to_decimal_places(value, settings.precision)

    raise E.SettingsError(f"Unknown arithmetic mode: {settings.mode!r}")


def _display_decimals(value, settings):
    if settings.mode == ArithmeticMode.NORMAL:
        return NORMAL_DECIMALS
    if settings.use_significant_digits:
        if abs(value) < EPSILON:
            return 0
        return max(significant_decimal_places(value, settings.precision), 0)
    return settings.precision


def strip_trailing_zeros(text):
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text in ("-0", ""):
        text = "0"
    return text


def format_number(value, settings):
    """Render value as display text: no trailing zeros, no bare point.

    Outside Normal mode the value is put through apply_format first, so a
    truncated 0.999 reads "0.99" and not the "1" that plain rounding would show.
    """
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"

    if settings.mode != ArithmeticMode.NORMAL:
        value = apply_format(value, settings)

    if value == int(value):
        return str(int(value))

    text = f"{value:.{_display_decimals(value, settings)}f}"
    return strip_trailing_zeros(text)
