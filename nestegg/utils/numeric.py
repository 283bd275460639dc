"""
Numeric helpers with IEEE-754 semantics.

Plain Python floats raise on division by zero and on power overflow. The
calculations in this package are total over the reals instead: a zero
denominator gives inf or NaN and an overflowing power gives inf.
"""

import math
from decimal import Decimal

import numpy as np

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1


def ieee_divide(numerator: float, denominator: float) -> float:
    """Divide two floats, returning inf/NaN instead of raising ZeroDivisionError."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.divide(np.float64(numerator), np.float64(denominator)))


def ieee_power(base: float, exponent: int) -> float:
    """
    Raise base to an integer exponent by square-and-multiply.

    Rounds like the compiler-rt integer power (one multiply per bit), not
    like libm pow, so the last digits differ from ``base ** exponent``.
    Overflow gives inf instead of raising OverflowError.
    """
    remaining = abs(int(exponent))
    factor = np.float64(base)
    result = np.float64(1.0)
    with np.errstate(over="ignore", under="ignore", invalid="ignore"):
        while True:
            if remaining & 1:
                result *= factor
            remaining //= 2
            if remaining == 0:
                break
            factor *= factor
    if exponent < 0:
        return ieee_divide(1.0, float(result))
    return float(result)


def truncate_shares(value: float) -> int:
    """
    Truncate a fractional share count toward zero.

    Saturates at the int64 bounds; NaN becomes 0.
    """
    if math.isnan(value):
        return 0
    if value >= INT64_MAX:
        return INT64_MAX
    if value <= INT64_MIN:
        return INT64_MIN
    return int(value)


def format_number(value: float) -> str:
    """
    Render a number for the text reports.

    Shortest round-trip digits, never exponent notation, no trailing ".0":
    1000.0 -> "1000", 1e-07 -> "0.0000001", inf -> "inf", nan -> "NaN".
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return str(value)
    value = float(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"

    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text
