"""Portfolio valuation in the native (CAD) currency."""

from typing import Iterable

from ..utils.numeric import ieee_divide
from .models import Holding


def value_of(holding: Holding, fx_rate: float) -> float:
    """Market value of a holding, converted with fx_rate when USD-denominated."""
    value = holding.quote * holding.number_of_shares
    if holding.is_usd:
        value *= fx_rate
    return value


def total_value(holdings: Iterable[Holding], fx_rate: float) -> float:
    """Sum of holding values. An empty portfolio is worth 0."""
    return sum((value_of(h, fx_rate) for h in holdings), 0.0)


def allocation_pct(holding: Holding, portfolio_value: float, fx_rate: float) -> float:
    """
    Current share of the portfolio held in this position, in percent.

    A zero portfolio value gives NaN (or inf), not an error.
    """
    return ieee_divide(value_of(holding, fx_rate), portfolio_value) * 100.0
