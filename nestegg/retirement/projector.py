"""Retirement readiness projection based on compound growth and the 4% rule."""

import logging
from dataclasses import asdict, dataclass
from typing import Any

from ..portfolio.models import PortfolioSnapshot
from ..portfolio import valuation
from ..utils.logging import log_projection
from ..utils.numeric import ieee_divide, ieee_power

logger = logging.getLogger(__name__)

# Safe annual withdrawal, percent of the portfolio
WITHDRAWAL_RATE_PCT = 4.0


@dataclass(frozen=True)
class RetirementProjection:
    """Projected portfolio at retirement against the withdrawal target."""
    total_value: float
    expected_contribution: float
    new_value: float
    years_to_grow: int
    growth_multiplier: float
    future_value: float
    withdrawal_rate: float
    target_portfolio_value: float
    percent_of_target: float
    target_retirement_age: int

    def to_dict(self) -> dict[str, Any]:
        """Convert projection to dictionary."""
        return asdict(self)


def project_retirement(
    total_value: float,
    expected_contribution: float,
    current_age: int,
    target_retirement_age: int,
    target_growth_rate: float,
    annual_expenses: float,
    withdrawal_rate: float = WITHDRAWAL_RATE_PCT,
) -> RetirementProjection:
    """
    Project the portfolio forward to the retirement age.

    The contribution is added once, up front, and the sum compounds yearly
    at the target growth rate. A retirement age at or below the current age
    gives zero or negative years, which leaves the value unchanged or
    shrinks it. Zero expenses make the target zero and the percentage
    infinite (NaN when the future value is also zero).

    Args:
        total_value: Current portfolio value
        expected_contribution: Cash added before growth
        current_age: Age today
        target_retirement_age: Age at retirement
        target_growth_rate: Annual growth, percent
        annual_expenses: Yearly spending in retirement
        withdrawal_rate: Sustainable withdrawal, percent

    Returns:
        RetirementProjection
    """
    new_value = total_value + expected_contribution
    years_to_grow = target_retirement_age - current_age
    growth_multiplier = 1.0 + target_growth_rate / 100.0
    future_value = new_value * ieee_power(growth_multiplier, years_to_grow)
    target_portfolio_value = ieee_divide(annual_expenses, withdrawal_rate / 100.0)
    percent_of_target = ieee_divide(future_value, target_portfolio_value) * 100.0

    return RetirementProjection(
        total_value=total_value,
        expected_contribution=expected_contribution,
        new_value=new_value,
        years_to_grow=years_to_grow,
        growth_multiplier=growth_multiplier,
        future_value=future_value,
        withdrawal_rate=withdrawal_rate,
        target_portfolio_value=target_portfolio_value,
        percent_of_target=percent_of_target,
        target_retirement_age=target_retirement_age,
    )


def project_snapshot(snapshot: PortfolioSnapshot) -> RetirementProjection:
    """Project retirement readiness for a loaded snapshot."""
    projection = project_retirement(
        total_value=valuation.total_value(snapshot.holdings, snapshot.usd_to_cad_exchange_rate),
        expected_contribution=snapshot.expected_contribution,
        current_age=snapshot.current_age,
        target_retirement_age=snapshot.target_retirement_age,
        target_growth_rate=snapshot.target_growth_rate,
        annual_expenses=snapshot.annual_expenses,
    )
    log_projection(logger, projection)
    return projection
