"""
Contribution-driven portfolio rebalancing.

Spends a new contribution on the holdings that sit below their target
allocation, cheapest purchase first, then puts whatever cash is left into
the holdings in their listed order. Only buys; nothing is ever sold.
"""

import logging
from typing import Optional, Sequence

from ..utils.logging import log_recommendation
from ..utils.numeric import ieee_divide, truncate_shares
from .models import Holding, PortfolioSnapshot, PurchaseRecommendation, RebalancePlan
from .valuation import total_value

logger = logging.getLogger(__name__)


def affordable_purchase(holding: Holding, budget: float) -> PurchaseRecommendation:
    """
    Size a purchase that spends the whole budget on one holding.

    The cost is priced on the fractional share count, so it equals the
    budget up to rounding even though the reported share count is truncated.
    """
    shares_to_buy = ieee_divide(budget, holding.quote)
    return PurchaseRecommendation(
        symbol=holding.symbol,
        shares=truncate_shares(shares_to_buy),
        cost=shares_to_buy * holding.quote,
    )


def size_allocation_purchase(
    holding: Holding,
    portfolio_value: float,
    budget: float,
) -> Optional[PurchaseRecommendation]:
    """
    Size the purchase that brings a holding up to its target allocation.

    Args:
        holding: Holding to size
        portfolio_value: Current portfolio value, excluding the contribution
        budget: Cash available for this holding

    Returns:
        The full purchase when it costs less than the budget, a purchase
        sized to the budget when it does not, or None when the holding is
        already at or above target.
    """
    target_weight = holding.target_allocation / 100.0
    desired_shares = ieee_divide(target_weight * portfolio_value, holding.quote)
    shares_to_buy = desired_shares - holding.number_of_shares
    cost = shares_to_buy * holding.quote

    # NaN compares False here as well, so an unpriceable holding is skipped.
    if not shares_to_buy > 0:
        return None

    if cost < budget:
        return PurchaseRecommendation(
            symbol=holding.symbol,
            shares=truncate_shares(shares_to_buy),
            cost=cost,
        )

    return affordable_purchase(holding, budget)


class ContributionRebalancer:
    """
    Plans purchases for one contribution.

    Two passes share a single budget:
    - allocation pass: underweight holdings sized against the full budget,
      applied cheapest first while they still fit
    - leftover pass: remaining cash spent holding by holding in listed order
    """

    def __init__(
        self,
        holdings: Sequence[Holding],
        fx_rate: float,
        contribution: float,
    ):
        """
        Initialize rebalancer.

        Args:
            holdings: Holdings in input order
            fx_rate: USD to native currency exchange rate
            contribution: Cash to spend
        """
        self.holdings = tuple(holdings)
        self.fx_rate = fx_rate
        self.contribution = contribution

    @classmethod
    def from_snapshot(cls, snapshot: PortfolioSnapshot) -> "ContributionRebalancer":
        """Create rebalancer from a loaded portfolio snapshot."""
        return cls(
            holdings=snapshot.holdings,
            fx_rate=snapshot.usd_to_cad_exchange_rate,
            contribution=snapshot.expected_contribution,
        )

    def calculate_allocation_purchases(
        self,
        portfolio_value: float,
    ) -> list[PurchaseRecommendation]:
        """
        Size every underweight holding against the full contribution.

        Returns:
            Candidate purchases sorted by cost, cheapest first
        """
        candidates = []
        for holding in self.holdings:
            purchase = size_allocation_purchase(holding, portfolio_value, self.contribution)
            if purchase is None:
                logger.debug(f"{holding.symbol} is at or above target, no purchase")
                continue
            candidates.append(purchase)

        candidates.sort(key=lambda p: p.cost)
        return candidates

    def plan(self) -> RebalancePlan:
        """Compute both purchase passes."""
        portfolio_value = total_value(self.holdings, self.fx_rate)
        remaining = self.contribution

        result = RebalancePlan(
            total_value=portfolio_value,
            starting_budget=self.contribution,
        )

        # Candidates were sized against the full budget; once cheaper ones
        # have been paid for, a candidate that no longer fits is dropped
        # rather than resized.
        for purchase in self.calculate_allocation_purchases(portfolio_value):
            if purchase.cost > remaining:
                logger.debug(
                    f"Dropping {purchase.symbol} purchase: cost {purchase.cost:.2f} "
                    f"exceeds remaining {remaining:.2f}"
                )
                result.dropped.append(purchase)
                continue
            remaining -= purchase.cost
            result.allocation_purchases.append(purchase)
            log_recommendation(logger, "allocation", purchase, remaining)

        for holding in self.holdings:
            if remaining <= 0:
                continue
            purchase = affordable_purchase(holding, remaining)
            remaining -= purchase.cost
            result.leftover_purchases.append(purchase)
            log_recommendation(logger, "leftover", purchase, remaining)

        result.remaining_budget = remaining

        logger.info(
            f"Planned {len(result.allocation_purchases)} allocation and "
            f"{len(result.leftover_purchases)} leftover purchases, "
            f"{len(result.dropped)} dropped"
        )
        return result
