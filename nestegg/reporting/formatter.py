"""
Text rendering of the three planner reports.

Pure presentation: every number shown was computed upstream, apart from
the per-holding allocation percentage which is a direct valuation lookup.
"""

from ..portfolio.models import PortfolioSnapshot, RebalancePlan
from ..portfolio.valuation import allocation_pct, total_value
from ..retirement.projector import RetirementProjection
from ..utils.numeric import format_number


class ReportFormatter:
    """Renders allocation, rebalancing and retirement reports as lines."""

    def format_allocation(self, snapshot: PortfolioSnapshot) -> list[str]:
        """Current allocation of each holding."""
        fx_rate = snapshot.usd_to_cad_exchange_rate
        portfolio_value = total_value(snapshot.holdings, fx_rate)

        lines = ["The portfolio state is the following:"]
        for holding in snapshot.holdings:
            pct = allocation_pct(holding, portfolio_value, fx_rate)
            lines.append(
                f"You have {holding.number_of_shares} shares in {holding.symbol} "
                f"for an allocation of {format_number(pct)}"
            )
        return lines

    def format_purchases(self, plan: RebalancePlan) -> list[str]:
        """Both purchase passes, in the order they were applied."""
        lines = ["To fix allocations, make the following purchases"]
        lines.extend(str(p) for p in plan.allocation_purchases)
        lines.append("Use extra contribution cash to do the following")
        lines.extend(str(p) for p in plan.leftover_purchases)
        return lines

    def format_projection(self, projection: RetirementProjection) -> list[str]:
        """Withdrawal target, grown value and progress toward the target."""
        return [
            f"Assuming a withdrawal rate of {format_number(projection.withdrawal_rate)}%, "
            f"you need {format_number(projection.target_portfolio_value)} to retire",
            f"You will have contributed {format_number(projection.new_value)}, "
            f"which in {projection.years_to_grow} years will be "
            f"{format_number(projection.future_value)}",
            f"This means once you are {projection.target_retirement_age}, "
            f"you will be at {format_number(projection.percent_of_target)} % of your target",
        ]

    def render(
        self,
        snapshot: PortfolioSnapshot,
        plan: RebalancePlan,
        projection: RetirementProjection,
    ) -> list[str]:
        """
        Render the full report.

        Args:
            snapshot: Loaded portfolio
            plan: Purchase plan for the snapshot's contribution
            projection: Retirement projection for the snapshot

        Returns:
            Report lines in output order
        """
        lines = self.format_allocation(snapshot)
        lines.append("Figure out where to contribute:")
        lines.extend(self.format_purchases(plan))
        lines.append("Your distance to retirement:")
        lines.extend(self.format_projection(projection))
        return lines
