"""Portfolio model, valuation and rebalancing."""

from .models import (
    Holding,
    PortfolioSnapshot,
    PurchaseRecommendation,
    RebalancePlan,
)
from .rebalancer import (
    ContributionRebalancer,
    affordable_purchase,
    size_allocation_purchase,
)
from .valuation import allocation_pct, total_value, value_of

__all__ = [
    "Holding",
    "PortfolioSnapshot",
    "PurchaseRecommendation",
    "RebalancePlan",
    "ContributionRebalancer",
    "affordable_purchase",
    "size_allocation_purchase",
    "allocation_pct",
    "total_value",
    "value_of",
]
