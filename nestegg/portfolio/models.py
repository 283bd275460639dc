"""Portfolio data model: holdings, the input snapshot and purchase plans."""

from dataclasses import asdict, dataclass, field
from typing import Any

from ..utils.numeric import format_number


@dataclass(frozen=True)
class Holding:
    """A single position in the portfolio."""
    symbol: str
    quote: float  # Unit price in the holding's own currency
    number_of_shares: int
    target_allocation: float  # Percent of total value, 0 to 100
    is_usd: bool = False  # Converted with the snapshot's exchange rate

    @classmethod
    def from_dict(cls, data: dict) -> "Holding":
        """Create a holding from a validated stock entry."""
        return cls(
            symbol=data["symbol"],
            quote=float(data["quote"]),
            number_of_shares=int(data["number_of_shares"]),
            target_allocation=float(data["target_allocation"]),
            is_usd=bool(data["is_usd"]),
        )


@dataclass(frozen=True)
class PortfolioSnapshot:
    """Everything one planning run reads: holdings plus retirement parameters."""
    holdings: tuple[Holding, ...]
    annual_expenses: float
    target_retirement_age: int
    current_age: int
    target_growth_rate: float  # Percent per year
    usd_to_cad_exchange_rate: float
    expected_contribution: float

    @classmethod
    def from_dict(cls, data: dict) -> "PortfolioSnapshot":
        """
        Create a snapshot from a validated input document.

        Args:
            data: Parsed document with a ``stocks`` list and scalar parameters

        Returns:
            PortfolioSnapshot
        """
        return cls(
            holdings=tuple(Holding.from_dict(stock) for stock in data["stocks"]),
            annual_expenses=float(data["annual_expenses"]),
            target_retirement_age=int(data["target_retirement_age"]),
            current_age=int(data["current_age"]),
            target_growth_rate=float(data["target_growth_rate"]),
            usd_to_cad_exchange_rate=float(data["usd_to_cad_exchange_rate"]),
            expected_contribution=float(data["expected_contribution"]),
        )

    @property
    def symbols(self) -> list[str]:
        return [h.symbol for h in self.holdings]


@dataclass(frozen=True)
class PurchaseRecommendation:
    """A suggested purchase of new shares."""
    symbol: str
    shares: int  # Whole shares, truncated toward zero
    cost: float  # Native currency, priced on the untruncated share count

    def __str__(self) -> str:
        return (
            f"Buy {self.shares} shares in {self.symbol} "
            f"for a cost of {format_number(self.cost)}"
        )


@dataclass
class RebalancePlan:
    """Result of spending one contribution across the portfolio."""
    total_value: float
    starting_budget: float
    allocation_purchases: list[PurchaseRecommendation] = field(default_factory=list)
    leftover_purchases: list[PurchaseRecommendation] = field(default_factory=list)
    dropped: list[PurchaseRecommendation] = field(default_factory=list)
    remaining_budget: float = 0.0

    @property
    def allocation_cost(self) -> float:
        return sum(p.cost for p in self.allocation_purchases)

    @property
    def total_cost(self) -> float:
        return self.allocation_cost + sum(p.cost for p in self.leftover_purchases)

    def to_dict(self) -> dict[str, Any]:
        """Convert plan to dictionary."""
        return {
            "total_value": self.total_value,
            "starting_budget": self.starting_budget,
            "allocation_purchases": [asdict(p) for p in self.allocation_purchases],
            "leftover_purchases": [asdict(p) for p in self.leftover_purchases],
            "dropped": [asdict(p) for p in self.dropped],
            "remaining_budget": self.remaining_budget,
        }
