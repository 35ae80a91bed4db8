"""View models for real-estate properties."""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from wealthtrack.domain.models import PropertyDetails


@dataclass
class PropertyWithEquity:
    """A property at its latest manual valuation, net of its linked mortgage."""

    symbol: str
    name: str
    currency: str
    details: PropertyDetails
    current_value: Decimal
    mortgage_id: Optional[int] = None
    mortgage_balance: Optional[Decimal] = None

    @property
    def equity(self) -> Decimal:
        return self.current_value - (self.mortgage_balance or Decimal("0"))

    @property
    def ltv_percentage(self) -> Optional[Decimal]:
        """Loan-to-value; None without a mortgage or a positive value."""
        if self.mortgage_balance is None or self.current_value <= 0:
            return None
        return self.mortgage_balance / self.current_value * Decimal("100")


@dataclass
class RealEstateSummary:
    """Totals over every active property."""

    properties: list[PropertyWithEquity] = field(default_factory=list)

    @property
    def property_count(self) -> int:
        return len(self.properties)

    @property
    def total_property_value(self) -> Decimal:
        return sum((p.current_value for p in self.properties), Decimal("0"))

    @property
    def total_mortgage_balance(self) -> Decimal:
        return sum((p.mortgage_balance or Decimal("0") for p in self.properties), Decimal("0"))

    @property
    def total_equity(self) -> Decimal:
        return self.total_property_value - self.total_mortgage_balance
