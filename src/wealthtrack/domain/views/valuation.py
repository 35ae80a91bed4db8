"""View models for valuation outputs."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from wealthtrack.domain.models import AssetClass, LiabilityBalance, ValuationStatus


@dataclass
class ValuedHolding:
    """
    One holding with its resolved price and value.

    ``status`` tells report consumers how the value was obtained:
    RESOLVED (price x amount), STALE (stored value, no price) or ABSENT.
    """

    symbol: str
    name: str
    amount: Decimal
    asset_class: AssetClass
    status: ValuationStatus
    price: Optional[Decimal] = None
    value: Optional[Decimal] = None

    @property
    def has_value(self) -> bool:
        return self.value is not None


@dataclass
class ValuationReport:
    """
    Priced snapshot in the base currency.

    ``total_value`` covers assets only; liabilities are subtracted in
    ``net_worth``.
    """

    date: date
    currency: str
    holdings: list[ValuedHolding] = field(default_factory=list)
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))
    liabilities: list[LiabilityBalance] = field(default_factory=list)
    total_liabilities: Decimal = field(default_factory=lambda: Decimal("0"))

    @property
    def net_worth(self) -> Decimal:
        return self.total_value - self.total_liabilities

    @property
    def absent_symbols(self) -> list[str]:
        """Symbols that could not be valued at all."""
        return [h.symbol for h in self.holdings if h.status == ValuationStatus.ABSENT]


@dataclass
class PriceLookupResult:
    """Per-symbol result of a price lookup outside portfolio context."""

    symbol: str
    price: Optional[Decimal] = None
    error: Optional[str] = None
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        return self.price is not None
