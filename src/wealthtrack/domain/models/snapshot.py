"""Snapshot and Holding domain models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from wealthtrack.domain.models.enums import AssetClass, ValuationSource


@dataclass
class Snapshot:
    """
    A dated checkpoint of holdings (one per calendar date).

    Totals are never stored here; they are derived from holdings and rates.
    """

    id: Optional[int]
    date: date
    notes: Optional[str] = None
    created_at: Optional[datetime] = field(default=None)


@dataclass
class Holding:
    """
    A quantity of one asset within one snapshot.

    ``value`` is the legacy stored base-currency value, used only when no
    price can be resolved.
    """

    snapshot_id: int
    asset_symbol: str
    asset_name: str
    amount: Decimal
    asset_class: AssetClass = AssetClass.CRYPTO
    valuation_source: ValuationSource = ValuationSource.CMC
    value: Optional[Decimal] = None
    acquisition_date: Optional[date] = None
    acquisition_price: Optional[Decimal] = None
    notes: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self) -> None:
        if isinstance(self.asset_class, str):
            self.asset_class = AssetClass(self.asset_class)
        if isinstance(self.valuation_source, str):
            self.valuation_source = ValuationSource(self.valuation_source)
