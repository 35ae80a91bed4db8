"""Asset domain model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from wealthtrack.domain.models.enums import AssetClass, ValuationSource


@dataclass
class Asset:
    """
    A priceable thing the portfolio can hold.

    The symbol is the immutable identity; everything else is metadata.
    """

    symbol: str
    name: str
    asset_class: AssetClass = AssetClass.CRYPTO
    valuation_source: ValuationSource = ValuationSource.CMC
    external_id: Optional[str] = None
    currency: str = "EUR"
    is_active: bool = True
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        self.symbol = self.symbol.upper()
        if isinstance(self.asset_class, str):
            self.asset_class = AssetClass(self.asset_class)
        if isinstance(self.valuation_source, str):
            self.valuation_source = ValuationSource(self.valuation_source)
