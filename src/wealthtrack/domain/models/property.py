"""Real-estate property models."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from wealthtrack.domain.models.enums import PropertyType


@dataclass
class PropertyDetails:
    """Descriptive data of a REAL_ESTATE asset, keyed by the asset symbol."""

    asset_symbol: str
    property_type: PropertyType = PropertyType.PRIMARY_RESIDENCE
    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    purchase_date: Optional[date] = None
    purchase_price: Optional[Decimal] = None
    square_meters: Optional[Decimal] = None
    rooms: Optional[int] = None
    rental_income: Optional[Decimal] = None

    def __post_init__(self) -> None:
        self.asset_symbol = self.asset_symbol.upper()
        if isinstance(self.property_type, str):
            self.property_type = PropertyType(self.property_type)


@dataclass
class MortgageInput:
    """Mortgage to create alongside a new property."""

    name: str
    original_amount: Decimal
    outstanding_amount: Decimal
    interest_rate: Optional[Decimal] = None
    start_date: Optional[date] = None
    term_months: Optional[int] = None
