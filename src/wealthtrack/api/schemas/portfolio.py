"""Pydantic schemas for portfolio valuation endpoints."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel

from wealthtrack.domain.models import AssetClass, LiabilityType, ValuationStatus


class ValuedHoldingResponse(BaseModel):
    """Response schema for one valued holding."""

    symbol: str
    name: str
    amount: Decimal
    asset_class: AssetClass
    status: ValuationStatus
    price: Optional[Decimal] = None
    value: Optional[Decimal] = None


class LiabilityValueResponse(BaseModel):
    """Response schema for one liability balance in a valuation."""

    liability_id: int
    liability_name: str
    liability_type: LiabilityType
    outstanding_amount: Decimal
    base_value: Decimal


class PortfolioValueResponse(BaseModel):
    """Response schema for a valued snapshot."""

    date: date
    currency: str
    total_value: Decimal
    holdings: list[ValuedHoldingResponse]
    absent_symbols: list[str]
    liabilities: list[LiabilityValueResponse] = []
    total_liabilities: Decimal = Decimal("0")
    net_worth: Decimal
