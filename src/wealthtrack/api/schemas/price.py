"""Pydantic schemas for price endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class RefreshPricesRequest(BaseModel):
    """Request schema for a forced price refresh."""

    symbols: list[str] = Field(..., min_length=1)


class PriceResultResponse(BaseModel):
    """Response schema for one symbol's price lookup."""

    symbol: str
    price: Optional[Decimal] = None
    error: Optional[str] = None
    from_cache: bool = False


class RefreshPricesResponse(BaseModel):
    """Response schema for a price refresh."""

    results: list[PriceResultResponse]
    succeeded: int
    failed: int


class ManualPriceRequest(BaseModel):
    """Request schema for a manual price override."""

    symbol: str = Field(..., min_length=1, max_length=10)
    date: str = Field(..., description="YYYY-MM-DD")
    price: Decimal


class HistoricalRateResponse(BaseModel):
    """Response schema for a recorded rate."""

    asset_symbol: str
    base_currency: str
    price: Decimal
    timestamp: datetime
    source: str
