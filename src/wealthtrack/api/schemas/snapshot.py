"""Pydantic schemas for snapshot endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from wealthtrack.domain.models import AssetClass, LiabilityType, ValuationSource


class AssetCreateRequest(BaseModel):
    """Request schema for registering an asset."""

    symbol: str = Field(..., min_length=1, max_length=10)
    name: str = Field(..., min_length=1)
    asset_class: AssetClass = AssetClass.CRYPTO
    valuation_source: ValuationSource = ValuationSource.CMC
    external_id: Optional[str] = None
    currency: str = "EUR"


class AssetResponse(BaseModel):
    """Response schema for an asset."""

    symbol: str
    name: str
    asset_class: AssetClass
    valuation_source: ValuationSource
    external_id: Optional[str] = None
    currency: str


class SnapshotCreateRequest(BaseModel):
    """Request schema for creating a snapshot."""

    date: str = Field(..., description="YYYY-MM-DD")
    notes: Optional[str] = None


class SnapshotResponse(BaseModel):
    """Response schema for a snapshot."""

    id: int
    date: date
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class HoldingCreateRequest(BaseModel):
    """Request schema for adding a holding to a snapshot."""

    symbol: str = Field(..., min_length=1, max_length=20)
    amount: Decimal
    value: Optional[Decimal] = None
    notes: Optional[str] = None


class HoldingResponse(BaseModel):
    """Response schema for a holding."""

    asset_symbol: str
    asset_name: str
    amount: Decimal
    asset_class: AssetClass
    valuation_source: ValuationSource
    value: Optional[Decimal] = None
    notes: Optional[str] = None


class LiabilityCreateRequest(BaseModel):
    """Request schema for registering a liability."""

    name: str = Field(..., min_length=1)
    liability_type: LiabilityType = LiabilityType.LOAN
    original_amount: Decimal
    currency: str = "EUR"
    linked_asset_symbol: Optional[str] = None
    interest_rate: Optional[Decimal] = None
    start_date: Optional[str] = Field(None, description="YYYY-MM-DD")
    term_months: Optional[int] = Field(None, ge=1)
    notes: Optional[str] = None


class LiabilityResponse(BaseModel):
    """Response schema for a liability."""

    id: int
    name: str
    liability_type: LiabilityType
    original_amount: Decimal
    currency: str
    linked_asset_symbol: Optional[str] = None
    interest_rate: Optional[Decimal] = None
    start_date: Optional[date] = None
    term_months: Optional[int] = None
    is_active: bool
    notes: Optional[str] = None


class LiabilityBalanceCreateRequest(BaseModel):
    """Request schema for recording a liability balance in a snapshot."""

    liability_id: int
    outstanding_amount: Decimal
    value: Optional[Decimal] = None


class LiabilityBalanceResponse(BaseModel):
    """Response schema for a liability balance."""

    liability_id: int
    liability_name: str
    liability_type: LiabilityType
    outstanding_amount: Decimal
    value: Optional[Decimal] = None
