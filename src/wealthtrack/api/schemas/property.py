"""Pydantic schemas for real-estate property endpoints."""

from datetime import date
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from wealthtrack.domain.models import PropertyType


class PropertyDetailsFields(BaseModel):
    """Descriptive fields shared by create and update requests."""

    address: Optional[str] = None
    city: Optional[str] = None
    country: Optional[str] = None
    purchase_date: Optional[date] = None
    purchase_price: Optional[Decimal] = None
    square_meters: Optional[Decimal] = None
    rooms: Optional[int] = Field(None, ge=0)
    rental_income: Optional[Decimal] = None


class MortgageCreateRequest(BaseModel):
    """Mortgage created alongside a property."""

    name: str = Field(..., min_length=1)
    original_amount: Decimal
    outstanding_amount: Decimal
    interest_rate: Optional[Decimal] = None
    start_date: Optional[date] = None
    term_months: Optional[int] = Field(None, ge=1)


class PropertyCreateRequest(PropertyDetailsFields):
    """Request schema for registering a property."""

    name: str = Field(..., min_length=1)
    property_type: PropertyType = PropertyType.PRIMARY_RESIDENCE
    current_value: Decimal
    valuation_date: Optional[str] = Field(None, description="YYYY-MM-DD")
    currency: Optional[str] = None
    mortgage: Optional[MortgageCreateRequest] = None


class PropertyUpdateRequest(PropertyDetailsFields):
    """Partial update; only fields that are sent are changed."""

    name: Optional[str] = None
    property_type: Optional[PropertyType] = None


class PropertyValueRequest(BaseModel):
    """Request schema for recording a new valuation."""

    value: Decimal
    valuation_date: Optional[str] = Field(None, description="YYYY-MM-DD")


class PropertyResponse(PropertyDetailsFields):
    """Response schema for a property with its equity."""

    symbol: str
    name: str
    currency: str
    property_type: PropertyType
    current_value: Decimal
    mortgage_id: Optional[int] = None
    mortgage_balance: Optional[Decimal] = None
    equity: Decimal
    ltv_percentage: Optional[Decimal] = None


class RealEstateSummaryResponse(BaseModel):
    """Response schema for the real-estate totals."""

    property_count: int
    total_property_value: Decimal
    total_mortgage_balance: Decimal
    total_equity: Decimal
    properties: list[PropertyResponse]
