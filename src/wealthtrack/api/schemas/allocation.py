"""Pydantic schemas for allocation endpoints."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field

from wealthtrack.domain.models import RebalanceAction, TargetType


class AllocationTargetRequest(BaseModel):
    """Request schema for one allocation target."""

    target_key: str = Field(..., min_length=1, max_length=50)
    target_percentage: Decimal = Field(..., ge=0, le=100)
    target_type: TargetType = TargetType.ASSET
    tolerance_pct: Optional[Decimal] = Field(None, ge=0, le=100)
    notes: Optional[str] = None


class SetAllocationTargetsRequest(BaseModel):
    """Request schema for replacing the whole target set."""

    targets: list[AllocationTargetRequest]
    allow_invalid_sum: bool = False


class AllocationTargetResponse(BaseModel):
    """Response schema for a stored allocation target."""

    id: Optional[int] = None
    target_key: str
    target_type: TargetType
    target_percentage: Decimal
    tolerance_pct: Decimal
    notes: Optional[str] = None
    created_at: Optional[datetime] = None


class TargetValidationResponse(BaseModel):
    """Response schema for a target set validation."""

    valid: bool
    sum: Decimal
    errors: list[str]


class AllocationTargetsResponse(BaseModel):
    """Response schema for the target set."""

    targets: list[AllocationTargetResponse]
    validation: TargetValidationResponse
    remaining_percentage: Decimal


class AllocationComparisonResponse(BaseModel):
    """Response schema for one comparison row."""

    target_key: str
    target_type: TargetType
    display_name: str
    current_value: Decimal
    current_percentage: Decimal
    target_percentage: Decimal
    tolerance_pct: Decimal
    drift_percentage: Decimal
    drift_value: Decimal
    is_within_tolerance: bool


class AllocationSummaryResponse(BaseModel):
    """Response schema for an allocation comparison."""

    date: date
    total_value: Decimal
    currency: str
    allocations: list[AllocationComparisonResponse]
    has_targets: bool
    targets_sum_valid: bool


class RebalancingActionResponse(BaseModel):
    """Response schema for one rebalancing action."""

    target_key: str
    target_type: TargetType
    display_name: str
    action: RebalanceAction
    amount: Decimal
    current_percentage: Decimal
    target_percentage: Decimal


class RebalancingSuggestionResponse(BaseModel):
    """Response schema for rebalancing suggestions."""

    date: date
    total_value: Decimal
    currency: str
    is_balanced: bool
    actions: list[RebalancingActionResponse]
