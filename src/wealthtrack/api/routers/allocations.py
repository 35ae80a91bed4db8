"""Allocation target, comparison and rebalancing endpoints."""

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query

from wealthtrack.api.deps import (
    get_allocation_target_service,
    get_default_tolerance,
    get_portfolio_service,
)
from wealthtrack.api.schemas import (
    AllocationComparisonResponse,
    AllocationSummaryResponse,
    AllocationTargetResponse,
    AllocationTargetsResponse,
    RebalancingActionResponse,
    RebalancingSuggestionResponse,
    SetAllocationTargetsRequest,
    TargetValidationResponse,
)
from wealthtrack.core.exceptions import NoAllocationTargetsError, NoPortfolioDataError
from wealthtrack.domain.models import AllocationTarget
from wealthtrack.domain.views import TargetValidation
from wealthtrack.services import AllocationTargetService, PortfolioService

router = APIRouter(prefix="/allocations", tags=["allocations"])


def _targets_response(
    targets: list[AllocationTarget],
    validation: TargetValidation,
    remaining: Decimal,
) -> AllocationTargetsResponse:
    return AllocationTargetsResponse(
        targets=[
            AllocationTargetResponse(
                id=t.id,
                target_key=t.target_key,
                target_type=t.target_type,
                target_percentage=t.target_percentage,
                tolerance_pct=t.effective_tolerance,
                notes=t.notes,
                created_at=t.created_at,
            )
            for t in targets
        ],
        validation=TargetValidationResponse.model_validate(validation, from_attributes=True),
        remaining_percentage=remaining,
    )


@router.get("/targets", response_model=AllocationTargetsResponse)
def list_targets(
    service: AllocationTargetService = Depends(get_allocation_target_service),
) -> AllocationTargetsResponse:
    """List stored targets with their validation status."""
    return _targets_response(
        service.list_targets(),
        service.validate_targets(),
        service.calculate_remaining_percentage(),
    )


@router.put("/targets", response_model=AllocationTargetsResponse)
def set_targets(
    request: SetAllocationTargetsRequest,
    service: AllocationTargetService = Depends(get_allocation_target_service),
    default_tolerance: Decimal = Depends(get_default_tolerance),
) -> AllocationTargetsResponse:
    """Replace the whole target set."""
    targets = [
        AllocationTarget(
            target_key=t.target_key,
            target_percentage=t.target_percentage,
            target_type=t.target_type,
            tolerance_pct=t.tolerance_pct if t.tolerance_pct is not None else default_tolerance,
            notes=t.notes,
        )
        for t in request.targets
    ]
    saved, validation = service.set_targets(targets, allow_invalid_sum=request.allow_invalid_sum)
    return _targets_response(saved, validation, service.calculate_remaining_percentage())


@router.delete("/targets", status_code=204)
def clear_targets(
    service: AllocationTargetService = Depends(get_allocation_target_service),
) -> None:
    """Remove every target."""
    service.clear_targets()


@router.get("/compare", response_model=AllocationSummaryResponse)
def compare_allocations(
    date: Optional[str] = Query(None, description="Snapshot date YYYY-MM-DD"),
    targets: AllocationTargetService = Depends(get_allocation_target_service),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> AllocationSummaryResponse:
    """Compare current allocation against targets."""
    if not targets.has_targets():
        raise NoAllocationTargetsError()

    summary = portfolio.get_allocation_summary(date)
    if summary is None:
        raise NoPortfolioDataError(date)

    return AllocationSummaryResponse(
        date=summary.date,
        total_value=summary.total_value,
        currency=summary.currency,
        allocations=[
            AllocationComparisonResponse.model_validate(a, from_attributes=True)
            for a in summary.allocations
        ],
        has_targets=summary.has_targets,
        targets_sum_valid=summary.targets_sum_valid,
    )


@router.get("/rebalance", response_model=RebalancingSuggestionResponse)
def suggest_rebalancing(
    date: Optional[str] = Query(None, description="Snapshot date YYYY-MM-DD"),
    tolerance: Optional[Decimal] = Query(None, ge=0, le=100, description="Override every target's tolerance"),
    targets: AllocationTargetService = Depends(get_allocation_target_service),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> RebalancingSuggestionResponse:
    """Suggest buy/sell/hold actions to return to target."""
    if not targets.has_targets():
        raise NoAllocationTargetsError()

    suggestion = portfolio.get_rebalancing_suggestions(date, tolerance)
    if suggestion is None:
        raise NoPortfolioDataError(date)

    return RebalancingSuggestionResponse(
        date=suggestion.date,
        total_value=suggestion.total_value,
        currency=suggestion.currency,
        is_balanced=suggestion.is_balanced,
        actions=[
            RebalancingActionResponse.model_validate(a, from_attributes=True)
            for a in suggestion.actions
        ],
    )
