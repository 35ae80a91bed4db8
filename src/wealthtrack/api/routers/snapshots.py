"""Asset, liability, snapshot and holding endpoints."""

from fastapi import APIRouter, Depends

from wealthtrack.api.deps import get_snapshot_service
from wealthtrack.api.schemas import (
    AssetCreateRequest,
    AssetResponse,
    HoldingCreateRequest,
    HoldingResponse,
    LiabilityBalanceCreateRequest,
    LiabilityBalanceResponse,
    LiabilityCreateRequest,
    LiabilityResponse,
    SnapshotCreateRequest,
    SnapshotResponse,
)
from wealthtrack.services import SnapshotService

router = APIRouter(tags=["snapshots"])


@router.post("/assets", response_model=AssetResponse, status_code=201)
def register_asset(
    request: AssetCreateRequest,
    snapshots: SnapshotService = Depends(get_snapshot_service),
) -> AssetResponse:
    """Register a new asset."""
    asset = snapshots.register_asset(
        symbol=request.symbol,
        name=request.name,
        asset_class=request.asset_class,
        valuation_source=request.valuation_source,
        external_id=request.external_id,
        currency=request.currency,
    )
    return AssetResponse.model_validate(asset, from_attributes=True)


@router.get("/snapshots", response_model=list[SnapshotResponse])
def list_snapshots(
    snapshots: SnapshotService = Depends(get_snapshot_service),
) -> list[SnapshotResponse]:
    """List snapshots, newest first."""
    return [SnapshotResponse.model_validate(s, from_attributes=True) for s in snapshots.list_snapshots()]


@router.post("/snapshots", response_model=SnapshotResponse, status_code=201)
def create_snapshot(
    request: SnapshotCreateRequest,
    snapshots: SnapshotService = Depends(get_snapshot_service),
) -> SnapshotResponse:
    """Create the snapshot for a date."""
    snapshot = snapshots.create_snapshot(request.date, request.notes)
    return SnapshotResponse.model_validate(snapshot, from_attributes=True)


@router.post("/snapshots/{snapshot_date}/holdings", response_model=HoldingResponse, status_code=201)
def add_holding(
    snapshot_date: str,
    request: HoldingCreateRequest,
    snapshots: SnapshotService = Depends(get_snapshot_service),
) -> HoldingResponse:
    """Add a holding to an existing snapshot."""
    holding = snapshots.add_holding(
        snapshot_date,
        request.symbol,
        request.amount,
        value=request.value,
        notes=request.notes,
    )
    return HoldingResponse.model_validate(holding, from_attributes=True)


@router.get("/snapshots/{snapshot_date}/holdings", response_model=list[HoldingResponse])
def list_holdings(
    snapshot_date: str,
    snapshots: SnapshotService = Depends(get_snapshot_service),
) -> list[HoldingResponse]:
    """List the holdings recorded in a snapshot."""
    return [
        HoldingResponse.model_validate(h, from_attributes=True)
        for h in snapshots.list_holdings(snapshot_date)
    ]


@router.post("/liabilities", response_model=LiabilityResponse, status_code=201)
def register_liability(
    request: LiabilityCreateRequest,
    snapshots: SnapshotService = Depends(get_snapshot_service),
) -> LiabilityResponse:
    """Register a loan, mortgage or credit line."""
    liability = snapshots.register_liability(
        name=request.name,
        liability_type=request.liability_type,
        original_amount=request.original_amount,
        currency=request.currency,
        linked_asset_symbol=request.linked_asset_symbol,
        interest_rate=request.interest_rate,
        start_date=request.start_date,
        term_months=request.term_months,
        notes=request.notes,
    )
    return LiabilityResponse.model_validate(liability, from_attributes=True)


@router.get("/liabilities", response_model=list[LiabilityResponse])
def list_liabilities(
    active_only: bool = True,
    snapshots: SnapshotService = Depends(get_snapshot_service),
) -> list[LiabilityResponse]:
    return [
        LiabilityResponse.model_validate(liability, from_attributes=True)
        for liability in snapshots.list_liabilities(active_only=active_only)
    ]


@router.post(
    "/snapshots/{snapshot_date}/liabilities",
    response_model=LiabilityBalanceResponse,
    status_code=201,
)
def add_liability_balance(
    snapshot_date: str,
    request: LiabilityBalanceCreateRequest,
    snapshots: SnapshotService = Depends(get_snapshot_service),
) -> LiabilityBalanceResponse:
    """Record the outstanding amount of a liability in a snapshot."""
    balance = snapshots.add_liability_balance(
        snapshot_date,
        request.liability_id,
        request.outstanding_amount,
        value=request.value,
    )
    return LiabilityBalanceResponse.model_validate(balance, from_attributes=True)


@router.get("/snapshots/{snapshot_date}/liabilities", response_model=list[LiabilityBalanceResponse])
def list_liability_balances(
    snapshot_date: str,
    snapshots: SnapshotService = Depends(get_snapshot_service),
) -> list[LiabilityBalanceResponse]:
    return [
        LiabilityBalanceResponse.model_validate(b, from_attributes=True)
        for b in snapshots.list_liability_balances(snapshot_date)
    ]
