"""Pydantic schemas for API request/response."""

from wealthtrack.api.schemas.portfolio import (
    ValuedHoldingResponse,
    LiabilityValueResponse,
    PortfolioValueResponse,
)
from wealthtrack.api.schemas.allocation import (
    AllocationTargetRequest,
    SetAllocationTargetsRequest,
    AllocationTargetResponse,
    TargetValidationResponse,
    AllocationTargetsResponse,
    AllocationComparisonResponse,
    AllocationSummaryResponse,
    RebalancingActionResponse,
    RebalancingSuggestionResponse,
)
from wealthtrack.api.schemas.price import (
    RefreshPricesRequest,
    PriceResultResponse,
    RefreshPricesResponse,
    ManualPriceRequest,
    HistoricalRateResponse,
)
from wealthtrack.api.schemas.snapshot import (
    AssetCreateRequest,
    AssetResponse,
    SnapshotCreateRequest,
    SnapshotResponse,
    HoldingCreateRequest,
    HoldingResponse,
    LiabilityCreateRequest,
    LiabilityResponse,
    LiabilityBalanceCreateRequest,
    LiabilityBalanceResponse,
)
from wealthtrack.api.schemas.property import (
    MortgageCreateRequest,
    PropertyCreateRequest,
    PropertyUpdateRequest,
    PropertyValueRequest,
    PropertyResponse,
    RealEstateSummaryResponse,
)

__all__ = [
    "ValuedHoldingResponse",
    "LiabilityValueResponse",
    "PortfolioValueResponse",
    "AllocationTargetRequest",
    "SetAllocationTargetsRequest",
    "AllocationTargetResponse",
    "TargetValidationResponse",
    "AllocationTargetsResponse",
    "AllocationComparisonResponse",
    "AllocationSummaryResponse",
    "RebalancingActionResponse",
    "RebalancingSuggestionResponse",
    "RefreshPricesRequest",
    "PriceResultResponse",
    "RefreshPricesResponse",
    "ManualPriceRequest",
    "HistoricalRateResponse",
    "AssetCreateRequest",
    "AssetResponse",
    "SnapshotCreateRequest",
    "SnapshotResponse",
    "HoldingCreateRequest",
    "HoldingResponse",
    "LiabilityCreateRequest",
    "LiabilityResponse",
    "LiabilityBalanceCreateRequest",
    "LiabilityBalanceResponse",
    "MortgageCreateRequest",
    "PropertyCreateRequest",
    "PropertyUpdateRequest",
    "PropertyValueRequest",
    "PropertyResponse",
    "RealEstateSummaryResponse",
]
