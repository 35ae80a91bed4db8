"""Domain layer - pure business models with no external dependencies."""

from wealthtrack.domain.models import (
    Asset,
    Snapshot,
    Holding,
    HistoricalRate,
    CachedRate,
    AllocationTarget,
    AssetClass,
    ValuationSource,
    TargetType,
)

__all__ = [
    "Asset",
    "Snapshot",
    "Holding",
    "HistoricalRate",
    "CachedRate",
    "AllocationTarget",
    "AssetClass",
    "ValuationSource",
    "TargetType",
]
