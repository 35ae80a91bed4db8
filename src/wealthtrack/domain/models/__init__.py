"""Domain models package."""

from wealthtrack.domain.models.enums import (
    AssetClass,
    ValuationSource,
    TargetType,
    ValuationStatus,
    RebalanceAction,
    LiabilityType,
    PropertyType,
)
from wealthtrack.domain.models.asset import Asset
from wealthtrack.domain.models.snapshot import Snapshot, Holding
from wealthtrack.domain.models.liability import Liability, LiabilityBalance
from wealthtrack.domain.models.property import MortgageInput, PropertyDetails
from wealthtrack.domain.models.rate import HistoricalRate, CachedRate, SaveRateInput
from wealthtrack.domain.models.allocation import (
    AllocationTarget,
    OTHER_KEY,
    DEFAULT_TOLERANCE_PCT,
)

__all__ = [
    "AssetClass",
    "ValuationSource",
    "TargetType",
    "ValuationStatus",
    "RebalanceAction",
    "LiabilityType",
    "PropertyType",
    "Asset",
    "Snapshot",
    "Holding",
    "Liability",
    "LiabilityBalance",
    "PropertyDetails",
    "MortgageInput",
    "HistoricalRate",
    "CachedRate",
    "SaveRateInput",
    "AllocationTarget",
    "OTHER_KEY",
    "DEFAULT_TOLERANCE_PCT",
]
