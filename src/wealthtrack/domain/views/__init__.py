"""View models for service outputs."""

from wealthtrack.domain.views.valuation import (
    ValuedHolding,
    ValuationReport,
    PriceLookupResult,
)
from wealthtrack.domain.views.property import PropertyWithEquity, RealEstateSummary
from wealthtrack.domain.views.allocation import (
    AllocationComparison,
    AllocationSummary,
    RebalancingAction,
    RebalancingSuggestion,
    TargetValidation,
)

__all__ = [
    "ValuedHolding",
    "ValuationReport",
    "PriceLookupResult",
    "PropertyWithEquity",
    "RealEstateSummary",
    "AllocationComparison",
    "AllocationSummary",
    "RebalancingAction",
    "RebalancingSuggestion",
    "TargetValidation",
]
