"""View models for allocation comparison and rebalancing outputs."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from wealthtrack.domain.models import TargetType, RebalanceAction


@dataclass
class AllocationComparison:
    """Current vs. target weight for one target key (derived, never persisted)."""

    target_key: str
    target_type: TargetType
    display_name: str
    current_value: Decimal
    current_percentage: Decimal
    target_percentage: Decimal
    tolerance_pct: Decimal
    drift_percentage: Decimal  # negative = underweight, positive = overweight
    drift_value: Decimal  # base-currency amount of the drift
    is_within_tolerance: bool


@dataclass
class AllocationSummary:
    """Allocation report for a priced snapshot."""

    date: date
    total_value: Decimal
    currency: str
    allocations: list[AllocationComparison] = field(default_factory=list)
    has_targets: bool = False
    targets_sum_valid: bool = False


@dataclass
class RebalancingAction:
    """Suggested trade for one allocation row."""

    target_key: str
    target_type: TargetType
    display_name: str
    action: RebalanceAction
    amount: Decimal  # in base currency
    current_percentage: Decimal
    target_percentage: Decimal


@dataclass
class RebalancingSuggestion:
    """Rebalancing report: one action per allocation row."""

    date: date
    total_value: Decimal
    currency: str
    actions: list[RebalancingAction] = field(default_factory=list)

    @property
    def is_balanced(self) -> bool:
        """True iff every action is hold."""
        return all(a.action == RebalanceAction.HOLD for a in self.actions)


@dataclass
class TargetValidation:
    """Result of validating a target set."""

    valid: bool
    sum: Decimal
    errors: list[str] = field(default_factory=list)
