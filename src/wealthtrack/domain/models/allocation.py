"""Allocation target domain models."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from wealthtrack.domain.models.enums import TargetType

# Wildcard key: every holding without an explicit target
OTHER_KEY = "OTHER"

DEFAULT_TOLERANCE_PCT = Decimal("2")


@dataclass
class AllocationTarget:
    """Desired percentage allocation for an asset, asset class or the OTHER bucket."""

    target_key: str
    target_percentage: Decimal
    target_type: TargetType = TargetType.ASSET
    tolerance_pct: Optional[Decimal] = None
    notes: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.target_type, str):
            self.target_type = TargetType(self.target_type)
        if not isinstance(self.target_percentage, Decimal):
            self.target_percentage = Decimal(str(self.target_percentage))
        if self.tolerance_pct is not None and not isinstance(self.tolerance_pct, Decimal):
            self.tolerance_pct = Decimal(str(self.tolerance_pct))

    @property
    def is_wildcard(self) -> bool:
        """Return True for the OTHER bucket (an asset-class target on OTHER is a plain class target)."""
        return self.target_type == TargetType.ASSET and self.target_key == OTHER_KEY

    @property
    def effective_tolerance(self) -> Decimal:
        """Tolerance in percentage points, defaulting to 2."""
        if self.tolerance_pct is None:
            return DEFAULT_TOLERANCE_PCT
        return self.tolerance_pct
