"""Liability domain models."""

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from wealthtrack.domain.models.enums import LiabilityType


@dataclass
class Liability:
    """A debt (loan, mortgage, credit line), optionally linked to the asset it finances."""

    name: str
    liability_type: LiabilityType
    original_amount: Decimal
    currency: str = "EUR"
    linked_asset_symbol: Optional[str] = None
    interest_rate: Optional[Decimal] = None
    start_date: Optional[date] = None
    term_months: Optional[int] = None
    is_active: bool = True
    notes: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = field(default=None)

    def __post_init__(self) -> None:
        if isinstance(self.liability_type, str):
            self.liability_type = LiabilityType(self.liability_type)


@dataclass
class LiabilityBalance:
    """
    Outstanding amount of one liability within one snapshot.

    ``value`` is an optional stored base-currency value; when absent the
    outstanding amount is used as-is.
    """

    snapshot_id: int
    liability_id: int
    liability_name: str
    liability_type: LiabilityType
    outstanding_amount: Decimal
    value: Optional[Decimal] = None
    id: Optional[int] = None

    def __post_init__(self) -> None:
        if isinstance(self.liability_type, str):
            self.liability_type = LiabilityType(self.liability_type)

    @property
    def base_value(self) -> Decimal:
        return self.value if self.value is not None else self.outstanding_amount
