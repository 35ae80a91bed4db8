"""Validation rules for allocation target sets."""

from decimal import Decimal
from typing import Iterable, Union

from wealthtrack.core.exceptions import (
    AllocationTargetsSumError,
    DuplicateAllocationTargetError,
    ValidationError,
)
from wealthtrack.domain.models import AllocationTarget
from wealthtrack.domain.views import TargetValidation

SUM_TOLERANCE = Decimal("0.01")
FULL_ALLOCATION = Decimal("100")


def target_sum(targets: Iterable[AllocationTarget]) -> Decimal:
    return sum((t.target_percentage for t in targets), Decimal("0"))


def check_target_sum(targets: list[AllocationTarget]) -> TargetValidation:
    """Check the sum only; never raises."""
    total = target_sum(targets)
    errors = []
    if abs(total - FULL_ALLOCATION) > SUM_TOLERANCE:
        errors.append(f"Allocation targets sum to {total:.2f}%, must equal 100%")
    return TargetValidation(valid=not errors, sum=total, errors=errors)


def validate_target_list(
    targets: list[AllocationTarget],
    allow_invalid_sum: bool = False,
) -> TargetValidation:
    """
    Validate a proposed target set before it is stored.

    Raises:
        DuplicateAllocationTargetError: two targets share a key.
        ValidationError: a key is empty or a percentage is out of range.
        AllocationTargetsSumError: the sum is off 100 by more than 0.01 and
            ``allow_invalid_sum`` is False.

    With ``allow_invalid_sum`` the sum problem is reported in the result
    instead of raised.
    """
    seen: set[str] = set()
    for target in targets:
        if not target.target_key or not target.target_key.strip():
            raise ValidationError("Allocation target key must not be empty", code="INVALID_ALLOCATION_TARGET")
        if target.target_key in seen:
            raise DuplicateAllocationTargetError(target.target_key)
        seen.add(target.target_key)
        _check_range(target)

    validation = check_target_sum(targets)
    if not validation.valid and not allow_invalid_sum:
        raise AllocationTargetsSumError(validation.sum)
    return validation


def calculate_remaining_percentage(
    targets: Iterable[Union[AllocationTarget, Decimal]],
) -> Decimal:
    """Percentage still unallocated, floored at 0."""
    total = Decimal("0")
    for target in targets:
        total += target.target_percentage if isinstance(target, AllocationTarget) else Decimal(str(target))
    return max(Decimal("0"), FULL_ALLOCATION - total)


def _check_range(target: AllocationTarget) -> None:
    if not Decimal("0") <= target.target_percentage <= FULL_ALLOCATION:
        raise ValidationError(
            f"Target for {target.target_key} must be between 0 and 100, got {target.target_percentage}",
            code="INVALID_ALLOCATION_TARGET",
        )
    if target.tolerance_pct is not None and not Decimal("0") <= target.tolerance_pct <= FULL_ALLOCATION:
        raise ValidationError(
            f"Tolerance for {target.target_key} must be between 0 and 100, got {target.tolerance_pct}",
            code="INVALID_ALLOCATION_TARGET",
        )
