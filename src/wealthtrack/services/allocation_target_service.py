"""Allocation target management."""

import logging
from decimal import Decimal

from wealthtrack.core.exceptions import NoAllocationTargetsError
from wealthtrack.domain.models import AllocationTarget, TargetType
from wealthtrack.domain.views import TargetValidation
from wealthtrack.repositories.protocols import LedgerRepository
from wealthtrack.services import target_validator

logger = logging.getLogger(__name__)


class AllocationTargetService:
    """
    Reads and replaces the allocation target set.

    The set is only ever replaced as a whole, after validation.
    """

    def __init__(self, ledger_repo: LedgerRepository):
        self._repo = ledger_repo

    def list_targets(self) -> list[AllocationTarget]:
        return self._repo.list_allocation_targets()

    def has_targets(self) -> bool:
        return bool(self._repo.list_allocation_targets())

    def validate_targets(self) -> TargetValidation:
        """Check the stored set; an empty set is reported invalid."""
        targets = self._repo.list_allocation_targets()
        if not targets:
            return TargetValidation(valid=False, sum=Decimal("0"), errors=["No allocation targets set"])
        return target_validator.check_target_sum(targets)

    def set_targets(
        self,
        targets: list[AllocationTarget],
        allow_invalid_sum: bool = False,
    ) -> tuple[list[AllocationTarget], TargetValidation]:
        """
        Validate and atomically replace the whole target set.

        Asset keys are upper-cased before validation, so "btc" and "BTC"
        collide. Nothing is written if validation fails.
        """
        normalized = [self._normalize(t) for t in targets]
        validation = target_validator.validate_target_list(normalized, allow_invalid_sum)

        saved = self._repo.replace_allocation_targets(normalized)
        logger.info("Replaced allocation targets: %d targets, sum %s%%", len(saved), validation.sum)
        return saved, validation

    def clear_targets(self) -> None:
        if not self._repo.list_allocation_targets():
            raise NoAllocationTargetsError()
        self._repo.replace_allocation_targets([])
        logger.info("Cleared allocation targets")

    def calculate_remaining_percentage(self) -> Decimal:
        return target_validator.calculate_remaining_percentage(self._repo.list_allocation_targets())

    @staticmethod
    def _normalize(target: AllocationTarget) -> AllocationTarget:
        key = target.target_key.strip().upper()
        return AllocationTarget(
            target_key=key,
            target_percentage=target.target_percentage,
            target_type=target.target_type or TargetType.ASSET,
            tolerance_pct=target.tolerance_pct,
            notes=target.notes,
        )
