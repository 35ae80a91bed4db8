"""Snapshot, holding and liability management."""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional, Union

from wealthtrack.core.exceptions import (
    AssetNotFoundError,
    ConflictError,
    HoldingNotFoundError,
    InvalidAmountError,
    LiabilityNotFoundError,
    SnapshotAlreadyExistsError,
    SnapshotNotFoundError,
    ValidationError,
)
from wealthtrack.core.timeutils import format_date, parse_date
from wealthtrack.domain.models import (
    Asset,
    AssetClass,
    Holding,
    Liability,
    LiabilityBalance,
    LiabilityType,
    Snapshot,
    ValuationSource,
)
from wealthtrack.repositories.protocols import LedgerRepository

logger = logging.getLogger(__name__)

MAX_SYMBOL_LENGTH = 10


class SnapshotService:
    """
    Records assets, dated snapshots and the holdings inside them.

    One snapshot per calendar date; one holding per asset per snapshot.
    """

    def __init__(self, ledger_repo: LedgerRepository):
        self._repo = ledger_repo

    def register_asset(
        self,
        symbol: str,
        name: str,
        asset_class: AssetClass = AssetClass.CRYPTO,
        valuation_source: ValuationSource = ValuationSource.CMC,
        external_id: Optional[str] = None,
        currency: str = "EUR",
    ) -> Asset:
        """Create an asset; the symbol must be new and 1-10 characters."""
        symbol = (symbol or "").strip().upper()
        if not symbol or len(symbol) > MAX_SYMBOL_LENGTH:
            raise ValidationError(
                f"Invalid symbol '{symbol}': must be 1-{MAX_SYMBOL_LENGTH} characters",
                code="INVALID_SYMBOL",
            )
        if self._repo.get_asset(symbol) is not None:
            raise ConflictError(f"Asset already exists: {symbol}", code="ASSET_ALREADY_EXISTS")

        asset = self._repo.create_asset(
            Asset(
                symbol=symbol,
                name=name,
                asset_class=asset_class,
                valuation_source=valuation_source,
                external_id=external_id,
                currency=currency,
            )
        )
        logger.info("Registered asset %s (%s)", asset.symbol, asset.asset_class.value)
        return asset

    def get_asset(self, symbol: str) -> Asset:
        asset = self._repo.get_asset(symbol.upper())
        if asset is None:
            raise AssetNotFoundError(symbol.upper())
        return asset

    def create_snapshot(self, snapshot_date: Union[str, date], notes: Optional[str] = None) -> Snapshot:
        """Create the snapshot for a date; raises if that date already has one."""
        day = parse_date(snapshot_date)
        existing = self._repo.get_snapshot_by_date(day)
        if existing is not None:
            raise SnapshotAlreadyExistsError(
                format_date(day), len(self._repo.list_holdings(existing.id))
            )
        snapshot = self._repo.create_snapshot(day, notes)
        logger.info("Created snapshot %s", format_date(day))
        return snapshot

    def get_snapshot(self, snapshot_date: Union[str, date]) -> Snapshot:
        day = parse_date(snapshot_date)
        snapshot = self._repo.get_snapshot_by_date(day)
        if snapshot is None:
            raise SnapshotNotFoundError(format_date(day))
        return snapshot

    def list_snapshots(self) -> list[Snapshot]:
        return self._repo.list_snapshots()

    def add_holding(
        self,
        snapshot_date: Union[str, date],
        symbol: str,
        amount,
        value: Optional[Decimal] = None,
        notes: Optional[str] = None,
    ) -> Holding:
        """
        Record a holding in an existing snapshot.

        Raises:
            InvalidAmountError: amount is not a positive number.
            SnapshotNotFoundError / AssetNotFoundError: unknown date or symbol.
            ConflictError: the asset already has a holding in that snapshot.
        """
        quantity = self._positive_amount(amount)
        snapshot = self.get_snapshot(snapshot_date)
        asset = self.get_asset(symbol)

        if self._repo.get_holding(snapshot.id, asset.symbol) is not None:
            raise ConflictError(
                f"Holding for {asset.symbol} already exists on {format_date(snapshot.date)}",
                code="HOLDING_ALREADY_EXISTS",
            )

        return self._repo.add_holding(
            Holding(
                snapshot_id=snapshot.id,
                asset_symbol=asset.symbol,
                asset_name=asset.name,
                amount=quantity,
                asset_class=asset.asset_class,
                valuation_source=asset.valuation_source,
                value=value,
                notes=notes,
            )
        )

    def get_holding(self, snapshot_date: Union[str, date], symbol: str) -> Holding:
        snapshot = self.get_snapshot(snapshot_date)
        holding = self._repo.get_holding(snapshot.id, symbol.upper())
        if holding is None:
            raise HoldingNotFoundError(symbol.upper(), format_date(snapshot.date))
        return holding

    def list_holdings(self, snapshot_date: Union[str, date]) -> list[Holding]:
        return self._repo.list_holdings(self.get_snapshot(snapshot_date).id)

    def register_liability(
        self,
        name: str,
        liability_type: LiabilityType,
        original_amount,
        currency: str = "EUR",
        linked_asset_symbol: Optional[str] = None,
        interest_rate: Optional[Decimal] = None,
        start_date: Optional[Union[str, date]] = None,
        term_months: Optional[int] = None,
        notes: Optional[str] = None,
    ) -> Liability:
        """Create a liability; a linked asset, when given, must exist."""
        name = (name or "").strip()
        if not name:
            raise ValidationError("Liability name must not be empty", code="INVALID_LIABILITY")
        principal = self._positive_amount(original_amount)
        linked = None
        if linked_asset_symbol:
            linked = self.get_asset(linked_asset_symbol).symbol

        liability = self._repo.create_liability(
            Liability(
                name=name,
                liability_type=liability_type,
                original_amount=principal,
                currency=currency.upper(),
                linked_asset_symbol=linked,
                interest_rate=interest_rate,
                start_date=parse_date(start_date) if start_date is not None else None,
                term_months=term_months,
                notes=notes,
            )
        )
        logger.info("Registered liability %s (%s)", liability.name, liability.liability_type.value)
        return liability

    def get_liability(self, liability_id: int) -> Liability:
        liability = self._repo.get_liability(liability_id)
        if liability is None:
            raise LiabilityNotFoundError(liability_id)
        return liability

    def list_liabilities(self, active_only: bool = True) -> list[Liability]:
        return self._repo.list_liabilities(active_only=active_only)

    def add_liability_balance(
        self,
        snapshot_date: Union[str, date],
        liability_id: int,
        outstanding_amount,
        value: Optional[Decimal] = None,
    ) -> LiabilityBalance:
        """
        Record what is still owed on a liability at a snapshot.

        A zero balance is allowed (paid off); negative balances are not.
        """
        outstanding = self._non_negative_amount(outstanding_amount)
        snapshot = self.get_snapshot(snapshot_date)
        liability = self.get_liability(liability_id)

        if any(b.liability_id == liability.id for b in self._repo.list_liability_balances(snapshot.id)):
            raise ConflictError(
                f"Balance for liability '{liability.name}' already exists on {format_date(snapshot.date)}",
                code="LIABILITY_BALANCE_ALREADY_EXISTS",
            )

        return self._repo.add_liability_balance(
            LiabilityBalance(
                snapshot_id=snapshot.id,
                liability_id=liability.id,
                liability_name=liability.name,
                liability_type=liability.liability_type,
                outstanding_amount=outstanding,
                value=value,
            )
        )

    def list_liability_balances(self, snapshot_date: Union[str, date]) -> list[LiabilityBalance]:
        return self._repo.list_liability_balances(self.get_snapshot(snapshot_date).id)

    @staticmethod
    def _positive_amount(amount) -> Decimal:
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError):
            raise InvalidAmountError(amount)
        if not value.is_finite() or value <= 0:
            raise InvalidAmountError(amount)
        return value

    @staticmethod
    def _non_negative_amount(amount) -> Decimal:
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError):
            raise InvalidAmountError(amount)
        if not value.is_finite() or value < 0:
            raise InvalidAmountError(amount)
        return value
