"""Ledger repository protocol: assets, properties, snapshots, holdings, liabilities and allocation targets."""

from datetime import date
from typing import Protocol, Optional

from wealthtrack.domain.models import (
    Asset,
    Snapshot,
    Holding,
    AllocationTarget,
    AssetClass,
    Liability,
    LiabilityBalance,
    LiabilityType,
    PropertyDetails,
)


class LedgerRepository(Protocol):
    """Interface for portfolio ledger data access."""

    # Assets
    def create_asset(self, asset: Asset) -> Asset:
        """Persist a new asset."""
        ...

    def get_asset(self, symbol: str) -> Optional[Asset]:
        """Retrieve asset by symbol."""
        ...

    def list_assets(
        self, asset_class: Optional[AssetClass] = None, active_only: bool = False
    ) -> list[Asset]:
        """List assets ordered by symbol, optionally of one class."""
        ...

    def update_asset_name(self, symbol: str, name: str) -> Optional[Asset]:
        """Rename an asset; None if the symbol is unknown."""
        ...

    # Property details
    def get_property_details(self, symbol: str) -> Optional[PropertyDetails]:
        """Retrieve the property details of a REAL_ESTATE asset."""
        ...

    def save_property_details(self, details: PropertyDetails) -> PropertyDetails:
        """Insert or replace the property details of an asset."""
        ...

    # Snapshots
    def create_snapshot(self, snapshot_date: date, notes: Optional[str] = None) -> Snapshot:
        """Persist a new snapshot."""
        ...

    def get_snapshot_by_date(self, snapshot_date: date) -> Optional[Snapshot]:
        """Retrieve the snapshot for a calendar date."""
        ...

    def get_latest_snapshot(self) -> Optional[Snapshot]:
        """Retrieve the most recent snapshot."""
        ...

    def list_snapshots(self) -> list[Snapshot]:
        """List snapshots, newest first."""
        ...

    # Holdings
    def add_holding(self, holding: Holding) -> Holding:
        """Persist a holding (at most one per asset per snapshot)."""
        ...

    def get_holding(self, snapshot_id: int, symbol: str) -> Optional[Holding]:
        """Retrieve a snapshot's holding for one asset."""
        ...

    def list_holdings(self, snapshot_id: int) -> list[Holding]:
        """List a snapshot's holdings joined with asset metadata."""
        ...

    # Liabilities
    def create_liability(self, liability: Liability) -> Liability:
        """Persist a new liability."""
        ...

    def get_liability(self, liability_id: int) -> Optional[Liability]:
        """Retrieve a liability by id."""
        ...

    def list_liabilities(self, active_only: bool = True) -> list[Liability]:
        """List liabilities ordered by name."""
        ...

    def find_linked_liability(
        self, symbol: str, liability_type: Optional[LiabilityType] = None
    ) -> Optional[Liability]:
        """First active liability linked to an asset, optionally of one type."""
        ...

    def get_latest_liability_balance(self, liability_id: int) -> Optional[LiabilityBalance]:
        """Balance of a liability in the most recent snapshot that records it."""
        ...

    def add_liability_balance(self, balance: LiabilityBalance) -> LiabilityBalance:
        """Persist a balance (at most one per liability per snapshot)."""
        ...

    def list_liability_balances(self, snapshot_id: int) -> list[LiabilityBalance]:
        """List a snapshot's liability balances."""
        ...

    # Allocation targets
    def list_allocation_targets(self) -> list[AllocationTarget]:
        """List targets, largest percentage first."""
        ...

    def replace_allocation_targets(self, targets: list[AllocationTarget]) -> list[AllocationTarget]:
        """Replace the full target set atomically (all or nothing)."""
        ...
