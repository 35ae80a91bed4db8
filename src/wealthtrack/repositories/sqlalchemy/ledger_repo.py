"""SQLAlchemy implementation of LedgerRepository."""

from datetime import date
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session, joinedload

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
from wealthtrack.repositories.sqlalchemy.orm_models import (
    AssetORM,
    SnapshotORM,
    HoldingORM,
    AllocationTargetORM,
    LiabilityORM,
    LiabilityBalanceORM,
    PropertyDetailsORM,
)


def _dec(value) -> Optional[Decimal]:
    return Decimal(str(value)) if value is not None else None


class SqlAlchemyLedgerRepository:
    """SQLAlchemy-backed ledger repository."""

    def __init__(self, db: Session):
        self._db = db

    # Assets

    def create_asset(self, asset: Asset) -> Asset:
        """Persist a new asset."""
        orm_asset = AssetORM(
            symbol=asset.symbol,
            name=asset.name,
            asset_class=asset.asset_class,
            valuation_source=asset.valuation_source,
            external_id=asset.external_id,
            currency=asset.currency,
            is_active=asset.is_active,
        )
        self._db.add(orm_asset)
        self._db.commit()
        self._db.refresh(orm_asset)
        return self._asset_to_domain(orm_asset)

    def get_asset(self, symbol: str) -> Optional[Asset]:
        """Retrieve asset by symbol."""
        orm_asset = self._find_asset(symbol)
        return self._asset_to_domain(orm_asset) if orm_asset else None

    def list_assets(
        self, asset_class: Optional[AssetClass] = None, active_only: bool = False
    ) -> list[Asset]:
        """List assets ordered by symbol, optionally of one class."""
        query = self._db.query(AssetORM)
        if asset_class is not None:
            query = query.filter(AssetORM.asset_class == asset_class)
        if active_only:
            query = query.filter(AssetORM.is_active.is_(True))
        return [self._asset_to_domain(a) for a in query.order_by(AssetORM.symbol).all()]

    def update_asset_name(self, symbol: str, name: str) -> Optional[Asset]:
        """Rename an asset; None if the symbol is unknown."""
        orm_asset = self._find_asset(symbol)
        if orm_asset is None:
            return None
        orm_asset.name = name
        self._db.commit()
        self._db.refresh(orm_asset)
        return self._asset_to_domain(orm_asset)

    # Property details

    def get_property_details(self, symbol: str) -> Optional[PropertyDetails]:
        """Retrieve the property details of a REAL_ESTATE asset."""
        orm_details = self._find_property_details(symbol)
        return self._details_to_domain(orm_details) if orm_details else None

    def save_property_details(self, details: PropertyDetails) -> PropertyDetails:
        """Insert or replace the property details of an asset."""
        orm_asset = self._find_asset(details.asset_symbol)
        if orm_asset is None:
            raise ValueError(f"Asset not found: {details.asset_symbol}")

        orm_details = self._find_property_details(details.asset_symbol)
        if orm_details is None:
            orm_details = PropertyDetailsORM(asset_id=orm_asset.id)
            self._db.add(orm_details)
        orm_details.property_type = details.property_type
        orm_details.address = details.address
        orm_details.city = details.city
        orm_details.country = details.country
        orm_details.purchase_date = details.purchase_date
        orm_details.purchase_price = details.purchase_price
        orm_details.square_meters = details.square_meters
        orm_details.rooms = details.rooms
        orm_details.rental_income = details.rental_income
        self._db.commit()
        self._db.refresh(orm_details)
        return self._details_to_domain(orm_details)

    # Snapshots

    def create_snapshot(self, snapshot_date: date, notes: Optional[str] = None) -> Snapshot:
        """Persist a new snapshot."""
        orm_snapshot = SnapshotORM(date=snapshot_date, notes=notes)
        self._db.add(orm_snapshot)
        self._db.commit()
        self._db.refresh(orm_snapshot)
        return self._snapshot_to_domain(orm_snapshot)

    def get_snapshot_by_date(self, snapshot_date: date) -> Optional[Snapshot]:
        """Retrieve the snapshot for a calendar date."""
        orm_snapshot = (
            self._db.query(SnapshotORM).filter(SnapshotORM.date == snapshot_date).first()
        )
        return self._snapshot_to_domain(orm_snapshot) if orm_snapshot else None

    def get_latest_snapshot(self) -> Optional[Snapshot]:
        """Retrieve the most recent snapshot."""
        orm_snapshot = self._db.query(SnapshotORM).order_by(SnapshotORM.date.desc()).first()
        return self._snapshot_to_domain(orm_snapshot) if orm_snapshot else None

    def list_snapshots(self) -> list[Snapshot]:
        """List snapshots, newest first."""
        orm_snapshots = self._db.query(SnapshotORM).order_by(SnapshotORM.date.desc()).all()
        return [self._snapshot_to_domain(s) for s in orm_snapshots]

    # Holdings

    def add_holding(self, holding: Holding) -> Holding:
        """Persist a holding (at most one per asset per snapshot)."""
        orm_asset = self._find_asset(holding.asset_symbol)
        if orm_asset is None:
            raise ValueError(f"Asset not found: {holding.asset_symbol}")

        orm_holding = HoldingORM(
            snapshot_id=holding.snapshot_id,
            asset_id=orm_asset.id,
            amount=holding.amount,
            value=holding.value,
            acquisition_date=holding.acquisition_date,
            acquisition_price=holding.acquisition_price,
            notes=holding.notes,
        )
        self._db.add(orm_holding)
        self._db.commit()
        self._db.refresh(orm_holding)
        return self._holding_to_domain(orm_holding)

    def get_holding(self, snapshot_id: int, symbol: str) -> Optional[Holding]:
        """Retrieve a snapshot's holding for one asset."""
        orm_holding = (
            self._db.query(HoldingORM)
            .join(AssetORM)
            .options(joinedload(HoldingORM.asset))
            .filter(
                HoldingORM.snapshot_id == snapshot_id,
                AssetORM.symbol == symbol.upper(),
            )
            .first()
        )
        return self._holding_to_domain(orm_holding) if orm_holding else None

    def list_holdings(self, snapshot_id: int) -> list[Holding]:
        """List a snapshot's holdings joined with asset metadata."""
        orm_holdings = (
            self._db.query(HoldingORM)
            .join(AssetORM)
            .options(joinedload(HoldingORM.asset))
            .filter(HoldingORM.snapshot_id == snapshot_id)
            .order_by(AssetORM.symbol)
            .all()
        )
        return [self._holding_to_domain(h) for h in orm_holdings]

    # Liabilities

    def create_liability(self, liability: Liability) -> Liability:
        """Persist a new liability."""
        orm_liability = LiabilityORM(
            name=liability.name,
            liability_type=liability.liability_type,
            original_amount=liability.original_amount,
            currency=liability.currency,
            linked_asset_symbol=liability.linked_asset_symbol,
            interest_rate=liability.interest_rate,
            start_date=liability.start_date,
            term_months=liability.term_months,
            is_active=liability.is_active,
            notes=liability.notes,
        )
        self._db.add(orm_liability)
        self._db.commit()
        self._db.refresh(orm_liability)
        return self._liability_to_domain(orm_liability)

    def get_liability(self, liability_id: int) -> Optional[Liability]:
        """Retrieve a liability by id."""
        orm_liability = self._db.get(LiabilityORM, liability_id)
        return self._liability_to_domain(orm_liability) if orm_liability else None

    def list_liabilities(self, active_only: bool = True) -> list[Liability]:
        """List liabilities ordered by name."""
        query = self._db.query(LiabilityORM)
        if active_only:
            query = query.filter(LiabilityORM.is_active.is_(True))
        return [self._liability_to_domain(row) for row in query.order_by(LiabilityORM.name).all()]

    def find_linked_liability(
        self, symbol: str, liability_type: Optional[LiabilityType] = None
    ) -> Optional[Liability]:
        """First active liability linked to an asset, optionally of one type."""
        query = self._db.query(LiabilityORM).filter(
            LiabilityORM.linked_asset_symbol == symbol.upper(),
            LiabilityORM.is_active.is_(True),
        )
        if liability_type is not None:
            query = query.filter(LiabilityORM.liability_type == liability_type)
        orm_liability = query.order_by(LiabilityORM.id).first()
        return self._liability_to_domain(orm_liability) if orm_liability else None

    def get_latest_liability_balance(self, liability_id: int) -> Optional[LiabilityBalance]:
        """Balance of a liability in the most recent snapshot that records it."""
        orm_balance = (
            self._db.query(LiabilityBalanceORM)
            .join(SnapshotORM)
            .options(joinedload(LiabilityBalanceORM.liability))
            .filter(LiabilityBalanceORM.liability_id == liability_id)
            .order_by(SnapshotORM.date.desc())
            .first()
        )
        return self._balance_to_domain(orm_balance) if orm_balance else None

    def add_liability_balance(self, balance: LiabilityBalance) -> LiabilityBalance:
        """Persist a balance (at most one per liability per snapshot)."""
        orm_balance = LiabilityBalanceORM(
            snapshot_id=balance.snapshot_id,
            liability_id=balance.liability_id,
            outstanding_amount=balance.outstanding_amount,
            value=balance.value,
        )
        self._db.add(orm_balance)
        self._db.commit()
        self._db.refresh(orm_balance)
        return self._balance_to_domain(orm_balance)

    def list_liability_balances(self, snapshot_id: int) -> list[LiabilityBalance]:
        """List a snapshot's liability balances joined with liability metadata."""
        orm_balances = (
            self._db.query(LiabilityBalanceORM)
            .join(LiabilityORM)
            .options(joinedload(LiabilityBalanceORM.liability))
            .filter(LiabilityBalanceORM.snapshot_id == snapshot_id)
            .order_by(LiabilityORM.name)
            .all()
        )
        return [self._balance_to_domain(b) for b in orm_balances]

    # Allocation targets

    def list_allocation_targets(self) -> list[AllocationTarget]:
        """List targets, largest percentage first."""
        orm_targets = (
            self._db.query(AllocationTargetORM)
            .order_by(AllocationTargetORM.target_percentage.desc(), AllocationTargetORM.id)
            .all()
        )
        return [self._target_to_domain(t) for t in orm_targets]

    def replace_allocation_targets(self, targets: list[AllocationTarget]) -> list[AllocationTarget]:
        """Replace the full target set in a single transaction."""
        try:
            self._db.query(AllocationTargetORM).delete()
            for target in targets:
                self._db.add(
                    AllocationTargetORM(
                        target_type=target.target_type,
                        target_key=target.target_key,
                        target_percentage=target.target_percentage,
                        tolerance_pct=target.tolerance_pct,
                        notes=target.notes,
                    )
                )
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
        return self.list_allocation_targets()

    def _find_asset(self, symbol: str) -> Optional[AssetORM]:
        return self._db.query(AssetORM).filter(AssetORM.symbol == symbol.upper()).first()

    def _find_property_details(self, symbol: str) -> Optional[PropertyDetailsORM]:
        return (
            self._db.query(PropertyDetailsORM)
            .join(AssetORM)
            .filter(AssetORM.symbol == symbol.upper())
            .first()
        )

    @staticmethod
    def _asset_to_domain(orm: AssetORM) -> Asset:
        """Convert ORM asset to domain model."""
        return Asset(
            symbol=orm.symbol,
            name=orm.name,
            asset_class=orm.asset_class,
            valuation_source=orm.valuation_source,
            external_id=orm.external_id,
            currency=orm.currency,
            is_active=bool(orm.is_active),
            created_at=orm.created_at,
        )

    @staticmethod
    def _snapshot_to_domain(orm: SnapshotORM) -> Snapshot:
        """Convert ORM snapshot to domain model."""
        return Snapshot(
            id=orm.id,
            date=orm.date,
            notes=orm.notes,
            created_at=orm.created_at,
        )

    @staticmethod
    def _holding_to_domain(orm: HoldingORM) -> Holding:
        """Convert ORM holding (with its asset) to domain model."""
        return Holding(
            id=orm.id,
            snapshot_id=orm.snapshot_id,
            asset_symbol=orm.asset.symbol,
            asset_name=orm.asset.name,
            asset_class=orm.asset.asset_class,
            valuation_source=orm.asset.valuation_source,
            amount=_dec(orm.amount) or Decimal("0"),
            value=_dec(orm.value),
            acquisition_date=orm.acquisition_date,
            acquisition_price=_dec(orm.acquisition_price),
            notes=orm.notes,
        )

    @staticmethod
    def _target_to_domain(orm: AllocationTargetORM) -> AllocationTarget:
        """Convert ORM target to domain model."""
        return AllocationTarget(
            id=orm.id,
            target_type=orm.target_type,
            target_key=orm.target_key,
            target_percentage=_dec(orm.target_percentage),
            tolerance_pct=_dec(orm.tolerance_pct),
            notes=orm.notes,
            created_at=orm.created_at,
        )

    @staticmethod
    def _liability_to_domain(orm: LiabilityORM) -> Liability:
        return Liability(
            id=orm.id,
            name=orm.name,
            liability_type=orm.liability_type,
            original_amount=_dec(orm.original_amount) or Decimal("0"),
            currency=orm.currency,
            linked_asset_symbol=orm.linked_asset_symbol,
            interest_rate=_dec(orm.interest_rate),
            start_date=orm.start_date,
            term_months=orm.term_months,
            is_active=bool(orm.is_active),
            notes=orm.notes,
            created_at=orm.created_at,
        )

    @staticmethod
    def _balance_to_domain(orm: LiabilityBalanceORM) -> LiabilityBalance:
        return LiabilityBalance(
            id=orm.id,
            snapshot_id=orm.snapshot_id,
            liability_id=orm.liability_id,
            liability_name=orm.liability.name,
            liability_type=orm.liability.liability_type,
            outstanding_amount=_dec(orm.outstanding_amount) or Decimal("0"),
            value=_dec(orm.value),
        )

    @staticmethod
    def _details_to_domain(orm: PropertyDetailsORM) -> PropertyDetails:
        return PropertyDetails(
            asset_symbol=orm.asset.symbol,
            property_type=orm.property_type,
            address=orm.address,
            city=orm.city,
            country=orm.country,
            purchase_date=orm.purchase_date,
            purchase_price=_dec(orm.purchase_price),
            square_meters=_dec(orm.square_meters),
            rooms=orm.rooms,
            rental_income=_dec(orm.rental_income),
        )
