"""SQLAlchemy ORM model definitions."""

from datetime import datetime

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Date,
    DateTime,
    Enum as SqlEnum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from wealthtrack.repositories.sqlalchemy.database import Base
from wealthtrack.domain.models.enums import (
    AssetClass,
    LiabilityType,
    PropertyType,
    TargetType,
    ValuationSource,
)


class AssetORM(Base):
    """SQLAlchemy model for Asset."""

    __tablename__ = "assets"

    id = Column(Integer, primary_key=True, autoincrement=True)
    symbol = Column(String(20), unique=True, nullable=False, index=True)
    name = Column(String(255), nullable=False)
    asset_class = Column(SqlEnum(AssetClass), nullable=False, default=AssetClass.CRYPTO)
    valuation_source = Column(
        SqlEnum(ValuationSource), nullable=False, default=ValuationSource.CMC
    )
    external_id = Column(String(64), nullable=True)
    currency = Column(String(3), nullable=False, default="EUR")
    is_active = Column(Boolean, default=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class PropertyDetailsORM(Base):
    """SQLAlchemy model for PropertyDetails (one row per REAL_ESTATE asset)."""

    __tablename__ = "property_details"

    id = Column(Integer, primary_key=True, autoincrement=True)
    asset_id = Column(Integer, ForeignKey("assets.id"), unique=True, nullable=False)
    property_type = Column(SqlEnum(PropertyType), nullable=False, default=PropertyType.PRIMARY_RESIDENCE)
    address = Column(String(255), nullable=True)
    city = Column(String(100), nullable=True)
    country = Column(String(100), nullable=True)
    purchase_date = Column(Date, nullable=True)
    purchase_price = Column(Numeric(precision=28, scale=10), nullable=True)
    square_meters = Column(Numeric(precision=12, scale=2), nullable=True)
    rooms = Column(Integer, nullable=True)
    rental_income = Column(Numeric(precision=28, scale=10), nullable=True)

    asset = relationship("AssetORM")


class SnapshotORM(Base):
    """SQLAlchemy model for Snapshot."""

    __tablename__ = "snapshots"

    id = Column(Integer, primary_key=True, autoincrement=True)
    date = Column(Date, unique=True, nullable=False)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)

    holdings = relationship(
        "HoldingORM", back_populates="snapshot", cascade="all, delete-orphan"
    )
    liability_balances = relationship(
        "LiabilityBalanceORM", back_populates="snapshot", cascade="all, delete-orphan"
    )


class HoldingORM(Base):
    """SQLAlchemy model for Holding."""

    __tablename__ = "holdings"
    __table_args__ = (
        UniqueConstraint("snapshot_id", "asset_id", name="uq_holding_snapshot_asset"),
        CheckConstraint("amount >= 0", name="ck_holding_amount"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    snapshot_id = Column(Integer, ForeignKey("snapshots.id"), nullable=False)
    asset_id = Column(Integer, ForeignKey("assets.id"), nullable=False)
    amount = Column(Numeric(precision=28, scale=10), nullable=False)
    value = Column(Numeric(precision=28, scale=10), nullable=True)
    acquisition_date = Column(Date, nullable=True)
    acquisition_price = Column(Numeric(precision=28, scale=10), nullable=True)
    notes = Column(Text, nullable=True)

    snapshot = relationship("SnapshotORM", back_populates="holdings")
    asset = relationship("AssetORM")


class LiabilityORM(Base):
    """SQLAlchemy model for Liability."""

    __tablename__ = "liabilities"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    liability_type = Column(SqlEnum(LiabilityType), nullable=False, default=LiabilityType.LOAN)
    original_amount = Column(Numeric(precision=28, scale=10), nullable=False)
    currency = Column(String(3), nullable=False, default="EUR")
    linked_asset_symbol = Column(String(20), nullable=True)
    interest_rate = Column(Numeric(precision=7, scale=4), nullable=True)
    start_date = Column(Date, nullable=True)
    term_months = Column(Integer, nullable=True)
    is_active = Column(Boolean, default=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class LiabilityBalanceORM(Base):
    """SQLAlchemy model for LiabilityBalance."""

    __tablename__ = "liability_balances"
    __table_args__ = (
        UniqueConstraint("snapshot_id", "liability_id", name="uq_balance_snapshot_liability"),
        CheckConstraint("outstanding_amount >= 0", name="ck_balance_outstanding"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    snapshot_id = Column(Integer, ForeignKey("snapshots.id"), nullable=False)
    liability_id = Column(Integer, ForeignKey("liabilities.id"), nullable=False)
    outstanding_amount = Column(Numeric(precision=28, scale=10), nullable=False)
    value = Column(Numeric(precision=28, scale=10), nullable=True)

    snapshot = relationship("SnapshotORM", back_populates="liability_balances")
    liability = relationship("LiabilityORM")


class AllocationTargetORM(Base):
    """SQLAlchemy model for AllocationTarget."""

    __tablename__ = "allocation_targets"
    __table_args__ = (
        CheckConstraint(
            "target_percentage >= 0 AND target_percentage <= 100",
            name="ck_target_percentage",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    target_type = Column(SqlEnum(TargetType), nullable=False, default=TargetType.ASSET)
    target_key = Column(String(50), unique=True, nullable=False)
    target_percentage = Column(Numeric(precision=7, scale=4), nullable=False)
    tolerance_pct = Column(Numeric(precision=7, scale=4), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)


class HistoricalRateORM(Base):
    """SQLAlchemy model for HistoricalRate (timestamps are naive UTC)."""

    __tablename__ = "historical_rates"
    __table_args__ = (
        UniqueConstraint(
            "asset_symbol", "base_currency", "timestamp", name="uq_rate_symbol_currency_ts"
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    asset_symbol = Column(String(20), nullable=False, index=True)
    base_currency = Column(String(3), nullable=False, default="EUR")
    price = Column(Numeric(precision=28, scale=10), nullable=False)
    timestamp = Column(DateTime, nullable=False, index=True)
    volume_24h = Column(Numeric(precision=28, scale=2), nullable=True)
    market_cap = Column(Numeric(precision=28, scale=2), nullable=True)
    source = Column(String(32), nullable=False, default="coinmarketcap")


class RateCacheORM(Base):
    """SQLAlchemy model for the current-price cache."""

    __tablename__ = "rate_cache"

    asset_symbol = Column(String(20), primary_key=True)
    base_currency = Column(String(3), primary_key=True)
    price = Column(Numeric(precision=28, scale=10), nullable=False)
    last_updated = Column(DateTime, nullable=False)
