"""SQLAlchemy implementation of RateRepository."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from wealthtrack.core.timeutils import to_naive_utc, to_utc
from wealthtrack.domain.models import HistoricalRate, CachedRate, SaveRateInput
from wealthtrack.repositories.sqlalchemy.orm_models import HistoricalRateORM, RateCacheORM


class SqlAlchemyRateRepository:
    """SQLAlchemy-backed rate repository."""

    def __init__(self, db: Session):
        self._db = db

    # Historical rates

    def save_historical_rate(self, data: SaveRateInput) -> HistoricalRate:
        """Insert, or overwrite the row with the same (symbol, currency, timestamp)."""
        orm_rate = self._upsert_historical(data)
        self._db.commit()
        self._db.refresh(orm_rate)
        return self._rate_to_domain(orm_rate)

    def get_latest_rate_before(
        self,
        symbol: str,
        currency: str,
        before: datetime,
    ) -> Optional[HistoricalRate]:
        """Most recent rate with timestamp strictly before ``before``."""
        orm_rate = (
            self._rates_query(symbol, currency)
            .filter(HistoricalRateORM.timestamp < to_naive_utc(before))
            .order_by(HistoricalRateORM.timestamp.desc())
            .first()
        )
        return self._rate_to_domain(orm_rate) if orm_rate else None

    def get_latest_rate(self, symbol: str, currency: str) -> Optional[HistoricalRate]:
        """Most recent rate regardless of date."""
        orm_rate = (
            self._rates_query(symbol, currency)
            .order_by(HistoricalRateORM.timestamp.desc())
            .first()
        )
        return self._rate_to_domain(orm_rate) if orm_rate else None

    def list_rates(
        self,
        symbol: str,
        currency: str,
        limit: Optional[int] = None,
    ) -> list[HistoricalRate]:
        """Rates newest first, optionally capped."""
        query = self._rates_query(symbol, currency).order_by(HistoricalRateORM.timestamp.desc())
        if limit is not None:
            query = query.limit(limit)
        return [self._rate_to_domain(r) for r in query.all()]

    def list_rates_between(
        self,
        symbol: str,
        currency: str,
        start: datetime,
        end: datetime,
    ) -> list[HistoricalRate]:
        """Rates with start <= timestamp < end, oldest first."""
        orm_rates = (
            self._rates_query(symbol, currency)
            .filter(
                HistoricalRateORM.timestamp >= to_naive_utc(start),
                HistoricalRateORM.timestamp < to_naive_utc(end),
            )
            .order_by(HistoricalRateORM.timestamp.asc())
            .all()
        )
        return [self._rate_to_domain(r) for r in orm_rates]

    # Rate cache

    def get_cached_rate(self, symbol: str, currency: str) -> Optional[CachedRate]:
        """Raw cache row, regardless of age."""
        orm_cache = self._find_cached(symbol, currency)
        return self._cache_to_domain(orm_cache) if orm_cache else None

    def upsert_cached_rate(
        self,
        rate: CachedRate,
        history: Optional[SaveRateInput] = None,
    ) -> CachedRate:
        """Insert or replace a cache row; record ``history`` in the same transaction."""
        try:
            orm_cache = self._find_cached(rate.asset_symbol, rate.base_currency)
            if orm_cache:
                orm_cache.price = rate.price
                orm_cache.last_updated = to_naive_utc(rate.last_updated)
            else:
                orm_cache = RateCacheORM(
                    asset_symbol=rate.asset_symbol,
                    base_currency=rate.base_currency,
                    price=rate.price,
                    last_updated=to_naive_utc(rate.last_updated),
                )
                self._db.add(orm_cache)

            if history is not None:
                self._upsert_historical(history)

            self._db.commit()
        except Exception:
            self._db.rollback()
            raise

        self._db.refresh(orm_cache)
        return self._cache_to_domain(orm_cache)

    def delete_cached_rate(self, symbol: str, currency: str) -> None:
        """Remove one cache row."""
        self._db.query(RateCacheORM).filter(
            RateCacheORM.asset_symbol == symbol,
            RateCacheORM.base_currency == currency,
        ).delete()
        self._db.commit()

    def clear_cache(self) -> None:
        """Remove every cache row."""
        self._db.query(RateCacheORM).delete()
        self._db.commit()

    def _rates_query(self, symbol: str, currency: str):
        return self._db.query(HistoricalRateORM).filter(
            HistoricalRateORM.asset_symbol == symbol,
            HistoricalRateORM.base_currency == currency,
        )

    def _find_cached(self, symbol: str, currency: str) -> Optional[RateCacheORM]:
        return (
            self._db.query(RateCacheORM)
            .filter(
                RateCacheORM.asset_symbol == symbol,
                RateCacheORM.base_currency == currency,
            )
            .first()
        )

    def _upsert_historical(self, data: SaveRateInput) -> HistoricalRateORM:
        timestamp = to_naive_utc(data.timestamp)
        orm_rate = (
            self._rates_query(data.asset_symbol, data.base_currency)
            .filter(HistoricalRateORM.timestamp == timestamp)
            .first()
        )
        if orm_rate:
            orm_rate.price = data.price
            orm_rate.volume_24h = data.volume_24h
            orm_rate.market_cap = data.market_cap
            orm_rate.source = data.source
        else:
            orm_rate = HistoricalRateORM(
                asset_symbol=data.asset_symbol,
                base_currency=data.base_currency,
                price=data.price,
                timestamp=timestamp,
                volume_24h=data.volume_24h,
                market_cap=data.market_cap,
                source=data.source,
            )
            self._db.add(orm_rate)
        self._db.flush()
        return orm_rate

    @staticmethod
    def _rate_to_domain(orm: HistoricalRateORM) -> HistoricalRate:
        """Convert ORM rate to domain model."""
        return HistoricalRate(
            id=orm.id,
            asset_symbol=orm.asset_symbol,
            base_currency=orm.base_currency,
            price=Decimal(str(orm.price)),
            timestamp=to_utc(orm.timestamp),
            source=orm.source,
            volume_24h=Decimal(str(orm.volume_24h)) if orm.volume_24h is not None else None,
            market_cap=Decimal(str(orm.market_cap)) if orm.market_cap is not None else None,
        )

    @staticmethod
    def _cache_to_domain(orm: RateCacheORM) -> CachedRate:
        """Convert ORM cache row to domain model."""
        return CachedRate(
            asset_symbol=orm.asset_symbol,
            base_currency=orm.base_currency,
            price=Decimal(str(orm.price)),
            last_updated=to_utc(orm.last_updated),
        )
