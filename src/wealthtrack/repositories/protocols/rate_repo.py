"""Rate repository protocol: raw storage for historical rates and the price cache."""

from datetime import datetime
from typing import Protocol, Optional

from wealthtrack.domain.models import HistoricalRate, CachedRate, SaveRateInput


class RateRepository(Protocol):
    """
    Interface for rate storage.

    Pure storage: TTL and resolution rules live in RateStore.
    Datetime bounds are UTC.
    """

    def save_historical_rate(self, data: SaveRateInput) -> HistoricalRate:
        """Insert, or overwrite the row with the same (symbol, currency, timestamp)."""
        ...

    def get_latest_rate_before(
        self,
        symbol: str,
        currency: str,
        before: datetime,
    ) -> Optional[HistoricalRate]:
        """Most recent rate with timestamp strictly before ``before``."""
        ...

    def get_latest_rate(self, symbol: str, currency: str) -> Optional[HistoricalRate]:
        """Most recent rate regardless of date."""
        ...

    def list_rates(
        self,
        symbol: str,
        currency: str,
        limit: Optional[int] = None,
    ) -> list[HistoricalRate]:
        """Rates newest first, optionally capped."""
        ...

    def list_rates_between(
        self,
        symbol: str,
        currency: str,
        start: datetime,
        end: datetime,
    ) -> list[HistoricalRate]:
        """Rates with start <= timestamp < end, oldest first."""
        ...

    def get_cached_rate(self, symbol: str, currency: str) -> Optional[CachedRate]:
        """Raw cache row, regardless of age."""
        ...

    def upsert_cached_rate(
        self,
        rate: CachedRate,
        history: Optional[SaveRateInput] = None,
    ) -> CachedRate:
        """Insert or replace a cache row; record ``history`` in the same transaction."""
        ...

    def delete_cached_rate(self, symbol: str, currency: str) -> None:
        """Remove one cache row."""
        ...

    def clear_cache(self) -> None:
        """Remove every cache row."""
        ...
