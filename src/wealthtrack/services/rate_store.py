"""Rate store: historical price ledger plus a TTL-bounded current-price cache."""

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Callable, Optional, Union

from wealthtrack.core.timeutils import (
    parse_date,
    start_of_day,
    start_of_next_day,
    to_utc,
    utc_now,
)
from wealthtrack.domain.models import CachedRate, HistoricalRate, SaveRateInput
from wealthtrack.repositories.protocols import RateRepository

logger = logging.getLogger(__name__)

DEFAULT_CACHE_TTL_SECONDS = 300

DateLike = Union[str, date]


class RateStore:
    """
    Single source of truth for "what was/is the price of X".

    - Cache reads evict: an entry older than the TTL is deleted by the read
      that discovers it and reported as absent.
    - Every cache write also records a historical rate.
    - Historical lookups never look forward in time.

    Absence is always ``None``, never an exception.
    """

    def __init__(
        self,
        repo: RateRepository,
        cache_ttl_seconds: int = DEFAULT_CACHE_TTL_SECONDS,
        base_currency: str = "EUR",
        clock: Callable[[], datetime] = utc_now,
    ):
        self._repo = repo
        self._ttl = timedelta(seconds=cache_ttl_seconds)
        self._base_currency = base_currency
        self._clock = clock

    @property
    def base_currency(self) -> str:
        return self._base_currency

    def today(self) -> date:
        """Current UTC calendar date by the store's clock."""
        return self._clock().date()

    # Rate cache

    def get_cached_rate(self, symbol: str, currency: Optional[str] = None) -> Optional[CachedRate]:
        """Return the live cache entry, or None if missing or expired (expired entries are deleted)."""
        symbol, currency = self._key(symbol, currency)
        cached = self._repo.get_cached_rate(symbol, currency)
        if cached is None:
            return None

        age = to_utc(self._clock()) - cached.last_updated
        if age > self._ttl:
            logger.debug("Evicting stale cached rate %s/%s (age %s)", symbol, currency, age)
            self._repo.delete_cached_rate(symbol, currency)
            return None
        return cached

    def update_cached_rate(
        self,
        symbol: str,
        price: Decimal,
        currency: Optional[str] = None,
        source: str = "coinmarketcap",
    ) -> CachedRate:
        """Upsert the cache entry and record the same price as a historical rate."""
        symbol, currency = self._key(symbol, currency)
        now = to_utc(self._clock())
        return self._repo.upsert_cached_rate(
            CachedRate(
                asset_symbol=symbol,
                base_currency=currency,
                price=price,
                last_updated=now,
            ),
            history=SaveRateInput(
                asset_symbol=symbol,
                base_currency=currency,
                price=price,
                timestamp=now,
                source=source,
            ),
        )

    def delete_cached_rate(self, symbol: str, currency: Optional[str] = None) -> None:
        """Remove one cache entry."""
        symbol, currency = self._key(symbol, currency)
        self._repo.delete_cached_rate(symbol, currency)

    def clear_cache(self) -> None:
        """Remove every cache entry."""
        self._repo.clear_cache()

    # Historical rates

    def save_historical_rate(self, data: SaveRateInput) -> HistoricalRate:
        """Record a rate; an existing (symbol, currency, timestamp) row is overwritten."""
        return self._repo.save_historical_rate(
            replace(data, asset_symbol=data.asset_symbol.upper(), base_currency=data.base_currency.upper())
        )

    def get_historical_rate(
        self,
        symbol: str,
        on_date: DateLike,
        currency: Optional[str] = None,
    ) -> Optional[HistoricalRate]:
        """
        Resolve the price of ``symbol`` on a calendar date.

        Picks the latest rate whose UTC calendar date is on or before
        ``on_date``: the latest intraday sample of that day if one exists,
        otherwise the nearest earlier one. Returns None when nothing precedes it.
        """
        symbol, currency = self._key(symbol, currency)
        day = parse_date(on_date)
        return self._repo.get_latest_rate_before(symbol, currency, start_of_next_day(day))

    def get_latest_historical_rate(
        self,
        symbol: str,
        currency: Optional[str] = None,
    ) -> Optional[HistoricalRate]:
        """Most recent recorded rate regardless of date."""
        symbol, currency = self._key(symbol, currency)
        return self._repo.get_latest_rate(symbol, currency)

    def get_historical_rates_for_asset(
        self,
        symbol: str,
        currency: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[HistoricalRate]:
        """Recorded rates, most recent first, optionally capped."""
        symbol, currency = self._key(symbol, currency)
        return self._repo.list_rates(symbol, currency, limit=limit)

    def get_historical_rates_range(
        self,
        symbol: str,
        start: DateLike,
        end: DateLike,
        currency: Optional[str] = None,
    ) -> list[HistoricalRate]:
        """Rates within the inclusive calendar-date window, oldest first."""
        symbol, currency = self._key(symbol, currency)
        start_day, end_day = parse_date(start), parse_date(end)
        if start_day > end_day:
            return []
        return self._repo.list_rates_between(
            symbol, currency, start_of_day(start_day), start_of_next_day(end_day)
        )

    def has_rate_for_date(
        self,
        symbol: str,
        on_date: DateLike,
        currency: Optional[str] = None,
    ) -> bool:
        """True if at least one rate was recorded on exactly that calendar date."""
        day = parse_date(on_date)
        return bool(self.get_historical_rates_range(symbol, day, day, currency))

    def get_or_fetch_rate(
        self,
        symbol: str,
        on_date: Optional[DateLike] = None,
        currency: Optional[str] = None,
    ) -> Optional[Decimal]:
        """
        Price only: the live cache value when ``on_date`` is None, else the
        historical resolution for that date. Never calls an oracle.
        """
        if on_date is None:
            cached = self.get_cached_rate(symbol, currency)
            return cached.price if cached else None
        historical = self.get_historical_rate(symbol, on_date, currency)
        return historical.price if historical else None

    def _key(self, symbol: str, currency: Optional[str]) -> tuple[str, str]:
        return symbol.upper(), (currency or self._base_currency).upper()
