"""
Unit tests for RateStore.

Tests cover:
- Cache TTL with eviction on read
- Cache writes also recording history
- Historical lookup never looking forward in time
- Date range queries
"""

from datetime import date
from decimal import Decimal

from wealthtrack.domain.models import SaveRateInput
from wealthtrack.services import RateStore

from tests.conftest import FakeClock, utc_datetime


def _save(rate_store: RateStore, symbol: str, price: str, when, source: str = "coinmarketcap"):
    return rate_store.save_historical_rate(
        SaveRateInput(asset_symbol=symbol, price=Decimal(price), timestamp=when, source=source)
    )


# =============================================================================
# CACHE TESTS
# =============================================================================


class TestRateCache:
    """Tests for the TTL-bounded current price cache."""

    def test_missing_entry_returns_none(self, rate_store: RateStore):
        """
        GIVEN an empty cache
        WHEN I read BTC
        THEN nothing is returned
        """
        assert rate_store.get_cached_rate("BTC") is None

    def test_fresh_entry_is_returned(self, rate_store: RateStore, clock: FakeClock):
        """
        GIVEN BTC was cached 4 minutes ago
        WHEN I read BTC
        THEN the cached price is returned
        """
        rate_store.update_cached_rate("BTC", Decimal("45000"))
        clock.advance(240)

        cached = rate_store.get_cached_rate("BTC")

        assert cached is not None
        assert cached.price == Decimal("45000")
        assert cached.base_currency == "EUR"

    def test_entry_at_exact_ttl_is_still_valid(self, rate_store: RateStore, clock: FakeClock):
        """
        GIVEN BTC was cached exactly 300 seconds ago
        WHEN I read BTC
        THEN the entry is still valid
        """
        rate_store.update_cached_rate("BTC", Decimal("45000"))
        clock.advance(300)

        assert rate_store.get_cached_rate("BTC") is not None

    def test_expired_entry_is_evicted_on_read(
        self,
        rate_store: RateStore,
        rate_repo,
        clock: FakeClock,
    ):
        """
        GIVEN BTC was cached 5 minutes and 1 second ago
        WHEN I read BTC
        THEN nothing is returned and the row is deleted
        """
        rate_store.update_cached_rate("BTC", Decimal("45000"))
        clock.advance(301)

        assert rate_store.get_cached_rate("BTC") is None
        assert rate_repo.get_cached_rate("BTC", "EUR") is None

    def test_update_refreshes_timestamp(self, rate_store: RateStore, clock: FakeClock):
        """
        GIVEN BTC was cached 4 minutes ago
        WHEN BTC is updated again and 4 more minutes pass
        THEN the new price is still valid
        """
        rate_store.update_cached_rate("BTC", Decimal("45000"))
        clock.advance(240)
        rate_store.update_cached_rate("BTC", Decimal("46000"))
        clock.advance(240)

        cached = rate_store.get_cached_rate("BTC")

        assert cached is not None
        assert cached.price == Decimal("46000")

    def test_update_records_historical_rate(self, rate_store: RateStore, fixed_now):
        """
        GIVEN an empty store
        WHEN BTC is cached with source coinmarketcap
        THEN a historical rate with the same price and time is recorded
        """
        rate_store.update_cached_rate("BTC", Decimal("45000"), source="coinmarketcap")

        latest = rate_store.get_latest_historical_rate("BTC")

        assert latest is not None
        assert latest.price == Decimal("45000")
        assert latest.timestamp == fixed_now
        assert latest.source == "coinmarketcap"

    def test_symbols_are_case_insensitive(self, rate_store: RateStore):
        """
        GIVEN btc cached in lower case
        WHEN I read BTC
        THEN the same entry is returned
        """
        rate_store.update_cached_rate("btc", Decimal("45000"))

        cached = rate_store.get_cached_rate("BTC")

        assert cached is not None
        assert cached.asset_symbol == "BTC"

    def test_currencies_are_separate_entries(self, rate_store: RateStore):
        """
        GIVEN BTC cached in EUR
        WHEN I read BTC in USD
        THEN nothing is returned
        """
        rate_store.update_cached_rate("BTC", Decimal("45000"), currency="EUR")

        assert rate_store.get_cached_rate("BTC", "USD") is None

    def test_clear_cache_keeps_history(self, rate_store: RateStore):
        """
        GIVEN BTC and ETH cached
        WHEN the cache is cleared
        THEN no entries remain but history is kept
        """
        rate_store.update_cached_rate("BTC", Decimal("45000"))
        rate_store.update_cached_rate("ETH", Decimal("2500"))

        rate_store.clear_cache()

        assert rate_store.get_cached_rate("BTC") is None
        assert rate_store.get_cached_rate("ETH") is None
        assert rate_store.get_latest_historical_rate("BTC") is not None

    def test_delete_cached_rate(self, rate_store: RateStore):
        """
        GIVEN BTC and ETH cached
        WHEN BTC is deleted
        THEN only ETH remains
        """
        rate_store.update_cached_rate("BTC", Decimal("45000"))
        rate_store.update_cached_rate("ETH", Decimal("2500"))

        rate_store.delete_cached_rate("BTC")

        assert rate_store.get_cached_rate("BTC") is None
        assert rate_store.get_cached_rate("ETH") is not None


# =============================================================================
# HISTORICAL RATE TESTS
# =============================================================================


class TestHistoricalRates:
    """Tests for historical rate resolution."""

    def _seed(self, rate_store: RateStore) -> None:
        _save(rate_store, "BTC", "40000", utc_datetime(2024, 6, 10, 9, 0))
        _save(rate_store, "BTC", "41000", utc_datetime(2024, 6, 10, 18, 0))
        _save(rate_store, "BTC", "43000", utc_datetime(2024, 6, 12, 12, 0))

    def test_same_day_returns_latest_intraday_sample(self, rate_store: RateStore):
        """
        GIVEN two BTC rates on 2024-06-10
        WHEN I look up 2024-06-10
        THEN the later sample is returned
        """
        self._seed(rate_store)

        rate = rate_store.get_historical_rate("BTC", "2024-06-10")

        assert rate is not None
        assert rate.price == Decimal("41000")

    def test_missing_day_falls_back_to_earlier_rate(self, rate_store: RateStore):
        """
        GIVEN no BTC rate on 2024-06-11
        WHEN I look up 2024-06-11
        THEN the latest earlier rate is returned, never the later one
        """
        self._seed(rate_store)

        rate = rate_store.get_historical_rate("BTC", date(2024, 6, 11))

        assert rate is not None
        assert rate.price == Decimal("41000")

    def test_date_before_all_rates_returns_none(self, rate_store: RateStore):
        """
        GIVEN BTC rates starting 2024-06-10
        WHEN I look up 2024-06-09
        THEN nothing is returned
        """
        self._seed(rate_store)

        assert rate_store.get_historical_rate("BTC", "2024-06-09") is None

    def test_latest_historical_rate_ignores_date(self, rate_store: RateStore):
        """
        GIVEN three BTC rates
        WHEN I ask for the latest
        THEN the newest one is returned
        """
        self._seed(rate_store)

        assert rate_store.get_latest_historical_rate("BTC").price == Decimal("43000")

    def test_save_same_timestamp_overwrites(self, rate_store: RateStore):
        """
        GIVEN a BTC rate at noon on 2024-06-10
        WHEN another rate is saved for the same timestamp
        THEN only the new price is kept
        """
        when = utc_datetime(2024, 6, 10, 12, 0)
        _save(rate_store, "BTC", "40000", when)
        _save(rate_store, "BTC", "40500", when, source="manual")

        rates = rate_store.get_historical_rates_for_asset("BTC")

        assert len(rates) == 1
        assert rates[0].price == Decimal("40500")
        assert rates[0].source == "manual"

    def test_rates_for_asset_newest_first_with_limit(self, rate_store: RateStore):
        """
        GIVEN three BTC rates
        WHEN I list them with limit 2
        THEN the two newest are returned, newest first
        """
        self._seed(rate_store)

        rates = rate_store.get_historical_rates_for_asset("BTC", limit=2)

        assert [r.price for r in rates] == [Decimal("43000"), Decimal("41000")]

    def test_range_is_inclusive_and_oldest_first(self, rate_store: RateStore):
        """
        GIVEN BTC rates on 06-10 (twice) and 06-12
        WHEN I query 2024-06-10 to 2024-06-12
        THEN all three are returned oldest first
        """
        self._seed(rate_store)

        rates = rate_store.get_historical_rates_range("BTC", "2024-06-10", "2024-06-12")

        assert [r.price for r in rates] == [Decimal("40000"), Decimal("41000"), Decimal("43000")]

    def test_range_with_start_after_end_is_empty(self, rate_store: RateStore):
        """
        GIVEN BTC rates
        WHEN the range start is after its end
        THEN nothing is returned
        """
        self._seed(rate_store)

        assert rate_store.get_historical_rates_range("BTC", "2024-06-12", "2024-06-10") == []

    def test_has_rate_for_date(self, rate_store: RateStore):
        """
        GIVEN BTC rates on 06-10 and 06-12
        WHEN I check 06-10 and 06-11
        THEN only 06-10 has a rate
        """
        self._seed(rate_store)

        assert rate_store.has_rate_for_date("BTC", "2024-06-10") is True
        assert rate_store.has_rate_for_date("BTC", "2024-06-11") is False


# =============================================================================
# GET OR FETCH TESTS
# =============================================================================


class TestGetOrFetchRate:
    """Tests for the price-only convenience lookup."""

    def test_without_date_reads_cache(self, rate_store: RateStore):
        rate_store.update_cached_rate("ETH", Decimal("2500"))

        assert rate_store.get_or_fetch_rate("ETH") == Decimal("2500")

    def test_without_date_and_expired_cache_returns_none(
        self,
        rate_store: RateStore,
        clock: FakeClock,
    ):
        rate_store.update_cached_rate("ETH", Decimal("2500"))
        clock.advance(600)

        assert rate_store.get_or_fetch_rate("ETH") is None

    def test_with_date_reads_history(self, rate_store: RateStore):
        _save(rate_store, "ETH", "2400", utc_datetime(2024, 6, 1))

        assert rate_store.get_or_fetch_rate("ETH", "2024-06-05") == Decimal("2400")
        assert rate_store.get_or_fetch_rate("ETH", "2024-05-31") is None
