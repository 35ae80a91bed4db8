"""
Unit tests for the valuation engine.

Tests cover:
- Two-tier resolution (cache, then one batched oracle fetch)
- Write-back of fetched prices to the cache and history
- Degradation to stored values (STALE) or ABSENT
- MANUAL assets and historical dates never reaching the oracle
- Per-valuation-source oracle routing
- "No data" for missing snapshots
- Liability totals and net worth
"""

from decimal import Decimal
from unittest.mock import patch

from wealthtrack.domain.models import LiabilityType, SaveRateInput, ValuationSource, ValuationStatus
from wealthtrack.services import RateStore
from wealthtrack.services.valuation_engine import value_snapshot

from tests.conftest import (
    BatchFailingOracle,
    DeterministicOracle,
    FailingOracle,
    utc_datetime,
)


# =============================================================================
# CURRENT VALUATION TESTS
# =============================================================================


class TestCurrentValuation:
    """Tests for valuing the latest snapshot at current prices."""

    def test_values_holdings_from_oracle(
        self,
        ledger_repo,
        rate_store: RateStore,
        oracle: DeterministicOracle,
        portfolio_factory,
    ):
        """
        GIVEN a snapshot with 0.5 BTC and 11 ETH and an empty cache
        WHEN I value the portfolio
        THEN each holding is amount x oracle price and the total is their sum
        """
        portfolio_factory("2024-06-15", {"BTC": "0.5", "ETH": "11"})

        report = value_snapshot(ledger_repo, rate_store, oracle)

        values = {h.symbol: h.value for h in report.holdings}
        assert values["BTC"] == Decimal("22500")
        assert values["ETH"] == Decimal("27500")
        assert report.total_value == Decimal("50000")
        assert report.currency == "EUR"
        assert all(h.status == ValuationStatus.RESOLVED for h in report.holdings)

    def test_misses_are_fetched_in_one_batch(
        self,
        ledger_repo,
        rate_store: RateStore,
        oracle: DeterministicOracle,
        portfolio_factory,
    ):
        """
        GIVEN BTC is cached and ETH, SOL are not
        WHEN I value the portfolio
        THEN the oracle receives a single batch with only ETH and SOL
        """
        portfolio_factory("2024-06-15", {"BTC": "1", "ETH": "1", "SOL": "1"})
        rate_store.update_cached_rate("BTC", Decimal("44000"))

        report = value_snapshot(ledger_repo, rate_store, oracle)

        assert oracle.calls == [("get_prices", ("ETH", "SOL"))]
        btc = next(h for h in report.holdings if h.symbol == "BTC")
        assert btc.price == Decimal("44000")

    def test_fetched_prices_are_written_back(
        self,
        ledger_repo,
        rate_store: RateStore,
        oracle: DeterministicOracle,
        portfolio_factory,
    ):
        """
        GIVEN an empty cache
        WHEN I value the portfolio twice
        THEN the second valuation is served from cache without oracle calls
        """
        portfolio_factory("2024-06-15", {"BTC": "1"})

        value_snapshot(ledger_repo, rate_store, oracle)
        oracle.calls.clear()
        report = value_snapshot(ledger_repo, rate_store, oracle)

        assert oracle.calls == []
        assert report.total_value == Decimal("45000")
        history = rate_store.get_latest_historical_rate("BTC")
        assert history.source == "deterministic"

    def test_unknown_symbol_is_absent_and_excluded_from_total(
        self,
        ledger_repo,
        rate_store: RateStore,
        portfolio_factory,
    ):
        """
        GIVEN the oracle knows BTC but not ETH, and ETH has no stored value
        WHEN I value the portfolio
        THEN ETH is ABSENT, flagged, and the total only contains BTC
        """
        portfolio_factory("2024-06-15", {"BTC": "1", "ETH": "2"})
        oracle = DeterministicOracle({"BTC": Decimal("45000")})

        report = value_snapshot(ledger_repo, rate_store, oracle)

        eth = next(h for h in report.holdings if h.symbol == "ETH")
        assert eth.status == ValuationStatus.ABSENT
        assert eth.value is None
        assert report.absent_symbols == ["ETH"]

    def test_misses_are_routed_by_valuation_source(
        self,
        ledger_repo,
        rate_store: RateStore,
        oracle: DeterministicOracle,
        portfolio_factory,
    ):
        """
        GIVEN a CMC asset and a YAHOO asset, with a dedicated YAHOO oracle
        WHEN I value the portfolio
        THEN each source gets its own batch and AAPL never reaches the crypto oracle
        """
        portfolio_factory("2024-06-15", {"BTC": "1", "AAPL": "2"})
        yahoo = DeterministicOracle({"AAPL": Decimal("180")})

        report = value_snapshot(
            ledger_repo, rate_store, oracle, oracles={ValuationSource.YAHOO: yahoo}
        )

        assert oracle.calls == [("get_prices", ("BTC",))]
        assert yahoo.calls == [("get_prices", ("AAPL",))]
        values = {h.symbol: h.value for h in report.holdings}
        assert values == {"AAPL": Decimal("360"), "BTC": Decimal("45000")}
        assert rate_store.get_cached_rate("AAPL").price == Decimal("180")

    def test_source_without_route_uses_default_oracle(
        self,
        ledger_repo,
        rate_store: RateStore,
        oracle: DeterministicOracle,
        portfolio_factory,
    ):
        portfolio_factory("2024-06-15", {"BTC": "1", "AAPL": "1"})
        crypto_only = DeterministicOracle({"BTC": Decimal("45000")})

        report = value_snapshot(
            ledger_repo, rate_store, oracle, oracles={ValuationSource.CMC: crypto_only}
        )

        assert crypto_only.requested_symbols == ["BTC"]
        assert oracle.requested_symbols == ["AAPL"]
        assert report.absent_symbols == ["AAPL"]

    def test_cache_write_failure_does_not_abort_valuation(
        self,
        ledger_repo,
        rate_store: RateStore,
        oracle: DeterministicOracle,
        portfolio_factory,
    ):
        """
        GIVEN writing BTC's fetched price back to the cache fails
        WHEN I value BTC and ETH
        THEN both are still priced and ETH is still cached
        """
        portfolio_factory("2024-06-15", {"BTC": "1", "ETH": "1"})
        write_back = rate_store.update_cached_rate

        def flaky_write(symbol, *args, **kwargs):
            if symbol == "BTC":
                raise RuntimeError("database is locked")
            return write_back(symbol, *args, **kwargs)

        with patch.object(rate_store, "update_cached_rate", side_effect=flaky_write):
            report = value_snapshot(ledger_repo, rate_store, oracle)

        assert report.total_value == Decimal("47500")
        assert rate_store.get_cached_rate("BTC") is None
        assert rate_store.get_cached_rate("ETH").price == Decimal("2500")
        assert report.total_value == Decimal("45000")

    def test_stored_value_is_used_when_no_price(
        self,
        ledger_repo,
        rate_store: RateStore,
        failing_oracle: FailingOracle,
        portfolio_factory,
    ):
        """
        GIVEN the oracle is down and ETH has a stored value of 5000
        WHEN I value the portfolio
        THEN ETH is STALE at 5000 and BTC is ABSENT
        """
        portfolio_factory("2024-06-15", {"BTC": "1", "ETH": ("2", Decimal("5000"))})

        report = value_snapshot(ledger_repo, rate_store, failing_oracle)

        statuses = {h.symbol: h.status for h in report.holdings}
        assert statuses == {"BTC": ValuationStatus.ABSENT, "ETH": ValuationStatus.STALE}
        assert report.total_value == Decimal("5000")

    def test_batch_failure_falls_back_to_single_requests(
        self,
        ledger_repo,
        rate_store: RateStore,
        portfolio_factory,
    ):
        """
        GIVEN batch requests fail but single-symbol requests work
        WHEN I value BTC and ETH
        THEN both are priced through per-symbol requests
        """
        portfolio_factory("2024-06-15", {"BTC": "1", "ETH": "1"})
        oracle = BatchFailingOracle()

        report = value_snapshot(ledger_repo, rate_store, oracle)

        assert report.total_value == Decimal("47500")
        assert ("get_price", ("BTC",)) in oracle.calls
        assert ("get_price", ("ETH",)) in oracle.calls

    def test_one_bad_symbol_does_not_block_the_rest(
        self,
        ledger_repo,
        rate_store: RateStore,
        portfolio_factory,
    ):
        """
        GIVEN batch requests fail and SOL is unknown to the oracle
        WHEN I value BTC and SOL
        THEN BTC is priced and SOL is ABSENT
        """
        portfolio_factory("2024-06-15", {"BTC": "1", "SOL": "10"})
        oracle = BatchFailingOracle({"BTC": Decimal("45000")})

        report = value_snapshot(ledger_repo, rate_store, oracle)

        assert report.total_value == Decimal("45000")
        assert report.absent_symbols == ["SOL"]

    def test_manual_asset_uses_latest_recorded_rate(
        self,
        ledger_repo,
        rate_store: RateStore,
        oracle: DeterministicOracle,
        portfolio_factory,
    ):
        """
        GIVEN a MANUAL house with a recorded rate of 250000
        WHEN I value the portfolio
        THEN the house uses that rate and is never sent to the oracle
        """
        portfolio_factory("2024-06-15", {"HOUSE": "1", "BTC": "1"})
        rate_store.save_historical_rate(
            SaveRateInput(
                asset_symbol="HOUSE",
                price=Decimal("250000"),
                timestamp=utc_datetime(2024, 1, 1),
                source="manual",
            )
        )

        report = value_snapshot(ledger_repo, rate_store, oracle)

        assert "HOUSE" not in oracle.requested_symbols
        house = next(h for h in report.holdings if h.symbol == "HOUSE")
        assert house.value == Decimal("250000")
        assert report.total_value == Decimal("295000")

    def test_without_oracle_only_cache_is_used(
        self,
        ledger_repo,
        rate_store: RateStore,
        portfolio_factory,
    ):
        """
        GIVEN no oracle and only BTC cached
        WHEN I value BTC and ETH
        THEN ETH is ABSENT
        """
        portfolio_factory("2024-06-15", {"BTC": "1", "ETH": "1"})
        rate_store.update_cached_rate("BTC", Decimal("45000"))

        report = value_snapshot(ledger_repo, rate_store, None)

        assert report.absent_symbols == ["ETH"]


# =============================================================================
# HISTORICAL VALUATION TESTS
# =============================================================================


class TestHistoricalValuation:
    """Tests for valuing a dated snapshot."""

    def test_uses_historical_rates_and_never_fetches(
        self,
        ledger_repo,
        rate_store: RateStore,
        oracle: DeterministicOracle,
        portfolio_factory,
    ):
        """
        GIVEN a 2024-03-01 snapshot and a BTC rate from 2024-02-28
        WHEN I value 2024-03-01
        THEN BTC uses that rate, ETH is ABSENT and the oracle is untouched
        """
        portfolio_factory("2024-03-01", {"BTC": "2", "ETH": "1"})
        rate_store.save_historical_rate(
            SaveRateInput(asset_symbol="BTC", price=Decimal("50000"), timestamp=utc_datetime(2024, 2, 28))
        )

        report = value_snapshot(ledger_repo, rate_store, oracle, on_date="2024-03-01")

        assert oracle.calls == []
        assert report.total_value == Decimal("100000")
        assert report.absent_symbols == ["ETH"]

    def test_later_rates_are_ignored(
        self,
        ledger_repo,
        rate_store: RateStore,
        portfolio_factory,
    ):
        """
        GIVEN only a BTC rate recorded after the snapshot date
        WHEN I value the snapshot date
        THEN BTC is ABSENT
        """
        portfolio_factory("2024-03-01", {"BTC": "1"})
        rate_store.save_historical_rate(
            SaveRateInput(asset_symbol="BTC", price=Decimal("60000"), timestamp=utc_datetime(2024, 3, 2))
        )

        report = value_snapshot(ledger_repo, rate_store, None, on_date="2024-03-01")

        assert report.absent_symbols == ["BTC"]
        assert report.total_value == Decimal("0")


# =============================================================================
# NO DATA TESTS
# =============================================================================


class TestNoData:
    """Tests for the "no data" result."""

    def test_no_snapshots_returns_none(self, ledger_repo, rate_store, oracle):
        assert value_snapshot(ledger_repo, rate_store, oracle) is None

    def test_unknown_date_returns_none(self, ledger_repo, rate_store, oracle, portfolio_factory):
        portfolio_factory("2024-06-15", {"BTC": "1"})

        assert value_snapshot(ledger_repo, rate_store, oracle, on_date="2024-06-14") is None

    def test_snapshot_without_holdings_returns_none(
        self,
        ledger_repo,
        rate_store,
        oracle,
        snapshot_service,
    ):
        snapshot_service.create_snapshot("2024-06-15")

        assert value_snapshot(ledger_repo, rate_store, oracle) is None


# =============================================================================
# NET WORTH TESTS
# =============================================================================


class TestNetWorth:
    """Tests for liability totals and net worth."""

    def test_liabilities_reduce_net_worth_not_total(
        self,
        ledger_repo,
        rate_store: RateStore,
        oracle: DeterministicOracle,
        portfolio_factory,
        snapshot_service,
    ):
        """
        GIVEN 50000 EUR of assets and a 12000 EUR loan balance
        WHEN I value the portfolio
        THEN total_value stays 50000 and net worth is 38000
        """
        portfolio_factory("2024-06-15", {"BTC": "0.5", "ETH": "11"})
        loan = snapshot_service.register_liability("Car loan", LiabilityType.LOAN, "20000")
        snapshot_service.add_liability_balance("2024-06-15", loan.id, "12000")

        report = value_snapshot(ledger_repo, rate_store, oracle)

        assert report.total_value == Decimal("50000")
        assert report.total_liabilities == Decimal("12000")
        assert report.net_worth == Decimal("38000")
        assert [b.liability_name for b in report.liabilities] == ["Car loan"]

    def test_stored_balance_value_takes_precedence(
        self,
        ledger_repo,
        rate_store: RateStore,
        oracle: DeterministicOracle,
        portfolio_factory,
        snapshot_service,
    ):
        portfolio_factory("2024-06-15", {"BTC": "1"})
        mortgage = snapshot_service.register_liability("Flat", LiabilityType.MORTGAGE, "300000")
        snapshot_service.add_liability_balance(
            "2024-06-15", mortgage.id, "250000", value=Decimal("50000")
        )

        report = value_snapshot(ledger_repo, rate_store, oracle)

        assert report.total_liabilities == Decimal("50000")
        assert report.net_worth == Decimal("-5000")

    def test_no_liabilities_means_net_worth_equals_total(
        self,
        ledger_repo,
        rate_store: RateStore,
        oracle: DeterministicOracle,
        portfolio_factory,
    ):
        portfolio_factory("2024-06-15", {"ETH": "2"})

        report = value_snapshot(ledger_repo, rate_store, oracle)

        assert report.total_liabilities == Decimal("0")
        assert report.net_worth == report.total_value == Decimal("5000")
