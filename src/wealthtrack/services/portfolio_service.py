"""Portfolio façade: valuation, allocation comparison and rebalancing."""

from datetime import date
from decimal import Decimal
from typing import Mapping, Optional, Union

from wealthtrack.domain.models import ValuationSource
from wealthtrack.domain.views import AllocationSummary, RebalancingSuggestion, ValuationReport
from wealthtrack.providers.price_oracle import PriceOracle
from wealthtrack.repositories.protocols import LedgerRepository
from wealthtrack.services import allocation_engine, valuation_engine
from wealthtrack.services.rate_store import RateStore

DateLike = Union[str, date]


class PortfolioService:
    """
    Service for portfolio reporting.

    Thin orchestration over the valuation and allocation engines; all
    methods return None when there is nothing to report. ``oracle`` prices
    every valuation source that has no dedicated entry in ``oracles``.
    """

    def __init__(
        self,
        ledger_repo: LedgerRepository,
        rate_store: RateStore,
        oracle: Optional[PriceOracle] = None,
        oracles: Optional[Mapping[ValuationSource, PriceOracle]] = None,
    ):
        self._ledger = ledger_repo
        self._rates = rate_store
        self._oracle = oracle
        self._oracles = dict(oracles or {})

    def get_portfolio_value(self, on_date: Optional[DateLike] = None) -> Optional[ValuationReport]:
        """
        Value the snapshot for ``on_date`` with historical rates, or the
        latest snapshot at current prices when no date is given.
        """
        return valuation_engine.value_snapshot(
            self._ledger,
            self._rates,
            self._oracle,
            on_date=on_date,
            currency=self._rates.base_currency,
            oracles=self._oracles,
        )

    def get_allocation_summary(self, on_date: Optional[DateLike] = None) -> Optional[AllocationSummary]:
        report = self.get_portfolio_value(on_date)
        if report is None:
            return None
        return allocation_engine.compare_allocations(report, self._ledger.list_allocation_targets())

    def get_rebalancing_suggestions(
        self,
        on_date: Optional[DateLike] = None,
        tolerance: Optional[Decimal] = None,
    ) -> Optional[RebalancingSuggestion]:
        return allocation_engine.suggest_rebalancing(self.get_allocation_summary(on_date), tolerance)
