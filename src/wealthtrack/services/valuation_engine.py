"""
Valuation engine: prices holdings and totals a snapshot.

Pure functions over a rate store and an optional oracle. Resolution is
two-tier: a cached (or historical) rate first, then one batched oracle
fetch for the misses. A holding that still has no price falls back to its
stored value (STALE), or is reported ABSENT and excluded from the total.
Liability balances of the snapshot are totalled separately for net worth.
"""

import logging
from datetime import date
from decimal import Decimal
from typing import Mapping, Optional, Union

from wealthtrack.core.exceptions import UpstreamError
from wealthtrack.core.timeutils import parse_date
from wealthtrack.domain.models import Holding, LiabilityBalance, ValuationSource, ValuationStatus
from wealthtrack.domain.views import ValuationReport, ValuedHolding
from wealthtrack.providers.price_oracle import PriceOracle
from wealthtrack.repositories.protocols import LedgerRepository
from wealthtrack.services.rate_store import RateStore

logger = logging.getLogger(__name__)


def resolve_prices(
    holdings: list[Holding],
    rate_store: RateStore,
    oracle: Optional[PriceOracle] = None,
    on_date: Optional[date] = None,
    currency: str = "EUR",
    oracles: Optional[Mapping[ValuationSource, PriceOracle]] = None,
) -> dict[str, Decimal]:
    """
    Resolve a price per holding symbol. Symbols with no price are omitted.

    With ``on_date`` set, only historical rates are consulted. Otherwise the
    live cache is tried first and the misses are fetched in one batch per
    valuation source: ``oracles`` maps a source to its oracle and ``oracle``
    serves every source without an entry. MANUAL assets are never fetched
    and use their latest recorded rate.
    """
    prices: dict[str, Decimal] = {}
    misses: dict[ValuationSource, list[str]] = {}

    for holding in holdings:
        symbol = holding.asset_symbol
        if on_date is not None:
            rate = rate_store.get_historical_rate(symbol, on_date, currency)
            if rate is not None:
                prices[symbol] = rate.price
            continue

        if holding.valuation_source == ValuationSource.MANUAL:
            rate = rate_store.get_latest_historical_rate(symbol, currency)
            if rate is not None:
                prices[symbol] = rate.price
            continue

        cached = rate_store.get_cached_rate(symbol, currency)
        if cached is not None:
            prices[symbol] = cached.price
            continue
        pending = misses.setdefault(holding.valuation_source, [])
        if symbol not in pending:
            pending.append(symbol)

    for source, symbols in misses.items():
        source_oracle = (oracles or {}).get(source, oracle)
        if source_oracle is None:
            logger.info("No oracle for %s assets; skipping %s", source.value, ", ".join(symbols))
            continue
        prices.update(fetch_prices(symbols, rate_store, source_oracle, currency))

    return prices


def fetch_prices(
    symbols: list[str],
    rate_store: RateStore,
    oracle: PriceOracle,
    currency: str = "EUR",
) -> dict[str, Decimal]:
    """
    Fetch current prices and write each one back to the cache.

    A failed batch is retried symbol by symbol so one bad symbol cannot
    blank out the rest. Failures are logged, never raised.
    """
    try:
        fetched = oracle.get_prices(symbols, currency)
    except UpstreamError as e:
        logger.warning("Batch price fetch failed (%s); retrying per symbol", e.message)
        fetched = {}
        if len(symbols) > 1:
            for symbol in symbols:
                try:
                    fetched[symbol] = oracle.get_price(symbol, currency)
                except UpstreamError as symbol_error:
                    logger.warning("No price for %s: %s", symbol, symbol_error.message)
    except Exception:
        logger.exception("Unexpected error fetching prices for %s", ", ".join(symbols))
        return {}

    for symbol in symbols:
        if symbol not in fetched:
            logger.info("Oracle returned no price for %s", symbol)

    for symbol, price in fetched.items():
        try:
            rate_store.update_cached_rate(symbol, price, currency, source=oracle.provider_name)
        except Exception:
            logger.exception("Could not cache fetched price for %s", symbol)

    return fetched


def value_holdings(holdings: list[Holding], prices: dict[str, Decimal]) -> list[ValuedHolding]:
    """Apply resolved prices to holdings, falling back to stored values."""
    valued = []
    for holding in holdings:
        price = prices.get(holding.asset_symbol)
        if price is not None:
            status = ValuationStatus.RESOLVED
            value: Optional[Decimal] = holding.amount * price
        elif holding.value is not None:
            status = ValuationStatus.STALE
            value = holding.value
        else:
            status = ValuationStatus.ABSENT
            value = None

        valued.append(
            ValuedHolding(
                symbol=holding.asset_symbol,
                name=holding.asset_name,
                amount=holding.amount,
                asset_class=holding.asset_class,
                status=status,
                price=price,
                value=value,
            )
        )
    return valued


def build_report(
    report_date: date,
    valued: list[ValuedHolding],
    currency: str,
    liabilities: Optional[list[LiabilityBalance]] = None,
) -> ValuationReport:
    """Total the valued holdings and liabilities; ABSENT holdings contribute nothing."""
    liabilities = liabilities or []
    total = sum((h.value for h in valued if h.value is not None), Decimal("0"))
    owed = sum((b.base_value for b in liabilities), Decimal("0"))
    return ValuationReport(
        date=report_date,
        currency=currency,
        holdings=valued,
        total_value=total,
        liabilities=liabilities,
        total_liabilities=owed,
    )


def value_snapshot(
    ledger: LedgerRepository,
    rate_store: RateStore,
    oracle: Optional[PriceOracle] = None,
    on_date: Optional[Union[str, date]] = None,
    currency: str = "EUR",
    oracles: Optional[Mapping[ValuationSource, PriceOracle]] = None,
) -> Optional[ValuationReport]:
    """
    Value the snapshot for ``on_date`` (historical rates only) or the latest
    snapshot at current prices.

    Returns None when there is no such snapshot or it holds nothing.
    """
    day = parse_date(on_date) if on_date is not None else None
    snapshot = ledger.get_snapshot_by_date(day) if day is not None else ledger.get_latest_snapshot()
    if snapshot is None:
        return None

    holdings = ledger.list_holdings(snapshot.id)
    if not holdings:
        return None

    prices = resolve_prices(
        holdings, rate_store, oracle, on_date=day, currency=currency, oracles=oracles
    )
    report = build_report(
        snapshot.date,
        value_holdings(holdings, prices),
        currency,
        ledger.list_liability_balances(snapshot.id),
    )

    if report.absent_symbols:
        logger.warning(
            "Snapshot %s: no value for %s", snapshot.date, ", ".join(report.absent_symbols)
        )
    return report
