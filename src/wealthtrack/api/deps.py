"""Dependency injection for FastAPI."""

from decimal import Decimal
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from wealthtrack.repositories.sqlalchemy.database import get_db
from wealthtrack.repositories.sqlalchemy import (
    SqlAlchemyLedgerRepository,
    SqlAlchemyRateRepository,
)
from wealthtrack.providers import (
    CoinMarketCapOracle,
    PriceOracle,
    RequestQueue,
    StubPriceOracle,
    YahooFinanceOracle,
)
from wealthtrack.domain.models import ValuationSource
from wealthtrack.services import (
    AllocationTargetService,
    PortfolioService,
    PriceService,
    PropertyService,
    RateStore,
    SnapshotService,
)
from wealthtrack.config.settings import get_settings

# One oracle per process, so every request shares its rate-limit queue
_oracle: Optional[PriceOracle] = None
_source_oracles: Optional[dict[ValuationSource, PriceOracle]] = None


def _build_queue() -> RequestQueue:
    settings = get_settings()
    return RequestQueue(
        delay_seconds=settings.oracle_request_delay_seconds,
        timeout_seconds=settings.oracle_timeout_seconds,
    )


def _build_cmc_oracle() -> CoinMarketCapOracle:
    settings = get_settings()
    return CoinMarketCapOracle(
        api_key=settings.cmc_api_key,
        base_url=settings.cmc_base_url,
        timeout_seconds=settings.oracle_timeout_seconds,
        queue=_build_queue(),
    )


def build_price_oracle() -> PriceOracle:
    """Create the oracle selected by settings."""
    settings = get_settings()
    kind = settings.price_oracle.lower()
    if kind == "stub":
        return StubPriceOracle()
    if kind == "yahoo":
        return YahooFinanceOracle(queue=_build_queue())
    if kind == "coinmarketcap":
        return _build_cmc_oracle()
    raise ValueError(f"Unknown price oracle: {settings.price_oracle}")


def build_source_oracles() -> dict[ValuationSource, PriceOracle]:
    """
    Dedicated oracles for valuation sources the selected oracle does not quote.

    The stub serves every source. With coinmarketcap selected, YAHOO assets
    get a Yahoo Finance oracle; with yahoo selected, CMC assets get a
    CoinMarketCap oracle when an API key is configured.
    """
    settings = get_settings()
    kind = settings.price_oracle.lower()
    if kind == "coinmarketcap":
        return {ValuationSource.YAHOO: YahooFinanceOracle(queue=_build_queue())}
    if kind == "yahoo" and settings.cmc_api_key:
        return {ValuationSource.CMC: _build_cmc_oracle()}
    return {}


def get_price_oracle() -> PriceOracle:
    """Provide the process-wide PriceOracle instance."""
    global _oracle
    if _oracle is None:
        _oracle = build_price_oracle()
    return _oracle


def get_source_oracles() -> dict[ValuationSource, PriceOracle]:
    """Provide the process-wide per-source oracles."""
    global _source_oracles
    if _source_oracles is None:
        _source_oracles = build_source_oracles()
    return _source_oracles


def reset_price_oracle() -> None:
    """Close and forget the current oracles (for reconfiguration)."""
    global _oracle, _source_oracles
    for oracle in [_oracle, *(_source_oracles or {}).values()]:
        close = getattr(oracle, "close", None)
        if close is not None:
            close()
    _oracle = None
    _source_oracles = None


def get_ledger_repo(db: Session = Depends(get_db)) -> SqlAlchemyLedgerRepository:
    """Provide LedgerRepository instance."""
    return SqlAlchemyLedgerRepository(db)


def get_rate_repo(db: Session = Depends(get_db)) -> SqlAlchemyRateRepository:
    """Provide RateRepository instance."""
    return SqlAlchemyRateRepository(db)


def get_rate_store(rate_repo: SqlAlchemyRateRepository = Depends(get_rate_repo)) -> RateStore:
    """Provide RateStore instance."""
    settings = get_settings()
    return RateStore(
        rate_repo,
        cache_ttl_seconds=settings.rate_cache_ttl_seconds,
        base_currency=settings.base_currency,
    )


def get_default_tolerance() -> Decimal:
    return Decimal(str(get_settings().default_tolerance_pct))


def get_portfolio_service(
    ledger_repo: SqlAlchemyLedgerRepository = Depends(get_ledger_repo),
    rate_store: RateStore = Depends(get_rate_store),
    oracle: PriceOracle = Depends(get_price_oracle),
    oracles: dict[ValuationSource, PriceOracle] = Depends(get_source_oracles),
) -> PortfolioService:
    """Provide PortfolioService instance."""
    return PortfolioService(
        ledger_repo=ledger_repo,
        rate_store=rate_store,
        oracle=oracle,
        oracles=oracles,
    )


def get_allocation_target_service(
    ledger_repo: SqlAlchemyLedgerRepository = Depends(get_ledger_repo),
) -> AllocationTargetService:
    """Provide AllocationTargetService instance."""
    return AllocationTargetService(ledger_repo)


def get_snapshot_service(
    ledger_repo: SqlAlchemyLedgerRepository = Depends(get_ledger_repo),
) -> SnapshotService:
    """Provide SnapshotService instance."""
    return SnapshotService(ledger_repo)


def get_price_service(
    rate_store: RateStore = Depends(get_rate_store),
    oracle: PriceOracle = Depends(get_price_oracle),
) -> PriceService:
    """Provide PriceService instance."""
    return PriceService(rate_store=rate_store, oracle=oracle)


def get_property_service(
    ledger_repo: SqlAlchemyLedgerRepository = Depends(get_ledger_repo),
    rate_store: RateStore = Depends(get_rate_store),
) -> PropertyService:
    """Provide PropertyService instance."""
    return PropertyService(ledger_repo=ledger_repo, rate_store=rate_store)
