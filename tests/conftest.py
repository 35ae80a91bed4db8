"""
Pytest configuration and fixtures for portfolio tests.

This module provides:
- In-memory SQLite database fixtures
- A controllable UTC clock
- Deterministic and failing price oracles
- Repository and service fixtures
- A portfolio factory (assets + snapshot + holdings in one call)
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from wealthtrack.main import app
from wealthtrack.api.deps import get_price_oracle, get_source_oracles
from wealthtrack.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from wealthtrack.repositories.sqlalchemy import orm_models  # noqa: F401
from wealthtrack.repositories.sqlalchemy import (
    SqlAlchemyLedgerRepository,
    SqlAlchemyRateRepository,
)
from wealthtrack.providers import StubPriceOracle
from wealthtrack.services import (
    AllocationTargetService,
    PortfolioService,
    PriceService,
    RateStore,
    SnapshotService,
)
from wealthtrack.core.exceptions import AssetNotFoundError, OracleNetworkError, PriceNotFoundError
from wealthtrack.core.timeutils import UTC
from wealthtrack.domain.models import AssetClass, Snapshot, ValuationSource
from wealthtrack.config.settings import Settings, set_settings, reset_settings


# =============================================================================
# TIME HELPERS
# =============================================================================


def utc_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 12,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create an aware UTC datetime."""
    return UTC.localize(datetime(year, month, day, hour, minute, second))


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now = self.now + timedelta(seconds=seconds)


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return utc_datetime(2024, 6, 15, 14, 30, 0)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    """Controllable clock starting at fixed_now."""
    return FakeClock(fixed_now)


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def ledger_repo(test_session) -> SqlAlchemyLedgerRepository:
    """Provide test LedgerRepository."""
    return SqlAlchemyLedgerRepository(test_session)


@pytest.fixture
def rate_repo(test_session) -> SqlAlchemyRateRepository:
    """Provide test RateRepository."""
    return SqlAlchemyRateRepository(test_session)


# =============================================================================
# PRICE ORACLE FIXTURES
# =============================================================================


class DeterministicOracle(StubPriceOracle):
    """Stub oracle with a fixed, small price table."""

    FIXED_PRICES = {
        "BTC": Decimal("45000"),
        "ETH": Decimal("2500"),
        "SOL": Decimal("100"),
        "ADA": Decimal("0.50"),
    }

    def __init__(self, prices: Optional[dict[str, Decimal]] = None):
        super().__init__(prices if prices is not None else self.FIXED_PRICES)

    @property
    def provider_name(self) -> str:
        return "deterministic"

    @property
    def requested_symbols(self) -> list[str]:
        """Every symbol that reached the oracle, in call order."""
        return [s for _, symbols in self.calls for s in symbols]


class FailingOracle:
    """Oracle whose every call fails with a network error."""

    def __init__(self):
        self.calls = 0

    @property
    def provider_name(self) -> str:
        return "failing"

    def get_price(self, symbol: str, currency: str = "EUR") -> Decimal:
        self.calls += 1
        raise OracleNetworkError(symbol, "network unavailable")

    def get_prices(self, symbols: list[str], currency: str = "EUR") -> dict[str, Decimal]:
        self.calls += 1
        raise OracleNetworkError(",".join(symbols), "network unavailable")


class BatchFailingOracle(DeterministicOracle):
    """Batch requests fail; single-symbol requests succeed for known symbols."""

    def get_prices(self, symbols: list[str], currency: str = "EUR") -> dict[str, Decimal]:
        self.calls.append(("get_prices", tuple(symbols)))
        raise PriceNotFoundError(",".join(symbols), "invalid symbol in batch")


@pytest.fixture
def oracle() -> DeterministicOracle:
    """Provide deterministic oracle."""
    return DeterministicOracle()


@pytest.fixture
def failing_oracle() -> FailingOracle:
    """Provide an oracle that always fails."""
    return FailingOracle()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def rate_store(rate_repo, clock) -> RateStore:
    """Provide RateStore with a 5 minute TTL and the fake clock."""
    return RateStore(rate_repo, cache_ttl_seconds=300, base_currency="EUR", clock=clock)


@pytest.fixture
def snapshot_service(ledger_repo) -> SnapshotService:
    """Provide test SnapshotService."""
    return SnapshotService(ledger_repo)


@pytest.fixture
def target_service(ledger_repo) -> AllocationTargetService:
    """Provide test AllocationTargetService."""
    return AllocationTargetService(ledger_repo)


@pytest.fixture
def price_service(rate_store, oracle) -> PriceService:
    """Provide test PriceService with deterministic oracle."""
    return PriceService(rate_store=rate_store, oracle=oracle)


@pytest.fixture
def portfolio_service(ledger_repo, rate_store, oracle) -> PortfolioService:
    """Provide test PortfolioService with deterministic oracle."""
    return PortfolioService(ledger_repo=ledger_repo, rate_store=rate_store, oracle=oracle)


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


ASSET_CATALOG = {
    "BTC": ("Bitcoin", AssetClass.CRYPTO, ValuationSource.CMC),
    "ETH": ("Ethereum", AssetClass.CRYPTO, ValuationSource.CMC),
    "SOL": ("Solana", AssetClass.CRYPTO, ValuationSource.CMC),
    "ADA": ("Cardano", AssetClass.CRYPTO, ValuationSource.CMC),
    "AAPL": ("Apple Inc.", AssetClass.STOCK, ValuationSource.YAHOO),
    "HOUSE": ("Apartment", AssetClass.REAL_ESTATE, ValuationSource.MANUAL),
    "EUR": ("Euro Cash", AssetClass.FIAT, ValuationSource.MANUAL),
}


@pytest.fixture
def portfolio_factory(snapshot_service) -> Callable[..., Snapshot]:
    """
    Factory creating a snapshot with holdings.

    Assets are registered on first use from ASSET_CATALOG. Holdings are
    given as {symbol: amount} or {symbol: (amount, stored_value)}.
    """

    def _create(snapshot_date: str, holdings: dict) -> Snapshot:
        snapshot = snapshot_service.create_snapshot(snapshot_date)
        for symbol, entry in holdings.items():
            amount, value = entry if isinstance(entry, tuple) else (entry, None)
            try:
                snapshot_service.get_asset(symbol)
            except AssetNotFoundError:
                name, asset_class, source = ASSET_CATALOG[symbol]
                snapshot_service.register_asset(symbol, name, asset_class, source)
            snapshot_service.add_holding(snapshot_date, symbol, Decimal(str(amount)), value=value)
        return snapshot

    return _create


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def api_oracle() -> DeterministicOracle:
    """Oracle injected into the API under test."""
    return DeterministicOracle()


@pytest.fixture
def client(test_engine, api_oracle) -> TestClient:
    """Provide FastAPI test client with test database and deterministic oracle."""
    set_settings(Settings(database_url="sqlite:///:memory:", price_oracle="stub"))
    reset_database()
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_price_oracle] = lambda: api_oracle
    app.dependency_overrides[get_source_oracles] = lambda: {}
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(Decimal(str(actual)) - Decimal(str(expected)))
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"


def seed_portfolio(client: TestClient, snapshot_date: str = "2024-06-15") -> None:
    """Create BTC/ETH assets and a snapshot with 0.5 BTC and 11 ETH through the API."""
    client.post("/assets", json={"symbol": "BTC", "name": "Bitcoin"})
    client.post("/assets", json={"symbol": "ETH", "name": "Ethereum"})
    client.post("/snapshots", json={"date": snapshot_date})
    client.post(f"/snapshots/{snapshot_date}/holdings", json={"symbol": "BTC", "amount": "0.5"})
    client.post(f"/snapshots/{snapshot_date}/holdings", json={"symbol": "ETH", "amount": "11"})
