"""SQLAlchemy repository implementations."""

from wealthtrack.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    init_db,
    reset_database,
    Base,
)
from wealthtrack.repositories.sqlalchemy.ledger_repo import SqlAlchemyLedgerRepository
from wealthtrack.repositories.sqlalchemy.rate_repo import SqlAlchemyRateRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyLedgerRepository",
    "SqlAlchemyRateRepository",
]
