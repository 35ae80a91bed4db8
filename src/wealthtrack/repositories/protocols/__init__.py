"""Repository protocol definitions (interfaces)."""

from wealthtrack.repositories.protocols.ledger_repo import LedgerRepository
from wealthtrack.repositories.protocols.rate_repo import RateRepository

__all__ = [
    "LedgerRepository",
    "RateRepository",
]
