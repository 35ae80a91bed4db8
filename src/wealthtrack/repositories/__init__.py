"""Repository layer - data access abstractions and implementations."""

from wealthtrack.repositories.protocols import (
    LedgerRepository,
    RateRepository,
)

__all__ = [
    "LedgerRepository",
    "RateRepository",
]
