"""Business logic services."""

from wealthtrack.services.rate_store import RateStore
from wealthtrack.services.allocation_target_service import AllocationTargetService
from wealthtrack.services.snapshot_service import SnapshotService
from wealthtrack.services.price_service import PriceService
from wealthtrack.services.portfolio_service import PortfolioService
from wealthtrack.services.property_service import PropertyService

__all__ = [
    "RateStore",
    "AllocationTargetService",
    "SnapshotService",
    "PriceService",
    "PortfolioService",
    "PropertyService",
]
