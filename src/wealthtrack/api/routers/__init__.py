"""API routers package."""

from wealthtrack.api.routers.portfolio import router as portfolio_router
from wealthtrack.api.routers.allocations import router as allocations_router
from wealthtrack.api.routers.prices import router as prices_router
from wealthtrack.api.routers.snapshots import router as snapshots_router
from wealthtrack.api.routers.properties import router as properties_router

__all__ = [
    "portfolio_router",
    "allocations_router",
    "prices_router",
    "snapshots_router",
    "properties_router",
]
