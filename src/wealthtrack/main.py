"""FastAPI application entry point."""

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from wealthtrack import __version__
from wealthtrack.config.settings import get_settings
from wealthtrack.config.logging_config import setup_logging
from wealthtrack.repositories.sqlalchemy.database import init_db
from wealthtrack.api.deps import reset_price_oracle
from wealthtrack.api.routers import (
    portfolio_router,
    allocations_router,
    prices_router,
    snapshots_router,
    properties_router,
)
from wealthtrack.core.exceptions import (
    AppError,
    ConflictError,
    NotFoundError,
    UpstreamError,
    ValidationError,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    yield
    # Shutdown
    reset_price_oracle()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Multi-asset portfolio valuation, allocation targets and rebalancing",
    version=__version__,
    lifespan=lifespan,
)

# Include routers
app.include_router(portfolio_router)
app.include_router(allocations_router)
app.include_router(prices_router)
app.include_router(snapshots_router)
app.include_router(properties_router)


def status_for(exc: AppError) -> int:
    """HTTP status for an error kind."""
    if isinstance(exc, ValidationError):
        return 400
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, ConflictError):
        return 409
    if isinstance(exc, UpstreamError):
        return 502
    return 500


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    return JSONResponse(
        status_code=status_for(exc),
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": __version__,
        "docs": "/docs",
    }
