"""Price refresh and manual override endpoints."""

from fastapi import APIRouter, Depends

from wealthtrack.api.deps import get_price_service
from wealthtrack.api.schemas import (
    HistoricalRateResponse,
    ManualPriceRequest,
    PriceResultResponse,
    RefreshPricesRequest,
    RefreshPricesResponse,
)
from wealthtrack.services import PriceService

router = APIRouter(prefix="/prices", tags=["prices"])


@router.post("/refresh", response_model=RefreshPricesResponse)
def refresh_prices(
    request: RefreshPricesRequest,
    prices: PriceService = Depends(get_price_service),
) -> RefreshPricesResponse:
    """Fetch fresh prices; per-symbol failures are reported, not raised."""
    results = prices.refresh_prices(request.symbols)
    succeeded = sum(1 for r in results if r.ok)
    return RefreshPricesResponse(
        results=[PriceResultResponse.model_validate(r, from_attributes=True) for r in results],
        succeeded=succeeded,
        failed=len(results) - succeeded,
    )


@router.post("/override", response_model=HistoricalRateResponse, status_code=201)
def set_manual_price(
    request: ManualPriceRequest,
    prices: PriceService = Depends(get_price_service),
) -> HistoricalRateResponse:
    """Record a manual price for a date."""
    rate = prices.set_manual_price(request.symbol, request.date, request.price)
    return HistoricalRateResponse.model_validate(rate, from_attributes=True)
