"""Real-estate property endpoints."""

from dataclasses import asdict

from fastapi import APIRouter, Depends

from wealthtrack.api.deps import get_property_service
from wealthtrack.api.schemas import (
    PropertyCreateRequest,
    PropertyResponse,
    PropertyUpdateRequest,
    PropertyValueRequest,
    RealEstateSummaryResponse,
)
from wealthtrack.domain.models import MortgageInput
from wealthtrack.domain.views import PropertyWithEquity
from wealthtrack.services import PropertyService

router = APIRouter(prefix="/properties", tags=["properties"])

_DETAIL_FIELDS = (
    "address",
    "city",
    "country",
    "purchase_date",
    "purchase_price",
    "square_meters",
    "rooms",
    "rental_income",
)


def _to_response(prop: PropertyWithEquity) -> PropertyResponse:
    details = asdict(prop.details)
    details.pop("asset_symbol")
    return PropertyResponse(
        symbol=prop.symbol,
        name=prop.name,
        currency=prop.currency,
        current_value=prop.current_value,
        mortgage_id=prop.mortgage_id,
        mortgage_balance=prop.mortgage_balance,
        equity=prop.equity,
        ltv_percentage=prop.ltv_percentage,
        **details,
    )


@router.post("", response_model=PropertyResponse, status_code=201)
def create_property(
    request: PropertyCreateRequest,
    properties: PropertyService = Depends(get_property_service),
) -> PropertyResponse:
    """Register a property, its first valuation and optionally its mortgage."""
    mortgage = None
    if request.mortgage is not None:
        mortgage = MortgageInput(**request.mortgage.model_dump())
    prop = properties.create_property(
        name=request.name,
        property_type=request.property_type,
        current_value=request.current_value,
        valuation_date=request.valuation_date,
        currency=request.currency,
        mortgage=mortgage,
        **request.model_dump(include=set(_DETAIL_FIELDS)),
    )
    return _to_response(prop)


@router.get("", response_model=list[PropertyResponse])
def list_properties(
    properties: PropertyService = Depends(get_property_service),
) -> list[PropertyResponse]:
    return [_to_response(p) for p in properties.list_properties()]


@router.get("/summary", response_model=RealEstateSummaryResponse)
def get_real_estate_summary(
    properties: PropertyService = Depends(get_property_service),
) -> RealEstateSummaryResponse:
    """Total value, mortgage balance and equity over all active properties."""
    summary = properties.get_real_estate_summary()
    return RealEstateSummaryResponse(
        property_count=summary.property_count,
        total_property_value=summary.total_property_value,
        total_mortgage_balance=summary.total_mortgage_balance,
        total_equity=summary.total_equity,
        properties=[_to_response(p) for p in summary.properties],
    )


@router.get("/{symbol}", response_model=PropertyResponse)
def get_property(
    symbol: str,
    properties: PropertyService = Depends(get_property_service),
) -> PropertyResponse:
    return _to_response(properties.get_property(symbol))


@router.patch("/{symbol}", response_model=PropertyResponse)
def update_property(
    symbol: str,
    request: PropertyUpdateRequest,
    properties: PropertyService = Depends(get_property_service),
) -> PropertyResponse:
    """Change a property's name or details."""
    changes = request.model_dump(exclude_unset=True)
    name = changes.pop("name", None)
    return _to_response(properties.update_property(symbol, name=name, **changes))


@router.put("/{symbol}/value", response_model=PropertyResponse)
def update_property_value(
    symbol: str,
    request: PropertyValueRequest,
    properties: PropertyService = Depends(get_property_service),
) -> PropertyResponse:
    """Record a manual valuation for a property."""
    prop = properties.update_value(symbol, request.value, valuation_date=request.valuation_date)
    return _to_response(prop)
