"""Portfolio valuation endpoints."""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from wealthtrack.api.deps import get_portfolio_service
from wealthtrack.api.schemas import (
    LiabilityValueResponse,
    PortfolioValueResponse,
    ValuedHoldingResponse,
)
from wealthtrack.core.exceptions import NoPortfolioDataError
from wealthtrack.services import PortfolioService

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


@router.get("", response_model=PortfolioValueResponse)
def get_portfolio_value(
    date: Optional[str] = Query(None, description="Snapshot date YYYY-MM-DD (latest at current prices if empty)"),
    portfolio: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioValueResponse:
    """Value a snapshot; holdings without a price are listed as absent.

    Net worth is the asset total minus the snapshot's liability balances.
    """
    report = portfolio.get_portfolio_value(date)
    if report is None:
        raise NoPortfolioDataError(date)

    return PortfolioValueResponse(
        date=report.date,
        currency=report.currency,
        total_value=report.total_value,
        holdings=[
            ValuedHoldingResponse.model_validate(h, from_attributes=True)
            for h in report.holdings
        ],
        absent_symbols=report.absent_symbols,
        liabilities=[
            LiabilityValueResponse(
                liability_id=b.liability_id,
                liability_name=b.liability_name,
                liability_type=b.liability_type,
                outstanding_amount=b.outstanding_amount,
                base_value=b.base_value,
            )
            for b in report.liabilities
        ],
        total_liabilities=report.total_liabilities,
        net_worth=report.net_worth,
    )
