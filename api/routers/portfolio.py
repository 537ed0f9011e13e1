"""
Portfolio Endpoints.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_portfolio_aggregator
from api.schemas import PortfolioResponse
from core.constants import API_PREFIX
from portfolio.aggregator import PortfolioAggregator

router = APIRouter(prefix=f"{API_PREFIX}/portfolio", tags=["Portfolio"])


@router.get("/user/{user_id}", response_model=PortfolioResponse)
async def get_portfolio(
    user_id: int,
    aggregator: PortfolioAggregator = Depends(get_portfolio_aggregator),
):
    """Get a user's cash, positions and total value."""
    portfolio = await aggregator.get_portfolio(user_id)
    return PortfolioResponse.from_domain(portfolio)
