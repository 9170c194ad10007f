from fastapi import APIRouter, Depends, HTTPException, Query

from portfolio_engine.core.dependencies import get_portfolio_service
from portfolio_engine.schemas.portfolio import PortfolioAnalytics, PortfolioOverview, Timeframe
from portfolio_engine.services.analytics import build_portfolio_analytics
from portfolio_engine.services.portfolio_service import PortfolioService, PortfolioUnavailableError

router = APIRouter(prefix="/portfolio", tags=["portfolio"])


async def _load(owner: str, service: PortfolioService) -> PortfolioOverview:
    try:
        return await service.get_portfolio(owner)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc
    except PortfolioUnavailableError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc


@router.get("/{owner}", response_model=PortfolioOverview)
async def portfolio(owner: str, service: PortfolioService = Depends(get_portfolio_service)) -> PortfolioOverview:
    return await _load(owner, service)


@router.get("/{owner}/analytics", response_model=PortfolioAnalytics)
async def analytics(
    owner: str,
    timeframe: Timeframe = Query(default="30d"),
    service: PortfolioService = Depends(get_portfolio_service),
) -> PortfolioAnalytics:
    overview = await _load(owner, service)
    return build_portfolio_analytics(overview, timeframe)
