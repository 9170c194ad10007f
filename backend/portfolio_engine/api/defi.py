from fastapi import APIRouter, Depends, HTTPException, Query

from portfolio_engine.core.dependencies import get_defi_aggregator
from portfolio_engine.schemas.base import RiskTolerance
from portfolio_engine.schemas.defi import DeFiOpportunities
from portfolio_engine.services.defi_aggregator import DeFiAggregator, OpportunityDataUnavailable

router = APIRouter(prefix="/defi", tags=["defi"])


@router.get("/opportunities", response_model=DeFiOpportunities)
async def opportunities(
    assets: str = Query("", description="Comma-separated asset symbols held, e.g. ETH,USDC"),
    risk_tolerance: RiskTolerance = Query("medium", alias="riskTolerance"),
    aggregator: DeFiAggregator = Depends(get_defi_aggregator),
) -> DeFiOpportunities:
    symbols = [item.strip() for item in assets.split(",") if item.strip()]
    try:
        return await aggregator.get_all_opportunities(symbols, risk_tolerance)
    except OpportunityDataUnavailable as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from exc
