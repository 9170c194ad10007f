from fastapi import APIRouter

from portfolio_engine.core.config import get_settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict[str, str]:
    settings = get_settings()
    return {"status": "ok", "env": settings.app_env, "marketData": settings.market_data_provider}
