from functools import lru_cache

from portfolio_engine.core.config import get_settings
from portfolio_engine.services.cache import TTLCache
from portfolio_engine.services.catalog import StaticCatalog
from portfolio_engine.services.defi_aggregator import DeFiAggregator
from portfolio_engine.services.portfolio_service import PortfolioService, build_portfolio_service


@lru_cache(maxsize=1)
def get_portfolio_service() -> PortfolioService:
    return build_portfolio_service(get_settings())


@lru_cache(maxsize=1)
def get_defi_aggregator() -> DeFiAggregator:
    settings = get_settings()
    return DeFiAggregator(
        StaticCatalog(),
        TTLCache(settings.defi_cache_ttl_seconds, max_items=settings.cache_max_items),
    )
