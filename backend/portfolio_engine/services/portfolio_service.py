from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Sequence

from pydantic import ValidationError

from portfolio_engine.core.config import Settings
from portfolio_engine.schemas.portfolio import (
    MarketInsight,
    PortfolioAsset,
    PortfolioOverview,
    YieldOpportunity,
)
from portfolio_engine.services.balances import StaticBalanceSource
from portfolio_engine.services.cache import TTLCache, make_cache_key
from portfolio_engine.services.catalog import StaticCatalog
from portfolio_engine.services.coingecko import build_coingecko_source
from portfolio_engine.services.enrichment import enrich_portfolio_assets
from portfolio_engine.services.insights import filter_relevant_insights, generate_predictions
from portfolio_engine.services.market_data import SyntheticMarketData
from portfolio_engine.services.metrics import calculate_portfolio_metrics
from portfolio_engine.services.rebalancing import generate_rebalancing_tips
from portfolio_engine.services.sources import BalanceSource, MarketDataSource, ResearchSource

logger = logging.getLogger(__name__)


class PortfolioUnavailableError(RuntimeError):
    pass


def _parse_optional(kind: str, rows: Iterable[Any], model: type) -> list[Any]:
    parsed = []
    for row in rows:
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as exc:
            logger.warning("Skipping malformed %s: %s", kind, exc.errors()[:3])
    return parsed


def relevant_yield_opportunities(
    opportunities: Iterable[YieldOpportunity],
    assets: Sequence[PortfolioAsset],
) -> list[YieldOpportunity]:
    """Opportunities on an asset symbol or chain the user already holds, best APY first."""
    symbols = {asset.symbol.upper() for asset in assets}
    chains = {asset.blockchain.lower() for asset in assets}
    relevant = [
        opp for opp in opportunities if opp.asset.upper() in symbols or opp.blockchain.lower() in chains
    ]
    return sorted(relevant, key=lambda opp: opp.apy, reverse=True)


class PortfolioService:
    def __init__(
        self,
        balances: BalanceSource,
        market: MarketDataSource,
        research: ResearchSource,
        cache: TTLCache,
        *,
        history_days: int = 30,
        enrichment_timeout: float | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.balances = balances
        self.market = market
        self.research = research
        self.cache = cache
        self.history_days = history_days
        self.enrichment_timeout = enrichment_timeout
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    async def get_portfolio(self, owner: str) -> PortfolioOverview:
        owner = (owner or "").strip()
        if not owner:
            raise ValueError("owner is required")

        cache_key = make_cache_key("portfolio", owner.lower())
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        raw_balances, raw_opportunities, raw_insights = await asyncio.gather(
            self.balances.get_portfolio_balances(owner),
            self.research.get_yield_opportunities(),
            self.research.get_market_insights(),
            return_exceptions=True,
        )
        for result in (raw_balances, raw_opportunities, raw_insights):
            if isinstance(result, BaseException) and not isinstance(result, Exception):
                raise result

        if isinstance(raw_balances, Exception):
            logger.error("Balance fetch failed for %s: %s", owner, raw_balances)
            raise PortfolioUnavailableError("portfolio data unavailable, retry") from raw_balances

        # Research feeds are optional context; the overview survives without them.
        degraded = False
        if isinstance(raw_opportunities, Exception):
            logger.warning("Yield opportunity feed failed: %s", raw_opportunities)
            raw_opportunities, degraded = [], True
        if isinstance(raw_insights, Exception):
            logger.warning("Market insight feed failed: %s", raw_insights)
            raw_insights, degraded = [], True

        identifiers = sorted(
            {str(row.get("contractAddress")) for row in raw_balances if isinstance(row, dict) and row.get("contractAddress")}
        )
        try:
            quotes = await self.market.get_quotes(identifiers) if identifiers else {}
        except Exception as exc:
            logger.error("Market data fetch failed via %s: %s", self.market.name, exc)
            raise PortfolioUnavailableError("portfolio data unavailable, retry") from exc

        fetched_at = self._clock()
        assets = await enrich_portfolio_assets(
            raw_balances,
            quotes,
            self.market,
            history_days=self.history_days,
            timeout=self.enrichment_timeout,
            now=fetched_at,
        )
        skipped = len(raw_balances) - len(assets)
        if skipped:
            logger.info("Enriched %d of %d holdings for %s", len(assets), len(raw_balances), owner)

        metrics = calculate_portfolio_metrics(assets)
        opportunities = _parse_optional("yield opportunity", raw_opportunities, YieldOpportunity)
        insights = _parse_optional("market insight", raw_insights, MarketInsight)

        overview = PortfolioOverview(
            owner=owner,
            fetched_at=fetched_at,
            source=self.market.name,
            assets=assets,
            metrics=metrics,
            yield_opportunities=relevant_yield_opportunities(opportunities, assets),
            insights=filter_relevant_insights(insights, assets),
            predictions=generate_predictions(assets),
            rebalancing_tips=generate_rebalancing_tips(assets, metrics),
        )
        if degraded:
            logger.warning("Portfolio for %s built without full research context; not cached", owner)
        else:
            self.cache.set(cache_key, overview)
        return overview


def build_market_source(settings: Settings) -> MarketDataSource:
    if settings.market_data_provider == "coingecko":
        return build_coingecko_source(settings)
    return SyntheticMarketData()


def build_portfolio_service(settings: Settings) -> PortfolioService:
    return PortfolioService(
        StaticBalanceSource(),
        build_market_source(settings),
        StaticCatalog(),
        TTLCache(settings.portfolio_cache_ttl_seconds, max_items=settings.cache_max_items),
        history_days=settings.history_days,
        enrichment_timeout=settings.enrichment_timeout_seconds,
    )
