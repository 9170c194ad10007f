from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Iterable, Sequence, TypeVar

from pydantic import BaseModel, ValidationError

from portfolio_engine.schemas.base import RiskTier, RiskTolerance
from portfolio_engine.schemas.defi import (
    ArbitrageOpportunity,
    CrossChainOpportunity,
    DeFiInsight,
    DeFiOpportunities,
    DeFiProtocol,
    LendingOpportunity,
    LiquidityPool,
    YieldStrategy,
)
from portfolio_engine.services.cache import TTLCache, make_cache_key
from portfolio_engine.services.sources import DeFiCatalogSource

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

RISK_TOLERANCES: tuple[RiskTolerance, ...] = ("low", "medium", "high")
ALLOWED_RISK: dict[RiskTolerance, frozenset[RiskTier]] = {
    "low": frozenset({"low"}),
    "medium": frozenset({"low", "medium"}),
    "high": frozenset({"low", "medium", "high"}),
}
# Higher utilization means less withdrawable liquidity and jumpier rates.
MAX_UTILIZATION: dict[RiskTolerance, float] = {"low": 80.0, "medium": 90.0, "high": 95.0}
MAX_IMPERMANENT_LOSS: dict[RiskTolerance, float] = {"low": 1.0, "medium": 5.0, "high": 20.0}
# Bridging is never offered at low tolerance.
MAX_BRIDGE_RISK_FACTORS: dict[RiskTolerance, int | None] = {"low": None, "medium": 2, "high": 5}
ALLOWED_COMPLEXITY: dict[RiskTolerance, frozenset[str]] = {
    "low": frozenset({"simple"}),
    "medium": frozenset({"simple", "moderate"}),
    "high": frozenset({"simple", "moderate", "complex"}),
}
STRATEGY_RISK: dict[str, RiskTier] = {"conservative": "low", "moderate": "medium", "aggressive": "high"}
URGENCY_RANK: dict[str, int] = {"high": 0, "medium": 1, "low": 2}


class OpportunityDataUnavailable(RuntimeError):
    pass


def validate_risk_tolerance(value: str) -> RiskTolerance:
    tolerance = str(value or "").strip().lower()
    if tolerance not in RISK_TOLERANCES:
        raise ValueError(f"risk tolerance must be one of {', '.join(RISK_TOLERANCES)}; got {value!r}")
    return tolerance  # type: ignore[return-value]


def filter_protocols_by_risk(protocols: Iterable[DeFiProtocol], tolerance: RiskTolerance) -> list[DeFiProtocol]:
    return [p for p in protocols if p.risk in ALLOWED_RISK[tolerance]]


def filter_lending_by_risk(lending: Iterable[LendingOpportunity], tolerance: RiskTolerance) -> list[LendingOpportunity]:
    return [market for market in lending if market.utilization <= MAX_UTILIZATION[tolerance]]


def filter_strategies_by_risk(strategies: Iterable[YieldStrategy], tolerance: RiskTolerance) -> list[YieldStrategy]:
    return [s for s in strategies if STRATEGY_RISK[s.category] in ALLOWED_RISK[tolerance]]


def filter_cross_chain_by_risk(
    opportunities: Iterable[CrossChainOpportunity],
    tolerance: RiskTolerance,
) -> list[CrossChainOpportunity]:
    ceiling = MAX_BRIDGE_RISK_FACTORS[tolerance]
    if ceiling is None:
        return []
    return [c for c in opportunities if len(c.risk_factors) <= ceiling]


def filter_pools_by_risk(pools: Iterable[LiquidityPool], tolerance: RiskTolerance) -> list[LiquidityPool]:
    return [pool for pool in pools if pool.impermanent_loss <= MAX_IMPERMANENT_LOSS[tolerance]]


def filter_arbitrage_by_risk(
    arbitrage: Iterable[ArbitrageOpportunity],
    tolerance: RiskTolerance,
) -> list[ArbitrageOpportunity]:
    return [a for a in arbitrage if a.complexity in ALLOWED_COMPLEXITY[tolerance]]


def _rank(items: Iterable[ModelT], figure: Callable[[ModelT], float], held: Callable[[ModelT], bool] | None = None) -> list[ModelT]:
    """Holdings-related entries first, then by *figure* descending.  ``sorted`` is stable."""
    if held is None:
        return sorted(items, key=lambda item: -figure(item))
    return sorted(items, key=lambda item: (not held(item), -figure(item)))


def _parse_rows(branch: str, rows: Any, model: type[ModelT]) -> list[ModelT]:
    if not isinstance(rows, list):
        raise TypeError(f"{branch} source returned {type(rows).__name__}, expected list")
    parsed: list[ModelT] = []
    for row in rows:
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as exc:
            label = row.get("id", "?") if isinstance(row, dict) else repr(row)
            logger.warning("Skipping malformed %s entry %s: %s", branch, label, exc.errors()[:3])
    return parsed


class DeFiAggregator:
    """Filters and ranks the DeFi catalog for a caller's risk tolerance."""

    def __init__(self, catalog: DeFiCatalogSource, cache: TTLCache) -> None:
        self.catalog = catalog
        self.cache = cache

    async def get_all_opportunities(self, user_assets: Sequence[str], risk_tolerance: str) -> DeFiOpportunities:
        tolerance = validate_risk_tolerance(risk_tolerance)
        assets = sorted({a.strip().upper() for a in user_assets if a and a.strip()})
        cache_key = make_cache_key("defi-all", assets, tolerance)

        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached

        # Sub-catalogs are independent: one failing branch degrades to an
        # empty list instead of failing the whole response.
        branches: dict[str, tuple[Any, type[BaseModel]]] = {
            "protocols": (self.catalog.get_protocols(), DeFiProtocol),
            "lending": (self.catalog.get_lending_opportunities(assets), LendingOpportunity),
            "strategies": (self.catalog.get_yield_strategies(), YieldStrategy),
            "crossChain": (self.catalog.get_cross_chain_opportunities(assets), CrossChainOpportunity),
            "liquidityPools": (self.catalog.get_liquidity_pools(assets), LiquidityPool),
            "arbitrage": (self.catalog.get_arbitrage_opportunities(assets), ArbitrageOpportunity),
            "insights": (self.catalog.get_defi_insights(), DeFiInsight),
        }
        results = await asyncio.gather(*(coro for coro, _ in branches.values()), return_exceptions=True)

        parsed: dict[str, list[Any]] = {}
        degraded: list[str] = []
        for (name, (_, model)), result in zip(branches.items(), results):
            if isinstance(result, BaseException):
                if not isinstance(result, Exception):
                    raise result
                logger.warning("DeFi catalog branch %s failed: %s", name, result)
                degraded.append(name)
                parsed[name] = []
                continue
            try:
                parsed[name] = _parse_rows(name, result, model)
            except TypeError as exc:
                logger.warning("DeFi catalog branch %s returned unusable data: %s", name, exc)
                degraded.append(name)
                parsed[name] = []

        if len(degraded) == len(branches):
            raise OpportunityDataUnavailable("Failed to fetch DeFi opportunities")

        held = set(assets)
        result = DeFiOpportunities(
            risk_tolerance=tolerance,
            protocols=_rank(filter_protocols_by_risk(parsed["protocols"], tolerance), lambda p: p.tvl),
            lending=_rank(
                filter_lending_by_risk(parsed["lending"], tolerance),
                lambda m: m.total_supply,
                lambda m: m.asset.upper() in held,
            ),
            strategies=_rank(filter_strategies_by_risk(parsed["strategies"], tolerance), lambda s: s.tvl),
            cross_chain=_rank(
                filter_cross_chain_by_risk(parsed["crossChain"], tolerance),
                lambda c: c.profit_potential,
                lambda c: c.asset.upper() in held,
            ),
            liquidity_pools=_rank(
                filter_pools_by_risk(parsed["liquidityPools"], tolerance),
                lambda p: p.total_liquidity,
                lambda p: any(token.symbol.upper() in held for token in p.tokens),
            ),
            arbitrage=_rank(
                filter_arbitrage_by_risk(parsed["arbitrage"], tolerance),
                lambda a: a.volume,
                lambda a: a.asset.upper() in held,
            ),
            insights=sorted(
                parsed["insights"],
                key=lambda i: (URGENCY_RANK.get(i.urgency, len(URGENCY_RANK)), -abs(i.estimated_impact)),
            ),
            degraded=degraded,
        )

        if degraded:
            logger.warning("Returning partial DeFi opportunities (degraded: %s); not cached", ", ".join(degraded))
        else:
            self.cache.set(cache_key, result)
        return result
