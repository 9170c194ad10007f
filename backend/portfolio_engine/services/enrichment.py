from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

from pydantic import ValidationError

from portfolio_engine import quant
from portfolio_engine.schemas.portfolio import AssetMetadata, AssetType, PortfolioAsset
from portfolio_engine.schemas.sources import BalanceRecord, MarketQuote, PricePoint
from portfolio_engine.services.sources import MarketDataError, MarketDataSource

logger = logging.getLogger(__name__)

WEEK_DAYS = 7
MONTH_DAYS = 30
YEAR_DAYS = 365

# Checked in order: the first category with a matching keyword wins, so a
# "Gold Bond" token classifies as a commodity.
CATEGORY_KEYWORDS: tuple[tuple[AssetType, tuple[str, ...]], ...] = (
    ("real-estate", ("real estate", "real-estate", "property", "apartment", "building", "residential", "housing")),
    ("commodity", ("gold", "silver", "platinum", "commodity", "crude oil")),
    ("nft", ("nft",)),
    ("bond", ("bond", "treasury")),
    ("equity", ("stock", "equity", "shares")),
)
NFT_TOKEN_STANDARDS = {"erc721", "erc1155"}


class AssetEnrichmentError(RuntimeError):
    pass


def classify_asset(name: str | None, metadata: Mapping[str, Any] | None = None) -> AssetType:
    """Keyword classifier over the asset name and description; falls back to ``crypto``."""
    metadata = metadata or {}
    text = f"{name or ''} {metadata.get('description') or ''}".lower()
    standard = str(metadata.get("tokenStandard") or "").lower().replace("-", "")

    for asset_type, keywords in CATEGORY_KEYWORDS:
        if asset_type == "nft" and standard in NFT_TOKEN_STANDARDS:
            return "nft"
        if any(keyword in text for keyword in keywords):
            return asset_type
    return "crypto"


def asset_id(record: BalanceRecord) -> str:
    return f"{record.network.lower()}:{record.contract_address.lower()}:{record.token_id or '0'}"


def build_portfolio_asset(
    record: BalanceRecord,
    quote: MarketQuote,
    history: Sequence[PricePoint],
    *,
    now: datetime | None = None,
) -> PortfolioAsset:
    """Join one balance with its quote and price history into a ``PortfolioAsset``."""
    prices = [point.price for point in sorted(history, key=lambda p: p.timestamp, reverse=True)]

    current_price = quote.price
    original_price = record.original_price if record.original_price is not None else current_price
    total_value = record.balance * current_price
    pnl = total_value - record.balance * original_price
    pnl_percentage = ((current_price - original_price) / original_price) * 100 if original_price > 0 else 0.0

    metadata = record.metadata
    return PortfolioAsset(
        id=asset_id(record),
        name=record.name or quote.name or "Unknown Asset",
        symbol=record.symbol or quote.symbol or "???",
        type=classify_asset(record.name or quote.name, metadata),
        contract_address=record.contract_address,
        token_id=record.token_id,
        blockchain=record.network,
        balance=record.balance,
        current_price=current_price,
        total_value=total_value,
        original_price=original_price,
        pnl=pnl,
        pnl_percentage=pnl_percentage,
        daily_change=quote.change_24h,
        daily_change_percentage=quote.change_percent_24h,
        weekly_change=quant.period_change(prices, WEEK_DAYS),
        monthly_change=quant.period_change(prices, MONTH_DAYS),
        yearly_change=quant.period_change(prices, YEAR_DAYS),
        apy=record.apy or 0.0,
        staking_rewards=record.staking_rewards,
        location=metadata.get("location"),
        last_appraisal=metadata.get("lastAppraisal"),
        risk_score=quant.volatility_risk_score(prices),
        liquidity_score=quant.liquidity_score(quote.volume_24h, quote.market_cap),
        metadata=AssetMetadata(
            description=str(metadata.get("description") or ""),
            image=metadata.get("image"),
            documents=list(metadata.get("documents") or []),
            certification=metadata.get("certification"),
            last_updated=now or datetime.now(timezone.utc),
        ),
    )


def _lookup_quote(quotes: Mapping[str, Mapping[str, Any]], contract_address: str) -> Mapping[str, Any] | None:
    quote = quotes.get(contract_address)
    if quote is None:
        quote = quotes.get(contract_address.lower())
    return quote


async def enrich_portfolio_assets(
    balances: Sequence[Mapping[str, Any]],
    quotes: Mapping[str, Mapping[str, Any]],
    market: MarketDataSource,
    *,
    history_days: int = 30,
    timeout: float | None = None,
    now: datetime | None = None,
) -> list[PortfolioAsset]:
    """Enrich every balance concurrently.

    A failure on one balance (malformed record, missing quote, history error,
    timeout) skips that asset only.  Output keeps the balance source order.
    """
    fetched_at = now or datetime.now(timezone.utc)

    async def _enrich_one(raw: Mapping[str, Any]) -> PortfolioAsset:
        record = BalanceRecord.model_validate(raw)
        raw_quote = _lookup_quote(quotes, record.contract_address)
        if raw_quote is None:
            raise AssetEnrichmentError(f"No market data for {record.contract_address} on {record.network}")
        quote = MarketQuote.model_validate(raw_quote)
        raw_history = await market.get_price_history(record.contract_address, history_days)
        history = [PricePoint.model_validate(point) for point in raw_history]
        return build_portfolio_asset(record, quote, history, now=fetched_at)

    async def _bounded(raw: Mapping[str, Any]) -> PortfolioAsset:
        if timeout is None:
            return await _enrich_one(raw)
        return await asyncio.wait_for(_enrich_one(raw), timeout=timeout)

    results = await asyncio.gather(*(_bounded(raw) for raw in balances), return_exceptions=True)

    assets: list[PortfolioAsset] = []
    seen: set[str] = set()
    for raw, result in zip(balances, results):
        label = raw.get("contractAddress", "?") if isinstance(raw, Mapping) else repr(raw)
        if isinstance(result, BaseException):
            if not isinstance(result, Exception):
                raise result
            if isinstance(result, ValidationError):
                logger.warning("Skipping malformed balance record %s: %s", label, result.errors()[:3])
            elif isinstance(result, asyncio.TimeoutError):
                logger.warning("Skipping asset %s: enrichment timed out", label)
            elif isinstance(result, (AssetEnrichmentError, MarketDataError)):
                logger.warning("Skipping asset %s: %s", label, result)
            else:
                logger.warning("Skipping asset %s: unexpected enrichment error", label, exc_info=result)
            continue
        if result.id in seen:
            logger.warning("Skipping duplicate holding %s", result.id)
            continue
        seen.add(result.id)
        assets.append(result)
    return assets
