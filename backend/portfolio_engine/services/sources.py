"""Boundary contracts for the external data sources the engine consumes."""

from __future__ import annotations

from typing import Any, Protocol, Sequence


class SourceUnavailableError(RuntimeError):
    """An upstream data source failed or timed out."""


class BalanceSourceError(SourceUnavailableError):
    pass


class MarketDataError(SourceUnavailableError):
    pass


class BalanceSource(Protocol):
    async def get_portfolio_balances(self, owner: str) -> list[dict[str, Any]]:
        """Raw holdings for *owner*: ``{contractAddress, tokenId?, network, balance, ...}``."""
        ...


class MarketDataSource(Protocol):
    name: str

    async def get_quotes(self, identifiers: Sequence[str]) -> dict[str, dict[str, Any]]:
        """``{identifier: {price, change24h, changePercent24h, volume24h, marketCap, name, symbol}}``.

        Identifiers the source does not know are simply absent from the result.
        """
        ...

    async def get_price_history(self, identifier: str, days: int) -> list[dict[str, Any]]:
        """``[{timestamp, price}, ...]`` ordered most recent first."""
        ...


class ResearchSource(Protocol):
    async def get_yield_opportunities(self) -> list[dict[str, Any]]:
        ...

    async def get_market_insights(self) -> list[dict[str, Any]]:
        ...


class DeFiCatalogSource(Protocol):
    async def get_protocols(self) -> list[dict[str, Any]]:
        ...

    async def get_lending_opportunities(self, assets: Sequence[str]) -> list[dict[str, Any]]:
        ...

    async def get_yield_strategies(self) -> list[dict[str, Any]]:
        ...

    async def get_cross_chain_opportunities(self, assets: Sequence[str]) -> list[dict[str, Any]]:
        ...

    async def get_liquidity_pools(self, assets: Sequence[str]) -> list[dict[str, Any]]:
        ...

    async def get_arbitrage_opportunities(self, assets: Sequence[str]) -> list[dict[str, Any]]:
        ...

    async def get_defi_insights(self) -> list[dict[str, Any]]:
        ...
