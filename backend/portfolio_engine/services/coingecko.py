from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping, Sequence

import httpx

from portfolio_engine.core.config import Settings
from portfolio_engine.services.sources import MarketDataError

logger = logging.getLogger(__name__)


class CoinGeckoMarketData:
    """Market data from the CoinGecko public API.

    *coin_ids* maps the engine's identifiers (usually contract addresses) to
    CoinGecko coin ids; identifiers without a mapping are sent as-is.
    """

    name = "coingecko"

    def __init__(
        self,
        base_url: str = "https://api.coingecko.com/api/v3",
        *,
        api_key: str = "",
        coin_ids: Mapping[str, str] | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.timeout = timeout
        self._coin_ids = {key.lower(): value for key, value in (coin_ids or {}).items()}
        self._transport = transport

    def coin_id(self, identifier: str) -> str:
        return self._coin_ids.get(identifier.lower(), identifier.lower())

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key.strip():
            headers["x-cg-demo-api-key"] = self.api_key.strip()
        return headers

    async def _request(self, path: str, params: dict[str, Any]) -> Any:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(url, params=params, headers=self._headers())
        except httpx.RequestError as exc:
            raise MarketDataError(f"CoinGecko request failed: {exc}") from exc

        if response.status_code == 429:
            raise MarketDataError(f"CoinGecko rate limit hit (429) for {path}")
        if response.status_code >= 400:
            raise MarketDataError(f"CoinGecko API error {response.status_code}: {response.text[:300]}")
        return response.json() if response.content else {}

    async def get_quotes(self, identifiers: Sequence[str]) -> dict[str, dict[str, Any]]:
        by_coin = {self.coin_id(identifier): identifier for identifier in identifiers if identifier}
        if not by_coin:
            return {}

        payload = await self._request(
            "/simple/price",
            {
                "ids": ",".join(sorted(by_coin)),
                "vs_currencies": "usd",
                "include_market_cap": "true",
                "include_24hr_vol": "true",
                "include_24hr_change": "true",
            },
        )

        quotes: dict[str, dict[str, Any]] = {}
        for coin, identifier in by_coin.items():
            row = payload.get(coin) if isinstance(payload, dict) else None
            if not isinstance(row, dict) or row.get("usd") is None:
                logger.warning("CoinGecko returned no price for %s (%s)", identifier, coin)
                continue
            price = float(row["usd"])
            change_pct = float(row.get("usd_24h_change") or 0.0)
            previous = price / (1.0 + change_pct / 100.0) if change_pct > -100.0 else price
            quotes[identifier] = {
                "price": price,
                "change24h": price - previous,
                "changePercent24h": change_pct,
                "volume24h": float(row.get("usd_24h_vol") or 0.0),
                "marketCap": float(row.get("usd_market_cap") or 0.0),
                "name": None,
                "symbol": None,
            }
        return quotes

    async def get_price_history(self, identifier: str, days: int) -> list[dict[str, Any]]:
        payload = await self._request(
            f"/coins/{self.coin_id(identifier)}/market_chart",
            {"vs_currency": "usd", "days": int(days), "interval": "daily"},
        )
        prices = payload.get("prices") if isinstance(payload, dict) else None
        if not isinstance(prices, list):
            raise MarketDataError(f"CoinGecko history payload missing prices for {identifier}")

        points = [
            {
                "timestamp": datetime.fromtimestamp(float(ts) / 1000.0, tz=timezone.utc),
                "price": float(price),
            }
            for ts, price in prices
            if price is not None
        ]
        points.sort(key=lambda point: point["timestamp"], reverse=True)
        return points


def build_coingecko_source(settings: Settings, coin_ids: Mapping[str, str] | None = None) -> CoinGeckoMarketData:
    return CoinGeckoMarketData(
        settings.coingecko_base_url,
        api_key=settings.coingecko_api_key,
        coin_ids=coin_ids,
        timeout=settings.request_timeout_seconds,
    )
