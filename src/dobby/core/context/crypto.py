"""Market information from CoinGecko (v3, keyless)."""

from __future__ import annotations

from typing import Any

import httpx

from dobby.configs.system import CryptoConfig

from .base import ContextEnricher

CURRENCY_SYMBOLS = {"usd": "$", "eur": "€", "gbp": "£"}

# CoinGecko's key for the 1h change when price_change_percentage=1h.
CHANGE_1H_KEY = "price_change_percentage_1h_in_currency"


def format_amount(value: float | int, currency: str) -> str:
    symbol = CURRENCY_SYMBOLS.get(currency.lower())
    if symbol is None:
        return f"{value} {currency.upper()}"
    return f"{symbol}{value}"


def format_change(value: float | None) -> str:
    return f"{(value or 0):.2f}%"


class CryptoEnricher(ContextEnricher):
    """Spot prices, trending coins and top 1h risers."""

    name = "crypto"
    subject = "crypto"
    label = "crypto info (prices, trends, emerging projects)"

    def __init__(self, client: httpx.AsyncClient, config: CryptoConfig) -> None:
        super().__init__(client)
        self._config = config

    async def _prices(self) -> list[str]:
        cfg = self._config
        currency = cfg.vs_currency.lower()
        data: dict[str, dict[str, Any]] = await self._get_json(
            f"{cfg.endpoint}/simple/price",
            params={
                "ids": ",".join(cfg.asset_ids),
                "vs_currencies": currency,
                "include_24hr_change": "true",
            },
        )
        lines = [f"Current crypto prices ({currency.upper()}):"]
        for coin, quote in data.items():
            lines.append(
                f"- {coin.upper()}: {format_amount(quote[currency], currency)} "
                f"(24h change: {format_change(quote.get(f'{currency}_24h_change'))})"
            )
        return lines

    async def _trending(self) -> list[str]:
        cfg = self._config
        data = await self._get_json(f"{cfg.endpoint}/search/trending")
        coins = data["coins"][: cfg.trending_limit]
        if not coins:
            return []
        lines = ["Trending crypto coins right now:"]
        for coin in coins:
            item = coin["item"]
            rank = item.get("market_cap_rank") or "N/A"
            lines.append(f"- {item['name']} ({item['symbol'].upper()}): Market rank #{rank}")
        return lines

    async def _gainers(self) -> list[str]:
        cfg = self._config
        currency = cfg.vs_currency.lower()
        markets: list[dict[str, Any]] = await self._get_json(
            f"{cfg.endpoint}/coins/markets",
            params={
                "vs_currency": currency,
                "order": "market_cap_desc",
                "per_page": cfg.markets_per_page,
                "page": 1,
                "sparkline": "false",
                "price_change_percentage": "1h",
            },
        )
        if not markets:
            return []
        risers = sorted(markets, key=lambda c: c.get(CHANGE_1H_KEY) or 0, reverse=True)
        lines = ["New/emerging crypto projects (top risers by 1h change):"]
        for coin in risers[: cfg.gainers_limit]:
            lines.append(
                f"- {coin['name']} ({coin['symbol'].upper()}): "
                f"{format_amount(coin['current_price'], currency)} "
                f"(1h change: {format_change(coin.get(CHANGE_1H_KEY))})"
            )
        return lines

    async def _collect(self) -> str:
        blocks = [await self._prices(), await self._trending(), await self._gainers()]
        return "\n\n".join("\n".join(block) for block in blocks if block)
