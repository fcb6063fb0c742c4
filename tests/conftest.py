"""Shared fixtures: fake chat model, fake upstream APIs, test config."""

from __future__ import annotations

from typing import Any

import httpx
import pytest
from langchain_core.messages import AIMessage, BaseMessage

from dobby.configs.config import AppConfig
from dobby.configs.system import FootballConfig

FOOTBALL_HOST = "api.football-data.org"
COINGECKO_HOST = "api.coingecko.com"

# ---------------------------------------------------------------------------
# Upstream payloads
# ---------------------------------------------------------------------------

LIVE_MATCHES = {
    "matches": [
        {
            "homeTeam": {"shortName": "Arsenal", "name": "Arsenal FC"},
            "awayTeam": {"shortName": "Chelsea", "name": "Chelsea FC"},
            "score": {"fullTime": {"home": 1, "away": None}},
            "status": "IN_PLAY",
            "utcDate": "2025-08-16T14:00:00Z",
        }
    ]
}

FINISHED_MATCHES = {
    "matches": [
        {
            "homeTeam": {"shortName": "Spurs"},
            "awayTeam": {"shortName": "Burnley"},
            "score": {"fullTime": {"home": 3, "away": 0}},
            "status": "FINISHED",
            "utcDate": "2025-08-09T11:30:00Z",
        },
        {
            "homeTeam": {"shortName": "Man City"},
            "awayTeam": {"name": "Wolverhampton Wanderers FC"},
            "score": {"fullTime": {"home": 2, "away": 2}},
            "status": "FINISHED",
            "utcDate": "2025-08-15T19:00:00Z",
        },
    ]
}

SCHEDULED_MATCHES = {
    "matches": [
        {
            "homeTeam": {"shortName": "Liverpool"},
            "awayTeam": {"shortName": "Everton"},
            "score": {"fullTime": {"home": None, "away": None}},
            "status": "SCHEDULED",
            "utcDate": "2025-08-23T16:30:00Z",
        },
        {
            "homeTeam": {"shortName": "Brighton"},
            "awayTeam": {"shortName": "Fulham"},
            "score": {"fullTime": {"home": None, "away": None}},
            "status": "TIMED",
            "utcDate": "2025-08-22T19:00:00Z",
        },
    ]
}

SIMPLE_PRICE = {
    "bitcoin": {"usd": 65000, "usd_24h_change": 2.5},
    "ethereum": {"usd": 3200.5, "usd_24h_change": -0.5},
}

TRENDING = {
    "coins": [
        {"item": {"name": "Pepe", "symbol": "pepe", "market_cap_rank": 30}},
        {"item": {"name": "Newcoin", "symbol": "new", "market_cap_rank": None}},
    ]
}

MARKETS = [
    {
        "name": "Bitcoin",
        "symbol": "btc",
        "current_price": 65000,
        "price_change_percentage_1h_in_currency": 0.1,
    },
    {
        "name": "Solana",
        "symbol": "sol",
        "current_price": 150.25,
        "price_change_percentage_1h_in_currency": 1.5,
    },
    {
        "name": "Tether",
        "symbol": "usdt",
        "current_price": 1,
        "price_change_percentage_1h_in_currency": None,
    },
]


# ---------------------------------------------------------------------------
# Fake upstream APIs
# ---------------------------------------------------------------------------


class FakeUpstreams:
    """``httpx.MockTransport`` handler serving football-data and CoinGecko.

    ``matches`` maps a ``status`` query value to its payload; ``fail``
    holds hosts that answer 503.  Every request is recorded.
    """

    def __init__(
        self,
        matches: dict[str, dict] | None = None,
        fail: set[str] | None = None,
    ) -> None:
        self.matches = (
            matches
            if matches is not None
            else {
                "LIVE": {"matches": []},
                "FINISHED": FINISHED_MATCHES,
                "SCHEDULED": SCHEDULED_MATCHES,
            }
        )
        self.fail = fail or set()
        self.requests: list[httpx.Request] = []

    def requests_to(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        host = request.url.host
        path = request.url.path
        if host in self.fail:
            return httpx.Response(503, json={"message": "unavailable"})
        if host == FOOTBALL_HOST and path.endswith("/matches"):
            status = request.url.params["status"]
            return httpx.Response(200, json=self.matches.get(status, {"matches": []}))
        if host == COINGECKO_HOST:
            if path.endswith("/simple/price"):
                return httpx.Response(200, json=SIMPLE_PRICE)
            if path.endswith("/search/trending"):
                return httpx.Response(200, json=TRENDING)
            if path.endswith("/coins/markets"):
                return httpx.Response(200, json=MARKETS)
        return httpx.Response(404, json={"message": "not found"})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture()
def upstreams() -> FakeUpstreams:
    return FakeUpstreams()


# ---------------------------------------------------------------------------
# Fake chat model
# ---------------------------------------------------------------------------


class FakeChatModel:
    """Stand-in for ``ChatOpenAI`` that replays scripted outcomes.

    Each ``ainvoke`` consumes the next outcome: an exception instance is
    raised, anything else is returned as the ``AIMessage`` content.  The
    last outcome repeats once the script runs out.
    """

    def __init__(self, *outcomes: Any) -> None:
        self.outcomes = list(outcomes) or ["Yo, what's good?"]
        self.calls: list[list[BaseMessage]] = []

    async def ainvoke(self, messages: list[BaseMessage], *args, **kwargs) -> AIMessage:
        self.calls.append(list(messages))
        index = min(len(self.calls), len(self.outcomes)) - 1
        outcome = self.outcomes[index]
        if isinstance(outcome, BaseException):
            raise outcome
        return AIMessage(content=outcome)

    @property
    def system_prompts(self) -> list[str]:
        return [call[0].content for call in self.calls]


@pytest.fixture()
def fake_llm() -> FakeChatModel:
    return FakeChatModel()


# ---------------------------------------------------------------------------
# Config
# ---------------------------------------------------------------------------


def make_config(football_key: str = "test-token", **kwargs: Any) -> AppConfig:
    return AppConfig(football=FootballConfig(api_key=football_key), **kwargs)


@pytest.fixture()
def app_config() -> AppConfig:
    return make_config()

