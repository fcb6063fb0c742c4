"""Match information from football-data.org (v4).

Three queries against ``/competitions/{code}/matches``:

1. live matches; when there are none,
2. matches finished in the trailing window (newest first);
3. fixtures scheduled in the forward window (soonest first).

Without an API token the enricher is disabled and makes no calls.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date, datetime, timedelta, timezone
from typing import Any

import httpx

from dobby.configs.system import FootballConfig

from .base import ContextEnricher

logger = logging.getLogger(__name__)

AUTH_HEADER = "X-Auth-Token"

STATUS_LIVE = "LIVE"
STATUS_FINISHED = "FINISHED"
STATUS_SCHEDULED = "SCHEDULED"

DISPLAY_DATETIME_FORMAT = "%Y-%m-%d %H:%M UTC"

Match = dict[str, Any]


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def parse_utc(value: str) -> datetime:
    """Parse football-data's ``utcDate`` (``2025-08-16T14:00:00Z``)."""
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def team_name(team: dict[str, Any] | None) -> str:
    team = team or {}
    return team.get("shortName") or team.get("name") or "TBD"


def full_time_score(match: Match) -> str:
    full_time = (match.get("score") or {}).get("fullTime") or {}
    home = full_time.get("home")
    away = full_time.get("away")
    return f"{home if home is not None else 0}-{away if away is not None else 0}"


def format_kickoff(match: Match) -> str:
    return parse_utc(match["utcDate"]).strftime(DISPLAY_DATETIME_FORMAT)


def format_live(match: Match) -> str:
    return (
        f"- {team_name(match['homeTeam'])} vs {team_name(match['awayTeam'])}: "
        f"{full_time_score(match)} (Status: {match['status']}, Time: {match['utcDate']})"
    )


def format_finished(match: Match) -> str:
    return (
        f"- {team_name(match['homeTeam'])} vs {team_name(match['awayTeam'])}: "
        f"{full_time_score(match)} (Status: {match['status']}, "
        f"Ended: {format_kickoff(match)})"
    )


def format_scheduled(match: Match) -> str:
    return (
        f"- {team_name(match['homeTeam'])} vs {team_name(match['awayTeam'])} "
        f"(Scheduled: {format_kickoff(match)})"
    )


class FootballEnricher(ContextEnricher):
    """Live scores, recent results and upcoming fixtures for one competition."""

    name = "football"
    subject = "football"

    def __init__(
        self,
        client: httpx.AsyncClient,
        config: FootballConfig,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        super().__init__(client)
        self._config = config
        self._clock = clock
        self.label = f"{config.competition_name} info"

    @property
    def enabled(self) -> bool:
        return bool(self._config.api_key)

    async def _matches(self, status: str, **params: str | int) -> list[Match]:
        cfg = self._config
        data = await self._get_json(
            f"{cfg.endpoint}/competitions/{cfg.competition_code}/matches",
            params={"status": status, **params},
            headers={AUTH_HEADER: cfg.api_key},
        )
        return list(data["matches"])

    async def _collect(self) -> str:
        cfg = self._config
        competition = cfg.competition_name
        now = self._clock()
        today: date = now.date()
        season = now.year
        lines: list[str] = []

        live = await self._matches(STATUS_LIVE, season=season)
        if live:
            lines.append(f"Live {competition} matches right now:")
            lines.extend(format_live(match) for match in live)
        else:
            finished = await self._matches(
                STATUS_FINISHED,
                dateFrom=(today - timedelta(days=cfg.recent_window_days)).isoformat(),
                dateTo=today.isoformat(),
                season=season,
            )
            if finished:
                lines.append(
                    f"Recent finished {competition} matches "
                    f"(last {cfg.recent_window_days} days):"
                )
                finished.sort(key=lambda m: parse_utc(m["utcDate"]), reverse=True)
                lines.extend(format_finished(m) for m in finished[: cfg.max_matches])
            else:
                lines.append(f"No recent or live {competition} matches found.")

        upcoming = await self._matches(
            STATUS_SCHEDULED,
            dateFrom=today.isoformat(),
            dateTo=(today + timedelta(days=cfg.upcoming_window_days)).isoformat(),
            season=season,
        )
        lines.append("")
        if upcoming:
            lines.append(f"Upcoming {competition} fixtures (next week):")
            upcoming.sort(key=lambda m: parse_utc(m["utcDate"]))
            lines.extend(format_scheduled(m) for m in upcoming[: cfg.max_matches])
        else:
            lines.append(f"No upcoming {competition} fixtures found in the next week.")

        return "\n".join(lines)
