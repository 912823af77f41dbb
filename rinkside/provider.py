"""Data collaborators.

The runtime only needs "an awaitable returning data or raising".  Both
providers here return plain dicts in the normalized shapes below, so the
documents never see the upstream API's nesting:

  standings      list[{abbrev, name, conference, division, gp, w, l, otl, pts}]
  schedule       {date, games: [{id, away, home, away_score, home_score, state, start_time}]}
  game landing   {id, state, period, clock, away_score, home_score}
  boxscore       {id, away: {abbrev, skaters: [...]}, home: {...}}
  team roster    {abbrev, skaters: [{id, name, pos, gp, g, a, pts}], goalies: [...]}
  player         {id, name, team, position, number, seasons: [{season, team, gp, g, a, pts}]}
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping
from datetime import date
from typing import Any, Protocol

import httpx

from rinkside.utils.exceptions import APIError

logger = logging.getLogger(__name__)

STARTED_STATES = frozenset({"LIVE", "CRIT", "OFF", "FINAL"})


class DataProvider(Protocol):
    async def standings(self) -> list[dict[str, Any]]: ...

    async def schedule(self, day: date) -> dict[str, Any]: ...

    async def game_landing(self, game_id: int) -> dict[str, Any]: ...

    async def boxscore(self, game_id: int) -> dict[str, Any]: ...

    async def team_roster(self, abbrev: str) -> dict[str, Any]: ...

    async def player_landing(self, player_id: int) -> dict[str, Any]: ...


# ---------------------------- Normalizers ---------------------------- #

def _name(v: Any) -> str:
    # upstream localizes most strings as {"default": "..."}
    if isinstance(v, Mapping):
        return str(v.get("default", ""))
    return "" if v is None else str(v)


def normalize_standings(payload: Mapping[str, Any]) -> list[dict[str, Any]]:
    out = []
    for row in payload.get("standings", []):
        out.append({
            "abbrev": _name(row.get("teamAbbrev")),
            "name": _name(row.get("teamName")),
            "conference": row.get("conferenceName", ""),
            "division": row.get("divisionName", ""),
            "gp": row.get("gamesPlayed", 0),
            "w": row.get("wins", 0),
            "l": row.get("losses", 0),
            "otl": row.get("otLosses", 0),
            "pts": row.get("points", 0),
        })
    return out


def _normalize_game(g: Mapping[str, Any]) -> dict[str, Any]:
    away, home = g.get("awayTeam", {}), g.get("homeTeam", {})
    return {
        "id": g.get("id"),
        "away": away.get("abbrev", ""),
        "home": home.get("abbrev", ""),
        "away_score": away.get("score"),
        "home_score": home.get("score"),
        "state": g.get("gameState", "FUT"),
        "start_time": g.get("startTimeUTC", ""),
    }


def normalize_schedule(payload: Mapping[str, Any], day: date) -> dict[str, Any]:
    games: list[dict[str, Any]] = []
    for week_day in payload.get("gameWeek", []):
        if week_day.get("date") == day.isoformat():
            games = [_normalize_game(g) for g in week_day.get("games", [])]
            break
    return {"date": day.isoformat(), "games": games}


def normalize_landing(payload: Mapping[str, Any]) -> dict[str, Any]:
    clock = payload.get("clock") or {}
    period = payload.get("periodDescriptor") or {}
    return {
        "id": payload.get("id"),
        "state": payload.get("gameState", "FUT"),
        "period": period.get("number"),
        "clock": clock.get("timeRemaining", ""),
        "away_score": (payload.get("awayTeam") or {}).get("score"),
        "home_score": (payload.get("homeTeam") or {}).get("score"),
    }


def _skater(p: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "id": p.get("playerId"),
        "name": _name(p.get("name")),
        "pos": p.get("position", ""),
        "g": p.get("goals", 0),
        "a": p.get("assists", 0),
        "pts": p.get("points", 0),
    }


def normalize_boxscore(payload: Mapping[str, Any]) -> dict[str, Any]:
    stats = payload.get("playerByGameStats") or {}
    out: dict[str, Any] = {"id": payload.get("id")}
    for side in ("away", "home"):
        team = payload.get(f"{side}Team") or {}
        side_stats = stats.get(f"{side}Team") or {}
        skaters = list(side_stats.get("forwards", [])) + list(side_stats.get("defense", []))
        out[side] = {"abbrev": team.get("abbrev", ""), "skaters": [_skater(p) for p in skaters]}
    return out


def normalize_club_stats(payload: Mapping[str, Any], abbrev: str) -> dict[str, Any]:
    skaters = []
    for p in payload.get("skaters", []):
        skaters.append({
            "id": p.get("playerId"),
            "name": f"{_name(p.get('firstName'))} {_name(p.get('lastName'))}".strip(),
            "pos": p.get("positionCode", ""),
            "gp": p.get("gamesPlayed", 0),
            "g": p.get("goals", 0),
            "a": p.get("assists", 0),
            "pts": p.get("points", 0),
        })
    goalies = []
    for p in payload.get("goalies", []):
        goalies.append({
            "id": p.get("playerId"),
            "name": f"{_name(p.get('firstName'))} {_name(p.get('lastName'))}".strip(),
            "gp": p.get("gamesPlayed", 0),
            "w": p.get("wins", 0),
            "sv_pct": p.get("savePercentage") or 0.0,
        })
    return {"abbrev": abbrev, "skaters": skaters, "goalies": goalies}


def normalize_player(payload: Mapping[str, Any]) -> dict[str, Any]:
    seasons = []
    for s in payload.get("seasonTotals", []):
        if s.get("leagueAbbrev", "NHL") != "NHL":
            continue
        seasons.append({
            "season": s.get("season"),
            "team": _name(s.get("teamName")),
            "gp": s.get("gamesPlayed", 0),
            "g": s.get("goals", 0),
            "a": s.get("assists", 0),
            "pts": s.get("points", 0),
        })
    return {
        "id": payload.get("playerId"),
        "name": f"{_name(payload.get('firstName'))} {_name(payload.get('lastName'))}".strip(),
        "team": payload.get("currentTeamAbbrev", ""),
        "position": payload.get("position", ""),
        "number": payload.get("sweaterNumber"),
        "seasons": seasons,
    }


# ------------------------------ Providers ----------------------------- #

class HttpDataProvider:
    """Provider backed by the public NHL web API."""

    def __init__(self, base_url: str, timeout: float = 10.0, client: httpx.AsyncClient | None = None):
        self.base_url = base_url.rstrip("/")
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            headers={"User-Agent": "rinkside/0.1"},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def _get(self, path: str) -> Any:
        url = f"{self.base_url}/{path.lstrip('/')}"
        logger.debug("GET %s", url)
        response = await self._client.get(url)
        if response.status_code >= 400:
            raise APIError(f"HTTP {response.status_code} for {path}", status_code=response.status_code, url=url)
        try:
            return response.json()
        except ValueError as e:
            raise APIError(f"Invalid JSON from {path}", url=url) from e

    async def standings(self) -> list[dict[str, Any]]:
        return normalize_standings(await self._get("standings/now"))

    async def schedule(self, day: date) -> dict[str, Any]:
        return normalize_schedule(await self._get(f"schedule/{day.isoformat()}"), day)

    async def game_landing(self, game_id: int) -> dict[str, Any]:
        return normalize_landing(await self._get(f"gamecenter/{game_id}/landing"))

    async def boxscore(self, game_id: int) -> dict[str, Any]:
        return normalize_boxscore(await self._get(f"gamecenter/{game_id}/boxscore"))

    async def team_roster(self, abbrev: str) -> dict[str, Any]:
        return normalize_club_stats(await self._get(f"club-stats/{abbrev}/now"), abbrev)

    async def player_landing(self, player_id: int) -> dict[str, Any]:
        return normalize_player(await self._get(f"player/{player_id}/landing"))


class FixtureDataProvider:
    """In-memory provider with optional per-call delays and failures.

    ``delays`` and ``failures`` are keyed by call name (``"schedule"``) or by
    call name plus argument (``"schedule:2024-01-15"``); the more specific key
    wins.  Used by ``--fixtures`` mode and by tests that need fetches to
    finish out of order.
    """

    def __init__(
        self,
        data: Mapping[str, Any] | None = None,
        *,
        delays: Mapping[str, float] | None = None,
        failures: Mapping[str, str] | None = None,
    ):
        from rinkside import fixtures

        self.data = dict(data) if data is not None else fixtures.sample_data()
        self.delays = dict(delays or {})
        self.failures = dict(failures or {})
        self.calls: list[str] = []

    async def _serve(self, name: str, arg: Any, value: Any) -> Any:
        key = f"{name}:{arg}" if arg is not None else name
        self.calls.append(key)
        delay = self.delays.get(key, self.delays.get(name, 0.0))
        if delay:
            await asyncio.sleep(delay)
        failure = self.failures.get(key, self.failures.get(name))
        if failure is not None:
            raise APIError(failure)
        if value is None:
            raise APIError(f"No fixture for {key}")
        return value

    async def standings(self) -> list[dict[str, Any]]:
        return await self._serve("standings", None, self.data.get("standings"))

    async def schedule(self, day: date) -> dict[str, Any]:
        from rinkside import fixtures

        value = self.data.get("schedules", {}).get(day.isoformat()) or fixtures.schedule_for(day)
        return await self._serve("schedule", day.isoformat(), value)

    async def game_landing(self, game_id: int) -> dict[str, Any]:
        return await self._serve("game", game_id, self.data.get("games", {}).get(game_id))

    async def boxscore(self, game_id: int) -> dict[str, Any]:
        return await self._serve("boxscore", game_id, self.data.get("boxscores", {}).get(game_id))

    async def team_roster(self, abbrev: str) -> dict[str, Any]:
        return await self._serve("team", abbrev, self.data.get("rosters", {}).get(abbrev))

    async def player_landing(self, player_id: int) -> dict[str, Any]:
        return await self._serve("player", player_id, self.data.get("players", {}).get(player_id))


def game_has_started(game: Mapping[str, Any]) -> bool:
    return game.get("state") in STARTED_STATES


__all__ = [
    "DataProvider",
    "FixtureDataProvider",
    "HttpDataProvider",
    "game_has_started",
    "normalize_boxscore",
    "normalize_club_stats",
    "normalize_landing",
    "normalize_player",
    "normalize_schedule",
    "normalize_standings",
]
