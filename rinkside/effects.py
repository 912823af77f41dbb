"""Effect builders for data fetches and config persistence.

Every builder returns a ``RunAsync`` whose coroutine never raises: provider
exceptions become ``Err`` payloads on the completion action, so a failed
fetch is just another state transition.
"""
from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from datetime import date
from typing import Any

from rinkside.actions import (
    NONE,
    Action,
    BoxscoreLoaded,
    Effect,
    Err,
    GameDetailsLoaded,
    Ok,
    PlayerStatsLoaded,
    Result,
    RunAsync,
    ScheduleLoaded,
    SetStatusMessage,
    StandingsLoaded,
    TeamRosterLoaded,
    batch,
)
from rinkside.config.loader import Config
from rinkside.error_handling import handle_config_error, handle_fetch_error
from rinkside.panels import BoxscorePanel, Panel, PlayerPanel, TeamPanel
from rinkside.provider import DataProvider, game_has_started

logger = logging.getLogger(__name__)

SaveConfig = Callable[[Config], None]


async def _capture(key: str, call: Callable[[], Awaitable[Any]]) -> Result:
    try:
        return Ok(await call())
    except asyncio.CancelledError:
        raise
    except Exception as e:
        handle_fetch_error(e, key)
        return Err(str(e) or type(e).__name__)


class DataEffects:
    def __init__(self, provider: DataProvider, save_config: SaveConfig | None = None):
        self.provider = provider
        self.save_config = save_config

    def _run(self, label: str, make: Callable[[], Awaitable[Action]]) -> RunAsync:
        return RunAsync(make, label=label)

    def fetch_standings(self) -> Effect:
        async def run() -> Action:
            return StandingsLoaded(await _capture("standings", self.provider.standings))
        return self._run("standings", run)

    def fetch_schedule(self, day: date) -> Effect:
        async def run() -> Action:
            return ScheduleLoaded(day, await _capture(f"schedule:{day}", lambda: self.provider.schedule(day)))
        return self._run(f"schedule:{day}", run)

    def fetch_game_details(self, game_id: int) -> Effect:
        async def run() -> Action:
            return GameDetailsLoaded(game_id, await _capture(f"game:{game_id}", lambda: self.provider.game_landing(game_id)))
        return self._run(f"game:{game_id}", run)

    def fetch_boxscore(self, game_id: int) -> Effect:
        async def run() -> Action:
            return BoxscoreLoaded(game_id, await _capture(f"boxscore:{game_id}", lambda: self.provider.boxscore(game_id)))
        return self._run(f"boxscore:{game_id}", run)

    def fetch_team_roster(self, abbrev: str) -> Effect:
        async def run() -> Action:
            return TeamRosterLoaded(abbrev, await _capture(f"team:{abbrev}", lambda: self.provider.team_roster(abbrev)))
        return self._run(f"team:{abbrev}", run)

    def fetch_player(self, player_id: int) -> Effect:
        async def run() -> Action:
            return PlayerStatsLoaded(player_id, await _capture(f"player:{player_id}", lambda: self.provider.player_landing(player_id)))
        return self._run(f"player:{player_id}", run)

    def fetch_for_panel(self, panel: Panel) -> Effect:
        if isinstance(panel, TeamPanel):
            return self.fetch_team_roster(panel.abbrev)
        if isinstance(panel, PlayerPanel):
            return self.fetch_player(panel.player_id)
        if isinstance(panel, BoxscorePanel):
            return self.fetch_boxscore(panel.game_id)
        return NONE

    def handle_refresh(self, game_date: date, schedule: dict[str, Any] | None) -> Effect:
        """Standings, the selected day's schedule and details for games already under way."""
        effects = [self.fetch_standings(), self.fetch_schedule(game_date)]
        if schedule:
            for game in schedule.get("games", []):
                if game_has_started(game) and game.get("id") is not None:
                    effects.append(self.fetch_game_details(int(game["id"])))
        return batch(effects)

    def persist_config(self, config: Config) -> Effect:
        save = self.save_config
        if save is None:
            return NONE

        async def run() -> Action:
            try:
                await asyncio.to_thread(save, config)
            except Exception as e:
                handle_config_error(e, context={"op": "save"})
                return SetStatusMessage(f"Failed to save settings: {e}", is_error=True)
            return SetStatusMessage("Settings saved")
        return self._run("save_config", run)


__all__ = ["DataEffects", "SaveConfig"]
