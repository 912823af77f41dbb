"""Fetch completions and full refreshes.

Every completion clears its loading key first.  Success stores the payload
and clears the key's error; failure records the message under the key's
error name.  Schedule results are keyed by date and dropped when the user
has since moved to another day.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
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
    RefreshData,
    Result,
    ScheduleLoaded,
    StandingsLoaded,
    TeamRosterLoaded,
    batch,
)
from rinkside.effects import DataEffects
from rinkside.provider import game_has_started
from rinkside.reducers.common import Transition
from rinkside.state import (
    AppState,
    BoxscoreKey,
    DataState,
    GameDetailsKey,
    LoadingKey,
    PlayerStatsKey,
    ScheduleKey,
    StandingsKey,
    TeamRosterKey,
    with_entry,
    with_loading,
    without_entry,
)

logger = logging.getLogger(__name__)


def complete_load(
    data: DataState,
    key: LoadingKey,
    result: Result,
    store: Callable[[DataState, Any], DataState],
) -> DataState:
    data = with_loading(data, key, loading=False)
    error_key = key.error_key()
    if isinstance(result, Ok):
        data = store(data, result.value)
        return replace(data, errors=without_entry(data.errors, error_key))
    if isinstance(result, Err):
        return replace(data, errors=with_entry(data.errors, error_key, result.message))
    return data


def _game_detail_fetches(state: AppState, schedule: dict[str, Any] | None, effects: DataEffects) -> tuple[DataState, Effect]:
    """Detail fetches for started games whose details are neither present nor in flight.

    A refresh already requests details for games that had started in the
    previous schedule, so this only picks up games that started since.
    """
    data = state.data
    fetches = []
    for game in (schedule or {}).get("games", []):
        gid = game.get("id")
        if gid is None or not game_has_started(game):
            continue
        key = GameDetailsKey(int(gid))
        if key in data.loading or int(gid) in data.game_info:
            continue
        data = with_loading(data, key)
        fetches.append(effects.fetch_game_details(int(gid)))
    return data, batch(fetches)


def refresh_data(state: AppState, action: RefreshData, effects: DataEffects) -> Transition:
    game_date = state.ui.scores.game_date
    keys: list[LoadingKey] = [StandingsKey(), ScheduleKey(game_date)]
    for game in (state.data.schedule or {}).get("games", []):
        if game.get("id") is not None and game_has_started(game):
            keys.append(GameDetailsKey(int(game["id"])))
    data = state.data
    errors = data.errors
    for key in keys:
        data = with_loading(data, key)
        errors = without_entry(errors, key.error_key())
    data = replace(data, errors=errors)
    system = state.system
    if action.at is not None:
        system = replace(system, last_refresh=action.at)
    state = replace(state, data=data, system=system)
    return state, effects.handle_refresh(game_date, data.schedule)


def reduce_data_loading(state: AppState, action: Action, effects: DataEffects) -> Transition | None:
    if isinstance(action, RefreshData):
        return refresh_data(state, action, effects)

    if isinstance(action, StandingsLoaded):
        data = complete_load(state.data, StandingsKey(), action.result,
                             lambda d, v: replace(d, standings=v))
        return replace(state, data=data), NONE

    if isinstance(action, ScheduleLoaded):
        key = ScheduleKey(action.date)
        if action.date != state.ui.scores.game_date:
            logger.debug("Dropping stale schedule for %s (showing %s)", action.date, state.ui.scores.game_date)
            return replace(state, data=with_loading(state.data, key, loading=False)), NONE
        data = complete_load(state.data, key, action.result, lambda d, v: replace(d, schedule=v))
        state = replace(state, data=data)
        if isinstance(action.result, Ok):
            data, fetches = _game_detail_fetches(state, data.schedule, effects)
            return replace(state, data=data), fetches
        return state, NONE

    if isinstance(action, GameDetailsLoaded):
        data = complete_load(state.data, GameDetailsKey(action.game_id), action.result,
                             lambda d, v: replace(d, game_info=with_entry(d.game_info, action.game_id, v)))
        return replace(state, data=data), NONE

    if isinstance(action, BoxscoreLoaded):
        data = complete_load(state.data, BoxscoreKey(action.game_id), action.result,
                             lambda d, v: replace(d, boxscores=with_entry(d.boxscores, action.game_id, v)))
        return replace(state, data=data), NONE

    if isinstance(action, TeamRosterLoaded):
        data = complete_load(state.data, TeamRosterKey(action.abbrev), action.result,
                             lambda d, v: replace(d, team_rosters=with_entry(d.team_rosters, action.abbrev, v)))
        return replace(state, data=data), NONE

    if isinstance(action, PlayerStatsLoaded):
        data = complete_load(state.data, PlayerStatsKey(action.player_id), action.result,
                             lambda d, v: replace(d, players=with_entry(d.players, action.player_id, v)))
        return replace(state, data=data), NONE

    return None
