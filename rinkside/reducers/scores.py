"""Scores tab: the date strip and game-box selection."""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, timedelta

from rinkside.actions import NONE, Action, Dispatch, RefreshSchedule
from rinkside.effects import DataEffects
from rinkside.reducers.common import Transition
from rinkside.state import DATE_WINDOW, AppState, ScheduleKey, frozen_map, with_loading, without_entry

SCORES_PATH = "app/scores"


@dataclass(frozen=True, slots=True)
class SelectDate:
    """Move the selected day by ``delta``; the strip slides when the edge is passed."""
    delta: int


@dataclass(frozen=True, slots=True)
class EnterBoxSelection:
    pass


@dataclass(frozen=True, slots=True)
class ExitBoxSelection:
    pass


ScoresMsg = SelectDate | EnterBoxSelection | ExitBoxSelection


def refresh_schedule(state: AppState, day: date, effects: DataEffects) -> Transition:
    key = ScheduleKey(day)
    data = replace(state.data, schedule=None, game_info=frozen_map())
    data = with_loading(data, key)
    data = replace(data, errors=without_entry(data.errors, key.error_key()))
    ui = replace(state.ui, scores=replace(state.ui.scores, game_date=day))
    return replace(state, data=data, ui=ui), effects.fetch_schedule(day)


def select_date(state: AppState, delta: int) -> Transition:
    if delta == 0:
        return state, NONE
    scores = state.ui.scores
    index = min(max(scores.selected_date_index + delta, 0), DATE_WINDOW - 1)
    new_date = scores.game_date + timedelta(days=delta)
    scores = replace(scores, selected_date_index=index, box_selection_active=False)
    state = replace(state, ui=replace(state.ui, scores=scores))
    return state, Dispatch(RefreshSchedule(new_date))


def handle_scores_msg(state: AppState, msg: ScoresMsg, effects: DataEffects) -> Transition:
    if isinstance(msg, SelectDate):
        return select_date(state, msg.delta)
    scores = state.ui.scores
    if isinstance(msg, EnterBoxSelection):
        scores = replace(scores, box_selection_active=True)
    elif isinstance(msg, ExitBoxSelection):
        scores = replace(scores, box_selection_active=False)
    return replace(state, ui=replace(state.ui, scores=scores)), NONE


def reduce_scores(state: AppState, action: Action, effects: DataEffects) -> Transition | None:
    if isinstance(action, RefreshSchedule):
        return refresh_schedule(state, action.date, effects)
    return None
