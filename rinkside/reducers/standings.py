"""Standings tab: grouping view and browse mode."""
from __future__ import annotations

from dataclasses import dataclass, replace

from rinkside.actions import NONE
from rinkside.config.loader import STANDINGS_GROUPS
from rinkside.effects import DataEffects
from rinkside.reducers.common import Transition
from rinkside.state import AppState

STANDINGS_PATH = "app/standings"


@dataclass(frozen=True, slots=True)
class CycleView:
    delta: int = 1


@dataclass(frozen=True, slots=True)
class EnterBrowseMode:
    pass


@dataclass(frozen=True, slots=True)
class ExitBrowseMode:
    pass


StandingsMsg = CycleView | EnterBrowseMode | ExitBrowseMode


def cycle_view(view: str, delta: int) -> str:
    try:
        i = STANDINGS_GROUPS.index(view)
    except ValueError:
        i = 0
    return STANDINGS_GROUPS[(i + delta) % len(STANDINGS_GROUPS)]


def handle_standings_msg(state: AppState, msg: StandingsMsg, effects: DataEffects) -> Transition:
    standings = state.ui.standings
    if isinstance(msg, CycleView):
        standings = replace(standings, view=cycle_view(standings.view, msg.delta), browse_mode=False)
    elif isinstance(msg, EnterBrowseMode):
        standings = replace(standings, browse_mode=True)
    elif isinstance(msg, ExitBrowseMode):
        standings = replace(standings, browse_mode=False)
    return replace(state, ui=replace(state.ui, standings=standings)), NONE
