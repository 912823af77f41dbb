"""Documents built from application state.

Building is a pure function of state; nothing here is cached between
frames.
"""
from __future__ import annotations

from rinkside.panels import BoxscorePanel, Panel, PlayerPanel, TeamPanel
from rinkside.state import AppState, ScheduleKey, Tab, loading_key_for_panel
from rinkside.tui.document import Document
from rinkside.utils.exceptions import DocumentError

from .demo import DemoDocument
from .detail import BoxscoreDocument, PlayerDocument, TeamDocument
from .scores import ScoresDocument
from .settings import SettingsDocument
from .standings import StandingsDocument


def document_for_tab(tab: Tab, state: AppState) -> Document:
    data = state.data
    if tab is Tab.SCORES:
        game_date = state.ui.scores.game_date
        key = ScheduleKey(game_date)
        return ScoresDocument(
            game_date,
            data.schedule,
            data.game_info,
            boxes_per_row=state.ui.scores.boxes_per_row,
            loading=key in data.loading,
            error=data.errors.get(key.error_key()),
        )
    if tab is Tab.STANDINGS:
        return StandingsDocument(
            data.standings,
            grouping=state.ui.standings.view,
            western_first=state.system.config.display_standings_western_first,
            error=data.errors.get("standings"),
        )
    if tab is Tab.SETTINGS:
        return SettingsDocument(state.system.config)
    return DemoDocument()


def document_for_panel(panel: Panel, state: AppState) -> Document:
    data = state.data
    key = loading_key_for_panel(panel)
    loading = key in data.loading
    error = data.errors.get(key.error_key())
    if isinstance(panel, TeamPanel):
        return TeamDocument(panel.abbrev, data.team_rosters.get(panel.abbrev), loading, error)
    if isinstance(panel, PlayerPanel):
        return PlayerDocument(panel.player_id, data.players.get(panel.player_id), loading, error)
    if isinstance(panel, BoxscorePanel):
        return BoxscoreDocument(panel.game_id, data.boxscores.get(panel.game_id), loading, error)
    raise DocumentError(f"No document for panel {panel!r}")


def active_document(state: AppState) -> Document:
    stack = state.navigation.document_stack
    if stack:
        return document_for_panel(stack[-1].panel, state)
    return document_for_tab(state.navigation.current_tab, state)


__all__ = [
    "BoxscoreDocument",
    "DemoDocument",
    "PlayerDocument",
    "ScoresDocument",
    "SettingsDocument",
    "StandingsDocument",
    "TeamDocument",
    "active_document",
    "document_for_panel",
    "document_for_tab",
]
