"""Tab switching and the tab-bar / content focus state machine."""
from __future__ import annotations

from dataclasses import replace

from rinkside.actions import (
    NONE,
    Action,
    EnterContentFocus,
    ExitContentFocus,
    NavigateTab,
    NavigateTabLeft,
    NavigateTabRight,
    NavigateUp,
)
from rinkside.effects import DataEffects
from rinkside.reducers.common import Transition
from rinkside.reducers.document_stack import pop_document
from rinkside.state import AppState, Tab


def switch_tab(state: AppState, tab: Tab) -> AppState:
    """Any tab change drops the panel stack and returns focus to the tab bar."""
    nav = replace(state.navigation, current_tab=tab, document_stack=(), content_focused=False)
    return _clear_selection_modes(replace(state, navigation=nav))


def _clear_selection_modes(state: AppState) -> AppState:
    ui = state.ui
    if ui.scores.box_selection_active or ui.standings.browse_mode:
        ui = replace(
            ui,
            scores=replace(ui.scores, box_selection_active=False),
            standings=replace(ui.standings, browse_mode=False),
        )
        state = replace(state, ui=ui)
    return state


def exit_content_focus(state: AppState) -> AppState:
    state = replace(state, navigation=replace(state.navigation, content_focused=False))
    return _clear_selection_modes(state)


def reduce_navigation(state: AppState, action: Action, effects: DataEffects) -> Transition | None:
    if isinstance(action, NavigateTab):
        return switch_tab(state, action.tab), NONE
    if isinstance(action, NavigateTabLeft):
        return switch_tab(state, state.navigation.current_tab.prev()), NONE
    if isinstance(action, NavigateTabRight):
        return switch_tab(state, state.navigation.current_tab.next()), NONE
    if isinstance(action, EnterContentFocus):
        return replace(state, navigation=replace(state.navigation, content_focused=True)), NONE
    if isinstance(action, ExitContentFocus):
        return exit_content_focus(state), NONE
    if isinstance(action, NavigateUp):
        if state.navigation.document_stack:
            return pop_document(state)
        if state.navigation.content_focused:
            return exit_content_focus(state), NONE
        return state, NONE
    return None
