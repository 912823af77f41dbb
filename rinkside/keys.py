"""Key press to action mapping.

``key_to_action`` is a pure function of the key and the current state.
Focus moves through three levels: the tab bar, the tab's content and the
panel stack on top of it.  Global keys are checked first, then the level
that currently owns focus.
"""
from __future__ import annotations

from datetime import datetime

from rinkside.actions import (
    Action,
    ActivateFocused,
    ComponentMessage,
    DocumentNav,
    EnterContentFocus,
    ExitContentFocus,
    NavigateTab,
    NavigateTabLeft,
    NavigateTabRight,
    NavigateUp,
    Quit,
    RefreshData,
    StackedDocumentKey,
)
from rinkside.reducers.scores import SCORES_PATH, EnterBoxSelection, ExitBoxSelection, SelectDate
from rinkside.reducers.standings import STANDINGS_PATH, CycleView, EnterBrowseMode, ExitBrowseMode
from rinkside.state import AppState, Tab, active_nav
from rinkside.tui.nav_keys import KeyEvent, key_to_nav_msg


def _global(event: KeyEvent) -> Action | None:
    if event.key in ("q", "ctrl+c"):
        return Quit()
    if event.char and event.char.isdigit():
        tab = Tab.from_number(int(event.char))
        if tab is not None:
            return NavigateTab(tab)
    return None


def _tab_bar(event: KeyEvent) -> Action | None:
    if event.key == "left":
        return NavigateTabLeft()
    if event.key == "right":
        return NavigateTabRight()
    if event.key in ("down", "enter"):
        return EnterContentFocus()
    return None


def _stacked(event: KeyEvent, state: AppState) -> Action | None:
    if event.key in ("escape", "backspace"):
        return NavigateUp()
    if event.key == "enter":
        return ActivateFocused()
    if event.key == "up" and active_nav(state).focus_index == 0:
        return NavigateUp()
    if key_to_nav_msg(event) is not None:
        return StackedDocumentKey(event)
    return None


def _scores(event: KeyEvent, state: AppState) -> Action | None:
    if state.ui.scores.box_selection_active:
        if event.key == "up" and active_nav(state).focus_index in (None, 0):
            return ComponentMessage(SCORES_PATH, ExitBoxSelection())
        return None
    if event.key == "left":
        return ComponentMessage(SCORES_PATH, SelectDate(-1))
    if event.key == "right":
        return ComponentMessage(SCORES_PATH, SelectDate(1))
    if event.key in ("down", "enter"):
        return ComponentMessage(SCORES_PATH, EnterBoxSelection())
    if event.key == "up":
        return ExitContentFocus()
    return None


def _standings(event: KeyEvent, state: AppState) -> Action | None:
    if state.ui.standings.browse_mode:
        if event.key == "up" and active_nav(state).focus_index in (None, 0):
            return ComponentMessage(STANDINGS_PATH, ExitBrowseMode())
        return None
    if event.key == "left":
        return ComponentMessage(STANDINGS_PATH, CycleView(-1))
    if event.key == "right":
        return ComponentMessage(STANDINGS_PATH, CycleView(1))
    if event.key in ("down", "enter"):
        return ComponentMessage(STANDINGS_PATH, EnterBrowseMode())
    if event.key == "up":
        return ExitContentFocus()
    return None


def _content(event: KeyEvent, state: AppState) -> Action | None:
    if event.key == "escape":
        return NavigateUp()
    if event.key == "r":
        return RefreshData(at=datetime.now())
    tab = state.navigation.current_tab
    if tab is Tab.SCORES:
        action = _scores(event, state)
        if action is not None or not state.ui.scores.box_selection_active:
            return action
    elif tab is Tab.STANDINGS:
        action = _standings(event, state)
        if action is not None or not state.ui.standings.browse_mode:
            return action
    elif event.key == "up" and active_nav(state).focus_index in (None, 0):
        return ExitContentFocus()
    if event.key == "enter":
        return ActivateFocused()
    msg = key_to_nav_msg(event)
    return DocumentNav(msg) if msg is not None else None


def key_to_action(event: KeyEvent, state: AppState) -> Action | None:
    action = _global(event)
    if action is not None:
        return action
    if state.navigation.document_stack:
        return _stacked(event, state)
    if not state.navigation.content_focused:
        return _tab_bar(event)
    return _content(event, state)


__all__ = ["key_to_action"]
