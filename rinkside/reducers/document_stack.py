"""Panel stack and document navigation.

Each stack entry carries its own navigation slot, so popping back to a
parent restores its scroll position and focus exactly.
"""
from __future__ import annotations

import logging
from dataclasses import replace

from rinkside.actions import (
    NONE,
    Action,
    ActivateFocused,
    Dispatch,
    DocumentNav,
    PopDocument,
    PushDocument,
    SetStatusMessage,
    StackedDocumentKey,
    ToggleSetting,
)
from rinkside.documents.settings import TOGGLE_PREFIX
from rinkside.effects import DataEffects
from rinkside.panels import Panel
from rinkside.reducers.common import Transition, apply_nav_msg, store_active_nav, synced_active_nav
from rinkside.state import (
    AppState,
    DocumentStackEntry,
    loading_key_for_panel,
    with_loading,
    without_entry,
)
from rinkside.tui.document_nav import DocumentNavState
from rinkside.tui.links import ActionTarget, UrlTarget, target_to_panel
from rinkside.tui.nav_keys import key_to_nav_msg

logger = logging.getLogger(__name__)


def push_document(state: AppState, panel: Panel, effects: DataEffects) -> Transition:
    entry = DocumentStackEntry(panel, DocumentNavState(viewport_height=state.ui.viewport_height))
    navigation = replace(
        state.navigation,
        document_stack=state.navigation.document_stack + (entry,),
        content_focused=True,
    )
    state = replace(state, navigation=navigation)
    key = loading_key_for_panel(panel)
    if state.data.panel_data(panel) is not None or key in state.data.loading:
        return state, NONE
    data = with_loading(state.data, key)
    data = replace(data, errors=without_entry(data.errors, key.error_key()))
    return replace(state, data=data), effects.fetch_for_panel(panel)


def pop_document(state: AppState) -> Transition:
    stack = state.navigation.document_stack
    if not stack:
        return state, NONE
    popped = stack[-1]
    state = replace(state, navigation=replace(state.navigation, document_stack=stack[:-1]))
    key = loading_key_for_panel(popped.panel)
    if key in state.data.loading:
        state = replace(state, data=with_loading(state.data, key, loading=False))
    return state, NONE


def activate_focused(state: AppState, effects: DataEffects) -> Transition:
    nav = synced_active_nav(state)
    state = store_active_nav(state, nav)
    target = nav.focused_link_target
    if target is None:
        return state, NONE
    panel = target_to_panel(target)
    if panel is not None:
        return push_document(state, panel, effects)
    if isinstance(target, ActionTarget) and target.name.startswith(TOGGLE_PREFIX):
        return state, Dispatch(ToggleSetting(target.name[len(TOGGLE_PREFIX):]))
    if isinstance(target, UrlTarget):
        return state, Dispatch(SetStatusMessage(f"External link: {target.url}"))
    logger.debug("Focused target %r opens nothing", target)
    return state, NONE


def reduce_document_stack(state: AppState, action: Action, effects: DataEffects) -> Transition | None:
    if isinstance(action, PushDocument):
        return push_document(state, action.panel, effects)
    if isinstance(action, PopDocument):
        return pop_document(state)
    if isinstance(action, ActivateFocused):
        return activate_focused(state, effects)
    if isinstance(action, DocumentNav):
        return apply_nav_msg(state, action.msg), NONE
    if isinstance(action, StackedDocumentKey):
        if not state.navigation.document_stack:
            return state, NONE
        msg = key_to_nav_msg(action.key)
        if msg is None:
            return state, NONE
        return apply_nav_msg(state, msg), NONE
    return None
