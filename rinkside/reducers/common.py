"""Helpers shared by sub-reducers that touch the active document."""
from __future__ import annotations

from dataclasses import replace

from rinkside.actions import Effect
from rinkside.documents import active_document
from rinkside.state import AppState, active_nav, with_tab_nav, with_top_entry_nav
from rinkside.tui.document import Document
from rinkside.tui.document_nav import DocumentNavState, NavMsg, handle_message, sync_focusables

Transition = tuple[AppState, Effect]


def synced_nav(state: AppState, nav: DocumentNavState, document: Document) -> DocumentNavState:
    """``nav`` refreshed against the document as built from the current state."""
    if nav.viewport_height != state.ui.viewport_height:
        nav = replace(nav, viewport_height=state.ui.viewport_height)
    return sync_focusables(nav, document.focusable_elements(), document.calculate_height())


def store_active_nav(state: AppState, nav: DocumentNavState) -> AppState:
    if state.navigation.document_stack:
        return with_top_entry_nav(state, nav)
    return with_tab_nav(state, state.navigation.current_tab, nav)


def synced_active_nav(state: AppState) -> DocumentNavState:
    return synced_nav(state, active_nav(state), active_document(state))


def apply_nav_msg(state: AppState, msg: NavMsg) -> AppState:
    nav = handle_message(synced_active_nav(state), msg)
    return store_active_nav(state, nav)
