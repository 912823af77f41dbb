"""Status line, terminal size and shutdown."""
from __future__ import annotations

import logging
from dataclasses import replace

from rinkside.actions import NONE, Action, Error, Quit, Resize, SetStatusMessage
from rinkside.effects import DataEffects
from rinkside.reducers.common import Transition
from rinkside.state import AppState
from rinkside.tui.document_nav import MIN_VIEWPORT_HEIGHT

logger = logging.getLogger(__name__)

# tab bar, breadcrumb and status bar
CHROME_HEIGHT = 3


def resize(state: AppState, width: int, height: int) -> AppState:
    viewport = max(MIN_VIEWPORT_HEIGHT, height - CHROME_HEIGHT)
    return replace(state, ui=replace(state.ui, viewport_height=viewport, terminal_width=max(1, width)))


def reduce_system(state: AppState, action: Action, effects: DataEffects) -> Transition | None:
    if isinstance(action, SetStatusMessage):
        if action.is_error:
            system = state.system.set_status_error_message(action.message)
        else:
            system = state.system.set_status_message(action.message)
        return replace(state, system=system), NONE
    if isinstance(action, Resize):
        return resize(state, action.width, action.height), NONE
    if isinstance(action, Quit):
        return replace(state, system=replace(state.system, should_quit=True)), NONE
    if isinstance(action, Error):
        logger.error("Action error: %s", action.message)
        return replace(state, system=state.system.set_status_error_message(action.message)), NONE
    return None
