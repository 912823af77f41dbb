"""Routing of ``ComponentMessage`` payloads to their component reducers.

A route names the message types it accepts; anything else addressed to
the path, or a path nobody registered, is ignored.
"""
from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from rinkside.actions import NONE, Action, ComponentMessage
from rinkside.effects import DataEffects
from rinkside.reducers.common import Transition
from rinkside.reducers.scores import (
    SCORES_PATH,
    EnterBoxSelection,
    ExitBoxSelection,
    SelectDate,
    handle_scores_msg,
)
from rinkside.reducers.standings import (
    STANDINGS_PATH,
    CycleView,
    EnterBrowseMode,
    ExitBrowseMode,
    handle_standings_msg,
)
from rinkside.state import AppState

logger = logging.getLogger(__name__)

Handler = Callable[[AppState, Any, DataEffects], Transition]


@dataclass(frozen=True)
class ComponentRoute:
    accepts: tuple[type, ...]
    handler: Handler


ROUTES: dict[str, ComponentRoute] = {
    SCORES_PATH: ComponentRoute((SelectDate, EnterBoxSelection, ExitBoxSelection), handle_scores_msg),
    STANDINGS_PATH: ComponentRoute((CycleView, EnterBrowseMode, ExitBrowseMode), handle_standings_msg),
}


def reduce_component(state: AppState, action: Action, effects: DataEffects) -> Transition | None:
    if not isinstance(action, ComponentMessage):
        return None
    route = ROUTES.get(action.path)
    if route is None:
        logger.debug("No component registered at %s", action.path)
        return state, NONE
    if not isinstance(action.msg, route.accepts):
        logger.debug("Component %s ignores %s", action.path, type(action.msg).__name__)
        return state, NONE
    return route.handler(state, action.msg, effects)
