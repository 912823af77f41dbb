"""Top-level reducer.

``reduce`` is pure: it never performs I/O and never mutates its input.
Side effects come back as ``Effect`` values for the runtime to execute.
Each sub-reducer returns ``None`` for actions it does not own; the first
one that claims an action wins.
"""
from __future__ import annotations

import logging

from rinkside.actions import NONE, Action, Effect
from rinkside.effects import DataEffects
from rinkside.reducers import (
    reduce_component,
    reduce_data_loading,
    reduce_document_stack,
    reduce_navigation,
    reduce_scores,
    reduce_settings,
    reduce_system,
)
from rinkside.state import AppState

logger = logging.getLogger(__name__)

SUB_REDUCERS = (
    reduce_navigation,
    reduce_document_stack,
    reduce_data_loading,
    reduce_scores,
    reduce_component,
    reduce_settings,
    reduce_system,
)


def reduce(state: AppState, action: Action, effects: DataEffects) -> tuple[AppState, Effect]:
    for sub in SUB_REDUCERS:
        result = sub(state, action, effects)
        if result is not None:
            return result
    logger.debug("Unhandled action %s", type(action).__name__)
    return state, NONE


__all__ = ["reduce", "SUB_REDUCERS"]
