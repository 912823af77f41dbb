"""Settings toggles and config replacement; both persist the new config."""
from __future__ import annotations

import logging
from dataclasses import replace

from rinkside.actions import Action, NONE, ToggleSetting, UpdateConfig
from rinkside.config.loader import Config
from rinkside.effects import DataEffects
from rinkside.reducers.common import Transition
from rinkside.state import AppState

logger = logging.getLogger(__name__)


def apply_config(state: AppState, config: Config, effects: DataEffects) -> Transition:
    system = replace(state.system, config=config)
    ui = state.ui
    if config.standings_group != state.system.config.standings_group:
        ui = replace(ui, standings=replace(ui.standings, view=config.standings_group))
    return replace(state, system=system, ui=ui), effects.persist_config(config)


def toggle_setting(state: AppState, key: str, effects: DataEffects) -> Transition:
    config = state.system.config
    if key not in Config.bool_fields():
        logger.debug("Ignoring toggle for non-boolean setting %r", key)
        return state, NONE
    return apply_config(state, replace(config, **{key: not getattr(config, key)}), effects)


def reduce_settings(state: AppState, action: Action, effects: DataEffects) -> Transition | None:
    if isinstance(action, ToggleSetting):
        return toggle_setting(state, action.key, effects)
    if isinstance(action, UpdateConfig):
        return apply_config(state, action.config, effects)
    return None
