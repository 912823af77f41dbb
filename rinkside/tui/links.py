"""Activation targets carried by focusable elements."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field

from rinkside.panels import BoxscorePanel, Panel, PlayerPanel, TeamPanel

logger = logging.getLogger(__name__)

BOXSCORE_ACTION_PREFIX = "open_boxscore_"


@dataclass(frozen=True, slots=True)
class DocumentLink:
    """Link into another document: kind is team, player, game or a custom name."""
    kind: str
    key: str
    params: tuple[tuple[str, str], ...] = field(default=())

    @classmethod
    def team(cls, abbrev: str) -> DocumentLink:
        return cls("team", abbrev)

    @classmethod
    def player(cls, player_id: int) -> DocumentLink:
        return cls("player", str(player_id))

    @classmethod
    def game(cls, game_id: int) -> DocumentLink:
        return cls("game", str(game_id))


@dataclass(frozen=True, slots=True)
class ActionTarget:
    name: str


@dataclass(frozen=True, slots=True)
class DocumentTarget:
    link: DocumentLink


@dataclass(frozen=True, slots=True)
class UrlTarget:
    url: str


LinkTarget = ActionTarget | DocumentTarget | UrlTarget


def team_action(abbrev: str) -> ActionTarget:
    return ActionTarget(f"team:{abbrev}")


def player_action(player_id: int) -> ActionTarget:
    return ActionTarget(f"player:{player_id}")


def boxscore_action(game_id: int) -> ActionTarget:
    return ActionTarget(f"{BOXSCORE_ACTION_PREFIX}{game_id}")


def _to_int(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def parse_action_target(name: str) -> Panel | None:
    """Map an action name like ``team:TOR`` to the panel it opens."""
    if name.startswith("team:"):
        abbrev = name[len("team:"):].strip()
        return TeamPanel(abbrev) if abbrev else None
    if name.startswith("player:"):
        pid = _to_int(name[len("player:"):])
        return PlayerPanel(pid) if pid is not None else None
    if name.startswith(BOXSCORE_ACTION_PREFIX):
        gid = _to_int(name[len(BOXSCORE_ACTION_PREFIX):])
        return BoxscorePanel(gid) if gid is not None else None
    logger.debug("Unrecognised action target %r", name)
    return None


def target_to_panel(target: LinkTarget | None) -> Panel | None:
    if isinstance(target, ActionTarget):
        return parse_action_target(target.name)
    if isinstance(target, DocumentTarget):
        link = target.link
        if link.kind == "team":
            return TeamPanel(link.key)
        num = _to_int(link.key)
        if num is None:
            return None
        if link.kind == "player":
            return PlayerPanel(num)
        if link.kind == "game":
            return BoxscorePanel(num)
    # Url targets and custom document kinds open nothing inside the dashboard
    return None


__all__ = [
    "ActionTarget",
    "DocumentLink",
    "DocumentTarget",
    "LinkTarget",
    "UrlTarget",
    "boxscore_action",
    "parse_action_target",
    "player_action",
    "target_to_panel",
    "team_action",
]
