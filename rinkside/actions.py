"""Actions and effects.

Actions describe something that happened (a key press outcome, a finished
fetch); effects describe work to do after a state transition.  Both are
immutable values, so the runtime can queue, batch and replay them freely.
"""
from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import TYPE_CHECKING, Any

from rinkside.config.loader import Config
from rinkside.panels import Panel
from rinkside.tui.document_nav import NavMsg

if TYPE_CHECKING:  # pragma: no cover
    from rinkside.state import Tab
    from rinkside.tui.nav_keys import KeyEvent


# ----------------------------- Results ------------------------------ #

@dataclass(frozen=True, slots=True)
class Ok:
    value: Any


@dataclass(frozen=True, slots=True)
class Err:
    message: str


Result = Ok | Err


# ---------------------------- Navigation ---------------------------- #

@dataclass(frozen=True, slots=True)
class NavigateTab:
    tab: Tab


@dataclass(frozen=True, slots=True)
class NavigateTabLeft:
    pass


@dataclass(frozen=True, slots=True)
class NavigateTabRight:
    pass


@dataclass(frozen=True, slots=True)
class EnterContentFocus:
    pass


@dataclass(frozen=True, slots=True)
class ExitContentFocus:
    pass


@dataclass(frozen=True, slots=True)
class NavigateUp:
    """Back out one level: pop a panel, else leave content focus."""


@dataclass(frozen=True, slots=True)
class PushDocument:
    panel: Panel


@dataclass(frozen=True, slots=True)
class PopDocument:
    pass


@dataclass(frozen=True, slots=True)
class ActivateFocused:
    """Open whatever the focused element of the active document links to."""


@dataclass(frozen=True, slots=True)
class DocumentNav:
    """Navigation message for the active tab's document."""
    msg: NavMsg


@dataclass(frozen=True, slots=True)
class StackedDocumentKey:
    """Key press routed to the top of the panel stack."""
    key: KeyEvent


@dataclass(frozen=True, slots=True)
class Resize:
    width: int
    height: int


# ------------------------------- Data ------------------------------- #

@dataclass(frozen=True, slots=True)
class RefreshData:
    """Reload everything on screen; ``at`` is the wall-clock time captured by the caller."""
    at: datetime | None = None


@dataclass(frozen=True, slots=True)
class RefreshSchedule:
    date: date


@dataclass(frozen=True, slots=True)
class StandingsLoaded:
    result: Result


@dataclass(frozen=True, slots=True)
class ScheduleLoaded:
    date: date
    result: Result


@dataclass(frozen=True, slots=True)
class GameDetailsLoaded:
    game_id: int
    result: Result


@dataclass(frozen=True, slots=True)
class BoxscoreLoaded:
    game_id: int
    result: Result


@dataclass(frozen=True, slots=True)
class TeamRosterLoaded:
    abbrev: str
    result: Result


@dataclass(frozen=True, slots=True)
class PlayerStatsLoaded:
    player_id: int
    result: Result


# ------------------------ Components / system ------------------------ #

@dataclass(frozen=True, slots=True)
class ComponentMessage:
    """A component-family message addressed by path, e.g. ``app/scores``."""
    path: str
    msg: Any


@dataclass(frozen=True, slots=True)
class SetStatusMessage:
    message: str
    is_error: bool = False


@dataclass(frozen=True, slots=True)
class ToggleSetting:
    key: str


@dataclass(frozen=True, slots=True)
class UpdateConfig:
    config: Config


@dataclass(frozen=True, slots=True)
class Quit:
    pass


@dataclass(frozen=True, slots=True)
class Error:
    message: str


Action = (
    NavigateTab | NavigateTabLeft | NavigateTabRight
    | EnterContentFocus | ExitContentFocus | NavigateUp
    | PushDocument | PopDocument | ActivateFocused
    | DocumentNav | StackedDocumentKey | Resize
    | RefreshData | RefreshSchedule
    | StandingsLoaded | ScheduleLoaded | GameDetailsLoaded
    | BoxscoreLoaded | TeamRosterLoaded | PlayerStatsLoaded
    | ComponentMessage | SetStatusMessage | ToggleSetting | UpdateConfig
    | Quit | Error
)


def should_render(action: Action) -> bool:
    """Errors are logged, not drawn; everything else may change the frame."""
    return not isinstance(action, Error)


# ------------------------------ Effects ------------------------------ #

@dataclass(frozen=True, slots=True)
class NoEffect:
    pass


@dataclass(frozen=True, slots=True)
class RunAsync:
    """Start ``factory()`` concurrently; its resulting action is dispatched on completion."""
    factory: Callable[[], Awaitable[Action]]
    label: str = ""


@dataclass(frozen=True, slots=True)
class Dispatch:
    action: Action


@dataclass(frozen=True, slots=True)
class Batch:
    effects: tuple[Effect, ...] = field(default=())


Effect = NoEffect | RunAsync | Dispatch | Batch

NONE = NoEffect()


def batch(effects: Iterable[Effect]) -> Effect:
    """Flatten nested batches and drop no-op members."""
    flat: list[Effect] = []
    for eff in effects:
        if isinstance(eff, Batch):
            inner = batch(eff.effects)
            if isinstance(inner, Batch):
                flat.extend(inner.effects)
            elif not isinstance(inner, NoEffect):
                flat.append(inner)
        elif not isinstance(eff, NoEffect):
            flat.append(eff)
    if not flat:
        return NONE
    if len(flat) == 1:
        return flat[0]
    return Batch(tuple(flat))


def action_name(action: Action) -> str:
    return type(action).__name__
