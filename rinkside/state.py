"""Application state.

State is a tree of frozen dataclasses split into independent regions
(navigation, fetched data, per-screen UI, system).  Reducers never mutate
it; they build the next value with ``dataclasses.replace`` and the runtime
swaps it in.  Mapping fields are treated as read-only and always replaced
wholesale.
"""
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from datetime import date, datetime, timedelta
from enum import Enum
from types import MappingProxyType
from typing import Any

from rinkside.config.loader import Config
from rinkside.panels import BoxscorePanel, Panel, PlayerPanel, TeamPanel
from rinkside.tui.document_nav import DocumentNavState

DEFAULT_STATUS_MESSAGE = (
    "Keys: ←→ navigate | ↓ enter | ↑/ESC back | r refresh | q quit | 1-4 jump to tab"
)

DATE_WINDOW = 5
DEFAULT_VIEWPORT_HEIGHT = 20


class Tab(Enum):
    SCORES = "Scores"
    STANDINGS = "Standings"
    SETTINGS = "Settings"
    DEMO = "Demo"

    @property
    def label(self) -> str:
        return self.value

    def next(self) -> Tab:
        order = list(Tab)
        return order[(order.index(self) + 1) % len(order)]

    def prev(self) -> Tab:
        order = list(Tab)
        return order[(order.index(self) - 1) % len(order)]

    @classmethod
    def from_number(cls, n: int) -> Tab | None:
        order = list(cls)
        return order[n - 1] if 1 <= n <= len(order) else None


# --------------------------- Loading keys --------------------------- #

@dataclass(frozen=True, slots=True)
class StandingsKey:
    def error_key(self) -> str:
        return "standings"


@dataclass(frozen=True, slots=True)
class ScheduleKey:
    date: date

    def error_key(self) -> str:
        return f"schedule:{self.date.isoformat()}"


@dataclass(frozen=True, slots=True)
class GameDetailsKey:
    game_id: int

    def error_key(self) -> str:
        return f"game:{self.game_id}"


@dataclass(frozen=True, slots=True)
class BoxscoreKey:
    game_id: int

    def error_key(self) -> str:
        return f"boxscore:{self.game_id}"


@dataclass(frozen=True, slots=True)
class TeamRosterKey:
    abbrev: str

    def error_key(self) -> str:
        return f"team:{self.abbrev}"


@dataclass(frozen=True, slots=True)
class PlayerStatsKey:
    player_id: int

    def error_key(self) -> str:
        return f"player:{self.player_id}"


LoadingKey = StandingsKey | ScheduleKey | GameDetailsKey | BoxscoreKey | TeamRosterKey | PlayerStatsKey


def loading_key_for_panel(panel: Panel) -> LoadingKey:
    if isinstance(panel, TeamPanel):
        return TeamRosterKey(panel.abbrev)
    if isinstance(panel, PlayerPanel):
        return PlayerStatsKey(panel.player_id)
    return BoxscoreKey(panel.game_id)


# ------------------------------ Regions ------------------------------ #

def frozen_map(data: Mapping | None = None) -> Mapping:
    return MappingProxyType(dict(data or {}))


@dataclass(frozen=True)
class DocumentStackEntry:
    panel: Panel
    nav: DocumentNavState = DocumentNavState()


@dataclass(frozen=True)
class NavigationState:
    current_tab: Tab = Tab.SCORES
    content_focused: bool = False
    document_stack: tuple[DocumentStackEntry, ...] = ()


@dataclass(frozen=True)
class DataState:
    standings: list[dict[str, Any]] | None = None
    schedule: dict[str, Any] | None = None
    game_info: Mapping[int, Any] = field(default_factory=frozen_map)
    boxscores: Mapping[int, Any] = field(default_factory=frozen_map)
    team_rosters: Mapping[str, Any] = field(default_factory=frozen_map)
    players: Mapping[int, Any] = field(default_factory=frozen_map)
    loading: frozenset[LoadingKey] = frozenset()
    errors: Mapping[str, str] = field(default_factory=frozen_map)

    def panel_data(self, panel: Panel) -> Any:
        if isinstance(panel, TeamPanel):
            return self.team_rosters.get(panel.abbrev)
        if isinstance(panel, PlayerPanel):
            return self.players.get(panel.player_id)
        if isinstance(panel, BoxscorePanel):
            return self.boxscores.get(panel.game_id)
        return None


@dataclass(frozen=True)
class ScoresUiState:
    game_date: date = field(default_factory=date.today)
    selected_date_index: int = DATE_WINDOW // 2
    box_selection_active: bool = False
    boxes_per_row: int = 2

    def window_dates(self) -> list[date]:
        start = self.game_date - timedelta(days=self.selected_date_index)
        return [start + timedelta(days=i) for i in range(DATE_WINDOW)]


@dataclass(frozen=True)
class StandingsUiState:
    view: str = "division"
    browse_mode: bool = False


@dataclass(frozen=True)
class UiState:
    scores: ScoresUiState = field(default_factory=ScoresUiState)
    standings: StandingsUiState = field(default_factory=StandingsUiState)
    # one navigation slot per tab document
    tab_nav: Mapping[Tab, DocumentNavState] = field(
        default_factory=lambda: frozen_map({tab: DocumentNavState() for tab in Tab})
    )
    viewport_height: int = DEFAULT_VIEWPORT_HEIGHT
    terminal_width: int = 80


@dataclass(frozen=True)
class SystemState:
    config: Config = field(default_factory=Config)
    last_refresh: datetime | None = None
    status_message: str = DEFAULT_STATUS_MESSAGE
    status_is_error: bool = False
    should_quit: bool = False

    def set_status_message(self, message: str) -> SystemState:
        return replace(self, status_message=message, status_is_error=False)

    def set_status_error_message(self, message: str) -> SystemState:
        return replace(self, status_message=message, status_is_error=True)

    def reset_status_message(self) -> SystemState:
        return replace(self, status_message=DEFAULT_STATUS_MESSAGE, status_is_error=False)


@dataclass(frozen=True)
class AppState:
    navigation: NavigationState = field(default_factory=NavigationState)
    data: DataState = field(default_factory=DataState)
    ui: UiState = field(default_factory=UiState)
    system: SystemState = field(default_factory=SystemState)

    @classmethod
    def initial(cls, config: Config | None = None, today: date | None = None) -> AppState:
        config = config or Config()
        return cls(
            ui=UiState(
                scores=ScoresUiState(game_date=today or date.today()),
                standings=StandingsUiState(view=config.standings_group),
            ),
            system=SystemState(config=config),
        )


# ----------------------------- Accessors ----------------------------- #

def active_nav(state: AppState) -> DocumentNavState:
    """Navigation slot of whatever currently receives document keys."""
    stack = state.navigation.document_stack
    if stack:
        return stack[-1].nav
    return state.ui.tab_nav[state.navigation.current_tab]


def with_tab_nav(state: AppState, tab: Tab, nav: DocumentNavState) -> AppState:
    tab_nav = dict(state.ui.tab_nav)
    tab_nav[tab] = nav
    return replace(state, ui=replace(state.ui, tab_nav=frozen_map(tab_nav)))


def with_top_entry_nav(state: AppState, nav: DocumentNavState) -> AppState:
    stack = state.navigation.document_stack
    if not stack:
        return state
    top = replace(stack[-1], nav=nav)
    return replace(state, navigation=replace(state.navigation, document_stack=stack[:-1] + (top,)))


def with_loading(data: DataState, key: LoadingKey, loading: bool = True) -> DataState:
    keys = data.loading | {key} if loading else data.loading - {key}
    return replace(data, loading=frozenset(keys))


def with_entry(mapping: Mapping, key: Any, value: Any) -> Mapping:
    d = dict(mapping)
    d[key] = value
    return frozen_map(d)


def without_entry(mapping: Mapping, key: Any) -> Mapping:
    if key not in mapping:
        return mapping
    d = dict(mapping)
    del d[key]
    return frozen_map(d)


__all__ = [
    "AppState",
    "BoxscoreKey",
    "DATE_WINDOW",
    "DEFAULT_STATUS_MESSAGE",
    "DataState",
    "DocumentStackEntry",
    "GameDetailsKey",
    "LoadingKey",
    "NavigationState",
    "PlayerStatsKey",
    "ScheduleKey",
    "ScoresUiState",
    "StandingsKey",
    "StandingsUiState",
    "SystemState",
    "Tab",
    "TeamRosterKey",
    "UiState",
    "active_nav",
    "loading_key_for_panel",
    "with_entry",
    "with_loading",
    "with_tab_nav",
    "with_top_entry_nav",
    "without_entry",
]
