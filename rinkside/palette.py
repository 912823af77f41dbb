"""Command palette: incremental search over loaded teams and players.

The palette lives outside the reducer chain.  It reads a state snapshot
whenever the query changes and sends a ``PushDocument`` for the chosen
result back through the normal dispatch path.
"""
from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from dataclasses import dataclass, field
from typing import Any

from rinkside.actions import Action, PushDocument
from rinkside.panels import PlayerPanel, TeamPanel
from rinkside.state import AppState
from rinkside.tui.nav_keys import KeyEvent

logger = logging.getLogger(__name__)

MAX_RESULTS = 10

# Textual key names for printable characters that are not a single char
_NAMED_CHARS = {
    "space": " ",
    "minus": "-",
    "full_stop": ".",
    "apostrophe": "'",
}


@dataclass(frozen=True, slots=True)
class SearchResult:
    label: str
    category: str
    action: Action


def _players(state: AppState) -> Iterator[tuple[int, str]]:
    seen: set[int] = set()
    for pid, player in state.data.players.items():
        if player and player.get("name"):
            seen.add(int(pid))
            yield int(pid), player["name"]
    for roster in state.data.team_rosters.values():
        for p in list(roster.get("skaters", [])) + list(roster.get("goalies", [])):
            pid = p.get("id")
            if pid is None or int(pid) in seen or not p.get("name"):
                continue
            seen.add(int(pid))
            yield int(pid), p["name"]


def search(state: AppState, query: str, limit: int = MAX_RESULTS) -> list[SearchResult]:
    """Teams first (by name or abbreviation), then players by name."""
    query = query.strip().lower()
    if not query:
        return []
    results: list[SearchResult] = []
    for team in state.data.standings or []:
        name, abbrev = team.get("name", ""), team.get("abbrev", "")
        if query in name.lower() or query in abbrev.lower():
            results.append(SearchResult(f"{name} ({abbrev})", "Team", PushDocument(TeamPanel(abbrev))))
            if len(results) >= limit:
                return results
    for pid, name in _players(state):
        if query in name.lower():
            results.append(SearchResult(name, "Player", PushDocument(PlayerPanel(pid))))
            if len(results) >= limit:
                break
    return results


@dataclass
class CommandPalette:
    snapshot: Callable[[], AppState]
    send: Callable[[Action], Any]
    visible: bool = False
    query: str = ""
    results: list[SearchResult] = field(default_factory=list)
    selected_index: int = 0

    def open(self) -> None:
        self.visible = True
        self.query = ""
        self.results = []
        self.selected_index = 0

    def close(self) -> None:
        self.visible = False

    @property
    def selected(self) -> SearchResult | None:
        if 0 <= self.selected_index < len(self.results):
            return self.results[self.selected_index]
        return None

    def refresh(self) -> None:
        self.results = search(self.snapshot(), self.query)
        self.selected_index = 0

    def handle_key(self, event: KeyEvent) -> bool:
        """Consume ``event`` while visible; returns False when the palette is closed."""
        if not self.visible:
            return False
        key = event.key
        if key == "escape":
            self.close()
        elif key == "enter":
            result = self.selected
            self.close()
            if result is not None:
                logger.debug("Palette selected %s %r", result.category, result.label)
                self.send(result.action)
        elif key == "up":
            self.selected_index = max(0, self.selected_index - 1)
        elif key == "down":
            if self.results:
                self.selected_index = min(len(self.results) - 1, self.selected_index + 1)
        elif key == "backspace":
            if self.query:
                self.query = self.query[:-1]
                self.refresh()
        else:
            char = event.char or _NAMED_CHARS.get(key)
            if char is not None:
                self.query += char
                self.refresh()
        return True


__all__ = ["CommandPalette", "MAX_RESULTS", "SearchResult", "search"]
