"""Scores grid for the selected date: one game box per game, N per row."""
from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from rinkside.tui.document import Document
from rinkside.tui.elements import Element, GameBox, Heading, Row, Spacer, Text
from rinkside.tui.focus import FocusContext

STATE_LABELS = {
    "FUT": "Scheduled",
    "PRE": "Pregame",
    "LIVE": "Live",
    "CRIT": "Live",
    "OFF": "Final",
    "FINAL": "Final",
}


def _score(v: Any) -> str:
    return "-" if v is None else str(v)


def game_box(game: Mapping[str, Any], info: Mapping[str, Any] | None) -> GameBox:
    merged = dict(game)
    if info:
        merged.update({k: v for k, v in info.items() if v is not None})
    state = str(merged.get("state", "FUT"))
    status = STATE_LABELS.get(state, state)
    if state in ("LIVE", "CRIT") and merged.get("period"):
        status = f"P{merged['period']} {merged.get('clock', '')}".strip()
    elif state in ("FUT", "PRE"):
        start = str(merged.get("start_time", ""))
        status = f"{status} {start[11:16]} UTC" if len(start) >= 16 else status
    return GameBox(
        game_id=int(merged["id"]),
        title=f"{merged.get('away', '?')} @ {merged.get('home', '?')}",
        lines=(
            f"{merged.get('away', '?'):<5}{_score(merged.get('away_score')):>3}",
            f"{merged.get('home', '?'):<5}{_score(merged.get('home_score')):>3}",
            "",
            status,
        ),
    )


class ScoresDocument(Document):
    def __init__(
        self,
        game_date: date,
        schedule: Mapping[str, Any] | None,
        game_info: Mapping[int, Any] | None = None,
        boxes_per_row: int = 2,
        loading: bool = False,
        error: str | None = None,
    ):
        self.game_date = game_date
        self.schedule = schedule
        self.game_info = game_info or {}
        self.boxes_per_row = max(1, boxes_per_row)
        self.loading = loading
        self.error = error

    def title(self) -> str:
        return f"Scores {self.game_date.isoformat()}"

    def id(self) -> str:
        return "scores"

    def build(self, focus: FocusContext) -> list[Element]:
        elements: list[Element] = [Heading(self.game_date.strftime("%A %B %d, %Y"), level=2), Spacer(1)]
        if self.error:
            return elements + [Text(f"Error loading schedule: {self.error}", style="bold red")]
        if self.schedule is None:
            return elements + [Text("Loading schedule..." if self.loading else "No schedule loaded", style="dim")]
        games = list(self.schedule.get("games", []))
        if not games:
            return elements + [Text("No games scheduled")]
        boxes = [game_box(g, self.game_info.get(g.get("id"))) for g in games]
        for start in range(0, len(boxes), self.boxes_per_row):
            elements.append(Row(boxes[start:start + self.boxes_per_row]))
            elements.append(Spacer(1))
        return elements
