"""Drill-down documents pushed onto the panel stack."""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from rinkside.tui.document import Document
from rinkside.tui.elements import Element, Heading, Row, SectionTitle, Spacer, Text, table
from rinkside.tui.focus import FocusContext
from rinkside.tui.table import Alignment, Column, PlayerLinkCell, TableWidget, TextCell

SKATER_COLUMNS = (
    Column("Player", width=22),
    Column("Pos", width=3),
    Column("GP", width=3, align=Alignment.RIGHT),
    Column("G", width=3, align=Alignment.RIGHT),
    Column("A", width=3, align=Alignment.RIGHT),
    Column("PTS", width=4, align=Alignment.RIGHT),
)

GAME_SKATER_COLUMNS = (
    Column("Player", width=22),
    Column("Pos", width=3),
    Column("G", width=3, align=Alignment.RIGHT),
    Column("A", width=3, align=Alignment.RIGHT),
    Column("PTS", width=4, align=Alignment.RIGHT),
)

SEASON_COLUMNS = (
    Column("Season", width=9),
    Column("Team", width=18),
    Column("GP", width=3, align=Alignment.RIGHT),
    Column("G", width=3, align=Alignment.RIGHT),
    Column("A", width=3, align=Alignment.RIGHT),
    Column("PTS", width=4, align=Alignment.RIGHT),
)


def _placeholder(what: str, loading: bool, error: str | None) -> list[Element]:
    if error:
        return [Text(f"Error loading {what}: {error}", style="bold red")]
    return [Text(f"Loading {what}..." if loading else f"No {what} available", style="dim")]


def _season_label(season: Any) -> str:
    s = str(season or "")
    return f"{s[:4]}-{s[6:]}" if len(s) == 8 else s


class TeamDocument(Document):
    def __init__(self, abbrev: str, roster: Mapping[str, Any] | None, loading: bool = False, error: str | None = None):
        self.abbrev = abbrev
        self.roster = roster
        self.loading = loading
        self.error = error

    def title(self) -> str:
        return f"Team {self.abbrev}"

    def id(self) -> str:
        return f"team:{self.abbrev}"

    def build(self, focus: FocusContext) -> list[Element]:
        elements: list[Element] = [Heading(self.title(), level=1)]
        if self.roster is None:
            return elements + _placeholder("roster", self.loading, self.error)
        rows = [
            [PlayerLinkCell(p["name"], int(p["id"])), TextCell(p.get("pos", "")), TextCell(str(p.get("gp", 0))),
             TextCell(str(p.get("g", 0))), TextCell(str(p.get("a", 0))), TextCell(str(p.get("pts", 0)))]
            for p in sorted(self.roster.get("skaters", []), key=lambda p: -p.get("pts", 0))
        ]
        elements += [SectionTitle("Skaters", underline=True), table(TableWidget(f"roster:{self.abbrev}", SKATER_COLUMNS, rows))]
        goalies = self.roster.get("goalies", [])
        if goalies:
            lines = [f"{g['name']:<22} GP {g.get('gp', 0):>3}  W {g.get('w', 0):>3}  SV% {(g.get('sv_pct') or 0.0):.3f}"
                     for g in goalies]
            elements += [Spacer(1), SectionTitle("Goalies", underline=True), Text("\n".join(lines))]
        return elements


class PlayerDocument(Document):
    def __init__(self, player_id: int, player: Mapping[str, Any] | None, loading: bool = False, error: str | None = None):
        self.player_id = player_id
        self.player = player
        self.loading = loading
        self.error = error

    def title(self) -> str:
        if self.player:
            return str(self.player.get("name") or f"Player {self.player_id}")
        return f"Player {self.player_id}"

    def id(self) -> str:
        return f"player:{self.player_id}"

    def build(self, focus: FocusContext) -> list[Element]:
        elements: list[Element] = [Heading(self.title(), level=1)]
        if self.player is None:
            return elements + _placeholder("player", self.loading, self.error)
        p = self.player
        number = f"#{p['number']}  " if p.get("number") is not None else ""
        elements.append(Text(f"{number}{p.get('position', '')}  {p.get('team', '')}"))
        elements.append(Spacer(1))
        rows = [
            [TextCell(_season_label(s.get("season"))), TextCell(str(s.get("team", ""))), TextCell(str(s.get("gp", 0))),
             TextCell(str(s.get("g", 0))), TextCell(str(s.get("a", 0))), TextCell(str(s.get("pts", 0)))]
            for s in p.get("seasons", [])
        ]
        elements += [SectionTitle("Career", underline=True), table(TableWidget(f"seasons:{self.player_id}", SEASON_COLUMNS, rows))]
        return elements


class BoxscoreDocument(Document):
    def __init__(self, game_id: int, boxscore: Mapping[str, Any] | None, loading: bool = False, error: str | None = None):
        self.game_id = game_id
        self.boxscore = boxscore
        self.loading = loading
        self.error = error

    def title(self) -> str:
        if self.boxscore:
            return f"{self.boxscore['away']['abbrev']} @ {self.boxscore['home']['abbrev']}"
        return f"Game {self.game_id}"

    def id(self) -> str:
        return f"boxscore:{self.game_id}"

    def _side(self, side: str) -> TableWidget:
        team = self.boxscore[side]  # type: ignore[index]
        rows = [
            [PlayerLinkCell(p["name"], int(p["id"])), TextCell(p.get("pos", "")),
             TextCell(str(p.get("g", 0))), TextCell(str(p.get("a", 0))), TextCell(str(p.get("pts", 0)))]
            for p in team.get("skaters", [])
        ]
        return TableWidget(f"boxscore:{side}", GAME_SKATER_COLUMNS, rows)

    def build(self, focus: FocusContext) -> list[Element]:
        elements: list[Element] = [Heading(self.title(), level=1)]
        if self.boxscore is None:
            return elements + _placeholder("boxscore", self.loading, self.error)
        away, home = self._side("away"), self._side("home")
        elements.append(Row([
            SectionTitle(self.boxscore["away"]["abbrev"], underline=True),
            SectionTitle(self.boxscore["home"]["abbrev"], underline=True),
        ]))
        elements.append(Row([table(away), table(home)], gap=4))
        return elements
