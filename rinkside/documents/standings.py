"""League standings grouped by league, conference, division or wildcard race.

Group names come from the data, so any number of conferences or
divisions renders without layout changes.  The wildcard view puts one
conference per column: each division's leaders, then everyone else
ranked for the remaining playoff spots.
"""
from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from rinkside.tui.document import Document
from rinkside.tui.elements import Element, Group, Row, SectionTitle, Spacer, Text, table
from rinkside.tui.focus import FocusContext
from rinkside.tui.table import Alignment, Column, TableWidget, TeamLinkCell, TextCell

GROUPINGS = ("division", "conference", "league", "wildcard")
DIVISION_LEADERS = 3
WILDCARD_TITLE = "Wildcard"

COLUMNS = (
    Column("Team", width=24),
    Column("GP", width=3, align=Alignment.RIGHT),
    Column("W", width=3, align=Alignment.RIGHT),
    Column("L", width=3, align=Alignment.RIGHT),
    Column("OT", width=3, align=Alignment.RIGHT),
    Column("PTS", width=4, align=Alignment.RIGHT),
)
WILDCARD_COLUMNS = (Column("Team", width=18),) + COLUMNS[1:]


def _by_points(teams: Sequence[dict[str, Any]]) -> list[dict[str, Any]]:
    return sorted(teams, key=lambda t: (-t.get("pts", 0), t.get("gp", 0), t.get("abbrev", "")))


def group_standings(
    standings: Sequence[dict[str, Any]], grouping: str, western_first: bool = False
) -> list[tuple[str, list[dict[str, Any]]]]:
    """Ordered (group name, teams sorted by points) pairs."""
    if grouping == "league":
        groups: dict[str, list[dict[str, Any]]] = {"League": list(standings)}
    else:
        groups = {}
        for team in standings:
            groups.setdefault(str(team.get(grouping, "")), []).append(team)

    def conference_of(name: str) -> str:
        if grouping == "conference":
            return name
        members = groups[name]
        return str(members[0].get("conference", "")) if members else ""

    def order(name: str) -> tuple[int, str, str]:
        west = "west" in conference_of(name).lower()
        rank = 0 if west == western_first else 1
        return rank, conference_of(name), name

    names = sorted(groups) if grouping == "league" else sorted(groups, key=order)
    return [(name, _by_points(groups[name])) for name in names]


def wildcard_standings(
    standings: Sequence[dict[str, Any]], western_first: bool = False
) -> list[tuple[str, list[tuple[str, list[dict[str, Any]]]]]]:
    """Per conference: each division's top teams, then a wildcard section for the rest."""
    columns = []
    for conference, teams in group_standings(standings, "conference", western_first):
        sections = []
        rest: list[dict[str, Any]] = []
        for division, members in group_standings(teams, "division"):
            sections.append((division, members[:DIVISION_LEADERS]))
            rest.extend(members[DIVISION_LEADERS:])
        sections.append((WILDCARD_TITLE, _by_points(rest)))
        columns.append((conference, sections))
    return columns


def _team_rows(teams: Sequence[dict[str, Any]]) -> list[list[Any]]:
    return [
        [
            TeamLinkCell(f"{t['abbrev']}  {t.get('name', '')}", t["abbrev"]),
            TextCell(str(t.get("gp", 0))),
            TextCell(str(t.get("w", 0))),
            TextCell(str(t.get("l", 0))),
            TextCell(str(t.get("otl", 0))),
            TextCell(str(t.get("pts", 0))),
        ]
        for t in teams
    ]


class StandingsDocument(Document):
    def __init__(
        self,
        standings: Sequence[dict[str, Any]] | None,
        grouping: str = "division",
        western_first: bool = False,
        error: str | None = None,
    ):
        self.standings = standings
        self.grouping = grouping if grouping in GROUPINGS else "division"
        self.western_first = western_first
        self.error = error

    def title(self) -> str:
        return f"Standings ({self.grouping})"

    def id(self) -> str:
        return "standings"

    def build(self, focus: FocusContext) -> list[Element]:
        if self.error:
            return [Text(f"Error loading standings: {self.error}", style="bold red")]
        if self.standings is None:
            return [Text("Loading standings...", style="dim")]
        if self.grouping == "wildcard":
            return [self._wildcard_row()]
        elements: list[Element] = []
        for name, teams in group_standings(self.standings, self.grouping, self.western_first):
            elements.append(SectionTitle(name or "Unassigned"))
            elements.append(table(TableWidget(f"standings:{name}", COLUMNS, _team_rows(teams))))
            elements.append(Spacer(1))
        return elements

    def _wildcard_row(self) -> Row:
        columns = []
        for conference, sections in wildcard_standings(self.standings, self.western_first):
            children: list[Element] = [SectionTitle(conference or "Unassigned", underline=True)]
            for name, teams in sections:
                if not teams:
                    continue
                children.append(SectionTitle(name or "Unassigned"))
                children.append(table(TableWidget(
                    f"standings:{conference}:{name}", WILDCARD_COLUMNS, _team_rows(teams))))
                children.append(Spacer(1))
            columns.append(Group(children))
        return Row(columns)
