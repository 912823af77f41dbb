"""Showcase of every element type; handy when working on layout code."""
from __future__ import annotations

from rinkside.tui.document import Document
from rinkside.tui.elements import (
    Element,
    Group,
    Heading,
    Indented,
    Link,
    Row,
    SectionTitle,
    Separator,
    Spacer,
    Text,
    table,
)
from rinkside.tui.focus import FocusContext
from rinkside.tui.links import UrlTarget, player_action, team_action
from rinkside.tui.table import Alignment, Column, PlayerLinkCell, TableWidget, TeamLinkCell, TextCell


def _column(title: str, teams: list[str]) -> Group:
    return Group([SectionTitle(title)] + [Link(t, team_action(t), f"demo:{t}") for t in teams])


class DemoDocument(Document):
    def title(self) -> str:
        return "Demo"

    def id(self) -> str:
        return "demo"

    def build(self, focus: FocusContext) -> list[Element]:
        scorers = TableWidget(
            "demo:scorers",
            (Column("Player"), Column("Team"), Column("PTS", align=Alignment.RIGHT)),
            (
                (PlayerLinkCell("Connor McDavid", 8478402), TeamLinkCell("EDM", "EDM"), TextCell("100")),
                (PlayerLinkCell("Nathan MacKinnon", 8477492), TeamLinkCell("COL", "COL"), TextCell("96")),
                (PlayerLinkCell("Auston Matthews", 8479318), TeamLinkCell("TOR", "TOR"), TextCell("88")),
            ),
        )
        return [
            Heading("Document demo", level=1),
            Text("Tab/Down and Shift+Tab/Up move focus.\nLeft/Right jump between columns of a row."),
            Spacer(1),
            SectionTitle("Links", underline=True),
            Link("Toronto Maple Leafs", team_action("TOR"), "demo:link:TOR"),
            Link("Connor McDavid", player_action(8478402), "demo:link:mcdavid"),
            Indented(Link("NHL.com (external)", UrlTarget("https://www.nhl.com"), "demo:link:nhl"), margin=4),
            Separator(),
            SectionTitle("Columns", underline=True),
            Row([
                _column("Atlantic", ["TOR", "BOS"]),
                _column("Metropolitan", ["NYR", "PIT"]),
                _column("Pacific", ["EDM", "VAN"]),
            ]),
            Spacer(1),
            SectionTitle("Table", underline=True),
            table(scorers),
            Spacer(2),
            Text("End of demo", style="dim"),
        ]
