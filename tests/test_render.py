from dataclasses import replace
from datetime import datetime

from rinkside import fixtures
from rinkside.actions import EnterContentFocus, NavigateTab, Ok, PushDocument, RefreshData, StandingsLoaded, TeamRosterLoaded
from rinkside.documents import StandingsDocument, active_document
from rinkside.documents.standings import group_standings, wildcard_standings
from rinkside.panels import TeamPanel
from rinkside.reducer import reduce
from rinkside.state import Tab
from rinkside.tui.buffer import Buffer, Rect
from rinkside.tui.chrome import render_frame
from rinkside.tui.elements import Group, Row
from rinkside.tui.focus import FocusContext


def _run(state, effects, *actions):
    for action in actions:
        state, _ = reduce(state, action, effects)
    return state


def test_buffer_clips_and_converts_to_rich_text():
    buf = Buffer(6, 2)
    assert buf.set_string(4, 0, "abcdef", "bold") == 2
    assert buf.set_string(-2, 1, "xyz") == 1
    assert buf.set_string(0, 5, "nope") == 0
    assert buf.lines() == ["    ab", "z     "]
    text = buf.to_text()
    assert text.plain == "    ab\nz     "
    assert any(span.style == "bold" for span in text.spans)


def test_blit_copies_window():
    src = Buffer(3, 5)
    for y in range(5):
        src.set_string(0, y, str(y) * 3)
    dest = Buffer(5, 2)
    dest.blit(src, 2, Rect(1, 0, 4, 2))
    assert dest.lines() == [" 222 ", " 333 "]


def test_standings_grouping_respects_conference_order():
    teams = fixtures.standings()
    east_first = [name for name, _ in group_standings(teams, "division")]
    assert east_first == ["Atlantic", "Metropolitan", "Central", "Pacific"]
    west_first = [name for name, _ in group_standings(teams, "division", western_first=True)]
    assert west_first == ["Central", "Pacific", "Atlantic", "Metropolitan"]
    [(league, ordered)] = group_standings(teams, "league")
    assert ordered[0]["abbrev"] == "VAN"
    conf = group_standings(teams, "conference")
    assert [name for name, _ in conf] == ["Eastern", "Western"]


def test_standings_document_error_and_loading():
    assert "timeout" in StandingsDocument(None, error="timeout").render_full(40).line(0)
    assert "Loading" in StandingsDocument(None).render_full(40).line(0)


def test_frame_shows_tabs_status_and_content(state, effects):
    state = _run(state, effects, RefreshData(at=datetime(2024, 1, 15, 19, 5)),
                 StandingsLoaded(Ok(fixtures.standings())), NavigateTab(Tab.STANDINGS), EnterContentFocus())
    frame = render_frame(state, 80, 24)
    lines = frame.lines()
    assert "1:Scores" in lines[0] and "2:Standings" in lines[0]
    assert lines[1].startswith("View: Division")
    assert any("Atlantic" in line for line in lines[2:-1])
    assert "updated 19:05" in lines[-1]


def test_frame_breadcrumb_for_stacked_panel(state, effects):
    state = _run(state, effects, PushDocument(TeamPanel("EDM")),
                 TeamRosterLoaded("EDM", Ok(fixtures.roster_for("EDM"))))
    assert active_document(state).id() == "team:EDM"
    lines = render_frame(state, 60, 12).lines()
    assert lines[1].startswith("Scores > Team: EDM")
    assert any("Connor McDavid" in line for line in lines)


def test_frame_survives_tiny_terminal(state):
    assert render_frame(state, 10, 2).height == 2
    assert render_frame(replace(state), 0, 0).lines() == []


def test_scores_document_lays_games_out_in_rows(today):
    from rinkside.documents import ScoresDocument
    from rinkside.tui.focus import GameLinkId

    schedule = fixtures.schedule_for(today)
    doc = ScoresDocument(today, schedule, boxes_per_row=2)
    focusables = doc.focusable_elements()
    assert [f.id for f in focusables] == [GameLinkId(g["id"]) for g in schedule["games"]]
    rows = [(f.row_position.row_y, f.row_position.child_idx) for f in focusables]
    assert rows[0][0] == rows[1][0] != rows[2][0]
    assert [c for _, c in rows] == [0, 1, 0, 1]
    assert "TOR" in "\n".join(doc.render_full(80).lines())


def _wildcard_teams():
    teams = fixtures.standings()
    extra = [("MTL", "Eastern", "Atlantic", 30), ("OTT", "Eastern", "Atlantic", 28),
             ("NJD", "Eastern", "Metropolitan", 33), ("SEA", "Western", "Pacific", 31)]
    for abbrev, conf, div, pts in extra:
        teams.append({"abbrev": abbrev, "name": abbrev.title(), "conference": conf, "division": div,
                      "gp": 40, "w": pts // 2, "l": 20, "otl": pts % 2, "pts": pts})
    return teams


def test_wildcard_keeps_division_leaders_then_ranks_the_rest():
    columns = wildcard_standings(_wildcard_teams())
    assert [conf for conf, _ in columns] == ["Eastern", "Western"]
    east = dict(columns[0][1])
    assert [name for name, _ in columns[0][1]] == ["Atlantic", "Metropolitan", "Wildcard"]
    assert [t["abbrev"] for t in east["Atlantic"]] == ["TOR", "BOS", "MTL"]
    assert [t["abbrev"] for t in east["Metropolitan"]] == ["NYR", "PIT", "NJD"]
    assert [t["abbrev"] for t in east["Wildcard"]] == ["OTT"]
    west = dict(columns[1][1])
    assert west["Wildcard"] == []
    assert [conf for conf, _ in wildcard_standings(_wildcard_teams(), western_first=True)] == ["Western", "Eastern"]


def test_wildcard_division_names_come_from_data():
    teams = [
        {"abbrev": f"T{i}", "name": f"Team {i}", "conference": "Only", "division": "North" if i % 2 else "South",
         "gp": 10, "w": i, "l": 0, "otl": 0, "pts": 2 * i}
        for i in range(10)
    ]
    [(conf, sections)] = wildcard_standings(teams)
    assert conf == "Only"
    assert [name for name, _ in sections] == ["North", "South", "Wildcard"]
    assert [t["abbrev"] for t in dict(sections)["Wildcard"]] == ["T3", "T2", "T1", "T0"]


def test_wildcard_document_lays_conferences_side_by_side():
    doc = StandingsDocument(_wildcard_teams(), grouping="wildcard", western_first=True)
    [row] = doc.build(FocusContext())
    assert isinstance(row, Row)
    assert len(row.children) == 2 and all(isinstance(c, Group) for c in row.children)
    first = doc.render_full(110).line(0)
    assert first.index("Western") < first.index("Eastern")
    assert any(f.link_target is not None for f in doc.focusable_elements())


class BrokenDocument(StandingsDocument):
    def build(self, focus):
        raise KeyError("savePercentage")


def test_frame_survives_document_that_fails_to_build(state, monkeypatch):
    monkeypatch.setattr("rinkside.tui.chrome.active_document", lambda s: BrokenDocument(None))
    lines = render_frame(state, 60, 10).lines()
    assert "1:Scores" in lines[0]
    assert lines[2].startswith("Render error:") and "savePercentage" in lines[2]
    assert lines[-1].startswith("Render error:")


def test_goalie_without_save_percentage_renders():
    from rinkside.documents.detail import TeamDocument

    roster = {"abbrev": "TOR", "skaters": [],
              "goalies": [{"id": 1, "name": "Joseph Woll", "gp": 10, "w": 6, "sv_pct": None}]}
    text = "\n".join(TeamDocument("TOR", roster).render_full(70).lines())
    assert "SV% 0.000" in text
