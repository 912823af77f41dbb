from rinkside import fixtures
from rinkside.actions import Ok, PlayerStatsLoaded, PushDocument, StandingsLoaded, TeamRosterLoaded
from rinkside.palette import MAX_RESULTS, CommandPalette, search
from rinkside.panels import PlayerPanel, TeamPanel
from rinkside.reducer import reduce
from rinkside.tui.buffer import Buffer, Rect
from rinkside.tui.chrome import render_frame, render_palette
from rinkside.tui.nav_keys import KeyEvent


def _loaded(state, effects):
    for action in (
        StandingsLoaded(Ok(fixtures.standings())),
        TeamRosterLoaded("EDM", Ok(fixtures.roster_for("EDM"))),
        PlayerStatsLoaded(8479318, Ok(fixtures.player_for(8479318))),
    ):
        state, _ = reduce(state, action, effects)
    return state


def _type(palette, text):
    for ch in text:
        palette.handle_key(KeyEvent(ch))


def test_search_lists_teams_before_players(state, effects):
    state = _loaded(state, effects)
    results = search(state, "a", limit=6)
    assert [r.category for r in results] == ["Team"] * 5 + ["Player"]
    assert results[0].action == PushDocument(TeamPanel("TOR"))
    assert results[-1].action == PushDocument(PlayerPanel(8479318))
    assert len(search(state, "a")) == 8 <= MAX_RESULTS
    assert search(state, "   ") == []


def test_search_matches_abbreviation_and_dedupes_players(state, effects):
    state = _loaded(state, effects)
    state, _ = reduce(state, PlayerStatsLoaded(8478402, Ok(fixtures.player_for(8478402))), effects)
    [team] = search(state, "van")
    assert team.label == "Canucks (VAN)"
    assert [r.label for r in search(state, "mcdavid")] == ["Connor McDavid"]


def test_palette_keys(state, effects):
    state = _loaded(state, effects)
    sent = []
    palette = CommandPalette(lambda: state, sent.append)
    assert palette.handle_key(KeyEvent("x")) is False
    palette.open()
    _type(palette, "le")
    assert [r.category for r in palette.results] == ["Team", "Team", "Player"]
    palette.handle_key(KeyEvent("down"))
    palette.handle_key(KeyEvent("down"))
    palette.handle_key(KeyEvent("down"))
    assert palette.selected_index == 2
    palette.handle_key(KeyEvent("up"))
    assert palette.selected.label == "Oilers (EDM)"
    palette.handle_key(KeyEvent("backspace"))
    assert palette.query == "l" and palette.selected_index == 0
    palette.handle_key(KeyEvent("escape"))
    assert not palette.visible and sent == []
    palette.open()
    _type(palette, "oilers")
    palette.handle_key(KeyEvent("enter"))
    assert sent == [PushDocument(TeamPanel("EDM"))]
    assert not palette.visible


def test_enter_without_results_just_closes(state):
    sent = []
    palette = CommandPalette(lambda: state, sent.append)
    palette.open()
    palette.handle_key(KeyEvent("space"))
    palette.handle_key(KeyEvent("enter"))
    assert sent == [] and not palette.visible


def test_palette_overlay_renders_over_frame(state, effects):
    state = _loaded(state, effects)
    palette = CommandPalette(lambda: state, lambda a: None)
    palette.open()
    _type(palette, "bos")
    lines = render_frame(state, 80, 12, palette=palette).lines()
    assert any("/bos" in line for line in lines)
    assert any("Bruins (BOS)  [Team]" in line for line in lines)
    buf = Buffer(6, 3)
    render_palette(buf, Rect(0, 0, 6, 3), palette)
    assert buf.lines() == ["      "] * 3
