from dataclasses import replace

from rinkside import fixtures
from rinkside.actions import (
    ActivateFocused,
    ComponentMessage,
    DocumentNav,
    EnterContentFocus,
    ExitContentFocus,
    NavigateTab,
    NavigateTabLeft,
    NavigateTabRight,
    NavigateUp,
    Ok,
    PushDocument,
    Quit,
    RefreshData,
    StackedDocumentKey,
    StandingsLoaded,
    TeamRosterLoaded,
)
from rinkside.keys import key_to_action
from rinkside.panels import TeamPanel
from rinkside.reducer import reduce
from rinkside.reducers import CycleView, EnterBoxSelection, EnterBrowseMode, SelectDate
from rinkside.state import Tab, active_nav
from rinkside.tui.document_nav import FocusNext, FocusPrev, FocusRight, PageDown, ScrollDown
from rinkside.tui.nav_keys import KeyEvent, key_to_nav_msg


def _key(name, state):
    return key_to_action(KeyEvent(name), state)


def _focused(state, tab=Tab.SCORES):
    nav = replace(state.navigation, current_tab=tab, content_focused=True)
    return replace(state, navigation=nav)


def test_global_keys(state):
    assert _key("q", state) == Quit()
    assert _key("2", state) == NavigateTab(Tab.STANDINGS)
    assert _key("4", state) == NavigateTab(Tab.DEMO)
    assert _key("9", state) is None


def test_tab_bar_keys(state):
    assert _key("left", state) == NavigateTabLeft()
    assert _key("right", state) == NavigateTabRight()
    assert _key("down", state) == EnterContentFocus()
    assert _key("x", state) is None


def test_scores_date_strip_and_box_selection(state):
    state = _focused(state)
    assert _key("left", state) == ComponentMessage("app/scores", SelectDate(-1))
    assert _key("right", state) == ComponentMessage("app/scores", SelectDate(1))
    assert _key("down", state) == ComponentMessage("app/scores", EnterBoxSelection())
    assert _key("up", state) == ExitContentFocus()
    assert isinstance(_key("r", state), RefreshData)
    boxes = replace(state, ui=replace(state.ui, scores=replace(state.ui.scores, box_selection_active=True)))
    assert _key("right", boxes) == DocumentNav(FocusRight())
    assert _key("down", boxes) == DocumentNav(FocusNext())
    assert _key("enter", boxes) == ActivateFocused()
    assert _key("up", boxes).msg.__class__.__name__ == "ExitBoxSelection"


def test_standings_view_and_browse(state, effects):
    state = _focused(state, Tab.STANDINGS)
    assert _key("right", state) == ComponentMessage("app/standings", CycleView(1))
    assert _key("down", state) == ComponentMessage("app/standings", EnterBrowseMode())
    state, _ = reduce(state, StandingsLoaded(Ok(fixtures.standings())), effects)
    state, _ = reduce(state, _key("down", state), effects)
    assert state.ui.standings.browse_mode
    assert _key("down", state) == DocumentNav(FocusNext())
    assert _key("pagedown", state) == DocumentNav(PageDown())
    assert _key("escape", state) == NavigateUp()


def test_other_tabs_use_document_keys(state):
    state = _focused(state, Tab.SETTINGS)
    assert _key("tab", state) == DocumentNav(FocusNext())
    assert _key("shift+tab", state) == DocumentNav(FocusPrev())
    assert _key("enter", state) == ActivateFocused()
    assert _key("up", state) == ExitContentFocus()


def test_stacked_panel_receives_keys(state, effects):
    state, _ = reduce(state, PushDocument(TeamPanel("TOR")), effects)
    assert _key("down", state) == StackedDocumentKey(KeyEvent("down"))
    assert _key("enter", state) == ActivateFocused()
    assert _key("escape", state) == NavigateUp()
    assert _key("z", state) is None


def test_stacked_up_backs_out_only_from_first_element(state, effects):
    state, _ = reduce(state, PushDocument(TeamPanel("TOR")), effects)
    # nothing focused yet: up moves focus inside the panel
    assert _key("up", state) == StackedDocumentKey(KeyEvent("up"))
    state, _ = reduce(state, TeamRosterLoaded("TOR", Ok(fixtures.roster_for("TOR"))), effects)
    state, _ = reduce(state, StackedDocumentKey(KeyEvent("down")), effects)
    assert active_nav(state).focus_index == 0
    assert _key("up", state) == NavigateUp()
    state, _ = reduce(state, StackedDocumentKey(KeyEvent("down")), effects)
    assert _key("up", state) == StackedDocumentKey(KeyEvent("up"))


def test_nav_key_map():
    assert key_to_nav_msg(KeyEvent("shift+down")) == ScrollDown(1)
    assert key_to_nav_msg(KeyEvent("enter")) is None
    assert KeyEvent("shift+tab").shift
    assert KeyEvent("a").char == "a"
    assert KeyEvent("pageup").char is None
