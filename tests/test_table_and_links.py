import pytest

from rinkside.panels import BoxscorePanel, PlayerPanel, TeamPanel
from rinkside.tui.buffer import Buffer, Rect
from rinkside.tui.focus import FocusContext, TableCellId
from rinkside.tui.links import (
    ActionTarget,
    DocumentLink,
    DocumentTarget,
    UrlTarget,
    parse_action_target,
    target_to_panel,
)
from rinkside.tui.table import (
    Alignment,
    Column,
    PlayerLinkCell,
    TableWidget,
    TeamLinkCell,
    TextCell,
    table_focusables,
)


def _widget(**kw):
    rows = [
        [TeamLinkCell("TOR", "TOR"), TextCell("40"), PlayerLinkCell("Matthews", 8479318)],
        [TeamLinkCell("BOS", "BOS"), TextCell("40"), TextCell("-")],
        [TextCell("---"), TextCell("0"), TextCell("-")],
    ]
    return TableWidget("t", [Column("Team"), Column("GP", align=Alignment.RIGHT), Column("Star")], rows, **kw)


def test_only_link_cells_become_focusable():
    entries = table_focusables(_widget())
    # 3 link cells, 6 plain-text cells
    assert len(entries) == 3
    assert [e.id for e in entries] == [TableCellId("t", 0, 0), TableCellId("t", 0, 2), TableCellId("t", 1, 0)]
    assert [e.y for e in entries] == [2, 2, 3]


def test_focused_row_highlight_is_column_independent():
    focus = FocusContext(TableCellId("t", 0, 2))
    assert focus.focused_table_row("t") == 0
    assert focus.focused_table_cell("t") == (0, 2)
    assert focus.focused_table_row("other") is None
    widget = _widget().with_focus(focus)
    assert (widget.focused_row, widget.focused_col) == (0, 2)
    assert _widget(focused_row=1, focused_col=0).with_focus(FocusContext()).focused_row is None


def test_column_widths_and_render():
    widget = _widget()
    assert widget.column_widths() == [4, 2, 8]
    assert widget.preferred_width() == 4 + 2 + 8 + 2 * 2
    buf = Buffer(30, widget.preferred_height())
    widget.render(buf, Rect(0, 0, 30, buf.height))
    assert buf.line(0).startswith("Team  GP  Star")
    assert buf.line(2).startswith("TOR   40  Matthews")
    assert buf.get(0, 2)[1] == "cyan"


def test_parse_action_targets():
    assert parse_action_target("team:TOR") == TeamPanel("TOR")
    assert parse_action_target("player:97") == PlayerPanel(97)
    assert parse_action_target("open_boxscore_2024011501") == BoxscorePanel(2024011501)
    assert parse_action_target("player:abc") is None
    assert parse_action_target("toggle:debug") is None


def test_document_targets_map_to_panels():
    assert target_to_panel(DocumentTarget(DocumentLink.team("EDM"))) == TeamPanel("EDM")
    assert target_to_panel(DocumentTarget(DocumentLink.player(8478402))) == PlayerPanel(8478402)
    assert target_to_panel(DocumentTarget(DocumentLink.game(7))) == BoxscorePanel(7)
    assert target_to_panel(UrlTarget("https://example.com")) is None
    assert target_to_panel(ActionTarget("team:")) is None
    assert target_to_panel(None) is None


def test_row_wider_than_columns_is_rejected():
    with pytest.raises(ValueError, match="row 1 has 3 cells for 2 columns"):
        TableWidget("t", [Column("Team"), Column("GP")], [
            [TeamLinkCell("TOR", "TOR"), TextCell("40")],
            [TeamLinkCell("BOS", "BOS"), TextCell("40"), PlayerLinkCell("Pastrnak", 8477956)],
        ])
    short = TableWidget("t", [Column("Team"), Column("GP")], [[TeamLinkCell("TOR", "TOR")]])
    assert [e.id for e in table_focusables(short)] == [TableCellId("t", 0, 0)]
