from dataclasses import replace

from rinkside.tui.document_nav import (
    AUTOSCROLL_PADDING,
    DocumentNavState,
    FocusLeft,
    FocusNext,
    FocusPrev,
    FocusRight,
    PageDown,
    PageUp,
    ScrollDown,
    ScrollToBottom,
    ScrollToTop,
    ScrollUp,
    UpdateViewportHeight,
    find_row_sibling,
    handle_message,
    scroll_into_view,
    sync_focusables,
)
from rinkside.tui.elements import GameBox, Group, Heading, Link, Row, Spacer, collect_all, elements_height
from rinkside.tui.focus import GameLinkId, LinkId, RowPosition
from rinkside.tui.links import ActionTarget


def _nav(elements, viewport_height=10):
    return sync_focusables(DocumentNavState(viewport_height=viewport_height), collect_all(elements),
                           elements_height(elements))


def _links(n):
    return [Link(str(i), ActionTarget(f"x:{i}"), f"l{i}") for i in range(n)]


def test_sync_records_focusable_metadata():
    nav = _nav([Heading("T"), Spacer(1)] + _links(2))
    assert nav.focusable_positions == (3, 4)
    assert nav.focusable_heights == (1, 1)
    assert nav.focusable_ids == (LinkId("l0"), LinkId("l1"))
    assert nav.content_height == 5
    assert nav.focus_index is None


def test_sync_follows_focused_id_and_clamps():
    nav = replace(_nav(_links(5)), focus_index=4)
    resynced = sync_focusables(nav, collect_all(_links(3)), 3)
    assert resynced.focus_index == 2
    moved = sync_focusables(replace(nav, focus_index=1), collect_all([Heading("x")] + _links(5)), 7)
    assert moved.focused_id == LinkId("l1")
    assert sync_focusables(nav, [], 0).focus_index is None


def test_focus_next_wraps_and_resets_scroll():
    nav = _nav(_links(40))
    for _ in range(40):
        nav = handle_message(nav, FocusNext())
    assert nav.focus_index == 39
    assert nav.scroll_offset == 30
    nav = handle_message(nav, FocusNext())
    assert nav.focus_index == 0
    assert nav.scroll_offset == 0


def test_focus_prev_from_nothing_goes_to_bottom():
    nav = handle_message(_nav(_links(40)), FocusPrev())
    assert nav.focus_index == 39
    assert nav.scroll_offset == nav.max_offset


def test_autoscroll_keeps_focused_visible():
    nav = _nav([Spacer(3)] + _links(50), viewport_height=8)
    for _ in range(60):
        nav = handle_message(nav, FocusNext())
        y = nav.focusable_positions[nav.focus_index]
        assert nav.scroll_offset <= y < nav.scroll_offset + nav.viewport_height


def test_scroll_into_view_padding():
    assert scroll_into_view(0, 12, 1, 10, AUTOSCROLL_PADDING) == 6
    assert scroll_into_view(20, 12, 1, 10, AUTOSCROLL_PADDING) == 9
    assert scroll_into_view(0, 1, 1, 10, AUTOSCROLL_PADDING) == 0
    assert scroll_into_view(5, 30, 20, 10, AUTOSCROLL_PADDING) == 30


def test_scrolling_clamps_to_content():
    nav = _nav(_links(30))
    nav = handle_message(nav, ScrollDown(100))
    assert nav.scroll_offset == 20
    nav = handle_message(nav, ScrollUp(3))
    assert nav.scroll_offset == 17
    nav = handle_message(nav, ScrollToTop())
    assert nav.scroll_offset == 0
    nav = handle_message(nav, ScrollToBottom())
    assert nav.scroll_offset == 20
    nav = handle_message(nav, PageUp())
    assert nav.scroll_offset == 10
    nav = handle_message(nav, PageDown())
    assert nav.scroll_offset == 20


def test_viewport_height_update():
    nav = handle_message(_nav(_links(30)), UpdateViewportHeight(25))
    assert nav.viewport_height == 25
    assert nav.max_offset == 5


def _box_rows():
    return [
        Heading("Scores"),
        Row([GameBox(1, "a"), GameBox(2, "b")]),
        Spacer(1),
        Row([GameBox(3, "c"), GameBox(4, "d")]),
        Row([Group(_links(3)), Group([Link("r", ActionTarget("x:r"), "r")])]),
    ]


def test_row_left_right_never_changes_row_y():
    nav = handle_message(_nav(_box_rows(), viewport_height=40), FocusNext())
    assert nav.focused_id == GameLinkId(1)
    right = handle_message(nav, FocusRight())
    assert right.focused_id == GameLinkId(2)
    assert right.focusable_row_positions[right.focus_index].row_y == nav.focusable_row_positions[nav.focus_index].row_y
    assert handle_message(right, FocusRight()) == right
    assert handle_message(nav, FocusLeft()) == nav
    assert handle_message(right, FocusLeft()).focused_id == GameLinkId(1)


def test_up_down_is_linear_across_rows():
    nav = _nav(_box_rows(), viewport_height=40)
    ids = []
    for _ in range(4):
        nav = handle_message(nav, FocusNext())
        ids.append(nav.focused_id)
    assert ids == [GameLinkId(1), GameLinkId(2), GameLinkId(3), GameLinkId(4)]


def test_row_sibling_prefers_closest_index():
    rows = [
        RowPosition(0, 0, 0), RowPosition(0, 0, 1), RowPosition(0, 0, 2),
        RowPosition(0, 1, 0),
        RowPosition(9, 1, 0),
        None,
    ]
    assert find_row_sibling(rows, 2, 1) == 3
    assert find_row_sibling(rows, 3, -1) == 0
    assert find_row_sibling(rows, 0, -1) is None
    assert find_row_sibling(rows, 4, -1) is None
    assert find_row_sibling(rows, 5, 1) is None
    assert find_row_sibling(rows, None, 1) is None
