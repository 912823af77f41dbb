"""Frame composition: tab bar, sub-header, active document and status bar."""
from __future__ import annotations

from rinkside.documents import active_document
from rinkside.error_handling import handle_ui_error
from rinkside.palette import CommandPalette
from rinkside.state import AppState, Tab, active_nav
from rinkside.tui.buffer import Buffer, Rect
from rinkside.tui.document import DocumentView

TAB_STYLE = "bold black on cyan"
TAB_FOCUSED_STYLE = "bold black on yellow"
DATE_SELECTED_STYLE = "reverse"
ERROR_STYLE = "bold white on red"
PALETTE_STYLE = "white on grey23"
PALETTE_SELECTED_STYLE = "bold black on yellow"
PALETTE_WIDTH = 50


def render_tab_bar(buffer: Buffer, area: Rect, state: AppState) -> None:
    x = area.x
    current = state.navigation.current_tab
    tab_bar_focused = not state.navigation.content_focused and not state.navigation.document_stack
    for n, tab in enumerate(Tab, start=1):
        label = f" {n}:{tab.label} "
        style = None
        if tab is current:
            style = TAB_FOCUSED_STYLE if tab_bar_focused else TAB_STYLE
        x += buffer.set_string(x, area.y, label, style, max_width=area.right - x)
        x += buffer.set_string(x, area.y, "|", "dim", max_width=area.right - x)


def render_subheader(buffer: Buffer, area: Rect, state: AppState) -> None:
    """Breadcrumb while panels are stacked; the date strip or view name otherwise."""
    nav = state.navigation
    if nav.document_stack:
        crumbs = [nav.current_tab.label] + [e.panel.breadcrumb() for e in nav.document_stack]
        buffer.set_string(area.x, area.y, " > ".join(crumbs), "bold", max_width=area.width)
        return
    if nav.current_tab is Tab.SCORES:
        scores = state.ui.scores
        x = area.x
        for i, day in enumerate(scores.window_dates()):
            style = DATE_SELECTED_STYLE if i == scores.selected_date_index else None
            x += buffer.set_string(x, area.y, day.strftime("%a %m/%d"), style, max_width=area.right - x)
            x += buffer.set_string(x, area.y, "  ", max_width=area.right - x)
    elif nav.current_tab is Tab.STANDINGS:
        label = f"View: {state.ui.standings.view.title()}"
        if state.ui.standings.browse_mode:
            label += "  [browse]"
        buffer.set_string(area.x, area.y, label, "bold", max_width=area.width)


def render_status(buffer: Buffer, area: Rect, state: AppState, override: str | None = None) -> None:
    system = state.system
    style = ERROR_STYLE if system.status_is_error or override else "black on white"
    text = override or system.status_message
    if state.data.loading:
        text = f"[loading {len(state.data.loading)}] {text}"
    buffer.set_string(area.x, area.y, text.ljust(area.width), style, max_width=area.width)
    if system.last_refresh is not None:
        # right-aligned so a long status never hides it
        stamp = f" updated {system.last_refresh.strftime(system.config.time_format)} "
        if len(stamp) < area.width:
            buffer.set_string(area.right - len(stamp), area.y, stamp, style)


def render_content(buffer: Buffer, area: Rect, state: AppState) -> str | None:
    """Draw the active document; a failing document leaves an error line instead.

    Returns the status text to show when rendering failed.
    """
    nav = active_nav(state)
    try:
        content = Buffer(area.width, area.height)
        view = DocumentView(active_document(state), area.height)
        view.restore(nav.focus_index, nav.scroll_offset)
        view.render(content, Rect(0, 0, area.width, area.height))
    except Exception as e:
        info = handle_ui_error(e, component="chrome", context={"tab": state.navigation.current_tab.label})
        message = f"Render error: {info.message}"
        buffer.set_string(area.x, area.y, message, ERROR_STYLE, max_width=area.width)
        return message
    buffer.blit(content, 0, area)
    return None


def render_palette(buffer: Buffer, area: Rect, palette: CommandPalette) -> None:
    """Search box overlay centred near the top of ``area``."""
    width = min(PALETTE_WIDTH, area.width - 2)
    if width < 10 or area.height < 3:
        return
    lines = [f"/{palette.query}"]
    if palette.query and not palette.results:
        lines.append("No matches")
    for result in palette.results:
        lines.append(f"{result.label}  [{result.category}]")
    box = Rect(area.x + (area.width - width) // 2, area.y + 1, width, min(len(lines) + 2, area.height - 1))
    inner = width - 2
    buffer.set_string(box.x, box.y, ("┌ Search " + "─" * inner)[:width - 1] + "┐", PALETTE_STYLE)
    for i, line in enumerate(lines[:box.height - 2]):
        y = box.y + 1 + i
        style = PALETTE_STYLE
        if i > 0 and i - 1 == palette.selected_index and palette.results:
            style = PALETTE_SELECTED_STYLE
        buffer.set_string(box.x, y, "│", PALETTE_STYLE)
        buffer.set_string(box.x + 1, y, line[:inner].ljust(inner), style)
        buffer.set_string(box.right - 1, y, "│", PALETTE_STYLE)
    buffer.set_string(box.x, box.bottom - 1, "└" + "─" * inner + "┘", PALETTE_STYLE)


def render_frame(state: AppState, width: int, height: int, palette: CommandPalette | None = None) -> Buffer:
    buffer = Buffer(width, height)
    if height <= 0 or width <= 0:
        return buffer
    render_tab_bar(buffer, Rect(0, 0, width, 1), state)
    if height > 1:
        render_subheader(buffer, Rect(0, 1, width, 1), state)
    content_height = height - 3
    if content_height > 0:
        render_error = render_content(buffer, Rect(0, 2, width, content_height), state)
    else:
        render_error = None
    if height > 2:
        render_status(buffer, Rect(0, height - 1, width, 1), state, override=render_error)
    if palette is not None and palette.visible:
        render_palette(buffer, Rect(0, 1, width, max(0, height - 2)), palette)
    return buffer


__all__ = ["render_content", "render_frame", "render_palette", "render_status", "render_subheader", "render_tab_bar"]
