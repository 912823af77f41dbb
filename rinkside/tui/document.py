"""Documents and the focus manager that scrolls over them.

A ``Document`` produces an element list from current data and the focused
id.  ``DocumentView`` owns one document's scroll offset and focus index,
keeps the focused element on screen and windows the rendered output.
"""
from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod

from rinkside.metrics import get_metrics
from rinkside.tui.buffer import Buffer, Rect
from rinkside.tui.document_nav import (
    AUTOSCROLL_PADDING,
    FocusLeft,
    FocusNext,
    FocusPrev,
    FocusRight,
    LEFT,
    NavMsg,
    PageDown,
    PageUp,
    RIGHT,
    ScrollDown,
    ScrollToBottom,
    ScrollToTop,
    ScrollUp,
    UpdateViewportHeight,
    find_row_sibling,
    scroll_into_view,
)
from rinkside.tui.elements import Element, collect_all, elements_height
from rinkside.tui.focus import (
    FocusableElement,
    FocusableId,
    FocusContext,
    did_wrap_backward,
    did_wrap_forward,
    focus_next,
    focus_prev,
)
from rinkside.tui.links import LinkTarget
from rinkside.tui.viewport import Viewport

logger = logging.getLogger(__name__)


class Document(ABC):
    @abstractmethod
    def build(self, focus: FocusContext) -> list[Element]:
        """Element list for the current data; must not depend on layout."""

    @abstractmethod
    def title(self) -> str: ...

    @abstractmethod
    def id(self) -> str: ...

    def calculate_height(self, focus: FocusContext | None = None) -> int:
        return elements_height(self.build(focus or FocusContext()))

    def focusable_elements(self, focus: FocusContext | None = None) -> list[FocusableElement]:
        return collect_all(self.build(focus or FocusContext()))

    def render_full(self, width: int, focus: FocusContext | None = None) -> Buffer:
        focus = focus or FocusContext()
        elements = self.build(focus)
        buffer = Buffer(width, max(1, elements_height(elements)))
        y = 0
        for element in elements:
            h = element.height()
            element.render(buffer, Rect(0, y, width, h), focus)
            y += h
        return buffer


class DocumentView:
    """Viewport and focus manager for one document."""

    def __init__(self, document: Document, viewport_height: int):
        self.document = document
        self.viewport = Viewport(0, viewport_height, 0)
        self.focus_index: int | None = None
        self._focusables: list[FocusableElement] = []
        self.refresh()

    # -- bookkeeping -------------------------------------------------------

    def refresh(self) -> None:
        """Re-extract focusables after the document's data changed."""
        previous = self.focused_id
        self._focusables = self.document.focusable_elements()
        self.viewport.set_content_height(self.document.calculate_height())
        ids = [f.id for f in self._focusables]
        if not ids:
            self.focus_index = None
        elif previous is not None and previous in ids:
            self.focus_index = ids.index(previous)
        elif self.focus_index is not None:
            self.focus_index = min(self.focus_index, len(ids) - 1)

    def set_document(self, document: Document) -> None:
        self.document = document
        self.refresh()

    @property
    def focusables(self) -> list[FocusableElement]:
        return list(self._focusables)

    @property
    def scroll_offset(self) -> int:
        return self.viewport.offset

    @property
    def viewport_height(self) -> int:
        return self.viewport.height

    @property
    def focused_element(self) -> FocusableElement | None:
        if self.focus_index is None:
            return None
        return self._focusables[self.focus_index]

    @property
    def focused_id(self) -> FocusableId | None:
        el = self.focused_element
        return el.id if el is not None else None

    def focus_context(self) -> FocusContext:
        return FocusContext(self.focused_id)

    def set_viewport_height(self, height: int) -> None:
        self.viewport.set_height(height)
        self.ensure_visible()

    def set_scroll_offset(self, offset: int) -> None:
        self.viewport.set_offset(offset)

    def restore(self, focus_index: int | None, scroll_offset: int) -> None:
        """Adopt focus and scroll kept elsewhere, e.g. in application state."""
        if focus_index is not None and not 0 <= focus_index < len(self._focusables):
            focus_index = None
        self.focus_index = focus_index
        self.viewport.set_offset(scroll_offset)

    # -- focus movement ----------------------------------------------------

    def focus_next(self) -> None:
        old = self.focus_index
        self.focus_index = focus_next(old, len(self._focusables))
        if did_wrap_forward(old, self.focus_index):
            self.viewport.scroll_to_top()
        self.ensure_visible()

    def focus_prev(self) -> None:
        old = self.focus_index
        self.focus_index = focus_prev(old, len(self._focusables))
        if did_wrap_backward(old, self.focus_index):
            self.viewport.scroll_to_bottom()
        self.ensure_visible()

    def focus_by_index(self, index: int) -> bool:
        if not 0 <= index < len(self._focusables):
            return False
        self.focus_index = index
        self.ensure_visible()
        return True

    def focus_element_by_id(self, fid: FocusableId) -> bool:
        for i, f in enumerate(self._focusables):
            if f.id == fid:
                return self.focus_by_index(i)
        return False

    def focus_left(self) -> bool:
        return self._focus_row_sibling(LEFT)

    def focus_right(self) -> bool:
        return self._focus_row_sibling(RIGHT)

    def _focus_row_sibling(self, direction: int) -> bool:
        rows = [f.row_position for f in self._focusables]
        sibling = find_row_sibling(rows, self.focus_index, direction)
        if sibling is None:
            return False
        return self.focus_by_index(sibling)

    def clear_focus(self) -> None:
        self.focus_index = None

    def ensure_visible(self) -> None:
        el = self.focused_element
        if el is None:
            return
        new = scroll_into_view(self.viewport.offset, el.y, el.height, self.viewport.height, AUTOSCROLL_PADDING)
        self.viewport.set_offset(new)

    # -- scrolling ---------------------------------------------------------

    def scroll_up(self, lines: int = 1) -> None:
        self.viewport.scroll_up(lines)

    def scroll_down(self, lines: int = 1) -> None:
        self.viewport.scroll_down(lines)

    def page_up(self) -> None:
        self.viewport.scroll_up(max(1, self.viewport.height - 2))

    def page_down(self) -> None:
        self.viewport.scroll_down(max(1, self.viewport.height - 2))

    def scroll_to_top(self) -> None:
        self.viewport.scroll_to_top()

    def scroll_to_bottom(self) -> None:
        self.viewport.scroll_to_bottom()

    def apply(self, msg: NavMsg) -> None:
        if isinstance(msg, FocusNext):
            self.focus_next()
        elif isinstance(msg, FocusPrev):
            self.focus_prev()
        elif isinstance(msg, FocusLeft):
            self.focus_left()
        elif isinstance(msg, FocusRight):
            self.focus_right()
        elif isinstance(msg, ScrollUp):
            self.scroll_up(msg.lines)
        elif isinstance(msg, ScrollDown):
            self.scroll_down(msg.lines)
        elif isinstance(msg, PageUp):
            self.page_up()
        elif isinstance(msg, PageDown):
            self.page_down()
        elif isinstance(msg, ScrollToTop):
            self.scroll_to_top()
        elif isinstance(msg, ScrollToBottom):
            self.scroll_to_bottom()
        elif isinstance(msg, UpdateViewportHeight):
            self.set_viewport_height(msg.height)

    def activate_focused(self) -> LinkTarget | None:
        el = self.focused_element
        return el.link_target if el is not None else None

    # -- rendering ---------------------------------------------------------

    def render(self, buffer: Buffer, area: Rect) -> None:
        """Draw the visible window of the document into ``area``."""
        started = time.perf_counter()
        if area.height != self.viewport.height:
            self.set_viewport_height(area.height)
        full = self.document.render_full(area.width, self.focus_context())
        buffer.blit(full, self.viewport.offset, area)
        get_metrics().render_seconds.labels(panel=self.document.id()).observe(time.perf_counter() - started)


__all__ = ["Document", "DocumentView"]
