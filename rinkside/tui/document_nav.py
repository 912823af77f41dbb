"""Navigation messages shared by every document-backed screen.

``DocumentNavState`` is the persisted half of a viewport: focus index and
scroll offset, plus the focusable metadata of the document it was last
synced with.  It lives in application state (one slot per tab, one per
stacked panel) and is only ever replaced through ``handle_message``.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace

from rinkside.tui.focus import (
    FocusableElement,
    FocusableId,
    FocusContext,
    RowPosition,
    did_wrap_backward,
    did_wrap_forward,
    focus_next,
    focus_prev,
)
from rinkside.tui.links import LinkTarget

logger = logging.getLogger(__name__)

MIN_VIEWPORT_HEIGHT = 5
AUTOSCROLL_PADDING = 3
MIN_PAGE_SIZE = 10

LEFT = -1
RIGHT = 1


# ----------------------------- Messages ----------------------------- #

@dataclass(frozen=True, slots=True)
class FocusNext:
    pass


@dataclass(frozen=True, slots=True)
class FocusPrev:
    pass


@dataclass(frozen=True, slots=True)
class FocusLeft:
    pass


@dataclass(frozen=True, slots=True)
class FocusRight:
    pass


@dataclass(frozen=True, slots=True)
class ScrollUp:
    lines: int = 1


@dataclass(frozen=True, slots=True)
class ScrollDown:
    lines: int = 1


@dataclass(frozen=True, slots=True)
class ScrollToTop:
    pass


@dataclass(frozen=True, slots=True)
class ScrollToBottom:
    pass


@dataclass(frozen=True, slots=True)
class PageUp:
    pass


@dataclass(frozen=True, slots=True)
class PageDown:
    pass


@dataclass(frozen=True, slots=True)
class UpdateViewportHeight:
    height: int


NavMsg = (
    FocusNext | FocusPrev | FocusLeft | FocusRight
    | ScrollUp | ScrollDown | ScrollToTop | ScrollToBottom
    | PageUp | PageDown | UpdateViewportHeight
)


# ------------------------------ State ------------------------------- #

@dataclass(frozen=True, slots=True)
class DocumentNavState:
    focus_index: int | None = None
    scroll_offset: int = 0
    viewport_height: int = 0
    content_height: int = 0
    focusable_positions: tuple[int, ...] = ()
    focusable_heights: tuple[int, ...] = ()
    focusable_ids: tuple[FocusableId, ...] = ()
    focusable_row_positions: tuple[RowPosition | None, ...] = ()
    link_targets: tuple[LinkTarget | None, ...] = ()

    @property
    def focusable_count(self) -> int:
        return len(self.focusable_positions)

    @property
    def focused_id(self) -> FocusableId | None:
        if self.focus_index is None or self.focus_index >= len(self.focusable_ids):
            return None
        return self.focusable_ids[self.focus_index]

    @property
    def focused_link_target(self) -> LinkTarget | None:
        if self.focus_index is None or self.focus_index >= len(self.link_targets):
            return None
        return self.link_targets[self.focus_index]

    def focus_context(self) -> FocusContext:
        return FocusContext(self.focused_id)

    @property
    def max_offset(self) -> int:
        return max(0, self.content_height - max(self.viewport_height, MIN_VIEWPORT_HEIGHT))


def sync_focusables(
    state: DocumentNavState,
    focusables: Sequence[FocusableElement],
    content_height: int,
) -> DocumentNavState:
    """Refresh cached metadata after a rebuild, keeping focus on the same id when it survives."""
    ids = tuple(f.id for f in focusables)
    previous = state.focused_id
    if not ids:
        focus_index = None
    elif previous is not None and previous in ids:
        focus_index = ids.index(previous)
    elif state.focus_index is not None:
        focus_index = min(state.focus_index, len(ids) - 1)
    else:
        focus_index = None
    synced = replace(
        state,
        focus_index=focus_index,
        content_height=content_height,
        focusable_positions=tuple(f.y for f in focusables),
        focusable_heights=tuple(f.height for f in focusables),
        focusable_ids=ids,
        focusable_row_positions=tuple(f.row_position for f in focusables),
        link_targets=tuple(f.link_target for f in focusables),
    )
    return replace(synced, scroll_offset=min(synced.scroll_offset, synced.max_offset))


# ---------------------------- Algorithms ---------------------------- #

def scroll_into_view(offset: int, y: int, height: int, viewport_height: int, padding: int) -> int:
    """Smallest scroll change that brings ``[y, y+height)`` inside the viewport.

    Padding lines are kept around the element when they fit; the element's
    top edge is never scrolled above the viewport.
    """
    top, bottom = offset, offset + viewport_height
    if y < top:
        new = max(0, y - padding)
    elif y + height > bottom:
        new = max(0, y + height + padding - viewport_height)
    else:
        return offset
    lo = max(0, y + height - viewport_height)
    hi = y
    if lo > hi:
        # taller than the viewport: pin its top edge
        lo = hi
    return min(max(new, lo), hi)


def find_row_sibling(
    row_positions: Sequence[RowPosition | None],
    current: int | None,
    direction: int,
) -> int | None:
    """Index of the entry in the adjacent Row column, or None at an edge or outside rows."""
    if current is None or current >= len(row_positions):
        return None
    here = row_positions[current]
    if here is None:
        return None
    target_child = here.child_idx + direction
    if target_child < 0:
        return None
    best: tuple[int, int, int] | None = None
    for i, pos in enumerate(row_positions):
        if pos is None or pos.row_y != here.row_y or pos.child_idx != target_child:
            continue
        key = (abs(pos.idx_within_child - here.idx_within_child), pos.idx_within_child, i)
        if best is None or key < best:
            best = key
    return None if best is None else best[2]


def ensure_focused_visible(state: DocumentNavState) -> DocumentNavState:
    idx = state.focus_index
    if idx is None or idx >= len(state.focusable_positions):
        return state
    y = state.focusable_positions[idx]
    h = state.focusable_heights[idx] if idx < len(state.focusable_heights) else 1
    vh = max(state.viewport_height, MIN_VIEWPORT_HEIGHT)
    new_offset = scroll_into_view(state.scroll_offset, y, h, vh, AUTOSCROLL_PADDING)
    if state.content_height:
        new_offset = min(new_offset, state.max_offset)
    if new_offset == state.scroll_offset:
        return state
    return replace(state, scroll_offset=new_offset)


def _set_offset(state: DocumentNavState, offset: int) -> DocumentNavState:
    return replace(state, scroll_offset=min(max(0, offset), state.max_offset))


def _page_size(state: DocumentNavState) -> int:
    return max(state.viewport_height, MIN_PAGE_SIZE)


def handle_message(state: DocumentNavState, msg: NavMsg) -> DocumentNavState:
    """Apply one navigation message; unknown messages leave state unchanged."""
    n = state.focusable_count
    if isinstance(msg, FocusNext):
        new = focus_next(state.focus_index, n)
        moved = replace(state, focus_index=new)
        if did_wrap_forward(state.focus_index, new):
            moved = replace(moved, scroll_offset=0)
        return ensure_focused_visible(moved)
    if isinstance(msg, FocusPrev):
        new = focus_prev(state.focus_index, n)
        moved = replace(state, focus_index=new)
        if did_wrap_backward(state.focus_index, new):
            moved = replace(moved, scroll_offset=moved.max_offset)
        return ensure_focused_visible(moved)
    if isinstance(msg, (FocusLeft, FocusRight)):
        direction = LEFT if isinstance(msg, FocusLeft) else RIGHT
        sibling = find_row_sibling(state.focusable_row_positions, state.focus_index, direction)
        if sibling is None:
            return state
        return ensure_focused_visible(replace(state, focus_index=sibling))
    if isinstance(msg, ScrollUp):
        return _set_offset(state, state.scroll_offset - msg.lines)
    if isinstance(msg, ScrollDown):
        return _set_offset(state, state.scroll_offset + msg.lines)
    if isinstance(msg, ScrollToTop):
        return replace(state, scroll_offset=0)
    if isinstance(msg, ScrollToBottom):
        return replace(state, scroll_offset=state.max_offset)
    if isinstance(msg, PageUp):
        return _set_offset(state, state.scroll_offset - _page_size(state))
    if isinstance(msg, PageDown):
        return _set_offset(state, state.scroll_offset + _page_size(state))
    if isinstance(msg, UpdateViewportHeight):
        resized = replace(state, viewport_height=max(0, msg.height))
        return ensure_focused_visible(_set_offset(resized, resized.scroll_offset))
    logger.debug("Ignoring unknown navigation message %r", msg)
    return state


__all__ = [
    "AUTOSCROLL_PADDING",
    "DocumentNavState",
    "FocusLeft",
    "FocusNext",
    "FocusPrev",
    "FocusRight",
    "MIN_PAGE_SIZE",
    "MIN_VIEWPORT_HEIGHT",
    "NavMsg",
    "PageDown",
    "PageUp",
    "ScrollDown",
    "ScrollToBottom",
    "ScrollToTop",
    "ScrollUp",
    "UpdateViewportHeight",
    "ensure_focused_visible",
    "find_row_sibling",
    "handle_message",
    "scroll_into_view",
    "sync_focusables",
]
