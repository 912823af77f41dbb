"""Focusable ids, extracted focusable records and focus index helpers."""
from __future__ import annotations

from dataclasses import dataclass, replace

from rinkside.tui.buffer import Rect
from rinkside.tui.links import LinkTarget


@dataclass(frozen=True, slots=True)
class LinkId:
    id: str


@dataclass(frozen=True, slots=True)
class TableCellId:
    table_name: str
    row: int
    col: int


@dataclass(frozen=True, slots=True)
class TeamLinkId:
    abbrev: str


@dataclass(frozen=True, slots=True)
class PlayerLinkId:
    player_id: int


@dataclass(frozen=True, slots=True)
class GameLinkId:
    game_id: int


FocusableId = LinkId | TableCellId | TeamLinkId | PlayerLinkId | GameLinkId


@dataclass(frozen=True, slots=True)
class RowPosition:
    """Where an entry sits inside a Row: the row's y, which child, which entry of that child."""
    row_y: int
    child_idx: int
    idx_within_child: int


@dataclass(frozen=True, slots=True)
class FocusableElement:
    id: FocusableId
    y: int
    height: int
    rect: Rect
    link_target: LinkTarget | None = None
    row_position: RowPosition | None = None

    def shifted(self, dy: int) -> FocusableElement:
        if dy == 0:
            return self
        return replace(self, y=self.y + dy, rect=self.rect.shifted(dy=dy))


@dataclass(frozen=True, slots=True)
class FocusContext:
    """What is focused while a document builds, so it can style the focused item."""
    focused_id: FocusableId | None = None

    def is_focused(self, fid: FocusableId) -> bool:
        return self.focused_id == fid

    def is_link_focused(self, link_id: str) -> bool:
        return self.focused_id == LinkId(link_id)

    def focused_table_row(self, table_name: str) -> int | None:
        fid = self.focused_id
        if isinstance(fid, TableCellId) and fid.table_name == table_name:
            return fid.row
        return None

    def focused_table_cell(self, table_name: str) -> tuple[int, int] | None:
        fid = self.focused_id
        if isinstance(fid, TableCellId) and fid.table_name == table_name:
            return fid.row, fid.col
        return None


def focus_next(current: int | None, count: int) -> int | None:
    if count == 0:
        return None
    if current is None:
        return 0
    return (current + 1) % count


def focus_prev(current: int | None, count: int) -> int | None:
    if count == 0:
        return None
    if current is None or current == 0:
        return count - 1
    return current - 1


def did_wrap_forward(old: int | None, new: int | None) -> bool:
    return old is not None and new is not None and new < old


def did_wrap_backward(old: int | None, new: int | None) -> bool:
    return old is not None and new is not None and new > old


__all__ = [
    "FocusContext",
    "FocusableElement",
    "FocusableId",
    "GameLinkId",
    "LinkId",
    "PlayerLinkId",
    "RowPosition",
    "TableCellId",
    "TeamLinkId",
    "did_wrap_backward",
    "did_wrap_forward",
    "focus_next",
    "focus_prev",
]
