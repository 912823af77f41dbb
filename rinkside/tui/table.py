"""Grid widget embedded in documents as a ``Table`` element.

Cells are either plain text or entity links.  Every link cell becomes one
focusable entry keyed by ``TableCellId(table_name, row, col)``; that key
lets the widget highlight the whole logical row when any of its cells holds
focus.
"""
from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field, replace
from enum import Enum

from rinkside.tui.buffer import Buffer, Rect
from rinkside.tui.focus import FocusableElement, FocusContext, TableCellId
from rinkside.tui.links import LinkTarget, player_action, team_action

TABLE_HEADER_HEIGHT = 2  # header line + rule
COLUMN_GAP = 2

HEADER_STYLE = "bold"
RULE_STYLE = "dim"
LINK_STYLE = "cyan"
FOCUSED_ROW_STYLE = "bold"
FOCUSED_CELL_STYLE = "reverse bold"


class Alignment(Enum):
    LEFT = "left"
    RIGHT = "right"
    CENTER = "center"


@dataclass(frozen=True, slots=True)
class TextCell:
    text: str


@dataclass(frozen=True, slots=True)
class TeamLinkCell:
    display: str
    abbrev: str


@dataclass(frozen=True, slots=True)
class PlayerLinkCell:
    display: str
    player_id: int


CellValue = TextCell | TeamLinkCell | PlayerLinkCell


def cell_text(cell: CellValue) -> str:
    if isinstance(cell, TextCell):
        return cell.text
    return cell.display


def cell_link_target(cell: CellValue) -> LinkTarget | None:
    if isinstance(cell, PlayerLinkCell):
        return player_action(cell.player_id)
    if isinstance(cell, TeamLinkCell):
        return team_action(cell.abbrev)
    return None


@dataclass(frozen=True, slots=True)
class Column:
    header: str
    width: int | None = None
    align: Alignment = Alignment.LEFT


def _align(text: str, width: int, align: Alignment) -> str:
    text = text[:width]
    if align is Alignment.RIGHT:
        return text.rjust(width)
    if align is Alignment.CENTER:
        return text.center(width)
    return text.ljust(width)


@dataclass(frozen=True)
class TableWidget:
    name: str
    columns: Sequence[Column]
    rows: Sequence[Sequence[CellValue]] = field(default=())
    focused_row: int | None = None
    focused_col: int | None = None

    header_height: int = TABLE_HEADER_HEIGHT

    def __post_init__(self):
        for r, row in enumerate(self.rows):
            if len(row) > len(self.columns):
                raise ValueError(
                    f"table {self.name!r}: row {r} has {len(row)} cells for {len(self.columns)} columns")

    def column_widths(self) -> list[int]:
        widths = []
        for c, col in enumerate(self.columns):
            if col.width is not None:
                widths.append(col.width)
                continue
            w = len(col.header)
            for row in self.rows:
                if c < len(row):
                    w = max(w, len(cell_text(row[c])))
            widths.append(w)
        return widths

    def column_offsets(self) -> list[int]:
        offsets, x = [], 0
        for w in self.column_widths():
            offsets.append(x)
            x += w + COLUMN_GAP
        return offsets

    def preferred_width(self) -> int:
        widths = self.column_widths()
        if not widths:
            return 0
        return sum(widths) + COLUMN_GAP * (len(widths) - 1)

    def preferred_height(self) -> int:
        return self.header_height + len(self.rows)

    def link_cells(self) -> Iterator[tuple[int, int, CellValue]]:
        for r, row in enumerate(self.rows):
            for c, cell in enumerate(row):
                if not isinstance(cell, TextCell):
                    yield r, c, cell

    def with_focus(self, focus: FocusContext) -> TableWidget:
        cell = focus.focused_table_cell(self.name)
        if cell is None:
            if self.focused_row is None and self.focused_col is None:
                return self
            return replace(self, focused_row=None, focused_col=None)
        return replace(self, focused_row=cell[0], focused_col=cell[1])

    def render(self, buffer: Buffer, area: Rect) -> None:
        widths = self.column_widths()
        offsets = self.column_offsets()
        if area.height <= 0:
            return
        for col, w, x in zip(self.columns, widths, offsets):
            buffer.set_string(area.x + x, area.y, _align(col.header, w, col.align), HEADER_STYLE,
                              max_width=area.right - area.x - x)
        if area.height > 1:
            rule_w = min(self.preferred_width(), area.width)
            buffer.set_string(area.x, area.y + 1, "─" * rule_w, RULE_STYLE)
        for r, row in enumerate(self.rows):
            y = area.y + self.header_height + r
            if y >= area.bottom:
                break
            row_focused = self.focused_row == r
            for c, cell in enumerate(row):
                if row_focused and self.focused_col == c:
                    style: str | None = FOCUSED_CELL_STYLE
                elif row_focused:
                    style = FOCUSED_ROW_STYLE
                elif not isinstance(cell, TextCell):
                    style = LINK_STYLE
                else:
                    style = None
                text = _align(cell_text(cell), widths[c], self.columns[c].align)
                buffer.set_string(area.x + offsets[c], y, text, style,
                                  max_width=area.right - area.x - offsets[c])


def table_focusables(widget: TableWidget) -> list[FocusableElement]:
    """One entry per link cell, relative to the table's own top edge."""
    widths = widget.column_widths()
    offsets = widget.column_offsets()
    out = []
    for r, c, cell in widget.link_cells():
        y = widget.header_height + r
        out.append(FocusableElement(
            id=TableCellId(widget.name, r, c),
            y=y,
            height=1,
            rect=Rect(offsets[c], y, widths[c], 1),
            link_target=cell_link_target(cell),
        ))
    return out


__all__ = [
    "Alignment",
    "CellValue",
    "Column",
    "PlayerLinkCell",
    "TABLE_HEADER_HEIGHT",
    "TableWidget",
    "TeamLinkCell",
    "TextCell",
    "cell_link_target",
    "cell_text",
    "table_focusables",
]
