"""Document elements.

Every element knows its height, how to contribute focusable entries and
how to draw itself into a ``Buffer``.  Trees are rebuilt on every render
pass, so elements are immutable values with no identity across frames.

``collect_focusable`` walks depth-first and hands each child the running
``y`` of everything above it, which keeps the extracted list in visual
top-to-bottom order.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass, field, replace

from rinkside.tui.buffer import Buffer, Rect
from rinkside.tui.focus import (
    FocusableElement,
    FocusContext,
    GameLinkId,
    LinkId,
    RowPosition,
)
from rinkside.tui.links import LinkTarget, boxscore_action
from rinkside.tui.table import TableWidget, table_focusables

SELECTOR = "▶ "
UNSELECTED = "  "
LINK_STYLE = "cyan"
FOCUSED_LINK_STYLE = "reverse bold"
DEFAULT_ROW_GAP = 2
GAME_BOX_HEIGHT = 6
GAME_BOX_WIDTH = 30


class Element(ABC):
    @abstractmethod
    def height(self) -> int: ...

    def collect_focusable(self, out: list[FocusableElement], y_offset: int) -> None:
        """Append this element's focusable entries, positioned at ``y_offset``."""

    @abstractmethod
    def render(self, buffer: Buffer, area: Rect, focus: FocusContext) -> None: ...

    def preferred_width(self) -> int | None:
        return None


@dataclass(frozen=True)
class Text(Element):
    content: str
    style: str | None = None

    def height(self) -> int:
        return self.content.count("\n") + 1

    def render(self, buffer, area, focus):
        for i, line in enumerate(self.content.split("\n")[:area.height]):
            buffer.set_string(area.x, area.y + i, line, self.style, max_width=area.width)

    def preferred_width(self) -> int | None:
        return max(len(line) for line in self.content.split("\n"))


@dataclass(frozen=True)
class Heading(Element):
    content: str
    level: int = 1

    def __post_init__(self):
        object.__setattr__(self, "level", min(6, max(1, self.level)))

    def height(self) -> int:
        return 2 if self.level == 1 else 1

    def render(self, buffer, area, focus):
        buffer.set_string(area.x, area.y, self.content, "bold", max_width=area.width)
        if self.level == 1 and area.height > 1:
            underline = "═" * min(len(self.content), area.width)
            buffer.set_string(area.x, area.y + 1, underline, "bold")


@dataclass(frozen=True)
class SectionTitle(Element):
    content: str
    underline: bool = False

    def height(self) -> int:
        # title, optional rule, trailing blank line
        return 3 if self.underline else 2

    def render(self, buffer, area, focus):
        buffer.set_string(area.x, area.y, self.content, "bold", max_width=area.width)
        if self.underline and area.height > 1:
            buffer.set_string(area.x, area.y + 1, "─" * min(len(self.content), area.width), "dim")


@dataclass(frozen=True)
class Link(Element):
    display: str
    target: LinkTarget
    id: str

    def height(self) -> int:
        return 1

    def collect_focusable(self, out, y_offset):
        out.append(FocusableElement(
            id=LinkId(self.id),
            y=y_offset,
            height=1,
            rect=Rect(0, y_offset, len(self.display) + len(SELECTOR), 1),
            link_target=self.target,
        ))

    def render(self, buffer, area, focus):
        if focus.is_link_focused(self.id):
            buffer.set_string(area.x, area.y, SELECTOR + self.display, FOCUSED_LINK_STYLE, max_width=area.width)
        else:
            buffer.set_string(area.x, area.y, UNSELECTED + self.display, LINK_STYLE, max_width=area.width)

    def preferred_width(self) -> int | None:
        return len(self.display) + len(SELECTOR)


@dataclass(frozen=True)
class Separator(Element):
    def height(self) -> int:
        return 1

    def render(self, buffer, area, focus):
        buffer.set_string(area.x, area.y, "─" * area.width, "dim")


@dataclass(frozen=True)
class Spacer(Element):
    lines: int = 1

    def height(self) -> int:
        return max(0, self.lines)

    def render(self, buffer, area, focus):
        pass


@dataclass(frozen=True)
class Group(Element):
    children: Sequence[Element] = field(default=())
    style: str | None = None

    def height(self) -> int:
        return sum(child.height() for child in self.children)

    def collect_focusable(self, out, y_offset):
        y = y_offset
        for child in self.children:
            child.collect_focusable(out, y)
            y += child.height()

    def render(self, buffer, area, focus):
        y = area.y
        for child in self.children:
            h = child.height()
            if y >= area.bottom:
                break
            child.render(buffer, Rect(area.x, y, area.width, min(h, area.bottom - y)), focus)
            y += h
        if self.style:
            buffer.set_style(area.with_height(min(area.height, self.height())), self.style)


@dataclass(frozen=True)
class Table(Element):
    widget: TableWidget
    focusable: tuple[FocusableElement, ...] = ()

    @classmethod
    def from_widget(cls, widget: TableWidget) -> Table:
        return cls(widget, tuple(table_focusables(widget)))

    def height(self) -> int:
        return self.widget.preferred_height()

    def collect_focusable(self, out, y_offset):
        out.extend(f.shifted(y_offset) for f in self.focusable)

    def render(self, buffer, area, focus):
        self.widget.with_focus(focus).render(buffer, area)

    def preferred_width(self) -> int | None:
        return self.widget.preferred_width()


@dataclass(frozen=True)
class Row(Element):
    children: Sequence[Element] = field(default=())
    gap: int = DEFAULT_ROW_GAP

    def height(self) -> int:
        return max((child.height() for child in self.children), default=0)

    def collect_focusable(self, out, y_offset):
        tagged: list[FocusableElement] = []
        for child_idx, child in enumerate(self.children):
            collected: list[FocusableElement] = []
            child.collect_focusable(collected, y_offset)
            for idx, entry in enumerate(collected):
                if entry.row_position is None:
                    entry = replace(entry, row_position=RowPosition(y_offset, child_idx, idx))
                tagged.append(entry)
        # children sit side by side, so interleave them into reading order
        tagged.sort(key=lambda e: e.y)
        out.extend(tagged)

    def child_widths(self, width: int) -> list[int]:
        n = len(self.children)
        if n == 0:
            return []
        available = max(0, width - self.gap * (n - 1))
        preferred = [child.preferred_width() for child in self.children]
        if all(p is not None for p in preferred) and sum(preferred) <= available:  # type: ignore[arg-type]
            return [p for p in preferred]  # type: ignore[misc]
        return [available // n] * n

    def render(self, buffer, area, focus):
        x = area.x
        for child, w in zip(self.children, self.child_widths(area.width)):
            child.render(buffer, Rect(x, area.y, w, min(child.height(), area.height)), focus)
            x += w + self.gap


@dataclass(frozen=True)
class Indented(Element):
    child: Element
    margin: int = 2

    def height(self) -> int:
        return self.child.height()

    def collect_focusable(self, out, y_offset):
        self.child.collect_focusable(out, y_offset)

    def render(self, buffer, area, focus):
        self.child.render(buffer, area.inset_left(self.margin), focus)

    def preferred_width(self) -> int | None:
        inner = self.child.preferred_width()
        return None if inner is None else inner + self.margin


@dataclass(frozen=True)
class GameBox(Element):
    """Bordered score box for one game; activating it opens the boxscore."""
    game_id: int
    title: str
    lines: tuple[str, ...] = ()

    def height(self) -> int:
        return GAME_BOX_HEIGHT

    def collect_focusable(self, out, y_offset):
        out.append(FocusableElement(
            id=GameLinkId(self.game_id),
            y=y_offset,
            height=GAME_BOX_HEIGHT,
            rect=Rect(0, y_offset, GAME_BOX_WIDTH, GAME_BOX_HEIGHT),
            link_target=boxscore_action(self.game_id),
        ))

    def render(self, buffer, area, focus):
        width = min(area.width, GAME_BOX_WIDTH)
        if width < 4:
            return
        inner = width - 2
        style = "bold yellow" if focus.is_focused(GameLinkId(self.game_id)) else "dim"
        title = f" {self.title} "[:inner]
        buffer.set_string(area.x, area.y, "┌" + title + "─" * (inner - len(title)) + "┐", style)
        body = list(self.lines[:GAME_BOX_HEIGHT - 2])
        body += [""] * (GAME_BOX_HEIGHT - 2 - len(body))
        for i, line in enumerate(body, start=1):
            if i >= area.height:
                return
            buffer.set_string(area.x, area.y + i, "│", style)
            buffer.set_string(area.x + 1, area.y + i, f" {line}".ljust(inner)[:inner])
            buffer.set_string(area.x + width - 1, area.y + i, "│", style)
        if area.height >= GAME_BOX_HEIGHT:
            buffer.set_string(area.x, area.y + GAME_BOX_HEIGHT - 1, "└" + "─" * inner + "┘", style)

    def preferred_width(self) -> int | None:
        return GAME_BOX_WIDTH


def table(widget: TableWidget) -> Table:
    return Table.from_widget(widget)


def elements_height(elements: Sequence[Element]) -> int:
    return sum(el.height() for el in elements)


def collect_all(elements: Sequence[Element], y_offset: int = 0) -> list[FocusableElement]:
    out: list[FocusableElement] = []
    y = y_offset
    for el in elements:
        el.collect_focusable(out, y)
        y += el.height()
    return out


__all__ = [
    "Element",
    "GameBox",
    "Group",
    "Heading",
    "Indented",
    "Link",
    "Row",
    "SectionTitle",
    "Separator",
    "Spacer",
    "Table",
    "Text",
    "collect_all",
    "elements_height",
    "table",
]
