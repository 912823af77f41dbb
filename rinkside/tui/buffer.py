"""Cell surface that elements and viewports draw into.

A ``Buffer`` is a fixed grid of (char, style) cells.  Styles are rich style
strings, so a finished frame converts directly into a ``rich.text.Text``.
Writes outside the grid are clipped silently.
"""
from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text

Cell = tuple[str, str | None]

_BLANK: Cell = (" ", None)


@dataclass(frozen=True, slots=True)
class Rect:
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def shifted(self, dx: int = 0, dy: int = 0) -> Rect:
        return Rect(self.x + dx, self.y + dy, self.width, self.height)

    def inset_left(self, margin: int) -> Rect:
        margin = min(margin, self.width)
        return Rect(self.x + margin, self.y, self.width - margin, self.height)

    def with_height(self, height: int) -> Rect:
        return Rect(self.x, self.y, self.width, max(0, height))


class Buffer:
    def __init__(self, width: int, height: int):
        self.width = max(0, width)
        self.height = max(0, height)
        self._rows: list[list[Cell]] = [[_BLANK] * self.width for _ in range(self.height)]

    @property
    def area(self) -> Rect:
        return Rect(0, 0, self.width, self.height)

    def get(self, x: int, y: int) -> Cell:
        return self._rows[y][x]

    def set_string(self, x: int, y: int, text: str, style: str | None = None, *, max_width: int | None = None) -> int:
        """Write ``text`` starting at (x, y); returns the number of cells written."""
        if y < 0 or y >= self.height or x >= self.width:
            return 0
        limit = self.width if max_width is None else min(self.width, x + max(0, max_width))
        row = self._rows[y]
        written = 0
        for i, ch in enumerate(text):
            cx = x + i
            if cx >= limit:
                break
            if cx < 0:
                continue
            row[cx] = (ch, style)
            written += 1
        return written

    def set_style(self, area: Rect, style: str) -> None:
        for y in range(max(0, area.y), min(self.height, area.bottom)):
            row = self._rows[y]
            for x in range(max(0, area.x), min(self.width, area.right)):
                row[x] = (row[x][0], style)

    def blit(self, src: Buffer, src_y: int, dest: Rect) -> None:
        """Copy ``dest.height`` rows of ``src`` starting at ``src_y`` into ``dest``."""
        for dy in range(dest.height):
            sy = src_y + dy
            ty = dest.y + dy
            if sy < 0 or sy >= src.height or ty < 0 or ty >= self.height:
                continue
            for dx in range(min(dest.width, src.width)):
                tx = dest.x + dx
                if 0 <= tx < self.width:
                    self._rows[ty][tx] = src._rows[sy][dx]

    def line(self, y: int) -> str:
        return "".join(ch for ch, _ in self._rows[y])

    def lines(self) -> list[str]:
        return [self.line(y) for y in range(self.height)]

    def to_text(self) -> Text:
        text = Text(no_wrap=True, overflow="crop")
        for y, row in enumerate(self._rows):
            if y:
                text.append("\n")
            run: list[str] = []
            run_style: str | None = None
            for ch, style in row:
                if style != run_style and run:
                    text.append("".join(run), style=run_style)
                    run = []
                run_style = style
                run.append(ch)
            if run:
                text.append("".join(run), style=run_style)
        return text


__all__ = ["Buffer", "Cell", "Rect"]
