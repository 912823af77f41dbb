"""Scroll window over a document's rendered lines."""
from __future__ import annotations


class Viewport:
    """Visible window ``[offset, offset + height)`` over ``content_height`` lines.

    The offset never exceeds ``max(0, content_height - height)``; every
    mutator re-clamps, so out-of-range requests saturate instead of failing.
    """

    def __init__(self, offset: int = 0, height: int = 1, content_height: int = 0):
        self.height = max(1, height)
        self.content_height = max(0, content_height)
        self.offset = 0
        self.set_offset(offset)

    def __repr__(self) -> str:
        return f"Viewport(offset={self.offset}, height={self.height}, content_height={self.content_height})"

    @property
    def max_offset(self) -> int:
        return max(0, self.content_height - self.height)

    def visible_range(self) -> range:
        return range(self.offset, min(self.offset + self.height, max(self.content_height, self.offset)))

    def is_rect_visible(self, y: int, h: int) -> bool:
        return y >= self.offset and y + h <= self.offset + self.height

    def set_offset(self, offset: int) -> None:
        self.offset = min(max(0, offset), self.max_offset)

    def set_height(self, height: int) -> None:
        self.height = max(1, height)
        self.set_offset(self.offset)

    def set_content_height(self, content_height: int) -> None:
        self.content_height = max(0, content_height)
        self.set_offset(self.offset)

    def scroll_up(self, lines: int = 1) -> None:
        self.set_offset(self.offset - lines)

    def scroll_down(self, lines: int = 1) -> None:
        self.set_offset(self.offset + lines)

    def scroll_to_top(self) -> None:
        self.offset = 0

    def scroll_to_bottom(self) -> None:
        self.offset = self.max_offset


__all__ = ["Viewport"]
