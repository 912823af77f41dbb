"""Key events and the navigation key map shared by every document screen."""
from __future__ import annotations

from dataclasses import dataclass

from rinkside.tui.document_nav import (
    FocusLeft,
    FocusNext,
    FocusPrev,
    FocusRight,
    NavMsg,
    PageDown,
    PageUp,
    ScrollDown,
    ScrollToBottom,
    ScrollToTop,
    ScrollUp,
)


@dataclass(frozen=True, slots=True)
class KeyEvent:
    """A key press using Textual's key names (``up``, ``shift+tab``, ``pageup``...)."""
    key: str

    @property
    def shift(self) -> bool:
        return self.key.startswith("shift+")

    @property
    def char(self) -> str | None:
        return self.key if len(self.key) == 1 else None


_NAV_KEYS: dict[str, NavMsg] = {
    "tab": FocusNext(),
    "down": FocusNext(),
    "shift+tab": FocusPrev(),
    "up": FocusPrev(),
    "left": FocusLeft(),
    "right": FocusRight(),
    "shift+up": ScrollUp(1),
    "shift+down": ScrollDown(1),
    "pageup": PageUp(),
    "pagedown": PageDown(),
    "home": ScrollToTop(),
    "end": ScrollToBottom(),
}


def key_to_nav_msg(event: KeyEvent) -> NavMsg | None:
    """Navigation message for ``event``; Enter and Esc are left to the caller."""
    return _NAV_KEYS.get(event.key)


__all__ = ["KeyEvent", "key_to_nav_msg"]
