"""Settings tab: one toggle link per boolean option plus read-only values."""
from __future__ import annotations

from rinkside.config.loader import Config
from rinkside.tui.document import Document
from rinkside.tui.elements import Element, Heading, Link, SectionTitle, Spacer, Text
from rinkside.tui.focus import FocusContext
from rinkside.tui.links import ActionTarget

TOGGLE_PREFIX = "toggle:"

LABELS = {
    "debug": "Debug mode",
    "display_standings_western_first": "Western conference first",
}


class SettingsDocument(Document):
    def __init__(self, config: Config, config_path: str | None = None):
        self.config = config
        self.config_path = config_path

    def title(self) -> str:
        return "Settings"

    def id(self) -> str:
        return "settings"

    def build(self, focus: FocusContext) -> list[Element]:
        elements: list[Element] = [Heading("Settings", level=1), SectionTitle("Display")]
        for key in Config.bool_fields():
            mark = "x" if getattr(self.config, key) else " "
            elements.append(Link(f"[{mark}] {LABELS.get(key, key)}", ActionTarget(f"{TOGGLE_PREFIX}{key}"), f"setting:{key}"))
        elements += [
            Spacer(1),
            SectionTitle("Refresh"),
            Text(
                f"Refresh interval   {self.config.refresh_interval}s\n"
                f"Time format        {self.config.time_format}\n"
                f"Standings grouping {self.config.standings_group}"
            ),
        ]
        if self.config_path:
            elements += [Spacer(1), Text(f"Saved to {self.config_path}", style="dim")]
        return elements
