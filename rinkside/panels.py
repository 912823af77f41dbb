"""Drill-down panel descriptors.

A panel descriptor names what a document-stack entry shows; the document
itself is rebuilt from state on every render.
"""
from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class TeamPanel:
    abbrev: str

    def breadcrumb(self) -> str:
        return f"Team: {self.abbrev}"


@dataclass(frozen=True, slots=True)
class PlayerPanel:
    player_id: int

    def breadcrumb(self) -> str:
        return f"Player: {self.player_id}"


@dataclass(frozen=True, slots=True)
class BoxscorePanel:
    game_id: int

    def breadcrumb(self) -> str:
        return f"Boxscore: {self.game_id}"


Panel = TeamPanel | PlayerPanel | BoxscorePanel

__all__ = ["BoxscorePanel", "Panel", "PlayerPanel", "TeamPanel"]
