"""Menu button behaviour and in-game HUD content."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Mapping, Optional

from asteroidfield.animation import WHITE, Color
from asteroidfield.core import GameState

BLACK: Color = (0.0, 0.0, 0.0, 1.0)
PRESSED_BORDER: Color = (0.5, 0.5, 0.5, 1.0)


class Interaction(Enum):
    NONE = auto()
    HOVERED = auto()
    PRESSED = auto()


_BORDERS = {
    Interaction.NONE: BLACK,
    Interaction.HOVERED: WHITE,
    Interaction.PRESSED: PRESSED_BORDER,
}


@dataclass
class MenuButton:
    """A menu button that clicks when released while still hovered."""

    label: str = "Play"
    target: GameState = GameState.GAME_LOADING
    last: Interaction = Interaction.NONE
    border_color: Color = BLACK

    def interact(self, interaction: Interaction) -> Optional[GameState]:
        """Feed the pointer's interaction; return the state to enter on a click."""
        if interaction is self.last:
            return None
        self.border_color = _BORDERS[interaction]
        clicked = self.last is Interaction.PRESSED and interaction is Interaction.HOVERED
        self.last = interaction
        return self.target if clicked else None


def score_text(score: int) -> str:
    return f"Score: {score}"


def lives_layout(lives: Mapping[int, int]) -> List[Optional[int]]:
    """Life icons per player (as player ids), each player's row ending in a spacer (None)."""
    layout: List[Optional[int]] = []
    for player_id in sorted(lives):
        count = lives[player_id]
        if count < 0:
            raise ValueError(f"player {player_id} has negative lives: {count}")
        layout.extend([player_id] * count)
        layout.append(None)
    return layout