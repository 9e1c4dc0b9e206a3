"""Shared game vocabulary: actions, states, size assets and collision layers."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto

from asteroidfield.collision import LayerMask
from asteroidfield.geometry import Vec2


class ShipAction(Enum):
    """Actions a ship can be ordered to perform."""

    TURN_LEFT = auto()
    TURN_RIGHT = auto()
    FORWARD = auto()
    BACKWARD = auto()
    SHOOT = auto()


class GameState(Enum):
    """Top-level states of the game; the first one is the starting state."""

    MAIN_MENU_LOADING = auto()
    MAIN_MENU = auto()
    GAME_LOADING = auto()
    GAME = auto()


@dataclass(frozen=True)
class SizeAsset:
    """Sprite and collider dimensions of a game object."""

    sprite_size: Vec2
    collider_size: Vec2


PLAYER_MASK = LayerMask(1 << 0)
ENEMY_MASK = LayerMask(1 << 1)