"""Screen-edge behaviour: wrap around or vanish."""

from __future__ import annotations

from typing import List

from asteroidfield.geometry import Vec2
from asteroidfield.movement import Movement
from asteroidfield.world import World

_EDGE_MARGIN = 32.0


class TunnelBorder:
    """Marks an entity that wraps to the opposite edge of the screen."""


class DespawnBorder:
    """Marks an entity that is removed when it leaves the screen."""


def screen_half_size(width: float, height: float) -> Vec2:
    """Half the screen size, padded so wrapping happens off screen."""
    return Vec2(width / 2.0 + _EDGE_MARGIN, height / 2.0 + _EDGE_MARGIN)


def tunnel(world: World, half_size: Vec2) -> None:
    """Mirror the position of wrapping entities that went past an edge."""
    for _, movement, _ in world.query(Movement, TunnelBorder):
        offset = movement.position.abs() - half_size
        x, y = movement.position
        if offset.x > 0.0:
            x = -x
        if offset.y > 0.0:
            y = -y
        movement.position = Vec2(x, y)


def despawn_outside(world: World, half_size: Vec2) -> List[int]:
    """Remove border-despawning entities that left the screen."""
    despawned = []
    for entity, movement, _ in world.query(Movement, DespawnBorder):
        position = movement.position
        if abs(position.x) > half_size.x or abs(position.y) > half_size.y:
            if world.contains(entity):
                world.ensure_despawned(entity)
                despawned.append(entity)
    return despawned