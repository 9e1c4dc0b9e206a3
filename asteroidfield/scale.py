"""Uniform scaling of an entity's health, sprite and collider."""

from __future__ import annotations

from dataclasses import dataclass

from asteroidfield.animation import Sprite
from asteroidfield.collision import Collider, scaled as scaled_shape
from asteroidfield.damage import Health
from asteroidfield.world import World

_SCALED_MAX_HEALTH = 200.0


@dataclass(frozen=True)
class Scaled:
    scale: float = 1.0


def apply_scale(world: World, entity: int, scaled: Scaled) -> None:
    """Insert ``scaled``; on first insertion, resize health, sprite and collider."""
    first_time = not world.has(entity, Scaled)
    world.insert(entity, scaled)
    if not first_time:
        return

    scale = scaled.scale

    health = world.get(entity, Health)
    if health is not None:
        start = float(health.max_health)
        t = scale - 1.0 + 0.2
        health.set_max_health(int(start + (_SCALED_MAX_HEALTH - start) * t))

    sprite = world.get(entity, Sprite)
    if sprite is not None and sprite.custom_size is not None:
        sprite.custom_size = sprite.custom_size * scale

    collider = world.get(entity, Collider)
    if collider is not None:
        collider.shape = scaled_shape(collider.shape, scale)