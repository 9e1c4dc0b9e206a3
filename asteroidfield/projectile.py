"""Projectiles fired by ships."""

from __future__ import annotations

from typing import Any

from asteroidfield.animation import Color, Sprite
from asteroidfield.border import DespawnBorder
from asteroidfield.collision import Collider, CollisionLayers, LayerMask
from asteroidfield.core import SizeAsset
from asteroidfield.damage import CollisionDamager, DespawnOnCollision
from asteroidfield.geometry import Obb2d, Vec2
from asteroidfield.movement import Movement
from asteroidfield.world import World


class Projectile:
    """Marks a projectile entity."""


def spawn_projectile(
    world: World,
    position: Vec2,
    velocity: Vec2,
    rotation: float,
    size: SizeAsset,
    color: Color,
    members: LayerMask,
    filters: LayerMask,
    texture: Any,
) -> int:
    """Spawn a projectile that vanishes off screen or on any collision."""
    return world.spawn(
        Projectile(),
        Sprite(texture=texture, custom_size=size.sprite_size, color=color),
        Movement(position=position, velocity=velocity, rotation=rotation),
        Collider(shape=Obb2d(Vec2.ZERO, size.collider_size / 2.0, 0.0)),
        CollisionLayers(members, filters),
        DespawnBorder(),
        DespawnOnCollision(),
        CollisionDamager(),
    )