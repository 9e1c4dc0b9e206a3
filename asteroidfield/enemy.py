"""Asteroid enemies and their spawner."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from asteroidfield.animation import Sprite, TextureAtlas
from asteroidfield.border import TunnelBorder
from asteroidfield.collision import Collider, CollisionLayers
from asteroidfield.core import ENEMY_MASK, PLAYER_MASK, SizeAsset
from asteroidfield.damage import CollisionDamager, Damager, DespawnOnDead, Health
from asteroidfield.geometry import BoundingCircle, Vec2
from asteroidfield.movement import Movement
from asteroidfield.spawner import Spawner, SpawnerAsset
from asteroidfield.world import World

_ENEMY_DAMAGE = 100


class Enemy:
    """Marks an enemy entity."""


@dataclass(frozen=True)
class EnemyAssets:
    texture: Any
    layout: Any
    size: SizeAsset
    spawner: SpawnerAsset


def spawn_enemy(world: World, assets: EnemyAssets) -> int:
    """Spawn an enemy at the origin; the spawner positions and scales it."""
    size = assets.size
    return world.spawn(
        Enemy(),
        Sprite(texture=assets.texture, custom_size=size.sprite_size),
        TextureAtlas(layout=assets.layout, index=0),
        Movement(),
        Collider(shape=BoundingCircle(Vec2.ZERO, size.collider_size.x / 2.0)),
        CollisionLayers(ENEMY_MASK, PLAYER_MASK),
        TunnelBorder(),
        Health(),
        CollisionDamager(Damager.constant(_ENEMY_DAMAGE)),
        DespawnOnDead(),
    )


def make_enemy_spawner(assets: EnemyAssets) -> Spawner:
    return Spawner(Enemy, assets.spawner)