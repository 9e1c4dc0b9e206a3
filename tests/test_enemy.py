import random

from asteroidfield.animation import Sprite, TextureAtlas
from asteroidfield.border import TunnelBorder
from asteroidfield.collision import Collider, CollisionLayers
from asteroidfield.core import ENEMY_MASK, PLAYER_MASK, SizeAsset
from asteroidfield.damage import CollisionDamager, DespawnOnDead, Health
from asteroidfield.enemy import Enemy, EnemyAssets, make_enemy_spawner, spawn_enemy
from asteroidfield.geometry import BoundingCircle, Vec2
from asteroidfield.scale import Scaled
from asteroidfield.spawner import SpawnerAsset
from asteroidfield.world import World

ASSETS = EnemyAssets(
    texture="enemy_tex",
    layout="enemy_layout",
    size=SizeAsset(Vec2(64.0, 64.0), Vec2(48.0, 48.0)),
    spawner=SpawnerAsset(
        spawn_delay_ms=500,
        max_entity_count=3,
        min_max_speed=Vec2(10.0, 20.0),
        min_max_angular_speed=Vec2(0.0, 1.0),
        min_max_angle=Vec2(0.0, 2.0),
        min_max_scale=Vec2(1.0, 1.0),
    ),
)


def test_spawn_enemy_components():
    world = World()
    entity = spawn_enemy(world, ASSETS)
    assert world.has(entity, Enemy)
    assert world.has(entity, TunnelBorder)
    assert world.has(entity, DespawnOnDead)
    assert world.get(entity, Sprite).custom_size == ASSETS.size.sprite_size
    assert world.get(entity, TextureAtlas) == TextureAtlas("enemy_layout", 0)
    shape = world.get(entity, Collider).shape
    assert isinstance(shape, BoundingCircle)
    assert shape.radius == ASSETS.size.collider_size.x / 2.0
    assert world.get(entity, CollisionLayers) == CollisionLayers(ENEMY_MASK, PLAYER_MASK)
    assert world.get(entity, CollisionDamager).damager.amount == 100
    assert world.get(entity, Health).max_health == Health().max_health


def test_enemy_spawner_uses_enemy_marker():
    spawner = make_enemy_spawner(ASSETS)
    assert spawner.marker is Enemy
    assert spawner.asset is ASSETS.spawner


def test_enemy_spawner_run_creates_scaled_enemy():
    world = World()
    spawner = make_enemy_spawner(ASSETS)
    entity = spawner.run(
        world, lambda w: spawn_enemy(w, ASSETS), (800, 800), 0.5, random.Random(2)
    )
    assert world.get(entity, Scaled) == Scaled(1.0)
    assert spawner.entities_count == 1
    assert abs(world.get(entity, Collider).shape.center.x) == 0.0