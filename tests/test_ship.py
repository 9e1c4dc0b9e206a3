import math

import pytest

from asteroidfield.collision import CollisionLayers
from asteroidfield.core import SizeAsset
from asteroidfield.damage import CollisionDamager
from asteroidfield.geometry import Vec2
from asteroidfield.movement import Movement
from asteroidfield.projectile import Projectile
from asteroidfield.ship import ShipMovement, ShipShoot, ShootEvent, ship_move, ship_shoot
from asteroidfield.world import World

SIZE = SizeAsset(Vec2(8.0, 16.0), Vec2(4.0, 12.0))


def test_ship_move_turning_and_thrust():
    world = World()
    movement = Movement(rotation=0.7)
    ship = ShipMovement(direction=Vec2(1.0, 1.0), movement_speed=250.0, rotation_speed=3.0)
    world.spawn(movement, ship)
    ship_move(world)
    assert movement.angular_velocity == -ship.rotation_speed
    expected = movement.direction() * ship.movement_speed
    assert movement.acceleration.x == pytest.approx(expected.x)
    assert movement.acceleration.y == pytest.approx(expected.y)


def test_ship_move_idle_has_no_acceleration():
    world = World()
    movement = Movement(rotation=1.0, angular_velocity=2.0)
    world.spawn(movement, ShipMovement(movement_speed=100.0, rotation_speed=4.0))
    ship_move(world)
    assert movement.acceleration.length() == pytest.approx(0.0)
    assert movement.angular_velocity == pytest.approx(0.0)


def test_no_shot_without_order():
    world = World()
    world.spawn(Movement(), ShipShoot(projectile_size=SIZE))
    assert ship_shoot(world) == []
    assert world.query(Projectile) == []


def test_shoot_spawns_projectile_along_facing():
    world = World()
    shoot = ShipShoot(shoot=True, projectile_size=SIZE)
    ship = world.spawn(Movement(position=Vec2(3.0, 4.0), rotation=0.5), shoot)
    events = ship_shoot(world)
    assert events == [ShootEvent(ship)]
    [(projectile, movement)] = [(e, m) for e, _, m in world.query(Projectile, Movement)]
    assert movement.position == Vec2(3.0, 4.0)
    assert movement.rotation == 0.5
    assert movement.velocity.length() == pytest.approx(shoot.projectile_speed)
    facing = Movement(rotation=0.5).direction()
    assert movement.velocity.dot(facing) == pytest.approx(shoot.projectile_speed)
    assert world.get(projectile, CollisionDamager).damager.amount == 50
    assert world.get(projectile, CollisionLayers) == CollisionLayers(
        shoot.projectile_members, shoot.projectile_filters
    )


def test_shoot_without_size_raises():
    world = World()
    world.spawn(Movement(), ShipShoot(shoot=True))
    with pytest.raises(ValueError):
        ship_shoot(world)


def test_default_projectile_speed_points_up():
    world = World()
    world.spawn(Movement(), ShipShoot(shoot=True, projectile_size=SIZE))
    ship_shoot(world)
    [(_, _, movement)] = world.query(Projectile, Movement)
    assert movement.velocity.x == pytest.approx(0.0)
    assert math.isclose(movement.velocity.y, ShipShoot().projectile_speed)