"""Ship steering and shooting."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Hashable, List, Optional

from asteroidfield.animation import Color
from asteroidfield.collision import LayerMask
from asteroidfield.core import ENEMY_MASK, PLAYER_MASK, SizeAsset
from asteroidfield.damage import CollisionDamager, Damager
from asteroidfield.geometry import Vec2
from asteroidfield.movement import Movement
from asteroidfield.projectile import spawn_projectile
from asteroidfield.world import World

_PROJECTILE_DAMAGE = 50


@dataclass
class ShipMovement:
    """Steering input (x turns, y thrusts) and the ship's speeds."""

    direction: Vec2 = field(default_factory=Vec2)
    movement_speed: float = 0.0
    rotation_speed: float = 0.0


@dataclass
class ShipShoot:
    """Shooting order and how the ship's projectiles look and collide."""

    shoot: bool = False
    projectile_speed: float = 600.0
    projectile_texture: Any = None
    projectile_size: Optional[SizeAsset] = None
    projectile_color: Color = (5.0, 5.0, 7.0, 1.0)
    projectile_members: LayerMask = PLAYER_MASK
    projectile_filters: LayerMask = ENEMY_MASK


@dataclass(frozen=True)
class ShootEvent:
    shooter: Hashable


def ship_move(world: World) -> None:
    """Turn steering input into angular velocity and acceleration."""
    for _, movement, ship in world.query(Movement, ShipMovement):
        movement.angular_velocity = -ship.direction.x * ship.rotation_speed
        movement.acceleration = (
            movement.direction() * ship.movement_speed * ship.direction.y
        )


def ship_shoot(world: World) -> List[ShootEvent]:
    """Spawn a projectile for every ship ordered to shoot."""
    events = []
    for entity, movement, shoot in world.query(Movement, ShipShoot):
        if not shoot.shoot:
            continue
        if shoot.projectile_size is None:
            raise ValueError(f"ship {entity} has no projectile size")
        projectile = spawn_projectile(
            world,
            movement.position,
            movement.direction() * shoot.projectile_speed,
            movement.rotation,
            shoot.projectile_size,
            shoot.projectile_color,
            shoot.projectile_members,
            shoot.projectile_filters,
            shoot.projectile_texture,
        )
        world.insert(projectile, CollisionDamager(Damager.constant(_PROJECTILE_DAMAGE)))
        events.append(ShootEvent(entity))
    return events