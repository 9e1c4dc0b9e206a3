"""Timed spawning of entities at random screen corners with random motion."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, Optional

from asteroidfield.geometry import Vec2
from asteroidfield.movement import Movement
from asteroidfield.scale import Scaled, apply_scale
from asteroidfield.world import Timer, World

_VEC_FIELDS = ("min_max_speed", "min_max_angular_speed", "min_max_angle", "min_max_scale")


def _vec(value: Any) -> Vec2:
    if isinstance(value, Vec2):
        return value
    if isinstance(value, Mapping):
        return Vec2(float(value["x"]), float(value["y"]))
    x, y = value
    return Vec2(float(x), float(y))


def _uniform(rng: random.Random, low: float, high: float) -> float:
    if low > high:
        raise ValueError(f"cannot sample empty range {low}..={high}")
    return rng.uniform(low, high)


@dataclass(frozen=True)
class SpawnerAsset:
    """Spawn rate, population cap and random ranges (angles in half turns)."""

    spawn_delay_ms: int
    max_entity_count: int
    min_max_speed: Vec2
    min_max_angular_speed: Vec2
    min_max_angle: Vec2
    min_max_scale: Vec2

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> SpawnerAsset:
        """Build from a mapping; vectors may be pairs or ``{"x", "y"}`` mappings."""
        try:
            return cls(
                spawn_delay_ms=int(data["spawn_delay_ms"]),
                max_entity_count=int(data["max_entity_count"]),
                **{name: _vec(data[name]) for name in _VEC_FIELDS},
            )
        except (KeyError, TypeError, ValueError) as error:
            raise ValueError(f"invalid spawner asset: {error}") from error


@dataclass
class Spawner:
    """Spawns entities tagged with ``marker`` according to ``asset``."""

    marker: type
    asset: SpawnerAsset
    enabled: bool = True
    entities_count: int = 0
    timer: Timer = field(default_factory=lambda: Timer(0.0, repeating=True), init=False)

    def can_spawn(self) -> bool:
        return self.enabled and self.entities_count < self.asset.max_entity_count

    def tick(self, delta: float) -> bool:
        """Advance the spawn timer; True when a spawn is due."""
        self.timer.set_duration(self.asset.spawn_delay_ms / 1000.0)
        self.timer.tick(delta)
        return self.timer.just_finished

    def update_count(self, world: World) -> int:
        """Recount the live entities carrying the marker."""
        self.entities_count = len(world.query(self.marker))
        return self.entities_count

    def spawn(
        self, world: World, entity: int, screen_size: Any, rng: random.Random
    ) -> None:
        """Give ``entity`` a random corner, velocity, spin and scale, and tag it."""
        asset = self.asset
        angle_range = asset.min_max_angle * math.pi
        angle = _uniform(rng, angle_range.x, angle_range.y)
        speed = _uniform(rng, asset.min_max_speed.x, asset.min_max_speed.y)
        velocity = Vec2(math.cos(angle), math.sin(angle)) * speed
        angular_velocity = _uniform(
            rng, asset.min_max_angular_speed.x, asset.min_max_angular_speed.y
        )
        width, height = screen_size
        half = Vec2(float(width) / 2.0, float(height) / 2.0)
        corner = Vec2(*(1.0 if rng.random() >= 0.5 else 0.0 for _ in range(2)))
        position = half * 2.0 * corner - half
        scale = _uniform(rng, asset.min_max_scale.x, asset.min_max_scale.y)

        if not world.contains(entity):
            raise KeyError(f"entity {entity} does not exist")
        movement = world.get(entity, Movement)
        if movement is not None:
            movement.position = position
            movement.velocity = velocity
            movement.angular_velocity = angular_velocity
        apply_scale(world, entity, Scaled(scale))
        world.insert(entity, self.marker())

    def run(
        self,
        world: World,
        make_entity: Callable[[World], int],
        screen_size: Any,
        delta: float,
        rng: random.Random,
    ) -> Optional[int]:
        """Spawn one entity if allowed and due, then recount; return it if spawned."""
        spawned = None
        if self.can_spawn() and self.tick(delta):
            spawned = make_entity(world)
            self.spawn(world, spawned, screen_size, rng)
        self.update_count(world)
        return spawned