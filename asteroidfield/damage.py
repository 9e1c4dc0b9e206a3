"""Health, damage sources and modifiers, and death handling."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterable, List, Optional, Tuple

from asteroidfield.collision import CollisionEvent
from asteroidfield.world import World

_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


def _to_i32(value: float) -> int:
    """Convert like a saturating float-to-int cast: truncate, clamp, NaN to zero."""
    if math.isnan(value):
        return 0
    return int(min(max(value, _I32_MIN), _I32_MAX))


@dataclass(frozen=True)
class Damager:
    """A constant damage amount, or ``None`` to kill outright."""

    amount: Optional[int] = 10

    @classmethod
    def constant(cls, amount: int) -> Damager:
        return cls(int(amount))

    @classmethod
    def kill(cls) -> Damager:
        return cls(None)

    def get_damage(self, health: Health) -> int:
        return health.max_health if self.amount is None else self.amount


@dataclass
class CollisionDamager:
    """Deals damage to whatever this entity collides with."""

    damager: Damager = field(default_factory=Damager)


class _Kind(Enum):
    MULTIPLY = auto()
    ADD = auto()
    REDUCE_TO_ZERO = auto()


@dataclass(frozen=True)
class DamageModifier:
    """Alters the damage an entity deals."""

    kind: _Kind
    value: float = 0.0

    @classmethod
    def multiply(cls, factor: float) -> DamageModifier:
        return cls(_Kind.MULTIPLY, float(factor))

    @classmethod
    def add(cls, amount: float) -> DamageModifier:
        return cls(_Kind.ADD, float(amount))

    @classmethod
    def reduce_to_zero(cls) -> DamageModifier:
        return cls(_Kind.REDUCE_TO_ZERO)

    def apply(self, damage: int) -> int:
        base = float(damage)
        if self.kind is _Kind.MULTIPLY:
            modified = base * self.value
        elif self.kind is _Kind.ADD:
            modified = base + self.value
        else:
            modified = 0.0
        return _to_i32(modified)


@dataclass
class Health:
    max_health: int = 100
    current_health: int = field(init=False)

    def __post_init__(self) -> None:
        self.current_health = self.max_health

    def set_max_health(self, new_max: int) -> None:
        """Change the maximum and refill to it."""
        self.max_health = new_max
        self.current_health = new_max

    def damage(self, amount: int) -> None:
        self.current_health = max(0, min(self.current_health - amount, self.max_health))

    @property
    def is_dead(self) -> bool:
        return self.current_health <= 0


class Dead:
    """Marks an entity whose health ran out."""


class Invincibility:
    """Marks an entity that takes no damage."""


class DespawnOnDead:
    """Marks an entity to be removed once dead."""


class DespawnOnCollision:
    """Marks an entity to be removed on any collision."""


def do_damage(
    damager: Damager,
    modifier: Optional[DamageModifier],
    health: Health,
    invincible: bool,
) -> int:
    """Apply damage to ``health`` and return the amount applied."""
    if invincible:
        return 0
    amount = damager.get_damage(health)
    if modifier is not None:
        amount = modifier.apply(amount)
    health.damage(amount)
    return amount


def _pairs(events: Iterable[CollisionEvent]):
    for event in events:
        yield event.first, event.second
        yield event.second, event.first


def apply_collision_damage(
    world: World, events: Iterable[CollisionEvent]
) -> Tuple[List[int], List[int]]:
    """Deal collision damage both ways; return (damaged, newly dead) entities."""
    damaged: dict = {}
    killed: dict = {}
    for source, target in _pairs(events):
        collision_damager = world.get(source, CollisionDamager)
        health = world.get(target, Health)
        if collision_damager is None or health is None:
            continue
        invincible = world.has(target, Invincibility)
        do_damage(
            collision_damager.damager,
            world.get(source, DamageModifier),
            health,
            invincible,
        )
        if invincible:
            continue
        damaged[target] = None
        if health.is_dead:
            if not world.has(target, Dead):
                killed[target] = None
            world.insert(target, Dead())
    return list(damaged), list(killed)


def despawn_on_collision(world: World, events: Iterable[CollisionEvent]) -> List[int]:
    """Remove colliding entities that are marked to vanish on collision."""
    despawned: dict = {}
    for event in events:
        for entity in (event.first, event.second):
            if world.has(entity, DespawnOnCollision):
                world.ensure_despawned(entity)
                despawned[entity] = None
    return list(despawned)


def despawn_dead(world: World) -> List[int]:
    """Remove dead entities marked to vanish on death, with their descendants."""
    despawned = []
    for entity, _, _ in world.query(Dead, DespawnOnDead):
        if world.contains(entity):
            world.despawn_recursive(entity)
            despawned.append(entity)
    return despawned