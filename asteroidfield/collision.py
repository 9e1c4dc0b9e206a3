"""Colliders, collision layers and pairwise collision detection."""

from __future__ import annotations

from dataclasses import dataclass, field
from itertools import combinations
from typing import Any, Hashable, Iterable, Tuple, Union

from asteroidfield.geometry import Aabb2d, BoundingCircle, Obb2d, Vec2
from asteroidfield.movement import Movement

Shape = Union[Aabb2d, Obb2d, BoundingCircle]

_BITS_MAX = 0xFF


@dataclass(frozen=True)
class LayerMask:
    """An 8-bit set of collision layers."""

    bits: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.bits, int) or not 0 <= self.bits <= _BITS_MAX:
            raise ValueError(f"layer mask must be in 0..{_BITS_MAX}, got {self.bits!r}")

    def __and__(self, other: LayerMask) -> LayerMask:
        if isinstance(other, LayerMask):
            return LayerMask(self.bits & other.bits)
        return NotImplemented

    def __or__(self, other: LayerMask) -> LayerMask:
        if isinstance(other, LayerMask):
            return LayerMask(self.bits | other.bits)
        return NotImplemented

    def __bool__(self) -> bool:
        return self.bits != 0


LayerMask.ALL = LayerMask(_BITS_MAX)
LayerMask.NONE = LayerMask(0)


@dataclass
class Collider:
    """A shape in local space that can be switched off."""

    enabled: bool = True
    shape: Shape = field(default_factory=lambda: Aabb2d(Vec2.ZERO, Vec2.ONE))


@dataclass(frozen=True)
class CollisionLayers:
    """Which layers a body belongs to and which layers it reacts to."""

    members: LayerMask = LayerMask.ALL
    filters: LayerMask = LayerMask.NONE

    def interact_with(self, other: CollisionLayers) -> bool:
        return bool(self.members & other.filters) and bool(self.filters & other.members)


@dataclass(frozen=True)
class CollisionEvent:
    """Two entities whose colliders overlap."""

    first: Hashable
    second: Hashable


def intersects(first: Shape, second: Shape) -> bool:
    """Test two shapes for overlap."""
    if isinstance(second, Obb2d) and not isinstance(first, Obb2d):
        return second.intersects(first)
    return first.intersects(second)


def transformed_by(shape: Shape, movement: Movement) -> Shape:
    """Move a local shape into world space using a body's movement."""
    return shape.transformed_by(movement.position, movement.rotation)


def scaled(shape: Shape, scale: float) -> Shape:
    """Scale a shape uniformly around its center."""
    if isinstance(shape, BoundingCircle):
        return shape.scale_around_center(scale)
    return shape.scale_around_center((scale, scale))


Body = Tuple[Any, Collider, CollisionLayers, Movement]


def detect_collisions(bodies: Iterable[Body]) -> list[CollisionEvent]:
    """Return an event for each unordered pair of overlapping, interacting bodies."""
    events = []
    for (e1, c1, l1, m1), (e2, c2, l2, m2) in combinations(list(bodies), 2):
        if not c1.enabled or not c2.enabled or not l1.interact_with(l2):
            continue
        if intersects(transformed_by(c1.shape, m1), transformed_by(c2.shape, m2)):
            events.append(CollisionEvent(e1, e2))
    return events