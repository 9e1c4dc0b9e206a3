"""Two-dimensional vectors, rotations and bounding volumes."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple, Union

Number = Union[int, float]
VecLike = Union["Vec2", Tuple[Number, Number], Number]
RotLike = Union["Rot2", Number]


@dataclass(frozen=True)
class Vec2:
    """An immutable 2D vector."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: Vec2) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x + other.x, self.y + other.y)
        return NotImplemented

    def __sub__(self, other: Vec2) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x - other.x, self.y - other.y)
        return NotImplemented

    def __neg__(self) -> Vec2:
        return Vec2(-self.x, -self.y)

    def __mul__(self, other: Union[Vec2, Number]) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x * other.x, self.y * other.y)
        if isinstance(other, (int, float)):
            return Vec2(self.x * other, self.y * other)
        return NotImplemented

    __rmul__ = __mul__

    def __truediv__(self, other: Union[Vec2, Number]) -> Vec2:
        if isinstance(other, Vec2):
            return Vec2(self.x / other.x, self.y / other.y)
        if isinstance(other, (int, float)):
            return Vec2(self.x / other, self.y / other)
        return NotImplemented

    def __iter__(self):
        yield self.x
        yield self.y

    def dot(self, other: Vec2) -> float:
        return self.x * other.x + self.y * other.y

    def length_squared(self) -> float:
        return self.dot(self)

    def length(self) -> float:
        return math.sqrt(self.length_squared())

    def clamp_length_max(self, max_length: float) -> Vec2:
        """Return this vector shortened to at most ``max_length``."""
        length_sq = self.length_squared()
        if length_sq > max_length * max_length:
            return self * (max_length / math.sqrt(length_sq))
        return self

    def lerp(self, other: Vec2, t: float) -> Vec2:
        return self + (other - self) * t

    def abs(self) -> Vec2:
        return Vec2(abs(self.x), abs(self.y))


Vec2.ZERO = Vec2(0.0, 0.0)
Vec2.ONE = Vec2(1.0, 1.0)
Vec2.X = Vec2(1.0, 0.0)
Vec2.Y = Vec2(0.0, 1.0)


def _as_vec(value: VecLike) -> Vec2:
    if isinstance(value, Vec2):
        return value
    if isinstance(value, (int, float)):
        return Vec2(float(value), float(value))
    x, y = value
    return Vec2(float(x), float(y))


@dataclass(frozen=True)
class Rot2:
    """A rotation in the plane, stored as an angle in radians."""

    angle: float = 0.0

    @property
    def cos(self) -> float:
        return math.cos(self.angle)

    @property
    def sin(self) -> float:
        return math.sin(self.angle)

    def rotate(self, vector: Vec2) -> Vec2:
        c, s = self.cos, self.sin
        return Vec2(c * vector.x - s * vector.y, s * vector.x + c * vector.y)

    def __mul__(self, other: Union[Rot2, Vec2]):
        if isinstance(other, Rot2):
            return Rot2(self.angle + other.angle)
        if isinstance(other, Vec2):
            return self.rotate(other)
        return NotImplemented


def _as_rot(value: RotLike) -> Rot2:
    if isinstance(value, Rot2):
        return value
    return Rot2(float(value))


@dataclass(frozen=True)
class Aabb2d:
    """An axis-aligned bounding box given by its center and half size."""

    center: Vec2
    half_size: Vec2

    @property
    def min(self) -> Vec2:
        return self.center - self.half_size

    @property
    def max(self) -> Vec2:
        return self.center + self.half_size

    def intersects(self, other) -> bool:
        if isinstance(other, Aabb2d):
            lo, hi = self.min, self.max
            olo, ohi = other.min, other.max
            return lo.x <= ohi.x and hi.x >= olo.x and lo.y <= ohi.y and hi.y >= olo.y
        if isinstance(other, BoundingCircle):
            lo, hi = self.min, self.max
            closest = Vec2(
                min(max(other.center.x, lo.x), hi.x),
                min(max(other.center.y, lo.y), hi.y),
            )
            return (closest - other.center).length_squared() <= other.radius * other.radius
        if isinstance(other, Obb2d):
            return other.intersects(self)
        raise TypeError(f"cannot intersect Aabb2d with {type(other).__name__}")

    def transformed_by(self, translation: VecLike, rotation: RotLike) -> Aabb2d:
        """Rotate the box (growing it to stay axis aligned), then translate it."""
        rot = _as_rot(rotation)
        c, s = abs(rot.cos), abs(rot.sin)
        half = Vec2(
            c * self.half_size.x + s * self.half_size.y,
            s * self.half_size.x + c * self.half_size.y,
        )
        return Aabb2d(rot.rotate(self.center) + _as_vec(translation), half)

    def scale_around_center(self, scale: VecLike) -> Aabb2d:
        return Aabb2d(self.center, self.half_size * _as_vec(scale))


@dataclass(frozen=True)
class BoundingCircle:
    """A circle given by its center and radius."""

    center: Vec2
    radius: float

    def intersects(self, other) -> bool:
        if isinstance(other, BoundingCircle):
            reach = self.radius + other.radius
            return (self.center - other.center).length_squared() <= reach * reach
        if isinstance(other, (Aabb2d, Obb2d)):
            return other.intersects(self)
        raise TypeError(f"cannot intersect BoundingCircle with {type(other).__name__}")

    def transformed_by(self, translation: VecLike, rotation: RotLike) -> BoundingCircle:
        rot = _as_rot(rotation)
        return BoundingCircle(rot.rotate(self.center) + _as_vec(translation), self.radius)

    def scale_around_center(self, scale: float) -> BoundingCircle:
        return BoundingCircle(self.center, self.radius * scale)


@dataclass(frozen=True)
class Obb2d:
    """A 2D oriented bounding box."""

    center: Vec2
    half_size: Vec2
    rotation: Rot2 = Rot2()

    def __post_init__(self) -> None:
        object.__setattr__(self, "rotation", _as_rot(self.rotation))

    def visible_area(self) -> float:
        return self.half_size.x * self.half_size.y * 4.0

    def grow(self, amount: VecLike) -> Obb2d:
        return Obb2d(self.center, self.half_size + _as_vec(amount), self.rotation)

    def shrink(self, amount: VecLike) -> Obb2d:
        return Obb2d(self.center, self.half_size - _as_vec(amount), self.rotation)

    def scale_around_center(self, scale: VecLike) -> Obb2d:
        return Obb2d(self.center, self.half_size * _as_vec(scale), self.rotation)

    def translate_by(self, translation: VecLike) -> Obb2d:
        return Obb2d(self.center + _as_vec(translation), self.half_size, self.rotation)

    def rotate_by(self, rotation: RotLike) -> Obb2d:
        """Compose the box's orientation with ``rotation``; the center stays put."""
        return Obb2d(self.center, self.half_size, self.rotation * _as_rot(rotation))

    def transformed_by(self, translation: VecLike, rotation: RotLike) -> Obb2d:
        return self.rotate_by(rotation).translate_by(translation)

    def corners(self) -> list[Vec2]:
        hx, hy = self.half_size.x, self.half_size.y
        local = (Vec2(hx, hy), Vec2(-hx, hy), Vec2(hx, -hy), Vec2(-hx, -hy))
        return [self.center + self.rotation.rotate(corner) for corner in local]

    def _project(self, axis: Vec2) -> tuple[float, float]:
        projections = [axis.dot(corner) for corner in self.corners()]
        return min(projections), max(projections)

    def _overlap_on_axis(self, other: Obb2d, axis: Vec2) -> bool:
        min1, max1 = self._project(axis)
        min2, max2 = other._project(axis)
        return max1 >= min2 and max2 >= min1

    def intersects(self, other) -> bool:
        """Check intersection, using the separating axis theorem for boxes."""
        if isinstance(other, Obb2d):
            axes = (
                self.rotation.rotate(Vec2.X),
                self.rotation.rotate(Vec2.Y),
                other.rotation.rotate(Vec2.X),
                other.rotation.rotate(Vec2.Y),
            )
            return all(self._overlap_on_axis(other, axis) for axis in axes)
        if isinstance(other, Aabb2d):
            return self.intersects(Obb2d(other.center, other.half_size, 0.0))
        if isinstance(other, BoundingCircle):
            local = self.rotation.rotate(other.center - self.center)
            clamped = Vec2(
                min(max(local.x, -self.half_size.x), self.half_size.x),
                min(max(local.y, -self.half_size.y), self.half_size.y),
            )
            return (local - clamped).length_squared() <= other.radius * other.radius
        raise TypeError(f"cannot intersect Obb2d with {type(other).__name__}")