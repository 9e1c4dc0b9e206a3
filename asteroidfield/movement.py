"""Kinematic state of a moving body and its fixed-step integration."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from asteroidfield.geometry import Rot2, Vec2


@dataclass
class Movement:
    """Position, velocity and rotation of a body in the play field."""

    position: Vec2 = field(default_factory=Vec2)
    velocity: Vec2 = field(default_factory=Vec2)
    acceleration: Vec2 = field(default_factory=Vec2)
    rotation: float = 0.0
    angular_velocity: float = 0.0
    friction: float = 0.0
    max_speed: float = math.inf

    def direction(self) -> Vec2:
        """The unit vector the body is facing (local +Y rotated)."""
        return Rot2(self.rotation).rotate(Vec2.Y)

    def step(self, dt: float) -> None:
        """Advance the body by one fixed time step."""
        self.velocity = self.velocity + self.acceleration * dt - self.velocity * self.friction
        self.velocity = self.velocity.clamp_length_max(self.max_speed)
        self.position = self.position + self.velocity * dt
        self.rotation += self.angular_velocity * dt

    def extrapolate(self, fixed_dt: float, overstep_fraction: float) -> tuple[Vec2, float]:
        """Return the render position and rotation between two fixed steps."""
        future_rotation = self.rotation + self.angular_velocity * fixed_dt
        rotation = self.rotation + (future_rotation - self.rotation) * fixed_dt
        future_position = self.position + self.velocity * fixed_dt
        position = self.position.lerp(future_position, overstep_fraction)
        return position, rotation