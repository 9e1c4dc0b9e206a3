"""Sprite-sheet animations played frame by frame on a texture atlas."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Hashable, List, Optional, Tuple

from asteroidfield.geometry import Vec2
from asteroidfield.world import Timer, World

Color = Tuple[float, float, float, float]

WHITE: Color = (1.0, 1.0, 1.0, 1.0)


class AnimationPlayMode(Enum):
    LOOP = auto()
    ONE_SHOT = auto()


@dataclass(frozen=True)
class Animation:
    """A range of atlas frames played over ``duration`` seconds."""

    play_mode: AnimationPlayMode
    start: int
    end: int
    duration: float

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"invalid frame range {self.start}..{self.end}")

    @property
    def frame_time(self) -> float:
        return self.duration / (self.end - self.start + 1)


@dataclass
class Sprite:
    """A drawable image with an optional size override and a tint color."""

    texture: Any = None
    custom_size: Optional[Vec2] = None
    color: Color = WHITE


@dataclass
class TextureAtlas:
    """The current frame index into a sprite sheet layout."""

    layout: Any = None
    index: int = 0


@dataclass
class AnimationPlayer:
    """Playback state of an animation on one entity."""

    timer: Timer = field(default_factory=lambda: Timer(0.0, repeating=True))
    started: bool = False
    completed: bool = False

    def update(self, animation: Animation, atlas: TextureAtlas, delta: float) -> bool:
        """Advance playback; return True when a one-shot animation completes."""
        if self.completed:
            return False
        if not self.started:
            self.timer.set_duration(animation.frame_time)
            self.started = True

        self.timer.tick(delta)
        if not self.timer.just_finished:
            return False

        if atlas.index == animation.end:
            if animation.play_mode is AnimationPlayMode.LOOP:
                atlas.index = animation.start
                return False
            self.completed = True
            return True

        atlas.index += 1
        return False


@dataclass(frozen=True)
class AnimationCompleted:
    animated_entity: Hashable


def animate(world: World, delta: float) -> List[AnimationCompleted]:
    """Advance every animated entity and report one-shot completions."""
    return [
        AnimationCompleted(entity)
        for entity, animation, atlas, player in world.query(
            Animation, TextureAtlas, AnimationPlayer
        )
        if player.update(animation, atlas, delta)
    ]