"""Visual feedback: hit flashes, invincibility blinking and enemy explosions."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, List, Optional

from asteroidfield.animation import (
    WHITE,
    Animation,
    AnimationCompleted,
    AnimationPlayer,
    Color,
    Sprite,
    TextureAtlas,
)
from asteroidfield.damage import Health, Invincibility
from asteroidfield.enemy import Enemy, EnemyAssets
from asteroidfield.geometry import Vec2
from asteroidfield.movement import Movement
from asteroidfield.scale import Scaled, apply_scale
from asteroidfield.timed import insert_timed, update_timed_components
from asteroidfield.world import Timer, World

HIT_COLOR: Color = (3.5, 2.5, 0.0, 1.0)
FADED_COLOR: Color = (1.0, 1.0, 1.0, 0.1)
INVINCIBILITY_COLOR: Color = (1.0, 2.0, 2.0, 1.0)
EXPLOSION_COLOR: Color = (5.0, 3.0, 0.0, 1.0)

_HIT_DURATION = 0.1
_FLASH_VISIBLE = 0.5
_FLASH_INVISIBLE = 0.35
_INVINCIBILITY_SPRITE_SIZE = 64.0
_TRAUMA_PER_SCALE = 0.2


class HitEffect:
    """Marks an entity briefly tinted after taking damage."""


class InvincibilityAnimation:
    """Marks the animated overlay shown on an invincible entity."""


class EnemyExplosion:
    """Marks an explosion left behind by a destroyed enemy."""


@dataclass
class InvincibilityFlash:
    """Alternates an entity's sprite between visible and faded."""

    duration_visible: float
    duration_invisible: float
    is_visible: bool = field(default=True, init=False)
    timer: Timer = field(init=False)

    def __post_init__(self) -> None:
        self.timer = Timer(self.duration_visible)

    def update(self, delta: float, sprite: Sprite) -> bool:
        """Advance the blink; return whether the sprite is now visible."""
        self.timer.tick(delta)
        if self.timer.just_finished:
            self.is_visible = not self.is_visible
            if self.is_visible:
                self.timer.set_duration(self.duration_visible)
                sprite.color = WHITE
            else:
                self.timer.set_duration(self.duration_invisible)
                sprite.color = FADED_COLOR
            self.timer.reset()
        return self.is_visible


@dataclass
class Effects:
    """Spawns and updates visual effects in a world; ``trauma`` drives screen shake."""

    world: World
    enemy_assets: EnemyAssets
    invincible_texture: Any
    invincible_layout: Any
    invincibility_animation: Animation
    explosion_animation: Animation
    trauma: float = 0.0

    def on_damaged(self, entity: int) -> bool:
        """Tint a damaged, living, vulnerable entity; True if the effect started."""
        health = self.world.get(entity, Health)
        if health is None or health.is_dead or self.world.has(entity, Invincibility):
            return False
        insert_timed(self.world, entity, HitEffect(), _HIT_DURATION)
        sprite = self.world.get(entity, Sprite)
        if sprite is not None:
            sprite.color = HIT_COLOR
        return True

    def on_invincibility_added(self, entity: int) -> int:
        """Start blinking the entity and attach an animated overlay; return the overlay."""
        self.world.insert(entity, InvincibilityFlash(_FLASH_VISIBLE, _FLASH_INVISIBLE))
        overlay = self.world.spawn(
            Sprite(
                texture=self.invincible_texture,
                custom_size=Vec2(_INVINCIBILITY_SPRITE_SIZE, _INVINCIBILITY_SPRITE_SIZE),
                color=INVINCIBILITY_COLOR,
            ),
            TextureAtlas(layout=self.invincible_layout, index=0),
            self.invincibility_animation,
            AnimationPlayer(),
            InvincibilityAnimation(),
        )
        self.world.add_child(entity, overlay)
        return overlay

    def on_invincibility_removed(self, entity: int) -> None:
        """Drop the overlay and blinking, and restore the sprite's color."""
        if not self.world.contains(entity):
            return
        self.world.despawn_descendants(entity)
        self.world.remove(entity, InvincibilityFlash)
        sprite = self.world.get(entity, Sprite)
        if sprite is not None:
            sprite.color = WHITE

    def on_enemy_dead(self, entity: int) -> Optional[int]:
        """Shake the screen and spawn an explosion where a dead enemy was."""
        if not self.world.has(entity, Enemy):
            return None
        movement = self.world.get(entity, Movement)
        scaled = self.world.get(entity, Scaled)
        if movement is None or scaled is None:
            return None

        self.trauma = min(1.0, max(0.0, self.trauma + _TRAUMA_PER_SCALE * scaled.scale))

        explosion = self.world.spawn(
            Sprite(
                texture=self.enemy_assets.texture,
                custom_size=self.enemy_assets.size.sprite_size,
                color=EXPLOSION_COLOR,
            ),
            TextureAtlas(layout=self.enemy_assets.layout, index=0),
            self.explosion_animation,
            AnimationPlayer(),
            Movement(
                position=movement.position,
                rotation=movement.rotation,
                velocity=movement.velocity,
            ),
            EnemyExplosion(),
        )
        apply_scale(self.world, explosion, Scaled(scaled.scale))
        return explosion

    def update(self, delta: float, completed: Iterable[AnimationCompleted]) -> List[int]:
        """Expire hit tints, blink invincible sprites and remove finished explosions.

        Returns the explosion entities that were removed.
        """
        for entity in update_timed_components(self.world, HitEffect, delta):
            sprite = self.world.get(entity, Sprite)
            if sprite is not None:
                sprite.color = WHITE

        for _, flash, sprite in self.world.query(InvincibilityFlash, Sprite):
            flash.update(delta, sprite)

        removed = []
        for event in completed:
            entity = event.animated_entity
            if self.world.has(entity, EnemyExplosion):
                self.world.despawn(entity)
                removed.append(entity)
        return removed