"""Player ships: assets, presets, input bindings and spawning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from asteroidfield.animation import Sprite
from asteroidfield.border import TunnelBorder
from asteroidfield.collision import Collider, CollisionLayers
from asteroidfield.core import ENEMY_MASK, PLAYER_MASK, ShipAction, SizeAsset
from asteroidfield.damage import DespawnOnDead, Health
from asteroidfield.geometry import Obb2d, Vec2
from asteroidfield.input import (
    AxisSide,
    ButtonMode,
    GamepadAxisMapping,
    GamepadButtonMapping,
    InputController,
    InputMap,
    KeyMapping,
)
from asteroidfield.movement import Movement
from asteroidfield.ship import ShipMovement, ShipShoot
from asteroidfield.world import World

_SECOND_PLAYER_GAMEPAD = 0


@dataclass
class Player:
    """Marks a player-controlled ship and says which player it belongs to."""

    player_id: int = 0


@dataclass(frozen=True)
class PlayerAssets:
    """Textures and sizes needed to build player ships and their shots."""

    player_one_texture: Any
    player_two_texture: Any
    projectile_texture: Any
    player_size: SizeAsset
    projectile_size: SizeAsset

    def texture_for(self, player_id: int) -> Optional[Any]:
        """The ship texture of a player, or None for an unknown player."""
        if player_id == 1:
            return self.player_one_texture
        if player_id == 2:
            return self.player_two_texture
        return None


@dataclass(frozen=True)
class PlayerSpawned:
    """A player ship entered the world."""

    entity: int


@dataclass(frozen=True)
class ShipPreset:
    """Handling characteristics of a ship."""

    friction: float
    movement_speed: float
    rotation_speed: float

    @classmethod
    def fast(cls) -> ShipPreset:
        return cls(friction=0.03, movement_speed=750.0, rotation_speed=5.0)

    @classmethod
    def slow(cls) -> ShipPreset:
        return cls(friction=0.05, movement_speed=500.0, rotation_speed=4.0)


def keyboard_input_map() -> InputMap:
    """Arrow keys to steer, space to shoot."""
    return (
        InputMap()
        .with_mapping(ShipAction.FORWARD, KeyMapping("ArrowUp", ButtonMode.PRESSED))
        .with_mapping(ShipAction.BACKWARD, KeyMapping("ArrowDown", ButtonMode.PRESSED))
        .with_mapping(ShipAction.TURN_LEFT, KeyMapping("ArrowLeft", ButtonMode.PRESSED))
        .with_mapping(ShipAction.TURN_RIGHT, KeyMapping("ArrowRight", ButtonMode.PRESSED))
        .with_mapping(ShipAction.SHOOT, KeyMapping("Space", ButtonMode.JUST_PRESSED))
    )


def gamepad_input_map(gamepad_id: int) -> InputMap:
    """Triggers to thrust, left stick to turn, south button to shoot."""
    return (
        InputMap()
        .with_mapping(
            ShipAction.FORWARD, GamepadButtonMapping("RightTrigger2", ButtonMode.PRESSED)
        )
        .with_mapping(
            ShipAction.BACKWARD, GamepadButtonMapping("LeftTrigger2", ButtonMode.PRESSED)
        )
        .with_mapping(
            ShipAction.TURN_LEFT, GamepadAxisMapping("LeftStickX", AxisSide.NEGATIVE)
        )
        .with_mapping(
            ShipAction.TURN_RIGHT, GamepadAxisMapping("LeftStickX", AxisSide.POSITIVE)
        )
        .with_mapping(
            ShipAction.SHOOT, GamepadButtonMapping("South", ButtonMode.JUST_PRESSED)
        )
        .with_gamepad(gamepad_id)
    )


def player_exists(world: World, player_id: int) -> bool:
    return any(player.player_id == player_id for _, player in world.query(Player))


def spawn_player(
    world: World, assets: PlayerAssets, player_id: int
) -> Optional[PlayerSpawned]:
    """Spawn the ship of player 1 or 2; other ids spawn nothing and give None."""
    if player_id == 1:
        preset = ShipPreset.fast()
        texture = assets.player_one_texture
        input_map = keyboard_input_map()
    elif player_id == 2:
        preset = ShipPreset.slow()
        texture = assets.player_two_texture
        input_map = gamepad_input_map(_SECOND_PLAYER_GAMEPAD)
    else:
        return None

    size = assets.player_size
    entity = world.spawn(
        Player(player_id),
        Sprite(texture=texture, custom_size=size.sprite_size),
        Movement(friction=preset.friction),
        Collider(shape=Obb2d(Vec2.ZERO, size.collider_size / 2.0, 0.0)),
        CollisionLayers(PLAYER_MASK, ENEMY_MASK),
        TunnelBorder(),
        ShipMovement(
            movement_speed=preset.movement_speed,
            rotation_speed=preset.rotation_speed,
        ),
        ShipShoot(
            projectile_texture=assets.projectile_texture,
            projectile_size=assets.projectile_size,
        ),
        InputController.from_map(input_map),
        Health(),
        DespawnOnDead(),
    )
    return PlayerSpawned(entity)


def player_input(world: World) -> None:
    """Turn each controller's actions into shooting and steering orders."""
    for _, controller, shoot, _ in world.query(InputController, ShipShoot, Player):
        shoot.shoot = controller.input_action(ShipAction.SHOOT)

    for _, controller, ship in world.query(InputController, ShipMovement):
        x = y = 0.0
        if controller.input_action(ShipAction.FORWARD):
            y += 1.0
        if controller.input_action(ShipAction.BACKWARD):
            y -= 1.0
        if controller.input_action(ShipAction.TURN_LEFT):
            x -= 1.0
        if controller.input_action(ShipAction.TURN_RIGHT):
            x += 1.0
        ship.direction = Vec2(x, y)