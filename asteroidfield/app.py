"""Game setup, state flow between menu and play, and the interactive main loop."""

from __future__ import annotations

import argparse
import random
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple

from asteroidfield.animation import Animation, AnimationPlayMode, Sprite, animate
from asteroidfield.border import despawn_outside, screen_half_size, tunnel
from asteroidfield.collision import Collider, CollisionEvent, CollisionLayers, detect_collisions
from asteroidfield.core import GameState, SizeAsset
from asteroidfield.damage import (
    Invincibility,
    apply_collision_damage,
    despawn_dead,
    despawn_on_collision,
)
from asteroidfield.effects import Effects
from asteroidfield.enemy import EnemyAssets, make_enemy_spawner, spawn_enemy
from asteroidfield.gameplay import Gameplay
from asteroidfield.geometry import Rot2, Vec2
from asteroidfield.input import InputState, gamepad_connected, update_controllers
from asteroidfield.movement import Movement
from asteroidfield.player import PlayerAssets, player_exists, player_input, spawn_player
from asteroidfield.ship import ShootEvent, ship_move, ship_shoot
from asteroidfield.spawner import Spawner, SpawnerAsset
from asteroidfield.timed import update_timed_components
from asteroidfield.ui import Interaction, MenuButton, lives_layout, score_text
from asteroidfield.world import World

FIXED_TIMESTEP = 1.0 / 64.0

_SECOND_PLAYER_GAMEPAD = 0
_TRAUMA_DECAY = 0.8
_ESCAPE = "Escape"
_BUTTON_SIZE = (150, 65)


@dataclass(frozen=True)
class WindowConfig:
    """Settings of the primary game window."""

    title: str = "Asteroid Field"
    width: int = 800
    height: int = 800
    resizable: bool = False
    vsync: bool = True
    dark_theme: bool = True
    maximize_button: bool = False


def _default_player_assets() -> PlayerAssets:
    return PlayerAssets(
        player_one_texture="player.one.texture",
        player_two_texture="player.two.texture",
        projectile_texture="player.projectile.texture",
        player_size=SizeAsset(Vec2(64.0, 64.0), Vec2(40.0, 48.0)),
        projectile_size=SizeAsset(Vec2(16.0, 16.0), Vec2(6.0, 12.0)),
    )


def _default_enemy_assets() -> EnemyAssets:
    return EnemyAssets(
        texture="enemy.texture",
        layout="enemy.layout",
        size=SizeAsset(Vec2(64.0, 64.0), Vec2(52.0, 52.0)),
        spawner=SpawnerAsset(
            spawn_delay_ms=1000,
            max_entity_count=10,
            min_max_speed=Vec2(50.0, 150.0),
            min_max_angular_speed=Vec2(-1.0, 1.0),
            min_max_angle=Vec2(0.0, 2.0),
            min_max_scale=Vec2(1.0, 2.0),
        ),
    )


def _default_invincibility_animation() -> Animation:
    return Animation(AnimationPlayMode.LOOP, 0, 3, 0.4)


def _default_explosion_animation() -> Animation:
    return Animation(AnimationPlayMode.ONE_SHOT, 0, 7, 0.6)


class _Background:
    """Marks the background sprite."""


@dataclass
class Game:
    """The whole game: menu, loading, play and the rules tying systems together."""

    window: WindowConfig = field(default_factory=WindowConfig)
    player_assets: PlayerAssets = field(default_factory=_default_player_assets)
    enemy_assets: EnemyAssets = field(default_factory=_default_enemy_assets)
    invincibility_animation: Animation = field(default_factory=_default_invincibility_animation)
    explosion_animation: Animation = field(default_factory=_default_explosion_animation)
    rng: random.Random = field(default_factory=random.Random)
    state: GameState = GameState.MAIN_MENU_LOADING
    pointer: Interaction = Interaction.NONE
    world: Optional[World] = field(default=None, init=False)
    gameplay: Optional[Gameplay] = field(default=None, init=False)
    effects: Optional[Effects] = field(default=None, init=False)
    spawner: Optional[Spawner] = field(default=None, init=False)
    menu_button: Optional[MenuButton] = field(default=None, init=False)
    shoot_events: List[ShootEvent] = field(default_factory=list, init=False)
    _collisions: List[CollisionEvent] = field(default_factory=list, init=False, repr=False)
    _escape_held: bool = field(default=False, init=False, repr=False)

    @property
    def screen_size(self) -> Tuple[int, int]:
        return (self.window.width, self.window.height)

    def start_game(self) -> None:
        """Build a fresh play field with the first player and enter play."""
        world = World()
        self.world = world
        self.gameplay = Gameplay(world, self.player_assets)
        self.effects = Effects(
            world,
            self.enemy_assets,
            "player.invincible.texture",
            "player.invincible.layout",
            self.invincibility_animation,
            self.explosion_animation,
        )
        self.spawner = make_enemy_spawner(self.enemy_assets)
        world.spawn(
            Sprite(
                texture="gameplay.background.texture",
                custom_size=Vec2(float(self.window.width), float(self.window.height)),
            ),
            _Background(),
        )
        self._collisions = []
        self.shoot_events = []
        self.state = GameState.GAME
        self._spawn_player(1)

    def return_to_menu(self) -> None:
        """Drop the play field and go back to loading the menu."""
        self.world = None
        self.gameplay = None
        self.effects = None
        self.spawner = None
        self.menu_button = None
        self.shoot_events = []
        self._collisions = []
        self._escape_held = False
        self.pointer = Interaction.NONE
        self.state = GameState.MAIN_MENU_LOADING

    def _spawn_player(self, player_id: int) -> Optional[int]:
        event = spawn_player(self.world, self.player_assets, player_id)
        if event is None:
            return None
        self.gameplay.on_player_spawned(event.entity)
        self.effects.on_invincibility_added(event.entity)
        return event.entity

    def fixed_update(self, dt: float) -> None:
        """Run one fixed physics and rules step while playing."""
        if self.state is not GameState.GAME or self.world is None:
            return
        world = self.world
        half = screen_half_size(self.window.width, self.window.height)

        tunnel(world, half)
        despawn_outside(world, half)

        events, self._collisions = self._collisions, []
        damaged, killed = apply_collision_damage(world, events)
        despawn_on_collision(world, events)

        for entity in damaged:
            self.effects.on_damaged(entity)
        for entity in killed:
            self.effects.on_enemy_dead(entity)

        for _, movement in world.query(Movement):
            movement.step(dt)
        self._collisions = detect_collisions(world.query(Collider, CollisionLayers, Movement))

        if self.gameplay.handle_deaths(killed):
            self.return_to_menu()
            return
        despawn_dead(world)

    def update(self, dt: float, input_state: InputState) -> None:
        """Run one frame: state transitions, input, spawning, timers and effects."""
        if self.state is GameState.MAIN_MENU_LOADING:
            self.menu_button = MenuButton()
            self.state = GameState.MAIN_MENU
            return

        if self.state is GameState.MAIN_MENU:
            if self.menu_button is None:
                self.menu_button = MenuButton()
            target = self.menu_button.interact(self.pointer)
            if target is not None:
                self.state = target
            return

        if self.state is GameState.GAME_LOADING:
            self.start_game()
            if gamepad_connected(input_state, _SECOND_PLAYER_GAMEPAD):
                self._spawn_player(2)
            self._escape_held = _ESCAPE in input_state.pressed_keys
            return

        escape_held = _ESCAPE in input_state.pressed_keys
        released = self._escape_held and not escape_held
        self._escape_held = escape_held
        if released:
            self.return_to_menu()
            return

        world = self.world
        update_controllers(world, input_state)
        player_input(world)
        ship_move(world)
        self.shoot_events = ship_shoot(world)

        self.spawner.run(
            world,
            lambda w: spawn_enemy(w, self.enemy_assets),
            self.screen_size,
            dt,
            self.rng,
        )

        for entity in self.gameplay.update_respawns(dt):
            self.effects.on_invincibility_added(entity)

        if _SECOND_PLAYER_GAMEPAD in input_state.newly_connected and not player_exists(world, 2):
            self._spawn_player(2)

        for entity in update_timed_components(world, Invincibility, dt):
            self.effects.on_invincibility_removed(entity)

        self.effects.update(dt, animate(world, dt))
        self.effects.trauma = max(0.0, self.effects.trauma - _TRAUMA_DECAY * dt)


def _to_rgb(color: Tuple[float, float, float, float]) -> Tuple[int, int, int]:
    r, g, b, a = color
    alpha = max(0.0, min(1.0, a))
    return tuple(int(max(0.0, min(1.0, c * alpha)) * 255) for c in (r, g, b))


def _button_rect(pygame: Any, window: WindowConfig) -> Any:
    width, height = _BUTTON_SIZE
    return pygame.Rect(
        (window.width - width) // 2, (window.height - height) // 2, width, height
    )


def _render(pygame: Any, screen: Any, font: Any, game: Game) -> None:
    screen.fill((0, 0, 0))
    window = game.window

    if game.state is GameState.MAIN_MENU and game.menu_button is not None:
        rect = _button_rect(pygame, window)
        pygame.draw.rect(screen, (38, 38, 38), rect)
        pygame.draw.rect(screen, _to_rgb(game.menu_button.border_color), rect, 5)
        label = font.render(game.menu_button.label, True, (230, 230, 230))
        screen.blit(label, label.get_rect(center=rect.center))

    elif game.state is GameState.GAME and game.world is not None:
        trauma = game.effects.trauma
        shake = trauma * trauma * 12.0
        ox = random.uniform(-shake, shake)
        oy = random.uniform(-shake, shake)
        cx = window.width / 2.0 + ox
        cy = window.height / 2.0 + oy
        for _, sprite, movement in game.world.query(Sprite, Movement):
            if sprite.custom_size is None:
                continue
            hx, hy = sprite.custom_size.x / 2.0, sprite.custom_size.y / 2.0
            rotation = Rot2(movement.rotation)
            points = []
            for corner in (Vec2(hx, hy), Vec2(-hx, hy), Vec2(-hx, -hy), Vec2(hx, -hy)):
                world_point = movement.position + rotation.rotate(corner)
                points.append((cx + world_point.x, cy - world_point.y))
            pygame.draw.polygon(screen, _to_rgb(sprite.color), points, 2)

        text = font.render(score_text(game.gameplay.score.score), True, (255, 255, 255))
        screen.blit(text, (5, 5))
        x = 150
        for slot in lives_layout(game.gameplay.lives.lives):
            if slot is not None:
                colour = (120, 200, 255) if slot == 1 else (255, 180, 120)
                pygame.draw.rect(screen, colour, pygame.Rect(x, 3, 26, 26), 2)
            x += 30

    pygame.display.flip()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Open the game window and run until it is closed."""
    parser = argparse.ArgumentParser(prog="asteroidfield", description="Asteroid shooting game.")
    parser.add_argument("--seed", type=int, default=None, help="seed for enemy spawning")
    args = parser.parse_args(argv)

    import pygame

    game = Game(rng=random.Random(args.seed))
    window = game.window
    pygame.init()
    try:
        screen = pygame.display.set_mode((window.width, window.height))
        pygame.display.set_caption(window.title)
        font = pygame.font.Font(None, 28)
        clock = pygame.time.Clock()
        keys = {
            pygame.K_UP: "ArrowUp",
            pygame.K_DOWN: "ArrowDown",
            pygame.K_LEFT: "ArrowLeft",
            pygame.K_RIGHT: "ArrowRight",
            pygame.K_SPACE: "Space",
            pygame.K_ESCAPE: _ESCAPE,
        }
        triggers = {4: "LeftTrigger2", 5: "RightTrigger2"}
        joysticks = {}
        state = InputState()
        accumulator = 0.0
        running = True

        while running:
            dt = clock.tick(60) / 1000.0
            state.begin_frame()
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key in keys:
                    state.press_key(keys[event.key])
                elif event.type == pygame.KEYUP and event.key in keys:
                    state.release_key(keys[event.key])
                elif event.type == pygame.JOYDEVICEADDED:
                    joystick = pygame.joystick.Joystick(event.device_index)
                    joysticks[joystick.get_instance_id()] = joystick
                    state.connect_gamepad(joystick.get_instance_id())
                elif event.type == pygame.JOYDEVICEREMOVED:
                    joysticks.pop(event.instance_id, None)
                    state.disconnect_gamepad(event.instance_id)
                elif event.type == pygame.JOYBUTTONDOWN and event.button == 0:
                    state.press_button(event.instance_id, "South")
                elif event.type == pygame.JOYBUTTONUP and event.button == 0:
                    state.release_button(event.instance_id, "South")
                elif event.type == pygame.JOYAXISMOTION:
                    if event.axis == 0:
                        state.set_axis(event.instance_id, "LeftStickX", event.value)
                    elif event.axis in triggers:
                        if event.value > 0.5:
                            state.press_button(event.instance_id, triggers[event.axis])
                        else:
                            state.release_button(event.instance_id, triggers[event.axis])

            if game.state is GameState.MAIN_MENU:
                over = _button_rect(pygame, window).collidepoint(pygame.mouse.get_pos())
                if over and pygame.mouse.get_pressed()[0]:
                    game.pointer = Interaction.PRESSED
                elif over:
                    game.pointer = Interaction.HOVERED
                else:
                    game.pointer = Interaction.NONE

            accumulator += dt
            while accumulator >= FIXED_TIMESTEP:
                game.fixed_update(FIXED_TIMESTEP)
                accumulator -= FIXED_TIMESTEP
            game.update(dt, state)
            _render(pygame, screen, font, game)
    finally:
        pygame.quit()
    return 0