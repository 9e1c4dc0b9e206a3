"""Score, player lives, deaths and respawns."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List

from asteroidfield.damage import Invincibility
from asteroidfield.enemy import Enemy
from asteroidfield.player import Player, PlayerAssets, spawn_player
from asteroidfield.scale import Scaled
from asteroidfield.timed import insert_timed
from asteroidfield.world import Timer, World

_STARTING_LIVES = 3
_SPAWN_INVINCIBILITY = 3.0
_RESPAWN_DELAY = 1.0
_POINTS_PER_SCALE = 10.0


@dataclass
class Score:
    score: int = 0


@dataclass
class PlayerLives:
    """Remaining lives keyed by player id."""

    lives: Dict[int, int] = field(default_factory=dict)


@dataclass
class PlayerRespawnTimer:
    """Counts down until a player's ship comes back."""

    player_id: int
    timer: Timer = field(default_factory=lambda: Timer(_RESPAWN_DELAY))


@dataclass
class Gameplay:
    """Game rules tying deaths to score, lives and respawns.

    ``score_changed`` and ``lives_changed`` are raised when the matching
    resource changes; whoever displays them clears the flags.
    """

    world: World
    assets: PlayerAssets
    score_changed: bool = False
    lives_changed: bool = False

    def __post_init__(self) -> None:
        self.world.insert_resource(Score())
        self.world.insert_resource(PlayerLives())

    @property
    def score(self) -> Score:
        return self.world.resource(Score)

    @property
    def lives(self) -> PlayerLives:
        return self.world.resource(PlayerLives)

    def on_player_spawned(self, entity: int) -> bool:
        """Register a new player's lives and make the ship briefly invincible.

        Returns True if the player's lives were newly registered.
        """
        player = self.world.get(entity, Player)
        if player is None:
            return False
        lives = self.lives.lives
        registered = player.player_id not in lives
        if registered:
            lives[player.player_id] = _STARTING_LIVES
            self.lives_changed = True
        insert_timed(self.world, entity, Invincibility(), _SPAWN_INVINCIBILITY)
        return registered

    def handle_deaths(self, newly_dead: Iterable[int]) -> bool:
        """Score dead enemies and take lives from dead players; True on game over."""
        dead = list(newly_dead)
        if not dead:
            return False

        for entity in dead:
            if not self.world.has(entity, Enemy):
                continue
            scaled = self.world.get(entity, Scaled)
            if scaled is None:
                continue
            self.score.score += max(0, int(_POINTS_PER_SCALE * scaled.scale))
            self.score_changed = True

        lives = self.lives.lives
        for entity in dead:
            player = self.world.get(entity, Player)
            if player is None or player.player_id not in lives:
                continue
            lives[player.player_id] = max(0, lives[player.player_id] - 1)
            self.lives_changed = True
            if lives[player.player_id] > 0:
                self.world.spawn(PlayerRespawnTimer(player.player_id))

        return sum(lives.values()) <= 0

    def update_respawns(self, delta: float) -> List[int]:
        """Tick respawn timers and bring back players whose timer ran out."""
        respawned = []
        for timer_entity, respawner in self.world.query(PlayerRespawnTimer):
            respawner.timer.tick(delta)
            if not respawner.timer.just_finished:
                continue
            event = spawn_player(self.world, self.assets, respawner.player_id)
            self.world.despawn(timer_entity)
            if event is not None:
                self.on_player_spawned(event.entity)
                respawned.append(event.entity)
        return respawned