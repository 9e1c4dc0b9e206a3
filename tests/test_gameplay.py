import pytest

from asteroidfield.core import SizeAsset
from asteroidfield.damage import Dead, Invincibility, despawn_dead
from asteroidfield.enemy import Enemy
from asteroidfield.gameplay import Gameplay, PlayerLives, PlayerRespawnTimer, Score
from asteroidfield.geometry import Vec2
from asteroidfield.player import Player, PlayerAssets, player_exists, spawn_player
from asteroidfield.scale import Scaled
from asteroidfield.timed import update_timed_components
from asteroidfield.world import World


@pytest.fixture
def assets():
    return PlayerAssets(
        player_one_texture="one",
        player_two_texture="two",
        projectile_texture="shot",
        player_size=SizeAsset(Vec2(64.0, 64.0), Vec2(40.0, 50.0)),
        projectile_size=SizeAsset(Vec2(8.0, 8.0), Vec2(4.0, 4.0)),
    )


@pytest.fixture
def gameplay(assets):
    return Gameplay(World(), assets)


def _spawn(gameplay, player_id):
    entity = spawn_player(gameplay.world, gameplay.assets, player_id).entity
    gameplay.on_player_spawned(entity)
    return entity


def test_resources_start_empty(gameplay):
    assert gameplay.world.resource(Score).score == 0
    assert gameplay.world.resource(PlayerLives).lives == {}


def test_spawn_registers_three_lives_and_invincibility(gameplay):
    entity = spawn_player(gameplay.world, gameplay.assets, 1).entity
    assert gameplay.on_player_spawned(entity) is True
    assert gameplay.lives.lives == {1: 3}
    assert gameplay.lives_changed
    assert gameplay.world.has(entity, Invincibility)


def test_invincibility_expires_after_three_seconds(gameplay):
    entity = _spawn(gameplay, 1)
    update_timed_components(gameplay.world, Invincibility, 2.9)
    assert gameplay.world.has(entity, Invincibility)
    update_timed_components(gameplay.world, Invincibility, 0.1)
    assert not gameplay.world.has(entity, Invincibility)


def test_respawn_does_not_reset_lives(gameplay):
    _spawn(gameplay, 1)
    gameplay.lives.lives[1] = 2
    entity = spawn_player(gameplay.world, gameplay.assets, 1).entity
    assert gameplay.on_player_spawned(entity) is False
    assert gameplay.lives.lives[1] == 2


def test_on_player_spawned_ignores_non_players(gameplay):
    entity = gameplay.world.spawn(Enemy())
    assert gameplay.on_player_spawned(entity) is False
    assert gameplay.lives.lives == {}


def test_dead_enemy_adds_score(gameplay):
    _spawn(gameplay, 1)
    enemy = gameplay.world.spawn(Enemy(), Scaled(1.5), Dead())
    assert gameplay.handle_deaths([enemy]) is False
    assert gameplay.score.score == 15
    assert gameplay.score_changed


def test_no_deaths_changes_nothing(gameplay):
    assert gameplay.handle_deaths([]) is False
    assert gameplay.score.score == 0
    assert not gameplay.score_changed


def test_player_death_takes_a_life_and_schedules_respawn(gameplay):
    entity = _spawn(gameplay, 1)
    gameplay.world.insert(entity, Dead())
    assert gameplay.handle_deaths([entity]) is False
    assert gameplay.lives.lives[1] == 2
    timers = gameplay.world.query(PlayerRespawnTimer)
    assert [timer.player_id for _, timer in timers] == [1]


def test_last_life_lost_is_game_over(gameplay):
    entity = _spawn(gameplay, 1)
    gameplay.lives.lives[1] = 1
    gameplay.world.insert(entity, Dead())
    assert gameplay.handle_deaths([entity]) is True
    assert gameplay.lives.lives[1] == 0
    assert gameplay.world.query(PlayerRespawnTimer) == []


def test_other_player_keeps_game_alive(gameplay):
    first = _spawn(gameplay, 1)
    _spawn(gameplay, 2)
    gameplay.lives.lives[1] = 1
    gameplay.world.insert(first, Dead())
    assert gameplay.handle_deaths([first]) is False


def test_player_respawns_after_delay(gameplay):
    entity = _spawn(gameplay, 1)
    gameplay.world.insert(entity, Dead())
    gameplay.handle_deaths([entity])
    despawn_dead(gameplay.world)
    assert not player_exists(gameplay.world, 1)

    assert gameplay.update_respawns(0.5) == []
    respawned = gameplay.update_respawns(0.5)

    assert len(respawned) == 1
    assert gameplay.world.get(respawned[0], Player).player_id == 1
    assert gameplay.world.has(respawned[0], Invincibility)
    assert gameplay.world.query(PlayerRespawnTimer) == []
    assert gameplay.lives.lives[1] == 2