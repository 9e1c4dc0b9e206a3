import pytest

from asteroidfield.animation import (
    Animation,
    AnimationCompleted,
    AnimationPlayer,
    AnimationPlayMode,
    TextureAtlas,
    animate,
)
from asteroidfield.world import World


def test_frame_time_spreads_duration():
    animation = Animation(AnimationPlayMode.LOOP, 0, 3, 1.0)
    assert animation.frame_time * 4 == animation.duration


def test_invalid_range_raises():
    with pytest.raises(ValueError):
        Animation(AnimationPlayMode.LOOP, 3, 1, 1.0)


def test_loop_wraps_to_start():
    animation = Animation(AnimationPlayMode.LOOP, 0, 2, 0.75)
    atlas = TextureAtlas(index=0)
    player = AnimationPlayer()
    indices = []
    for _ in range(3):
        assert player.update(animation, atlas, animation.frame_time) is False
        indices.append(atlas.index)
    assert indices == [1, 2, 0]
    assert not player.completed


def test_no_advance_before_frame_time():
    animation = Animation(AnimationPlayMode.LOOP, 0, 2, 0.75)
    atlas = TextureAtlas(index=0)
    player = AnimationPlayer()
    player.update(animation, atlas, animation.frame_time / 2)
    assert atlas.index == 0


def test_one_shot_completes_at_end():
    animation = Animation(AnimationPlayMode.ONE_SHOT, 1, 2, 0.5)
    atlas = TextureAtlas(index=1)
    player = AnimationPlayer()
    assert player.update(animation, atlas, animation.frame_time) is False
    assert atlas.index == animation.end
    assert player.update(animation, atlas, animation.frame_time) is True
    assert player.completed
    assert player.update(animation, atlas, animation.frame_time) is False
    assert atlas.index == animation.end


def test_animate_reports_completed_entities():
    world = World()
    animation = Animation(AnimationPlayMode.ONE_SHOT, 0, 0, 0.5)
    done = world.spawn(animation, TextureAtlas(), AnimationPlayer())
    looping = world.spawn(
        Animation(AnimationPlayMode.LOOP, 0, 0, 0.5), TextureAtlas(), AnimationPlayer()
    )
    events = animate(world, 0.5)
    assert events == [AnimationCompleted(done)]
    assert world.get(looping, TextureAtlas).index == 0
    assert animate(world, 0.5) == []