# asteroidfield

A small arcade asteroid shooter for one or two players. You fly a ship around a
screen that wraps at the edges and shoot the asteroids that drift in from the
corners. Bigger asteroids take more hits and score more points, and destroying
one shakes the screen.

## Installing

```
pip install .
```

This installs the game and its single runtime dependency, `pygame`.

## Playing

```
asteroidfield
```

This opens an 800×800 window titled "Asteroid Field" showing the main menu.
Press the mouse button on **Play** and release it there to start a round.
Press and release **Escape** during a round to go back to the menu.

The `--seed N` option seeds the random numbers used for asteroid spawning, so
that asteroids come in the same way each run.

### Controls

Player 1 uses the keyboard:

| Action      | Key         |
|-------------|-------------|
| Thrust      | Up arrow    |
| Reverse     | Down arrow  |
| Turn left   | Left arrow  |
| Turn right  | Right arrow |
| Shoot       | Space       |

Player 2 uses the first gamepad. The ship appears when that gamepad is
connected at the start of a round, or when it is connected during one:

| Action      | Gamepad control        |
|-------------|------------------------|
| Thrust      | Right trigger          |
| Reverse     | Left trigger           |
| Turn        | Left stick, horizontal |
| Shoot       | South face button      |

### Rules

- Each player starts with three lives and is invincible for three seconds
  after each spawn. While invincible the ship blinks.
- Touching an asteroid destroys the ship. After a one-second pause it
  respawns, as long as that player has lives left.
- A shot deals 50 damage. Asteroids have more health the larger they are.
- Each destroyed asteroid adds ten points times its size to the score.
- At most ten asteroids are on screen at once; a new one may appear every
  second.
- The round ends, and the game returns to the menu, once every player is out
  of lives.

The score is shown in the top-left corner, with one small square per remaining
life next to it.

## What the game does not do

The game draws every object as a coloured outline of its size; it loads no
images or sprite sheets, so texture and animation names are only labels. It
plays no music or sound effects. There is no options screen, no saved high
scores and no in-game debug tools.

## Using the game core

Apart from the playable game, the package holds a small entity-component core
that works without a window, for instance in tests or simulations:

- `asteroidfield.world.World` stores entities, components, a parent/child
  hierarchy and resources; `asteroidfield.world.Timer` counts time once or
  repeatedly.
- `asteroidfield.geometry` has `Vec2`, `Rot2` and the bounding shapes
  `Aabb2d`, `Obb2d` and `BoundingCircle`, with intersection tests.
- `asteroidfield.movement.Movement` integrates position, velocity and rotation
  on a fixed time step.
- `asteroidfield.collision.detect_collisions` finds overlapping pairs and
  reports them as `CollisionEvent`s, filtered by `CollisionLayers`.
- `asteroidfield.damage` applies collision damage to `Health` and marks dead
  entities with `Dead`.
- `asteroidfield.spawner.Spawner` spawns entities on a timer with random
  position, velocity, spin and scale taken from a `SpawnerAsset`.
- `asteroidfield.input.InputState` holds raw keyboard and gamepad state, and
  `InputMap` / `InputController` turn it into actions.
- `asteroidfield.app.Game` runs the whole game through `update` and
  `fixed_update`, driven by an `InputState`.

```python
from asteroidfield.geometry import Obb2d, BoundingCircle, Vec2

box = Obb2d(Vec2(0.0, 0.0), Vec2(10.0, 5.0), 0.0)
rock = BoundingCircle(Vec2(12.0, 0.0), 3.0)
print(box.intersects(rock))  # True
```

A headless round:

```python
import random

from asteroidfield.app import FIXED_TIMESTEP, Game
from asteroidfield.input import InputState

game = Game(rng=random.Random(1))
game.start_game()
state = InputState()
state.press_key("ArrowUp")
for _ in range(64):
    game.fixed_update(FIXED_TIMESTEP)
    game.update(FIXED_TIMESTEP, state)
    state.begin_frame()
print(game.gameplay.score.score, game.gameplay.lives.lives)
```

## Running the tests

```
pip install ".[test]"
pytest
```