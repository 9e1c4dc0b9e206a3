"""Components that remove themselves after a set time."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from asteroidfield.world import Timer, World


@dataclass
class TimedComponent:
    """Timers of an entity's timed components, keyed by component type."""

    timers: Dict[type, Timer] = field(default_factory=dict)


def insert_timed(world: World, entity: int, component: Any, duration: float) -> None:
    """Insert ``component`` on ``entity`` for ``duration`` seconds."""
    if world.has(entity, TimedComponent):
        timed = world.get(entity, TimedComponent)
    else:
        timed = TimedComponent()
    timed.timers[type(component)] = Timer(duration)
    world.insert(entity, component, timed)


def update_timed_components(world: World, component_type: type, delta: float) -> List[int]:
    """Tick the timers of one component type; return entities whose component expired."""
    expired = []
    for entity, timed in list(world.query(TimedComponent)):
        timer = timed.timers.get(component_type)
        if timer is None:
            continue
        timer.tick(delta)
        if timer.just_finished:
            del timed.timers[component_type]
            if not timed.timers:
                world.remove(entity, TimedComponent)
            world.remove(entity, component_type)
            expired.append(entity)
    return expired