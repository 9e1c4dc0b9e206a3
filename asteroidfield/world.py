"""A small entity-component store with resources, a parent/child hierarchy and timers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Type, TypeVar

T = TypeVar("T")

_MAX_TIMES_FINISHED = 0xFFFFFFFF


@dataclass
class Timer:
    """Counts elapsed time against a duration, once or repeatedly."""

    duration: float
    repeating: bool = False
    elapsed: float = 0.0
    finished: bool = field(default=False, init=False)
    times_finished_this_tick: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        if self.duration < 0:
            raise ValueError(f"timer duration must not be negative, got {self.duration}")

    @property
    def just_finished(self) -> bool:
        """True if the last tick made the timer finish at least once."""
        return self.times_finished_this_tick > 0

    def tick(self, delta: float) -> Timer:
        """Advance the timer by ``delta`` seconds."""
        if delta < 0:
            raise ValueError(f"cannot tick a timer by a negative delta: {delta}")
        if not self.repeating and self.finished:
            self.times_finished_this_tick = 0
            return self

        self.elapsed += delta
        self.finished = self.elapsed >= self.duration
        if self.finished:
            if self.repeating:
                if self.duration == 0:
                    self.times_finished_this_tick = _MAX_TIMES_FINISHED
                    self.elapsed = 0.0
                else:
                    self.times_finished_this_tick = int(self.elapsed // self.duration)
                    self.elapsed = self.elapsed % self.duration
            else:
                self.times_finished_this_tick = 1
                self.elapsed = self.duration
        else:
            self.times_finished_this_tick = 0
        return self

    def reset(self) -> None:
        """Start counting from zero again."""
        self.elapsed = 0.0
        self.finished = False
        self.times_finished_this_tick = 0

    def set_duration(self, duration: float) -> None:
        """Change the duration without touching the elapsed time."""
        if duration < 0:
            raise ValueError(f"timer duration must not be negative, got {duration}")
        self.duration = duration


class World:
    """Entities holding components keyed by their type, plus global resources."""

    def __init__(self) -> None:
        self._next_id = 0
        self._components: Dict[int, Dict[type, Any]] = {}
        self._parents: Dict[int, int] = {}
        self._children: Dict[int, List[int]] = {}
        self._resources: Dict[type, Any] = {}

    def _require(self, entity: int) -> Dict[type, Any]:
        try:
            return self._components[entity]
        except KeyError:
            raise KeyError(f"entity {entity} does not exist") from None

    def spawn(self, *args: Any) -> int:
        """Create an entity holding the given components and return its id."""
        entity = self._next_id
        self._next_id += 1
        self._components[entity] = {type(component): component for component in args}
        return entity

    def contains(self, entity: int) -> bool:
        return entity in self._components

    def insert(self, entity: int, *args: Any) -> None:
        """Add components to an entity, replacing any of the same type."""
        store = self._require(entity)
        for component in args:
            store[type(component)] = component

    def remove(self, entity: int, component_type: Type[T]) -> Optional[T]:
        """Remove a component and return it, or None if it was not there."""
        return self._components.get(entity, {}).pop(component_type, None)

    def get(self, entity: int, component_type: Type[T]) -> Optional[T]:
        return self._components.get(entity, {}).get(component_type)

    def has(self, entity: int, component_type: type) -> bool:
        return component_type in self._components.get(entity, {})

    def query(self, *args: type) -> List[Tuple[Any, ...]]:
        """Return ``(entity, *components)`` for every entity holding all given types."""
        return [
            (entity, *(store[component_type] for component_type in args))
            for entity, store in list(self._components.items())
            if all(component_type in store for component_type in args)
        ]

    def despawn(self, entity: int) -> None:
        """Remove an entity; its children stay, without a parent."""
        self._require(entity)
        parent = self._parents.pop(entity, None)
        if parent is not None:
            self._children[parent].remove(entity)
        for child in self._children.pop(entity, []):
            self._parents.pop(child, None)
        del self._components[entity]

    def ensure_despawned(self, entity: int) -> None:
        """Despawn an entity and its descendants if it still exists."""
        if self.contains(entity):
            self.despawn_recursive(entity)

    def add_child(self, parent: int, child: int) -> None:
        self._require(parent)
        self._require(child)
        if parent == child:
            raise ValueError("an entity cannot be its own child")
        previous = self._parents.get(child)
        if previous is not None:
            self._children[previous].remove(child)
        self._parents[child] = parent
        self._children.setdefault(parent, []).append(child)

    def despawn_recursive(self, entity: int) -> None:
        self.despawn_descendants(entity)
        self.despawn(entity)

    def despawn_descendants(self, entity: int) -> None:
        self._require(entity)
        for child in list(self._children.get(entity, [])):
            self.despawn_recursive(child)

    def despawn_entities_with(self, component_type: type) -> List[int]:
        """Despawn (non-recursively) every entity holding ``component_type``."""
        doomed = [entity for entity, _ in self.query(component_type)]
        for entity in doomed:
            self.despawn(entity)
        return doomed

    def insert_resource(self, resource: Any) -> None:
        self._resources[type(resource)] = resource

    def resource(self, resource_type: Type[T]) -> T:
        try:
            return self._resources[resource_type]
        except KeyError:
            raise KeyError(f"resource {resource_type.__name__} is not present") from None

    def remove_resource(self, resource_type: Type[T]) -> Optional[T]:
        return self._resources.pop(resource_type, None)