"""Keyboard and gamepad bindings mapped to game actions."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Hashable, List, Optional, Set, Tuple, Union

from asteroidfield.world import World

_AXIS_THRESHOLD = 0.5


class ButtonMode(Enum):
    PRESSED = auto()
    JUST_PRESSED = auto()


class AxisSide(Enum):
    POSITIVE = auto()
    NEGATIVE = auto()


@dataclass
class InputState:
    """Raw device state for one frame: keys, gamepad buttons, axes and connections."""

    pressed_keys: Set[Hashable] = field(default_factory=set)
    just_pressed_keys: Set[Hashable] = field(default_factory=set)
    pressed_buttons: Set[Tuple[int, Hashable]] = field(default_factory=set)
    just_pressed_buttons: Set[Tuple[int, Hashable]] = field(default_factory=set)
    axes: Dict[Tuple[int, Hashable], float] = field(default_factory=dict)
    connected_gamepads: Set[int] = field(default_factory=set)
    newly_connected: Set[int] = field(default_factory=set)

    def begin_frame(self) -> None:
        """Forget this frame's edge events; held buttons stay held."""
        self.just_pressed_keys.clear()
        self.just_pressed_buttons.clear()
        self.newly_connected.clear()

    def press_key(self, key: Hashable) -> None:
        if key not in self.pressed_keys:
            self.just_pressed_keys.add(key)
        self.pressed_keys.add(key)

    def release_key(self, key: Hashable) -> None:
        self.pressed_keys.discard(key)
        self.just_pressed_keys.discard(key)

    def press_button(self, gamepad: int, button: Hashable) -> None:
        pair = (gamepad, button)
        if pair not in self.pressed_buttons:
            self.just_pressed_buttons.add(pair)
        self.pressed_buttons.add(pair)

    def release_button(self, gamepad: int, button: Hashable) -> None:
        pair = (gamepad, button)
        self.pressed_buttons.discard(pair)
        self.just_pressed_buttons.discard(pair)

    def set_axis(self, gamepad: int, axis: Hashable, value: float) -> None:
        self.axes[(gamepad, axis)] = float(value)

    def connect_gamepad(self, gamepad: int) -> None:
        if gamepad not in self.connected_gamepads:
            self.newly_connected.add(gamepad)
        self.connected_gamepads.add(gamepad)

    def disconnect_gamepad(self, gamepad: int) -> None:
        self.connected_gamepads.discard(gamepad)
        self.newly_connected.discard(gamepad)


def _usable(state: InputState, gamepad: Optional[int]) -> bool:
    return gamepad is not None and gamepad in state.connected_gamepads


@dataclass(frozen=True)
class KeyMapping:
    key: Hashable
    mode: ButtonMode

    def is_triggered(self, state: InputState, gamepad: Optional[int]) -> bool:
        if self.mode is ButtonMode.PRESSED:
            return self.key in state.pressed_keys
        return self.key in state.just_pressed_keys


@dataclass(frozen=True)
class GamepadButtonMapping:
    button: Hashable
    mode: ButtonMode

    def is_triggered(self, state: InputState, gamepad: Optional[int]) -> bool:
        if not _usable(state, gamepad):
            return False
        pair = (gamepad, self.button)
        if self.mode is ButtonMode.PRESSED:
            return pair in state.pressed_buttons
        return pair in state.just_pressed_buttons


@dataclass(frozen=True)
class GamepadAxisMapping:
    axis: Hashable
    side: AxisSide

    def is_triggered(self, state: InputState, gamepad: Optional[int]) -> bool:
        if not _usable(state, gamepad):
            return False
        value = state.axes.get((gamepad, self.axis))
        if value is None:
            return False
        if self.side is AxisSide.POSITIVE:
            return value > _AXIS_THRESHOLD
        return value < -_AXIS_THRESHOLD


InputMapping = Union[KeyMapping, GamepadButtonMapping, GamepadAxisMapping]


@dataclass
class InputMap:
    """Bindings from actions to device inputs, with the last evaluated values."""

    action_map: Dict[Any, List[InputMapping]] = field(default_factory=dict)
    action_values: Dict[Any, bool] = field(default_factory=dict)
    gamepad: Optional[int] = None

    def with_mapping(self, action: Any, mapping: InputMapping) -> InputMap:
        self.action_map.setdefault(action, []).append(mapping)
        return self

    def with_gamepad(self, gamepad: int) -> InputMap:
        self.gamepad = gamepad
        return self

    def input_action(self, action: Any) -> bool:
        return self.action_values.get(action, False)

    def update(self, state: InputState) -> None:
        """Re-evaluate every action against the current device state."""
        for action in self.action_values:
            self.action_values[action] = False
        for action, mappings in self.action_map.items():
            self.action_values[action] = any(
                mapping.is_triggered(state, self.gamepad) for mapping in mappings
            )


@dataclass
class InputController:
    """Component giving an entity its own input map."""

    input_map: InputMap = field(default_factory=InputMap)

    @classmethod
    def from_map(cls, input_map: InputMap) -> InputController:
        return cls(input_map)

    def input_action(self, action: Any) -> bool:
        return self.input_map.input_action(action)

    def update(self, state: InputState) -> None:
        self.input_map.update(state)


def gamepad_connected(state: InputState, gamepad_id: int) -> bool:
    return gamepad_id in state.connected_gamepads


def update_controllers(world: World, state: InputState) -> None:
    """Refresh the action values of every input controller in the world."""
    for _, controller in world.query(InputController):
        controller.update(state)