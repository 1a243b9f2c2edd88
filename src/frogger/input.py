"""
Input mapping.

Keyboard, pointer and overlay-click events are queued as they arrive and
consumed once per tick, then folded into one direction vector for the
player.
"""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from frogger.entities import Entity
from frogger.state import GameStatus

DIRECTION_KEYS = ("up", "down", "left", "right")

# an axis counts as arrived once within this fraction of the player's size
ARRIVAL_FRACTION = 8


class InputDevice(str, Enum):
    KEYBOARD = "keyboard"
    POINTER = "pointer"


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class KeyEvent:
    key: str
    pressed: bool


@dataclass(frozen=True)
class PointerEvent:
    x: float
    y: float
    target: str | None = None


@dataclass(frozen=True)
class ClickEvent:
    target: str | None


InputEvent = Union[KeyEvent, PointerEvent, ClickEvent]


@dataclass
class KeyboardState:
    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False


@dataclass
class InputState:
    active: InputDevice = InputDevice.KEYBOARD
    keyboard: KeyboardState = field(default_factory=KeyboardState)
    pointer_target: Point = Point(0, 0)


class InputQueue:
    """
    Events pushed by the host, drained by the tick.
    """

    def __init__(self):
        self._events: deque[InputEvent] = deque()

    def push(self, event: InputEvent) -> None:
        self._events.append(event)

    def drain(self) -> list[InputEvent]:
        events = list(self._events)
        self._events.clear()
        return events

    def __len__(self) -> int:
        return len(self._events)


class InputMapper:
    """
    Applies queued events to an InputState and computes player direction.
    """

    def drain(
        self, queue: InputQueue, state: InputState, status: GameStatus
    ) -> list[ClickEvent]:
        """
        Consume every queued event.

        Key and pointer events update `state` in place. Clicks are handed
        back to the caller, which owns the state transitions they trigger.
        """
        clicks: list[ClickEvent] = []
        for event in queue.drain():
            if isinstance(event, KeyEvent):
                self._on_key(event, state)
            elif isinstance(event, PointerEvent):
                self._on_pointer(event, state, status)
            elif isinstance(event, ClickEvent):
                if status != GameStatus.LOADING:
                    clicks.append(event)
        return clicks

    def _on_key(self, event: KeyEvent, state: InputState) -> None:
        if event.pressed:
            state.active = InputDevice.KEYBOARD

        if event.key in DIRECTION_KEYS:
            setattr(state.keyboard, event.key, event.pressed)

    def _on_pointer(
        self, event: PointerEvent, state: InputState, status: GameStatus
    ) -> None:
        # the tap that started the game, or one on the mute toggle
        if status == GameStatus.READY or event.target == "mute":
            return

        state.active = InputDevice.POINTER
        state.pointer_target = Point(math.floor(event.x), math.floor(event.y))

    def direction(self, state: InputState, player: Entity) -> tuple[float, float]:
        if state.active == InputDevice.KEYBOARD:
            keys = state.keyboard
            return (
                (-1 if keys.left else 0) + (1 if keys.right else 0),
                (-1 if keys.up else 0) + (1 if keys.down else 0),
            )
        return path_to_point(player, state.pointer_target)


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def path_to_point(player: Entity, target: Point) -> tuple[float, float]:
    """
    Direction from the player's center straight towards `target`.

    The dominant axis gets a full unit step and the other axis is scaled
    down by the ratio of the distances.
    """
    dx = target.x - player.cx
    dy = target.y - player.cy
    adx = abs(dx)
    ady = abs(dy)

    x = _sign(dx) if adx > player.width / ARRIVAL_FRACTION else 0
    y = _sign(dy) if ady > player.height / ARRIVAL_FRACTION else 0

    if x == 0 and y == 0:
        return (0, 0)

    if adx > ady:
        return (x, y * (ady / adx))
    return (x * (adx / ady), y)
