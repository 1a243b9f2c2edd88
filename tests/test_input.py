import pytest

from frogger.entities import Player
from frogger.input import (
    ClickEvent,
    InputDevice,
    InputMapper,
    InputQueue,
    InputState,
    KeyEvent,
    Point,
    PointerEvent,
    path_to_point,
)
from frogger.state import GameStatus


@pytest.fixture
def player():
    # center at (100, 100), arrival threshold 10 on each axis
    return Player(x=60, y=60, width=80, height=80, speed=1, image="p")


def drain(events, state, status=GameStatus.PLAY):
    queue = InputQueue()
    for event in events:
        queue.push(event)
    clicks = InputMapper().drain(queue, state, status)
    assert len(queue) == 0
    return clicks


def test_keyboard_direction_sums_opposites(player):
    state = InputState()
    drain([KeyEvent("up", True), KeyEvent("left", True)], state)
    assert InputMapper().direction(state, player) == (-1, -1)

    drain([KeyEvent("right", True)], state)
    assert InputMapper().direction(state, player) == (0, -1)

    drain([KeyEvent("up", False), KeyEvent("down", True)], state)
    assert InputMapper().direction(state, player) == (0, 1)


def test_unknown_keys_are_ignored(player):
    state = InputState()
    drain([KeyEvent("space", True)], state)
    assert InputMapper().direction(state, player) == (0, 0)


def test_pointer_switches_device_and_floors_target():
    state = InputState()
    drain([PointerEvent(12.7, 30.2)], state)
    assert state.active == InputDevice.POINTER
    assert state.pointer_target == Point(12, 30)

    drain([KeyEvent("up", True)], state)
    assert state.active == InputDevice.KEYBOARD


@pytest.mark.parametrize(
    "status, target",
    [(GameStatus.READY, None), (GameStatus.PLAY, "mute")],
)
def test_pointer_ignored_on_ready_or_mute(status, target):
    state = InputState()
    drain([PointerEvent(5, 5, target)], state, status)
    assert state.active == InputDevice.KEYBOARD
    assert state.pointer_target == Point(0, 0)


def test_clicks_are_returned_unless_loading():
    state = InputState()
    assert drain([ClickEvent("button")], state, GameStatus.LOADING) == []
    assert drain([ClickEvent("button")], state, GameStatus.READY) == [
        ClickEvent("button")
    ]


def test_path_to_point_arrived(player):
    assert path_to_point(player, Point(105, 95)) == (0, 0)
    assert path_to_point(player, Point(100, 100)) == (0, 0)
    assert path_to_point(player, Point(110, 110)) == (0, 0)


def test_path_to_point_dominant_axis_gets_full_step(player):
    dx, dy = path_to_point(player, Point(300, 150))
    assert dx == 1
    assert dy == pytest.approx(50 / 200)

    dx, dy = path_to_point(player, Point(50, -300))
    assert dy == -1
    assert dx == pytest.approx(-50 / 400)


def test_path_to_point_arrived_axis_contributes_nothing(player):
    dx, dy = path_to_point(player, Point(105, 400))
    assert dy == 1
    assert dx == 0


def test_direction_in_pointer_mode(player):
    state = InputState()
    drain([PointerEvent(100, 0)], state)
    assert InputMapper().direction(state, player) == (0, -1)
