from __future__ import annotations

import pytest

from frogger.assets import AssetBundle, AssetKind, AssetLoadError
from frogger.config import GameConfig
from frogger.input import ClickEvent, KeyEvent
from frogger.scenes.frogger import Game
from frogger.storage import SettingsStore

FRAME_MS = 1000 / 60


class FakeClock:
    def __init__(self, now: float = 10_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float = FRAME_MS) -> None:
        self.now += ms


class FakeOverlay:
    def __init__(self):
        self.banner_active = False
        self.button_active = False
        self.instructions_active = False
        self.stats_active = False
        self.banner_text = None
        self.button_text = None
        self.score = None
        self.lives = None
        self.muted = None
        self.calls: list[str] = []

    def show_banner(self, text):
        self.calls.append("show_banner")
        self.banner_text = text
        self.banner_active = True

    def hide_banner(self):
        self.calls.append("hide_banner")
        self.banner_active = False

    def show_button(self, text):
        self.calls.append("show_button")
        self.button_text = text
        self.button_active = True

    def hide_button(self):
        self.calls.append("hide_button")
        self.button_active = False

    def set_instructions(self, desktop, mobile):
        self.calls.append("set_instructions")
        self.instructions_active = True

    def hide_instructions(self):
        self.calls.append("hide_instructions")
        self.instructions_active = False

    def show_stats(self):
        self.stats_active = True

    def set_score(self, score):
        self.score = score

    def set_lives(self, lives):
        self.lives = lives

    def set_mute(self, muted):
        self.muted = muted

    def reset(self):
        self.banner_active = False
        self.button_active = False
        self.instructions_active = False
        self.stats_active = False


class FakeShell:
    def __init__(self):
        self.scores: list[int] = []
        self.views: list[str] = []

    def report_score(self, score):
        self.scores.append(score)

    def set_view(self, view):
        self.views.append(view)


class FakeAudioBackend:
    def __init__(self):
        self.played: list[tuple[object, bool]] = []
        self.stopped: list[int] = []
        self.callbacks: dict[int, object] = {}
        self.suspended = False
        self._next = 0

    def play(self, sound, loop, on_complete):
        handle = self._next
        self._next += 1
        self.played.append((sound, loop))
        self.callbacks[handle] = on_complete
        return handle

    def finish(self, handle):
        self.callbacks.pop(handle)()

    def stop(self, handle):
        self.stopped.append(handle)
        self.callbacks.pop(handle, None)

    def suspend(self):
        self.suspended = True

    def resume(self):
        self.suspended = False

    def poll(self):
        pass

    def played_sounds(self):
        return [sound for sound, _ in self.played]


class FakeLoader:
    """Bundle of plain strings standing in for surfaces and sounds."""

    def __init__(self, fail_on: str | None = None):
        self.fail_on = fail_on
        self.calls = 0

    def load(self, manifest, on_progress=None):
        self.calls += 1
        bundle = AssetBundle()
        for request in manifest:
            if request.key == self.fail_on:
                raise AssetLoadError(request.kind, request.key, request.source, "boom")
            if request.kind == AssetKind.SOUND:
                bundle.add(request.kind, request.key, f"sound:{request.key}")
            else:
                bundle.add(request.kind, request.key, request.key)
        if on_progress is not None:
            on_progress(100)
        return bundle


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def overlay():
    return FakeOverlay()


@pytest.fixture
def shell():
    return FakeShell()


@pytest.fixture
def backend():
    return FakeAudioBackend()


@pytest.fixture
def store(tmp_path):
    return SettingsStore(tmp_path / "settings.json")


@pytest.fixture
def make_game(clock, overlay, shell, backend, store):
    def factory(size=(800, 600), loader=None, **settings):
        config = GameConfig.from_dict({"settings": settings})
        return Game(
            config=config,
            overlay=overlay,
            shell=shell,
            audio_backend=backend,
            store=store,
            size=size,
            loader=loader or FakeLoader(),
            clock=clock,
        )

    return factory


@pytest.fixture
def step(clock):
    """Advance the clock one display refresh and dispatch."""

    def run(game, times=1):
        ran = False
        for _ in range(times):
            clock.advance()
            ran = game.scheduler.dispatch()
        return ran

    return run


def start_playing(game, step):
    """Load, then click start on the first frame."""
    assert game.load()
    game.events.push(ClickEvent("button"))
    step(game)


def press(game, key, pressed=True):
    game.events.push(KeyEvent(key, pressed))
