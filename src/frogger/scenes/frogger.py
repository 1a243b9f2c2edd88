"""
Frogger Scene
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Any, Callable

from frogger.assets import (
    AssetBundle,
    AssetLoader,
    AssetLoadError,
    LoadStatus,
    build_manifest,
)
from frogger.audio import AudioBackend, AudioTracker
from frogger.config import ConfigError, GameConfig, Settings
from frogger.constants import (
    DWELL_INTERVAL,
    DWELL_POINTS,
    ENEMY_HEIGHT,
    ENEMY_MAX_HEIGHT,
    ENEMY_MAX_WIDTH,
    ENEMY_WIDTH,
    GOAL_MARGIN,
    GOAL_POINTS,
    PLAYER_MAX_SIZE,
    PLAYER_SIZE,
    SAFE_ZONE_RATIO,
)
from frogger.entities import Enemy, EnemyArena, Player
from frogger.input import ClickEvent, InputMapper, InputQueue, InputState, Point
from frogger.overlay import BUTTON_TARGET, MUTE_TARGET, Overlay
from frogger.render import DrawImage
from frogger.scheduler import Frame, FrameScheduler, default_clock, screen_scale
from frogger.shell import Shell
from frogger.state import GameState, GameStatus
from frogger.storage import SettingsStore
from frogger.utils import hash_code, logger
from frogger.zones import Zones, compute_zones


@dataclass(frozen=True)
class Screen:
    width: float
    height: float

    @property
    def bottom(self) -> float:
        return self.height

    @property
    def center_x(self) -> float:
        return self.width / 2

    @property
    def scale(self) -> float:
        return screen_scale(self.width, self.height)


@dataclass(frozen=True)
class Dimensions:
    """
    Sprite sizes derived from the screen size.
    """

    player_width: float
    player_height: float
    enemy_width: float
    enemy_height: float
    safe_zone_height: float

    @classmethod
    def for_screen(cls, screen: Screen) -> "Dimensions":
        scale = screen.scale
        player_height = min(PLAYER_SIZE * scale, PLAYER_MAX_SIZE)
        return cls(
            player_width=min(PLAYER_SIZE * scale, PLAYER_MAX_SIZE),
            player_height=player_height,
            enemy_width=min(ENEMY_WIDTH * scale, ENEMY_MAX_WIDTH),
            enemy_height=min(ENEMY_HEIGHT * scale, ENEMY_MAX_HEIGHT),
            safe_zone_height=player_height * SAFE_ZONE_RATIO,
        )


@dataclass
class FroggerWorld:
    """
    Frogger World
    """

    screen: Screen
    dims: Dimensions
    zones: Zones
    player: Player
    enemies: EnemyArena = field(default_factory=EnemyArena)
    score: int = 0
    lives: int = 0
    wins: int = 0

    @property
    def player_start(self) -> tuple[float, float]:
        """Centered in the bottom band."""
        return (
            self.screen.center_x - self.dims.player_width / 2,
            self.screen.bottom
            - (self.dims.safe_zone_height + self.dims.player_height) / 2,
        )


def create_world(screen: Screen, settings: Settings) -> FroggerWorld:
    dims = Dimensions.for_screen(screen)
    zones = compute_zones(screen.height, dims.safe_zone_height)
    player = Player(
        x=0,
        y=0,
        width=dims.player_width,
        height=dims.player_height,
        speed=settings.player_speed,
        image="characterImage",
    )
    world = FroggerWorld(
        screen=screen,
        dims=dims,
        zones=zones,
        player=player,
        lives=settings.lives,
        wins=settings.wins,
    )
    player.set_position(*world.player_start)
    return world


class Game:  # pylint: disable=too-many-instance-attributes,too-many-public-methods
    """
    Frogger game: owns the world, the state machine and the frame loop.

    Lifecycle: `load()` validates the configuration, loads the assets and
    creates the world, then schedules the first frame. Every dispatched
    frame runs `tick()`, which requests the next frame unless the game was
    stopped.
    """

    def __init__(  # pylint: disable=too-many-arguments
        self,
        config: GameConfig,
        overlay: Overlay,
        shell: Shell,
        audio_backend: AudioBackend,
        store: SettingsStore,
        size: tuple[int, int],
        loader: Any = None,
        clock: Callable[[], float] = default_clock,
        rng: Any = None,
    ):
        self.config = config
        self.overlay = overlay
        self.shell = shell
        self.store = store
        self.loader = loader or AssetLoader()
        self.rng = rng or random.Random()

        self.screen = Screen(*size)
        self.scheduler = FrameScheduler(self.screen.width, self.screen.height, clock)
        self.audio = AudioTracker(audio_backend)
        self.events = InputQueue()
        self.mapper = InputMapper()
        self.input = InputState()

        self.prefix = str(hash_code(config.name))
        self.state = GameState(muted=store.get_bool(self.mute_key))
        if self.state.muted:
            self.audio.suspend()

        self.load_status = LoadStatus.PENDING
        self.load_error: AssetLoadError | None = None
        self.bundle = AssetBundle()
        self.settings: Settings | None = None
        self.world: FroggerWorld | None = None
        self.frame: Frame | None = None
        self.draw_ops: list[DrawImage] = []

    @property
    def mute_key(self) -> str:
        return f"{self.prefix}muted"

    def init(self) -> None:
        """
        Validate the settings and stop any running loop.

        :raise ConfigError: If the configuration is unusable
        """
        self.scheduler.restart()
        self.settings = self.config.validate()
        self.overlay.reset()
        logger.debug(f"Initialised with {self.settings}")

    def load(self, on_progress: Callable[[int], None] | None = None) -> bool:
        """
        Validate, load assets, then create the world.

        :return: True when the game reached the ready state
        :rtype: bool

        :raise ConfigError: If the configuration is unusable
        """
        self.init()

        if self.state.current != GameStatus.LOADING:
            self.state.set_state(GameStatus.LOADING)
        self.load_status = LoadStatus.PENDING
        try:
            self.bundle = self.loader.load(build_manifest(self.config), on_progress)
        except AssetLoadError as e:
            logger.error(f"Asset loading failed: {e}")
            self.load_status = LoadStatus.FAILED
            self.load_error = e
            return False

        self.load_status = LoadStatus.LOADED
        self.load_error = None
        self.create()
        return True

    def create(self) -> None:
        self.world = create_world(self.screen, self.settings)
        self._reset_pointer()
        self.state.set_state(GameStatus.READY)
        self.scheduler.request_frame(self.tick)

    def reset(self) -> None:
        """
        Start over from the ready screen with a fresh world.
        """
        logger.debug("Resetting game")
        self.audio.stop_all()
        self.state.background_music_started = False
        self.init()
        if self.load_status == LoadStatus.LOADED:
            self.create()

    def resize(self, width: int, height: int) -> None:
        self.screen = Screen(width, height)
        self.scheduler.resize(width, height)
        if self.state.current != GameStatus.STOP:
            self.reset()

    def reconfigure(self, scope: str, key: str, value: Any) -> bool:
        """
        Apply a live configuration change and reload.

        An unusable change is logged and dropped; the running game is left
        untouched.
        """
        logger.info(f"Updating config {scope}.{key} = {value!r}")
        try:
            candidate = self.config.updated(scope, key, value)
            candidate.validate()
        except ConfigError as e:
            logger.error(f"Rejected config change: {e}")
            return False

        self.config = candidate
        self.audio.stop_all()
        self.state.background_music_started = False
        return self.load()

    def toggle_mute(self) -> None:
        self.store.set(self.mute_key, not self.store.get_bool(self.mute_key))
        self.state.muted = self.store.get_bool(self.mute_key)
        self.overlay.set_mute(self.state.muted)

        if self.state.muted:
            self.audio.suspend()
        else:
            self.audio.resume()

    def destroy(self) -> None:
        """
        Stop for good: no frame runs after this.
        """
        self.state.set_state(GameStatus.STOP)
        self.audio.stop_all()
        self.scheduler.cancel()

    def tick(self, frame: Frame) -> list[DrawImage]:
        """
        One update and draw pass.

        :return: Draw commands for the frame
        :rtype: list[DrawImage]
        """
        self.frame = frame
        self.draw_ops = []

        self.handle_events()
        self.draw_background()
        self.overlay.set_score(self.world.score)
        self.overlay.set_lives(self.world.lives)
        self.handle_game_logic()
        self.audio.update()

        if self.state.current == GameStatus.STOP:
            self.scheduler.cancel()
        elif not self.scheduler.pending:
            self.scheduler.request_frame(self.tick)

        return self.draw_ops

    def handle_events(self):
        """
        Drain queued input; clicks start, restart or mute the game.
        """
        clicks = self.mapper.drain(self.events, self.input, self.state.current)
        for click in clicks:
            self._on_click(click)

    def _on_click(self, click: ClickEvent):
        if click.target == BUTTON_TARGET:
            if self.state.current == GameStatus.READY:
                self.state.set_state(GameStatus.PLAY)
            elif self.state.current in (GameStatus.WIN, GameStatus.OVER):
                self.reset()
        elif click.target == MUTE_TARGET:
            self.toggle_mute()

    def draw_background(self):
        width = self.world.screen.width
        zones = self.world.zones
        self.draw_ops += [
            DrawImage("topImage", 0, zones.top.top, width, zones.top.height),
            DrawImage("middleImage", 0, zones.middle.top, width, zones.middle.height),
            DrawImage("bottomImage", 0, zones.bottom.top, width, zones.bottom.height),
        ]

    def handle_game_logic(self):
        """
        Handle the game logic
        """
        # Thresholds first, then whatever the current state shows
        if self.state.current != GameStatus.STOP:
            if self.world.wins < 1:
                self.state.set_state(GameStatus.WIN)
            if self.world.lives < 1:
                self.state.set_state(GameStatus.OVER)

        current = self.state.current
        if current == GameStatus.READY:
            self._show_ready()
        elif current == GameStatus.WIN:
            self._show_win()
        elif current == GameStatus.OVER:
            self._show_game_over()
        elif current == GameStatus.PLAY:
            if self.state.just_entered_from(GameStatus.READY):
                self._enter_play()
            self._play()

    def _show_ready(self):
        settings = self.config.settings
        if not self.overlay.banner_active:
            self.overlay.show_banner(settings["name"])
        if not self.overlay.button_active:
            self.overlay.show_button(settings["startText"])
        if not self.overlay.instructions_active:
            self.overlay.set_instructions(
                desktop=settings["instructionsDesktop"],
                mobile=settings["instructionsMobile"],
            )
        self.overlay.set_mute(self.state.muted)

    def _show_win(self):
        if not self.overlay.banner_active:
            self.overlay.show_banner(self.config.settings["winText"])
        if not self.overlay.button_active:
            self.overlay.show_button(self.config.settings["startText"])

        if self.state.just_entered_from(GameStatus.PLAY):
            logger.info(f"Player won with {self.world.score} points")
            self._playback("winSound")

    def _show_game_over(self):
        self.overlay.show_banner(self.config.settings["gameoverText"])
        if not self.overlay.button_active:
            self.overlay.show_button(self.config.settings["startText"])

        if self.state.just_entered_from(GameStatus.PLAY):
            logger.info(f"Game over with {self.world.score} points")
            self._playback("gameoverSound")
            self.shell.report_score(self.world.score)
            self.shell.set_view("setScore")

    def _enter_play(self):
        self.overlay.show_stats()
        if self.overlay.button_active:
            self.overlay.hide_button()
        if self.overlay.banner_active:
            self.overlay.hide_banner()
        if self.overlay.instructions_active:
            self.overlay.hide_instructions()

        if not self.state.muted and not self.state.background_music_started:
            self.state.background_music_started = True
            self._playback("backgroundMusic", loop=True)

    def _play(self):
        world = self.world
        player = world.player
        scale = self.frame.scale

        for enemy_id, enemy in world.enemies.items():
            if enemy.x > world.screen.width:
                world.enemies.remove(enemy_id)
                continue
            enemy.move(self.settings.enemy_min_speed, 0, scale)
            self.draw_ops.append(enemy.draw())

        if self.frame.count % self.settings.enemy_spawn_rate == 0:
            self._spawn_enemy()

        if self.frame.count % DWELL_INTERVAL == 0:
            if world.zones.middle.contains(player.y):
                world.score += DWELL_POINTS

        if player.y + player.height - GOAL_MARGIN <= world.zones.middle.top:
            self._reset_pointer(reset_player=True)
            self._playback("scoreSound")
            world.wins -= 1
            world.score += GOAL_POINTS
            logger.debug(f"Goal reached, {world.wins} to go")

        dx, dy = self.mapper.direction(self.input, player)
        player.move(dx, dy, scale)
        self.draw_ops.append(player.draw())

        if player.collisions_with(world.enemies):
            self._reset_pointer(reset_player=True)
            self._playback("dieSound")
            world.lives -= 1
            logger.debug(f"Hit by an enemy, {world.lives} lives left")

    def _spawn_enemy(self):
        world = self.world
        enemy = Enemy.spawn(
            world.zones.middle.top,
            world.zones.middle.bottom,
            world.dims.enemy_width,
            world.dims.enemy_height,
            self.settings.enemy_max_speed,
            rng=self.rng,
        )
        world.enemies.insert(enemy)

    def _reset_pointer(self, reset_player: bool = False):
        player = self.world.player
        if reset_player:
            player.set_position(*self.world.player_start)
        self.input.pointer_target = Point(player.cx, player.cy)

    def _playback(self, key: str, loop: bool = False):
        self.audio.play(key, self.bundle.sound.get(key), loop=loop)
