"""
Main application for Frogger using pygame.
"""

from __future__ import annotations

import os
import sys

import pygame

from frogger.assets import parse_color
from frogger.audio import PygameAudioBackend
from frogger.config import ConfigError, GameConfig, load_config
from frogger.constants import FPS, WINDOW_SIZE
from frogger.input import ClickEvent, KeyEvent, PointerEvent
from frogger.overlay import PygameOverlay
from frogger.render import PygameRenderer
from frogger.scenes.frogger import Game
from frogger.shell import LoggingShell
from frogger.state import GameStatus
from frogger.storage import SettingsStore
from frogger.utils import configure_logging, logger, set_screen

KEY_NAMES = {
    pygame.K_UP: "up",
    pygame.K_DOWN: "down",
    pygame.K_LEFT: "left",
    pygame.K_RIGHT: "right",
}


def pointer_position(event, size: tuple[int, int]) -> tuple[float, float] | None:
    """
    Screen position of a pointer release, None for events to ignore.

    SDL mirrors every FINGERUP as a MOUSEBUTTONUP flagged `touch`; only the
    finger event is kept so a tap counts once.
    """
    if event.type == pygame.FINGERUP:
        width, height = size
        return (event.x * width, event.y * height)
    if getattr(event, "touch", False):
        return None
    return event.pos


class FroggerApp:
    """
    Window, event pump and host loop around a `Game`.
    """

    _clock = pygame.time.Clock()

    def __init__(self, config: GameConfig):
        pygame.init()
        try:
            pygame.mixer.init()
        except pygame.error as e:
            logger.warning(f"Audio unavailable: {e}")

        w_width, w_height = WINDOW_SIZE
        self.config = config
        self.screen = set_screen(config.name, w_width, w_height)
        self.background = parse_color(config.colors["backgroundColor"])
        self.overlay = PygameOverlay(config.colors)

        self.game = Game(
            config=config,
            overlay=self.overlay,
            shell=LoggingShell(),
            audio_backend=PygameAudioBackend(),
            store=SettingsStore(),
            size=(w_width, w_height),
            clock=pygame.time.get_ticks,
        )
        self.renderer: PygameRenderer | None = None

    def _show_progress(self, percent: int) -> None:
        logger.debug(f"Loading {percent}%")
        self.screen.fill(self.background)
        font = pygame.font.SysFont(None, 32)
        text = font.render(f"{percent}%", True, (255, 255, 255))
        self.screen.blit(text, text.get_rect(center=self.screen.get_rect().center))
        pygame.display.flip()

    def load(self) -> bool:
        """
        :raise ConfigError: If the configuration is unusable
        """
        if not self.game.load(on_progress=self._show_progress):
            return False

        self.renderer = PygameRenderer(self.screen, self.game.bundle.image)
        self.overlay.set_font(self.game.bundle.font["gameFont"])
        return True

    def handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logger.debug("Quitting the game")
                self.game.destroy()
            elif event.type in (pygame.KEYDOWN, pygame.KEYUP):
                if event.key == pygame.K_ESCAPE:
                    self.game.destroy()
                elif event.key in KEY_NAMES:
                    self.game.events.push(
                        KeyEvent(KEY_NAMES[event.key], event.type == pygame.KEYDOWN)
                    )
            elif event.type in (pygame.MOUSEBUTTONUP, pygame.FINGERUP):
                pos = pointer_position(event, self.screen.get_size())
                if pos is not None:
                    self._on_pointer(pos)
            elif event.type == pygame.VIDEORESIZE:
                self.screen = set_screen(self.config.name, event.w, event.h)
                if self.renderer is not None:
                    self.renderer.surface = self.screen
                self.game.resize(event.w, event.h)

    def _on_pointer(self, pos: tuple[float, float]) -> None:
        target = self.overlay.hit_test((int(pos[0]), int(pos[1])))
        if target is not None:
            self.game.events.push(ClickEvent(target))
        self.game.events.push(PointerEvent(pos[0], pos[1], target))

    def draw_stuff(self) -> None:
        self.screen.fill(self.background)
        if self.renderer is not None:
            self.renderer.draw(self.game.draw_ops)
        self.overlay.draw(self.screen)
        pygame.display.flip()

    def run(self) -> int:
        """
        Run the game until the window is closed.
        """
        logger.debug("Running the game")

        if not self.load():
            logger.error(f"Could not start: {self.game.load_error}")
            pygame.quit()
            return 1

        while self.game.state.current != GameStatus.STOP:
            self._clock.tick(FPS)
            self.handle_events()
            if self.game.scheduler.dispatch():
                self.draw_stuff()

        pygame.quit()
        return 0


def run(config_path: str | None = None) -> int:
    """
    Main entry point for Frogger.

    - Reads the JSON config given on the command line, or the defaults.
    - Validates it before opening the game loop.
    - Runs the window until it is closed.
    """
    configure_logging(os.environ.get("FROGGER_LOG_LEVEL", "INFO"))

    if config_path is None and len(sys.argv) > 1:
        config_path = sys.argv[1]

    try:
        config = load_config(config_path)
        config.validate()
    except ConfigError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    logger.info(f"Starting {config.name}...")
    logger.info(config.to_dict())
    app = FroggerApp(config)
    return app.run()


if __name__ == "__main__":
    sys.exit(run())
