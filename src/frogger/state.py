"""
Game state machine.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from frogger.utils import logger


class GameStatus(str, Enum):
    LOADING = "loading"
    READY = "ready"
    PLAY = "play"
    WIN = "win"
    OVER = "over"
    STOP = "stop"


@dataclass
class GameState:
    """
    Current and previous status plus the audio flags.

    `prev` is rewritten on every `set_state` call, including calls that keep
    the same status, so "just entered" checks hold for one tick only.
    """

    current: GameStatus = GameStatus.LOADING
    prev: GameStatus | None = None
    muted: bool = False
    background_music_started: bool = False

    def set_state(self, status: GameStatus) -> None:
        if status != self.current:
            logger.debug(f"State {self.current.value} -> {status.value}")
        self.prev = self.current
        self.current = GameStatus(status)

    def just_entered_from(self, status: GameStatus) -> bool:
        return self.prev == status
