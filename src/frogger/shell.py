"""
Host shell: where the final score goes when a game ends.
"""

from __future__ import annotations

from typing import Protocol

from frogger.utils import logger


class Shell(Protocol):
    def report_score(self, score: int) -> None:
        ...

    def set_view(self, view: str) -> None:
        ...


class LoggingShell:
    """
    Shell for the standalone window: records the last score and logs it.
    """

    def __init__(self):
        self.last_score: int | None = None
        self.view = "game"

    def report_score(self, score: int) -> None:
        self.last_score = score
        logger.info(f"Final score: {score}")

    def set_view(self, view: str) -> None:
        self.view = view
        logger.debug(f"View -> {view}")
