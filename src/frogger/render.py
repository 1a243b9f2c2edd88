"""
Draw commands and the pygame renderer that paints them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

import pygame

from frogger.utils import logger


@dataclass(frozen=True)
class DrawImage:
    """
    Paint the image stored under `key` stretched to the given box.
    """

    key: str
    x: float
    y: float
    width: float
    height: float


class PygameRenderer:
    """
    Paints draw commands on a pygame surface.

    Images are looked up by key in the loaded bundle; a missing image is
    reported and its command skipped for the frame.
    """

    def __init__(self, surface: pygame.Surface, images: dict[str, Any]):
        self.surface = surface
        self.images = images
        self._scaled: dict[tuple[str, int, int], pygame.Surface] = {}

    def clear(self, color: Any = (0, 0, 0)) -> None:
        self.surface.fill(color)

    def draw(self, ops: Iterable[DrawImage]) -> None:
        for op in ops:
            self._draw_image(op)

    def _draw_image(self, op: DrawImage) -> None:
        image = self.images.get(op.key)
        if image is None:
            logger.error(f"Missing image '{op.key}', skipping draw")
            return

        size = (max(1, int(op.width)), max(1, int(op.height)))
        cache_key = (op.key, *size)
        scaled = self._scaled.get(cache_key)
        if scaled is None:
            scaled = pygame.transform.scale(image, size)
            self._scaled[cache_key] = scaled

        self.surface.blit(scaled, (int(op.x), int(op.y)))
