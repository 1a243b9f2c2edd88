"""
Overlay: banner, start button, instructions, stats and the mute toggle,
drawn on top of the play field.
"""

from __future__ import annotations

from typing import Any, Protocol

import pygame

from frogger.assets import parse_color

BUTTON_TARGET = "button"
MUTE_TARGET = "mute"


class Overlay(Protocol):
    banner_active: bool
    button_active: bool
    instructions_active: bool

    def show_banner(self, text: str) -> None:
        ...

    def hide_banner(self) -> None:
        ...

    def show_button(self, text: str) -> None:
        ...

    def hide_button(self) -> None:
        ...

    def set_instructions(self, desktop: str, mobile: str) -> None:
        ...

    def hide_instructions(self) -> None:
        ...

    def show_stats(self) -> None:
        ...

    def set_score(self, score: int) -> None:
        ...

    def set_lives(self, lives: int) -> None:
        ...

    def set_mute(self, muted: bool) -> None:
        ...

    def reset(self) -> None:
        ...


class PygameOverlay:  # pylint: disable=too-many-instance-attributes
    """
    Overlay rendered with pygame fonts. Keeps its own visibility flags.
    """

    def __init__(self, colors: dict[str, Any] | None = None):
        colors = colors or {}
        self.text_color = parse_color(colors.get("textColor", "#ffffff"))
        self.primary_color = parse_color(colors.get("primaryColor", "#f2c14e"))
        self.font: pygame.font.Font | None = None

        self.banner_active = False
        self.button_active = False
        self.instructions_active = False
        self.stats_active = False

        self.banner_text = ""
        self.button_text = ""
        self.instructions = ""
        self.score = 0
        self.lives = 0
        self.muted = False

        self._button_rect: pygame.Rect | None = None
        self._mute_rect: pygame.Rect | None = None

    def set_font(self, font: pygame.font.Font) -> None:
        self.font = font

    def reset(self) -> None:
        self.banner_active = False
        self.button_active = False
        self.instructions_active = False
        self.stats_active = False

    def show_banner(self, text: str) -> None:
        self.banner_text = text
        self.banner_active = True

    def hide_banner(self) -> None:
        self.banner_active = False

    def show_button(self, text: str) -> None:
        self.button_text = text
        self.button_active = True

    def hide_button(self) -> None:
        self.button_active = False

    def set_instructions(self, desktop: str, mobile: str) -> None:
        self.instructions = desktop
        self.instructions_active = True

    def hide_instructions(self) -> None:
        self.instructions_active = False

    def show_stats(self) -> None:
        self.stats_active = True

    def set_score(self, score: int) -> None:
        self.score = score

    def set_lives(self, lives: int) -> None:
        self.lives = lives

    def set_mute(self, muted: bool) -> None:
        self.muted = muted

    def hit_test(self, pos: tuple[int, int]) -> str | None:
        """
        Name of the control under `pos`, if any.
        """
        if self._mute_rect is not None and self._mute_rect.collidepoint(pos):
            return MUTE_TARGET
        if (
            self.button_active
            and self._button_rect is not None
            and self._button_rect.collidepoint(pos)
        ):
            return BUTTON_TARGET
        return None

    def draw(self, surface: pygame.Surface) -> None:
        if self.font is None:
            return

        width, height = surface.get_size()

        if self.stats_active:
            stats = self.font.render(
                f"Score: {self.score}   Lives: {self.lives}", True, self.text_color
            )
            surface.blit(stats, (10, 10))

        mute = self.font.render(
            "Sound: off" if self.muted else "Sound: on", True, self.text_color
        )
        self._mute_rect = mute.get_rect(topright=(width - 10, 10))
        surface.blit(mute, self._mute_rect)

        if self.banner_active:
            banner = self.font.render(self.banner_text, True, self.primary_color)
            surface.blit(banner, banner.get_rect(center=(width / 2, height / 3)))

        if self.button_active:
            label = self.font.render(self.button_text, True, self.text_color)
            self._button_rect = label.get_rect(center=(width / 2, height / 2)).inflate(
                24, 12
            )
            pygame.draw.rect(surface, self.primary_color, self._button_rect, width=2)
            surface.blit(label, label.get_rect(center=self._button_rect.center))
        else:
            self._button_rect = None

        if self.instructions_active:
            text = self.font.render(self.instructions, True, self.text_color)
            surface.blit(text, text.get_rect(center=(width / 2, height * 2 / 3)))
