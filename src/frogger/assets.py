"""
Asset loading.

A manifest lists what the game needs; the loader returns a bundle keyed by
asset kind and name, or raises `AssetLoadError` naming the first asset it
could not load.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Callable

import pygame

from frogger.config import GameConfig
from frogger.utils import load_image, logger, resolve_asset_path

FONT_SIZE = 24

_HEX_COLOR = re.compile(r"^#[0-9a-fA-F]{6}$")


class AssetKind(str, Enum):
    IMAGE = "image"
    SOUND = "sound"
    FONT = "font"


class LoadStatus(str, Enum):
    PENDING = "pending"
    LOADED = "loaded"
    FAILED = "failed"


class AssetLoadError(RuntimeError):
    """
    Raised when an asset in the manifest cannot be loaded.
    """

    def __init__(self, kind: AssetKind, key: str, source: Any, reason: str):
        super().__init__(f"Failed to load {kind.value} '{key}' from {source!r}: {reason}")
        self.kind = kind
        self.key = key
        self.source = source


@dataclass(frozen=True)
class AssetRequest:
    kind: AssetKind
    key: str
    source: Any


@dataclass
class AssetBundle:
    image: dict[str, Any] = field(default_factory=dict)
    sound: dict[str, Any] = field(default_factory=dict)
    font: dict[str, Any] = field(default_factory=dict)

    def add(self, kind: AssetKind, key: str, value: Any) -> None:
        getattr(self, kind.value)[key] = value


def build_manifest(config: GameConfig) -> list[AssetRequest]:
    """
    Everything the game draws or plays, taken from the configuration.
    """
    manifest = [
        AssetRequest(AssetKind.IMAGE, key, config.images.get(key))
        for key in (
            "topImage",
            "middleImage",
            "bottomImage",
            "characterImage",
            "enemyImage",
        )
    ]
    manifest += [
        AssetRequest(AssetKind.SOUND, key, config.sounds.get(key))
        for key in (
            "backgroundMusic",
            "winSound",
            "gameoverSound",
            "scoreSound",
            "dieSound",
        )
    ]
    manifest.append(
        AssetRequest(AssetKind.FONT, "gameFont", config.settings.get("fontFamily"))
    )
    return manifest


def parse_color(value: str) -> tuple[int, int, int]:
    value = value.lstrip("#")
    return (int(value[0:2], 16), int(value[2:4], 16), int(value[4:6], 16))


class AssetLoader:
    """
    Loads images, sounds and fonts with pygame.
    """

    def load(
        self,
        manifest: list[AssetRequest],
        on_progress: Callable[[int], None] | None = None,
    ) -> AssetBundle:
        """
        Load every asset in the manifest.

        :param manifest: Assets to load
        :type manifest: list[AssetRequest]

        :param on_progress: Called with the percentage done after each asset
        :type on_progress: Callable[[int], None] | None

        :return: AssetBundle
        :rtype: AssetBundle

        :raise AssetLoadError: If any asset cannot be loaded
        """
        bundle = AssetBundle()
        total = len(manifest)

        for done, request in enumerate(manifest, start=1):
            logger.debug(f"Loading {request.kind.value} '{request.key}'")
            try:
                value = self._load_one(request)
            except (pygame.error, OSError, ValueError) as e:
                raise AssetLoadError(
                    request.kind, request.key, request.source, str(e)
                ) from e

            bundle.add(request.kind, request.key, value)
            if on_progress is not None:
                on_progress(int(done * 100 / total))

        return bundle

    def _load_one(self, request: AssetRequest) -> Any:
        if request.kind == AssetKind.IMAGE:
            return self._load_image(request.source)
        if request.kind == AssetKind.SOUND:
            return self._load_sound(request.source)
        return self._load_font(request.source)

    def _load_image(self, source: Any) -> pygame.Surface:
        if not source:
            raise ValueError("no image source given")

        if isinstance(source, str) and _HEX_COLOR.match(source):
            surface = pygame.Surface((1, 1))
            surface.fill(parse_color(source))
            return surface

        return load_image(resolve_asset_path(source), transparent=True)

    def _load_sound(self, source: Any) -> Any:
        # no source means the slot stays silent
        if not source:
            return None

        if pygame.mixer.get_init() is None:
            logger.warning(f"Mixer not initialised, '{source}' will stay silent")
            return None

        return pygame.mixer.Sound(str(resolve_asset_path(source)))

    def _load_font(self, source: Any) -> pygame.font.Font:
        if not pygame.font.get_init():
            pygame.font.init()

        if source and Path(str(source)).suffix.lower() in (".ttf", ".otf"):
            return pygame.font.Font(str(resolve_asset_path(source)), FONT_SIZE)

        return pygame.font.SysFont(source or None, FONT_SIZE)
