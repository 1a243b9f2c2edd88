"""
Frogger utils
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import pygame

logger = logging.getLogger("frogger")


def configure_logging(level: str | int = logging.INFO) -> None:
    """
    Configure the root logging handler.

    :param level: Logging level name or number
    :type level: str | int
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def find_assets_root() -> Path:
    """Return the path to the `assets` directory.

    Works in:
    - dev: repo/assets (when running from source tree)
    - pip install: site-packages/assets
    - PyInstaller onefile: _MEIPASS/assets (if bundled with --add-data)

    :raises FileNotFoundError: If the assets directory cannot be found.
    """
    # 1) PyInstaller onefile support
    # pylint: disable=protected-access
    if hasattr(sys, "_MEIPASS"):
        base = Path(sys._MEIPASS)
        candidate = base / "assets"
        if candidate.is_dir():
            return candidate
    # pylint: enable=protected-access

    # 2) Dev / pip-installed: walk upwards and look for an `assets` folder
    here = Path(__file__).resolve()
    for parent in here.parents:
        candidate = parent / "assets"
        if candidate.is_dir():
            return candidate

    raise FileNotFoundError("Could not locate 'assets' directory.")


def resolve_asset_path(source: str | Path) -> Path:
    """
    Resolve an asset path.

    Absolute paths and paths that exist relative to the working directory
    are used as given; anything else is looked up under the assets root.

    :raises FileNotFoundError: If the path needs the assets root and there
        is none.
    """
    path = Path(source)
    if path.is_absolute() or path.exists():
        return path
    return find_assets_root() / path


def hash_code(text: str) -> int:
    """
    32-bit string hash, used to namespace persisted settings per game name.

    Matches Java's ``String.hashCode`` over UTF-16 code units, so keys
    stay stable across runs.
    """
    data = text.encode("utf-16-le", "surrogatepass")
    value = 0
    for i in range(0, len(data), 2):
        unit = int.from_bytes(data[i : i + 2], "little")
        value = (value * 31 + unit) & 0xFFFFFFFF
    if value & 0x80000000:
        value -= 0x100000000
    return value


def load_image(filename: str | Path, transparent: bool = False) -> pygame.Surface:
    """
    Load an image

    :param filename: Name of the file
    :type filename: str | Path

    :param transparent: Transparency flag
    :type transparent: bool

    :return: pygame.Surface

    :raise pygame.error: If the image cannot be read
    """
    image = pygame.image.load(str(filename))

    if pygame.display.get_surface() is None:
        return image

    if transparent:
        return image.convert_alpha()
    return image.convert()


def set_screen(caption: str, width: int, height: int) -> pygame.Surface:
    """
    Set the screen

    :param caption: Caption of the screen
    :type caption: str

    :param width: Width of the screen
    :type width: int

    :param height: Height of the screen
    :type height: int

    :return: pygame.Surface
    """
    screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
    pygame.display.set_caption(caption)

    return screen
