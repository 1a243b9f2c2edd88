"""
Game configuration.

The configuration is split into the same four scopes a live editor pushes
changes into: ``settings``, ``images``, ``sounds`` and ``colors``. Numeric
settings are coerced to integers up front so a bad value is reported before
the game loop starts instead of turning into a broken parameter mid-game.
"""

from __future__ import annotations

import copy
import json
import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from frogger.utils import logger

SCOPES = ("settings", "images", "sounds", "colors")

NUMERIC_SETTINGS = (
    "playerSpeed",
    "enemyMinSpeed",
    "enemyMaxSpeed",
    "enemySpawnRate",
    "lives",
    "wins",
)

DEFAULT_CONFIG: dict[str, dict[str, Any]] = {
    "settings": {
        "name": "Frogger",
        "playerSpeed": 8,
        "enemyMinSpeed": 2,
        "enemyMaxSpeed": 5,
        "enemySpawnRate": 50,
        "lives": 3,
        "wins": 3,
        "startText": "Start",
        "winText": "You Win!",
        "gameoverText": "Game Over",
        "instructionsDesktop": "Use the arrow keys to cross the road",
        "instructionsMobile": "Tap where you want to go",
        "fontFamily": "arial",
    },
    # a "#rrggbb" source is turned into a solid block by the asset loader
    "images": {
        "topImage": "#3a7d44",
        "middleImage": "#3d3d3d",
        "bottomImage": "#3a7d44",
        "characterImage": "#7ed957",
        "enemyImage": "#e4572e",
    },
    # an empty source loads as silence
    "sounds": {
        "backgroundMusic": "",
        "winSound": "",
        "gameoverSound": "",
        "scoreSound": "",
        "dieSound": "",
    },
    "colors": {
        "textColor": "#ffffff",
        "backgroundColor": "#1e1e1e",
        "primaryColor": "#f2c14e",
    },
}

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class ConfigError(ValueError):
    """
    Raised when a configuration value cannot be used by the game.
    """


def parse_int(name: str, value: Any) -> int:
    """
    Coerce a configuration value to an integer the way ``parseInt`` does.

    Integers pass through, floats are truncated and strings are read up to
    their first non-digit character.

    :param name: Setting name, for the error message
    :type name: str

    :param value: Raw configuration value
    :type value: Any

    :return: The coerced integer
    :rtype: int

    :raise ConfigError: If the value has no leading integer
    """
    if isinstance(value, bool):
        raise ConfigError(f"{name} must be a number, got {value!r}")

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        if math.isnan(value) or math.isinf(value):
            raise ConfigError(f"{name} must be a finite number, got {value!r}")
        return int(value)

    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        if match:
            return int(match.group(1))

    raise ConfigError(f"{name} must be a number, got {value!r}")


@dataclass(frozen=True)
class Settings:
    """
    Validated numeric game parameters
    """

    player_speed: int
    enemy_min_speed: int
    enemy_max_speed: int
    enemy_spawn_rate: int
    lives: int
    wins: int

    @classmethod
    def from_config(cls, settings: dict[str, Any]) -> "Settings":
        """
        Build the numeric settings from the ``settings`` scope.

        :raise ConfigError: If any numeric setting is malformed
        """
        values = {name: parse_int(name, settings.get(name)) for name in NUMERIC_SETTINGS}

        if values["enemySpawnRate"] < 1:
            raise ConfigError(
                f"enemySpawnRate must be at least 1, got {values['enemySpawnRate']}"
            )

        return cls(
            player_speed=values["playerSpeed"],
            enemy_min_speed=values["enemyMinSpeed"],
            enemy_max_speed=values["enemyMaxSpeed"],
            enemy_spawn_rate=values["enemySpawnRate"],
            lives=values["lives"],
            wins=values["wins"],
        )


@dataclass
class GameConfig:
    """
    Game configuration, one dictionary per scope.
    """

    settings: dict[str, Any] = field(default_factory=dict)
    images: dict[str, Any] = field(default_factory=dict)
    sounds: dict[str, Any] = field(default_factory=dict)
    colors: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None = None) -> "GameConfig":
        """
        Build a configuration, filling missing keys from the defaults.

        :raise ConfigError: If a scope is not a mapping
        """
        data = data or {}
        scopes: dict[str, dict[str, Any]] = {}
        for scope in SCOPES:
            overrides = data.get(scope, {})
            if not isinstance(overrides, dict):
                raise ConfigError(f"config scope '{scope}' must be a mapping")
            scopes[scope] = {**DEFAULT_CONFIG[scope], **overrides}

        unknown = set(data) - set(SCOPES)
        if unknown:
            logger.warning(f"Ignoring unknown config scopes: {sorted(unknown)}")

        return cls(**scopes)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {scope: dict(getattr(self, scope)) for scope in SCOPES}

    def updated(self, scope: str, key: str, value: Any) -> "GameConfig":
        """
        Return a copy with one value changed.

        :raise ConfigError: If the scope is unknown
        """
        if scope not in SCOPES:
            raise ConfigError(f"unknown config scope '{scope}'")
        data = copy.deepcopy(self.to_dict())
        data[scope][key] = value
        return GameConfig.from_dict(data)

    @property
    def name(self) -> str:
        return str(self.settings.get("name", ""))

    def validate(self) -> Settings:
        """
        Check the configuration and return the numeric settings.

        :raise ConfigError: If the configuration is unusable
        """
        return Settings.from_config(self.settings)


def load_config(path: str | Path | None = None) -> GameConfig:
    """
    Load a configuration from a JSON file, or the defaults when no path is given.

    :raise ConfigError: If the file cannot be read or parsed
    """
    if path is None:
        return GameConfig.from_dict()

    try:
        with open(path, encoding="utf-8") as handle:
            data = json.load(handle)
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to read config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")

    logger.debug(f"Loaded config from {path}")
    return GameConfig.from_dict(data)
