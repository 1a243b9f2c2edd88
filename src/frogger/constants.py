"""
Constants for the game.
"""

from __future__ import annotations

FPS = 60
WINDOW_SIZE = (800, 600)

# interval assumed for the very first frame, before any rate is measured
FIRST_FRAME_MS = 1000 / FPS

SCREEN_SCALE_FACTOR = 0.003
FRAME_SCALE_FACTOR = 0.01

PLAYER_SIZE = 40
PLAYER_MAX_SIZE = 120
ENEMY_WIDTH = 60
ENEMY_MAX_WIDTH = 180
ENEMY_HEIGHT = 40
ENEMY_MAX_HEIGHT = 120

SAFE_ZONE_RATIO = 1.25

# the goal counts once the player's feet are this far past the middle band
GOAL_MARGIN = 20
GOAL_POINTS = 100
DWELL_POINTS = 1
DWELL_INTERVAL = 30

SETTINGS_DIR_NAME = ".frogger"
SETTINGS_FILE_NAME = "settings.json"
