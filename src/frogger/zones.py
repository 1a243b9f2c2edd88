"""
Vertical partition of the play field.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Band:
    top: float
    bottom: float

    @property
    def height(self) -> float:
        return self.bottom - self.top

    def contains(self, y: float) -> bool:
        """Strictly inside the band."""
        return self.top < y < self.bottom


@dataclass(frozen=True)
class Zones:
    """
    Top (goal), middle (traffic) and bottom (start) bands.
    """

    top: Band
    middle: Band
    bottom: Band


def compute_zones(height: float, safe_zone_height: float) -> Zones:
    """
    Split the screen height into three contiguous bands.

    :param height: Screen height in pixels
    :type height: float

    :param safe_zone_height: Height of the top and bottom bands
    :type safe_zone_height: float

    :return: Zones
    :rtype: Zones

    :raise ValueError: If the safe zones do not fit on screen
    """
    if safe_zone_height < 0 or 2 * safe_zone_height > height:
        raise ValueError(
            f"safe zone of {safe_zone_height} does not fit in height {height}"
        )

    return Zones(
        top=Band(0, safe_zone_height),
        middle=Band(safe_zone_height, height - safe_zone_height),
        bottom=Band(height - safe_zone_height, height),
    )
