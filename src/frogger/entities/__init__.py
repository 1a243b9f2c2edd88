"""
Frogger entities
"""

from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Iterable, Iterator

from frogger.render import DrawImage


@dataclass
class Entity:
    """
    Axis-aligned sprite with a position, a size and a speed.
    """

    x: float
    y: float
    width: float
    height: float
    speed: float
    image: str

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(
                f"entity size must be positive, got {self.width}x{self.height}"
            )

    @property
    def cx(self) -> float:
        return self.x + self.width / 2

    @property
    def cy(self) -> float:
        return self.y + self.height / 2

    def set_position(self, x: float, y: float) -> None:
        self.x = x
        self.y = y

    def move(self, dx: float, dy: float, scale: float) -> None:
        """
        Move the entity

        :param dx: Horizontal direction, in [-1, 1]
        :type dx: float

        :param dy: Vertical direction, in [-1, 1]
        :type dy: float

        :param scale: Per-frame time scale
        :type scale: float
        """
        self.x += dx * self.speed * scale
        self.y += dy * self.speed * scale

    def draw(self) -> DrawImage:
        return DrawImage(self.image, self.x, self.y, self.width, self.height)

    def collides_with(self, other: "Entity") -> bool:
        """
        AABB overlap test. Boxes sharing only an edge do not collide.
        """
        return (
            abs(self.cx - other.cx) < (self.width + other.width) / 2
            and abs(self.cy - other.cy) < (self.height + other.height) / 2
        )

    def collisions_with(self, others: Iterable["Entity"]) -> bool:
        """
        True when this entity overlaps any member of `others`.
        """
        return any(self.collides_with(other) for other in others)


@dataclass
class Player(Entity):
    """
    Player entity
    """


@dataclass
class Enemy(Entity):
    """
    Enemy entity
    """

    @classmethod
    def spawn(
        cls,
        top_bound: float,
        bottom_bound: float,
        width: float,
        height: float,
        max_speed: float,
        image: str = "enemyImage",
        rng: random.Random | None = None,
    ) -> "Enemy":  # pylint: disable=too-many-arguments
        """
        Create an enemy just off the left edge, inside the given band.

        The speed is rolled once, uniformly in ``[1, max_speed]``.
        """
        rng = rng or random
        lowest = top_bound
        highest = max(top_bound, bottom_bound - height)
        speed = rng.uniform(1, max_speed) if max_speed >= 1 else max_speed

        return cls(
            x=-width,
            y=rng.uniform(lowest, highest),
            width=width,
            height=height,
            speed=speed,
            image=image,
        )


@dataclass(frozen=True)
class EnemyId:
    """
    Stable handle into an EnemyArena slot.
    """

    index: int
    generation: int


@dataclass
class EnemyArena:
    """
    Enemy storage addressed by (index, generation).

    Freed slots go on a free list and are reused; reusing a slot bumps its
    generation so ids handed out earlier no longer resolve.
    """

    _slots: list[Enemy | None] = field(default_factory=list)
    _generations: list[int] = field(default_factory=list)
    _free: list[int] = field(default_factory=list)

    def insert(self, enemy: Enemy) -> EnemyId:
        if self._free:
            index = self._free.pop()
            self._slots[index] = enemy
        else:
            index = len(self._slots)
            self._slots.append(enemy)
            self._generations.append(0)
        return EnemyId(index, self._generations[index])

    def get(self, enemy_id: EnemyId) -> Enemy | None:
        if not self._is_live(enemy_id):
            return None
        return self._slots[enemy_id.index]

    def remove(self, enemy_id: EnemyId) -> Enemy | None:
        """
        Free the slot behind `enemy_id`. Stale ids are ignored.
        """
        if not self._is_live(enemy_id):
            return None
        enemy = self._slots[enemy_id.index]
        self._slots[enemy_id.index] = None
        self._generations[enemy_id.index] += 1
        self._free.append(enemy_id.index)
        return enemy

    def clear(self) -> None:
        for index, enemy in enumerate(self._slots):
            if enemy is not None:
                self.remove(EnemyId(index, self._generations[index]))

    def items(self) -> list[tuple[EnemyId, Enemy]]:
        return [
            (EnemyId(index, self._generations[index]), enemy)
            for index, enemy in enumerate(self._slots)
            if enemy is not None
        ]

    def _is_live(self, enemy_id: EnemyId) -> bool:
        return (
            0 <= enemy_id.index < len(self._slots)
            and self._generations[enemy_id.index] == enemy_id.generation
            and self._slots[enemy_id.index] is not None
        )

    def __iter__(self) -> Iterator[Enemy]:
        return (enemy for enemy in self._slots if enemy is not None)

    def __len__(self) -> int:
        return len(self._slots) - len(self._free)
