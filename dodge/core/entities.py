"""
Entities
========

Player circle and sliding square obstacles.

Both are plain data with no reference to any rendering host. Coordinates
are in surface pixels with the origin at the top-left corner.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass
class Entity:
    """Shared shape: position, size and color tag."""
    x: float
    y: float
    size: float
    color: Tuple[int, int, int]

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)


class Player(Entity):
    """
    Touch-controlled circle.

    ``(x, y)`` is the circle center and ``size`` is the radius, which never
    changes after creation.
    """

    def __init__(self, x: float, y: float, radius: float, color: Tuple[int, int, int]):
        if radius <= 0:
            raise ValueError(f"Player radius must be positive, got {radius}")
        super().__init__(x=x, y=y, size=radius, color=color)

    @property
    def radius(self) -> float:
        return self.size

    def set_target_position(self, x: float, y: float) -> None:
        """Move the player to (x, y). No clamping: the circle may leave the screen."""
        self.x = x
        self.y = y

    def collides_with(self, obstacle: Obstacle) -> bool:
        """
        Circle vs axis-aligned square test.

        Clamps the center into the square to find the closest point, then
        compares squared distances. Touching exactly at the radius is not a hit.
        """
        closest_x = min(max(self.x, obstacle.left), obstacle.right)
        closest_y = min(max(self.y, obstacle.top), obstacle.bottom)

        dx = self.x - closest_x
        dy = self.y - closest_y
        return dx * dx + dy * dy < self.radius * self.radius


class Obstacle(Entity):
    """
    Square sliding from right to left at a constant speed.

    ``(x, y)`` is the top-left corner and ``size`` the side length.
    """

    def __init__(
        self,
        x: float,
        y: float,
        size: float,
        color: Tuple[int, int, int],
        speed: int
    ):
        if size <= 0:
            raise ValueError(f"Obstacle size must be positive, got {size}")
        if speed <= 0:
            raise ValueError(f"Obstacle speed must be positive, got {speed}")
        super().__init__(x=x, y=y, size=size, color=color)
        self._speed = speed

    @property
    def speed(self) -> int:
        """Pixels moved per tick, fixed at creation."""
        return self._speed

    @property
    def left(self) -> float:
        return self.x

    @property
    def top(self) -> float:
        return self.y

    @property
    def right(self) -> float:
        return self.x + self.size

    @property
    def bottom(self) -> float:
        return self.y + self.size

    @property
    def is_expired(self) -> bool:
        """True once the right edge has passed the left edge of the playfield."""
        return self.x + self.size < 0

    def advance(self) -> None:
        self.x -= self._speed

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Obstacle):
            return NotImplemented
        return super().__eq__(other) and self._speed == other._speed

    def __repr__(self) -> str:
        return (
            f"Obstacle(x={self.x}, y={self.y}, size={self.size}, speed={self._speed})"
        )
