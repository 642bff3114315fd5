"""
State Snapshot
==============

Immutable copy of the world handed to renderers each frame, plus a
fixed-layout numpy view of the obstacles for tools and tests.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

import numpy as np

if TYPE_CHECKING:
    from dodge.core.entities import Obstacle
    from dodge.core.world import World


@dataclass(frozen=True)
class PlayerView:
    """Read-only player state."""
    x: float
    y: float
    radius: float
    color: Tuple[int, int, int]


@dataclass(frozen=True)
class ObstacleView:
    """Read-only obstacle state."""
    x: float
    y: float
    size: float
    speed: int
    color: Tuple[int, int, int]

    @property
    def rect(self) -> Tuple[float, float, float, float]:
        """(left, top, right, bottom)."""
        return (self.x, self.y, self.x + self.size, self.y + self.size)


@dataclass(frozen=True)
class WorldSnapshot:
    """
    Complete world state for one frame.

    Obstacles keep insertion order, which is also draw order.
    """
    tick: int
    score: int
    playfield_width: float
    playfield_height: float
    player: PlayerView
    obstacles: Tuple[ObstacleView, ...]

    @property
    def obstacle_count(self) -> int:
        return len(self.obstacles)

    def obstacle_array(self) -> np.ndarray:
        """
        Obstacles packed as a float32 array.

        Returns:
            (N, 4) array with columns x, y, size, speed.
        """
        if not self.obstacles:
            return np.zeros((0, 4), dtype=np.float32)
        return np.array(
            [(o.x, o.y, o.size, o.speed) for o in self.obstacles],
            dtype=np.float32
        )


class SnapshotBuilder:
    """Builds WorldSnapshot instances from a live World."""

    def build(self, world: World) -> WorldSnapshot:
        player = world.player
        return WorldSnapshot(
            tick=world.tick_count,
            score=world.score,
            playfield_width=world.playfield_width,
            playfield_height=world.playfield_height,
            player=PlayerView(
                x=player.x,
                y=player.y,
                radius=player.radius,
                color=player.color
            ),
            obstacles=tuple(self.obstacle_view(o) for o in world.obstacles)
        )

    @staticmethod
    def obstacle_view(obstacle: Obstacle) -> ObstacleView:
        return ObstacleView(
            x=obstacle.x,
            y=obstacle.y,
            size=obstacle.size,
            speed=obstacle.speed,
            color=obstacle.color
        )
