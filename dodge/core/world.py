"""
World
=====

Game state and the per-tick update: obstacle motion, expiry, spawning,
collision and scoring.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import List, Optional, Tuple

from dodge.core.config_loader import GameConfig, get_config
from dodge.core.entities import Obstacle, Player
from dodge.core.rng import ObstacleSpawner
from dodge.core.state_snapshot import ObstacleView, SnapshotBuilder, WorldSnapshot

logger = logging.getLogger(__name__)


@dataclass
class TickResult:
    """Result of a single World.update call."""
    tick: int
    score: int
    spawned: Optional[ObstacleView]   # Copy taken when spawned
    removed: int
    collided: bool


class World:
    """
    Owns the player, the obstacle collection and the score.

    One tick, in order:
    1. advance every obstacle
    2. drop obstacles that left the playfield
    3. maybe spawn one obstacle at the right edge
    4. on the first collision found, reset
    5. add one to the score

    Only ``update`` and ``reset`` touch the obstacle collection. The world is
    not thread-safe; a single thread (the game loop) should drive it.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
        spawner: Optional[ObstacleSpawner] = None
    ):
        """
        Initialize world.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for the default spawner.
            rng: Explicit random source for the default spawner.
            spawner: Custom spawner. Overrides seed and rng.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._spawner = spawner if spawner is not None else ObstacleSpawner(config, seed, rng)
        self._snapshot_builder = SnapshotBuilder()

        self._playfield_width: float = float(config.playfield.width)
        self._playfield_height: float = float(config.playfield.height)

        self._player = Player(
            x=config.player.spawn_x,
            y=config.player.initial_y,
            radius=config.player.radius,
            color=config.player.color
        )
        self._obstacles: List[Obstacle] = []
        self._score: int = 0
        self._tick_count: int = 0
        self._elapsed: float = 0.0
        self._collisions: int = 0

    @property
    def config(self) -> GameConfig:
        """Game configuration."""
        return self._config

    @property
    def player(self) -> Player:
        return self._player

    @property
    def obstacles(self) -> Tuple[Obstacle, ...]:
        """Obstacles in insertion (draw) order."""
        return tuple(self._obstacles)

    @property
    def score(self) -> int:
        """Ticks survived since the last collision."""
        return self._score

    @property
    def tick_count(self) -> int:
        """Ticks run since construction."""
        return self._tick_count

    @property
    def elapsed(self) -> float:
        """Sum of dt passed to update, in seconds."""
        return self._elapsed

    @property
    def collisions(self) -> int:
        """Number of collisions (resets) so far."""
        return self._collisions

    @property
    def playfield_width(self) -> float:
        return self._playfield_width

    @property
    def playfield_height(self) -> float:
        return self._playfield_height

    @property
    def spawn_point(self) -> Tuple[float, float]:
        """Where the player goes after a collision."""
        return (self._config.player.spawn_x, self._playfield_height / 2)

    def set_player_position(self, x: float, y: float) -> None:
        self._player.set_target_position(x, y)

    def resize(self, width: float, height: float) -> None:
        """
        Apply a new playfield size and recenter the player vertically.

        Raises:
            ValueError: If either dimension is not positive.
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Playfield must be positive, got {width}x{height}")

        self._playfield_width = float(width)
        self._playfield_height = float(height)
        self._player.y = self._playfield_height / 2
        logger.debug("Playfield resized to %sx%s", width, height)

    def reset(self) -> None:
        """Clear obstacles, zero the score and return the player to the spawn point."""
        self._obstacles.clear()
        self._score = 0
        spawn_x, spawn_y = self.spawn_point
        self._player.set_target_position(spawn_x, spawn_y)

    def update(self, dt: float = 0.0) -> TickResult:
        """
        Run one tick.

        Args:
            dt: Seconds since the previous tick. Recorded only: motion and
                spawn chance are per tick.

        Returns:
            TickResult describing what happened.
        """
        self._tick_count += 1
        self._elapsed += dt

        for obstacle in self._obstacles:
            obstacle.advance()

        before = len(self._obstacles)
        self._obstacles = [o for o in self._obstacles if not o.is_expired]
        removed = before - len(self._obstacles)

        obstacle = self._spawner.maybe_spawn(self._playfield_width, self._playfield_height)
        spawned = None
        if obstacle is not None:
            self._obstacles.append(obstacle)
            spawned = self._snapshot_builder.obstacle_view(obstacle)

        collided = self._find_collision() is not None
        if collided:
            lost_score = self._score
            self._collisions += 1
            self.reset()
            logger.debug(
                "Collision on tick %d, score %d lost", self._tick_count, lost_score
            )

        if not collided or self._config.rules.score_collision_tick:
            self._score += 1

        return TickResult(
            tick=self._tick_count,
            score=self._score,
            spawned=spawned,
            removed=removed,
            collided=collided
        )

    def _find_collision(self) -> Optional[Obstacle]:
        """First obstacle overlapping the player, or None."""
        for obstacle in self._obstacles:
            if self._player.collides_with(obstacle):
                return obstacle
        return None

    def snapshot(self) -> WorldSnapshot:
        """Immutable copy of the current state for rendering."""
        return self._snapshot_builder.build(self)

    def get_info(self) -> dict:
        """Summary counters for tools and logs."""
        return {
            "tick": self._tick_count,
            "score": self._score,
            "obstacles": len(self._obstacles),
            "collisions": self._collisions,
            "elapsed": self._elapsed,
            "playfield": (self._playfield_width, self._playfield_height),
        }
