"""
RNG - Obstacle Spawner
======================

Draws spawn decisions and obstacle parameters from an injected random source,
so seeded runs are fully reproducible.
"""

from __future__ import annotations

import random
from typing import Optional, Tuple

from dodge.core.config_loader import GameConfig, get_config
from dodge.core.entities import Obstacle


class ObstacleSpawner:
    """
    Per-tick Bernoulli spawner for obstacles.

    The trial is per tick, not per second: running the loop at a different
    rate changes how often obstacles appear.

    Parameters are drawn in a fixed order (size, then y, then speed) so a
    given seed always yields the same obstacle stream.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None
    ):
        """
        Initialize spawner.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
            rng: Explicit random source. Takes precedence over seed.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rng = rng if rng is not None else random.Random(seed)

    @property
    def probability(self) -> float:
        """Chance of a spawn on any single tick."""
        return self._config.obstacles.spawn_probability

    def should_spawn(self) -> bool:
        """Run this tick's Bernoulli trial."""
        return self._rng.random() < self.probability

    def spawn(self, playfield_width: float, playfield_height: float) -> Obstacle:
        """
        Create an obstacle just off the right edge of the playfield.

        Args:
            playfield_width: Current playfield width (spawn X).
            playfield_height: Current playfield height.

        Returns:
            New obstacle fully inside the playfield vertically.
        """
        cfg = self._config.obstacles

        size = self._rng.randint(cfg.min_size, cfg.max_size)
        # A playfield shorter than the obstacle pins it to the top edge
        max_y = max(0, int(playfield_height) - size)
        y = self._rng.randint(0, max_y)
        speed = self._rng.randint(cfg.min_speed, cfg.max_speed)

        return Obstacle(
            x=playfield_width,
            y=y,
            size=size,
            color=cfg.color,
            speed=speed
        )

    def maybe_spawn(
        self,
        playfield_width: float,
        playfield_height: float
    ) -> Optional[Obstacle]:
        """Spawn an obstacle if this tick's trial succeeds."""
        if self.should_spawn():
            return self.spawn(playfield_width, playfield_height)
        return None

    def reseed(self, seed: Optional[int]) -> None:
        """Replace the random source with a fresh one seeded with ``seed``."""
        self._rng = random.Random(seed)

    def get_state(self) -> Tuple:
        """Random source state for checkpointing."""
        return self._rng.getstate()

    def set_state(self, state: Tuple) -> None:
        self._rng.setstate(state)
