"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple

import yaml


Color = Tuple[int, int, int]

PACING_MODES = ("fixed_sleep", "deadline")

DEFAULT_CONFIG_PATH = os.path.join(
    os.path.dirname(os.path.dirname(__file__)),
    "game_config.yaml"
)


@dataclass(frozen=True)
class PlayfieldConfig:
    """Playfield size used until the host surface reports its own."""
    width: int
    height: int


@dataclass(frozen=True)
class PlayerConfig:
    """Player circle geometry and spawn point."""
    spawn_x: float       # X coordinate after reset
    initial_y: float     # Y coordinate before the first resize
    radius: float
    color: Color


@dataclass(frozen=True)
class ObstacleConfig:
    """Obstacle randomization ranges (all inclusive)."""
    min_size: int
    max_size: int
    min_speed: int
    max_speed: int
    spawn_probability: float  # Bernoulli trial per tick
    color: Color


@dataclass(frozen=True)
class RulesConfig:
    """Scoring rules."""
    score_collision_tick: bool


@dataclass(frozen=True)
class LoopConfig:
    """Game loop cadence."""
    tick_interval_ms: int
    pacing: str   # "fixed_sleep" or "deadline"

    @property
    def tick_interval(self) -> float:
        """Tick interval in seconds."""
        return self.tick_interval_ms / 1000.0


@dataclass(frozen=True)
class HudConfig:
    """Background, score and hint text layout."""
    background: Color
    text_color: Color
    score_label: str
    score_pos: Tuple[float, float]
    score_font_size: int
    hint_text: str
    hint_pos: Tuple[float, float]
    hint_font_size: int
    hint_until_score: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    playfield: PlayfieldConfig
    player: PlayerConfig
    obstacles: ObstacleConfig
    rules: RulesConfig
    loop: LoopConfig
    hud: HudConfig


def _parse_color(color_data: List) -> Color:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    return (int(color_data[0]), int(color_data[1]), int(color_data[2]))


def _parse_point(point_data: List) -> Tuple[float, float]:
    """Parse an (x, y) pair from YAML."""
    if len(point_data) != 2:
        raise ValueError(f"Point must have 2 values [x, y], got {point_data}")
    return (float(point_data[0]), float(point_data[1]))


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    if config.playfield.width <= 0 or config.playfield.height <= 0:
        raise ValueError(
            f"Playfield must be positive, got {config.playfield.width}x{config.playfield.height}"
        )

    if config.player.radius <= 0:
        raise ValueError(f"Player radius must be positive, got {config.player.radius}")

    obstacles = config.obstacles
    if obstacles.min_size <= 0:
        raise ValueError(f"obstacles.min_size must be positive, got {obstacles.min_size}")
    if obstacles.min_size > obstacles.max_size:
        raise ValueError(
            f"obstacles.min_size ({obstacles.min_size}) exceeds "
            f"max_size ({obstacles.max_size})"
        )
    if obstacles.min_speed <= 0:
        raise ValueError(f"obstacles.min_speed must be positive, got {obstacles.min_speed}")
    if obstacles.min_speed > obstacles.max_speed:
        raise ValueError(
            f"obstacles.min_speed ({obstacles.min_speed}) exceeds "
            f"max_speed ({obstacles.max_speed})"
        )
    if not 0.0 <= obstacles.spawn_probability <= 1.0:
        raise ValueError(
            f"obstacles.spawn_probability must be in [0, 1], got {obstacles.spawn_probability}"
        )

    if config.loop.tick_interval_ms <= 0:
        raise ValueError(
            f"loop.tick_interval_ms must be positive, got {config.loop.tick_interval_ms}"
        )
    if config.loop.pacing not in PACING_MODES:
        raise ValueError(
            f"loop.pacing must be one of {PACING_MODES}, got '{config.loop.pacing}'"
        )


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r") as f:
        raw = yaml.safe_load(f)

    playfield_data = raw["playfield"]
    playfield = PlayfieldConfig(
        width=int(playfield_data["width"]),
        height=int(playfield_data["height"])
    )

    player_data = raw["player"]
    player = PlayerConfig(
        spawn_x=float(player_data["spawn_x"]),
        initial_y=float(player_data.get("initial_y", 100)),
        radius=float(player_data["radius"]),
        color=_parse_color(player_data["color"])
    )

    obstacle_data = raw["obstacles"]
    obstacles = ObstacleConfig(
        min_size=int(obstacle_data["min_size"]),
        max_size=int(obstacle_data["max_size"]),
        min_speed=int(obstacle_data["min_speed"]),
        max_speed=int(obstacle_data["max_speed"]),
        spawn_probability=float(obstacle_data["spawn_probability"]),
        color=_parse_color(obstacle_data["color"])
    )

    # Optional sections
    rules_data = raw.get("rules", {})
    rules = RulesConfig(
        score_collision_tick=bool(rules_data.get("score_collision_tick", False))
    )

    loop_data = raw.get("loop", {})
    loop = LoopConfig(
        tick_interval_ms=int(loop_data.get("tick_interval_ms", 16)),
        pacing=str(loop_data.get("pacing", "fixed_sleep"))
    )

    hud_data = raw.get("hud", {})
    hud = HudConfig(
        background=_parse_color(hud_data.get("background", [255, 255, 255])),
        text_color=_parse_color(hud_data.get("text_color", [0, 0, 0])),
        score_label=str(hud_data.get("score_label", "Score")),
        score_pos=_parse_point(hud_data.get("score_pos", [20, 50])),
        score_font_size=int(hud_data.get("score_font_size", 40)),
        hint_text=str(hud_data.get("hint_text", "")),
        hint_pos=_parse_point(hud_data.get("hint_pos", [20, 100])),
        hint_font_size=int(hud_data.get("hint_font_size", 30)),
        hint_until_score=int(hud_data.get("hint_until_score", 50))
    )

    config = GameConfig(
        playfield=playfield,
        player=player,
        obstacles=obstacles,
        rules=rules,
        loop=loop,
        hud=hud
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
