"""
Dodge Core - Simulation and loop for the dodge game.

This module provides the world model, the fixed-tick game loop, pointer
input handling and render sinks.

Main exports:
- World: Game state and per-tick update
- GameLoop: Threaded fixed-tick driver bound to a drawing surface
- InputAdapter: Pointer events to player target positions
- ObstacleSpawner: Seedable obstacle generator
- GameConfig: Configuration loaded from game_config.yaml
"""

from dodge.core.config_loader import GameConfig, load_config, get_config
from dodge.core.entities import Entity, Player, Obstacle
from dodge.core.rng import ObstacleSpawner
from dodge.core.world import World, TickResult
from dodge.core.state_snapshot import WorldSnapshot
from dodge.core.mailbox import Mailbox
from dodge.core.input_adapter import InputAdapter, PointerAction, PointerEvent
from dodge.core.game_loop import GameLoop, LoopState
from dodge.core.render_commands import build_frame
from dodge.core.render_solid import SolidRenderer

__all__ = [
    "GameConfig",
    "load_config",
    "get_config",
    "Entity",
    "Player",
    "Obstacle",
    "ObstacleSpawner",
    "World",
    "TickResult",
    "WorldSnapshot",
    "Mailbox",
    "InputAdapter",
    "PointerAction",
    "PointerEvent",
    "GameLoop",
    "LoopState",
    "build_frame",
    "SolidRenderer",
]
