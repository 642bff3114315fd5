"""
Human Play Mode
================

Play Dodge with the mouse or a touchscreen. The game loop runs on its own
thread and draws into an off-screen buffer; this thread pumps pygame events
and presents the latest finished frame.

Controls:
    - Press and drag (mouse or finger): Move the circle
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--width WIDTH] [--height HEIGHT]
"""

from __future__ import annotations

import argparse
import logging
import sys
import threading
from typing import Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from dodge.core.config_loader import load_config, GameConfig
from dodge.core.game_loop import GameLoop
from dodge.core.log_setup import configure_logging
from dodge.core.render_pygame import PygameRenderer
from dodge.core.world import World

logger = logging.getLogger("dodge.tools.play_human")


class BufferedSurface:
    """
    Double-buffered drawing surface shared by the loop and display threads.

    The loop thread locks the back buffer, draws, and posts it; posting swaps
    it with the front buffer, which the display thread blits to the window.
    """

    def __init__(self, width: int, height: int):
        self._lock = threading.Lock()
        self._size: Tuple[int, int] = (width, height)
        self._back = pygame.Surface(self._size)
        self._front = pygame.Surface(self._size)
        self._locked = False

    def lock_canvas(self) -> Optional["pygame.Surface"]:
        with self._lock:
            if self._locked:
                return None
            if self._back.get_size() != self._size:
                self._back = pygame.Surface(self._size)
            self._locked = True
            return self._back

    def unlock_canvas_and_post(self, canvas: "pygame.Surface") -> None:
        with self._lock:
            self._back, self._front = self._front, canvas
            self._locked = False

    def resize(self, width: int, height: int) -> None:
        with self._lock:
            self._size = (width, height)

    def present(self, screen: "pygame.Surface") -> None:
        with self._lock:
            screen.blit(self._front, (0, 0))


class HumanPlayer:
    """Human-playable Dodge window."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        window_width: int = 800,
        window_height: int = 600,
        target_fps: int = 60
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._target_fps = target_fps
        self._window_size = (window_width, window_height)

        pygame.init()
        self._screen = pygame.display.set_mode(self._window_size, pygame.RESIZABLE)
        pygame.display.set_caption("Dodge")
        self._clock = pygame.time.Clock()

        self._world = World(config=config, seed=seed)
        self._surface = BufferedSurface(window_width, window_height)
        self._loop = GameLoop(self._world, PygameRenderer(config), config)

        self._running = True
        self._best_score = 0

    def run(self) -> int:
        """Run until the window closes. Returns the best score reached."""
        print("=== Dodge ===")
        print("Drag to move the blue circle, ESC to quit")
        print()

        self._loop.surface_created(self._surface)
        self._loop.surface_changed(*self._window_size)
        try:
            while self._running:
                self._handle_events()
                self._best_score = max(self._best_score, self._world.score)

                self._surface.present(self._screen)
                pygame.display.flip()
                self._clock.tick(self._target_fps)
        finally:
            self._loop.surface_destroyed()
            pygame.quit()

        return self._best_score

    def _handle_events(self) -> None:
        """Translate pygame events into pointer and surface events."""
        pointer = self._loop.input

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False

            elif event.type == pygame.VIDEORESIZE:
                self._window_size = (event.w, event.h)
                self._surface.resize(event.w, event.h)
                self._loop.surface_changed(event.w, event.h)

            # SDL also synthesizes mouse events from touches; skip those
            elif event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1 and not getattr(event, "touch", False):
                    pointer.pointer_down(*event.pos)
            elif event.type == pygame.MOUSEMOTION:
                if event.buttons[0] and not getattr(event, "touch", False):
                    pointer.pointer_move(*event.pos)
            elif event.type == pygame.MOUSEBUTTONUP:
                if event.button == 1 and not getattr(event, "touch", False):
                    pointer.pointer_up(*event.pos)

            # Finger coordinates are normalized to [0, 1]
            elif event.type == pygame.FINGERDOWN:
                pointer.pointer_down(*self._finger_pos(event))
            elif event.type == pygame.FINGERMOTION:
                pointer.pointer_move(*self._finger_pos(event))
            elif event.type == pygame.FINGERUP:
                pointer.pointer_up(*self._finger_pos(event))

    def _finger_pos(self, event) -> Tuple[float, float]:
        width, height = self._window_size
        return (event.x * width, event.y * height)


def main():
    parser = argparse.ArgumentParser(description="Play Dodge interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--width", type=int, default=800, help="Window width (default: 800)")
    parser.add_argument("--height", type=int, default=600, help="Window height (default: 600)")
    parser.add_argument("--fps", type=int, default=60, help="Display FPS")
    parser.add_argument("--config", type=str, default=None, help="Path to game_config.yaml")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default: $DODGE_LOG_LEVEL or INFO)")

    args = parser.parse_args()
    configure_logging(args.log_level)

    try:
        config = load_config(args.config)
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            window_width=args.width,
            window_height=args.height,
            target_fps=args.fps
        )
        score = player.run()
        print(f"\nBest Score: {score}")
        return 0
    except ImportError as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
