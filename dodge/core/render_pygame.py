"""
Pygame Renderer
===============

Executes draw commands on a pygame Surface. Supports both display mode
(human play) and headless RGB output.
"""

from __future__ import annotations

from typing import Dict, Optional

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

import numpy as np

from dodge.core.config_loader import GameConfig
from dodge.core.render_commands import Circle, Clear, CommandRenderer, Rect, Text
from dodge.core.state_snapshot import WorldSnapshot


class PygameRenderer(CommandRenderer):
    """
    Draws frames with pygame.draw and pygame.font.

    Text positions are baselines (the y of a command is where the glyphs sit),
    so each string is blitted one font ascent above it.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration.
        """
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame is required for PygameRenderer")

        super().__init__(config)

        pygame.font.init()
        self._fonts: Dict[int, "pygame.font.Font"] = {}

    def _font(self, size: int) -> "pygame.font.Font":
        """Default font at ``size``, cached."""
        font = self._fonts.get(size)
        if font is None:
            font = pygame.font.Font(None, size)
            self._fonts[size] = font
        return font

    def clear(self, canvas: "pygame.Surface", command: Clear) -> None:
        canvas.fill(command.color)

    def draw_circle(self, canvas: "pygame.Surface", command: Circle) -> None:
        pygame.draw.circle(
            canvas,
            command.color,
            (int(command.x), int(command.y)),
            int(command.radius)
        )

    def draw_rect(self, canvas: "pygame.Surface", command: Rect) -> None:
        rect = pygame.Rect(
            int(command.left),
            int(command.top),
            int(command.right - command.left),
            int(command.bottom - command.top)
        )
        pygame.draw.rect(canvas, command.color, rect)

    def draw_text(self, canvas: "pygame.Surface", command: Text) -> None:
        font = self._font(command.font_size)
        text_surf = font.render(command.text, True, command.color)
        canvas.blit(text_surf, (int(command.x), int(command.y) - font.get_ascent()))

    def render_array(self, snapshot: WorldSnapshot) -> np.ndarray:
        """
        Render to RGB array.

        Returns:
            (height, width, 3) uint8 array.
        """
        surface = pygame.Surface(
            (int(snapshot.playfield_width), int(snapshot.playfield_height))
        )
        self.render(surface, snapshot)
        array = pygame.surfarray.array3d(surface)
        return np.transpose(array, (1, 0, 2))

    def close(self) -> None:
        self._fonts.clear()
