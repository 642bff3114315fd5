"""
Solid Renderer
==============

Fast numpy-based renderer that rasterizes the draw commands into an RGB array.
Used for headless runs and tests; text commands are skipped since there is
no font backend.
"""

from __future__ import annotations

import math
from typing import Optional

import numpy as np

from dodge.core.config_loader import GameConfig
from dodge.core.render_commands import Circle, Clear, CommandRenderer, Rect, Text
from dodge.core.state_snapshot import WorldSnapshot


class SolidRenderer(CommandRenderer):
    """
    Renders frames as solid-color shapes on a (height, width, 3) uint8 array.

    Shapes partly off the array are clipped; shapes fully off it are ignored.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        super().__init__(config)

    def new_canvas(self, width: int, height: int) -> np.ndarray:
        """Allocate a blank canvas of the given size."""
        return np.zeros((height, width, 3), dtype=np.uint8)

    def render_array(self, snapshot: WorldSnapshot) -> np.ndarray:
        """
        Render a snapshot to a fresh array sized to its playfield.

        Returns:
            (height, width, 3) uint8 array.
        """
        width = int(snapshot.playfield_width)
        height = int(snapshot.playfield_height)
        canvas = self.new_canvas(width, height)
        self.render(canvas, snapshot)
        return canvas

    def clear(self, canvas: np.ndarray, command: Clear) -> None:
        canvas[:] = np.array(command.color, dtype=np.uint8)

    def draw_circle(self, canvas: np.ndarray, command: Circle) -> None:
        """Draw a filled circle using numpy."""
        height, width = canvas.shape[:2]
        cx, cy, radius = command.x, command.y, command.radius

        # Bounding box
        y_min = max(0, int(math.floor(cy - radius)))
        y_max = min(height, int(math.ceil(cy + radius)) + 1)
        x_min = max(0, int(math.floor(cx - radius)))
        x_max = min(width, int(math.ceil(cx + radius)) + 1)

        if y_min >= y_max or x_min >= x_max:
            return

        y_coords = np.arange(y_min, y_max)
        x_coords = np.arange(x_min, x_max)
        yy, xx = np.meshgrid(y_coords, x_coords, indexing='ij')

        dist_sq = (xx - cx) ** 2 + (yy - cy) ** 2
        mask = dist_sq <= radius ** 2

        canvas[y_min:y_max, x_min:x_max][mask] = np.array(command.color, dtype=np.uint8)

    def draw_rect(self, canvas: np.ndarray, command: Rect) -> None:
        """Fill [left, right) x [top, bottom), clipped to the canvas."""
        height, width = canvas.shape[:2]

        x_min = max(0, int(math.floor(command.left)))
        x_max = min(width, int(math.ceil(command.right)))
        y_min = max(0, int(math.floor(command.top)))
        y_max = min(height, int(math.ceil(command.bottom)))

        if y_min >= y_max or x_min >= x_max:
            return

        canvas[y_min:y_max, x_min:x_max] = np.array(command.color, dtype=np.uint8)

    def draw_text(self, canvas: np.ndarray, command: Text) -> None:
        pass

    def close(self) -> None:
        """Clean up resources (no-op for solid renderer)."""
        pass
