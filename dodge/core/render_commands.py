"""
Render Commands
===============

Translates a WorldSnapshot into the ordered draw commands a render sink executes:
clear, player circle, obstacle rectangles, score text and (early on) a hint.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from dodge.core.config_loader import GameConfig, HudConfig, get_config
from dodge.core.state_snapshot import WorldSnapshot

Color = Tuple[int, int, int]


@dataclass(frozen=True)
class Clear:
    color: Color


@dataclass(frozen=True)
class Circle:
    x: float
    y: float
    radius: float
    color: Color


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle given by its edges."""
    left: float
    top: float
    right: float
    bottom: float
    color: Color


@dataclass(frozen=True)
class Text:
    """Text anchored at its baseline start, like a canvas drawText."""
    text: str
    x: float
    y: float
    font_size: int
    color: Color


DrawCommand = Union[Clear, Circle, Rect, Text]


def score_text(score: int, hud: HudConfig) -> str:
    return f"{hud.score_label}: {score}"


def build_frame(
    snapshot: WorldSnapshot,
    hud: Optional[HudConfig] = None
) -> List[DrawCommand]:
    """
    Build the draw commands for one frame.

    Args:
        snapshot: World state to draw.
        hud: HUD layout. Uses the default config if None.

    Returns:
        Commands in paint order.
    """
    if hud is None:
        hud = get_config().hud

    commands: List[DrawCommand] = [Clear(hud.background)]

    player = snapshot.player
    commands.append(Circle(player.x, player.y, player.radius, player.color))

    for obstacle in snapshot.obstacles:
        left, top, right, bottom = obstacle.rect
        commands.append(Rect(left, top, right, bottom, obstacle.color))

    score_x, score_y = hud.score_pos
    commands.append(Text(
        score_text(snapshot.score, hud),
        score_x,
        score_y,
        hud.score_font_size,
        hud.text_color
    ))

    if snapshot.score < hud.hint_until_score and hud.hint_text:
        hint_x, hint_y = hud.hint_pos
        commands.append(Text(
            hud.hint_text,
            hint_x,
            hint_y,
            hud.hint_font_size,
            hud.text_color
        ))

    return commands


class CommandRenderer:
    """
    Base class for sinks that execute draw commands on some canvas.

    Subclasses implement the four primitives; ``render`` builds the frame and
    dispatches each command in order.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        if config is None:
            config = get_config()
        self._config = config

    def render(self, canvas, snapshot: WorldSnapshot) -> None:
        """Draw ``snapshot`` onto ``canvas``."""
        for command in build_frame(snapshot, self._config.hud):
            self.execute(canvas, command)

    def execute(self, canvas, command: DrawCommand) -> None:
        if isinstance(command, Clear):
            self.clear(canvas, command)
        elif isinstance(command, Circle):
            self.draw_circle(canvas, command)
        elif isinstance(command, Rect):
            self.draw_rect(canvas, command)
        elif isinstance(command, Text):
            self.draw_text(canvas, command)
        else:
            raise TypeError(f"Unknown draw command: {command!r}")

    def clear(self, canvas, command: Clear) -> None:
        raise NotImplementedError

    def draw_circle(self, canvas, command: Circle) -> None:
        raise NotImplementedError

    def draw_rect(self, canvas, command: Rect) -> None:
        raise NotImplementedError

    def draw_text(self, canvas, command: Text) -> None:
        raise NotImplementedError
