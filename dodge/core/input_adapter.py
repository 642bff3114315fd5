"""
Input Adapter
=============

Turns pointer events into player target positions.

Runs on the host's input thread and never touches the world directly: every
position is posted to a mailbox that the game loop drains once per tick.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from dodge.core.mailbox import Mailbox


class PointerAction(Enum):
    DOWN = "down"
    MOVE = "move"
    UP = "up"


@dataclass(frozen=True)
class PointerEvent:
    """One pointer event in surface coordinates."""
    action: PointerAction
    x: float
    y: float


class InputAdapter:
    """
    Single-pointer touch handler.

    Down and move jump the player straight to the pointer (no smoothing).
    Up only ends the touch; the player stays where it is.
    """

    def __init__(self, target: Mailbox):
        """
        Args:
            target: Mailbox receiving (x, y) tuples. Usually GameLoop.pointer_mailbox.
        """
        self._target = target
        self._touching = False
        self._last_position: Optional[Tuple[float, float]] = None

    @property
    def touching(self) -> bool:
        """True between a pointer down and the matching up."""
        return self._touching

    @property
    def last_position(self) -> Optional[Tuple[float, float]]:
        """Last pointer position seen, or None before the first event."""
        return self._last_position

    def pointer_down(self, x: float, y: float) -> None:
        self._touching = True
        self._post(x, y)

    def pointer_move(self, x: float, y: float) -> None:
        self._post(x, y)

    def pointer_up(self, x: float, y: float) -> None:
        self._touching = False
        self._last_position = (float(x), float(y))

    def dispatch(self, event: PointerEvent) -> None:
        """Route a typed event to the matching handler."""
        if event.action is PointerAction.DOWN:
            self.pointer_down(event.x, event.y)
        elif event.action is PointerAction.MOVE:
            self.pointer_move(event.x, event.y)
        elif event.action is PointerAction.UP:
            self.pointer_up(event.x, event.y)
        else:
            raise ValueError(f"Unknown pointer action: {event.action}")

    def _post(self, x: float, y: float) -> None:
        position = (float(x), float(y))
        self._last_position = position
        self._target.post(position)
