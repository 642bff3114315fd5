"""
Game Loop
=========

Drives a World at a fixed cadence on its own thread and renders each tick
into a host-provided drawing surface.
"""

from __future__ import annotations

import logging
import threading
import time
from enum import Enum
from typing import Any, Callable, Optional, Protocol, Tuple

from dodge.core.config_loader import GameConfig
from dodge.core.input_adapter import InputAdapter
from dodge.core.mailbox import Mailbox
from dodge.core.world import TickResult, World

logger = logging.getLogger(__name__)


class DrawingSurface(Protocol):
    """Host drawing surface with an exclusive back buffer."""

    def lock_canvas(self) -> Optional[Any]:
        """Return the back buffer, or None if it is unavailable this frame."""
        ...

    def unlock_canvas_and_post(self, canvas: Any) -> None:
        """Release the buffer and present it."""
        ...


class FrameRenderer(Protocol):
    def render(self, canvas: Any, snapshot: Any) -> None:
        ...


class LoopState(Enum):
    STOPPED = "stopped"
    RUNNING = "running"


class GameLoop:
    """
    Fixed-tick update/render loop.

    Starts STOPPED. ``surface_created`` starts the loop thread (RUNNING) and
    ``surface_destroyed`` stops it, waiting for the in-flight iteration to
    finish (STOPPED).

    The loop thread is the only writer of the World. Pointer targets and
    surface sizes arrive through mailboxes and are applied at the start of
    each tick, newest value wins.

    Pacing:
    - fixed_sleep: wait the full interval after each iteration. Frame time
      drifts under load.
    - deadline: wait until the next interval boundary. When more than one
      interval behind, the schedule restarts from now instead of bursting.

    Example:
        loop = GameLoop(World(config), PygameRenderer(config), config)
        loop.surface_created(surface)
        loop.input.pointer_move(120.0, 300.0)
        ...
        loop.surface_destroyed()
    """

    def __init__(
        self,
        world: World,
        renderer: FrameRenderer,
        config: Optional[GameConfig] = None,
        clock: Callable[[], float] = time.perf_counter,
        wait: Optional[Callable[[float], Any]] = None
    ):
        """
        Initialize loop.

        Args:
            world: World to drive. Must not be mutated by anyone else while running.
            renderer: Draws a WorldSnapshot onto a canvas.
            config: Game configuration. Uses the world's if None.
            clock: Monotonic time source in seconds.
            wait: Called with the seconds to pause between iterations. Defaults
                to waiting on the stop event, so a stop request ends the pause.
        """
        if config is None:
            config = world.config

        self._world = world
        self._renderer = renderer
        self._config = config
        self._clock = clock

        self._interval = config.loop.tick_interval
        self._pacing = config.loop.pacing

        self._pointer_box: Mailbox[Tuple[float, float]] = Mailbox()
        self._resize_box: Mailbox[Tuple[float, float]] = Mailbox()
        self._input = InputAdapter(self._pointer_box)

        self._state = LoopState.STOPPED
        self._state_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._wait = wait if wait is not None else self._stop_event.wait
        self._thread: Optional[threading.Thread] = None
        self._surface: Optional[DrawingSurface] = None
        self._error: Optional[BaseException] = None

        self._last_tick_time: Optional[float] = None
        self._frames_drawn = 0
        self._frames_skipped = 0

    @property
    def state(self) -> LoopState:
        with self._state_lock:
            return self._state

    @property
    def is_running(self) -> bool:
        return self.state is LoopState.RUNNING

    @property
    def world(self) -> World:
        return self._world

    @property
    def input(self) -> InputAdapter:
        """Input adapter posting into this loop's pointer mailbox."""
        return self._input

    @property
    def pointer_mailbox(self) -> Mailbox:
        return self._pointer_box

    @property
    def tick_interval(self) -> float:
        """Seconds between iterations."""
        return self._interval

    @property
    def frames_drawn(self) -> int:
        return self._frames_drawn

    @property
    def frames_skipped(self) -> int:
        """Ticks updated without drawing because no canvas was available."""
        return self._frames_skipped

    @property
    def error(self) -> Optional[BaseException]:
        """Exception that ended the loop thread, if any."""
        return self._error

    # ------------------------------ Surface lifecycle ------------------------------

    def surface_created(self, surface: DrawingSurface) -> None:
        """Attach the surface and start the loop thread."""
        with self._state_lock:
            if self._state is LoopState.RUNNING:
                logger.warning("surface_created while already running, ignored")
                return

        # An interrupted stop can leave the old thread finishing its last tick
        previous = self._thread
        if previous is not None:
            previous.join()
            self._thread = None

        with self._state_lock:
            self._state = LoopState.RUNNING

        self._surface = surface
        self._error = None
        self._stop_event.clear()
        self._pointer_box.clear()
        self._last_tick_time = None

        self._thread = threading.Thread(target=self._run, name="dodge-game-loop", daemon=True)
        self._thread.start()
        logger.info("Game loop started (%.0f ms ticks, %s)", self._interval * 1000, self._pacing)

    def surface_changed(self, width: float, height: float) -> None:
        """Queue a playfield resize for the next tick."""
        self._resize_box.post((width, height))

    def surface_destroyed(self) -> None:
        """
        Stop the loop and wait for the current iteration to finish.

        Raises:
            Exception: Whatever ended the loop thread early, if anything did.
        """
        try:
            self.stop()
        finally:
            self._surface = None

    def stop(self) -> None:
        """
        Request a stop and join the loop thread.

        Blocks until the in-flight iteration has finished. If the join is
        interrupted the thread is kept, and the next ``surface_created``
        joins it before starting a new one.
        """
        with self._state_lock:
            self._state = LoopState.STOPPED
        self._stop_event.set()

        thread = self._thread
        if thread is not None:
            try:
                thread.join()
            except KeyboardInterrupt:
                logger.warning("Interrupted while joining the game loop thread")
                return
            self._thread = None
            logger.info("Game loop stopped after %d ticks", self._world.tick_count)

        if self._error is not None:
            error, self._error = self._error, None
            raise error

    # ------------------------------ Iteration ------------------------------

    def step(self, surface: Optional[DrawingSurface] = None) -> TickResult:
        """
        Run one iteration on the calling thread: apply input, update, draw.

        Args:
            surface: Surface to draw on. Uses the attached one if None.

        Returns:
            The world's TickResult.
        """
        if surface is None:
            surface = self._surface

        now = self._clock()
        dt = self._interval if self._last_tick_time is None else now - self._last_tick_time
        self._last_tick_time = now

        self._apply_pending_input()

        canvas = surface.lock_canvas() if surface is not None else None
        if canvas is None:
            self._frames_skipped += 1
            return self._world.update(dt)

        try:
            result = self._world.update(dt)
            self._renderer.render(canvas, self._world.snapshot())
        finally:
            surface.unlock_canvas_and_post(canvas)

        self._frames_drawn += 1
        return result

    def _apply_pending_input(self) -> None:
        size = self._resize_box.take()
        if size is not None:
            self._world.resize(*size)

        target = self._pointer_box.take()
        if target is not None:
            self._world.set_player_position(*target)

    def _run(self) -> None:
        """Loop thread body."""
        next_deadline = self._clock() + self._interval
        try:
            while not self._stop_event.is_set():
                self.step()

                if self._pacing == "deadline":
                    now = self._clock()
                    if now - next_deadline > self._interval:
                        # Too far behind: restart the schedule from now
                        next_deadline = now
                    self._wait(max(0.0, next_deadline - now))
                    next_deadline += self._interval
                else:
                    self._wait(self._interval)
        except Exception as e:
            logger.exception("Game loop crashed on tick %d", self._world.tick_count)
            self._error = e
        finally:
            with self._state_lock:
                self._state = LoopState.STOPPED
