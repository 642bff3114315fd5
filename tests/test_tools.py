"""
Tests for logging setup and the command-line tools.
"""

import logging
import os

import pytest

from dodge.core.log_setup import configure_logging


@pytest.fixture
def clean_dodge_logger():
    """Detach handlers added by configure_logging after each test."""
    logger = logging.getLogger("dodge")
    saved = (list(logger.handlers), logger.level, logger.propagate)
    logger.handlers.clear()
    yield logger
    for handler in logger.handlers:
        handler.close()
    logger.handlers[:] = saved[0]
    logger.setLevel(saved[1])
    logger.propagate = saved[2]


class TestLogSetup:
    """Test the tools' logging configuration."""

    def test_level_from_argument(self, clean_dodge_logger):
        logger = configure_logging("debug")

        assert logger is clean_dodge_logger
        assert logger.level == logging.DEBUG
        assert len(logger.handlers) == 1

    def test_level_from_environment(self, clean_dodge_logger, monkeypatch):
        monkeypatch.setenv("DODGE_LOG_LEVEL", "warning")

        logger = configure_logging()

        assert logger.level == logging.WARNING

    def test_idempotent(self, clean_dodge_logger):
        configure_logging("info")
        configure_logging("debug")

        assert len(clean_dodge_logger.handlers) == 1
        assert clean_dodge_logger.level == logging.INFO

    def test_file_output(self, clean_dodge_logger, tmp_path):
        log_path = tmp_path / "logs" / "dodge.log"
        configure_logging("info", log_file=log_path)

        logging.getLogger("dodge.core.world").info("hello from the world")
        for handler in clean_dodge_logger.handlers:
            handler.flush()

        assert "hello from the world" in log_path.read_text(encoding="utf-8")


class TestBenchmark:
    """Test the headless benchmark runs end to end."""

    def test_benchmark_world(self):
        from tools.benchmark_speed import benchmark_world

        result = benchmark_world(num_ticks=500, seed=1)

        assert result["mode"] == "world"
        assert result["num_ticks"] == 500
        assert result["ticks_per_second"] > 0

    def test_benchmark_loop_renders_every_tick(self):
        from tools.benchmark_speed import benchmark_loop

        result = benchmark_loop(num_ticks=50, seed=1)

        assert result["num_ticks"] == 50
        assert result["ms_per_tick"] > 0


class TestBufferedSurface:
    """Test the double buffer used by play_human."""

    @pytest.fixture
    def surface(self):
        os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
        pytest.importorskip("pygame")
        from tools.play_human import BufferedSurface

        return BufferedSurface(64, 48)

    def test_single_lock_at_a_time(self, surface):
        canvas = surface.lock_canvas()

        assert canvas is not None
        assert surface.lock_canvas() is None

        surface.unlock_canvas_and_post(canvas)
        assert surface.lock_canvas() is not None

    def test_post_swaps_buffers(self, surface):
        import pygame

        canvas = surface.lock_canvas()
        canvas.fill((10, 20, 30))
        surface.unlock_canvas_and_post(canvas)

        screen = pygame.Surface((64, 48))
        surface.present(screen)

        assert tuple(screen.get_at((5, 5)))[:3] == (10, 20, 30)
        assert surface.lock_canvas() is not canvas

    def test_resize_reallocates_back_buffer(self, surface):
        surface.resize(100, 80)

        canvas = surface.lock_canvas()

        assert canvas.get_size() == (100, 80)
