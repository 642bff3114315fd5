"""
Tests for draw command generation and the renderers that execute them.
"""

import os

import numpy as np
import pytest

from dodge.core.config_loader import load_config
from dodge.core.render_commands import Circle, Clear, CommandRenderer, Rect, Text, build_frame
from dodge.core.render_solid import SolidRenderer
from dodge.core.state_snapshot import ObstacleView, PlayerView, WorldSnapshot

BLUE = (0, 0, 255)
RED = (255, 0, 0)


@pytest.fixture
def config():
    return load_config()


def make_snapshot(score=0, obstacles=(), player=(100.0, 100.0, 50.0), width=800, height=600):
    x, y, radius = player
    return WorldSnapshot(
        tick=score,
        score=score,
        playfield_width=width,
        playfield_height=height,
        player=PlayerView(x=x, y=y, radius=radius, color=BLUE),
        obstacles=tuple(
            ObstacleView(x=ox, y=oy, size=size, speed=5, color=RED)
            for ox, oy, size in obstacles
        )
    )


class TestBuildFrame:
    """Test the command stream."""

    def test_command_order(self, config):
        snapshot = make_snapshot(score=3, obstacles=[(500, 100, 40), (700, 300, 60)])

        commands = build_frame(snapshot, config.hud)

        assert [type(c) for c in commands] == [Clear, Circle, Rect, Rect, Text, Text]

    def test_background_and_player(self, config):
        commands = build_frame(make_snapshot(), config.hud)

        assert commands[0] == Clear(config.hud.background)
        assert commands[1] == Circle(100.0, 100.0, 50.0, BLUE)

    def test_rect_uses_edges(self, config):
        commands = build_frame(make_snapshot(obstacles=[(500, 100, 40)]), config.hud)

        assert commands[2] == Rect(500, 100, 540, 140, RED)

    def test_score_text(self, config):
        commands = build_frame(make_snapshot(score=17), config.hud)
        score = commands[2]

        assert score.text == "Score: 17"
        assert (score.x, score.y) == (20, 50)
        assert score.font_size == 40

    def test_hint_shown_below_threshold(self, config):
        commands = build_frame(make_snapshot(score=49), config.hud)
        hint = commands[-1]

        assert hint.text == config.hud.hint_text
        assert (hint.x, hint.y) == (20, 100)
        assert hint.font_size == 30

    def test_hint_hidden_from_threshold(self, config):
        commands = build_frame(make_snapshot(score=50), config.hud)
        texts = [c for c in commands if isinstance(c, Text)]

        assert len(texts) == 1
        assert texts[0].text == "Score: 50"

    def test_base_renderer_requires_primitives(self, config):
        renderer = CommandRenderer(config)

        with pytest.raises(NotImplementedError):
            renderer.render(object(), make_snapshot())


class TestSolidRenderer:
    """Test numpy rasterization."""

    def test_array_shape(self, config):
        img = SolidRenderer(config).render_array(make_snapshot(width=320, height=240))

        assert img.shape == (240, 320, 3)
        assert img.dtype == np.uint8

    def test_background_player_and_obstacle(self, config):
        snapshot = make_snapshot(obstacles=[(500, 300, 40)])
        img = SolidRenderer(config).render_array(snapshot)

        assert tuple(img[5, 790]) == config.hud.background
        assert tuple(img[100, 100]) == BLUE
        assert tuple(img[320, 520]) == RED
        # Right and bottom edges are exclusive
        assert tuple(img[320, 540]) == config.hud.background

    def test_obstacles_drawn_over_player(self, config):
        """Obstacles come after the player in paint order."""
        snapshot = make_snapshot(obstacles=[(90, 90, 20)])
        img = SolidRenderer(config).render_array(snapshot)

        assert tuple(img[100, 100]) == RED

    def test_partially_off_screen_is_clipped(self, config):
        snapshot = make_snapshot(obstacles=[(-20, -20, 50)], player=(-10.0, 590.0, 50.0))
        img = SolidRenderer(config).render_array(snapshot)

        assert tuple(img[0, 0]) == RED
        assert tuple(img[599, 0]) == BLUE

    def test_fully_off_screen_is_ignored(self, config):
        snapshot = make_snapshot(obstacles=[(900, 100, 50)], player=(-500.0, -500.0, 50.0))
        img = SolidRenderer(config).render_array(snapshot)

        assert (img == np.array(config.hud.background, dtype=np.uint8)).all()

    def test_render_into_existing_canvas(self, config):
        renderer = SolidRenderer(config)
        canvas = renderer.new_canvas(800, 600)

        renderer.render(canvas, make_snapshot())

        assert tuple(canvas[100, 100]) == BLUE


class TestPygameRenderer:
    """Test the pygame executor headlessly."""

    @pytest.fixture
    def pygame_renderer(self, config):
        os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
        pytest.importorskip("pygame")
        from dodge.core.render_pygame import PygameRenderer

        renderer = PygameRenderer(config)
        yield renderer
        renderer.close()

    def test_shapes_match_solid_renderer(self, pygame_renderer, config):
        snapshot = make_snapshot(score=60, obstacles=[(500, 300, 40)])

        img = pygame_renderer.render_array(snapshot)

        assert img.shape == (600, 800, 3)
        assert tuple(img[100, 100]) == BLUE
        assert tuple(img[320, 520]) == RED
        assert tuple(img[590, 790]) == config.hud.background

    def test_text_is_drawn(self, pygame_renderer, config):
        snapshot = make_snapshot(score=5, player=(-500.0, -500.0, 10.0))

        img = pygame_renderer.render_array(snapshot)
        text_band = img[10:60, 20:200]

        assert (text_band == np.array(config.hud.text_color, dtype=np.uint8)).all(axis=-1).any()
