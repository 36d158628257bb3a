"""
Tests for the palette and the paddle's color selector.
"""

import pytest

from colors_to_collect.core.config_loader import load_config
from colors_to_collect.core.palette import ColorPalette, ColorSelector
from colors_to_collect.core.scene import GameScene


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def palette(config):
    return ColorPalette(config)


@pytest.fixture
def scene(config):
    return GameScene(config=config, seed=1)


class TestColorPalette:
    """Test palette lookups."""

    def test_indexing(self, palette):
        """Colors are indexed by ID."""
        assert len(palette) == 3
        assert palette[0].name == "off_white"
        assert palette[2].rgb == (0, 128, 255)

    def test_out_of_range(self, palette):
        """Indexing past the palette raises IndexError."""
        with pytest.raises(IndexError):
            palette[3]
        with pytest.raises(IndexError):
            palette[-1]

    def test_next_id_wraps(self, palette):
        """The cycle goes 0 -> 1 -> 2 -> 0."""
        assert [palette.next_id(i) for i in range(3)] == [1, 2, 0]


class TestColorSelector:
    """Test the tap-driven color cycle."""

    def test_starts_at_base(self, palette):
        """A fresh selector shows the base color."""
        assert ColorSelector(palette).selection == 0

    @pytest.mark.parametrize("start", [0, 1, 2])
    def test_three_cycles_return_to_start(self, palette, start):
        """Three consecutive cycles return to the starting selection."""
        selector = ColorSelector(palette, start)
        for _ in range(3):
            selector.cycle()
        assert selector.selection == start

    def test_matches(self, palette):
        """matches compares against the current selection."""
        selector = ColorSelector(palette)
        selector.cycle()
        assert selector.matches(1)
        assert not selector.matches(0)

    def test_reset(self, palette):
        """reset goes back to the base color."""
        selector = ColorSelector(palette, 2)
        selector.reset()
        assert selector.selection == 0

    def test_invalid_selection(self, palette):
        """Out-of-range selections are rejected."""
        selector = ColorSelector(palette)
        with pytest.raises(IndexError):
            selector.selection = 7


class TestPaddleColor:
    """Test the paddle color change on touch release."""

    def test_change_from_base_to_orange(self, scene):
        """Selection 0 -> 1 shows orange."""
        scene.color_selection = 0
        scene.change_paddle_color()
        assert scene.color_selection == 1
        assert scene.palette[scene.paddle.color_id].name == "orange"

    def test_change_from_orange_to_blue(self, scene):
        """Selection 1 -> 2 shows blue."""
        scene.color_selection = 1
        scene.change_paddle_color()
        assert scene.color_selection == 2
        assert scene.palette[scene.paddle.color_id].name == "blue"

    def test_change_from_blue_wraps(self, scene):
        """Selection 2 wraps to 0."""
        scene.color_selection = 2
        scene.change_paddle_color()
        assert scene.color_selection == 0
        assert scene.paddle.color_id == 0

    def test_touch_up_cycles(self, scene):
        """Releasing a touch advances the color."""
        scene.touch_down((375, 340))
        scene.touch_up((375, 340))
        assert scene.color_selection == 1
        assert scene.get_render_data()["paddle"]["rgb"] == (255, 128, 0)

    def test_touch_up_ignored_after_game_over(self, scene):
        """No color changes once the game is over."""
        scene.touch_down((375, 340))
        scene.game_over()
        scene.touch_up()
        assert scene.color_selection == 0
