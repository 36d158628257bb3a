"""
Tests for block spawning, block descent and paddle placement.
"""

import dataclasses

import pytest

from colors_to_collect.core.config_loader import load_config
from colors_to_collect.core.playfield import CATEGORY_BLOCK, CATEGORY_PADDLE, Frame, PlayField
from colors_to_collect.core.rules import SpawnRules
from colors_to_collect.core.scene import GameScene


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def scene(config):
    return GameScene(config=config, seed=3)


class TestSpawnPosition:
    """Test where blocks appear."""

    def test_spawn_x_within_margins(self, config):
        """Spawn X stays in [min + 16, max - 16)."""
        rules = SpawnRules(config, seed=42)
        frame = Frame(0.0, 0.0, 50.0, 100.0)
        for _ in range(500):
            x = rules.random_x(frame)
            assert 16.0 <= x < 34.0

    def test_spawn_range(self, config):
        """The range is the frame shrunk by the margin on both sides."""
        rules = SpawnRules(config, seed=0)
        assert rules.get_spawn_x_range(Frame.from_size(750, 1334)) == (16.0, 734.0)

    def test_degenerate_bounds_spawn_at_center(self, config):
        """A frame narrower than both margins spawns at its center."""
        rules = SpawnRules(config, seed=0)
        frame = Frame(0.0, 0.0, 20.0, 100.0)
        assert rules.random_x(frame) == 10.0

    def test_colors_cover_palette(self, config):
        """Random colors are valid palette indices, and all of them occur."""
        rules = SpawnRules(config, seed=5)
        seen = {rules.random_color() for _ in range(300)}
        assert seen == {0, 1, 2}

    def test_same_seed_same_sequence(self, config):
        """Seeded rules reproduce the same spawns."""
        frame = Frame.from_size(750, 1334)
        a = SpawnRules(config, seed=9)
        b = SpawnRules(config, seed=9)
        assert [(a.random_x(frame), a.random_color()) for _ in range(20)] == \
            [(b.random_x(frame), b.random_color()) for _ in range(20)]

    def test_spawned_block_starts_at_top(self, scene):
        """Blocks start on the top edge with the requested color."""
        block = scene.spawn_falling_block(color_id=2, x=100.0)
        assert block.y == pytest.approx(1334.0)
        assert block.x == pytest.approx(100.0)
        assert block.color_id == 2
        assert scene.falling_block is block

    def test_invalid_color_rejected(self, scene):
        """Colors outside the palette are rejected."""
        with pytest.raises(IndexError):
            scene.spawn_falling_block(color_id=5, x=100.0)


class TestCategories:
    """Test collision categories."""

    def test_paddle_and_block_categories_differ(self, config):
        """Paddle and block carry distinct, non-zero categories."""
        field = PlayField(config)
        paddle = field.spawn_paddle(375.0, 340.0)
        block = field.spawn_block(0, 100.0, 1334.0, -200.0)
        assert paddle.category == CATEGORY_PADDLE
        assert block.category == CATEGORY_BLOCK
        assert paddle.category != block.category
        assert paddle.category and block.category


class TestDescent:
    """Test block motion."""

    def test_halfway_position_and_spin(self, scene):
        """A block moves linearly toward the exit line while spinning."""
        block = scene.spawn_falling_block(color_id=0, x=100.0)
        scene.tick(1.25)
        # 1334 -> -200 over 2.5 seconds
        assert block.y == pytest.approx(1334.0 - 1534.0 / 2.0, abs=1e-3)
        assert block.x == pytest.approx(100.0)
        assert block.angle == pytest.approx(2.5, abs=1e-6)

    def test_block_retired_after_fall_duration(self, scene):
        """A block is gone once its 2.5 second descent completes."""
        block = scene.spawn_falling_block(color_id=0, x=100.0)
        scene.tick(2.4)
        assert block.active
        assert scene.blocks == [block]

        scene.tick(0.1)
        assert not block.active
        assert scene.blocks == []
        assert scene.falling_block is None

    def test_retirement_changes_nothing_else(self, scene):
        """Missing a block neither scores nor ends the game."""
        scene.touch_down((375.0, 340.0))
        scene.spawn_falling_block(color_id=1, x=100.0)
        scene.tick(2.6)
        assert scene.score == 0
        assert scene.is_alive

    def test_several_blocks_fall_at_once(self, scene):
        """Blocks are tracked independently."""
        first = scene.spawn_falling_block(color_id=0, x=100.0)
        scene.tick(1.0)
        second = scene.spawn_falling_block(color_id=1, x=600.0)
        assert scene.blocks == [first, second]
        assert scene.falling_block is second

        scene.tick(1.6)
        assert not first.active
        assert second.active


class TestPaddlePlacement:
    """Test paddle height and horizontal movement."""

    def test_default_height(self, scene):
        """The paddle sits at bottom + 250 + its height."""
        assert scene.paddle_start_y == pytest.approx(340.0)
        assert scene.paddle.y == pytest.approx(340.0)
        assert scene.paddle.x == pytest.approx(375.0)

    def test_y_pinned_after_tick(self, scene):
        """Every tick pins the paddle back to its start height."""
        scene.paddle_start_y = 50.0
        scene.tick(0.1)
        assert scene.paddle.y == pytest.approx(50.0)

    def test_y_pinned_while_following_touch(self, scene):
        """Touch Y never moves the paddle."""
        scene.touch_down((200.0, 900.0))
        scene.tick(1.0 / 60.0)
        assert scene.paddle.x == pytest.approx(200.0)
        assert scene.paddle.y == pytest.approx(340.0)

    @pytest.mark.parametrize("touch,expected", [(2000.0, 750.0), (-50.0, 0.0), (123.0, 123.0)])
    def test_x_clamped_to_screen(self, scene, touch, expected):
        """Paddle X is clamped to the screen bounds."""
        scene.touch_down((touch, 0.0))
        assert scene.paddle.x == pytest.approx(expected)

    def test_clamping_can_be_disabled(self, config):
        """With clamping off the paddle follows the touch exactly."""
        config = dataclasses.replace(
            config,
            paddle=dataclasses.replace(config.paddle, clamp_to_screen=False)
        )
        scene = GameScene(config=config, seed=3)
        scene.touch_down((2000.0, 0.0))
        assert scene.paddle.x == pytest.approx(2000.0)

    def test_bare_x_touch(self, scene):
        """A touch may be given as a bare X coordinate."""
        scene.touch_down(250)
        assert scene.paddle.x == pytest.approx(250.0)

    def test_set_screen_bounds(self, scene):
        """Overridden bounds drive both clamping and spawning."""
        scene.set_screen_bounds(100.0, 200.0)
        assert scene.screen_min == 100.0
        assert scene.screen_max == 200.0
        scene.touch_down((500.0, 0.0))
        assert scene.paddle.x == pytest.approx(200.0)
        block = scene.spawn_falling_block(color_id=0)
        assert 116.0 <= block.x < 184.0

    def test_resize_moves_paddle_height(self, scene):
        """Resizing recomputes the fixed paddle height."""
        scene.resize(400, 800)
        assert scene.frame.max_x == 400.0
        assert scene.paddle_start_y == pytest.approx(340.0)
        assert scene.main_label.position == (200.0, 550.0)


class TestSpawnTimer:
    """Test the repeating spawn timer."""

    def test_no_blocks_before_start(self, scene):
        """Nothing spawns while waiting for the first touch."""
        scene.tick(5.0)
        assert scene.blocks == []
        assert not scene.spawn_timer_running

    def test_first_block_after_interval(self, scene):
        """The first block appears one interval after the game starts."""
        scene.touch_down((10.0, 0.0))
        assert scene.spawn_timer_running
        for _ in range(89):
            scene.tick(1.0 / 60.0)
        assert scene.blocks == []
        scene.tick(1.0 / 60.0)
        assert len(scene.blocks) == 1

    def test_spawns_every_interval(self, scene):
        """Blocks keep coming every 1.5 seconds."""
        scene.touch_down((10.0, 0.0))
        # Keep the paddle clear of every falling block
        scene.paddle_start_y = 5000.0
        spawned = []
        for _ in range(6 * 60):
            scene.tick(1.0 / 60.0)
            block = scene.falling_block
            if block is not None and block.uid not in spawned:
                spawned.append(block.uid)
        assert spawned == [0, 1, 2, 3]

    def test_spawned_block_within_range(self, scene):
        """Timer spawns use the random spawn range."""
        scene.touch_down((10.0, 0.0))
        scene.tick(1.5)
        block = scene.falling_block
        assert block is not None
        assert 16.0 <= block.x < 734.0
