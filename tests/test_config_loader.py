"""
Tests for configuration loading and validation.
"""

from pathlib import Path

import pytest
import yaml

import colors_to_collect
from colors_to_collect.core.config_loader import load_config, get_config, reload_config


DEFAULT_CONFIG_PATH = Path(colors_to_collect.__file__).parent / "game_config.yaml"


@pytest.fixture
def config():
    return load_config()


@pytest.fixture
def raw_config():
    with open(DEFAULT_CONFIG_PATH, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)


def write_config(tmp_path, raw):
    path = tmp_path / "game_config.yaml"
    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(raw, f, allow_unicode=True)
    return str(path)


class TestDefaultConfig:
    """Test the shipped game_config.yaml."""

    def test_loads_default(self, config):
        """Default config should load without arguments."""
        assert config.screen.width == 750
        assert config.screen.height == 1334

    def test_three_colors(self, config):
        """Palette should hold base, orange and blue."""
        assert config.num_colors == 3
        assert [c.name for c in config.palette.colors] == ["off_white", "orange", "blue"]
        assert config.get_color(1).rgb == (255, 128, 0)

    def test_timing_values(self, config):
        """Spawn, fall and restart timings match the game's tuning."""
        assert config.timing.spawn_interval == pytest.approx(1.5)
        assert config.block.fall_duration == pytest.approx(2.5)
        assert config.timing.restart_delay == pytest.approx(3.0)
        assert config.timing.transition_duration == pytest.approx(1.0)

    def test_block_spin_rate(self, config):
        """Blocks turn 2 radians per second."""
        assert config.block.angular_velocity == pytest.approx(2.0)

    def test_sizes(self, config):
        """Paddle is 90x90 and blocks are 40x40."""
        assert config.paddle.size == (90.0, 90.0)
        assert config.block.size == (40.0, 40.0)
        assert config.block.spawn_margin == 16

    def test_invalid_color_id(self, config):
        """Unknown color IDs raise ValueError."""
        with pytest.raises(ValueError):
            config.get_color(3)

    def test_cached_config(self):
        """get_config returns the same instance until reloaded."""
        first = get_config()
        assert get_config() is first
        reloaded = reload_config()
        assert reloaded is not first
        assert get_config() is reloaded


class TestConfigValidation:
    """Test rejection of inconsistent configs."""

    def test_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_config(str(tmp_path / "nope.yaml"))

    def test_round_trip_of_default(self, tmp_path, raw_config):
        """A re-dumped default config still loads."""
        config = load_config(write_config(tmp_path, raw_config))
        assert config.num_colors == 3

    def test_color_ids_must_be_sequential(self, tmp_path, raw_config):
        """Color IDs double as selection indices."""
        raw_config["palette"]["colors"][1]["id"] = 5
        with pytest.raises(ValueError, match="Color ID mismatch"):
            load_config(write_config(tmp_path, raw_config))

    def test_malformed_rgb(self, tmp_path, raw_config):
        """RGB triples must have three channels."""
        raw_config["palette"]["colors"][0]["rgb"] = [1, 2]
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, raw_config))

    def test_rgb_out_of_range(self, tmp_path, raw_config):
        """Channels must fit in a byte."""
        raw_config["palette"]["background"] = [0, 0, 300]
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, raw_config))

    def test_non_positive_interval(self, tmp_path, raw_config):
        """Spawn interval must be positive."""
        raw_config["timing"]["spawn_interval"] = 0
        with pytest.raises(ValueError, match="spawn_interval"):
            load_config(write_config(tmp_path, raw_config))

    def test_unknown_locale(self, tmp_path, raw_config):
        """The active locale needs a string table."""
        raw_config["labels"]["locale"] = "de"
        with pytest.raises(ValueError, match="Locale"):
            load_config(write_config(tmp_path, raw_config))

    def test_missing_string_key(self, tmp_path, raw_config):
        """Every locale needs start, game_over and score strings."""
        del raw_config["strings"]["fr"]["score"]
        with pytest.raises(ValueError, match="missing keys"):
            load_config(write_config(tmp_path, raw_config))

    def test_single_color_rejected(self, tmp_path, raw_config):
        """A one-color palette would make every catch a match."""
        raw_config["palette"]["colors"] = raw_config["palette"]["colors"][:1]
        with pytest.raises(ValueError):
            load_config(write_config(tmp_path, raw_config))
