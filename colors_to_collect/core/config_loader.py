"""
Configuration Loader
====================

Loads and validates game_config.yaml, providing typed access to all parameters.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import yaml


@dataclass(frozen=True)
class ScreenConfig:
    """Default scene size (the host may resize at runtime)."""
    width: int
    height: int


@dataclass(frozen=True)
class PaddleConfig:
    """Paddle geometry."""
    width: float
    height: float
    bottom_offset: float     # Distance from screen bottom to paddle base
    clamp_to_screen: bool    # Keep paddle center inside the screen bounds

    @property
    def size(self) -> Tuple[float, float]:
        return (self.width, self.height)


@dataclass(frozen=True)
class BlockConfig:
    """Falling block geometry and motion."""
    width: float
    height: float
    spawn_margin: float      # Keeps spawn X away from the screen edges
    fall_duration: float     # Seconds from screen top to exit line
    exit_offset: float       # Exit line sits this far below the screen bottom
    rotation_angle: float    # Radians per rotation_duration
    rotation_duration: float

    @property
    def size(self) -> Tuple[float, float]:
        return (self.width, self.height)

    @property
    def angular_velocity(self) -> float:
        """Continuous spin rate in radians per second."""
        return self.rotation_angle / self.rotation_duration


@dataclass(frozen=True)
class TimingConfig:
    """Scheduled action periods and delays."""
    spawn_interval: float
    restart_delay: float
    transition_duration: float
    max_step: float


@dataclass(frozen=True)
class ColorConfig:
    """A single selectable color."""
    id: int
    name: str
    rgb: Tuple[int, int, int]


@dataclass(frozen=True)
class PaletteConfig:
    """Background and selectable colors."""
    background: Tuple[int, int, int]
    colors: Tuple[ColorConfig, ...]


@dataclass(frozen=True)
class LabelConfig:
    """Label layout and active locale."""
    locale: str
    color: Tuple[int, int, int]
    main_label_offset: float
    score_label_offset: float
    main_font_size: int
    score_font_size: int


@dataclass(frozen=True)
class GameConfig:
    """
    Complete game configuration loaded from YAML.

    All values are immutable to prevent accidental modification during runtime.
    """
    screen: ScreenConfig
    paddle: PaddleConfig
    block: BlockConfig
    timing: TimingConfig
    palette: PaletteConfig
    labels: LabelConfig
    strings: Dict[str, Dict[str, str]]

    @property
    def num_colors(self) -> int:
        """Number of colors the paddle cycles through."""
        return len(self.palette.colors)

    def get_color(self, color_id: int) -> ColorConfig:
        """Get color config by ID."""
        if 0 <= color_id < len(self.palette.colors):
            return self.palette.colors[color_id]
        raise ValueError(f"Invalid color ID: {color_id}")


REQUIRED_STRING_KEYS = ("start", "game_over", "score")


def _parse_color(color_data: List) -> Tuple[int, int, int]:
    """Parse RGB color from YAML."""
    if len(color_data) != 3:
        raise ValueError(f"Color must have 3 values [R, G, B], got {color_data}")
    rgb = (int(color_data[0]), int(color_data[1]), int(color_data[2]))
    for channel in rgb:
        if not 0 <= channel <= 255:
            raise ValueError(f"Color channel out of range [0, 255]: {color_data}")
    return rgb


def _parse_palette(palette_data: dict) -> PaletteConfig:
    colors = tuple(
        ColorConfig(
            id=int(c["id"]),
            name=str(c["name"]),
            rgb=_parse_color(c["rgb"]),
        )
        for c in palette_data["colors"]
    )
    return PaletteConfig(
        background=_parse_color(palette_data.get("background", [51, 51, 51])),
        colors=colors,
    )


def _validate_config(config: GameConfig) -> None:
    """Validate configuration consistency."""
    # Color IDs double as the paddle's selection index
    for i, color in enumerate(config.palette.colors):
        if color.id != i:
            raise ValueError(f"Color ID mismatch: expected {i}, got {color.id}")

    if config.num_colors < 2:
        raise ValueError(f"Palette needs at least 2 colors, got {config.num_colors}")

    positive = {
        "screen.width": config.screen.width,
        "screen.height": config.screen.height,
        "paddle.width": config.paddle.width,
        "paddle.height": config.paddle.height,
        "block.width": config.block.width,
        "block.height": config.block.height,
        "block.fall_duration": config.block.fall_duration,
        "block.rotation_duration": config.block.rotation_duration,
        "timing.spawn_interval": config.timing.spawn_interval,
        "timing.max_step": config.timing.max_step,
    }
    for name, value in positive.items():
        if value <= 0:
            raise ValueError(f"{name} must be positive, got {value}")

    for name in ("restart_delay", "transition_duration"):
        value = getattr(config.timing, name)
        if value < 0:
            raise ValueError(f"timing.{name} must not be negative, got {value}")

    if config.labels.locale not in config.strings:
        raise ValueError(
            f"Locale '{config.labels.locale}' has no entry in strings "
            f"(available: {sorted(config.strings)})"
        )

    for locale, table in config.strings.items():
        missing = [key for key in REQUIRED_STRING_KEYS if key not in table]
        if missing:
            raise ValueError(f"strings.{locale} is missing keys: {missing}")


def load_config(config_path: Optional[str] = None) -> GameConfig:
    """
    Load and validate game configuration from YAML.

    Args:
        config_path: Path to game_config.yaml. If None, uses default location.

    Returns:
        Validated GameConfig instance.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ValueError: If config validation fails.
    """
    if config_path is None:
        config_path = os.path.join(
            os.path.dirname(os.path.dirname(__file__)),
            "game_config.yaml"
        )

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)

    screen_data = raw["screen"]
    screen = ScreenConfig(
        width=int(screen_data["width"]),
        height=int(screen_data["height"])
    )

    paddle_data = raw["paddle"]
    paddle = PaddleConfig(
        width=float(paddle_data["width"]),
        height=float(paddle_data["height"]),
        bottom_offset=float(paddle_data.get("bottom_offset", 250.0)),
        clamp_to_screen=bool(paddle_data.get("clamp_to_screen", True))
    )

    block_data = raw["block"]
    block = BlockConfig(
        width=float(block_data["width"]),
        height=float(block_data["height"]),
        spawn_margin=float(block_data.get("spawn_margin", 16.0)),
        fall_duration=float(block_data["fall_duration"]),
        exit_offset=float(block_data.get("exit_offset", 200.0)),
        rotation_angle=float(block_data.get("rotation_angle", 2.0)),
        rotation_duration=float(block_data.get("rotation_duration", 1.0))
    )

    timing_data = raw["timing"]
    timing = TimingConfig(
        spawn_interval=float(timing_data["spawn_interval"]),
        restart_delay=float(timing_data["restart_delay"]),
        transition_duration=float(timing_data.get("transition_duration", 1.0)),
        max_step=float(timing_data.get("max_step", 1.0 / 60.0))
    )

    palette = _parse_palette(raw["palette"])

    labels_data = raw.get("labels", {})
    labels = LabelConfig(
        locale=str(labels_data.get("locale", "en")),
        color=_parse_color(labels_data.get("color", [250, 250, 250])),
        main_label_offset=float(labels_data.get("main_label_offset", 250.0)),
        score_label_offset=float(labels_data.get("score_label_offset", 150.0)),
        main_font_size=int(labels_data.get("main_font_size", 100)),
        score_font_size=int(labels_data.get("score_font_size", 50))
    )

    strings = {
        str(locale): {str(k): str(v) for k, v in table.items()}
        for locale, table in raw["strings"].items()
    }

    config = GameConfig(
        screen=screen,
        paddle=paddle,
        block=block,
        timing=timing,
        palette=palette,
        labels=labels,
        strings=strings
    )

    _validate_config(config)
    return config


# Module-level singleton for convenience
_cached_config: Optional[GameConfig] = None


def get_config() -> GameConfig:
    """Get the cached game configuration, loading if necessary."""
    global _cached_config
    if _cached_config is None:
        _cached_config = load_config()
    return _cached_config


def reload_config(config_path: Optional[str] = None) -> GameConfig:
    """Reload the configuration (useful for testing)."""
    global _cached_config
    _cached_config = load_config(config_path)
    return _cached_config
