"""
Color Palette
=============

Provides the selectable colors loaded from config and the paddle's
color selector, which cycles through them on every tap.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from colors_to_collect.core.config_loader import GameConfig, ColorConfig, get_config


@dataclass(frozen=True)
class GameColor:
    """
    Runtime representation of a selectable color.

    Wraps ColorConfig with convenience accessors.
    """
    config: ColorConfig

    @property
    def id(self) -> int:
        return self.config.id

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def rgb(self) -> Tuple[int, int, int]:
        return self.config.rgb

    def __repr__(self) -> str:
        return f"GameColor({self.id}: {self.name})"


class ColorPalette:
    """
    Ordered collection of the colors a paddle can select and a block can carry.

    Index 0 is the base color the paddle starts with.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize palette from game config.

        Args:
            config: GameConfig instance. If None, loads from default location.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._colors: Tuple[GameColor, ...] = tuple(
            GameColor(color_config) for color_config in config.palette.colors
        )

    def __len__(self) -> int:
        return len(self._colors)

    def __getitem__(self, color_id: int) -> GameColor:
        """Get color by ID."""
        if 0 <= color_id < len(self._colors):
            return self._colors[color_id]
        raise IndexError(f"Color ID {color_id} out of range [0, {len(self._colors)})")

    def __iter__(self):
        return iter(self._colors)

    @property
    def base(self) -> GameColor:
        """The color a fresh paddle starts with."""
        return self._colors[0]

    @property
    def background(self) -> Tuple[int, int, int]:
        return self._config.palette.background

    def next_id(self, color_id: int) -> int:
        """ID that follows color_id in the tap cycle, wrapping to 0."""
        return (self[color_id].id + 1) % len(self._colors)


class ColorSelector:
    """
    The paddle's active matching color.

    Starts at the base color; each cycle() advances by one and wraps, so
    three consecutive cycles on a three-color palette return to the start.
    """

    def __init__(self, palette: ColorPalette, selection: int = 0):
        self._palette = palette
        self._selection = palette[selection].id

    @property
    def selection(self) -> int:
        return self._selection

    @selection.setter
    def selection(self, value: int) -> None:
        self._selection = self._palette[value].id

    @property
    def color(self) -> GameColor:
        return self._palette[self._selection]

    def cycle(self) -> int:
        """Advance to the next color and return the new selection."""
        self._selection = self._palette.next_id(self._selection)
        return self._selection

    def matches(self, color_id: int) -> bool:
        return self._selection == color_id

    def reset(self) -> None:
        self._selection = self._palette.base.id
