"""
Labels
======

Localized label text and label placement for the start, game over
and score labels.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional, Tuple

from colors_to_collect.core.config_loader import GameConfig, get_config


@dataclass
class Label:
    """A text label the host should draw."""
    text: str
    position: Tuple[float, float]
    font_size: int
    color: Tuple[int, int, int]

    def to_dict(self) -> Dict:
        return {
            "text": self.text,
            "x": self.position[0],
            "y": self.position[1],
            "font_size": self.font_size,
            "color": self.color,
        }


class Localizer:
    """String lookup for one locale."""

    def __init__(self, config: Optional[GameConfig] = None, locale: Optional[str] = None):
        if config is None:
            config = get_config()
        if locale is None:
            locale = config.labels.locale
        if locale not in config.strings:
            raise ValueError(f"Unknown locale: {locale}")

        self._locale = locale
        self._table = config.strings[locale]

    @property
    def locale(self) -> str:
        return self._locale

    def get(self, key: str) -> str:
        """Localized string for key; the key itself if the table lacks it."""
        return self._table.get(key, key)

    def score_text(self, score: int) -> str:
        """Score label text: localized prefix followed by the integer score."""
        return f"{self.get('score')}{score}"


class LabelFactory:
    """Builds the scene's labels at their configured positions."""

    def __init__(self, config: Optional[GameConfig] = None, localizer: Optional[Localizer] = None):
        if config is None:
            config = get_config()
        self._config = config
        self._localizer = localizer or Localizer(config)

    @property
    def localizer(self) -> Localizer:
        return self._localizer

    def main_label(self, key: str, mid_x: float, max_y: float) -> Label:
        labels = self._config.labels
        return Label(
            text=self._localizer.get(key),
            position=(mid_x, max_y - labels.main_label_offset),
            font_size=labels.main_font_size,
            color=labels.color,
        )

    def score_label(self, score: int, mid_x: float, min_y: float) -> Label:
        labels = self._config.labels
        return Label(
            text=self._localizer.score_text(score),
            position=(mid_x, min_y + labels.score_label_offset),
            font_size=labels.score_font_size,
            color=labels.color,
        )
