"""
Game Rules
==========

Handles paddle and block positioning, random block generation and the
outcome of a paddle / block contact.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from colors_to_collect.core.config_loader import GameConfig, get_config
from colors_to_collect.core.playfield import (
    CATEGORY_PADDLE,
    FallingBlock,
    Frame,
    Paddle,
)

logger = logging.getLogger(__name__)

Body = Union[Paddle, FallingBlock]


@dataclass
class ContactResult:
    """Result of a paddle / block contact."""
    outcome: str              # "ignored", "caught" or "mismatch"
    block_uid: int = -1
    block_color: int = -1
    selection: int = -1
    reason: str = ""

    @property
    def caught(self) -> bool:
        return self.outcome == "caught"

    @property
    def mismatch(self) -> bool:
        return self.outcome == "mismatch"

    @property
    def ignored(self) -> bool:
        return self.outcome == "ignored"

    @staticmethod
    def ignore(reason: str) -> "ContactResult":
        return ContactResult("ignored", reason=reason)

    @staticmethod
    def catch(block: FallingBlock, selection: int) -> "ContactResult":
        return ContactResult("caught", block.uid, block.color_id, selection)

    @staticmethod
    def miss(block: FallingBlock, selection: int) -> "ContactResult":
        return ContactResult("mismatch", block.uid, block.color_id, selection)


class SpawnRules:
    """
    Handles paddle and block placement.

    Blocks spawn at a uniform random X in [min_x + margin, max_x - margin)
    on the top edge of the screen and leave through an exit line below the
    bottom edge. The paddle sits at a fixed height above the bottom edge.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None
    ):
        """
        Initialize spawn rules.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for reproducibility. Random if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._rng = random.Random(seed)
        self._num_colors = config.num_colors

    def get_spawn_x_range(self, frame: Frame) -> Tuple[float, float]:
        """
        Get the spawn X range for the given bounds.

        Returns:
            (min_x, max_x) tuple; max_x is exclusive.
        """
        margin = self._config.block.spawn_margin
        return (frame.min_x + margin, frame.max_x - margin)

    def random_x(self, frame: Frame) -> float:
        """Uniform random spawn X. Degenerate bounds fall back to the center."""
        min_x, max_x = self.get_spawn_x_range(frame)
        if min_x >= max_x:
            logger.warning(
                "Spawn range [%.1f, %.1f) is empty; spawning at center",
                min_x, max_x
            )
            return frame.mid_x
        return min_x + self._rng.random() * (max_x - min_x)

    def random_color(self) -> int:
        """Uniform random color index."""
        return self._rng.randrange(self._num_colors)

    def spawn_y(self, frame: Frame) -> float:
        """Y coordinate for spawning (screen top)."""
        return frame.max_y

    def exit_y(self, frame: Frame) -> float:
        """Y coordinate where a block's descent ends."""
        return frame.min_y - self._config.block.exit_offset

    def paddle_y(self, frame: Frame) -> float:
        """Fixed paddle height."""
        paddle = self._config.paddle
        return frame.min_y + paddle.bottom_offset + paddle.height

    def paddle_x(self, touch_x: float, frame: Frame) -> float:
        """Paddle X for a touch, clamped to the screen if configured."""
        if not self._config.paddle.clamp_to_screen:
            return touch_x
        return max(frame.min_x, min(frame.max_x, touch_x))

    def off_screen_x(self, frame: Frame) -> float:
        """An X that puts the whole paddle left of the screen."""
        return frame.min_x - self._config.paddle.width


class ContactRules:
    """
    Decides what a paddle / block contact means.

    Bodies may arrive in either order. Contacts between two bodies of the
    same category, or involving anything other than the live paddle, are
    ignored.
    """

    def resolve(
        self,
        first: Body,
        second: Body,
        live_paddle: Optional[Paddle],
        selection: int
    ) -> ContactResult:
        """
        Classify a contact.

        Args:
            first: One body in the contact.
            second: The other body.
            live_paddle: The scene's current paddle.
            selection: The paddle's current color selection.

        Returns:
            ContactResult: caught on a color match, mismatch otherwise,
            ignored when the precondition fails.
        """
        if first.category == second.category:
            return ContactResult.ignore("same_category")

        if first.category == CATEGORY_PADDLE:
            paddle, block = first, second
        else:
            paddle, block = second, first

        if paddle is not live_paddle or not paddle.active:
            return ContactResult.ignore("not_live_paddle")

        if not block.active:
            return ContactResult.ignore("inactive_block")

        if selection == block.color_id:
            return ContactResult.catch(block, selection)
        return ContactResult.miss(block, selection)
