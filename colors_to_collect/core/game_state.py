"""
Game State
==========

Score and the alive / game over flags, with the only transitions the game
allows:

    INIT --first touch--> PLAYING --mismatch--> GAME_OVER

A finished game never returns to PLAYING; the loop installs a fresh
GameState (INIT) instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto

logger = logging.getLogger(__name__)


class Phase(Enum):
    """Where a game is in its lifecycle."""
    INIT = auto()       # Waiting for the first touch
    PLAYING = auto()    # Blocks falling, paddle follows input
    GAME_OVER = auto()  # Terminal; input ignored until restart


@dataclass
class GameState:
    """
    Mutable per-game state.

    is_alive and is_game_over are never both True.
    """
    score: int = 0
    is_alive: bool = False
    is_game_over: bool = False

    @property
    def phase(self) -> Phase:
        if self.is_game_over:
            return Phase.GAME_OVER
        if self.is_alive:
            return Phase.PLAYING
        return Phase.INIT

    def start(self) -> bool:
        """INIT -> PLAYING. Returns False (no change) from any other phase."""
        if self.phase is not Phase.INIT:
            logger.warning("Ignoring start from %s", self.phase.name)
            return False
        self.is_alive = True
        return True

    def record_catch(self) -> int:
        """Add one point for a matching catch and return the new score."""
        if self.phase is not Phase.PLAYING:
            logger.warning("Ignoring catch in %s", self.phase.name)
            return self.score
        self.score += 1
        return self.score

    def end(self) -> bool:
        """PLAYING -> GAME_OVER. Returns False (no change) from any other phase."""
        if self.phase is not Phase.PLAYING:
            logger.warning("Ignoring end from %s", self.phase.name)
            return False
        self.is_alive = False
        self.is_game_over = True
        return True
