"""
Colors Core - The game simulation.

Host-driven and headless: the host forwards touch events and frame ticks
to a GameLoop and draws what get_render_data() describes.

Main exports:
- GameLoop: Host-facing entry point (on_init, on_tick, on_touch_*)
- GameScene: A single game from start to game over
- GameState: Score and alive / game over flags
- GameConfig: Configuration loaded from game_config.yaml
- SolidRenderer: numpy renderer for headless frames
"""

from colors_to_collect.core.config_loader import GameConfig, load_config
from colors_to_collect.core.game_state import GameState, Phase
from colors_to_collect.core.palette import ColorPalette, ColorSelector
from colors_to_collect.core.playfield import (
    CATEGORY_BLOCK,
    CATEGORY_PADDLE,
    FallingBlock,
    Frame,
    Paddle,
    PlayField,
)
from colors_to_collect.core.rules import ContactResult
from colors_to_collect.core.scene import GameEvent, GameScene
from colors_to_collect.core.game_loop import GameLoop
from colors_to_collect.core.render_solid import SolidRenderer

__all__ = [
    "GameConfig",
    "load_config",
    "GameState",
    "Phase",
    "ColorPalette",
    "ColorSelector",
    "CATEGORY_BLOCK",
    "CATEGORY_PADDLE",
    "FallingBlock",
    "Frame",
    "Paddle",
    "PlayField",
    "ContactResult",
    "GameEvent",
    "GameScene",
    "GameLoop",
    "SolidRenderer",
]
