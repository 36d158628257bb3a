"""
Game Scene
==========

One game instance: state, paddle, falling blocks, labels and the timers
that drive them. A finished scene is never reused; the game loop builds a
fresh one for the next game.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple, Union

from colors_to_collect.core.config_loader import GameConfig, get_config
from colors_to_collect.core.game_state import GameState, Phase
from colors_to_collect.core.labels import Label, LabelFactory
from colors_to_collect.core.palette import ColorPalette, ColorSelector
from colors_to_collect.core.playfield import FallingBlock, Frame, Paddle, PlayField
from colors_to_collect.core.rules import ContactResult, ContactRules, SpawnRules
from colors_to_collect.core.scheduler import TIME_EPSILON, ActionScheduler, ScheduledAction

logger = logging.getLogger(__name__)

TouchPoint = Union[float, Sequence[float]]


@dataclass
class GameEvent:
    """Notification sent to the host listener."""
    kind: str                  # "started", "scored", "game_over", "restarted"
    score: int
    detail: Dict[str, Any] = field(default_factory=dict)


def touch_x(point: TouchPoint) -> float:
    """X coordinate of a touch given as (x, y) or a bare x."""
    if isinstance(point, (int, float)):
        return float(point)
    return float(point[0])


class GameScene:
    """
    A single game from "Start!" to "Game Over".

    Orchestrates:
    - Game state (INIT -> PLAYING -> GAME_OVER)
    - Paddle movement and color cycling from touch input
    - Block spawning on a repeating timer
    - Paddle / block overlap and its outcome
    - The delayed restart request after game over

    Time only moves through tick(dt).
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        frame: Optional[Frame] = None,
        on_restart: Optional[Callable[["GameScene"], None]] = None,
        listener: Optional[Callable[[GameEvent], None]] = None
    ):
        """
        Initialize scene.

        Args:
            config: Game configuration. Uses default if None.
            seed: Random seed for block positions and colors.
            frame: Scene bounds. Uses the configured screen size if None.
            on_restart: Called with this scene when its restart delay ends.
            listener: Optional callback receiving GameEvents.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._on_restart = on_restart
        self._listener = listener

        if frame is None:
            frame = Frame.from_size(config.screen.width, config.screen.height)
        self._frame = frame

        # Subsystems
        self._palette = ColorPalette(config)
        self._selector = ColorSelector(self._palette)
        self._labels = LabelFactory(config)
        self._spawn_rules = SpawnRules(config, seed)
        self._contact_rules = ContactRules()
        self._field = PlayField(config)
        self._scheduler = ActionScheduler()

        # Scene state
        self._state = GameState()
        self._main_label_key: Optional[str] = None
        self._latest_block: Optional[FallingBlock] = None
        self._touch_location: Optional[Tuple[float, float]] = None
        self._spawn_action: Optional[ScheduledAction] = None
        self._restart_action: Optional[ScheduledAction] = None
        self._elapsed: float = 0.0
        self._retired: bool = False

        self.paddle_start_y: float = self._spawn_rules.paddle_y(frame)

        self._setup()

    def _setup(self) -> None:
        """Put the scene in its initial state: start label, score label, paddle."""
        self._main_label_key = "start"
        self._field.spawn_paddle(
            self._frame.mid_x,
            self.paddle_start_y,
            self._selector.selection
        )

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def phase(self) -> Phase:
        return self._state.phase

    @property
    def score(self) -> int:
        return self._state.score

    @property
    def is_alive(self) -> bool:
        return self._state.is_alive

    @property
    def is_game_over(self) -> bool:
        return self._state.is_game_over

    @property
    def palette(self) -> ColorPalette:
        return self._palette

    @property
    def color_selection(self) -> int:
        """The paddle's active matching color."""
        return self._selector.selection

    @color_selection.setter
    def color_selection(self, value: int) -> None:
        self._selector.selection = value
        if self.paddle is not None:
            self.paddle.color_id = self._selector.selection

    @property
    def field(self) -> PlayField:
        return self._field

    @property
    def scheduler(self) -> ActionScheduler:
        return self._scheduler

    @property
    def paddle(self) -> Optional[Paddle]:
        """The live paddle, or None once it has been removed."""
        return self._field.paddle

    @property
    def blocks(self) -> List[FallingBlock]:
        """Falling blocks in spawn order."""
        return list(self._field.blocks.values())

    @property
    def falling_block(self) -> Optional[FallingBlock]:
        """The most recently spawned block, while it is still falling."""
        block = self._latest_block
        if block is not None and block.active:
            return block
        return None

    @property
    def frame(self) -> Frame:
        return self._frame

    @property
    def screen_min(self) -> float:
        return self._frame.min_x

    @property
    def screen_max(self) -> float:
        return self._frame.max_x

    @property
    def touch_location(self) -> Optional[Tuple[float, float]]:
        return self._touch_location

    @property
    def elapsed(self) -> float:
        """Simulated seconds since the scene was created."""
        return self._elapsed

    @property
    def spawn_timer_running(self) -> bool:
        return self._spawn_action is not None and not self._spawn_action.cancelled

    @property
    def restart_pending(self) -> bool:
        return self._restart_action is not None and not self._restart_action.cancelled

    @property
    def retired(self) -> bool:
        return self._retired

    @property
    def main_label(self) -> Optional[Label]:
        """The start or game over label, or None while playing."""
        if self._main_label_key is None:
            return None
        return self._labels.main_label(
            self._main_label_key, self._frame.mid_x, self._frame.max_y
        )

    @property
    def score_label(self) -> Label:
        return self._labels.score_label(
            self._state.score, self._frame.mid_x, self._frame.min_y
        )

    # ------------------------------------------------------------------
    # Bounds
    # ------------------------------------------------------------------

    def resize(self, width: float, height: float) -> None:
        """Resize the scene; the paddle keeps its X and moves to the new fixed height."""
        self._frame = Frame.from_size(width, height)
        self.paddle_start_y = self._spawn_rules.paddle_y(self._frame)
        self.set_paddle_y_position()

    def set_screen_bounds(self, screen_min: float, screen_max: float) -> None:
        """Override the horizontal bounds used for spawning and clamping."""
        self._frame = self._frame.with_x_bounds(screen_min, screen_max)

    # ------------------------------------------------------------------
    # Input
    # ------------------------------------------------------------------

    def touch_down(self, point: TouchPoint) -> None:
        """A touch began. The first touch starts the game."""
        if self._state.is_game_over:
            return

        if not self._state.is_alive:
            self._start()

        self._follow_touch(point)

    def touch_move(self, point: TouchPoint) -> None:
        """A touch moved; the paddle follows it horizontally."""
        if self._state.is_game_over:
            return
        self._follow_touch(point)

    def touch_up(self, point: Optional[TouchPoint] = None) -> None:
        """A touch ended; the paddle switches to the next color."""
        if self._state.is_game_over:
            return
        if point is not None:
            self._record_touch(point)
        self.change_paddle_color()

    def _record_touch(self, point: TouchPoint) -> float:
        x = touch_x(point)
        if isinstance(point, (int, float)):
            y = self._touch_location[1] if self._touch_location else 0.0
        else:
            y = float(point[1]) if len(point) > 1 else 0.0
        self._touch_location = (x, y)
        return x

    def _follow_touch(self, point: TouchPoint) -> None:
        x = self._record_touch(point)
        if self._state.is_alive:
            if self.paddle is not None:
                self.paddle.x = self._spawn_rules.paddle_x(x, self._frame)
        else:
            self.move_paddle_off_screen()

    def move_paddle_off_screen(self) -> None:
        """Park the paddle left of the screen unless a game is running."""
        if self._state.is_alive or self.paddle is None:
            return
        self.paddle.x = self._spawn_rules.off_screen_x(self._frame)

    def change_paddle_color(self) -> int:
        """Cycle the paddle to its next color and return the new selection."""
        selection = self._selector.cycle()
        if self.paddle is not None:
            self.paddle.color_id = selection
        return selection

    def set_paddle_y_position(self) -> None:
        """Pin the paddle to its fixed height."""
        if self.paddle is not None:
            self.paddle.y = self.paddle_start_y

    # ------------------------------------------------------------------
    # Game flow
    # ------------------------------------------------------------------

    def _start(self) -> None:
        if not self._state.start():
            return
        self._main_label_key = None
        self.start_spawn_timer()
        logger.info("Game started")
        self._emit("started")

    def start_spawn_timer(self) -> ScheduledAction:
        """Spawn a block every spawn_interval seconds while the game is alive."""
        if self.spawn_timer_running:
            return self._spawn_action
        self._spawn_action = self._scheduler.every(
            self._config.timing.spawn_interval,
            self._on_spawn_timer,
            name="spawn"
        )
        return self._spawn_action

    def _on_spawn_timer(self) -> None:
        if self._state.is_alive:
            self.spawn_falling_block()

    def spawn_falling_block(
        self,
        color_id: Optional[int] = None,
        x: Optional[float] = None
    ) -> FallingBlock:
        """
        Spawn a block at the top of the screen and start its descent.

        Args:
            color_id: Block color. Uniform random if None.
            x: Spawn X. Uniform random in the spawn range if None.

        Returns:
            The spawned FallingBlock.
        """
        if color_id is None:
            color_id = self._spawn_rules.random_color()
        else:
            color_id = self._palette[color_id].id
        if x is None:
            x = self._spawn_rules.random_x(self._frame)

        block = self._field.spawn_block(
            color_id,
            x,
            self._spawn_rules.spawn_y(self._frame),
            self._spawn_rules.exit_y(self._frame)
        )
        self._latest_block = block
        logger.debug("Spawned block %d (color %d) at x=%.1f", block.uid, color_id, x)
        return block

    def handle_collision(
        self,
        first: Union[Paddle, FallingBlock],
        second: Union[Paddle, FallingBlock]
    ) -> ContactResult:
        """
        Apply the outcome of a paddle / block contact.

        A matching color scores a point and removes the block. Any other
        color removes the paddle and ends the game. Contacts outside PLAYING,
        or that do not involve the live paddle and an active block, change
        nothing.
        """
        if not self._state.is_alive:
            return ContactResult.ignore("not_playing")

        result = self._contact_rules.resolve(
            first, second, self.paddle, self._selector.selection
        )

        if result.caught:
            self._state.record_catch()
            self._field.remove_block(result.block_uid)
            logger.debug("Caught block %d, score %d", result.block_uid, self._state.score)
            self._emit("scored", block_uid=result.block_uid, color=result.block_color)
        elif result.mismatch:
            self._field.remove_paddle()
            self.game_over(block_uid=result.block_uid, color=result.block_color)

        return result

    def game_over(self, **detail: Any) -> None:
        """End the game and schedule the restart request."""
        if not self._state.end():
            return

        self._main_label_key = "game_over"
        self._restart_action = self._scheduler.after(
            self._config.timing.restart_delay,
            self._request_restart,
            name="restart"
        )
        logger.info("Game over with score %d", self._state.score)
        self._emit("game_over", **detail)

    def _request_restart(self) -> None:
        if self._on_restart is not None and not self._retired:
            self._on_restart(self)

    def retire(self) -> None:
        """Mark this scene as replaced; it drops its timers and stops ticking."""
        self._retired = True
        self._scheduler.clear()

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def tick(self, dt: float) -> None:
        """
        Advance the scene by dt seconds in sub-steps of at most max_step.

        Raises:
            ValueError: If dt is negative.
        """
        if dt < 0:
            raise ValueError(f"dt must not be negative, got {dt}")

        max_step = self._config.timing.max_step
        remaining = dt
        while remaining > TIME_EPSILON and not self._retired:
            step = min(max_step, remaining)
            remaining -= step
            self._substep(step)

        if not self._retired:
            self.set_paddle_y_position()

    def _substep(self, dt: float) -> None:
        self._elapsed += dt
        self._scheduler.advance(dt)
        if self._retired:
            return

        self._field.step(dt)
        self.set_paddle_y_position()
        self._detect_collisions()
        self._field.retire_finished()

    def _detect_collisions(self) -> None:
        for block in self._field.overlapping_blocks():
            paddle = self.paddle
            if paddle is None:
                break
            self.handle_collision(paddle, block)

    def _emit(self, kind: str, **detail: Any) -> None:
        if self._listener is not None:
            self._listener(GameEvent(kind=kind, score=self._state.score, detail=detail))

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def get_render_data(self) -> Dict[str, Any]:
        """
        Get data needed for rendering.

        Returns:
            Dict with bounds, paddle, blocks and labels.
        """
        paddle = self.paddle
        paddle_data = None
        if paddle is not None:
            paddle_data = {
                "x": paddle.x,
                "y": paddle.y,
                "width": paddle.size[0],
                "height": paddle.size[1],
                "color_id": paddle.color_id,
                "rgb": self._palette[paddle.color_id].rgb,
            }

        blocks_data = []
        for block in self._field.blocks.values():
            blocks_data.append({
                "uid": block.uid,
                "x": block.x,
                "y": block.y,
                "angle": block.angle,
                "width": block.size[0],
                "height": block.size[1],
                "color_id": block.color_id,
                "rgb": self._palette[block.color_id].rgb,
            })

        main_label = self.main_label
        return {
            "frame": {
                "min_x": self._frame.min_x,
                "min_y": self._frame.min_y,
                "max_x": self._frame.max_x,
                "max_y": self._frame.max_y,
            },
            "background": self._palette.background,
            "phase": self.phase.name,
            "score": self._state.score,
            "color_selection": self._selector.selection,
            "paddle": paddle_data,
            "blocks": blocks_data,
            "main_label": main_label.to_dict() if main_label is not None else None,
            "score_label": self.score_label.to_dict(),
        }
