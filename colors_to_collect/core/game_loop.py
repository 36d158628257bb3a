"""
Game Loop
=========

Host-facing entry point. The host calls on_init once, on_tick every frame
and the on_touch_* hooks as input arrives; everything else happens inside.

After a game over the current scene asks for a restart once its delay has
elapsed. The loop then builds a fresh scene and cross-fades to it. Only
the current scene is ticked or receives input, and a restart request from
any other scene is ignored, so a replaced scene's timers can never touch
the new game.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

from colors_to_collect.core.config_loader import GameConfig, get_config
from colors_to_collect.core.game_state import GameState
from colors_to_collect.core.playfield import Frame
from colors_to_collect.core.scene import GameEvent, GameScene, TouchPoint

logger = logging.getLogger(__name__)


@dataclass
class SceneTransition:
    """Cross-fade from the previous scene's last frame to the new scene."""
    previous: Dict[str, Any]
    duration: float
    elapsed: float = 0.0

    @property
    def progress(self) -> float:
        """0.0 shows only the previous scene, 1.0 only the new one."""
        if self.duration <= 0:
            return 1.0
        return min(1.0, self.elapsed / self.duration)

    @property
    def done(self) -> bool:
        return self.progress >= 1.0

    def advance(self, dt: float) -> None:
        self.elapsed += dt


class GameLoop:
    """
    Owns the current game scene and drives it from host events.

    Usage:
        loop = GameLoop(seed=7)
        loop.on_init()
        loop.on_touch_down((x, y))
        loop.on_tick(1 / 60)
        data = loop.get_render_data()
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        listener: Optional[Callable[[GameEvent], None]] = None
    ):
        """
        Initialize the loop. No scene exists until on_init().

        Args:
            config: Game configuration. Uses default if None.
            seed: Seed for the sequence of per-game seeds. Random if None.
            listener: Optional callback receiving GameEvents from every game.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._seed = seed
        self._rng = random.Random(seed)
        self._listener = listener

        self._frame = Frame.from_size(config.screen.width, config.screen.height)
        self._scene: Optional[GameScene] = None
        self._transition: Optional[SceneTransition] = None
        self._games_played: int = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def scene(self) -> GameScene:
        """The current scene. Raises RuntimeError before on_init()."""
        if self._scene is None:
            raise RuntimeError("GameLoop.on_init() has not been called")
        return self._scene

    @property
    def state(self) -> GameState:
        return self.scene.state

    @property
    def score(self) -> int:
        return self.scene.score

    @property
    def is_alive(self) -> bool:
        return self.scene.is_alive

    @property
    def is_game_over(self) -> bool:
        return self.scene.is_game_over

    @property
    def games_played(self) -> int:
        """Number of scenes created, including the current one."""
        return self._games_played

    @property
    def transition(self) -> Optional[SceneTransition]:
        return self._transition

    @property
    def in_transition(self) -> bool:
        return self._transition is not None

    @property
    def frame(self) -> Frame:
        return self._frame

    # ------------------------------------------------------------------
    # Host hooks
    # ------------------------------------------------------------------

    def on_init(self) -> GameScene:
        """Build a new scene in the INIT phase, discarding any current one."""
        if self._scene is not None:
            self._scene.retire()
        self._transition = None
        self._scene = self._new_scene()
        return self._scene

    def on_tick(self, dt: float) -> None:
        """
        Advance the current scene by dt seconds.

        Raises:
            ValueError: If dt is negative.
        """
        if dt < 0:
            raise ValueError(f"dt must not be negative, got {dt}")

        if self._transition is not None:
            self._transition.advance(dt)
            if self._transition.done:
                self._transition = None

        self.scene.tick(dt)

    def on_touch_down(self, point: TouchPoint) -> None:
        self.scene.touch_down(point)

    def on_touch_move(self, point: TouchPoint) -> None:
        self.scene.touch_move(point)

    def on_touch_up(self, point: Optional[TouchPoint] = None) -> None:
        self.scene.touch_up(point)

    def on_resize(self, width: float, height: float) -> None:
        """Resize the play area; applies to the current and future scenes."""
        self._frame = Frame.from_size(width, height)
        if self._scene is not None:
            self._scene.resize(width, height)

    # ------------------------------------------------------------------
    # Restart
    # ------------------------------------------------------------------

    def _new_scene(self) -> GameScene:
        seed = self._rng.randrange(2 ** 32)
        self._games_played += 1
        logger.debug("Creating game %d (seed %d)", self._games_played, seed)
        return GameScene(
            config=self._config,
            seed=seed,
            frame=self._frame,
            on_restart=self._on_scene_restart,
            listener=self._listener
        )

    def _on_scene_restart(self, scene: GameScene) -> None:
        if scene is not self._scene:
            logger.debug("Ignoring restart request from a replaced scene")
            return
        self.restart()

    def restart(self) -> GameScene:
        """Replace the current scene with a fresh one and cross-fade to it."""
        previous = self.scene
        final_frame = previous.get_render_data()
        final_score = previous.score
        previous.retire()

        self._scene = self._new_scene()
        self._transition = SceneTransition(
            previous=final_frame,
            duration=self._config.timing.transition_duration
        )
        if self._transition.done:
            self._transition = None

        logger.info("Restarted after game with score %d", final_score)
        if self._listener is not None:
            self._listener(GameEvent(
                kind="restarted",
                score=0,
                detail={"previous_score": final_score}
            ))
        return self._scene

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def get_render_data(self) -> Dict[str, Any]:
        """
        Render data of the current scene, plus the cross-fade state.

        While a transition runs, "transition" holds {"progress", "previous"}
        where "previous" is the replaced scene's last render data.
        """
        data = self.scene.get_render_data()
        data["games_played"] = self._games_played
        if self._transition is not None:
            data["transition"] = {
                "progress": self._transition.progress,
                "previous": self._transition.previous,
            }
        else:
            data["transition"] = None
        return data

    def get_info(self) -> Dict[str, Any]:
        """Summary of the current game."""
        scene = self.scene
        return {
            "score": scene.score,
            "phase": scene.phase.name,
            "color_selection": scene.color_selection,
            "block_count": scene.field.block_count,
            "games_played": self._games_played,
            "elapsed": scene.elapsed,
        }
