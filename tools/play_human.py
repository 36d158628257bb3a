"""
Human Play Mode
================

Play Colors to Collect in a window, with the mouse standing in for touch.

Controls:
    - Mouse drag: Move the paddle (the first press starts the game)
    - Mouse release: Cycle the paddle color
    - R: Start a new game
    - ESC: Quit

Usage:
    python -m tools.play_human [--seed SEED] [--scale SCALE] [--locale LOCALE]
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
import math
import sys
from typing import Dict, Optional, Tuple

try:
    import pygame
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False

from colors_to_collect.core.config_loader import load_config, GameConfig
from colors_to_collect.core.game_loop import GameLoop
from colors_to_collect.core.scene import GameEvent


class SceneRenderer:
    """
    Draws render data from GameLoop onto a pygame surface.
    World coordinates have y growing upward; the window is scaled to fit.
    """

    def __init__(self, config: GameConfig, window_width: int, window_height: int):
        self._config = config
        self._window_width = window_width
        self._window_height = window_height

        pygame.font.init()
        self._fonts: Dict[int, pygame.font.Font] = {}

        self._scale = 1.0
        self._offset_x = 0.0
        self._offset_y = 0.0
        self._frame: dict = {}

    def _font(self, size: int) -> pygame.font.Font:
        """Futura when installed, pygame's default font otherwise."""
        pixel_size = max(8, int(size * self._scale))
        if pixel_size not in self._fonts:
            self._fonts[pixel_size] = pygame.font.SysFont("futura", pixel_size)
        return self._fonts[pixel_size]

    def _layout(self, frame: dict) -> None:
        frame_width = frame["max_x"] - frame["min_x"]
        frame_height = frame["max_y"] - frame["min_y"]
        self._scale = min(self._window_width / frame_width, self._window_height / frame_height)
        self._offset_x = (self._window_width - frame_width * self._scale) / 2
        self._offset_y = (self._window_height - frame_height * self._scale) / 2
        self._frame = frame

    def _world_to_screen(self, x: float, y: float) -> Tuple[int, int]:
        """Convert world coordinates to screen pixels (Y is flipped)."""
        sx = self._offset_x + (x - self._frame["min_x"]) * self._scale
        sy = self._window_height - (self._offset_y + (y - self._frame["min_y"]) * self._scale)
        return int(sx), int(sy)

    def screen_to_world(self, render_data: dict, sx: int, sy: int) -> Tuple[float, float]:
        """Convert a screen pixel to world coordinates."""
        self._layout(render_data["frame"])
        x = self._frame["min_x"] + (sx - self._offset_x) / self._scale
        y = self._frame["min_y"] + (self._window_height - sy - self._offset_y) / self._scale
        return x, y

    def render(self, screen: pygame.Surface, render_data: dict) -> None:
        """Render the current scene, cross-fading from the previous one if needed."""
        self._draw_scene(screen, render_data)

        transition = render_data.get("transition")
        if transition:
            overlay = pygame.Surface((self._window_width, self._window_height))
            self._draw_scene(overlay, transition["previous"])
            overlay.set_alpha(int(255 * (1.0 - transition["progress"])))
            screen.blit(overlay, (0, 0))

    def _draw_scene(self, surface: pygame.Surface, render_data: dict) -> None:
        self._layout(render_data["frame"])
        surface.fill(render_data["background"])

        for block in render_data["blocks"]:
            self._draw_rect(surface, block, block["angle"])

        paddle = render_data["paddle"]
        if paddle is not None:
            self._draw_rect(surface, paddle, 0.0)

        for key in ("main_label", "score_label"):
            label = render_data.get(key)
            if label is not None:
                self._draw_label(surface, label)

    def _draw_rect(self, surface: pygame.Surface, body: dict, angle: float) -> None:
        width = max(1, int(body["width"] * self._scale))
        height = max(1, int(body["height"] * self._scale))
        center = self._world_to_screen(body["x"], body["y"])

        if angle == 0.0:
            rect = pygame.Rect(0, 0, width, height)
            rect.center = center
            pygame.draw.rect(surface, body["rgb"], rect)
            return

        sprite = pygame.Surface((width, height), pygame.SRCALPHA)
        sprite.fill(body["rgb"])
        rotated = pygame.transform.rotate(sprite, math.degrees(angle))
        surface.blit(rotated, rotated.get_rect(center=center))

    def _draw_label(self, surface: pygame.Surface, label: dict) -> None:
        text = self._font(label["font_size"]).render(label["text"], True, label["color"])
        # Label positions mark the text baseline center
        cx, baseline = self._world_to_screen(label["x"], label["y"])
        surface.blit(text, text.get_rect(midbottom=(cx, baseline)))


class HumanPlayer:
    """
    Human-playable game: forwards mouse input to a GameLoop and ticks it
    in real time.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        seed: Optional[int] = None,
        scale: float = 0.5,
        target_fps: int = 60
    ):
        if not PYGAME_AVAILABLE:
            raise ImportError("pygame required. Install: pip install pygame")

        if config is None:
            config = load_config()

        self._config = config
        self._target_fps = target_fps
        self._window_width = int(config.screen.width * scale)
        self._window_height = int(config.screen.height * scale)

        self._loop = GameLoop(config=config, seed=seed, listener=self._on_event)
        self._loop.on_init()

        pygame.init()
        self._screen = pygame.display.set_mode((self._window_width, self._window_height))
        pygame.display.set_caption("Colors to Collect")
        self._clock = pygame.time.Clock()

        self._renderer = SceneRenderer(config, self._window_width, self._window_height)

        self._running = True
        self._best_score = 0

    def run(self) -> int:
        """Run the game loop. Returns the best score of the session."""
        print("=== Colors to Collect ===")
        print("Drag to move, release to change color")
        print("R to restart, ESC to quit")
        print()

        while self._running:
            dt = self._clock.tick(self._target_fps) / 1000.0
            self._handle_events()
            self._loop.on_tick(dt)
            self._render()

        pygame.quit()
        return self._best_score

    def _on_event(self, event: GameEvent) -> None:
        if event.kind == "started":
            print("Game started")
        elif event.kind == "scored":
            print(f"  +1 (Total: {event.score})")
        elif event.kind == "game_over":
            self._best_score = max(self._best_score, event.score)
            print(f"\nGAME OVER - Score: {event.score}")
        elif event.kind == "restarted":
            print("\n=== Game Restarted ===\n")

    def _to_world(self, pos: Tuple[int, int]) -> Tuple[float, float]:
        return self._renderer.screen_to_world(self._loop.get_render_data(), pos[0], pos[1])

    def _handle_events(self) -> None:
        """Process pygame events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._running = False

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._running = False
                elif event.key == pygame.K_r:
                    self._loop.on_init()
                    print("\n=== Game Restarted ===\n")

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._loop.on_touch_down(self._to_world(event.pos))

            elif event.type == pygame.MOUSEMOTION and event.buttons[0]:
                self._loop.on_touch_move(self._to_world(event.pos))

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self._loop.on_touch_up(self._to_world(event.pos))

    def _render(self) -> None:
        self._renderer.render(self._screen, self._loop.get_render_data())
        pygame.display.flip()


def main():
    parser = argparse.ArgumentParser(description="Play Colors to Collect interactively")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--scale", type=float, default=0.5, help="Window scale relative to the scene size")
    parser.add_argument("--fps", type=int, default=60, help="Target FPS")
    parser.add_argument("--locale", type=str, default=None, help="Label language (e.g. en, es, fr)")
    parser.add_argument("--config", type=str, default=None, help="Path to a game_config.yaml")
    parser.add_argument("--verbose", action="store_true", help="Show game log messages")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    try:
        config = load_config(args.config)
        if args.locale is not None:
            if args.locale not in config.strings:
                raise ValueError(f"Unknown locale: {args.locale}")
            config = dataclasses.replace(
                config,
                labels=dataclasses.replace(config.labels, locale=args.locale)
            )
        player = HumanPlayer(
            config=config,
            seed=args.seed,
            scale=args.scale,
            target_fps=args.fps
        )
        score = player.run()
        print(f"\nBest Score: {score}")
        return 0
    except (ImportError, FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
