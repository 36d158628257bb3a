"""
Performance Benchmark
=====================

Measures game loop tick throughput with a scripted player, optionally
including the numpy renderer.

Usage:
    python -m tools.benchmark_speed [--games N] [--seconds S] [--render]
"""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import List, Optional

from colors_to_collect.core.config_loader import load_config, GameConfig
from colors_to_collect.core.game_loop import GameLoop
from colors_to_collect.core.render_solid import SolidRenderer
from colors_to_collect.core.scene import GameEvent, GameScene


class ScriptedPlayer:
    """
    Follows the lowest block still above the paddle and taps until the
    paddle shows that block's color.
    """

    def __init__(self, loop: GameLoop):
        self._loop = loop

    def act(self) -> None:
        scene = self._loop.scene
        if scene.is_game_over:
            return

        paddle = scene.paddle
        if paddle is None:
            return

        if not scene.is_alive:
            self._loop.on_touch_down((paddle.x, paddle.y))
            return

        target = self._pick_target(scene)
        if target is None:
            return

        self._loop.on_touch_move((target.x, paddle.y))
        while scene.color_selection != target.color_id:
            self._loop.on_touch_up()

    @staticmethod
    def _pick_target(scene: GameScene):
        paddle = scene.paddle
        floor = paddle.y - paddle.size[1] / 2
        candidates = [b for b in scene.blocks if b.active and b.y > floor]
        if not candidates:
            return None
        return min(candidates, key=lambda b: b.y)


def benchmark_loop(
    num_games: int = 5,
    max_seconds: float = 120.0,
    fps: int = 60,
    seed: int = 42,
    render: bool = False,
    config: Optional[GameConfig] = None
) -> dict:
    """
    Run games with the scripted player and time the ticks.

    Args:
        num_games: Games to finish (a game also ends at max_seconds).
        max_seconds: Simulated time cap per game.
        fps: Simulated frame rate.
        seed: Random seed.
        render: Also render every frame with SolidRenderer.
        config: Game configuration. Uses default if None.

    Returns:
        Dict with timing results.
    """
    if config is None:
        config = load_config()

    finished_scores: List[int] = []

    def on_event(event: GameEvent) -> None:
        if event.kind == "game_over":
            finished_scores.append(event.score)

    loop = GameLoop(config=config, seed=seed, listener=on_event)
    loop.on_init()
    player = ScriptedPlayer(loop)
    renderer = SolidRenderer(config) if render else None

    dt = 1.0 / fps
    max_ticks_per_game = int(max_seconds * fps)
    ticks = 0
    timed_out_scores: List[int] = []

    start = time.perf_counter()
    for _ in range(num_games):
        games_before = loop.games_played
        for _ in range(max_ticks_per_game):
            player.act()
            loop.on_tick(dt)
            ticks += 1
            if renderer is not None:
                renderer.render(loop.get_render_data(), 270, 480)
            if loop.games_played > games_before:
                break
        else:
            # Player survived the whole window; start over
            timed_out_scores.append(loop.score)
            loop.on_init()
    elapsed = time.perf_counter() - start

    return {
        "mode": "render" if render else "loop",
        "num_games": num_games,
        "ticks": ticks,
        "elapsed_seconds": elapsed,
        "ticks_per_second": ticks / elapsed if elapsed > 0 else float("inf"),
        "ms_per_tick": (elapsed * 1000) / ticks if ticks else 0.0,
        "scores": finished_scores + timed_out_scores,
    }


def main():
    parser = argparse.ArgumentParser(description="Benchmark Colors to Collect game loop")
    parser.add_argument("--games", type=int, default=5, help="Games to play")
    parser.add_argument("--seconds", type=float, default=120.0, help="Simulated seconds cap per game")
    parser.add_argument("--fps", type=int, default=60, help="Simulated frame rate")
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--render", action="store_true", help="Include numpy rendering")
    parser.add_argument("--verbose", action="store_true", help="Show game log messages")

    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

    try:
        config = load_config()
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        return 1

    print("=" * 60)
    print("COLORS TO COLLECT LOOP BENCHMARK")
    print("=" * 60)
    print()

    result = benchmark_loop(
        num_games=args.games,
        max_seconds=args.seconds,
        fps=args.fps,
        seed=args.seed,
        render=args.render,
        config=config
    )

    print(f"Ticks:       {result['ticks']}")
    print(f"Ticks/sec:   {result['ticks_per_second']:.1f}")
    print(f"ms/tick:     {result['ms_per_tick']:.3f}")
    print(f"Scores:      {result['scores']}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
