"""
Solid Renderer
==============

Fast numpy-based renderer that draws the paddle and falling blocks as
solid-color rectangles. Text labels are left to the host.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional, Tuple

import numpy as np

from colors_to_collect.core.config_loader import GameConfig, get_config


class SolidRenderer:
    """
    Renders game render data to an RGB array.

    Features:
    - Blocks drawn at their current rotation
    - Paddle drawn in its selected color
    - Cross-fade blending while a restart transition runs

    Uses numpy for CPU rendering without pygame.
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize renderer.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config
        self._default_bg = np.array(config.palette.background, dtype=np.uint8)

    def render(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        """
        Render the game state to an RGB array.

        Args:
            render_data: Data from GameLoop.get_render_data() or
                GameScene.get_render_data().
            width: Output image width.
            height: Output image height.

        Returns:
            (height, width, 3) uint8 array.
        """
        img = self._render_scene(render_data, width, height)

        transition = render_data.get("transition")
        if transition:
            previous = self._render_scene(transition["previous"], width, height)
            t = float(transition["progress"])
            blended = previous.astype(np.float32) * (1.0 - t) + img.astype(np.float32) * t
            img = np.clip(np.rint(blended), 0, 255).astype(np.uint8)

        return img

    def world_to_image(
        self,
        render_data: Dict[str, Any],
        x: float,
        y: float,
        width: int,
        height: int
    ) -> Tuple[int, int]:
        """Map a world point to (column, row) in an image of the given size."""
        scale, offset_x, offset_y = self._layout(render_data["frame"], width, height)
        frame = render_data["frame"]
        col = int(offset_x + (x - frame["min_x"]) * scale)
        row = int(height - (offset_y + (y - frame["min_y"]) * scale))
        return col, row

    def _layout(
        self,
        frame: Dict[str, float],
        width: int,
        height: int
    ) -> Tuple[float, float, float]:
        """Scale and offsets that fit the frame into the image, centered."""
        frame_width = frame["max_x"] - frame["min_x"]
        frame_height = frame["max_y"] - frame["min_y"]
        scale = min(width / frame_width, height / frame_height)
        offset_x = (width - frame_width * scale) / 2
        offset_y = (height - frame_height * scale) / 2
        return scale, offset_x, offset_y

    def _render_scene(
        self,
        render_data: Dict[str, Any],
        width: int,
        height: int
    ) -> np.ndarray:
        img = np.zeros((height, width, 3), dtype=np.uint8)
        background = render_data.get("background")
        img[:] = self._default_bg if background is None else np.array(background, dtype=np.uint8)

        frame = render_data["frame"]
        scale, offset_x, offset_y = self._layout(frame, width, height)

        def to_image(x: float, y: float) -> Tuple[float, float]:
            return (
                offset_x + (x - frame["min_x"]) * scale,
                height - (offset_y + (y - frame["min_y"]) * scale),
            )

        for block in render_data.get("blocks", []):
            cx, cy = to_image(block["x"], block["y"])
            self._draw_rect(
                img, cx, cy,
                block["width"] * scale, block["height"] * scale,
                block.get("angle", 0.0),
                np.array(block["rgb"], dtype=np.uint8)
            )

        # Paddle last so it sits on top of blocks it overlaps
        paddle = render_data.get("paddle")
        if paddle is not None:
            cx, cy = to_image(paddle["x"], paddle["y"])
            self._draw_rect(
                img, cx, cy,
                paddle["width"] * scale, paddle["height"] * scale,
                0.0,
                np.array(paddle["rgb"], dtype=np.uint8)
            )

        return img

    def _draw_rect(
        self,
        img: np.ndarray,
        cx: float,
        cy: float,
        rect_width: float,
        rect_height: float,
        angle: float,
        color: np.ndarray
    ) -> None:
        """Draw a filled rectangle centered at (cx, cy), rotated counterclockwise by angle."""
        height, width = img.shape[:2]
        half_w = rect_width / 2
        half_h = rect_height / 2
        reach = math.hypot(half_w, half_h)

        y_min = max(0, int(math.floor(cy - reach)))
        y_max = min(height, int(math.ceil(cy + reach)) + 1)
        x_min = max(0, int(math.floor(cx - reach)))
        x_max = min(width, int(math.ceil(cx + reach)) + 1)

        if y_min >= y_max or x_min >= x_max:
            return

        y_coords = np.arange(y_min, y_max)
        x_coords = np.arange(x_min, x_max)
        yy, xx = np.meshgrid(y_coords, x_coords, indexing='ij')

        # Image rows grow downward; flip to world orientation before unrotating
        dx = xx - cx
        dy = cy - yy
        cos_a = math.cos(angle)
        sin_a = math.sin(angle)
        local_x = dx * cos_a + dy * sin_a
        local_y = -dx * sin_a + dy * cos_a

        mask = (np.abs(local_x) <= half_w) & (np.abs(local_y) <= half_h)
        img[y_min:y_max, x_min:x_max][mask] = color
