"""
Play Field
==========

Manages the pymunk Space holding the paddle and the falling blocks.

Both kinds of body are kinematic: the paddle is positioned by input and the
blocks move at constant velocity and spin at a constant rate. Chipmunk does
not report contacts between kinematic bodies, so overlap is tested
explicitly on the shapes' axis-aligned bounding boxes.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import pymunk

from colors_to_collect.core.config_loader import GameConfig, get_config


# Shape filter categories
CATEGORY_PADDLE = 0b01
CATEGORY_BLOCK = 0b10

# Absorbs float drift when comparing block age with the fall duration
AGE_EPSILON = 1e-9


@dataclass(frozen=True)
class Frame:
    """Scene bounds in world coordinates (y grows upward)."""
    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_size(cls, width: float, height: float) -> "Frame":
        return cls(0.0, 0.0, float(width), float(height))

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def mid_x(self) -> float:
        return (self.min_x + self.max_x) / 2.0

    def with_x_bounds(self, min_x: float, max_x: float) -> "Frame":
        return Frame(float(min_x), self.min_y, float(max_x), self.max_y)


@dataclass
class Paddle:
    """
    The player's paddle.

    Wraps a kinematic pymunk Body and box shape; color_id is the paddle's
    currently displayed color.
    """
    body: pymunk.Body
    shape: pymunk.Poly
    size: Tuple[float, float]
    color_id: int = 0
    active: bool = True

    @property
    def x(self) -> float:
        return self.body.position.x

    @x.setter
    def x(self, value: float) -> None:
        self.body.position = (value, self.body.position.y)

    @property
    def y(self) -> float:
        return self.body.position.y

    @y.setter
    def y(self, value: float) -> None:
        self.body.position = (self.body.position.x, value)

    @property
    def position(self) -> Tuple[float, float]:
        return self.body.position.x, self.body.position.y

    @property
    def category(self) -> int:
        return self.shape.filter.categories

    def bounding_box(self) -> pymunk.BB:
        return self.shape.cache_bb()


@dataclass
class FallingBlock:
    """
    A colored block descending from the top of the screen.

    The block travels from spawn_y to exit_y in fall_duration seconds while
    spinning; age counts simulated seconds since spawn.
    """
    uid: int
    color_id: int
    body: pymunk.Body
    shape: pymunk.Poly
    size: Tuple[float, float]
    spawn_y: float
    exit_y: float
    fall_duration: float
    age: float = 0.0
    active: bool = field(default=True)

    @property
    def x(self) -> float:
        return self.body.position.x

    @property
    def y(self) -> float:
        return self.body.position.y

    @property
    def position(self) -> Tuple[float, float]:
        return self.body.position.x, self.body.position.y

    @property
    def angle(self) -> float:
        return self.body.angle

    @property
    def category(self) -> int:
        return self.shape.filter.categories

    @property
    def finished(self) -> bool:
        """True once the block has reached its exit line."""
        return self.age >= self.fall_duration - AGE_EPSILON

    def bounding_box(self) -> pymunk.BB:
        return self.shape.cache_bb()


class PlayField:
    """
    Manages the pymunk simulation for one game.

    Handles:
    - Space creation
    - Paddle creation and removal
    - Falling block creation, descent and retirement
    - Paddle / block overlap queries
    """

    def __init__(self, config: Optional[GameConfig] = None):
        """
        Initialize play field.

        Args:
            config: Game configuration. Uses default if None.
        """
        if config is None:
            config = get_config()

        self._config = config

        # Nothing here is affected by gravity; motion is purely kinematic
        self._space = pymunk.Space()
        self._space.gravity = (0.0, 0.0)

        self._paddle: Optional[Paddle] = None
        self._blocks: Dict[int, FallingBlock] = {}
        self._next_uid = 0

    @property
    def space(self) -> pymunk.Space:
        """The pymunk Space instance."""
        return self._space

    @property
    def paddle(self) -> Optional[Paddle]:
        return self._paddle

    @property
    def blocks(self) -> Dict[int, FallingBlock]:
        """All falling blocks by UID, in spawn order."""
        return self._blocks

    @property
    def block_count(self) -> int:
        return len(self._blocks)

    def spawn_paddle(self, x: float, y: float, color_id: int = 0) -> Paddle:
        """
        Create the paddle at (x, y), replacing any existing one.

        Returns:
            The created Paddle.
        """
        self.remove_paddle()

        size = self._config.paddle.size
        body = pymunk.Body(body_type=pymunk.Body.KINEMATIC)
        body.position = (x, y)

        shape = pymunk.Poly.create_box(body, size)
        shape.filter = pymunk.ShapeFilter(categories=CATEGORY_PADDLE, mask=CATEGORY_BLOCK)
        shape.sensor = True

        self._space.add(body, shape)
        self._paddle = Paddle(body=body, shape=shape, size=size, color_id=color_id)
        return self._paddle

    def remove_paddle(self) -> Optional[Paddle]:
        """Remove the paddle from the world. Returns it, or None if absent."""
        paddle = self._paddle
        if paddle is not None:
            paddle.active = False
            self._space.remove(paddle.body, paddle.shape)
            self._paddle = None
        return paddle

    def spawn_block(
        self,
        color_id: int,
        x: float,
        y: float,
        exit_y: float
    ) -> FallingBlock:
        """
        Spawn a falling block at (x, y) and start its descent toward exit_y.

        Args:
            color_id: Palette index the block carries.
            x: X coordinate.
            y: Starting Y coordinate (screen top).
            exit_y: Y coordinate at which the block is retired.

        Returns:
            The created FallingBlock.
        """
        block_config = self._config.block
        duration = block_config.fall_duration

        body = pymunk.Body(body_type=pymunk.Body.KINEMATIC)
        body.position = (x, y)
        body.velocity = (0.0, (exit_y - y) / duration)
        body.angular_velocity = block_config.angular_velocity

        shape = pymunk.Poly.create_box(body, block_config.size)
        shape.filter = pymunk.ShapeFilter(categories=CATEGORY_BLOCK, mask=CATEGORY_PADDLE)
        shape.sensor = True

        uid = self._next_uid
        self._next_uid += 1

        block = FallingBlock(
            uid=uid,
            color_id=color_id,
            body=body,
            shape=shape,
            size=block_config.size,
            spawn_y=y,
            exit_y=exit_y,
            fall_duration=duration
        )

        self._space.add(body, shape)
        self._blocks[uid] = block
        return block

    def remove_block(self, uid: int) -> Optional[FallingBlock]:
        """
        Remove a block from the world.

        Returns:
            The removed FallingBlock, or None if not found.
        """
        block = self._blocks.pop(uid, None)
        if block is not None:
            block.active = False
            self._space.remove(block.body, block.shape)
        return block

    def step(self, dt: float) -> None:
        """Advance block motion by dt seconds."""
        self._space.step(dt)
        for block in self._blocks.values():
            block.age += dt
            if block.finished:
                # Land exactly on the exit line
                block.body.position = (block.body.position.x, block.exit_y)

    def retire_finished(self) -> List[FallingBlock]:
        """Remove every block that reached its exit line and return them."""
        finished = [b for b in self._blocks.values() if b.finished]
        for block in finished:
            self.remove_block(block.uid)
        return finished

    def overlapping_blocks(self) -> List[FallingBlock]:
        """Active blocks whose bounding box overlaps the paddle's."""
        paddle = self._paddle
        if paddle is None or not paddle.active:
            return []
        paddle_bb = paddle.bounding_box()
        return [
            block for block in self._blocks.values()
            if block.active and block.bounding_box().intersects(paddle_bb)
        ]

    def clear(self) -> None:
        """Remove every body from the world."""
        for uid in list(self._blocks.keys()):
            self.remove_block(uid)
        self.remove_paddle()
        self._next_uid = 0
