"""The snake: its body, heading, growth and movement timing."""

from __future__ import annotations

import time
from collections import deque
from collections.abc import Callable
from enum import Enum

Position = tuple[int, int]

DEFAULT_INTERVAL = 0.2
BOOSTED_INTERVAL = 0.1
SLOWED_INTERVAL = 0.4
SPEED_EFFECT_SECONDS = 5.0


class Direction(Enum):
    """A direction the snake can travel in."""

    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


_DELTAS: dict[Direction, Position] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


class GameOver(Exception):
    """Raised when the game has ended."""


class Serpent:
    """A snake made of grid segments, head first."""

    def __init__(
        self,
        start_x: int,
        start_y: int,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._clock = clock
        self._segments: deque[Position] = deque(
            (start_x - offset, start_y) for offset in range(3)
        )
        self._direction = Direction.RIGHT
        self._pending_growth = False
        self._prev_move_time = clock()
        self._interval = DEFAULT_INTERVAL
        self._speed_adjusted_at = self._prev_move_time
        self._boosted = False
        self._slowed = False

    def refresh(self) -> None:
        """Restore normal speed when an effect expires, and move if it is time."""
        now = self._clock()
        if (self._boosted or self._slowed) and (
            now - self._speed_adjusted_at >= SPEED_EFFECT_SECONDS
        ):
            self._interval = DEFAULT_INTERVAL
            self._boosted = False
            self._slowed = False

        if now - self._prev_move_time >= self._interval:
            self.advance()
            self._prev_move_time = now

    def advance(self) -> None:
        """Move the head one cell in the current direction."""
        dx, dy = _DELTAS[self._direction]
        head_x, head_y = self._segments[0]
        self._push_head((head_x + dx, head_y + dy))

    def _push_head(self, new_head: Position) -> None:
        self._segments.appendleft(new_head)
        if self._pending_growth:
            self._pending_growth = False
        else:
            self._segments.pop()

    def set_direction(self, new_dir: Direction) -> None:
        """Turn the snake; turning straight back ends the game."""
        if new_dir is self._direction:
            return
        if _OPPOSITES[self._direction] is new_dir:
            raise GameOver("the snake turned back on itself")
        self._direction = new_dir

    @property
    def segments(self) -> tuple[Position, ...]:
        """Body cells, head first."""
        return tuple(self._segments)

    @property
    def head(self) -> Position:
        """The head's cell."""
        return self._segments[0]

    @property
    def direction(self) -> Direction:
        """The current heading."""
        return self._direction

    @property
    def interval(self) -> float:
        """Seconds between moves."""
        return self._interval

    @interval.setter
    def interval(self, value: float) -> None:
        self._interval = value

    def extend(self) -> None:
        """Keep the tail on the next move so the snake grows by one."""
        self._pending_growth = True

    def shrink(self) -> None:
        """Drop the tail segment, never the last one."""
        if len(self._segments) > 1:
            self._segments.pop()

    def detect_collision(self) -> bool:
        """Whether the head overlaps another segment."""
        head, *body = self._segments
        return head in body

    def assign_head(self, new_head: Position, new_dir: Direction) -> None:
        """Place the head at a new cell with a new heading."""
        self._direction = new_dir
        self._push_head(tuple(new_head))

    def occupies(self, x: int, y: int) -> bool:
        """Whether any segment lies on (x, y)."""
        return (x, y) in self._segments

    def boost_speed(self) -> None:
        """Move faster for a while."""
        self._interval = BOOSTED_INTERVAL
        self._speed_adjusted_at = self._clock()
        self._boosted = True
        self._slowed = False

    def reduce_speed(self) -> None:
        """Move slower for a while."""
        self._interval = SLOWED_INTERVAL
        self._speed_adjusted_at = self._clock()
        self._boosted = False
        self._slowed = True

    def __len__(self) -> int:
        return len(self._segments)