"""Stage state: the map, items, gates, missions, stages and the windmill."""

from __future__ import annotations

import random
import time
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import IntEnum

from serpentine.serpent import Direction, GameOver, Position, Serpent

ITEM_LIFETIME = 10.0
GATE_LIFETIME = 20.0
TIME_LIMIT = 120.0
FINAL_STAGE = 4
WINDMILL_SPIN_TICKS = 10
WINDMILL_LENGTH = 5
MIN_LENGTH = 3


class Tile(IntEnum):
    """What occupies a map cell."""

    EMPTY = 0
    WALL = 1
    CORNER = 2
    GROW = 5
    POISON = 6
    GATE = 7
    BOOST = 9
    SLOW = 10


_ITEM_LIMITS: dict[Tile, int] = {
    Tile.GROW: 3,
    Tile.POISON: 3,
    Tile.BOOST: 1,
    Tile.SLOW: 1,
}

_STEPS: dict[Direction, Position] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

_GATE_EXIT_ORDER: dict[Direction, tuple[Direction, ...]] = {
    Direction.UP: (Direction.UP, Direction.RIGHT, Direction.LEFT, Direction.DOWN),
    Direction.DOWN: (Direction.DOWN, Direction.RIGHT, Direction.LEFT, Direction.UP),
    Direction.LEFT: (Direction.LEFT, Direction.UP, Direction.DOWN, Direction.RIGHT),
    Direction.RIGHT: (Direction.RIGHT, Direction.DOWN, Direction.UP, Direction.LEFT),
}

# Blade axis for each windmill state modulo 4: 0, 45, 90 and 135 degrees.
_BLADE_AXES: tuple[Position, ...] = ((0, 1), (1, 1), (1, 0), (-1, 1))


@dataclass
class Windmill:
    """A rotating pair of blades around a centre cell."""

    center: Position = (0, 0)
    length: int = 0
    state: int = 0

    def blade_cells(self, axis: Position) -> Iterator[Position]:
        """Cells of both blades lying along one axis."""
        cx, cy = self.center
        ax, ay = axis
        for i in range(1, self.length + 1):
            yield (cx + ax * i, cy + ay * i)
            yield (cx - ax * i, cy - ay * i)

    def all_cells(self) -> Iterator[Position]:
        """Every cell any blade can sweep over."""
        for axis in _BLADE_AXES:
            yield from self.blade_cells(axis)


class Stage:
    """The whole game state, advanced one tick at a time."""

    def __init__(
        self,
        width: int,
        height: int,
        rng: random.Random | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock
        self.serpent = Serpent(width // 2, height // 2, clock)
        self.windmill = Windmill()
        self.grid: list[list[Tile]] = []
        self.items: dict[Tile, list[tuple[Position, float]]] = {
            kind: [] for kind in _ITEM_LIMITS
        }

        self.grow_score = 0
        self.poison_score = 0
        self.gate_score = 0
        self.max_length = 0
        self.stage_level = 1

        self.mission_len = 4
        self.mission_grow = 1
        self.mission_poison = 1
        self.mission_gate = 1
        self.mission_max_len = 5
        self.mission_len_done = False
        self.mission_grow_done = False
        self.mission_poison_done = False
        self.mission_gate_done = False
        self.mission_max_done = False

        self.gate_a: Position | None = None
        self.gate_b: Position | None = None
        self.gates_active = False
        self.windmill_frozen = False
        self.pause_start_time: float | None = None

        now = clock()
        self.gate_timestamp = now
        self.game_start_time = now
        self.tick_speed = 200
        self._spin_counter = 0

        self.setup_map()
        self.setup_stage()
        self.distribute_items()

    # -- input and timing -------------------------------------------------

    def steer(self, direction: Direction) -> None:
        """Turn the snake."""
        self.serpent.set_direction(direction)

    def elapsed(self) -> float:
        """Seconds since the current stage started."""
        return self.clock() - self.game_start_time

    # -- the main step -----------------------------------------------------

    def tick(self) -> None:
        """Advance the game by one step; raises GameOver when it ends."""
        self.serpent.refresh()

        if self.elapsed() > TIME_LIMIT:
            raise GameOver("time is up")

        self.max_length = max(self.max_length, len(self.serpent))
        self.clean_up_items()

        hx, hy = self.serpent.head
        if self.grid[hy][hx] in (Tile.WALL, Tile.CORNER) or self.serpent.detect_collision():
            raise GameOver("the snake crashed")

        for x, y in self.windmill.all_cells():
            if self.grid[y][x] == Tile.WALL and self.serpent.occupies(x, y):
                raise GameOver("the snake was hit by the windmill")

        tile = self.grid[hy][hx]
        if tile == Tile.GROW:
            self.serpent.extend()
            self.grid[hy][hx] = Tile.EMPTY
            self.grow_score += 1
        elif tile == Tile.POISON:
            self.serpent.shrink()
            self.grid[hy][hx] = Tile.EMPTY
            self.poison_score += 1
            if len(self.serpent) < MIN_LENGTH:
                raise GameOver("the snake became too short")
        elif tile == Tile.BOOST:
            self.serpent.boost_speed()
            self.grid[hy][hx] = Tile.EMPTY
        elif tile == Tile.SLOW:
            self.serpent.reduce_speed()
            self.grid[hy][hx] = Tile.EMPTY

        head = (hx, hy)
        if self.gate_a is not None and head == self.gate_a:
            self.use_gate(self.gate_b)
            self.gate_score += 1
        elif self.gate_b is not None and head == self.gate_b:
            self.use_gate(self.gate_a)
            self.gate_score += 1

        self.check_missions()
        if (
            self.mission_len_done
            and self.mission_grow_done
            and self.mission_poison_done
            and self.mission_gate_done
        ):
            self.proceed_next_stage()

        self.distribute_items()

        if self.stage_level == FINAL_STAGE:
            self._spin_counter += 1
            if self._spin_counter >= WINDMILL_SPIN_TICKS:
                self.spin_windmill()
                self._spin_counter = 0

    # -- map and stages ----------------------------------------------------

    def setup_map(self) -> None:
        """Build an empty map walled in, with fixed corners."""
        w, h = self.width, self.height
        self.grid = [[Tile.EMPTY] * w for _ in range(h)]
        for x in range(w):
            self.grid[0][x] = Tile.WALL
            self.grid[h - 1][x] = Tile.WALL
        for row in self.grid:
            row[0] = Tile.WALL
            row[w - 1] = Tile.WALL
        for x, y in ((0, 0), (w - 1, 0), (0, h - 1), (w - 1, h - 1)):
            self.grid[y][x] = Tile.CORNER

    def setup_stage(self) -> None:
        """Clear the open cells and add the current stage's obstacles."""
        for row in self.grid:
            for x, tile in enumerate(row):
                if tile not in (Tile.WALL, Tile.CORNER):
                    row[x] = Tile.EMPTY

        if self.stage_level == 2:
            start_x = 15
            start_y = self.height - 15
            for y in range(start_y, self.height - 5):
                self.grid[y][start_x] = Tile.WALL
            for x in range(5, start_x):
                self.grid[start_y][x] = Tile.WALL
        elif self.stage_level == 3:
            for x in range(5, self.width - 5):
                self.grid[self.height // 3][x] = Tile.WALL
                self.grid[2 * self.height // 3][x] = Tile.WALL
        elif self.stage_level == FINAL_STAGE:
            self.setup_windmill()
            self.serpent = Serpent(self.width - 5, 1, self.clock)
            self.serpent.set_direction(Direction.DOWN)

    def reset_stage(self) -> None:
        """Start the current stage afresh."""
        if self.stage_level == FINAL_STAGE:
            self.serpent = Serpent(self.width - 5, 1, self.clock)
            self.serpent.set_direction(Direction.DOWN)
        else:
            self.serpent = Serpent(self.width // 2, self.height // 2, self.clock)

        self.grow_score = 0
        self.poison_score = 0
        self.gate_score = 0
        self.max_length = 0

        self.mission_len_done = False
        self.mission_grow_done = False
        self.mission_poison_done = False
        self.mission_gate_done = False
        self.mission_max_done = False

        self.gate_a = None
        self.gate_b = None
        self.gates_active = False
        self.windmill_frozen = False

        for placed in self.items.values():
            placed.clear()

        self.game_start_time = self.clock()

        self.setup_map()
        self.setup_stage()
        self.distribute_items()

    def check_missions(self) -> None:
        """Recompute which missions are done."""
        self.mission_len_done = len(self.serpent) >= self.mission_len
        self.mission_grow_done = self.grow_score >= self.mission_grow
        self.mission_poison_done = self.poison_score >= self.mission_poison
        self.mission_gate_done = self.gate_score >= self.mission_gate
        self.mission_max_done = self.max_length >= self.mission_max_len

    def proceed_next_stage(self) -> None:
        """Move to the next stage; finishing the last one ends the game."""
        self.stage_level += 1
        if self.stage_level > FINAL_STAGE:
            raise GameOver("all stages cleared")
        self.mission_grow += 1
        self.reset_stage()
        self.serpent.interval = self.serpent.interval * 0.5

    # -- items and gates ---------------------------------------------------

    def _random_cell(self) -> Position:
        return (self.rng.randrange(self.width), self.rng.randrange(self.height))

    def _random_free_cell(self) -> Position:
        while True:
            x, y = self._random_cell()
            if self.grid[y][x] == Tile.EMPTY and not self.serpent.occupies(x, y):
                return (x, y)

    def _place_gates(self) -> None:
        while True:
            gate_a = self._random_cell()
            gate_b = self._random_cell()
            if (
                self.grid[gate_a[1]][gate_a[0]] == Tile.WALL
                and self.grid[gate_b[1]][gate_b[0]] == Tile.WALL
                and gate_a != gate_b
            ):
                break
        self.gate_a, self.gate_b = gate_a, gate_b
        self.grid[gate_a[1]][gate_a[0]] = Tile.GATE
        self.grid[gate_b[1]][gate_b[0]] = Tile.GATE

    def distribute_items(self) -> None:
        """Top up items by one of each short kind, and place or move the gates."""
        now = self.clock()
        for kind, limit in _ITEM_LIMITS.items():
            placed = self.items[kind]
            if len(placed) < limit:
                x, y = self._random_free_cell()
                self.grid[y][x] = kind
                placed.append(((x, y), now))

        if len(self.serpent) >= 4 and not self.gates_active:
            self._place_gates()
            self.gate_timestamp = now
            self.gates_active = True
        elif self.gates_active and now - self.gate_timestamp >= GATE_LIFETIME:
            gates = [gate for gate in (self.gate_a, self.gate_b) if gate is not None]
            if not any(self.serpent.occupies(x, y) for x, y in gates):
                for x, y in gates:
                    self.grid[y][x] = Tile.WALL
                self._place_gates()
                self.gate_timestamp = now

    def clean_up_items(self) -> None:
        """Remove items that have been on the map too long."""
        now = self.clock()
        for kind, placed in self.items.items():
            kept = []
            for (x, y), placed_at in placed:
                if now - placed_at >= ITEM_LIFETIME:
                    self.grid[y][x] = Tile.EMPTY
                else:
                    kept.append(((x, y), placed_at))
            self.items[kind] = kept

    def use_gate(self, exit_gate: Position) -> None:
        """Bring the snake's head out next to the exit gate."""
        exit_x, exit_y = exit_gate
        for direction in _GATE_EXIT_ORDER[self.serpent.direction]:
            dx, dy = _STEPS[direction]
            nx, ny = exit_x + dx, exit_y + dy
            if (
                0 <= nx < self.width
                and 0 <= ny < self.height
                and self.grid[ny][nx] == Tile.EMPTY
                and not self.serpent.occupies(nx, ny)
            ):
                self.serpent.assign_head((nx, ny), direction)
                break
        else:
            raise GameOver("no way out of the gate")

        if self.gate_inside_windmill(exit_gate):
            self.windmill_frozen = True
            self.pause_start_time = self.clock()

    # -- windmill ----------------------------------------------------------

    def setup_windmill(self) -> None:
        """Place the windmill in the centre with vertical blades."""
        self.windmill.center = (self.width // 2, self.height // 2)
        self.windmill.length = WINDMILL_LENGTH
        self.windmill.state = 0
        for x, y in self.windmill.blade_cells(_BLADE_AXES[0]):
            self.grid[y][x] = Tile.WALL

    def spin_windmill(self) -> None:
        """Turn the blades by 45 degrees."""
        self.windmill.state = (self.windmill.state + 1) % 8
        for x, y in self.windmill.all_cells():
            self.grid[y][x] = Tile.EMPTY
        axis = _BLADE_AXES[self.windmill.state % len(_BLADE_AXES)]
        for x, y in self.windmill.blade_cells(axis):
            self.grid[y][x] = Tile.WALL

    def gate_inside_windmill(self, gate: Position) -> bool:
        """Whether a gate lies within the windmill's reach."""
        x, y = gate
        cx, cy = self.windmill.center
        reach = self.windmill.length
        return (
            (x == cx and abs(y - cy) <= reach)
            or (y == cy and abs(x - cx) <= reach)
            or (abs(x - cx) <= reach and abs(y - cy) <= reach)
        )