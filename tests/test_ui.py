import random

import pytest

from serpentine.stage import Stage, Tile
from serpentine.ui import board_rows, main, mission_lines, score_lines, time_line


class FakeClock:
    def __init__(self, now: float = 1000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def stage(clock):
    return Stage(42, 21, random.Random(7), clock)


def test_board_has_map_dimensions(stage):
    rows = board_rows(stage)
    assert len(rows) == stage.height
    assert all(len(row) == stage.width for row in rows)


def test_board_corners_and_walls(stage):
    rows = board_rows(stage)
    assert rows[0][0] == "*"
    assert rows[0][-1] == "*"
    assert rows[-1][0] == "*"
    assert rows[-1][-1] == "*"
    assert rows[0][5] == "#"
    assert rows[5][0] == "#"


def test_board_draws_snake(stage):
    rows = board_rows(stage)
    hx, hy = stage.serpent.head
    assert rows[hy][hx] == "O"
    assert sum(row.count("O") for row in rows) == len(stage.serpent)


def test_board_draws_items(stage):
    rows = board_rows(stage)
    assert sum(row.count("+") for row in rows) == len(stage.items[Tile.GROW])
    assert sum(row.count("-") for row in rows) == len(stage.items[Tile.POISON])
    assert sum(row.count(">") for row in rows) == len(stage.items[Tile.BOOST])
    assert sum(row.count("<") for row in rows) == len(stage.items[Tile.SLOW])


@pytest.mark.parametrize(
    "tile, char",
    [(Tile.GATE, "G"), (Tile.GROW, "+"), (Tile.EMPTY, " "), (Tile.WALL, "#")],
)
def test_board_tile_characters(stage, tile, char):
    stage.grid[2][2] = tile
    assert board_rows(stage)[2][2] == char


def test_score_lines(stage):
    stage.grow_score = 2
    stage.poison_score = 1
    stage.gate_score = 3
    stage.max_length = 6
    lines = score_lines(stage)
    assert lines[0] == "Score Board"
    assert lines[1] == f"B: {len(stage.serpent)} / 6"
    assert lines[2:] == ["+: 2", "-: 1", "G: 3"]


def test_mission_lines_initial(stage):
    lines = mission_lines(stage)
    assert lines[0] == "Mission"
    assert lines[1] == "Pass the stage in 2 minutes"
    assert lines[2] == f"B: {stage.mission_len} ( )"
    assert lines[3] == f"Max B: {stage.mission_max_len} ( )"


def test_mission_lines_marks_done(stage):
    stage.mission_len_done = True
    stage.mission_gate_done = True
    lines = mission_lines(stage)
    assert lines[2].endswith("(v)")
    assert lines[6] == f"G: {stage.mission_gate} (v)"
    assert lines[4].endswith("( )")


def test_time_line_at_start(stage):
    assert time_line(stage) == "Time: 00:00"


def test_time_line_after_delay(stage, clock):
    clock.now += 75
    assert time_line(stage) == "Time: 01:15"


def test_main_rejects_unknown_arguments():
    with pytest.raises(SystemExit) as info:
        main(["--bogus"])
    assert info.value.code == 2