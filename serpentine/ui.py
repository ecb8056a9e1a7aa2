"""Terminal front end: renders a stage with curses and drives the game loop."""

from __future__ import annotations

import argparse
import curses
from collections.abc import Sequence

from serpentine.serpent import Direction, GameOver
from serpentine.stage import Stage, Tile

DEFAULT_WIDTH = 42
DEFAULT_HEIGHT = 21
INITIAL_TIMEOUT_MS = 200

_TILE_CHARS: dict[Tile, str] = {
    Tile.EMPTY: " ",
    Tile.WALL: "#",
    Tile.CORNER: "*",
    Tile.GROW: "+",
    Tile.POISON: "-",
    Tile.GATE: "G",
    Tile.BOOST: ">",
    Tile.SLOW: "<",
}

_KEYS: dict[int, Direction] = {
    curses.KEY_UP: Direction.UP,
    curses.KEY_DOWN: Direction.DOWN,
    curses.KEY_LEFT: Direction.LEFT,
    curses.KEY_RIGHT: Direction.RIGHT,
}


def board_rows(stage: Stage) -> list[str]:
    """The map as text rows, with the snake drawn over it."""
    cells = [[_TILE_CHARS.get(tile, " ") for tile in row] for row in stage.grid]
    for x, y in stage.serpent.segments:
        if 0 <= y < len(cells) and 0 <= x < len(cells[y]):
            cells[y][x] = "O"
    return ["".join(row) for row in cells]


def score_lines(stage: Stage) -> list[str]:
    """Lines of the score board."""
    return [
        "Score Board",
        f"B: {len(stage.serpent)} / {stage.max_length}",
        f"+: {stage.grow_score}",
        f"-: {stage.poison_score}",
        f"G: {stage.gate_score}",
    ]


def mission_lines(stage: Stage) -> list[str]:
    """Lines of the mission board."""
    goals = [
        ("B", stage.mission_len, stage.mission_len_done),
        ("Max B", stage.mission_max_len, stage.mission_max_done),
        ("+", stage.mission_grow, stage.mission_grow_done),
        ("-", stage.mission_poison, stage.mission_poison_done),
        ("G", stage.mission_gate, stage.mission_gate_done),
    ]
    return [
        "Mission",
        "Pass the stage in 2 minutes",
        *(f"{label}: {target} ({'v' if done else ' '})" for label, target, done in goals),
    ]


def time_line(stage: Stage) -> str:
    """The elapsed stage time as minutes and seconds."""
    seconds = max(0, int(stage.elapsed()))
    minutes, seconds = divmod(seconds, 60)
    return f"Time: {minutes:02d}:{seconds:02d}"


def _put(window, y: int, x: int, text: str) -> None:
    # Writing into the bottom-right cell of a window raises even though it draws.
    try:
        window.addstr(y, x, text)
    except curses.error:
        pass


def _draw_panel(window, lines: Sequence[str]) -> None:
    window.erase()
    window.box()
    for row, line in enumerate(lines, start=1):
        _put(window, row, 1, line)
    window.noutrefresh()


def _render(stdscr, stage: Stage, board, scores, missions, clock_panel) -> None:
    _put(stdscr, 0, stage.width + 5, f"Stage {stage.stage_level}")
    stdscr.noutrefresh()

    board.erase()
    for y, row in enumerate(board_rows(stage)):
        for x, char in enumerate(row):
            if char != " ":
                _put(board, y, x, char)
    board.noutrefresh()

    _draw_panel(scores, score_lines(stage))
    _draw_panel(clock_panel, [time_line(stage)])
    _draw_panel(missions, mission_lines(stage))
    curses.doupdate()


def _handle_input(stdscr, stage: Stage) -> None:
    direction = _KEYS.get(stdscr.getch())
    if direction is not None:
        stage.steer(direction)


def run(stdscr, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> str:
    """Play on a curses screen until the game ends; returns why it ended."""
    curses.cbreak()
    curses.noecho()
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    stdscr.keypad(True)
    stdscr.timeout(INITIAL_TIMEOUT_MS)

    board = curses.newwin(height, width, 0, 0)
    scores = curses.newwin(7, 30, 4, width + 2)
    missions = curses.newwin(9, 30, 11, width + 2)
    clock_panel = curses.newwin(3, 30, 1, width + 2)

    stage = Stage(width, height)
    try:
        while True:
            _render(stdscr, stage, board, scores, missions, clock_panel)
            _handle_input(stdscr, stage)
            stage.tick()
            stdscr.timeout(int(stage.serpent.interval * 1000))
    except GameOver as exc:
        return str(exc)


def main(argv: Sequence[str] | None = None) -> int:
    """Start the game in the terminal."""
    parser = argparse.ArgumentParser(prog="serpentine", description="Snake in the terminal.")
    parser.parse_args(argv)
    curses.wrapper(run, DEFAULT_WIDTH, DEFAULT_HEIGHT)
    return 0