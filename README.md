# serpentine

This is a snake game for the terminal. It draws with `curses` and has four stages.

## Playing

```
pip install .
serpentine
```

The command takes no options apart from `--help`. Use the arrow keys to steer the snake. If you turn straight back on yourself, the game ends immediately.

The playing field is 42 × 21 cells. These symbols appear on it:

| Symbol | Meaning |
|--------|---------|
| `#` | wall |
| `*` | corner |
| `O` | snake |
| `+` | growth item: the snake grows by one segment |
| `-` | poison item: the snake loses one segment |
| `>` | speed item: the snake moves faster for five seconds |
| `<` | slow item: the snake moves slower for five seconds |
| `G` | gate |

The field holds up to three growth items, three poison items, one speed item and one slow item at a time. Any item that nobody eats disappears after ten seconds, and a replacement is added.

A pair of gates appears in the walls once the snake is four segments long or longer. After twenty seconds the gates move to new places, but only when the snake is not touching either of them. When you enter one gate, you come out beside the other. The exit side is the first free cell, tried in this order for each heading:

| Heading into the gate | Exit sides tried, in order |
|-----------------------|----------------------------|
| up | up, right, left, down |
| down | down, right, left, up |
| left | left, up, down, right |
| right | right, down, up, left |

## Stages and missions

The screen also shows the stage number, a score board, the time spent in the current stage, and a mission board with these targets:

- `B`: the snake length to reach
- `Max B`: the longest length to reach during the stage
- `+`: how many growth items to eat
- `-`: how many poison items to eat
- `G`: how many times to pass through a gate

You move to the next stage as soon as the `B`, `+`, `-` and `G` missions are all done. `Max B` appears on the board but does not affect progress. Each new stage resets the scores and the snake, and asks for one more growth item. In stages 2 to 4 the snake's normal move interval is 0.1 seconds instead of 0.2.

Each stage has its own layout:

- Stage 2 adds an L-shaped wall.
- Stage 3 adds two horizontal walls.
- Stage 4 starts the snake in the top-right corner heading down, and adds a windmill in the centre of the field. Every ten ticks its blades turn by 45 degrees. Touching a blade ends the game.

The game also ends in any of these cases:

- a stage lasts longer than two minutes
- the snake hits a wall, a corner or itself
- the snake becomes shorter than three segments
- a gate has no free exit
- you finish stage 4

## Using the game logic

The game rules are in `serpentine.stage.Stage`, and you can use them without a terminal. You can pass your own `random.Random` and your own clock function:

```python
import random
from serpentine.serpent import Direction, GameOver
from serpentine.stage import Stage
from serpentine.ui import board_rows, mission_lines

stage = Stage(42, 21, rng=random.Random(1))
stage.steer(Direction.UP)
try:
    stage.tick()
except GameOver as reason:
    print("game over:", reason)
print("\n".join(board_rows(stage)))
print("\n".join(mission_lines(stage)))
```

`Stage.tick()` advances the game by one step. When the game ends, it raises `serpentine.serpent.GameOver`. `serpentine.ui` has helpers that turn a stage into plain text: `board_rows`, `score_lines`, `mission_lines` and `time_line`. It also has `run`, which plays the game on a curses screen and returns the reason the game ended.

## What it does not do

The game does not keep scores between runs and does not save any state. When the game ends, it simply closes without showing a final screen. You cannot change the field size from the command line.