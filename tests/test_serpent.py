import pytest

from serpentine.serpent import Direction, GameOver, Serpent


class FakeClock:
    def __init__(self, now=0.0):
        self.now = now

    def __call__(self):
        return self.now


def make(x=10, y=5):
    clock = FakeClock()
    return Serpent(x, y, clock), clock


def test_initial_body_extends_left_of_start():
    snake, _ = make(10, 5)
    assert snake.segments == ((10, 5), (9, 5), (8, 5))
    assert snake.head == (10, 5)
    assert len(snake) == 3
    assert snake.direction is Direction.RIGHT


def test_advance_moves_right_and_keeps_length():
    snake, _ = make(10, 5)
    snake.advance()
    assert snake.head == (11, 5)
    assert len(snake) == 3
    assert not snake.occupies(8, 5)


@pytest.mark.parametrize(
    "direction, expected",
    [
        (Direction.UP, (10, 4)),
        (Direction.DOWN, (10, 6)),
        (Direction.RIGHT, (11, 5)),
    ],
)
def test_advance_in_each_direction(direction, expected):
    snake, _ = make(10, 5)
    snake.set_direction(direction)
    snake.advance()
    assert snake.head == expected


def test_left_after_turning_up():
    snake, _ = make(10, 5)
    snake.set_direction(Direction.UP)
    snake.set_direction(Direction.LEFT)
    snake.advance()
    assert snake.head == (9, 5)
    assert snake.direction is Direction.LEFT


def test_reversing_raises_game_over():
    snake, _ = make()
    with pytest.raises(GameOver):
        snake.set_direction(Direction.LEFT)


def test_same_direction_is_ignored():
    snake, _ = make()
    snake.set_direction(Direction.RIGHT)
    assert snake.direction is Direction.RIGHT


def test_extend_grows_on_next_move_only():
    snake, _ = make()
    snake.extend()
    snake.advance()
    assert len(snake) == 4
    snake.advance()
    assert len(snake) == 4


def test_shrink_removes_tail_but_not_last_segment():
    snake, _ = make(10, 5)
    snake.shrink()
    assert snake.segments == ((10, 5), (9, 5))
    snake.shrink()
    snake.shrink()
    assert snake.segments == ((10, 5),)


def test_detect_collision_when_head_meets_body():
    snake, _ = make(10, 5)
    for _ in range(3):
        snake.extend()
        snake.advance()
    assert not snake.detect_collision()
    snake.set_direction(Direction.DOWN)
    snake.advance()
    snake.set_direction(Direction.LEFT)
    snake.advance()
    snake.set_direction(Direction.UP)
    snake.advance()
    assert snake.detect_collision()


def test_assign_head_sets_position_and_direction():
    snake, _ = make(10, 5)
    snake.assign_head((1, 1), Direction.DOWN)
    assert snake.head == (1, 1)
    assert snake.direction is Direction.DOWN
    assert len(snake) == 3
    assert not snake.occupies(8, 5)


def test_assign_head_honours_pending_growth():
    snake, _ = make(10, 5)
    snake.extend()
    snake.assign_head((1, 1), Direction.UP)
    assert len(snake) == 4
    assert snake.occupies(8, 5)


def test_occupies_checks_every_segment():
    snake, _ = make(10, 5)
    assert all(snake.occupies(x, y) for x, y in snake.segments)
    assert not snake.occupies(11, 5)


def test_refresh_waits_for_interval():
    snake, clock = make(10, 5)
    clock.now = snake.interval / 2
    snake.refresh()
    assert snake.head == (10, 5)
    clock.now = snake.interval
    snake.refresh()
    assert snake.head == (11, 5)


def test_speed_changes_and_restore():
    snake, clock = make()
    normal = snake.interval
    assert normal == pytest.approx(0.2)
    snake.boost_speed()
    assert snake.interval == pytest.approx(0.1)
    snake.reduce_speed()
    assert snake.interval == pytest.approx(0.4)
    clock.now = 5.0
    snake.refresh()
    assert snake.interval == normal


def test_speed_effect_persists_before_expiry():
    snake, clock = make()
    snake.boost_speed()
    boosted = snake.interval
    clock.now = 4.9
    snake.refresh()
    assert snake.interval == boosted


def test_interval_setter():
    snake, _ = make()
    snake.interval = snake.interval * 0.5
    assert snake.interval == pytest.approx(0.1)


def test_segments_returns_a_copy():
    snake, _ = make()
    before = snake.segments
    snake.advance()
    assert before != snake.segments
    assert len(before) == len(snake)