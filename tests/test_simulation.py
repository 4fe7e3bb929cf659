import random
from collections import Counter

import pytest

from galtonboard.simulation import (
    BALL_RADIUS,
    BIN_WIDTH,
    BOTTOM_Y,
    MAX_BALLS,
    MAX_HISTO_HEIGHT,
    NUM_BINS,
    NUM_PIN_ROWS,
    PIN_HORIZONTAL_SPACING,
    PIN_ROW_START_Y,
    RAW_X_MAX,
    RAW_X_MIN,
    WIDTH,
    Ball,
    GaltonBoard,
    View,
    bar_height,
    bar_width,
    joystick_bias,
    keep_in_bounds,
    map_range,
    pin_positions,
)


class FixedRng:
    def __init__(self, value):
        self.value = value

    def randrange(self, stop):
        return self.value


def test_add_ball_starts_at_top_centre():
    board = GaltonBoard(random.Random(1))
    assert board.add_ball() is True
    ball = board.active_balls[0]
    assert (ball.x, ball.y) == (WIDTH / 2.0, 0.0)


def test_add_ball_stops_when_full():
    board = GaltonBoard(random.Random(1))
    results = [board.add_ball() for _ in range(MAX_BALLS + 3)]
    assert results.count(True) == MAX_BALLS
    assert len(board.active_balls) == MAX_BALLS


def test_add_ball_ignored_in_histogram():
    board = GaltonBoard(random.Random(1))
    assert board.toggle_view() is View.HISTOGRAM
    assert board.add_ball() is False
    assert board.active_balls == []


def test_reset_clears_everything():
    board = GaltonBoard(random.Random(1))
    board.add_ball()
    board.bins[3] = 7
    board.total_dropped = 7
    board.toggle_view()
    board.reset()
    assert board.active_balls == []
    assert board.bins == [0] * NUM_BINS
    assert board.total_dropped == 0
    assert board.view is View.SIMULATION


def test_update_moves_ball_down():
    board = GaltonBoard(random.Random(1))
    board.add_ball()
    board.update(0.0)
    assert board.active_balls[0].y == 1.0


def test_all_balls_land_and_are_counted():
    board = GaltonBoard(random.Random(42))
    for _ in range(MAX_BALLS):
        board.add_ball()
    for _ in range(BOTTOM_Y * 2):
        board.update(0.0)
    assert board.active_balls == []
    assert board.total_dropped == MAX_BALLS
    assert sum(board.bins) == MAX_BALLS


@pytest.mark.parametrize(
    "roll, bias, goes_right",
    [(0, -1.0, True), (99, 1.0, False), (50, 0.0, False), (49, 0.0, True), (94, 5.0, True), (95, 5.0, False)],
)
def test_deflect_threshold(roll, bias, goes_right):
    board = GaltonBoard(FixedRng(roll))
    ball = Ball(x=WIDTH / 2.0, y=0.0, active=True)
    board.deflect(ball, bias)
    step = PIN_HORIZONTAL_SPACING / 2.0
    assert ball.x == WIDTH / 2.0 + (step if goes_right else -step)


def test_pin_collision_deflects_and_skips_row():
    board = GaltonBoard(FixedRng(0))
    ball = Ball(x=WIDTH / 2.0, y=float(PIN_ROW_START_Y), active=True)
    assert board.process_pin_collisions(ball, 0.0) is True
    assert ball.x == WIDTH / 2.0 + PIN_HORIZONTAL_SPACING / 2.0
    assert ball.y == PIN_ROW_START_Y + 1.0


def test_no_collision_away_from_pins():
    board = GaltonBoard(FixedRng(0))
    ball = Ball(x=2.0, y=float(PIN_ROW_START_Y), active=True)
    assert board.process_pin_collisions(ball, 0.0) is False
    assert (ball.x, ball.y) == (2.0, float(PIN_ROW_START_Y))


@pytest.mark.parametrize("x, expected", [(-10.0, 0), (500.0, NUM_BINS - 1)])
def test_ball_at_bottom_clamped_to_edge_bins(x, expected):
    board = GaltonBoard(random.Random(1))
    ball = Ball(x=x, y=float(BOTTOM_Y), active=True)
    assert board.process_ball_at_bottom(ball) == expected
    assert board.bins[expected] == 1
    assert board.total_dropped == 1
    assert ball.active is False


def test_ball_in_centre_lands_in_middle_bin():
    board = GaltonBoard(random.Random(1))
    ball = Ball(x=WIDTH / 2.0, y=float(BOTTOM_Y), active=True)
    assert board.process_ball_at_bottom(ball) == NUM_BINS // 2


def test_max_bin_count():
    board = GaltonBoard(random.Random(1))
    board.bins[2] = 5
    board.bins[9] = 11
    assert board.max_bin_count() == 11


def test_keep_in_bounds():
    left = Ball(x=-5.0)
    right = Ball(x=500.0)
    keep_in_bounds(left)
    keep_in_bounds(right)
    assert left.x == BALL_RADIUS
    assert right.x == WIDTH - 1 - BALL_RADIUS


def test_map_range_endpoints_and_degenerate():
    assert map_range(3.0, 3.0, 9.0, -2.0, 4.0) == -2.0
    assert map_range(9.0, 3.0, 9.0, -2.0, 4.0) == 4.0
    assert map_range(5.0, 2.0, 2.0, -1.0, 1.0) == 0.0


def test_joystick_bias_range():
    center = (RAW_X_MAX + RAW_X_MIN) // 2
    assert joystick_bias(center) == 0.0
    assert joystick_bias(RAW_X_MAX) == 1.0
    assert joystick_bias(RAW_X_MIN) == -1.0
    assert joystick_bias(4095) == 1.0
    assert joystick_bias(0) == -1.0


def test_joystick_bias_is_monotonic():
    values = [joystick_bias(raw) for raw in range(0, 4096, 16)]
    assert values == sorted(values)
    assert all(-1.0 <= value <= 1.0 for value in values)


def test_bar_height():
    assert bar_height(5, 0) == 0
    assert bar_height(0, 10) == 0
    assert bar_height(10, 10) == MAX_HISTO_HEIGHT
    heights = [bar_height(count, 20) for count in range(21)]
    assert heights == sorted(heights)


def test_bar_widths_stay_on_screen():
    for index in range(NUM_BINS):
        width = bar_width(index)
        assert width > 0
        assert int(index * BIN_WIDTH) + width < WIDTH
    assert bar_width(NUM_BINS + 1) == 0


def test_pin_rows_are_centred_triangle():
    positions = pin_positions()
    rows = Counter(y for _, y in positions)
    assert [rows[y] for y in sorted(rows)] == list(range(1, NUM_PIN_ROWS + 1))
    for y in rows:
        xs = [x for x, row_y in positions if row_y == y]
        assert sum(xs) / len(xs) == pytest.approx(WIDTH / 2.0)