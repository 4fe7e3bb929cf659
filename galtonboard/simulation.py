"""Physics and bookkeeping of the Galton board: falling balls, pins and bins."""

from __future__ import annotations

import math
import random
from dataclasses import dataclass
from enum import Enum

WIDTH = 128
HEIGHT = 64

MAX_BALLS = 50
NUM_PIN_ROWS = 12
BALL_RADIUS = 1

PIN_ROW_START_Y = 8
PIN_ROW_SPACING = 4
PIN_HORIZONTAL_SPACING = 9
BOTTOM_Y = PIN_ROW_START_Y + NUM_PIN_ROWS * PIN_ROW_SPACING + 5

NUM_BINS = 13
BIN_WIDTH = WIDTH / NUM_BINS
MAX_HISTO_HEIGHT = HEIGHT - 15

RAW_X_MIN = 12
RAW_X_MAX = 4076
JOYSTICK_DEADZONE = 200

_BIN_LIMIT = 0xFFFF
_TOTAL_LIMIT = 0xFFFFFFFF


def _clamp(value, low, high):
    return min(max(value, low), high)


def _pins_in_row(row: int) -> int:
    return row + 1


def _row_geometry(row: int) -> tuple[float, float]:
    """Return the y of a pin row and the x of its leftmost pin."""
    row_y = float(PIN_ROW_START_Y + row * PIN_ROW_SPACING)
    row_width = (_pins_in_row(row) - 1) * PIN_HORIZONTAL_SPACING
    return row_y, (WIDTH - row_width) / 2.0


@dataclass
class Ball:
    """One ball on the board."""

    x: float = 0.0
    y: float = 0.0
    active: bool = False


class View(Enum):
    """Which screen is shown."""

    SIMULATION = "simulation"
    HISTOGRAM = "histogram"


def keep_in_bounds(ball: Ball) -> None:
    """Keep a ball inside the side walls."""
    ball.x = _clamp(ball.x, BALL_RADIUS, WIDTH - 1 - BALL_RADIUS)


def map_range(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Map a value linearly from one interval onto another."""
    if abs(in_max - in_min) < 1e-6:
        return out_min + (out_max - out_min) / 2.0
    return out_min + (out_max - out_min) * (value - in_min) / (in_max - in_min)


def joystick_bias(raw_x: int) -> float:
    """Turn a raw joystick reading into a bias between -1.0 and 1.0."""
    center_x = (RAW_X_MAX + RAW_X_MIN) // 2
    centered_x = raw_x - center_x
    if abs(centered_x) < JOYSTICK_DEADZONE:
        return 0.0
    if centered_x > 0:
        bias = map_range(raw_x, center_x + JOYSTICK_DEADZONE, RAW_X_MAX, 0.0, 1.0)
    else:
        bias = map_range(raw_x, RAW_X_MIN, center_x - JOYSTICK_DEADZONE, -1.0, 0.0)
    return _clamp(bias, -1.0, 1.0)


def bar_height(bin_count: int, max_count: int) -> int:
    """Height in pixels of a histogram bar, scaled to the fullest bin."""
    if max_count == 0:
        return 0
    height = int((bin_count / max_count) * MAX_HISTO_HEIGHT)
    return _clamp(height, 0, MAX_HISTO_HEIGHT)


def bar_width(bin_index: int) -> int:
    """Width in pixels of a histogram bar, leaving a gap and staying on screen."""
    x_start = int(bin_index * BIN_WIDTH)
    width = max(int(BIN_WIDTH) - 1, 1)
    if x_start >= WIDTH:
        return 0
    if x_start + width >= WIDTH:
        width = WIDTH - x_start - 1
    return width


def pin_positions() -> list[tuple[float, float]]:
    """Every pin as an (x, y) pair, row by row from the top."""
    positions = []
    for row in range(NUM_PIN_ROWS):
        row_y, start_x = _row_geometry(row)
        positions.extend(
            (start_x + pin * PIN_HORIZONTAL_SPACING, row_y) for pin in range(_pins_in_row(row))
        )
    return positions


class GaltonBoard:
    """Balls dropping through rows of pins into bins, with a tunable bias."""

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else random.Random()
        self.balls = [Ball() for _ in range(MAX_BALLS)]
        self.bins = [0] * NUM_BINS
        self.total_dropped = 0
        self.view = View.SIMULATION

    def reset(self) -> None:
        """Remove all balls, empty the bins and show the simulation."""
        for ball in self.balls:
            ball.active = False
        self.bins = [0] * NUM_BINS
        self.total_dropped = 0
        self.view = View.SIMULATION

    @property
    def active_balls(self) -> list[Ball]:
        return [ball for ball in self.balls if ball.active]

    def add_ball(self) -> bool:
        """Drop a new ball from the top centre; False if hidden or full."""
        if self.view is not View.SIMULATION:
            return False
        for ball in self.balls:
            if not ball.active:
                ball.x = WIDTH / 2.0
                ball.y = 0.0
                ball.active = True
                return True
        return False

    def toggle_view(self) -> View:
        """Switch between the simulation and the histogram."""
        self.view = View.HISTOGRAM if self.view is View.SIMULATION else View.SIMULATION
        return self.view

    def update(self, bias: float) -> None:
        """Advance every active ball by one step."""
        for ball in self.balls:
            if not ball.active:
                continue
            ball.y += 1.0
            self.process_pin_collisions(ball, bias)
            if ball.y >= BOTTOM_Y:
                self.process_ball_at_bottom(ball)
                continue
            keep_in_bounds(ball)

    def process_pin_collisions(self, ball: Ball, bias: float) -> bool:
        """Deflect a ball off the pin it meets, if any; True when it hit one."""
        for row in range(NUM_PIN_ROWS):
            row_y, start_x = _row_geometry(row)
            if not row_y <= ball.y < row_y + 1.0:
                continue
            for pin in range(_pins_in_row(row)):
                pin_x = start_x + pin * PIN_HORIZONTAL_SPACING
                if abs(ball.x - pin_x) < PIN_HORIZONTAL_SPACING / 2.0:
                    self.deflect(ball, bias)
                    ball.y = row_y + 1.0
                    return True
        return False

    def deflect(self, ball: Ball, bias: float) -> None:
        """Send a ball half a pin spacing right or left; bias favours the right."""
        threshold = _clamp(50 + int(bias * 40.0), 5, 95)
        if self.rng.randrange(100) < threshold:
            ball.x += PIN_HORIZONTAL_SPACING / 2.0
        else:
            ball.x -= PIN_HORIZONTAL_SPACING / 2.0

    def process_ball_at_bottom(self, ball: Ball) -> int:
        """Count a ball into its bin, retire it, and return the bin index."""
        ball.x = _clamp(ball.x, 0, WIDTH - 1)
        index = _clamp(math.floor(ball.x / BIN_WIDTH), 0, NUM_BINS - 1)
        self.bins[index] = (self.bins[index] + 1) & _BIN_LIMIT
        self.total_dropped = (self.total_dropped + 1) & _TOTAL_LIMIT
        ball.active = False
        return index

    def max_bin_count(self) -> int:
        """The largest bin count."""
        return max(self.bins)