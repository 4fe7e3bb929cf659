"""Drawing the simulation and histogram screens into a frame buffer."""

from __future__ import annotations

from .framebuffer import FrameBuffer
from .simulation import (
    BALL_RADIUS,
    BIN_WIDTH,
    BOTTOM_Y,
    NUM_BINS,
    GaltonBoard,
    bar_height,
    bar_width,
    pin_positions,
)

BIAS_BAR_CENTER_X = 128 - 15
BIAS_BAR_Y = 5
BIAS_BAR_HALF_WIDTH = 10
TITLE_X = 1
TITLE_Y = 1
HISTOGRAM_TOP = 10
CHAR_ESTIMATE_WIDTH = 6
PIXEL_ON = "#"
PIXEL_OFF = "."


def _draw_pixel(framebuffer: FrameBuffer, x: int, y: int) -> None:
    if 0 <= x < framebuffer.width and 0 <= y < framebuffer.height:
        framebuffer.set_pixel(x, y, True)


def draw_square(framebuffer: FrameBuffer, x: int, y: int, width: int, height: int) -> None:
    """Fill a rectangle, clipping whatever falls off the screen."""
    for dx in range(width):
        for dy in range(height):
            _draw_pixel(framebuffer, x + dx, y + dy)


def draw_pins(framebuffer: FrameBuffer) -> None:
    """Light one pixel per pin."""
    for pin_x, pin_y in pin_positions():
        _draw_pixel(framebuffer, int(pin_x), int(pin_y))


def _draw_title(board: GaltonBoard, framebuffer: FrameBuffer) -> None:
    framebuffer.draw_string(TITLE_X, TITLE_Y, f"N {board.total_dropped}")


def draw_simulation(board: GaltonBoard, framebuffer: FrameBuffer, bias: float) -> None:
    """Draw pins, bin walls, balls, the ball count and the bias indicator."""
    framebuffer.clear()
    width, height = framebuffer.width, framebuffer.height
    draw_pins(framebuffer)

    for index in range(NUM_BINS + 1):
        x = min(int(index * BIN_WIDTH), width - 1)
        framebuffer.draw_line(x, BOTTOM_Y, x, height - 1, True)
    framebuffer.draw_line(0, BOTTOM_Y, width - 1, BOTTOM_Y, True)

    size = BALL_RADIUS * 2 + 1
    for ball in board.active_balls:
        draw_x = max(int(ball.x) - BALL_RADIUS, 0)
        draw_y = max(int(ball.y) - BALL_RADIUS, 0)
        if draw_x + size > width:
            draw_x = width - size
        if draw_y + size > height:
            draw_y = height - size
        draw_square(framebuffer, draw_x, draw_y, size, size)

    _draw_title(board, framebuffer)

    framebuffer.draw_line(
        BIAS_BAR_CENTER_X - BIAS_BAR_HALF_WIDTH, BIAS_BAR_Y,
        BIAS_BAR_CENTER_X + BIAS_BAR_HALF_WIDTH, BIAS_BAR_Y, True,
    )
    indicator_x = BIAS_BAR_CENTER_X + int(bias * BIAS_BAR_HALF_WIDTH)
    framebuffer.draw_line(indicator_x, BIAS_BAR_Y - 2, indicator_x, BIAS_BAR_Y + 2, True)


def draw_bin_count(
    board: GaltonBoard, framebuffer: FrameBuffer, bin_index: int, x_start: int, width: int
) -> None:
    """Write a bin's count along the bottom, roughly centred under its bar."""
    count = board.bins[bin_index]
    if count <= 0:
        return
    text = str(count)
    text_width = len(text) * CHAR_ESTIMATE_WIDTH
    text_x = max(x_start + width // 2 - text_width // 2, x_start)
    framebuffer.draw_string(text_x, framebuffer.height - 8, text)


def draw_histogram(board: GaltonBoard, framebuffer: FrameBuffer) -> None:
    """Draw a bar per bin scaled to the fullest bin, with counts and title."""
    framebuffer.clear()
    max_count = board.max_bin_count()
    for index, count in enumerate(board.bins):
        height = bar_height(count, max_count)
        x_start = int(index * BIN_WIDTH)
        width = bar_width(index)
        y_start = max(framebuffer.height - 1 - height, HISTOGRAM_TOP)
        if height > 0 and width > 0:
            draw_square(framebuffer, x_start, y_start, width, height)
        draw_bin_count(board, framebuffer, index, x_start, width)
    _draw_title(board, framebuffer)


def to_text(framebuffer: FrameBuffer) -> str:
    """Render the frame buffer as lines of '#' and '.', one per pixel row."""
    return "\n".join(
        "".join(
            PIXEL_ON if framebuffer.get_pixel(x, y) else PIXEL_OFF
            for x in range(framebuffer.width)
        )
        for y in range(framebuffer.height)
    )