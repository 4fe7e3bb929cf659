"""Run the Galton board headless and print the final screen."""

from __future__ import annotations

import argparse
import random

from .framebuffer import FrameBuffer
from .render import draw_histogram, draw_simulation, to_text
from .simulation import GaltonBoard, joystick_bias


def run(
    frames: int = 2000,
    drop_every: int = 3,
    bias: float = 0.0,
    seed: int | None = None,
    histogram: bool = False,
) -> tuple[GaltonBoard, FrameBuffer]:
    """Simulate a number of frames, dropping a ball every few frames."""
    if frames < 0:
        raise ValueError(f"frames must not be negative: {frames}")
    if drop_every < 0:
        raise ValueError(f"drop interval must not be negative: {drop_every}")
    if not -1.0 <= bias <= 1.0:
        raise ValueError(f"bias must lie between -1 and 1: {bias}")
    board = GaltonBoard(random.Random(seed))
    framebuffer = FrameBuffer()
    for frame in range(frames):
        if drop_every and frame % drop_every == 0:
            board.add_ball()
        board.update(bias)
        draw_simulation(board, framebuffer, bias)
    if histogram:
        board.toggle_view()
        draw_histogram(board, framebuffer)
    return board, framebuffer


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="galtonboard", description="Simulate a Galton board and print the screen."
    )
    parser.add_argument("--frames", type=int, default=2000, help="frames to simulate")
    parser.add_argument("--drop-every", type=int, default=3, help="frames between drops, 0 for none")
    parser.add_argument("--bias", type=float, default=0.0, help="bias from -1 (left) to 1 (right)")
    parser.add_argument("--raw-x", type=int, help="raw joystick reading, overrides --bias")
    parser.add_argument("--seed", type=int, help="random seed")
    parser.add_argument("--histogram", action="store_true", help="show the histogram screen")
    args = parser.parse_args(argv)

    bias = joystick_bias(args.raw_x) if args.raw_x is not None else args.bias
    try:
        board, framebuffer = run(args.frames, args.drop_every, bias, args.seed, args.histogram)
    except ValueError as error:
        parser.error(str(error))

    print(to_text(framebuffer))
    print(f"dropped: {board.total_dropped}")
    print("bins: " + " ".join(str(count) for count in board.bins))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())