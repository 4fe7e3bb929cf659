# galtonboard

This package simulates a Galton board, also called a bean machine, and draws it
onto a 128×64 monochrome framebuffer. The framebuffer has the same layout as the
memory of an SSD1306 OLED display.

Balls fall through twelve rows of pins. At each pin a ball moves half a pin
spacing to the left or to the right, and in the end it lands in one of thirteen
bins. A bias from -1.0 to 1.0 changes the odds at every pin: a positive bias
favours the right. A histogram screen shows how many balls reached each bin.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Command line

The `galtonboard` command runs the simulation for a number of frames without a
display. It then prints the final screen as text, one line per pixel row, with
`#` for a lit pixel and `.` for a dark one. After the screen it prints the total
number of balls dropped and the count in each bin.

```
galtonboard --frames 2000 --drop-every 3 --seed 1
galtonboard --bias 0.5 --histogram
galtonboard --help
```

Options:

| Option | Meaning | Default |
|---|---|---|
| `--frames N` | Number of frames to simulate. | 2000 |
| `--drop-every N` | Drop a new ball every N frames. `0` drops none. | 3 |
| `--bias B` | Bias from -1 (left) to 1 (right). | 0.0 |
| `--raw-x N` | Raw joystick reading, turned into a bias with `joystick_bias`. It overrides `--bias`. | — |
| `--seed N` | Random seed, so that a run can be repeated. | — |
| `--histogram` | Print the histogram screen instead of the board. | off |

The command reports an error in these cases:

- the number of frames is negative;
- the drop interval is negative;
- the bias is outside -1 to 1.

## Library use

```python
import random

from galtonboard.framebuffer import FrameBuffer
from galtonboard.render import draw_histogram, draw_simulation, to_text
from galtonboard.simulation import GaltonBoard

board = GaltonBoard(random.Random(1))
fb = FrameBuffer(128, 64)

for frame in range(2000):
    if frame % 4 == 0:
        board.add_ball()
    board.update(0.0)

draw_simulation(board, fb, 0.0)
print(to_text(fb))

board.toggle_view()
draw_histogram(board, fb)
print(to_text(fb))
```

`galtonboard.cli.run(frames, drop_every, bias, seed, histogram)` does the same
loop as the command and returns the board and the framebuffer.

## Modules

### `galtonboard.simulation`

- `GaltonBoard` holds up to 50 balls, the bin counts, the total number of balls
  dropped and the current `View`, which is `SIMULATION` or `HISTOGRAM`.
  - `add_ball()` drops a ball from the top centre. It returns `False` when the
    histogram is shown or when all ball slots are in use.
  - `update(bias)` moves every active ball down by one step.
  - `toggle_view()` switches between the two screens.
  - `reset()` removes all balls and empties the bins.
  - `max_bin_count()` returns the largest bin count.
- `Ball` is one ball on the board.
- `joystick_bias(raw_x)` turns a raw joystick reading into a bias.
  - Readings are taken to run from 12 to 4076.
  - Readings near the centre fall in a dead zone and give a bias of 0.
- `map_range` maps a value linearly from one interval onto another.
- `keep_in_bounds` keeps a ball inside the side walls.
- `pin_positions()` lists the position of every pin.
- `bar_height` and `bar_width` give the size of the histogram bars.

### `galtonboard.render`

- `draw_simulation(board, framebuffer, bias)` draws the board screen. The screen
  shows the pins, the bin walls, the balls, the ball count and a bias indicator.
- `draw_histogram(board, framebuffer)` draws the histogram screen. The bars are
  scaled to the fullest bin, and each bin with balls shows its count under its
  bar.
- `draw_square` and `draw_pins` are the drawing helpers these screens use.
- `to_text(framebuffer)` turns a framebuffer into `#` and `.` text.

### `galtonboard.framebuffer`

- `FrameBuffer(width, height)` is a 1-bit buffer of 128×64 pixels by default.
  It is organised in pages: each byte holds a vertical strip of eight pixels.
  - `set_pixel` and `get_pixel` raise `IndexError` for coordinates outside the
    buffer.
  - `draw_line` draws lines with Bresenham's algorithm.
  - `draw_char` and `draw_string` draw text with the built-in 8×8 font. Text that
    would not fit is skipped.
  - `clear` turns every pixel off.
  - `to_bytes` returns the display memory image.
- `RenderArea` describes a rectangle of columns and pages.
  `RenderArea.buffer_length()` gives the number of bytes that rectangle covers.

### `galtonboard.font`

- The font has glyphs for A–Z and 0–9.
- `glyph(character)` draws lower-case letters as their upper-case forms. Every
  other character is drawn blank.
- `glyph_index(character)` returns a character's slot in the font.

### `galtonboard.ssd1306`

This module builds the SSD1306 command and data streams and writes them to an
`I2CBus`.

- `I2CBus.write(address, data)` records every transfer in `writes`. Subclass it
  to send the transfers somewhere else.
- `Ssd1306` sends one command per transfer. Its methods are `init()`,
  `scroll(enabled)` and `render(buffer, area)`, which writes a framebuffer into a
  `RenderArea`.
- `BitmapDisplay` keeps its own RAM image and shows whole bitmaps with
  `draw_bitmap`.
- `init_commands(width, height)` returns the power-up command bytes.
- `scroll_commands(enabled)` returns the scrolling command bytes.

### `galtonboard.controls`

`Buttons` debounces button edges.

- Feed it edges with `on_edge(gpio, edge, now_us)`, using `Edge.FALL` or
  `Edge.RISE`.
- Apply the result to a board once per frame with `handle(board, now_us)`.
- The button on pin 6 drops a ball. While it is held, it drops another ball
  whenever more than 100 ms have passed since the last repeat.
- The button on pin 5 switches between the board and the histogram.

## What this package does not do

It does not talk to real hardware. `I2CBus` only records what would be sent.
Nothing in the package reads a joystick or GPIO pins, and nothing drives an
actual OLED panel. The `galtonboard` command is not interactive. It runs a fixed
number of frames and prints one final screen as text. The button handling in
`galtonboard.controls` is only used when your own code calls it.