"""A page-organised monochrome frame buffer as used by SSD1306 displays."""

from __future__ import annotations

from dataclasses import dataclass

from .font import glyph

PAGE_HEIGHT = 8
DEFAULT_WIDTH = 128
DEFAULT_HEIGHT = 64


@dataclass
class RenderArea:
    """A rectangle of display columns and pages to be refreshed."""

    start_column: int
    end_column: int
    start_page: int
    end_page: int

    def buffer_length(self) -> int:
        """Number of bytes of display memory the area covers."""
        columns = self.end_column - self.start_column + 1
        pages = self.end_page - self.start_page + 1
        return columns * pages


class FrameBuffer:
    """One bit per pixel; each byte is a vertical strip of eight pixels in a page."""

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> None:
        if width <= 0 or height <= 0 or height % PAGE_HEIGHT:
            raise ValueError(f"invalid frame buffer size {width}x{height}")
        self.width = width
        self.height = height
        self._data = bytearray(width * height // PAGE_HEIGHT)

    def __len__(self) -> int:
        return len(self._data)

    def clear(self) -> None:
        """Turn every pixel off."""
        self._data[:] = bytes(len(self._data))

    def _locate(self, x: int, y: int) -> tuple[int, int]:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height}")
        return (y // PAGE_HEIGHT) * self.width + x, 1 << (y % PAGE_HEIGHT)

    def set_pixel(self, x: int, y: int, on: bool = True) -> None:
        """Switch one pixel on or off."""
        index, mask = self._locate(x, y)
        if on:
            self._data[index] |= mask
        else:
            self._data[index] &= ~mask & 0xFF

    def get_pixel(self, x: int, y: int) -> bool:
        """Whether one pixel is on."""
        index, mask = self._locate(x, y)
        return bool(self._data[index] & mask)

    def draw_line(self, x0: int, y0: int, x1: int, y1: int, on: bool = True) -> None:
        """Draw a straight line with Bresenham's algorithm, both ends included."""
        dx = abs(x1 - x0)
        dy = -abs(y1 - y0)
        sx = 1 if x0 < x1 else -1
        sy = 1 if y0 < y1 else -1
        error = dx + dy
        while True:
            self.set_pixel(x0, y0, on)
            if x0 == x1 and y0 == y1:
                break
            doubled = 2 * error
            if doubled >= dy:
                error += dy
                x0 += sx
            if doubled <= dx:
                error += dx
                y0 += sy

    def draw_char(self, x: int, y: int, character: str | int) -> None:
        """Copy a glyph into the page holding row y; ignored if it would not fit."""
        if x > self.width - PAGE_HEIGHT or y > self.height - PAGE_HEIGHT:
            return
        start = int(y / PAGE_HEIGHT) * self.width + x
        for offset, column in enumerate(glyph(character)):
            index = start + offset
            if 0 <= index < len(self._data):
                self._data[index] = column

    def draw_string(self, x: int, y: int, text: str) -> None:
        """Draw characters eight columns apart, dropping those past the edge."""
        if x > self.width - PAGE_HEIGHT or y > self.height - PAGE_HEIGHT:
            return
        for character in text:
            self.draw_char(x, y, character)
            x += PAGE_HEIGHT

    def to_bytes(self) -> bytes:
        """The display memory image, page by page."""
        return bytes(self._data)