"""SSD1306 OLED controller protocol over an I2C bus."""

from __future__ import annotations

from collections.abc import Iterable

from .framebuffer import PAGE_HEIGHT, FrameBuffer, RenderArea

DEFAULT_ADDRESS = 0x3C
I2C_CLOCK_KHZ = 400

COMMAND_PREFIX = 0x80
DATA_PREFIX = 0x40

SET_MEMORY_MODE = 0x20
SET_COLUMN_ADDRESS = 0x21
SET_PAGE_ADDRESS = 0x22
SET_HORIZONTAL_SCROLL = 0x26
SET_SCROLL = 0x2E
SET_DISPLAY_START_LINE = 0x40
SET_CONTRAST = 0x81
SET_CHARGE_PUMP = 0x8D
SET_SEGMENT_REMAP = 0xA0
SET_ENTIRE_ON = 0xA4
SET_ALL_ON = 0xA5
SET_NORMAL_DISPLAY = 0xA6
SET_INVERSE_DISPLAY = 0xA7
SET_MUX_RATIO = 0xA8
SET_DISPLAY = 0xAE
SET_COMMON_OUTPUT_DIRECTION = 0xC0
SET_DISPLAY_OFFSET = 0xD3
SET_DISPLAY_CLOCK_DIVIDE_RATIO = 0xD5
SET_PRECHARGE = 0xD9
SET_COMMON_PIN_CONFIGURATION = 0xDA
SET_VCOMH_DESELECT_LEVEL = 0xDB
WRITE_MODE = 0xFE
READ_MODE = 0xFF


class I2CBus:
    """An I2C bus that records every write; subclass it to drive a real bus."""

    def __init__(self) -> None:
        self.writes: list[tuple[int, bytes]] = []

    def write(self, address: int, data: bytes) -> None:
        """Send one transfer to the device at the given address."""
        self.writes.append((address, bytes(data)))


def init_commands(width: int, height: int) -> bytes:
    """The power-up command sequence for a panel of the given size."""
    pin_configuration = 0x12 if (width, height) == (128, 64) else 0x02
    return bytes(
        [
            SET_DISPLAY, SET_MEMORY_MODE, 0x00,
            SET_DISPLAY_START_LINE, SET_SEGMENT_REMAP | 0x01,
            SET_MUX_RATIO, height - 1,
            SET_COMMON_OUTPUT_DIRECTION | 0x08, SET_DISPLAY_OFFSET, 0x00,
            SET_COMMON_PIN_CONFIGURATION, pin_configuration,
            SET_DISPLAY_CLOCK_DIVIDE_RATIO, 0x80,
            SET_PRECHARGE, 0xF1,
            SET_VCOMH_DESELECT_LEVEL, 0x30,
            SET_CONTRAST, 0xFF,
            SET_ENTIRE_ON, SET_NORMAL_DISPLAY,
            SET_CHARGE_PUMP, 0x14,
            SET_SCROLL | 0x00,
            SET_DISPLAY | 0x01,
        ]
    )


def scroll_commands(enabled: bool) -> bytes:
    """Commands that set up horizontal scrolling and switch it on or off."""
    return bytes(
        [
            SET_HORIZONTAL_SCROLL | 0x00, 0x00, 0x00, 0x00, 0x03, 0x00, 0xFF,
            SET_SCROLL | (0x01 if enabled else 0x00),
        ]
    )


class Ssd1306:
    """A display driven one command per transfer, with a page-addressed memory."""

    def __init__(
        self,
        bus: I2CBus,
        address: int = DEFAULT_ADDRESS,
        width: int = 128,
        height: int = 64,
    ) -> None:
        self.bus = bus
        self.address = address
        self.width = width
        self.height = height

    def send_command(self, command: int) -> None:
        """Send one command byte behind a command control byte."""
        self.bus.write(self.address, bytes([COMMAND_PREFIX, command]))

    def send_command_list(self, commands: Iterable[int]) -> None:
        """Send each command in its own transfer."""
        for command in commands:
            self.send_command(command)

    def send_buffer(self, data: bytes) -> None:
        """Send display memory bytes behind a data control byte."""
        self.bus.write(self.address, bytes([DATA_PREFIX]) + bytes(data))

    def init(self) -> None:
        """Configure the panel and switch it on."""
        self.send_command_list(init_commands(self.width, self.height))

    def scroll(self, enabled: bool) -> None:
        """Start or stop horizontal scrolling."""
        self.send_command_list(scroll_commands(enabled))

    def render(self, buffer: FrameBuffer | bytes, area: RenderArea) -> None:
        """Write the start of a buffer into the given area of the display."""
        data = buffer.to_bytes() if isinstance(buffer, FrameBuffer) else bytes(buffer)
        length = area.buffer_length()
        if len(data) < length:
            raise ValueError(f"buffer holds {len(data)} bytes, area needs {length}")
        self.send_command_list(
            [
                SET_COLUMN_ADDRESS, area.start_column, area.end_column,
                SET_PAGE_ADDRESS, area.start_page, area.end_page,
            ]
        )
        self.send_buffer(data[:length])


class BitmapDisplay:
    """A display holding its own RAM image, used to show whole bitmaps."""

    def __init__(
        self,
        bus: I2CBus,
        width: int = 128,
        height: int = 64,
        external_vcc: bool = False,
        address: int = DEFAULT_ADDRESS,
    ) -> None:
        self.bus = bus
        self.width = width
        self.height = height
        self.external_vcc = external_vcc
        self.address = address
        self.pages = height // PAGE_HEIGHT
        self.bufsize = self.pages * width + 1
        self.ram_buffer = bytearray(self.bufsize)
        self.ram_buffer[0] = DATA_PREFIX

    def command(self, command: int) -> None:
        """Send one command byte."""
        self.bus.write(self.address, bytes([COMMAND_PREFIX, command]))

    def config(self) -> None:
        """Configure the panel for vertical addressing and switch it on."""
        for command in (
            SET_DISPLAY | 0x00,
            SET_MEMORY_MODE, 0x01,
            SET_DISPLAY_START_LINE | 0x00,
            SET_SEGMENT_REMAP | 0x01,
            SET_MUX_RATIO, self.height - 1,
            SET_COMMON_OUTPUT_DIRECTION | 0x08,
            SET_DISPLAY_OFFSET, 0x00,
            SET_COMMON_PIN_CONFIGURATION, 0x12,
            SET_DISPLAY_CLOCK_DIVIDE_RATIO, 0x80,
            SET_PRECHARGE, 0xF1,
            SET_VCOMH_DESELECT_LEVEL, 0x30,
            SET_CONTRAST, 0xFF,
            SET_ENTIRE_ON,
            SET_NORMAL_DISPLAY,
            SET_CHARGE_PUMP, 0x14,
            SET_DISPLAY | 0x01,
        ):
            self.command(command)

    def send_data(self) -> None:
        """Address the whole panel and send the RAM image."""
        for command in (
            SET_COLUMN_ADDRESS, 0, self.width - 1,
            SET_PAGE_ADDRESS, 0, self.pages - 1,
        ):
            self.command(command)
        self.bus.write(self.address, bytes(self.ram_buffer))

    def draw_bitmap(self, bitmap: bytes) -> None:
        """Copy a bitmap into RAM byte by byte, refreshing after every byte."""
        size = self.bufsize - 1
        if len(bitmap) < size:
            raise ValueError(f"bitmap holds {len(bitmap)} bytes, display needs {size}")
        for index, value in enumerate(bitmap[:size], start=1):
            self.ram_buffer[index] = value
            self.send_data()