import pytest

from galtonboard.framebuffer import FrameBuffer, RenderArea
from galtonboard.ssd1306 import (
    COMMAND_PREFIX,
    DATA_PREFIX,
    DEFAULT_ADDRESS,
    SET_COLUMN_ADDRESS,
    SET_COMMON_PIN_CONFIGURATION,
    SET_DISPLAY,
    SET_MEMORY_MODE,
    SET_MUX_RATIO,
    SET_PAGE_ADDRESS,
    BitmapDisplay,
    I2CBus,
    Ssd1306,
    init_commands,
    scroll_commands,
)


def test_bus_records_writes():
    bus = I2CBus()
    bus.write(DEFAULT_ADDRESS, b"\x01\x02")
    assert bus.writes == [(DEFAULT_ADDRESS, b"\x01\x02")]


def test_send_command_wire_bytes():
    bus = I2CBus()
    Ssd1306(bus).send_command(0xAE)
    assert bus.writes == [(0x3C, bytes([0x80, 0xAE]))]


def test_init_commands_shape():
    commands = init_commands(128, 64)
    assert commands[0] == SET_DISPLAY
    assert commands[-1] == SET_DISPLAY | 0x01
    assert commands[commands.index(SET_MUX_RATIO) + 1] == 64 - 1


def test_init_commands_pin_configuration_depends_on_size():
    tall = init_commands(128, 64)
    short = init_commands(128, 32)
    assert tall[tall.index(SET_COMMON_PIN_CONFIGURATION) + 1] == 0x12
    assert short[short.index(SET_COMMON_PIN_CONFIGURATION) + 1] == 0x02


def test_scroll_commands_toggle_last_byte():
    on = scroll_commands(True)
    off = scroll_commands(False)
    assert on[:-1] == off[:-1]
    assert off[-1] == 0x2E
    assert on[-1] == 0x2E | 0x01


def test_init_sends_one_transfer_per_command():
    bus = I2CBus()
    display = Ssd1306(bus)
    display.init()
    expected = [(DEFAULT_ADDRESS, bytes([COMMAND_PREFIX, c])) for c in init_commands(128, 64)]
    assert bus.writes == expected


def test_scroll_sends_commands():
    bus = I2CBus()
    Ssd1306(bus).scroll(True)
    assert [data[1] for _, data in bus.writes] == list(scroll_commands(True))


def test_send_buffer_prefixes_data_byte():
    bus = I2CBus()
    Ssd1306(bus, address=0x3D).send_buffer(b"\xAA\x55")
    assert bus.writes == [(0x3D, bytes([DATA_PREFIX, 0xAA, 0x55]))]


def test_render_full_frame():
    bus = I2CBus()
    fb = FrameBuffer()
    fb.draw_string(0, 0, "HI")
    area = RenderArea(0, fb.width - 1, 0, fb.height // 8 - 1)
    Ssd1306(bus).render(fb, area)
    commands = [data[1] for _, data in bus.writes[:-1]]
    assert commands == [SET_COLUMN_ADDRESS, 0, fb.width - 1, SET_PAGE_ADDRESS, 0, fb.height // 8 - 1]
    assert bus.writes[-1][1] == bytes([DATA_PREFIX]) + fb.to_bytes()


def test_render_partial_area_sends_buffer_prefix():
    bus = I2CBus()
    data = bytes(range(40))
    area = RenderArea(0, 9, 0, 1)
    Ssd1306(bus).render(data, area)
    assert bus.writes[-1][1] == bytes([DATA_PREFIX]) + data[:area.buffer_length()]


def test_render_short_buffer_rejected():
    bus = I2CBus()
    with pytest.raises(ValueError):
        Ssd1306(bus).render(b"\x00" * 4, RenderArea(0, 9, 0, 0))
    assert bus.writes == []


def test_bitmap_display_initial_ram():
    display = BitmapDisplay(I2CBus(), 128, 64)
    assert display.ram_buffer[0] == DATA_PREFIX
    assert len(display.ram_buffer) == 128 * (64 // 8) + 1
    assert not any(display.ram_buffer[1:])


def test_bitmap_config_uses_vertical_mode():
    bus = I2CBus()
    BitmapDisplay(bus).config()
    commands = [data[1] for _, data in bus.writes]
    assert all(data[0] == COMMAND_PREFIX for _, data in bus.writes)
    assert commands[0] == SET_DISPLAY
    assert commands[1:3] == [SET_MEMORY_MODE, 0x01]
    assert commands[-1] == SET_DISPLAY | 0x01


def test_send_data_addresses_whole_panel():
    bus = I2CBus()
    display = BitmapDisplay(bus, 16, 16)
    display.send_data()
    commands = [data[1] for _, data in bus.writes[:-1]]
    assert commands == [SET_COLUMN_ADDRESS, 0, 15, SET_PAGE_ADDRESS, 0, 1]
    assert bus.writes[-1] == (DEFAULT_ADDRESS, bytes(display.ram_buffer))


def test_draw_bitmap_refreshes_after_each_byte():
    bus = I2CBus()
    display = BitmapDisplay(bus, 8, 8)
    bitmap = bytes(range(1, 9))
    display.draw_bitmap(bitmap)
    assert bytes(display.ram_buffer) == bytes([DATA_PREFIX]) + bitmap
    data_writes = [data for _, data in bus.writes if data[0] == DATA_PREFIX]
    assert len(data_writes) == len(bitmap)
    assert data_writes[-1] == bytes([DATA_PREFIX]) + bitmap
    assert data_writes[0] == bytes([DATA_PREFIX, 1]) + bytes(len(bitmap) - 1)


def test_draw_bitmap_short_rejected():
    display = BitmapDisplay(I2CBus(), 8, 8)
    with pytest.raises(ValueError):
        display.draw_bitmap(b"\x01\x02")