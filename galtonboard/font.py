"""An 8x8 column-major bitmap font for upper-case letters and digits."""

from __future__ import annotations

GLYPH_SIZE = 8

# Each glyph is eight column bytes; bit 0 is the top row of the column.
FONT = bytes(
    [
        0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00,  # blank
        0x78, 0x14, 0x12, 0x11, 0x12, 0x14, 0x78, 0x00,  # A
        0x7F, 0x49, 0x49, 0x49, 0x49, 0x49, 0x7F, 0x00,  # B
        0x7E, 0x41, 0x41, 0x41, 0x41, 0x41, 0x41, 0x00,  # C
        0x7F, 0x41, 0x41, 0x41, 0x41, 0x41, 0x7E, 0x00,  # D
        0x7F, 0x49, 0x49, 0x49, 0x49, 0x49, 0x49, 0x00,  # E
        0x7F, 0x09, 0x09, 0x09, 0x09, 0x01, 0x01, 0x00,  # F
        0x7F, 0x41, 0x41, 0x41, 0x51, 0x51, 0x73, 0x00,  # G
        0x7F, 0x08, 0x08, 0x08, 0x08, 0x08, 0x7F, 0x00,  # H
        0x00, 0x00, 0x00, 0x7F, 0x00, 0x00, 0x00, 0x00,  # I
        0x21, 0x41, 0x41, 0x3F, 0x01, 0x01, 0x01, 0x00,  # J
        0x00, 0x7F, 0x08, 0x08, 0x14, 0x22, 0x41, 0x00,  # K
        0x7F, 0x40, 0x40, 0x40, 0x40, 0x40, 0x40, 0x00,  # L
        0x7F, 0x02, 0x04, 0x08, 0x04, 0x02, 0x7F, 0x00,  # M
        0x7F, 0x02, 0x04, 0x08, 0x10, 0x20, 0x7F, 0x00,  # N
        0x3E, 0x41, 0x41, 0x41, 0x41, 0x41, 0x3E, 0x00,  # O
        0x7F, 0x11, 0x11, 0x11, 0x11, 0x11, 0x0E, 0x00,  # P
        0x3E, 0x41, 0x41, 0x49, 0x51, 0x61, 0x7E, 0x00,  # Q
        0x7F, 0x11, 0x11, 0x11, 0x31, 0x51, 0x0E, 0x00,  # R
        0x46, 0x49, 0x49, 0x49, 0x49, 0x30, 0x00, 0x00,  # S
        0x01, 0x01, 0x01, 0x7F, 0x01, 0x01, 0x01, 0x00,  # T
        0x3F, 0x40, 0x40, 0x40, 0x40, 0x40, 0x3F, 0x00,  # U
        0x0F, 0x10, 0x20, 0x40, 0x20, 0x10, 0x0F, 0x00,  # V
        0x7F, 0x20, 0x10, 0x08, 0x10, 0x20, 0x7F, 0x00,  # W
        0x00, 0x41, 0x22, 0x14, 0x14, 0x22, 0x41, 0x00,  # X
        0x01, 0x02, 0x04, 0x78, 0x04, 0x02, 0x01, 0x00,  # Y
        0x41, 0x61, 0x59, 0x45, 0x43, 0x41, 0x00, 0x00,  # Z
        0x3E, 0x41, 0x41, 0x49, 0x41, 0x41, 0x3E, 0x00,  # 0
        0x00, 0x00, 0x42, 0x7F, 0x40, 0x00, 0x00, 0x00,  # 1
        0x30, 0x49, 0x49, 0x49, 0x49, 0x46, 0x00, 0x00,  # 2
        0x49, 0x49, 0x49, 0x49, 0x49, 0x49, 0x36, 0x00,  # 3
        0x3F, 0x20, 0x20, 0x78, 0x20, 0x20, 0x00, 0x00,  # 4
        0x4F, 0x49, 0x49, 0x49, 0x49, 0x30, 0x00, 0x00,  # 5
        0x3F, 0x48, 0x48, 0x48, 0x48, 0x48, 0x30, 0x00,  # 6
        0x01, 0x01, 0x01, 0x61, 0x31, 0x0D, 0x03, 0x00,  # 7
        0x36, 0x49, 0x49, 0x49, 0x49, 0x49, 0x36, 0x00,  # 8
        0x06, 0x09, 0x09, 0x09, 0x09, 0x09, 0x7F, 0x00,  # 9
    ]
)

GLYPH_COUNT = len(FONT) // GLYPH_SIZE


def _code(character: str | int) -> int:
    if isinstance(character, int):
        if not 0 <= character <= 0xFF:
            raise ValueError(f"character code out of byte range: {character}")
        return character
    if len(character) != 1:
        raise ValueError(f"expected a single character, got {character!r}")
    return ord(character)


def glyph_index(character: str | int) -> int:
    """Return the font slot of a character; unknown characters map to 0 (blank).

    Only upper-case ASCII letters and digits have glyphs; no case folding is done.
    """
    code = _code(character)
    if ord("A") <= code <= ord("Z"):
        return code - ord("A") + 1
    if ord("0") <= code <= ord("9"):
        return code - ord("0") + 27
    return 0


def glyph(character: str | int) -> bytes:
    """Return the eight column bytes drawn for a character, upper-casing ASCII letters."""
    code = _code(character)
    if ord("a") <= code <= ord("z"):
        code -= ord("a") - ord("A")
    start = glyph_index(code) * GLYPH_SIZE
    return FONT[start:start + GLYPH_SIZE]