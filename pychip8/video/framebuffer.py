"""Monochrome 64x32 framebuffer."""

from __future__ import annotations

from typing import Iterable, Sequence

DISPLAY_WIDTH = 64
DISPLAY_HEIGHT = 32
SPRITE_WIDTH = 8


class Framebuffer:
    """Grid of single-bit pixels mutated by CLS and DRW.

    Rows are stored as ``bytearray`` objects holding 0 or 1 per column. Sprite
    coordinates wrap around both axes independently for every pixel.
    """

    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT) -> None:
        if width <= 0 or height <= 0:
            raise ValueError("framebuffer dimensions must be positive")
        self._width = width
        self._height = height
        self._rows = [bytearray(width) for _ in range(height)]

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def clear(self) -> None:
        for row in self._rows:
            row[:] = bytes(self._width)

    def get_pixel(self, x: int, y: int) -> int:
        return self._rows[y % self._height][x % self._width]

    def xor_pixel(self, x: int, y: int, bit: int) -> bool:
        """XOR ``bit`` into the pixel at ``(x, y)`` and report whether it was erased."""

        if not bit:
            return False
        row = self._rows[y % self._height]
        column = x % self._width
        collision = row[column] == 1
        row[column] ^= 1
        return collision

    def draw_sprite(self, x: int, y: int, sprite: Iterable[int]) -> bool:
        """XOR an 8-pixel wide sprite at ``(x, y)``; return True on collision."""

        collision = False
        for row_offset, line in enumerate(sprite):
            for bit_index in range(SPRITE_WIDTH):
                bit = (line >> (SPRITE_WIDTH - 1 - bit_index)) & 0x01
                if self.xor_pixel(x + bit_index, y + row_offset, bit):
                    collision = True
        return collision

    def rows(self) -> Sequence[bytes]:
        return tuple(bytes(row) for row in self._rows)

    def snapshot(self) -> bytes:
        """Return the pixels row-major, one byte per pixel."""

        return b"".join(bytes(row) for row in self._rows)

    def lit_count(self) -> int:
        return sum(sum(row) for row in self._rows)

    def to_text(self, on: str = "#", off: str = ".") -> str:
        return "\n".join("".join(on if cell else off for cell in row) for row in self._rows)
