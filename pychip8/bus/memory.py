"""CHIP-8 main memory.

The 4 KiB address space holds the built-in hexadecimal font at ``0x000`` and
the program image from ``0x200`` upwards. The interpreter area
(``0x000``-``0x1FF``) is written once at initialisation and is read-only for
executing programs. The call stack and framebuffer are not part of this
container; they live in :mod:`pychip8.cpu.stack` and
:mod:`pychip8.video.framebuffer`.
"""

from __future__ import annotations

from typing import Final

from pychip8.utils import debug_enabled, debug_log

MEMORY_SIZE: Final[int] = 0x1000
ADDRESS_MASK: Final[int] = MEMORY_SIZE - 1
FONT_START: Final[int] = 0x000
FONT_GLYPH_BYTES: Final[int] = 5
PROGRAM_START: Final[int] = 0x200
MAX_PROGRAM_SIZE: Final[int] = MEMORY_SIZE - PROGRAM_START

FONT_DATA: Final[bytes] = bytes(
    (
        0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
        0x20, 0x60, 0x20, 0x20, 0x70,  # 1
        0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
        0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
        0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
        0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
        0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
        0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
        0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
        0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
        0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
        0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
        0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
        0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
        0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
        0xF0, 0x80, 0xF0, 0x80, 0x80,  # F
    )
)


def _mask12(value: int) -> int:
    """Clamp ``value`` to the 12-bit address space."""

    return value & ADDRESS_MASK


class MemoryError(Exception):
    """Raised when the memory container is used incorrectly."""


class Memory:
    """Byte-addressable 4 KiB memory with a protected interpreter area."""

    def __init__(self, *, font: bytes = FONT_DATA, protected_end: int = PROGRAM_START) -> None:
        if len(font) + FONT_START > protected_end:
            raise MemoryError("font does not fit inside the interpreter area")
        self._data = bytearray(MEMORY_SIZE)
        self._data[FONT_START : FONT_START + len(font)] = font
        self._protected_end = protected_end

    @property
    def size(self) -> int:
        return len(self._data)

    @property
    def protected_end(self) -> int:
        return self._protected_end

    def load_image(self, data: bytes, start: int = PROGRAM_START) -> None:
        """Copy ``data`` into memory at ``start`` during initialisation."""

        end = start + len(data)
        if start < self._protected_end or end > MEMORY_SIZE:
            raise MemoryError(f"image of {len(data)} bytes does not fit at {start:#05x}")
        self._data[start:end] = data

    def clear_program_area(self) -> None:
        self._data[self._protected_end :] = bytes(MEMORY_SIZE - self._protected_end)

    def load8(self, address: int) -> int:
        return self._data[_mask12(address)]

    def load16(self, address: int) -> int:
        """Read a big-endian word, wrapping at the end of memory."""

        high = self.load8(address)
        low = self.load8(address + 1)
        return (high << 8) | low

    def store8(self, address: int, value: int) -> None:
        addr = _mask12(address)
        if addr < self._protected_end:
            if debug_enabled("memory"):
                debug_log("memory", "ignored write addr=%03x val=%02x", addr, value & 0xFF)
            return
        self._data[addr] = value & 0xFF

    def read_block(self, address: int, length: int) -> bytes:
        return bytes(self.load8(address + offset) for offset in range(length))

    def snapshot(self) -> bytes:
        return bytes(self._data)


def font_address(digit: int) -> int:
    """Return the address of the sprite for hexadecimal ``digit``."""

    return FONT_START + (digit & 0x0F) * FONT_GLYPH_BYTES


__all__ = [
    "ADDRESS_MASK",
    "FONT_DATA",
    "FONT_GLYPH_BYTES",
    "FONT_START",
    "MAX_PROGRAM_SIZE",
    "MEMORY_SIZE",
    "PROGRAM_START",
    "Memory",
    "MemoryError",
    "font_address",
]
