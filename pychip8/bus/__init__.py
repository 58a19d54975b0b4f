"""Memory bus for the CHIP-8 emulator."""

from .memory import (
    FONT_DATA,
    FONT_GLYPH_BYTES,
    FONT_START,
    MAX_PROGRAM_SIZE,
    MEMORY_SIZE,
    PROGRAM_START,
    Memory,
    MemoryError,
    font_address,
)

__all__ = [
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
