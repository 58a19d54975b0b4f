"""Loaders for CHIP-8 program images."""

from __future__ import annotations

from .rom import RomFormatError, load_rom, load_rom_from_path

__all__ = [
    "RomFormatError",
    "load_rom",
    "load_rom_from_path",
]
