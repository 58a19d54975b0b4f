"""Raw CHIP-8 ROM image loading."""

from __future__ import annotations

from pathlib import Path
from typing import BinaryIO

from pychip8.bus import MAX_PROGRAM_SIZE
from pychip8.utils import debug_enabled, debug_log


class RomFormatError(RuntimeError):
    """Raised when a ROM image is empty or does not fit in program memory."""


def load_rom(stream: BinaryIO, *, limit: int = MAX_PROGRAM_SIZE) -> bytes:
    """Read a ROM image from ``stream``; at most ``limit`` bytes are accepted."""

    data = stream.read(limit + 1)
    if not data:
        raise RomFormatError("ROM image is empty")
    if len(data) > limit:
        raise RomFormatError(f"ROM image exceeds {limit} bytes")
    if len(data) % 2 and debug_enabled("loader"):
        debug_log("loader", "odd ROM length=%d", len(data))
    if debug_enabled("loader"):
        debug_log("loader", "read %d bytes of ROM", len(data))
    return bytes(data)


def load_rom_from_path(path: Path, *, limit: int = MAX_PROGRAM_SIZE) -> bytes:
    """Load a ROM image from the filesystem."""

    with path.open("rb") as handle:
        return load_rom(handle, limit=limit)
