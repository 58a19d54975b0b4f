"""Tests for the raw ROM loader."""

from __future__ import annotations

import io

import pytest

from pychip8.bus import MAX_PROGRAM_SIZE
from pychip8.loader import RomFormatError, load_rom, load_rom_from_path


def test_load_rom_reads_whole_stream() -> None:
    assert load_rom(io.BytesIO(b"\x60\x05\x00\xE0")) == b"\x60\x05\x00\xE0"


def test_load_rom_accepts_maximum_size() -> None:
    data = bytes(range(256)) * (MAX_PROGRAM_SIZE // 256)

    assert len(load_rom(io.BytesIO(data))) == MAX_PROGRAM_SIZE


def test_load_rom_rejects_oversized_image() -> None:
    with pytest.raises(RomFormatError):
        load_rom(io.BytesIO(bytes(MAX_PROGRAM_SIZE + 1)))


def test_load_rom_rejects_empty_image() -> None:
    with pytest.raises(RomFormatError):
        load_rom(io.BytesIO(b""))


def test_load_rom_from_path(tmp_path) -> None:
    rom_path = tmp_path / "pong.ch8"
    rom_path.write_bytes(b"\x12\x00")

    assert load_rom_from_path(rom_path) == b"\x12\x00"


def test_load_rom_from_missing_path(tmp_path) -> None:
    with pytest.raises(FileNotFoundError):
        load_rom_from_path(tmp_path / "missing.ch8")
