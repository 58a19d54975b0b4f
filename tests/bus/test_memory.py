"""Tests for the CHIP-8 memory container."""

from __future__ import annotations

import pytest

from pychip8.bus import (
    FONT_DATA,
    MAX_PROGRAM_SIZE,
    MEMORY_SIZE,
    Memory,
    MemoryError,
    font_address,
)


def test_font_is_loaded_at_start_of_memory() -> None:
    memory = Memory()

    assert memory.read_block(0x000, len(FONT_DATA)) == FONT_DATA
    assert memory.size == MEMORY_SIZE
    assert MAX_PROGRAM_SIZE == 3584


def test_font_address_uses_low_nibble() -> None:
    assert font_address(0x0) == 0x000
    assert font_address(0xF) == 0x04B
    assert font_address(0x1A) == font_address(0xA)


def test_load_image_places_program_at_0x200() -> None:
    memory = Memory()
    memory.load_image(b"\x12\x34")

    assert memory.load16(0x200) == 0x1234


def test_load_image_rejects_oversized_data() -> None:
    memory = Memory()

    with pytest.raises(MemoryError):
        memory.load_image(bytes(MAX_PROGRAM_SIZE + 1))


def test_load_image_rejects_interpreter_area() -> None:
    with pytest.raises(MemoryError):
        Memory().load_image(b"\x00", start=0x100)


def test_store_ignores_protected_region() -> None:
    memory = Memory()
    memory.store8(0x004, 0x00)
    memory.store8(0x1FF, 0x12)

    assert memory.load8(0x004) == FONT_DATA[4]
    assert memory.load8(0x1FF) == 0x00


def test_addresses_wrap_at_4k() -> None:
    memory = Memory()
    memory.store8(0x1FFF, 0x5A)

    assert memory.load8(0xFFF) == 0x5A
    assert memory.load16(0xFFF) == (0x5A << 8) | FONT_DATA[0]


def test_clear_program_area_keeps_font() -> None:
    memory = Memory()
    memory.load_image(b"\xAA\xBB")
    memory.clear_program_area()

    assert memory.load16(0x200) == 0
    assert memory.read_block(0, 5) == FONT_DATA[:5]


def test_snapshot_is_a_copy() -> None:
    memory = Memory()
    snapshot = memory.snapshot()
    memory.store8(0x300, 1)

    assert snapshot[0x300] == 0
    assert len(snapshot) == MEMORY_SIZE
