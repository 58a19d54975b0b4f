"""Exhaustive carry/borrow checks for the 8xy4, 8xy5 and 8xy7 instructions."""

from __future__ import annotations

import pytest

from pychip8.bus import Memory
from pychip8.cpu import Chip8CPU
from pychip8.io import Keypad
from pychip8.video import Framebuffer


def single_instruction_cpu(word: int) -> Chip8CPU:
    memory = Memory()
    memory.load_image(word.to_bytes(2, "big"))
    return Chip8CPU(memory, Framebuffer(), Keypad())


def run_pair(cpu: Chip8CPU, a: int, b: int) -> tuple[int, int]:
    cpu.state.pc = 0x200
    cpu.state.v[0x3] = a
    cpu.state.v[0x7] = b
    cpu.step()
    return cpu.state.v[0x3], cpu.state.v[0xF]


def test_add_register_sets_carry() -> None:
    cpu = single_instruction_cpu(0x8374)
    for a in range(256):
        for b in range(256):
            result, flag = run_pair(cpu, a, b)
            assert result == (a + b) % 256
            assert flag == (1 if a + b > 255 else 0)


def test_sub_register_sets_no_borrow() -> None:
    cpu = single_instruction_cpu(0x8375)
    for a in range(256):
        for b in range(256):
            result, flag = run_pair(cpu, a, b)
            assert result == (a - b) % 256
            assert flag == (1 if a >= b else 0)


def test_subn_register_sets_no_borrow() -> None:
    cpu = single_instruction_cpu(0x8377)
    for a in range(256):
        for b in range(256):
            result, flag = run_pair(cpu, a, b)
            assert result == (b - a) % 256
            assert flag == (1 if b >= a else 0)


@pytest.mark.parametrize("value", [0x00, 0x01, 0x80, 0xFF, 0x5A])
def test_shifts_capture_shifted_out_bit(value: int) -> None:
    right = single_instruction_cpu(0x8376)
    right.state.v[0x3] = value
    right.step()
    assert right.state.v[0x3] == value >> 1
    assert right.state.v[0xF] == value & 1

    left = single_instruction_cpu(0x837E)
    left.state.v[0x3] = value
    left.step()
    assert left.state.v[0x3] == (value << 1) & 0xFF
    assert left.state.v[0xF] == value >> 7
