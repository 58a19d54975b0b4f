"""Tests for the instruction table and mnemonic formatting."""

from __future__ import annotations

import pytest

from pychip8.cpu import Chip8CPU, decode
from pychip8.cpu.opcodes import (
    DEFAULT_INSTRUCTIONS,
    INSTRUCTION_TABLE,
    Instruction,
    InstructionTable,
    Op,
    disassemble,
    format_instruction,
)


def test_table_covers_the_whole_instruction_set() -> None:
    assert len(INSTRUCTION_TABLE) == 35
    assert {instruction.op for instruction in INSTRUCTION_TABLE} == set(Op)


def test_every_handler_exists_on_cpu() -> None:
    for instruction in DEFAULT_INSTRUCTIONS:
        assert callable(getattr(Chip8CPU, instruction.handler, None)), instruction.handler


@pytest.mark.parametrize(
    "word, op",
    [
        (0x00E0, Op.CLS),
        (0x00EE, Op.RET),
        (0x0123, Op.SYS),
        (0x1234, Op.JP),
        (0x5120, Op.SE_VX_VY),
        (0x8AB6, Op.SHR),
        (0x8ABE, Op.SHL),
        (0xE59E, Op.SKP),
        (0xF30A, Op.LD_VX_K),
        (0xF765, Op.LD_VX_MEM),
    ],
)
def test_lookup_resolves_word(word: int, op: Op) -> None:
    instruction = INSTRUCTION_TABLE.lookup(decode(word))

    assert instruction is not None
    assert instruction.op is op


@pytest.mark.parametrize("word", [0x5121, 0x8008, 0x800F, 0x9001, 0xE000, 0xF000, 0xF0FF])
def test_lookup_misses_unassigned_words(word: int) -> None:
    assert INSTRUCTION_TABLE.lookup(decode(word)) is None


def test_format_instruction() -> None:
    assert format_instruction(decode(0x6005)) == "LD V0, #05"
    assert format_instruction(decode(0x00E0)) == "CLS"
    assert format_instruction(decode(0xD12F)) == "DRW V1, V2, F"
    assert format_instruction(decode(0xA2F0)) == "LD I, #2F0"
    assert format_instruction(decode(0xFA55)) == "LD [I], VA"
    assert format_instruction(decode(0x8008)) == "DW #8008"


def test_disassemble_addresses_words() -> None:
    rows = disassemble(bytes([0x60, 0x05, 0x61, 0x0A, 0x80, 0x14]))

    assert rows == [
        (0x200, 0x6005, "LD V0, #05"),
        (0x202, 0x610A, "LD V1, #0A"),
        (0x204, 0x8014, "ADD V0, V1"),
    ]


def test_register_rejects_duplicate_op() -> None:
    table = InstructionTable()
    table.register(Instruction(Op.CLS, 0xFFFF, 0x00E0, "CLS", "", "op_cls"))

    with pytest.raises(ValueError):
        table.register(Instruction(Op.CLS, 0xFFFF, 0x00E0, "CLS", "", "op_cls"))


def test_instruction_rejects_pattern_outside_mask() -> None:
    with pytest.raises(ValueError):
        Instruction(Op.JP, 0xF000, 0x1001, "JP", "", "op_jp")
