"""Opcode metadata for the CHIP-8 instruction set."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Dict, Final, Iterable, List, Sequence, Tuple

from .decoder import DecodedInstruction, decode


class Op(Enum):
    """The closed set of CHIP-8 instructions."""

    CLS = auto()
    RET = auto()
    SYS = auto()
    JP = auto()
    CALL = auto()
    SE_VX_KK = auto()
    SNE_VX_KK = auto()
    SE_VX_VY = auto()
    LD_VX_KK = auto()
    ADD_VX_KK = auto()
    LD_VX_VY = auto()
    OR = auto()
    AND = auto()
    XOR = auto()
    ADD_VX_VY = auto()
    SUB = auto()
    SHR = auto()
    SUBN = auto()
    SHL = auto()
    SNE_VX_VY = auto()
    LD_I = auto()
    JP_V0 = auto()
    RND = auto()
    DRW = auto()
    SKP = auto()
    SKNP = auto()
    LD_VX_DT = auto()
    LD_VX_K = auto()
    LD_DT_VX = auto()
    LD_ST_VX = auto()
    ADD_I_VX = auto()
    LD_F_VX = auto()
    LD_B_VX = auto()
    LD_MEM_VX = auto()
    LD_VX_MEM = auto()


@dataclass(frozen=True)
class Instruction:
    """Metadata describing a single CHIP-8 instruction pattern.

    A word matches when ``word & mask == pattern``. ``operands`` is a
    ``str.format`` template over the fields of :class:`DecodedInstruction`.
    """

    op: Op
    mask: int
    pattern: int
    mnemonic: str
    operands: str
    handler: str

    def __post_init__(self) -> None:
        if not 0 <= self.mask <= 0xFFFF:
            raise ValueError(f"mask out of range: {self.mask}")
        if self.pattern & ~self.mask:
            raise ValueError(f"pattern {self.pattern:#06x} has bits outside mask {self.mask:#06x}")

    @property
    def group(self) -> int:
        return (self.pattern >> 12) & 0x0F

    def matches(self, word: int) -> bool:
        return (word & self.mask) == self.pattern


class InstructionTable:
    """Instructions bucketed by primary opcode group; first match wins."""

    _GROUPS: Final[int] = 0x10

    def __init__(self) -> None:
        self._groups: List[List[Instruction]] = [[] for _ in range(self._GROUPS)]
        self._by_op: Dict[Op, Instruction] = {}

    def register(self, instruction: Instruction) -> None:
        if instruction.mask & 0xF000 != 0xF000:
            raise ValueError(f"{instruction.op.name} must fix the primary opcode nibble")
        existing = self._by_op.get(instruction.op)
        if existing is not None:
            raise ValueError(f"{instruction.op.name} already registered as {existing.pattern:#06x}")
        for other in self._groups[instruction.group]:
            if other.mask == instruction.mask and other.pattern == instruction.pattern:
                raise ValueError(
                    f"pattern {instruction.pattern:#06x} already registered as {other.op.name}")
        self._groups[instruction.group].append(instruction)
        self._by_op[instruction.op] = instruction

    def register_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.register(instruction)

    def lookup(self, decoded: DecodedInstruction) -> Instruction | None:
        for instruction in self._groups[decoded.group]:
            if instruction.matches(decoded.word):
                return instruction
        return None

    def get(self, op: Op) -> Instruction:
        return self._by_op[op]

    def __len__(self) -> int:
        return len(self._by_op)

    def __iter__(self):
        return iter(self._by_op.values())


def build_instruction_table(instructions: Iterable[Instruction]) -> InstructionTable:
    table = InstructionTable()
    table.register_all(instructions)
    return table


_VX_KK = "V{x:X}, #{kk:02X}"
_VX_VY = "V{x:X}, V{y:X}"

DEFAULT_INSTRUCTIONS: Sequence[Instruction] = (
    Instruction(Op.CLS, 0xFFFF, 0x00E0, "CLS", "", "op_cls"),
    Instruction(Op.RET, 0xFFFF, 0x00EE, "RET", "", "op_ret"),
    Instruction(Op.SYS, 0xF000, 0x0000, "SYS", "#{nnn:03X}", "op_sys"),
    Instruction(Op.JP, 0xF000, 0x1000, "JP", "#{nnn:03X}", "op_jp"),
    Instruction(Op.CALL, 0xF000, 0x2000, "CALL", "#{nnn:03X}", "op_call"),
    Instruction(Op.SE_VX_KK, 0xF000, 0x3000, "SE", _VX_KK, "op_se_vx_kk"),
    Instruction(Op.SNE_VX_KK, 0xF000, 0x4000, "SNE", _VX_KK, "op_sne_vx_kk"),
    Instruction(Op.SE_VX_VY, 0xF00F, 0x5000, "SE", _VX_VY, "op_se_vx_vy"),
    Instruction(Op.LD_VX_KK, 0xF000, 0x6000, "LD", _VX_KK, "op_ld_vx_kk"),
    Instruction(Op.ADD_VX_KK, 0xF000, 0x7000, "ADD", _VX_KK, "op_add_vx_kk"),
    # 8xyN arithmetic/logic family
    Instruction(Op.LD_VX_VY, 0xF00F, 0x8000, "LD", _VX_VY, "op_ld_vx_vy"),
    Instruction(Op.OR, 0xF00F, 0x8001, "OR", _VX_VY, "op_or"),
    Instruction(Op.AND, 0xF00F, 0x8002, "AND", _VX_VY, "op_and"),
    Instruction(Op.XOR, 0xF00F, 0x8003, "XOR", _VX_VY, "op_xor"),
    Instruction(Op.ADD_VX_VY, 0xF00F, 0x8004, "ADD", _VX_VY, "op_add_vx_vy"),
    Instruction(Op.SUB, 0xF00F, 0x8005, "SUB", _VX_VY, "op_sub"),
    Instruction(Op.SHR, 0xF00F, 0x8006, "SHR", "V{x:X}", "op_shr"),
    Instruction(Op.SUBN, 0xF00F, 0x8007, "SUBN", _VX_VY, "op_subn"),
    Instruction(Op.SHL, 0xF00F, 0x800E, "SHL", "V{x:X}", "op_shl"),
    Instruction(Op.SNE_VX_VY, 0xF00F, 0x9000, "SNE", _VX_VY, "op_sne_vx_vy"),
    Instruction(Op.LD_I, 0xF000, 0xA000, "LD", "I, #{nnn:03X}", "op_ld_i"),
    Instruction(Op.JP_V0, 0xF000, 0xB000, "JP", "V0, #{nnn:03X}", "op_jp_v0"),
    Instruction(Op.RND, 0xF000, 0xC000, "RND", _VX_KK, "op_rnd"),
    Instruction(Op.DRW, 0xF000, 0xD000, "DRW", "V{x:X}, V{y:X}, {n:X}", "op_drw"),
    Instruction(Op.SKP, 0xF0FF, 0xE09E, "SKP", "V{x:X}", "op_skp"),
    Instruction(Op.SKNP, 0xF0FF, 0xE0A1, "SKNP", "V{x:X}", "op_sknp"),
    # Fx timers, key wait, index register and block transfers
    Instruction(Op.LD_VX_DT, 0xF0FF, 0xF007, "LD", "V{x:X}, DT", "op_ld_vx_dt"),
    Instruction(Op.LD_VX_K, 0xF0FF, 0xF00A, "LD", "V{x:X}, K", "op_ld_vx_k"),
    Instruction(Op.LD_DT_VX, 0xF0FF, 0xF015, "LD", "DT, V{x:X}", "op_ld_dt_vx"),
    Instruction(Op.LD_ST_VX, 0xF0FF, 0xF018, "LD", "ST, V{x:X}", "op_ld_st_vx"),
    Instruction(Op.ADD_I_VX, 0xF0FF, 0xF01E, "ADD", "I, V{x:X}", "op_add_i_vx"),
    Instruction(Op.LD_F_VX, 0xF0FF, 0xF029, "LD", "F, V{x:X}", "op_ld_f_vx"),
    Instruction(Op.LD_B_VX, 0xF0FF, 0xF033, "LD", "B, V{x:X}", "op_ld_b_vx"),
    Instruction(Op.LD_MEM_VX, 0xF0FF, 0xF055, "LD", "[I], V{x:X}", "op_ld_mem_vx"),
    Instruction(Op.LD_VX_MEM, 0xF0FF, 0xF065, "LD", "V{x:X}, [I]", "op_ld_vx_mem"),
)


INSTRUCTION_TABLE: Final[InstructionTable] = build_instruction_table(DEFAULT_INSTRUCTIONS)


def format_instruction(
    decoded: DecodedInstruction,
    table: InstructionTable = INSTRUCTION_TABLE,
) -> str:
    """Render ``decoded`` as assembler text, e.g. ``LD V0, #05``."""

    instruction = table.lookup(decoded)
    if instruction is None:
        return f"DW #{decoded.word:04X}"
    if not instruction.operands:
        return instruction.mnemonic
    operands = instruction.operands.format(
        nnn=decoded.nnn, kk=decoded.kk, x=decoded.x, y=decoded.y, n=decoded.n)
    return f"{instruction.mnemonic} {operands}"


def disassemble(program: bytes, start: int = 0x200) -> Sequence[Tuple[int, int, str]]:
    """Decode ``program`` word by word into ``(address, word, text)`` rows."""

    rows: list[Tuple[int, int, str]] = []
    for offset in range(0, len(program) - 1, 2):
        word = (program[offset] << 8) | program[offset + 1]
        rows.append((start + offset, word, format_instruction(decode(word))))
    return rows


__all__ = [
    "DEFAULT_INSTRUCTIONS",
    "INSTRUCTION_TABLE",
    "Instruction",
    "InstructionTable",
    "Op",
    "build_instruction_table",
    "disassemble",
    "format_instruction",
]
