"""CHIP-8 decode/execute engine."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Callable

from pychip8.bus import PROGRAM_START, Memory, font_address
from pychip8.io import Keypad
from pychip8.utils import debug_enabled, debug_log
from pychip8.video import Framebuffer

from .decoder import DecodedInstruction, decode
from .errors import IllegalOpcodeError, StackError
from .opcodes import INSTRUCTION_TABLE, InstructionTable, format_instruction
from .stack import CallStack

REGISTER_COUNT = 16
FLAG_REGISTER = 0xF
INSTRUCTION_BYTES = 2


RandomSource = Callable[[], int]


def system_random_byte() -> int:
    return os.urandom(1)[0]


@dataclass
class CPUState:
    """Snapshot of the CHIP-8 register file."""

    v: bytearray = field(default_factory=lambda: bytearray(REGISTER_COUNT))
    i: int = 0x0000
    pc: int = PROGRAM_START
    dt: int = 0x00
    st: int = 0x00

    def clone(self) -> "CPUState":
        return CPUState(bytearray(self.v), self.i, self.pc, self.dt, self.st)


@dataclass(frozen=True)
class Quirks:
    """Switches for behaviour that differs between historical interpreters.

    The defaults shift Vx in place, jump relative to V0, leave I untouched
    after block transfers and keep VF after logic instructions.
    """

    shift_uses_vy: bool = False
    jump_uses_vx: bool = False
    load_store_increments_index: bool = False
    logic_resets_vf: bool = False


@dataclass
class Chip8CPU:
    """Fetches, decodes and executes one instruction per :meth:`step`."""

    memory: Memory
    framebuffer: Framebuffer
    keypad: Keypad
    quirks: Quirks = field(default_factory=Quirks)
    random_source: RandomSource = system_random_byte
    strict_illegal: bool = False
    instruction_table: InstructionTable = field(default=INSTRUCTION_TABLE)

    state: CPUState = field(default_factory=CPUState)
    stack: CallStack = field(default_factory=CallStack)
    awaiting_key: bool = False
    key_wait_register: int = 0
    instruction_count: int = 0

    def reset(self) -> None:
        """Zero the registers, empty the stack and clear the screen."""

        self.state = CPUState()
        self.stack.clear()
        self.awaiting_key = False
        self.key_wait_register = 0
        self.instruction_count = 0
        self.framebuffer.clear()

    def step(self) -> bool:
        """Execute a single instruction; return True when the screen changed."""

        if self.awaiting_key:
            return False

        pc_before = self.state.pc
        decoded = decode(self.memory.load16(pc_before))
        instruction = self.instruction_table.lookup(decoded)
        if debug_enabled("cpu"):
            debug_log("cpu", "%03X %04X %s", pc_before, decoded.word, format_instruction(decoded, self.instruction_table))

        if instruction is None:
            if self.strict_illegal:
                raise IllegalOpcodeError(pc_before, decoded.word)
            if debug_enabled("cpu"):
                debug_log("cpu", "unknown opcode %04X at %03X ignored", decoded.word, pc_before)
            self._advance()
            self.instruction_count += 1
            return False

        handler = getattr(self, instruction.handler)
        self._advance()
        try:
            render = handler(decoded)
        except StackError:
            self.state.pc = pc_before
            raise
        self.instruction_count += 1
        return bool(render)

    def tick_timers(self) -> None:
        """Count both timers down by one, stopping at zero."""

        if self.state.dt > 0:
            self.state.dt -= 1
        if self.state.st > 0:
            self.state.st -= 1

    def handle_key_edge(self, index: int, pressed: bool) -> None:
        """Keypad listener resolving a pending ``LD Vx, K``."""

        if not pressed or not self.awaiting_key:
            return
        self.state.v[self.key_wait_register] = index & 0xFF
        self.awaiting_key = False
        if debug_enabled("input"):
            debug_log("input", "key wait resolved V%X=%X", self.key_wait_register, index)

    # ------------------------------------------------------------------
    # Instruction handlers

    def op_cls(self, _: DecodedInstruction) -> None:
        self.framebuffer.clear()

    def op_ret(self, _: DecodedInstruction) -> None:
        self.state.pc = self.stack.pop()

    def op_sys(self, decoded: DecodedInstruction) -> None:
        # Native machine code routines are not emulated.
        if debug_enabled("cpu"):
            debug_log("cpu", "SYS #%03X ignored", decoded.nnn)

    def op_jp(self, decoded: DecodedInstruction) -> None:
        self.state.pc = decoded.nnn

    def op_call(self, decoded: DecodedInstruction) -> None:
        self.stack.push(self.state.pc)
        self.state.pc = decoded.nnn

    def op_se_vx_kk(self, decoded: DecodedInstruction) -> None:
        self._skip_if(self.state.v[decoded.x] == decoded.kk)

    def op_sne_vx_kk(self, decoded: DecodedInstruction) -> None:
        self._skip_if(self.state.v[decoded.x] != decoded.kk)

    def op_se_vx_vy(self, decoded: DecodedInstruction) -> None:
        v = self.state.v
        self._skip_if(v[decoded.x] == v[decoded.y])

    def op_sne_vx_vy(self, decoded: DecodedInstruction) -> None:
        v = self.state.v
        self._skip_if(v[decoded.x] != v[decoded.y])

    def op_ld_vx_kk(self, decoded: DecodedInstruction) -> None:
        self.state.v[decoded.x] = decoded.kk

    def op_add_vx_kk(self, decoded: DecodedInstruction) -> None:
        v = self.state.v
        v[decoded.x] = (v[decoded.x] + decoded.kk) & 0xFF

    def op_ld_vx_vy(self, decoded: DecodedInstruction) -> None:
        v = self.state.v
        v[decoded.x] = v[decoded.y]

    def op_or(self, decoded: DecodedInstruction) -> None:
        v = self.state.v
        v[decoded.x] |= v[decoded.y]
        self._logic_flag()

    def op_and(self, decoded: DecodedInstruction) -> None:
        v = self.state.v
        v[decoded.x] &= v[decoded.y]
        self._logic_flag()

    def op_xor(self, decoded: DecodedInstruction) -> None:
        v = self.state.v
        v[decoded.x] ^= v[decoded.y]
        self._logic_flag()

    def op_add_vx_vy(self, decoded: DecodedInstruction) -> None:
        v = self.state.v
        total = v[decoded.x] + v[decoded.y]
        v[decoded.x] = total & 0xFF
        v[FLAG_REGISTER] = 1 if total > 0xFF else 0

    def op_sub(self, decoded: DecodedInstruction) -> None:
        v = self.state.v
        self._subtract(decoded.x, v[decoded.x], v[decoded.y])

    def op_subn(self, decoded: DecodedInstruction) -> None:
        v = self.state.v
        self._subtract(decoded.x, v[decoded.y], v[decoded.x])

    def op_shr(self, decoded: DecodedInstruction) -> None:
        v = self.state.v
        source = self._shift_source(decoded)
        v[decoded.x] = source >> 1
        v[FLAG_REGISTER] = source & 0x01

    def op_shl(self, decoded: DecodedInstruction) -> None:
        v = self.state.v
        source = self._shift_source(decoded)
        v[decoded.x] = (source << 1) & 0xFF
        v[FLAG_REGISTER] = (source >> 7) & 0x01

    def op_ld_i(self, decoded: DecodedInstruction) -> None:
        self.state.i = decoded.nnn

    def op_jp_v0(self, decoded: DecodedInstruction) -> None:
        register = decoded.x if self.quirks.jump_uses_vx else 0
        self.state.pc = (self.state.v[register] + decoded.nnn) & 0x0FFF

    def op_rnd(self, decoded: DecodedInstruction) -> None:
        self.state.v[decoded.x] = self._random_byte() & decoded.kk

    def op_drw(self, decoded: DecodedInstruction) -> bool:
        v = self.state.v
        sprite = self.memory.read_block(self.state.i, decoded.n)
        collision = self.framebuffer.draw_sprite(v[decoded.x], v[decoded.y], sprite)
        v[FLAG_REGISTER] = 1 if collision else 0
        return True

    def op_skp(self, decoded: DecodedInstruction) -> None:
        self._skip_if(self._key_down(self.state.v[decoded.x]))

    def op_sknp(self, decoded: DecodedInstruction) -> None:
        self._skip_if(not self._key_down(self.state.v[decoded.x]))

    def op_ld_vx_dt(self, decoded: DecodedInstruction) -> None:
        self.state.v[decoded.x] = self.state.dt

    def op_ld_vx_k(self, decoded: DecodedInstruction) -> None:
        self.awaiting_key = True
        self.key_wait_register = decoded.x

    def op_ld_dt_vx(self, decoded: DecodedInstruction) -> None:
        self.state.dt = self.state.v[decoded.x]

    def op_ld_st_vx(self, decoded: DecodedInstruction) -> None:
        self.state.st = self.state.v[decoded.x]

    def op_add_i_vx(self, decoded: DecodedInstruction) -> None:
        self.state.i = (self.state.i + self.state.v[decoded.x]) & 0xFFFF

    def op_ld_f_vx(self, decoded: DecodedInstruction) -> None:
        self.state.i = font_address(self.state.v[decoded.x])

    def op_ld_b_vx(self, decoded: DecodedInstruction) -> None:
        value = self.state.v[decoded.x]
        base = self.state.i
        self.memory.store8(base, value // 100)
        self.memory.store8(base + 1, (value // 10) % 10)
        self.memory.store8(base + 2, value % 10)

    def op_ld_mem_vx(self, decoded: DecodedInstruction) -> None:
        base = self.state.i
        for index in range(decoded.x + 1):
            self.memory.store8(base + index, self.state.v[index])
        self._post_transfer(decoded)

    def op_ld_vx_mem(self, decoded: DecodedInstruction) -> None:
        base = self.state.i
        for index in range(decoded.x + 1):
            self.state.v[index] = self.memory.load8(base + index)
        self._post_transfer(decoded)

    # ------------------------------------------------------------------
    # Helpers

    def _advance(self) -> None:
        self.state.pc = (self.state.pc + INSTRUCTION_BYTES) & 0x0FFF

    def _skip_if(self, condition: bool) -> None:
        if condition:
            self._advance()

    def _subtract(self, target: int, minuend: int, subtrahend: int) -> None:
        v = self.state.v
        v[target] = (minuend - subtrahend) & 0xFF
        v[FLAG_REGISTER] = 1 if minuend >= subtrahend else 0

    def _shift_source(self, decoded: DecodedInstruction) -> int:
        register = decoded.y if self.quirks.shift_uses_vy else decoded.x
        return self.state.v[register]

    def _logic_flag(self) -> None:
        if self.quirks.logic_resets_vf:
            self.state.v[FLAG_REGISTER] = 0

    def _post_transfer(self, decoded: DecodedInstruction) -> None:
        if self.quirks.load_store_increments_index:
            self.state.i = (self.state.i + decoded.x + 1) & 0xFFFF

    def _key_down(self, value: int) -> bool:
        if value > 0x0F and debug_enabled("input"):
            debug_log("input", "key index %02X out of range treated as released", value)
        return self.keypad.is_pressed(value)

    def _random_byte(self) -> int:
        try:
            return self.random_source() & 0xFF
        except (OSError, NotImplementedError) as exc:
            if debug_enabled("cpu"):
                debug_log("cpu", "random source failed: %s", exc)
            return 0
