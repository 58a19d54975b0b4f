"""CHIP-8 machine assembly."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from pychip8.bus import MAX_PROGRAM_SIZE, Memory
from pychip8.cpu import Chip8CPU, Quirks, RandomSource
from pychip8.io import Keypad
from pychip8.video import Framebuffer


class ProgramTooLargeError(ValueError):
    """Raised when a program image does not fit between 0x200 and 0xFFF."""


@dataclass
class MachineConfig:
    """Runtime configuration for the CHIP-8 machine."""

    program: bytes = b""
    quirks: Quirks = field(default_factory=Quirks)
    random_source: Optional[RandomSource] = None
    strict_illegal: bool = False


@dataclass
class Machine:
    """Aggregates the core components and exposes the driver interface."""

    memory: Memory
    cpu: Chip8CPU
    framebuffer: Framebuffer
    keypad: Keypad
    program: bytes = b""

    @classmethod
    def from_program(cls, program: bytes, **options) -> "Machine":
        return create_machine(MachineConfig(program=bytes(program), **options))

    def step(self) -> bool:
        return self.cpu.step()

    def run(self, steps: int) -> bool:
        """Execute up to ``steps`` instructions; True if any of them drew."""

        render = False
        for _ in range(steps):
            if self.cpu.awaiting_key:
                break
            render = self.cpu.step() or render
        return render

    def tick_timers(self) -> None:
        self.cpu.tick_timers()

    def key_down(self, index: int) -> None:
        self.keypad.press(index)

    def key_up(self, index: int) -> None:
        self.keypad.release(index)

    def reset(self) -> None:
        """Restore the power-on state with the original program image."""

        self.memory.clear_program_area()
        self.memory.load_image(self.program)
        self.keypad.reset()
        self.cpu.reset()

    @property
    def sound_timer(self) -> int:
        return self.cpu.state.st

    @property
    def delay_timer(self) -> int:
        return self.cpu.state.dt

    @property
    def awaiting_key(self) -> bool:
        return self.cpu.awaiting_key


def create_machine(config: MachineConfig) -> Machine:
    """Instantiate a CHIP-8 machine with ``config.program`` loaded at 0x200."""

    program = bytes(config.program)
    if len(program) > MAX_PROGRAM_SIZE:
        raise ProgramTooLargeError(
            f"program is {len(program)} bytes; at most {MAX_PROGRAM_SIZE} bytes fit")

    memory = Memory()
    memory.load_image(program)

    framebuffer = Framebuffer()
    keypad = Keypad()
    cpu = Chip8CPU(
        memory,
        framebuffer,
        keypad,
        quirks=config.quirks,
        strict_illegal=config.strict_illegal,
    )
    if config.random_source is not None:
        cpu.random_source = config.random_source
    keypad.add_listener(cpu.handle_key_edge)
    cpu.reset()

    return Machine(
        memory=memory,
        cpu=cpu,
        framebuffer=framebuffer,
        keypad=keypad,
        program=program,
    )
