"""CPU package for the CHIP-8 emulator."""

from .core import CPUState, Chip8CPU, Quirks, RandomSource, system_random_byte
from .decoder import DecodedInstruction, decode
from .errors import (
    CPUError,
    IllegalOpcodeError,
    StackError,
    StackOverflowError,
    StackUnderflowError,
)
from .stack import STACK_CAPACITY, CallStack
from . import opcodes

__all__ = [
    "Chip8CPU",
    "CPUState",
    "Quirks",
    "RandomSource",
    "system_random_byte",
    "DecodedInstruction",
    "decode",
    "CallStack",
    "STACK_CAPACITY",
    "CPUError",
    "IllegalOpcodeError",
    "StackError",
    "StackOverflowError",
    "StackUnderflowError",
    "opcodes",
]
