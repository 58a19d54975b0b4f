"""Exceptions raised by the CHIP-8 execute engine."""

from __future__ import annotations


class CPUError(Exception):
    """Base error for CPU-related failures."""


class IllegalOpcodeError(CPUError):
    """Raised in strict mode when a fetched word matches no instruction."""

    def __init__(self, pc: int, word: int) -> None:
        super().__init__(f"illegal opcode {word:04X} at {pc:03X}")
        self.pc = pc
        self.word = word


class StackError(CPUError):
    """Base error for call stack faults."""


class StackOverflowError(StackError):
    """Raised when CALL would exceed the call stack capacity."""


class StackUnderflowError(StackError):
    """Raised when RET executes with an empty call stack."""
