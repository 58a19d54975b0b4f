"""CHIP-8 system assembly helpers."""

from __future__ import annotations

from .machine import Machine, MachineConfig, ProgramTooLargeError, create_machine

__all__ = [
    "MachineConfig",
    "Machine",
    "ProgramTooLargeError",
    "create_machine",
]
