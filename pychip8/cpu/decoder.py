"""Field extraction for 16-bit CHIP-8 instruction words."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DecodedInstruction:
    """Every operand field an instruction word can carry.

    ``group`` is the top nibble, ``nnn`` the 12-bit address, ``kk`` the low
    byte, ``x``/``y`` the register indices and ``n`` the low nibble, which is
    the sub-opcode for the 8xyN family and the sprite height for DRW.
    """

    word: int
    group: int
    nnn: int
    kk: int
    x: int
    y: int
    n: int


def decode(word: int) -> DecodedInstruction:
    word &= 0xFFFF
    return DecodedInstruction(
        word=word,
        group=(word >> 12) & 0x0F,
        nnn=word & 0x0FFF,
        kk=word & 0x00FF,
        x=(word >> 8) & 0x0F,
        y=(word >> 4) & 0x0F,
        n=word & 0x000F,
    )


def decode_bytes(high: int, low: int) -> DecodedInstruction:
    return decode(((high & 0xFF) << 8) | (low & 0xFF))


__all__ = ["DecodedInstruction", "decode", "decode_bytes"]
