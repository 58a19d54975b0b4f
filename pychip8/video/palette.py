"""Palette definitions for CHIP-8 rendering."""

from __future__ import annotations

from typing import Dict, Sequence, Tuple

RGBColor = Tuple[int, int, int]


MONOCHROME: Tuple[RGBColor, RGBColor] = ((0, 0, 0), (0xFF, 0xFF, 0xFF))
PHOSPHOR: Tuple[RGBColor, RGBColor] = ((0x30, 0x30, 0x30), (0x30, 0xBB, 0x30))

PALETTES: Dict[str, Tuple[RGBColor, RGBColor]] = {
    "mono": MONOCHROME,
    "phosphor": PHOSPHOR,
}


def validate_palette(palette: Sequence[RGBColor]) -> Tuple[RGBColor, RGBColor]:
    if len(palette) != 2:
        raise ValueError("palette must contain exactly two colours (background and foreground)")
    if any(len(color) != 3 for color in palette):
        raise ValueError("palette entries must be RGB tuples")
    return tuple(tuple(int(channel) & 0xFF for channel in color) for color in palette)  # type: ignore[return-value]


def palette_by_name(name: str) -> Tuple[RGBColor, RGBColor]:
    try:
        return PALETTES[name.lower()]
    except KeyError:
        choices = ", ".join(sorted(PALETTES))
        raise ValueError(f"unknown palette '{name}' (choose from: {choices})") from None
