"""Framebuffer and rendering helpers for the CHIP-8 emulator."""

from __future__ import annotations

from .framebuffer import DISPLAY_HEIGHT, DISPLAY_WIDTH, Framebuffer
from .palette import MONOCHROME, PALETTES, PHOSPHOR, palette_by_name, validate_palette
from .renderer import RenderResult, Renderer

__all__ = [
    "Framebuffer",
    "Renderer",
    "RenderResult",
    "MONOCHROME",
    "PHOSPHOR",
    "PALETTES",
    "palette_by_name",
    "validate_palette",
    "DISPLAY_WIDTH",
    "DISPLAY_HEIGHT",
]
