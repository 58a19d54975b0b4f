"""Convert the CHIP-8 framebuffer into RGB pixel data."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .framebuffer import Framebuffer
from .palette import MONOCHROME, RGBColor, validate_palette


@dataclass
class RenderResult:
    """Packed RGB frame produced by :class:`Renderer`."""

    width: int
    height: int
    pixels: bytes

    def get_pixel(self, x: int, y: int) -> RGBColor:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) outside {self.width}x{self.height} frame")
        offset = (y * self.width + x) * 3
        return (self.pixels[offset], self.pixels[offset + 1], self.pixels[offset + 2])

    def to_surface(self):
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to build surfaces") from exc
        return pygame.image.frombuffer(self.pixels, (self.width, self.height), "RGB")


class Renderer:
    """Scale framebuffer cells into blocks of palette colours."""

    def __init__(self, palette: Sequence[RGBColor] = MONOCHROME) -> None:
        self._palette = validate_palette(palette)

    @property
    def palette(self) -> tuple[RGBColor, RGBColor]:
        return self._palette

    def render(self, framebuffer: Framebuffer, *, scale: int = 1) -> RenderResult:
        if scale <= 0:
            raise ValueError("scale must be positive")
        background, foreground = (bytes(color) for color in self._palette)
        width = framebuffer.width * scale
        height = framebuffer.height * scale

        lines: list[bytes] = []
        for row in framebuffer.rows():
            line = b"".join((foreground if cell else background) * scale for cell in row)
            lines.extend([line] * scale)
        return RenderResult(width=width, height=height, pixels=b"".join(lines))
