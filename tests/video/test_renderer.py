"""Unit tests for the CHIP-8 renderer."""

from __future__ import annotations

import pytest

from pychip8.video import PHOSPHOR, Framebuffer, Renderer, palette_by_name, validate_palette


def test_render_single_pixel() -> None:
    fb = Framebuffer()
    fb.xor_pixel(0, 0, 1)
    result = Renderer().render(fb)

    assert result.width == 64
    assert result.height == 32
    assert result.get_pixel(0, 0) == (255, 255, 255)
    assert result.get_pixel(1, 0) == (0, 0, 0)
    assert len(result.pixels) == 64 * 32 * 3


def test_render_scale_factor() -> None:
    fb = Framebuffer()
    fb.xor_pixel(1, 0, 1)
    result = Renderer(PHOSPHOR).render(fb, scale=3)

    background, foreground = PHOSPHOR
    assert result.width == 192
    assert result.height == 96
    assert result.get_pixel(2, 2) == background
    assert result.get_pixel(3, 0) == foreground
    assert result.get_pixel(5, 2) == foreground
    assert result.get_pixel(6, 0) == background


def test_render_rejects_bad_scale() -> None:
    with pytest.raises(ValueError):
        Renderer().render(Framebuffer(), scale=0)


def test_get_pixel_bounds() -> None:
    result = Renderer().render(Framebuffer())

    with pytest.raises(IndexError):
        result.get_pixel(64, 0)


def test_palette_helpers() -> None:
    assert palette_by_name("Phosphor") == PHOSPHOR
    with pytest.raises(ValueError):
        palette_by_name("sepia")
    with pytest.raises(ValueError):
        validate_palette(((0, 0, 0),))
