"""Pygame user interface for the CHIP-8 emulator."""

from .app import AppConfig, Chip8App

__all__ = ["AppConfig", "Chip8App"]
