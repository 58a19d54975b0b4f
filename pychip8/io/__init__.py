"""Input handling for the CHIP-8 emulator."""

from .keypad import KEY_COUNT, KEY_MAP, Keypad, check_key_index, lookup_key

__all__ = [
    "KEY_COUNT",
    "KEY_MAP",
    "Keypad",
    "check_key_index",
    "lookup_key",
]
