"""CHIP-8 hexadecimal keypad state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Mapping

from pychip8.utils import debug_enabled, debug_log

KEY_COUNT = 16

# Host keyboard layout mapped onto the COSMAC VIP keypad:
#   1 2 3 4      1 2 3 C
#   q w e r  ->  4 5 6 D
#   a s d f      7 8 9 E
#   z x c v      A 0 B F
KEY_MAP: Mapping[str, int] = {
    "1": 0x1,
    "2": 0x2,
    "3": 0x3,
    "4": 0xC,
    "q": 0x4,
    "w": 0x5,
    "e": 0x6,
    "r": 0xD,
    "a": 0x7,
    "s": 0x8,
    "d": 0x9,
    "f": 0xE,
    "z": 0xA,
    "x": 0x0,
    "c": 0xB,
    "v": 0xF,
}


KeyListener = Callable[[int, bool], None]


def check_key_index(index: int) -> int:
    if not 0 <= index < KEY_COUNT:
        raise ValueError(f"key index out of range: {index}")
    return index


@dataclass
class Keypad:
    """Sixteen key flags set and cleared by host input edges."""

    _state: list[bool] = field(default_factory=lambda: [False] * KEY_COUNT)
    _listeners: list[KeyListener] = field(default_factory=list)

    def press(self, index: int) -> None:
        check_key_index(index)
        self._state[index] = True
        if debug_enabled("input"):
            debug_log("input", "key_down=%X", index)
        self._notify_listeners(index, True)

    def release(self, index: int) -> None:
        check_key_index(index)
        self._state[index] = False
        if debug_enabled("input"):
            debug_log("input", "key_up=%X", index)
        self._notify_listeners(index, False)

    def is_pressed(self, index: int) -> bool:
        """Return the flag for ``index``; indices outside 0-15 read as released."""

        if not 0 <= index < KEY_COUNT:
            return False
        return self._state[index]

    def press_key(self, key_name: str) -> bool:
        index = lookup_key(key_name)
        if index is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_press=%s", key_name)
            return False
        self.press(index)
        return True

    def release_key(self, key_name: str) -> bool:
        index = lookup_key(key_name)
        if index is None:
            if debug_enabled("input"):
                debug_log("input", "unmapped_release=%s", key_name)
            return False
        self.release(index)
        return True

    def reset(self) -> None:
        self._state[:] = [False] * KEY_COUNT

    def snapshot(self) -> tuple[bool, ...]:
        return tuple(self._state)

    def add_listener(self, listener: KeyListener) -> None:
        self._listeners.append(listener)

    def _notify_listeners(self, index: int, pressed: bool) -> None:
        for listener in tuple(self._listeners):
            listener(index, pressed)


def lookup_key(key_name: str) -> int | None:
    return KEY_MAP.get(key_name.lower())
