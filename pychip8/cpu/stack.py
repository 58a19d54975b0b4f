"""Fixed-capacity call stack for subroutine return addresses."""

from __future__ import annotations

from .errors import StackOverflowError, StackUnderflowError

STACK_CAPACITY = 16


class CallStack:
    """Return addresses pushed by CALL and popped by RET.

    Faults leave the stack untouched.
    """

    def __init__(self, capacity: int = STACK_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._capacity = capacity
        self._entries: list[int] = []

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def depth(self) -> int:
        return len(self._entries)

    def push(self, address: int) -> None:
        if len(self._entries) >= self._capacity:
            raise StackOverflowError(
                f"call stack overflow: depth {len(self._entries)} reached capacity {self._capacity}")
        self._entries.append(address & 0xFFFF)

    def pop(self) -> int:
        if not self._entries:
            raise StackUnderflowError("return with empty call stack")
        return self._entries.pop()

    def peek(self) -> int | None:
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    def snapshot(self) -> tuple[int, ...]:
        return tuple(self._entries)
