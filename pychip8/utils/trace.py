"""Execution history of recent CHIP-8 instructions for post-mortem dumps."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import Deque, Iterable, Sequence

from .debug import debug_log


@dataclass
class TraceEntry:
    pc: int
    word: int | None
    mnemonic: str
    v: tuple[int, ...]
    i: int
    dt: int
    st: int
    stack_depth: int
    awaiting_key: bool
    render: bool
    note: str = ""

    def flags(self) -> str:
        marks = [
            mark
            for mark, present in (("KEY", self.awaiting_key), ("DRAW", self.render), (self.note, bool(self.note)))
            if present
        ]
        return ",".join(marks) or "-"

    def format(self) -> str:
        word = "----" if self.word is None else f"{self.word:04X}"
        registers = " ".join(f"{value:02X}" for value in self.v)
        return (
            f"pc={self.pc:03X} op={word} {self.mnemonic or '?':<16} "
            f"V=[{registers}] I={self.i:03X} DT={self.dt:02X} ST={self.st:02X} "
            f"SP={self.stack_depth:02d} flags={self.flags()}"
        )


class TraceRecorder:
    """Bounded history of executed instructions; the oldest entry is dropped first."""

    def __init__(self, capacity: int = 256) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self._history: Deque[TraceEntry] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._history)

    @property
    def capacity(self) -> int:
        return self._history.maxlen or 0

    def record_step(
        self,
        cpu_state,
        word: int | None,
        *,
        stack_depth: int,
        awaiting_key: bool,
        render: bool = False,
        mnemonic: str = "",
        note: str = "",
    ) -> None:
        """Append the state seen before executing ``word``."""

        self._history.append(
            TraceEntry(
                pc=cpu_state.pc & 0xFFF,
                word=None if word is None else word & 0xFFFF,
                mnemonic=mnemonic,
                v=tuple(value & 0xFF for value in cpu_state.v),
                i=cpu_state.i & 0xFFFF,
                dt=cpu_state.dt & 0xFF,
                st=cpu_state.st & 0xFF,
                stack_depth=stack_depth,
                awaiting_key=awaiting_key,
                render=render,
                note=note,
            )
        )

    def entries(self, limit: int | None = None) -> Iterable[TraceEntry]:
        history = list(self._history)
        if limit is None:
            return history
        return history[len(history) - min(len(history), max(limit, 0)):]

    def last_entry(self) -> TraceEntry | None:
        return self._history[-1] if self._history else None

    def clear(self) -> None:
        self._history.clear()

    def format_entries(self, limit: int | None = None) -> Sequence[str]:
        return [entry.format() for entry in self.entries(limit)]

    def dump(self, category: str, limit: int | None = None) -> None:
        for line in self.format_entries(limit):
            debug_log(category, line)
