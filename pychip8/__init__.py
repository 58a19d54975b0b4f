"""CHIP-8 virtual machine emulator.

The core lives in :mod:`pychip8.cpu` (decoder and execute engine),
:mod:`pychip8.bus`, :mod:`pychip8.video` and :mod:`pychip8.io` (machine
state) and is assembled by :mod:`pychip8.system`. The pygame frontend,
audio and ROM loading are thin collaborators on top of it.
"""

from __future__ import annotations

from . import audio, bus, cpu, io, loader, system, ui, utils, video

__all__: list[str] = [
    "cpu",
    "bus",
    "video",
    "audio",
    "io",
    "loader",
    "system",
    "ui",
    "utils",
]
