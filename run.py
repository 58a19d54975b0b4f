"""Command-line entry point for the CHIP-8 emulator."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from pychip8.cpu import Quirks
from pychip8.ui.app import AppConfig, Chip8App
from pychip8.video import PALETTES


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="run.py",
        description="CHIP-8 emulator",
    )
    parser.add_argument(
        "rom",
        type=Path,
        help="Path to the CHIP-8 ROM image",
    )
    parser.add_argument(
        "--scale",
        type=int,
        default=10,
        help="Integer window scale factor (default: 10)",
    )
    parser.add_argument(
        "--fullscreen",
        action="store_true",
        help="Launch the emulator in fullscreen mode",
    )
    parser.add_argument(
        "--clock",
        type=int,
        default=500,
        help="Instructions executed per second (default: 500)",
    )
    parser.add_argument(
        "--palette",
        choices=sorted(PALETTES),
        default="phosphor",
        help="Display colours (default: phosphor)",
    )
    parser.add_argument(
        "--mute",
        action="store_true",
        help="Disable the sound timer tone",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Stop on unknown opcodes instead of skipping them",
    )
    parser.add_argument(
        "--shift-vy",
        action="store_true",
        help="8xy6/8xyE shift Vy into Vx (COSMAC VIP behaviour)",
    )
    parser.add_argument(
        "--jump-vx",
        action="store_true",
        help="Bnnn jumps relative to Vx instead of V0",
    )
    parser.add_argument(
        "--increment-i",
        action="store_true",
        help="Fx55/Fx65 advance I past the transferred registers",
    )
    parser.add_argument(
        "--logic-vf",
        action="store_true",
        help="8xy1/8xy2/8xy3 reset VF",
    )
    return parser


def config_from_args(args: argparse.Namespace) -> AppConfig:
    return AppConfig(
        rom_path=args.rom,
        scale=args.scale,
        fullscreen=args.fullscreen,
        clock_hz=args.clock,
        palette=args.palette,
        sound=not args.mute,
        strict_illegal=args.strict,
        quirks=Quirks(
            shift_uses_vy=args.shift_vy,
            jump_uses_vx=args.jump_vx,
            load_store_increments_index=args.increment_i,
            logic_resets_vf=args.logic_vf,
        ),
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.rom.exists():
        parser.error(f"ROM file not found: {args.rom}")
    if args.scale <= 0:
        parser.error("--scale must be positive")
    if args.clock <= 0:
        parser.error("--clock must be positive")

    app = Chip8App(config_from_args(args))
    try:
        app.run()
    except RuntimeError as exc:
        parser.exit(1, f"run.py: {exc}\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
