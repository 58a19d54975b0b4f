"""Pygame frontend for the CHIP-8 emulator."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from pychip8.audio import SquareWaveBeeper
from pychip8.cpu import CPUError, Quirks
from pychip8.cpu.decoder import decode
from pychip8.cpu.opcodes import format_instruction
from pychip8.loader import RomFormatError, load_rom_from_path
from pychip8.system import Machine, MachineConfig, ProgramTooLargeError, create_machine
from pychip8.utils import TraceRecorder, debug_enabled, debug_log
from pychip8.video import Renderer, palette_by_name


@dataclass
class AppConfig:
    """Configuration for the CHIP-8 emulator frontend."""

    rom_path: Optional[Path] = None
    scale: int = 10
    fullscreen: bool = False
    clock_hz: int = 500
    timer_hz: int = 60
    frame_rate: int = 60
    palette: str = "phosphor"
    sound: bool = True
    strict_illegal: bool = False
    quirks: Quirks = field(default_factory=Quirks)


class Chip8App:
    """Thin wrapper around the Pygame event loop."""

    def __init__(self, config: AppConfig) -> None:
        if config.clock_hz <= 0 or config.timer_hz <= 0 or config.frame_rate <= 0:
            raise ValueError("clock, timer and frame rates must be positive")
        self._config = config
        self._running = False
        self._machine: Machine | None = None
        self._beeper: SquareWaveBeeper | None = None
        self._renderer = Renderer(palette_by_name(config.palette))
        self._pygame = None
        self._step_budget = 0.0
        self._timer_budget = 0.0
        self._perf_enabled = debug_enabled("perf")
        self._frame_counter = 0
        self._trace_recorder: TraceRecorder | None = None
        if debug_enabled("trace"):
            self._trace_recorder = TraceRecorder(512)

    @property
    def machine(self) -> Machine | None:
        return self._machine

    def run(self) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required to run the UI") from exc

        if not self._config.rom_path:
            raise RuntimeError("ROM image is required")
        machine = self._create_machine(self._config.rom_path)
        self._machine = machine

        if self._config.sound:
            pygame.mixer.pre_init(44_100, -16, 1, 512)
        pygame.init()
        pygame.display.set_caption(f"CHIP-8 - {self._config.rom_path.name}")
        self._pygame = pygame
        if self._config.sound:
            self._initialise_audio(pygame)

        width = machine.framebuffer.width * self._config.scale
        height = machine.framebuffer.height * self._config.scale
        flags = pygame.FULLSCREEN if self._config.fullscreen else 0
        screen = pygame.display.set_mode((width, height), flags)

        clock = pygame.time.Clock()
        self._running = True
        dirty = True

        while self._running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    self._enter_debug_shell(machine)
                elif event.type == pygame.KEYDOWN:
                    self._handle_key_name(machine, pygame.key.name(event.key), pressed=True)
                elif event.type == pygame.KEYUP:
                    self._handle_key_name(machine, pygame.key.name(event.key), pressed=False)

            frame_start = time.perf_counter()
            steps_before = machine.cpu.instruction_count

            if self._step_cpu(machine):
                dirty = True
            self._advance_timers(machine)

            if dirty:
                frame = self._renderer.render(machine.framebuffer, scale=self._config.scale)
                screen.blit(frame.to_surface(), (0, 0))
                pygame.display.flip()
                dirty = False

            if self._beeper is not None:
                self._beeper.set_state(machine.sound_timer > 0)

            if self._perf_enabled:
                duration = time.perf_counter() - frame_start
                debug_log(
                    "perf",
                    "frame=%d steps=%d frame_ms=%.3f",
                    self._frame_counter,
                    machine.cpu.instruction_count - steps_before,
                    duration * 1000.0,
                )

            clock.tick(self._config.frame_rate)
            self._frame_counter += 1

        if self._beeper is not None:
            self._beeper.shutdown()
        pygame.quit()

    def _initialise_audio(self, pygame) -> None:
        if pygame.mixer.get_init() is None:
            try:
                pygame.mixer.init(44_100, -16, 1)
            except pygame.error as exc:  # pragma: no cover - hardware dependent
                if debug_enabled("audio"):
                    debug_log("audio", "mixer_init_failed=%s", exc)
                return
        mixer_state = pygame.mixer.get_init()
        if mixer_state is None:
            if debug_enabled("audio"):
                debug_log("audio", "mixer_unavailable")
            return
        try:
            self._beeper = SquareWaveBeeper(sample_rate=mixer_state[0])
        except RuntimeError as exc:
            self._beeper = None
            if debug_enabled("audio"):
                debug_log("audio", "beeper_init_failed=%s", exc)

    def _create_machine(self, rom_path: Path) -> Machine:
        try:
            program = load_rom_from_path(rom_path)
        except FileNotFoundError as exc:
            raise RuntimeError(f"ROM file not found: {rom_path}") from exc
        except RomFormatError as exc:
            raise RuntimeError(f"Failed to load ROM {rom_path}: {exc}") from exc

        try:
            return create_machine(
                MachineConfig(
                    program=program,
                    quirks=self._config.quirks,
                    strict_illegal=self._config.strict_illegal,
                )
            )
        except ProgramTooLargeError as exc:
            raise RuntimeError(f"Failed to load ROM {rom_path}: {exc}") from exc

    def _handle_key_name(self, machine: Machine, name: str, *, pressed: bool) -> bool:
        if debug_enabled("input"):
            debug_log("input", "event=%s pressed=%s", name, pressed)
        if pressed:
            return machine.keypad.press_key(name)
        return machine.keypad.release_key(name)

    def _steps_this_frame(self) -> int:
        self._step_budget += self._config.clock_hz / self._config.frame_rate
        steps = int(self._step_budget)
        self._step_budget -= steps
        return steps

    def _advance_timers(self, machine: Machine) -> int:
        self._timer_budget += self._config.timer_hz / self._config.frame_rate
        ticks = int(self._timer_budget)
        self._timer_budget -= ticks
        for _ in range(ticks):
            machine.tick_timers()
        return ticks

    def _step_cpu(self, machine: Machine) -> bool:
        """Run one frame's worth of instructions; True if any of them drew."""

        cpu = machine.cpu
        trace = self._trace_recorder
        render = False

        try:
            for _ in range(self._steps_this_frame()):
                if cpu.awaiting_key:
                    break
                if trace is None:
                    render = cpu.step() or render
                    continue

                state_before = cpu.state.clone()
                word = machine.memory.load16(state_before.pc)
                drew = cpu.step()
                render = drew or render
                trace.record_step(
                    state_before,
                    word,
                    stack_depth=cpu.stack.depth,
                    awaiting_key=cpu.awaiting_key,
                    render=drew,
                    mnemonic=format_instruction(decode(word)),
                )
        except CPUError as exc:
            self._running = False
            if trace is not None:
                trace.dump("trace", limit=32)
            raise RuntimeError(f"CHIP-8 fault at {cpu.state.pc:03X}: {exc}") from exc
        return render

    # ------------------------------------------------------------------
    # Debug shell

    def _enter_debug_shell(self, machine: Machine) -> None:
        print("\n=== CHIP-8 Debug Menu ===")
        print("Enter command: [c]pu, [m]em, [s]creen, [t]race, [r]eset, [q]uit, [Enter] resume")

        paused = True
        while paused and self._running:
            try:
                command = input("debug> ").strip().lower()
            except (EOFError, KeyboardInterrupt):
                print("Resuming emulator.")
                break

            if command in {"", "resume"}:
                paused = False
            elif command in {"c", "cpu"}:
                self._dump_cpu(machine)
            elif command in {"s", "screen"}:
                print(machine.framebuffer.to_text())
            elif command in {"t", "trace"}:
                self._dump_trace()
            elif command in {"r", "reset"}:
                machine.reset()
                print("Machine reset.")
            elif command.startswith("m"):
                self._dump_memory(machine, command[1:].strip() or None)
            elif command in {"q", "quit", "exit"}:
                print("Exiting emulator.")
                self._running = False
                paused = False
            else:
                print("Commands: [Enter]=resume, [c]pu, [m]em, [s]creen, [t]race, [r]eset, [q]uit")

        if self._pygame is not None:
            self._pygame.event.clear()

    def _dump_cpu(self, machine: Machine) -> None:
        for line in describe_cpu(machine):
            print(line)

    def _dump_trace(self, limit: int = 64) -> None:
        if self._trace_recorder is None:
            print("Trace recorder is disabled. Set CHIP8_DEBUG=trace to enable it.")
            return
        lines = list(self._trace_recorder.format_entries(limit))
        if not lines:
            print("Trace buffer is empty.")
            return
        print("Last trace entries:")
        for line in lines:
            print(f"  {line}")

    def _dump_memory(self, machine: Machine, argument: str | None = None) -> None:
        start = machine.cpu.state.pc
        length = 0x40
        if argument:
            parts = argument.split()
            try:
                start = int(parts[0], 16)
                length = int(parts[1], 10) if len(parts) > 1 else length
            except ValueError:
                print("Usage: m [start_hex] [length]")
                return
        if length <= 0:
            print("Length must be positive.")
            return
        for line in dump_memory(machine, start, length):
            print(line)


def describe_cpu(machine: Machine) -> list[str]:
    cpu = machine.cpu
    state = cpu.state
    registers = " ".join(f"V{index:X}={value:02X}" for index, value in enumerate(state.v))
    stack = " ".join(f"{address:03X}" for address in cpu.stack.snapshot()) or "-"
    word = machine.memory.load16(state.pc)
    return [
        f"PC={state.pc:03X} I={state.i:03X} DT={state.dt:02X} ST={state.st:02X} SP={cpu.stack.depth:02d}",
        registers,
        f"Stack: {stack}",
        f"Next: {word:04X} {format_instruction(decode(word))}",
        f"Waiting for key: {'V%X' % cpu.key_wait_register if cpu.awaiting_key else 'no'}",
    ]


def dump_memory(machine: Machine, start: int, length: int) -> list[str]:
    lines: list[str] = []
    end = start + length
    for addr in range(start, end, 16):
        chunk = machine.memory.read_block(addr, min(16, end - addr))
        hex_part = " ".join(f"{value:02X}" for value in chunk)
        lines.append(f"{addr & 0xFFF:03X}: {hex_part}")
    return lines
