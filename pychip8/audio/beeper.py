"""Square-wave tone played while the CHIP-8 sound timer is nonzero."""

from __future__ import annotations

from array import array
from typing import Optional

DEFAULT_FREQUENCY = 440.0


def square_wave_samples(sample_rate: int, frequency: float, amplitude: int = 8_000) -> array:
    """Return one period of a signed 16-bit square wave."""

    if frequency <= 0.0:
        raise ValueError("frequency must be positive")
    period = max(2, int(round(sample_rate / frequency)))
    half = period // 2
    buffer = array("h")
    for index in range(period):
        buffer.append(amplitude if index < half else -amplitude)
    return buffer


class SquareWaveBeeper:
    """Manage a looping square-wave tone using pygame's mixer."""

    def __init__(
        self,
        *,
        sample_rate: int = 44_100,
        frequency: float = DEFAULT_FREQUENCY,
        volume: float = 0.35,
    ) -> None:
        try:
            import pygame  # type: ignore
        except Exception as exc:  # pragma: no cover - optional dependency
            raise RuntimeError("pygame is required for audio output") from exc

        if pygame.mixer.get_init() is None:
            raise RuntimeError("pygame mixer must be initialised before creating SquareWaveBeeper")

        self._pygame = pygame
        self._sample_rate = max(1, sample_rate)
        self._frequency = frequency
        self._volume = max(0.0, min(1.0, volume))
        self._channel: Optional["pygame.mixer.Channel"] = None
        self._sound: Optional["pygame.mixer.Sound"] = None
        self._playing = False

    @property
    def playing(self) -> bool:
        return self._playing

    # ------------------------------------------------------------------
    # Public API

    def set_state(self, enabled: bool) -> None:
        """Start or stop the tone; repeated calls with the same state are no-ops."""

        if enabled == self._playing:
            return
        if not enabled:
            self._stop()
            return

        if self._sound is None:
            samples = square_wave_samples(self._sample_rate, self._frequency)
            self._sound = self._pygame.mixer.Sound(buffer=samples.tobytes())

        channel = self._channel
        if channel is None:
            channel = self._pygame.mixer.find_channel(True)
            if channel is None:
                return
            self._channel = channel

        channel.play(self._sound, loops=-1)
        channel.set_volume(self._volume)
        self._playing = True

    def shutdown(self) -> None:
        """Stop any active tone and release resources."""

        self._stop()
        self._channel = None
        self._sound = None

    # ------------------------------------------------------------------
    # Internals

    def _stop(self) -> None:
        if self._channel is not None:
            self._channel.stop()
        self._playing = False


__all__ = ["DEFAULT_FREQUENCY", "SquareWaveBeeper", "square_wave_samples"]
