"""Audio output for the CHIP-8 sound timer."""

from .beeper import DEFAULT_FREQUENCY, SquareWaveBeeper, square_wave_samples

__all__ = ["DEFAULT_FREQUENCY", "SquareWaveBeeper", "square_wave_samples"]
