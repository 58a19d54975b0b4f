import pytest

from pychip8.audio import square_wave_samples


def test_square_wave_has_one_period() -> None:
    samples = square_wave_samples(44_100, 441.0, amplitude=1000)

    assert len(samples) == 100
    assert samples.typecode == "h"
    assert list(samples[:50]) == [1000] * 50
    assert list(samples[50:]) == [-1000] * 50


def test_square_wave_period_is_at_least_two_samples() -> None:
    samples = square_wave_samples(8_000, 20_000.0)

    assert len(samples) == 2
    assert samples[0] > 0 > samples[1]


def test_square_wave_rejects_non_positive_frequency() -> None:
    with pytest.raises(ValueError):
        square_wave_samples(44_100, 0.0)
