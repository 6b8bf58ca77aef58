"""
Shared fixtures: synthetic signals with known pitch content.
"""

import numpy as np
import pytest

from keyfinder import Parameters


def chord(frequencies, amplitudes=None, sr=22050, duration=8.0):
    """Sum of sines, 1-D float64."""
    if amplitudes is None:
        amplitudes = [1.0] * len(frequencies)
    t = np.arange(int(sr * duration)) / sr
    y = np.zeros_like(t)
    for freq, amp in zip(frequencies, amplitudes):
        y += amp * np.sin(2 * np.pi * freq * t)
    return 0.2 * y


@pytest.fixture
def small_parameters():
    """Short frames so hops are produced while chunks are still arriving."""
    return Parameters(frame_size=2048, hop_size=512)


@pytest.fixture
def c_major_signal():
    """C and G in two octaves with a quieter E (C3, C4, G3, G4, E4)."""
    sr = 22050
    y = chord(
        [130.81, 261.63, 196.00, 392.00, 329.63],
        [1.0, 1.0, 0.8, 0.8, 0.5],
        sr=sr,
    )
    return y, sr


@pytest.fixture
def a_minor_signal():
    """A and E with C (A3, A4, E4, C4)."""
    sr = 22050
    y = chord(
        [220.00, 440.00, 329.63, 261.63],
        [1.0, 1.0, 0.8, 1.2],
        sr=sr,
    )
    return y, sr


@pytest.fixture
def mixed_signal():
    """Tones plus noise, 3 s at 22050 Hz."""
    sr = 22050
    rng = np.random.default_rng(1234)
    y = chord([146.83, 220.0, 293.66, 369.99], sr=sr, duration=3.0)
    y += 0.05 * rng.standard_normal(len(y))
    return y, sr
