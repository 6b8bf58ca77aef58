"""
FIR low-pass filter used for anti-aliasing before decimation.
"""

import logging
from typing import Optional, Tuple

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view
from scipy import signal

from ..audio.audio_data import AudioData
from .cache import InstanceCache

logger = logging.getLogger(__name__)


class LowPassFilter:
    """
    Linear-phase FIR low-pass filter.

    Coefficients are designed once by frequency sampling an ideal brick-wall
    response on ``precision + 1`` points. The filter itself holds no signal
    state: the delay line is passed in and returned by filter(), so one
    instance can serve any number of sessions.
    """

    # Output samples computed per matrix product
    BLOCK_SIZE = 8192

    def __init__(self, order: int, frame_rate: int, cutoff: float, precision: int):
        """
        Args:
            order: Filter order (taps - 1)
            frame_rate: Sample rate of the audio to filter
            cutoff: Cutoff frequency in Hz, below frame_rate / 2
            precision: Resolution of the frequency-sampled design
        """
        nyquist = frame_rate / 2
        if not 0 < cutoff < nyquist:
            raise ValueError(f"Cutoff {cutoff:.1f} Hz outside (0, {nyquist:.1f}) Hz")

        self.order = order
        self.frame_rate = frame_rate
        self.cutoff = cutoff
        self.precision = precision

        self.coefficients = signal.firwin2(
            order + 1,
            [0.0, cutoff, cutoff, nyquist],
            [1.0, 1.0, 0.0, 0.0],
            nfreqs=precision + 1,
            fs=frame_rate,
        )
        # Reversed once so each output sample is a plain dot product
        self._kernel = self.coefficients[::-1].copy()

    @property
    def delay(self) -> int:
        """Group delay in samples."""
        return self.order // 2

    def initial_history(self) -> np.ndarray:
        return np.zeros(self.order, dtype=np.float64)

    def filter(
        self,
        audio: AudioData,
        history: Optional[np.ndarray] = None,
        shortcut_factor: int = 1,
    ) -> Tuple[AudioData, np.ndarray]:
        """
        Filter mono audio, continuing from the previous call's delay line.

        Args:
            audio: Mono audio at this filter's frame rate
            history: Last ``order`` input samples of the previous call
                (zeros at the start of a stream)
            shortcut_factor: Only every shortcut_factor-th output sample is
                computed; the others are left at zero because decimation
                discards them

        Returns:
            (filtered audio, history for the next call)
        """
        if audio.channels > 1:
            raise ValueError("Low-pass filter expects mono audio")
        if history is None:
            history = self.initial_history()
        if len(history) != self.order:
            raise ValueError(f"Filter history must hold {self.order} samples, got {len(history)}")

        x = audio.samples
        if len(x) == 0:
            return audio.copy(), history

        extended = np.concatenate([history, x])
        windows = sliding_window_view(extended, self.order + 1)

        out = np.zeros(len(x), dtype=np.float64)
        positions = np.arange(0, len(x), max(shortcut_factor, 1))
        for start in range(0, len(positions), self.BLOCK_SIZE):
            block = positions[start:start + self.BLOCK_SIZE]
            out[block] = windows[block] @ self._kernel

        return AudioData(out, audio.frame_rate), extended[-self.order:].copy()


class FilterCache(InstanceCache):
    """Low-pass filters keyed by (order, frame rate, cutoff, precision)."""

    def __init__(self):
        super().__init__(LowPassFilter)

    def get_filter(
        self,
        order: int,
        frame_rate: int,
        cutoff: float,
        precision: int,
    ) -> LowPassFilter:
        return self.get(order, frame_rate, cutoff, precision)
