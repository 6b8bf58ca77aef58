"""
Fixed-size real FFT adapter.
"""

import numpy as np


class FftAdapter:
    """Forward real FFT of exactly frame_size samples."""

    def __init__(self, frame_size: int):
        if frame_size <= 0:
            raise ValueError(f"FFT frame size must be positive, got {frame_size}")
        self.frame_size = frame_size

    @property
    def bins(self) -> int:
        """Number of output bins (frame_size // 2 + 1)."""
        return self.frame_size // 2 + 1

    def magnitudes(self, frame: np.ndarray) -> np.ndarray:
        """Magnitude spectrum of one frame."""
        if len(frame) != self.frame_size:
            raise ValueError(
                f"FFT adapter expects {self.frame_size} samples, got {len(frame)}"
            )
        return np.abs(np.fft.rfft(frame))
