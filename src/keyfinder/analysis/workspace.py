"""
Mutable state of one key detection session.
"""

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from ..audio.audio_data import AudioData
from ..dsp.fft import FftAdapter
from ..exceptions import FftSizeMismatchError
from .chromagram import Chromagram


@dataclass
class Workspace:
    """
    Caller-owned state carried between chunk calls.

    One workspace per audio stream; it must not be shared between threads.
    Independent workspaces may be processed concurrently.

    Attributes:
        preprocessed_buffer: Decimated mono audio awaiting FFT framing
        remainder_buffer: Undecimated mono tail (shorter than the decimation
            factor) carried into the next chunk
        chromagram: Accumulated hops, None until the first hop is analysed
        fft_adapter: Created on first use, never resized
        filter_history: Low-pass delay line (last filter-order input samples)
        finalized: Set by the final flush
    """
    preprocessed_buffer: AudioData = field(default_factory=AudioData)
    remainder_buffer: AudioData = field(default_factory=AudioData)
    chromagram: Optional[Chromagram] = None
    fft_adapter: Optional[FftAdapter] = None
    filter_history: Optional[np.ndarray] = None
    finalized: bool = False

    def get_fft_adapter(self, frame_size: int) -> FftAdapter:
        if self.fft_adapter is None:
            self.fft_adapter = FftAdapter(frame_size)
        elif self.fft_adapter.frame_size != frame_size:
            raise FftSizeMismatchError(
                f"Workspace FFT adapter is sized {self.fft_adapter.frame_size}, "
                f"requested {frame_size}"
            )
        return self.fft_adapter

    @property
    def hops(self) -> int:
        return 0 if self.chromagram is None else self.chromagram.hops
