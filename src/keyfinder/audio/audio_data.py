"""
Growable buffer of audio samples with channel and frame rate metadata.
"""

from typing import Optional

import numpy as np

from ..exceptions import (
    AudioFormatError,
    ChannelMismatchError,
    FrameRateMismatchError,
    InsufficientSamplesError,
    InvalidFactorError,
)


class AudioData:
    """
    Ordered audio samples stored as a (frames, channels) float64 array.

    An empty buffer created without arguments has 0 channels and a frame
    rate of 0; it takes on the layout of the first audio joined to it.
    """

    def __init__(
        self,
        samples: Optional[np.ndarray] = None,
        frame_rate: int = 0,
    ):
        """
        Args:
            samples: 1-D mono samples or a (frames, channels) array
            frame_rate: Frames per second
        """
        if samples is None:
            self._frames = np.zeros((0, 0), dtype=np.float64)
        else:
            samples = np.asarray(samples, dtype=np.float64)
            if samples.ndim == 1:
                samples = samples.reshape(-1, 1)
            elif samples.ndim != 2:
                raise AudioFormatError(f"Expected 1-D or 2-D samples, got {samples.ndim}-D")
            self._frames = samples
        self.frame_rate = int(frame_rate)

    @classmethod
    def from_interleaved(
        cls,
        samples: np.ndarray,
        channels: int,
        frame_rate: int,
    ) -> "AudioData":
        """Build from interleaved samples (L R L R ...)."""
        samples = np.asarray(samples, dtype=np.float64).ravel()
        if channels < 1:
            raise AudioFormatError(f"Channel count must be positive, got {channels}")
        if len(samples) % channels:
            raise AudioFormatError(
                f"{len(samples)} samples is not a multiple of {channels} channels"
            )
        return cls(samples.reshape(-1, channels), frame_rate)

    @property
    def channels(self) -> int:
        return self._frames.shape[1]

    @property
    def frame_count(self) -> int:
        return self._frames.shape[0]

    @property
    def sample_count(self) -> int:
        return self._frames.size

    @property
    def frames(self) -> np.ndarray:
        """(frames, channels) view of the buffer."""
        return self._frames

    @property
    def samples(self) -> np.ndarray:
        """Interleaved 1-D view of the buffer."""
        return self._frames.reshape(-1)

    @property
    def duration(self) -> float:
        if not self.frame_rate:
            return 0.0
        return self.frame_count / self.frame_rate

    def copy(self) -> "AudioData":
        return AudioData(self._frames.copy(), self.frame_rate)

    def __len__(self) -> int:
        return self.sample_count

    def __repr__(self) -> str:
        return (
            f"AudioData(channels={self.channels}, frames={self.frame_count}, "
            f"frame_rate={self.frame_rate})"
        )

    def _adopt(self, other: "AudioData"):
        """Check that other can be joined to this buffer, adopting its layout if empty."""
        if self.channels == 0:
            self._frames = np.zeros((0, other.channels), dtype=np.float64)
        elif other.channels != 0 and other.channels != self.channels:
            raise ChannelMismatchError(
                f"Cannot join {other.channels}-channel audio to {self.channels}-channel buffer"
            )
        if self.frame_rate == 0:
            self.frame_rate = other.frame_rate
        elif other.frame_rate != 0 and other.frame_rate != self.frame_rate:
            raise FrameRateMismatchError(
                f"Cannot join {other.frame_rate} Hz audio to {self.frame_rate} Hz buffer"
            )

    def append(self, other: "AudioData"):
        """Concatenate other after the existing content."""
        self._adopt(other)
        if other.frame_count:
            self._frames = np.concatenate([self._frames, other.frames])

    def prepend(self, other: "AudioData"):
        """Insert other before the existing content."""
        self._adopt(other)
        if other.frame_count:
            self._frames = np.concatenate([other.frames, self._frames])

    def slice_samples_from_back(self, sample_count: int) -> "AudioData":
        """Remove the last sample_count samples and return them as a new buffer."""
        if sample_count > self.sample_count:
            raise InsufficientSamplesError(
                f"Cannot slice {sample_count} samples from a buffer of {self.sample_count}"
            )
        channels = max(self.channels, 1)
        if sample_count % channels:
            raise AudioFormatError(
                f"{sample_count} samples is not a multiple of {channels} channels"
            )
        split = self.frame_count - sample_count // channels
        sliced = AudioData(self._frames[split:].copy(), self.frame_rate)
        self._frames = self._frames[:split]
        return sliced

    def discard_frames_from_front(self, frame_count: int):
        """Drop consumed frames. Only the view moves; nothing is copied."""
        if frame_count > self.frame_count:
            raise InsufficientSamplesError(
                f"Cannot discard {frame_count} frames from a buffer of {self.frame_count}"
            )
        self._frames = self._frames[frame_count:]

    def add_to_sample_count(self, sample_count: int):
        """Append sample_count zero samples."""
        channels = max(self.channels, 1)
        if sample_count % channels:
            raise AudioFormatError(
                f"{sample_count} samples is not a multiple of {channels} channels"
            )
        padding = np.zeros((sample_count // channels, channels), dtype=np.float64)
        if self.channels == 0:
            self._frames = padding
        else:
            self._frames = np.concatenate([self._frames, padding])

    def reduce_to_mono(self):
        """Average all channels into one."""
        if self.channels < 2:
            return
        self._frames = self._frames.mean(axis=1, keepdims=True)

    def downsample(self, factor: int):
        """Keep every factor-th frame. Expects audio already low-pass filtered."""
        if factor == 0:
            raise InvalidFactorError("Downsampling factor cannot be 0")
        if factor == 1:
            return
        self._frames = self._frames[::factor].copy()
        self.frame_rate = self.frame_rate // factor
