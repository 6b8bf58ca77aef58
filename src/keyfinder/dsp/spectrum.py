"""
Short-time spectral analysis into 12-bin pitch-class vectors.

Each hop is windowed (Blackman), transformed to a magnitude spectrum and
mapped onto log-spaced semitone bands by a direct spectral kernel: every
band averages the FFT bins within a Hann-shaped window centred on the band
frequency. Bands are then folded over octaves into 12 pitch classes with
index 0 = C.
"""

import logging

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from ..audio.audio_data import AudioData
from ..parameters import Parameters, SEMITONES
from .cache import InstanceCache
from .fft import FftAdapter

logger = logging.getLogger(__name__)


class ChromaTransform:
    """Spectral kernel for one (frame rate, parameters) combination."""

    def __init__(self, frame_rate: int, parameters: Parameters):
        self.frame_rate = frame_rate
        self.frame_size = parameters.frame_size

        bins = self.frame_size // 2 + 1
        bin_freqs = np.arange(bins) * frame_rate / self.frame_size
        centres = parameters.band_frequencies

        # Bandwidth as a fraction of the centre frequency
        q_factor = parameters.direct_sk_stretch * (2 ** (1.0 / SEMITONES) - 1)

        kernel = np.zeros((len(centres), bins), dtype=np.float64)
        for band, centre in enumerate(centres):
            width = centre * q_factor
            begin = centre - width / 2
            in_window = (bin_freqs >= begin) & (bin_freqs <= begin + width)
            coefficients = 0.5 * (1 - np.cos(2 * np.pi * (bin_freqs[in_window] - begin) / width))
            total = coefficients.sum()
            if total > 0:
                kernel[band, in_window] = coefficients / total
            else:
                logger.debug(
                    "Band at %.2f Hz has no FFT bins at %d Hz / %d samples",
                    centre, frame_rate, self.frame_size,
                )

        # Octave folding: band -> pitch class
        fold = np.zeros((SEMITONES, len(centres)), dtype=np.float64)
        fold[parameters.band_midi % SEMITONES, np.arange(len(centres))] = 1.0

        self.kernel = kernel
        self.matrix = fold @ kernel
        self.window = np.blackman(self.frame_size)

    def chroma_of_spectrum(self, magnitudes: np.ndarray) -> np.ndarray:
        return self.matrix @ magnitudes


class ChromaTransformCache(InstanceCache):
    """Chroma transforms keyed by (frame rate, parameters)."""

    def __init__(self):
        super().__init__(ChromaTransform)

    def get_transform(self, frame_rate: int, parameters: Parameters) -> ChromaTransform:
        return self.get(frame_rate, parameters)


class SpectrumAnalyser:
    """Turns buffered mono audio into per-hop chroma vectors."""

    def __init__(
        self,
        frame_rate: int,
        parameters: Parameters,
        transform_cache: ChromaTransformCache,
    ):
        self.frame_rate = frame_rate
        self.parameters = parameters
        self.transform = transform_cache.get_transform(frame_rate, parameters)

    def hop_count(self, sample_count: int) -> int:
        frame_size = self.parameters.frame_size
        if sample_count < frame_size:
            return 0
        return 1 + (sample_count - frame_size) // self.parameters.hop_size

    def chromagram_of_whole_frames(self, audio: AudioData, fft: FftAdapter) -> np.ndarray:
        """
        Analyse every whole frame in the buffer.

        Args:
            audio: Mono audio at this analyser's frame rate
            fft: Adapter sized to parameters.frame_size

        Returns:
            (hops, 12) array; trailing samples that do not fill a frame are
            not analysed
        """
        if audio.channels > 1:
            raise ValueError("Spectrum analysis expects mono audio")
        if fft.frame_size != self.parameters.frame_size:
            raise ValueError(
                f"FFT adapter size {fft.frame_size} != frame size {self.parameters.frame_size}"
            )

        hops = self.hop_count(audio.sample_count)
        chroma = np.zeros((hops, SEMITONES), dtype=np.float64)
        if hops == 0:
            return chroma

        frames = sliding_window_view(audio.samples, self.parameters.frame_size)
        frames = frames[::self.parameters.hop_size][:hops]
        for hop, frame in enumerate(frames):
            magnitudes = fft.magnitudes(frame * self.transform.window)
            chroma[hop] = self.transform.chroma_of_spectrum(magnitudes)

        return chroma
