"""
Per-chunk preprocessing: mono reduction, low-pass filtering and decimation.

Decimation keeps every N-th sample, so a chunk whose length is not a
multiple of N would shift the decimation phase of the next chunk. The
excess samples are carried in the workspace remainder buffer and prepended
to the next chunk instead. The low-pass delay line is carried the same way,
which makes the output independent of how the stream was split.
"""

import logging
import math

from ..audio.audio_data import AudioData
from ..dsp.lowpass import FilterCache
from ..exceptions import ConfigurationError
from ..parameters import Parameters
from .workspace import Workspace

logger = logging.getLogger(__name__)


class Preprocessor:
    """Reduces chunks to decimated mono audio in the workspace buffer."""

    def __init__(self, parameters: Parameters, filter_cache: FilterCache):
        self.parameters = parameters
        self.filter_cache = filter_cache

    @property
    def lpf_cutoff(self) -> float:
        return self.parameters.last_frequency * self.parameters.lpf_cutoff_ratio

    @property
    def downsample_cutoff(self) -> float:
        return self.parameters.last_frequency * self.parameters.downsample_cutoff_ratio

    def decimation_factor(self, frame_rate: int) -> int:
        """
        Raises:
            ConfigurationError: If frame_rate is too low for the band range
        """
        factor = int(math.floor(frame_rate / 2 / self.downsample_cutoff))
        if factor == 0:
            raise ConfigurationError(
                f"Frame rate {frame_rate} Hz is too low to analyse up to "
                f"{self.parameters.last_frequency:.1f} Hz"
            )
        return factor

    def preprocess(self, audio: AudioData, workspace: Workspace, flush: bool = False) -> AudioData:
        """
        Preprocess one chunk and append the result to the preprocessed buffer.

        Args:
            audio: Chunk owned by the pipeline (modified in place)
            workspace: Session state
            flush: Final call; the remainder is consumed instead of re-buffered

        Returns:
            The decimated audio that was appended
        """
        audio.reduce_to_mono()

        remainder = workspace.remainder_buffer
        if remainder.channels > 0:
            audio.prepend(remainder)
            remainder.discard_frames_from_front(remainder.frame_count)

        factor = self.decimation_factor(audio.frame_rate)

        lpf = self.filter_cache.get_filter(
            self.parameters.lpf_order,
            audio.frame_rate,
            self.lpf_cutoff,
            self.parameters.lpf_precision,
        )

        if flush:
            # Push the tail of the signal through the filter delay
            audio.add_to_sample_count(lpf.delay)
        else:
            excess = audio.sample_count % factor
            # An empty slice still records channel layout and frame rate,
            # which the final flush relies on
            remainder.append(audio.slice_samples_from_back(excess))

        filtered, workspace.filter_history = lpf.filter(
            audio, workspace.filter_history, factor
        )
        filtered.downsample(factor)

        workspace.preprocessed_buffer.append(filtered)

        logger.debug(
            "Preprocessed %d samples at %d Hz (factor %d, remainder %d, flush=%s)",
            audio.sample_count, audio.frame_rate, factor,
            remainder.sample_count, flush,
        )
        return filtered
