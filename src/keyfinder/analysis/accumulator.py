"""
Accumulates chroma hops from the preprocessed buffer.
"""

import logging

from ..dsp.spectrum import ChromaTransformCache, SpectrumAnalyser
from ..parameters import Parameters
from .chromagram import Chromagram
from .workspace import Workspace

logger = logging.getLogger(__name__)


class ChromaAccumulator:
    """
    Consumes whole FFT frames from the workspace buffer, one hop at a time.

    Hop positions depend only on how many samples have been consumed, so
    calling this after every chunk produces the same hops as one call over
    the complete signal.
    """

    def __init__(self, parameters: Parameters, transform_cache: ChromaTransformCache):
        self.parameters = parameters
        self.transform_cache = transform_cache

    def consume_buffered_audio(self, workspace: Workspace) -> int:
        """
        Analyse every whole frame in the preprocessed buffer.

        Returns:
            Number of hops appended to the workspace chromagram
        """
        buffer = workspace.preprocessed_buffer
        fft = workspace.get_fft_adapter(self.parameters.frame_size)

        if buffer.sample_count < self.parameters.frame_size:
            return 0

        analyser = SpectrumAnalyser(buffer.frame_rate, self.parameters, self.transform_cache)
        hops = analyser.chromagram_of_whole_frames(buffer, fft)

        buffer.discard_frames_from_front(self.parameters.hop_size * len(hops))
        if workspace.chromagram is None:
            workspace.chromagram = Chromagram()
        workspace.chromagram.append(hops)

        logger.debug(
            "Analysed %d hops, %d samples left in buffer, %d hops total",
            len(hops), buffer.sample_count, workspace.chromagram.hops,
        )
        return len(hops)
