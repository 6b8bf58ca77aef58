"""
Key detection pipeline: chunked chromagram extraction and classification.

Typical progressive use::

    finder = KeyFinder()
    workspace = Workspace()
    for chunk in chunks:
        finder.process_chunk(workspace, chunk)
        running = finder.classify(workspace)   # optional best-effort estimate
    finder.finalize(workspace)
    key = finder.classify(workspace)
"""

import logging
import math
from pathlib import Path
from typing import Optional

import numpy as np

from ..audio.audio_data import AudioData
from ..audio.loader import AudioLoader
from ..dsp.lowpass import FilterCache
from ..dsp.spectrum import ChromaTransformCache
from ..keys import Key, camelot_code, key_name
from ..models.results import KeyCandidate, KeyEstimate
from ..parameters import Parameters
from .accumulator import ChromaAccumulator
from .classifier import KeyClassifier
from .preprocess import Preprocessor
from .workspace import Workspace

logger = logging.getLogger(__name__)


class KeyFinder:
    """
    Estimates the key of audio delivered in one piece or in chunks.

    A KeyFinder holds only configuration and caches; all per-stream state is
    in the Workspace passed to each call. The caches may be shared between
    KeyFinder instances running in different threads.
    """

    MAX_ALTERNATIVES = 4

    def __init__(
        self,
        parameters: Optional[Parameters] = None,
        filter_cache: Optional[FilterCache] = None,
        transform_cache: Optional[ChromaTransformCache] = None,
    ):
        self.parameters = parameters or Parameters()
        self.filter_cache = filter_cache if filter_cache is not None else FilterCache()
        self.transform_cache = transform_cache if transform_cache is not None else ChromaTransformCache()

        self.preprocessor = Preprocessor(self.parameters, self.filter_cache)
        self.accumulator = ChromaAccumulator(self.parameters, self.transform_cache)
        self.classifier = KeyClassifier(
            self.parameters.major_profile(),
            self.parameters.minor_profile(),
        )
        self.loader = AudioLoader()

    def process_chunk(self, workspace: Workspace, chunk: AudioData):
        """
        Feed the next chunk of a stream.

        Chunks must arrive in the order they occur in the signal; the
        remainder and hop bookkeeping assume it and cannot detect reordering.
        The caller's chunk is not modified.

        Raises:
            ConfigurationError: If the chunk's frame rate is too low
            ChannelMismatchError, FrameRateMismatchError: If the chunk does
                not fit the audio already buffered
        """
        self.preprocessor.preprocess(chunk.copy(), workspace)
        self.accumulator.consume_buffered_audio(workspace)

    progressive_chromagram = process_chunk

    def finalize(self, workspace: Workspace):
        """
        Flush the remainder and zero-pad so the last partial hop is analysed.

        Call exactly once after the last chunk; a second call pads again.
        """
        if workspace.remainder_buffer.channels > 0:
            self.preprocessor.preprocess(AudioData(), workspace, flush=True)

        buffer = workspace.preprocessed_buffer
        hop_size = self.parameters.hop_size
        padded_hops = math.ceil(buffer.sample_count / hop_size)
        if padded_hops > 0:
            final_length = self.parameters.frame_size + (padded_hops - 1) * hop_size
            buffer.add_to_sample_count(final_length - buffer.sample_count)

        self.accumulator.consume_buffered_audio(workspace)
        workspace.finalized = True

    final_chromagram = finalize

    def chroma_vector(self, workspace: Workspace) -> np.ndarray:
        if workspace.chromagram is None:
            return np.zeros(12, dtype=np.float64)
        return workspace.chromagram.collapse_to_one_hop()

    def classify(self, workspace: Workspace) -> Key:
        """Key of everything analysed so far (Key.SILENCE before the first hop)."""
        return self.classifier.classify(self.chroma_vector(workspace))

    key_of_chromagram = classify

    def key_of_chroma_vector(self, chroma_vector) -> Key:
        return self.classifier.classify(chroma_vector)

    def key_of_audio(self, audio: AudioData) -> Key:
        """Batch analysis of a complete signal."""
        workspace = Workspace()
        self.process_chunk(workspace, audio)
        self.finalize(workspace)
        return self.classify(workspace)

    def estimate(self, workspace: Workspace) -> KeyEstimate:
        """Key, score and ranked alternatives for the session so far."""
        vector = self.chroma_vector(workspace)
        key = self.classifier.classify(vector)
        scores = self.classifier.scores(vector)

        alternatives = []
        if key is not Key.SILENCE:
            ranked = sorted(range(len(scores)), key=lambda k: (-scores[k], k))
            for k in ranked:
                if k == key.value:
                    continue
                alternatives.append(KeyCandidate(
                    key=Key(k),
                    name=key_name(Key(k)),
                    score=float(scores[k]),
                ))
                if len(alternatives) == self.MAX_ALTERNATIVES:
                    break

        return KeyEstimate(
            key=key,
            name=key_name(key),
            camelot=camelot_code(key),
            score=0.0 if key is Key.SILENCE else float(scores[key.value]),
            hops=workspace.hops,
            final=workspace.finalized,
            alternatives=alternatives,
            chroma=[float(x) for x in vector],
        )

    def analyze_file(self, path: str | Path, block_frames: Optional[int] = None) -> KeyEstimate:
        """
        Stream an audio file through the pipeline block by block.

        Args:
            path: Path to the audio file
            block_frames: Frames per chunk (AudioLoader default if None)
        """
        workspace = Workspace()
        for block in self.loader.stream(path, block_frames):
            self.process_chunk(workspace, block)
        self.finalize(workspace)

        estimate = self.estimate(workspace)
        logger.info("%s: %s (score %.3f, %d hops)", Path(path).name, estimate.name,
                    estimate.score, estimate.hops)
        return estimate
