"""
Key detection pipeline.

- Preprocessor: mono reduction, low-pass filtering, decimation with
  remainder carry-over between chunks
- ChromaAccumulator: FFT-frame-aligned chromagram accumulation
- KeyClassifier: tone profile correlation
- KeyFinder: the public process_chunk / finalize / classify surface
"""

from .chromagram import Chromagram
from .workspace import Workspace
from .preprocess import Preprocessor
from .accumulator import ChromaAccumulator
from .classifier import KeyClassifier
from .keyfinder import KeyFinder

__all__ = [
    "Chromagram",
    "Workspace",
    "Preprocessor",
    "ChromaAccumulator",
    "KeyClassifier",
    "KeyFinder",
]
