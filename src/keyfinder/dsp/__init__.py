"""
Signal processing collaborators: FFT, low-pass filtering, spectral analysis.
"""

from .cache import InstanceCache
from .fft import FftAdapter
from .lowpass import LowPassFilter, FilterCache
from .spectrum import ChromaTransform, ChromaTransformCache, SpectrumAnalyser

__all__ = [
    "InstanceCache",
    "FftAdapter",
    "LowPassFilter",
    "FilterCache",
    "ChromaTransform",
    "ChromaTransformCache",
    "SpectrumAnalyser",
]
