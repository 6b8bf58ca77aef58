"""
keyfinder - musical key estimation for audio streams

Audio is reduced to a chromagram (12-bin pitch-class energy per hop) and the
averaged chroma vector is matched against rotated major/minor tone profiles.
Audio may be supplied in one piece or as consecutive chunks; both give the
same result.
"""

import logging

from .analysis import Chromagram, KeyClassifier, KeyFinder, Workspace
from .audio import AudioData, AudioLoader
from .dsp import ChromaTransformCache, FilterCache
from .exceptions import (
    AudioFormatError,
    ChannelMismatchError,
    ConfigurationError,
    FftSizeMismatchError,
    FrameRateMismatchError,
    InsufficientSamplesError,
    InvalidFactorError,
    KeyFinderError,
)
from .keys import Key, camelot_code, key_name
from .models import KeyCandidate, KeyEstimate
from .parameters import Parameters
from .profiles import KeyProfile

__version__ = "1.0.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AudioData",
    "AudioLoader",
    "Chromagram",
    "ChromaTransformCache",
    "FilterCache",
    "Key",
    "KeyCandidate",
    "KeyClassifier",
    "KeyEstimate",
    "KeyFinder",
    "KeyProfile",
    "Parameters",
    "Workspace",
    "camelot_code",
    "key_name",
    "KeyFinderError",
    "ConfigurationError",
    "ChannelMismatchError",
    "FrameRateMismatchError",
    "AudioFormatError",
    "InvalidFactorError",
    "InsufficientSamplesError",
    "FftSizeMismatchError",
]
