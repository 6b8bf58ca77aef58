"""
Audio buffers and file decoding.
"""

from .audio_data import AudioData
from .loader import AudioLoader

__all__ = ["AudioData", "AudioLoader"]
