"""
Audio file loader supporting WAV, FLAC, OGG, MP3 and other common formats.
Uses soundfile as the primary backend and librosa as a fallback.
"""

import logging
from pathlib import Path
from typing import Iterator, Optional

import numpy as np
import soundfile as sf
import librosa

from .audio_data import AudioData

logger = logging.getLogger(__name__)


class AudioLoader:
    """
    Decode audio files into AudioData without resampling or downmixing.

    The key detection pipeline does its own mono reduction and decimation,
    so samples are handed over at the file's native rate and layout.
    """

    SUPPORTED_EXTENSIONS = {".wav", ".mp3", ".flac", ".ogg", ".aiff", ".aif", ".m4a"}

    # Block length used by stream() when none is given (about 1 s at 44.1 kHz)
    DEFAULT_BLOCK_FRAMES = 44100

    def _check_path(self, path: str | Path) -> Path:
        path = Path(path)

        if not path.exists():
            raise FileNotFoundError(f"Audio file not found: {path}")

        ext = path.suffix.lower()
        if ext not in self.SUPPORTED_EXTENSIONS:
            raise ValueError(
                f"Unsupported audio format: {ext}. "
                f"Supported: {', '.join(sorted(self.SUPPORTED_EXTENSIONS))}"
            )
        return path

    def load(self, path: str | Path) -> AudioData:
        """
        Load a whole audio file.

        Args:
            path: Path to the audio file

        Returns:
            AudioData with the file's channels and frame rate

        Raises:
            FileNotFoundError: If the file does not exist
            ValueError: If the file format is not supported
        """
        path = self._check_path(path)

        # soundfile first (faster, exact for WAV/FLAC)
        try:
            samples, sr = sf.read(path, dtype="float64", always_2d=True)
        except sf.SoundFileError:
            logger.debug("soundfile cannot read %s, falling back to librosa", path)
            return self._load_librosa(path)

        return AudioData(samples, sr)

    def _load_librosa(self, path: Path) -> AudioData:
        """Load with librosa (handles MP3/M4A where libsndfile cannot)."""
        samples, sr = librosa.load(path, sr=None, mono=False, dtype=np.float64)

        # librosa returns (channels, n) for multichannel audio
        if samples.ndim == 2:
            samples = samples.T

        return AudioData(samples, sr)

    def stream(
        self,
        path: str | Path,
        block_frames: Optional[int] = None,
    ) -> Iterator[AudioData]:
        """
        Yield consecutive blocks of an audio file in temporal order.

        Args:
            path: Path to the audio file
            block_frames: Frames per block (default DEFAULT_BLOCK_FRAMES)
        """
        path = self._check_path(path)
        block_frames = block_frames or self.DEFAULT_BLOCK_FRAMES

        try:
            sr = sf.info(path).samplerate
        except sf.SoundFileError:
            logger.debug("soundfile cannot stream %s, decoding it whole", path)
            audio = self._load_librosa(path)
            for start in range(0, audio.frame_count, block_frames):
                yield AudioData(audio.frames[start:start + block_frames], audio.frame_rate)
            return

        for block in sf.blocks(path, blocksize=block_frames, dtype="float64", always_2d=True):
            yield AudioData(block, sr)

    @classmethod
    def is_supported(cls, path: str | Path) -> bool:
        """Check whether the file extension is supported."""
        return Path(path).suffix.lower() in cls.SUPPORTED_EXTENSIONS
