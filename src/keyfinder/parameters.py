"""
Analysis parameters.

The low-pass cutoff ratios, filter order and filter precision are empirically
tuned defaults. They are not derived from the other parameters.
"""

from typing import Optional

import librosa
import numpy as np
from librosa.util.exceptions import ParameterError
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .profiles import KeyProfile, tone_profiles

SEMITONES = 12


class Parameters(BaseModel):
    """Immutable configuration of one key detection pipeline."""

    model_config = ConfigDict(frozen=True)

    frame_size: int = Field(default=16384, gt=0, description="FFT frame width in samples")
    hop_size: int = Field(default=4096, gt=0, description="Stride between analysis frames")

    start_note: str = Field(default="C1", description="Lowest chromatic band")
    octaves: int = Field(default=6, ge=1, le=10)
    direct_sk_stretch: float = Field(
        default=0.8, gt=0,
        description="Spectral kernel bandwidth relative to one semitone"
    )

    lpf_order: int = Field(default=160, gt=0, description="Low-pass FIR order")
    lpf_precision: int = Field(default=2048, gt=0, description="Filter design resolution")
    lpf_cutoff_ratio: float = Field(default=1.012, gt=0)
    downsample_cutoff_ratio: float = Field(default=1.10, gt=0)

    tone_profile: KeyProfile = Field(default=KeyProfile.SHAATH)
    custom_major_profile: Optional[tuple[float, ...]] = None
    custom_minor_profile: Optional[tuple[float, ...]] = None

    @field_validator("start_note")
    @classmethod
    def _check_start_note(cls, value: str) -> str:
        try:
            librosa.note_to_midi(value)
        except ParameterError as e:
            raise ValueError(f"Invalid start note: {value!r}") from e
        return value

    @field_validator("lpf_order")
    @classmethod
    def _check_order(cls, value: int) -> int:
        if value % 2:
            raise ValueError("lpf_order must be even")
        return value

    @field_validator("lpf_precision")
    @classmethod
    def _check_precision(cls, value: int) -> int:
        if value & (value - 1):
            raise ValueError("lpf_precision must be a power of two")
        return value

    @field_validator("custom_major_profile", "custom_minor_profile")
    @classmethod
    def _check_profile(cls, value):
        if value is not None and len(value) != SEMITONES:
            raise ValueError(f"Tone profiles need {SEMITONES} values, got {len(value)}")
        return value

    @model_validator(mode="after")
    def _check_consistency(self):
        if self.hop_size > self.frame_size:
            raise ValueError("hop_size cannot exceed frame_size")
        if self.lpf_precision <= self.lpf_order:
            raise ValueError("lpf_precision must exceed lpf_order")
        if (self.custom_major_profile is None) != (self.custom_minor_profile is None):
            raise ValueError("Custom major and minor profiles must be given together")
        return self

    @property
    def bands(self) -> int:
        return self.octaves * SEMITONES

    @property
    def band_midi(self) -> np.ndarray:
        """MIDI note number of every chromatic band."""
        return int(librosa.note_to_midi(self.start_note)) + np.arange(self.bands)

    @property
    def band_frequencies(self) -> np.ndarray:
        return librosa.midi_to_hz(self.band_midi)

    @property
    def last_frequency(self) -> float:
        """Centre frequency of the highest band."""
        return float(self.band_frequencies[-1])

    def major_profile(self) -> np.ndarray:
        if self.custom_major_profile is not None:
            return np.array(self.custom_major_profile, dtype=np.float64)
        return tone_profiles(self.tone_profile)[0]

    def minor_profile(self) -> np.ndarray:
        if self.custom_minor_profile is not None:
            return np.array(self.custom_minor_profile, dtype=np.float64)
        return tone_profiles(self.tone_profile)[1]
