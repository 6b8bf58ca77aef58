"""
Key classification by tone profile correlation.
"""

import numpy as np

from ..exceptions import ConfigurationError
from ..keys import Key
from ..parameters import SEMITONES


class KeyClassifier:
    """
    Picks the key whose rotated tone profile best matches a chroma vector.

    Every candidate is scored with the same cosine similarity
    ``dot(v, p) / (|v| |p|)``, where ``p`` is the major or minor profile
    rotated so its tonic sits on the candidate pitch class.
    """

    def __init__(self, major_profile: np.ndarray, minor_profile: np.ndarray):
        self.major = self._check_profile(major_profile, "major")
        self.minor = self._check_profile(minor_profile, "minor")

        # Row k = pitch_class * 2 + mode, matching Key values
        rows = []
        for pitch_class in range(SEMITONES):
            rows.append(np.roll(self.major, pitch_class))
            rows.append(np.roll(self.minor, pitch_class))
        self._profiles = np.array(rows)
        self._norms = np.array([np.linalg.norm(self.major), np.linalg.norm(self.minor)] * SEMITONES)

    @staticmethod
    def _check_profile(profile, name: str) -> np.ndarray:
        profile = np.asarray(profile, dtype=np.float64)
        if profile.shape != (SEMITONES,):
            raise ConfigurationError(
                f"{name} profile must have {SEMITONES} values, got shape {profile.shape}"
            )
        if np.any(profile < 0) or not np.any(profile):
            raise ConfigurationError(f"{name} profile must be non-negative and non-zero")
        return profile

    @staticmethod
    def _check_vector(chroma_vector) -> np.ndarray:
        chroma_vector = np.asarray(chroma_vector, dtype=np.float64)
        if chroma_vector.shape != (SEMITONES,):
            raise ValueError(
                f"Chroma vector must have {SEMITONES} values, got shape {chroma_vector.shape}"
            )
        return chroma_vector

    def scores(self, chroma_vector) -> np.ndarray:
        """
        Similarity to all 24 keys, indexed by Key value.

        An all-zero vector has no defined similarity; all scores are 0.
        """
        v = self._check_vector(chroma_vector)
        v_norm = np.linalg.norm(v)
        if v_norm == 0:
            return np.zeros(2 * SEMITONES, dtype=np.float64)

        scores = np.empty(2 * SEMITONES, dtype=np.float64)
        for row, profile in enumerate(self._profiles):
            scores[row] = np.dot(v, profile) / (v_norm * self._norms[row])
        return scores

    def classify(self, chroma_vector) -> Key:
        """
        Returns:
            Best matching Key, or Key.SILENCE for an all-zero vector.
            Exact ties go to the lowest Key value: lower pitch class first,
            then major before minor.
        """
        v = self._check_vector(chroma_vector)
        if not np.any(v):
            return Key.SILENCE
        # argmax returns the first maximum
        return Key(int(np.argmax(self.scores(v))))
