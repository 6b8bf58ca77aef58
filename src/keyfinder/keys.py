"""
Enumerated key classifications and their display strings.
"""

from enum import IntEnum
from typing import Optional


# Pitch class names, index 0 = C (same order as chroma vectors)
PITCH_CLASSES = ['C', 'D♭', 'D', 'E♭', 'E', 'F', 'G♭', 'G', 'A♭', 'A', 'B♭', 'B']

MODES = ('major', 'minor')


class Key(IntEnum):
    """
    The 24 tonal centers plus a "no determination" sentinel.

    Values are ``pitch_class * 2 + mode`` (major = 0, minor = 1), so ordering
    by value is ordering by pitch class first and major before minor.
    """
    C_MAJOR = 0
    C_MINOR = 1
    D_FLAT_MAJOR = 2
    D_FLAT_MINOR = 3
    D_MAJOR = 4
    D_MINOR = 5
    E_FLAT_MAJOR = 6
    E_FLAT_MINOR = 7
    E_MAJOR = 8
    E_MINOR = 9
    F_MAJOR = 10
    F_MINOR = 11
    G_FLAT_MAJOR = 12
    G_FLAT_MINOR = 13
    G_MAJOR = 14
    G_MINOR = 15
    A_FLAT_MAJOR = 16
    A_FLAT_MINOR = 17
    A_MAJOR = 18
    A_MINOR = 19
    B_FLAT_MAJOR = 20
    B_FLAT_MINOR = 21
    B_MAJOR = 22
    B_MINOR = 23
    SILENCE = 24

    @classmethod
    def from_pitch_class(cls, pitch_class: int, minor: bool = False) -> "Key":
        return cls((pitch_class % 12) * 2 + int(minor))

    @property
    def pitch_class(self) -> Optional[int]:
        if self is Key.SILENCE:
            return None
        return self.value // 2

    @property
    def mode(self) -> Optional[str]:
        if self is Key.SILENCE:
            return None
        return MODES[self.value % 2]

    @property
    def is_minor(self) -> bool:
        return self.mode == 'minor'

    def relative(self) -> "Key":
        """Relative major/minor (A minor <-> C major)."""
        if self is Key.SILENCE:
            return self
        if self.is_minor:
            return Key.from_pitch_class(self.pitch_class + 3)
        return Key.from_pitch_class(self.pitch_class + 9, minor=True)


SILENCE_NAME = "Silence"

# Camelot wheel codes used by DJ software, keyed by (pitch class, minor)
CAMELOT = {
    (0, False): '8B', (0, True): '5A',
    (1, False): '3B', (1, True): '12A',
    (2, False): '10B', (2, True): '7A',
    (3, False): '5B', (3, True): '2A',
    (4, False): '12B', (4, True): '9A',
    (5, False): '7B', (5, True): '4A',
    (6, False): '2B', (6, True): '11A',
    (7, False): '9B', (7, True): '6A',
    (8, False): '4B', (8, True): '1A',
    (9, False): '11B', (9, True): '8A',
    (10, False): '6B', (10, True): '3A',
    (11, False): '1B', (11, True): '10A',
}


def key_name(key: Key) -> str:
    """Display string for a key, e.g. ``"B♭ minor"``."""
    key = Key(key)
    if key is Key.SILENCE:
        return SILENCE_NAME
    return f"{PITCH_CLASSES[key.pitch_class]} {key.mode}"


def camelot_code(key: Key) -> Optional[str]:
    """Camelot wheel code (``"8B"`` for C major), ``None`` for silence."""
    key = Key(key)
    if key is Key.SILENCE:
        return None
    return CAMELOT[(key.pitch_class, key.is_minor)]
