"""
Running sequence of per-hop pitch-class vectors.
"""

from typing import List

import numpy as np

from ..parameters import SEMITONES


class Chromagram:
    """
    Per-hop 12-bin chroma vectors in temporal order.

    Hops are only ever appended. Blocks are kept as appended and stacked on
    demand so a long session does not copy the whole history per hop.
    """

    def __init__(self, hops: np.ndarray = None):
        self._blocks: List[np.ndarray] = []
        self._hops = 0
        if hops is not None:
            self.append(hops)

    @property
    def hops(self) -> int:
        return self._hops

    @property
    def bands(self) -> int:
        return SEMITONES

    def __len__(self) -> int:
        return self._hops

    def append(self, other):
        """Append another Chromagram or a (hops, 12) array."""
        if isinstance(other, Chromagram):
            block = other.as_array()
        else:
            block = np.asarray(other, dtype=np.float64).reshape(-1, SEMITONES)
        if len(block) == 0:
            return
        self._blocks.append(block.copy())
        self._hops += len(block)

    def as_array(self) -> np.ndarray:
        """(hops, 12) copy of all hops."""
        if not self._blocks:
            return np.zeros((0, SEMITONES), dtype=np.float64)
        if len(self._blocks) > 1:
            self._blocks = [np.concatenate(self._blocks)]
        return self._blocks[0].copy()

    def collapse_to_one_hop(self) -> np.ndarray:
        """Element-wise mean over all hops (zeros when empty)."""
        if self._hops == 0:
            return np.zeros(SEMITONES, dtype=np.float64)
        return self.as_array().mean(axis=0)
