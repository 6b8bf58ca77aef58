"""
Pydantic models for key estimation results.
"""

from typing import Optional

from pydantic import BaseModel, Field

from ..keys import Key


class KeyCandidate(BaseModel):
    """A candidate key with its profile similarity."""
    key: Key
    name: str = Field(..., description="Display name (e.g., 'A minor', 'C major')")
    score: float = Field(..., description="Cosine similarity to the rotated tone profile")


class KeyEstimate(BaseModel):
    """Key estimate for a (possibly still running) session."""
    key: Key = Field(..., description="Best matching key or SILENCE")
    name: str = Field(..., description="Display name of the key")
    camelot: Optional[str] = Field(default=None, description="Camelot wheel code")
    score: float = Field(default=0.0, description="Similarity of the best key")
    hops: int = Field(default=0, ge=0, description="Chroma hops the estimate is based on")
    final: bool = Field(default=False, description="True once the session was finalized")

    alternatives: list[KeyCandidate] = Field(
        default_factory=list,
        description="Next best keys in descending score order"
    )
    chroma: list[float] = Field(
        default_factory=list,
        description="Collapsed 12-bin chroma vector, index 0 = C"
    )

    @property
    def is_silence(self) -> bool:
        return self.key is Key.SILENCE
