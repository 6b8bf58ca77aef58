"""
Data models for analysis results using Pydantic.
"""

from .results import KeyCandidate, KeyEstimate

__all__ = ["KeyCandidate", "KeyEstimate"]
