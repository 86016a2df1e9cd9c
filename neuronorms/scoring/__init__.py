"""Score standardization modules."""

from .standardizer import ScoreResult, ScoreStandardizer

__all__ = ["ScoreResult", "ScoreStandardizer"]
