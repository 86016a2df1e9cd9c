"""
Neuro Norms - Normative score standardization for neuropsychological tests.
"""

from neuronorms.exceptions import NormsError, ConfigError, DomainError
from neuronorms.engine import build_engine, create_engine, score_test
from neuronorms.norms.loader import available_tests, load_test_norms
from neuronorms.scoring.standardizer import ScoreStandardizer, ScoreResult

__all__ = [
    "NormsError",
    "ConfigError",
    "DomainError",
    "build_engine",
    "create_engine",
    "score_test",
    "available_tests",
    "load_test_norms",
    "ScoreStandardizer",
    "ScoreResult",
]
