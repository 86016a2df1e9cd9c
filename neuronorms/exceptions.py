"""Exceptions raised while building norm tables and scoring results."""

from typing import Optional


class NormsError(Exception):
    """Base exception for normative scoring errors."""


class ConfigError(NormsError, ValueError):
    """Raised when a normative table or test definition is invalid.

    Only ever raised while an engine is being built; an engine that exists
    has a validated table.
    """


class DomainError(NormsError, ValueError):
    """Raised when a query cannot be mapped to exactly one age band."""

    def __init__(
        self,
        message: str,
        age: Optional[float] = None,
        age_min: Optional[int] = None,
        age_max: Optional[int] = None,
    ):
        self.age = age
        self.age_min = age_min
        self.age_max = age_max
        super().__init__(message)
