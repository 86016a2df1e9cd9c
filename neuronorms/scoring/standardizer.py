"""
Neuro Norms - Score Standardization
Converts a raw test score into z-score, t-score and percentile rank using
age-appropriate normative mean and SD.
"""

import math
import numbers
from dataclasses import dataclass, asdict
from typing import Dict, Optional
import logging

from scipy.stats import norm

from neuronorms.exceptions import DomainError
from neuronorms.norms.bands import AgeBand, NormBandTable

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoreResult:
    age: float
    raw_score: float
    predicted_mean: float
    predicted_sd: float
    z_score: float
    t_score: float
    percentile: float

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def _is_number(value) -> bool:
    if not isinstance(value, numbers.Real) or isinstance(value, bool):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints too large for a float
        return False


class ScoreStandardizer:
    """
    Scores raw results for one test against a validated norm table.

    Args:
        table: Merged norm table (see `merge_norm_tables`)
        reversed: True when a larger raw score means worse performance,
            e.g. completion time in seconds
        name: Optional test name used in log messages
    """

    def __init__(self, table: NormBandTable, reversed: bool = False, name: Optional[str] = None):
        self.table = table
        self.reversed = bool(reversed)
        self.name = name or 'unnamed test'

    @property
    def norm_table(self) -> NormBandTable:
        return self.table

    @property
    def age_range(self):
        return self.table.domain

    def find_band(self, age: float) -> AgeBand:
        """
        Return the single band for `age`.

        Fractional ages are floored to completed years before lookup, after
        checking the unrounded age lies within the table's domain.
        """
        lo, hi = self.age_range
        if not _is_number(age):
            raise DomainError(f"Age must be a finite number, got {age!r}", age=None, age_min=lo, age_max=hi)

        if not lo <= age <= hi:
            raise DomainError(
                f"Age must be between {lo} and {hi} (inclusive), got {age}",
                age=age, age_min=lo, age_max=hi,
            )

        matches = self.table.find(math.floor(age))
        if len(matches) != 1:
            raise DomainError(
                f"Age {age} matched {len(matches)} norm bands; expected exactly one "
                f"in {lo}-{hi}",
                age=age, age_min=lo, age_max=hi,
            )

        return matches[0]

    def z_score(self, raw_score: float, predicted_mean: float, predicted_sd: float) -> float:
        if self.reversed:
            return (predicted_mean - raw_score) / predicted_sd
        return (raw_score - predicted_mean) / predicted_sd

    def standardize(self, age: float, raw_score: float) -> ScoreResult:
        """
        Standardize a raw score for a subject of the given age.

        Returns:
            ScoreResult with the normative mean/SD used and z, t and percentile

        Raises:
            DomainError: if the age is outside the norms or either input is
                not a number
        """
        band = self.find_band(age)

        if not _is_number(raw_score):
            lo, hi = self.age_range
            raise DomainError(f"Raw score must be a finite number, got {raw_score!r}", age=age, age_min=lo, age_max=hi)

        z = self.z_score(raw_score, band.predicted_mean, band.predicted_sd)
        t = 50 + 10 * z
        pct = float(norm.cdf(z)) * 100

        logger.debug(
            f"{self.name}: age {age} -> band {band.label} "
            f"(mean={band.predicted_mean:.2f}, sd={band.predicted_sd:.2f}), z={z:.3f}"
        )

        return ScoreResult(
            age=age,
            raw_score=raw_score,
            predicted_mean=band.predicted_mean,
            predicted_sd=band.predicted_sd,
            z_score=z,
            t_score=t,
            percentile=pct,
        )

    def __repr__(self) -> str:
        direction = 'reversed' if self.reversed else 'standard'
        return f"ScoreStandardizer({self.name!r}, {direction}, {self.table!r})"
