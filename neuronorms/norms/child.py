"""
Neuro Norms - Child Norm Imputation
Derives pediatric age bands from published regression equations, replacing
the regression estimate with empirical anchor norms where those exist.
"""

import numpy as np
from numpy.polynomial import polynomial as P
from dataclasses import dataclass
from typing import Dict, Iterable, List, Sequence, Tuple
import logging

from neuronorms.exceptions import ConfigError
from neuronorms.norms.bands import AgeBand, whole_age

logger = logging.getLogger(__name__)

# Default pediatric range covered by the imputed norms
CHILD_AGE_RANGE = (4, 15)


@dataclass(frozen=True)
class ChildRegressionSpec:
    """
    Polynomial regressions of normative mean and SD on age.

    Coefficients are in increasing order of degree, so
    `[c0, c1, c2]` evaluates as `c0 + c1*age + c2*age**2`.
    """
    mean_coefficients: Tuple[float, ...]
    sd_coefficients: Tuple[float, ...]

    def __post_init__(self):
        # stored as tuples of floats
        try:
            object.__setattr__(self, 'mean_coefficients', tuple(float(c) for c in self.mean_coefficients))
            object.__setattr__(self, 'sd_coefficients', tuple(float(c) for c in self.sd_coefficients))
        except (TypeError, ValueError) as e:
            raise ConfigError(f"Regression coefficients must be lists of numbers: {e}") from e
        if not self.mean_coefficients or not self.sd_coefficients:
            raise ConfigError("Regression coefficients must not be empty")

    def predict_mean(self, age: float) -> float:
        return float(P.polyval(age, self.mean_coefficients))

    def predict_sd(self, age: float) -> float:
        return float(P.polyval(age, self.sd_coefficients))


@dataclass(frozen=True)
class AnchorOverride:
    """Empirical norm that supersedes the regression at a single age."""
    age: int
    predicted_mean: float
    predicted_sd: float

    def __post_init__(self):
        object.__setattr__(self, 'age', whole_age(self.age, "anchor age"))


@dataclass(frozen=True)
class ChildAgeYearRow:
    age: int
    predicted_mean: float
    predicted_sd: float


@dataclass(frozen=True)
class ChildAgeBandGroup:
    """Inclusive age range whose year rows are averaged into one band."""
    age_min: int
    age_max: int

    def __post_init__(self):
        object.__setattr__(self, 'age_min', whole_age(self.age_min, "band group age_min"))
        object.__setattr__(self, 'age_max', whole_age(self.age_max, "band group age_max"))


def build_child_rows(
    regression: ChildRegressionSpec,
    anchors: Iterable[AnchorOverride] = (),
    age_range: Tuple[int, int] = CHILD_AGE_RANGE,
) -> List[ChildAgeYearRow]:
    """
    Build one norm row per integer age in `age_range` (inclusive).

    The regression gives the fallback estimate; an anchor at the same age
    replaces it outright. Anchors outside the range are skipped.
    """
    lo, hi = age_range
    if lo > hi:
        raise ConfigError(f"Invalid child age range {lo}-{hi}")

    by_age: Dict[int, AnchorOverride] = {}
    for anchor in anchors:
        if anchor.age in by_age:
            raise ConfigError(f"Duplicate anchor norm for age {anchor.age}")
        if not lo <= anchor.age <= hi:
            logger.debug(f"Ignoring anchor at age {anchor.age}, outside {lo}-{hi}")
            continue
        by_age[anchor.age] = anchor

    rows = []
    for age in range(lo, hi + 1):
        anchor = by_age.get(age)
        if anchor is not None:
            rows.append(ChildAgeYearRow(age, anchor.predicted_mean, anchor.predicted_sd))
        else:
            rows.append(ChildAgeYearRow(
                age,
                regression.predict_mean(age),
                regression.predict_sd(age),
            ))

    return rows


def aggregate_child_bands(
    rows: Sequence[ChildAgeYearRow],
    groups: Iterable[ChildAgeBandGroup],
) -> List[AgeBand]:
    """
    Collapse per-year rows into age bands.

    Each band's mean and SD are the arithmetic means of the rows whose age
    falls inside the group.
    """
    bands = []
    for group in groups:
        members = [r for r in rows if group.age_min <= r.age <= group.age_max]
        if not members:
            raise ConfigError(
                f"Child band {group.age_min}-{group.age_max} covers no imputed ages"
            )
        if len(members) != group.age_max - group.age_min + 1:
            raise ConfigError(
                f"Child band {group.age_min}-{group.age_max} extends beyond the imputed ages "
                f"({members[0].age}-{members[-1].age})"
            )

        bands.append(AgeBand(
            age_min=group.age_min,
            age_max=group.age_max,
            predicted_mean=float(np.mean([r.predicted_mean for r in members])),
            predicted_sd=float(np.mean([r.predicted_sd for r in members])),
        ))

    return bands


class ChildNormBuilder:
    """Imputes child norm bands for one test."""

    def __init__(
        self,
        regression: ChildRegressionSpec,
        anchors: Iterable[AnchorOverride] = (),
        age_range: Tuple[int, int] = CHILD_AGE_RANGE,
    ):
        self.regression = regression
        self.anchors = tuple(anchors)
        self.age_range = tuple(age_range)

    def year_rows(self) -> List[ChildAgeYearRow]:
        return build_child_rows(self.regression, self.anchors, self.age_range)

    def build(self, groups: Iterable[ChildAgeBandGroup]) -> List[AgeBand]:
        """Per-year rows aggregated into the given band groups."""
        bands = aggregate_child_bands(self.year_rows(), groups)
        logger.debug(f"Imputed {len(bands)} child bands for ages {self.age_range[0]}-{self.age_range[1]}")
        return bands
