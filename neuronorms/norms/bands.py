"""
Neuro Norms - Age Band Tables
Immutable age-banded normative tables (predicted mean and SD per band).
"""

import math
import numbers
import pandas as pd
from dataclasses import dataclass
from typing import Iterable, Iterator, List, Tuple
import logging

from neuronorms.exceptions import ConfigError

logger = logging.getLogger(__name__)

BAND_COLUMNS = ['age_min', 'age_max', 'predicted_mean', 'predicted_sd']


def whole_age(value, what: str = "age") -> int:
    """Return `value` as an int, rejecting anything that is not a whole number of years."""
    if isinstance(value, bool):
        raise ConfigError(f"{what} must be a whole number of years, got {value!r}")
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real) and math.isfinite(value) and float(value).is_integer():
        return int(value)
    raise ConfigError(f"{what} must be a whole number of years, got {value!r}")


@dataclass(frozen=True)
class AgeBand:
    """Inclusive integer age range with its normative mean and SD."""
    age_min: int
    age_max: int
    predicted_mean: float
    predicted_sd: float

    def __post_init__(self):
        object.__setattr__(self, 'age_min', whole_age(self.age_min, "age_min"))
        object.__setattr__(self, 'age_max', whole_age(self.age_max, "age_max"))
        if self.age_min > self.age_max:
            raise ConfigError(
                f"Age band {self.age_min}-{self.age_max} has age_min > age_max"
            )
        if not self.predicted_sd > 0:
            raise ConfigError(
                f"Age band {self.age_min}-{self.age_max} has non-positive SD "
                f"({self.predicted_sd})"
            )

    def contains(self, age: float) -> bool:
        return self.age_min <= age <= self.age_max

    @property
    def label(self) -> str:
        return f"{self.age_min}-{self.age_max}"


class NormBandTable:
    """
    Ordered, read-only collection of age bands.

    The table does not check coverage itself; tables meant for scoring are
    produced by `merge_norm_tables`, which guarantees every integer age in
    `domain` falls in exactly one band.
    """

    def __init__(self, bands: Iterable[AgeBand]):
        self._bands: Tuple[AgeBand, ...] = tuple(
            sorted(bands, key=lambda b: (b.age_min, b.age_max))
        )
        if not self._bands:
            raise ConfigError("A norm table needs at least one age band")

    @property
    def bands(self) -> Tuple[AgeBand, ...]:
        return self._bands

    @property
    def domain(self) -> Tuple[int, int]:
        """Lowest and highest age covered by any band."""
        return (
            min(b.age_min for b in self._bands),
            max(b.age_max for b in self._bands),
        )

    def find(self, age: float) -> List[AgeBand]:
        """Return every band containing `age` (normally exactly one)."""
        return [band for band in self._bands if band.contains(age)]

    def to_frame(self) -> pd.DataFrame:
        """Tabular view of the bands, ordered by age."""
        return pd.DataFrame(
            [
                {
                    'age_min': b.age_min,
                    'age_max': b.age_max,
                    'predicted_mean': b.predicted_mean,
                    'predicted_sd': b.predicted_sd,
                }
                for b in self._bands
            ],
            columns=BAND_COLUMNS,
        )

    def __iter__(self) -> Iterator[AgeBand]:
        return iter(self._bands)

    def __len__(self) -> int:
        return len(self._bands)

    def __repr__(self) -> str:
        lo, hi = self.domain
        return f"NormBandTable({len(self._bands)} bands, ages {lo}-{hi})"
