"""
Neuro Norms - Norm Table Merging
Combines adult and child age bands into a single validated lookup table.
"""

from typing import Iterable, List, Optional, Tuple
import logging

from neuronorms.exceptions import ConfigError
from neuronorms.norms.bands import AgeBand, NormBandTable

logger = logging.getLogger(__name__)


def _coverage_problems(bands: List[AgeBand], domain: Tuple[int, int]) -> List[str]:
    """Describe overlaps, gaps and out-of-domain bands; empty when valid."""
    lo, hi = domain
    problems = []

    for band in bands:
        if band.age_min < lo or band.age_max > hi:
            problems.append(f"band {band.label} lies outside domain {lo}-{hi}")

    # bands are sorted by age_min, so neighbours are enough
    expected = lo
    previous: Optional[AgeBand] = None
    for band in bands:
        if previous is not None and band.age_min <= previous.age_max:
            problems.append(f"bands {previous.label} and {band.label} overlap")
        elif band.age_min > expected:
            problems.append(f"ages {expected}-{band.age_min - 1} are not covered")
        expected = max(expected, band.age_max + 1)
        if previous is None or band.age_max > previous.age_max:
            previous = band

    if expected <= hi:
        problems.append(f"ages {expected}-{hi} are not covered")

    return problems


def merge_norm_tables(
    adult_bands: Iterable[AgeBand],
    child_bands: Iterable[AgeBand],
    domain: Optional[Tuple[int, int]] = None,
) -> NormBandTable:
    """
    Concatenate adult and child bands into one table.

    Args:
        adult_bands: Fixed adult norms
        child_bands: Imputed child norms
        domain: Inclusive (min, max) age range the table must cover exactly
            once. Defaults to the span of the supplied bands.

    Returns:
        NormBandTable covering every integer age in the domain once

    Raises:
        ConfigError: if bands overlap, leave a gap, or fall outside the domain
    """
    table = NormBandTable(list(adult_bands) + list(child_bands))
    domain = tuple(domain) if domain is not None else table.domain

    problems = _coverage_problems(list(table.bands), domain)
    if problems:
        message = "Invalid norm table: " + "; ".join(problems)
        logger.error(message)
        raise ConfigError(message)

    logger.info(f"Validated norm table: {len(table)} bands covering ages {domain[0]}-{domain[1]}")
    return table


class NormTableMerger:
    """Merges adult and child norms for a fixed age domain."""

    def __init__(self, domain: Optional[Tuple[int, int]] = None):
        self.domain = domain

    def merge(self, adult_bands: Iterable[AgeBand], child_bands: Iterable[AgeBand]) -> NormBandTable:
        return merge_norm_tables(adult_bands, child_bands, self.domain)
