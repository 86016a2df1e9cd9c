"""
Neuro Norms - Engine Construction
Builds validated scoring engines from adult norms and child regression norms.
"""

from pathlib import Path
from typing import Iterable, Optional, Tuple
import logging

from neuronorms.norms.bands import AgeBand
from neuronorms.norms.child import (
    CHILD_AGE_RANGE,
    AnchorOverride,
    ChildAgeBandGroup,
    ChildNormBuilder,
    ChildRegressionSpec,
)
from neuronorms.norms.loader import NormDefinition, load_test_norms
from neuronorms.norms.merger import NormTableMerger
from neuronorms.scoring.standardizer import ScoreResult, ScoreStandardizer

logger = logging.getLogger(__name__)


def build_engine(
    adult_bands: Iterable[AgeBand],
    child_regression_spec: ChildRegressionSpec,
    anchor_overrides: Iterable[AnchorOverride],
    child_band_groups: Iterable[ChildAgeBandGroup],
    reversed: bool,
    child_age_range: Tuple[int, int] = CHILD_AGE_RANGE,
    domain: Optional[Tuple[int, int]] = None,
    name: Optional[str] = None,
) -> ScoreStandardizer:
    """
    Build a scoring engine for one test.

    Child bands are imputed first, then merged with the adult bands and the
    combined table is validated. Any configuration problem surfaces here as a
    ConfigError; an engine that is returned will only fail per query.

    Args:
        adult_bands: Fixed adult norm bands
        child_regression_spec: Mean/SD regressions for the child range
        anchor_overrides: Empirical child norms that replace the regression
        child_band_groups: Age ranges the child years are averaged into
        reversed: True when larger raw scores mean worse performance
        child_age_range: Inclusive range of child ages to impute
        domain: Inclusive age range the merged table must cover

    Returns:
        ScoreStandardizer ready to serve queries
    """
    builder = ChildNormBuilder(child_regression_spec, anchor_overrides, child_age_range)
    child_bands = builder.build(child_band_groups)

    table = NormTableMerger(domain).merge(adult_bands, child_bands)
    engine = ScoreStandardizer(table, reversed=reversed, name=name)

    logger.info(f"Built engine {engine!r}")
    return engine


def engine_from_definition(norms: NormDefinition) -> ScoreStandardizer:
    return build_engine(
        adult_bands=norms.adult_bands,
        child_regression_spec=norms.regression,
        anchor_overrides=norms.anchors,
        child_band_groups=norms.band_groups,
        reversed=norms.reversed,
        child_age_range=norms.child_age_range,
        domain=norms.domain,
        name=norms.name,
    )


def create_engine(test_name: str, config_path: Optional[Path] = None) -> ScoreStandardizer:
    """Factory function: engine for a test defined in the config directory."""
    return engine_from_definition(load_test_norms(test_name, config_path))


def score_test(
    test_name: str,
    age: float,
    raw_score: float,
    config_path: Optional[Path] = None,
) -> ScoreResult:
    """Score a single raw result for a single subject."""
    return create_engine(test_name, config_path).standardize(age, raw_score)
