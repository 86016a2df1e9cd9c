"""Normative table modules: age bands, child imputation and merging."""

from .bands import AgeBand, NormBandTable
from .child import (
    AnchorOverride,
    ChildAgeBandGroup,
    ChildAgeYearRow,
    ChildNormBuilder,
    ChildRegressionSpec,
)
from .merger import NormTableMerger, merge_norm_tables
from .loader import NormDefinition, available_tests, load_test_norms

__all__ = [
    "AgeBand",
    "NormBandTable",
    "AnchorOverride",
    "ChildAgeBandGroup",
    "ChildAgeYearRow",
    "ChildNormBuilder",
    "ChildRegressionSpec",
    "NormTableMerger",
    "merge_norm_tables",
    "NormDefinition",
    "available_tests",
    "load_test_norms",
]
