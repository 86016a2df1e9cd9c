"""Pytest fixtures and configuration."""
import pytest

from neuronorms.engine import build_engine, create_engine
from neuronorms.norms.bands import AgeBand
from neuronorms.norms.child import (
    AnchorOverride,
    ChildAgeBandGroup,
    ChildRegressionSpec,
)


# TMT-B child regression, written out independently of the YAML definition
def tmt_b_mean_eq(age):
    return 64.07469 - 0.9881013 * age + 0.0235581 * age ** 2


def tmt_b_sd_eq(age):
    return 29.8444 - 0.8080508 * age + 0.0148732 * age ** 2


TMT_B_ANCHORS = {8: (71.85, 34.60), 12: (35.70, 12.50)}

TMT_B_ADULT = [
    (16, 19, 53.92, 20.12),
    (20, 24, 53.77, 19.19),
    (25, 29, 54.72, 18.87),
    (30, 34, 56.84, 19.29),
    (35, 39, 60.15, 20.46),
    (40, 44, 64.63, 22.37),
    (45, 49, 70.29, 25.02),
    (50, 54, 77.13, 28.42),
    (55, 59, 85.15, 32.55),
    (60, 64, 94.34, 37.44),
    (65, 69, 104.71, 43.07),
    (70, 74, 116.26, 49.44),
    (75, 79, 128.99, 56.55),
    (80, 84, 142.90, 64.41),
    (85, 89, 157.98, 73.01),
]

CHILD_GROUPS = [(4, 7), (8, 10), (11, 13), (14, 15)]


def expected_child_band(age_min, age_max):
    """Average of regression/anchor values over an inclusive age range."""
    means, sds = [], []
    for age in range(age_min, age_max + 1):
        if age in TMT_B_ANCHORS:
            m, sd = TMT_B_ANCHORS[age]
        else:
            m, sd = tmt_b_mean_eq(age), tmt_b_sd_eq(age)
        means.append(m)
        sds.append(sd)
    return sum(means) / len(means), sum(sds) / len(sds)


@pytest.fixture
def tmt_b_regression():
    return ChildRegressionSpec(
        mean_coefficients=[64.07469, -0.9881013, 0.0235581],
        sd_coefficients=[29.8444, -0.8080508, 0.0148732],
    )


@pytest.fixture
def tmt_b_anchors():
    return [AnchorOverride(age, m, sd) for age, (m, sd) in TMT_B_ANCHORS.items()]


@pytest.fixture
def child_groups():
    return [ChildAgeBandGroup(lo, hi) for lo, hi in CHILD_GROUPS]


@pytest.fixture
def tmt_b_adult_bands():
    return [AgeBand(*row) for row in TMT_B_ADULT]


@pytest.fixture
def tmt_b_built(tmt_b_adult_bands, tmt_b_regression, tmt_b_anchors, child_groups):
    """TMT-B engine assembled in code rather than from YAML."""
    return build_engine(
        adult_bands=tmt_b_adult_bands,
        child_regression_spec=tmt_b_regression,
        anchor_overrides=tmt_b_anchors,
        child_band_groups=child_groups,
        reversed=True,
        domain=(4, 89),
        name="TMT-B",
    )


@pytest.fixture(scope="session")
def tmt_b_engine():
    return create_engine("tmt_b")


@pytest.fixture(scope="session")
def tmt_a_engine():
    return create_engine("tmt_a")
