"""
Neuro Norms - Test Norm Definitions
Loads per-test normative definitions from YAML files in the config directory.
"""

import os
import yaml
from pathlib import Path
from dataclasses import dataclass
from typing import List, Optional, Tuple
import logging

from neuronorms.exceptions import ConfigError
from neuronorms.norms.bands import AgeBand, whole_age
from neuronorms.norms.child import (
    CHILD_AGE_RANGE,
    AnchorOverride,
    ChildAgeBandGroup,
    ChildRegressionSpec,
)

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = 'NEURONORMS_CONFIG_DIR'


@dataclass(frozen=True)
class NormDefinition:
    """Everything needed to build an engine for one test."""
    key: str
    name: str
    reversed: bool
    domain: Optional[Tuple[int, int]]
    adult_bands: Tuple[AgeBand, ...]
    regression: ChildRegressionSpec
    anchors: Tuple[AnchorOverride, ...]
    band_groups: Tuple[ChildAgeBandGroup, ...]
    child_age_range: Tuple[int, int] = CHILD_AGE_RANGE


def resolve_config_path(config_path: Optional[Path] = None) -> Path:
    """Explicit path, then $NEURONORMS_CONFIG_DIR, then the packaged config."""
    if config_path is not None:
        return Path(config_path)

    env_path = os.getenv(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path)

    return Path(__file__).parent.parent / "config"


def available_tests(config_path: Optional[Path] = None) -> List[str]:
    """Names of the test definitions found in the config directory."""
    config_path = resolve_config_path(config_path)
    if not config_path.is_dir():
        raise ConfigError(f"Norm config directory not found: {config_path}")
    return sorted(p.stem for p in config_path.glob("*.yaml"))


def _rows(config: dict, key: str, width: int, test_key: str) -> List[list]:
    rows = config.get(key) or []
    for row in rows:
        if not isinstance(row, (list, tuple)) or len(row) != width:
            raise ConfigError(f"{test_key}: each entry of '{key}' needs {width} values, got {row!r}")
    return rows


def _age_pair(value, what: str, test_key: str) -> Tuple[int, int]:
    if not isinstance(value, (list, tuple)) or len(value) != 2:
        raise ConfigError(f"{test_key}: '{what}' must be [min_age, max_age], got {value!r}")
    return (whole_age(value[0], f"{what} min"), whole_age(value[1], f"{what} max"))


def parse_test_norms(config: dict, key: str = 'custom') -> NormDefinition:
    """Build a NormDefinition from an already-parsed YAML mapping."""
    if not isinstance(config, dict):
        raise ConfigError(f"{key}: norm definition must be a mapping")

    child = config.get('child')
    if not isinstance(child, dict):
        raise ConfigError(f"{key}: missing 'child' section")

    if 'reversed' not in config:
        raise ConfigError(f"{key}: 'reversed' must be set explicitly")

    try:
        regression = ChildRegressionSpec(
            mean_coefficients=child['mean_coefficients'],
            sd_coefficients=child['sd_coefficients'],
        )
    except KeyError as e:
        raise ConfigError(f"{key}: missing child regression key {e}") from e

    domain = config.get('domain')
    if domain is not None:
        domain = _age_pair(domain, 'domain', key)

    try:
        return NormDefinition(
            key=key,
            name=config.get('name', key),
            reversed=bool(config['reversed']),
            domain=domain,
            adult_bands=tuple(
                AgeBand(lo, hi, float(m), float(sd))
                for lo, hi, m, sd in _rows(config, 'adult_bands', 4, key)
            ),
            regression=regression,
            anchors=tuple(
                AnchorOverride(age, float(m), float(sd))
                for age, m, sd in _rows(child, 'anchors', 3, key)
            ),
            band_groups=tuple(
                ChildAgeBandGroup(lo, hi)
                for lo, hi in _rows(child, 'band_groups', 2, key)
            ),
            child_age_range=_age_pair(child.get('age_range', CHILD_AGE_RANGE), 'age_range', key),
        )
    except ConfigError:
        raise
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{key}: malformed norm definition: {e}") from e


def load_test_norms(test_name: str, config_path: Optional[Path] = None) -> NormDefinition:
    """
    Load the norm definition for a test.

    Args:
        test_name: File stem of the definition, e.g. 'tmt_b'
        config_path: Directory holding the YAML files

    Raises:
        ConfigError: if the file is missing or malformed
    """
    config_path = resolve_config_path(config_path)
    norm_file = config_path / f"{test_name}.yaml"

    if not norm_file.is_file():
        known = ', '.join(available_tests(config_path)) if config_path.is_dir() else 'none'
        raise ConfigError(f"Unknown test '{test_name}' (available: {known})")

    with open(norm_file, 'r') as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"Could not parse {norm_file}: {e}") from e

    logger.info(f"Loaded norm definition for {test_name} from {norm_file}")
    return parse_test_norms(config, key=test_name)
