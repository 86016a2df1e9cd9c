"""Tests for YAML test norm definitions."""

import pytest
import yaml

from neuronorms.exceptions import ConfigError
from neuronorms.norms.loader import (
    CONFIG_ENV_VAR,
    available_tests,
    load_test_norms,
    parse_test_norms,
    resolve_config_path,
)

MINIMAL = {
    'name': 'Example Test',
    'reversed': False,
    'domain': [4, 19],
    'adult_bands': [[16, 19, 30.0, 5.0]],
    'child': {
        'age_range': [4, 15],
        'mean_coefficients': [10.0, 1.0],
        'sd_coefficients': [3.0],
        'anchors': [[10, 20.0, 4.0]],
        'band_groups': [[4, 9], [10, 15]],
    },
}


def write_norms(directory, name, config):
    path = directory / f"{name}.yaml"
    path.write_text(yaml.safe_dump(config))
    return path


class TestPackagedDefinitions:

    def test_available_tests(self):
        assert available_tests() == ['tmt_a', 'tmt_b']

    def test_tmt_b(self):
        norms = load_test_norms('tmt_b')

        assert norms.key == 'tmt_b'
        assert norms.name == 'Trail Making Test, Part B'
        assert norms.reversed is True
        assert norms.domain == (4, 89)
        assert len(norms.adult_bands) == 15
        assert norms.adult_bands[0].predicted_mean == 53.92
        assert norms.adult_bands[-1].age_max == 89
        assert [(a.age, a.predicted_mean, a.predicted_sd) for a in norms.anchors] == [
            (8, 71.85, 34.60),
            (12, 35.70, 12.50),
        ]
        assert norms.regression.mean_coefficients == (64.07469, -0.9881013, 0.0235581)
        assert norms.child_age_range == (4, 15)
        assert [(g.age_min, g.age_max) for g in norms.band_groups] == [(4, 7), (8, 10), (11, 13), (14, 15)]

    def test_tmt_a(self):
        norms = load_test_norms('tmt_a')

        assert norms.reversed is True
        assert norms.adult_bands[0].predicted_mean == 23.97
        assert norms.anchors[1].predicted_sd == 5.70

    def test_unknown_test(self):
        with pytest.raises(ConfigError, match="Unknown test 'stroop'.*tmt_a, tmt_b"):
            load_test_norms('stroop')


class TestCustomDefinitions:

    def test_load_from_directory(self, tmp_path):
        write_norms(tmp_path, 'example', MINIMAL)

        assert available_tests(tmp_path) == ['example']
        norms = load_test_norms('example', tmp_path)
        assert norms.reversed is False
        assert norms.regression.sd_coefficients == (3.0,)

    def test_env_var_config_dir(self, tmp_path, monkeypatch):
        write_norms(tmp_path, 'example', MINIMAL)
        monkeypatch.setenv(CONFIG_ENV_VAR, str(tmp_path))

        assert resolve_config_path() == tmp_path
        assert available_tests() == ['example']

    def test_explicit_path_beats_env_var(self, tmp_path, monkeypatch):
        monkeypatch.setenv(CONFIG_ENV_VAR, "/nonexistent")
        assert resolve_config_path(tmp_path) == tmp_path

    def test_missing_directory(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            available_tests(tmp_path / "missing")

    def test_invalid_yaml(self, tmp_path):
        (tmp_path / "broken.yaml").write_text("adult_bands: [16, 19\n")
        with pytest.raises(ConfigError, match="Could not parse"):
            load_test_norms('broken', tmp_path)

    def test_missing_child_section(self):
        config = {k: v for k, v in MINIMAL.items() if k != 'child'}
        with pytest.raises(ConfigError, match="missing 'child'"):
            parse_test_norms(config, 'example')

    def test_missing_regression(self):
        config = dict(MINIMAL, child={'band_groups': [[4, 15]]})
        with pytest.raises(ConfigError, match="mean_coefficients"):
            parse_test_norms(config, 'example')

    def test_direction_required(self):
        config = {k: v for k, v in MINIMAL.items() if k != 'reversed'}
        with pytest.raises(ConfigError, match="'reversed'"):
            parse_test_norms(config, 'example')

    def test_malformed_band_row(self):
        config = dict(MINIMAL, adult_bands=[[16, 19, 30.0]])
        with pytest.raises(ConfigError, match="needs 4 values"):
            parse_test_norms(config, 'example')

    def test_not_a_mapping(self):
        with pytest.raises(ConfigError):
            parse_test_norms(['a', 'list'], 'example')

    @pytest.mark.parametrize("domain", [4, [4], [4, 19, 30], "4-19"])
    def test_domain_must_be_a_pair(self, domain):
        config = dict(MINIMAL, domain=domain)
        with pytest.raises(ConfigError, match=r"'domain' must be \[min_age, max_age\]"):
            parse_test_norms(config, 'example')

    def test_fractional_domain_rejected(self):
        config = dict(MINIMAL, domain=[4.5, 19])
        with pytest.raises(ConfigError, match="domain min must be a whole number"):
            parse_test_norms(config, 'example')

    def test_child_age_range_must_be_a_pair(self):
        config = dict(MINIMAL, child=dict(MINIMAL['child'], age_range=[4]))
        with pytest.raises(ConfigError, match="'age_range' must be"):
            parse_test_norms(config, 'example')

    def test_non_list_coefficients(self):
        config = dict(MINIMAL, child=dict(MINIMAL['child'], mean_coefficients=5))
        with pytest.raises(ConfigError, match="must be lists of numbers"):
            parse_test_norms(config, 'example')

    @pytest.mark.parametrize("adult_bands", [[[16, 19, 'abc', 5.0]], [[16, 19, 30.0, None]], 5])
    def test_non_numeric_band_values(self, adult_bands):
        config = dict(MINIMAL, adult_bands=adult_bands)
        with pytest.raises(ConfigError, match="example: malformed norm definition"):
            parse_test_norms(config, 'example')

    def test_fractional_anchor_age(self):
        config = dict(MINIMAL, child=dict(MINIMAL['child'], anchors=[[8.7, 20.0, 4.0]]))
        with pytest.raises(ConfigError, match="anchor age must be a whole number"):
            parse_test_norms(config, 'example')

    def test_whole_float_ages_accepted(self):
        config = dict(MINIMAL, domain=[4.0, 19.0], adult_bands=[[16.0, 19.0, 30.0, 5.0]])
        norms = parse_test_norms(config, 'example')

        assert norms.domain == (4, 19)
        assert norms.adult_bands[0].age_min == 16
