"""
Tests for settings resolution - env > YAML > defaults.
"""

import pytest

from workload.config import Settings, get_settings, load_settings
from workload.errors import ConfigError


@pytest.fixture
def config_file(tmp_path):
    def _write(text):
        path = tmp_path / "workload.yaml"
        path.write_text(text)
        return path

    return _write


class TestDefaults:
    def test_missing_file_gives_defaults(self, tmp_path):
        settings = load_settings(tmp_path / "nope.yaml", environ={})
        assert settings == Settings()
        assert settings.default_weekly_capacity_hours == 40
        assert settings.timeline_window_days == 21
        assert settings.near_capacity_ratio == 0.8

    def test_get_settings_cached(self):
        assert get_settings() is get_settings()


class TestSources:
    def test_yaml_values(self, config_file):
        path = config_file("timeline_window_days: 14\nnear_capacity_ratio: 0.9\nlog_level: debug\n")
        settings = load_settings(path, environ={})
        assert settings.timeline_window_days == 14
        assert settings.near_capacity_ratio == 0.9
        assert settings.log_level == "DEBUG"

    def test_env_beats_yaml(self, config_file):
        path = config_file("timeline_window_days: 14\n")
        settings = load_settings(path, environ={"WORKLOAD_TIMELINE_WINDOW_DAYS": "7"})
        assert settings.timeline_window_days == 7

    def test_blank_env_ignored(self, config_file):
        path = config_file("urgent_limit: 3\n")
        assert load_settings(path, environ={"WORKLOAD_URGENT_LIMIT": ""}).urgent_limit == 3

    def test_env_file_location(self, config_file, monkeypatch):
        path = config_file("default_weekly_capacity_hours: 35\n")
        monkeypatch.setenv("WORKLOAD_CONFIG", str(path))
        assert load_settings().default_weekly_capacity_hours == 35

    def test_empty_file(self, config_file):
        assert load_settings(config_file(""), environ={}) == Settings()


class TestValidation:
    @pytest.mark.parametrize(
        "env",
        [
            {"WORKLOAD_TIMELINE_WINDOW_DAYS": "0"},
            {"WORKLOAD_TIMELINE_WINDOW_DAYS": "three"},
            {"WORKLOAD_NEAR_CAPACITY_RATIO": "1.5"},
            {"WORKLOAD_DEFAULT_CAPACITY_HOURS": "-1"},
            {"WORKLOAD_URGENT_LIMIT": "-2"},
            {"WORKLOAD_LOG_LEVEL": "chatty"},
        ],
    )
    def test_invalid_env(self, tmp_path, env):
        with pytest.raises(ConfigError):
            load_settings(tmp_path / "nope.yaml", environ=env)

    def test_fractional_window_rejected(self, config_file):
        with pytest.raises(ConfigError, match="timeline_window_days"):
            load_settings(config_file("timeline_window_days: 2.5\n"), environ={})

    def test_malformed_yaml(self, config_file):
        with pytest.raises(ConfigError):
            load_settings(config_file("timeline_window_days: [unclosed\n"), environ={})

    def test_non_mapping_yaml(self, config_file):
        with pytest.raises(ConfigError, match="mapping"):
            load_settings(config_file("- 1\n- 2\n"), environ={})

    def test_with_overrides_validates(self):
        assert Settings().with_overrides(urgent_limit=9).urgent_limit == 9
        with pytest.raises(ConfigError):
            Settings().with_overrides(timeline_window_days=0)
