"""Tests for configuration loading and environment overrides."""

import json
import os
from unittest.mock import patch

import pytest
import yaml

from pattern_telemetry.config import ConfigurationLoader
from pattern_telemetry.domain.core.exceptions import ConfigurationError


class TestConfigurationLoader:
    """Test file loading."""

    def setup_method(self):
        self.loader = ConfigurationLoader()

    def test_load_json(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"environment": "testing", "analytics": {"enabled": False}}))
        assert self.loader.load_from_file(str(path)) == {
            "environment": "testing",
            "analytics": {"enabled": False},
        }

    def test_load_yaml_with_env_expansion(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(yaml.safe_dump({"logging": {"file": {"path": "${LOG_ROOT}/t.log"}}}))
        with patch.dict(os.environ, {"LOG_ROOT": "/tmp/logs"}):
            data = self.loader.load_from_file(str(path))
        assert data["logging"]["file"]["path"] == "/tmp/logs/t.log"

    def test_empty_yaml_is_empty_config(self, tmp_path):
        path = tmp_path / "empty.yml"
        path.write_text("")
        assert self.loader.load_from_file(str(path)) == {}

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ConfigurationError):
            self.loader.load_from_file(str(tmp_path / "missing.json"))

    def test_invalid_json_raises(self, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")
        with pytest.raises(ConfigurationError):
            self.loader.load_from_file(str(path))

    def test_invalid_yaml_raises(self, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("analytics: [unclosed")
        with pytest.raises(ConfigurationError):
            self.loader.load_from_file(str(path))

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        with pytest.raises(ConfigurationError):
            self.loader.load_from_file(str(path))

    def test_load_configuration_without_file(self):
        with patch.dict(os.environ, {}, clear=True):
            assert self.loader.load_configuration() == {}


class TestEnvironmentOverrides:
    """Test PATTERN_TELEMETRY_* overrides."""

    def test_nested_override_parsed_as_json(self):
        env = {
            "PATTERN_TELEMETRY_ANALYTICS__ENABLED": "false",
            "PATTERN_TELEMETRY_OBSERVERS__MASTERY_THRESHOLD": "5",
            "PATTERN_TELEMETRY_ENVIRONMENT": "production",
        }
        with patch.dict(os.environ, env, clear=True):
            result = ConfigurationLoader().apply_environment_overrides(
                {"analytics": {"default_parameters": {"a": 1}}}
            )
        assert result == {
            "analytics": {"default_parameters": {"a": 1}, "enabled": False},
            "observers": {"mastery_threshold": 5},
            "environment": "production",
        }

    def test_original_config_not_mutated(self):
        config = {"analytics": {"enabled": True}}
        with patch.dict(os.environ, {"PATTERN_TELEMETRY_ANALYTICS__ENABLED": "false"}, clear=True):
            ConfigurationLoader().apply_environment_overrides(config)
        assert config == {"analytics": {"enabled": True}}

    def test_config_path_variable_ignored(self):
        with patch.dict(os.environ, {"PATTERN_TELEMETRY_CONFIG": "/etc/t.json"}, clear=True):
            assert ConfigurationLoader().apply_environment_overrides({}) == {}
