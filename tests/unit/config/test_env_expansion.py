"""Tests for environment variable expansion utilities."""

import os
from unittest.mock import patch

from pattern_telemetry.config.utils.env_expansion import expand_config_env_vars, expand_env_vars


class TestEnvironmentVariableExpansion:
    """Test environment variable expansion functionality."""

    def test_expand_simple_env_var(self):
        """Test expansion of simple environment variable."""
        with patch.dict(os.environ, {"TEST_VAR": "/test/path"}):
            assert expand_env_vars("$TEST_VAR") == "/test/path"

    def test_expand_braced_env_var_with_subpath(self):
        """Test expansion of braced environment variable with subpath."""
        with patch.dict(os.environ, {"TEST_VAR": "/test/path"}):
            assert expand_env_vars("${TEST_VAR}/logs/app.log") == "/test/path/logs/app.log"

    def test_expand_nonexistent_env_var(self):
        """Test that unknown variables are left as written."""
        with patch.dict(os.environ, {}, clear=True):
            assert expand_env_vars("$NONEXISTENT_VAR") == "$NONEXISTENT_VAR"
            assert expand_env_vars("${NONEXISTENT_VAR}") == "${NONEXISTENT_VAR}"

    def test_expand_nested_values(self):
        """Test expansion inside nested dictionaries and lists."""
        with patch.dict(os.environ, {"APP_VERSION": "1.4.2"}):
            config = {
                "analytics": {"default_parameters": {"app_version": "$APP_VERSION"}},
                "tags": ["v$APP_VERSION", "plain"],
            }
            assert expand_env_vars(config) == {
                "analytics": {"default_parameters": {"app_version": "1.4.2"}},
                "tags": ["v1.4.2", "plain"],
            }

    def test_expand_non_string_values(self):
        """Test that non-string values are returned unchanged."""
        config = {"number": 42, "boolean": True, "none": None}
        assert expand_env_vars(config) == config

    def test_expand_config_env_vars(self):
        """Test the main configuration expansion function."""
        with patch.dict(os.environ, {"TELEMETRY_LOG_DIR": "/var/log/td"}):
            config = {"logging": {"file": {"path": "$TELEMETRY_LOG_DIR/telemetry.log"}}}
            result = expand_config_env_vars(config)
            assert result["logging"]["file"]["path"] == "/var/log/td/telemetry.log"
