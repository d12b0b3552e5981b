"""Configuration loading from files and environment variables."""
import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from pattern_telemetry.config.utils.env_expansion import expand_config_env_vars
from pattern_telemetry.domain.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

ENV_PREFIX = "PATTERN_TELEMETRY_"
CONFIG_FILE_ENV = "PATTERN_TELEMETRY_CONFIG"


class ConfigurationLoader:
    """
    Loads raw configuration dictionaries.

    Sources, from lowest to highest priority:
    - built-in defaults (the schema defaults, represented by an empty dict)
    - a JSON or YAML file
    - ``PATTERN_TELEMETRY_<SECTION>__<KEY>`` environment variables

    String values have ``$VAR``/``${VAR}`` references expanded after loading.
    """

    def __init__(self, env_prefix: str = ENV_PREFIX):
        self._env_prefix = env_prefix

    def load_from_file(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from a JSON or YAML file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Configuration dictionary with environment variables expanded

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        path = Path(config_path)
        try:
            text = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Failed to read configuration file {config_path}: {e}") from e

        try:
            if path.suffix.lower() in (".yaml", ".yml"):
                data = yaml.safe_load(text)
            else:
                data = json.loads(text)
        except (ValueError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to parse configuration file {config_path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Configuration file {config_path} must contain a mapping")

        logger.debug(f"Loaded configuration from {config_path}")
        return expand_config_env_vars(data)

    def load_configuration(self, config_path: Optional[str] = None) -> Dict[str, Any]:
        """Load configuration from a given path, the config env var, or defaults."""
        path = config_path or os.environ.get(CONFIG_FILE_ENV)
        if path and os.path.exists(path):
            return self.load_from_file(path)
        if path:
            logger.warning(f"Configuration file {path} not found, using defaults")
        return {}

    def apply_environment_overrides(self, config_data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply environment variable overrides.

        ``PATTERN_TELEMETRY_ANALYTICS__ENABLED=false`` sets ``analytics.enabled``;
        ``PATTERN_TELEMETRY_ENVIRONMENT=production`` sets ``environment``. Values
        are parsed as JSON when possible and used as plain strings otherwise.
        """
        result = _deep_copy(config_data)
        for env_var, raw_value in sorted(os.environ.items()):
            if not env_var.startswith(self._env_prefix) or env_var == CONFIG_FILE_ENV:
                continue
            path = tuple(part.lower() for part in env_var[len(self._env_prefix):].split("__") if part)
            if not path:
                continue
            _set_nested_value(result, path, _parse_env_value(raw_value))
            logger.debug(f"Applied environment override {env_var}")
        return result


def _parse_env_value(raw_value: str) -> Any:
    try:
        return json.loads(raw_value)
    except ValueError:
        return raw_value


def _deep_copy(config: Dict[str, Any]) -> Dict[str, Any]:
    return {
        key: _deep_copy(value) if isinstance(value, dict) else value
        for key, value in config.items()
    }


def _set_nested_value(config: Dict[str, Any], path: tuple, value: Any) -> None:
    """Set a nested configuration value."""
    current = config
    for key in path[:-1]:
        existing = current.get(key)
        if not isinstance(existing, dict):
            existing = {}
            current[key] = existing
        current = existing
    current[path[-1]] = value
