"""Configuration management for the telemetry pipeline."""
from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import ValidationError as PydanticValidationError

from pattern_telemetry.config.loader import ConfigurationLoader
from pattern_telemetry.config.schemas import (
    AnalyticsConfig,
    AppConfig,
    CrashReportingConfig,
    LoggingConfig,
    ObserversConfig,
    validate_config,
)
from pattern_telemetry.domain.core.exceptions import ConfigurationError

T = TypeVar("T")
logger = logging.getLogger(__name__)


class ConfigurationManager:
    """
    Configuration manager that serves as the single source of truth.

    Configuration is loaded lazily on first access and cached until
    ``reload`` is called. Each pipeline owns its own manager; there is no
    process-wide instance.
    """

    _TYPE_MAPPING: Dict[Type[Any], str] = {
        LoggingConfig: "logging",
        AnalyticsConfig: "analytics",
        CrashReportingConfig: "crash_reporting",
        ObserversConfig: "observers",
    }

    def __init__(self, config_file: Optional[str] = None, loader: Optional[ConfigurationLoader] = None):
        """Initialize configuration manager with lazy loading."""
        self._config_file = config_file
        self._lock = threading.RLock()
        self._app_config: Optional[AppConfig] = None
        self._loader = loader

    @property
    def loader(self) -> ConfigurationLoader:
        """Lazy load configuration loader."""
        if self._loader is None:
            self._loader = ConfigurationLoader()
        return self._loader

    @property
    def app_config(self) -> AppConfig:
        """Lazy load application configuration."""
        if self._app_config is None:
            with self._lock:
                if self._app_config is None:
                    self._app_config = self._load_app_config()
        return self._app_config

    def _load_app_config(self) -> AppConfig:
        """Load application configuration from sources."""
        config_data = self.loader.load_configuration(self._config_file)
        config_data = self.loader.apply_environment_overrides(config_data)

        try:
            config = validate_config(config_data)
        except PydanticValidationError as e:
            missing = [
                ".".join(str(part) for part in error["loc"])
                for error in e.errors()
                if error["type"] == "missing"
            ]
            raise ConfigurationError(f"Invalid configuration: {e}", missing_fields=missing) from e

        logger.debug(f"Configuration loaded for environment {config.environment}")
        return config

    def get_typed(self, config_type: Type[T]) -> T:
        """Get a typed configuration section."""
        attr_name = self._TYPE_MAPPING.get(config_type)
        if attr_name is None:
            raise ConfigurationError(f"Unknown configuration type: {config_type.__name__}")
        return getattr(self.app_config, attr_name)

    def reload(self) -> None:
        """Reload configuration from sources on next access."""
        with self._lock:
            self._app_config = None
