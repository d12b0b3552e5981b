"""Configuration schemas package."""

from .app_schema import AppConfig, validate_config
from .logging_schema import LogFileConfig, LoggingConfig
from .telemetry_schema import (
    OBSERVER_NAMES,
    AnalyticsConfig,
    CrashReportingConfig,
    ObserversConfig,
)

__all__ = [
    # Main configuration
    "AppConfig",
    "validate_config",
    # Logging
    "LoggingConfig",
    "LogFileConfig",
    # Telemetry sections
    "AnalyticsConfig",
    "CrashReportingConfig",
    "ObserversConfig",
    "OBSERVER_NAMES",
]
