"""Configuration package - schemas, loading and management."""

from .loader import ConfigurationLoader
from .manager import ConfigurationManager
from .schemas import (
    AnalyticsConfig,
    AppConfig,
    CrashReportingConfig,
    LogFileConfig,
    LoggingConfig,
    ObserversConfig,
    validate_config,
)

__all__ = [
    "AppConfig",
    "LoggingConfig",
    "LogFileConfig",
    "AnalyticsConfig",
    "CrashReportingConfig",
    "ObserversConfig",
    "validate_config",
    "ConfigurationLoader",
    "ConfigurationManager",
]
