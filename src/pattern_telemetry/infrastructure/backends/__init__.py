"""Telemetry and crash reporting backend implementations."""

from .logging_backend import LoggingCrashReportingBackend, LoggingTelemetryBackend
from .memory_backend import InMemoryCrashReportingBackend, InMemoryTelemetryBackend

__all__ = [
    "LoggingTelemetryBackend",
    "LoggingCrashReportingBackend",
    "InMemoryTelemetryBackend",
    "InMemoryCrashReportingBackend",
]
